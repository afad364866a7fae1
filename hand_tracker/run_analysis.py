import argparse
import json
import os
import sys

from hand_tracker.errors import MalformedInputError, NoHandsFoundWarning
from hand_tracker.poker_parser import PokerLogParser
from hand_tracker.session import hands_to_frames, make_action_summary, summarize_session


def write_outputs(result, outdir: str) -> list:
    """Write the parsed hands and derived tables under `outdir`; returns the paths written."""
    os.makedirs(outdir, exist_ok=True)

    hands_df, players_df, actions_df = hands_to_frames(result.hands)
    action_summary = make_action_summary(actions_df)
    summary = summarize_session(result.hands)

    hands_json_path = os.path.join(outdir, "hands.json")
    session_path = os.path.join(outdir, "session.json")
    hands_path = os.path.join(outdir, "hands.csv")
    players_path = os.path.join(outdir, "players.csv")
    actions_path = os.path.join(outdir, "actions.csv")
    action_summary_path = os.path.join(outdir, "action_summary.csv")

    with open(hands_json_path, "w", encoding="utf-8") as f:
        json.dump(result.to_dicts(), f, indent=2, ensure_ascii=False)
    with open(session_path, "w", encoding="utf-8") as f:
        json.dump(dict(summary.to_dict(), heroName=result.hero_name), f, indent=2, ensure_ascii=False)

    hands_df.to_csv(hands_path, index=False)
    players_df.to_csv(players_path, index=False)
    actions_df.to_csv(actions_path, index=False)
    action_summary.to_csv(action_summary_path, index=False)

    return [hands_json_path, session_path, hands_path, players_path, actions_path, action_summary_path]


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Parse a PokerNow log export into structured hands.")
    ap.add_argument("csv_path", type=str)
    ap.add_argument("--outdir", type=str, default="outputs")
    ap.add_argument("--entry_col", type=str, default="entry")
    ap.add_argument("--order_col", type=str, default="order")
    ap.add_argument("--at_col", type=str, default="at")
    ap.add_argument("--verbose", action="store_true", help="log a summary line for every hand")
    args = ap.parse_args(argv)

    parser = PokerLogParser(
        entry_col=args.entry_col,
        order_col=args.order_col,
        at_col=args.at_col,
        verbose_hands=args.verbose,
    )

    try:
        result = parser.parse_csv(args.csv_path)
    except MalformedInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if result.has_warning(NoHandsFoundWarning):
        print("No hands found in the uploaded file", file=sys.stderr)
        return 1

    paths = write_outputs(result, args.outdir)

    print(f"Parsed {len(result.hands)} hands (hero: {result.hero_name or 'unknown'})")
    print("Wrote:")
    for p in paths:
        print(" -", p)
    return 0


if __name__ == "__main__":
    sys.exit(main())

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from hand_tracker.models import Hand

STREET_ORDER = ["PREFLOP", "FLOP", "TURN", "RIVER"]


@dataclass
class SessionSummary:
    date: Optional[str]
    game_type: Optional[str]
    total_hands: int
    total_profit: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "date": self.date,
            "gameType": self.game_type,
            "totalHands": self.total_hands,
            "totalProfit": self.total_profit,
        }


def summarize_session(hands: List[Hand]) -> SessionSummary:
    """
    Session-level rollups stored next to an uploaded log. Date and game type
    come from the first hand; a two-player first hand labels the session
    "Heads-Up".
    """
    if not hands:
        return SessionSummary(date=None, game_type=None, total_hands=0, total_profit=0)

    first = hands[0]
    game_type = first.game_type.value if first.game_type else None
    if len(first.players) == 2:
        game_type = "Heads-Up"

    return SessionSummary(
        date=first.date_played,
        game_type=game_type,
        total_hands=len(hands),
        total_profit=sum(h.final_pot_size for h in hands),
    )


def apply_opponent_renames(hands: List[Hand], renames: Dict[str, str]) -> List[Hand]:
    """Rename players everywhere they appear in the hands (seats, winners, actions). In place."""
    if not renames:
        return hands
    for hand in hands:
        for p in hand.players:
            p.name = renames.get(p.name, p.name)
        hand.winners = [renames.get(w, w) for w in hand.winners]
        for a in hand.actions:
            a.player = renames.get(a.player, a.player)
        if hand.dealer_name in renames:
            hand.dealer_name = renames[hand.dealer_name]
        if hand.hero_name in renames:
            hand.hero_name = renames[hand.hero_name]
    return hands


def pot_bucket(pot_frac: float) -> str:
    if pot_frac is None or pd.isna(pot_frac):
        return "unknown"
    if pot_frac <= 0.25:
        return "0-25%"
    if pot_frac <= 0.50:
        return "25-50%"
    if pot_frac <= 0.75:
        return "50-75%"
    if pot_frac <= 1.00:
        return "75-100%"
    if pot_frac <= 1.50:
        return "100-150%"
    return "150%+"


def hands_to_frames(hands: List[Hand]) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """
    Flatten hands into three tables keyed by hand index:
      hands   - one row per hand
      players - one row per (hand, player)
      actions - one row per action, with pot_before / delta_put_in / pot_frac
    """
    hand_rows = []
    player_rows = []
    action_rows = []

    for h in hands:
        hand_rows.append({
            "hand_index": h.index,
            "game_type": h.game_type.value if h.game_type else None,
            "date_played": h.date_played,
            "dealer": h.dealer_name,
            "hero": h.hero_name,
            "n_players": len(h.players),
            "board": " ".join(h.board.cards()),
            "winners": ", ".join(h.winners),
            "final_pot_size": h.final_pot_size,
        })
        for p in h.players:
            player_rows.append({
                "hand_index": h.index,
                "seat": p.seat,
                "player": p.name,
                "stack": p.stack,
                "is_dealer": p.is_dealer,
                "is_hero": p.is_hero,
                "hole_cards": " ".join(p.hole_cards),
                "showed_hand": " ".join(p.showed_hand),
                "winnings": p.winnings,
            })
        pot_before = 0
        for idx, a in enumerate(h.actions):
            action_rows.append({
                "hand_index": h.index,
                "idx": idx,
                "street": a.street.value,
                "kind": a.action_type.value,
                "player": a.player,
                "amount": a.amount,
                "pot_before": pot_before,
                "pot_after": a.pot_size_after,
            })
            pot_before = a.pot_size_after

    hands_df = pd.DataFrame(hand_rows, columns=[
        "hand_index", "game_type", "date_played", "dealer", "hero",
        "n_players", "board", "winners", "final_pot_size",
    ])
    players_df = pd.DataFrame(player_rows, columns=[
        "hand_index", "seat", "player", "stack", "is_dealer", "is_hero",
        "hole_cards", "showed_hand", "winnings",
    ])
    actions_df = pd.DataFrame(action_rows, columns=[
        "hand_index", "idx", "street", "kind", "player", "amount", "pot_before", "pot_after",
    ])

    actions_df["delta_put_in"] = actions_df["pot_after"] - actions_df["pot_before"]
    # fraction of the existing pot put in; undefined before anything is in the pot
    before = actions_df["pot_before"].astype(float)
    actions_df["pot_frac"] = np.where(before > 0, actions_df["delta_put_in"] / before.where(before > 0, 1.0), np.nan)
    actions_df["pot_frac_bucket"] = actions_df["pot_frac"].apply(pot_bucket)

    return hands_df, players_df, actions_df


def make_action_summary(actions: pd.DataFrame) -> pd.DataFrame:
    """
    Create action summary per (hand_index, player), e.g.
      "PREFLOP: post_bb 20, call 60 | FLOP: check, fold"
    """
    if actions.empty:
        return pd.DataFrame(columns=["hand_index", "player", "action_summary"])

    ev = actions[actions["player"].notna()].copy()
    ev["player"] = ev["player"].astype(str)

    def fmt_row(r):
        k = str(r["kind"]).lower()
        if k in ("bet", "raise", "call", "post_sb", "post_bb"):
            return f"{k} {int(r['amount'])}"
        return k

    ev["tok"] = ev.apply(fmt_row, axis=1)

    # group by street to keep readable
    ev = ev.sort_values(["hand_index", "idx"])
    grouped = ev.groupby(["hand_index", "player", "street"], sort=False)["tok"].apply(lambda x: ", ".join(x)).reset_index()

    rows = []
    for (hand_index, player), g in grouped.groupby(["hand_index", "player"], sort=False):
        parts = []
        for st in STREET_ORDER:
            sub = g[g["street"] == st]
            if len(sub) > 0:
                parts.append(f"{st}: {sub['tok'].iloc[0]}")
        rows.append({"hand_index": hand_index, "player": player, "action_summary": " | ".join(parts)})

    return pd.DataFrame(rows, columns=["hand_index", "player", "action_summary"])

import re
from typing import List, Optional

from hand_tracker.models import Action, ActionType, Hand, Street
from hand_tracker.patterns import last_int, split_player_line


# first match wins: "posts a small blind" must be tested before the plain verbs
_ACTION_KEYWORDS = [
    (re.compile(r"\bsmall blind\b"), ActionType.POST_SB),
    (re.compile(r"\bbig blind\b"), ActionType.POST_BB),
    (re.compile(r"\bcalls\b"), ActionType.CALL),
    (re.compile(r"\braises\b"), ActionType.RAISE),
    (re.compile(r"\bbets\b"), ActionType.BET),
    (re.compile(r"\bfolds\b"), ActionType.FOLD),
    (re.compile(r"\bchecks\b"), ActionType.CHECK),
    (re.compile(r"\bshows\b"), ActionType.SHOW_HAND),
    (re.compile(r"\bmucks\b"), ActionType.MUCK),
]

# amount is the chips added this action
ADDITIVE = (ActionType.POST_SB, ActionType.POST_BB, ActionType.BET, ActionType.CALL)
# never carry an amount
ZERO_AMOUNT = (ActionType.FOLD, ActionType.CHECK, ActionType.SHOW_HAND, ActionType.MUCK)


def classify_action(text: str) -> Optional[ActionType]:
    for pattern, action_type in _ACTION_KEYWORDS:
        if pattern.search(text):
            return action_type
    return None


def street_commitment(actions: List[Action], player: str, street: Street) -> int:
    """
    Chips `player` has committed on `street` so far. Bets, calls and posts add;
    a raise is "raise to X", so it resets the commitment to X.
    """
    committed = 0
    for a in actions:
        if a.player != player or a.street != street:
            continue
        if a.action_type == ActionType.RAISE:
            committed = a.amount
        elif a.action_type in ADDITIVE:
            committed += a.amount
    return committed


def pot_delta(actions: List[Action], action_type: ActionType, player: str, street: Street, raw: int) -> int:
    if action_type in ADDITIVE:
        return raw
    if action_type == ActionType.RAISE:
        return max(raw - street_commitment(actions, player, street), 0)
    return 0


def current_pot(actions: List[Action]) -> int:
    if not actions:
        return 0
    return actions[-1].pot_size_after


def append_action(hand: Hand, street: Street, action_type: ActionType, player: str, raw: int = 0) -> Action:
    """Append an action, computing its pot delta against the hand's running total."""
    delta = pot_delta(hand.actions, action_type, player, street, raw)
    action = Action(
        street=street,
        action_type=action_type,
        player=player,
        amount=raw,
        pot_size_after=current_pot(hand.actions) + delta,
    )
    hand.actions.append(action)
    return action


def record_action(hand: Hand, street: Street, entry: str) -> Optional[Action]:
    """
    Parse an action line and append the result to `hand.actions`.

    Returns None (and leaves the hand untouched) when the line names no player
    or no known verb, e.g. straddles and antes.
    """
    player, rest = split_player_line(entry)
    if player is None:
        return None
    action_type = classify_action(rest)
    if action_type is None:
        return None

    raw = 0 if action_type in ZERO_AMOUNT else last_int(rest)
    return append_action(hand, street, action_type, player, raw)

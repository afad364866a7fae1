from typing import List, Optional

from loguru import logger

from hand_tracker.cards import cards_from_text, same_cards
from hand_tracker.models import LogRecord
from hand_tracker.patterns import RE_END, RE_YOUR_HAND, parse_shows


def find_hero(records: List[LogRecord]) -> Optional[str]:
    """
    Resolve the account holder's display name.

    "Your hand is ..." is only ever written for the hero, but carries no name.
    The name becomes known the first time someone shows exactly those cards
    (compared order-independently) before the hand ends. Returns None if the
    hero never showed down in this log.
    """
    candidate: List[str] = []
    for rec in records:
        entry = rec.entry
        if RE_END.search(entry):
            candidate = []
            continue

        m = RE_YOUR_HAND.match(entry)
        if m:
            candidate = cards_from_text(m.group("cards"))
            continue

        if not candidate:
            continue
        shown = parse_shows(entry)
        if shown is None:
            continue
        name, card_text = shown
        if same_cards(candidate, cards_from_text(card_text)):
            logger.info(f"Hero identified as: {name}")
            return name

    return None

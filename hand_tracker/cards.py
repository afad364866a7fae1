import re
from typing import List, Optional, Tuple


# -------------------------
# Card helpers
# -------------------------
_SUIT_MAP = {
    "♥": "h",
    "♦": "d",
    "♣": "c",
    "♠": "s",
}

# PokerNow writes suits as glyphs (sometimes followed by U+FE0F) and ten as "10";
# already-canonical "Th"/"As" style codes are accepted too.
_CARD_RE = re.compile(
    r"(?<![0-9A-Za-z])(?P<rank>10|[2-9TJQKA])"
    r"(?:(?P<glyph>[♠♥♦♣])\ufe0f?|(?P<letter>[hdcs])(?![0-9A-Za-z]))"
)
_BRACKET_RE = re.compile(r"\[(?P<body>[^\]]*)\]")


def normalize_rank(rank: str) -> str:
    if rank == "10":
        return "T"
    return rank


def normalize_suit(suit: str) -> str:
    return _SUIT_MAP.get(suit, suit)


def _from_match(m) -> Tuple[str, str]:
    return normalize_rank(m.group("rank")), normalize_suit(m.group("glyph") or m.group("letter"))


def parse_card(card_str: str) -> Optional[Tuple[str, str]]:
    """
    Returns (rank, suit) in canonical form: rank one of A,K,Q,J,T,9..2 and
    suit one of h,d,c,s. None if no card is found in the string.
    """
    if not isinstance(card_str, str):
        return None
    m = _CARD_RE.search(card_str.strip())
    if not m:
        return None
    return _from_match(m)


def normalize_card(card_str: str) -> Optional[str]:
    parsed = parse_card(card_str)
    if not parsed:
        return None
    return "".join(parsed)


def cards_from_text(s: str) -> List[str]:
    """
    Extracts every card from a fragment, in order of appearance:
      "A♥, K♥"                  -> ['Ah', 'Kh']
      "Flop:  [3♣, 2♥, 10♦]"    -> ['3c', '2h', 'Td']
    """
    if not isinstance(s, str):
        return []
    return [normalize_card(m.group(0)) for m in _CARD_RE.finditer(s)]


def bracketed_cards(s: str) -> List[str]:
    """
    Cards inside the last [...] group, i.e. the newly dealt card(s) of
      "Turn: 3♣, 2♥, 9♦ [8♣]"
    Falls back to every card in the fragment when there is no bracket.
    """
    if not isinstance(s, str):
        return []
    groups = _BRACKET_RE.findall(s)
    if not groups:
        return cards_from_text(s)
    return cards_from_text(groups[-1])


def same_cards(a: List[str], b: List[str]) -> bool:
    """Order-independent comparison of two card lists."""
    return bool(a) and sorted(a) == sorted(b)

"""Regex patterns and small text helpers for PokerNow log lines."""

import re
from typing import Optional, Tuple

# Hand boundaries
# -- starting hand #358 (id: xxx)  No Limit Texas Hold'em (dealer: "Name @ ID") --
# -- starting hand #12 (id: yyy)  Pot Limit Omaha Hi (dead button) --
RE_START = re.compile(r"^--\s*starting hand\s*#(?P<hn>\d+)", re.IGNORECASE)
RE_END = re.compile(r"^--\s*ending hand\s*#(?P<hn>\d+)", re.IGNORECASE)
RE_DEALER = re.compile(r"\(dealer:\s*\"(?P<dealer>[^\"]+)\"\)")
RE_HOLDEM = re.compile(r"hold.?em", re.IGNORECASE)
RE_OMAHA = re.compile(r"omaha", re.IGNORECASE)

# Player stacks: #1 "Wesley @ 4KT6D07Q4u" (10789) | #3 "Nate @ s9p1qZMXYl" (2000)
RE_STACKS = re.compile(r"^Player stacks:\s*(?P<body>.*)$", re.IGNORECASE)
RE_STACK_ITEM = re.compile(r"#(?P<seat>\d+)\s*\"(?P<name>[^\"]+)\"\s*\((?P<stack>[^)]*)\)")

RE_YOUR_HAND = re.compile(r"^Your hand is\s*(?P<cards>.*)$", re.IGNORECASE)

# Flop:  [3♣, 2♥, 9♦] / Turn: 3♣, 2♥, 9♦ [8♣] / River: 3♣, 2♥, 9♦, 8♣ [A♠]
RE_BOARD = re.compile(r"^(?P<street>flop|turn|river)\s*:\s*(?P<body>.*)$", re.IGNORECASE)

# Player actions, matched against the text after the quoted player name
RE_ACTION_VERB = re.compile(r"\b(posts|calls|raises|bets|checks|folds)\b")

# Settlement
RE_COLLECTED = re.compile(r"^(?P<who>.+?)\s+collected\s+(?P<amt>\S+)")
RE_COLLECTED_TAIL = re.compile(r"^\s*collected\s+(?P<amt>\S+)")
RE_UNCALLED = re.compile(r"^Uncalled bet of\s+(?P<amt>\S+)\s+returned to\s+(?P<who>.+)$", re.IGNORECASE)

# Showdown
RE_SHOWS = re.compile(r"^(?P<who>.+?)\s+shows\s+(?P<cards>.*)$")
RE_MUCKS = re.compile(r"^(?P<who>.+?)\s+mucks\b")

_ID_SEPARATOR = " @ "
_LEADING_INT = re.compile(r"^\d+")


def display_name(raw: str) -> str:
    """
    "Nate @ s9p1qZMXYl" -> "Nate". Surrounding quotes and a trailing period are
    dropped; names without an ID suffix are returned as-is.
    """
    name = raw.strip()
    if name.endswith("."):
        name = name[:-1].rstrip()
    name = name.strip('"')
    idx = name.rfind(_ID_SEPARATOR)
    if idx != -1:
        name = name[:idx]
    return name.strip()


def split_player_line(entry: str) -> Tuple[Optional[str], str]:
    """
    Split '"Name @ ID" calls 40' into ("Name", " calls 40").
    Returns (None, entry) when the line does not open with a quoted name.
    """
    if not entry.startswith('"'):
        return None, entry
    end = entry.find('"', 1)
    if end == -1:
        return None, entry
    return display_name(entry[1:end]), entry[end + 1:]


def leading_int(token: str) -> Optional[int]:
    """
    Integer value of a numeric token: "1,500." -> 1500, "(2000)" -> 2000,
    "12.50" -> 12. None when the token does not start with a digit.
    """
    if not isinstance(token, str):
        return None
    cleaned = token.strip().lstrip("($").rstrip(".,;:!)").replace(",", "")
    m = _LEADING_INT.match(cleaned)
    if not m:
        return None
    return int(m.group(0))


def last_int(text: str) -> int:
    """First token, scanning right-to-left, that parses as an integer; 0 if none."""
    for token in reversed(text.split()):
        value = leading_int(token)
        if value is not None:
            return value
    return 0


def parse_shows(entry: str) -> Optional[Tuple[str, str]]:
    """
    '"Nate @ s9p1" shows a A♥, K♥.' or 'Nate shows a Ah, Kh.' -> ("Nate", "a A♥, K♥.").
    The card text is returned raw; None if this is not a shows line.
    """
    name, rest = split_player_line(entry)
    if name is not None:
        m = re.match(r"^\s*shows\b\s*(?P<cards>.*)$", rest)
        if not m:
            return None
        return name, m.group("cards")
    m = RE_SHOWS.match(entry)
    if not m:
        return None
    return display_name(m.group("who")), m.group("cards")

"""Parse PokerNow hand-history CSV exports into structured Hand records."""
from hand_tracker.errors import (
    HeroUndeterminedWarning,
    MalformedInputError,
    NoHandsFoundWarning,
    PokerLogWarning,
)
from hand_tracker.models import Action, ActionType, Board, GameType, Hand, LogRecord, Player, Street
from hand_tracker.poker_parser import ParseResult, PokerLogParser, parse_poker_now_log

__version__ = "0.1.0"

from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple, Type

from loguru import logger

from hand_tracker.accountant import append_action, record_action
from hand_tracker.cards import bracketed_cards, cards_from_text
from hand_tracker.errors import HeroUndeterminedWarning, NoHandsFoundWarning, PokerLogWarning
from hand_tracker.hero import find_hero
from hand_tracker.log_reader import DEFAULT_NOISE_PREFIXES, read_log_records
from hand_tracker.models import ActionType, GameType, Hand, LogRecord, Player, Street
from hand_tracker.patterns import (
    RE_ACTION_VERB,
    RE_BOARD,
    RE_COLLECTED,
    RE_COLLECTED_TAIL,
    RE_DEALER,
    RE_END,
    RE_HOLDEM,
    RE_MUCKS,
    RE_OMAHA,
    RE_STACK_ITEM,
    RE_STACKS,
    RE_START,
    RE_UNCALLED,
    RE_YOUR_HAND,
    display_name,
    leading_int,
    parse_shows,
    split_player_line,
)


# -------------------------
# Field extractors
# -------------------------
def game_type_from(entry: str) -> Optional[GameType]:
    entry = RE_DEALER.sub("", entry)
    if RE_OMAHA.search(entry):
        return GameType.PLO
    if RE_HOLDEM.search(entry):
        return GameType.NLH
    return None


def dealer_from(entry: str) -> Optional[str]:
    m = RE_DEALER.search(entry)
    if not m:
        # "(dead button)"
        return None
    return display_name(m.group("dealer"))


def parse_players(body: str, dealer_name: Optional[str], hero_name: Optional[str]) -> List[Player]:
    """
    '#1 "Wesley @ 4KT6" (10789) | #3 "Nate @ s9p1" (2000)' -> Players, in the
    order they are listed. Seat numbers are taken verbatim.
    """
    players = []
    for item in body.split("|"):
        m = RE_STACK_ITEM.search(item)
        if not m:
            continue
        name = display_name(m.group("name"))
        stack = leading_int(m.group("stack"))
        players.append(
            Player(
                seat=int(m.group("seat")),
                name=name,
                stack=stack if stack is not None else 0,
                is_dealer=dealer_name is not None and name == dealer_name,
                is_hero=hero_name is not None and name == hero_name,
            )
        )
    return players


def parse_settlement(entry: str) -> Optional[Tuple[str, int]]:
    """(winner, amount) for a 'collected' or 'Uncalled bet ... returned' line."""
    m = RE_UNCALLED.match(entry)
    if m:
        amount = leading_int(m.group("amt"))
        return display_name(m.group("who")), amount or 0

    name, rest = split_player_line(entry)
    if name is not None:
        m = RE_COLLECTED_TAIL.match(rest)
        if m:
            return name, leading_int(m.group("amt")) or 0
        return None

    m = RE_COLLECTED.match(entry)
    if m:
        return display_name(m.group("who")), leading_int(m.group("amt")) or 0
    return None


# -------------------------
# Segmenter state
# -------------------------
@dataclass
class SegmenterState:
    hero_name: Optional[str] = None
    hands: List[Hand] = field(default_factory=list)
    current: Optional[Hand] = None
    street: Street = Street.PREFLOP
    next_index: int = 1
    verbose: bool = False


def close_hand(state: SegmenterState) -> SegmenterState:
    hand = state.current
    if hand is None:
        return state

    if state.verbose:
        logger.debug(
            f"HAND #{hand.index} summary | dealer: {hand.dealer_name} | "
            f"seats: {[p.name for p in hand.players]} | board: {hand.board.cards()} | "
            f"actions: {len(hand.actions)} | final pot: {hand.final_pot_size} | winners: {hand.winners}"
        )

    state.hands.append(hand)
    state.current = None
    return state


# -------------------------
# Line handlers
# -------------------------
def on_start(state: SegmenterState, rec: LogRecord) -> SegmenterState:
    # a new hand begins; emit the previous one even if it never saw an end marker
    close_hand(state)
    state.current = Hand(
        index=state.next_index,
        game_type=game_type_from(rec.entry),
        date_played=rec.timestamp,
        dealer_name=dealer_from(rec.entry),
        hero_name=state.hero_name,
    )
    state.next_index += 1
    state.street = Street.PREFLOP
    return state


def on_stacks(state: SegmenterState, rec: LogRecord) -> SegmenterState:
    hand = state.current
    body = RE_STACKS.match(rec.entry).group("body")
    hand.players = parse_players(body, hand.dealer_name, state.hero_name)
    return state


def on_your_hand(state: SegmenterState, rec: LogRecord) -> SegmenterState:
    hand = state.current
    hero = hand.hero or hand.find_player(state.hero_name)
    if hero is None:
        # hero unknown for this log: the cards cannot be attributed to a seat
        return state
    hero.hole_cards = cards_from_text(RE_YOUR_HAND.match(rec.entry).group("cards"))
    hero.is_hero = True
    return state


def on_board(state: SegmenterState, rec: LogRecord) -> SegmenterState:
    hand = state.current
    m = RE_BOARD.match(rec.entry)
    street = Street(m.group("street").upper())
    body = m.group("body")

    if street == Street.FLOP:
        cards = cards_from_text(body)
        if len(cards) == 3:
            hand.board.flop = cards
    elif street == Street.TURN:
        cards = bracketed_cards(body)[-1:]
        if cards:
            hand.board.turn = cards
    else:
        cards = bracketed_cards(body)[-1:]
        if cards:
            hand.board.river = cards

    state.street = street
    return state


def on_action(state: SegmenterState, rec: LogRecord) -> SegmenterState:
    record_action(state.current, state.street, rec.entry)
    return state


def on_settlement(state: SegmenterState, rec: LogRecord) -> SegmenterState:
    hand = state.current
    name, amount = parse_settlement(rec.entry)
    hand.add_winner(name)
    player = hand.find_player(name)
    if player is not None:
        player.winnings += amount
    hand.final_pot_size += amount
    return state


def on_show_or_muck(state: SegmenterState, rec: LogRecord) -> SegmenterState:
    hand = state.current
    shown = parse_shows(rec.entry)
    if shown is not None:
        name, card_text = shown
        player = hand.find_player(name)
        if player is not None:
            player.showed_hand = cards_from_text(card_text)
        append_action(hand, state.street, ActionType.SHOW_HAND, name)
        return state

    name, _ = split_player_line(rec.entry)
    if name is None:
        name = display_name(RE_MUCKS.match(rec.entry).group("who"))
    append_action(hand, state.street, ActionType.MUCK, name)
    return state


def on_end(state: SegmenterState, rec: LogRecord) -> SegmenterState:
    return close_hand(state)


# -------------------------
# Line shapes, in priority order
# -------------------------
def _is_action(entry: str) -> bool:
    name, rest = split_player_line(entry)
    return name is not None and RE_ACTION_VERB.search(rest) is not None


def _is_show_or_muck(entry: str) -> bool:
    return parse_shows(entry) is not None or RE_MUCKS.match(entry) is not None


class LineRule(NamedTuple):
    name: str
    predicate: Callable[[str], bool]
    handler: Callable[[SegmenterState, LogRecord], SegmenterState]
    needs_hand: bool = True


LINE_RULES: List[LineRule] = [
    LineRule("start", lambda e: RE_START.search(e) is not None, on_start, needs_hand=False),
    LineRule("stacks", lambda e: RE_STACKS.match(e) is not None, on_stacks),
    LineRule("your_hand", lambda e: RE_YOUR_HAND.match(e) is not None, on_your_hand),
    LineRule("board", lambda e: RE_BOARD.match(e) is not None, on_board),
    LineRule("action", _is_action, on_action),
    LineRule("settlement", lambda e: parse_settlement(e) is not None, on_settlement),
    LineRule("show_or_muck", _is_show_or_muck, on_show_or_muck),
    LineRule("end", lambda e: RE_END.search(e) is not None, on_end),
]


def match_line(entry: str) -> Optional[LineRule]:
    """The first rule whose predicate accepts `entry`, or None for ignored lines."""
    for rule in LINE_RULES:
        if rule.predicate(entry):
            return rule
    return None


def step(state: SegmenterState, rec: LogRecord) -> SegmenterState:
    rule = match_line(rec.entry)
    if rule is None:
        # joins, chat, stand ups, run-it-twice boards, ...
        return state
    if rule.needs_hand and state.current is None:
        return state
    return rule.handler(state, rec)


def segment_hands(records: Sequence[LogRecord], hero_name: Optional[str] = None, verbose: bool = False) -> List[Hand]:
    state = reduce(step, records, SegmenterState(hero_name=hero_name, verbose=verbose))
    # finalize if the log ended mid-hand
    return close_hand(state).hands


# -------------------------
# Parser facade
# -------------------------
@dataclass
class ParseResult:
    hands: List[Hand]
    hero_name: Optional[str] = None
    warnings: List[PokerLogWarning] = field(default_factory=list)

    def has_warning(self, kind: Type[PokerLogWarning]) -> bool:
        return any(isinstance(w, kind) for w in self.warnings)

    def to_dicts(self) -> List[dict]:
        return [h.to_dict() for h in self.hands]


class PokerLogParser:
    """
    Parser for PokerNow CSV exports (columns order, at, entry).

    Rows are sorted by `order`, the hero is resolved in a pre-pass, then the
    records are segmented into Hands. Only a missing entry column is fatal;
    everything else is reported through ParseResult.warnings.
    """

    def __init__(
        self,
        entry_col: str = "entry",
        order_col: str = "order",
        at_col: str = "at",
        noise_prefixes: Sequence[str] = DEFAULT_NOISE_PREFIXES,
        verbose_hands: bool = False,
    ):
        self.entry_col = entry_col
        self.order_col = order_col
        self.at_col = at_col
        self.noise_prefixes = tuple(noise_prefixes)
        self.verbose_hands = bool(verbose_hands)

    # ---------- parse ----------
    def parse_records(self, records: Sequence[LogRecord]) -> ParseResult:
        warnings: List[PokerLogWarning] = []

        hero_name = find_hero(list(records))
        hands = segment_hands(records, hero_name=hero_name, verbose=self.verbose_hands)

        if not hands:
            warnings.append(NoHandsFoundWarning("No hands found in the uploaded log"))
        elif hero_name is None:
            warnings.append(
                HeroUndeterminedWarning(
                    "Could not auto-detect hero (hero never showed cards); hole cards are not attributed"
                )
            )

        for w in warnings:
            logger.warning(str(w))
        if hands:
            logger.info(f"Parsed {len(hands)} hands from {len(records)} log lines")

        return ParseResult(hands=hands, hero_name=hero_name, warnings=warnings)

    def parse_text(self, csv_text: str) -> ParseResult:
        records = read_log_records(
            csv_text,
            entry_col=self.entry_col,
            order_col=self.order_col,
            at_col=self.at_col,
            noise_prefixes=self.noise_prefixes,
        )
        return self.parse_records(records)

    def parse_csv(self, csv_path: str) -> ParseResult:
        text = Path(csv_path).read_text(encoding="utf-8")
        return self.parse_text(text)


def parse_poker_now_log(csv_text: str, **kwargs) -> ParseResult:
    """Parse one CSV export. Keyword arguments are passed to PokerLogParser."""
    return PokerLogParser(**kwargs).parse_text(csv_text)

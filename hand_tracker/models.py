from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class GameType(str, Enum):
    NLH = "NLH"
    PLO = "PLO"


class Street(str, Enum):
    PREFLOP = "PREFLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"


class ActionType(str, Enum):
    POST_SB = "POST_SB"
    POST_BB = "POST_BB"
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    BET = "BET"
    RAISE = "RAISE"
    SHOW_HAND = "SHOW_HAND"
    MUCK = "MUCK"


@dataclass(frozen=True)
class LogRecord:
    """One raw row of the export. Only `entry` is inspected for content."""
    sequence: Optional[int]
    timestamp: str
    entry: str


@dataclass
class Player:
    seat: int
    name: str
    stack: int
    is_dealer: bool = False
    is_hero: bool = False
    hole_cards: List[str] = field(default_factory=list)
    showed_hand: List[str] = field(default_factory=list)
    winnings: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seat": self.seat,
            "name": self.name,
            "stack": self.stack,
            "isDealer": self.is_dealer,
            "isHero": self.is_hero,
            "holeCards": list(self.hole_cards),
            "showedHand": list(self.showed_hand),
            "winnings": self.winnings,
        }


@dataclass
class Action:
    street: Street
    action_type: ActionType
    player: str
    amount: int = 0
    pot_size_after: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "street": self.street.value,
            "actionType": self.action_type.value,
            "player": self.player,
            "amount": self.amount,
            "potSizeAfter": self.pot_size_after,
        }


@dataclass
class Board:
    flop: List[str] = field(default_factory=list)
    turn: List[str] = field(default_factory=list)
    river: List[str] = field(default_factory=list)

    def cards(self) -> List[str]:
        return self.flop + self.turn + self.river

    def to_dict(self) -> Dict[str, List[str]]:
        return {"flop": list(self.flop), "turn": list(self.turn), "river": list(self.river)}


@dataclass
class Hand:
    index: int
    game_type: Optional[GameType] = None
    date_played: Optional[str] = None
    dealer_name: Optional[str] = None
    hero_name: Optional[str] = None
    players: List[Player] = field(default_factory=list)
    actions: List[Action] = field(default_factory=list)
    board: Board = field(default_factory=Board)
    winners: List[str] = field(default_factory=list)
    final_pot_size: int = 0

    def find_player(self, name: Optional[str]) -> Optional[Player]:
        if name is None:
            return None
        for p in self.players:
            if p.name == name:
                return p
        return None

    @property
    def hero(self) -> Optional[Player]:
        for p in self.players:
            if p.is_hero:
                return p
        return None

    def add_winner(self, name: str) -> None:
        if name not in self.winners:
            self.winners.append(name)

    def to_dict(self) -> Dict[str, Any]:
        """Export using the field names the persistence layer stores."""
        return {
            "index": self.index,
            "gameType": self.game_type.value if self.game_type else None,
            "datePlayed": self.date_played,
            "dealerName": self.dealer_name,
            "heroName": self.hero_name,
            "players": [p.to_dict() for p in self.players],
            "actions": [a.to_dict() for a in self.actions],
            "board": self.board.to_dict(),
            "winners": list(self.winners),
            "finalPotSize": self.final_pot_size,
        }

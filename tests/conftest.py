import pandas as pd
import pytest

BASE_ORDER = 170930000000000

HAND_ONE = [
    '-- starting hand #1 (id: abc123)  No Limit Texas Hold\'em (dealer: "Alice @ a1") --',
    'Player stacks: #1 "Alice @ a1" (1000) | #3 "Bob @ b2" (1,500) | #5 "Nate @ s9p1qZMXYl" (2000)',
    "Your hand is A♥, K♥",
    '"Bob @ b2" posts a small blind of 10',
    '"Nate @ s9p1qZMXYl" posts a big blind of 20',
    '"Alice @ a1" folds',
    '"Bob @ b2" raises to 60',
    '"Nate @ s9p1qZMXYl" calls 40',
    "Flop:  [10♠, 7♦, 2♣]",
    '"Bob @ b2" bets 50',
    '"Nate @ s9p1qZMXYl" raises to 150',
    '"Bob @ b2" calls 100',
    "Turn: 10♠, 7♦, 2♣ [J♥]",
    '"Bob @ b2" checks',
    '"Nate @ s9p1qZMXYl" checks',
    "River: 10♠, 7♦, 2♣, J♥ [Q♥]",
    '"Bob @ b2" checks',
    '"Nate @ s9p1qZMXYl" checks',
    '"Nate @ s9p1qZMXYl" shows a A♥, K♥.',
    '"Bob @ b2" shows a 10♦, 9♦.',
    '"Nate @ s9p1qZMXYl" collected 420 from pot with Straight, Ace High (combination: A♥, K♥, Q♥, J♥, 10♠)',
    "-- ending hand #1 --",
]

BETWEEN_HANDS = [
    'The admin approved the player "Carl @ c3" participation with a stack of 1000.',
    '"Carl @ c3" joined the game with a stack of 1000.',
    "WARNING: the game will be paused after this hand",
]

HAND_TWO = [
    '-- starting hand #2 (id: def456)  Pot Limit Omaha Hi (dealer: "Bob @ b2") --',
    'Player stacks: #1 "Alice @ a1" (990) | #3 "Bob @ b2" (1290) | #5 "Nate @ s9p1qZMXYl" (2210)',
    "Your hand is 9♣, 9♠, 5♦, 4♦",
    '"Nate @ s9p1qZMXYl" posts a small blind of 10',
    '"Alice @ a1" posts a big blind of 20',
    '"Bob @ b2" raises to 70',
    '"Nate @ s9p1qZMXYl" folds',
    '"Alice @ a1" folds',
    'Uncalled bet of 50 returned to "Bob @ b2"',
    '"Bob @ b2" collected 50 from pot',
    "-- ending hand #2 --",
]


def build_log(lines, newest_first=True, with_order=True):
    """
    Render chronological `lines` as a PokerNow CSV export. PokerNow writes the
    newest row first, so rows are reversed by default.
    """
    rows = []
    for i, entry in enumerate(lines):
        row = {"entry": entry, "at": f"2024-03-01T20:{i // 60:02d}:{i % 60:02d}.000Z"}
        if with_order:
            row["order"] = str(BASE_ORDER + i * 100)
        rows.append(row)
    if newest_first:
        rows = rows[::-1]
    columns = ["entry", "at", "order"] if with_order else ["entry", "at"]
    return pd.DataFrame(rows, columns=columns).to_csv(index=False)


@pytest.fixture
def make_log():
    return build_log


@pytest.fixture
def sample_lines():
    return HAND_ONE + BETWEEN_HANDS + HAND_TWO


@pytest.fixture
def sample_log(sample_lines):
    return build_log(sample_lines)

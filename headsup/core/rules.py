"""
Heads-up Hold'em Rules and Constants.

Table conventions used by the engine:

1. The button posts the small blind, the other seat posts the big blind.
   A blind is capped at the poster's stack; a short stack is all-in.

2. The button acts first on every street, and turns alternate strictly
   between the two seats while the round is open.

3. A raise adds its amount on top of the player's current bet. The engine
   rejects a raise that would not even cover the call, unless it commits
   the player's whole stack.

4. There is a single pot. Side pots do not exist with two players: whatever
   one player cannot match is simply never put in.
"""

from __future__ import annotations
from enum import Enum
from functools import total_ordering
from dataclasses import dataclass
from typing import Tuple


@total_ordering
class Street(Enum):
    """Streets of a hand, strictly ordered."""
    PREFLOP = 0
    FLOP = 1
    TURN = 2
    RIVER = 3
    SHOWDOWN = 4

    def __lt__(self, other: Street) -> bool:
        if not isinstance(other, Street):
            return NotImplemented
        return self.value < other.value


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"
    ALL_IN = "ALL_IN"


@dataclass(frozen=True)
class PlayerAction:
    """
    An action submitted for the seat to act.

    Only RAISE carries an amount: the chips added on top of the player's
    current bet. Use the constructors rather than building it by hand:

        PlayerAction.fold()
        PlayerAction.raise_by(60)
    """
    type: ActionType
    amount: int = 0

    @classmethod
    def fold(cls) -> PlayerAction:
        return cls(ActionType.FOLD)

    @classmethod
    def check(cls) -> PlayerAction:
        return cls(ActionType.CHECK)

    @classmethod
    def call(cls) -> PlayerAction:
        return cls(ActionType.CALL)

    @classmethod
    def raise_by(cls, amount: int) -> PlayerAction:
        return cls(ActionType.RAISE, amount)

    @classmethod
    def all_in(cls) -> PlayerAction:
        return cls(ActionType.ALL_IN)

    def __str__(self) -> str:
        if self.type == ActionType.RAISE:
            return f"RAISE {self.amount}"
        return self.type.value


# Default game settings
DEFAULT_SMALL_BLIND = 10
DEFAULT_BIG_BLIND = 20
DEFAULT_STARTING_STACK = 1000
NUM_SEATS = 2
HUMAN_SEAT = 0
OPPONENT_SEAT = 1

# Cards per street
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Board size once each street has been revealed
BOARD_SIZE_BY_STREET = {
    Street.PREFLOP: 0,
    Street.FLOP: FLOP_CARDS,
    Street.TURN: FLOP_CARDS + TURN_CARDS,
    Street.RIVER: TOTAL_COMMUNITY_CARDS,
    Street.SHOWDOWN: TOTAL_COMMUNITY_CARDS,
}

# Pacing of the table controller, in seconds
DEFAULT_OPPONENT_DELAY = 0.6
DEFAULT_REVEAL_DELAYS = (0.5, 1.2, 1.9, 2.6)


@dataclass
class TableConfig:
    """
    Settings for a heads-up table.

    Attributes:
        small_blind: Small blind, posted by the button
        big_blind: Big blind, posted by the other seat
        starting_stack: Chips each seat starts a hand with
        carry_stacks: Keep stacks from hand to hand instead of resetting
            them to starting_stack every hand
        player_names: Display names for seat 0 and seat 1
        opponent_delay: Pause before the scripted seat acts
        reveal_delays: Offsets of the staged all-in run-out steps
    """
    small_blind: int = DEFAULT_SMALL_BLIND
    big_blind: int = DEFAULT_BIG_BLIND
    starting_stack: int = DEFAULT_STARTING_STACK
    carry_stacks: bool = False
    player_names: Tuple[str, str] = ("You", "CPU")
    opponent_delay: float = DEFAULT_OPPONENT_DELAY
    reveal_delays: Tuple[float, ...] = DEFAULT_REVEAL_DELAYS

    def __post_init__(self):
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if self.big_blind < self.small_blind:
            raise ValueError("Big blind must be at least the small blind")
        if self.starting_stack <= 0:
            raise ValueError("Starting stack must be positive")
        if len(self.player_names) != NUM_SEATS:
            raise ValueError(f"Need exactly {NUM_SEATS} player names")
        if self.opponent_delay < 0 or any(d < 0 for d in self.reveal_delays):
            raise ValueError("Delays cannot be negative")


def get_blind_positions(button: int) -> Tuple[int, int]:
    """
    Small blind and big blind seats for a heads-up hand.

    The button posts the small blind; the other seat posts the big blind.
    """
    return button, other_seat(button)


def other_seat(seat: int) -> int:
    return (seat + 1) % NUM_SEATS


def min_raise_amount(call_amount: int) -> int:
    """Smallest raise amount accepted for a player owing call_amount."""
    return call_amount + 1


def is_valid_raise(amount: int, call_amount: int, player_stack: int) -> bool:
    """
    Check if a raise amount is acceptable.

    A raise is valid if it is positive and either:
    1. It adds more than the player owes, OR
    2. It commits the player's entire stack
    """
    if amount <= 0:
        return False
    if amount >= player_stack:
        return True
    return amount >= min_raise_amount(call_amount)

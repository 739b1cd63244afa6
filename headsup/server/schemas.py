"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from headsup.core.rules import (
    DEFAULT_BIG_BLIND, DEFAULT_SMALL_BLIND, DEFAULT_STARTING_STACK,
    DEFAULT_OPPONENT_DELAY,
)


# ============= Request Schemas =============

class InitTableRequest(BaseModel):
    """Request to set up the table."""
    small_blind: int = Field(gt=0, default=DEFAULT_SMALL_BLIND)
    big_blind: int = Field(gt=0, default=DEFAULT_BIG_BLIND)
    starting_stack: int = Field(gt=0, default=DEFAULT_STARTING_STACK)
    carry_stacks: bool = False
    opponent_delay: float = Field(ge=0, default=DEFAULT_OPPONENT_DELAY)


class ActionRequest(BaseModel):
    """Request to take a game action."""
    action: str = Field(..., description="Action type: FOLD, CHECK, CALL, RAISE, ALL_IN")
    amount: int = Field(default=0, ge=0, description="Chips to add for RAISE")


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    text: str
    color: str


class PlayerSchema(BaseModel):
    """Seat information; cards are empty while hidden from the viewer."""
    id: str
    seat: int
    name: str
    chips: int
    bet: int
    folded: bool
    all_in: bool
    last_action: Optional[str] = None
    cards: List[CardSchema] = []
    best_hand: Optional[str] = None


class LegalActionSchema(BaseModel):
    """Available action."""
    type: str
    amount: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None


class ResultSchema(BaseModel):
    """How the hand ended."""
    outcome: str
    winners: List[int]
    payouts: List[int]
    labels: List[str]
    descriptions: List[Optional[str]] = []
    winning_cards: List[str] = []
    text: str


class TableStateSchema(BaseModel):
    """Published table state."""
    hand_number: int
    street: str
    pot: int
    current_bet: int
    board: List[CardSchema]
    button: Optional[int] = None
    current_seat: Optional[int] = None
    call_amount: int
    players: List[PlayerSchema]
    hand_running: bool
    runout_pending: bool
    is_showdown: bool
    hole_cards_revealed: bool
    result: Optional[ResultSchema] = None
    opponent_thinking: bool = False


class ActionResultSchema(BaseModel):
    """Result of an action, with the state that followed it."""
    success: bool
    message: str
    action_type: Optional[str] = None
    amount: int = 0
    state: TableStateSchema


class LegalActionsSchema(BaseModel):
    actions: List[LegalActionSchema]

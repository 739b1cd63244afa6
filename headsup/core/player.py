"""
Player class for heads-up Hold'em.

Manages player state including:
- Chip count
- Hole cards
- Current bet in the round
- Folded / all-in flags and whether the player has acted this round
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from headsup.core.card import Card


@dataclass
class Player:
    """
    A player seated at the heads-up table.

    Attributes:
        player_id: Unique identifier for the player
        name: Display name
        chips: Current chip count, never negative
        hole_cards: The player's private cards (0 or 2)
        current_bet: Amount put in during the current street
        has_folded: Whether the player has folded this hand
        is_all_in: True iff a bet has left the player with no chips
        has_acted: Whether the player has acted in the current round
    """
    player_id: str
    name: str
    chips: int
    hole_cards: List[Card] = field(default_factory=list)
    current_bet: int = 0
    has_folded: bool = False
    is_all_in: bool = False
    has_acted: bool = False
    # Track last action for display
    last_action: Optional[str] = None

    def reset_for_new_hand(self, chips: Optional[int] = None) -> None:
        """Reset player state for a new hand, optionally restoring a stack."""
        if chips is not None:
            self.chips = chips
        self.hole_cards = []
        self.current_bet = 0
        self.has_folded = False
        self.is_all_in = False
        self.has_acted = False
        self.last_action = None

    def reset_for_new_street(self) -> None:
        """Reset per-round betting state (flop, turn, river)."""
        self.current_bet = 0
        self.has_acted = False

    def deal_cards(self, cards: List[Card]) -> None:
        """Deal hole cards to the player."""
        self.hole_cards = list(cards)

    def bet(self, amount: int) -> int:
        """
        Move chips from the stack into the current bet.

        Args:
            amount: Amount to bet

        Returns:
            Actual amount bet (less than asked if it puts the player all-in)
        """
        if amount <= 0:
            return 0

        actual_amount = min(amount, self.chips)

        self.chips -= actual_amount
        self.current_bet += actual_amount
        self.is_all_in = self.chips == 0

        return actual_amount

    def fold(self) -> None:
        self.has_folded = True
        self.last_action = "FOLD"

    @property
    def is_in_hand(self) -> bool:
        """Still contesting the pot (not folded)."""
        return not self.has_folded

    @property
    def can_bet(self) -> bool:
        """Still able to put chips in: not folded and not all-in."""
        return not self.has_folded and not self.is_all_in

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "id": self.player_id,
            "name": self.name,
            "chips": self.chips,
            "bet": self.current_bet,
            "folded": self.has_folded,
            "all_in": self.is_all_in,
            "last_action": self.last_action,
        }

        if not hide_cards and self.hole_cards:
            result["cards"] = [card.to_dict() for card in self.hole_cards]

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.player_id}, chips={self.chips}, "
            f"bet={self.current_bet}, folded={self.has_folded}, all_in={self.is_all_in})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"{self.name} [{cards_str}] ${self.chips}"

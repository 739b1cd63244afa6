"""
Base Agent Interface for heads-up Hold'em.

This module defines the abstract base class for every non-human seat.
The table controller only talks to this interface, so swapping the
scripted opponent for a smarter one never touches the state machine.

Usage:
    class MyAgent(BaseAgent):
        def act(self, game_state, legal_actions):
            return PlayerAction.call()
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional

from headsup.core.rules import PlayerAction


class BaseAgent(ABC):
    """
    Abstract base class for poker agents.

    Attributes:
        seat: Seat the agent plays (0 or 1)
        name: Human-readable name
    """

    def __init__(self, seat: int, name: Optional[str] = None):
        """
        Initialize the agent.

        Args:
            seat: Seat the agent plays
            name: Optional human-readable name
        """
        self.seat = seat
        self.name = name or f"Agent-{seat}"

    def observe(self, game_state: Dict[str, Any]) -> None:
        """
        Observe the current game state.

        Called before every decision. Override this to keep a memory of
        the hand; the default does nothing.
        """
        pass

    @abstractmethod
    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> PlayerAction:
        """
        Choose an action given the current game state.

        Args:
            game_state: Published state as returned by HeadsUpGame.get_state,
                with this agent's hole cards visible and call_amount set
            legal_actions: List of legal action dicts, each containing:
                - type: Action type (FOLD, CHECK, CALL, RAISE, ALL_IN)
                - amount: Required amount (for CALL, ALL_IN)
                - min/max: Valid range (for RAISE)

        Returns:
            The PlayerAction to submit
        """
        pass

    def reset(self) -> None:
        """Reset the agent's internal state for a new game."""
        pass

    def on_hand_start(self, hand_number: int) -> None:
        """Called when a new hand starts."""
        pass

    def on_hand_end(self, result: Dict[str, Any]) -> None:
        """Called with ShowdownResult.to_dict() when a hand ends."""
        pass

    def choose_action(self, game) -> PlayerAction:
        """
        Convenience method that combines observe and act for a live game.

        Args:
            game: HeadsUpGame where this agent's seat is to act

        Returns:
            The chosen PlayerAction
        """
        game_state = game.get_state(for_seat=self.seat)
        self.observe(game_state)
        return self.act(game_state, game.get_legal_actions())

    @staticmethod
    def own_chips(game_state: Dict[str, Any], seat: int) -> int:
        """Chips behind for a seat in a published state."""
        return game_state["players"][seat]["chips"]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.seat}, {self.name})"

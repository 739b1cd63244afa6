"""
Random and calling agents.

Simple baselines used to exercise the engine: one picks random legal
actions, the other never folds and never raises.
"""

import random
from typing import Dict, List, Any, Optional

from headsup.agents.base import BaseAgent
from headsup.core.rules import ActionType, PlayerAction


class RandomAgent(BaseAgent):
    """
    An agent that selects random legal actions.

    The agent has configurable tendencies:
    - fold_probability: How likely to fold when facing a bet
    - raise_probability: How likely to raise vs call/check
    """

    def __init__(
        self,
        seat: int,
        name: Optional[str] = None,
        fold_probability: float = 0.1,
        raise_probability: float = 0.3,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the random agent.

        Args:
            seat: Seat the agent plays
            name: Optional name
            fold_probability: Probability of folding (0-1)
            raise_probability: Probability of raising vs calling (0-1)
            rng: Random source, for reproducible runs
        """
        super().__init__(seat, name or f"Random-{seat}")
        self.fold_probability = fold_probability
        self.raise_probability = raise_probability
        self._rng = rng or random.Random()

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> PlayerAction:
        """
        Select a random legal action.

        Uses configured probabilities to bias towards certain actions.
        """
        if not legal_actions:
            return PlayerAction.fold()

        by_type = {a["type"]: a for a in legal_actions}
        roll = self._rng.random()

        # Never fold when checking is free
        if ActionType.CALL.value in by_type and roll < self.fold_probability:
            return PlayerAction.fold()

        raise_action = by_type.get(ActionType.RAISE.value)
        if raise_action and roll < self.fold_probability + self.raise_probability:
            amount = self._rng.randint(raise_action["min"], raise_action["max"])
            return PlayerAction.raise_by(amount)

        if ActionType.CHECK.value in by_type:
            return PlayerAction.check()
        if ActionType.CALL.value in by_type:
            return PlayerAction.call()
        return PlayerAction.all_in()


class CallAgent(BaseAgent):
    """
    An agent that always calls (or checks).

    Useful for testing and as a simple baseline.
    """

    def __init__(self, seat: int, name: Optional[str] = None):
        super().__init__(seat, name or f"Caller-{seat}")

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> PlayerAction:
        """Always check or call."""
        if game_state["call_amount"] == 0:
            return PlayerAction.check()
        return PlayerAction.call()

"""
Scripted opponent.

The placeholder strategy for the computer seat: it looks only at what it
owes and what it has left.

- Nothing owed: raise a fixed amount once in a while, otherwise check.
- Owing no more than a fixed threshold (capped by its stack): call.
- Owing more: fold.
"""

import random
from typing import Dict, List, Any, Optional

from headsup.agents.base import BaseAgent
from headsup.core.rules import PlayerAction


DEFAULT_BLUFF_PROBABILITY = 0.1
DEFAULT_RAISE_SIZE = 60
DEFAULT_CALL_THRESHOLD = 60


class ScriptedAgent(BaseAgent):
    """
    Fixed-rule opponent.

    Attributes:
        bluff_probability: Chance of raising when nothing is owed
        raise_size: Chips added when raising (capped by stack)
        call_threshold: Largest call the agent will make (capped by stack)
    """

    def __init__(
        self,
        seat: int,
        name: Optional[str] = None,
        bluff_probability: float = DEFAULT_BLUFF_PROBABILITY,
        raise_size: int = DEFAULT_RAISE_SIZE,
        call_threshold: int = DEFAULT_CALL_THRESHOLD,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(seat, name or f"Scripted-{seat}")
        if not 0 <= bluff_probability <= 1:
            raise ValueError("bluff_probability must be between 0 and 1")
        self.bluff_probability = bluff_probability
        self.raise_size = raise_size
        self.call_threshold = call_threshold
        self._rng = rng or random.Random()

    def decide(self, call_amount: int, chips: int) -> PlayerAction:
        """Pick an action from the amount owed and the chips behind."""
        if call_amount == 0:
            if chips > 0 and self._rng.random() < self.bluff_probability:
                return PlayerAction.raise_by(min(self.raise_size, chips))
            return PlayerAction.check()

        if call_amount <= min(self.call_threshold, chips):
            return PlayerAction.call()
        return PlayerAction.fold()

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> PlayerAction:
        return self.decide(
            game_state["call_amount"],
            self.own_chips(game_state, self.seat),
        )

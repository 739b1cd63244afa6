"""
Table controller: paces a heads-up game for a presentation layer.

The engine itself never waits. This module adds the two timed behaviours a
table needs on top of it:

- the opponent acts after a short delay whenever it is its turn;
- an all-in run-out is revealed one street at a time.

Both are deferred callbacks on a single scheduler. Every callback carries the
hand number it was scheduled for and does nothing if a new hand has started
since, so a stale opponent action can never touch the next hand.
"""

from __future__ import annotations
import asyncio
import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from headsup.agents.base import BaseAgent
from headsup.agents.scripted_agent import ScriptedAgent
from headsup.core.game import ActionResult, HeadsUpGame
from headsup.core.rules import (
    HUMAN_SEAT, OPPONENT_SEAT, PlayerAction, TableConfig,
)


logger = logging.getLogger(__name__)

StateListener = Callable[[Dict[str, Any]], None]


class Scheduler(ABC):
    """Runs callbacks after a delay on the caller's thread."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        """
        Schedule callback after delay seconds.

        Returns:
            A handle with a cancel() method
        """


class ScheduledCall:
    """Handle for a callback queued on a ManualScheduler."""

    __slots__ = ("when", "callback", "_cancelled")

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """
    A deterministic event queue driven by advance().

    Time only moves when the owner says so, which makes paced play
    reproducible in tests and simulations.
    """

    def __init__(self):
        self.now = 0.0
        self._queue: List[tuple] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        handle = ScheduledCall(self.now + delay, callback)
        heapq.heappush(self._queue, (handle.when, next(self._counter), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to fire."""
        return sum(1 for _, _, h in self._queue if not h.cancelled())

    def advance(self, seconds: float) -> int:
        """
        Move time forward, firing every callback that falls due.

        Callbacks scheduled while advancing fire too if they fall due
        within the window.

        Returns:
            Number of callbacks fired
        """
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            self.now = when
            if handle.cancelled():
                continue
            handle.callback()
            fired += 1
        self.now = target
        return fired

    def run_all(self, max_calls: int = 10_000) -> int:
        """Fire callbacks in time order until the queue is empty."""
        fired = 0
        while self._queue:
            if fired >= max_calls:
                raise RuntimeError(f"Scheduler still busy after {max_calls} callbacks")
            when = self._queue[0][0]
            fired += self.advance(max(0.0, when - self.now))
        return fired


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop's call_later."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class TableController:
    """
    Owns one game, its opponent and the pacing between them.

    The human seat acts through perform_action(); the opponent seat is
    driven by its agent on the scheduler. Listeners registered with
    subscribe() receive the published state after every change.

    Usage:
        table = TableController(scheduler=ManualScheduler())
        table.subscribe(render)
        table.start_new_hand()
        table.perform_action(PlayerAction.call())
    """

    def __init__(
        self,
        config: Optional[TableConfig] = None,
        opponent: Optional[BaseAgent] = None,
        scheduler: Optional[Scheduler] = None,
        game: Optional[HeadsUpGame] = None,
    ):
        self.game = game or HeadsUpGame(config)
        self.config = self.game.config
        self.opponent = opponent or ScriptedAgent(
            OPPONENT_SEAT, name=self.config.player_names[OPPONENT_SEAT]
        )
        self.opponent.reset()
        self.scheduler = scheduler or ManualScheduler()
        self.human_seat = HUMAN_SEAT
        self._pending: List[Any] = []
        self._listeners: List[StateListener] = []
        self.opponent_thinking = False

    @property
    def generation(self) -> int:
        """Hand number used to recognise stale callbacks."""
        return self.game.hand_number

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener for state changes.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get_state(self) -> Dict[str, Any]:
        """Published state from the human seat's point of view."""
        state = self.game.get_state(for_seat=self.human_seat)
        state["opponent_thinking"] = self.opponent_thinking
        return state

    def start_new_hand(self) -> bool:
        """Cancel anything pending for the old hand and deal a new one."""
        self._cancel_pending()
        if not self.game.start_new_hand():
            return False

        self.opponent.on_hand_start(self.generation)
        self._after_transition()
        return True

    def perform_action(self, action: PlayerAction) -> ActionResult:
        """Submit an action for the human seat."""
        result = self.game.perform_action(action, seat=self.human_seat)
        if result.success:
            self._after_transition()
        return result

    def shutdown(self) -> None:
        """Cancel every pending callback."""
        self._cancel_pending()

    def _after_transition(self) -> None:
        self._notify()

        if self.game.hand_ended:
            self.opponent.on_hand_end(self.game.showdown_result.to_dict())
            return

        if self.game.runout_pending:
            self._schedule_runout()
        elif self.game.current_player_index == self.opponent.seat:
            self.opponent_thinking = True
            self._schedule(self.config.opponent_delay, self._opponent_turn)

    def _schedule(self, delay: float, step: Callable[[], None]) -> None:
        generation = self.generation

        def fire() -> None:
            if generation != self.generation or self.game.hand_ended:
                logger.debug(f"Dropping callback from hand #{generation}")
                return
            step()

        self._pending.append(self.scheduler.call_later(delay, fire))

    def _cancel_pending(self) -> None:
        for handle in self._pending:
            handle.cancel()
        self._pending = []
        self.opponent_thinking = False

    def _opponent_turn(self) -> None:
        self.opponent_thinking = False
        game = self.game
        if game.runout_pending or game.current_player_index != self.opponent.seat:
            return

        action = self.opponent.choose_action(game)
        result = game.perform_action(action, seat=self.opponent.seat)
        if not result.success:
            logger.warning(f"{self.opponent} chose illegal {action}: {result.message}")
            fallback = PlayerAction.check() if game.call_amount == 0 else PlayerAction.fold()
            result = game.perform_action(fallback, seat=self.opponent.seat)

        logger.debug(f"{self.opponent.name}: {result.message}")
        self._after_transition()

    def _schedule_runout(self) -> None:
        steps = self.game.runout_steps_remaining
        delays = list(self.config.reveal_delays[:steps])
        while len(delays) < steps:
            delays.append(delays[-1] if delays else 0.0)

        for delay in delays:
            self._schedule(delay, self._runout_step)

    def _runout_step(self) -> None:
        if not self.game.reveal_next_street():
            return
        self._notify()
        if self.game.hand_ended:
            self.opponent.on_hand_end(self.game.showdown_result.to_dict())

    def _notify(self) -> None:
        if not self._listeners:
            return
        state = self.get_state()
        for listener in list(self._listeners):
            listener(state)

"""
Heads-up Hold'em Game Engine - State Machine Implementation.

This module implements the betting logic of a two-player hand.
It handles:
- Hand lifecycle (streets: preflop, flop, turn, river, showdown)
- Player actions (fold, check, call, raise, all-in)
- Blind posting and button rotation
- Round completion and street advancement
- All-in run-outs, revealed one street at a time
- Showdown scoring and pot award

Every public method is a single synchronous state transition. Pacing (the
opponent's thinking delay, the staggered run-out) lives in the table
controller, which calls reveal_next_street() for each run-out step.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Any
from dataclasses import dataclass, field
import logging
import random

from headsup.core.card import Card, Deck
from headsup.core.player import Player
from headsup.core.hand import (
    HandScore, HeadsUpResult, evaluate_best5, best_hand_label, describe_score,
)
from headsup.core.rules import (
    Street, ActionType, PlayerAction, TableConfig,
    get_blind_positions, other_seat, is_valid_raise, min_raise_amount,
    HOLE_CARDS, TOTAL_COMMUNITY_CARDS, BOARD_SIZE_BY_STREET, NUM_SEATS,
)


logger = logging.getLogger(__name__)


# Street that follows each street while betting is still open
NEXT_STREET = {
    Street.PREFLOP: Street.FLOP,
    Street.FLOP: Street.TURN,
    Street.TURN: Street.RIVER,
}


@dataclass
class ActionResult:
    """Result of a player action."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0


@dataclass
class ShowdownResult:
    """
    How a hand ended.

    Attributes:
        outcome: Comparison result seen from seat 0 (A) against seat 1 (B),
            or None when the hand was won by a fold
        winners: Seats sharing the pot
        payouts: Chips awarded per seat
        labels: Best-hand label per seat
        scores: Evaluated score per seat (None if it could not be scored)
        winning_cards: Five cards of the winning hand, empty on a split or a fold
        text: Result line for display
    """
    outcome: Optional[HeadsUpResult]
    winners: List[int]
    payouts: List[int]
    labels: List[str]
    scores: List[Optional[HandScore]] = field(default_factory=list)
    winning_cards: List[Card] = field(default_factory=list)
    text: str = ""

    @property
    def won_by_fold(self) -> bool:
        return self.outcome is None

    @property
    def is_split(self) -> bool:
        return self.outcome == HeadsUpResult.SPLIT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value if self.outcome else "WIN_BY_FOLD",
            "winners": self.winners,
            "payouts": self.payouts,
            "labels": self.labels,
            "descriptions": [describe_score(s) if s else None for s in self.scores],
            "winning_cards": [str(c) for c in self.winning_cards],
            "text": self.text,
        }


class HeadsUpGame:
    """
    Heads-up Hold'em engine implementing a state machine.

    Usage:
        game = HeadsUpGame(TableConfig(small_blind=10, big_blind=20))
        game.start_new_hand()

        while game.is_hand_running():
            if game.runout_pending:
                game.reveal_next_street()
                continue
            action = get_player_action(game.get_state())  # From UI or agent
            game.perform_action(action)

        result = game.showdown_result
    """

    def __init__(
        self,
        config: Optional[TableConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a new heads-up table.

        Args:
            config: Table settings (defaults to TableConfig())
            rng: Random source for shuffling, for reproducible hands
        """
        self.config = config or TableConfig()
        self._rng = rng

        self.players: List[Player] = [
            Player(player_id=str(seat), name=name, chips=self.config.starting_stack)
            for seat, name in enumerate(self.config.player_names)
        ]

        # Hand state
        self.deck = Deck(rng=rng)
        self.board: List[Card] = []
        self._full_board: List[Card] = []
        self.street = Street.PREFLOP
        self.hand_number = 0
        self.hand_ended = True
        self.is_showdown = False
        self.runout_pending = False
        self.hole_cards_revealed = False
        self.showdown_result: Optional[ShowdownResult] = None

        # Position tracking
        self.button: Optional[int] = None
        self.current_player_index = 0

        # Betting state
        self.pot = 0
        self.current_bet = 0  # Highest current_bet on the table this round

        # Hand history for replay
        self.hand_history: List[Dict[str, Any]] = []

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if not self.is_hand_running() or self.runout_pending:
            return None
        return self.players[self.current_player_index]

    @property
    def call_amount(self) -> int:
        """Chips the seat to act must add to match the table bet."""
        player = self.players[self.current_player_index]
        return max(0, self.current_bet - player.current_bet)

    @property
    def total_chips(self) -> int:
        """Pot plus every stack; constant for the whole hand."""
        return self.pot + sum(p.chips for p in self.players)

    @property
    def runout_steps_remaining(self) -> int:
        """Reveals left before showdown, counting the showdown step itself."""
        if not self.runout_pending:
            return 0
        return Street.SHOWDOWN.value - self.street.value

    def is_hand_running(self) -> bool:
        """Check if a hand is currently in progress."""
        return self.hand_number > 0 and not self.hand_ended

    def players_in_hand(self) -> List[Player]:
        return [p for p in self.players if p.is_in_hand]

    def start_new_hand(self) -> bool:
        """
        Start a new hand: rotate the button, deal, and post blinds.

        Returns:
            True if hand started successfully, False otherwise
        """
        if self.config.carry_stacks and any(p.chips == 0 for p in self.players):
            logger.warning("Cannot start hand: a player has no chips left")
            return False

        self.hand_number += 1
        self.button = 0 if self.button is None else other_seat(self.button)
        logger.info(f"Starting hand #{self.hand_number}, button on seat {self.button}")

        # Reset for new hand
        for player in self.players:
            player.reset_for_new_hand(
                None if self.config.carry_stacks else self.config.starting_stack
            )

        self.board = []
        self.pot = 0
        self.current_bet = 0
        self.street = Street.PREFLOP
        self.hand_ended = False
        self.is_showdown = False
        self.runout_pending = False
        self.hole_cards_revealed = False
        self.showdown_result = None
        self.hand_history = []

        self._deal()
        self._post_blinds()
        self._setup_betting_round()

        self._log_action("HAND_START", {
            "hand_number": self.hand_number,
            "button": self.button,
        })

        # Short stacks can leave nobody able to bet straight after the blinds
        self._after_betting_change(pass_turn=False)
        return True

    def _deal(self) -> None:
        """Deal hole cards to each seat, then set aside the five board cards."""
        self.deck = Deck(rng=self._rng)
        self.deck.shuffle()
        for player in self.players:
            player.deal_cards(self.deck.draw_many(HOLE_CARDS))
        self._full_board = self.deck.draw_many(TOTAL_COMMUNITY_CARDS)

    def _post_blinds(self) -> None:
        """Post small and big blinds, each capped at the poster's stack."""
        sb_seat, bb_seat = get_blind_positions(self.button)

        sb_amount = self._put_in(self.players[sb_seat], self.config.small_blind)
        self.players[sb_seat].last_action = f"SB ${sb_amount}"

        bb_amount = self._put_in(self.players[bb_seat], self.config.big_blind)
        self.players[bb_seat].last_action = f"BB ${bb_amount}"

        logger.debug(f"Blinds posted: SB={sb_amount} BB={bb_amount}")

    def _setup_betting_round(self) -> None:
        """Reset acted flags and hand the turn to the button."""
        for player in self.players:
            player.has_acted = False
        self.current_player_index = self.button

    def _put_in(self, player: Player, amount: int) -> int:
        """Move chips from a player into the pot and raise the table bet."""
        actual = player.bet(amount)
        self.pot += actual
        self.current_bet = max(self.current_bet, player.current_bet)
        return actual

    def perform_action(self, action: PlayerAction, seat: Optional[int] = None) -> ActionResult:
        """
        Process an action for the seat to act.

        Illegal requests (no hand running, showdown, run-out in progress, wrong
        seat, illegal check or raise) are refused with no state change.

        Args:
            action: The action to take
            seat: Seat submitting the action; if given it must be the seat to act

        Returns:
            ActionResult indicating success/failure and details
        """
        if not self.is_hand_running() or self.street == Street.SHOWDOWN:
            return self._reject("No hand in progress")

        if self.runout_pending:
            return self._reject("Board is being revealed")

        if seat is not None and seat != self.current_player_index:
            return self._reject("Not your turn")

        player = self.players[self.current_player_index]
        result = self._execute_action(player, action)

        if result.success:
            player.has_acted = True
            self._log_action(action.type.value, {
                "player": player.player_id,
                "amount": result.amount,
            })
            if len(self.players_in_hand()) == 1:
                self._go_to_showdown()
            else:
                self._after_betting_change()
        else:
            logger.debug(f"Rejected {action} from seat {self.current_player_index}: {result.message}")

        return result

    def _execute_action(self, player: Player, action: PlayerAction) -> ActionResult:
        """Validate and apply the action for the player."""
        chips_to_call = max(0, self.current_bet - player.current_bet)

        if action.type == ActionType.FOLD:
            player.fold()
            return ActionResult(True, "Folded", ActionType.FOLD, 0)

        elif action.type == ActionType.CHECK:
            if chips_to_call > 0:
                return ActionResult(False, f"Cannot check, must call ${chips_to_call}")
            player.last_action = "CHECK"
            return ActionResult(True, "Checked", ActionType.CHECK, 0)

        elif action.type == ActionType.CALL:
            # With nothing owed this behaves as a check
            actual = self._put_in(player, chips_to_call)
            player.last_action = f"CALL ${actual}" if actual else "CHECK"
            return ActionResult(True, f"Called ${actual}", ActionType.CALL, actual)

        elif action.type == ActionType.RAISE:
            if not is_valid_raise(action.amount, chips_to_call, player.chips):
                return ActionResult(
                    False,
                    f"Raise must add at least ${min_raise_amount(chips_to_call)} "
                    f"(to call: ${chips_to_call})"
                )
            actual = self._put_in(player, action.amount)
            if player.is_all_in:
                player.last_action = f"ALL-IN ${player.current_bet}"
            else:
                player.last_action = f"RAISE ${player.current_bet}"
            return ActionResult(True, f"Raised to ${player.current_bet}", ActionType.RAISE, actual)

        elif action.type == ActionType.ALL_IN:
            if player.chips == 0:
                return ActionResult(False, "Already all-in")
            actual = self._put_in(player, player.chips)
            player.last_action = f"ALL-IN ${player.current_bet}"
            return ActionResult(True, f"All-in for ${player.current_bet}", ActionType.ALL_IN, actual)

        return ActionResult(False, f"Unknown action: {action.type}")

    def _reject(self, message: str) -> ActionResult:
        return ActionResult(False, message)

    def _after_betting_change(self, pass_turn: bool = True) -> None:
        """Decide what follows a change in bets: run-out, next street, or next turn."""
        in_hand = self.players_in_hand()
        if len(in_hand) == NUM_SEATS and all(p.is_all_in for p in in_hand):
            self._start_runout()
            return

        if self._is_betting_round_over():
            self._end_betting_round()
        elif pass_turn:
            self.current_player_index = other_seat(self.current_player_index)

    def _is_betting_round_over(self) -> bool:
        """
        Check if the current betting round is complete.

        The round is over when at most one player can still bet and owes
        nothing, or when every player who can bet has acted and all their
        bets are equal.
        """
        bettors = [p for p in self.players if p.can_bet]

        if not bettors:
            return True
        if len(bettors) == 1:
            return bettors[0].current_bet >= self.current_bet

        if not all(p.has_acted for p in bettors):
            return False
        return len({p.current_bet for p in bettors}) == 1

    def _end_betting_round(self) -> None:
        """End the current betting round and move the hand forward."""
        self._return_uncalled_bet()

        if sum(1 for p in self.players if p.can_bet) < NUM_SEATS:
            self._start_runout()
            return

        if self.street == Street.RIVER:
            self._go_to_showdown()
            return

        self._advance_street()

    def _return_uncalled_bet(self) -> None:
        """Give back the part of a bet an all-in opponent could not match."""
        high, low = sorted(self.players, key=lambda p: p.current_bet, reverse=True)
        excess = high.current_bet - low.current_bet
        if excess <= 0 or not low.is_all_in or low.has_folded:
            return

        high.current_bet -= excess
        high.chips += excess
        high.is_all_in = False
        self.pot -= excess
        self.current_bet = high.current_bet
        logger.debug(f"Returned uncalled ${excess} to {high.name}")

    def _advance_street(self) -> None:
        """Reveal the next street and open a fresh betting round."""
        self.street = NEXT_STREET[self.street]
        self.board = self._full_board[:BOARD_SIZE_BY_STREET[self.street]]

        for player in self.players:
            player.reset_for_new_street()
        self.current_bet = 0
        self._setup_betting_round()

        logger.debug(f"{self.street.name}: {' '.join(str(c) for c in self.board)}")
        self._log_action(self.street.name, {"board": [str(c) for c in self.board]})

    def _start_runout(self) -> None:
        """Stop betting and reveal both hands; the board follows step by step."""
        self._return_uncalled_bet()
        self.hole_cards_revealed = True

        if len(self.board) == TOTAL_COMMUNITY_CARDS:
            self._go_to_showdown()
            return

        self.runout_pending = True
        logger.debug(f"Run-out from {self.street.name}")
        self._log_action("RUNOUT", {"street": self.street.name})

    def reveal_next_street(self) -> bool:
        """
        Perform one step of a pending all-in run-out.

        Each call reveals the next street; once the board is complete the
        following call goes to showdown.

        Returns:
            True if a step was taken, False if no run-out is pending
        """
        if not self.runout_pending or self.hand_ended:
            return False

        if self.street == Street.RIVER:
            self._go_to_showdown()
        else:
            self._advance_street()
        return True

    def run_out_board(self) -> None:
        """Take every remaining run-out step at once."""
        while self.reveal_next_street():
            pass

    def _go_to_showdown(self) -> None:
        """Settle the hand: score the remaining hands and award the pot."""
        in_hand = self.players_in_hand()
        if len(self.board) < TOTAL_COMMUNITY_CARDS and len(in_hand) > 1:
            return

        self.street = Street.SHOWDOWN
        self.runout_pending = False
        self.hole_cards_revealed = True
        self.is_showdown = True
        self.hand_ended = True

        result = self._determine_result()
        for player, amount in zip(self.players, result.payouts):
            player.chips += amount
            player.is_all_in = player.chips == 0
        self.pot = 0
        self.showdown_result = result

        logger.info(f"Hand #{self.hand_number}: {result.text}")
        self._log_action("SHOWDOWN", result.to_dict())

    def _determine_result(self) -> ShowdownResult:
        """Work out winners and payouts for the current pot."""
        labels = [self.current_best_hand_label(seat) for seat in range(NUM_SEATS)]
        payouts = [0] * NUM_SEATS
        in_hand = [seat for seat, p in enumerate(self.players) if p.is_in_hand]

        if len(in_hand) == 1:
            winner = in_hand[0]
            payouts[winner] = self.pot
            return ShowdownResult(
                outcome=None,
                winners=[winner],
                payouts=payouts,
                labels=labels,
                scores=[None] * NUM_SEATS,
                text=f"{self.players[winner].name} wins "
                     f"({self.players[other_seat(winner)].name} folded)",
            )

        scores = [evaluate_best5(p.hole_cards + self.board) for p in self.players]
        if scores[0] > scores[1]:
            outcome, winners = HeadsUpResult.A_WINS, [0]
        elif scores[1] > scores[0]:
            outcome, winners = HeadsUpResult.B_WINS, [1]
        else:
            outcome, winners = HeadsUpResult.SPLIT, [0, 1]

        if outcome == HeadsUpResult.SPLIT:
            share, remainder = divmod(self.pot, NUM_SEATS)
            payouts = [share, share]
            # Odd chip goes to the first seat clockwise from the button
            payouts[other_seat(self.button)] += remainder
            return ShowdownResult(
                outcome=outcome,
                winners=winners,
                payouts=payouts,
                labels=labels,
                scores=scores,
                text="Split pot",
            )

        winner = winners[0]
        payouts[winner] = self.pot
        return ShowdownResult(
            outcome=outcome,
            winners=winners,
            payouts=payouts,
            labels=labels,
            scores=scores,
            winning_cards=list(scores[winner].cards),
            text=f"{self.players[winner].name} wins",
        )

    def current_best_hand_label(self, seat: int) -> str:
        """Best-hand label for a seat with the board revealed so far."""
        return best_hand_label(self.players[seat].hole_cards + self.board)

    def is_highlighted_card(self, card: Card) -> bool:
        """Whether a card belongs to the winning five at showdown."""
        if self.showdown_result is None:
            return False
        return card in self.showdown_result.winning_cards

    def visible_hole_cards(self, seat: int, viewer: Optional[int] = None) -> List[Card]:
        """Hole cards of a seat as the viewer may see them (empty if hidden)."""
        if seat == viewer or self.hole_cards_revealed:
            return list(self.players[seat].hole_cards)
        return []

    def get_legal_actions(self) -> List[Dict[str, Any]]:
        """
        Get legal actions for the seat to act.

        Returns:
            List of action dicts with type and constraints
        """
        player = self.current_player
        if player is None or not player.can_bet:
            return []

        actions = []
        chips_to_call = self.call_amount

        actions.append({"type": ActionType.FOLD.value})

        if chips_to_call == 0:
            actions.append({"type": ActionType.CHECK.value})
        else:
            actions.append({
                "type": ActionType.CALL.value,
                "amount": min(chips_to_call, player.chips),
            })

        if player.chips > chips_to_call:
            actions.append({
                "type": ActionType.RAISE.value,
                "min": min_raise_amount(chips_to_call),
                "max": player.chips,
            })

        actions.append({
            "type": ActionType.ALL_IN.value,
            "amount": player.chips,
        })

        return actions

    def get_state(self, for_seat: Optional[int] = None) -> Dict[str, Any]:
        """
        Get the published table state.

        Args:
            for_seat: Seat whose hole cards are always visible in the snapshot
        """
        players = []
        for seat, player in enumerate(self.players):
            info = player.to_dict(hide_cards=True)
            info["seat"] = seat
            info["cards"] = [c.to_dict() for c in self.visible_hole_cards(seat, for_seat)]
            info["best_hand"] = (
                self.current_best_hand_label(seat) if info["cards"] else None
            )
            players.append(info)

        current = self.current_player
        return {
            "hand_number": self.hand_number,
            "street": self.street.name,
            "pot": self.pot,
            "current_bet": self.current_bet,
            "board": [c.to_dict() for c in self.board],
            "button": self.button,
            "current_seat": self.current_player_index if current else None,
            "call_amount": self.call_amount if current else 0,
            "players": players,
            "hand_running": self.is_hand_running(),
            "runout_pending": self.runout_pending,
            "is_showdown": self.is_showdown,
            "hole_cards_revealed": self.hole_cards_revealed,
            "result": self.showdown_result.to_dict() if self.showdown_result else None,
        }

    def _log_action(self, action: str, details: Dict[str, Any]) -> None:
        """Log an action to hand history."""
        self.hand_history.append({
            "action": action,
            "street": self.street.name,
            **details
        })

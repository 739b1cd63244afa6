"""
Pytest configuration and shared fixtures for heads-up tests.
"""

import random

import pytest
from headsup.core.card import Card, Deck, Rank, Suit, parse_cards
from headsup.core.game import HeadsUpGame
from headsup.core.rules import PlayerAction, TableConfig


@pytest.fixture
def deck():
    """Create a fresh shuffled deck."""
    return Deck(shuffle=True, rng=random.Random(42))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh deck in canonical order."""
    return Deck()


@pytest.fixture
def game():
    """Create a heads-up game with default blinds (10/20) and 1000 stacks."""
    return HeadsUpGame(TableConfig(), rng=random.Random(7))


@pytest.fixture
def carry_game():
    """Create a game whose stacks carry over between hands."""
    return HeadsUpGame(TableConfig(carry_stacks=True), rng=random.Random(11))


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]


def rig_hand(game, hole0, hole1, board):
    """Replace the dealt cards of a freshly started hand."""
    game.players[0].hole_cards = parse_cards(hole0)
    game.players[1].hole_cards = parse_cards(hole1)
    game._full_board = parse_cards(board)


def play_passively(game):
    """Check or call (and reveal run-outs) until the hand is over."""
    while game.is_hand_running():
        if game.runout_pending:
            game.reveal_next_street()
        elif game.call_amount:
            game.perform_action(PlayerAction.call())
        else:
            game.perform_action(PlayerAction.check())


@pytest.fixture
def rig():
    """Helper to replace the dealt cards of a started hand."""
    return rig_hand


@pytest.fixture
def play_out():
    """Helper to check or call a hand through to showdown."""
    return play_passively

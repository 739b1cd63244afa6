"""
Heads-up Core - Pure Python Hold'em Game Logic

This module contains all game logic without any network dependencies.
"""

from headsup.core.card import Card, Deck, Rank, Suit
from headsup.core.player import Player
from headsup.core.hand import (
    HandCategory, HandScore, HeadsUpResult, evaluate_best5, compare_heads_up,
)
from headsup.core.game import HeadsUpGame, ActionResult, ShowdownResult
from headsup.core.rules import Street, ActionType, PlayerAction, TableConfig

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "Player",
    "HandCategory",
    "HandScore",
    "HeadsUpResult",
    "evaluate_best5",
    "compare_heads_up",
    "HeadsUpGame",
    "ActionResult",
    "ShowdownResult",
    "Street",
    "ActionType",
    "PlayerAction",
    "TableConfig",
]

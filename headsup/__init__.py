"""
Heads-Up Hold'em - two-player Texas Hold'em core

A heads-up Texas Hold'em table with:
- Pure Python hand evaluator and betting state machine
- A replaceable scripted opponent behind an agent interface
- A paced table controller and a small FastAPI adapter

Usage:
    from headsup.core import Card, Deck, HeadsUpGame, PlayerAction
    from headsup.agents import BaseAgent, ScriptedAgent
"""

__version__ = "0.1.0"

from headsup.core.card import Card, Deck
from headsup.core.player import Player
from headsup.core.game import HeadsUpGame
from headsup.core.hand import HandCategory, HandScore, evaluate_best5, compare_heads_up
from headsup.core.rules import PlayerAction, TableConfig

__all__ = [
    "Card",
    "Deck",
    "Player",
    "HeadsUpGame",
    "HandCategory",
    "HandScore",
    "evaluate_best5",
    "compare_heads_up",
    "PlayerAction",
    "TableConfig",
    "__version__",
]

"""
Heads-up Agents - opponent policies

This module provides the base agent interface and the agents that can take
the non-human seat.
"""

from headsup.agents.base import BaseAgent
from headsup.agents.scripted_agent import ScriptedAgent
from headsup.agents.random_agent import RandomAgent, CallAgent

__all__ = ["BaseAgent", "ScriptedAgent", "RandomAgent", "CallAgent"]

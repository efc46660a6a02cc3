"""
Session Module - Manages in-memory game sessions.

A session represents one play-through of a game:
- Created when a game starts
- Holds the game state, the execution queue and the game log
- Destroyed when the game ends

Sessions are EPHEMERAL: nothing is persisted.
"""

from .game_log import GameLog, LogEntry
from .manager import GameSession, SessionManager, SessionState

__all__ = [
    "GameLog",
    "LogEntry",
    "GameSession",
    "SessionManager",
    "SessionState",
]

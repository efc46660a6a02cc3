"""
Game Log - The user-visible narration of a game.

A GameLog is callable, so it can be handed to the engine anywhere a
log(message) sink is expected. Only the most recent entries are kept.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import time


DEFAULT_LOG_LIMIT = 100


@dataclass(frozen=True)
class LogEntry:
    message: str
    timestamp: float


@dataclass
class GameLog:
    limit: int = DEFAULT_LOG_LIMIT
    entries: list[LogEntry] = field(default_factory=list)

    def __call__(self, message: str) -> None:
        self.add(message)

    def add(self, message: str) -> LogEntry:
        entry = LogEntry(message=message, timestamp=time.time())
        self.entries.append(entry)
        if len(self.entries) > self.limit:
            del self.entries[:len(self.entries) - self.limit]
        return entry

    def extend(self, messages: list[str]) -> None:
        for message in messages:
            self.add(message)

    def messages(self) -> list[str]:
        return [entry.message for entry in self.entries]

    def last(self) -> str | None:
        return self.entries[-1].message if self.entries else None

    def clear(self) -> None:
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)

"""Log message store and the filtering rules of the console panel."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Iterator


class LogLevel(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5


@dataclass(frozen=True)
class LogMessage:
    level: LogLevel
    text: str


class MessageLog:
    """An ordered collection of log messages."""

    def __init__(self) -> None:
        self._messages: list[LogMessage] = []

    def add(self, level: LogLevel, text: str) -> LogMessage:
        message = LogMessage(LogLevel(level), text)
        self._messages.append(message)
        return message

    def clear(self) -> None:
        self._messages.clear()

    @property
    def messages(self) -> list[LogMessage]:
        return list(self._messages)

    def __iter__(self) -> Iterator[LogMessage]:
        return iter(list(self._messages))

    def __len__(self) -> int:
        return len(self._messages)


@dataclass
class ConsoleView:
    """Which levels are shown and the text filter applied to messages.

    The filter is a comma-separated list of terms matched case-insensitively as
    substrings; a term starting with ``-`` excludes matching messages. If there is
    at least one including term, a message must match one of them to pass.
    """

    shown: set[LogLevel] = field(default_factory=lambda: set(LogLevel))
    filter_text: str = ""
    auto_scroll: bool = True

    def _terms(self) -> list[str]:
        return [term.strip() for term in self.filter_text.split(",") if term.strip()]

    def passes_filter(self, text: str) -> bool:
        terms = self._terms()
        if not terms:
            return True
        lowered = text.lower()
        includes = 0
        for term in terms:
            if term.startswith("-"):
                excluded = term[1:]
                if excluded and excluded.lower() in lowered:
                    return False
            else:
                includes += 1
                if term.lower() in lowered:
                    return True
        return includes == 0

    def visible(self, messages: Iterable[LogMessage]) -> list[LogMessage]:
        """Messages whose level is shown and whose text passes the filter, in order."""
        return [m for m in messages if m.level in self.shown and self.passes_filter(m.text)]
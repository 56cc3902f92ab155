from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from .model import Statement

logger = logging.getLogger(__name__)


class NoActiveBlockError(RuntimeError):
    """Output was attempted while no block was entered."""


class ErrorSink(Protocol):
    def __call__(
        self,
        statement: Statement | None,
        msg_id: str,
        msg_args: list[Any] | None,
        error_context: Any,
    ) -> None: ...


@dataclass
class LoggedMessage:
    statement: Statement | None
    msg_id: str
    msg_args: list[Any] | None
    error_context: Any = None

    def describe(self) -> str:
        where = ""
        if self.statement is not None:
            where = f" at line {self.statement.line_number} ({self.statement.name})"
        args = f" {self.msg_args!r}" if self.msg_args else ""
        return f"{self.msg_id}{where}{args}"


class LoggingErrorSink:
    """Default sink: reports every event through a logger."""

    def __init__(self, log: logging.Logger | None = None, level: int = logging.WARNING) -> None:
        self.log = log or logger
        self.level = level

    def __call__(self, statement, msg_id, msg_args, error_context) -> None:
        self.log.log(self.level, "%s", LoggedMessage(statement, msg_id, msg_args).describe())


@dataclass
class CollectingErrorSink:
    """Keeps every event it receives, in order."""
    messages: list[LoggedMessage] = field(default_factory=list)

    def __call__(self, statement, msg_id, msg_args, error_context) -> None:
        self.messages.append(LoggedMessage(statement, msg_id, msg_args, error_context))

    def msg_ids(self) -> list[str]:
        return [m.msg_id for m in self.messages]

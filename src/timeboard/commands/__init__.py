"""Command language: typed commands, the line parser and the executor."""

from __future__ import annotations

from .executor import CommandExecutor, CommandResult, describe_event
from .models import CalendarProperty, Command, CommandKind
from .parser import CommandParser

__all__ = [
    "CalendarProperty",
    "Command",
    "CommandExecutor",
    "CommandKind",
    "CommandParser",
    "CommandResult",
    "describe_event",
]

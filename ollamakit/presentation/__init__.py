"""Presentation layer: CLI commands, interactive sessions, formatters and progress bars."""

from .commands import (
    Command,
    CopyModelCommand,
    DeleteModelCommand,
    EmbeddingsCommand,
    ListModelsCommand,
    ListRunningModelsCommand,
    PullModelCommand,
    PushModelCommand,
    ShowModelCommand,
)
from .errors import CLIError, InvalidArgument, MissingArgument, UnknownCommand
from .progress import ProgressTracker
from .sessions import ChatSession, GenerateSession

__all__ = [
    "CLIError",
    "ChatSession",
    "Command",
    "CopyModelCommand",
    "DeleteModelCommand",
    "EmbeddingsCommand",
    "GenerateSession",
    "InvalidArgument",
    "ListModelsCommand",
    "ListRunningModelsCommand",
    "MissingArgument",
    "ProgressTracker",
    "PullModelCommand",
    "PushModelCommand",
    "ShowModelCommand",
    "UnknownCommand",
]

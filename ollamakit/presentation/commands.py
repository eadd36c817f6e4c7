"""
CLI commands - one class per subcommand, each driving the OllamaAPI protocol.
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Callable, Optional, TextIO

from ..domain.interfaces import OllamaAPI
from ..domain.models import OllamaModelName, PullOptions, PushOptions
from ..utils import truncate_text
from .errors import InvalidArgument, MissingArgument
from .formatters import format_model_entry, format_model_information, format_running_model
from .progress import ProgressTracker
from .terminal import TerminalStyle, colored


def parse_model_argument(value: Optional[str], label: str = "model") -> OllamaModelName:
    """Parse a model name from the command line or raise a CLIError."""
    if not value:
        raise MissingArgument(f"{label.capitalize()} name required")
    model = OllamaModelName.parse(value)
    if model is None:
        raise InvalidArgument(f"Invalid {label} name format")
    return model


class Command:
    """Base class: holds the client and the output stream."""

    def __init__(self, client: OllamaAPI, out: Optional[TextIO] = None, logger: Optional[logging.Logger] = None):
        self._client = client
        self._out = out or sys.stdout
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, args: argparse.Namespace) -> None:
        raise NotImplementedError

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def _success(self, text: str) -> None:
        self._print(f"\n{colored(f'✨ {text}', TerminalStyle.GREEN)}")


class ListModelsCommand(Command):
    def execute(self, args: argparse.Namespace) -> None:
        self._print("Fetching available models...")
        models = sorted(self._client.list_models(), key=lambda m: m.name.lower())
        self._print("\nAvailable Models:")
        self._print("----------------")
        for model in models:
            self._print(format_model_entry(model))


class ListRunningModelsCommand(Command):
    def execute(self, args: argparse.Namespace) -> None:
        self._print("Fetching running models...")
        models = self._client.list_running_models()
        if not models:
            self._print("\nNo models currently running.")
            return
        self._print("\nRunning Models:")
        self._print("--------------")
        for model in models:
            self._print(format_running_model(model))


class ShowModelCommand(Command):
    def execute(self, args: argparse.Namespace) -> None:
        model = parse_model_argument(args.model)
        self._print(f"Fetching details for model: {model.full_name}")
        info = self._client.show_model(model)
        self._print()
        self._print(format_model_information(info))


class PullModelCommand(Command):
    """Pull a model, drawing per-layer progress bars."""

    def __init__(self, client: OllamaAPI, out: Optional[TextIO] = None, logger: Optional[logging.Logger] = None,
                 tracker: Optional[ProgressTracker] = None):
        super().__init__(client, out, logger)
        self._tracker = tracker or ProgressTracker(out=self._out)

    def execute(self, args: argparse.Namespace) -> None:
        model = parse_model_argument(args.model)
        self._print(f"Pulling model: {model.full_name}")
        self._print("This may take a while depending on the model size and your internet connection...")
        options = PullOptions(allow_insecure=True) if getattr(args, "insecure", False) else None
        progress = self._client.pull_model(model, options)
        self._tracker.track(progress)
        self._success("Model pull completed successfully!")


class PushModelCommand(PullModelCommand):
    def execute(self, args: argparse.Namespace) -> None:
        model = parse_model_argument(args.model)
        if not model.namespace:
            raise InvalidArgument("Model name must include namespace for pushing (e.g. user/model)")
        self._print(f"Pushing model: {model.full_name}")
        options = PushOptions(allow_insecure=True) if getattr(args, "insecure", False) else None
        progress = self._client.push_model(model, options)
        self._tracker.track(progress)
        self._success("Model push completed successfully!")


class CopyModelCommand(Command):
    def execute(self, args: argparse.Namespace) -> None:
        if not args.source or not args.destination:
            raise MissingArgument("Source and destination model names required")
        source = parse_model_argument(args.source, "source model")
        destination = parse_model_argument(args.destination, "destination model")
        self._print(f"Copying model from {source.full_name} to {destination.full_name}...")
        self._client.copy_model(source, destination)
        self._success("Model copied successfully!")


class DeleteModelCommand(Command):
    """Delete a model after an interactive y/N confirmation (skipped with --yes)."""

    def __init__(self, client: OllamaAPI, out: Optional[TextIO] = None, logger: Optional[logging.Logger] = None,
                 input_fn: Callable[[str], str] = input):
        super().__init__(client, out, logger)
        self._input = input_fn

    def execute(self, args: argparse.Namespace) -> None:
        model = parse_model_argument(args.model)
        if not getattr(args, "yes", False):
            self._print(f"Are you sure you want to delete model: {model.full_name}? (y/N)")
            try:
                response = self._input("").strip().lower()
            except EOFError:
                response = ""
            if response not in ("y", "yes"):
                self._print("Operation cancelled.")
                return
        self._print("Deleting model...")
        self._client.delete_model(model)
        self._success("Model deleted successfully!")


class EmbeddingsCommand(Command):
    """Embed one or more texts and print a short summary of each vector."""

    preview_size = 5

    def execute(self, args: argparse.Namespace) -> None:
        model = parse_model_argument(args.model)
        texts = list(args.text or [])
        if not texts:
            raise MissingArgument("At least one input text required")
        result = self._client.generate_embeddings(texts if len(texts) > 1 else texts[0], model)
        self._print(f"Embeddings from {result.model}:")
        for index, (text, vector) in enumerate(zip(texts, result.embeddings), 1):
            preview = ", ".join(f"{v:.4f}" for v in vector[: self.preview_size])
            suffix = ", ..." if len(vector) > self.preview_size else ""
            self._print(f"  {index}. \"{truncate_text(text, 40)}\" dims={len(vector)} [{preview}{suffix}]")

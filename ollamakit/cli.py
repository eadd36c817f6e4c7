#!/usr/bin/env python3
"""
Main CLI application for ollamakit.
"""

import argparse
import logging
import os
import re
import sys
from typing import Callable, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from . import __version__
from .domain.errors import OllamaError
from .domain.interfaces import OllamaAPI
from .infrastructure.config import reload_settings
from .infrastructure.ollama import OllamaClient
from .presentation import (
    ChatSession,
    CLIError,
    CopyModelCommand,
    DeleteModelCommand,
    EmbeddingsCommand,
    GenerateSession,
    InvalidArgument,
    ListModelsCommand,
    ListRunningModelsCommand,
    PullModelCommand,
    PushModelCommand,
    ShowModelCommand,
    UnknownCommand,
)
from .presentation.formatters import describe_error
from .presentation.terminal import TerminalStyle, colored
from .utils import setup_logging

COMMANDS: Dict[str, Callable[[OllamaAPI], object]] = {
    "list": ListModelsCommand,
    "ps": ListRunningModelsCommand,
    "show": ShowModelCommand,
    "pull": PullModelCommand,
    "push": PushModelCommand,
    "copy": CopyModelCommand,
    "delete": DeleteModelCommand,
    "chat": ChatSession,
    "generate": GenerateSession,
    "embeddings": EmbeddingsCommand,
}

_INVALID_CHOICE = re.compile(r"invalid choice: '([^']*)'")


class CLIArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises CLIError instead of exiting with status 2."""

    def error(self, message):
        match = _INVALID_CHOICE.search(message)
        if match:
            raise UnknownCommand(match.group(1))
        raise InvalidArgument(message)


def build_parser() -> argparse.ArgumentParser:
    parser = CLIArgumentParser(
        prog="ollamakit",
        description="Command-line client for a local Ollama server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list
  %(prog)s pull llama2
  %(prog)s show llama2
  %(prog)s copy llama2 my-llama2
  %(prog)s delete my-llama2
  %(prog)s ps
  %(prog)s chat llama2
  %(prog)s --host 192.168.1.10 generate mistral:7b
  %(prog)s embeddings all-minilm "first text" "second text"
        """
    )

    parser.add_argument('--host',
                       help='Ollama server: local | host[:port] | full URL (or set OLLAMA_HOST)')
    parser.add_argument('--timeout',
                       type=float,
                       help='Seconds a single network attempt may take (default: 30)')
    parser.add_argument('--max-retries',
                       type=int,
                       help='Additional attempts after a network failure (default: 3)')
    parser.add_argument('--retry-delay',
                       type=float,
                       help='Seconds to wait between attempts (default: 1)')
    parser.add_argument('--keep-alive',
                       help="How long the server keeps the model loaded, e.g. 300, '5m', '1h' (default: 300s)")
    parser.add_argument('--insecure',
                       action='store_true',
                       help='Allow insecure registries and skip TLS verification')
    parser.add_argument('--log-level',
                       default=os.getenv('LOG_LEVEL', 'WARNING'),
                       choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                       help='Set logging level')
    parser.add_argument('--version',
                       action='version',
                       version=f'%(prog)s {__version__}')

    sub = parser.add_subparsers(dest='command', metavar='<command>')

    sub.add_parser('list', help='List all available models')
    sub.add_parser('ps', help='List currently running models')

    p = sub.add_parser('show', help='Show detailed information about a model')
    p.add_argument('model', nargs='?')

    p = sub.add_parser('pull', help='Pull a model from the registry')
    p.add_argument('model', nargs='?')

    p = sub.add_parser('push', help='Push a namespaced model to the registry')
    p.add_argument('model', nargs='?')

    p = sub.add_parser('copy', help='Copy a model to a new name')
    p.add_argument('source', nargs='?')
    p.add_argument('destination', nargs='?')

    p = sub.add_parser('delete', help='Delete a model')
    p.add_argument('model', nargs='?')
    p.add_argument('--yes', '-y', action='store_true', help='Skip the confirmation prompt')

    p = sub.add_parser('chat', help='Start an interactive chat session')
    p.add_argument('model', nargs='?')

    p = sub.add_parser('generate', help='Start an interactive text generation session')
    p.add_argument('model', nargs='?')

    p = sub.add_parser('embeddings', help='Print embeddings for one or more texts')
    p.add_argument('model', nargs='?')
    p.add_argument('text', nargs='*')

    return parser


def settings_overrides(args: argparse.Namespace) -> Dict[str, object]:
    """Map global flags onto settings fields; unset flags keep env/default values."""
    return {
        "host": args.host,
        "timeout": args.timeout,
        "max_retries": args.max_retries,
        "retry_delay": args.retry_delay,
        "default_keep_alive": args.keep_alive,
        "allow_insecure": True if args.insecure else None,
    }


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the ollamakit CLI."""
    load_dotenv()
    parser = build_parser()
    logger = logging.getLogger(__name__)
    args: Optional[argparse.Namespace] = None

    try:
        args = parser.parse_args(argv)
        setup_logging(args.log_level)

        if not args.command:
            parser.print_usage()
            sys.exit(1)

        try:
            settings = reload_settings(**settings_overrides(args))
        except ValidationError as e:
            raise InvalidArgument(str(e)) from e

        with OllamaClient(settings) as client:
            logger.debug(f"Running '{args.command}' against {settings.host}")
            COMMANDS[args.command](client).execute(args)

    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
        sys.exit(0)
    except CLIError as e:
        print(colored(f"Error: {e}", TerminalStyle.RED))
        parser.print_usage()
        sys.exit(1)
    except OllamaError as e:
        logger.error(f"Command failed: {e}")
        print(colored(f"Error: {describe_error(e, getattr(args, 'model', None))}", TerminalStyle.RED))
        sys.exit(1)


if __name__ == "__main__":
    main()

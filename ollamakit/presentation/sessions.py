"""
Interactive chat and generation sessions.

Both sessions read prompts line by line, stream tokens to the terminal as they
arrive, and understand `exit`/`quit`, `clear` and `/system <message>`.
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Callable, List, Optional, TextIO

from ..domain.errors import OllamaError
from ..domain.interfaces import OllamaAPI
from ..domain.models import ChatMessage, GenerationOptions, MessageRole, OllamaModelName
from .commands import parse_model_argument
from .formatters import describe_error
from .terminal import TerminalStyle as S, clear_screen, timestamp

SYSTEM_COMMAND = "/system "
SEPARATOR = "─" * 44


class InteractiveSession:
    """Shared prompt loop; subclasses implement `_respond` and `_reset`."""

    title = "Session"
    prompt_label = "You"
    reply_label = "Assistant"
    clear_hint = "to start over"
    goodbye = "Goodbye! Session ended."

    def __init__(
        self,
        client: OllamaAPI,
        out: Optional[TextIO] = None,
        input_fn: Callable[[str], str] = input,
        logger: Optional[logging.Logger] = None,
    ):
        self._client = client
        self._out = out or sys.stdout
        self._input = input_fn
        self._logger = logger or logging.getLogger(__name__)
        self.model: Optional[OllamaModelName] = None

    def execute(self, args: argparse.Namespace) -> None:
        self.model = parse_model_argument(args.model)
        self.run(self.model)

    def run(self, model: OllamaModelName) -> None:
        self.model = model
        clear_screen(self._out)
        self._print_header()

        while True:
            self._write(f"{timestamp()} {S.NEON_GREEN}{self.prompt_label}:{S.RESET} ")
            try:
                user_input = self._input("").strip()
            except EOFError:
                break

            command = user_input.lower()
            if command in ("exit", "quit"):
                self._print(f"\n{S.NEON_PINK}{self.goodbye}{S.RESET}")
                return
            if command == "clear":
                clear_screen(self._out)
                self._print_header()
                self._reset()
                continue
            if not user_input:
                continue
            if user_input.startswith(SYSTEM_COMMAND):
                self._set_system(user_input[len(SYSTEM_COMMAND):])
                continue

            self._write(f"{timestamp()} {S.NEON_BLUE}{self.reply_label}:{S.RESET} ")
            try:
                self._respond(user_input)
                self._print(f"\n{S.NEON_BLUE}{SEPARATOR}{S.RESET}")
            except OllamaError as e:
                self._logger.error(f"{self.title} error: {e}")
                self._print(f"\n{S.NEON_PINK}{describe_error(e, self.model.full_name)}{S.RESET}")

    def _respond(self, user_input: str) -> None:
        raise NotImplementedError

    def _reset(self) -> None:
        pass

    def _set_system(self, message: str) -> None:
        raise NotImplementedError

    def _print_header(self) -> None:
        border = "═" * 40
        self._print(f"\n{S.BG_DARK}{S.NEON_BLUE}╔{border}╗{S.RESET}")
        self._print(f"{S.BG_DARK}{S.NEON_BLUE}║{S.NEON_PINK} {self.title}: {S.NEON_GREEN}{self.model.full_name}{S.NEON_BLUE} ║{S.RESET}")
        self._print(f"{S.BG_DARK}{S.NEON_BLUE}╚{border}╝{S.RESET}\n")
        self._print(f"{S.MUTED_PURPLE}Available Commands:")
        self._print(f"• Type '{S.NEON_YELLOW}exit{S.MUTED_PURPLE}' or '{S.NEON_YELLOW}quit{S.MUTED_PURPLE}' to end the session")
        self._print(f"• Type '{S.NEON_YELLOW}clear{S.MUTED_PURPLE}' {self.clear_hint}")
        self._print(f"• Type '{S.NEON_YELLOW}/system <message>{S.MUTED_PURPLE}' to set a system message{S.RESET}")
        self._print(f"{S.NEON_BLUE}{'═' * 47}{S.RESET}\n")

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()


class ChatSession(InteractiveSession):
    """Multi-turn chat; the reply is added to history once the stream reports done."""

    title = "ChatBot Interface"
    goodbye = "Goodbye! Chat session ended."
    clear_hint = "to start a new conversation"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.messages: List[ChatMessage] = []

    def _reset(self) -> None:
        self.messages.clear()

    def _set_system(self, message: str) -> None:
        self.messages = [m for m in self.messages if m.role != MessageRole.SYSTEM]
        self.messages.insert(0, ChatMessage(role=MessageRole.SYSTEM, content=message))
        self._print(f"\n{S.NEON_YELLOW}System message updated.{S.RESET}")

    def _respond(self, user_input: str) -> None:
        self.messages.append(ChatMessage(role=MessageRole.USER, content=user_input))
        parts: List[str] = []
        for response in self._client.chat(self.messages, self.model):
            if response.message.content:
                self._write(response.message.content)
                parts.append(response.message.content)
            if response.done:
                self.messages.append(ChatMessage(role=MessageRole.ASSISTANT, content="".join(parts)))


class GenerateSession(InteractiveSession):
    """Single-turn generation; `/system` sets the system prompt for later prompts."""

    title = "Text Generation"
    prompt_label = "Prompt"
    reply_label = "Generated"
    goodbye = "Goodbye! Generation session ended."
    clear_hint = "to clear the screen"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.system_prompt: Optional[str] = None

    def _set_system(self, message: str) -> None:
        self.system_prompt = message
        self._print(f"\n{S.NEON_YELLOW}System prompt updated.{S.RESET}")

    def _respond(self, user_input: str) -> None:
        options = GenerationOptions(system_prompt=self.system_prompt)
        for response in self._client.generate_text(user_input, self.model, options):
            if response.response:
                self._write(response.response)

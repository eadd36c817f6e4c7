"""
Terminal helpers: ANSI styles, width detection and screen control.
"""

from __future__ import annotations
import shutil
from datetime import datetime
from typing import Optional, TextIO


class TerminalStyle:
    """ANSI color codes and text styles."""
    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    DIM = "\x1b[2m"

    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    MAGENTA = "\x1b[35m"
    CYAN = "\x1b[36m"

    NEON_PINK = "\x1b[38;2;255;20;147m"
    NEON_BLUE = "\x1b[38;2;0;255;255m"
    NEON_GREEN = "\x1b[38;2;0;255;127m"
    NEON_YELLOW = "\x1b[38;2;255;215;0m"
    MUTED_PURPLE = "\x1b[38;2;147;112;219m"
    BG_DARK = "\x1b[48;2;25;25;35m"

    CLEAR_SCREEN = "\x1b[2J\x1b[H"
    LINE_UP_CLEAR = "\x1b[1A\x1b[K"


def terminal_width(fallback: int = 50) -> int:
    return shutil.get_terminal_size((fallback, 24)).columns


def colored(text: str, color: str) -> str:
    return f"{color}{text}{TerminalStyle.RESET}"


def timestamp(now: Optional[datetime] = None) -> str:
    """Dimmed `[HH:MM:SS]` prefix for interactive sessions."""
    now = now or datetime.now()
    return colored(f"[{now:%H:%M:%S}]", TerminalStyle.DIM)


def clear_screen(out: TextIO) -> None:
    out.write(TerminalStyle.CLEAR_SCREEN)
    out.flush()

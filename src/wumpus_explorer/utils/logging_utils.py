"""Console logging helpers for Wumpus Explorer.

Game events are reported with plain ``print`` calls, colour-coded by kind.
Set ``WUMPUS_NO_COLOR`` to drop the ANSI codes and ``WUMPUS_QUIET`` to
silence the output entirely (useful in tests and batch runs).
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"      # Ordinary game events
    RED = "\033[91m"       # Deaths and errors
    GREEN = "\033[92m"     # Victory, gold, kills
    CYAN = "\033[96m"      # Info/metadata

    BOLD = "\033[1m"
    RESET = "\033[0m"


def is_quiet() -> bool:
    return bool(os.getenv("WUMPUS_QUIET"))


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes unless WUMPUS_NO_COLOR is set."""
    if os.getenv("WUMPUS_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def _emit(message: str, color: Color, bold: bool = False) -> None:
    if is_quiet():
        return
    print(colored(message, color, bold=bold))


def log_event(message: str) -> None:
    """Log an ordinary game event (blue)."""
    _emit(f"{MARK_EVENT} {message}", Color.BLUE)


def log_error(message: str) -> None:
    """Log a death or an error (red)."""
    _emit(f"{MARK_ERROR} {message}", Color.RED, bold=True)


def log_success(message: str) -> None:
    """Log a success such as a kill or a win (green)."""
    _emit(f"{MARK_SUCCESS} {message}", Color.GREEN)


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    _emit(f"{MARK_INFO} {message}", Color.CYAN)


# Markers for event types (color-blind accessible)
MARK_EVENT = "[•]"
MARK_ERROR = "[!]"
MARK_SUCCESS = "[✓]"
MARK_INFO = "[i]"

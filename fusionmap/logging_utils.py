"""Logging utilities for fusionmap.

Provides color-coded console output so map loading progress, warnings and
failures are easy to tell apart in a terminal.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"      # Build steps (layers, sprite sheet)
    YELLOW = "\033[93m"    # Non-fatal warnings (factory table changes)
    RED = "\033[91m"       # Errors
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if FUSIONMAP_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("FUSIONMAP_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def is_verbose() -> bool:
    """Return True when progress logging was requested via FUSIONMAP_VERBOSE."""
    return os.getenv("FUSIONMAP_VERBOSE", "").lower() in ("1", "true", "yes")


# Markers for message types (color-blind accessible)
LOG_TAG_BUILD = "[•]"
LOG_TAG_WARNING = "[?]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"


def log_build(message: str) -> None:
    """Log a build step (blue). Only printed in verbose mode."""
    if is_verbose():
        print(colored(f"{LOG_TAG_BUILD} {message}", Color.BLUE))


def log_warning(message: str) -> None:
    """Log a non-fatal warning (yellow)."""
    print(colored(f"{LOG_TAG_WARNING} {message}", Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error (red)."""
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green). Only printed in verbose mode."""
    if is_verbose():
        print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan). Only printed in verbose mode."""
    if is_verbose():
        print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))

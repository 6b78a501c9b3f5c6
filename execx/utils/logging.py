"""
Logging and output utilities for execx.

This module provides colored console output for diagnostics and for
printing decorated exit errors.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

# Diagnostics go to stderr so they never mix with program output
console = Console(stderr=True)

# Global verbose mode flag
_verbose_mode = False

# Render decorated exit errors in extended form even when not verbose
_extended_mode = False


class Colors:
    RED = "red"
    YELLOW = "yellow"
    BLUE = "blue"


def set_verbose(enabled: bool) -> None:
    """Set verbose mode for logging output."""
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose() -> bool:
    """Check if verbose mode is enabled."""
    return _verbose_mode


def configure(settings) -> None:
    """Apply loaded Settings to the logging globals."""
    global _verbose_mode, _extended_mode
    _verbose_mode = settings.verbose
    _extended_mode = settings.extended


def log_info(message: str) -> None:
    """Log an info message (only shown in verbose mode)."""
    if _verbose_mode:
        console.print(f"[{Colors.BLUE}][INFO][/{Colors.BLUE}] {escape(message)}")


def log_warning(message: str) -> None:
    """Log a warning message (only shown in verbose mode)."""
    if _verbose_mode:
        console.print(f"[{Colors.YELLOW}][WARNING][/{Colors.YELLOW}] {escape(message)}")


def log_error(message: str) -> None:
    """Log an error message."""
    console.print(f"[{Colors.RED}][ERROR][/{Colors.RED}] {escape(message)}", soft_wrap=True)


def print_plain(message: str) -> None:
    """Print plain text without any prefix or markup, never wrapped."""
    console.print(message, markup=False, highlight=False, soft_wrap=True)


def log_exit_error(err: BaseException, extended: Optional[bool] = None) -> None:
    """Log an error, rendering decorated exit errors with their context.

    Args:
        err: Any exception. Decorated exit errors are rendered with the
            "+v" spec when ``extended`` is true and "v" otherwise; other
            exceptions are logged with ``str(err)``.
        extended: Force extended rendering on or off. Defaults to the
            current verbose mode, or the configured extended default.
    """
    from ..exit_error import DecoratedExitError

    if extended is None:
        extended = _verbose_mode or _extended_mode
    if not isinstance(err, DecoratedExitError):
        log_error(str(err))
        return
    rendered = format(err, "+v" if extended else "v")
    first, _, rest = rendered.partition("\n")
    log_error(first)
    if rest:
        print_plain(rest.rstrip("\n"))


def error_exit(message: str, exit_code: int = 1) -> None:
    """Log an error and exit."""
    log_error(message)
    raise SystemExit(exit_code)

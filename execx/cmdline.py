"""
Command line rendering for execx.
"""

from pathlib import PurePath
from typing import Sequence

from .process import Command


def _base_name(path: str) -> str:
    """Return the last element of path, ignoring trailing separators."""
    if not path:
        return "."
    name = PurePath(path).name
    if name:
        return name
    # Root, or a path made only of separators
    return path[0] if path.strip(path[0]) == "" else path


def cmdline(path: str, args: Sequence[str]) -> str:
    """Render path and args as an approximate command line.

    The result is the base name of path followed by ``args[1:]``,
    separated by spaces. Arguments are neither quoted nor escaped, so the
    output is not shell safe and is meant for logging and debugging only.
    """
    return " ".join([_base_name(path), *args[1:]])


def command_line(cmd: Command) -> str:
    """Render the command line of a Command. See cmdline()."""
    return cmdline(cmd.path, cmd.args)

"""
execx: richer exit errors for child processes.

Wrap a nonzero-exit error together with the command that produced it to
get the command line, working directory and environments back when the
error is formatted.
"""

from .cmdline import cmdline, command_line
from .config.settings import AUTHOR, VERSION
from .exit_error import DecoratedExitError, FormatMode, format_duration
from .process import Command, ExitError, ProcessState
from .wrap import wrap

__version__ = VERSION
__author__ = AUTHOR
__description__ = "Exit errors decorated with command line, workdir and environment"

__all__ = [
    "Command",
    "DecoratedExitError",
    "ExitError",
    "FormatMode",
    "ProcessState",
    "cmdline",
    "command_line",
    "format_duration",
    "wrap",
]

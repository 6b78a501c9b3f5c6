"""
Exit errors decorated with the context of the command that produced them.

A DecoratedExitError carries the original ExitError together with the
command line, working directory and environments in effect when the
command ran. Its message is the original message; the context shows up
only when the error is formatted:

    format(err, "v")    git fetch origin: exit status 128: fatal: ...
    format(err, "+v")   the same line, then workdir, CPU times and the
                        child environment
"""

import enum
import subprocess
from types import MappingProxyType
from typing import Mapping, Sequence, Tuple

from . import env
from .cmdline import cmdline
from .config.settings import DISPLAY_SPEC, EXTENDED_FLAG
from .process import ExitError


class FormatMode(enum.Enum):
    """Rendering modes for DecoratedExitError.render()."""

    BASIC = "basic"
    EXTENDED = "extended"


_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000


def _fraction(ns: int, unit: int) -> str:
    """Render ns in the given unit, keeping every nonzero digit."""
    whole, rem = divmod(ns, unit)
    if not rem:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{rem:0{digits}d}".rstrip("0")


def format_duration(seconds: float) -> str:
    """Format a duration in seconds compactly, e.g. 1.5s, 12ms or 1m2.5s.

    The value is rounded to whole nanoseconds before a unit is chosen.
    """
    ns = round(abs(seconds) * _NS_PER_S)
    if ns == 0:
        return "0s"
    sign = "-" if seconds < 0 else ""
    if ns < _NS_PER_US:
        return f"{sign}{ns}ns"
    if ns < _NS_PER_MS:
        return f"{sign}{_fraction(ns, _NS_PER_US)}µs"
    if ns < _NS_PER_S:
        return f"{sign}{_fraction(ns, _NS_PER_MS)}ms"
    minutes, secs_ns = divmod(ns, 60 * _NS_PER_S)
    hours, minutes = divmod(minutes, 60)
    out = f"{_fraction(secs_ns, _NS_PER_S)}s"
    if hours:
        out = f"{hours}h{minutes}m{out}"
    elif minutes:
        out = f"{minutes}m{out}"
    return sign + out


class DecoratedExitError(subprocess.CalledProcessError):
    """An ExitError with the command context needed to reproduce it.

    Instances are read-only: ``argv`` is stored as a tuple and both
    environments as read-only mappings. ``returncode``, ``cmd``,
    ``output`` and ``stderr`` mirror the wrapped error, so handlers for
    CalledProcessError keep working.
    """

    def __init__(
        self,
        exit_error: ExitError,
        path: str,
        argv: Sequence[str],
        dir: str,
        parent_env: Mapping[str, str],
        child_env: Mapping[str, str],
    ) -> None:
        super().__init__(
            exit_error.returncode, exit_error.cmd, exit_error.output, exit_error.stderr
        )
        parent = MappingProxyType(dict(parent_env))
        # Inherited environments stay the same object
        child = parent if child_env is parent_env else MappingProxyType(dict(child_env))
        fields = {
            "_exit_error": exit_error,
            "_path": path,
            "_argv": tuple(argv),
            "_dir": dir,
            "_parent_env": parent,
            "_child_env": child,
        }
        for name, value in fields.items():
            object.__setattr__(self, name, value)
        self.__cause__ = exit_error
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, name: str, value) -> None:
        # Dunder attributes stay writable for tracebacks, chaining and notes
        if getattr(self, "_frozen", False) and not name.startswith("__"):
            raise AttributeError(f"{type(self).__name__}.{name} is read-only")
        object.__setattr__(self, name, value)

    @property
    def exit_error(self) -> ExitError:
        """The original ExitError."""
        return self._exit_error

    @property
    def path(self) -> str:
        """Path of the command which was executed."""
        return self._path

    @property
    def argv(self) -> Tuple[str, ...]:
        """Command line arguments, ``argv[0]`` being the program name."""
        return self._argv

    @property
    def dir(self) -> str:
        """Working directory of the child process, or "" if unknown."""
        return self._dir

    @property
    def parent_env(self) -> Mapping[str, str]:
        """Environment of the parent process when the error was wrapped."""
        return self._parent_env

    @property
    def child_env(self) -> Mapping[str, str]:
        """Environment of the child process."""
        return self._child_env

    def cmdline(self) -> str:
        """Return the command line. See execx.cmdline.cmdline()."""
        return cmdline(self._path, self._argv)

    def unwrap(self) -> ExitError:
        """Return the original ExitError."""
        return self._exit_error

    def user_time(self) -> float:
        return self._exit_error.user_time()

    def system_time(self) -> float:
        return self._exit_error.system_time()

    def __str__(self) -> str:
        return str(self._exit_error)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.cmdline()!r}, {str(self)!r})"

    def __reduce__(self):
        return (
            type(self),
            (
                self._exit_error,
                self._path,
                self._argv,
                self._dir,
                dict(self._parent_env),
                dict(self._child_env),
            ),
        )

    def render(self, mode: FormatMode = FormatMode.BASIC) -> str:
        """Render the error.

        BASIC is the command line, the exit status and captured standard
        error, if any. EXTENDED adds the working directory, CPU times and
        the child environment.
        """
        if mode is FormatMode.EXTENDED:
            return self._render_extended()
        return self._render_basic()

    def _render_basic(self) -> str:
        out = f"{self.cmdline()}: {self._exit_error}"
        stderr = self._exit_error.stderr
        if stderr is not None:
            if isinstance(stderr, bytes):
                stderr = stderr.decode("utf-8", errors="replace")
            out += f": {stderr}"
        return out

    def _render_extended(self) -> str:
        return (
            f"{self._render_basic()}\n"
            "\n"
            f"workdir: {self._dir}\n"
            f"user time: {format_duration(self.user_time())}\n"
            f"system time: {format_duration(self.system_time())}\n"
            "\n"
            f"{env.format_detail(self._child_env)}"
        )

    def __format__(self, format_spec: str) -> str:
        """Support format(err, "v") and format(err, "+v").

        An empty spec gives str(err), as for any object. Every other spec
        renders nothing.
        """
        if format_spec == "":
            return str(self)
        if format_spec == DISPLAY_SPEC:
            return self.render(FormatMode.BASIC)
        if format_spec == EXTENDED_FLAG + DISPLAY_SPEC:
            return self.render(FormatMode.EXTENDED)
        return ""


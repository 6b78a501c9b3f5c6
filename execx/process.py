"""
Process-execution records consumed by execx.

execx does not run processes. Whatever layer does builds these records
when a child process completes: a ProcessState per completed invocation,
a Command describing what was run, and an ExitError when the exit status
was nonzero.
"""

from __future__ import annotations

import itertools
import os
import signal
import subprocess
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

# Completion identities are issued once per ProcessState, process-wide
_identities = itertools.count(1)


def _next_identity() -> int:
    return next(_identities)


@dataclass(frozen=True)
class ProcessState:
    """Record of one completed process.

    Two states compare equal only if they are the same completion record:
    ``identity`` is issued from a monotonically increasing counter, so
    running the same command twice yields two distinct states.
    """

    pid: int
    returncode: int
    user_time: float = 0.0
    system_time: float = 0.0
    identity: int = field(default_factory=_next_identity)

    @classmethod
    def from_wait(cls, pid: int, status: int, rusage: Any) -> "ProcessState":
        """Build a state from the result of ``os.wait4(pid, 0)``."""
        return cls(
            pid=pid,
            returncode=os.waitstatus_to_exitcode(status),
            user_time=rusage.ru_utime,
            system_time=rusage.ru_stime,
        )

    def exited(self) -> bool:
        """Return True if the process exited rather than being signaled."""
        return self.returncode >= 0


@dataclass
class Command:
    """Describes a process invocation.

    Args:
        path: Path of the executable.
        args: Full argument vector; ``args[0]`` is conventionally the
            program name. Defaults to ``[path]``.
        dir: Working directory, or "" for the parent's.
        env: None to inherit the parent environment, otherwise the exact
            KEY=VALUE entries the child gets. An empty list means an empty
            environment, not inheritance.
        process_state: Completion record, set once the process has run.
    """

    path: str
    args: List[str] = field(default_factory=list)
    dir: str = ""
    env: Optional[List[str]] = None
    process_state: Optional[ProcessState] = None

    def __post_init__(self) -> None:
        if not self.args:
            self.args = [self.path]


class ExitError(subprocess.CalledProcessError):
    """A process exited with nonzero status.

    ``stderr`` is None when standard error was not captured and ``b""``
    when it was captured but empty.
    """

    def __init__(
        self,
        process_state: ProcessState,
        cmd: Union[str, Sequence[str]],
        output: Optional[bytes] = None,
        stderr: Optional[bytes] = None,
    ) -> None:
        super().__init__(process_state.returncode, cmd, output, stderr)
        self.process_state = process_state

    @classmethod
    def from_called_process_error(
        cls, err: subprocess.CalledProcessError, process_state: ProcessState
    ) -> "ExitError":
        """Attach a completion record to a plain CalledProcessError."""
        return cls(process_state, err.cmd, output=err.output, stderr=err.stderr)

    def user_time(self) -> float:
        """User CPU time of the process, in seconds."""
        return self.process_state.user_time

    def system_time(self) -> float:
        """System CPU time of the process, in seconds."""
        return self.process_state.system_time

    def __str__(self) -> str:
        if self.returncode < 0:
            try:
                return f"signal: {signal.Signals(-self.returncode).name}"
            except ValueError:
                return f"signal: {-self.returncode}"
        return f"exit status {self.returncode}"

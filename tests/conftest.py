"""
Pytest configuration and fixtures for execx tests.
"""

import os
import subprocess
import sys
from io import StringIO
from typing import Callable, Optional

import pytest
from rich.console import Console

from execx import env
from execx.config.settings import Settings
from execx.process import Command, ExitError, ProcessState
from execx.utils import logging as execx_logging

# Child that fails the way a real tool would: a message on stderr, exit 1
FAILING_SCRIPT = "import sys; sys.stderr.write('whoops'); sys.exit(1)"


def _run_command(cmd: Command) -> Optional[ExitError]:
    """Run cmd to completion, recording its ProcessState on cmd.

    Returns an ExitError carrying captured stderr if the exit status was
    nonzero, else None.
    """
    child_env = None if cmd.env is None else env.parse(*cmd.env)
    proc = subprocess.Popen(
        cmd.args,
        executable=cmd.path,
        cwd=cmd.dir or None,
        env=child_env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    try:
        stdout = proc.stdout.read()
        stderr = proc.stderr.read()
    finally:
        proc.stdout.close()
        proc.stderr.close()
    _, status, rusage = os.wait4(proc.pid, 0)
    state = ProcessState.from_wait(proc.pid, status, rusage)
    proc.returncode = state.returncode
    cmd.process_state = state
    if state.returncode != 0:
        return ExitError(state, cmd.args, output=stdout, stderr=stderr)
    return None


@pytest.fixture(scope="function")
def run_command() -> Callable[[Command], Optional[ExitError]]:
    """Run a Command for real; skipped where os.wait4 is unavailable."""
    if not hasattr(os, "wait4"):
        pytest.skip("needs os.wait4")
    return _run_command


@pytest.fixture(scope="function")
def log_output(monkeypatch) -> StringIO:
    """Capture execx log output in a buffer wide enough not to wrap."""
    buf = StringIO()
    console = Console(file=buf, width=400, color_system=None)
    monkeypatch.setattr(execx_logging, "console", console)
    return buf


@pytest.fixture(scope="function")
def failing_command() -> Callable[..., Command]:
    """Factory for commands running a Python child that exits 1."""

    def make(env_entries=None, dir: str = "") -> Command:
        return Command(
            path=sys.executable,
            args=[sys.executable, "-c", FAILING_SCRIPT],
            dir=dir,
            env=env_entries,
        )

    return make


@pytest.fixture(scope="function")
def synthetic_failure():
    """An ExitError and the Command it belongs to, without running anything."""
    state = ProcessState(pid=4242, returncode=1, user_time=0.25, system_time=0.0015)
    cmd = Command(
        path="/usr/bin/git",
        args=["git", "fetch", "origin"],
        dir="/srv/repo",
        env=["HOME=/home/dev", "GIT_TRACE=1"],
        process_state=state,
    )
    err = ExitError(state, cmd.args, stderr=b"fatal: could not read from remote")
    return err, cmd


@pytest.fixture(autouse=True)
def reset_logging():
    """Keep logging globals from leaking between tests."""
    yield
    execx_logging.configure(Settings())


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at an empty location so user config is never read."""
    monkeypatch.setenv("EXECX_CONFIG", str(tmp_path / "no-such-config.yml"))
    monkeypatch.delenv("EXECX_VERBOSE", raising=False)

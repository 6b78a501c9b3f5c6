"""
Wrapping exit errors with command context.
"""

import os
from typing import Mapping, Optional

from . import env
from .exit_error import DecoratedExitError
from .process import Command, ExitError
from .utils.logging import log_info


def wrap(
    err: Optional[BaseException],
    cmd: Optional[Command],
    parent_env: Optional[Mapping[str, str]] = None,
) -> Optional[BaseException]:
    """Wrap an ExitError in a DecoratedExitError describing cmd.

    Wrap decides as follows:

    - If err is None, it returns None.
    - If err is not an ExitError, it is returned unchanged.
    - If err is an ExitError that did not come from cmd (its process state
      is not cmd's), it is returned unchanged.

    Otherwise the result records cmd's path, arguments and working
    directory (the current one if cmd.dir is empty, or "" if that can't be
    determined), the parent environment and the child environment.

    Args:
        err: Error returned by running cmd, if any.
        cmd: The command that was run.
        parent_env: Parent environment snapshot. Defaults to the current
            process environment, read at call time. Callers that mutate
            os.environ from other threads should pass their own snapshot.

    Returns:
        None, err itself, or a DecoratedExitError. Wrap never raises.
    """
    if err is None:
        return None
    if not isinstance(err, ExitError):
        return err
    if cmd is None or not _same_process(err, cmd):
        log_info(f"Not decorating {err!s}: it did not come from the given command")
        return err

    work_dir = cmd.dir
    if not work_dir:
        try:
            work_dir = os.getcwd()
        except OSError as e:
            log_info(f"Working directory unknown: {e}")
            work_dir = ""

    parent = env.variables() if parent_env is None else dict(parent_env)
    if cmd.env is None:
        child = parent
    else:
        child = env.parse(*cmd.env)

    return DecoratedExitError(
        err,
        path=cmd.path,
        argv=cmd.args,
        dir=work_dir,
        parent_env=parent,
        child_env=child,
    )


def _same_process(err: ExitError, cmd: Command) -> bool:
    """Report whether err was produced by the run recorded on cmd."""
    if cmd.process_state is None:
        return False
    return err.process_state.identity == cmd.process_state.identity

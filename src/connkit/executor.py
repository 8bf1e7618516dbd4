"""Run a resolved ConnectionCommand, either replacing this process or as a child."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import TextIO

from connkit.config.settings import ExecMode
from connkit.errors import LaunchError
from connkit.resolver.command import ConnectionCommand

logger = logging.getLogger(__name__)


def announce(command: ConnectionCommand, stream: TextIO | None = None) -> None:
    print(f"Executing: {command.command_line()}", file=stream or sys.stderr, flush=True)


def execute(
    command: ConnectionCommand, mode: ExecMode = ExecMode.replace, *, stream: TextIO | None = None
) -> int:
    """Announce and run ``command``, returning the child's exit code verbatim.

    In replace mode this does not return on success. Windows has no exec, so replace
    falls back to spawn there.

    Raises:
        LaunchError: If the program cannot be found or started.
    """
    announce(command, stream)

    if mode is ExecMode.replace and os.name == "posix":
        logger.debug("Replacing process with %s", command.program)
        try:
            os.execvp(command.program, command.argv())
        except OSError as e:
            raise LaunchError(command.program, e.strerror or str(e)) from e

    logger.debug("Spawning %s", command.program)
    try:
        completed = subprocess.run(command.argv(), check=False)
    except OSError as e:
        raise LaunchError(command.program, e.strerror or str(e)) from e
    return completed.returncode

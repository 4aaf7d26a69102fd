"""Subprocess driver for command-line solvers."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence

from lpbridge.errors import ChannelError, ProcessFailure, SolverTimeout, SpawnError

logger = logging.getLogger(__name__)


def execute(
    command: str,
    args: Sequence[str],
    input_text: str,
    *,
    solver_name: str,
    timeout: float | None = None,
) -> bytes:
    """Run ``command`` once, feed ``input_text`` on stdin and return its stderr.

    Stdout is discarded. Writing stdin and draining stderr happen
    concurrently, so a solver that reports before it has read all of its
    input cannot fill a pipe and stall the call. The process is always
    reaped before this function returns.
    """
    argv = [command, *args]
    logger.debug("spawning %s", shlex.join(argv))
    try:
        process = subprocess.Popen(
            argv,
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        raise SpawnError(f"could not spawn {command}: {exc}") from exc

    with process:
        try:
            _, artifact = process.communicate(input=input_text.encode("utf-8"), timeout=timeout)
        except subprocess.TimeoutExpired:
            process.kill()
            process.communicate()
            raise SolverTimeout(solver_name, timeout) from None
        except OSError as exc:
            process.kill()
            process.wait()
            raise ChannelError(f"could not exchange data with {command}: {exc}") from exc

    logger.debug("%s exited with status %d, %d bytes on stderr", command, process.returncode, len(artifact))
    if process.returncode != 0:
        raise ProcessFailure(solver_name, process.returncode, artifact.decode("utf-8", errors="replace"))
    return artifact

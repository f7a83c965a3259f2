# ABOUTME: Subprocess helper for shelling out to external tools
# ABOUTME: Runs a command, returns captured stdout or raises with stderr text

"""Subprocess runner used for the eb CLI."""

import logging
import shlex
import subprocess
from collections.abc import Callable, Sequence

from cebenv.utils.eb_exceptions import SubprocessError

logger = logging.getLogger(__name__)

# Signature shared by run() and the stubs used in tests
Runner = Callable[[Sequence[str]], str]


def run(command: str | Sequence[str]) -> str:
    """
    Run a command and return its standard output.

    Output is buffered in full and only returned on success. There is no
    timeout: a hung process blocks the caller.

    Raises:
        SubprocessError: the command exited non-zero or could not be started
    """
    args = shlex.split(command) if isinstance(command, str) else list(command)
    display = shlex.join(args)
    logger.debug("Running %s", display)

    try:
        result = subprocess.run(args, capture_output=True, text=True)
    except OSError as e:
        raise SubprocessError(f"Could not run '{display}': {e}", command=display, stderr=str(e)) from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise SubprocessError(
            f"'{display}' exited with code {result.returncode}: {stderr}",
            command=display,
            stderr=stderr,
        )

    return result.stdout

"""Run external commands with a timeout and uniform error reporting."""

import logging
import subprocess
from pathlib import Path

from dep_changelog.errors import GitCommandError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300.0


def run_command(
    args: list[str],
    cwd: Path | None = None,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> str:
    """
    Run a command and return its standard output.

    Args:
        args: Command and arguments
        cwd: Working directory for the command
        timeout: Seconds before the command is killed, None to wait forever

    Returns:
        Standard output of the command

    Raises:
        GitCommandError: If the command is missing, exits non-zero or times out
    """
    logger.debug("Running %s in %s", " ".join(args), cwd or ".")
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
        )
    except subprocess.CalledProcessError as e:
        error_msg = (e.stderr or "").strip() or (e.stdout or "").strip() or str(e)
        raise GitCommandError(args, error_msg) from e
    except subprocess.TimeoutExpired as e:
        raise GitCommandError(args, f"timed out after {timeout} seconds") from e
    except FileNotFoundError as e:
        raise GitCommandError(args, f"{args[0]} is not installed or not found in PATH") from e
    return result.stdout

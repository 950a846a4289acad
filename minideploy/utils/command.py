"""Thin subprocess wrapper shared by the tool clients."""

import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .logger import get_logger

logger = get_logger(__name__)


def run_command(
    cmd: List[str],
    env: Optional[Dict[str, str]] = None,
    cwd: Optional[Path] = None,
    log_errors: bool = True,
) -> Tuple[bool, str]:
    """Run a command and return success status and output.

    ``env`` is an overlay on top of the current process environment, the
    caller's own environment is never modified. With ``log_errors`` off a
    non-zero exit is an expected answer and is only logged at debug level.
    """
    logger.debug(f"Executing: {' '.join(cmd)}")

    full_env = None
    if env:
        full_env = os.environ.copy()
        full_env.update(env)

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=True,
            env=full_env,
            cwd=str(cwd) if cwd else None,
        )
        return True, result.stdout
    except subprocess.CalledProcessError as e:
        log = logger.error if log_errors else logger.debug
        log(f"Command failed ({e.returncode}): {' '.join(cmd)}: {e.stderr}")
        return False, e.stderr or e.stdout or ""
    except FileNotFoundError:
        logger.error(f"{cmd[0]} command not found")
        return False, f"{cmd[0]} command not found"

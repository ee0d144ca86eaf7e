"""Compiler process launching.

The compiler is started detached from the terminal: stdin is closed, its
console output is discarded, and on Windows it gets no console window of
its own. Callers receive the Popen handle and decide how long to wait.
"""

import logging
import subprocess
import sys
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def no_window_flag() -> int:
    """CREATE_NO_WINDOW on Windows, 0 elsewhere."""
    if sys.platform == "win32":
        return subprocess.CREATE_NO_WINDOW
    return 0


def compiler_command(compiler: str, input_path: Path) -> List[str]:
    """Build the `<compiler> /in <input>` command line."""
    return [compiler, "/in", str(input_path)]


def launch_compiler(compiler: str, input_path: Path) -> subprocess.Popen:
    """Start the compiler on input_path without waiting for it.

    Args:
        compiler: Compiler executable path or name
        input_path: Script to compile

    Returns:
        Popen handle of the running compiler

    Raises:
        OSError: If the compiler executable cannot be started
    """
    cmd = compiler_command(compiler, input_path)
    logger.debug("Launching %s", cmd)
    return subprocess.Popen(
        cmd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        creationflags=no_window_flag(),
    )

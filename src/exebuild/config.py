"""Configuration defaults for exebuild.

Values are resolved with the precedence CLI flag > environment variable >
built-in default. The environment lookups live here so the CLI only has to
deal with flags.

Environment variables:
    EXEBUILD_COMPILER: Compiler executable name
    EXEBUILD_DEPENDENCY_URL: URL of the compiler dependency archive
    EXEBUILD_WORK_DIR: Directory holding dependencies and the log file
    EXEBUILD_COMPILE_TIMEOUT: Seconds to wait for the compiler to exit
"""

import os
from pathlib import Path
from typing import Optional

from exebuild.packages.dependency import DependencyDescriptor

DEFAULT_COMPILER = "Ahk2Exe.exe"
DEFAULT_DEPENDENCY_NAME = "Ahk2Exe"
DEFAULT_DEPENDENCY_URL = "https://www.autohotkey.com/download/1.1/AutoHotkey_1.1.37.02.zip"
DEFAULT_ARCHIVE_FILE_NAME = "compiler-dependency.zip"
DEFAULT_REQUIRED_FILES = ("Ahk2Exe.exe", "Unicode 64-bit.bin")
DEFAULT_ARTIFACT_SUFFIX = ".exe"


def get_compiler() -> str:
    """Get the compiler executable name.

    Returns:
        Compiler name from EXEBUILD_COMPILER, or the default
    """
    return os.environ.get("EXEBUILD_COMPILER") or DEFAULT_COMPILER


def get_dependency_url() -> str:
    """Get the dependency archive URL.

    Returns:
        URL from EXEBUILD_DEPENDENCY_URL, or the default
    """
    return os.environ.get("EXEBUILD_DEPENDENCY_URL") or DEFAULT_DEPENDENCY_URL


def get_work_dir() -> Path:
    """Get the working directory respecting EXEBUILD_WORK_DIR.

    Returns:
        Resolved working directory path
    """
    work_dir_env = os.environ.get("EXEBUILD_WORK_DIR")
    if work_dir_env:
        return Path(work_dir_env).resolve()
    return Path.cwd()


def get_compile_timeout() -> Optional[float]:
    """Get the compiler wait timeout in seconds.

    Returns:
        Timeout from EXEBUILD_COMPILE_TIMEOUT, or None to wait indefinitely

    Raises:
        ValueError: If the variable is set but not a positive number
    """
    raw = os.environ.get("EXEBUILD_COMPILE_TIMEOUT")
    if not raw:
        return None
    timeout = float(raw)
    if timeout <= 0:
        raise ValueError(f"EXEBUILD_COMPILE_TIMEOUT must be positive, got {raw!r}")
    return timeout


def default_dependency(url: Optional[str] = None) -> DependencyDescriptor:
    """Build the descriptor for the compiler's binary dependency.

    Args:
        url: Override for the archive URL (defaults to get_dependency_url())

    Returns:
        DependencyDescriptor for the compiler files
    """
    return DependencyDescriptor.create(
        name=DEFAULT_DEPENDENCY_NAME,
        url=url or get_dependency_url(),
        archive_file_name=DEFAULT_ARCHIVE_FILE_NAME,
        required_files=DEFAULT_REQUIRED_FILES,
    )

"""Pytest configuration and fixtures for exebuild tests.

Besides the shared fixtures, this conftest restores stdout/stderr after each
test: Python 3.13 changed how stdout/stderr are handled, causing "I/O
operation on closed file" errors during teardown when a test closes them.
See https://github.com/pytest-dev/pytest/issues/11439
"""

import io
import sys
import warnings
import zipfile
from pathlib import Path
from typing import Dict

import pytest

from exebuild.build_context import BuildContext
from exebuild.output import BuildLog
from exebuild.packages.dependency import DependencyDescriptor

# Suppress ResourceWarnings from file cleanup in Python 3.13
if sys.version_info >= (3, 13):
    warnings.filterwarnings("ignore", category=ResourceWarning)


@pytest.fixture(autouse=True)
def _restore_stdio():  # noqa: PT004
    """Ensure stdout/stderr are always restored after each test."""
    yield

    if sys.stdout.closed:
        sys.stdout = sys.__stdout__
    if sys.stderr.closed:
        sys.stderr = sys.__stderr__


@pytest.fixture(autouse=True)
def _clear_exebuild_env(monkeypatch):
    """Keep developer environment variables out of the tests."""
    for name in ("EXEBUILD_COMPILER", "EXEBUILD_DEPENDENCY_URL", "EXEBUILD_WORK_DIR", "EXEBUILD_COMPILE_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def context(work_dir: Path) -> BuildContext:
    return BuildContext.create(work_dir=work_dir, show_progress=False)


@pytest.fixture
def console() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def build_log(context: BuildContext, console: io.StringIO):
    log = BuildLog(context.log_path, output_stream=console)
    yield log
    log.close()


@pytest.fixture
def descriptor() -> DependencyDescriptor:
    return DependencyDescriptor(
        name="Compiler",
        url="https://example.invalid/compiler.zip",
        archive_file_name="compiler.zip",
        required_files=("Compiler.exe", "Base.bin"),
    )


def write_zip(path: Path, entries: Dict[str, bytes]) -> Path:
    """Create a zip archive at path containing the given entries."""
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return path


@pytest.fixture
def make_zip():
    return write_zip

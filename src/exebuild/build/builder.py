"""Executable Builder.

This module runs the external compiler against an input script and checks
that it produced the expected executable.

Build Process:
    1. Derive the artifact path (input base name + executable suffix)
    2. Delete a stale artifact from a previous build
    3. Launch the compiler: <compiler> /in <input>
    4. Wait for the compiler process to exit
    5. Verify the artifact exists
"""

import logging
import shutil
import subprocess
import time
from pathlib import Path
from typing import Optional

from exebuild.build_context import BuildContext
from exebuild.config import DEFAULT_ARTIFACT_SUFFIX, DEFAULT_COMPILER
from exebuild.errors import BuildError
from exebuild.output import BuildLog
from exebuild.subprocess_utils import compiler_command, launch_compiler

logger = logging.getLogger(__name__)


def output_artifact_path(input_path: Path, suffix: str = DEFAULT_ARTIFACT_SUFFIX) -> Path:
    """Get the executable path the compiler produces for input_path.

    Args:
        input_path: Script being compiled
        suffix: Executable suffix (default ".exe")

    Returns:
        Path next to the input with the same base name and the suffix
    """
    return input_path.with_suffix(suffix)


class Builder:
    """Compiles scripts with the external compiler."""

    def __init__(
        self,
        context: BuildContext,
        build_log: BuildLog,
        compiler: str = DEFAULT_COMPILER,
        timeout: Optional[float] = None,
        artifact_suffix: str = DEFAULT_ARTIFACT_SUFFIX,
    ):
        """Initialize the builder.

        Args:
            context: Build context providing the working directory
            build_log: Log receiving user-facing notifications
            compiler: Compiler executable name or path
            timeout: Seconds to wait for the compiler (None waits indefinitely)
            artifact_suffix: Suffix of the produced executable
        """
        self.context = context
        self.build_log = build_log
        self.compiler = compiler
        self.timeout = timeout
        self.artifact_suffix = artifact_suffix

    def resolve_compiler(self) -> str:
        """Locate the compiler executable.

        Prefers a copy in the working directory (where dependency resolution
        puts it), then PATH, then the name as given.
        """
        local = self.context.work_dir / self.compiler
        if local.exists():
            return str(local)
        found = shutil.which(self.compiler)
        return found if found else self.compiler

    def build(self, input_path: Path) -> Path:
        """Compile input_path into an executable.

        Args:
            input_path: Script to compile

        Returns:
            Path to the produced executable

        Raises:
            BuildError: If the stale artifact cannot be removed, the compiler
                cannot be run, or no artifact exists afterwards
        """
        input_path = input_path.resolve()
        if not input_path.is_file():
            raise BuildError(f"Input script not found: {input_path}")

        artifact = output_artifact_path(input_path, self.artifact_suffix)

        try:
            self._remove_stale_artifact(artifact)

            compiler = self.resolve_compiler()
            self.build_log.detail(f"Running: {' '.join(compiler_command(compiler, input_path))}")
            start_time = time.time()
            returncode = self._run_compiler(compiler, input_path)
            elapsed = time.time() - start_time
            logger.debug("Compiler exited with %s after %.2fs", returncode, elapsed)
        except BuildError:
            raise
        except (OSError, subprocess.SubprocessError) as e:
            raise BuildError(f"Failed to run compiler '{self.compiler}': {e}") from e

        if returncode != 0:
            logger.warning("Compiler exited with code %d", returncode)

        if not artifact.exists():
            raise BuildError(f"Build artifact not found: {artifact}")

        self.build_log.notify(f"build succeeded: {artifact}")
        return artifact

    def _remove_stale_artifact(self, artifact: Path) -> None:
        if not artifact.exists():
            return
        self.build_log.detail(f"Removing stale artifact {artifact}")
        try:
            artifact.unlink()
        except OSError as e:
            logger.debug("Failed to delete %s: %s", artifact, e)
        if artifact.exists():
            raise BuildError(f"Could not remove stale artifact: {artifact}")

    def _run_compiler(self, compiler: str, input_path: Path) -> int:
        process = launch_compiler(compiler, input_path)
        try:
            return process.wait(timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            process.kill()
            process.wait()
            raise BuildError(f"Compiler did not finish within {self.timeout}s") from e

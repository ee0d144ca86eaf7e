"""Error types for exebuild.

Every failure is terminal. Each error class carries the process exit code
the CLI uses when the error reaches the top-level dispatch.

Exit codes:
    0: Success
    1: Dependency download failed
    2: Archive extraction failed
    3: Compilation failed or build artifact missing
"""

EXIT_SUCCESS = 0
EXIT_DOWNLOAD_FAILED = 1
EXIT_EXTRACTION_FAILED = 2
EXIT_BUILD_FAILED = 3
EXIT_INTERRUPTED = 130


class ExebuildError(Exception):
    """Base class for all exebuild failures."""

    exit_code: int = 1


class DownloadError(ExebuildError):
    """Raised when the dependency archive cannot be downloaded."""

    exit_code = EXIT_DOWNLOAD_FAILED


class ExtractionError(ExebuildError):
    """Raised when an entry cannot be extracted from the dependency archive."""

    exit_code = EXIT_EXTRACTION_FAILED


class BuildError(ExebuildError):
    """Raised when compilation fails or the build artifact is missing."""

    exit_code = EXIT_BUILD_FAILED

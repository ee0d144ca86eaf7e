"""Build Context - Shared run configuration.

BuildContext is created once by the CLI and handed to every component's
constructor. It replaces process-wide state for the working directory, the
log file path and the tool name.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_TOOL_NAME = "exebuild"


@dataclass(frozen=True)
class BuildContext:
    """Run-wide settings shared by all components.

    Attributes:
        work_dir: Directory holding the dependency files, archive and log
        log_path: Build log file path
        tool_name: Name used in banners and the default log file name
        verbose: Whether to write detail lines and debug logging
        show_progress: Whether to display a download progress bar
    """

    work_dir: Path
    log_path: Path
    tool_name: str = DEFAULT_TOOL_NAME
    verbose: bool = False
    show_progress: bool = True

    @classmethod
    def create(
        cls,
        work_dir: Path,
        log_path: Optional[Path] = None,
        tool_name: str = DEFAULT_TOOL_NAME,
        verbose: bool = False,
        show_progress: bool = True,
    ) -> "BuildContext":
        """Create a BuildContext, deriving the log path from the tool name if not given."""
        work_dir = work_dir.resolve()
        if log_path is None:
            log_path = work_dir / f"{tool_name}.log"
        return cls(
            work_dir=work_dir,
            log_path=log_path,
            tool_name=tool_name,
            verbose=verbose,
            show_progress=show_progress,
        )

"""
Build log output for exebuild.

Every line is appended to the build log file and echoed to standard output,
so the log on disk is a full record of what the user saw on the console.

Example output:
    ==================================================
    Starting exebuild
    ==================================================
    2026-10-18T09:12:04 dependencies found
    2026-10-18T09:12:07 build succeeded: hello.exe

Usage:
    from exebuild.output import BuildLog

    with BuildLog(Path("exebuild.log")) as build_log:
        build_log.emit_event("Starting")
        build_log.notify("dependencies found")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Optional, TextIO

logger = logging.getLogger(__name__)

BANNER_WIDTH = 50
BANNER_CHAR = "="


def format_timestamp(now: Optional[datetime] = None) -> str:
    """
    Format a timestamp as ISO-8601 with second precision.

    Args:
        now: Time to format (defaults to the current local time)

    Returns:
        Formatted timestamp string
    """
    if now is None:
        now = datetime.now()
    return now.isoformat(timespec="seconds")


class BuildLog:
    """
    Line-oriented log writer that mirrors to standard output.

    The log file is opened lazily in append mode on first write, so creating
    a BuildLog never touches the file system by itself.
    """

    def __init__(
        self,
        log_path: Path,
        output_stream: Optional[TextIO] = None,
        verbose: bool = False,
    ):
        """
        Initialize the build log.

        Args:
            log_path: Path of the log file (created if absent)
            output_stream: Console stream (defaults to sys.stdout)
            verbose: If True, detail lines are written as well
        """
        self.log_path = log_path
        self.verbose = verbose
        self._output_stream = output_stream
        self._file: Optional[TextIO] = None
        self._file_unavailable = False

    @property
    def output_stream(self) -> TextIO:
        # Resolved per call so pytest's capsys replacement is honoured
        return self._output_stream if self._output_stream is not None else sys.stdout

    def _open(self) -> Optional[TextIO]:
        if self._file is None and not self._file_unavailable:
            try:
                self.log_path.parent.mkdir(parents=True, exist_ok=True)
                self._file = open(self.log_path, "a", encoding="utf-8")
            except OSError as e:
                # Console output continues; only the file copy is lost
                logger.warning("Cannot write build log %s: %s", self.log_path, e)
                self._file_unavailable = True
        return self._file

    def write_line(self, text: str) -> None:
        """
        Append a line to the log file and echo it to the console.

        If the log file cannot be opened the line still reaches the console.

        Args:
            text: Line content without trailing newline
        """
        line = f"{text}\n"
        log_file = self._open()
        if log_file is not None:
            log_file.write(line)
            log_file.flush()

        self.output_stream.write(line)
        self.output_stream.flush()

    def emit_event(self, label: str) -> None:
        """
        Write a bordered banner containing the label.

        Args:
            label: Banner text (e.g., "Starting exebuild")
        """
        border = BANNER_CHAR * BANNER_WIDTH
        self.write_line(border)
        self.write_line(label)
        self.write_line(border)

    def notify(self, message: str) -> None:
        """
        Write a line prefixed with an ISO-8601 timestamp.

        Args:
            message: Notification text
        """
        self.write_line(f"{format_timestamp()} {message}")

    def detail(self, message: str, indent: int = 6) -> None:
        """
        Write an indented detail line (verbose mode only).

        Args:
            message: Detail text
            indent: Number of spaces to indent (default 6)
        """
        if not self.verbose:
            return
        self.write_line(f"{' ' * indent}{message}")

    def close(self) -> None:
        """Close the log file if it was opened."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "BuildLog":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        del exc_type, exc_val, exc_tb  # Unused
        self.close()

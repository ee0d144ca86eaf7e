"""Process termination for exebuild.

ExitController is the single exit path for success and every failure: it
writes the closing banner, annotates failures with their exit code, closes
the build log and raises SystemExit.
"""

from typing import NoReturn, Optional

from exebuild.build_context import BuildContext
from exebuild.errors import EXIT_SUCCESS
from exebuild.output import BuildLog


class ExitController:
    """Terminates the process with a log footer and an exit code."""

    def __init__(self, context: BuildContext, build_log: BuildLog):
        self.context = context
        self.build_log = build_log

    def terminate(self, code: int, message: Optional[str] = None) -> NoReturn:
        """Finish the build log and exit the process.

        Args:
            code: Process exit code
            message: Failure description, written when code is non-zero

        Raises:
            SystemExit: Always, with the given code
        """
        try:
            self.build_log.emit_event(f"Finishing {self.context.tool_name}")
            if code != EXIT_SUCCESS:
                self.build_log.write_line(f"ERROR [exit {code}]: {message or 'build failed'}")
        finally:
            self.build_log.close()
        raise SystemExit(code)

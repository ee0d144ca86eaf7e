"""Tests for ExitController."""

import pytest

from exebuild.exit_controller import ExitController


class TestExitController:
    """ExitController is the single termination path."""

    def test_success_writes_footer_only(self, context, build_log, console):
        with pytest.raises(SystemExit) as exc_info:
            ExitController(context, build_log).terminate(0, "ignored")

        assert exc_info.value.code == 0
        output = console.getvalue()
        assert "Finishing exebuild" in output
        assert "ERROR" not in output
        assert "ignored" not in output

    def test_failure_annotates_message_with_code(self, context, build_log, console):
        with pytest.raises(SystemExit) as exc_info:
            ExitController(context, build_log).terminate(2, "No entry matching 'Base.bin'")

        assert exc_info.value.code == 2
        lines = console.getvalue().splitlines()
        assert lines[-1] == "ERROR [exit 2]: No entry matching 'Base.bin'"

    def test_footer_reaches_log_file_and_log_is_closed(self, context, build_log):
        with pytest.raises(SystemExit):
            ExitController(context, build_log).terminate(3, "Build artifact not found")

        content = context.log_path.read_text(encoding="utf-8")
        assert "Finishing exebuild" in content
        assert "ERROR [exit 3]: Build artifact not found" in content
        assert build_log._file is None

    def test_failure_without_message(self, context, build_log, console):
        with pytest.raises(SystemExit) as exc_info:
            ExitController(context, build_log).terminate(1)

        assert exc_info.value.code == 1
        assert "ERROR [exit 1]: build failed" in console.getvalue()

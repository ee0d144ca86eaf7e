"""
Command-line interface for exebuild.

This module provides the `exebuild` CLI tool for compiling a script into a
standalone executable.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from exebuild import __version__, config
from exebuild.build import Builder
from exebuild.build_context import DEFAULT_TOOL_NAME, BuildContext
from exebuild.errors import EXIT_INTERRUPTED, EXIT_SUCCESS, ExebuildError
from exebuild.exit_controller import ExitController
from exebuild.output import BuildLog
from exebuild.packages import DependencyResolver

logger = logging.getLogger(__name__)


@dataclass
class BuildArgs:
    """Arguments for a build run."""

    script: Path
    log_file: Optional[Path] = None
    work_dir: Optional[Path] = None
    compiler: Optional[str] = None
    url: Optional[str] = None
    timeout: Optional[float] = None
    show_progress: bool = True
    verbose: bool = False


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog=DEFAULT_TOOL_NAME,
        description="Compile a script into a standalone executable",
    )
    parser.add_argument(
        "script",
        type=Path,
        help="Script to compile",
    )
    parser.add_argument(
        "-l",
        "--log-file",
        type=Path,
        default=None,
        help=f"Log file path (default: <work-dir>/{DEFAULT_TOOL_NAME}.log)",
    )
    parser.add_argument(
        "-w",
        "--work-dir",
        type=Path,
        default=None,
        help="Directory for the compiler dependency and log (default: $EXEBUILD_WORK_DIR or current directory)",
    )
    parser.add_argument(
        "-c",
        "--compiler",
        default=None,
        help=f"Compiler executable (default: $EXEBUILD_COMPILER or {config.DEFAULT_COMPILER})",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Compiler dependency archive URL (default: $EXEBUILD_DEPENDENCY_URL or built-in)",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=_positive_float,
        default=None,
        help="Seconds to wait for the compiler (default: $EXEBUILD_COMPILE_TIMEOUT or no timeout)",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not show a download progress bar",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def build_command(args: BuildArgs) -> None:
    """Resolve the compiler dependency and compile the script.

    Always terminates through ExitController.

    Examples:
        exebuild hello.ahk                  # Build hello.exe
        exebuild hello.ahk -l build.log     # Custom log file
        exebuild hello.ahk --timeout 60     # Give up on the compiler after 60s
    """
    work_dir = args.work_dir if args.work_dir is not None else config.get_work_dir()
    context = BuildContext.create(
        work_dir=work_dir,
        log_path=args.log_file,
        verbose=args.verbose,
        show_progress=args.show_progress,
    )
    build_log = BuildLog(context.log_path, verbose=context.verbose)
    exit_controller = ExitController(context, build_log)

    try:
        descriptor = config.default_dependency(args.url)

        build_log.emit_event(f"Starting {context.tool_name} {__version__}")
        build_log.detail(f"Script: {args.script}")
        build_log.detail(f"Working directory: {context.work_dir}")

        DependencyResolver(context, build_log).ensure(descriptor)
        Builder(
            context,
            build_log,
            compiler=args.compiler or config.get_compiler(),
            timeout=args.timeout,
        ).build(args.script)
    except ExebuildError as e:
        exit_controller.terminate(e.exit_code, str(e))
    except KeyboardInterrupt:
        exit_controller.terminate(EXIT_INTERRUPTED, "interrupted")
    except OSError as e:
        logger.debug("Unexpected I/O failure", exc_info=True)
        exit_controller.terminate(ExebuildError.exit_code, f"I/O error: {e}")

    exit_controller.terminate(EXIT_SUCCESS)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if parsed_args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    timeout = parsed_args.timeout
    if timeout is None:
        try:
            timeout = config.get_compile_timeout()
        except ValueError as e:
            parser.error(str(e))

    args = BuildArgs(
        script=parsed_args.script,
        log_file=parsed_args.log_file,
        work_dir=parsed_args.work_dir,
        compiler=parsed_args.compiler,
        url=parsed_args.url,
        timeout=timeout,
        show_progress=not parsed_args.no_progress,
        verbose=parsed_args.verbose,
    )
    build_command(args)


if __name__ == "__main__":
    main()

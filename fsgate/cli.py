import argparse
import json
import logging
import sys
from typing import Any, Optional

from fsgate.config.settings import load_settings
from fsgate.container import DependencyContainer
from fsgate.exceptions import ConfigurationError, HistoryError, ToolError

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fsgate",
        description=(
            "Run one sandboxed file tool against a base directory and print the result."
        ),
    )
    parser.add_argument(
        "--base",
        default=None,
        help="Base directory that bounds every operation (default: FSGATE_BASE_DIR or cwd)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty print output with colors",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: FSGATE_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "tool",
        help="Tool name (e.g. files.read), 'tools' to list them, or 'history' to show past commands",
    )
    parser.add_argument(
        "--args",
        dest="tool_args",
        default="{}",
        help="Tool arguments as a JSON object",
    )
    return parser


def _print_result(result: Any, pretty: bool) -> None:
    if not pretty:
        if isinstance(result, str):
            print(result)
        else:
            print(json.dumps(result, ensure_ascii=False, indent=2))
        return

    from rich import box
    from rich.console import Console
    from rich.panel import Panel

    console = Console(soft_wrap=True)
    if isinstance(result, str):
        try:
            data = json.loads(result)
        except ValueError:
            console.print(Panel(result, box=box.ROUNDED, border_style="cyan", expand=True))
            return
        console.print_json(data=data)
    else:
        console.print_json(data=result)


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.base)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    level = (args.log_level or settings.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        print(f"Unknown log level: {level}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    container = DependencyContainer(settings)

    if args.tool == "tools":
        _print_result(container.get_files_tools_handler().available_tools(), args.pretty)
        return 0

    if args.tool == "history":
        _print_result(container.get_history().list(), args.pretty)
        return 0

    try:
        arguments = json.loads(args.tool_args)
    except ValueError as e:
        print(f"--args must be a JSON object: {e}", file=sys.stderr)
        return 2
    if not isinstance(arguments, dict):
        print("--args must be a JSON object", file=sys.stderr)
        return 2

    try:
        container.get_history().add(f"{args.tool} {json.dumps(arguments, ensure_ascii=False)}")
    except HistoryError as e:
        logger.debug(f"Not recorded in history: {e}")

    try:
        result = container.get_files_tools_handler().dispatch(args.tool, arguments)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2
    except ToolError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _print_result(result, args.pretty)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

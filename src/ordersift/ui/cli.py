# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from ordersift.app import resolve_order_numbers, resolve_order_numbers_once
from ordersift.config import (
    ConfigurationError,
    configure_logging,
    get_auth_token,
    get_order_search_config,
)
from ordersift.domain.encoding import normalize_ids_param
from ordersift.domain.errors import UnauthorizedError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from ordersift.domain.model import ResolutionResult

log = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_UNAUTHORIZED = 3

_NOT_FOUND_PREVIEW = 20


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be positive: {number}")
    return number


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve order numbers into record ids")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser("resolve", help="Resolve order numbers via the search API")
    resolve.add_argument(
        "--input",
        type=Path,
        help="File with order numbers separated by commas or whitespace (default: stdin)",
    )
    resolve.add_argument(
        "--batch-size",
        type=_positive_int,
        default=None,
        help="Order numbers per search query (defaults to config)",
    )
    resolve.add_argument(
        "--concurrency",
        type=_positive_int,
        default=None,
        help="Maximum number of batches in flight (defaults to config)",
    )
    resolve.add_argument(
        "--once",
        action="store_true",
        help="Use single-page batches of 500 and no concurrency",
    )
    resolve.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: %(default)s)",
    )

    normalize = subparsers.add_parser(
        "normalize-ids",
        help="Rewrite an ids query value so its commas are encoded exactly once",
    )
    normalize.add_argument("ids", type=str, help="Raw, encoded or double-encoded ids value")

    args = parser.parse_args(list(argv))
    if args.command == "resolve" and args.once:
        overrides = {"--batch-size": args.batch_size, "--concurrency": args.concurrency}
        conflicting = [flag for flag, value in overrides.items() if value is not None]
        if conflicting:
            resolve.error(f"--once cannot be combined with {', '.join(conflicting)}")
    return args


def _read_input(path: Path | None) -> str:
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _report(result: ResolutionResult, *, output_format: str) -> None:
    if output_format == "json":
        print(json.dumps(result.as_dict(), indent=2))
    else:
        print(result.ids_encoded)

    if result.not_found:
        preview = ", ".join(result.not_found[:_NOT_FOUND_PREVIEW])
        remaining = len(result.not_found) - _NOT_FOUND_PREVIEW
        suffix = f" ... and {remaining} more" if remaining > 0 else ""
        log.info("Numbers not found (%s): %s%s", len(result.not_found), preview, suffix)
    for failure in result.failures:
        log.warning(
            "Batch %s failed (%s, %s numbers): %s",
            failure.batch_index,
            failure.code,
            len(failure.tokens),
            failure.error,
        )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    if parsed_args.command == "normalize-ids":
        print(normalize_ids_param(parsed_args.ids))
        return

    try:
        raw_text = _read_input(parsed_args.input)
        token = get_auth_token()
        config = get_order_search_config()
    except (OSError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(EXIT_USAGE)

    try:
        if parsed_args.once:
            result = resolve_order_numbers_once(raw_text, token, config=config)
        else:
            result = resolve_order_numbers(
                raw_text,
                token,
                batch_size=parsed_args.batch_size,
                concurrency=parsed_args.concurrency,
                config=config,
            )
    except UnauthorizedError:
        log.error("Order search rejected the auth token; re-authenticate and try again")  # noqa: TRY400
        sys.exit(EXIT_UNAUTHORIZED)
    except Exception:
        log.exception("Fatal error during resolution")
        sys.exit(EXIT_FAILURE)

    _report(result, output_format=parsed_args.format)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from orderlines.app import (
    delete_order_lines,
    fetch_composite_line,
    fetch_composite_lines,
    fetch_composite_order,
    order_adjustment,
)
from orderlines.common.logging import configure_logging
from orderlines.config.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Work with composite purchase order lines")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level, including storage response bodies",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    lines = subparsers.add_parser("lines", help="Print the resolved lines of an order")
    lines.add_argument("order_id", help="Purchase order id")

    line = subparsers.add_parser("line", help="Print one resolved line")
    line.add_argument("line_id", help="PO line id")

    order = subparsers.add_parser("order", help="Print an order with its resolved lines")
    order.add_argument("order_id", help="Purchase order id")

    delete = subparsers.add_parser(
        "delete-lines",
        help="Delete all lines of an order with their sub-objects (safe to re-run)",
    )
    delete.add_argument("order_id", help="Purchase order id")

    adjustment = subparsers.add_parser(
        "adjustment",
        help="Print the combined adjustment of an order's lines",
    )
    adjustment.add_argument("order_id", help="Purchase order id")

    return parser.parse_args(list(argv))


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "lines":
            lines = fetch_composite_lines(parsed_args.order_id)
            _print_json([line.to_document() for line in lines])
        elif parsed_args.command == "line":
            _print_json(fetch_composite_line(parsed_args.line_id).to_document())
        elif parsed_args.command == "order":
            _print_json(fetch_composite_order(parsed_args.order_id))
        elif parsed_args.command == "delete-lines":
            delete_order_lines(parsed_args.order_id)
        elif parsed_args.command == "adjustment":
            result = order_adjustment(parsed_args.order_id)
            _print_json(result.to_document() if result is not None else None)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error while processing order lines")
        sys.exit(1)


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

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from ttlreaper.app import reconcile_operation
from ttlreaper.config import (
    ConfigurationError,
    configure_logging,
    get_reconciler_config,
    parse_store_backend,
)
from ttlreaper.config.reconciler import STORE_BACKENDS
from ttlreaper.domain.model import ObjectKey
from ttlreaper.domain.results import Failed

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Clean up finished operations past their TTL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser("reconcile", help="Reconcile a single operation")
    reconcile.add_argument(
        "key",
        type=str,
        help="Operation to reconcile, as NAMESPACE/NAME",
    )
    reconcile.add_argument(
        "--store",
        type=str,
        choices=STORE_BACKENDS,
        help="Resource store backend (defaults to TTLREAPER_STORE or sqlite)",
    )

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging()
        parsed_args = _parse_args(args_list)
        key = ObjectKey.parse(parsed_args.key)
        backend = (
            parse_store_backend(parsed_args.store)
            if parsed_args.store
            else get_reconciler_config().store
        )
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command != "reconcile":
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
        result = reconcile_operation(key, backend=backend)
    except Exception:
        log.exception("Fatal error during reconcile")
        sys.exit(1)

    if isinstance(result, Failed):
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

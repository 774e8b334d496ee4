"""
DealerWatch CLI

Inspect the dealer directory and generated audits from the command line.
Results are written to stdout as JSON; logs go to stderr.

Usage:
    dealerwatch list
    dealerwatch audit --index 7
    dealerwatch audit --name "Thurlby Motors" --pretty
    dealerwatch duplicates
    dealerwatch alerts --limit 20
    dealerwatch stats
    dealerwatch serve --port 8000

Exit codes:
    0   success
    10  invalid input (unknown dealer, bad settings)
    20  internal error
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Optional, Sequence

from . import __version__
from .config import Settings
from .engine.assembler import AuditAssembler
from .exceptions import ConfigurationError, DealerNotFoundError, DealerWatchError
from .generation.directory import DealerDirectory, build_dealer_directory
from .logging_config import configure_logging
from .portfolio import collect_alerts, detect_duplicates, portfolio_stats

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_INPUT = 10
EXIT_INTERNAL_ERROR = 20


def _emit(payload: Any, pretty: bool) -> None:
    print(json.dumps(payload, indent=2 if pretty else None))


# =============================================================================
# Commands
# =============================================================================

def cmd_list(args: argparse.Namespace, directory: DealerDirectory) -> Any:
    return [
        {"index": index, **dealer.to_dict()}
        for index, dealer in directory.items()
    ]


def cmd_audit(args: argparse.Namespace, directory: DealerDirectory) -> Any:
    if args.name is not None:
        index, dealer = directory.find(args.name)
    else:
        index, dealer = args.index, directory.get(args.index)
    return AuditAssembler().generate(dealer.name, index).to_dict()


def cmd_duplicates(args: argparse.Namespace, directory: DealerDirectory) -> Any:
    return [g.to_dict() for g in detect_duplicates(directory)]


def cmd_alerts(args: argparse.Namespace, directory: DealerDirectory) -> Any:
    return [a.to_dict() for a in collect_alerts(directory, AuditAssembler(), limit=args.limit)]


def cmd_stats(args: argparse.Namespace, directory: DealerDirectory) -> Any:
    return portfolio_stats(directory).to_dict()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dealerwatch",
        description="Dealer compliance audit engine",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty print JSON output"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Directory seed (overrides DW_DIRECTORY_SEED)"
    )
    parser.add_argument(
        "--dealer-count",
        type=int,
        help="Number of generated dealers (overrides DW_DEALER_COUNT)"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List the dealer directory").set_defaults(func=cmd_list)

    audit = sub.add_parser("audit", help="Generate the audit for one dealer")
    target = audit.add_mutually_exclusive_group(required=True)
    target.add_argument("--index", type=int, help="Dealer index")
    target.add_argument("--name", help="Exact dealer name")
    audit.set_defaults(func=cmd_audit)

    sub.add_parser(
        "duplicates", help="Dealers sharing identifying fields"
    ).set_defaults(func=cmd_duplicates)

    alerts = sub.add_parser("alerts", help="Amber and red controls across the portfolio")
    alerts.add_argument("--limit", type=int, help="Maximum number of alerts")
    alerts.set_defaults(func=cmd_alerts)

    sub.add_parser("stats", help="Portfolio RAG counts and average score").set_defaults(func=cmd_stats)

    serve = sub.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser


def _serve(settings: Settings, host: str, port: int) -> int:
    import uvicorn

    from .service.app import create_app

    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(json.dumps({"error": e.to_dict()}), file=sys.stderr)
        return EXIT_INVALID_INPUT

    configure_logging(settings.log_level, settings.log_format)

    if args.command == "serve":
        return _serve(settings, args.host, args.port)

    try:
        directory = build_dealer_directory(
            settings,
            seed=args.seed,
            dealer_count=args.dealer_count,
        )
        payload = args.func(args, directory)
        _emit(payload, args.pretty)
    except DealerNotFoundError as e:
        print(json.dumps({"error": e.to_dict()}), file=sys.stderr)
        return EXIT_INVALID_INPUT
    except DealerWatchError as e:
        logger.error("Command failed: %s", e)
        print(json.dumps({"error": e.to_dict()}), file=sys.stderr)
        return EXIT_INTERNAL_ERROR
    except Exception as e:
        logger.exception("Unexpected error in %s", args.command)
        error = {"code": "DW_INTERNAL_ERROR", "message": f"Unexpected error: {e}"}
        print(json.dumps({"error": error}), file=sys.stderr)
        return EXIT_INTERNAL_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

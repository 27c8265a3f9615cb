from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from legisync.app import build_orchestrator, load_external_source, run_full_sync
from legisync.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from legisync.domain.sync import SyncOrchestrator

log = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError(f"Must be non-negative: {value}")
    return parsed


def _positive_int(value: str) -> int:
    parsed = _non_negative_int(value)
    if parsed == 0:
        raise argparse.ArgumentTypeError(f"Must be positive: {value}")
    return parsed


def _add_stop_early_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--max-consecutive-known",
        type=_positive_int,
        help="Stop after this many unchanged items in a row (latest-first sources only)",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile legislative data into the store")
    parser.add_argument(
        "--source",
        type=str,
        help="External source as module:attribute (defaults to LEGISYNC_SOURCE)",
    )
    parser.add_argument(
        "--dangerously-create-jurisdiction",
        action="store_true",
        help="Create the jurisdiction and its chambers if the store does not have it",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    full = subparsers.add_parser("full", help="Sync sessions, members and legislation")
    full.add_argument(
        "--max-pages",
        type=_non_negative_int,
        help="Last 0-indexed legislation page to fetch per session",
    )
    _add_stop_early_argument(full)

    subparsers.add_parser("sessions", help="Sync sessions and link them to every chamber")

    members = subparsers.add_parser("members", help="Sync members for one session")
    members.add_argument("--session", type=int, required=True, help="Internal session id")

    legislation = subparsers.add_parser("legislation", help="Sync legislation for one session")
    legislation.add_argument("--session", type=int, required=True, help="Internal session id")
    legislation.add_argument(
        "--max-pages",
        type=_non_negative_int,
        help="Last 0-indexed legislation page to fetch",
    )
    _add_stop_early_argument(legislation)

    votes = subparsers.add_parser("votes", help="Sync votes for one piece of legislation")
    votes.add_argument(
        "--legislation",
        type=str,
        required=True,
        help="External id of the legislation",
    )

    return parser.parse_args(list(argv))


def _run(orchestrator: SyncOrchestrator, args: argparse.Namespace) -> None:
    if args.command == "full":
        result = run_full_sync(
            orchestrator,
            max_pages=args.max_pages,
            max_consecutive_known=args.max_consecutive_known,
        )
        log.info(
            "Full sync finished: sessions=%s, legislation created=%s, updated=%s",
            len(result.sessions.created) + len(result.sessions.updated),
            sum(len(item.created) for item in result.legislation.values()),
            sum(len(item.updated) for item in result.legislation.values()),
        )
    elif args.command == "sessions":
        sessions = orchestrator.sync_sessions()
        log.info("Sessions: created=%s, updated=%s", len(sessions.created), len(sessions.updated))
    elif args.command == "members":
        members = orchestrator.update_members(args.session)
        log.info("Members: new=%s, existing=%s", len(members.maybe_new), len(members.duplicates))
    elif args.command == "legislation":
        legislation = orchestrator.update_legislation_with_pagination(
            args.session,
            max_pages=args.max_pages,
            max_consecutive_known=args.max_consecutive_known,
        )
        log.info(
            "Legislation: created=%s, updated=%s, unchanged=%s, pages=%s, stopped early=%s",
            len(legislation.created),
            len(legislation.updated),
            len(legislation.unchanged),
            legislation.pages_fetched,
            legislation.stopped_early,
        )
    elif args.command == "votes":
        votes = orchestrator.update_legislation_votes(args.legislation)
        log.info(
            "Votes: created=%s, updated=%s, unchanged=%s",
            len(votes.created),
            len(votes.updated),
            len(votes.unchanged),
        )
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    signal(SIGINT, sigint_handler)
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        source = load_external_source(parsed_args.source)
        orchestrator = build_orchestrator(
            source, dangerously_create_jurisdiction=parsed_args.dangerously_create_jurisdiction
        )
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Could not start sync")
        sys.exit(1)

    try:
        _run(orchestrator, parsed_args)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    main()

"""Command-line entry point for worklog-sync."""

from __future__ import annotations

import argparse
import logging
import sys

from worklog_sync.config import Settings, load_settings
from worklog_sync.errors import ConfigError, LogParseError
from worklog_sync.pipeline import load_batch, preview, sync
from worklog_sync.schema import BatchOutcome, BatchStatus
from worklog_sync.sink import NotionSink

logger = logging.getLogger(__name__)


def exit_code(outcome: BatchOutcome) -> int:
    if outcome.status is BatchStatus.EMPTY_LOG:
        return 1
    return 0


def _dry_run(settings: Settings) -> int:
    events, held = load_batch(settings)
    if held is not None:
        print("Nothing to deliver yet.")
        return exit_code(BatchOutcome(status=held))
    for _, _, record in preview(events):
        print(record)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Post Tomotabar work periods to Notion")
    parser.add_argument("--env-file", help="Path to a .env file with settings")
    parser.add_argument("--dry-run", action="store_true", help="Print the records without posting or clearing logs")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(dotenv_path=args.env_file)
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        if args.dry_run:
            return _dry_run(settings)
        sink = NotionSink(settings.notion_api_key, settings.notion_database_id)
        outcome = sync(settings, sink)
    except LogParseError as exc:
        logger.error("Malformed log, nothing was changed: %s", exc)
        return 1

    if outcome.status is BatchStatus.DELIVERED:
        print(f"{outcome.delivered} work periods posted to Notion.")
    return exit_code(outcome)


if __name__ == "__main__":
    sys.exit(main())

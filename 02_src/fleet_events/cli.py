"""Command-line entry point: sweep hosts and print the report as JSON."""

import argparse
import asyncio
import getpass
import json
import sys
from dataclasses import asdict
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from .app import EventCollector
from .config import PROJECT_ROOT, Settings
from .logging_config import get_logger, setup_logging
from .models import Credential, EventRecord, QueryRequest

logger = get_logger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fleet-events",
        description="Collect recent critical and error events from remote hosts.",
    )
    parser.add_argument("computer_names", nargs="+", metavar="HOST", help="Hosts to query")
    parser.add_argument(
        "--hours-back",
        type=int,
        default=settings.hours_back,
        help=f"Lookback window in hours (default {settings.hours_back})",
    )
    parser.add_argument("--username", help="Query as this user; the password is prompted")
    parser.add_argument(
        "--max-concurrency",
        type=int,
        default=settings.max_concurrency,
        help="Hosts queried at once (default 1, one host at a time)",
    )
    parser.add_argument("--powershell", default=settings.powershell, help="PowerShell executable")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--log-file", default=None, help="Log file path")
    return parser


def format_report(records: list[EventRecord]) -> str:
    """Newest first, as a JSON array."""
    ordered = sorted(records, key=lambda record: record.time_created, reverse=True)
    return json.dumps([asdict(record) for record in ordered], default=str, indent=2)


async def run(request: QueryRequest, settings: Settings) -> list[EventRecord]:
    collector = EventCollector(settings=settings)
    records = await collector.collect(request)
    for host_name, kind in collector.last_outcomes.items():
        print(f"{host_name}: {kind.value}", file=sys.stderr)
    return records


def main(argv: list[str] | None = None) -> int:
    """Run the CLI."""
    load_dotenv(Path(PROJECT_ROOT) / ".env")

    try:
        env_settings = Settings.from_env()
    except ValueError as e:
        print(f"fleet-events: {e}", file=sys.stderr)
        return 2

    args = build_parser(env_settings).parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        credential = None
        if args.username:
            credential = Credential(
                username=args.username,
                password=getpass.getpass(f"Password for {args.username}: "),
            )
        request = QueryRequest(
            computer_names=args.computer_names,
            credential=credential,
            hours_back=args.hours_back,
        )
        settings = Settings(
            hours_back=args.hours_back,
            legacy_newest=env_settings.legacy_newest,
            max_concurrency=args.max_concurrency,
            powershell=args.powershell,
            command_timeout=env_settings.command_timeout,
        )
    except ValidationError as e:
        print(f"fleet-events: invalid input: {e}", file=sys.stderr)
        return 2

    records = asyncio.run(run(request, settings))
    logger.info("Report contains %s records", len(records))
    print(format_report(records))
    return 0


if __name__ == "__main__":
    sys.exit(main())

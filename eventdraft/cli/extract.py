"""Standalone CLI for running one extraction without the API server.

Usage::

    python -m eventdraft.cli https://www.ticketmaster.com/.../event/190063247D573A45
    python -m eventdraft.cli <url> --json
    python -m eventdraft.cli <url> --quiet

Prints a short summary of the draft (or the full draft as camelCase JSON
with ``--json``).  Logs always go to stderr so stdout carries only the
result; ``--quiet`` (implied by ``--json``) raises the log level to WARNING.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from eventdraft.models.event_draft import EventDraft


def _format_text_output(draft: EventDraft) -> str:
    venue = draft.venue
    where = ", ".join(part for part in (venue.name, venue.city, venue.state) if part)
    lines = [
        f"Title:       {draft.title}",
        f"When:        {draft.date} {draft.time}",
        f"Where:       {where}",
        f"Type:        {draft.event_type.value} ({draft.category})",
        f"Source:      {draft.source} (confidence: {draft.confidence})",
    ]
    if draft.performers:
        lines.append(f"Performers:  {', '.join(draft.performers)}")
    lines.append("Pricing:")
    for tier in draft.pricing:
        lines.append(f"  - {tier.level}: ${tier.price:.2f} + ${tier.service_fee:.2f} fee")
    if draft.image_urls:
        lines.append(f"Images:      {len(draft.image_urls)}")
    if draft.error:
        lines.append(f"Error:       {draft.error}")
    return "\n".join(lines)


async def _run(url: str, json_output: bool, quiet: bool) -> int:
    """Build the service, extract *url* and print the result.

    Returns 0 on success, 1 when the draft carries an error.
    """
    # Deferred: importing eventdraft.main loads settings and configures
    # logging for the server; the CLI re-targets logging to stderr after.
    from eventdraft.main import build_http_client, build_service, config, settings
    from eventdraft.utils.logging import configure_logging

    configure_logging(
        log_level="WARNING" if quiet else settings.log_level,
        stream=sys.stderr,
    )

    async with build_http_client(settings) as http_client:
        service = build_service(settings, config, http_client)
        draft = await service.extract(url)

    if json_output:
        print(json.dumps(draft.to_response(), indent=2))
    else:
        print(_format_text_output(draft))
    return 1 if draft.error else 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m eventdraft.cli",
        description="Extract an event draft from a ticket-marketplace URL.",
    )
    parser.add_argument("url", type=str, help="Event page URL.")
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Print the full draft as JSON.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors (to stderr).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point; exits with the extraction's status code."""
    args = _build_parser().parse_args(argv)
    quiet = args.quiet or args.json_output
    sys.exit(asyncio.run(_run(args.url, args.json_output, quiet)))


if __name__ == "__main__":
    main()

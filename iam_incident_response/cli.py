"""Command line interface for running an incident response by hand."""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, List, Optional

from .config import Settings
from .handler import IncidentResponder
from .logs import configure_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Return parsed command line arguments."""

    parser = argparse.ArgumentParser(
        description="Disable a possibly compromised IAM user and alert the security channel."
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--username", help="IAM user to remediate")
    target.add_argument(
        "--event",
        dest="event_path",
        help="Path to a JSON finding event ('-' reads from stdin)",
    )
    parser.add_argument("--profile", help="AWS CLI profile to use", default=None)
    parser.add_argument("--region", help="AWS region for the IAM and SNS clients", default=None)
    parser.add_argument(
        "--topic-arn",
        dest="topic_arn",
        help="SNS topic for the alert (defaults to $SNS_TOPIC_ARN)",
        default=None,
    )
    parser.add_argument("--log-level", dest="log_level", default=None, help="Logging level, e.g. DEBUG")
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the status and remediation outcome as JSON",
    )
    return parser.parse_args(argv)


def load_event(path: str) -> Any:
    """Read a JSON event from *path*, or from stdin when *path* is ``-``."""

    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point used by ``python -m iam_incident_response``."""

    args = parse_args(argv)
    settings = Settings.from_env().override(
        profile=args.profile,
        region=args.region,
        topic_arn=args.topic_arn,
        log_level=args.log_level,
    )
    try:
        configure_logging(settings.log_level)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.event_path:
        try:
            event = load_event(args.event_path)
        except (OSError, ValueError) as exc:
            print(f"Error: could not read event: {exc}", file=sys.stderr)
            return 1
    else:
        event = {"username": args.username}

    responder = IncidentResponder.from_settings(settings)
    result = responder.respond(event)

    if args.as_json:
        payload = {
            "status": result.status,
            "outcome": result.outcome.to_dict() if result.outcome else None,
            "notification_id": result.notification_id,
        }
        print(json.dumps(payload, indent=2))
    else:
        print(result.status)

    return 1 if result.failed else 0


__all__ = ["load_event", "main", "parse_args"]

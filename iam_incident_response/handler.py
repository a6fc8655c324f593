"""Entry point tying finding interpretation, remediation and notification together."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from .config import Settings
from .findings import Finding, Rejection, interpret_event
from .logs import configure_logging
from .notifications import SnsNotifier, should_notify
from .remediation import IamRemediator, IdentityNotFoundError, RemediationOutcome
from .utils import error_message

logger = logging.getLogger(__name__)

NO_ACTION_TAKEN = "No action taken"
NO_USERNAME = "Failed: No username provided."
FINDING_COMPLETED = "Incident response completed"


def success_status(user_name: str) -> str:
    return f"Success: User {user_name} disabled."


def user_missing_status(user_name: str) -> str:
    return f"Failed: User {user_name} does not exist."


def service_error_status(message: str) -> str:
    return f"Failed: AWS Service Error: {message}"


def unexpected_error_status(message: str) -> str:
    return f"Failed: Unexpected error: {message}"


@dataclass
class ResponseResult:
    """Final status of one invocation, with the remediation details when available."""

    status: str
    finding: Optional[Finding] = None
    outcome: Optional[RemediationOutcome] = None
    notification_id: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status.startswith("Failed")


class IncidentResponder:
    """Handle a single event: interpret it, remediate the user, notify."""

    def __init__(self, remediator: IamRemediator, notifier: SnsNotifier) -> None:
        self.remediator = remediator
        self.notifier = notifier

    @classmethod
    def from_settings(cls, settings: Settings) -> "IncidentResponder":
        session = settings.session()
        return cls(
            IamRemediator(session.client("iam")),
            SnsNotifier(session.client("sns"), settings.topic_arn),
        )

    def handle(self, event: Any) -> str:
        """Return the status string for *event*."""

        return self.respond(event).status

    def respond(self, event: Any) -> ResponseResult:
        """Process *event* and return the status along with what was done.

        Backend errors are caught here and only here.
        """

        interpretation = interpret_event(event)
        if isinstance(interpretation, Rejection):
            status = NO_USERNAME if interpretation.is_failure else NO_ACTION_TAKEN
            return ResponseResult(status=status)

        finding = interpretation
        user_name = finding.user_name
        try:
            outcome = self.remediator.remediate(user_name)
        except IdentityNotFoundError:
            logger.error("User %s does not exist.", user_name)
            return ResponseResult(status=user_missing_status(user_name), finding=finding)
        except (ClientError, BotoCoreError) as exc:
            message = error_message(exc)
            logger.error("AWS service exception occurred: %s", message)
            return ResponseResult(status=service_error_status(message), finding=finding)
        except Exception as exc:
            logger.exception("An unexpected error occurred: %s", exc)
            return ResponseResult(status=unexpected_error_status(str(exc)), finding=finding)

        notification_id = None
        if should_notify(outcome):
            notification_id = self.notifier.notify(finding, outcome)
        else:
            logger.info("Nothing was revoked for user %s; skipping notification", user_name)

        status = FINDING_COMPLETED if finding.origin == "finding" else success_status(user_name)
        return ResponseResult(
            status=status,
            finding=finding,
            outcome=outcome,
            notification_id=notification_id,
        )


@lru_cache(maxsize=None)
def _default_responder() -> IncidentResponder:
    settings = Settings.from_env()
    try:
        configure_logging(settings.log_level)
    except ValueError:
        configure_logging("INFO")
        logger.warning("Invalid LOG_LEVEL %r; logging at INFO", settings.log_level)
    return IncidentResponder.from_settings(settings)


def lambda_handler(event: Any, context: Any) -> str:
    """AWS Lambda entry point."""

    return _default_responder().handle(event)


__all__ = [
    "FINDING_COMPLETED",
    "IncidentResponder",
    "NO_ACTION_TAKEN",
    "NO_USERNAME",
    "ResponseResult",
    "lambda_handler",
    "service_error_status",
    "success_status",
    "unexpected_error_status",
    "user_missing_status",
]

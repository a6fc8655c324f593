"""Security channel alerts for completed remediations."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from botocore.client import BaseClient

from .findings import Finding
from .remediation import MfaStatus, RemediationOutcome

logger = logging.getLogger(__name__)

SUBJECT_MAX_LENGTH = 100

ALERT_TEMPLATE = """\
Incident Response Alert

An IAM user was remediated in response to a security finding.

Finding Type: {finding_type}
Region: {region}
Identity Type: {identity_type}
Resource Type: {resource_type}
User Name: {user_name}
MFA Status: {mfa_status}
Access Keys Deleted: {access_keys_revoked}
"""


def should_notify(outcome: RemediationOutcome) -> bool:
    """Return whether *outcome* changed anything worth telling people about.

    A user with no MFA devices, no console password and no access keys had
    nothing to revoke, so no alert is sent for it.
    """

    return (
        outcome.access_keys_revoked > 0
        or outcome.mfa_status is MfaStatus.DEACTIVATED
        or outcome.login_profile_found
    )


def format_alert(finding: Finding, outcome: RemediationOutcome) -> Tuple[str, str]:
    """Return the ``(subject, body)`` pair describing a remediation."""

    subject = f"Incident response: IAM user {outcome.user_name} disabled"
    if len(subject) > SUBJECT_MAX_LENGTH:
        subject = subject[: SUBJECT_MAX_LENGTH - 3] + "..."
    body = ALERT_TEMPLATE.format(
        finding_type=finding.finding_type,
        region=finding.region,
        identity_type=finding.identity_type,
        resource_type=finding.resource_type,
        user_name=outcome.user_name,
        mfa_status=outcome.mfa_status.value,
        access_keys_revoked=outcome.access_keys_revoked,
    )
    return subject, body


class SnsNotifier:
    """Publish remediation alerts to an SNS topic, best-effort."""

    def __init__(self, sns_client: BaseClient, topic_arn: Optional[str]) -> None:
        self._sns = sns_client
        self.topic_arn = topic_arn

    def notify(self, finding: Finding, outcome: RemediationOutcome) -> Optional[str]:
        """Send the alert and return its message id.

        Publishing problems are logged and never raised; ``None`` is returned
        instead.
        """

        if not self.topic_arn:
            logger.warning("No SNS topic configured; skipping notification for %s", outcome.user_name)
            return None

        subject, body = format_alert(finding, outcome)
        try:
            response = self._sns.publish(TopicArn=self.topic_arn, Subject=subject, Message=body)
        except Exception:
            logger.exception("Failed to publish notification for user %s", outcome.user_name)
            return None

        message_id = response.get("MessageId")
        logger.info("Notification sent to %s (message id %s)", self.topic_arn, message_id)
        return message_id


__all__ = ["ALERT_TEMPLATE", "SUBJECT_MAX_LENGTH", "SnsNotifier", "format_alert", "should_notify"]

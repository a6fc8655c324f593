"""Automated incident response for compromised AWS IAM users."""

from __future__ import annotations

from .config import Settings
from .findings import Finding, Rejection, RejectionReason, interpret_event
from .handler import IncidentResponder, ResponseResult, lambda_handler
from .notifications import SnsNotifier, format_alert, should_notify
from .remediation import IamRemediator, IdentityNotFoundError, MfaStatus, RemediationOutcome

__all__ = [
    "Finding",
    "IamRemediator",
    "IdentityNotFoundError",
    "IncidentResponder",
    "MfaStatus",
    "Rejection",
    "RejectionReason",
    "RemediationOutcome",
    "ResponseResult",
    "Settings",
    "SnsNotifier",
    "format_alert",
    "interpret_event",
    "lambda_handler",
    "should_notify",
]

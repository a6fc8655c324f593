"""Data models for inbound security findings and their interpretation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Mapping, Union

logger = logging.getLogger(__name__)

NOT_APPLICABLE = "N/A"
REMEDIABLE_USER_TYPE = "IAMUser"


@dataclass(frozen=True)
class Finding:
    """A security finding that names a single IAM user to remediate."""

    finding_type: str
    region: str
    resource_type: str
    identity_type: str
    user_name: str
    origin: Literal["request", "finding"] = "finding"

    def __post_init__(self) -> None:
        if not self.user_name:
            raise ValueError("Finding requires a non-empty user name")


class RejectionReason(Enum):
    """Why an event could not be turned into a :class:`Finding`."""

    MISSING_DETAIL = "missing detail"
    MISSING_TYPE_OR_RESOURCE = "missing type or resource"
    MISSING_RESOURCE_TYPE = "missing resource type"
    MISSING_ACCESS_KEY_DETAILS = "missing access key details"
    MISSING_IDENTITY = "missing user name"
    MISSING_USER_TYPE = "missing user type"
    UNSUPPORTED_USER_TYPE = "unsupported user type"


@dataclass(frozen=True)
class Rejection:
    """An event that produced no remediation."""

    reason: RejectionReason
    detail: str = ""

    @property
    def is_failure(self) -> bool:
        """A missing user name is a malformed finding, not a neutral no-op."""

        return self.reason is RejectionReason.MISSING_IDENTITY


Interpretation = Union[Finding, Rejection]


def interpret_event(event: Any) -> Interpretation:
    """Extract the target user and finding metadata from *event*.

    Two shapes are accepted: a direct request ``{"username": "..."}`` and a
    finding delivered by EventBridge, whose ``detail`` holds ``type``,
    ``region`` and a ``resource`` with ``resourceType`` and
    ``accessKeyDetails``.
    """

    if isinstance(event, Mapping) and "username" in event:
        return _interpret_request(event)
    return _interpret_finding(event)


def _interpret_request(event: Mapping[str, Any]) -> Interpretation:
    user_name = _clean(event.get("username"))
    if not user_name:
        return _reject(RejectionReason.MISSING_IDENTITY, "No username provided in the event.")
    return Finding(
        finding_type=NOT_APPLICABLE,
        region=NOT_APPLICABLE,
        resource_type=NOT_APPLICABLE,
        identity_type=NOT_APPLICABLE,
        user_name=user_name,
        origin="request",
    )


def _interpret_finding(event: Any) -> Interpretation:
    detail = event.get("detail") if isinstance(event, Mapping) else None
    if not isinstance(detail, Mapping):
        return _reject(RejectionReason.MISSING_DETAIL, "Event does not contain a finding detail.")

    finding_type = _clean(detail.get("type"))
    resource = detail.get("resource")
    if not finding_type or not isinstance(resource, Mapping):
        return _reject(
            RejectionReason.MISSING_TYPE_OR_RESOURCE,
            "Finding is missing its type or resource.",
        )

    resource_type = _clean(resource.get("resourceType"))
    if not resource_type:
        return _reject(RejectionReason.MISSING_RESOURCE_TYPE, "Finding resource has no resourceType.")

    key_details = resource.get("accessKeyDetails")
    if not isinstance(key_details, Mapping):
        return _reject(
            RejectionReason.MISSING_ACCESS_KEY_DETAILS,
            f"Finding {finding_type} carries no access key details.",
        )

    user_name = _clean(key_details.get("userName"))
    if not user_name:
        return _reject(RejectionReason.MISSING_IDENTITY, "No username provided in the finding.")

    user_type = _clean(key_details.get("userType"))
    if not user_type:
        return _reject(RejectionReason.MISSING_USER_TYPE, f"No userType given for {user_name}.")
    if user_type != REMEDIABLE_USER_TYPE:
        return _reject(
            RejectionReason.UNSUPPORTED_USER_TYPE,
            f"User {user_name} is of type {user_type}; only {REMEDIABLE_USER_TYPE} can be remediated.",
        )

    region = _clean(detail.get("region")) or _clean(event.get("region")) or "unknown"
    return Finding(
        finding_type=finding_type,
        region=region,
        resource_type=resource_type,
        identity_type=user_type,
        user_name=user_name,
    )


def _clean(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _reject(reason: RejectionReason, detail: str) -> Rejection:
    rejection = Rejection(reason=reason, detail=detail)
    if rejection.is_failure:
        logger.error(detail)
    else:
        logger.info("No action taken (%s): %s", reason.value, detail)
    return rejection


__all__ = [
    "Finding",
    "Interpretation",
    "NOT_APPLICABLE",
    "REMEDIABLE_USER_TYPE",
    "Rejection",
    "RejectionReason",
    "interpret_event",
]

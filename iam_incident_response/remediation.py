"""Revoke every way an IAM user can authenticate."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List

from botocore.client import BaseClient
from botocore.exceptions import ClientError

from .logs import log_success
from .utils import is_no_such_entity, safe_paginate

logger = logging.getLogger(__name__)


class MfaStatus(str, Enum):
    """What the MFA step found for the user."""

    NO_DEVICES_FOUND = "NoDevicesFound"
    DEACTIVATED = "Deactivated"
    UNKNOWN = "Unknown"


class IdentityNotFoundError(Exception):
    """The IAM user targeted by a remediation does not exist."""

    def __init__(self, user_name: str) -> None:
        super().__init__(f"User {user_name} does not exist.")
        self.user_name = user_name


@dataclass
class RemediationOutcome:
    """Summary of what a single remediation pass changed."""

    user_name: str
    mfa_status: MfaStatus = MfaStatus.UNKNOWN
    mfa_devices_deactivated: int = 0
    login_disabled: bool = False
    login_profile_found: bool = False
    access_keys_revoked: int = 0
    revoked_access_key_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["mfa_status"] = self.mfa_status.value
        return data


class IamRemediator:
    """Run the MFA, login profile and access key steps against one user.

    Steps run strictly in that order. Every step lists the user's current
    credentials before acting, so running twice against the same user is safe.
    Backend errors other than ``NoSuchEntity`` propagate to the caller and stop
    the pass; nothing already done is rolled back.
    """

    def __init__(self, iam_client: BaseClient) -> None:
        self._iam = iam_client

    def remediate(self, user_name: str) -> RemediationOutcome:
        if not user_name:
            raise ValueError("user_name must be a non-empty string")

        logger.info("Starting incident response for user: %s", user_name)
        outcome = RemediationOutcome(user_name=user_name)
        self._deactivate_mfa_devices(outcome)
        self._disable_login_profile(outcome)
        self._delete_access_keys(outcome)
        logger.info("Incident response completed successfully for user: %s", user_name)
        return outcome

    def _deactivate_mfa_devices(self, outcome: RemediationOutcome) -> None:
        user_name = outcome.user_name
        logger.info("Attempting to deactivate MFA devices for user: %s", user_name)
        devices = self._list(user_name, "list_mfa_devices", "MFADevices")
        if not devices:
            logger.info("No MFA devices found for user: %s", user_name)
            outcome.mfa_status = MfaStatus.NO_DEVICES_FOUND
            return

        for device in devices:
            serial_number = device["SerialNumber"]
            logger.info("Deactivating MFA device with serial number: %s", serial_number)
            try:
                self._iam.deactivate_mfa_device(UserName=user_name, SerialNumber=serial_number)
            except ClientError as exc:
                if not is_no_such_entity(exc):
                    raise
                logger.info("MFA device %s was already removed", serial_number)
                continue
            outcome.mfa_devices_deactivated += 1
        outcome.mfa_status = MfaStatus.DEACTIVATED
        log_success(logger, "MFA devices deactivated for user: %s", user_name)

    def _disable_login_profile(self, outcome: RemediationOutcome) -> None:
        user_name = outcome.user_name
        logger.info("Disabling login profile for user: %s", user_name)
        try:
            self._iam.update_login_profile(UserName=user_name, PasswordResetRequired=True)
        except ClientError as exc:
            if not is_no_such_entity(exc):
                raise
            logger.info("No login profile exists for user: %s", user_name)
        else:
            outcome.login_profile_found = True
        outcome.login_disabled = True
        log_success(logger, "Login profile disabled for user: %s", user_name)

    def _delete_access_keys(self, outcome: RemediationOutcome) -> None:
        user_name = outcome.user_name
        logger.info("Fetching access keys for user: %s", user_name)
        for key in self._list(user_name, "list_access_keys", "AccessKeyMetadata"):
            access_key_id = key["AccessKeyId"]
            logger.info("Deleting access key: %s", access_key_id)
            try:
                self._iam.delete_access_key(UserName=user_name, AccessKeyId=access_key_id)
            except ClientError as exc:
                if not is_no_such_entity(exc):
                    raise
                logger.info("Access key %s was already deleted", access_key_id)
                continue
            outcome.access_keys_revoked += 1
            outcome.revoked_access_key_ids.append(access_key_id)
        log_success(
            logger,
            "All access keys deleted for user: %s (%d revoked)",
            user_name,
            outcome.access_keys_revoked,
        )

    def _list(self, user_name: str, method_name: str, result_key: str) -> List[dict]:
        """List the user's credentials, mapping ``NoSuchEntity`` to a missing user."""

        try:
            return list(safe_paginate(self._iam, method_name, result_key, UserName=user_name))
        except ClientError as exc:
            if is_no_such_entity(exc):
                raise IdentityNotFoundError(user_name) from exc
            raise


__all__ = ["IamRemediator", "IdentityNotFoundError", "MfaStatus", "RemediationOutcome"]

"""Runtime configuration read from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

import boto3


@dataclass(frozen=True)
class Settings:
    """Where to act and where to report."""

    topic_arn: Optional[str] = None
    region: Optional[str] = None
    profile: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``SNS_TOPIC_ARN``, ``AWS_REGION``, ``AWS_PROFILE`` and ``LOG_LEVEL``."""

        env = os.environ if environ is None else environ
        return cls(
            topic_arn=env.get("SNS_TOPIC_ARN") or None,
            region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or None,
            profile=env.get("AWS_PROFILE") or None,
            log_level=env.get("LOG_LEVEL") or "INFO",
        )

    def override(self, **changes: Optional[str]) -> "Settings":
        """Return a copy with every non-``None`` value in *changes* applied."""

        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    def session(self) -> boto3.session.Session:
        return boto3.Session(profile_name=self.profile, region_name=self.region)


__all__ = ["Settings"]

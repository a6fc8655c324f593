"""Shared helpers for talking to AWS through botocore."""
from __future__ import annotations

from typing import Iterator

from botocore.client import BaseClient
from botocore.exceptions import ClientError, OperationNotPageableError

NO_SUCH_ENTITY = "NoSuchEntity"


def safe_paginate(client: BaseClient, method_name: str, result_key: str, **kwargs) -> Iterator[dict]:
    """Iterate through paginated boto3 results while handling pagination gaps."""

    try:
        paginator = client.get_paginator(method_name)
    except OperationNotPageableError:
        response = getattr(client, method_name)(**kwargs)
        for item in response.get(result_key, []):
            yield item
        return

    for page in paginator.paginate(**kwargs):
        for item in page.get(result_key, []):
            yield item


def error_code(exc: Exception) -> str:
    """Return the AWS error code from a botocore exception, if present."""

    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code", "")
    return ""


def error_message(exc: Exception) -> str:
    """Return the service supplied message for *exc*, falling back to ``str(exc)``."""

    if isinstance(exc, ClientError):
        message = exc.response.get("Error", {}).get("Message")
        if message:
            return message
    return str(exc)


def is_no_such_entity(exc: Exception) -> bool:
    """Whether *exc* is IAM's ``NoSuchEntity`` error."""

    return error_code(exc) == NO_SUCH_ENTITY


__all__ = ["NO_SUCH_ENTITY", "error_code", "error_message", "is_no_such_entity", "safe_paginate"]

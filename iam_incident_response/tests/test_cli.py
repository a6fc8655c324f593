"""Tests for the command line interface."""

from __future__ import annotations

import json
import logging

import pytest

from conftest import guardduty_event
from iam_incident_response.cli import main, parse_args
from iam_incident_response.config import Settings
from iam_incident_response.logs import configure_logging


def test_username_and_event_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        parse_args(["--username", "a", "--event", "b.json"])


def test_cli_remediates_user(aws_session, capsys) -> None:
    iam = aws_session.client("iam")
    iam.create_user(UserName="OptsUser")
    iam.create_access_key(UserName="OptsUser")

    assert main(["--username", "OptsUser", "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "Success: User OptsUser disabled."
    assert payload["outcome"]["access_keys_revoked"] == 1
    assert payload["outcome"]["mfa_status"] == "NoDevicesFound"


def test_cli_reads_event_file(aws_session, tmp_path, capsys) -> None:
    aws_session.client("iam").create_user(UserName="OptsUser")
    event_path = tmp_path / "finding.json"
    event_path.write_text(json.dumps(guardduty_event("OptsUser")), encoding="utf-8")

    assert main(["--event", str(event_path)]) == 0
    assert capsys.readouterr().out.strip() == "Incident response completed"


def test_cli_failure_exit_code(aws_session, capsys) -> None:
    assert main(["--username", "Ghost"]) == 1
    assert capsys.readouterr().out.strip() == "Failed: User Ghost does not exist."


def test_cli_rejects_unreadable_event(aws_credentials, tmp_path, capsys) -> None:
    assert main(["--event", str(tmp_path / "missing.json")]) == 1
    assert "could not read event" in capsys.readouterr().err


def test_settings_from_env() -> None:
    settings = Settings.from_env(
        {"SNS_TOPIC_ARN": "arn:aws:sns:eu-west-1:1:alerts", "AWS_REGION": "eu-west-1", "LOG_LEVEL": "debug"}
    )

    assert settings == Settings(
        topic_arn="arn:aws:sns:eu-west-1:1:alerts", region="eu-west-1", log_level="debug"
    )
    assert settings.override(region="us-west-2", profile=None).region == "us-west-2"


def test_configure_logging_accepts_success_level() -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("success")
        assert root.level == 25
    finally:
        root.setLevel(previous)

    with pytest.raises(ValueError):
        configure_logging("chatty")

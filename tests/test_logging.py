"""
tests.test_logging

Structured logging tests.

Responsibilities:
- `configure_logging` renders JSON lines with a stable service field.
- Token fingerprints are stable and short.
"""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from directory_auth.observability.logging import configure_logging, get_logger, token_fingerprint


@pytest.fixture
def json_logging():
    configure_logging(service_name="directory-auth-test", level="INFO")
    yield
    structlog.reset_defaults()


def test_configure_logging_emits_json(json_logging, caplog) -> None:
    caplog.set_level(logging.INFO)
    get_logger("directory_auth.test").info("trust_established", application="app1")

    event = json.loads(caplog.records[-1].getMessage())
    assert event["event"] == "trust_established"
    assert event["service"] == "directory-auth-test"
    assert event["application"] == "app1"
    assert event["level"] == "info"


def test_token_fingerprint() -> None:
    assert token_fingerprint(None) is None
    assert token_fingerprint("") is None
    fp = token_fingerprint("PTOK-XYZ")
    assert fp == token_fingerprint("PTOK-XYZ")
    assert len(fp) == 12
    assert "PTOK" not in fp

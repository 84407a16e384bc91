# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Unit tests for the config_logging.py module."""

import json
import logging
from typing import Any

import pytest

from iconfetch.configs import settings
from iconfetch.configs.app_configs.config_logging import (
    GCPCompatibleJSONFormatter,
    configure_logging,
)


@pytest.fixture(autouse=True)
def restore_logging_settings():
    """Put the logging settings back after each test."""
    old_format = settings.logging.format
    old_env = settings.current_env
    yield
    settings.logging.format = old_format
    settings.current_env = old_env
    configure_logging()


def test_configure_logging_invalid_format() -> None:
    """Test that configure_logging will raise a ValueError when encountering unknown log
    formats.
    """
    settings.logging.format = "invalid"

    with pytest.raises(ValueError) as excinfo:
        configure_logging()

    assert "Invalid log format:" in str(excinfo)


def test_configure_logging_mozlog_production() -> None:
    """Test that configure_logging will raise a ValueError when using a format other
    than 'mozlog' in production.
    """
    settings.current_env = "production"
    settings.logging.format = "pretty"

    with pytest.raises(ValueError) as excinfo:
        configure_logging()

    assert "Log format must be 'mozlog' in production" in str(excinfo)


@pytest.mark.parametrize(
    ("log_format", "handler_name"),
    [("mozlog", "console-mozlog"), ("pretty", "console-pretty")],
)
def test_configure_log_handler_assigned(log_format: str, handler_name: str) -> None:
    """Test that the log handler is assigned as expected for the configured format."""
    settings.logging.format = log_format
    configure_logging()

    log_manager: Any = logging.root.manager
    assert log_manager.loggerDict["iconfetch"].handlers[0].name == handler_name
    assert log_manager.loggerDict["request.summary"].handlers[0].name == handler_name


def test_gcp_compatible_json_formatter() -> None:
    """Test that JSON records carry the renamed fields, a timestamp and a severity."""
    formatter = GCPCompatibleJSONFormatter(
        "%(name)s %(levelname)s %(message)s",
        rename_fields={"name": "Logger", "levelname": "Type"},
    )
    record = logging.LogRecord(
        name="iconfetch.icons.resolver",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Checking %s for icons",
        args=("https://example.com",),
        exc_info=None,
    )

    data = json.loads(formatter.format(record))

    assert data["Logger"] == "iconfetch.icons.resolver"
    assert data["Type"] == "WARNING"
    assert data["message"] == "Checking https://example.com for icons"
    assert data["severity"] == 400
    assert data["Timestamp"] == int(record.created * 1_000_000_000)

"""
Tests for logging helpers.
"""

import logging

import pytest

from syllabus_api.app.core.logging_config import setup_logging, uvicorn_log_level


@pytest.mark.parametrize(
    "configured, expected",
    [
        ("INFO", "info"),
        ("debug", "debug"),
        (" Error ", "error"),
        ("TRACE", "trace"),
        ("WARN", "warning"),
        ("warning", "warning"),
        ("verbose", "info"),
        ("", "info"),
    ],
)
def test_uvicorn_log_level(configured, expected):
    assert uvicorn_log_level(configured) == expected


def test_setup_logging_leaves_configured_root_alone():
    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        before = list(root.handlers)
        setup_logging("DEBUG")
        assert root.handlers == before
    finally:
        root.removeHandler(handler)

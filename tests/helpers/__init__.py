"""Test helper utilities for the offsync test suite."""

from tests.helpers.cli_assertions import (
    assert_command_failed,
    assert_command_success,
    assert_error_message,
    assert_output_contains,
    assert_output_matches,
    assert_success_indicator,
)
from tests.helpers.providers import RecordingProvider

__all__ = [
    "RecordingProvider",
    "assert_command_success",
    "assert_command_failed",
    "assert_output_matches",
    "assert_output_contains",
    "assert_error_message",
    "assert_success_indicator",
]

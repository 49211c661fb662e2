"""Tests for CLI error formatting."""

import pytest

from offsync.core.errors import (
    OffsyncCliError,
    project_not_found_error,
    sync_failed_error,
)


class TestOffsyncCliError:
    """Tests for OffsyncCliError."""

    def test_message_without_hint(self):
        assert OffsyncCliError("Something broke").format_message() == "Something broke"

    def test_message_with_hint(self):
        error = OffsyncCliError("Something broke", hint="Try again")
        assert error.format_message() == "Something broke\nHint: Try again"

    def test_exit_code_is_one(self):
        assert OffsyncCliError("Something broke").exit_code == 1


class TestErrorFactories:
    """Tests for the common error factory functions."""

    def test_project_not_found(self):
        with pytest.raises(OffsyncCliError) as exc_info:
            project_not_found_error()

        assert exc_info.value.message == "Not in an offsync project"
        assert "offsync config init" in exc_info.value.hint

    def test_sync_failed(self):
        with pytest.raises(OffsyncCliError, match="Sync failed: disk full"):
            sync_failed_error("disk full")

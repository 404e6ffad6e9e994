"""Unit tests for slack_status/errors.

Tests verify:
- Every code is registered under the category matching its prefix
- Exceptions format their message and remediation from the registry
- The terminal formatter output
"""

import pytest

from slack_status.errors import (
    ERROR_REGISTRY,
    ConfigurationError,
    ErrorCategory,
    RemoteError,
    SlackStatusError,
    format_error,
    format_warnings,
    get_error,
    get_errors_by_category,
)

_PREFIX_CATEGORY = {
    "E-1": ErrorCategory.CONFIG,
    "E-2": ErrorCategory.IP_LOOKUP,
    "E-3": ErrorCategory.CACHE,
    "E-4": ErrorCategory.SLACK_API,
}


@pytest.mark.parametrize("code", sorted(ERROR_REGISTRY))
def test_code_matches_category(code):
    error = ERROR_REGISTRY[code]
    assert error.code == code
    assert error.category == _PREFIX_CATEGORY[code[:3]]


@pytest.mark.parametrize(
    "code,title",
    [
        ("E-1003", "Missing Slack Token"),
        ("E-1004", "Duplicate Location IP"),
        ("E-2002", "Unparseable Public IP"),
        ("E-3001", "Status Cache Unreadable"),
        ("E-4003", "Slack Authentication Failed"),
    ],
)
def test_titles(code, title):
    assert get_error(code).title == title


def test_unknown_code_returns_none():
    assert get_error("E-9999") is None


def test_non_fatal_codes():
    assert {e.code for e in ERROR_REGISTRY.values() if not e.is_fatal} == {"E-1004", "E-3001"}


def test_errors_by_category():
    codes = [e.code for e in get_errors_by_category(ErrorCategory.CACHE)]
    assert codes == ["E-3001", "E-3002"]


class TestSlackStatusError:

    def test_message_from_template(self):
        error = ConfigurationError("E-1005", ip="1.2.3.4")
        assert error.message == "No location is configured for IP 1.2.3.4."
        assert str(error) == "E-1005: No location is configured for IP 1.2.3.4."
        assert error.context == {"ip": "1.2.3.4"}

    def test_remediation_is_formatted(self):
        error = RemoteError("E-4002", method="users.profile.set", error="too_long")
        assert "https://api.slack.com/methods/users.profile.set" in error.remediation

    def test_missing_placeholder_keeps_template(self):
        error = ConfigurationError("E-1002", path="x.yaml")
        assert "{detail}" in error.message

    def test_unknown_code(self):
        error = SlackStatusError("E-9999")
        assert error.title == "Unknown Error"
        assert "E-9999" in error.message

    def test_subclasses_share_base(self):
        assert issubclass(RemoteError, SlackStatusError)


class TestFormatter:

    def test_format_error_with_remediation(self):
        output = format_error(ConfigurationError("E-1003"))
        first, second = output.split("\n")
        assert first.startswith("E-1003 Missing Slack Token: ")
        assert second.startswith("  Action: ")

    def test_format_error_without_remediation(self):
        assert "Action" not in format_error(ConfigurationError("E-1003"), include_remediation=False)

    def test_format_warnings(self):
        assert format_warnings([]) == ""
        assert format_warnings(["a", "b"]) == "Warning: a\nWarning: b"

"""Tests for status resolution: precedence, manual hold, expirations."""

import logging
from ipaddress import ip_address

import pytest

from conftest import NOW
from slack_status.config import Location, SlackStatusConfig, StatusTemplate
from slack_status.services.resolver import ResolutionReason, resolve
from slack_status.services.status_cache import CachedStatus

HOME_IP = ip_address("1.2.3.4")
UNKNOWN_IP = ip_address("9.9.9.9")


def _manual(expiration: int) -> CachedStatus:
    return CachedStatus(text="vacation", emoji=":beach:", expiration=expiration, manually_set=True)


class TestAutomaticResolution:
    """Location and default paths, with no cache."""

    def test_matching_location(self, home_config, status_cache):
        resolved = resolve(HOME_IP, home_config, status_cache, now=NOW)
        assert resolved.status.text == "home"
        assert resolved.status.emoji == ":house:"
        assert resolved.computed_expiration == 0
        assert resolved.suppress_update is False
        assert resolved.reason is ResolutionReason.NO_CACHE_CONFLICT
        assert resolved.manual is False

    def test_unknown_ip_uses_fallback(self, home_config, status_cache):
        resolved = resolve(UNKNOWN_IP, home_config, status_cache, now=NOW)
        assert resolved.status.text == "commuting"
        assert resolved.status.emoji == ":mountain_railway:"
        assert resolved.computed_expiration == NOW + 3600
        assert resolved.suppress_update is False

    def test_unknown_ip_uses_user_default(self, home_config, status_cache):
        home_config.defaults = StatusTemplate(text="away", emoji=":car:", expire_after_hours=4)
        resolved = resolve(UNKNOWN_IP, home_config, status_cache, now=NOW)
        assert resolved.status.text == "away"
        assert resolved.computed_expiration == NOW + 4 * 3600

    def test_location_expiry_in_hours(self, status_cache):
        config = SlackStatusConfig(
            token="x",
            locations=[Location(ip="1.2.3.4", text="office", emoji=":office:", expire_after_hours=9)],
        )
        resolved = resolve(HOME_IP, config, status_cache, now=NOW)
        assert resolved.computed_expiration == NOW + 9 * 3600

    def test_zero_hours_expires_now(self, status_cache):
        """expire_after_hours=0 is a real timestamp, distinct from never."""
        config = SlackStatusConfig(
            token="x",
            locations=[Location(ip="1.2.3.4", text="brb", emoji=":coffee:", expire_after_hours=0)],
        )
        resolved = resolve(HOME_IP, config, status_cache, now=NOW)
        assert resolved.computed_expiration == NOW

    def test_duplicate_location_falls_back_with_warning(self, status_cache):
        config = SlackStatusConfig(
            token="x",
            locations=[
                Location(ip="1.2.3.4", text="home", emoji=":house:"),
                Location(ip="1.2.3.4", text="office", emoji=":office:"),
            ],
        )
        resolved = resolve(HOME_IP, config, status_cache, now=NOW)
        assert resolved.status.text == "commuting"
        assert resolved.suppress_update is False
        assert len(resolved.warnings) == 1
        assert "E-1004" in resolved.warnings[0]

    def test_automatic_requires_ip(self, home_config, status_cache):
        with pytest.raises(ValueError):
            resolve(None, home_config, status_cache, now=NOW)


class TestManualHold:
    """A still-valid manual status blocks automatic updates."""

    def test_active_hold_suppresses(self, home_config, status_cache):
        status_cache.save(_manual(NOW + 3600))
        resolved = resolve(UNKNOWN_IP, home_config, status_cache, now=NOW)
        assert resolved.suppress_update is True
        assert resolved.reason is ResolutionReason.MANUAL_HOLD_ACTIVE

    def test_active_hold_returns_cached_status_over_location(self, home_config, status_cache):
        status_cache.save(_manual(NOW + 7200))
        resolved = resolve(HOME_IP, home_config, status_cache, now=NOW)
        assert resolved.status.text == "vacation"
        assert resolved.status.emoji == ":beach:"
        assert resolved.computed_expiration == NOW + 7200
        assert resolved.suppress_update is True

    def test_expired_hold_lets_location_through(self, home_config, status_cache):
        status_cache.save(_manual(NOW - 10))
        resolved = resolve(HOME_IP, home_config, status_cache, now=NOW)
        assert resolved.suppress_update is False
        assert resolved.status.text == "home"

    def test_hold_ending_exactly_now_has_lapsed(self, home_config, status_cache):
        status_cache.save(_manual(NOW))
        resolved = resolve(HOME_IP, home_config, status_cache, now=NOW)
        assert resolved.suppress_update is False

    def test_never_expiring_manual_status_holds(self, home_config, status_cache):
        """Expiration 0 means never, not long ago."""
        status_cache.save(_manual(0))
        resolved = resolve(HOME_IP, home_config, status_cache, now=NOW)
        assert resolved.suppress_update is True
        assert resolved.reason is ResolutionReason.MANUAL_HOLD_ACTIVE

    def test_automatic_cache_entry_never_holds(self, home_config, status_cache):
        status_cache.save(CachedStatus(text="office", emoji=":office:", expiration=NOW + 3600))
        resolved = resolve(HOME_IP, home_config, status_cache, now=NOW)
        assert resolved.suppress_update is False
        assert resolved.status.text == "home"


class TestManualOverride:
    """Explicit overrides always go through."""

    def test_override_wins_over_active_hold(self, home_config, status_cache, vacation_override):
        status_cache.save(_manual(NOW + 3600))
        resolved = resolve(HOME_IP, home_config, status_cache, manual_override=vacation_override, now=NOW)
        assert resolved.suppress_update is False
        assert resolved.status == vacation_override
        assert resolved.computed_expiration == NOW + 2 * 3600

    def test_override_marks_cache_entry_manual(self, home_config, status_cache, vacation_override):
        status_cache.save(CachedStatus(text="home", emoji=":house:", expiration=0))
        resolved = resolve(HOME_IP, home_config, status_cache, manual_override=vacation_override, now=NOW)
        cached = resolved.to_cached()
        assert cached.manually_set is True
        assert cached.text == "vacation"

    def test_override_without_expiry_never_expires(self, home_config, status_cache):
        override = StatusTemplate(text="focus", emoji=":headphones:")
        resolved = resolve(None, home_config, status_cache, manual_override=override, now=NOW)
        assert resolved.computed_expiration == 0
        assert resolved.manual is True

    def test_override_does_not_read_cache(self, home_config, status_cache, vacation_override):
        status_cache.path.parent.mkdir(parents=True)
        status_cache.path.write_text("{corrupt")
        resolved = resolve(HOME_IP, home_config, status_cache, manual_override=vacation_override, now=NOW)
        assert resolved.warnings == []


class TestIgnoredIps:
    """Ignored public IPs never trigger an update."""

    def test_ignored_ip_keeps_cached_status(self, home_config, status_cache):
        home_config.ignore_ips = [ip_address("5.6.7.8")]
        status_cache.save(CachedStatus(text="home", emoji=":house:", expiration=0))
        resolved = resolve(ip_address("5.6.7.8"), home_config, status_cache, now=NOW)
        assert resolved.suppress_update is True
        assert resolved.reason is ResolutionReason.IGNORED_IP
        assert resolved.status.text == "home"

    def test_ignored_ip_without_cache_shows_default(self, home_config, status_cache):
        home_config.ignore_ips = [ip_address("5.6.7.8")]
        resolved = resolve(ip_address("5.6.7.8"), home_config, status_cache, now=NOW)
        assert resolved.suppress_update is True
        assert resolved.status.text == "commuting"

    def test_manual_hold_reported_before_ignored_ip(self, home_config, status_cache):
        home_config.ignore_ips = [ip_address("5.6.7.8")]
        status_cache.save(_manual(NOW + 60))
        resolved = resolve(ip_address("5.6.7.8"), home_config, status_cache, now=NOW)
        assert resolved.reason is ResolutionReason.MANUAL_HOLD_ACTIVE


class TestCacheReadErrors:
    """A corrupt cache degrades to "no cache" with a warning."""

    def test_corrupt_cache_is_ignored_with_warning(self, home_config, status_cache, caplog):
        caplog.set_level(logging.WARNING)
        status_cache.path.parent.mkdir(parents=True)
        status_cache.path.write_text('{"text": "vacation"')
        resolved = resolve(HOME_IP, home_config, status_cache, now=NOW)
        assert resolved.status.text == "home"
        assert resolved.suppress_update is False
        assert len(resolved.warnings) == 1
        assert "E-3001" in resolved.warnings[0]
        assert "Ignoring status cache" in caplog.text

    def test_wrong_shape_cache_is_ignored(self, home_config, status_cache):
        status_cache.path.parent.mkdir(parents=True)
        status_cache.path.write_text('{"status": {"text": "x"}, "manually_set": true}')
        resolved = resolve(HOME_IP, home_config, status_cache, now=NOW)
        assert resolved.suppress_update is False
        assert resolved.warnings

    def test_undecodable_cache_is_ignored(self, home_config, status_cache):
        status_cache.path.parent.mkdir(parents=True)
        status_cache.path.write_bytes(b'{"text": "\xff\xfe"}')
        resolved = resolve(HOME_IP, home_config, status_cache, now=NOW)
        assert resolved.status.text == "home"
        assert resolved.suppress_update is False
        assert "E-3001" in resolved.warnings[0]

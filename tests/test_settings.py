"""Tests for configuration loading and timezone helpers."""

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError as SettingsValidationError

from activity_trail.config import Settings, get_settings
from activity_trail.utils import datetime as app_datetime


def test_defaults_keep_create_limit_below_edit_limit():
    settings = get_settings()

    assert settings.comment_create_max_length == 2000
    assert settings.comment_edit_max_length == 10000
    assert settings.feed_default_limit == 50
    assert settings.feed_max_limit == 100


def test_default_feed_limit_cannot_exceed_maximum():
    with pytest.raises(SettingsValidationError):
        Settings(
            database_url="sqlite://",
            secret_key="secret",
            feed_default_limit=200,
            feed_max_limit=100,
        )


def test_limits_are_read_from_environment(settings_override):
    settings_override(comment_create_max_length=120, feed_max_limit=10, feed_default_limit=5)

    settings = get_settings()

    assert settings.comment_create_max_length == 120
    assert settings.feed_max_limit == 10


@pytest.mark.parametrize(
    "name, offset",
    [
        ("UTC-05:00", timedelta(hours=-5)),
        ("GMT+0530", timedelta(hours=5, minutes=30)),
    ],
)
def test_resolve_timezone(name, offset):
    tz = app_datetime._resolve_timezone(name)

    assert tz.utcoffset(None) == offset


def test_unknown_timezone_falls_back_to_utc():
    tz = app_datetime._resolve_timezone("Mars/Olympus_Mons")

    assert tz.utcoffset(datetime(2024, 1, 15)) == timedelta(0)

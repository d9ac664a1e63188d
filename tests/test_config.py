from datetime import timedelta

import pytest

from community_points.config import SECRET_PLACEHOLDER, Settings


def test_defaults():
    settings = Settings.from_env({})

    assert settings.points_file == "points.json"
    assert settings.cooldown == timedelta(hours=24)
    assert settings.max_ranking_display == 10
    assert settings.port == 5000
    assert settings.channel_secret == SECRET_PLACEHOLDER


def test_from_env():
    settings = Settings.from_env({
        "LINE_CHANNEL_ACCESS_TOKEN": "token",
        "LINE_CHANNEL_SECRET": "secret",
        "POINTS_FILE": "/data/points.json",
        "POINT_COOLDOWN_HOURS": "12",
        "MAX_RANKING_DISPLAY": "5",
        "PORT": "8080",
    })

    assert settings.channel_access_token == "token"
    assert settings.channel_secret == "secret"
    assert settings.points_file == "/data/points.json"
    assert settings.cooldown == timedelta(hours=12)
    assert settings.max_ranking_display == 5
    assert settings.port == 8080


@pytest.mark.parametrize("name,value", [
    ("POINT_COOLDOWN_HOURS", "a day"),
    ("POINT_COOLDOWN_HOURS", "0"),
    ("MAX_RANKING_DISPLAY", "-1"),
    ("PORT", "80.5"),
])
def test_invalid_numbers(name, value):
    with pytest.raises(ValueError, match=name):
        Settings.from_env({name: value})


def test_missing_credentials_warn(caplog):
    Settings.from_env({})

    assert sum(record.levelname == "WARNING" for record in caplog.records) == 2

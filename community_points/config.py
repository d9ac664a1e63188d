"""
⚙️ Settings
إعدادات البوت من متغيرات البيئة
"""

import logging
import os
from dataclasses import dataclass
from datetime import timedelta

logger = logging.getLogger(__name__)

TOKEN_PLACEHOLDER = 'YOUR_CHANNEL_ACCESS_TOKEN'
SECRET_PLACEHOLDER = 'YOUR_CHANNEL_SECRET'


def _int_setting(environ, name, default, minimum=0):
    raw = environ.get(name, '')
    if raw == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    channel_access_token: str = TOKEN_PLACEHOLDER
    channel_secret: str = SECRET_PLACEHOLDER
    points_file: str = 'points.json'
    point_cooldown_hours: int = 24
    max_ranking_display: int = 10
    port: int = 5000

    @property
    def cooldown(self):
        return timedelta(hours=self.point_cooldown_hours)

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ

        settings = cls(
            channel_access_token=environ.get('LINE_CHANNEL_ACCESS_TOKEN', TOKEN_PLACEHOLDER),
            channel_secret=environ.get('LINE_CHANNEL_SECRET', SECRET_PLACEHOLDER),
            points_file=environ.get('POINTS_FILE') or 'points.json',
            point_cooldown_hours=_int_setting(environ, 'POINT_COOLDOWN_HOURS', 24, minimum=1),
            max_ranking_display=_int_setting(environ, 'MAX_RANKING_DISPLAY', 10),
            port=_int_setting(environ, 'PORT', 5000),
        )

        if settings.channel_access_token == TOKEN_PLACEHOLDER:
            logger.warning("⚠️ لم يتم تعيين LINE_CHANNEL_ACCESS_TOKEN")
        if settings.channel_secret == SECRET_PLACEHOLDER:
            logger.warning("⚠️ لم يتم تعيين LINE_CHANNEL_SECRET")
        return settings

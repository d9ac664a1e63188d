"""
📨 Message Handlers
ربط رسائل المستخدمين بعمليات سجل النقاط
"""

import logging

from .errors import LedgerError
from .flex_messages import (
    UNKNOWN_USER, create_error_message, create_points_message, create_ranking_message
)

logger = logging.getLogger(__name__)

RANKING_COMMANDS = ('ranking', '/ranking', 'الصدارة', '/الصدارة')
MYPOINTS_COMMANDS = ('mypoints', '/mypoints', 'نقاطي', '/نقاطي')


def get_display_name_safe(line_bot_api, user_id):
    try:
        profile = line_bot_api.get_profile(user_id)
        return profile.display_name
    except Exception as e:
        logger.warning(f"تعذر الحصول على الملف الشخصي للمستخدم {user_id}: {e}")
        return UNKNOWN_USER


def handle_activity(ledger, user_id):
    """أي رسالة عادية تحاول منح نقطة؛ النتيجة لا تُرسل للمستخدم"""
    try:
        ledger.try_claim(user_id)
    except LedgerError as e:
        logger.error(f"خطأ في منح النقطة للمستخدم {user_id}: {e}")


def handle_ranking(ledger, line_bot_api, limit):
    entries = [
        (get_display_name_safe(line_bot_api, user_id), record.score)
        for user_id, record in ledger.top_users(limit)
    ]
    return create_ranking_message(entries)


def handle_my_points(ledger, line_bot_api, user_id):
    record = ledger.get_or_create(user_id)
    return create_points_message(get_display_name_safe(line_bot_api, user_id), record.score)


def handle_text_message(ledger, line_bot_api, user_id, text, max_ranking_display=10):
    """
    معالجة رسالة نصية واحدة.

    Returns the reply for ``ranking``/``mypoints`` commands, or None for
    ordinary messages, which only count as activity.
    """
    command = text.strip().lower()

    try:
        if command in RANKING_COMMANDS:
            return handle_ranking(ledger, line_bot_api, max_ranking_display)
        if command in MYPOINTS_COMMANDS:
            return handle_my_points(ledger, line_bot_api, user_id)
    except LedgerError as e:
        logger.error(f"خطأ في أمر {command}: {e}")
        return create_error_message()

    handle_activity(ledger, user_id)
    return None

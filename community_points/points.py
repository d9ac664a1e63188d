"""
💎 Community Points Ledger
سجل نقاط المجتمع: نقطة واحدة لكل مستخدم كل فترة انتظار، مع ترتيب المتصدرين

The ledger keeps every user's record in memory and mirrors the whole mapping
to a JSON snapshot after each successful claim:

    {
      "U4af4980629": {"score": 3, "lastClaimedAt": "2024-05-01T12:00:00.000Z"},
      "U9be1c2d8f1": {"score": 0, "lastClaimedAt": ""}
    }

An empty ``lastClaimedAt`` means the user has never claimed.
"""

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from .errors import InvalidInput, StorageCorrupt, StorageWriteFailure

logger = logging.getLogger(__name__)

POINTS_FILE = "points.json"
DEFAULT_COOLDOWN = timedelta(hours=24)

RECORD_FIELDS = ("score", "lastClaimedAt")


@dataclass
class PointRecord:
    score: int = 0
    last_claimed_at: Optional[datetime] = None


def _utc_now():
    return datetime.now(timezone.utc)


def format_timestamp(value):
    """تحويل الوقت إلى نص ISO-8601 بتوقيت UTC (نص فارغ إذا لم يُحدد)"""
    if value is None:
        return ""
    value = value.astimezone(timezone.utc).replace(tzinfo=None)
    timespec = "milliseconds" if value.microsecond % 1000 == 0 else "microseconds"
    return value.isoformat(timespec=timespec) + "Z"


def parse_timestamp(text):
    """قراءة نص ISO-8601؛ النص الفارغ يعني أن المستخدم لم يطالب بعد"""
    if text == "":
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        raise ValueError("timestamp has no timezone")
    return value.astimezone(timezone.utc)


def encode_points(points: Dict[str, PointRecord]) -> Dict[str, dict]:
    return {
        user_id: {
            "score": record.score,
            "lastClaimedAt": format_timestamp(record.last_claimed_at),
        }
        for user_id, record in points.items()
    }


def decode_points(data, source="<snapshot>") -> Dict[str, PointRecord]:
    """التحقق من بنية الملف وتحويلها إلى سجلات؛ أي خلل يرفع StorageCorrupt"""
    if not isinstance(data, dict):
        raise StorageCorrupt(source, f"expected an object, got {type(data).__name__}")

    points = {}
    for user_id, raw in data.items():
        if not user_id.strip():
            raise StorageCorrupt(source, f"empty user id {user_id!r}")
        if not isinstance(raw, dict):
            raise StorageCorrupt(source, f"record for {user_id!r} is not an object")
        if set(raw) != set(RECORD_FIELDS):
            raise StorageCorrupt(
                source, f"record for {user_id!r} has fields {sorted(raw)}, expected {list(RECORD_FIELDS)}"
            )

        score = raw["score"]
        # bool is a subclass of int in Python
        if not isinstance(score, int) or isinstance(score, bool) or score < 0:
            raise StorageCorrupt(source, f"invalid score for {user_id!r}: {score!r}")

        claimed = raw["lastClaimedAt"]
        if not isinstance(claimed, str):
            raise StorageCorrupt(source, f"invalid lastClaimedAt for {user_id!r}: {claimed!r}")
        try:
            last_claimed_at = parse_timestamp(claimed)
        except ValueError as e:
            raise StorageCorrupt(source, f"invalid lastClaimedAt for {user_id!r}: {e}") from e

        points[user_id] = PointRecord(score=score, last_claimed_at=last_claimed_at)
    return points


def dumps(points: Dict[str, PointRecord]) -> str:
    return json.dumps(encode_points(points), ensure_ascii=False, indent=2)


def loads(text, source="<snapshot>") -> Dict[str, PointRecord]:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise StorageCorrupt(source, f"invalid JSON: {e}") from e
    return decode_points(data, source)


class Ledger:
    """
    سجل النقاط: الذاكرة هي المصدر أثناء التشغيل، والملف هو النسخة الدائمة الوحيدة.

    All access goes through one lock so that the check-increment-save sequence
    of ``try_claim`` is never interleaved with another claim.
    """

    def __init__(self, path=POINTS_FILE, cooldown=DEFAULT_COOLDOWN,
                 clock: Optional[Callable[[], datetime]] = None):
        self.path = Path(path)
        self.cooldown = cooldown
        self._clock = clock or _utc_now
        self._lock = threading.Lock()
        self._points: Dict[str, PointRecord] = {}
        self.load()

    def __len__(self):
        with self._lock:
            return len(self._points)

    def __contains__(self, user_id):
        with self._lock:
            return user_id in self._points

    def load(self):
        """تحميل النقاط من الملف؛ عدم وجود الملف ليس خطأ"""
        with self._lock:
            if not self.path.exists():
                self._points = {}
                logger.info(f"لا يوجد ملف نقاط في {self.path}، البدء بسجل فارغ")
                return
            try:
                text = self.path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise StorageCorrupt(self.path, f"cannot read snapshot: {e}") from e
            self._points = loads(text, self.path)
            logger.info(f"تم تحميل نقاط {len(self._points)} مستخدم من {self.path}")

    def snapshot(self):
        with self._lock:
            return encode_points(self._points)

    def get_or_create(self, user_id) -> PointRecord:
        """الحصول على نقاط المستخدم، مع إنشاء سجل جديد إذا لم يكن موجوداً (بدون حفظ)"""
        self._check_user_id(user_id)
        with self._lock:
            record = self._points.setdefault(user_id, PointRecord())
            return replace(record)

    def try_claim(self, user_id, now: Optional[datetime] = None) -> bool:
        """
        محاولة منح نقطة واحدة للمستخدم.

        Returns True and saves the snapshot if the cooldown has passed, False
        otherwise. If the save fails, the in-memory change is undone and
        StorageWriteFailure is raised.
        """
        self._check_user_id(user_id)
        now = self._normalize_now(now)

        with self._lock:
            created = user_id not in self._points
            record = self._points.setdefault(user_id, PointRecord())
            if not self._can_claim(record.last_claimed_at, now):
                return False

            previous = replace(record)
            record.score += 1
            record.last_claimed_at = now
            try:
                self._save()
            except StorageWriteFailure:
                if created:
                    del self._points[user_id]
                else:
                    record.score = previous.score
                    record.last_claimed_at = previous.last_claimed_at
                raise
            score = record.score

        logger.info(f"نقطة جديدة للمستخدم {user_id}: المجموع {score}")
        return True

    def top_users(self, limit) -> List[Tuple[str, PointRecord]]:
        """
        المتصدرون حسب النقاط تنازلياً.

        Equal scores keep ledger order: snapshot order for loaded users, then
        the order in which new users were first seen.
        """
        if not isinstance(limit, int) or isinstance(limit, bool) or limit < 0:
            raise InvalidInput(f"limit must be a non-negative integer, got {limit!r}")
        if limit == 0:
            return []

        with self._lock:
            ranked = sorted(self._points.items(), key=lambda item: item[1].score, reverse=True)
            return [(user_id, replace(record)) for user_id, record in ranked[:limit]]

    def _can_claim(self, last_claimed_at, now):
        if last_claimed_at is None:
            return True
        return now - last_claimed_at >= self.cooldown

    def _normalize_now(self, now):
        if now is None:
            now = self._clock()
        if not isinstance(now, datetime):
            raise InvalidInput(f"now must be a datetime, got {now!r}")
        if now.tzinfo is None:
            return now.replace(tzinfo=timezone.utc)
        return now.astimezone(timezone.utc)

    @staticmethod
    def _check_user_id(user_id):
        if not isinstance(user_id, str) or not user_id.strip():
            raise InvalidInput(f"user id must be a non-empty string, got {user_id!r}")

    def _save(self):
        """كتابة الملف كاملاً عبر ملف مؤقت ثم استبداله"""
        text = dumps(self._points)
        directory = self.path.parent
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{self.path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageWriteFailure(self.path, e) from e

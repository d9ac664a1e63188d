import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeLineBotApi:
    def __init__(self, names=None, failing=()):
        self.names = names or {}
        self.failing = set(failing)
        self.replies = []
        self.profile_requests = []

    def get_profile(self, user_id):
        self.profile_requests.append(user_id)
        if user_id in self.failing:
            raise RuntimeError(f"profile for {user_id} not found")
        return SimpleNamespace(display_name=self.names.get(user_id, user_id))

    def reply_message(self, reply_token, message):
        self.replies.append((reply_token, message))


@pytest.fixture()
def fake_api():
    return FakeLineBotApi()


@pytest.fixture()
def points_path(tmp_path):
    return tmp_path / "points.json"


def message_text(message):
    """نص جسم رسالة Flex (العنوان ثم المحتوى)"""
    title, body = message.contents.body.contents
    return title.text, body.text

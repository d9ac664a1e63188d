"""
📋 Rich Menu
قائمة الأوامر الثابتة: نقاطي والصدارة
"""

import logging

from linebot.models import RichMenu, RichMenuArea, RichMenuBounds, MessageAction

logger = logging.getLogger(__name__)

MENU_WIDTH = 2500
MENU_HEIGHT = 843


def build_rich_menu():
    half = MENU_WIDTH // 2
    return RichMenu(
        size={"width": MENU_WIDTH, "height": MENU_HEIGHT},
        selected=True,
        name="CommunityPointsMenu",
        chat_bar_text="💎 نقاط المجتمع",
        areas=[
            RichMenuArea(bounds=RichMenuBounds(x=0, y=0, width=half, height=MENU_HEIGHT),
                         action=MessageAction(label="نقاطي", text="/mypoints")),
            RichMenuArea(bounds=RichMenuBounds(x=half, y=0, width=MENU_WIDTH - half, height=MENU_HEIGHT),
                         action=MessageAction(label="الصدارة", text="/ranking")),
        ]
    )


def register_rich_menu(line_bot_api, image_path, content_type="image/png"):
    """إنشاء القائمة ورفع صورتها وربطها بالحساب"""
    rich_menu_id = line_bot_api.create_rich_menu(rich_menu=build_rich_menu())
    logger.info(f"Rich Menu ID: {rich_menu_id}")

    with open(image_path, 'rb') as f:
        line_bot_api.set_rich_menu_image(rich_menu_id, content_type, f)

    line_bot_api.set_default_rich_menu(rich_menu_id)
    return rich_menu_id

import logging
import os
import sys

from linebot import LineBotApi

from community_points.richmenu import register_rich_menu

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

if __name__ == "__main__":
    image_path = sys.argv[1] if len(sys.argv) > 1 else "richmenu_bg.png"
    line_bot_api = LineBotApi(os.getenv("LINE_CHANNEL_ACCESS_TOKEN"))
    register_rich_menu(line_bot_api, image_path)
    print("✅ تم إنشاء وربط الـ Rich Menu بنجاح!")

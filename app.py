from flask import Flask, request, abort
from linebot import LineBotApi, WebhookHandler
from linebot.exceptions import InvalidSignatureError
from linebot.models import MessageEvent, TextMessage
import logging

from community_points.config import Settings
from community_points.handlers import handle_text_message
from community_points.points import Ledger

# إعداد السجلات
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(settings=None, ledger=None, line_bot_api=None):
    settings = settings or Settings.from_env()
    # ملف نقاط تالف يوقف التشغيل هنا (StorageCorrupt)
    ledger = ledger if ledger is not None else Ledger(settings.points_file, cooldown=settings.cooldown)
    line_bot_api = line_bot_api or LineBotApi(settings.channel_access_token)
    handler = WebhookHandler(settings.channel_secret)

    app = Flask(__name__)
    app.extensions['ledger'] = ledger

    @app.route("/", methods=['GET'])
    def home():
        return f"""
    <html>
        <head><title>LINE Bot - Community Points</title></head>
        <body>
            <h1>💎 Community Points Bot</h1>
            <p>✅ الخادم يعمل بنجاح</p>
            <p><strong>المستخدمون المسجلون:</strong> {len(ledger)}</p>
        </body>
    </html>
    """

    @app.route("/callback", methods=['POST'])
    def callback():
        signature = request.headers.get('X-Line-Signature', '')
        body = request.get_data(as_text=True)

        try:
            handler.handle(body, signature)
        except InvalidSignatureError:
            logger.error("توقيع غير صالح")
            abort(400)

        return 'OK'

    @handler.add(MessageEvent, message=TextMessage)
    def handle_message(event):
        user_id = getattr(event.source, 'user_id', None)
        if not user_id:
            return

        response = handle_text_message(
            ledger, line_bot_api, user_id, event.message.text,
            max_ranking_display=settings.max_ranking_display
        )
        if response is not None:
            line_bot_api.reply_message(event.reply_token, response)

    return app


app = create_app()

if __name__ == "__main__":
    port = Settings.from_env().port
    logger.info(f"🚀 بدء الخادم على المنفذ {port}")
    app.run(host='0.0.0.0', port=port, debug=False)

"""
🎨 Flex Messages
رسائل الرد على أوامر النقاط
"""

from linebot.models import (
    FlexSendMessage, BubbleContainer, BoxComponent, TextComponent,
    QuickReply, QuickReplyButton, MessageAction
)

# ألوان التصميم
COLOR_BG = "#FFFFFF"
COLOR_PRIMARY = "#000000"
COLOR_SECONDARY = "#888888"

UNKNOWN_USER = "مستخدم"


def get_fixed_quick_reply():
    """أزرار الأوامر الثابتة"""
    return QuickReply(items=[
        QuickReplyButton(action=MessageAction(label="نقاطي", text="/mypoints")),
        QuickReplyButton(action=MessageAction(label="الصدارة", text="/ranking")),
    ])


def create_flex_text_message(title, body):
    """إنشاء رسالة Flex أنيقة"""
    bubble = BubbleContainer(
        direction="rtl",
        body=BoxComponent(
            layout="vertical",
            spacing="md",
            contents=[
                TextComponent(text=title, weight="bold", size="lg", color=COLOR_PRIMARY),
                TextComponent(text=body, wrap=True, color=COLOR_SECONDARY, size="md")
            ],
            background_color=COLOR_BG,
            padding_all="12px",
            corner_radius="10px"
        )
    )
    return FlexSendMessage(alt_text=title, contents=bubble, quick_reply=get_fixed_quick_reply())


def format_ranking(entries):
    """entries: قائمة (الاسم، النقاط) مرتبة مسبقاً"""
    return "\n".join(f"{rank}. {name}: {score} نقطة" for rank, (name, score) in enumerate(entries, 1))


def create_ranking_message(entries):
    if not entries:
        return create_flex_text_message("🏆 لوحة الصدارة", "لم يحصل أحد على نقاط المجتمع بعد!")
    return create_flex_text_message("🏆 لوحة الصدارة", format_ranking(entries))


def create_points_message(display_name, score):
    return create_flex_text_message(
        f"📊 نقاط {display_name}",
        f"نقاطك الحالية في المجتمع: {score} نقطة"
    )


def create_error_message():
    return create_flex_text_message("⚠️ خطأ مؤقت", "حدث خطأ مؤقت في سجل النقاط، حاول مرة أخرى لاحقاً.")

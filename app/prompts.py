# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/9 17:38
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : 提示词模板与固定回复文案
"""

# Deep Translate 的提示词模板
DEEP_TRANSLATE_PROMPT_TEMPLATE = """Translate the following text into the language of code "{target_lang}".
Context: Online chat. Deliver only the translated text.
Text: {text}"""

# 确认收到请求时的占位消息
PLACEHOLDER_TEXT = "⏳ ..."

NO_TEXT_REPLY = "翻訳するテキストがありません。"

FAST_TRANSLATE_ERROR_REPLY = "⚡ Fast Translateでエラーが発生しました。"

DEEP_TRANSLATE_RATE_LIMITED_REPLY = (
    "⚠️ You may have exceeded the free tier limit (approx. 20 requests/day). "
    "Please wait a while or use **'Fast Translate'** instead.\n"
    "**Gemini APIの利用制限に達しました。**\n"
    "無料枠の上限（1日20回程度）を超えた可能性があります。"
    "しばらく待つか、**'Fast Translate'** を使ってください。"
)

DEEP_TRANSLATE_CONGESTED_REPLY = (
    "🧠 Deep Translateが現在混雑しています。少し時間を置いて再試行してください。"
)

UNEXPECTED_ERROR_REPLY = "翻訳処理中に予期せぬエラーが発生しました。"

# -*- coding: utf-8 -*-
"""
@Desc    : Two-phase reply protocol: acknowledge with a placeholder, then finalize it.
"""
import html
import re
from typing import Protocol

from loguru import logger
from telegram import Bot, Message
from telegram.constants import ParseMode

from prompts import PLACEHOLDER_TEXT

_BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*", re.DOTALL)

# Telegram text limits
MAX_MESSAGE_LENGTH = int(4096 * 0.9)  # 3686 characters (90% of 4096 for safety)


class Responder(Protocol):
    @property
    def responded(self) -> bool: ...

    async def acknowledge(self) -> bool: ...

    async def finalize(self, content: str) -> bool: ...


def render_html(content: str) -> str:
    """Escape ``content`` for Telegram HTML and turn ``**bold**`` spans into ``<b>``."""
    return _BOLD_PATTERN.sub(r"<b>\1</b>", html.escape(content, quote=False))


def truncate_message(content: str, limit: int = MAX_MESSAGE_LENGTH) -> str:
    """Cut the tail of an over-long reply so the label line survives"""
    if len(content) <= limit:
        return content
    return content[: limit - 3] + "..."


class TelegramResponder:
    """
    Replies to a command message with a placeholder, then edits the placeholder.

    Neither step raises: both report success as a bool, and each may run once.
    """

    def __init__(self, bot: Bot, trigger_message: Message):
        self._bot = bot
        self._trigger_message = trigger_message
        self._placeholder: Message | None = None
        self._finalized = False

    @property
    def acknowledged(self) -> bool:
        return self._placeholder is not None

    @property
    def responded(self) -> bool:
        return self.acknowledged or self._finalized

    async def acknowledge(self) -> bool:
        if self.responded:
            logger.warning("已响应过该请求，忽略重复的 acknowledge")
            return False

        try:
            self._placeholder = await self._bot.send_message(
                chat_id=self._trigger_message.chat_id,
                text=PLACEHOLDER_TEXT,
                reply_to_message_id=self._trigger_message.message_id,
            )
        except Exception as err:
            logger.error(f"发送占位消息失败: {err}")
            return False

        return True

    async def finalize(self, content: str) -> bool:
        if self._finalized:
            logger.warning("已完成回复，忽略重复的 finalize")
            return False
        if not self._placeholder:
            logger.warning("尚未发送占位消息，无法 finalize")
            return False

        try:
            await self._bot.edit_message_text(
                chat_id=self._placeholder.chat_id,
                message_id=self._placeholder.message_id,
                text=render_html(truncate_message(content)),
                parse_mode=ParseMode.HTML,
            )
        except Exception as err:
            logger.error(f"编辑占位消息失败: {err}")
            return False

        self._finalized = True
        return True

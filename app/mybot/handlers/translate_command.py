# -*- coding: utf-8 -*-
"""
@Desc    : /fast 与 /deep 命令处理器，回复某条消息即可翻译该消息
"""
from loguru import logger
from telegram import Bot, BotCommand, BotCommandScopeChat, Message, Update
from telegram.ext import CommandHandler, ContextTypes, filters

from models import Invocation, TranslateMode
from mybot.services.responder import TelegramResponder
from mybot.services.translation_service import TranslationService
from mybot.task_manager import non_blocking_handler

TRANSLATION_SERVICE_KEY = "translation_service"

TRANSLATE_COMMANDS = [BotCommand(mode.command, mode.action_name) for mode in TranslateMode]


def _extract_target_text(message: Message) -> str | None:
    """被回复消息的文本或图片说明；未回复任何消息或仅含媒体时为空"""
    target = message.reply_to_message
    if not target:
        return None
    return target.text or target.caption


def build_invocation(update: Update) -> Invocation | None:
    message = update.effective_message
    if not message or not message.text:
        return None

    try:
        mode = TranslateMode.from_command(message.text.split()[0])
    except ValueError:
        logger.warning(f"无法识别的翻译命令: {message.text.split()[0]}")
        return None

    user = update.effective_user
    return Invocation(
        target_text=_extract_target_text(message),
        locale_code=user.language_code if user else None,
        mode=mode,
    )


@non_blocking_handler("translate_command")
async def translate_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Translate the replied-to message with Fast Translate or Deep Translate"""
    if update.inline_query:
        return

    if not (invocation := build_invocation(update)):
        logger.warning("translate 命令：无法找到有效的命令消息")
        return

    service: TranslationService = context.bot_data[TRANSLATION_SERVICE_KEY]
    responder = TelegramResponder(context.bot, update.effective_message)

    await service.handle(invocation, responder)


def build_translate_handler() -> CommandHandler:
    """只响应新消息；编辑过的命令消息不会再次触发翻译"""
    return CommandHandler(
        [mode.command for mode in TranslateMode],
        translate_command,
        filters=filters.UpdateType.MESSAGE,
    )


async def register_translate_commands(bot: Bot, target_chat_id: int | None) -> bool:
    """在目标聊天中注册 Fast Translate 与 Deep Translate 两个命令"""
    if not target_chat_id:
        logger.warning("未配置 TELEGRAM_TARGET_CHAT_ID，跳过命令注册")
        return False

    try:
        await bot.set_my_commands(
            TRANSLATE_COMMANDS, scope=BotCommandScopeChat(chat_id=target_chat_id)
        )
    except Exception as e:
        logger.error(f"设置机器人命令菜单失败: {e}")
        return False

    logger.success(
        f"✅ Two commands registered successfully! {[f'/{cmd.command}' for cmd in TRANSLATE_COMMANDS]}"
    )
    return True

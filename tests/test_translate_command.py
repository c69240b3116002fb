# -*- coding: utf-8 -*-
"""
@Desc    : Tests for the /fast and /deep command handlers
"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock, patch

import pytest
import pytest_asyncio
from telegram import Bot, BotCommand, BotCommandScopeChat, Chat, Message, Update, User
from telegram.ext import CommandHandler, ContextTypes, filters

from models import Invocation, TranslateMode
from mybot.handlers.translate_command import (
    TRANSLATE_COMMANDS,
    TRANSLATION_SERVICE_KEY,
    build_invocation,
    build_translate_handler,
    register_translate_commands,
    translate_command,
)
from mybot.services.responder import TelegramResponder
from mybot.task_manager import wait_for_all_tasks


class TestTranslateMode:
    @pytest.mark.parametrize(
        "command, expected",
        [
            ("/fast", TranslateMode.FAST),
            ("/deep", TranslateMode.DEEP),
            ("/Deep@lingoflow_bot", TranslateMode.DEEP),
        ],
    )
    def test_from_command(self, command, expected):
        assert TranslateMode.from_command(command) is expected

    def test_action_names(self):
        assert TranslateMode.FAST.action_name == "Fast Translate"
        assert TranslateMode.DEEP.action_name == "Deep Translate"

    def test_exactly_two_commands_are_registered(self):
        assert TRANSLATE_COMMANDS == [
            BotCommand("fast", "Fast Translate"),
            BotCommand("deep", "Deep Translate"),
        ]


class TestTranslateCommand:
    @pytest_asyncio.fixture
    async def target_message(self):
        message = Mock(spec=Message)
        message.text = "Hello"
        message.caption = None
        return message

    @pytest_asyncio.fixture
    async def mock_update(self, target_message):
        update = AsyncMock(spec=Update)

        message = AsyncMock(spec=Message)
        message.message_id = 123
        message.chat_id = -987654
        message.text = "/fast"
        message.reply_to_message = target_message

        user = Mock(spec=User)
        user.id = 456789
        user.language_code = "en-US"

        chat = Mock(spec=Chat)
        chat.id = -987654
        message.chat = chat

        update.message = message
        update.effective_message = message
        update.effective_user = user
        update.effective_chat = chat
        update.inline_query = None

        return update

    @pytest_asyncio.fixture
    async def mock_context(self):
        context = AsyncMock(spec=ContextTypes.DEFAULT_TYPE)
        context.bot = AsyncMock(spec=Bot)
        service = AsyncMock()
        context.bot_data = {TRANSLATION_SERVICE_KEY: service}
        return context

    def test_build_invocation_from_reply(self, mock_update):
        invocation = build_invocation(mock_update)

        assert invocation == Invocation(
            target_text="Hello", locale_code="en-US", mode=TranslateMode.FAST
        )

    def test_build_invocation_uses_caption(self, mock_update, target_message):
        mock_update.effective_message.text = "/deep"
        target_message.text = None
        target_message.caption = "写真の説明"

        invocation = build_invocation(mock_update)

        assert invocation.mode is TranslateMode.DEEP
        assert invocation.target_text == "写真の説明"

    def test_build_invocation_without_reply_has_no_text(self, mock_update):
        mock_update.effective_message.reply_to_message = None

        invocation = build_invocation(mock_update)

        assert invocation.target_text is None

    def test_build_invocation_without_user_has_no_locale(self, mock_update):
        mock_update.effective_user = None

        assert build_invocation(mock_update).locale_code is None

    def test_build_invocation_ignores_unknown_command(self, mock_update):
        mock_update.effective_message.text = "/start"

        assert build_invocation(mock_update) is None

    @pytest.mark.asyncio
    async def test_handler_dispatches_to_service(self, mock_update, mock_context):
        service = mock_context.bot_data[TRANSLATION_SERVICE_KEY]

        await translate_command.__wrapped__(mock_update, mock_context)

        service.handle.assert_awaited_once()
        invocation, responder = service.handle.call_args.args
        assert invocation.mode is TranslateMode.FAST
        assert invocation.target_text == "Hello"
        assert isinstance(responder, TelegramResponder)

    @pytest.mark.asyncio
    async def test_handler_ignores_inline_queries(self, mock_update, mock_context):
        mock_update.inline_query = Mock()
        service = mock_context.bot_data[TRANSLATION_SERVICE_KEY]

        await translate_command.__wrapped__(mock_update, mock_context)

        service.handle.assert_not_called()

    @pytest.mark.asyncio
    async def test_decorated_handler_runs_in_background(self, mock_update, mock_context):
        with patch("mybot.task_manager._execute_handler_task", new=AsyncMock()) as mock_execute:
            await translate_command(mock_update, mock_context)

        assert await wait_for_all_tasks(timeout=1.0)
        mock_execute.assert_awaited_once()


class TestRegisterTranslateCommands:
    @pytest.mark.asyncio
    async def test_registers_in_target_chat(self):
        bot = AsyncMock(spec=Bot)

        assert await register_translate_commands(bot, -100500) is True

        bot.set_my_commands.assert_awaited_once_with(
            TRANSLATE_COMMANDS, scope=BotCommandScopeChat(chat_id=-100500)
        )

    @pytest.mark.asyncio
    async def test_skipped_without_target(self):
        bot = AsyncMock(spec=Bot)

        assert await register_translate_commands(bot, None) is False

        bot.set_my_commands.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_is_logged_not_raised(self):
        bot = AsyncMock(spec=Bot)
        bot.set_my_commands.side_effect = RuntimeError("network down")

        assert await register_translate_commands(bot, -100500) is False


class TestBuildTranslateHandler:
    @staticmethod
    def command_message(text: str) -> Message:
        return Message(
            message_id=1,
            date=datetime.now(timezone.utc),
            chat=Chat(id=-100500, type=Chat.SUPERGROUP),
            text=text,
        )

    def test_handles_both_commands(self):
        handler = build_translate_handler()

        assert isinstance(handler, CommandHandler)
        assert handler.commands == frozenset({"fast", "deep"})

    def test_edited_command_does_not_trigger_again(self):
        handler = build_translate_handler()
        new_update = Update(update_id=1, message=self.command_message("/fast"))
        edited_update = Update(update_id=2, edited_message=self.command_message("/fast"))

        assert handler.filters is filters.UpdateType.MESSAGE
        assert handler.filters.check_update(new_update)
        assert not handler.filters.check_update(edited_update)

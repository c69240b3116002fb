# -*- coding: utf-8 -*-
"""
@Desc    : Tests for process-level error handlers
"""
from unittest.mock import Mock

import pytest
from loguru import logger

from mybot.handlers.error_handler import handle_error, handle_loop_exception


@pytest.fixture
def captured_logs():
    messages = []
    handler_id = logger.add(messages.append, level="ERROR", format="{message}")
    yield messages
    logger.remove(handler_id)


class TestErrorHandlers:
    @pytest.mark.asyncio
    async def test_handle_error_logs_without_raising(self, captured_logs):
        context = Mock()
        context.error = RuntimeError("polling hiccup")

        await handle_error(None, context)

        assert any("Unhandled error while processing update" in m for m in captured_logs)

    def test_loop_exception_with_exception(self, captured_logs):
        handle_loop_exception(
            None,
            {"message": "Task exception was never retrieved", "exception": ValueError("x")},
        )

        assert any("Task exception was never retrieved" in m for m in captured_logs)

    def test_loop_exception_without_exception(self, captured_logs):
        handle_loop_exception(None, {"message": "Unclosed client session"})

        assert any("Unclosed client session" in m for m in captured_logs)

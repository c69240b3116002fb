# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/7 05:40
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    :
"""
import asyncio
import json

from loguru import logger
from telegram import Update
from telegram.ext import Application

from liveness import LivenessServer
from mybot.handlers.error_handler import handle_error, handle_loop_exception
from mybot.handlers.translate_command import (
    TRANSLATION_SERVICE_KEY,
    build_translate_handler,
    register_translate_commands,
)
from mybot.services.translation_service import build_translation_service
from mybot.task_manager import wait_for_all_tasks
from settings import settings, LOG_DIR
from utils import init_log

LIVENESS_SERVER_KEY = "liveness_server"

init_log(
    runtime=LOG_DIR.joinpath("runtime.log"),
    error=LOG_DIR.joinpath("error.log"),
    serialize=LOG_DIR.joinpath("serialize.log"),
)


async def on_ready(application: Application) -> None:
    """连接建立后执行一次：注册命令、安装全局异常处理、启动存活探针"""
    logger.success(f"✅ LingoFlow Dual Mode Ready! Logged in as @{application.bot.username}")

    asyncio.get_running_loop().set_exception_handler(handle_loop_exception)

    await register_translate_commands(application.bot, settings.TELEGRAM_TARGET_CHAT_ID)

    try:
        await application.bot_data[LIVENESS_SERVER_KEY].start()
    except OSError as e:
        logger.error(f"启动存活探针 HTTP 服务失败: {e}")


async def on_shutdown(application: Application) -> None:
    await wait_for_all_tasks(timeout=settings.HTTP_REQUEST_TIMEOUT)
    await application.bot_data[LIVENESS_SERVER_KEY].stop()
    await application.bot_data[TRANSLATION_SERVICE_KEY].aclose()


def main() -> None:
    """Start the bot."""
    sp = settings.model_dump(mode='json')

    s = json.dumps(sp, indent=2, ensure_ascii=False)
    logger.success(f"Loading settings: {s}")

    application = settings.get_default_application()

    # Provider clients live for the whole process and are shared by every invocation
    application.bot_data[TRANSLATION_SERVICE_KEY] = build_translation_service()
    application.bot_data[LIVENESS_SERVER_KEY] = LivenessServer(
        settings.LIVENESS_HOST, settings.LIVENESS_PORT
    )

    application.post_init = on_ready
    application.post_shutdown = on_shutdown

    application.add_handler(build_translate_handler())
    application.add_error_handler(handle_error)

    # Run the bot until the user presses Ctrl-C or the process receives SIGTERM
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()

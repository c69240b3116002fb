# -*- coding: utf-8 -*-
"""
Process-level handlers for errors that escape an individual invocation
"""
from loguru import logger
from telegram.ext import ContextTypes


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors raised by handlers or by the polling loop without stopping the bot"""
    logger.opt(exception=context.error).error(f"Unhandled error while processing update: {update}")


def handle_loop_exception(loop, context: dict) -> None:
    """asyncio loop exception handler for task failures nobody awaited"""
    if exception := context.get("exception"):
        logger.opt(exception=exception).error(f"Unhandled asyncio error: {context.get('message')}")
    else:
        logger.error(f"Unhandled asyncio error: {context.get('message')}")

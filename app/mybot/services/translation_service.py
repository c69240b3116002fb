# -*- coding: utf-8 -*-
"""
@Desc    : Service for dispatching Fast / Deep translation requests.
"""
import asyncio
from contextlib import suppress
from typing import Awaitable, Callable, Protocol

from loguru import logger

from models import Invocation, TranslateMode, TranslationResult
from mybot.services.responder import Responder
from mybot.services.retry_policy import RetryPolicy, RetryStatus, run_with_retry
from prompts import (
    DEEP_TRANSLATE_PROMPT_TEMPLATE,
    NO_TEXT_REPLY,
    FAST_TRANSLATE_ERROR_REPLY,
    DEEP_TRANSLATE_RATE_LIMITED_REPLY,
    DEEP_TRANSLATE_CONGESTED_REPLY,
    UNEXPECTED_ERROR_REPLY,
)
from settings import settings
from translators.gemini import GeminiClient
from translators.google_translate import GoogleTranslateClient

FAST_PROVIDER_LABEL = "Fast Translate (Google)"
DEEP_PROVIDER_LABEL = "Deep Translate (Gemini)"


class LiteralTranslator(Protocol):
    async def translate(self, text: str, destination_language: str) -> str: ...


class GenerativeModel(Protocol):
    async def generate(self, prompt: str) -> str: ...


def derive_language(locale_code: str | None, default: str = settings.DEFAULT_LANGUAGE) -> str:
    """`en-US` -> `en`, `ja` -> `ja`, missing -> ``default``"""
    if not locale_code or not locale_code.strip():
        return default
    primary = locale_code.strip().replace("_", "-").split("-")[0]
    return primary.lower() or default


def build_deep_prompt(text: str, target_lang: str) -> str:
    return DEEP_TRANSLATE_PROMPT_TEMPLATE.format(target_lang=target_lang, text=text)


class TranslationService:
    def __init__(
        self,
        literal: LiteralTranslator,
        generative: GenerativeModel,
        *,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        default_language: str = settings.DEFAULT_LANGUAGE,
    ):
        self._literal = literal
        self._generative = generative
        self._policy = policy or RetryPolicy()
        self._sleep = sleep
        self._default_language = default_language

    async def handle(self, invocation: Invocation, responder: Responder) -> None:
        """
        处理一次翻译请求，保证调用者最终只收到一条回复

        流程：
        1. 已响应过的请求直接忽略
        2. 立即 acknowledge（发送占位消息），失败则放弃本次请求
        3. 按模式分发到 Google Translate 或 Gemini
        4. 用结果或错误提示 finalize 占位消息
        """
        if responder.responded:
            logger.debug(f"{invocation.mode.action_name}: 请求已被响应，跳过")
            return

        if not await responder.acknowledge():
            logger.error(f"{invocation.mode.action_name}: acknowledge 失败，放弃本次请求")
            return

        try:
            reply = await self.translate(invocation)
            if not await responder.finalize(reply):
                logger.error(f"{invocation.mode.action_name}: 回复发送失败，改发通用错误提示")
                with suppress(Exception):
                    await responder.finalize(UNEXPECTED_ERROR_REPLY)
        except Exception as err:
            logger.exception(f"🔥 {invocation.mode.action_name} 执行时发生未预期的错误: {err}")
            with suppress(Exception):
                await responder.finalize(UNEXPECTED_ERROR_REPLY)

    async def translate(self, invocation: Invocation) -> str:
        """Build the reply text for one invocation. Fatal provider errors propagate."""
        text = (invocation.target_text or "").strip()
        if not text:
            return NO_TEXT_REPLY

        target_lang = derive_language(invocation.locale_code, self._default_language)
        logger.info(f"Invoke {invocation.mode.action_name} -> {target_lang}: {text[:50]}")

        if invocation.mode == TranslateMode.FAST:
            return await self._fast_translate(text, target_lang)
        return await self._deep_translate(text, target_lang)

    async def _fast_translate(self, text: str, target_lang: str) -> str:
        try:
            translated = await self._literal.translate(text, target_lang)
        except Exception as err:
            logger.error(f"Fast Translate Error: {err!r}")
            return FAST_TRANSLATE_ERROR_REPLY

        return TranslationResult(
            emoji="⚡", provider_label=FAST_PROVIDER_LABEL, text=translated
        ).render()

    async def _deep_translate(self, text: str, target_lang: str) -> str:
        prompt = build_deep_prompt(text, target_lang)

        run = await run_with_retry(
            lambda: self._generative.generate(prompt), policy=self._policy, sleep=self._sleep
        )

        if run.state.status == RetryStatus.RATE_LIMITED:
            return DEEP_TRANSLATE_RATE_LIMITED_REPLY
        if run.state.status == RetryStatus.EXHAUSTED:
            return DEEP_TRANSLATE_CONGESTED_REPLY

        return TranslationResult(
            emoji="🧠", provider_label=DEEP_PROVIDER_LABEL, text=run.state.result
        ).render()

    async def aclose(self):
        if close := getattr(self._literal, "aclose", None):
            await close()


def build_translation_service() -> TranslationService:
    """Create the provider clients once and wire them into the dispatcher."""
    policy = RetryPolicy(
        max_attempts=settings.DEEP_TRANSLATE_MAX_ATTEMPTS,
        backoff_seconds=settings.DEEP_TRANSLATE_BACKOFF_SECONDS,
    )
    return TranslationService(
        GoogleTranslateClient(),
        GeminiClient(),
        policy=policy,
        default_language=settings.DEFAULT_LANGUAGE,
    )

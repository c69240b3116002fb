# -*- coding: utf-8 -*-
"""
@Desc    : Fast Translate 使用的 Google Translate 客户端
"""
from typing import Any

from httpx import AsyncClient, HTTPError
from loguru import logger

from settings import settings
from translators.errors import LiteralTranslationError


class GoogleTranslateClient:
    """Literal machine translation through the public Google Translate web endpoint."""

    def __init__(
        self,
        base_url: str = settings.GOOGLE_TRANSLATE_BASE_URL,
        timeout: float = settings.HTTP_REQUEST_TIMEOUT,
        *,
        client: AsyncClient | None = None,
    ):
        self._client = client or AsyncClient(base_url=base_url, timeout=timeout)

    async def translate(self, text: str, destination_language: str) -> str:
        """
        将文本翻译为目标语言

        Args:
            text: 原文，源语言由服务端自动检测
            destination_language: 目标语言编码，例如 `ja`、`en`

        Returns:
            译文

        Raises:
            LiteralTranslationError: 请求失败或响应无法解析
        """
        params = {"client": "gtx", "sl": "auto", "tl": destination_language, "dt": "t"}
        try:
            response = await self._client.post(
                "/translate_a/single", params=params, data={"q": text}
            )
            response.raise_for_status()
            payload = response.json()
        except (HTTPError, ValueError) as err:
            raise LiteralTranslationError(f"Google Translate request failed: {err}") from err

        translated = self._join_segments(payload)
        logger.debug(f"Google Translate -> {destination_language}: {len(translated)} chars")
        return translated

    @staticmethod
    def _join_segments(payload: Any) -> str:
        # payload[0] is a list of [translated, original, ...] sentence segments
        try:
            segments = payload[0]
            translated = "".join(seg[0] for seg in segments if seg and seg[0])
        except (IndexError, KeyError, TypeError) as err:
            raise LiteralTranslationError(f"Unexpected Google Translate payload: {err}") from err

        if not translated:
            raise LiteralTranslationError("Google Translate returned an empty translation")
        return translated

    async def aclose(self):
        await self._client.aclose()

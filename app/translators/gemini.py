# -*- coding: utf-8 -*-
"""
@Desc    : Deep Translate 使用的 Gemini 客户端
"""
from google import genai
from google.genai import errors as genai_errors
from loguru import logger

from settings import settings
from translators.errors import GenerativeProviderError


class GeminiClient:
    """Prompt/completion text generation through the async google-genai client."""

    def __init__(
        self,
        api_key: str = settings.GEMINI_API_KEY.get_secret_value(),
        model: str = settings.GEMINI_MODEL,
        *,
        client: genai.Client | None = None,
    ):
        self.model = model
        self._client = client or genai.Client(api_key=api_key)

    async def generate(self, prompt: str) -> str:
        """
        Run one completion and return its text.

        Raises:
            GenerativeProviderError: carries the provider's HTTP status code
                (429 quota exceeded, 500/503 unavailable, ...) when there is one
        """
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model, contents=prompt
            )
        except genai_errors.APIError as err:
            raise GenerativeProviderError(
                err.message or str(err), status_code=err.code
            ) from err

        text = (response.text or "").strip()
        if not text:
            raise GenerativeProviderError("Gemini returned an empty completion")

        logger.debug(f"Gemini[{self.model}] completion: {len(text)} chars")
        return text

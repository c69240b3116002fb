# -*- coding: utf-8 -*-
"""
@Desc    : Errors raised by the translation provider clients
"""


class TranslationProviderError(Exception):
    """Base class for failures reported by a translation provider."""


class LiteralTranslationError(TranslationProviderError):
    """Google Translate request failed or returned an unreadable payload."""


class GenerativeProviderError(TranslationProviderError):
    """
    Gemini request failed.

    ``status_code`` is the HTTP status reported by the provider, or ``None``
    when the failure carries no status (e.g. an empty completion).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code!r}, message={str(self)!r})"

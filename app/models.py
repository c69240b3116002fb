# -*- coding: utf-8 -*-
"""
@Time    : 2025/7/8 12:34
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    :
"""

from enum import Enum

from pydantic import BaseModel, Field


class TranslateMode(str, Enum):
    FAST = "fast"
    """
    Google Translate 直译，不重试
    """

    DEEP = "deep"
    """
    Gemini 结合语境的翻译，服务暂时不可用时有限次重试
    """

    @property
    def command(self) -> str:
        return self.value

    @property
    def action_name(self) -> str:
        return _ACTION_NAMES[self]

    @classmethod
    def from_command(cls, command: str) -> "TranslateMode":
        return cls(command.lstrip("/").split("@")[0].lower())


_ACTION_NAMES = {TranslateMode.FAST: "Fast Translate", TranslateMode.DEEP: "Deep Translate"}


class Invocation(BaseModel):
    target_text: str | None = Field(default=None, description="被翻译消息的文本，可能为空")
    locale_code: str | None = Field(
        default=None, description="调用者的语言编码", examples=["en-US", "ja"]
    )
    mode: TranslateMode


class TranslationResult(BaseModel):
    emoji: str
    provider_label: str = Field(examples=["Fast Translate (Google)"])
    text: str

    def render(self) -> str:
        return f"{self.emoji} **{self.provider_label}:**\n{self.text}"

from pathlib import Path
from typing import Any
from urllib.request import getproxies

import dotenv
from loguru import logger
from pydantic import SecretStr, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from telegram.ext import Application

dotenv.load_dotenv()


PROJECT_DIR = Path(__file__).parent
LOG_DIR = PROJECT_DIR.joinpath("logs")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    TELEGRAM_BOT_API_TOKEN: SecretStr = Field(
        default="", description="通过 https://t.me/BotFather 获取机器人的 API_TOKEN"
    )

    TELEGRAM_TARGET_CHAT_ID: int | None = Field(
        default=None,
        description="注册 /fast 与 /deep 命令菜单的目标聊天 ID。未配置时跳过命令注册。",
    )

    GEMINI_API_KEY: SecretStr = Field(
        default="", description="Deep Translate 使用的 Gemini API Key"
    )

    GEMINI_MODEL: str = Field(
        default="gemini-flash-latest", description="Deep Translate 使用的 Gemini 模型名称"
    )

    GOOGLE_TRANSLATE_BASE_URL: str = Field(
        default="https://translate.googleapis.com",
        description="Fast Translate 使用的 Google Translate 端点",
    )

    DEFAULT_LANGUAGE: str = Field(
        default="ja", description="无法从用户 language_code 推断目标语言时使用的默认语言"
    )

    DEEP_TRANSLATE_MAX_ATTEMPTS: int = Field(
        default=3, ge=1, description="Deep Translate 在服务暂时不可用时的最大尝试次数"
    )

    DEEP_TRANSLATE_BACKOFF_SECONDS: float = Field(
        default=2.0, ge=0, description="Deep Translate 每次重试前的固定等待时间（秒），无抖动"
    )

    HTTP_REQUEST_TIMEOUT: float = Field(
        default=30.0,
        description="HTTP 请求超时时间（秒），用于 Telegram API 与 Google Translate 调用。",
    )

    LIVENESS_HOST: str = Field(default="0.0.0.0", description="存活探针 HTTP 服务监听地址")

    LIVENESS_PORT: int = Field(default=3000, description="存活探针 HTTP 服务监听端口")

    def model_post_init(self, context: Any, /) -> None:
        if not self.DEFAULT_LANGUAGE.strip():
            logger.warning("DEFAULT_LANGUAGE 为空，已回退为 ja")
            self.DEFAULT_LANGUAGE = "ja"

        if not self.TELEGRAM_TARGET_CHAT_ID:
            logger.warning("未配置 TELEGRAM_TARGET_CHAT_ID，启动时将跳过命令注册")

    def get_default_application(self) -> Application:
        _base_builder = (
            Application.builder()
            .token(self.TELEGRAM_BOT_API_TOKEN.get_secret_value())
            .connect_timeout(self.HTTP_REQUEST_TIMEOUT)
            .write_timeout(self.HTTP_REQUEST_TIMEOUT)
            .read_timeout(self.HTTP_REQUEST_TIMEOUT)
        )
        if proxy_url := getproxies().get("http"):
            logger.success(f"使用代理: {proxy_url}")
            application = _base_builder.proxy(proxy_url).get_updates_proxy(proxy_url).build()
        else:
            application = _base_builder.build()

        return application


settings = Settings()  # type: ignore

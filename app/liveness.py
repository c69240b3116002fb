# -*- coding: utf-8 -*-
"""
@Desc    : 供外部存活监控探测的 HTTP 服务
"""
from aiohttp import web
from loguru import logger

LIVENESS_TEXT = "Bot is running!"


async def handle_liveness(request: web.Request) -> web.Response:
    return web.Response(text=LIVENESS_TEXT)


def create_liveness_app() -> web.Application:
    app = web.Application()
    app.add_routes([web.get("/", handle_liveness)])
    return app


class LivenessServer:
    """Runs the liveness app on the bot's event loop alongside polling."""

    def __init__(self, host: str, port: int):
        self.host = host
        self.port = port
        self._runner: web.AppRunner | None = None

    async def start(self):
        if self._runner:
            return

        self._runner = web.AppRunner(create_liveness_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, host=self.host, port=self.port)
        await site.start()
        logger.success(f"Web server running on port {self.port}")

    async def stop(self):
        if not self._runner:
            return

        await self._runner.cleanup()
        self._runner = None
        logger.info("Web server stopped")

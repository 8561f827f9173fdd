"""Tiny HTTP endpoint that keeps free hosting tiers from idling the bot."""

from __future__ import annotations

import logging

from aiohttp import web

from level_vote_bot.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

RUNNING_TEXT = "Bot running"


async def index(_request: web.Request) -> web.Response:
    return web.Response(text=RUNNING_TEXT, content_type="text/plain")


def build_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/", index)
    app.router.add_get("/health", index)
    return app


class UptimeServer:
    """Serves ``/`` and ``/health`` on the configured port while the bot runs."""

    def __init__(self, host: str, port: int) -> None:
        self._host = host
        self._port = port
        self._runner: web.AppRunner | None = None

    @property
    def is_running(self) -> bool:
        return self._runner is not None

    async def start(self) -> None:
        if self._runner is not None:
            return

        runner = web.AppRunner(build_app())
        await runner.setup()
        try:
            site = web.TCPSite(runner, self._host, self._port)
            await site.start()
        except OSError as e:
            logger.warning(LogTemplates.UPTIME_START_FAILED, e)
            await runner.cleanup()
            return

        self._runner = runner
        logger.info(LogTemplates.UPTIME_STARTED, self._port)

    async def stop(self) -> None:
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        logger.info(LogTemplates.UPTIME_STOPPED)

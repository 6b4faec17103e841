"""Recurring and on-demand settlement passes.

Every entry point (the interval loop, the post-session trigger and the API)
goes through run_settlement_once(), which opens its own session and holds a
process-wide asyncio.Lock so passes inside one process never overlap. Passes
from other processes are handled by the compare-and-swap in the repository.
"""

import asyncio
import logging

from config.settings import settings
from src.lw_common.database import async_session_factory
from src.lw_settlement.application.schemas import SettlementReport
from src.lw_settlement.application.service import SettlementService

logger = logging.getLogger("lw.settlement")

_pass_lock = asyncio.Lock()
_default_service: SettlementService | None = None


def _get_service() -> SettlementService:
    global _default_service  # noqa: PLW0603
    if _default_service is None:
        _default_service = SettlementService()
    return _default_service


async def run_settlement_once(service: SettlementService | None = None) -> SettlementReport:
    svc = service if service is not None else _get_service()
    async with _pass_lock:
        async with async_session_factory() as db:
            return await svc.run_settlement_pass(db)


async def run_settlement_in_background() -> None:
    """BackgroundTasks target: never lets a failed pass surface to the caller."""
    try:
        await run_settlement_once()
    except Exception:
        logger.exception("Background settlement pass failed")


class SettlementScheduler:
    def __init__(
        self,
        interval_seconds: float | None = None,
        service: SettlementService | None = None,
    ) -> None:
        self._interval = (
            interval_seconds
            if interval_seconds is not None
            else settings.SETTLEMENT_INTERVAL_SECONDS
        )
        self._service = service
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run_forever(), name="settlement-scheduler")
        logger.info("Settlement scheduler started (every %ss)", self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Settlement scheduler stopped")

    async def _run_forever(self) -> None:
        while True:
            try:
                await run_settlement_once(self._service)
            except asyncio.CancelledError:
                raise
            except Exception:
                # storage failures rolled back; the next tick retries
                logger.exception("Settlement pass failed")
            await asyncio.sleep(self._interval)

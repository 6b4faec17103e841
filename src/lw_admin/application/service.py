"""Admin application service."""

import hmac
import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.lw_common.errors import AdminForbiddenError

logger = logging.getLogger("lw.admin")

_DELETE_LEDGER_SQL = text("""
    DELETE FROM ledger_entries
    WHERE wallet_id IN (SELECT id FROM wallets WHERE league_id = :league_id)
""")
_DELETE_WAGERS_SQL = text("DELETE FROM wagers WHERE league_id = :league_id")
_DELETE_WALLETS_SQL = text("DELETE FROM wallets WHERE league_id = :league_id")


def check_admin_secret(provided: str | None, expected: str | None = None) -> None:
    """Raise AdminForbiddenError unless ``provided`` matches the configured secret.

    Admin operations are disabled entirely while no secret is configured.
    """
    secret = expected if expected is not None else settings.ADMIN_SECRET
    if not secret or not provided:
        raise AdminForbiddenError()
    if not hmac.compare_digest(provided.encode(), secret.encode()):
        raise AdminForbiddenError()


class AdminService:
    def __init__(self, league_id: str | None = None) -> None:
        self._league_id = league_id or settings.LEAGUE_ID

    async def reset_league(self, db: AsyncSession) -> dict[str, Any]:
        """Delete every wallet, wager and ledger entry of the league in one transaction."""
        params = {"league_id": self._league_id}
        try:
            ledger = await db.execute(_DELETE_LEDGER_SQL, params)
            wagers = await db.execute(_DELETE_WAGERS_SQL, params)
            wallets = await db.execute(_DELETE_WALLETS_SQL, params)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.warning(
            "League %s reset: wallets=%d wagers=%d ledger_entries=%d",
            self._league_id,
            wallets.rowcount,
            wagers.rowcount,
            ledger.rowcount,
        )
        return {
            "league_id": self._league_id,
            "wallets_deleted": wallets.rowcount,
            "wagers_deleted": wagers.rowcount,
            "ledger_entries_deleted": ledger.rowcount,
        }

"""Integration-test fixtures.

All integration tests share a single event loop so that the module-level
SQLAlchemy async engine pool (created at import time) remains valid across
the entire test session. Tests are skipped when PostgreSQL is not reachable
or the migrations have not been applied.

Pre-condition: a running PostgreSQL and `alembic upgrade head`.
"""

import uuid

import pytest
import pytest_asyncio
from sqlalchemy import text

from src.lw_common.database import async_session_factory, engine


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def database_ready() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1 FROM wallets LIMIT 1"))
    except Exception as exc:  # noqa: BLE001
        pytest.skip(f"PostgreSQL with migrated schema not available: {exc}")
    return True


@pytest_asyncio.fixture(loop_scope="session")
async def league_id(database_ready: bool):
    """A throwaway league id; its rows are removed after the test."""
    lid = f"it_{uuid.uuid4().hex[:10]}"
    yield lid
    async with async_session_factory() as db:
        await db.execute(
            text(
                "DELETE FROM ledger_entries WHERE wallet_id IN "
                "(SELECT id FROM wallets WHERE league_id = :lid)"
            ),
            {"lid": lid},
        )
        await db.execute(text("DELETE FROM wagers WHERE league_id = :lid"), {"lid": lid})
        await db.execute(text("DELETE FROM wallets WHERE league_id = :lid"), {"lid": lid})
        await db.commit()

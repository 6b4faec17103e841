"""SlipStore — Redis-backed session storage for bet slips.

One JSON document per (league, participant), {"week": ..., "legs": [...]},
refreshed with a TTL on every write. Slips are session state: an expired or
flushed slip is simply empty.
"""

import json

import redis.asyncio as aioredis

from config.settings import settings
from src.lw_slip.domain.models import BetSlip


def slip_key(league_id: str, participant_id: str) -> str:
    return f"slip:{league_id}:{participant_id}"


class SlipStore:
    def __init__(self, redis: aioredis.Redis, league_id: str | None = None) -> None:
        self._redis = redis
        self._league_id = league_id or settings.LEAGUE_ID

    async def load(self, participant_id: str) -> BetSlip:
        raw = await self._redis.get(slip_key(self._league_id, participant_id))
        if not raw:
            return BetSlip()
        doc = json.loads(raw)
        return BetSlip.from_list(doc["legs"], week=doc.get("week"))

    async def save(self, participant_id: str, slip: BetSlip) -> None:
        key = slip_key(self._league_id, participant_id)
        if slip.is_empty:
            await self._redis.delete(key)
            return
        doc = {"week": slip.week, "legs": slip.to_list()}
        await self._redis.set(key, json.dumps(doc), ex=settings.SLIP_TTL_SECONDS)

    async def clear(self, participant_id: str) -> None:
        await self._redis.delete(slip_key(self._league_id, participant_id))

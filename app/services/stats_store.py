"""Durable storage for the focus stats snapshot.

The backing store is anything with async ``get``/``set``/``delete`` over
string values, normally a ``redis.asyncio`` client created with
``decode_responses=True``. One JSON document lives under a fixed key.
"""

import logging

from pydantic import ValidationError

from app.exceptions import MalformedPersistedState
from app.schemas.stats import StatsSnapshot

logger = logging.getLogger(__name__)


def default_snapshot() -> StatsSnapshot:
    return StatsSnapshot()


def parse_snapshot(raw: str | bytes) -> StatsSnapshot:
    """Parse stored JSON into a snapshot, raising MalformedPersistedState on any defect."""
    try:
        return StatsSnapshot.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedPersistedState(str(e)) from e


def serialize_snapshot(snapshot: StatsSnapshot) -> str:
    return snapshot.model_dump_json(by_alias=True)


class StatsStore:
    def __init__(self, redis_client, key: str):
        self.redis = redis_client
        self.key = key

    async def load(self) -> StatsSnapshot:
        raw = await self.redis.get(self.key)
        if raw is None:
            return default_snapshot()
        try:
            return parse_snapshot(raw)
        except MalformedPersistedState as e:
            logger.warning("Discarding unreadable stats under %r: %s", self.key, e)
            return default_snapshot()

    async def persist(self, snapshot: StatsSnapshot) -> bool:
        # Nothing recorded yet, so there is nothing worth keeping
        if snapshot.last_session_date is None:
            logger.debug("Skipping persist of never-recorded stats under %r", self.key)
            return False
        await self.redis.set(self.key, serialize_snapshot(snapshot))
        return True

    async def clear(self) -> None:
        await self.redis.delete(self.key)

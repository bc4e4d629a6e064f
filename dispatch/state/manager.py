"""Redis-based state manager backing the repositories."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import redis.asyncio as redis
from redis.exceptions import WatchError

from dispatch.config import get_settings
from dispatch.utils.logging import get_logger

logger = get_logger(__name__)


class StateManager:
    """Thin JSON-over-Redis store with optimistic write support."""

    def __init__(self, redis_url: str | None = None) -> None:
        settings = get_settings()
        self.redis_client: redis.Redis | None = None
        self.redis_url = redis_url or settings.redis_url
        self.key_prefix = settings.redis_key_prefix

    def key(self, *parts: str) -> str:
        """Build a namespaced key."""
        return ":".join([self.key_prefix, *parts])

    async def connect(self) -> None:
        """Establish Redis connection."""
        if self.redis_client is None:
            self.redis_client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            logger.info("redis_connected", url=self.redis_url)

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self.redis_client:
            await self.redis_client.aclose()
            self.redis_client = None
            logger.info("redis_disconnected")

    async def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value."""
        if not self.redis_client:
            await self.connect()

        await self.redis_client.set(key, json.dumps(value))
        logger.debug("state_set", key=key)

    async def get(self, key: str) -> Any:
        """Get a JSON value, or None if the key is absent."""
        if not self.redis_client:
            await self.connect()

        value = await self.redis_client.get(key)
        return json.loads(value) if value is not None else None

    async def sadd(self, key: str, *members: str) -> None:
        """Add members to a set."""
        if not self.redis_client:
            await self.connect()

        await self.redis_client.sadd(key, *members)

    async def smembers(self, key: str) -> set[str]:
        """Get all members of a set."""
        if not self.redis_client:
            await self.connect()

        return await self.redis_client.smembers(key)

    async def mget(self, keys: list[str]) -> list[Any]:
        """Get several JSON values at once; missing keys yield None."""
        if not self.redis_client:
            await self.connect()

        if not keys:
            return []
        values = await self.redis_client.mget(keys)
        return [json.loads(value) if value is not None else None for value in values]

    async def compare_and_set(
        self,
        key: str,
        value: Any,
        check: Callable[[Any], bool],
    ) -> bool:
        """
        Write ``value`` only if ``check`` accepts the currently stored value.

        The key is watched for the duration of the check, so a concurrent
        write between the read and the write also fails the update.

        Returns:
            True if the value was written
        """
        if not self.redis_client:
            await self.connect()

        async with self.redis_client.pipeline(transaction=True) as pipe:
            try:
                await pipe.watch(key)
                raw = await pipe.get(key)
                current = json.loads(raw) if raw is not None else None
                if not check(current):
                    await pipe.unwatch()
                    return False
                pipe.multi()
                pipe.set(key, json.dumps(value))
                await pipe.execute()
            except WatchError:
                logger.info("state_write_conflict", key=key)
                return False

        logger.debug("state_compare_and_set", key=key)
        return True

    async def compare_and_delete(
        self,
        key: str,
        check: Callable[[Any], bool],
        index_key: str | None = None,
        member: str | None = None,
    ) -> bool:
        """
        Delete ``key`` only if ``check`` accepts the currently stored value.

        When ``index_key`` is given, ``member`` is removed from that set in
        the same transaction.

        Returns:
            True if the key was deleted
        """
        if not self.redis_client:
            await self.connect()

        async with self.redis_client.pipeline(transaction=True) as pipe:
            try:
                await pipe.watch(key)
                raw = await pipe.get(key)
                current = json.loads(raw) if raw is not None else None
                if not check(current):
                    await pipe.unwatch()
                    return False
                pipe.multi()
                pipe.delete(key)
                if index_key is not None:
                    pipe.srem(index_key, member)
                await pipe.execute()
            except WatchError:
                logger.info("state_delete_conflict", key=key)
                return False

        logger.debug("state_compare_and_delete", key=key)
        return True


# Global state manager instance
_state_manager: StateManager | None = None


async def get_state_manager() -> StateManager:
    """Get the global state manager instance."""
    global _state_manager
    if _state_manager is None:
        _state_manager = StateManager()
        await _state_manager.connect()
    return _state_manager

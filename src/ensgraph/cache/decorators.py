"""Caching decorators for async service methods."""

import asyncio
import logging
from collections.abc import Callable, Iterable
from functools import wraps
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

from pydantic import BaseModel
from redis.exceptions import RedisError
from sqlalchemy import event

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

# Keys into Session.info
_STALE_KEYS = "ensgraph.stale_cache_keys"
_CACHE = "ensgraph.cache"
_TASKS = "ensgraph.cache_invalidations"


def cached(
    key_builder: Callable[..., str],
    ttl: int | None = None,
    model: type[BaseModel] | None = None,
    cache_none: bool = False,
):
    """
    Decorator for caching async method results.

    The instance must expose ``_cache`` (an ``AsyncRedisClient`` or ``None``)
    and, when ``ttl`` is not given, ``_cache_ttl``.

    Args:
        key_builder: Function that takes the same args as decorated function
                    and returns a cache key string.
        ttl: Time to live in seconds (defaults to the instance's ``_cache_ttl``).
        model: Pydantic model the result is dumped from and validated back into.
        cache_none: Whether to cache None results (default False).

    Usage:
        @cached(CacheKeys.profile, model=ENSProfile)
        async def get_profile(self, name: str) -> ENSProfile | None:
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        async def wrapper(self, *args: P.args, **kwargs: P.kwargs) -> R:
            cache = getattr(self, "_cache", None)
            if cache is None:
                return await func(self, *args, **kwargs)

            key = key_builder(*args, **kwargs)

            cached_value = await cache.get(key)
            if cached_value is not None:
                if model is not None:
                    return model.model_validate(cached_value)
                return cached_value

            result = await func(self, *args, **kwargs)

            if result is not None or cache_none:
                value = result
                if model is not None and isinstance(result, BaseModel):
                    value = result.model_dump(mode="json")
                await cache.set(key, value, ttl=ttl or getattr(self, "_cache_ttl", 600))

            return result

        return wrapper

    return decorator


async def _delete_keys(cache: Any, keys: list[str]) -> None:
    try:
        await cache.delete(*keys)
    except RedisError as e:
        logger.warning(f"Failed to invalidate {keys}: {e}")


def _on_commit(session: "Session") -> None:
    keys = session.info.get(_STALE_KEYS)
    if not keys:
        return
    stale = sorted(keys)
    keys.clear()
    tasks: set[asyncio.Task] = session.info.setdefault(_TASKS, set())
    task = asyncio.get_running_loop().create_task(_delete_keys(session.info[_CACHE], stale))
    tasks.add(task)
    task.add_done_callback(tasks.discard)


def _on_rollback(session: "Session") -> None:
    session.info.get(_STALE_KEYS, set()).clear()


def invalidate_on_commit(session: "AsyncSession", cache: Any, keys: Iterable[str]) -> None:
    """
    Delete ``keys`` from ``cache`` once ``session`` commits.

    Readers see the old rows until the commit. A rollback discards the keys.
    """
    info = session.info
    if _STALE_KEYS not in info:
        info[_STALE_KEYS] = set()
        info[_CACHE] = cache
        event.listen(session.sync_session, "after_commit", _on_commit)
        event.listen(session.sync_session, "after_rollback", _on_rollback)
    info[_STALE_KEYS].update(keys)


async def wait_for_invalidations(session: "AsyncSession") -> None:
    """Wait until cache deletes scheduled by earlier commits have run."""
    tasks = session.info.get(_TASKS)
    if tasks:
        await asyncio.gather(*list(tasks))


def cache_invalidate(
    key_builder: Callable[..., str | list[str]],
):
    """
    Decorator that invalidates cache keys after a write.

    When the instance exposes ``_session`` the keys are deleted after that
    session commits; otherwise they are deleted as soon as the method returns.

    Args:
        key_builder: Function that returns the cache key(s) to invalidate.

    Usage:
        @cache_invalidate(lambda *args, **kwargs: CacheKeys.graph())
        async def delete_user(self, ens_name: str) -> None:
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        async def wrapper(self, *args: P.args, **kwargs: P.kwargs) -> R:
            result = await func(self, *args, **kwargs)

            cache = getattr(self, "_cache", None)
            if cache is not None:
                keys = key_builder(*args, **kwargs)
                if isinstance(keys, str):
                    keys = [keys]
                session = getattr(self, "_session", None)
                if session is not None:
                    invalidate_on_commit(session, cache, keys)
                else:
                    await cache.delete(*keys)

            return result

        return wrapper

    return decorator

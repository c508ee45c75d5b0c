"""
Request-scoped batching loader.

`BatchLoader` coalesces the `load(key)` calls that sibling resolvers issue in
the same event-loop tick into a single call of a batch function, caches the
successful per-key values for its own lifetime and fans results (or errors)
back out to every waiting caller.

Batching and the per-key future cache come from strawberry's `DataLoader`;
this class adds the domain rules on top of it:
    - keys missing from the batch result resolve to `default_factory()`;
    - failures are delivered as AppError clones and are not cached;
    - anything else the batch function raises (or returns by mistake) is
      mapped to DatabaseError through `map_storage_error`;
    - callers get a shallow copy of the cached value.

One loader instance is created per request and dropped with it; the cache has
no TTL and no eviction.

Batch function contract:
    async def fetch(keys: set[K]) -> Mapping[K, V | AppError]

    - keys missing from the returned mapping resolve to `default_factory()`
      (an empty list by default), not to an error;
    - an AppError value fails only that key;
    - raising fails every key of the call (fate-sharing).
"""
from __future__ import annotations

import asyncio
import copy
import logging
import time
from collections.abc import Awaitable, Callable, Hashable, Iterable, Mapping
from typing import Any, Generic, TypeVar

from strawberry.dataloader import DataLoader

from blog_api.exceptions.base import AppError
from blog_api.exceptions.mapper import map_storage_error

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

BatchFn = Callable[[set[K]], Awaitable[Mapping[K, Any]]]

DEFAULT_MAX_BATCH_SIZE = 100

_MISSING = object()


class BatchLoader(Generic[K, V]):
    """
    Coalescing, caching loader for one request.

    Args:
        batch_fn: async callable receiving the set of distinct keys to fetch.
        max_batch_size: upper bound on keys per batch call.
        default_factory: value for keys the batch function leaves out.
        name: used in logs and as the operation name for error mapping.

    Usage:
        loader = BatchLoader(fetch_posts_by_author, max_batch_size=100)
        posts = await loader.load(user_id)
    """

    def __init__(
        self,
        batch_fn: BatchFn,
        *,
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
        default_factory: Callable[[], V] = list,  # type: ignore[assignment]
        name: str | None = None,
    ) -> None:
        if max_batch_size < 1:
            raise ValueError(f"max_batch_size must be >= 1, got {max_batch_size}")

        self._batch_fn = batch_fn
        self.max_batch_size = max_batch_size
        self._default_factory = default_factory
        self.name = name or getattr(batch_fn, "__name__", type(batch_fn).__name__)

        self._loader: DataLoader[K, V] = DataLoader(
            load_fn=self._load_batch,
            max_batch_size=max_batch_size,
        )

    # =================================================================================================================
    # Public API
    # =================================================================================================================

    async def load(self, key: K) -> V:
        """
        Return the value for `key`, raising the AppError reported for it.

        Keys already waiting in an open window or an in-flight batch share its
        future instead of being fetched again. The shared future is shielded so
        a cancelled caller does not cancel it for the others.
        """
        try:
            value = await asyncio.shield(self._loader.load(key))
        except AppError as exc:
            raise exc.clone() from None
        except Exception as exc:
            self._loader.clear(key)
            raise map_storage_error(exc, operation=self.name) from exc

        return copy.copy(value)

    async def load_many(self, keys: Iterable[K]) -> list[V]:
        """Load several keys at once; results follow the order of `keys`."""
        return list(await asyncio.gather(*(self.load(key) for key in keys)))

    # =================================================================================================================
    # Batch execution
    # =================================================================================================================

    async def _load_batch(self, keys: list[K]) -> list[Any]:
        """DataLoader load_fn: one outcome per key, in the order of `keys`."""
        start = time.perf_counter()

        logger.debug(
            "loader.batch.dispatch",
            extra={"loader": self.name, "key_count": len(keys)},
        )

        try:
            results = await self._batch_fn(set(keys))
            if not isinstance(results, Mapping):
                raise TypeError(
                    f"batch function {self.name!r} must return a mapping, got {type(results).__name__}"
                )
            outcomes = [self._outcome(results, key) for key in keys]
        except AppError as exc:
            failure = exc
        except Exception as exc:
            failure = map_storage_error(exc, operation=self.name)
        else:
            logger.info(
                "loader.batch.resolved",
                extra={
                    "loader": self.name,
                    "key_count": len(keys),
                    "returned_keys": len(results),
                    "duration_ms": int((time.perf_counter() - start) * 1000),
                },
            )
            # errors are not memoized: a later load() re-attempts the fetch
            self._loader.clear_many([key for key, outcome in zip(keys, outcomes) if isinstance(outcome, AppError)])
            return outcomes

        logger.warning(
            "loader.batch.failed",
            extra={
                "loader": self.name,
                "key_count": len(keys),
                "error_kind": failure.kind.value,
                "internal_cause": failure.internal_cause,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        self._loader.clear_many(keys)
        return [failure] * len(keys)

    def _outcome(self, results: Mapping[K, Any], key: K) -> Any:
        outcome = results.get(key, _MISSING)
        if outcome is _MISSING:
            return self._default_factory()
        if isinstance(outcome, BaseException) and not isinstance(outcome, AppError):
            return map_storage_error(outcome, operation=self.name)
        return outcome


__all__ = ["BatchLoader", "BatchFn", "DEFAULT_MAX_BATCH_SIZE"]

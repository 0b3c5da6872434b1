"""Background sweep of expired cache entries.

MemoryKeyValueStore only drops an expired entry when that key is read
again, so versions of packages that stop being requested would stay in
memory forever. The sweep removes them on a fixed interval. Stores whose
backend expires entries itself (edge KV, Redis) do not implement
ExpiringStore and never get a sweep.

Examples:
    Start and stop the sweep::

        from version_redirect.core.cleanup import start_cleanup_task, stop_cleanup_task
        from version_redirect.storage.memory import MemoryKeyValueStore

        store = MemoryKeyValueStore()
        task = await start_cleanup_task(store, interval_seconds=300)
        ...
        await stop_cleanup_task(task)
"""

import asyncio
import weakref

from version_redirect.observability.logging import get_logger
from version_redirect.observability.metrics import record_cleanup
from version_redirect.storage.base import ExpiringStore

logger = get_logger(__name__)

# Stop signal of every task created by start_cleanup_task
_stop_events: "weakref.WeakKeyDictionary[asyncio.Task[None], asyncio.Event]" = (
    weakref.WeakKeyDictionary()
)


async def sweep_expired(store: ExpiringStore) -> int:
    """Run a single sweep over the store.

    Returns:
        Number of entries removed, 0 when the sweep failed.
    """
    try:
        removed = await store.cleanup_expired()
    except Exception as e:
        logger.error("cleanup.failed", error=str(e), error_type=type(e).__name__)
        return 0

    record_cleanup(removed)
    log = logger.info if removed else logger.debug
    log("cleanup.completed", entries_removed=removed)
    return removed


async def cleanup_loop(
    store: ExpiringStore,
    interval_seconds: int = 300,
    stop_event: asyncio.Event | None = None,
) -> None:
    """Sweep the store every interval_seconds until stop_event is set.

    The first sweep runs immediately. A failed sweep does not end the loop.
    """
    stop_event = stop_event or asyncio.Event()
    logger.info("cleanup.started", interval_seconds=interval_seconds)

    while not stop_event.is_set():
        await sweep_expired(store)
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval_seconds)
        except asyncio.TimeoutError:
            pass

    logger.info("cleanup.stopped")


async def start_cleanup_task(
    store: ExpiringStore,
    interval_seconds: int = 300,
) -> asyncio.Task[None]:
    """Run cleanup_loop in the background.

    Returns:
        The running task, to be passed to stop_cleanup_task() on shutdown.
    """
    stop_event = asyncio.Event()
    task = asyncio.create_task(cleanup_loop(store, interval_seconds, stop_event))
    _stop_events[task] = stop_event
    return task


async def stop_cleanup_task(task: asyncio.Task[None], timeout_seconds: float = 5.0) -> None:
    """Ask the sweep to stop, cancelling it if it does not finish in time."""
    stop_event = _stop_events.pop(task, None)
    if stop_event is not None:
        stop_event.set()
    else:
        task.cancel()

    try:
        await asyncio.wait_for(task, timeout=timeout_seconds)
    except asyncio.TimeoutError:
        logger.warning("cleanup.stop_timeout", timeout_seconds=timeout_seconds)
    except asyncio.CancelledError:
        logger.debug("cleanup.cancelled")

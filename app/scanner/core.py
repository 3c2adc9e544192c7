"""
==============================================================================
Scan Event Core Module
==============================================================================

Resolves decoded scan payloads against the product catalog.

The symbol decoding itself happens on the client; this module only sees
the decoded string of each scan event.

Features:
---------
- ScanResolver: payload -> ScanResult (product or "not found" message)
- ScanEventQueue: bounded, ordered channel between the decoder and lookup
  - Back-pressure: ``submit`` waits while the queue is full
  - Results are delivered in arrival order by a single consumer task

==============================================================================
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from app.catalog import ProductCatalog, ScanResult


# Module logger
logger = logging.getLogger(__name__)

ResultCallback = Callable[[ScanResult], Awaitable[None]]


class ScanResolver:
    """
    Maps scan events to catalog lookup results.

    Example:
        >>> resolver = ScanResolver(catalog)
        >>> resolver.resolve("A1").found
        True
        >>> resolver.resolve("B2").message
        'Information not found'
    """

    def __init__(self, catalog: ProductCatalog) -> None:
        self._catalog = catalog

    def resolve(self, payload: str) -> ScanResult:
        """Look up the payload verbatim and wrap the outcome."""
        product = self._catalog.lookup(payload)
        logger.debug(f"QR Code: {payload} ({'found' if product else 'not found'})")
        return ScanResult.for_lookup(payload, product)


class ScanEventQueue:
    """
    Bounded queue of scan events with a single consumer.

    Handles the lifecycle of the asyncio task that drains the queue and
    hands each result to ``on_result``.

    Example:
        >>> queue = ScanEventQueue(resolver, on_result=send, maxsize=32)
        >>> queue.start()
        >>> await queue.submit("A1")
        >>> await queue.join()
        >>> await queue.stop()
    """

    def __init__(
        self,
        resolver: ScanResolver,
        on_result: ResultCallback,
        maxsize: int = 32
    ) -> None:
        self._resolver = resolver
        self._on_result = on_result
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=maxsize)
        self._task: Optional[asyncio.Task] = None
        self._processed = 0

    async def _consume_loop(self) -> None:
        """Resolve queued payloads in arrival order."""
        while True:
            payload = await self._queue.get()
            try:
                result = self._resolver.resolve(payload)
                await self._on_result(result)
                self._processed += 1
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Scan event handling error: {e}")
            finally:
                self._queue.task_done()

    def start(self) -> asyncio.Task:
        """
        Start the consumer task.

        Returns:
            The asyncio Task object
        """
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._consume_loop())
            logger.debug("Scan event consumer started")
        return self._task

    async def submit(self, payload: str) -> None:
        """Enqueue one scan event, waiting while the queue is full."""
        await self._queue.put(payload)

    async def join(self) -> None:
        """Wait until every submitted event has been handled."""
        await self._queue.join()

    async def stop(self) -> None:
        """Cancel the consumer task; pending events are dropped."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            logger.debug("Scan event consumer stopped")
        self._task = None

    @property
    def is_running(self) -> bool:
        """Check if the consumer is running."""
        return self._task is not None and not self._task.done()

    @property
    def pending(self) -> int:
        """Number of events waiting in the queue."""
        return self._queue.qsize()

    @property
    def processed(self) -> int:
        """Number of events whose result was delivered."""
        return self._processed

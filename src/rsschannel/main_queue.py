"""Delivery of worker-thread callbacks onto the event loop thread.

Channels are not thread-safe, so transport threads never touch them
directly. They post callbacks through a ``ProcessorRegistry``; the single
registered ``MainQueueProcessor`` runs them on its asyncio loop.
"""

import asyncio
import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class ProcessorRegistry:
    """Registration point holding at most one active processor."""

    def __init__(self):
        self._lock = threading.Lock()
        self._processor: "MainQueueProcessor | None" = None

    @property
    def active(self) -> "MainQueueProcessor | None":
        with self._lock:
            return self._processor

    def acquire(self, processor: "MainQueueProcessor") -> None:
        with self._lock:
            if self._processor is not None:
                raise RuntimeError("A main queue processor is already registered")
            self._processor = processor

    def release(self, processor: "MainQueueProcessor") -> None:
        with self._lock:
            if self._processor is not processor:
                raise RuntimeError("Processor being released is not the registered one")
            self._processor = None

    def post(self, callback: Callable, *args) -> bool:
        """Queue ``callback(*args)`` on the registered processor.

        Returns False and drops the call if no processor is registered.
        """
        with self._lock:
            if self._processor is None:
                logger.debug("No main queue processor, dropping %r", callback)
                return False
            self._processor.post(callback, *args)
            return True


class MainQueueProcessor:
    """Runs posted callbacks on the thread of an asyncio event loop."""

    def __init__(
        self,
        registry: ProcessorRegistry,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self._registry = registry
        self._loop = loop or asyncio.get_running_loop()
        self._closed = False
        registry.acquire(self)

    def post(self, callback: Callable, *args) -> None:
        self._loop.call_soon_threadsafe(callback, *args)

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._registry.release(self)

    def __enter__(self) -> "MainQueueProcessor":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

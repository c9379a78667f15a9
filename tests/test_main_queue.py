"""Tests for main-queue callback delivery."""

import asyncio
import threading

import pytest

from rsschannel.main_queue import MainQueueProcessor, ProcessorRegistry


def test_post_without_processor_is_dropped():
    registry = ProcessorRegistry()
    calls = []

    assert registry.post(calls.append, 1) is False
    assert calls == []


def test_only_one_processor_at_a_time():
    registry = ProcessorRegistry()
    loop = asyncio.new_event_loop()
    try:
        first = MainQueueProcessor(registry, loop=loop)
        with pytest.raises(RuntimeError):
            MainQueueProcessor(registry, loop=loop)

        first.close()
        assert registry.active is None
        second = MainQueueProcessor(registry, loop=loop)
        assert registry.active is second
        second.close()
    finally:
        loop.close()


def test_release_of_other_processor_fails():
    registry = ProcessorRegistry()
    loop = asyncio.new_event_loop()
    try:
        processor = MainQueueProcessor(registry, loop=loop)
        other = ProcessorRegistry()
        with pytest.raises(RuntimeError):
            other.release(processor)
        processor.close()
        # Closing twice is a no-op
        processor.close()
    finally:
        loop.close()


def test_callbacks_run_on_loop_thread():
    registry = ProcessorRegistry()
    seen = []

    async def scenario():
        done = asyncio.Event()
        loop_thread = threading.get_ident()

        def callback(value):
            seen.append((value, threading.get_ident() == loop_thread))
            done.set()

        with MainQueueProcessor(registry):
            worker = threading.Thread(target=registry.post, args=(callback, "payload"))
            worker.start()
            await asyncio.wait_for(done.wait(), timeout=5)
            worker.join()

    asyncio.run(scenario())

    assert seen == [("payload", True)]
    assert registry.active is None

"""Tests for deferred turn schedulers."""

import asyncio

from pesten_engine.scheduler import AsyncioScheduler, QueueScheduler


class TestQueueScheduler:
    def test_runs_in_fifo_order(self):
        scheduler = QueueScheduler()
        calls = []
        scheduler.schedule(lambda: calls.append("a"))
        scheduler.schedule(lambda: calls.append("b"), delay=2.0)
        assert scheduler.pending == 2
        assert scheduler.run_pending() == 2
        assert calls == ["a", "b"]
        assert scheduler.pending == 0

    def test_cancelled_callbacks_are_skipped(self):
        scheduler = QueueScheduler()
        calls = []
        handle = scheduler.schedule(lambda: calls.append("a"))
        scheduler.schedule(lambda: calls.append("b"))
        handle.cancel()
        assert handle.cancelled
        assert scheduler.pending == 1
        assert scheduler.run_pending() == 1
        assert calls == ["b"]

    def test_callbacks_queued_while_running_are_run(self):
        scheduler = QueueScheduler()
        calls = []

        def first():
            calls.append("first")
            scheduler.schedule(lambda: calls.append("second"))

        scheduler.schedule(first)
        assert scheduler.run_pending() == 2
        assert calls == ["first", "second"]

    def test_limit(self):
        scheduler = QueueScheduler()
        for _ in range(5):
            scheduler.schedule(lambda: None)
        assert scheduler.run_pending(limit=3) == 3
        assert scheduler.pending == 2

    def test_run_next_on_empty_queue(self):
        assert QueueScheduler().run_next() is False

    def test_clear(self):
        scheduler = QueueScheduler()
        handle = scheduler.schedule(lambda: None)
        scheduler.clear()
        assert handle.cancelled
        assert scheduler.run_pending() == 0

    def test_each_callback_runs_once(self):
        scheduler = QueueScheduler()
        calls = []
        scheduler.schedule(lambda: calls.append(1))
        scheduler.run_pending()
        scheduler.run_pending()
        assert calls == [1]


class TestAsyncioScheduler:
    def test_callback_runs_after_delay(self):
        calls = []

        async def main():
            scheduler = AsyncioScheduler()
            scheduler.schedule(lambda: calls.append("ran"), delay=0.01)
            assert calls == []
            await asyncio.sleep(0.05)

        asyncio.run(main())
        assert calls == ["ran"]

    def test_cancelled_callback_never_runs(self):
        calls = []

        async def main():
            scheduler = AsyncioScheduler()
            handle = scheduler.schedule(lambda: calls.append("ran"), delay=0.01)
            handle.cancel()
            assert handle.cancelled
            await asyncio.sleep(0.05)

        asyncio.run(main())
        assert calls == []

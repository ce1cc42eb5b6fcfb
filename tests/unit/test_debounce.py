import asyncio

import pytest

from src.search.debounce import Debouncer


class TestDebouncer:

    async def test_only_latest_call_runs(self):
        calls = []
        debouncer = Debouncer(delay=0.05)

        first = debouncer.call(calls.append, "te")
        second = debouncer.call(calls.append, "tec")
        third = debouncer.call(calls.append, "tech")

        await asyncio.sleep(0.15)
        assert calls == ["tech"]
        assert first.cancelled()
        assert second.cancelled()
        assert third.done() and not third.cancelled()

    async def test_async_callable_result_is_returned(self):
        async def lookup(query):
            return [query.upper()]

        debouncer = Debouncer(delay=0.01)
        task = debouncer.call(lookup, "acme")
        assert await task == ["ACME"]
        assert not debouncer.pending

    async def test_cancel_drops_pending_call(self):
        calls = []
        debouncer = Debouncer(delay=0.05)
        task = debouncer.call(calls.append, "x")
        debouncer.cancel()

        await asyncio.sleep(0.1)
        assert calls == []
        assert task.cancelled()
        assert not debouncer.pending

    async def test_flush_runs_pending_immediately(self):
        calls = []
        debouncer = Debouncer(delay=10)
        task = debouncer.call(calls.append, "now")

        await debouncer.flush()
        assert calls == ["now"]
        await asyncio.sleep(0)
        assert task.cancelled()

    async def test_flush_without_pending_call(self):
        assert await Debouncer().flush() is None

    def test_call_requires_running_loop(self):
        with pytest.raises(RuntimeError):
            Debouncer().call(print, "x")

    def test_delay_from_settings(self, settings):
        assert Debouncer.from_settings(settings).delay == 0.3
        tuned = settings.model_copy(update={"search_debounce_ms": 120})
        assert Debouncer.from_settings(tuned).delay == 0.12

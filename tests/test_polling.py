import asyncio
import threading
from unittest.mock import MagicMock, patch

import pytest
from milvus_marshal.client import polling
from milvus_marshal.exceptions import ParamError, WaitCancelledError, WaitTimeoutError


def counting_probe(done_on: int):
    calls = {"n": 0}

    def probe():
        calls["n"] += 1
        return calls["n"] >= done_on, calls["n"]

    return probe


def fake_clock(step: float):
    ticks = {"t": 0.0}

    def clock():
        now = ticks["t"]
        ticks["t"] += step
        return now

    return clock


class TestPoll:
    @pytest.mark.parametrize("done_on", [1, 2, 5])
    def test_progress_reported_before_done(self, done_on):
        progress = MagicMock()
        value = polling.poll(
            counting_probe(done_on), "never", interval=0.001, progress=progress
        )
        assert value == done_on
        assert [c.args[0] for c in progress.call_args_list] == list(range(1, done_on))

    def test_timeout(self):
        probe = MagicMock(return_value=(False, None))
        with patch("milvus_marshal.client.polling.time.sleep") as sleep:
            with pytest.raises(WaitTimeoutError) as e:
                polling.poll(probe, "waited too long", interval=1.0, timeout=3.0, clock=fake_clock(1.0))
        assert e.value.message == "waited too long"
        # clock: start=0, elapsed 1, 2, 3 after each probe
        assert probe.call_count == 3
        assert sleep.call_count == 2

    def test_not_before_timeout(self):
        probe = counting_probe(4)
        with patch("milvus_marshal.client.polling.time.sleep"):
            assert polling.poll(probe, "m", interval=1.0, timeout=10.0, clock=fake_clock(1.0)) == 4

    def test_wait_capped_by_remaining_time(self):
        probe = MagicMock(return_value=(False, None))
        with patch("milvus_marshal.client.polling.time.sleep") as sleep:
            with pytest.raises(WaitTimeoutError):
                polling.poll(probe, "m", interval=5.0, timeout=2.0, clock=fake_clock(1.5))
        sleep.assert_called_once_with(0.5)

    def test_real_timeout_elapses(self):
        with pytest.raises(WaitTimeoutError):
            polling.poll(lambda: (False, 0), "m", interval=0.01, timeout=0.05)

    def test_cancelled_before_first_probe(self):
        event = threading.Event()
        event.set()
        probe = MagicMock()
        with pytest.raises(WaitCancelledError):
            polling.poll(probe, "m", cancel_event=event)
        probe.assert_not_called()

    def test_cancelled_while_waiting(self):
        event = threading.Event()
        timer = threading.Timer(0.05, event.set)
        timer.start()
        try:
            with pytest.raises(WaitCancelledError):
                polling.poll(lambda: (False, 0), "m", interval=30.0, cancel_event=event)
        finally:
            timer.cancel()

    def test_cancel_distinct_from_timeout(self):
        assert not issubclass(WaitCancelledError, WaitTimeoutError)
        assert not issubclass(WaitTimeoutError, WaitCancelledError)

    @pytest.mark.parametrize("interval", [0, -1, "1"])
    def test_invalid_interval(self, interval):
        with pytest.raises(ParamError):
            polling.poll(lambda: (True, 0), "m", interval=interval)

    def test_probe_error_propagates(self):
        def probe():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            polling.poll(probe, "m")

    def test_default_interval(self):
        probe = counting_probe(2)
        with patch("milvus_marshal.client.polling.time.sleep") as sleep:
            polling.poll(probe, "m")
        sleep.assert_called_once_with(0.5)


class TestAsyncPoll:
    @staticmethod
    def async_counting_probe(done_on: int):
        sync_probe = counting_probe(done_on)

        async def probe():
            await asyncio.sleep(0)
            return sync_probe()

        return probe

    @pytest.mark.asyncio
    async def test_progress_reported_before_done(self):
        seen = []
        value = await polling.async_poll(
            self.async_counting_probe(3), "m", interval=0.001, progress=seen.append
        )
        assert value == 3
        assert seen == [1, 2]

    @pytest.mark.asyncio
    async def test_async_progress_sink(self):
        seen = []

        async def sink(v):
            seen.append(v)

        await polling.async_poll(self.async_counting_probe(2), "m", interval=0.001, progress=sink)
        assert seen == [1]

    @pytest.mark.asyncio
    async def test_timeout(self):
        async def probe():
            return False, None

        with pytest.raises(WaitTimeoutError, match="index never built"):
            await polling.async_poll(probe, "index never built", interval=0.01, timeout=0.05)

    @pytest.mark.asyncio
    async def test_cancel_event_interrupts_wait(self):
        event = asyncio.Event()

        async def probe():
            return False, None

        asyncio.get_running_loop().call_later(0.05, event.set)
        with pytest.raises(WaitCancelledError):
            await asyncio.wait_for(
                polling.async_poll(probe, "m", interval=30.0, cancel_event=event), timeout=5
            )

    @pytest.mark.asyncio
    async def test_task_cancellation_propagates(self):
        async def probe():
            return False, None

        task = asyncio.ensure_future(polling.async_poll(probe, "m", interval=30.0))
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_independent_loops(self):
        first, second = await asyncio.gather(
            polling.async_poll(self.async_counting_probe(2), "a", interval=0.001),
            polling.async_poll(self.async_counting_probe(4), "b", interval=0.001),
        )
        assert (first, second) == (2, 4)

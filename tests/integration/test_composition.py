"""Integration tests composing resolvers, adapters, waiters and pollers."""

import asyncio

import pytest

from syncwait import (
    ResumeHandle,
    SyncError,
    await_callback,
    pause,
    poll,
    sync,
    syncer,
    wait_for,
    wait_for_all,
)


class TestManualSignaling:
    """Hand-driven signaling observed through the record protocol."""

    @pytest.mark.asyncio
    async def test_syncer_token_through_adapter_and_waiter(self):
        """Test a resolver token wrapped by sync() is observed by wait_for()."""
        resume, token = syncer()
        record = sync(token, timeout=2.0)
        asyncio.get_running_loop().call_later(0.05, resume)

        result = await asyncio.wait_for(wait_for(record, 3.0), timeout=4.0)

        assert result is record
        assert record.succeeded
        assert record.value is None

    @pytest.mark.asyncio
    async def test_unresumed_token_times_out(self):
        """Test a resolver nobody resumes ends as a TIMED_OUT record."""
        _, token = syncer()
        record = sync(token, timeout=0.05, discard_on_timeout=True)

        result = await asyncio.wait_for(wait_for(record), timeout=1.0)

        assert result.timed_out


class TestMixedSources:
    """Fan-out across heterogeneous completion sources."""

    @pytest.mark.asyncio
    async def test_wait_for_all_over_every_source(self, delayed):
        """Test coroutines, callbacks, pollers and resolvers are awaited together."""
        loop = asyncio.get_running_loop()
        resume, token = syncer()
        loop.call_later(0.05, resume)

        flag = {"ready": False}
        loop.call_later(0.1, flag.update, {"ready": True})
        polled = poll(lambda: flag["ready"], 2.0)

        results = await asyncio.wait_for(
            wait_for_all(
                [
                    delayed("coroutine", 0.02),
                    await_callback(lambda cb: loop.call_later(0.03, cb, None, "callback")),
                    polled,
                    token,
                ]
            ),
            timeout=3.0,
        )

        # Futures returned by other waiters resolve to their own records.
        assert results[0].value == "coroutine"
        assert results[1].value.value == "callback"
        assert results[2].value.value is True
        assert results[3].succeeded

    @pytest.mark.asyncio
    async def test_pause_handle_drives_poll(self):
        """Test an early-resumed pause unblocks a condition poller."""
        handle = ResumeHandle()
        delay = pause(30, handle)
        asyncio.get_running_loop().call_later(0.05, handle.resume)

        record = await asyncio.wait_for(poll(delay.done, 2.0), timeout=3.0)

        assert record.succeeded
        assert delay.done()


class TestTimeoutLayers:
    """Adapter timeouts versus waiter timeouts."""

    @pytest.mark.asyncio
    async def test_waiter_timeout_does_not_stop_operation(self, delayed):
        """Test a waiter timeout only stops waiting; the record completes later."""
        record = sync(delayed("eventually", 0.3))

        await asyncio.wait_for(wait_for(record, 0.05), timeout=1.0)
        assert record.done is False

        await asyncio.sleep(0.4)
        assert record.value == "eventually"

    @pytest.mark.asyncio
    async def test_callback_error_with_timeout(self):
        """Test a failing callback settles before a generous timeout."""
        record = await asyncio.wait_for(
            await_callback(lambda cb: cb("boom"), 2.0),
            timeout=3.0,
        )

        assert record.error == "boom"
        assert record.error != SyncError.TIMED_OUT

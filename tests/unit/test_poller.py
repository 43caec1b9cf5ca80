"""Tests for the poll() condition poller."""

import asyncio

import pytest

from syncwait.core.errors import NonFunctionError, SyncError
from syncwait.core.models import MIN_POLL_INTERVAL, Synchronizer
from syncwait.patterns.poller import poll


class TestPollSuccess:
    """Tests for predicates that become truthy."""

    @pytest.mark.asyncio
    async def test_counter_threshold(self, calls):
        """Test polling stops once the counter crosses the threshold."""
        counter = 0

        def reached():
            nonlocal counter
            counter += 1
            return counter >= 3

        record = await asyncio.wait_for(
            poll(reached, 2.0, on_done=calls["on_done"].append),
            timeout=3.0,
        )

        assert isinstance(record, Synchronizer)
        assert record.done is True
        assert record.error is None
        assert record.value is True
        assert counter == 3
        assert calls["on_done"] == [record]

    @pytest.mark.asyncio
    async def test_truthy_result_becomes_value(self):
        """Test the first truthy result is stored as the value."""
        results = iter([None, "", "ready"])

        record = await asyncio.wait_for(poll(lambda: next(results), 2.0), timeout=3.0)

        assert record.value == "ready"

    @pytest.mark.asyncio
    async def test_async_predicate(self):
        """Test a coroutine-returning predicate is awaited."""

        async def check():
            await asyncio.sleep(0)
            return 10

        record = await asyncio.wait_for(poll(check), timeout=1.0)

        assert record.value == 10

    @pytest.mark.asyncio
    async def test_first_check_after_one_interval(self):
        """Test the predicate is not evaluated before the first interval."""
        loop = asyncio.get_running_loop()
        start = loop.time()
        seen = []

        await asyncio.wait_for(poll(lambda: seen.append(loop.time()) or True), timeout=1.0)

        assert seen[0] - start >= MIN_POLL_INTERVAL - 0.01

    @pytest.mark.asyncio
    async def test_predicate_never_overlaps(self):
        """Test a slow async predicate is not re-entered."""
        active = 0
        max_active = 0
        calls_made = 0

        async def slow_check():
            nonlocal active, max_active, calls_made
            active += 1
            max_active = max(max_active, active)
            await asyncio.sleep(MIN_POLL_INTERVAL * 2)
            active -= 1
            calls_made += 1
            return calls_made >= 2

        await asyncio.wait_for(poll(slow_check, interval=0.001), timeout=3.0)

        assert max_active == 1

    @pytest.mark.asyncio
    async def test_negative_timeout_disables_timeout(self):
        """Test a negative timeout polls without a deadline."""
        counter = 0

        def reached():
            nonlocal counter
            counter += 1
            return counter >= 2

        record = await asyncio.wait_for(poll(reached, -1), timeout=2.0)

        assert record.error is None
        assert record.done is True


class TestPollTimeout:
    """Tests for predicates that never become truthy."""

    @pytest.mark.asyncio
    async def test_times_out_not_sooner(self, calls):
        """Test a never-true predicate times out at the deadline."""
        loop = asyncio.get_running_loop()
        start = loop.time()

        record = await asyncio.wait_for(
            poll(
                lambda: False,
                0.5,
                on_done=calls["on_done"].append,
                on_timeout=calls["on_timeout"].append,
            ),
            timeout=2.0,
        )
        elapsed = loop.time() - start

        assert 0.49 <= elapsed < 1.0
        assert record.done is True
        assert record.error == SyncError.TIMED_OUT
        assert calls["on_timeout"] == [record]
        assert calls["on_done"] == []

    @pytest.mark.asyncio
    async def test_polling_stops_after_timeout(self):
        """Test the predicate is not called after the timeout."""
        evaluations = 0

        def never():
            nonlocal evaluations
            evaluations += 1
            return False

        await poll(never, 0.2)
        seen = evaluations
        await asyncio.sleep(MIN_POLL_INTERVAL * 3)

        assert evaluations == seen


class TestPollFailures:
    """Tests for invalid and failing predicates."""

    @pytest.mark.asyncio
    async def test_non_callable_rejects(self):
        """Test a non-callable predicate rejects the future."""
        future = poll(42)

        assert future.done()
        with pytest.raises(NonFunctionError) as exc_info:
            await future

        record = exc_info.value.synchronizer
        assert record.done is True
        assert record.value == 42
        assert record.error == SyncError.NON_FUNCTION
        assert exc_info.value.target == 42

    @pytest.mark.asyncio
    async def test_raising_predicate_fails_record(self, calls):
        """Test an exception from the predicate completes the record."""
        exc = RuntimeError("predicate failed")

        def broken():
            raise exc

        record = await asyncio.wait_for(
            poll(broken, 2.0, on_done=calls["on_done"].append),
            timeout=3.0,
        )

        assert record.done is True
        assert record.error is exc
        assert calls["on_done"] == [record]

    @pytest.mark.asyncio
    async def test_options_mapping(self, calls):
        """Test options given as a mapping with unknown keys."""
        record = await asyncio.wait_for(
            poll(lambda: True, None, {"on_done": calls["on_done"].append, "verbose": True}),
            timeout=1.0,
        )

        assert calls["on_done"] == [record]

"""Unit tests for the Debouncer."""

import asyncio
import gc
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from cachekit.config import DebounceConfig
from cachekit.debounce import Debouncer


class TestDebouncerBasic:
    def test_debouncer_should_fire_callback_after_delay(self) -> None:
        event = threading.Event()
        debouncer = Debouncer(delay=0.1, callback=event.set)

        debouncer.trigger()

        assert event.wait(timeout=2)
        assert debouncer.pending is False

    def test_debouncer_should_coalesce_rapid_triggers_into_one(self) -> None:
        fired_at: list[float] = []
        event = threading.Event()

        def callback() -> None:
            fired_at.append(time.monotonic())
            event.set()

        debouncer = Debouncer(delay=0.2, callback=callback)

        # Trigger 5 times, 10ms apart
        for _ in range(5):
            debouncer.trigger()
            last_trigger = time.monotonic()
            time.sleep(0.01)

        assert event.wait(timeout=2)
        time.sleep(0.3)

        assert len(fired_at) == 1
        # Fires one delay after the last trigger, not after the first
        assert fired_at[0] - last_trigger >= 0.18

    def test_debouncer_should_reset_timer_on_retrigger(self) -> None:
        results: list[int] = []
        event = threading.Event()

        def callback() -> None:
            results.append(1)
            event.set()

        debouncer = Debouncer(delay=0.2, callback=callback)

        debouncer.trigger()
        time.sleep(0.1)
        # Re-trigger before the first timer fires
        debouncer.trigger()

        assert event.wait(timeout=2)
        time.sleep(0.3)
        assert len(results) == 1

    def test_call_is_an_alias_of_trigger(self) -> None:
        event = threading.Event()
        debouncer = Debouncer(delay=0.05, callback=event.set)

        debouncer.call()

        assert event.wait(timeout=2)

    def test_from_config_uses_configured_delay(self) -> None:
        debouncer = Debouncer.from_config(DebounceConfig(delay=0.75))
        assert debouncer.delay == 0.75

    def test_negative_delay_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            Debouncer(delay=-1)


class TestDebouncerCallback:
    def test_trigger_without_callback_schedules_nothing(self) -> None:
        debouncer = Debouncer(delay=0.05)

        debouncer.trigger()

        assert debouncer.pending is False

    def test_callback_set_after_noop_trigger_is_not_fired(self) -> None:
        results: list[int] = []
        debouncer = Debouncer(delay=0.05)

        debouncer.trigger()
        debouncer.callback = lambda: results.append(1)
        time.sleep(0.2)

        assert results == []

    def test_replaced_callback_is_the_one_fired(self) -> None:
        results: list[str] = []
        event = threading.Event()

        def second() -> None:
            results.append("second")
            event.set()

        debouncer = Debouncer(delay=0.1, callback=lambda: results.append("first"))
        debouncer.trigger()
        debouncer.callback = second

        assert event.wait(timeout=2)
        assert results == ["second"]

    def test_callback_cleared_before_firing_does_nothing(self) -> None:
        results: list[int] = []
        debouncer = Debouncer(delay=0.05, callback=lambda: results.append(1))

        debouncer.trigger()
        debouncer.callback = None
        time.sleep(0.2)

        assert results == []

    def test_debouncer_should_survive_callback_exception(self) -> None:
        second_done = threading.Event()
        call_count = 0

        def callback() -> None:
            nonlocal call_count
            call_count += 1
            if call_count == 1:
                raise RuntimeError("Intentional test error")
            second_done.set()

        debouncer = Debouncer(delay=0.05, callback=callback)

        # First firing raises; the debouncer should not break
        debouncer.trigger()
        time.sleep(0.2)

        debouncer.trigger()
        assert second_done.wait(timeout=2)
        assert call_count == 2


class TestDebouncerCancellation:
    def test_cancel_should_prevent_pending_callback(self) -> None:
        results: list[int] = []
        debouncer = Debouncer(delay=0.1, callback=lambda: results.append(1))

        debouncer.trigger()
        assert debouncer.pending is True
        debouncer.cancel()

        time.sleep(0.3)
        assert results == []
        assert debouncer.pending is False

    def test_flush_runs_pending_callback_now(self) -> None:
        results: list[int] = []
        debouncer = Debouncer(delay=10, callback=lambda: results.append(1))

        debouncer.trigger()

        assert debouncer.flush() is True
        assert results == [1]
        assert debouncer.pending is False

    def test_flush_without_pending_does_nothing(self) -> None:
        results: list[int] = []
        debouncer = Debouncer(delay=0.05, callback=lambda: results.append(1))

        assert debouncer.flush() is False
        assert results == []

    def test_collected_debouncer_never_fires(self) -> None:
        results: list[int] = []
        debouncer = Debouncer(delay=0.1, callback=lambda: results.append(1))

        debouncer.trigger()
        del debouncer
        gc.collect()

        time.sleep(0.3)
        assert results == []


class TestDebouncerFiringContext:
    def test_fires_on_timer_thread_by_default(self) -> None:
        threads: list[threading.Thread] = []
        event = threading.Event()

        def callback() -> None:
            threads.append(threading.current_thread())
            event.set()

        debouncer = Debouncer(delay=0.05, callback=callback)
        debouncer.trigger()

        assert event.wait(timeout=2)
        assert threads[0] is not threading.current_thread()

    def test_fires_on_caller_executor(self) -> None:
        names: list[str] = []
        event = threading.Event()

        def callback() -> None:
            names.append(threading.current_thread().name)
            event.set()

        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="caller") as executor:
            debouncer = Debouncer(delay=0.05, caller_executor=executor, callback=callback)
            debouncer.trigger()

            assert event.wait(timeout=2)

        assert names[0].startswith("caller")

    def test_shut_down_executor_drops_callback(self) -> None:
        results: list[int] = []
        executor = ThreadPoolExecutor(max_workers=1)
        debouncer = Debouncer(delay=0.05, caller_executor=executor, callback=lambda: results.append(1))

        debouncer.trigger()
        executor.shutdown()

        time.sleep(0.2)
        assert results == []

    async def test_fires_back_on_triggering_event_loop(self) -> None:
        loop_thread = threading.get_ident()
        fired = asyncio.Event()
        threads: list[int] = []

        def callback() -> None:
            threads.append(threading.get_ident())
            fired.set()

        debouncer = Debouncer(delay=0.05, callback=callback)
        debouncer.trigger()

        await asyncio.wait_for(fired.wait(), timeout=2)
        assert threads == [loop_thread]

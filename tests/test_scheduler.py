"""Tests for the APScheduler-backed AsyncioScheduler on a real event loop."""

import asyncio

from study_planner.services.timer import AsyncioScheduler, StudyTimer, TimerPhase


def run(coro):
    """Run an async function in a fresh event loop."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


class TestAsyncioScheduler:
    def test_call_later_fires_once(self):
        calls = []

        async def scenario():
            AsyncioScheduler().call_later(0.01, lambda: calls.append("fired"))
            await asyncio.sleep(0.05)

        run(scenario())
        assert calls == ["fired"]

    def test_cancelled_call_later_never_fires(self):
        calls = []

        async def scenario():
            handle = AsyncioScheduler().call_later(0.01, lambda: calls.append("fired"))
            handle.cancel()
            await asyncio.sleep(0.05)

        run(scenario())
        assert calls == []

    def test_call_every_repeats_until_cancelled(self):
        calls = []

        async def scenario():
            handle = AsyncioScheduler().call_every(0.01, lambda: calls.append(1))
            await asyncio.sleep(0.08)
            handle.cancel()
            seen = len(calls)
            await asyncio.sleep(0.05)
            return seen

        seen = run(scenario())
        assert seen >= 2
        assert len(calls) == seen

    def test_repeat_survives_failing_callback(self):
        calls = []

        def flaky():
            calls.append(1)
            raise RuntimeError("display update failed")

        async def scenario():
            handle = AsyncioScheduler().call_every(0.01, flaky)
            await asyncio.sleep(0.08)
            handle.cancel()

        run(scenario())
        assert len(calls) >= 2

    def test_cancel_after_one_shot_fired(self):
        calls = []

        async def scenario():
            handle = AsyncioScheduler().call_later(0.01, lambda: calls.append("fired"))
            await asyncio.sleep(0.05)
            handle.cancel()
            return handle

        handle = run(scenario())
        assert calls == ["fired"]
        assert handle.cancelled

    def test_callbacks_run_on_the_event_loop(self):
        loops = []

        async def scenario():
            running = asyncio.get_running_loop()
            AsyncioScheduler().call_later(0, lambda: loops.append(asyncio.get_running_loop()))
            await asyncio.sleep(0.05)
            return running

        running = run(scenario())
        assert loops == [running]

    def test_shutdown_drops_pending_jobs(self):
        calls = []

        async def scenario():
            scheduler = AsyncioScheduler()
            scheduler.call_every(0.01, lambda: calls.append(1))
            scheduler.shutdown()
            await asyncio.sleep(0.05)

        run(scenario())
        assert calls == []


class TestTimerOnEventLoop:
    def test_ticks_stop_after_stop(self, store):
        ticks = []

        async def scenario():
            timer = StudyTimer(store, on_tick=ticks.append, tick_interval=0.01)
            await timer.start("task-1")
            await asyncio.sleep(0.05)
            session = await timer.stop()
            seen = len(ticks)
            await asyncio.sleep(0.05)
            return timer, session, seen

        timer, session, seen = run(scenario())
        assert seen >= 1
        assert len(ticks) == seen
        assert timer.phase == TimerPhase.IDLE
        assert session.duration == 0

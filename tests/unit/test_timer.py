"""Tests for signboard.timer module."""

import asyncio

import pytest

from signboard.input_dispatcher import InputDispatcher
from signboard.paginators import SessionStore
from signboard.rotation import RotationController, Section
from signboard.timer import RotationTimer
from tests.conftest import FakeLoop, make_awards, make_events, make_news

pytestmark = [pytest.mark.unit, pytest.mark.fast]


class TestRotationTimer:
    """Tests for the single-owner rotation timer."""

    def test_reset_when_not_started_then_inert(self, fake_loop: FakeLoop):
        timer = RotationTimer(lambda: None, steady_interval=20, loop=fake_loop)
        assert timer.reset() is False
        assert fake_loop.handles == []

    def test_start_when_called_then_arms_bootstrap_interval(self, fake_loop: FakeLoop):
        timer = RotationTimer(
            lambda: None, steady_interval=20, bootstrap_interval=10, loop=fake_loop
        )
        timer.start()
        assert timer.armed
        assert fake_loop.live[0].delay == 10

    def test_reset_when_called_repeatedly_then_only_one_live_handle(self, fake_loop: FakeLoop):
        timer = RotationTimer(lambda: None, steady_interval=20, loop=fake_loop)
        timer.start()
        for _ in range(5):
            timer.reset()
        assert len(fake_loop.live) == 1

    def test_fire_when_ticking_then_calls_handler_and_rearms(self, fake_loop: FakeLoop):
        calls = []
        timer = RotationTimer(lambda: calls.append(1), steady_interval=20, loop=fake_loop)
        timer.start()
        fake_loop.live[0].run()
        assert calls == [1]
        assert timer.fire_count == 1
        assert len(fake_loop.live) == 1

    def test_fire_when_handler_raises_then_still_rearms(self, fake_loop: FakeLoop):
        def boom():
            raise RuntimeError("broken slide")

        timer = RotationTimer(boom, steady_interval=20, loop=fake_loop)
        timer.start()
        fake_loop.live[0].run()
        assert timer.armed
        assert len(fake_loop.live) == 1

    def test_fire_when_stale_generation_then_ignored(self, fake_loop: FakeLoop):
        calls = []
        timer = RotationTimer(lambda: calls.append(1), steady_interval=20, loop=fake_loop)
        timer.start()
        stale = fake_loop.handles[0]
        timer.reset()
        # Simulate a callback that slipped past cancellation
        stale.run()
        assert calls == []

    def test_stop_when_called_then_pending_tick_dropped(self, fake_loop: FakeLoop):
        calls = []
        timer = RotationTimer(lambda: calls.append(1), steady_interval=20, loop=fake_loop)
        timer.start()
        handle = fake_loop.handles[0]
        timer.stop()
        handle.run()
        assert calls == []
        assert not timer.enabled
        assert timer.reset() is False

    def test_promote_when_armed_then_rearms_with_steady_interval(self, fake_loop: FakeLoop):
        timer = RotationTimer(
            lambda: None, steady_interval=20, bootstrap_interval=10, loop=fake_loop
        )
        timer.start()
        timer.promote()
        assert timer.interval == 20
        assert [h.delay for h in fake_loop.live] == [20]

    def test_init_when_interval_not_positive_then_raises(self):
        with pytest.raises(ValueError):
            RotationTimer(lambda: None, steady_interval=0)

    @pytest.mark.asyncio
    async def test_start_when_running_loop_then_fires_on_schedule(self):
        fired = asyncio.Event()
        timer = RotationTimer(fired.set, steady_interval=0.01)
        timer.start()
        await asyncio.wait_for(fired.wait(), timeout=1)
        timer.stop()


class TestTimerAndInput:
    """Manual navigation racing the automatic tick."""

    def test_dispatch_when_tick_pending_then_exactly_one_transition(self, fake_loop: FakeLoop):
        controller = RotationController(SessionStore())
        controller.replace_content(make_news(3), make_awards(3), make_events(3))
        timer = RotationTimer(controller.advance, steady_interval=20, loop=fake_loop)
        dispatcher = InputDispatcher(controller, timer)
        timer.start()
        pending = fake_loop.handles[0]

        dispatcher.dispatch("n")
        # The tick scheduled before the key press fires late
        pending.run()

        assert controller.section is Section.AWARD
        assert controller.epoch == 1
        assert len(fake_loop.live) == 1


class TestFakeLoop:
    def test_live_when_handle_fired_then_excluded(self, fake_loop: FakeLoop):
        timer = RotationTimer(lambda: None, steady_interval=20, loop=fake_loop)
        timer.start()
        first = fake_loop.live[0]
        first.run()
        assert first not in fake_loop.live
        assert fake_loop.live[0].args == (timer.generation,)

import asyncio

import pytest

from algorithms import generate
from engine.playback import MIN_SPEED_MS, SPEED_PRESETS, PlaybackController
from engine.scheduler import AsyncioScheduler


@pytest.fixture
def trace():
    # 19 steps
    return generate("bubble", [5, 1, 4, 2, 8])


@pytest.fixture
def make(trace, scheduler):
    def _make(**kwargs):
        kwargs.setdefault("speed_ms", 100)
        return PlaybackController(trace, scheduler=scheduler, **kwargs)
    return _make


def tick(clock, scheduler, ms):
    clock.advance(ms)
    return scheduler.pump()


class TestNavigation:
    def test_starts_paused_at_zero(self, make, trace):
        ctl = make()
        assert ctl.current_index == 0
        assert not ctl.is_playing
        assert ctl.current_step is trace.steps[0]
        assert ctl.total_steps == len(trace)

    def test_forward_then_back(self, make):
        ctl = make()
        ctl.step_forward()
        ctl.step_forward()
        ctl.step_back()
        assert ctl.current_index == 1

    def test_clamped_at_both_ends(self, make, trace):
        ctl = make()
        assert ctl.step_back() is False
        assert ctl.current_index == 0
        for _ in range(len(trace) + 5):
            ctl.step_forward()
        assert ctl.current_index == len(trace) - 1
        assert ctl.step_forward() is False
        assert ctl.is_finished

    @pytest.mark.parametrize("idx,expected", [(-3, 0), (4, 4), (10_000, 18)])
    def test_goto_clamps(self, make, idx, expected):
        ctl = make()
        ctl.goto(idx)
        assert ctl.current_index == expected

    def test_rewind_and_jump_to_end(self, make, trace):
        ctl = make()
        assert ctl.jump_to_end()
        assert ctl.current_step.is_final
        assert ctl.rewind()
        assert ctl.current_index == 0

    def test_on_step_fires_only_on_change(self, trace, scheduler):
        seen = []
        ctl = PlaybackController(trace, scheduler=scheduler, on_step=lambda s: seen.append(s.step_number))
        ctl.step_back()
        ctl.step_forward()
        ctl.goto(1)
        ctl.goto(3)
        assert seen == [0, 1, 3]

    def test_empty_controller(self, scheduler):
        ctl = PlaybackController(scheduler=scheduler)
        assert ctl.total_steps == 0
        assert ctl.current_step is None
        assert ctl.step_forward() is False
        assert ctl.play() is False
        assert scheduler.pending == 0


class TestReset:
    def test_reset_is_idempotent(self, make, trace):
        ctl = make()
        ctl.goto(7)
        ctl.reset(trace)
        first = ctl.state
        ctl.reset(trace)
        assert ctl.state == first
        assert first.current_index == 0
        assert not first.is_playing

    def test_reset_keeps_speed_and_mode(self, make, trace):
        ctl = make(mode="expert")
        ctl.set_speed(333)
        ctl.reset(generate("heap", [3, 1, 2]))
        assert ctl.speed_ms == 333
        assert ctl.mode == "expert"

    def test_reset_cancels_pending_tick(self, make, clock, scheduler):
        ctl = make()
        ctl.play()
        ctl.reset(generate("selection", [2, 1]))
        assert scheduler.pending == 0
        tick(clock, scheduler, 1000)
        assert ctl.current_index == 0
        assert not ctl.is_playing


class TestAutoplay:
    def test_one_step_per_interval(self, make, clock, scheduler):
        ctl = make()
        assert ctl.play()
        assert ctl.is_playing
        tick(clock, scheduler, 50)
        assert ctl.current_index == 0
        tick(clock, scheduler, 51)
        assert ctl.current_index == 1

    def test_never_more_than_one_pending_tick(self, make, clock, scheduler):
        ctl = make()
        ctl.play()
        ctl.play()
        ctl.toggle_play()
        ctl.toggle_play()
        assert scheduler.pending == 1
        for _ in range(5):
            tick(clock, scheduler, 101)
            ctl.play()
            assert scheduler.pending == 1

    def test_runs_to_completion(self, make, clock, scheduler, trace):
        done = []
        ctl = make(on_complete=done.append)
        ctl.play()
        for _ in range(len(trace) * 2):
            tick(clock, scheduler, 101)
        assert ctl.current_index == len(trace) - 1
        assert not ctl.is_playing
        assert len(done) == 1
        assert done[0].is_final
        assert scheduler.pending == 0
        assert not ctl.has_pending_tick

    def test_play_at_end_completes_immediately(self, make, scheduler):
        done = []
        ctl = make(on_complete=done.append)
        ctl.jump_to_end()
        assert ctl.play() is False
        assert not ctl.is_playing
        assert len(done) == 1
        assert scheduler.pending == 0

    def test_pause_cancels_pending_tick(self, make, clock, scheduler):
        ctl = make()
        ctl.play()
        ctl.pause()
        assert scheduler.pending == 0
        assert tick(clock, scheduler, 1000) == 0
        assert ctl.current_index == 0

    def test_manual_step_while_playing(self, make, clock, scheduler):
        ctl = make()
        ctl.play()
        ctl.step_forward()
        assert ctl.is_playing
        tick(clock, scheduler, 101)
        assert ctl.current_index == 2

    def test_close(self, make, clock, scheduler):
        ctl = make()
        ctl.play()
        ctl.close()
        assert not ctl.is_playing
        assert tick(clock, scheduler, 1000) == 0


class TestTiming:
    def test_speed_change_applies_to_next_tick(self, make, clock, scheduler):
        ctl = make()
        ctl.play()
        ctl.set_speed(300)
        tick(clock, scheduler, 101)        # already-scheduled tick keeps 100ms
        assert ctl.current_index == 1
        tick(clock, scheduler, 101)
        assert ctl.current_index == 1
        tick(clock, scheduler, 200)
        assert ctl.current_index == 2

    @pytest.mark.parametrize("mode", ["expert", "interview"])
    def test_fast_modes_halve_interval(self, make, clock, scheduler, mode):
        ctl = make(mode=mode)
        assert ctl.interval_ms == 50
        ctl.play()
        tick(clock, scheduler, 51)
        assert ctl.current_index == 1

    def test_beginner_uses_full_interval(self, make):
        assert make(mode="beginner").interval_ms == 100

    def test_unknown_mode_falls_back(self, make):
        ctl = make()
        ctl.set_mode("wizard")
        assert ctl.mode == "beginner"

    def test_speed_is_clamped(self, make):
        ctl = make()
        ctl.set_speed(1)
        assert ctl.speed_ms == MIN_SPEED_MS
        ctl.set_speed(-50)
        assert ctl.speed_ms == MIN_SPEED_MS

    def test_presets(self, make):
        ctl = make()
        ctl.set_speed_preset("turbo")
        assert ctl.speed_ms == SPEED_PRESETS["turbo"]
        ctl.set_speed_preset("nonsense")
        assert ctl.speed_ms == SPEED_PRESETS["medium"]


class TestCallbacks:
    def test_pause_from_on_step(self, trace, clock, scheduler):
        holder = {}

        def on_step(step):
            if step.step_number == 2:
                holder["ctl"].pause()

        ctl = PlaybackController(trace, scheduler=scheduler, speed_ms=100, on_step=on_step)
        holder["ctl"] = ctl
        ctl.play()
        for _ in range(10):
            tick(clock, scheduler, 101)
        assert ctl.current_index == 2
        assert not ctl.is_playing
        assert scheduler.pending == 0

    def test_reset_from_on_complete(self, trace, clock, scheduler):
        short = generate("bubble", [2, 1])
        holder = {}

        def on_complete(step):
            if holder["ctl"].trace is trace:
                holder["ctl"].reset(short)

        ctl = PlaybackController(trace, scheduler=scheduler, speed_ms=100, on_complete=on_complete)
        holder["ctl"] = ctl
        ctl.jump_to_end()
        ctl.play()
        assert ctl.trace is short
        assert ctl.current_index == 0
        assert scheduler.pending == 0

    def test_replay_from_on_complete(self, clock, scheduler):
        short = generate("bubble", [2, 1])
        holder = {"laps": 0}

        def on_complete(step):
            holder["laps"] += 1
            if holder["laps"] < 2:
                holder["ctl"].rewind()
                holder["ctl"].play()

        ctl = PlaybackController(short, scheduler=scheduler, speed_ms=100, on_complete=on_complete)
        holder["ctl"] = ctl
        ctl.play()
        for _ in range(20):
            tick(clock, scheduler, 101)
        assert holder["laps"] == 2
        assert ctl.is_finished
        assert scheduler.pending == 0


class TestAsyncioScheduler:
    def test_drives_autoplay(self):
        trace = generate("bubble", [3, 2, 1])

        async def run():
            done = asyncio.Event()
            ctl = PlaybackController(
                trace,
                scheduler=AsyncioScheduler(),
                speed_ms=20,
                on_complete=lambda step: done.set(),
            )
            ctl.play()
            await asyncio.wait_for(done.wait(), timeout=5)
            return ctl

        ctl = asyncio.run(run())
        assert ctl.current_index == len(trace) - 1
        assert not ctl.is_playing

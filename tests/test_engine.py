"""Tests for the PomoFocus countdown engine.

Covers: initial state, mode selection, start/pause toggling, ticking and
the one-shot completion signal, reset idempotence, config replacement,
progress, derived states, and clock cancellation.
"""

import pytest
from PyQt6.QtTest import QTest

from pomofocus.timer.durations import DEFAULT_DURATIONS, DurationConfig, Mode
from pomofocus.timer.engine import (
    SessionSnapshot, TimerEngine, TimerState, TICK_INTERVAL_MS,
)

from helpers import SignalCollector, run_ticks


# ═══════════════════════════════════════════════════════════════════════════
#  INITIAL STATE
# ═══════════════════════════════════════════════════════════════════════════


class TestInitialState:

    def test_starts_idle_on_focus(self, engine):
        assert engine.mode == Mode.FOCUS
        assert engine.remaining == DEFAULT_DURATIONS[Mode.FOCUS]
        assert engine.is_running is False
        assert engine.state == TimerState.IDLE

    def test_initial_snapshot(self, engine):
        snap = engine.snapshot()
        assert snap == SessionSnapshot(
            mode=Mode.FOCUS,
            remaining_seconds=1500,
            is_running=False,
            progress=0.0,
        )

    def test_custom_config_used_from_start(self, short_engine):
        assert short_engine.remaining == 3
        assert short_engine.total_duration == 3

    def test_clock_interval_is_one_second(self, engine):
        assert TICK_INTERVAL_MS == 1000
        assert engine._clock.interval() == 1000


# ═══════════════════════════════════════════════════════════════════════════
#  MODE SELECTION
# ═══════════════════════════════════════════════════════════════════════════


class TestSelectMode:

    @pytest.mark.parametrize("mode", list(Mode))
    def test_loads_full_duration_and_stops(self, engine, mode):
        engine.toggle_run()
        run_ticks(engine, 5)
        engine.select_mode(mode)
        assert engine.mode == mode
        assert engine.remaining == DEFAULT_DURATIONS[mode]
        assert engine.is_running is False
        assert engine.state == TimerState.IDLE

    def test_cancels_clock(self, engine):
        engine.toggle_run()
        assert engine._clock.isActive()
        engine.select_mode(Mode.SHORT_BREAK)
        assert not engine._clock.isActive()

    def test_reselecting_same_mode_restarts_it(self, engine):
        engine.toggle_run()
        run_ticks(engine, 30)
        engine.select_mode(Mode.FOCUS)
        assert engine.remaining == 1500

    def test_uses_current_config(self, short_engine):
        short_engine.select_mode(Mode.LONG_BREAK)
        assert short_engine.remaining == 4


# ═══════════════════════════════════════════════════════════════════════════
#  START / PAUSE
# ═══════════════════════════════════════════════════════════════════════════


class TestToggleRun:

    def test_toggle_starts(self, engine):
        engine.toggle_run()
        assert engine.is_running is True
        assert engine.state == TimerState.RUNNING
        assert engine._clock.isActive()

    def test_toggle_twice_pauses(self, engine):
        engine.toggle_run()
        run_ticks(engine, 3)
        engine.toggle_run()
        assert engine.is_running is False
        assert engine.remaining == 1497
        assert engine.state == TimerState.PAUSED
        assert not engine._clock.isActive()

    def test_pause_without_ticks_is_idle(self, engine):
        engine.toggle_run()
        engine.toggle_run()
        assert engine.state == TimerState.IDLE

    def test_resume_continues_from_paused_time(self, engine):
        engine.toggle_run()
        run_ticks(engine, 10)
        engine.toggle_run()
        engine.toggle_run()
        run_ticks(engine, 5)
        assert engine.remaining == 1485

    def test_state_changed_signal(self, engine):
        c = SignalCollector()
        engine.state_changed.connect(c)

        engine.toggle_run()
        assert c.last == TimerState.RUNNING

        engine.tick()
        engine.toggle_run()
        assert c.last == TimerState.PAUSED

        engine.reset()
        assert c.last == TimerState.IDLE
        assert len(c) == 3

    def test_starting_at_zero_completes_on_next_tick(self, short_engine):
        eng = short_engine
        done = SignalCollector()
        eng.session_completed.connect(done)

        eng.toggle_run()
        run_ticks(eng, 3)
        assert len(done) == 1
        assert eng.state == TimerState.FINISHED

        eng.toggle_run()
        assert eng.is_running is True
        eng.tick()
        assert eng.remaining == 0
        assert eng.is_running is False
        assert len(done) == 2


# ═══════════════════════════════════════════════════════════════════════════
#  TICK / COUNTDOWN
# ═══════════════════════════════════════════════════════════════════════════


class TestTick:

    def test_tick_decrements_by_one(self, engine):
        engine.toggle_run()
        engine.tick()
        assert engine.remaining == 1499

    def test_tick_ignored_when_not_running(self, engine):
        engine.tick()
        assert engine.remaining == 1500

    def test_tick_ignored_after_pause(self, engine):
        engine.toggle_run()
        engine.toggle_run()
        engine.tick()
        assert engine.remaining == 1500

    def test_remaining_changed_signal(self, engine):
        c = SignalCollector()
        engine.remaining_changed.connect(c)
        engine.toggle_run()
        run_ticks(engine, 2)
        assert c.items == [1499, 1498]

    def test_each_tick_strictly_decreases(self, short_engine):
        short_engine.toggle_run()
        seen = []
        for _ in range(3):
            before = short_engine.remaining
            short_engine.tick()
            seen.append(before - short_engine.remaining)
        assert seen == [1, 1, 1]
        assert short_engine.remaining == 0

    def test_never_negative(self, short_engine):
        short_engine.toggle_run()
        run_ticks(short_engine, 10)
        assert short_engine.remaining == 0

    def test_completion_fires_exactly_once(self, short_engine):
        done = SignalCollector()
        short_engine.session_completed.connect(done)
        short_engine.toggle_run()
        run_ticks(short_engine, 10)
        assert done.items == [Mode.FOCUS]
        assert short_engine.is_running is False
        assert short_engine.state == TimerState.FINISHED

    def test_completion_reports_active_mode(self, short_engine):
        done = SignalCollector()
        short_engine.session_completed.connect(done)
        short_engine.select_mode(Mode.SHORT_BREAK)
        short_engine.toggle_run()
        run_ticks(short_engine, 2)
        assert done.last == Mode.SHORT_BREAK

    def test_completion_stops_clock(self, short_engine):
        short_engine.toggle_run()
        run_ticks(short_engine, 3)
        assert not short_engine._clock.isActive()

    def test_no_completion_before_zero(self, short_engine):
        done = SignalCollector()
        short_engine.session_completed.connect(done)
        short_engine.toggle_run()
        run_ticks(short_engine, 2)
        assert len(done) == 0
        assert short_engine.remaining == 1

    def test_full_focus_session(self, engine):
        """Default Focus run: 1500 ticks to zero, one completion."""
        done = SignalCollector()
        engine.session_completed.connect(done)
        engine.select_mode(Mode.FOCUS)
        engine.toggle_run()
        run_ticks(engine, 1500)
        assert engine.remaining == 0
        assert engine.is_running is False
        assert len(done) == 1

        run_ticks(engine, 5)
        assert len(done) == 1

    def test_finished_holds_until_command(self, short_engine):
        short_engine.toggle_run()
        run_ticks(short_engine, 3)
        run_ticks(short_engine, 3)
        assert short_engine.state == TimerState.FINISHED
        short_engine.reset()
        assert short_engine.state == TimerState.IDLE
        assert short_engine.remaining == 3


# ═══════════════════════════════════════════════════════════════════════════
#  RESET
# ═══════════════════════════════════════════════════════════════════════════


class TestReset:

    def test_reset_restores_full_duration(self, engine):
        engine.toggle_run()
        run_ticks(engine, 42)
        engine.reset()
        assert engine.remaining == 1500
        assert engine.is_running is False
        assert not engine._clock.isActive()

    def test_reset_is_idempotent(self, engine):
        engine.select_mode(Mode.LONG_BREAK)
        engine.toggle_run()
        run_ticks(engine, 7)
        engine.reset()
        once = engine.snapshot()
        engine.reset()
        assert engine.snapshot() == once

    def test_reset_keeps_mode(self, engine):
        engine.select_mode(Mode.SHORT_BREAK)
        engine.toggle_run()
        run_ticks(engine, 7)
        engine.reset()
        assert engine.mode == Mode.SHORT_BREAK
        assert engine.remaining == 300


# ═══════════════════════════════════════════════════════════════════════════
#  APPLY CONFIG
# ═══════════════════════════════════════════════════════════════════════════


class TestApplyConfig:

    def test_running_session_is_cancelled_and_reset(self, engine):
        engine.select_mode(Mode.FOCUS)
        engine.toggle_run()
        run_ticks(engine, 10)
        engine.apply_config(DurationConfig.from_raw({
            Mode.FOCUS: {"minutes": 1, "seconds": 0},
            Mode.SHORT_BREAK: {"minutes": 5, "seconds": 0},
            Mode.LONG_BREAK: {"minutes": 15, "seconds": 0},
        }))
        assert engine.remaining == 60
        assert engine.is_running is False
        assert not engine._clock.isActive()

    def test_config_replaced_wholesale(self, engine):
        new = DurationConfig(focus=100, short_break=20, long_break=40)
        engine.apply_config(new)
        assert engine.config is new
        assert engine.duration_for(Mode.SHORT_BREAK) == 20
        engine.select_mode(Mode.LONG_BREAK)
        assert engine.remaining == 40

    def test_applies_to_active_mode(self, engine):
        engine.select_mode(Mode.SHORT_BREAK)
        engine.apply_config(DurationConfig(focus=100, short_break=20, long_break=40))
        assert engine.mode == Mode.SHORT_BREAK
        assert engine.remaining == 20

    def test_finished_session_reset_by_config(self, short_engine):
        short_engine.toggle_run()
        run_ticks(short_engine, 3)
        short_engine.apply_config(DurationConfig(focus=9, short_break=2, long_break=4))
        assert short_engine.state == TimerState.IDLE
        assert short_engine.remaining == 9


# ═══════════════════════════════════════════════════════════════════════════
#  PROGRESS
# ═══════════════════════════════════════════════════════════════════════════


class TestProgress:

    def test_halfway(self, engine):
        engine.apply_config(DurationConfig(focus=100))
        engine.toggle_run()
        run_ticks(engine, 50)
        assert engine.progress == pytest.approx(0.5)
        assert engine.snapshot().progress == pytest.approx(0.5)

    def test_monotonic_and_bounded(self, engine):
        engine.apply_config(DurationConfig(focus=20))
        engine.toggle_run()
        values = [engine.progress]
        for _ in range(25):
            engine.tick()
            values.append(engine.progress)
        assert values == sorted(values)
        assert all(0.0 <= v <= 1.0 for v in values)
        assert values[-1] == 1.0

    def test_zero_duration_gives_zero_progress(self, engine):
        engine.apply_config(DurationConfig(focus=0))
        assert engine.remaining == 0
        assert engine.progress == 0.0
        assert engine.snapshot().progress == 0.0


# ═══════════════════════════════════════════════════════════════════════════
#  CLOCK WIRING
# ═══════════════════════════════════════════════════════════════════════════


class TestClock:

    def test_clock_runs_only_while_running(self, engine):
        assert not engine._clock.isActive()
        engine.toggle_run()
        assert engine._clock.isActive()
        engine.toggle_run()
        assert not engine._clock.isActive()

    def test_clock_timeout_drives_tick(self, engine):
        engine._clock.setInterval(10)
        engine.toggle_run()
        QTest.qWait(200)
        assert engine.remaining < 1500
        engine.toggle_run()
        paused_at = engine.remaining
        QTest.qWait(50)
        assert engine.remaining == paused_at

    def test_clock_completes_short_session(self, qapp):
        eng = TimerEngine(config=DurationConfig(focus=2))
        done = SignalCollector()
        eng.session_completed.connect(done)
        eng._clock.setInterval(10)
        eng.toggle_run()
        QTest.qWait(300)
        assert eng.state == TimerState.FINISHED
        assert done.items == [Mode.FOCUS]
        assert not eng._clock.isActive()

    def test_stale_timeout_after_reset_is_ignored(self, engine):
        engine.toggle_run()
        run_ticks(engine, 4)
        engine.reset()
        engine.tick()
        assert engine.remaining == 1500

    def test_engine_has_no_shared_state(self, qapp):
        a = TimerEngine()
        b = TimerEngine()
        a.toggle_run()
        a.tick()
        assert b.remaining == 1500
        assert b.is_running is False

"""
Tests for the shared beat clock.
"""

import pytest

from syncseed.rhythm_core.beat_clock import BeatClock


@pytest.fixture
def clock(config, feedback):
    return BeatClock(config, feedback)


class TestInterval:
    """Interval clamping and change notifications."""

    def test_initial_interval_is_base(self, clock):
        assert clock.interval == pytest.approx(2.0)
        assert not clock.is_active

    def test_set_interval_clamps(self, clock):
        clock.set_interval(10.0)
        assert clock.interval == pytest.approx(3.0)

        clock.set_interval(0.01)
        assert clock.interval == pytest.approx(0.4)

    def test_change_notifies_once(self, clock, recorder):
        changed = recorder()
        clock.interval_changed.connect(changed)

        clock.set_interval(1.0)
        clock.set_interval(1.0)

        assert changed.calls == [(1.0,)]

    def test_clamped_equal_value_is_silent(self, clock, recorder):
        """A request that clamps to the current value is not a change."""
        changed = recorder()
        clock.set_interval(3.0)
        clock.interval_changed.connect(changed)

        clock.set_interval(99.0)

        assert changed.count == 0


class TestStartStop:
    """Idempotent start/stop."""

    def test_start_then_stop(self, clock):
        clock.start()
        assert clock.is_active
        clock.stop()
        assert not clock.is_active

    def test_double_start_warns(self, clock, warnings_log):
        clock.start()
        clock.start()

        assert clock.is_active
        assert len(warnings_log) == 1

    def test_stop_while_inactive_warns(self, clock, warnings_log):
        clock.stop()

        assert not clock.is_active
        assert len(warnings_log) == 1


class TestPulse:
    """Broadcast and tick-driven pulses."""

    def test_pulse_notifies_in_registration_order(self, clock):
        order = []
        clock.pulse_signal.connect(lambda: order.append("first"))
        clock.pulse_signal.connect(lambda: order.append("second"))

        clock.pulse()

        assert order == ["first", "second"]

    def test_pulse_requests_haptics(self, clock, feedback):
        clock.pulse()

        assert feedback.haptic_pulses == 1
        assert feedback.hit_sounds == 0

    def test_haptics_disabled(self, make_config, feedback):
        clock = BeatClock(make_config(feedback={"haptics_enabled": False}), feedback)

        clock.pulse()

        assert feedback.haptic_pulses == 0
        assert clock.pulse_count == 1

    def test_inactive_tick_does_nothing(self, clock, recorder):
        pulses = recorder()
        clock.pulse_signal.connect(pulses)

        assert clock.tick(10.0) == 0
        assert pulses.count == 0

    def test_tick_fires_on_interval(self, clock, recorder):
        pulses = recorder()
        clock.pulse_signal.connect(pulses)
        clock.start()

        assert clock.tick(1.5) == 0
        assert clock.tick(0.5) == 1
        assert pulses.count == 1

    def test_long_tick_fires_multiple_and_keeps_remainder(self, clock):
        clock.start()

        assert clock.tick(4.5) == 2
        assert clock.elapsed == pytest.approx(0.5)

    def test_negative_tick_ignored(self, clock):
        clock.start()
        clock.tick(-1.0)

        assert clock.elapsed == 0.0

    def test_stop_from_subscriber_halts_tick(self, clock):
        """A subscriber stopping the clock prevents further pulses in the same tick."""
        clock.pulse_signal.connect(clock.stop)
        clock.start()

        assert clock.tick(10.0) == 1

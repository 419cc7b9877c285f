"""
Tests for TimelineClock.
"""

import math

import pytest
from hypothesis import given, strategies as st, settings

from animatic.errors import InvalidSpeedError
from animatic.runtime.clock import TimelineClock, validate_speed


class TestAdvance:
    """Tests for timestamp consumption."""

    def test_first_tick_contributes_zero(self):
        clock = TimelineClock()
        assert clock.advance(1234.5) == 0.0
        assert clock.elapsed == 0.0
        assert clock.anchored

    def test_delta_accumulates(self):
        clock = TimelineClock()
        clock.advance(10.0)
        clock.advance(11.0)
        clock.advance(11.5)
        assert clock.elapsed == pytest.approx(1.5)

    def test_speed_scales_delta(self):
        clock = TimelineClock(speed=2.0)
        clock.advance(0.0)
        assert clock.advance(1.0) == 2.0
        assert clock.elapsed == 2.0

    def test_out_of_order_timestamp_clamped(self):
        clock = TimelineClock()
        clock.advance(10.0)
        clock.advance(12.0)
        assert clock.advance(11.0) == 0.0
        assert clock.elapsed == 2.0

    def test_stale_timestamp_not_recounted(self):
        """After a stale frame, the next delta is measured from the latest one."""
        clock = TimelineClock()
        clock.advance(10.0)
        clock.advance(12.0)
        clock.advance(11.0)
        clock.advance(13.0)
        assert clock.elapsed == 3.0

    def test_duplicate_timestamp(self):
        clock = TimelineClock()
        clock.advance(5.0)
        clock.advance(5.0)
        assert clock.elapsed == 0.0


class TestSpeed:
    """Tests for speed changes."""

    def test_speed_not_retroactive(self):
        clock = TimelineClock()
        clock.advance(0.0)
        clock.advance(1.0)
        clock.set_speed(3.0)
        assert clock.elapsed == 1.0
        clock.advance(2.0)
        assert clock.elapsed == 4.0

    @pytest.mark.parametrize("bad", [0, 0.0, -1.0, math.nan, math.inf, "fast", None, True])
    def test_invalid_speed_rejected(self, bad):
        clock = TimelineClock(speed=1.5)
        with pytest.raises(InvalidSpeedError) as exc:
            clock.set_speed(bad)
        assert clock.speed == 1.5
        assert exc.value.current == 1.5

    def test_invalid_speed_is_value_error(self):
        with pytest.raises(ValueError):
            validate_speed(-2)

    def test_invalid_initial_speed(self):
        with pytest.raises(InvalidSpeedError):
            TimelineClock(speed=0)


class TestSuspendAndReset:
    """Tests for pause gaps and rewinds."""

    def test_suspend_skips_gap(self):
        clock = TimelineClock()
        clock.advance(0.0)
        clock.advance(2.0)
        clock.suspend()
        # Paused for 100 seconds
        assert clock.advance(102.0) == 0.0
        clock.advance(103.0)
        assert clock.elapsed == 3.0

    def test_reset_keeps_speed(self):
        clock = TimelineClock(speed=2.0)
        clock.advance(0.0)
        clock.advance(5.0)
        clock.reset()
        assert clock.elapsed == 0.0
        assert clock.speed == 2.0
        assert not clock.anchored


# =============================================================================
# Property Tests
# =============================================================================

timestamps_strategy = st.lists(
    st.floats(min_value=0.0, max_value=1e6, allow_nan=False, allow_infinity=False),
    min_size=1,
    max_size=50,
)


class TestClockProperties:
    """Property: elapsed is monotonic and bounded by wall time * speed."""

    @given(timestamps_strategy, st.floats(min_value=0.01, max_value=10.0))
    @settings(max_examples=200)
    def test_elapsed_never_decreases(self, timestamps, speed):
        clock = TimelineClock(speed=speed)
        last = 0.0
        for ts in timestamps:
            clock.advance(ts)
            assert clock.elapsed >= last
            last = clock.elapsed

    @given(timestamps_strategy, st.floats(min_value=0.01, max_value=10.0))
    @settings(max_examples=200)
    def test_elapsed_bounded_by_wall_span(self, timestamps, speed):
        clock = TimelineClock(speed=speed)
        for ts in timestamps:
            clock.advance(ts)
        span = max(timestamps) - timestamps[0]
        assert clock.elapsed <= max(0.0, span) * speed * (1 + 1e-9) + 1e-6

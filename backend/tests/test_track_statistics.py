from datetime import datetime, timedelta, timezone

import pytest

from trackstats.core.errors import NegativeDurationError, StopTimeBeforeStartError
from trackstats.schemas.track_point import TrackPoint
from trackstats.stats.track_statistics import TrackStatistics

T0 = datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)


def _stats(start_s, total_s, distance_m, max_speed=0.0, hr=None, moving_s=None):
    stats = TrackStatistics()
    stats.reset(T0 + timedelta(seconds=start_s))
    stats.set_stop_time(T0 + timedelta(seconds=start_s + total_s))
    stats.set_total_time(timedelta(seconds=total_s))
    stats.add_moving_time(timedelta(seconds=total_s if moving_s is None else moving_s))
    stats.add_total_distance(distance_m)
    stats.set_max_speed(max_speed)
    stats.set_average_heart_rate(hr)
    return stats


def test_new_statistics_are_empty():
    stats = TrackStatistics()
    assert not stats.is_initialized()
    assert stats.start_time is None
    assert stats.total_distance == 0.0
    assert stats.total_time == timedelta(0)
    assert not stats.has_total_altitude_gain()
    assert not stats.has_total_altitude_loss()
    assert not stats.has_average_heart_rate()
    assert not stats.has_altitude_min()
    assert not stats.has_slope()


def test_reset_with_start_time_seeds_stop_time():
    stats = TrackStatistics()
    stats.reset(T0)
    assert stats.is_initialized()
    assert stats.start_time == T0
    assert stats.stop_time == T0


def test_reset_clears_heart_rate():
    stats = _stats(0, 60, 100.0, hr=120.0)
    stats.reset()
    assert not stats.has_average_heart_rate()


def test_stop_time_before_start_fails():
    stats = TrackStatistics()
    stats.set_start_time(T0)
    with pytest.raises(StopTimeBeforeStartError):
        stats.set_stop_time(T0 - timedelta(seconds=1))


def test_stop_time_equal_to_start_is_allowed():
    stats = TrackStatistics()
    stats.set_start_time(T0)
    stats.set_stop_time(T0)
    assert stats.stop_time == T0


def test_negative_moving_time_fails():
    stats = TrackStatistics()
    with pytest.raises(NegativeDurationError):
        stats.add_moving_time(timedelta(seconds=-1))


def test_add_moving_time_between_points():
    stats = TrackStatistics()
    previous = TrackPoint(time=T0)
    current = TrackPoint(time=T0 + timedelta(seconds=42))
    stats.add_moving_time_between(current, previous)
    assert stats.moving_time == timedelta(seconds=42)
    with pytest.raises(NegativeDurationError):
        stats.add_moving_time_between(previous, current)


def test_altitude_gain_and_loss_start_absent_and_accumulate():
    stats = TrackStatistics()
    assert stats.total_altitude_gain is None
    stats.add_total_altitude_gain(5.0)
    stats.add_total_altitude_gain(3.0)
    assert stats.total_altitude_gain == pytest.approx(8.0)
    assert stats.total_altitude_loss is None
    stats.add_total_altitude_loss(2.5)
    assert stats.has_total_altitude_loss()
    assert stats.total_altitude_loss == pytest.approx(2.5)


def test_update_altitude_extremities_ignores_none():
    stats = TrackStatistics()
    stats.update_altitude_extremities(None)
    assert not stats.has_altitude_min()
    stats.update_altitude_extremities(1200.0)
    stats.update_altitude_extremities(1500.0)
    assert stats.min_altitude == 1200.0
    assert stats.max_altitude == 1500.0


def test_set_average_heart_rate_ignores_none():
    stats = TrackStatistics()
    stats.set_average_heart_rate(140.0)
    stats.set_average_heart_rate(None)
    assert stats.average_heart_rate == 140.0


def test_average_speed_is_zero_without_time():
    stats = TrackStatistics()
    stats.add_total_distance(100.0)
    assert stats.average_speed == 0.0
    assert stats.average_moving_speed == 0.0


def test_average_speeds():
    stats = _stats(0, 100, 500.0, moving_s=50)
    assert stats.average_speed == pytest.approx(5.0)
    assert stats.average_moving_speed == pytest.approx(10.0)
    assert stats.stopped_time == timedelta(seconds=50)


def test_max_speed_falls_back_to_average_moving_speed():
    stats = _stats(0, 100, 1000.0, max_speed=4.0)
    assert stats.max_speed == pytest.approx(10.0)
    stats.set_max_speed(12.0)
    assert stats.max_speed == pytest.approx(12.0)


def test_merge_sums_and_envelopes():
    a = _stats(0, 100, 300.0, max_speed=4.0)
    b = _stats(200, 50, 200.0, max_speed=6.0)
    a.add_total_altitude_gain(10.0)
    b.add_total_altitude_loss(4.0)
    a.merge(b)
    assert a.start_time == T0
    assert a.stop_time == T0 + timedelta(seconds=250)
    assert a.total_distance == pytest.approx(500.0)
    assert a.total_time == timedelta(seconds=150)
    assert a.moving_time == timedelta(seconds=150)
    assert a.max_speed == pytest.approx(6.0)
    assert a.total_altitude_gain == pytest.approx(10.0)
    assert a.total_altitude_loss == pytest.approx(4.0)


def test_merge_into_uninitialized_adopts_other():
    empty = TrackStatistics()
    other = _stats(30, 60, 120.0)
    empty.merge(other)
    assert empty.start_time == other.start_time
    assert empty.stop_time == other.stop_time
    assert empty.total_distance == pytest.approx(120.0)


def test_merge_with_uninitialized_keeps_time_range():
    stats = _stats(30, 60, 120.0)
    stats.merge(TrackStatistics())
    assert stats.start_time == T0 + timedelta(seconds=30)
    assert stats.stop_time == T0 + timedelta(seconds=90)


def test_merge_weights_heart_rate_by_total_time():
    a = _stats(0, 100, 0.0, hr=100.0)
    b = _stats(100, 300, 0.0, hr=140.0)
    a.merge(b)
    assert a.average_heart_rate == pytest.approx((100 * 100.0 + 300 * 140.0) / 400)


def test_merge_heart_rate_is_order_independent():
    a1, b1 = _stats(0, 100, 0.0, hr=100.0), _stats(100, 300, 0.0, hr=140.0)
    a2, b2 = _stats(0, 100, 0.0, hr=100.0), _stats(100, 300, 0.0, hr=140.0)
    a1.merge(b1)
    b2.merge(a2)
    assert a1.average_heart_rate == pytest.approx(b2.average_heart_rate)


def test_merge_heart_rate_with_one_side_absent():
    a = _stats(0, 100, 0.0)
    b = _stats(100, 100, 0.0, hr=150.0)
    a.merge(b)
    assert a.average_heart_rate == 150.0

    c = _stats(0, 100, 0.0, hr=130.0)
    c.merge(_stats(100, 100, 0.0))
    assert c.average_heart_rate == 130.0

    d = _stats(0, 100, 0.0)
    d.merge(_stats(100, 100, 0.0))
    assert not d.has_average_heart_rate()


def test_merge_heart_rate_with_zero_total_times_does_not_fail():
    a = _stats(0, 0, 0.0, hr=100.0)
    b = _stats(0, 0, 0.0, hr=120.0)
    a.merge(b)
    assert a.average_heart_rate == pytest.approx(110.0)


def test_merge_altitude_extremities_only_with_data():
    a = _stats(0, 10, 0.0)
    a.update_altitude_extremities(1000.0)
    a.merge(_stats(10, 10, 0.0))
    assert (a.min_altitude, a.max_altitude) == (1000.0, 1000.0)

    b = _stats(20, 10, 0.0)
    b.update_altitude_extremities(900.0)
    b.update_altitude_extremities(1400.0)
    a.merge(b)
    assert (a.min_altitude, a.max_altitude) == (900.0, 1400.0)


def test_merge_sums_skiing_bookkeeping():
    a = _stats(0, 100, 0.0)
    b = _stats(100, 100, 0.0)
    a.add_chairlift_waiting_time(timedelta(seconds=30))
    b.add_chairlift_waiting_time(timedelta(seconds=45))
    a.add_skiing_time(timedelta(seconds=60))
    b.add_skiing_time(timedelta(seconds=15))
    a.increment_end_of_run_counter()
    b.increment_end_of_run_counter()
    b.increment_end_of_run_counter()
    a.merge(b)
    assert a.total_chairlift_waiting_time == timedelta(seconds=75)
    assert a.total_skiing_time == timedelta(seconds=75)
    assert a.end_of_run_counter == 3


def test_copy_is_independent():
    a = _stats(0, 100, 250.0, hr=120.0)
    a.update_altitude_extremities(800.0)
    b = a.copy()
    assert a == b
    b.add_total_distance(1.0)
    assert a != b
    assert a.total_distance == pytest.approx(250.0)


def test_equality_compares_rendering():
    a = TrackStatistics.of("2024-01-10T09:00:00Z", "2024-01-10T10:00:00Z", 1000.0, 3600, 3000, 5.0, 12.0, 8.0)
    b = TrackStatistics.of("2024-01-10T09:00:00Z", "2024-01-10T10:00:00Z", 1000.0, 3600, 3000, 5.0, 12.0, 8.0)
    assert a == b
    assert str(a) == str(b)
    assert "Altitude Gain: 12.0" in str(a)
    c = TrackStatistics.of("2024-01-10T09:00:00Z", "2024-01-10T10:00:00Z", 1000.0, 3600, 3000, 5.0, 12.0, None)
    assert a != c

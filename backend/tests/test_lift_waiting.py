from datetime import datetime, timedelta, timezone

from trackstats.schemas.track_point import TrackPoint
from trackstats.segments.lift_waiting import ChairliftWaitingDetector, LiftState
from trackstats.stats.track_statistics import TrackStatistics

T0 = datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)


def _point(seconds, altitude):
    return TrackPoint(time=T0 + timedelta(seconds=seconds), altitude=altitude)


def _base_stats():
    stats = TrackStatistics()
    stats.reset(T0)
    stats.update_altitude_extremities(1000.0)
    stats.update_altitude_extremities(1800.0)
    return stats


def test_waiting_starts_after_threshold():
    stats = _base_stats()
    detector = ChairliftWaitingDetector(stagnant_points_threshold=3)
    states = []
    for i in range(1, 5):
        states.append(detector.update(stats, _point((i - 1) * 30, 1005.0), _point(i * 30, 1005.0), 0.0))
    assert states == [LiftState.active, LiftState.active, LiftState.waiting, LiftState.waiting]
    assert stats.end_of_run_counter == 4
    assert stats.total_chairlift_waiting_time == timedelta(seconds=60)


def test_riding_the_lift_resets_counter():
    stats = _base_stats()
    detector = ChairliftWaitingDetector(stagnant_points_threshold=2)
    detector.update(stats, _point(0, 1005.0), _point(30, 1005.0), 0.0)
    detector.update(stats, _point(30, 1005.0), _point(60, 1005.0), 0.0)
    assert detector.state == LiftState.waiting
    state = detector.update(stats, _point(60, 1005.0), _point(120, 1100.0), 3.0)
    assert state == LiftState.on_lift
    assert stats.end_of_run_counter == 0
    assert stats.total_chairlift_waiting_time == timedelta(seconds=30)


def test_standing_high_up_is_not_waiting():
    stats = _base_stats()
    detector = ChairliftWaitingDetector(stagnant_points_threshold=1)
    state = detector.update(stats, _point(0, 1700.0), _point(60, 1700.0), 0.0)
    assert state == LiftState.active
    assert stats.total_chairlift_waiting_time == timedelta(0)


def test_no_altitude_is_not_waiting():
    stats = TrackStatistics()
    detector = ChairliftWaitingDetector(stagnant_points_threshold=1)
    state = detector.update(stats, _point(0, None), _point(60, None), 0.0)
    assert state == LiftState.active
    assert stats.end_of_run_counter == 0

from datetime import datetime, timedelta, timezone

from trackstats.core.config import Settings
from trackstats.schemas.track_point import TrackPoint
from trackstats.segments.classifier import SegmentClassifier

T0 = datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)


def _pair(seconds, altitude_change, start_altitude=2000.0):
    start = TrackPoint(time=T0, altitude=start_altitude)
    end = TrackPoint(time=T0 + timedelta(seconds=seconds), altitude=start_altitude + altitude_change)
    return start, end


def test_long_descent_qualifies():
    classifier = SegmentClassifier()
    assert classifier.is_qualifying(*_pair(15 * 60, -11.0))


def test_small_altitude_change_never_qualifies():
    classifier = SegmentClassifier()
    for seconds in (10, 60, 15 * 60, 6 * 3600):
        assert not classifier.is_qualifying(*_pair(seconds, -5.0))


def test_short_segment_does_not_qualify():
    classifier = SegmentClassifier()
    assert not classifier.is_qualifying(*_pair(30, 12.0))


def test_thresholds_are_inclusive():
    classifier = SegmentClassifier()
    assert classifier.is_qualifying(*_pair(50, 10.0))
    assert not classifier.is_qualifying(*_pair(49, 10.0))


def test_missing_altitude_does_not_qualify():
    classifier = SegmentClassifier()
    start = TrackPoint(time=T0, altitude=None)
    end = TrackPoint(time=T0 + timedelta(minutes=5), altitude=1500.0)
    assert not classifier.is_qualifying(start, end)


def test_nan_altitude_does_not_qualify():
    classifier = SegmentClassifier()
    assert not classifier.is_qualifying(*_pair(10 * 60, float("nan")))
    start = TrackPoint(time=T0, altitude=float("nan"))
    end = TrackPoint(time=T0 + timedelta(minutes=10), altitude=1500.0)
    assert not classifier.is_qualifying(start, end)


def test_speed_threshold_does_not_gate_classification():
    # Far too slow for the speed threshold, still counts
    classifier = SegmentClassifier(speed_threshold_mps=5.0)
    start = TrackPoint(time=T0, latitude=46.0, longitude=7.0, altitude=2000.0)
    end = TrackPoint(time=T0 + timedelta(minutes=10), latitude=46.0001, longitude=7.0, altitude=1980.0)
    assert classifier.average_speed(start, end) < 1.0
    assert classifier.is_qualifying(start, end)


def test_average_speed_needs_positions():
    classifier = SegmentClassifier()
    assert classifier.average_speed(*_pair(60, -20.0)) is None


def test_from_settings():
    settings = Settings(skiing_altitude_change_m=20.0, skiing_min_duration_s=10)
    classifier = SegmentClassifier.from_settings(settings)
    assert not classifier.is_qualifying(*_pair(60, -15.0))
    assert classifier.is_qualifying(*_pair(10, -25.0))

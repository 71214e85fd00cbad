from typing import Dict, Iterable, List, Optional, Tuple

from trackstats.stats.track_statistics import TrackStatistics


class AggregatedStatistic:
    """Merged statistics of all tracks sharing an activity type."""

    def __init__(self, activity_type: str, statistics: TrackStatistics):
        self.activity_type = activity_type
        self.statistics = statistics
        self.count_tracks = 1

    def add(self, statistics: TrackStatistics) -> None:
        self.statistics.merge(statistics)
        self.count_tracks += 1

    def __repr__(self):
        return f"AggregatedStatistic({self.activity_type!r}, tracks={self.count_tracks})"


class AggregatedStatistics:
    def __init__(self, tracks: Iterable[Tuple[str, TrackStatistics]] = ()):
        self._by_type: Dict[str, AggregatedStatistic] = {}
        for activity_type, statistics in tracks:
            self.aggregate(activity_type, statistics)

    def aggregate(self, activity_type: str, statistics: TrackStatistics) -> None:
        # Merge a copy so the caller's statistics stay untouched
        entry = self._by_type.get(activity_type)
        if entry is None:
            self._by_type[activity_type] = AggregatedStatistic(activity_type, statistics.copy())
        else:
            entry.add(statistics)

    def get(self, activity_type: str) -> Optional[AggregatedStatistic]:
        return self._by_type.get(activity_type)

    @property
    def count(self) -> int:
        return len(self._by_type)

    def items(self) -> List[AggregatedStatistic]:
        """Entries ordered by total distance, longest first."""
        return sorted(self._by_type.values(), key=lambda e: e.statistics.total_distance, reverse=True)

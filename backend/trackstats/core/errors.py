class TrackStatisticsError(ValueError):
    """Upstream ordering violation; statistics must not be clamped past it."""


class StopTimeBeforeStartError(TrackStatisticsError):
    def __init__(self, start_time, stop_time):
        super().__init__(f"stop_time cannot be less than start_time: {start_time} {stop_time}")
        self.start_time = start_time
        self.stop_time = stop_time


class NegativeDurationError(TrackStatisticsError):
    def __init__(self, duration):
        super().__init__(f"Moving time cannot be negative: {duration}")
        self.duration = duration


class UnsupportedTrackFileError(ValueError):
    """Raised for track files that are neither GPX nor FIT."""


class OutOfOrderSampleError(TrackStatisticsError):
    def __init__(self, previous_time, time):
        super().__init__(f"Samples must arrive in time order: {time} precedes {previous_time}")
        self.previous_time = previous_time
        self.time = time

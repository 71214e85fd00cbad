"""Read GPX and FIT track files into ``TrackPoint`` samples."""

import logging
import os
from typing import IO, Iterator, List, Union

import gpxpy
from fitparse import FitFile

from trackstats.core.errors import UnsupportedTrackFileError
from trackstats.schemas.track_point import TrackPoint
from trackstats.stats.geo import semicircles_to_degrees


logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".gpx", ".fit")


def iter_gpx(source: Union[str, IO]) -> Iterator[TrackPoint]:
    """Yield samples from a GPX path or open text stream.

    Points without a timestamp cannot be ordered and are skipped.
    """
    if isinstance(source, str):
        with open(source, "r", encoding="utf-8") as f:
            gpx = gpxpy.parse(f)
    else:
        gpx = gpxpy.parse(source)

    skipped = 0
    for track in gpx.tracks:
        for segment in track.segments:
            for p in segment.points:
                if p.time is None:
                    skipped += 1
                    continue
                yield TrackPoint(
                    time=p.time,
                    latitude=p.latitude,
                    longitude=p.longitude,
                    altitude=p.elevation,
                    speed=p.speed,
                )
    if skipped:
        logger.warning("Skipped %d GPX points without timestamps", skipped)


def iter_fit(source: Union[str, IO]) -> Iterator[TrackPoint]:
    """Yield samples from the "record" messages of a FIT file."""
    ff = FitFile(source)
    skipped = 0
    for record in ff.get_messages("record"):
        fields = {f.name: f.value for f in record}
        ts = fields.get("timestamp")
        if ts is None:
            skipped += 1
            continue
        # Prefer enhanced fields when present
        ele = fields.get("enhanced_altitude")
        if ele is None:
            ele = fields.get("altitude")
        speed = fields.get("enhanced_speed")  # m/s
        if speed is None:
            speed = fields.get("speed")
        hr = fields.get("heart_rate")
        yield TrackPoint(
            time=ts,
            latitude=semicircles_to_degrees(fields.get("position_lat")),
            longitude=semicircles_to_degrees(fields.get("position_long")),
            altitude=float(ele) if ele is not None else None,
            speed=float(speed) if speed is not None else None,
            heart_rate=float(hr) if hr is not None else None,
        )
    if skipped:
        logger.warning("Skipped %d FIT records without timestamps", skipped)


def read_track_file(path: str) -> List[TrackPoint]:
    """Load all samples from a .gpx or .fit file, in time order."""
    ext = os.path.splitext(path)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedTrackFileError(f"Only .gpx or .fit files are supported, got {path}")
    points = list(iter_gpx(path) if ext == ".gpx" else iter_fit(path))
    logger.info("Read %d samples from %s", len(points), path)
    return sorted(points, key=lambda p: p.time)

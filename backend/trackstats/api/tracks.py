import io
import logging
import os
from typing import List

from fastapi import APIRouter, File, HTTPException, UploadFile

from trackstats.core.config import settings
from trackstats.core.errors import TrackStatisticsError
from trackstats.core.time_utils import local_date, resolve_timezone
from trackstats.importers.track_files import SUPPORTED_EXTENSIONS, iter_fit, iter_gpx
from trackstats.schemas.statistics import (
    AggregatedStatisticRead,
    AggregateRequest,
    DailySkiingRead,
    DailySkiingRequest,
    TrackRequest,
    TrackStatisticsRead,
)
from trackstats.segments.daily import DailyAggregator
from trackstats.segments.classifier import SegmentClassifier
from trackstats.stats.aggregated import AggregatedStatistics
from trackstats.stats.updater import TrackStatisticsUpdater


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tracks", tags=["tracks"])
skiing_router = APIRouter(prefix="/skiing", tags=["skiing"])


def _compute(points):
    updater = TrackStatisticsUpdater(settings)
    try:
        return updater.add_track_points(points)
    except TrackStatisticsError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/statistics", response_model=TrackStatisticsRead)
def track_statistics(payload: TrackRequest):
    stats = _compute(payload.points)
    return TrackStatisticsRead.from_statistics(stats)


@router.post("/upload", response_model=TrackStatisticsRead)
def upload_track(file: UploadFile = File(...)):
    filename = file.filename or "upload"
    ext = os.path.splitext(filename)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise HTTPException(status_code=400, detail="Only .gpx or .fit files are supported")

    data = file.file.read()
    try:
        if ext == ".gpx":
            points = list(iter_gpx(io.StringIO(data.decode("utf-8"))))
        else:
            points = list(iter_fit(io.BytesIO(data)))
    except Exception as e:
        logger.warning("Rejected upload %s: %s", filename, e)
        raise HTTPException(status_code=400, detail=f"Invalid file: {e}")

    points.sort(key=lambda p: p.time)
    logger.info("Computing statistics for %s (%d samples)", filename, len(points))
    return TrackStatisticsRead.from_statistics(_compute(points))


@router.post("/aggregate", response_model=List[AggregatedStatisticRead])
def aggregate_tracks(payload: AggregateRequest):
    aggregated = AggregatedStatistics()
    for track in payload.tracks:
        aggregated.aggregate(track.activity_type, _compute(track.points))
    return [
        AggregatedStatisticRead(
            activity_type=entry.activity_type,
            count_tracks=entry.count_tracks,
            statistics=TrackStatisticsRead.from_statistics(entry.statistics),
        )
        for entry in aggregated.items()
    ]


@skiing_router.post("/daily", response_model=DailySkiingRead)
def daily_skiing(payload: DailySkiingRequest):
    tz_name = payload.timezone or settings.timezone
    try:
        tz = resolve_timezone(tz_name)
        aggregator = DailyAggregator(
            payload.points,
            classifier=SegmentClassifier.from_settings(settings),
            tz=tz,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    day = payload.date or local_date(aggregator.clock(), tz)
    duration = aggregator.total_skiing_duration(day)

    return DailySkiingRead(
        date=day,
        timezone=tz_name,
        skiing_duration_s=duration.total_seconds(),
        by_date={d: v.total_seconds() for d, v in aggregator.durations_by_date().items()},
    )

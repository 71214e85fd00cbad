import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from trackstats.api.tracks import router as tracks_router, skiing_router
from trackstats.core.config import settings


def _setup_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%H:%M:%S"
    logging.basicConfig(level=level, format=fmt, datefmt=datefmt)
    if level > logging.DEBUG:
        logging.getLogger("gpxpy").setLevel(logging.WARNING)


_setup_logging(settings.log_level)

app = FastAPI(title="Track statistics")

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tracks_router)
app.include_router(skiing_router)


@app.get("/")
def root():
    return {"message": "Track statistics backend is running"}

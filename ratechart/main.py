import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, HTTPException, UploadFile

from .chart import build_chart_options
from .errors import RatechartError
from .logging_config import setup_logging
from .models import ChartConfig, ChartOptions, HealthResponse, NormalizeResponse
from .normalize import normalize_csv_bytes
from .rules import (
    ACCEPTED_CONTENT_TYPE,
    ACCEPTED_EXTENSION,
    DEFAULT_DATE_FORMAT,
    DEFAULT_TIME_UNIT,
    MAX_UPLOAD_BYTES,
    DateFormat,
    TimeUnit,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="ratechart",
    description="Exchange-rate CSV normalization and time-axis chart configuration",
    version="0.1.0",
)


def _is_csv_upload(file: UploadFile) -> bool:
    name = (file.filename or "").lower()
    return name.endswith(ACCEPTED_EXTENSION) or file.content_type == ACCEPTED_CONTENT_TYPE


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/normalize", response_model=NormalizeResponse)
async def normalize_csv(file: UploadFile = File(...)):
    if not _is_csv_upload(file):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(raw) > MAX_UPLOAD_BYTES:
        limit_mb = MAX_UPLOAD_BYTES / (1024 * 1024)
        raise HTTPException(status_code=413, detail=f"File size must be less than {limit_mb:g}MB")

    try:
        return normalize_csv_bytes(raw, file.filename or "upload.csv")
    except RatechartError as exc:
        logger.warning("Rejected %s: %s", file.filename, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.get("/chart-config", response_model=ChartOptions)
def chart_config(
    date_format: DateFormat = DEFAULT_DATE_FORMAT,
    time_unit: TimeUnit = DEFAULT_TIME_UNIT,
):
    return build_chart_options(ChartConfig(date_format=date_format, time_unit=time_unit))

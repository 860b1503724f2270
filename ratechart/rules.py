"""
Deterministic normalization and charting rules.

This file exists to make the accepted inputs explicit and enforceable.
"""

import os
from enum import Enum

SOURCE_ENCODING_FALLBACK = "utf-8"
CSV_DELIMITER = ","

# Column aliases, checked in order; first non-empty cell wins.
DATE_COLUMN_ALIASES = ("observation_date", "Date", "date", "DATE")
RATE_COLUMN_ALIASES = ("DEXUSEU", "Rate", "rate", "RATE")

# Upload gate
ACCEPTED_EXTENSION = ".csv"
ACCEPTED_CONTENT_TYPE = "text/csv"
MAX_UPLOAD_BYTES = int(os.getenv("RATECHART_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

LOG_LEVEL = os.getenv("RATECHART_LOG_LEVEL", "INFO")


class DateFormat(str, Enum):
    MONTH_YEAR = "MMM yyyy"
    US = "MM/dd/yyyy"
    EUROPEAN = "dd/MM/yyyy"
    ISO = "yyyy-MM-dd"
    MONTH_DAY_YEAR = "MMM dd, yyyy"


class TimeUnit(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class PointDensity(str, Enum):
    DENSE = "dense"
    NORMAL = "normal"


DEFAULT_DATE_FORMAT = DateFormat.MONTH_YEAR
DEFAULT_TIME_UNIT = TimeUnit.MONTH

MONTH_NAME_TOKEN = "MMM"

POINT_RADIUS = {
    PointDensity.DENSE: 1,
    PointDensity.NORMAL: 2,
}

MAX_TICKS = {
    TimeUnit.DAY: 30,
    TimeUnit.WEEK: 20,
}
DEFAULT_MAX_TICKS = 12

"""
Core normalization logic.

Responsibilities:
- column alias resolution (per row)
- row validation + coercion (date parses, rate is a positive finite float)
- stable chronological ordering
- data quality summary + response envelope
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from dateutil import parser as date_parser

from .errors import ColumnResolutionError
from .models import (
    DatasetSummary,
    DateRange,
    NormalizedDataset,
    NormalizeResponse,
    Observation,
    RateRange,
    SeriesPayload,
)
from .reader import RawRow, read_csv_rows
from .rules import DATE_COLUMN_ALIASES, RATE_COLUMN_ALIASES

logger = logging.getLogger(__name__)

# Missing date parts (day, month) are filled from here, never from today.
PARSE_DEFAULT = datetime(2000, 1, 1)


def resolve_cell(row: Mapping[str, Optional[str]], aliases: Sequence[str]) -> Optional[str]:
    """Return the first non-empty cell under any alias, in alias order."""
    for alias in aliases:
        value = row.get(alias)
        if value:
            return value
    return None


def parse_date(value: str) -> Optional[datetime]:
    """
    Parse a calendar date string, or return None if it is not one.

    Aware datetimes are converted to naive UTC so every parsed instant
    compares with every other.
    """
    try:
        parsed = date_parser.parse(value, default=PARSE_DEFAULT)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_rate(value: str) -> Optional[float]:
    """Parse a rate cell; a comma decimal mark is accepted. None unless finite and > 0."""
    if "_" in value:
        return None
    try:
        rate = float(value.strip().replace(",", ".", 1))
    except ValueError:
        return None
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate


def _is_header_echo(row: RawRow) -> bool:
    return row.get("observation_date") == "observation_date" or row.get("DEXUSEU") == "DEXUSEU"


def _check_columns(fieldnames: Optional[Iterable[str]], raw_rows: Sequence[RawRow]) -> None:
    if fieldnames is not None:
        keys = set(fieldnames)
        has_date = any(a in keys for a in DATE_COLUMN_ALIASES)
        has_rate = any(a in keys for a in RATE_COLUMN_ALIASES)
    elif raw_rows:
        has_date = any(a in row for row in raw_rows for a in DATE_COLUMN_ALIASES)
        has_rate = any(a in row for row in raw_rows for a in RATE_COLUMN_ALIASES)
    else:
        return

    missing = []
    if not has_date:
        missing.append("date (" + ", ".join(DATE_COLUMN_ALIASES) + ")")
    if not has_rate:
        missing.append("rate (" + ", ".join(RATE_COLUMN_ALIASES) + ")")
    if missing:
        raise ColumnResolutionError("Missing required column(s): " + "; ".join(missing))


def _accept_row(row: RawRow) -> Optional[Tuple[datetime, Observation]]:
    date_str = resolve_cell(row, DATE_COLUMN_ALIASES)
    rate_str = resolve_cell(row, RATE_COLUMN_ALIASES)

    if not date_str or not rate_str or not rate_str.strip():
        return None

    instant = parse_date(date_str)
    if instant is None:
        return None

    rate = parse_rate(rate_str)
    if rate is None:
        return None

    return instant, Observation(date=date_str, rate=rate)


def normalize(
    raw_rows: Sequence[RawRow],
    source_name: str,
    fieldnames: Optional[Iterable[str]] = None,
) -> NormalizedDataset:
    """
    Turn raw CSV rows into a validated, date-ordered dataset.

    Rows with a missing field, an unparseable date, or a rate that is not a
    positive finite number are dropped; they only show up as the gap between
    total_rows_seen and valid_row_count. Raises ColumnResolutionError when no
    date or rate column can be found at all.
    """
    _check_columns(fieldnames, raw_rows)

    accepted: List[Tuple[datetime, Observation]] = []
    for index, row in enumerate(raw_rows):
        if index == 0 and _is_header_echo(row):
            continue
        result = _accept_row(row)
        if result is None:
            logger.debug("Dropped row %d: %r", index + 1, row)
            continue
        accepted.append(result)

    # sorted() is stable, so equal instants keep their input order
    accepted = sorted(accepted, key=lambda item: item[0])
    observations = [obs for _, obs in accepted]

    logger.info(
        "Normalized %s: %d of %d rows valid",
        source_name, len(observations), len(raw_rows),
    )
    return NormalizedDataset(
        observations=observations,
        source_name=source_name,
        total_rows_seen=len(raw_rows),
        valid_row_count=len(observations),
    )


def data_quality_percent(dataset: NormalizedDataset) -> Optional[float]:
    """Share of rows kept, in percent; None when no rows were seen."""
    if dataset.total_rows_seen == 0:
        return None
    return dataset.valid_row_count / dataset.total_rows_seen * 100


def format_data_quality(dataset: NormalizedDataset) -> str:
    pct = data_quality_percent(dataset)
    if pct is None:
        return "N/A"
    return f"{pct:.1f}%"


def summarize(dataset: NormalizedDataset) -> DatasetSummary:
    date_range = None
    rate_range = None
    if dataset.observations:
        date_range = DateRange(
            start=dataset.observations[0].date,
            end=dataset.observations[-1].date,
        )
        rates = dataset.rates
        rate_range = RateRange(min=min(rates), max=max(rates))

    return DatasetSummary(
        total_rows=dataset.total_rows_seen,
        valid_rows=dataset.valid_row_count,
        data_quality=data_quality_percent(dataset),
        data_quality_label=format_data_quality(dataset),
        date_range=date_range,
        rate_range=rate_range,
    )


def normalize_csv_bytes(raw: bytes, source_name: str) -> Dict[str, Any]:
    """
    Read, normalize and summarize one uploaded file.
    Returns a dict matching the API's response envelope.
    """
    fieldnames, rows = read_csv_rows(raw)
    dataset = normalize(rows, source_name, fieldnames=fieldnames)

    response = NormalizeResponse(
        source_name=dataset.source_name,
        series=SeriesPayload(dates=dataset.dates, rates=dataset.rates),
        summary=summarize(dataset),
        has_data=dataset.valid_row_count > 0,
    )
    return response.model_dump(mode="json")

from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .rules import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_TIME_UNIT,
    DateFormat,
    PointDensity,
    TimeUnit,
)


class Observation(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str = Field(examples=["2023-01-01"])
    rate: float = Field(gt=0, examples=[0.9234])


class NormalizedDataset(BaseModel):
    """Validated, date-ordered result of normalizing one file."""

    model_config = ConfigDict(frozen=True)

    observations: List[Observation] = Field(default_factory=list)
    source_name: str
    total_rows_seen: int = Field(default=0, ge=0)
    valid_row_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_counts(self) -> "NormalizedDataset":
        if self.valid_row_count != len(self.observations):
            raise ValueError("valid_row_count must equal the number of observations")
        if self.valid_row_count > self.total_rows_seen:
            raise ValueError("valid_row_count cannot exceed total_rows_seen")
        return self

    @property
    def dates(self) -> List[str]:
        return [o.date for o in self.observations]

    @property
    def rates(self) -> List[float]:
        return [o.rate for o in self.observations]


class ChartConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    date_format: DateFormat = DEFAULT_DATE_FORMAT
    time_unit: TimeUnit = DEFAULT_TIME_UNIT


class SeriesPayload(BaseModel):
    dates: List[str] = Field(default_factory=list)
    rates: List[float] = Field(default_factory=list)


class DateRange(BaseModel):
    start: str
    end: str


class RateRange(BaseModel):
    min: float
    max: float


class DatasetSummary(BaseModel):
    total_rows: int = 0
    valid_rows: int = 0
    data_quality: Optional[float] = Field(default=None, examples=[100.0])
    data_quality_label: str = Field(default="N/A", examples=["100.0%"])
    date_range: Optional[DateRange] = None
    rate_range: Optional[RateRange] = None


class NormalizeResponse(BaseModel):
    source_name: str
    series: SeriesPayload
    summary: DatasetSummary
    has_data: bool = False


class ChartOptions(BaseModel):
    date_format: DateFormat
    time_unit: TimeUnit
    display_formats: Dict[TimeUnit, str]
    point_density: PointDensity
    point_radius: int
    max_ticks: int


class HealthResponse(BaseModel):
    ok: bool = True

"""
Chart configuration derivation.

A single base date format propagates to every time unit so the renderer can
label ticks at any zoom level. Everything here is a pure function of its
inputs.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from .models import ChartConfig, ChartOptions
from .rules import (
    DEFAULT_MAX_TICKS,
    MAX_TICKS,
    MONTH_NAME_TOKEN,
    POINT_RADIUS,
    DateFormat,
    PointDensity,
    TimeUnit,
)

logger = logging.getLogger(__name__)


def _uses_month_names(date_format: str) -> bool:
    return MONTH_NAME_TOKEN in date_format


def derive_axis_formats(
    date_format: DateFormat, time_unit: Optional[TimeUnit] = None
) -> Dict[TimeUnit, str]:
    """
    Map every time unit to a tick-label pattern.

    The current time unit is accepted for symmetry with the renderer call
    but does not change the result.
    """
    base = DateFormat(date_format).value
    named = _uses_month_names(base)
    return {
        TimeUnit.DAY: base,
        TimeUnit.WEEK: "MMM dd, yyyy" if named else "MM/dd/yyyy",
        TimeUnit.MONTH: "MMM yyyy" if named else "MM/yyyy",
        TimeUnit.QUARTER: "QQQ yyyy" if named else "yyyy",
        TimeUnit.YEAR: "yyyy",
    }


def point_density_hint(time_unit: TimeUnit) -> PointDensity:
    if TimeUnit(time_unit) is TimeUnit.DAY:
        return PointDensity.DENSE
    return PointDensity.NORMAL


def point_radius(density: PointDensity) -> int:
    return POINT_RADIUS[PointDensity(density)]


def max_ticks_hint(time_unit: TimeUnit) -> int:
    return MAX_TICKS.get(TimeUnit(time_unit), DEFAULT_MAX_TICKS)


def build_chart_options(config: ChartConfig) -> ChartOptions:
    density = point_density_hint(config.time_unit)
    options = ChartOptions(
        date_format=config.date_format,
        time_unit=config.time_unit,
        display_formats=derive_axis_formats(config.date_format, config.time_unit),
        point_density=density,
        point_radius=point_radius(density),
        max_ticks=max_ticks_hint(config.time_unit),
    )
    logger.debug("Chart options for %s/%s: %s", config.date_format.value, config.time_unit.value, options)
    return options

import pytest

from ratechart.chart import (
    build_chart_options,
    derive_axis_formats,
    max_ticks_hint,
    point_density_hint,
    point_radius,
)
from ratechart.models import ChartConfig
from ratechart.rules import DateFormat, PointDensity, TimeUnit


def test_month_name_base_propagates():
    formats = derive_axis_formats(DateFormat.MONTH_YEAR, TimeUnit.QUARTER)

    assert formats == {
        TimeUnit.DAY: "MMM yyyy",
        TimeUnit.WEEK: "MMM dd, yyyy",
        TimeUnit.MONTH: "MMM yyyy",
        TimeUnit.QUARTER: "QQQ yyyy",
        TimeUnit.YEAR: "yyyy",
    }


@pytest.mark.parametrize("base", [DateFormat.US, DateFormat.EUROPEAN, DateFormat.ISO])
def test_numeric_base_propagates(base):
    formats = derive_axis_formats(base)

    assert formats[TimeUnit.DAY] == base.value
    assert formats[TimeUnit.WEEK] == "MM/dd/yyyy"
    assert formats[TimeUnit.MONTH] == "MM/yyyy"
    assert formats[TimeUnit.QUARTER] == "yyyy"
    assert formats[TimeUnit.YEAR] == "yyyy"


def test_quarter_differs_from_year_for_month_names():
    formats = derive_axis_formats("MMM yyyy", "quarter")

    assert formats[TimeUnit.QUARTER] == "QQQ yyyy"
    assert formats[TimeUnit.YEAR] == "yyyy"


def test_day_uses_base_verbatim():
    assert derive_axis_formats(DateFormat.MONTH_DAY_YEAR)[TimeUnit.DAY] == "MMM dd, yyyy"


def test_time_unit_does_not_change_formats():
    results = [derive_axis_formats(DateFormat.ISO, unit) for unit in TimeUnit]
    assert all(r == results[0] for r in results)


def test_unknown_format_rejected():
    with pytest.raises(ValueError):
        derive_axis_formats("yyyy/MM")


def test_point_density():
    assert point_density_hint(TimeUnit.DAY) is PointDensity.DENSE
    for unit in (TimeUnit.WEEK, TimeUnit.MONTH, TimeUnit.QUARTER, TimeUnit.YEAR):
        assert point_density_hint(unit) is PointDensity.NORMAL

    assert point_radius(PointDensity.DENSE) == 1
    assert point_radius(PointDensity.NORMAL) == 2


def test_max_ticks():
    assert max_ticks_hint(TimeUnit.DAY) == 30
    assert max_ticks_hint(TimeUnit.WEEK) == 20
    assert max_ticks_hint(TimeUnit.YEAR) == 12


def test_build_chart_options():
    options = build_chart_options(ChartConfig(date_format=DateFormat.ISO, time_unit=TimeUnit.WEEK))

    assert options.display_formats[TimeUnit.DAY] == "yyyy-MM-dd"
    assert options.point_density is PointDensity.NORMAL
    assert options.point_radius == 2
    assert options.max_ticks == 20


def test_chart_config_defaults_and_frozen():
    config = ChartConfig()

    assert config.date_format is DateFormat.MONTH_YEAR
    assert config.time_unit is TimeUnit.MONTH
    with pytest.raises(ValueError):
        config.time_unit = TimeUnit.DAY

from __future__ import annotations

import pytest

from desk_charts.core.enums import ChartKind
from desk_charts.core.models import ChartSpec, Series

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@pytest.fixture
def weekday_spec() -> ChartSpec:
    return ChartSpec(
        kind=ChartKind.LINE_AREA,
        categories=WEEKDAYS,
        series=(Series("Sessions", (3, 5, 2, 8, 1, 0, 4)),),
    )


@pytest.fixture
def bar_spec() -> ChartSpec:
    return ChartSpec(
        kind=ChartKind.BAR,
        categories=("Jan", "Feb", "Mar"),
        series=(Series("Revenue", (12.5, 18, 9.75)),),
    )


@pytest.fixture
def stacked_spec() -> ChartSpec:
    return ChartSpec(
        kind=ChartKind.STACKED_COMBO,
        categories=("Mon", "Tue", "Wed"),
        series=(
            Series("Meetings", (2, 1, 0)),
            Series("Deep work", (5, 0, 3)),
            Series("Admin", (1, 1, 1)),
        ),
        line=Series("Target", (8, 6, 7)),
        unit="h",
    )


@pytest.fixture
def donut_spec() -> ChartSpec:
    return ChartSpec(
        kind=ChartKind.DONUT,
        categories=("Search", "Direct", "Social", "Referral"),
        series=(Series("Visits", (10, 20, 30, 40)),),
    )


@pytest.fixture
def empty_donut_spec() -> ChartSpec:
    return ChartSpec(
        kind=ChartKind.DONUT,
        categories=("A", "B"),
        series=(Series("Visits", (0, 0)),),
    )

"""Tests for time-unit classification and expressions."""

import pytest

from chartlower.domain.timeunit import (
    contains_unit,
    datetime_expression,
    is_cyclical,
    normalize,
    raw_domain,
    split_units,
)
from chartlower.domain.types import Channel


class TestSplitUnits:
    @pytest.mark.parametrize(
        ("unit", "parts"),
        [
            ("month", ["month"]),
            ("yearmonth", ["year", "month"]),
            ("yearmonthdate", ["year", "month", "date"]),
            ("hoursminutesseconds", ["hours", "minutes", "seconds"]),
            ("secondsmilliseconds", ["seconds", "milliseconds"]),
            ("yearMonth", ["year", "month"]),
        ],
    )
    def test_known(self, unit: str, parts: list[str]) -> None:
        assert split_units(unit) == parts

    def test_unknown_token(self) -> None:
        assert split_units("fortnight") == []

    def test_contains_unit(self) -> None:
        assert contains_unit("yearmonthday", "day")
        assert not contains_unit("yearmonthday", "date")
        assert not contains_unit("milliseconds", "seconds")


class TestClassification:
    def test_normalize(self) -> None:
        assert normalize("yearMonth") == "yearmonth"

    @pytest.mark.parametrize("unit", ["month", "day", "hours", "quarter"])
    def test_cyclical(self, unit: str) -> None:
        assert is_cyclical(unit)

    @pytest.mark.parametrize("unit", ["year", "yearmonth", "date", "minutes"])
    def test_not_cyclical(self, unit: str) -> None:
        assert not is_cyclical(unit)


class TestRawDomain:
    def test_month_has_twelve_values(self) -> None:
        assert raw_domain("month", Channel.Y) == list(range(12))

    def test_date_starts_at_one(self) -> None:
        values = raw_domain("date", Channel.X)
        assert values is not None
        assert values[0] == 1
        assert len(values) == 31

    def test_compound_is_data_dependent(self) -> None:
        assert raw_domain("yearmonth", Channel.Y) is None

    @pytest.mark.parametrize("channel", [Channel.ROW, Channel.COLUMN, Channel.SHAPE, Channel.COLOR])
    def test_discrete_channels_read_data(self, channel: Channel) -> None:
        assert raw_domain("month", channel) is None

    def test_no_unit(self) -> None:
        assert raw_domain(None, Channel.Y) is None


class TestDatetimeExpression:
    def test_month_lookup(self) -> None:
        assert (
            datetime_expression("month", "datum.data", only_ref=True)
            == "datetime(2006, datum.data, 1, 0, 0, 0, 0)"
        )

    def test_day_lookup_offsets_from_sunday(self) -> None:
        assert (
            datetime_expression("day", "datum.data", only_ref=True)
            == "datetime(2006, 0, datum.data+1, 0, 0, 0, 0)"
        )

    def test_yearmonth_accessors(self) -> None:
        assert (
            datetime_expression("yearmonth", "datum.t")
            == "datetime(year(datum.t), month(datum.t), 1, 0, 0, 0, 0)"
        )

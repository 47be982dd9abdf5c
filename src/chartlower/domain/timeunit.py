"""Time units: classification, finite domains, and datetime expressions.

A time unit is either *single* (``month``) or *compound* (``yearmonth``).
Some single units are cyclical and are treated as categories rather
than points on a timeline; a few of those also have a fixed, finite set
of values that can be emitted as a literal lookup table instead of being
scanned from data.
"""

from __future__ import annotations

from enum import StrEnum

from chartlower.domain.types import Channel


class TimeUnit(StrEnum):
    """Time units understood by the compiler (lower-cased)."""

    YEAR = "year"
    QUARTER = "quarter"
    MONTH = "month"
    DATE = "date"
    DAY = "day"
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"
    YEARMONTH = "yearmonth"
    YEARMONTHDATE = "yearmonthdate"
    YEARMONTHDAY = "yearmonthday"
    YEARMONTHDATEHOURS = "yearmonthdatehours"
    YEARMONTHDATEHOURSMINUTES = "yearmonthdatehoursminutes"
    YEARMONTHDATEHOURSMINUTESSECONDS = "yearmonthdatehoursminutesseconds"
    HOURSMINUTES = "hoursminutes"
    HOURSMINUTESSECONDS = "hoursminutesseconds"
    MINUTESSECONDS = "minutesseconds"
    SECONDSMILLISECONDS = "secondsmilliseconds"
    QUARTERMONTH = "quartermonth"
    YEARQUARTER = "yearquarter"
    YEARQUARTERMONTH = "yearquartermonth"
    MONTHDATE = "monthdate"


# Single units, longest first so ``milliseconds`` never splits as ``minutes``.
_SINGLE_UNITS: tuple[str, ...] = tuple(
    sorted(
        (
            TimeUnit.YEAR,
            TimeUnit.QUARTER,
            TimeUnit.MONTH,
            TimeUnit.DATE,
            TimeUnit.DAY,
            TimeUnit.HOURS,
            TimeUnit.MINUTES,
            TimeUnit.SECONDS,
            TimeUnit.MILLISECONDS,
        ),
        key=len,
        reverse=True,
    )
)

# Cyclical units resolve to an ordinal scale.
CYCLICAL_UNITS: frozenset[str] = frozenset(
    {TimeUnit.HOURS, TimeUnit.DAY, TimeUnit.MONTH, TimeUnit.QUARTER}
)

# Units whose full value set is known without looking at data.
_FINITE_DOMAINS: dict[str, range] = {
    TimeUnit.SECONDS: range(0, 60),
    TimeUnit.MINUTES: range(0, 60),
    TimeUnit.HOURS: range(0, 24),
    TimeUnit.DAY: range(0, 7),
    TimeUnit.DATE: range(1, 32),
    TimeUnit.MONTH: range(0, 12),
}

# Channels that never use a literal time-unit lookup table.
_NO_RAW_DOMAIN_CHANNELS: frozenset[Channel] = frozenset(
    {Channel.ROW, Channel.COLUMN, Channel.SHAPE, Channel.COLOR}
)

# January 1st 2006 is a Sunday, so day-of-week offsets line up.
_REFERENCE_YEAR = 2006


def normalize(time_unit: str) -> str:
    """Lower-case a user supplied unit (``yearMonth`` -> ``yearmonth``)."""
    return time_unit.lower()


def split_units(time_unit: str) -> list[str]:
    """Split a (possibly compound) unit into its single units.

    Returns an empty list when *time_unit* contains an unknown token.

    Examples:
        >>> split_units("yearmonthdate")
        ['year', 'month', 'date']
        >>> split_units("secondsmilliseconds")
        ['seconds', 'milliseconds']
    """
    text = normalize(time_unit)
    parts: list[str] = []
    pos = 0
    while pos < len(text):
        for unit in _SINGLE_UNITS:
            if text.startswith(unit, pos):
                parts.append(unit)
                pos += len(unit)
                break
        else:
            return []
    return parts


def contains_unit(time_unit: str, unit: str) -> bool:
    """Whether compound *time_unit* includes single *unit*."""
    return unit in split_units(time_unit)


def is_cyclical(time_unit: str) -> bool:
    """Cyclical units (month alone, day-of-week, ...) behave as categories."""
    return normalize(time_unit) in CYCLICAL_UNITS


def raw_domain(time_unit: str | None, channel: Channel) -> list[int] | None:
    """Literal value list for a finite unit on *channel*, or None.

    Facets, shapes and colors always read their values from data, so
    they never get a literal table.
    """
    if time_unit is None or channel in _NO_RAW_DOMAIN_CHANNELS:
        return None
    values = _FINITE_DOMAINS.get(normalize(time_unit))
    return list(values) if values is not None else None


def datetime_expression(time_unit: str, field_ref: str, *, only_ref: bool = False) -> str:
    """Build a ``datetime(...)`` expression truncating *field_ref* to *time_unit*.

    With *only_ref* the reference itself is used for the unit's slot
    (lookup tables store the raw unit value in ``datum.data``);
    otherwise each slot applies the matching accessor function.
    """
    units = split_units(time_unit)

    def get(fn: str) -> str:
        return field_ref if only_ref else f"{fn}({field_ref})"

    year = get("year") if TimeUnit.YEAR in units else str(_REFERENCE_YEAR)
    if TimeUnit.MONTH in units:
        month = get("month")
    elif TimeUnit.QUARTER in units:
        month = f"({get('quarter')}-1)*3"
    else:
        month = "0"
    if TimeUnit.DAY in units:
        date = f"{get('day')}+1"
    elif TimeUnit.DATE in units:
        date = get("date")
    else:
        date = "1"
    hours = get("hours") if TimeUnit.HOURS in units else "0"
    minutes = get("minutes") if TimeUnit.MINUTES in units else "0"
    seconds = get("seconds") if TimeUnit.SECONDS in units else "0"
    millis = get("milliseconds") if TimeUnit.MILLISECONDS in units else "0"
    return f"datetime({year}, {month}, {date}, {hours}, {minutes}, {seconds}, {millis})"

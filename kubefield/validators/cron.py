"""Standard cron schedule parser.

Accepts the five-field form ``minute hour day-of-month month day-of-week``
and the ``@`` descriptors (``@hourly``, ``@daily``, ``@every 1h30m`` ...).
Each field supports ``*``, ``?``, single values, ``a-b`` ranges, ``/step``
and comma lists; months and weekdays may be given by three-letter names.
"""

import math
import re
from datetime import datetime, timedelta
from typing import NamedTuple, Optional

from kubefield.validators.intparse import NumericParseError, parse_int


class CronParseError(ValueError):
    """Raised when a schedule expression cannot be parsed."""


class Bounds(NamedTuple):
    low: int
    high: int
    names: Optional[dict]


MINUTES = Bounds(0, 59, None)
HOURS = Bounds(0, 23, None)
DAYS_OF_MONTH = Bounds(1, 31, None)
MONTHS = Bounds(1, 12, {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
})
DAYS_OF_WEEK = Bounds(0, 6, {
    "sun": 0, "mon": 1, "tue": 2, "wed": 3, "thu": 4, "fri": 5, "sat": 6,
})

FIELD_BOUNDS = (MINUTES, HOURS, DAYS_OF_MONTH, MONTHS, DAYS_OF_WEEK)

DESCRIPTORS = {
    "@yearly": "0 0 1 1 *",
    "@annually": "0 0 1 1 *",
    "@monthly": "0 0 1 * *",
    "@weekly": "0 0 * * 0",
    "@daily": "0 0 * * *",
    "@midnight": "0 0 * * *",
    "@hourly": "0 * * * *",
}

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
MAX_DURATION_SECONDS = ((1 << 63) - 1) / 1e9
_DURATION_PART_RE = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class CronSchedule(NamedTuple):
    """A parsed schedule: the allowed values per field, or a fixed interval."""

    minutes: frozenset = frozenset()
    hours: frozenset = frozenset()
    days_of_month: frozenset = frozenset()
    months: frozenset = frozenset()
    days_of_week: frozenset = frozenset()
    dom_star: bool = False
    dow_star: bool = False
    every: Optional[timedelta] = None

    def matches(self, moment: datetime) -> bool:
        """True if the schedule fires at the given minute. Interval schedules never match a wall-clock time."""
        if self.every is not None:
            return False
        if moment.minute not in self.minutes or moment.hour not in self.hours:
            return False
        if moment.month not in self.months:
            return False
        dom_ok = moment.day in self.days_of_month
        dow_ok = (moment.isoweekday() % 7) in self.days_of_week
        # Restricting both day fields means "either matches", as in classic cron.
        if self.dom_star or self.dow_star:
            return dom_ok and dow_ok
        return dom_ok or dow_ok


def parse_duration(text: str) -> timedelta:
    """Parse a duration like ``1h30m``, ``90s`` or ``1.5h``."""
    body = text
    sign = 1
    if body and body[0] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise CronParseError(f"invalid duration {text!r}")

    seconds = 0.0
    pos = 0
    while pos < len(body):
        match = _DURATION_PART_RE.match(body, pos)
        if match is None:
            raise CronParseError(f"invalid duration {text!r}")
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    # Same ceiling as a signed 64-bit nanosecond count.
    if not math.isfinite(seconds) or seconds > MAX_DURATION_SECONDS:
        raise CronParseError(f"invalid duration {text!r}")
    try:
        return timedelta(seconds=sign * seconds)
    except OverflowError as exc:
        raise CronParseError(f"invalid duration {text!r}") from exc


def _parse_number(expr: str, names: Optional[dict] = None) -> int:
    if names is not None and expr.lower() in names:
        return names[expr.lower()]
    try:
        num = parse_int(expr)
    except NumericParseError as exc:
        raise CronParseError(f"failed to parse int from {expr}: {exc}") from exc
    if num < 0:
        raise CronParseError(f"negative number ({num}) not allowed: {expr}")
    return num


def _parse_range(expr: str, bounds: Bounds) -> tuple[set, bool]:
    """Parse one comma-separated element; returns its values and whether it was a star."""
    range_and_step = expr.split("/")
    low_and_high = range_and_step[0].split("-")
    single = len(low_and_high) == 1
    star = False

    if low_and_high[0] in ("*", "?"):
        start, end = bounds.low, bounds.high
        star = True
    else:
        start = _parse_number(low_and_high[0], bounds.names)
        if len(low_and_high) == 1:
            end = start
        elif len(low_and_high) == 2:
            end = _parse_number(low_and_high[1], bounds.names)
        else:
            raise CronParseError(f"too many hyphens: {expr}")

    if len(range_and_step) == 1:
        step = 1
    elif len(range_and_step) == 2:
        step = _parse_number(range_and_step[1])
        # "N/step" means "N-max/step"
        if single:
            end = bounds.high
    else:
        raise CronParseError(f"too many slashes: {expr}")

    if start < bounds.low:
        raise CronParseError(f"beginning of range ({start}) below minimum ({bounds.low}): {expr}")
    if end > bounds.high:
        raise CronParseError(f"end of range ({end}) above maximum ({bounds.high}): {expr}")
    if start > end:
        raise CronParseError(f"beginning of range ({start}) beyond end of range ({end}): {expr}")
    if step == 0:
        raise CronParseError(f"step of range should be a positive number: {expr}")

    return set(range(start, end + 1, step)), star


def _parse_field(field: str, bounds: Bounds) -> tuple[frozenset, bool]:
    values: set = set()
    star = False
    for expr in field.split(","):
        if not expr:
            continue
        part, part_star = _parse_range(expr, bounds)
        values |= part
        star = star or part_star
    return frozenset(values), star


def _parse_descriptor(spec: str) -> CronSchedule:
    if spec in DESCRIPTORS:
        return parse_cron(DESCRIPTORS[spec])
    every_prefix = "@every "
    if spec.startswith(every_prefix):
        duration_text = spec[len(every_prefix):].strip()
        try:
            interval = parse_duration(duration_text)
        except CronParseError as exc:
            raise CronParseError(f"failed to parse duration {spec}: {exc}") from exc
        # Intervals shorter than a second run once per second.
        return CronSchedule(every=max(interval, timedelta(seconds=1)))
    raise CronParseError(f"unrecognized descriptor: {spec}")


def parse_cron(spec: str) -> CronSchedule:
    """Parse a standard cron expression.

    Raises:
        CronParseError: with a description of the first problem found
    """
    if not spec:
        raise CronParseError("empty spec string")
    if spec.startswith("@"):
        return _parse_descriptor(spec)

    fields = spec.split()
    if len(fields) != len(FIELD_BOUNDS):
        raise CronParseError(f"expected exactly {len(FIELD_BOUNDS)} fields, found {len(fields)}: {spec}")

    parsed = [_parse_field(field, bounds) for field, bounds in zip(fields, FIELD_BOUNDS)]
    (minutes, _), (hours, _), (dom, dom_star), (months, _), (dow, dow_star) = parsed
    return CronSchedule(
        minutes=minutes,
        hours=hours,
        days_of_month=dom,
        months=months,
        days_of_week=dow,
        dom_star=dom_star,
        dow_star=dow_star,
    )

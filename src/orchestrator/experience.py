"""Experience duration parsing and aggregation.

Durations arrive as free text in the form ``"<Month> <Year> – <Month> <Year>"``
where the end token may also be ``"Present"``. Spans are inclusive of both
endpoints, so ``"January 2020 – December 2022"`` counts 36 months.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Optional, Protocol

from orchestrator.scoring import round_half_up

logger = logging.getLogger(__name__)

DURATION_SEPARATOR = " – "
PRESENT_TOKEN = "present"
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_MONTH_LOOKUP = {name.lower(): number for number, name in enumerate(MONTH_NAMES, start=1)}


class HasDuration(Protocol):
    duration: str


@dataclass(frozen=True)
class MonthYear:
    month: int
    year: int

    @classmethod
    def from_date(cls, value: date) -> "MonthYear":
        return cls(month=value.month, year=value.year)


def parse_month_year(token: str) -> MonthYear:
    """Parse ``"<MonthName> <YYYY>"``; raise ValueError for anything else."""

    parts = token.split()
    if len(parts) != 2:
        raise ValueError(f"expected '<Month> <Year>', got {token!r}")
    month_name, year_text = parts
    month = _MONTH_LOOKUP.get(month_name.lower())
    if month is None:
        raise ValueError(f"unknown month name {month_name!r}")
    if len(year_text) != 4 or not year_text.isdigit():
        raise ValueError(f"invalid year {year_text!r}")
    return MonthYear(month=month, year=int(year_text))


def parse_duration(duration: str, today: Optional[date] = None) -> tuple[MonthYear, MonthYear]:
    """Split a duration into start/end month-years, resolving ``Present`` to ``today``."""

    if DURATION_SEPARATOR not in duration:
        raise ValueError(f"missing {DURATION_SEPARATOR.strip()!r} separator in {duration!r}")
    start_text, end_text = duration.split(DURATION_SEPARATOR, 1)
    start = parse_month_year(start_text)
    if end_text.strip().lower() == PRESENT_TOKEN:
        end = MonthYear.from_date(today or date.today())
    else:
        end = parse_month_year(end_text)
    return start, end


def month_span(duration: str, today: Optional[date] = None) -> int:
    """Return the inclusive number of months covered by ``duration``.

    An end before the start is not rejected; the result is then negative.
    """

    start, end = parse_duration(duration, today)
    return (end.year - start.year) * 12 + (end.month - start.month) + 1


def sum_experience_months(entries: Iterable[HasDuration], today: Optional[date] = None) -> int:
    """Sum inclusive spans over ``entries``, skipping durations that do not parse."""

    total = 0
    for entry in entries:
        try:
            months = month_span(entry.duration, today)
        except ValueError as exc:
            logger.warning("Skipping experience duration %r: %s", entry.duration, exc)
            continue
        if months < 0:
            logger.warning("Experience duration %r ends before it starts (%d months)", entry.duration, months)
        total += months
    return total


def months_to_years(months: int) -> float:
    if months <= 0:
        return 0.0
    return round_half_up(months / 12)


def resolve_total_experience(
    reported: Optional[float],
    entries: Iterable[HasDuration],
    today: Optional[date] = None,
) -> float:
    """Prefer the model-reported total; otherwise fall back to the parsed durations."""

    computed = months_to_years(sum_experience_months(entries, today))
    if reported is None:
        logger.debug("No reported experience total; using computed %.1f years", computed)
        return computed
    logger.debug("Reported experience %.1f years (computed %.1f)", reported, computed)
    return round_half_up(max(reported, 0.0))

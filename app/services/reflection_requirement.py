"""
Reflection Requirement Evaluator.

Decides, for one habit on one target date, two derived flags:

  completed_on_date
      True when any completion falls on the same calendar day as the target.
      Calendar days are resolved in the timezone passed to the call.

  required_reflection
      1. Any completion within `fail_reflection_limit` days of the target
         (inclusive) exempts the habit, whatever the reflection history says.
      2. Otherwise, with no reflection ever logged, the grace period runs
         from the calendar day the habit was created on.
      3. Otherwise it runs from the most recent reflection only.
      A reflection is required once the elapsed days exceed the limit.

Day distances are elapsed days between instants, rounded to the nearest
whole day (halves round up). Inputs are normalised to instants as follows:

  date            → midnight of that date in the evaluation timezone
  naive datetime  → UTC (what the database hands back for `now()` columns)
  aware datetime  → unchanged

The target and the habit creation time are days: a datetime in either role is
reduced to midnight of its calendar day in the evaluation timezone before any
distance is taken. Every distance is then between two local midnights: a
whole number of days, or within an hour of it across a DST switch, so the
rounded distance is the calendar-day distance whatever the time of the
request.

Pure: no DB, no clock, no logging, never raises on well-formed records.
Records are duck-typed: anything with the attributes below works, ORM rows
and plain namespaces alike.

  habit       .id  .created_at  .fail_reflection_limit
  completion  .habit_id  .date
  reflection  .habit_id  .date
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Optional, Union

Moment = Union[date, datetime]

_MICROSECONDS_PER_DAY = Decimal(86_400_000_000)
_ONE_MICROSECOND = timedelta(microseconds=1)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReflectionRequirement:
    completed_on_date: bool
    required_reflection: bool


@dataclass
class HabitEvaluation:
    """A habit record annotated with its derived flags."""
    habit: Any
    completed_on_date: bool
    required_reflection: bool


# ---------------------------------------------------------------------------
# Date arithmetic
# ---------------------------------------------------------------------------

def to_instant(value: Moment, tz: tzinfo) -> datetime:
    """Normalise a date or datetime to an aware UTC datetime."""
    # datetime is a subclass of date: test it first
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime.combine(value, time.min, tzinfo=tz).astimezone(timezone.utc)


def calendar_day(value: Moment, tz: tzinfo) -> date:
    """The date `value` falls on, as seen from `tz`."""
    if isinstance(value, datetime):
        return to_instant(value, tz).astimezone(tz).date()
    return value


def start_of_day(value: Moment, tz: tzinfo) -> datetime:
    """Midnight, in `tz`, of the calendar day `value` falls on."""
    return datetime.combine(calendar_day(value, tz), time.min, tzinfo=tz)


def is_same_calendar_day(a: Moment, b: Moment, tz: tzinfo) -> bool:
    return calendar_day(a, tz) == calendar_day(b, tz)


def days_since(earlier: Moment, later: Moment, tz: tzinfo) -> int:
    """Absolute elapsed days between two moments, rounded half up."""
    delta = abs(to_instant(later, tz) - to_instant(earlier, tz))
    micros = Decimal(delta // _ONE_MICROSECOND)
    days = (micros / _MICROSECONDS_PER_DAY).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(days)


# ---------------------------------------------------------------------------
# Core
# ---------------------------------------------------------------------------

def _latest(reflections: list[Any], tz: tzinfo) -> Optional[Any]:
    """Reflection with the greatest date; on ties the last one wins."""
    latest = None
    latest_at: Optional[datetime] = None
    for r in reflections:
        at = to_instant(r.date, tz)
        if latest_at is None or at >= latest_at:
            latest, latest_at = r, at
    return latest


def evaluate_habit(
    habit: Any,
    completions: Iterable[Any],
    reflections: Iterable[Any],
    target: Moment,
    tz: tzinfo,
) -> ReflectionRequirement:
    """Derive (completed_on_date, required_reflection) for `habit` at `target`."""
    target = start_of_day(target, tz)
    completions = list(completions)
    reflections = list(reflections)
    limit = habit.fail_reflection_limit

    completed_on_date = any(is_same_calendar_day(c.date, target, tz) for c in completions)

    has_recent_completion = any(
        days_since(c.date, target, tz) <= limit for c in completions
    )
    if has_recent_completion:
        required = False
    elif not reflections:
        required = days_since(start_of_day(habit.created_at, tz), target, tz) > limit
    else:
        latest = _latest(reflections, tz)
        required = days_since(latest.date, target, tz) > limit

    return ReflectionRequirement(
        completed_on_date=completed_on_date,
        required_reflection=required,
    )


def evaluate_habits(
    habits: Iterable[Any],
    completions: Iterable[Any],
    reflections: Iterable[Any],
    target: Moment,
    tz: tzinfo,
) -> list[HabitEvaluation]:
    """
    Evaluate every habit against its own completions and reflections.
    The same `tz` and `target` apply to the whole batch; input order is kept.
    """
    completions_by_habit: dict[Any, list[Any]] = defaultdict(list)
    for c in completions:
        completions_by_habit[c.habit_id].append(c)
    reflections_by_habit: dict[Any, list[Any]] = defaultdict(list)
    for r in reflections:
        reflections_by_habit[r.habit_id].append(r)

    results = []
    for habit in habits:
        req = evaluate_habit(
            habit,
            completions_by_habit.get(habit.id, []),
            reflections_by_habit.get(habit.id, []),
            target,
            tz,
        )
        results.append(HabitEvaluation(
            habit=habit,
            completed_on_date=req.completed_on_date,
            required_reflection=req.required_reflection,
        ))
    return results

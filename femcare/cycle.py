import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import NamedTuple

LUTEAL_PHASE_DAYS = 14
FERTILE_DAYS_BEFORE_OVULATION = 5
FERTILE_DAYS_AFTER_OVULATION = 1

MIN_SANE_CYCLE_LENGTH = 10
MAX_SANE_CYCLE_LENGTH = 60


class InvalidInput(ValueError):
    """Raised by the strict helpers when inputs make no sense for a cycle."""


class CyclePhase(str, Enum):
    MENSTRUAL = "Menstrual"
    FOLLICULAR = "Follicular"
    OVULATION = "Ovulation"
    LUTEAL = "Luteal"


class FertileWindow(NamedTuple):
    start: date
    end: date


PHASE_LABELS = {
    CyclePhase.MENSTRUAL: "\U0001fa78 Menstrual",
    CyclePhase.FOLLICULAR: "\U0001f331 Follicular",
    CyclePhase.OVULATION: "✨ Ovulation",
    CyclePhase.LUTEAL: "\U0001f319 Luteal",
}

PHASE_DESCRIPTIONS = {
    CyclePhase.MENSTRUAL: "Your period is here. Rest, stay warm and hydrated.",
    CyclePhase.FOLLICULAR: "Estrogen is rising and energy usually comes back.",
    CyclePhase.OVULATION: "Peak fertility. Energy and confidence tend to be high.",
    CyclePhase.LUTEAL: "Progesterone rises. You may feel slower or notice PMS symptoms.",
}


def next_period_date(start_date: date, cycle_length: int) -> date:
    """Predict the next period start from the last one."""
    return start_date + timedelta(days=cycle_length)


def ovulation_date(start_date: date, cycle_length: int) -> date:
    """Ovulation is modeled at a fixed 14 days before the next period.

    For short cycles this can land before start_date; that is accepted.
    """
    return next_period_date(start_date, cycle_length) - timedelta(days=LUTEAL_PHASE_DAYS)


def fertile_window(start_date: date, cycle_length: int) -> FertileWindow:
    """Five days before ovulation through one day after it."""
    ovulation = ovulation_date(start_date, cycle_length)
    return FertileWindow(
        start=ovulation - timedelta(days=FERTILE_DAYS_BEFORE_OVULATION),
        end=ovulation + timedelta(days=FERTILE_DAYS_AFTER_OVULATION),
    )


def is_in_fertile_window(query_date: date, start_date: date, cycle_length: int) -> bool:
    window = fertile_window(_align(start_date, query_date), cycle_length)
    query_date = _align(query_date, window.start)
    return window.start <= query_date <= window.end


def cycle_day(query_date: date, start_date: date) -> int:
    """Return the 1-based cycle day.

    Uses the absolute elapsed time, so a query before start_date gives the
    same value as one equally far after it. Partial days round up.
    """
    query_date = _align(query_date, start_date)
    start_date = _align(start_date, query_date)
    elapsed = abs(query_date - start_date)
    return math.ceil(elapsed.total_seconds() / 86400) + 1


def cycle_phase(cycle_day: int, cycle_length: int = 28) -> CyclePhase:
    """Classify a cycle day into a phase.

    Boundaries are fixed (5/13/15); cycle_length is accepted but not used.
    """
    if cycle_day <= 5:
        return CyclePhase.MENSTRUAL
    if cycle_day <= 13:
        return CyclePhase.FOLLICULAR
    if cycle_day <= 15:
        return CyclePhase.OVULATION
    return CyclePhase.LUTEAL


def days_until(target: date, today: date | None = None) -> int:
    """Whole days from today to target, rounding partial days up."""
    today = today or date.today()
    delta = _align(target, today) - _align(today, target)
    return math.ceil(delta.total_seconds() / 86400)


# -- Strict helpers --

def clamp_cycle_length(cycle_length: int) -> int:
    return max(MIN_SANE_CYCLE_LENGTH, min(MAX_SANE_CYCLE_LENGTH, cycle_length))


def elapsed_cycle_day(query_date: date, start_date: date) -> int:
    """Like cycle_day but rejects a query date before start_date."""
    query_date = _align(query_date, start_date)
    start_date = _align(start_date, query_date)
    offset = query_date - start_date
    if offset < timedelta(0):
        raise InvalidInput(f"Query date {query_date} is before cycle start {start_date}")
    return math.ceil(offset.total_seconds() / 86400) + 1


@dataclass(frozen=True)
class CycleState:
    """Reference cycle, recomputed once per new period log."""

    reference_start: date
    length: int = 28

    def __post_init__(self):
        object.__setattr__(self, "length", clamp_cycle_length(self.length))

    @classmethod
    def from_record(cls, record) -> "CycleState":
        return cls(reference_start=record.start_date, length=record.cycle_length)

    @property
    def next_period(self) -> date:
        return next_period_date(self.reference_start, self.length)

    @property
    def ovulation(self) -> date:
        return ovulation_date(self.reference_start, self.length)

    @property
    def fertile_window(self) -> FertileWindow:
        return fertile_window(self.reference_start, self.length)

    def cycle_day_on(self, query_date: date) -> int:
        return elapsed_cycle_day(query_date, self.reference_start)

    def phase_on(self, query_date: date) -> CyclePhase:
        return cycle_phase(self.cycle_day_on(query_date), self.length)

    def is_fertile_on(self, query_date: date) -> bool:
        return is_in_fertile_window(query_date, self.reference_start, self.length)


def predict(record, today: date | None = None) -> dict:
    """Summarize the current cycle position for display."""
    today = today or date.today()
    start, length = record.start_date, record.cycle_length
    day = cycle_day(today, start)
    next_period = next_period_date(start, length)
    ovulation = ovulation_date(start, length)
    return {
        "cycle_day": day,
        "phase": cycle_phase(day, length),
        "next_period": next_period,
        "ovulation": ovulation,
        "fertile_window": fertile_window(start, length),
        "days_until_period": days_until(next_period, today),
        "days_until_ovulation": days_until(ovulation, today),
        "is_in_fertile_window": is_in_fertile_window(today, start, length),
    }


def _align(value: date, other: date) -> date:
    # date and datetime don't subtract or compare with each other
    if isinstance(other, datetime) and not isinstance(value, datetime):
        return datetime.combine(value, datetime.min.time(), tzinfo=other.tzinfo)
    return value

"""Record-keeping operations for each stored collection.

Every mutating function loads the collection, applies the change and saves it
back through the repository. Invalid user input raises ``ValueError``; a
missing record id returns ``None``/``False``.
"""

import logging
import math
import re
from collections import Counter
from datetime import date, datetime

from femcare.cycle import predict
from femcare.dates import utcnow
from femcare.db import Repository
from femcare.models import (
    FREQUENCIES,
    MOODS,
    REMINDER_TYPES,
    Answer,
    CycleRecord,
    HealthLog,
    Question,
    Reminder,
)

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class StorageError(RuntimeError):
    """The store refused to persist a collection."""


def _save(repo: Repository, records: list):
    if not repo.save(records):
        raise StorageError(f"Failed to save {repo.key}")


def _find(records: list, record_id: str):
    return next((r for r in records if r.id == record_id), None)


def _delete(repo: Repository, record_id: str) -> bool:
    records = repo.load()
    remaining = [r for r in records if r.id != record_id]
    if len(remaining) == len(records):
        return False
    _save(repo, remaining)
    logger.info(f"Deleted {repo.key} record {record_id} for {repo.owner_id}")
    return True


# ── Cycles ──────────────────────────────────────────────────────────

def add_cycle(
    repo: Repository,
    start_date: date,
    cycle_length: int = 28,
    period_length: int = 5,
    end_date: date | None = None,
    symptoms=(),
    notes: str | None = None,
) -> CycleRecord:
    if end_date and end_date < start_date:
        raise ValueError("End date can't be before the start date")
    record = CycleRecord(
        start_date=start_date,
        cycle_length=cycle_length,
        period_length=period_length,
        end_date=end_date,
        symptoms=list(symptoms),
        notes=(notes or "").strip() or None,
    )
    cycles = repo.load()
    cycles.append(record)
    _save(repo, cycles)
    return record


def delete_cycle(repo: Repository, cycle_id: str) -> bool:
    return _delete(repo, cycle_id)


def latest_cycle(cycles: list[CycleRecord]) -> CycleRecord | None:
    """The most recently logged cycle drives predictions."""
    return cycles[-1] if cycles else None


def current_cycle_info(cycles: list[CycleRecord], today: date | None = None) -> dict | None:
    latest = latest_cycle(cycles)
    if latest is None:
        return None
    return predict(latest, today)


# ── Reminders ───────────────────────────────────────────────────────

def add_reminder(repo: Repository, type: str, title: str, time: str, frequency: str) -> Reminder:
    title = title.strip()
    if not title:
        raise ValueError("Reminder title is required")
    if type not in REMINDER_TYPES:
        raise ValueError(f"Unknown reminder type: {type}")
    if frequency not in FREQUENCIES:
        raise ValueError(f"Unknown frequency: {frequency}")
    if not TIME_PATTERN.match(time):
        raise ValueError(f"Time must look like HH:MM, got {time!r}")

    reminder = Reminder(type=type, title=title, time=time, frequency=frequency)
    reminders = repo.load()
    reminders.append(reminder)
    _save(repo, reminders)
    return reminder


def toggle_reminder(repo: Repository, reminder_id: str) -> Reminder | None:
    reminders = repo.load()
    reminder = _find(reminders, reminder_id)
    if reminder is None:
        return None
    reminder.is_active = not reminder.is_active
    _save(repo, reminders)
    return reminder


def mark_taken(repo: Repository, reminder_id: str, now: datetime | None = None) -> Reminder | None:
    reminders = repo.load()
    reminder = _find(reminders, reminder_id)
    if reminder is None:
        return None
    reminder.last_taken = now or utcnow()
    _save(repo, reminders)
    return reminder


def delete_reminder(repo: Repository, reminder_id: str) -> bool:
    return _delete(repo, reminder_id)


def upcoming_reminders(reminders: list[Reminder], limit: int = 3) -> list[Reminder]:
    return [r for r in reminders if r.is_active][:limit]


def reminder_stats(reminders: list[Reminder]) -> dict:
    return {
        "total": len(reminders),
        "active": sum(1 for r in reminders if r.is_active),
        "pill": sum(1 for r in reminders if r.type == "pill"),
        "tracked": sum(1 for r in reminders if r.last_taken),
    }


# ── Health logs ─────────────────────────────────────────────────────

def save_health_log(
    repo: Repository,
    log_date: date,
    mood: str,
    weight: float | None = None,
    symptoms=(),
    notes: str | None = None,
) -> tuple[HealthLog, bool]:
    """Create or replace the log for log_date. Returns (log, updated)."""
    if mood not in MOODS:
        raise ValueError(f"Mood must be one of: {', '.join(MOODS)}")
    if weight is not None and (not math.isfinite(weight) or weight <= 0):
        raise ValueError("Weight must be a positive number")

    logs = repo.load()
    existing = next((i for i, log in enumerate(logs) if log.date == log_date), None)
    log = HealthLog(
        date=log_date,
        mood=mood,
        weight=weight,
        symptoms=list(symptoms),
        notes=(notes or "").strip() or None,
    )
    if existing is not None:
        log.id = logs[existing].id
        log.created_at = logs[existing].created_at
        logs[existing] = log
    else:
        logs.append(log)
    _save(repo, logs)
    return log, existing is not None


def delete_health_log(repo: Repository, log_id: str) -> bool:
    return _delete(repo, log_id)


def recent_health_logs(logs: list[HealthLog], limit: int = 7) -> list[HealthLog]:
    return sorted(logs, key=lambda log: log.date, reverse=True)[:limit]


def health_trends(logs: list[HealthLog], limit: int = 30) -> dict | None:
    """Summarize the most recent logs: average weight, usual mood, top symptoms.

    ``avg_weight`` is ``None`` when none of the logs record a weight. Ties in
    mood and symptom counts go to whichever appears first, newest log first.
    """
    recent = recent_health_logs(logs, limit)
    if not recent:
        return None
    weights = [log.weight for log in recent if log.weight]
    moods = Counter(log.mood for log in recent)
    symptoms = Counter(s for log in recent for s in log.symptoms)
    return {
        "avg_weight": sum(weights) / len(weights) if weights else None,
        "most_common_mood": moods.most_common(1)[0][0],
        "top_symptoms": symptoms.most_common(3),
        "total_entries": len(recent),
    }


# ── Community ───────────────────────────────────────────────────────

def post_question(repo: Repository, text: str, anonymous: bool = True) -> Question:
    text = text.strip()
    if not text:
        raise ValueError("Please enter your question")
    question = Question(question=text, is_anonymous=anonymous)
    questions = repo.load()
    questions.append(question)
    _save(repo, questions)
    return question


def post_answer(repo: Repository, question_id: str, text: str, anonymous: bool = True) -> Answer | None:
    text = text.strip()
    if not text:
        raise ValueError("Please enter your answer")
    questions = repo.load()
    question = _find(questions, question_id)
    if question is None:
        return None
    answer = Answer(answer=text, is_anonymous=anonymous)
    question.answers.append(answer)
    _save(repo, questions)
    return answer


def delete_question(repo: Repository, question_id: str) -> bool:
    return _delete(repo, question_id)

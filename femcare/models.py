"""Record types persisted in the collection store.

Records serialize to the camelCase JSON shape used by the stored collections
(``startDate``, ``cycleLength``, ``isActive`` ...).
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from femcare.dates import generate_id, parse_date, parse_datetime, utcnow

REMINDER_TYPES = {
    "pill": "Birth Control Pill",
    "injection": "Injection",
    "condom": "Condom Use Tracking",
    "other": "Other",
}

FREQUENCIES = {
    "daily": "Daily",
    "weekly": "Weekly",
    "monthly": "Monthly",
    "custom": "Custom",
}

MOODS = ("great", "good", "okay", "bad", "terrible")

CYCLE_SYMPTOMS = (
    "Cramps", "Headache", "Bloating", "Mood swings", "Fatigue",
    "Breast tenderness", "Acne", "Back pain", "Nausea", "Food cravings",
)

HEALTH_SYMPTOMS = CYCLE_SYMPTOMS + (
    "Hot flashes", "Sleep issues", "Anxiety", "Depression", "Irritability",
)


def _optional(value, parse):
    return parse(value) if value else None


@dataclass
class CycleRecord:
    start_date: date
    cycle_length: int = 28
    period_length: int = 5
    end_date: date | None = None
    symptoms: list[str] = field(default_factory=list)
    notes: str | None = None
    id: str = field(default_factory=generate_id)
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "startDate": self.start_date.isoformat(),
            "cycleLength": self.cycle_length,
            "periodLength": self.period_length,
            "symptoms": list(self.symptoms),
            "createdAt": self.created_at.isoformat(),
        }
        if self.end_date:
            data["endDate"] = self.end_date.isoformat()
        if self.notes:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CycleRecord":
        return cls(
            id=data["id"],
            start_date=parse_date(data["startDate"]),
            end_date=_optional(data.get("endDate"), parse_date),
            cycle_length=int(data.get("cycleLength", 28)),
            period_length=int(data.get("periodLength", 5)),
            symptoms=list(data.get("symptoms", [])),
            notes=data.get("notes"),
            created_at=parse_datetime(data["createdAt"]),
        )


@dataclass
class Reminder:
    type: str
    title: str
    time: str
    frequency: str
    is_active: bool = True
    last_taken: datetime | None = None
    id: str = field(default_factory=generate_id)
    created_at: datetime = field(default_factory=utcnow)

    @property
    def type_label(self) -> str:
        return REMINDER_TYPES.get(self.type, self.type)

    @property
    def frequency_label(self) -> str:
        return FREQUENCIES.get(self.frequency, self.frequency)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "time": self.time,
            "frequency": self.frequency,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat(),
        }
        if self.last_taken:
            data["lastTaken"] = self.last_taken.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Reminder":
        return cls(
            id=data["id"],
            type=data["type"],
            title=data["title"],
            time=data["time"],
            frequency=data["frequency"],
            is_active=bool(data.get("isActive", True)),
            last_taken=_optional(data.get("lastTaken"), parse_datetime),
            created_at=parse_datetime(data["createdAt"]),
        )


@dataclass
class HealthLog:
    date: date
    mood: str
    weight: float | None = None
    symptoms: list[str] = field(default_factory=list)
    notes: str | None = None
    id: str = field(default_factory=generate_id)
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "date": self.date.isoformat(),
            "symptoms": list(self.symptoms),
            "mood": self.mood,
            "createdAt": self.created_at.isoformat(),
        }
        if self.weight is not None:
            data["weight"] = self.weight
        if self.notes:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "HealthLog":
        weight = data.get("weight")
        return cls(
            id=data["id"],
            date=parse_date(data["date"]),
            weight=float(weight) if weight is not None else None,
            symptoms=list(data.get("symptoms", [])),
            mood=data["mood"],
            notes=data.get("notes"),
            created_at=parse_datetime(data["createdAt"]),
        )


@dataclass
class Answer:
    answer: str
    is_anonymous: bool = True
    id: str = field(default_factory=generate_id)
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "answer": self.answer,
            "isAnonymous": self.is_anonymous,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Answer":
        return cls(
            id=data["id"],
            answer=data["answer"],
            is_anonymous=bool(data.get("isAnonymous", True)),
            created_at=parse_datetime(data["createdAt"]),
        )


@dataclass
class Question:
    question: str
    is_anonymous: bool = True
    answers: list[Answer] = field(default_factory=list)
    id: str = field(default_factory=generate_id)
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "question": self.question,
            "isAnonymous": self.is_anonymous,
            "createdAt": self.created_at.isoformat(),
            "answers": [a.to_dict() for a in self.answers],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        return cls(
            id=data["id"],
            question=data["question"],
            is_anonymous=bool(data.get("isAnonymous", True)),
            answers=[Answer.from_dict(a) for a in data.get("answers") or []],
            created_at=parse_datetime(data["createdAt"]),
        )

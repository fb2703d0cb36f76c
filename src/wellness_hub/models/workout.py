"""Workout data models."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class WorkoutType(str, Enum):
    """Kind of training session."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    CUSTOM = "custom"


class Difficulty(str, Enum):
    """Training difficulty level."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class SplitType(str, Enum):
    """How the week is split across body parts."""

    FULL_BODY = "fullBody"
    UPPER_LOWER = "upperLower"
    CUSTOM = "custom"


@dataclass
class Exercise:
    """An exercise within a workout."""

    name: str
    sets: int
    reps: int
    weight: float | None = None  # kg
    duration: int | None = None  # seconds
    notes: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "weight": self.weight,
            "duration": self.duration,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            sets=data["sets"],
            reps=data["reps"],
            weight=data.get("weight"),
            duration=data.get("duration"),
            notes=data.get("notes", ""),
        )


@dataclass
class Workout:
    """A single scheduled workout."""

    title: str
    exercises: list[Exercise]
    type: WorkoutType = WorkoutType.STRENGTH
    difficulty: Difficulty = Difficulty.BEGINNER
    description: str | None = None
    split_type: SplitType | None = None
    scheduled_date: date | None = None
    completed: bool = False
    completion_date: datetime | None = None
    is_rest_day: bool = False
    id: int | None = None
    user_id: int | None = None
    created_at: datetime | None = None

    def mark_complete(self, when: datetime | None = None) -> None:
        """Mark the workout as completed."""
        self.completed = True
        self.completion_date = when or datetime.now()

    @property
    def total_sets(self) -> int:
        """Total number of sets across all exercises."""
        return sum(ex.sets for ex in self.exercises)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "title": self.title,
            "description": self.description,
            "exercises": [ex.to_dict() for ex in self.exercises],
            "type": self.type.value,
            "difficulty": self.difficulty.value,
            "split_type": self.split_type.value if self.split_type else None,
            "scheduled_date": self.scheduled_date.isoformat() if self.scheduled_date else None,
            "completed": self.completed,
            "completion_date": self.completion_date.isoformat() if self.completion_date else None,
            "is_rest_day": self.is_rest_day,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        user_id: int | None = None,
        created_at: datetime | None = None,
    ) -> "Workout":
        """Create from dictionary."""
        scheduled_date = None
        if data.get("scheduled_date"):
            scheduled_date = date.fromisoformat(data["scheduled_date"])

        completion_date = None
        if data.get("completion_date"):
            completion_date = datetime.fromisoformat(data["completion_date"])

        split_type = data.get("split_type")

        return cls(
            id=id,
            user_id=user_id,
            created_at=created_at,
            title=data["title"],
            description=data.get("description"),
            exercises=[Exercise.from_dict(ex) for ex in data.get("exercises", [])],
            type=WorkoutType(data.get("type", "strength")),
            difficulty=Difficulty(data.get("difficulty", "beginner")),
            split_type=SplitType(split_type) if split_type else None,
            scheduled_date=scheduled_date,
            completed=bool(data.get("completed", False)),
            completion_date=completion_date,
            is_rest_day=bool(data.get("is_rest_day", False)),
        )

"""Data access layer for wellness-hub.

Every workout and nutrition plan query is scoped by ``user_id``; the id is
always supplied by the caller's authenticated session, never by form input.
"""

import json
import logging
from datetime import date, datetime
from enum import Enum
from pathlib import Path

import aiosqlite

from ..errors import PersistenceFailed, Unauthenticated
from ..models.nutrition import MacroNutrients, Meal, NutritionPlan
from ..models.user import User
from ..models.workout import Exercise, Workout
from .engine import get_db_path

logger = logging.getLogger(__name__)

# Columns a partial update may touch
WORKOUT_UPDATABLE = {
    "title",
    "description",
    "exercises",
    "type",
    "difficulty",
    "split_type",
    "scheduled_date",
    "completed",
    "completion_date",
    "is_rest_day",
}
NUTRITION_UPDATABLE = {
    "title",
    "description",
    "target_calories",
    "target_macros",
    "meals",
    "dietary_restrictions",
    "preferences",
}


def _now() -> str:
    return datetime.now().isoformat()


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _to_column(key: str, value):
    """Convert a patch value to its stored column representation."""
    if value is None:
        return None
    if key == "exercises":
        return json.dumps([ex.to_dict() if isinstance(ex, Exercise) else ex for ex in value])
    if key == "meals":
        return json.dumps([m.to_dict() if isinstance(m, Meal) else m for m in value])
    if key == "target_macros":
        return json.dumps(value.to_dict() if isinstance(value, MacroNutrients) else value)
    if key in ("dietary_restrictions", "preferences"):
        return json.dumps(list(value))
    if key in ("completed", "is_rest_day"):
        return int(bool(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _require_user(user_id: int | None) -> int:
    if user_id is None:
        raise Unauthenticated("You must be signed in to save plans.")
    return user_id


class UserRepository:
    """Repository for user accounts."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, user: User) -> User:
        """Create a new account. Raises ValueError if the email is taken."""
        email = user.email.strip().lower()
        created_at = _now()
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute(
                    """
                    INSERT INTO users (email, password_hash, display_name, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (email, user.password_hash, user.display_name, created_at),
                )
                await db.commit()
        except aiosqlite.IntegrityError as e:
            raise ValueError(f"An account with email {email} already exists") from e

        user.id = cursor.lastrowid
        user.email = email
        user.created_at = datetime.fromisoformat(created_at)
        return user

    async def get(self, user_id: int) -> User | None:
        """Get a user by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email (case-insensitive)."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM users WHERE email = ?", (email.strip().lower(),)
            )
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    def _row_to_user(self, row: aiosqlite.Row) -> User:
        return User(
            id=row["id"],
            email=row["email"],
            password_hash=row["password_hash"],
            display_name=row["display_name"] or "",
            created_at=_parse_timestamp(row["created_at"]),
        )


class WorkoutRepository:
    """Repository for workouts."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, user_id: int | None, workout: Workout) -> Workout:
        """Store a workout for the given user and return it with its ID."""
        user_id = _require_user(user_id)
        data = workout.to_dict()
        created_at = _now()
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute(
                    """
                    INSERT INTO workouts
                    (user_id, title, description, exercises, type, difficulty, split_type,
                     scheduled_date, completed, completion_date, is_rest_day, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        user_id,
                        data["title"],
                        data["description"],
                        json.dumps(data["exercises"]),
                        data["type"],
                        data["difficulty"],
                        data["split_type"],
                        data["scheduled_date"],
                        int(data["completed"]),
                        data["completion_date"],
                        int(data["is_rest_day"]),
                        created_at,
                    ),
                )
                await db.commit()
        except aiosqlite.Error as e:
            logger.exception("Failed to save workout %r", workout.title)
            raise PersistenceFailed(f"Failed to save workout '{workout.title}': {e}") from e

        workout.id = cursor.lastrowid
        workout.user_id = user_id
        workout.created_at = datetime.fromisoformat(created_at)
        return workout

    async def get(self, user_id: int, workout_id: int) -> Workout | None:
        """Get one of the user's workouts by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workouts WHERE id = ? AND user_id = ?",
                (workout_id, user_id),
            )
            row = await cursor.fetchone()
            return self._row_to_workout(row) if row else None

    async def list_for_user(self, user_id: int) -> list[Workout]:
        """List the user's workouts, latest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM workouts WHERE user_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_workout(row) for row in rows]

    async def update(self, user_id: int, workout_id: int, patch: dict) -> Workout | None:
        """Apply a partial update. Last writer wins.

        Returns the updated workout, or None if the user has no such workout.
        """
        unknown = set(patch) - WORKOUT_UPDATABLE
        if unknown:
            raise ValueError(f"Cannot update workout fields: {', '.join(sorted(unknown))}")
        if patch:
            assignments = ", ".join(f"{key} = ?" for key in patch)
            values = [_to_column(key, value) for key, value in patch.items()]
            try:
                async with aiosqlite.connect(self.db_path) as db:
                    await db.execute(
                        f"UPDATE workouts SET {assignments} WHERE id = ? AND user_id = ?",
                        (*values, workout_id, user_id),
                    )
                    await db.commit()
            except aiosqlite.Error as e:
                logger.exception("Failed to update workout %s", workout_id)
                raise PersistenceFailed(f"Failed to update workout: {e}") from e
        return await self.get(user_id, workout_id)

    async def mark_complete(self, user_id: int, workout_id: int) -> Workout | None:
        """Mark a workout complete, stamping the completion date."""
        return await self.update(
            user_id,
            workout_id,
            {"completed": True, "completion_date": datetime.now()},
        )

    def _row_to_workout(self, row: aiosqlite.Row) -> Workout:
        """Convert a database row to a Workout."""
        data = {
            "title": row["title"],
            "description": row["description"],
            "exercises": json.loads(row["exercises"]),
            "type": row["type"],
            "difficulty": row["difficulty"],
            "split_type": row["split_type"],
            "scheduled_date": row["scheduled_date"],
            "completed": row["completed"],
            "completion_date": row["completion_date"],
            "is_rest_day": row["is_rest_day"],
        }
        return Workout.from_dict(
            data,
            id=row["id"],
            user_id=row["user_id"],
            created_at=_parse_timestamp(row["created_at"]),
        )


class NutritionPlanRepository:
    """Repository for nutrition plans."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, user_id: int | None, plan: NutritionPlan) -> NutritionPlan:
        """Store a nutrition plan for the given user and return it with its ID."""
        user_id = _require_user(user_id)
        data = plan.to_dict()
        created_at = _now()
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute(
                    """
                    INSERT INTO nutrition_plans
                    (user_id, title, description, target_calories, target_macros, meals,
                     dietary_restrictions, preferences, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        user_id,
                        data["title"],
                        data["description"],
                        data["target_calories"],
                        json.dumps(data["target_macros"]),
                        json.dumps(data["meals"]),
                        json.dumps(data["dietary_restrictions"]),
                        json.dumps(data["preferences"]),
                        created_at,
                    ),
                )
                await db.commit()
        except aiosqlite.Error as e:
            logger.exception("Failed to save nutrition plan %r", plan.title)
            raise PersistenceFailed(f"Failed to save nutrition plan '{plan.title}': {e}") from e

        plan.id = cursor.lastrowid
        plan.user_id = user_id
        plan.created_at = datetime.fromisoformat(created_at)
        return plan

    async def get(self, user_id: int, plan_id: int) -> NutritionPlan | None:
        """Get one of the user's plans by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM nutrition_plans WHERE id = ? AND user_id = ?",
                (plan_id, user_id),
            )
            row = await cursor.fetchone()
            return self._row_to_plan(row) if row else None

    async def list_for_user(self, user_id: int) -> list[NutritionPlan]:
        """List the user's plans, latest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM nutrition_plans WHERE user_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_plan(row) for row in rows]

    async def get_latest(self, user_id: int) -> NutritionPlan | None:
        """Get the user's current (most recently created) plan."""
        plans = await self.list_for_user(user_id)
        return plans[0] if plans else None

    async def update(self, user_id: int, plan_id: int, patch: dict) -> NutritionPlan | None:
        """Apply a partial update. Last writer wins."""
        unknown = set(patch) - NUTRITION_UPDATABLE
        if unknown:
            raise ValueError(f"Cannot update nutrition plan fields: {', '.join(sorted(unknown))}")
        if patch:
            assignments = ", ".join(f"{key} = ?" for key in patch)
            values = [_to_column(key, value) for key, value in patch.items()]
            try:
                async with aiosqlite.connect(self.db_path) as db:
                    await db.execute(
                        f"UPDATE nutrition_plans SET {assignments} WHERE id = ? AND user_id = ?",
                        (*values, plan_id, user_id),
                    )
                    await db.commit()
            except aiosqlite.Error as e:
                logger.exception("Failed to update nutrition plan %s", plan_id)
                raise PersistenceFailed(f"Failed to update nutrition plan: {e}") from e
        return await self.get(user_id, plan_id)

    def _row_to_plan(self, row: aiosqlite.Row) -> NutritionPlan:
        """Convert a database row to a NutritionPlan."""
        data = {
            "title": row["title"],
            "description": row["description"],
            "target_calories": row["target_calories"],
            "target_macros": json.loads(row["target_macros"]),
            "meals": json.loads(row["meals"]),
            "dietary_restrictions": json.loads(row["dietary_restrictions"]),
            "preferences": json.loads(row["preferences"]),
        }
        return NutritionPlan.from_dict(
            data,
            id=row["id"],
            user_id=row["user_id"],
            created_at=_parse_timestamp(row["created_at"]),
        )

"""Pytest configuration and fixtures."""

import json
import tempfile
from pathlib import Path
from types import SimpleNamespace

import pytest

from wellness_hub.config import Settings
from wellness_hub.db import UserRepository, init_db
from wellness_hub.auth.security import hash_password
from wellness_hub.generation.provider import PlanProvider
from wellness_hub.models.requests import NutritionRequest, WorkoutRequest
from wellness_hub.models.user import User

TEST_PASSWORD = "correct-horse"
TEST_SECRET = "test-secret-key-for-sessions"


class FakeCompletions:
    """Stands in for ``client.chat.completions``; replays canned replies."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        message = SimpleNamespace(content=reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeClient:
    """Minimal AsyncOpenAI look-alike."""

    def __init__(self, *replies):
        self.completions = FakeCompletions(replies)
        self.chat = SimpleNamespace(completions=self.completions)


def _workout_payload(days: int = 3, exercises: int = 4) -> dict:
    """A well-formed weekly plan reply."""
    return {
        "workouts": [
            {
                "title": f"Day {day} Strength",
                "description": "Compound lifts and accessories",
                "dayOfWeek": day,
                "exercises": [
                    {"name": f"Exercise {i}", "sets": 3, "reps": 10, "notes": "Controlled tempo"}
                    for i in range(1, exercises + 1)
                ],
            }
            for day in range(1, days + 1)
        ]
    }


def _nutrition_payload(meals: int = 3) -> dict:
    """A well-formed daily meal plan reply."""
    meal_types = ["breakfast", "lunch", "dinner", "snack", "snack", "snack"]
    return {
        "title": "High Protein Day",
        "description": "Protein at every meal",
        "targetCalories": 2200,
        "targetMacros": {"protein": 165, "carbohydrates": 220, "fats": 73, "calories": 2200},
        "meals": [
            {
                "name": f"Meal {i + 1}",
                "description": "Simple and filling",
                "mealType": meal_types[i],
                "ingredients": ["200 g chicken", "1 cup rice"],
                "servingSize": "1 plate",
                "macros": {"protein": 40, "carbohydrates": 50, "fats": 10, "calories": 450},
                "preparationTime": 20,
                "instructions": ["Cook the rice", "Grill the chicken"],
            }
            for i in range(meals)
        ],
    }


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
async def db_path(temp_db_path):
    """An initialized temporary database."""
    await init_db(temp_db_path)
    return temp_db_path


@pytest.fixture
async def user(db_path) -> User:
    """A registered user."""
    return await UserRepository(db_path).create(
        User(email="alex@example.com", password_hash=hash_password(TEST_PASSWORD), display_name="Alex")
    )


@pytest.fixture
async def other_user(db_path) -> User:
    """A second user, for scoping checks."""
    return await UserRepository(db_path).create(
        User(email="sam@example.com", password_hash=hash_password(TEST_PASSWORD))
    )


@pytest.fixture
def settings(temp_db_path) -> Settings:
    """Settings isolated from the environment."""
    return Settings(
        _env_file=None,
        groq_api_key=None,
        data_dir=temp_db_path.parent,
        secret_key=TEST_SECRET,
    )


@pytest.fixture
def demo_provider() -> PlanProvider:
    """Provider with no client configured."""
    return PlanProvider(None, model="test-model")


@pytest.fixture
def fake_client_factory():
    """Build a provider around a fake client with canned replies."""

    def make(*replies):
        client = FakeClient(*replies)
        return PlanProvider(client, model="test-model"), client

    return make


@pytest.fixture
def workout_reply():
    """Serialized workout plan reply factory."""

    def make(days: int = 3, exercises: int = 4) -> str:
        return json.dumps(_workout_payload(days, exercises))

    return make


@pytest.fixture
def nutrition_reply():
    """Serialized nutrition plan reply factory."""

    def make(meals: int = 3) -> str:
        return json.dumps(_nutrition_payload(meals))

    return make


@pytest.fixture
def sample_workout_request() -> WorkoutRequest:
    """A typical workout request."""
    return WorkoutRequest(
        days_per_week=3,
        type="strength",
        split_type="upperLower",
        difficulty="intermediate",
        duration=60,
        equipment=["barbell", "dumbbells"],
    ).validate()


@pytest.fixture
def sample_nutrition_request() -> NutritionRequest:
    """A typical nutrition request."""
    return NutritionRequest(
        target_calories=2200,
        meals_per_day=3,
        diet_type="highProtein",
        allergies=["peanuts"],
        preferences=["chicken"],
        preparation_time=30,
    ).validate()


@pytest.fixture
def workout_payload():
    """Weekly plan reply (as a dict) factory, for tests that tweak fields."""
    return _workout_payload


@pytest.fixture
def nutrition_payload():
    """Meal plan reply (as a dict) factory, for tests that tweak fields."""
    return _nutrition_payload

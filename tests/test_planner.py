"""Tests for the generation pipeline."""

import json
from datetime import date

import pytest
from openai import OpenAIError

from wellness_hub.db import NutritionPlanRepository, WorkoutRepository
from wellness_hub.errors import (
    BatchPersistenceFailed,
    GenerationFailed,
    PersistenceFailed,
    ShapeInvalid,
)
from wellness_hub.generation.provider import NUTRITION_MAX_TOKENS, WORKOUT_MAX_TOKENS
from wellness_hub.generation.schema import validate_nutrition_plan, validate_workout_plan
from wellness_hub.models.requests import NutritionRequest, WorkoutRequest
from wellness_hub.services.planner import (
    DEMO_NUTRITION_NOTICE,
    DEMO_WORKOUT_NOTICE,
    NutritionPlanner,
    WorkoutPlanner,
    next_occurrence,
)

# A Wednesday
TODAY = date(2024, 3, 6)


class FlakyWorkoutRepository(WorkoutRepository):
    """Fails on the Nth create call."""

    def __init__(self, db_path, fail_on: int):
        super().__init__(db_path)
        self.fail_on = fail_on
        self.calls = 0

    async def create(self, user_id, workout):
        self.calls += 1
        if self.calls == self.fail_on:
            raise PersistenceFailed("disk I/O error")
        return await super().create(user_id, workout)


class TestNextOccurrence:
    """Tests for next_occurrence."""

    def test_same_day(self):
        assert next_occurrence(3, TODAY) == TODAY

    def test_later_this_week(self):
        assert next_occurrence(5, TODAY) == date(2024, 3, 8)

    def test_wraps_to_next_week(self):
        assert next_occurrence(1, TODAY) == date(2024, 3, 11)


class TestWorkoutPlanner:
    """Tests for WorkoutPlanner."""

    async def test_demo_mode_persists_mock_plan(self, db_path, user, demo_provider):
        repo = WorkoutRepository(db_path)
        planner = WorkoutPlanner(demo_provider, repo)

        outcome = await planner.generate(user, WorkoutRequest(days_per_week=3), today=TODAY)

        assert outcome.demo_mode
        assert outcome.notice == DEMO_WORKOUT_NOTICE
        titles = [w.title for w in outcome.items]
        assert titles[0] == "Full Body Strength Training"
        assert len(outcome.items[0].exercises) == 3

        stored = await repo.list_for_user(user.id)
        assert {w.title for w in stored} == set(titles)

    async def test_demo_mode_does_not_share_mock_objects(self, db_path, user, demo_provider):
        planner = WorkoutPlanner(demo_provider, WorkoutRepository(db_path))

        first = await planner.generate(user, WorkoutRequest(days_per_week=1), today=TODAY)
        second = await planner.generate(user, WorkoutRequest(days_per_week=1), today=TODAY)

        assert first.items[0].id != second.items[0].id
        assert first.items[0].exercises is not second.items[0].exercises

    async def test_generated_plan_persisted(
        self, db_path, user, fake_client_factory, workout_reply, sample_workout_request
    ):
        provider, client = fake_client_factory(workout_reply(days=3, exercises=5))
        repo = WorkoutRepository(db_path)
        planner = WorkoutPlanner(provider, repo)

        outcome = await planner.generate(user, sample_workout_request, today=TODAY)

        assert not outcome.demo_mode
        assert outcome.notice == "Generated 3 workouts for your weekly plan!"
        assert client.completions.calls[0]["max_tokens"] == WORKOUT_MAX_TOKENS

        stored = await repo.list_for_user(user.id)
        assert len(stored) == 3
        for workout in stored:
            assert workout.user_id == user.id
            assert len(workout.exercises) == 5
            assert workout.split_type.value == "upperLower"
            assert workout.difficulty.value == "intermediate"

        scheduled = sorted(w.scheduled_date for w in stored)
        # dayOfWeek 1, 2, 3 from a Wednesday
        assert scheduled == [date(2024, 3, 6), date(2024, 3, 11), date(2024, 3, 12)]

    async def test_shape_invalid_persists_nothing(
        self, db_path, user, fake_client_factory, workout_reply
    ):
        provider, _ = fake_client_factory(workout_reply(days=3, exercises=3))
        repo = WorkoutRepository(db_path)
        planner = WorkoutPlanner(provider, repo)

        with pytest.raises(ShapeInvalid, match="between 4-6 exercises"):
            await planner.generate(user, WorkoutRequest(days_per_week=3))

        assert await repo.list_for_user(user.id) == []

    async def test_count_mismatch_persists_nothing(
        self, db_path, user, fake_client_factory, workout_reply
    ):
        provider, _ = fake_client_factory(workout_reply(days=2))
        repo = WorkoutRepository(db_path)

        with pytest.raises(ShapeInvalid, match="expected 4 workouts but received 2"):
            await WorkoutPlanner(provider, repo).generate(user, WorkoutRequest(days_per_week=4))

        assert await repo.list_for_user(user.id) == []

    async def test_generation_failed_persists_nothing(self, db_path, user, fake_client_factory):
        provider, _ = fake_client_factory(OpenAIError("connection reset"))
        repo = WorkoutRepository(db_path)

        with pytest.raises(GenerationFailed):
            await WorkoutPlanner(provider, repo).generate(user, WorkoutRequest())

        assert await repo.list_for_user(user.id) == []

    async def test_partial_batch_stays_committed(
        self, db_path, user, fake_client_factory, workout_reply
    ):
        provider, _ = fake_client_factory(workout_reply(days=3))
        repo = FlakyWorkoutRepository(db_path, fail_on=2)
        planner = WorkoutPlanner(provider, repo)

        with pytest.raises(BatchPersistenceFailed) as exc_info:
            await planner.generate(user, WorkoutRequest(days_per_week=3), today=TODAY)

        error = exc_info.value
        assert error.failed_index == 1
        assert [w.title for w in error.committed] == ["Day 1 Strength"]
        assert "workout 2 of 3" in str(error)
        assert repo.calls == 2

        stored = await WorkoutRepository(db_path).list_for_user(user.id)
        assert [w.title for w in stored] == ["Day 1 Strength"]

    async def test_invalid_request_rejected_before_provider(
        self, db_path, user, fake_client_factory
    ):
        provider, client = fake_client_factory()
        planner = WorkoutPlanner(provider, WorkoutRepository(db_path))

        with pytest.raises(ValueError):
            await planner.generate(user, WorkoutRequest(days_per_week=9))

        assert client.completions.calls == []


class TestNutritionPlanner:
    """Tests for NutritionPlanner."""

    async def test_demo_mode(self, db_path, user, demo_provider):
        repo = NutritionPlanRepository(db_path)
        planner = NutritionPlanner(demo_provider, repo)

        outcome = await planner.generate(user, NutritionRequest(target_calories=1800))

        assert outcome.demo_mode
        assert outcome.notice == DEMO_NUTRITION_NOTICE
        latest = await repo.get_latest(user.id)
        assert latest.title == "Balanced Nutrition Plan"
        assert latest.target_calories == 1800
        assert latest.target_macros.protein == 135

    async def test_generated_plan_persisted(
        self, db_path, user, fake_client_factory, nutrition_reply, sample_nutrition_request
    ):
        provider, client = fake_client_factory(nutrition_reply(meals=3))
        repo = NutritionPlanRepository(db_path)

        outcome = await NutritionPlanner(provider, repo).generate(user, sample_nutrition_request)

        assert not outcome.demo_mode
        assert outcome.notice == "Generated your customized meal plan!"
        assert client.completions.calls[0]["max_tokens"] == NUTRITION_MAX_TOKENS

        latest = await repo.get_latest(user.id)
        assert latest.id == outcome.items[0].id
        assert latest.target_calories == 2200
        assert latest.target_macros.protein == 165
        assert latest.dietary_restrictions == ["peanuts"]
        assert latest.preferences == ["chicken"]
        assert len(latest.meals) == 3

    async def test_shape_invalid_persists_nothing(
        self, db_path, user, fake_client_factory, nutrition_reply
    ):
        provider, _ = fake_client_factory(nutrition_reply(meals=2))
        repo = NutritionPlanRepository(db_path)

        with pytest.raises(ShapeInvalid):
            await NutritionPlanner(provider, repo).generate(user, NutritionRequest(meals_per_day=3))

        assert await repo.get_latest(user.id) is None


class TestStoredPlansMatchValidated:
    """Validated plans come back from the store unchanged."""

    async def test_workouts(self, db_path, user, fake_client_factory, workout_payload):
        payload = workout_payload(days=2, exercises=4)
        for i, exercise in enumerate(payload["workouts"][1]["exercises"]):
            exercise.update(name=f"Cable Row {i}", sets=i + 2, reps=6 + i, notes=f"Cue {i}")
        raw = json.dumps(payload)
        planned = validate_workout_plan(raw, 2).unwrap()

        provider, _ = fake_client_factory(raw)
        repo = WorkoutRepository(db_path)
        outcome = await WorkoutPlanner(provider, repo).generate(
            user, WorkoutRequest(days_per_week=2), today=TODAY
        )

        for expected, saved in zip(planned, outcome.items):
            stored = await repo.get(user.id, saved.id)
            assert stored.title == expected.title
            assert stored.description == expected.description
            assert stored.is_rest_day == expected.is_rest_day
            assert stored.scheduled_date == next_occurrence(expected.day_of_week, TODAY)
            assert stored.exercises == expected.exercises
            assert [(e.name, e.sets, e.reps, e.notes) for e in stored.exercises] == [
                (e.name, e.sets, e.reps, e.notes) for e in expected.exercises
            ]

    async def test_nutrition(self, db_path, user, fake_client_factory, nutrition_payload):
        payload = nutrition_payload(meals=3)
        payload["meals"][2].update(
            ingredients=["150 g salmon", "1 cup quinoa"],
            instructions=["Bake the salmon", "Simmer the quinoa", "Plate"],
            macros={"protein": 38, "carbohydrates": 41.5, "fats": 17, "calories": 470},
        )
        raw = json.dumps(payload)
        planned = validate_nutrition_plan(raw, 3).unwrap()

        provider, _ = fake_client_factory(raw)
        repo = NutritionPlanRepository(db_path)
        outcome = await NutritionPlanner(provider, repo).generate(user, NutritionRequest())

        stored = await repo.get(user.id, outcome.items[0].id)
        assert stored.title == planned.title
        assert stored.description == planned.description
        assert stored.target_macros == planned.target_macros
        assert stored.meals == planned.meals
        assert stored.meals[2].macros.carbohydrates == 41.5
        assert stored.meals[2].ingredients == ["150 g salmon", "1 cup quinoa"]
        assert stored.meals[2].instructions == ["Bake the salmon", "Simmer the quinoa", "Plate"]


class TestRejectedReplies:
    """Malformed replies surface as ShapeInvalid and store nothing."""

    async def test_nutrition_without_meals(
        self, db_path, user, fake_client_factory, nutrition_payload
    ):
        payload = nutrition_payload()
        del payload["meals"]
        provider, _ = fake_client_factory(json.dumps(payload))
        repo = NutritionPlanRepository(db_path)

        with pytest.raises(ShapeInvalid, match="meals"):
            await NutritionPlanner(provider, repo).generate(user, NutritionRequest())

        assert await repo.list_for_user(user.id) == []

    async def test_workouts_without_workouts_key(self, db_path, user, fake_client_factory):
        provider, _ = fake_client_factory(json.dumps({"plan": "three days"}))
        repo = WorkoutRepository(db_path)

        with pytest.raises(ShapeInvalid, match="workouts"):
            await WorkoutPlanner(provider, repo).generate(user, WorkoutRequest())

        assert await repo.list_for_user(user.id) == []

    async def test_deeply_nested_reply(self, db_path, user, fake_client_factory):
        provider, _ = fake_client_factory('{"workouts": ' + "[" * 5000 + "]" * 5000 + "}")
        repo = WorkoutRepository(db_path)

        with pytest.raises(ShapeInvalid, match="not valid JSON"):
            await WorkoutPlanner(provider, repo).generate(user, WorkoutRequest())

        assert await repo.list_for_user(user.id) == []

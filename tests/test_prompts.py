"""Tests for prompt construction."""

from wellness_hub.generation.prompts import (
    MAX_EXERCISES,
    MIN_EXERCISES,
    build_nutrition_messages,
    build_workout_messages,
)
from wellness_hub.models.requests import NutritionRequest, WorkoutRequest


class TestWorkoutPrompt:
    """Tests for build_workout_messages."""

    def test_embeds_every_parameter(self, sample_workout_request):
        prompt = build_workout_messages(sample_workout_request)

        assert "intermediate level strength workout plan" in prompt.user
        assert "exactly 3 workouts" in prompt.user
        assert "Split type: upperLower" in prompt.user
        assert "Duration: 60 minutes" in prompt.user
        assert "Equipment: barbell, dumbbells" in prompt.user
        assert "alternate upper and lower body" in prompt.user

    def test_system_pins_schema_and_rules(self):
        prompt = build_workout_messages(WorkoutRequest().validate())
        assert '"dayOfWeek"' in prompt.system
        assert f"{MIN_EXERCISES}-{MAX_EXERCISES} exercises" in prompt.system
        assert "Rest Day" in prompt.system

    def test_empty_equipment(self):
        prompt = build_workout_messages(WorkoutRequest(equipment=[]).validate())
        assert "Equipment: bodyweight only" in prompt.user

    def test_pure_function(self, sample_workout_request):
        assert build_workout_messages(sample_workout_request) == build_workout_messages(
            sample_workout_request
        )

    def test_to_messages(self):
        messages = build_workout_messages(WorkoutRequest().validate()).to_messages()
        assert [m["role"] for m in messages] == ["system", "user"]


class TestNutritionPrompt:
    """Tests for build_nutrition_messages."""

    def test_embeds_every_parameter(self, sample_nutrition_request):
        prompt = build_nutrition_messages(sample_nutrition_request)

        assert "highProtein meal plan" in prompt.user
        assert "exactly 3 meals" in prompt.user
        assert "2200 kcal" in prompt.user
        assert "Allergies: peanuts" in prompt.user
        assert "Preferences: chicken" in prompt.user
        assert "30 minutes" in prompt.user

    def test_empty_lists_say_none(self):
        prompt = build_nutrition_messages(NutritionRequest().validate())
        assert "Allergies: none" in prompt.user
        assert "Preferences: none" in prompt.user

    def test_system_names_meal_fields(self):
        prompt = build_nutrition_messages(NutritionRequest().validate())
        for key in ("mealType", "servingSize", "preparationTime", "instructions"):
            assert key in prompt.system

"""Shape validation for provider output.

The required plan shapes are declared as pydantic models. ``validate_*``
parses the raw reply, evaluates the models and returns a ValidationResult
carrying either the plan or a message describing the first violation.
Validation is all-or-nothing: nothing is repaired or partially accepted.
"""

import json
import math
import re
from dataclasses import dataclass, field
from typing import Annotated, Any, Generic, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    model_validator,
)

from ..errors import ShapeInvalid
from ..models.nutrition import MacroNutrients, Meal, MealType
from ..models.workout import Exercise
from .prompts import MAX_EXERCISES, MIN_EXERCISES

T = TypeVar("T")

REST_DAY_MARKER = "rest day"

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


def _number(value: Any) -> int | float:
    # bool is an int subclass; JSON true/false is not a count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    if not math.isfinite(value):
        raise ValueError("must be a finite number")
    return value


def _positive_whole(value: Any) -> int:
    value = _number(value)
    if value <= 0:
        raise ValueError("must be greater than 0")
    if value != int(value):
        raise ValueError("must be a whole number")
    return int(value)


def _optional_positive_whole(value: Any) -> int | None:
    return None if value is None else _positive_whole(value)


def _non_negative(value: Any) -> int | float:
    value = _number(value)
    if value < 0:
        raise ValueError("must not be negative")
    return value


def _optional_non_negative(value: Any) -> int | float | None:
    return None if value is None else _non_negative(value)


def _non_empty_str(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("must be a non-empty string")
    return value.strip()


def _day_of_week(value: Any) -> int:
    value = _positive_whole(value)
    if value > 7:
        raise ValueError("must be between 1 and 7")
    return value


def _meal_type(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


PositiveWhole = Annotated[int, BeforeValidator(_positive_whole)]
OptionalPositiveWhole = Annotated[int | None, BeforeValidator(_optional_positive_whole)]
NonNegative = Annotated[int | float, BeforeValidator(_non_negative)]
OptionalNonNegative = Annotated[int | float | None, BeforeValidator(_optional_non_negative)]
NonEmptyStr = Annotated[str, BeforeValidator(_non_empty_str)]
DayOfWeek = Annotated[int, BeforeValidator(_day_of_week)]


class _Schema(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ExerciseSchema(_Schema):
    name: NonEmptyStr
    sets: PositiveWhole
    reps: PositiveWhole
    notes: NonEmptyStr
    weight: OptionalNonNegative = None
    duration: OptionalPositiveWhole = None


class WorkoutSchema(_Schema):
    title: NonEmptyStr
    description: NonEmptyStr
    day_of_week: DayOfWeek = Field(alias="dayOfWeek")
    exercises: list[ExerciseSchema]
    is_rest_day: bool = False

    @model_validator(mode="before")
    @classmethod
    def _rest_day(cls, data: Any) -> Any:
        """Rest days carry no exercises, whatever the provider sent."""
        if isinstance(data, dict):
            title = data.get("title")
            if isinstance(title, str) and REST_DAY_MARKER in title.lower():
                data = {**data, "exercises": [], "is_rest_day": True}
            else:
                data = {**data, "is_rest_day": False}
        return data

    @model_validator(mode="after")
    def _exercise_count(self) -> "WorkoutSchema":
        if not self.is_rest_day:
            count = len(self.exercises)
            if not MIN_EXERCISES <= count <= MAX_EXERCISES:
                raise ValueError(
                    f"must have between {MIN_EXERCISES}-{MAX_EXERCISES} exercises, got {count}"
                )
        return self


class WorkoutPlanSchema(_Schema):
    workouts: list[WorkoutSchema]


class MacroSchema(_Schema):
    protein: NonNegative
    carbohydrates: NonNegative
    fats: NonNegative
    calories: NonNegative


class MealSchema(_Schema):
    name: NonEmptyStr
    description: NonEmptyStr
    meal_type: Annotated[MealType, BeforeValidator(_meal_type)] = Field(alias="mealType")
    ingredients: Annotated[list[NonEmptyStr], Field(min_length=1)]
    serving_size: NonEmptyStr = Field(alias="servingSize")
    macros: MacroSchema
    preparation_time: PositiveWhole = Field(alias="preparationTime")
    instructions: Annotated[list[NonEmptyStr], Field(min_length=1)]


class NutritionPlanSchema(_Schema):
    title: NonEmptyStr
    description: NonEmptyStr
    target_calories: OptionalNonNegative = Field(default=None, alias="targetCalories")
    target_macros: MacroSchema | None = Field(default=None, alias="targetMacros")
    meals: Annotated[list[MealSchema], Field(min_length=1)]


@dataclass
class PlannedWorkout:
    """A validated workout, before it is scheduled and stored."""

    title: str
    description: str
    day_of_week: int
    exercises: list[Exercise] = field(default_factory=list)
    is_rest_day: bool = False


@dataclass
class PlannedNutrition:
    """A validated meal plan, before request defaults are applied."""

    title: str
    description: str
    meals: list[Meal]
    target_calories: int | float | None = None
    target_macros: MacroNutrients | None = None


@dataclass
class ValidationResult(Generic[T]):
    """Outcome of a shape check."""

    ok: bool
    value: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, value: T) -> "ValidationResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "ValidationResult[T]":
        return cls(ok=False, error=error)

    def unwrap(self) -> T:
        """Return the value, raising ShapeInvalid on failure."""
        if not self.ok:
            raise ShapeInvalid(self.error or "Invalid plan")
        return self.value


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence, if any."""
    text = text.strip()
    match = _FENCE_RE.match(text)
    return match.group(1) if match else text


def _parse(raw: str) -> Any:
    # Deeply nested replies raise RecursionError instead of JSONDecodeError
    return json.loads(strip_code_fences(raw))


def _describe(error: ValidationError) -> str:
    """Human-readable description of the first violation."""
    first = error.errors()[0]
    path = ".".join(str(part) for part in first["loc"]) or "response"
    message = first["msg"]
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return f"{path}: {message}"


def _to_macros(schema: MacroSchema) -> MacroNutrients:
    return MacroNutrients(
        protein=schema.protein,
        carbohydrates=schema.carbohydrates,
        fats=schema.fats,
        calories=schema.calories,
    )


def validate_workout_plan(raw: str, expected_days: int) -> ValidationResult[list[PlannedWorkout]]:
    """Validate a weekly workout plan reply."""
    try:
        data = _parse(raw)
    except (json.JSONDecodeError, RecursionError) as e:
        return ValidationResult.failure(f"Response is not valid JSON: {e}")

    try:
        plan = WorkoutPlanSchema.model_validate(data)
    except ValidationError as e:
        return ValidationResult.failure(_describe(e))

    if len(plan.workouts) != expected_days:
        return ValidationResult.failure(
            f"workouts: expected {expected_days} workouts but received {len(plan.workouts)}"
        )

    return ValidationResult.success([
        PlannedWorkout(
            title=w.title,
            description=w.description,
            day_of_week=w.day_of_week,
            is_rest_day=w.is_rest_day,
            exercises=[
                Exercise(
                    name=ex.name,
                    sets=ex.sets,
                    reps=ex.reps,
                    weight=ex.weight,
                    duration=ex.duration,
                    notes=ex.notes,
                )
                for ex in w.exercises
            ],
        )
        for w in plan.workouts
    ])


def validate_nutrition_plan(raw: str, expected_meals: int) -> ValidationResult[PlannedNutrition]:
    """Validate a daily meal plan reply."""
    try:
        data = _parse(raw)
    except (json.JSONDecodeError, RecursionError) as e:
        return ValidationResult.failure(f"Response is not valid JSON: {e}")

    try:
        plan = NutritionPlanSchema.model_validate(data)
    except ValidationError as e:
        return ValidationResult.failure(_describe(e))

    if len(plan.meals) != expected_meals:
        return ValidationResult.failure(
            f"meals: expected {expected_meals} meals but received {len(plan.meals)}"
        )

    return ValidationResult.success(PlannedNutrition(
        title=plan.title,
        description=plan.description,
        target_calories=plan.target_calories,
        target_macros=_to_macros(plan.target_macros) if plan.target_macros else None,
        meals=[
            Meal(
                name=m.name,
                description=m.description,
                meal_type=m.meal_type,
                ingredients=list(m.ingredients),
                serving_size=m.serving_size,
                macros=_to_macros(m.macros),
                preparation_time=m.preparation_time,
                instructions=list(m.instructions),
            )
            for m in plan.meals
        ],
    ))

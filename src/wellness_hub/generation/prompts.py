"""Prompt templates for plan generation.

Each builder is a pure function of its request: the system prompt pins the
JSON schema and domain rules, the user prompt carries the concrete values.
"""

from dataclasses import dataclass

from ..models.requests import NutritionRequest, WorkoutRequest
from ..models.workout import SplitType


@dataclass(frozen=True)
class PromptPair:
    """System and user instructions for one generation call."""

    system: str
    user: str

    def to_messages(self) -> list[dict]:
        """Chat message list for the completion request."""
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


MIN_EXERCISES = 4
MAX_EXERCISES = 6

WORKOUT_SYSTEM = """You are a professional fitness trainer that generates weekly workout plans. Respond with a valid JSON object containing an array of workouts. Each workout must include a title, description, dayOfWeek (1-7, Monday is 1), and an array of exercises. Each exercise must have a name, sets, reps, and notes.

Rules:
- sets and reps are positive whole numbers
- notes are short form cues and are never empty
- include exactly {min_exercises}-{max_exercises} exercises per workout
- a recovery day must have "Rest Day" in its title and an empty exercises array
- respond with JSON only, no markdown and no commentary

Example format:
{{
  "workouts": [
    {{
      "title": "Workout Title",
      "description": "Workout Description",
      "dayOfWeek": 1,
      "exercises": [
        {{
          "name": "Exercise Name",
          "sets": 3,
          "reps": 10,
          "notes": "Exercise notes"
        }}
      ]
    }}
  ]
}}"""

WORKOUT_USER = """Create a {difficulty} level {type} workout plan with exactly {days_per_week} workouts.
Split type: {split_type}
Duration: {duration} minutes
Equipment: {equipment}

Requirements:
- Generate exactly {days_per_week} workouts
{split_guidance}- Space workouts throughout the week with rest days between
- Include {min_exercises}-{max_exercises} exercises per workout
- Each exercise must specify sets, reps, and form notes
- Only use the listed equipment
- Total workout duration should be around {duration} minutes"""

SPLIT_GUIDANCE = {
    SplitType.FULL_BODY: "- For fullBody split: train every major muscle group in each workout\n",
    SplitType.UPPER_LOWER: "- For upperLower split: alternate upper and lower body workouts\n",
    SplitType.CUSTOM: "",
}

NUTRITION_SYSTEM = """You are a registered dietitian that generates daily meal plans. Respond with a valid JSON object containing the plan title, description, targetCalories, targetMacros, and an array of meals. Each meal must include a name, description, mealType (breakfast, lunch, dinner or snack), ingredients (array of strings with quantities), servingSize, macros (protein, carbohydrates and fats in grams, plus calories), preparationTime in minutes, and instructions (array of steps).

Rules:
- macros must be realistic for the listed ingredients and non-negative
- the meal calories should add up to roughly the daily target
- never use an ingredient the user is allergic to
- respond with JSON only, no markdown and no commentary

Example format:
{{
  "title": "Plan Title",
  "description": "Plan Description",
  "targetCalories": 2000,
  "targetMacros": {{"protein": 150, "carbohydrates": 200, "fats": 67, "calories": 2000}},
  "meals": [
    {{
      "name": "Meal Name",
      "description": "Meal Description",
      "mealType": "breakfast",
      "ingredients": ["1 cup oatmeal", "1 banana"],
      "servingSize": "1 bowl",
      "macros": {{"protein": 15, "carbohydrates": 65, "fats": 12, "calories": 428}},
      "preparationTime": 15,
      "instructions": ["Cook the oatmeal", "Top with sliced banana"]
    }}
  ]
}}"""

NUTRITION_USER = """Create a {diet_type} meal plan for one day with exactly {meals_per_day} meals.
Daily calorie target: {target_calories} kcal
Allergies: {allergies}
Preferences: {preferences}
Maximum preparation time per meal: {preparation_time} minutes

Requirements:
- Generate exactly {meals_per_day} meals
- Total calories should be close to {target_calories} kcal
- Every meal must take at most {preparation_time} minutes to prepare
- List ingredients with quantities and give step-by-step instructions"""


def _join(values: list[str], empty: str = "none") -> str:
    return ", ".join(values) if values else empty


def build_workout_messages(request: WorkoutRequest) -> PromptPair:
    """Build the prompts for a weekly workout plan."""
    system = WORKOUT_SYSTEM.format(
        min_exercises=MIN_EXERCISES,
        max_exercises=MAX_EXERCISES,
    )
    user = WORKOUT_USER.format(
        difficulty=request.difficulty.value,
        type=request.type.value,
        days_per_week=request.days_per_week,
        split_type=request.split_type.value,
        duration=request.duration,
        equipment=_join(request.equipment, empty="bodyweight only"),
        split_guidance=SPLIT_GUIDANCE[request.split_type],
        min_exercises=MIN_EXERCISES,
        max_exercises=MAX_EXERCISES,
    )
    return PromptPair(system=system, user=user)


def build_nutrition_messages(request: NutritionRequest) -> PromptPair:
    """Build the prompts for a daily meal plan."""
    user = NUTRITION_USER.format(
        diet_type=request.diet_type.value,
        meals_per_day=request.meals_per_day,
        target_calories=request.target_calories,
        allergies=_join(request.allergies),
        preferences=_join(request.preferences),
        preparation_time=request.preparation_time,
    )
    return PromptPair(system=NUTRITION_SYSTEM, user=user)

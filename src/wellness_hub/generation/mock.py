"""Fixed demo plans used when no provider credential is configured."""

from ..models.nutrition import MacroNutrients, Meal, MealType
from ..models.workout import Exercise
from .schema import PlannedNutrition, PlannedWorkout

MOCK_WORKOUTS = [
    PlannedWorkout(
        title="Full Body Strength Training",
        description="A comprehensive full-body workout focusing on major muscle groups",
        day_of_week=1,
        exercises=[
            Exercise(name="Push-ups", sets=3, reps=12, notes="Keep core tight, lower chest to ground"),
            Exercise(name="Bodyweight Squats", sets=3, reps=15, notes="Keep weight in heels, knees tracking over toes"),
            Exercise(name="Dumbbell Rows", sets=3, reps=12, notes="Keep back straight, squeeze shoulder blades"),
        ],
    ),
    PlannedWorkout(
        title="Lower Body Focus",
        description="Targeting legs and core muscles",
        day_of_week=3,
        exercises=[
            Exercise(name="Lunges", sets=3, reps=12, notes="Alternate legs, keep torso upright"),
            Exercise(name="Glute Bridges", sets=3, reps=15, notes="Squeeze glutes at top of movement"),
            Exercise(name="Calf Raises", sets=3, reps=20, notes="Full range of motion"),
        ],
    ),
    PlannedWorkout(
        title="Upper Body Power",
        description="Focus on upper body strength and conditioning",
        day_of_week=5,
        exercises=[
            Exercise(name="Dumbbell Press", sets=3, reps=10, notes="Control the weight throughout"),
            Exercise(name="Bent Over Rows", sets=3, reps=12, notes="Keep back straight, pull to chest"),
            Exercise(name="Lateral Raises", sets=3, reps=12, notes="Control the movement"),
        ],
    ),
]

MOCK_NUTRITION_PLAN = PlannedNutrition(
    title="Balanced Nutrition Plan",
    description="A well-balanced meal plan focused on whole foods",
    target_calories=2000,
    meals=[
        Meal(
            name="Healthy Breakfast Bowl",
            description="Nutrient-rich breakfast to start your day",
            meal_type=MealType.BREAKFAST,
            ingredients=["1 cup oatmeal", "1 banana", "2 tbsp honey", "1/4 cup almonds"],
            serving_size="1 bowl",
            macros=MacroNutrients(protein=15, carbohydrates=65, fats=12, calories=428),
            preparation_time=15,
            instructions=[
                "Cook oatmeal according to package instructions",
                "Slice banana",
                "Top with honey and almonds",
            ],
        ),
        Meal(
            name="Grilled Chicken Salad",
            description="Lean protein over mixed greens",
            meal_type=MealType.LUNCH,
            ingredients=[
                "150 g chicken breast",
                "2 cups mixed greens",
                "1/2 cup cherry tomatoes",
                "1 tbsp olive oil",
            ],
            serving_size="1 large plate",
            macros=MacroNutrients(protein=42, carbohydrates=12, fats=18, calories=390),
            preparation_time=20,
            instructions=[
                "Season and grill the chicken",
                "Toss greens and tomatoes with olive oil",
                "Slice chicken over the salad",
            ],
        ),
        Meal(
            name="Salmon with Rice and Broccoli",
            description="Omega-3 rich dinner with whole grains",
            meal_type=MealType.DINNER,
            ingredients=["150 g salmon fillet", "1 cup brown rice", "1 cup broccoli", "1 lemon"],
            serving_size="1 plate",
            macros=MacroNutrients(protein=38, carbohydrates=55, fats=20, calories=552),
            preparation_time=30,
            instructions=[
                "Cook the rice",
                "Bake salmon at 200C for 12 minutes",
                "Steam broccoli and serve with lemon",
            ],
        ),
    ],
)

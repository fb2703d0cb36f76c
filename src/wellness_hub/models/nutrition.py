"""Nutrition plan data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class MealType(str, Enum):
    """When in the day a meal is eaten."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class DietType(str, Enum):
    """Diet styles offered by the meal plan generator."""

    BALANCED = "balanced"
    LOW_CARB = "lowCarb"
    HIGH_PROTEIN = "highProtein"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    KETO = "keto"


@dataclass
class MacroNutrients:
    """Macro breakdown in grams, plus calories.

    Calories are supplied independently and are not derived from the
    gram values.
    """

    protein: float
    carbohydrates: float
    fats: float
    calories: float

    @classmethod
    def from_calories(cls, calories: int) -> "MacroNutrients":
        """Default 30/40/30 protein/carb/fat split for a calorie target."""
        return cls(
            protein=round(calories * 0.3 / 4),
            carbohydrates=round(calories * 0.4 / 4),
            fats=round(calories * 0.3 / 9),
            calories=calories,
        )

    def to_dict(self) -> dict:
        return {
            "protein": self.protein,
            "carbohydrates": self.carbohydrates,
            "fats": self.fats,
            "calories": self.calories,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MacroNutrients":
        return cls(
            protein=data["protein"],
            carbohydrates=data["carbohydrates"],
            fats=data["fats"],
            calories=data["calories"],
        )


@dataclass
class Meal:
    """A single meal with recipe details."""

    name: str
    description: str
    meal_type: MealType
    ingredients: list[str]
    serving_size: str
    macros: MacroNutrients
    preparation_time: int  # minutes
    instructions: list[str]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "meal_type": self.meal_type.value,
            "ingredients": list(self.ingredients),
            "serving_size": self.serving_size,
            "macros": self.macros.to_dict(),
            "preparation_time": self.preparation_time,
            "instructions": list(self.instructions),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Meal":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            meal_type=MealType(data["meal_type"]),
            ingredients=list(data.get("ingredients", [])),
            serving_size=data.get("serving_size", ""),
            macros=MacroNutrients.from_dict(data["macros"]),
            preparation_time=data.get("preparation_time", 0),
            instructions=list(data.get("instructions", [])),
        )


@dataclass
class NutritionPlan:
    """A daily meal plan with calorie and macro targets."""

    title: str
    description: str
    target_calories: int
    target_macros: MacroNutrients
    meals: list[Meal]
    dietary_restrictions: list[str] = field(default_factory=list)
    preferences: list[str] = field(default_factory=list)
    id: int | None = None
    user_id: int | None = None
    created_at: datetime | None = None

    @property
    def total_macros(self) -> MacroNutrients:
        """Sum of the macros of every meal."""
        return MacroNutrients(
            protein=sum(m.macros.protein for m in self.meals),
            carbohydrates=sum(m.macros.carbohydrates for m in self.meals),
            fats=sum(m.macros.fats for m in self.meals),
            calories=sum(m.macros.calories for m in self.meals),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "title": self.title,
            "description": self.description,
            "target_calories": self.target_calories,
            "target_macros": self.target_macros.to_dict(),
            "meals": [meal.to_dict() for meal in self.meals],
            "dietary_restrictions": list(self.dietary_restrictions),
            "preferences": list(self.preferences),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        user_id: int | None = None,
        created_at: datetime | None = None,
    ) -> "NutritionPlan":
        """Create from dictionary."""
        return cls(
            id=id,
            user_id=user_id,
            created_at=created_at,
            title=data["title"],
            description=data.get("description", ""),
            target_calories=data["target_calories"],
            target_macros=MacroNutrients.from_dict(data["target_macros"]),
            meals=[Meal.from_dict(m) for m in data.get("meals", [])],
            dietary_restrictions=list(data.get("dietary_restrictions", [])),
            preferences=list(data.get("preferences", [])),
        )

"""Nutrition plan domain models."""

from collections.abc import Iterator
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

MealKey = Literal["breakfast", "lunch", "dinner", "snacks"]
DayOfWeek = Literal[
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
]

MEAL_KEYS: tuple[MealKey, ...] = ("breakfast", "lunch", "dinner", "snacks")
WEEKDAYS: tuple[DayOfWeek, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Macros(_CamelModel):
    """Macronutrient split in grams."""

    protein: float
    carbs: float
    fat: float


class Meal(_CamelModel):
    """A single named meal with estimated macros."""

    name: str
    description: str
    calories: float
    protein: float
    carbs: float
    fat: float


class DailyMeals(_CamelModel):
    """The four meals of a daily plan."""

    breakfast: Meal
    lunch: Meal
    dinner: Meal
    snacks: Meal

    def items(self) -> Iterator[tuple[MealKey, Meal]]:
        """Yield meals in serving order."""
        for key in MEAL_KEYS:
            yield key, getattr(self, key)


class NutritionPlan(_CamelModel):
    """One day's generated nutrition recommendation."""

    total_calories: float
    macros: Macros
    meals: DailyMeals

    def meal_names(self) -> list[str]:
        """Return meal names in serving order."""
        return [meal.name for _, meal in self.meals.items()]


class WeeklyPlan(_CamelModel):
    """Seven daily plans keyed by weekday."""

    monday: NutritionPlan
    tuesday: NutritionPlan
    wednesday: NutritionPlan
    thursday: NutritionPlan
    friday: NutritionPlan
    saturday: NutritionPlan
    sunday: NutritionPlan

    def days(self) -> Iterator[tuple[DayOfWeek, NutritionPlan]]:
        """Yield (weekday, plan) pairs from Monday to Sunday."""
        for day in WEEKDAYS:
            yield day, getattr(self, day)

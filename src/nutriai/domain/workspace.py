"""Per-user workspace: everything persisted alongside the profile."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nutriai.domain.plans import MealKey, NutritionPlan, WeeklyPlan
from nutriai.domain.shopping import ShoppingListItem, toggle_item


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompletedMeals(_CamelModel):
    """Same-day checklist of eaten meals."""

    breakfast: bool = False
    lunch: bool = False
    dinner: bool = False
    snacks: bool = False

    def toggled(self, key: MealKey) -> "CompletedMeals":
        """Return a copy with only ``key`` flipped."""
        return self.model_copy(update={key: not getattr(self, key)})


class PlanHistoryItem(_CamelModel):
    """A previously generated plan and when it was generated."""

    date: str
    plan: NutritionPlan


class WeightEntry(_CamelModel):
    """A logged body weight."""

    date: str
    weight: float


class UserWorkspace(_CamelModel):
    """All plan, history and list data for a user.

    Every transition returns a new workspace; callers persist the whole
    record after each change.
    """

    current_plan: NutritionPlan | None = None
    plan_history: list[PlanHistoryItem] = Field(default_factory=list)
    weight_history: list[WeightEntry] = Field(default_factory=list)
    completed_meals: CompletedMeals = Field(default_factory=CompletedMeals)
    weekly_plan: WeeklyPlan | None = None
    shopping_list: list[ShoppingListItem] | None = None

    @classmethod
    def cleared(cls) -> "UserWorkspace":
        """Return an empty workspace."""
        return cls()

    def with_new_plan(self, plan: NutritionPlan, at: datetime) -> "UserWorkspace":
        """Make ``plan`` current, record it in history and reset the checklist."""
        item = PlanHistoryItem(date=at.isoformat(), plan=plan)
        return self.model_copy(
            update={
                "current_plan": plan,
                "plan_history": [item, *self.plan_history],
                "completed_meals": CompletedMeals(),
            }
        )

    def select_from_history(self, index: int) -> "UserWorkspace":
        """Make a historical plan current and reset the checklist."""
        plan = self.plan_history[index].plan
        return self.model_copy(
            update={"current_plan": plan, "completed_meals": CompletedMeals()}
        )

    def toggle_meal(self, key: MealKey) -> "UserWorkspace":
        return self.model_copy(
            update={"completed_meals": self.completed_meals.toggled(key)}
        )

    def add_weight(self, weight: float, at: datetime) -> "UserWorkspace":
        entry = WeightEntry(date=at.isoformat(), weight=weight)
        return self.model_copy(
            update={"weight_history": [*self.weight_history, entry]}
        )

    def with_weekly_plan(self, weekly_plan: WeeklyPlan | None) -> "UserWorkspace":
        return self.model_copy(update={"weekly_plan": weekly_plan})

    def with_shopping_list(
        self, shopping_list: list[ShoppingListItem] | None
    ) -> "UserWorkspace":
        return self.model_copy(update={"shopping_list": shopping_list})

    def toggle_shopping_item(self, name: str) -> "UserWorkspace":
        """Flip the completed flag of the item called ``name``."""
        if self.shopping_list is None:
            return self
        return self.with_shopping_list(toggle_item(self.shopping_list, name))

"""Models for meal image analysis results."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from nutriai.domain.plans import Macros


class MealAnalysis(BaseModel):
    """Estimated nutrition for one analyzed meal photo."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    meal_name: str
    description: str
    calories: float
    macros: Macros

"""User profile domain models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Gender = Literal["male", "female"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
Goal = Literal["lose_weight", "maintain_weight", "gain_muscle"]
DietaryPreference = Literal["none", "vegetarian", "vegan", "gluten_free"]


class UserData(BaseModel):
    """Biometric and goal data used to generate plans."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    age: int = Field(gt=0)
    gender: Gender
    weight: float = Field(gt=0)
    height: float = Field(gt=0)
    activity_level: ActivityLevel
    goal: Goal
    dietary_preference: DietaryPreference = "none"


class UserProfile(UserData):
    """Persisted user identity plus biometrics."""

    id: str
    name: str
    email: str

    def user_data(self) -> UserData:
        """Return only the biometric fields."""
        return UserData.model_validate(self.model_dump(exclude={"id", "name", "email"}))

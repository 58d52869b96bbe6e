"""Profile record mapping and persistence."""

from dataclasses import dataclass
from typing import Protocol

from nutriai.domain.auth import AuthUser
from nutriai.domain.profile import UserData, UserProfile
from nutriai.domain.workspace import UserWorkspace

_PROFILE_DEFAULTS: dict[str, object] = {
    "age": 30,
    "gender": "male",
    "weight": 70,
    "height": 175,
    "activity_level": "moderate",
    "goal": "maintain_weight",
    "dietary_preference": "none",
}

_WORKSPACE_COLUMNS = (
    "current_plan",
    "plan_history",
    "weight_history",
    "completed_meals",
    "weekly_plan",
    "shopping_list",
)


class ProfileRepository(Protocol):
    """Persistence interface for the single per-user profile record."""

    def get_profile(self, user_id: str) -> dict[str, object] | None:
        """Return the full profile row, if present."""

    def upsert_profile(self, user_id: str, row: dict[str, object]) -> None:
        """Write the full profile row."""


@dataclass
class ProfileService:
    """Loads and saves a user's profile and workspace as one record."""

    repository: ProfileRepository

    def load(self, auth_user: AuthUser) -> tuple[UserProfile, UserWorkspace]:
        """Fetch the record, falling back to defaults for missing fields."""
        row = self.repository.get_profile(auth_user.id) or {}
        return profile_from_row(auth_user, row), workspace_from_row(row)

    def save(self, profile: UserProfile, workspace: UserWorkspace) -> None:
        """Overwrite the whole record; the last writer wins."""
        self.repository.upsert_profile(profile.id, profile_to_row(profile, workspace))

    def update_user_data(
        self,
        profile: UserProfile,
        workspace: UserWorkspace,
        user_data: UserData,
        name: str | None = None,
    ) -> UserProfile:
        """Apply edited biometrics and persist them."""
        update = user_data.model_dump()
        if name:
            update["name"] = name
        updated = profile.model_copy(update=update)
        self.save(updated, workspace)
        return updated


def profile_from_row(auth_user: AuthUser, row: dict[str, object]) -> UserProfile:
    """Build the app user from an auth identity and a profile row."""
    fields = {
        key: row.get(key) or default for key, default in _PROFILE_DEFAULTS.items()
    }
    return UserProfile(
        id=auth_user.id,
        email=auth_user.email or "",
        name=str(row.get("name") or auth_user.name or ""),
        **fields,
    )


def workspace_from_row(row: dict[str, object]) -> UserWorkspace:
    """Build the workspace from the JSON columns of a profile row."""
    payload = {
        column: row[column]
        for column in _WORKSPACE_COLUMNS
        if row.get(column) is not None
    }
    return UserWorkspace.model_validate(payload)


def profile_to_row(profile: UserProfile, workspace: UserWorkspace) -> dict[str, object]:
    """Serialize profile and workspace into one full profile row."""
    data = workspace.model_dump(mode="json", by_alias=True)
    return {
        "id": profile.id,
        "name": profile.name,
        "age": profile.age,
        "gender": profile.gender,
        "weight": profile.weight,
        "height": profile.height,
        "activity_level": profile.activity_level,
        "goal": profile.goal,
        "dietary_preference": profile.dietary_preference,
        "current_plan": data["currentPlan"],
        "plan_history": data["planHistory"],
        "weight_history": data["weightHistory"],
        "completed_meals": data["completedMeals"],
        "weekly_plan": data["weeklyPlan"],
        "shopping_list": data["shoppingList"],
    }

"""Per-user workspace actions: load, mutate, save the whole record."""

import logging
from collections.abc import Awaitable, Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TypeVar

from nutriai import localization
from nutriai.domain.auth import AuthUser
from nutriai.domain.plans import MealKey
from nutriai.domain.profile import UserData, UserProfile
from nutriai.domain.vision import MealAnalysis
from nutriai.domain.workspace import UserWorkspace
from nutriai.errors import (
    MissingPrerequisiteError,
    NotFoundError,
    RequestInProgressError,
    UserFacingError,
    describe_error,
)
from nutriai.services.plans import PlanService
from nutriai.services.profiles import ProfileService
from nutriai.services.shopping import ShoppingListService
from nutriai.services.vision import MealAnalysisService

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class UserState:
    """A user's profile and workspace as last persisted."""

    profile: UserProfile
    workspace: UserWorkspace


@dataclass
class WorkspaceService:
    """Runs user actions against the profile record.

    Each user may have one outstanding AI request; its loading message is
    exposed while it runs and a second submission is rejected.
    """

    profile_service: ProfileService
    plan_service: PlanService
    analysis_service: MealAnalysisService
    shopping_service: ShoppingListService
    clock: Callable[[], datetime] = _utc_now
    _loading: dict[str, str] = field(default_factory=dict)

    def loading_message(self, user_id: str) -> str | None:
        """Return the loading message of the user's outstanding request."""
        return self._loading.get(user_id)

    def load(self, auth_user: AuthUser) -> UserState:
        """Fetch the user's full record."""
        try:
            profile, workspace = self.profile_service.load(auth_user)
        except Exception as exc:
            logger.exception("Failed to load profile", extra={"user_id": auth_user.id})
            raise UserFacingError(
                describe_error(exc, localization.ACTION_LOAD_PROFILE)
            ) from exc
        return UserState(profile=profile, workspace=workspace)

    def update_profile(
        self, auth_user: AuthUser, user_data: UserData, name: str | None = None
    ) -> UserState:
        state = self.load(auth_user)
        try:
            profile = self.profile_service.update_user_data(
                state.profile, state.workspace, user_data, name
            )
        except Exception as exc:
            logger.exception("Failed to save profile", extra={"user_id": auth_user.id})
            raise UserFacingError(
                describe_error(exc, localization.ACTION_SAVE_PROFILE)
            ) from exc
        return UserState(profile=profile, workspace=state.workspace)

    async def generate_daily_plan(
        self, auth_user: AuthUser, user_data: UserData | None = None
    ) -> UserState:
        """Generate a plan, make it current and prepend it to history."""
        with self._busy(auth_user.id, localization.LOADING_DAILY_PLAN):
            state = self.load(auth_user)
            data = user_data or state.profile.user_data()
            plan = await self._upstream(
                localization.ACTION_DAILY_PLAN, self.plan_service.generate_plan(data)
            )
            workspace = state.workspace.with_new_plan(plan, self.clock())
            return self._save(state.profile, workspace)

    async def generate_weekly_plan(
        self, auth_user: AuthUser, user_data: UserData | None = None
    ) -> UserState:
        """Replace the weekly plan; on any failure it stays empty."""
        first_message = localization.loading_weekly_day("monday")
        with self._busy(auth_user.id, first_message):
            state = self.load(auth_user)
            data = user_data or state.profile.user_data()
            workspace = state.workspace.with_weekly_plan(None).with_shopping_list(None)
            self._save(state.profile, workspace)

            def on_day(day: str) -> None:
                self._loading[auth_user.id] = localization.loading_weekly_day(day)

            weekly_plan = await self._upstream(
                localization.ACTION_WEEKLY_PLAN,
                self.plan_service.generate_weekly_plan(data, on_day=on_day),
            )
            return self._save(state.profile, workspace.with_weekly_plan(weekly_plan))

    async def generate_shopping_list(self, auth_user: AuthUser) -> UserState:
        """Derive the shopping list from the current weekly plan."""
        with self._busy(auth_user.id, localization.LOADING_SHOPPING_LIST):
            state = self.load(auth_user)
            weekly_plan = state.workspace.weekly_plan
            if weekly_plan is None:
                raise MissingPrerequisiteError(localization.NO_WEEKLY_PLAN)
            workspace = state.workspace.with_shopping_list(None)
            self._save(state.profile, workspace)
            items = await self._upstream(
                localization.ACTION_SHOPPING_LIST,
                self.shopping_service.generate(weekly_plan),
            )
            return self._save(state.profile, workspace.with_shopping_list(items))

    async def analyze_images(
        self, auth_user: AuthUser, images: Sequence[bytes]
    ) -> list[MealAnalysis]:
        """Estimate nutrition for meal photos; results are not persisted."""
        if not images:
            raise MissingPrerequisiteError(localization.NO_IMAGES)
        with self._busy(auth_user.id, localization.LOADING_ANALYSIS):
            return await self._upstream(
                localization.ACTION_ANALYSIS, self.analysis_service.analyze(images)
            )

    def select_plan_from_history(self, auth_user: AuthUser, index: int) -> UserState:
        state = self.load(auth_user)
        if not 0 <= index < len(state.workspace.plan_history):
            raise NotFoundError(localization.NO_PLAN_HISTORY_ITEM)
        return self._save(state.profile, state.workspace.select_from_history(index))

    def add_weight(self, auth_user: AuthUser, weight: float) -> UserState:
        state = self.load(auth_user)
        return self._save(
            state.profile, state.workspace.add_weight(weight, self.clock())
        )

    def toggle_meal(self, auth_user: AuthUser, key: MealKey) -> UserState:
        state = self.load(auth_user)
        return self._save(state.profile, state.workspace.toggle_meal(key))

    def toggle_shopping_item(self, auth_user: AuthUser, name: str) -> UserState:
        state = self.load(auth_user)
        return self._save(state.profile, state.workspace.toggle_shopping_item(name))

    @contextmanager
    def _busy(self, user_id: str, message: str) -> Iterator[None]:
        if user_id in self._loading:
            raise RequestInProgressError(localization.REQUEST_IN_PROGRESS)
        self._loading[user_id] = message
        try:
            yield
        finally:
            self._loading.pop(user_id, None)

    async def _upstream(self, action: str, request: Awaitable[T]) -> T:
        try:
            return await request
        except Exception as exc:
            logger.exception("AI request failed", extra={"action": action})
            raise UserFacingError(describe_error(exc, action)) from exc

    def _save(self, profile: UserProfile, workspace: UserWorkspace) -> UserState:
        try:
            self.profile_service.save(profile, workspace)
        except Exception as exc:
            logger.exception("Failed to save profile", extra={"user_id": profile.id})
            raise UserFacingError(
                describe_error(exc, localization.ACTION_SAVE_PROFILE)
            ) from exc
        return UserState(profile=profile, workspace=workspace)

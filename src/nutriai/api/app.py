"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Body, Depends, FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

from nutriai.api.auth import require_user
from nutriai.api.auth import router as auth_router
from nutriai.api.models import (
    ChatMessageRequest,
    ProfileUpdateRequest,
    ShoppingItemToggleRequest,
    WeightRequest,
    serialize_state,
)
from nutriai.app_logging import configure_logging
from nutriai.config import parse_allowed_origins
from nutriai.containers import AppContainer
from nutriai.domain.auth import AuthUser
from nutriai.domain.plans import MealKey
from nutriai.domain.profile import UserData
from nutriai.errors import UserFacingError
from nutriai.services.workspace import UserState


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    allowed_origins = parse_allowed_origins(container.settings.cors_allowed_origins)
    if allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_methods=["*"],
            allow_headers=["Authorization", "Content-Type"],
        )

    app.include_router(auth_router)

    @app.exception_handler(UserFacingError)
    async def user_facing_error(request: Request, exc: UserFacingError) -> JSONResponse:
        logger.info(
            "Request failed",
            extra={"path": request.url.path, "status": exc.status_code},
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    def render(state: UserState) -> dict[str, object]:
        loading = container.workspace_service.loading_message(state.profile.id)
        return serialize_state(state, loading)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/me")
    async def me(user: AuthUser = Depends(require_user)) -> dict[str, object]:
        """Return the user's profile, workspace and pending loading message."""
        return render(container.workspace_service.load(user))

    @app.put("/me/profile")
    async def update_profile(
        payload: ProfileUpdateRequest, user: AuthUser = Depends(require_user)
    ) -> dict[str, object]:
        """Save edited biometrics."""
        user_data = UserData.model_validate(payload.model_dump(exclude={"name"}))
        state = container.workspace_service.update_profile(
            user, user_data, payload.name
        )
        return render(state)

    @app.post("/plans/daily")
    async def generate_daily_plan(
        payload: UserData | None = Body(default=None),
        user: AuthUser = Depends(require_user),
    ) -> dict[str, object]:
        """Generate a daily plan from the submitted or stored biometrics."""
        state = await container.workspace_service.generate_daily_plan(user, payload)
        return render(state)

    @app.post("/plans/weekly")
    async def generate_weekly_plan(
        payload: UserData | None = Body(default=None),
        user: AuthUser = Depends(require_user),
    ) -> dict[str, object]:
        """Generate a plan for each day from Monday to Sunday."""
        state = await container.workspace_service.generate_weekly_plan(user, payload)
        return render(state)

    @app.get("/plans/history")
    async def plan_history(user: AuthUser = Depends(require_user)) -> dict[str, object]:
        """Return previously generated plans, newest first."""
        state = container.workspace_service.load(user)
        return {
            "history": [
                item.model_dump(mode="json", by_alias=True)
                for item in state.workspace.plan_history
            ]
        }

    @app.post("/plans/history/{index}/select")
    async def select_history_plan(
        index: int, user: AuthUser = Depends(require_user)
    ) -> dict[str, object]:
        """Make a historical plan the current one."""
        return render(container.workspace_service.select_plan_from_history(user, index))

    @app.post("/meals/{meal}/toggle")
    async def toggle_meal(
        meal: MealKey, user: AuthUser = Depends(require_user)
    ) -> dict[str, object]:
        """Flip one meal's completed flag."""
        return render(container.workspace_service.toggle_meal(user, meal))

    @app.post("/weights")
    async def add_weight(
        payload: WeightRequest, user: AuthUser = Depends(require_user)
    ) -> dict[str, object]:
        """Log a body weight."""
        return render(container.workspace_service.add_weight(user, payload.weight))

    @app.post("/shopping-list")
    async def generate_shopping_list(
        user: AuthUser = Depends(require_user),
    ) -> dict[str, object]:
        """Derive the shopping list from the weekly plan."""
        state = await container.workspace_service.generate_shopping_list(user)
        return render(state)

    @app.post("/shopping-list/items/toggle")
    async def toggle_shopping_item(
        payload: ShoppingItemToggleRequest, user: AuthUser = Depends(require_user)
    ) -> dict[str, object]:
        """Flip one shopping list item's completed flag."""
        state = container.workspace_service.toggle_shopping_item(user, payload.name)
        return render(state)

    @app.post("/analysis")
    async def analyze_meals(
        files: list[UploadFile] = File(...),
        user: AuthUser = Depends(require_user),
    ) -> dict[str, object]:
        """Estimate nutrition for uploaded meal photos."""
        images = [await upload.read() for upload in files]
        analyses = await container.workspace_service.analyze_images(user, images)
        return {
            "analyses": [
                analysis.model_dump(mode="json", by_alias=True)
                for analysis in analyses
            ]
        }

    @app.get("/chat")
    async def open_chat(user: AuthUser = Depends(require_user)) -> dict[str, object]:
        """Open (or reuse) the assistant session for the current plan."""
        state = container.workspace_service.load(user)
        session = await container.chat_sessions.open(
            state.profile, state.workspace.current_plan
        )
        return {
            "messages": [
                message.model_dump(mode="json")
                for message in session.visible_messages()
            ]
        }

    @app.post("/chat/messages")
    async def send_chat_message(
        payload: ChatMessageRequest, user: AuthUser = Depends(require_user)
    ) -> StreamingResponse:
        """Send a message and stream the assistant's reply as plain text."""
        state = container.workspace_service.load(user)
        session = await container.chat_sessions.open(
            state.profile, state.workspace.current_plan
        )
        chat_service = container.chat_sessions.chat_service
        return StreamingResponse(
            chat_service.send_message(session, payload.text),
            media_type="text/plain; charset=utf-8",
        )

    return app

"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import ClientOptions, create_client

from nutriai.adapters.openai_generative_client import OpenAIGenerativeClient
from nutriai.adapters.supabase_auth_client import SupabaseAuthClient
from nutriai.adapters.supabase_profile_repository import SupabaseProfileRepository
from nutriai.config import Settings
from nutriai.domain.auth import AuthSession
from nutriai.services.auth import AuthService
from nutriai.services.chat import ChatService, ChatSessionRegistry
from nutriai.services.plans import PlanService
from nutriai.services.profiles import ProfileService
from nutriai.services.shopping import ShoppingListService
from nutriai.services.vision import MealAnalysisService
from nutriai.services.workspace import WorkspaceService

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    profile_service: ProfileService
    workspace_service: WorkspaceService
    chat_sessions: ChatSessionRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    data_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    auth_client = create_client(
        resolved_settings.supabase_url,
        resolved_settings.supabase_anon_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
    auth_service = AuthService(SupabaseAuthClient(auth_client))
    profile_service = ProfileService(
        SupabaseProfileRepository(
            data_client, table_name=resolved_settings.profiles_table
        )
    )
    generative_client = OpenAIGenerativeClient.create(
        resolved_settings.openai_api_key,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    model = resolved_settings.openai_model
    workspace_service = WorkspaceService(
        profile_service=profile_service,
        plan_service=PlanService(client=generative_client, model=model),
        analysis_service=MealAnalysisService(client=generative_client, model=model),
        shopping_service=ShoppingListService(client=generative_client, model=model),
    )
    chat_sessions = ChatSessionRegistry(
        ChatService(client=generative_client, model=model),
        idle_timeout=timedelta(minutes=resolved_settings.chat_idle_timeout_minutes),
    )
    subscription = auth_service.subscribe(_log_auth_event)

    async def close_resources() -> None:
        subscription.unsubscribe()
        await generative_client.client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        profile_service=profile_service,
        workspace_service=workspace_service,
        chat_sessions=chat_sessions,
        close_resources=close_resources,
    )


def _log_auth_event(event: str, session: AuthSession | None) -> None:
    user_id = session.user.id if session else None
    logger.info("Auth state changed: %s", event, extra={"user_id": user_id})

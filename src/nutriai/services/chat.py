"""Conversational nutrition assistant."""

import hashlib
import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from nutriai import localization
from nutriai.domain.chat import ChatMessage, ChatSession, ChatSessionKey
from nutriai.domain.plans import NutritionPlan
from nutriai.domain.profile import UserProfile
from nutriai.services.generation import GenerativeClient

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def build_system_instruction(user: UserProfile, plan: NutritionPlan | None) -> str:
    """Embed the user's profile and current plan in the assistant instruction."""
    if plan is not None:
        plan_context = (
            "Este é o plano nutricional diário atual do utilizador:\n"
            f"{plan.model_dump_json(by_alias=True, indent=2)}"
        )
    else:
        plan_context = "O utilizador ainda não gerou um plano nutricional."
    return (
        "És um assistente de nutrição simpático e prestável chamado NutriAI.\n"
        "O teu objetivo é ajudar o utilizador a seguir o seu plano, responder a "
        "perguntas sobre nutrição e dar sugestões.\n"
        "Comunica em português de Portugal. As tuas respostas devem ser "
        "concisas e fáceis de entender.\n\n"
        "Este é o perfil do utilizador atual:\n"
        f"- Nome: {user.name}\n"
        f"- Idade: {user.age}\n"
        f"- Sexo: {localization.GENDER_LABELS[user.gender]}\n"
        f"- Peso: {user.weight:g} kg\n"
        f"- Altura: {user.height:g} cm\n"
        f"- Objetivo: {localization.GOAL_NOUNS[user.goal]}\n\n"
        f"{plan_context}\n\n"
        "Usa esta informação para dar respostas personalizadas e contextuais.\n"
        "Se o utilizador pedir para alterar o plano, explica que não podes "
        "alterar o plano principal, mas podes dar sugestões de substituições ou "
        "alternativas para refeições específicas.\n"
        "Começa a conversa com uma saudação amigável."
    )


def session_key(user: UserProfile, plan: NutritionPlan | None) -> ChatSessionKey:
    """Identity of the (user, plan) pair a session was opened for."""
    return ChatSessionKey(
        user_id=user.id,
        profile_fingerprint=_fingerprint(user.model_dump_json()),
        plan_fingerprint=_fingerprint(plan.model_dump_json()) if plan else None,
    )


def _fingerprint(payload: str) -> str:
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


@dataclass
class ChatService:
    """Streams assistant replies into a session's growing transcript."""

    client: GenerativeClient
    model: str

    def start(self, user: UserProfile, plan: NutritionPlan | None) -> ChatSession:
        """Create a new session seeded with the user's context."""
        return ChatSession(
            key=session_key(user, plan),
            instructions=build_system_instruction(user, plan),
        )

    async def send_message(
        self, session: ChatSession, text: str, *, hidden: bool = False
    ) -> AsyncIterator[str]:
        """Send ``text`` and yield the reply as it streams in.

        The first non-empty chunk creates a model message; later chunks are
        appended to it. A failed turn appends an apology instead of raising.
        """
        if not text.strip():
            return
        session.messages.append(ChatMessage(role="user", text=text, hidden=hidden))
        reply: ChatMessage | None = None
        try:
            async for chunk in self.client.stream(
                model=self.model,
                instructions=session.instructions,
                messages=list(session.messages),
            ):
                if not chunk:
                    continue
                if reply is None:
                    reply = ChatMessage(role="model", text=chunk)
                    session.messages.append(reply)
                else:
                    reply.text += chunk
                yield chunk
        except Exception:
            logger.exception(
                "Chat turn failed", extra={"user_id": session.key.user_id}
            )
            session.messages.append(
                ChatMessage(role="model", text=localization.CHAT_ERROR)
            )
            yield localization.CHAT_ERROR

    async def greet(self, session: ChatSession) -> None:
        """Open the conversation with a hidden greeting."""
        async for _ in self.send_message(
            session, localization.CHAT_GREETING, hidden=True
        ):
            pass


@dataclass
class ChatSessionRegistry:
    """Holds one chat session per user, recreated when its identity changes."""

    chat_service: ChatService
    idle_timeout: timedelta = timedelta(hours=12)
    clock: Callable[[], datetime] = _utc_now
    _sessions: dict[str, ChatSession] = field(default_factory=dict)
    _last_seen: dict[str, datetime] = field(default_factory=dict)

    async def open(
        self, user: UserProfile, plan: NutritionPlan | None
    ) -> ChatSession:
        """Return the user's session, starting a fresh one if user or plan changed."""
        now = self.clock()
        self._evict_idle(now)
        self._last_seen[user.id] = now
        key = session_key(user, plan)
        existing = self._sessions.get(user.id)
        if existing is not None and existing.key == key:
            return existing
        session = self.chat_service.start(user, plan)
        self._sessions[user.id] = session
        await self.chat_service.greet(session)
        return session

    def discard(self, user_id: str) -> None:
        """Drop a user's session, e.g. on logout."""
        self._sessions.pop(user_id, None)
        self._last_seen.pop(user_id, None)

    def _evict_idle(self, now: datetime) -> None:
        # Sessions of users whose token expired are never discarded explicitly.
        cutoff = now - self.idle_timeout
        for user_id, seen in list(self._last_seen.items()):
            if seen < cutoff:
                logger.info("Dropping idle chat session", extra={"user_id": user_id})
                self.discard(user_id)

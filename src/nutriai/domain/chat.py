"""Chat assistant domain models."""

from dataclasses import dataclass, field
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field

ChatRole = Literal["user", "model"]


class ChatMessage(BaseModel):
    """A single message in the assistant conversation."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    role: ChatRole
    text: str
    # Sent to the model but never shown, e.g. the opening greeting.
    hidden: bool = Field(default=False, exclude=True)


@dataclass(frozen=True)
class ChatSessionKey:
    """Identity of a chat session: the user and the plan it was seeded with."""

    user_id: str
    profile_fingerprint: str
    plan_fingerprint: str | None


@dataclass
class ChatSession:
    """A stateful conversation seeded with a system instruction."""

    key: ChatSessionKey
    instructions: str
    messages: list[ChatMessage] = field(default_factory=list)

    def visible_messages(self) -> list[ChatMessage]:
        """Return the messages shown to the user."""
        return [message for message in self.messages if not message.hidden]

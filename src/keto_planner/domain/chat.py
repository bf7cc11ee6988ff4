"""Chat domain models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

DEFAULT_THREAD_TITLE = "Keto Chat"


@dataclass(frozen=True)
class ChatThread:
    """A conversation with the keto assistant."""

    id: UUID
    title: str
    created_at: datetime


@dataclass(frozen=True)
class ChatMessage:
    """A single message in a chat thread."""

    id: UUID
    thread_id: UUID
    text: str
    user_message: bool
    created_at: datetime

"""Chat threads with the keto assistant and the ``netcarbs`` directive."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from keto_planner.domain.chat import DEFAULT_THREAD_TITLE, ChatMessage, ChatThread
from keto_planner.services.assistant import AssistantService, AssistantUnavailableError
from keto_planner.services.carbs import CarbsService
from keto_planner.services.directives import (
    DIRECTIVE_KEYWORD,
    format_net_carbs_reply,
    parse_net_carbs_directive,
    snack_prompt,
)

NO_ASSISTANT_REPLY = (
    f"Send '{DIRECTIVE_KEYWORD} <total> <fiber> <polyols>' in grams "
    "to compute net carbs."
)

_logger = logging.getLogger(__name__)


class ChatThreadNotFoundError(LookupError):
    """Raised when a chat thread does not exist."""


class ChatRepository(Protocol):
    """Persistence interface for chat threads and messages."""

    def create_thread(self, title: str) -> ChatThread:
        """Create a thread and return it."""

    def list_threads(self) -> list[ChatThread]:
        """Return threads, newest first."""

    def get_thread(self, thread_id: UUID) -> ChatThread | None:
        """Return a thread by id, if present."""

    def rename_thread(self, thread_id: UUID, title: str) -> ChatThread | None:
        """Rename a thread and return it, or None when missing."""

    def delete_thread(self, thread_id: UUID) -> bool:
        """Delete a thread with its messages; return False when missing."""

    def add_message(
        self, thread_id: UUID, text: str, *, user_message: bool
    ) -> ChatMessage:
        """Append a message to a thread."""

    def list_messages(self, thread_id: UUID) -> list[ChatMessage]:
        """Return a thread's messages, oldest first."""


@dataclass
class ChatService:
    """Service for chat threads and assistant replies."""

    repository: ChatRepository
    carbs_service: CarbsService
    assistant: AssistantService | None = None

    def create_thread(self, title: str | None = None) -> ChatThread:
        """Create a thread, defaulting the title."""
        return self.repository.create_thread(title or DEFAULT_THREAD_TITLE)

    def list_threads(self) -> list[ChatThread]:
        return self.repository.list_threads()

    def rename_thread(self, thread_id: UUID, title: str) -> ChatThread:
        """Rename a thread."""
        thread = self.repository.rename_thread(thread_id, title)
        if thread is None:
            raise ChatThreadNotFoundError(str(thread_id))
        return thread

    def delete_thread(self, thread_id: UUID) -> None:
        """Delete a thread and its messages."""
        if not self.repository.delete_thread(thread_id):
            raise ChatThreadNotFoundError(str(thread_id))

    def list_messages(self, thread_id: UUID) -> list[ChatMessage]:
        """Return a thread's messages."""
        self._require_thread(thread_id)
        return self.repository.list_messages(thread_id)

    async def send_message(
        self, thread_id: UUID, text: str
    ) -> tuple[ChatMessage, ChatMessage]:
        """Store a user message and the assistant's reply.

        A ``netcarbs`` directive is answered locally; the assistant only adds
        a snack suggestion. Other text goes to the assistant as is.
        """
        self._require_thread(thread_id)
        user_message = self.repository.add_message(thread_id, text, user_message=True)
        reply_text = await self._reply_to(text)
        reply = self.repository.add_message(thread_id, reply_text, user_message=False)
        return user_message, reply

    async def _reply_to(self, text: str) -> str:
        directive = parse_net_carbs_directive(text)
        if directive is None:
            if self.assistant is None:
                return NO_ASSISTANT_REPLY
            return await self.assistant.reply(text)

        result = self.carbs_service.calculate(*directive)
        reply = format_net_carbs_reply(*directive, result.net_carbs_g)
        if self.assistant is None:
            return reply
        try:
            suggestion = await self.assistant.reply(snack_prompt(result.net_carbs_g))
        except AssistantUnavailableError:
            _logger.exception("Snack suggestion failed")
            return reply
        return f"{reply}\n{suggestion}"

    def _require_thread(self, thread_id: UUID) -> None:
        if self.repository.get_thread(thread_id) is None:
            raise ChatThreadNotFoundError(str(thread_id))

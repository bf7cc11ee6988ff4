"""Supabase repository for chat threads and messages."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from keto_planner.domain.chat import ChatMessage, ChatThread
from keto_planner.services.chat import ChatRepository

_THREAD_COLUMNS = "id, title, created_at"
_MESSAGE_COLUMNS = "id, thread_id, text, user_message, created_at"


@dataclass
class SupabaseChatRepository(ChatRepository):
    """Supabase implementation for chat threads."""

    client: Client

    def create_thread(self, title: str) -> ChatThread:
        """Insert a thread row and return it."""
        response = (
            self.client.table("chat_threads").insert({"title": title}).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create chat thread")
        return _thread_from_row(response.data[0])

    def list_threads(self) -> list[ChatThread]:
        response = (
            self.client.table("chat_threads")
            .select(_THREAD_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_thread_from_row(row) for row in response.data or []]

    def get_thread(self, thread_id: UUID) -> ChatThread | None:
        response = (
            self.client.table("chat_threads")
            .select(_THREAD_COLUMNS)
            .eq("id", str(thread_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _thread_from_row(response.data[0])

    def rename_thread(self, thread_id: UUID, title: str) -> ChatThread | None:
        response = (
            self.client.table("chat_threads")
            .update({"title": title})
            .eq("id", str(thread_id))
            .execute()
        )
        if not response.data:
            return None
        return _thread_from_row(response.data[0])

    def delete_thread(self, thread_id: UUID) -> bool:
        """Delete messages first, then the thread row."""
        self.client.table("chat_messages").delete().eq(
            "thread_id", str(thread_id)
        ).execute()
        response = (
            self.client.table("chat_threads")
            .delete()
            .eq("id", str(thread_id))
            .execute()
        )
        return bool(response.data)

    def add_message(
        self, thread_id: UUID, text: str, *, user_message: bool
    ) -> ChatMessage:
        """Insert a message row and return it."""
        response = (
            self.client.table("chat_messages")
            .insert(
                {
                    "thread_id": str(thread_id),
                    "text": text,
                    "user_message": user_message,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to store chat message")
        return _message_from_row(response.data[0])

    def list_messages(self, thread_id: UUID) -> list[ChatMessage]:
        response = (
            self.client.table("chat_messages")
            .select(_MESSAGE_COLUMNS)
            .eq("thread_id", str(thread_id))
            .order("created_at")
            .execute()
        )
        return [_message_from_row(row) for row in response.data or []]


def _thread_from_row(row: dict[str, object]) -> ChatThread:
    return ChatThread(
        id=UUID(str(row["id"])),
        title=str(row["title"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )


def _message_from_row(row: dict[str, object]) -> ChatMessage:
    return ChatMessage(
        id=UUID(str(row["id"])),
        thread_id=UUID(str(row["thread_id"])),
        text=str(row["text"]),
        user_message=bool(row["user_message"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )

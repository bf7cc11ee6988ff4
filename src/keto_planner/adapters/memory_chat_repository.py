"""Process-local chat repository used when Supabase is not configured."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from keto_planner.domain.chat import ChatMessage, ChatThread
from keto_planner.services.chat import ChatRepository


@dataclass
class InMemoryChatRepository(ChatRepository):
    """Chat threads kept in memory for the life of the process."""

    threads: dict[UUID, ChatThread] = field(default_factory=dict)
    messages: dict[UUID, list[ChatMessage]] = field(default_factory=dict)

    def create_thread(self, title: str) -> ChatThread:
        thread = ChatThread(id=uuid4(), title=title, created_at=datetime.now(tz=UTC))
        self.threads[thread.id] = thread
        self.messages[thread.id] = []
        return thread

    def list_threads(self) -> list[ChatThread]:
        return sorted(
            self.threads.values(), key=lambda thread: thread.created_at, reverse=True
        )

    def get_thread(self, thread_id: UUID) -> ChatThread | None:
        return self.threads.get(thread_id)

    def rename_thread(self, thread_id: UUID, title: str) -> ChatThread | None:
        thread = self.threads.get(thread_id)
        if thread is None:
            return None
        renamed = ChatThread(id=thread.id, title=title, created_at=thread.created_at)
        self.threads[thread_id] = renamed
        return renamed

    def delete_thread(self, thread_id: UUID) -> bool:
        self.messages.pop(thread_id, None)
        return self.threads.pop(thread_id, None) is not None

    def add_message(
        self, thread_id: UUID, text: str, *, user_message: bool
    ) -> ChatMessage:
        message = ChatMessage(
            id=uuid4(),
            thread_id=thread_id,
            text=text,
            user_message=user_message,
            created_at=datetime.now(tz=UTC),
        )
        self.messages.setdefault(thread_id, []).append(message)
        return message

    def list_messages(self, thread_id: UUID) -> list[ChatMessage]:
        return list(self.messages.get(thread_id, []))

"""Tests for the Supabase chat repository."""

from dataclasses import dataclass, field
from uuid import uuid4

from keto_planner.adapters.supabase_chat_repository import SupabaseChatRepository


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    executed: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.executed.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _thread_row(thread_id: str, title: str = "Keto Chat") -> dict[str, object]:
    return {"id": thread_id, "title": title, "created_at": "2026-01-05T08:30:00+00:00"}


def test_thread_roundtrip() -> None:
    client = FakeSupabaseClient()
    threads = client.table("chat_threads")
    thread_id = str(uuid4())
    threads.queue("insert", [_thread_row(thread_id)])
    threads.queue("select", [_thread_row(thread_id)])
    threads.queue("update", [_thread_row(thread_id, "Dinner")])

    repository = SupabaseChatRepository(client)
    created = repository.create_thread("Keto Chat")
    fetched = repository.get_thread(created.id)
    renamed = repository.rename_thread(created.id, "Dinner")

    assert str(created.id) == thread_id
    assert created.created_at.year == 2026
    assert fetched == created
    assert renamed is not None
    assert renamed.title == "Dinner"
    assert threads.last_payload == {"title": "Dinner"}


def test_rename_missing_thread_returns_none() -> None:
    repository = SupabaseChatRepository(FakeSupabaseClient())

    assert repository.rename_thread(uuid4(), "x") is None
    assert repository.get_thread(uuid4()) is None


def test_delete_thread_removes_messages_first() -> None:
    client = FakeSupabaseClient()
    thread_id = uuid4()
    client.table("chat_threads").queue("delete", [_thread_row(str(thread_id))])

    repository = SupabaseChatRepository(client)

    assert repository.delete_thread(thread_id) is True
    assert client.table("chat_messages").last_filters == [
        ("thread_id", str(thread_id))
    ]
    assert client.table("chat_messages").executed == ["delete"]
    assert repository.delete_thread(thread_id) is False


def test_messages_roundtrip() -> None:
    client = FakeSupabaseClient()
    messages = client.table("chat_messages")
    thread_id = uuid4()
    row = {
        "id": str(uuid4()),
        "thread_id": str(thread_id),
        "text": "netcarbs 30 5 10",
        "user_message": True,
        "created_at": "2026-01-05T08:31:00.123456+00:00",
    }
    messages.queue("insert", [row])
    messages.queue("select", [row])

    repository = SupabaseChatRepository(client)
    stored = repository.add_message(thread_id, "netcarbs 30 5 10", user_message=True)
    listed = repository.list_messages(thread_id)

    assert messages.last_payload == {
        "thread_id": str(thread_id),
        "text": "netcarbs 30 5 10",
        "user_message": True,
    }
    assert listed == [stored]
    assert stored.user_message is True

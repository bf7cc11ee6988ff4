"""Chat thread and ``netcarbs`` directive endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Request, Response, status

from keto_planner.api.models import (
    MAX_GRAMS,
    DirectiveRequest,
    DirectiveResponse,
    ExchangeResponse,
    MessageRequest,
    MessageResponse,
    NetCarbsResponse,
    NewThreadRequest,
    ThreadRequest,
    ThreadResponse,
)
from keto_planner.services.assistant import AssistantUnavailableError
from keto_planner.services.chat import ChatThreadNotFoundError
from keto_planner.services.directives import (
    format_net_carbs_reply,
    parse_net_carbs_directive,
)

if TYPE_CHECKING:
    from keto_planner.containers import AppContainer

router = APIRouter(prefix="/chat", tags=["chat"])

_logger = logging.getLogger(__name__)


@router.post("/directive")
async def net_carbs_directive(
    body: DirectiveRequest, request: Request
) -> DirectiveResponse:
    """Evaluate ``netcarbs <total> <fiber> <polyols>`` without a thread."""
    container: AppContainer = request.app.state.container
    directive = parse_net_carbs_directive(body.text)
    if directive is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Expected 'netcarbs <total> <fiber> <polyols>'",
        )
    if any(abs(value) > MAX_GRAMS for value in directive):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Gram values must be within ±{MAX_GRAMS:g}",
        )
    result = container.carbs_service.calculate(*directive)
    return DirectiveResponse(
        **NetCarbsResponse.from_result(result).model_dump(),
        reply=format_net_carbs_reply(*directive, result.net_carbs_g),
    )


@router.get("/threads")
async def list_threads(request: Request) -> dict[str, list[ThreadResponse]]:
    """Return chat threads, newest first."""
    container: AppContainer = request.app.state.container
    threads = container.chat_service.list_threads()
    return {"threads": [ThreadResponse.from_thread(thread) for thread in threads]}


@router.post("/threads", status_code=status.HTTP_201_CREATED)
async def create_thread(
    request: Request, body: NewThreadRequest | None = None
) -> ThreadResponse:
    """Start a new chat thread, titled "Keto Chat" unless named."""
    container: AppContainer = request.app.state.container
    thread = container.chat_service.create_thread(body.title if body else None)
    return ThreadResponse.from_thread(thread)


@router.patch("/threads/{thread_id}")
async def rename_thread(
    thread_id: UUID, body: ThreadRequest, request: Request
) -> ThreadResponse:
    """Rename a chat thread."""
    container: AppContainer = request.app.state.container
    try:
        thread = container.chat_service.rename_thread(thread_id, body.title)
    except ChatThreadNotFoundError as exc:
        raise _thread_not_found() from exc
    return ThreadResponse.from_thread(thread)


@router.delete("/threads/{thread_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_thread(thread_id: UUID, request: Request) -> Response:
    """Delete a chat thread with its messages."""
    container: AppContainer = request.app.state.container
    try:
        container.chat_service.delete_thread(thread_id)
    except ChatThreadNotFoundError as exc:
        raise _thread_not_found() from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/threads/{thread_id}/messages")
async def list_messages(
    thread_id: UUID, request: Request
) -> dict[str, list[MessageResponse]]:
    """Return a thread's messages, oldest first."""
    container: AppContainer = request.app.state.container
    try:
        messages = container.chat_service.list_messages(thread_id)
    except ChatThreadNotFoundError as exc:
        raise _thread_not_found() from exc
    return {"messages": [MessageResponse.from_message(m) for m in messages]}


@router.post("/threads/{thread_id}/messages")
async def send_message(
    thread_id: UUID, body: MessageRequest, request: Request
) -> ExchangeResponse:
    """Post a user message and return it with the assistant's reply."""
    container: AppContainer = request.app.state.container
    try:
        message, reply = await container.chat_service.send_message(
            thread_id, body.text
        )
    except ChatThreadNotFoundError as exc:
        raise _thread_not_found() from exc
    except AssistantUnavailableError as exc:
        _logger.exception("Assistant reply failed")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Assistant unavailable",
        ) from exc
    return ExchangeResponse(
        message=MessageResponse.from_message(message),
        reply=MessageResponse.from_message(reply),
    )


def _thread_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="Chat thread not found"
    )

"""Tests for container wiring."""

import asyncio

from keto_planner.adapters.memory_chat_repository import InMemoryChatRepository
from keto_planner.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.nutrition_service is not None
    assert container.carbs_service.meal_limit_g == 20.0
    assert isinstance(container.chat_service.repository, InMemoryChatRepository)
    assert container.chat_service.assistant is None
    asyncio.run(container.close_resources())


def test_build_container_uses_configured_limit(settings) -> None:
    settings.meal_net_carbs_limit_g = 30.0
    container = build_container(settings)
    assert container.carbs_service.meal_limit_g == 30.0
    assert container.chat_service.carbs_service.meal_limit_g == 30.0
    asyncio.run(container.close_resources())


def test_build_container_with_openai_key(settings) -> None:
    settings.openai_api_key = "openai-key"
    container = build_container(settings)
    assert container.chat_service.assistant is not None
    assert container.chat_service.assistant.model == settings.openai_model
    asyncio.run(container.close_resources())

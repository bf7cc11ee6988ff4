"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from keto_planner.adapters.fdc_client import HttpxFdcClient
from keto_planner.adapters.memory_chat_repository import InMemoryChatRepository
from keto_planner.adapters.openai_assistant_client import OpenAIAssistantClient
from keto_planner.adapters.supabase_chat_repository import SupabaseChatRepository
from keto_planner.config import Settings
from keto_planner.services.assistant import AssistantService
from keto_planner.services.cache import MonotonicTtlCache
from keto_planner.services.carbs import CarbsService
from keto_planner.services.chat import ChatRepository, ChatService
from keto_planner.services.nutrition import NutritionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    carbs_service: CarbsService
    nutrition_service: NutritionService
    chat_service: ChatService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=MonotonicTtlCache(),
    )
    carbs_service = CarbsService(meal_limit_g=resolved_settings.meal_net_carbs_limit_g)

    chat_repository: ChatRepository
    if resolved_settings.supabase_url and resolved_settings.supabase_service_key:
        chat_repository = SupabaseChatRepository(
            create_client(
                resolved_settings.supabase_url, resolved_settings.supabase_service_key
            )
        )
    else:
        chat_repository = InMemoryChatRepository()

    openai_client = None
    assistant = None
    if resolved_settings.openai_api_key:
        openai_client = OpenAIAssistantClient.create(resolved_settings.openai_api_key)
        assistant = AssistantService(
            client=openai_client,
            model=resolved_settings.openai_model,
            store=resolved_settings.openai_store,
        )
    chat_service = ChatService(
        repository=chat_repository,
        carbs_service=carbs_service,
        assistant=assistant,
    )

    async def close_resources() -> None:
        await fdc_client.close()
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        carbs_service=carbs_service,
        nutrition_service=nutrition_service,
        chat_service=chat_service,
        close_resources=close_resources,
    )

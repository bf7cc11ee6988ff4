"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from keto_planner.adapters.fdc_client import FdcClient
from keto_planner.adapters.memory_chat_repository import InMemoryChatRepository
from keto_planner.config import Settings
from keto_planner.containers import AppContainer
from keto_planner.services.assistant import AssistantClient, AssistantService
from keto_planner.services.cache import MonotonicTtlCache
from keto_planner.services.carbs import CarbsService
from keto_planner.services.chat import ChatService
from keto_planner.services.nutrition import NutritionService


def almond_flour_payload(fdc_id: int = 2262223) -> dict[str, object]:
    """Food details payload shaped like FDC's /food/{id} response."""
    return {
        "fdcId": fdc_id,
        "description": "Almond flour, blanched",
        "brandOwner": "Bob's Red Mill",
        "brandName": None,
        "dataType": "Branded",
        "servingSize": 28,
        "servingSizeUnit": "g",
        "foodNutrients": [
            {"nutrient": {"id": 1005, "number": "205"}, "amount": 21.4},
            {"nutrient": {"id": 1079, "number": "291"}, "amount": 10.7},
            {"nutrient": {"id": 1086, "number": "299"}, "amount": 0},
        ],
    }


def almond_flour_search_hit() -> dict[str, object]:
    """Search hit shaped like FDC's /foods/search response."""
    return {
        "fdcId": 2262223,
        "description": "Almond flour, blanched",
        "brandOwner": "Bob's Red Mill",
        "dataType": "Branded",
        "servingSize": 28,
        "servingSizeUnit": "GRM",
        "foodNutrients": [
            {"nutrientId": 1008, "nutrientNumber": "208", "value": 607},
            {"nutrientId": 1005, "nutrientNumber": "205", "value": 21.4},
            {"nutrientId": 1079, "nutrientNumber": "291", "value": 10.7},
        ],
    }


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with in-memory responses."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {"foods": [almond_flour_search_hit()]}
    )
    foods: dict[int, dict[str, object]] = field(
        default_factory=lambda: {2262223: almond_flour_payload()}
    )
    search_calls: int = 0
    food_calls: int = 0
    closed: bool = False

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        self.search_calls += 1
        return self.search_payload

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        self.food_calls += 1
        return self.foods[fdc_id]

    async def close(self) -> None:
        self.closed = True


@dataclass
class FakeAssistantClient(AssistantClient):
    """Fake assistant that records prompts and echoes a fixed reply."""

    reply: str = "Try celery with almond butter."
    prompts: list[str] = field(default_factory=list)
    error: Exception | None = None

    async def complete(
        self,
        *,
        model: str,
        instructions: str,
        prompt: str,
        store: bool,
    ) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(fdc_api_key="fdc-key", meal_net_carbs_limit_g=20.0)


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def nutrition_service(fdc_client: FakeFdcClient) -> NutritionService:
    return NutritionService(
        fdc_client=fdc_client, cache=MonotonicTtlCache(), retry_delay_seconds=0
    )


@pytest.fixture
def chat_repository() -> InMemoryChatRepository:
    return InMemoryChatRepository()


@pytest.fixture
def assistant_client() -> FakeAssistantClient:
    return FakeAssistantClient()


@pytest.fixture
def chat_service(
    chat_repository: InMemoryChatRepository,
    assistant_client: FakeAssistantClient,
) -> ChatService:
    return ChatService(
        repository=chat_repository,
        carbs_service=CarbsService(),
        assistant=AssistantService(client=assistant_client, model="gpt-test"),
    )


@pytest.fixture
def container(
    settings: Settings,
    fdc_client: FakeFdcClient,
    nutrition_service: NutritionService,
    chat_service: ChatService,
) -> AppContainer:
    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=settings,
        carbs_service=CarbsService(meal_limit_g=settings.meal_net_carbs_limit_g),
        nutrition_service=nutrition_service,
        chat_service=chat_service,
        close_resources=close_resources,
    )

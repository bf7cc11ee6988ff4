"""USDA FoodData Central client limited to carbohydrate nutrients."""

from dataclasses import dataclass
from typing import Protocol

import httpx

# FDC nutrient numbers (not ids): carbohydrate, total fiber, sugar alcohols.
CARB_NUTRIENT_NUMBERS = ("205", "291", "299")
CARB_NUTRIENT_IDS = {"total": 1005, "fiber": 1079, "polyols": 1086}


class FdcClient(Protocol):
    """Interface for FoodData Central carb lookups."""

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        """Search foods and return hits with their nutrient values."""

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch one food restricted to the carbohydrate nutrients."""


@dataclass
class HttpxFdcClient(FdcClient):
    """FDC client over a shared httpx session."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFdcClient":
        return cls(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
        )

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        return await self._request(
            "POST",
            "/foods/search",
            json={"query": query, "pageSize": page_size},
        )

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        return await self._request(
            "GET",
            f"/food/{fdc_id}",
            params={"nutrients": list(CARB_NUTRIENT_NUMBERS)},
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, object] | None = None,
        json: dict[str, object] | None = None,
    ) -> dict[str, object]:
        response = await self.http_client.request(
            method,
            f"{self.base_url}{path}",
            params={"api_key": self.api_key, **(params or {})},
            json=json,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

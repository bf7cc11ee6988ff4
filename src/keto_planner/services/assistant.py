"""Keto assistant interface."""

from dataclasses import dataclass
from typing import Protocol

KETO_INSTRUCTIONS = (
    "You are a concise keto assistant. Keep meals ≤ 20g net carbs.\n"
    "Avoid sugar, grains, starchy vegetables. Prefer whole foods.\n"
    "Keep answers short."
)


class AssistantUnavailableError(RuntimeError):
    """Raised when the assistant model cannot produce a reply."""


class AssistantClient(Protocol):
    """Interface for a text completion model."""

    async def complete(
        self,
        *,
        model: str,
        instructions: str,
        prompt: str,
        store: bool,
    ) -> str:
        """Return the model's reply to a prompt."""


@dataclass
class AssistantService:
    """Keto assistant backed by a completion model."""

    client: AssistantClient
    model: str
    store: bool = False
    instructions: str = KETO_INSTRUCTIONS

    async def reply(self, prompt: str) -> str:
        """Return the assistant's answer to a user prompt."""
        return await self.client.complete(
            model=self.model,
            instructions=self.instructions,
            prompt=prompt,
            store=self.store,
        )

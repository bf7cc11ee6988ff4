"""OpenAI Responses API client for the keto assistant."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from keto_planner.services.assistant import AssistantClient, AssistantUnavailableError


@dataclass
class OpenAIAssistantClient(AssistantClient):
    """Assistant client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIAssistantClient":
        """Create an OpenAI assistant client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def complete(
        self,
        *,
        model: str,
        instructions: str,
        prompt: str,
        store: bool,
    ) -> str:
        try:
            response = await self.client.responses.create(
                model=model,
                instructions=instructions,
                input=prompt,
                store=store,
            )
        except OpenAIError as exc:
            raise AssistantUnavailableError(str(exc)) from exc
        output_text = response.output_text
        if not output_text:
            raise AssistantUnavailableError("OpenAI returned an empty response")
        return output_text.strip()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()

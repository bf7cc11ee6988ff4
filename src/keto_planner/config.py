"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from keto_planner.services.carbs import DEFAULT_MEAL_LIMIT_G

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Chat threads are stored in Supabase when both Supabase settings are
    present, and in process memory otherwise. Without an OpenAI key the chat
    answers only the ``netcarbs`` directive.
    """

    fdc_api_key: str = "DEMO_KEY"
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    meal_net_carbs_limit_g: float = DEFAULT_MEAL_LIMIT_G
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_store: bool = False
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

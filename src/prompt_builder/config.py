from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from prompt_builder.models import PlatformLimit, PlatformType, SplitStrategy


class LLMConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1"
    model_name: str = "gpt-4o-mini"
    timeout: float = 60.0  # seconds per request, no retries


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    llm: LLMConfig = Field(default_factory=LLMConfig)


@lru_cache
def get_config() -> Config:
    return Config()


PLATFORM_LIMITS: dict[str, PlatformLimit] = {
    PlatformType.FIGMA_MAKE.value: PlatformLimit(
        display_name="Figma Make",
        max_chars=8000,
        split_strategy=SplitStrategy.SECTIONS,
    ),
    PlatformType.LOVABLE.value: PlatformLimit(
        display_name="Lovable",
        max_chars=15000,
        split_strategy=SplitStrategy.FEATURES,
    ),
    PlatformType.CURSOR.value: PlatformLimit(
        display_name="Cursor",
        max_chars=25000,
        split_strategy=SplitStrategy.PHASES,
    ),
    PlatformType.V0.value: PlatformLimit(
        display_name="v0",
        max_chars=12000,
        split_strategy=SplitStrategy.SECTIONS,
    ),
    PlatformType.WINDSURF.value: PlatformLimit(
        display_name="Windsurf",
        max_chars=25000,
        split_strategy=SplitStrategy.PHASES,
    ),
}

DEFAULT_STATES = ["Default", "Hover", "Loading", "Success", "Error"]

PLATFORM_DESCRIPTIONS = {
    "web": "Web Application (React/Next.js recommended)",
    "mobile": "Mobile App (React Native or native)",
    "desktop": "Desktop Application (Electron recommended)",
    "responsive": "Responsive Web (Mobile-first, works on all devices)",
}

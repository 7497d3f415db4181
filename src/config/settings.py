# src/config/settings.py
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.analyzers.trade_coach import TradeCoach
from src.journal.settings import JournalSettings


class SystemConfig(BaseModel):
    name: str = "Trading Journal"
    version: str = "1.0.0"
    log_level: str = "INFO"


class AISettings(BaseModel):
    """Settings for the trade coach."""

    enabled: bool = True
    base_url: str = TradeCoach.BASE_URL
    models: list[str] = Field(default_factory=lambda: list(TradeCoach.DEFAULT_MODELS), min_length=1)
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    default_language: Literal["en", "es"] = "en"


class GeminiConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GEMINI_", populate_by_name=True)

    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    )


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    journal: JournalSettings = Field(default_factory=JournalSettings)
    ai: AISettings = Field(default_factory=AISettings)
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        data.pop("gemini", None)
        gemini = GeminiConfig()

        return cls(
            **data,
            gemini=gemini,
        )

# src/journal/settings.py
"""Settings for the journal module."""
from typing import Literal

from pydantic import BaseModel, field_validator


WeekStart = Literal["sunday", "monday"]


class JournalSettings(BaseModel):
    """Configuration settings for the trading journal.

    Attributes:
        data_dir: Directory holding the trade and screenshot index files.
        screenshots_dir: Directory where uploaded images are written.
        public_base_url: URL prefix under which screenshots are served.
        week_starts_on: First day of each calendar row.
        cascade_screenshot_delete: Remove a trade's screenshot references
            when the trade is deleted.
    """

    data_dir: str = "data/journal"
    screenshots_dir: str = "data/screenshots"
    public_base_url: str = "http://localhost:8000/screenshots"

    week_starts_on: WeekStart = "sunday"

    cascade_screenshot_delete: bool = True

    @field_validator("week_starts_on", mode="before")
    @classmethod
    def validate_week_start(cls, v: str) -> str:
        """Validate that week_starts_on is sunday or monday."""
        if not isinstance(v, str) or v.lower() not in {"sunday", "monday"}:
            raise ValueError(f"Invalid week start: {v}. Must be 'sunday' or 'monday'")
        return v.lower()

    @field_validator("public_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

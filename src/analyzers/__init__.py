# src/analyzers/__init__.py
"""Analyzers package for AI trade coaching."""

from src.analyzers.errors import (
    AllModelsFailedError,
    AnalysisError,
    ConfigurationError,
    ProviderRequestError,
    UnsupportedLanguageError,
)
from src.analyzers.prompts import Language, build_trade_prompt
from src.analyzers.trade_coach import TradeCoach

__all__ = [
    "AllModelsFailedError",
    "AnalysisError",
    "ConfigurationError",
    "Language",
    "ProviderRequestError",
    "TradeCoach",
    "UnsupportedLanguageError",
    "build_trade_prompt",
]

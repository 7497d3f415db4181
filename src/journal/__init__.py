# src/journal/__init__.py
"""Journal module for trade records, analytics and calendar views."""

from .calendar_bucketer import CalendarBucketer, month_bounds, shift_month
from .errors import StoreError, TradeNotFoundError
from .journal_manager import JournalManager
from .metrics_calculator import MetricsCalculator
from .models import (
    CalendarDay,
    CalendarMonth,
    Direction,
    PerformanceStats,
    Screenshot,
    Trade,
    TradeDetail,
    TradeInput,
    TradeResult,
    TradeSession,
)
from .screenshot_store import LocalScreenshotStore, ScreenshotStore
from .settings import JournalSettings
from .trade_store import JsonTradeStore, TradeStore

__all__ = [
    "CalendarBucketer",
    "CalendarDay",
    "CalendarMonth",
    "Direction",
    "JournalManager",
    "JournalSettings",
    "JsonTradeStore",
    "LocalScreenshotStore",
    "MetricsCalculator",
    "PerformanceStats",
    "Screenshot",
    "ScreenshotStore",
    "StoreError",
    "Trade",
    "TradeDetail",
    "TradeInput",
    "TradeNotFoundError",
    "TradeResult",
    "TradeSession",
    "TradeStore",
    "month_bounds",
    "shift_month",
]

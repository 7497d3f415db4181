# src/journal/models.py
"""Data models for the trading journal."""
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator


EMOTION_SUGGESTIONS = [
    "Calm",
    "Neutral",
    "Anxious",
    "Fearful",
    "Greedy",
    "Overconfident",
    "Stressed",
]


class TradeSession(str, Enum):
    """Market session the trade was taken in."""
    ASIA = "Asia"
    LONDON = "London"
    NY = "NY"


class Direction(str, Enum):
    """Trade direction."""
    LONG = "long"
    SHORT = "short"


class TradeResult(str, Enum):
    """Outcome of a trade."""
    WIN = "win"
    LOSS = "loss"
    BREAKEVEN = "BE"

    @classmethod
    def _missing_(cls, value: object) -> "TradeResult | None":
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("be", "breakeven"):
                return cls.BREAKEVEN
            for member in cls:
                if member.value == lowered:
                    return member
        return None


def _calendar_day(value: object) -> object:
    """Reduce a date-like value to its calendar day, ignoring any time part."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10:
        return value[:10]
    return value


class TradeInput(BaseModel):
    """Fields a user submits when creating or editing a trade."""

    date: date
    market: str
    session: TradeSession = TradeSession.LONDON
    direction: Direction
    entry_price: float
    stop_loss: float
    take_profit: float = 0.0
    risk_rr: float
    result: TradeResult
    pnl: float
    model: str = ""
    execution_quality: int = Field(default=5, ge=1, le=5)
    emotional_state: str = "Calm"
    notes: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def strip_time_component(cls, v: object) -> object:
        return _calendar_day(v)

    @field_validator("market")
    @classmethod
    def normalize_market(cls, v: str) -> str:
        """Markets are stored upper-cased (NAS100, EURUSD...)."""
        return v.strip().upper()

    @field_validator("take_profit", mode="before")
    @classmethod
    def default_take_profit(cls, v: object) -> object:
        return 0.0 if v is None or v == "" else v


class Trade(TradeInput):
    """A logged trade as stored for its owner."""

    id: str
    user_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    ai_analysis: str | None = None


class Screenshot(BaseModel):
    """An image attached to a trade."""

    id: str
    trade_id: str
    image_url: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class TradeDetail:
    """A trade together with its screenshots."""

    trade: Trade
    screenshots: list[Screenshot] = field(default_factory=list)


@dataclass
class DistributionSlice:
    """Count of trades for one result category."""

    result: TradeResult
    count: int


@dataclass
class EquityPoint:
    """Cumulative P&L after the n-th trade (1-based)."""

    trade_number: int
    cumulative_pnl: float


@dataclass
class PerformanceStats:
    """Aggregate performance over a sequence of trades."""

    total_trades: int
    wins: int
    losses: int
    breakevens: int

    win_rate: float
    total_pnl: float
    avg_rr: float
    max_drawdown: float

    distribution: list[DistributionSlice]
    equity_curve: list[EquityPoint]

    best_trade: Trade | None
    worst_trade: Trade | None


@dataclass
class CalendarDay:
    """One cell of the month grid."""

    day: date
    in_month: bool
    trades: list[Trade] = field(default_factory=list)
    net_pnl: float = 0.0
    wins: int = 0
    losses: int = 0
    breakevens: int = 0

    @property
    def has_trades(self) -> bool:
        return bool(self.trades)


@dataclass
class CalendarMonth:
    """Full-week grid covering a month."""

    year: int
    month: int
    weeks: list[list[CalendarDay]]

    @property
    def days(self) -> list[CalendarDay]:
        """All grid days in display order."""
        return [day for week in self.weeks for day in week]

    @property
    def net_pnl(self) -> float:
        """Net P&L of the days that belong to the month."""
        return sum(d.net_pnl for d in self.days if d.in_month)

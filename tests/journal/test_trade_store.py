# tests/journal/test_trade_store.py
"""Tests for JsonTradeStore."""
import json
from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from src.journal.errors import StoreError, TradeNotFoundError
from src.journal.models import Direction, TradeInput, TradeResult, TradeSession
from src.journal.settings import JournalSettings
from src.journal.trade_store import JsonTradeStore


def make_trade_input(
    trade_date: date = date(2024, 1, 15),
    market: str = "NAS100",
    pnl: float = 150.0,
    result: TradeResult = TradeResult.WIN,
) -> TradeInput:
    """Create a TradeInput for testing."""
    return TradeInput(
        date=trade_date,
        market=market,
        session=TradeSession.NY,
        direction=Direction.LONG,
        entry_price=17000.0,
        stop_loss=16950.0,
        take_profit=17100.0,
        risk_rr=2.0,
        result=result,
        pnl=pnl,
        model="Breakout",
        execution_quality=5,
        emotional_state="Calm",
        notes="Clean entry",
    )


class TestJsonTradeStore:
    """Tests for JsonTradeStore."""

    @pytest.fixture
    def temp_data_dir(self, tmp_path: Path) -> Path:
        """Create a temporary data directory."""
        return tmp_path / "journal"

    @pytest.fixture
    def store(self, temp_data_dir: Path) -> JsonTradeStore:
        """Create a JsonTradeStore instance."""
        return JsonTradeStore(JournalSettings(data_dir=str(temp_data_dir)))

    @pytest.mark.asyncio
    async def test_insert_creates_file(self, store: JsonTradeStore, temp_data_dir: Path) -> None:
        """insert should persist the trade in trades.json."""
        trade_id = await store.insert("user-1", make_trade_input())

        file_path = temp_data_dir / "trades.json"
        assert file_path.exists()

        with open(file_path) as f:
            data = json.load(f)

        assert len(data) == 1
        assert data[0]["id"] == trade_id
        assert data[0]["user_id"] == "user-1"
        assert data[0]["date"] == "2024-01-15"
        assert data[0]["result"] == "win"

    @pytest.mark.asyncio
    async def test_get_by_id(self, store: JsonTradeStore) -> None:
        trade_id = await store.insert("user-1", make_trade_input())

        trade = await store.get_by_id("user-1", trade_id)

        assert trade is not None
        assert trade.id == trade_id
        assert trade.market == "NAS100"
        assert trade.date == date(2024, 1, 15)
        assert trade.notes == "Clean entry"

    @pytest.mark.asyncio
    async def test_get_by_id_missing_returns_none(self, store: JsonTradeStore) -> None:
        assert await store.get_by_id("user-1", "nope") is None

    @pytest.mark.asyncio
    async def test_trades_are_invisible_to_other_users(self, store: JsonTradeStore) -> None:
        trade_id = await store.insert("user-1", make_trade_input())

        assert await store.get_by_id("user-2", trade_id) is None
        assert await store.list_all("user-2") == []
        with pytest.raises(TradeNotFoundError):
            await store.delete("user-2", trade_id)
        with pytest.raises(TradeNotFoundError):
            await store.update("user-2", trade_id, {"pnl": 1.0})

    @pytest.mark.asyncio
    async def test_list_all_ordering(self, store: JsonTradeStore) -> None:
        await store.insert("user-1", make_trade_input(trade_date=date(2024, 1, 20), market="B"))
        await store.insert("user-1", make_trade_input(trade_date=date(2024, 1, 5), market="A"))
        await store.insert("user-1", make_trade_input(trade_date=date(2024, 2, 1), market="C"))

        ascending = await store.list_all("user-1", ascending=True)
        descending = await store.list_all("user-1", ascending=False)

        assert [t.market for t in ascending] == ["A", "B", "C"]
        assert [t.market for t in descending] == ["C", "B", "A"]

    @pytest.mark.asyncio
    async def test_list_by_date_range_is_inclusive(self, store: JsonTradeStore) -> None:
        await store.insert("user-1", make_trade_input(trade_date=date(2023, 12, 31), market="DEC"))
        await store.insert("user-1", make_trade_input(trade_date=date(2024, 1, 1), market="FIRST"))
        await store.insert("user-1", make_trade_input(trade_date=date(2024, 1, 31), market="LAST"))
        await store.insert("user-1", make_trade_input(trade_date=date(2024, 2, 1), market="FEB"))

        trades = await store.list_by_date_range("user-1", date(2024, 1, 1), date(2024, 1, 31))

        assert [t.market for t in trades] == ["FIRST", "LAST"]

    @pytest.mark.asyncio
    async def test_update_merges_patch(self, store: JsonTradeStore) -> None:
        trade_id = await store.insert("user-1", make_trade_input())

        updated = await store.update("user-1", trade_id, {"ai_analysis": "## Good trade"})

        assert updated.ai_analysis == "## Good trade"
        assert updated.pnl == 150.0
        reloaded = await store.get_by_id("user-1", trade_id)
        assert reloaded.ai_analysis == "## Good trade"

    @pytest.mark.asyncio
    async def test_update_ignores_identity_fields(self, store: JsonTradeStore) -> None:
        trade_id = await store.insert("user-1", make_trade_input())

        updated = await store.update("user-1", trade_id, {"id": "other", "user_id": "user-9", "pnl": 10.0})

        assert updated.id == trade_id
        assert updated.user_id == "user-1"
        assert updated.pnl == 10.0

    @pytest.mark.asyncio
    async def test_update_rejects_invalid_values(self, store: JsonTradeStore) -> None:
        trade_id = await store.insert("user-1", make_trade_input())

        with pytest.raises(ValidationError):
            await store.update("user-1", trade_id, {"execution_quality": 9})

        reloaded = await store.get_by_id("user-1", trade_id)
        assert reloaded.execution_quality == 5

    @pytest.mark.asyncio
    async def test_delete(self, store: JsonTradeStore) -> None:
        keep_id = await store.insert("user-1", make_trade_input(market="KEEP"))
        drop_id = await store.insert("user-1", make_trade_input(market="DROP"))

        await store.delete("user-1", drop_id)

        assert await store.get_by_id("user-1", drop_id) is None
        assert await store.get_by_id("user-1", keep_id) is not None

    @pytest.mark.asyncio
    async def test_corrupt_file_raises_store_error(
        self, store: JsonTradeStore, temp_data_dir: Path
    ) -> None:
        (temp_data_dir / "trades.json").write_text("{broken")

        with pytest.raises(StoreError):
            await store.list_all("user-1")

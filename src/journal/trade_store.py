# src/journal/trade_store.py
"""Trade store contract and a JSON file implementation."""
import asyncio
import json
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Any

import aiofiles
from pydantic import ValidationError

from src.journal.errors import StoreError, TradeNotFoundError
from src.journal.models import Trade, TradeInput
from src.journal.settings import JournalSettings

logger = logging.getLogger(__name__)


class TradeStore(ABC):
    """Persistence contract for trades.

    Every operation is scoped to the owning user; trades belonging to other
    users are invisible.
    """

    @abstractmethod
    async def insert(self, user_id: str, record: TradeInput) -> str:
        """Create a trade and return its id."""
        pass

    @abstractmethod
    async def update(self, user_id: str, trade_id: str, patch: dict[str, Any]) -> Trade:
        """Merge-patch an existing trade and return the stored result."""
        pass

    @abstractmethod
    async def delete(self, user_id: str, trade_id: str) -> None:
        """Delete a trade."""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str, trade_id: str) -> Trade | None:
        """Look up a single trade, None when it does not exist."""
        pass

    @abstractmethod
    async def list_all(self, user_id: str, ascending: bool = True) -> list[Trade]:
        """All trades ordered by date."""
        pass

    @abstractmethod
    async def list_by_date_range(self, user_id: str, start: date, end: date) -> list[Trade]:
        """Trades with start <= date <= end, ordered by date."""
        pass


class JsonTradeStore(TradeStore):
    """Stores all trades in a single JSON file: {data_dir}/trades.json"""

    IMMUTABLE_FIELDS = {"id", "user_id", "created_at"}

    def __init__(self, settings: JournalSettings) -> None:
        self._data_dir = Path(settings.data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._data_dir / "trades.json"
        self._lock = asyncio.Lock()

    async def _read_records(self) -> list[dict]:
        if not self._file_path.exists():
            return []

        try:
            async with aiofiles.open(self._file_path, "r") as f:
                content = await f.read()
            return json.loads(content) if content.strip() else []
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read {self._file_path}: {e}") from e

    async def _write_records(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_suffix(".tmp")
        try:
            async with aiofiles.open(tmp_path, "w") as f:
                await f.write(json.dumps(records, indent=2, default=str))
            tmp_path.replace(self._file_path)
        except OSError as e:
            raise StoreError(f"Failed to write {self._file_path}: {e}") from e

    def _to_trade(self, data: dict) -> Trade:
        try:
            return Trade.model_validate(data)
        except ValidationError as e:
            raise StoreError(f"Corrupt trade record {data.get('id')}: {e}") from e

    def _find(self, records: list[dict], user_id: str, trade_id: str) -> dict | None:
        for record in records:
            if record["id"] == trade_id and record["user_id"] == user_id:
                return record
        return None

    def _sorted(self, trades: list[Trade], ascending: bool) -> list[Trade]:
        return sorted(trades, key=lambda t: (t.date, t.created_at), reverse=not ascending)

    async def insert(self, user_id: str, record: TradeInput) -> str:
        trade = Trade(id=str(uuid.uuid4()), user_id=user_id, **record.model_dump())

        async with self._lock:
            records = await self._read_records()
            records.append(trade.model_dump(mode="json"))
            await self._write_records(records)

        logger.info(f"Trade {trade.id} created ({trade.market} {trade.date})")
        return trade.id

    async def update(self, user_id: str, trade_id: str, patch: dict[str, Any]) -> Trade:
        async with self._lock:
            records = await self._read_records()
            record = self._find(records, user_id, trade_id)
            if record is None:
                raise TradeNotFoundError(trade_id)

            merged = {**record}
            merged.update({k: v for k, v in patch.items() if k not in self.IMMUTABLE_FIELDS})
            trade = Trade.model_validate(merged)

            record.clear()
            record.update(trade.model_dump(mode="json"))
            await self._write_records(records)

        return trade

    async def delete(self, user_id: str, trade_id: str) -> None:
        async with self._lock:
            records = await self._read_records()
            if self._find(records, user_id, trade_id) is None:
                raise TradeNotFoundError(trade_id)

            remaining = [r for r in records if r["id"] != trade_id]
            await self._write_records(remaining)

        logger.info(f"Trade {trade_id} deleted")

    async def get_by_id(self, user_id: str, trade_id: str) -> Trade | None:
        records = await self._read_records()
        record = self._find(records, user_id, trade_id)
        return self._to_trade(record) if record is not None else None

    async def list_all(self, user_id: str, ascending: bool = True) -> list[Trade]:
        records = await self._read_records()
        trades = [self._to_trade(r) for r in records if r["user_id"] == user_id]
        return self._sorted(trades, ascending)

    async def list_by_date_range(self, user_id: str, start: date, end: date) -> list[Trade]:
        trades = await self.list_all(user_id, ascending=True)
        return [t for t in trades if start <= t.date <= end]

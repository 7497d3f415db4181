# src/journal/screenshot_store.py
"""Screenshot store contract and a local filesystem implementation."""
import asyncio
import json
import logging
import uuid
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

import aiofiles

from src.journal.errors import StoreError
from src.journal.models import Screenshot
from src.journal.settings import JournalSettings

logger = logging.getLogger(__name__)


class ScreenshotStore(ABC):
    """Object storage for trade images plus their reference rows."""

    @abstractmethod
    async def upload(self, path: str, data: bytes) -> str:
        """Store file bytes under path and return the stored path."""
        pass

    @abstractmethod
    def public_url(self, stored_path: str) -> str:
        """URL under which a stored file is served."""
        pass

    @abstractmethod
    async def insert_reference(self, trade_id: str, image_url: str) -> Screenshot:
        """Record that an image belongs to a trade."""
        pass

    @abstractmethod
    async def list_by_trade(self, trade_id: str) -> list[Screenshot]:
        """All screenshots of a trade, oldest first."""
        pass

    @abstractmethod
    async def delete_by_trade(self, trade_id: str) -> int:
        """Remove all references of a trade and return how many were removed."""
        pass


class LocalScreenshotStore(ScreenshotStore):
    """Writes images under screenshots_dir and indexes them in screenshots.json."""

    def __init__(self, settings: JournalSettings) -> None:
        self._root = Path(settings.screenshots_dir)
        self._root.mkdir(parents=True, exist_ok=True)
        data_dir = Path(settings.data_dir)
        data_dir.mkdir(parents=True, exist_ok=True)
        self._index_path = data_dir / "screenshots.json"
        self._public_base_url = settings.public_base_url
        self._lock = asyncio.Lock()

    def _resolve(self, path: str) -> Path:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts or not relative.parts:
            raise StoreError(f"Invalid storage path: {path}")
        return self._root.joinpath(*relative.parts)

    async def _read_index(self) -> list[dict]:
        if not self._index_path.exists():
            return []

        try:
            async with aiofiles.open(self._index_path, "r") as f:
                content = await f.read()
            return json.loads(content) if content.strip() else []
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read {self._index_path}: {e}") from e

    async def _write_index(self, records: list[dict]) -> None:
        try:
            async with aiofiles.open(self._index_path, "w") as f:
                await f.write(json.dumps(records, indent=2, default=str))
        except OSError as e:
            raise StoreError(f"Failed to write {self._index_path}: {e}") from e

    async def upload(self, path: str, data: bytes) -> str:
        target = self._resolve(path)
        if target.exists():
            raise StoreError(f"File already exists: {path}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(target, "wb") as f:
                await f.write(data)
        except OSError as e:
            raise StoreError(f"Upload failed for {path}: {e}") from e

        logger.info(f"Uploaded screenshot {path} ({len(data)} bytes)")
        return path

    def public_url(self, stored_path: str) -> str:
        return f"{self._public_base_url}/{stored_path}"

    async def insert_reference(self, trade_id: str, image_url: str) -> Screenshot:
        screenshot = Screenshot(id=str(uuid.uuid4()), trade_id=trade_id, image_url=image_url)

        async with self._lock:
            records = await self._read_index()
            records.append(screenshot.model_dump(mode="json"))
            await self._write_index(records)

        return screenshot

    async def list_by_trade(self, trade_id: str) -> list[Screenshot]:
        records = await self._read_index()
        screenshots = [Screenshot.model_validate(r) for r in records if r["trade_id"] == trade_id]
        return sorted(screenshots, key=lambda s: s.created_at)

    async def delete_by_trade(self, trade_id: str) -> int:
        async with self._lock:
            records = await self._read_index()
            remaining = [r for r in records if r["trade_id"] != trade_id]
            removed = [r for r in records if r["trade_id"] == trade_id]
            if removed:
                await self._write_index(remaining)

        for record in removed:
            self._remove_file(record["image_url"])

        return len(removed)

    def _remove_file(self, image_url: str) -> None:
        prefix = f"{self._public_base_url}/"
        if not image_url.startswith(prefix):
            return
        try:
            self._resolve(image_url[len(prefix):]).unlink(missing_ok=True)
        except OSError as e:
            raise StoreError(f"Failed to remove {image_url}: {e}") from e

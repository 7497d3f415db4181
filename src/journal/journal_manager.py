# src/journal/journal_manager.py
"""Manager exposing the journal's user actions."""
import logging
import uuid
from pathlib import PurePosixPath

from pydantic import ValidationError

from src.analyzers.errors import AnalysisError, ConfigurationError
from src.analyzers.prompts import Language
from src.analyzers.trade_coach import TradeCoach
from src.auth.session import SessionContext
from src.journal.calendar_bucketer import CalendarBucketer, month_bounds
from src.journal.errors import StoreError, TradeNotFoundError
from src.journal.metrics_calculator import MetricsCalculator
from src.journal.models import (
    CalendarMonth,
    PerformanceStats,
    Screenshot,
    Trade,
    TradeDetail,
    TradeInput,
)
from src.journal.screenshot_store import ScreenshotStore
from src.journal.settings import JournalSettings
from src.journal.trade_store import TradeStore

logger = logging.getLogger(__name__)


class JournalManager:
    """Entry point for every user-triggered journal action.

    Each method takes the caller's SessionContext, fetches fresh data from the
    stores and returns the result. Failures are logged here and re-raised so
    the presentation layer can notify the user.
    """

    def __init__(
        self,
        settings: JournalSettings,
        trade_store: TradeStore,
        screenshot_store: ScreenshotStore,
        coach: TradeCoach | None = None,
        default_language: Language | str = Language.EN,
    ) -> None:
        """Initialize the journal manager.

        Args:
            settings: Journal configuration settings.
            trade_store: Where trades are persisted.
            screenshot_store: Where screenshots are persisted.
            coach: AI coach used by analyze_trade, None when AI is disabled.
            default_language: Answer language when analyze_trade gets none.
        """
        self._settings = settings
        self._trades = trade_store
        self._screenshots = screenshot_store
        self._coach = coach
        self._default_language = Language(default_language)
        self._metrics_calculator = MetricsCalculator()
        self._bucketer = CalendarBucketer(settings.week_starts_on)

    async def create_trade(self, session: SessionContext, trade_input: TradeInput) -> Trade:
        """Log a new trade for the current user."""
        try:
            trade_id = await self._trades.insert(session.user_id, trade_input)
        except StoreError as e:
            logger.error(f"Failed to create trade: {e}")
            raise
        return await self.get_trade(session, trade_id)

    async def update_trade(
        self, session: SessionContext, trade_id: str, trade_input: TradeInput
    ) -> Trade:
        """Replace all user-editable fields of a trade."""
        try:
            return await self._trades.update(
                session.user_id, trade_id, trade_input.model_dump()
            )
        except (StoreError, ValidationError) as e:
            logger.error(f"Failed to update trade {trade_id}: {e}")
            raise

    async def delete_trade(self, session: SessionContext, trade_id: str) -> None:
        """Delete a trade and, if enabled, its screenshots.

        Screenshot cleanup runs after the trade is gone and is best-effort:
        a cleanup failure is logged, not raised.
        """
        try:
            await self._trades.delete(session.user_id, trade_id)
        except StoreError as e:
            logger.error(f"Failed to delete trade {trade_id}: {e}")
            raise

        if not self._settings.cascade_screenshot_delete:
            return

        try:
            removed = await self._screenshots.delete_by_trade(trade_id)
            if removed:
                logger.info(f"Removed {removed} screenshots of trade {trade_id}")
        except StoreError as e:
            logger.warning(f"Screenshots of deleted trade {trade_id} left behind: {e}")

    async def get_trade(self, session: SessionContext, trade_id: str) -> Trade:
        """Load one trade owned by the current user.

        Raises:
            TradeNotFoundError: If the trade does not exist for this user.
        """
        try:
            trade = await self._trades.get_by_id(session.user_id, trade_id)
        except StoreError as e:
            logger.error(f"Failed to load trade {trade_id}: {e}")
            raise
        if trade is None:
            logger.warning(f"Trade {trade_id} not found for user {session.user_id}")
            raise TradeNotFoundError(trade_id)
        return trade

    async def get_trade_detail(self, session: SessionContext, trade_id: str) -> TradeDetail:
        """Load a trade and its screenshots."""
        trade = await self.get_trade(session, trade_id)
        try:
            screenshots = await self._screenshots.list_by_trade(trade_id)
        except StoreError as e:
            logger.error(f"Failed to load screenshots of trade {trade_id}: {e}")
            raise
        return TradeDetail(trade=trade, screenshots=screenshots)

    async def list_trades(self, session: SessionContext) -> list[Trade]:
        """All trades of the current user, newest first."""
        try:
            return await self._trades.list_all(session.user_id, ascending=False)
        except StoreError as e:
            logger.error(f"Failed to list trades: {e}")
            raise

    async def get_dashboard(self, session: SessionContext) -> PerformanceStats:
        """Performance stats over every trade of the current user."""
        try:
            trades = await self._trades.list_all(session.user_id, ascending=True)
        except StoreError as e:
            logger.error(f"Failed to load dashboard: {e}")
            raise
        return self._metrics_calculator.calculate(trades)

    async def get_calendar_month(
        self, session: SessionContext, year: int, month: int
    ) -> CalendarMonth:
        """Calendar grid for a month with trades bucketed by day."""
        start, end = month_bounds(year, month)
        try:
            trades = await self._trades.list_by_date_range(session.user_id, start, end)
        except StoreError as e:
            logger.error(f"Failed to load calendar for {year}-{month:02d}: {e}")
            raise
        return self._bucketer.build_month(year, month, trades)

    async def upload_screenshot(
        self, session: SessionContext, trade_id: str, filename: str, data: bytes
    ) -> Screenshot:
        """Store an image and attach it to a trade.

        The file is stored at {user_id}/{trade_id}/{random}.{ext}.
        """
        trade = await self.get_trade(session, trade_id)

        extension = PurePosixPath(filename).suffix.lstrip(".").lower() or "png"
        path = f"{trade.user_id}/{trade.id}/{uuid.uuid4().hex}.{extension}"

        try:
            stored_path = await self._screenshots.upload(path, data)
            url = self._screenshots.public_url(stored_path)
            return await self._screenshots.insert_reference(trade.id, url)
        except StoreError as e:
            logger.error(f"Screenshot upload failed for trade {trade_id}: {e}")
            raise

    async def analyze_trade(
        self,
        session: SessionContext,
        trade_id: str,
        language: Language | str | None = None,
    ) -> Trade:
        """Ask the AI coach about a trade and store the narrative on it.

        The configured default language is used when language is None.

        Raises:
            ConfigurationError: If AI coaching is not configured.
            AllModelsFailedError: If no model produced an answer.
            StoreError: If the trade cannot be loaded or updated.
        """
        trade = await self.get_trade(session, trade_id)

        if self._coach is None:
            logger.error(f"AI analysis requested for trade {trade_id} but coaching is disabled")
            raise ConfigurationError("AI coaching is disabled")

        try:
            analysis = await self._coach.analyze(trade, language or self._default_language)
        except AnalysisError as e:
            logger.error(f"AI analysis failed for trade {trade_id}: {e}")
            raise

        try:
            return await self._trades.update(
                session.user_id, trade_id, {"ai_analysis": analysis}
            )
        except StoreError as e:
            logger.error(f"Failed to save analysis for trade {trade_id}: {e}")
            raise

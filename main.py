# main.py
"""Main entry point for the trading journal services."""
import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.analyzers import TradeCoach
from src.auth import SessionContext
from src.config.settings import Settings
from src.journal import JournalManager, JsonTradeStore, LocalScreenshotStore


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

CONFIG_PATH = Path("config/settings.yaml")


def load_and_validate_config(config_path: Path = CONFIG_PATH) -> Settings:
    """Load configuration from .env and the YAML settings file.

    Returns:
        Settings object loaded from YAML, or defaults when the file is absent.

    Raises:
        SystemExit: If YAML parsing or validation fails.
    """
    load_dotenv()
    logger.info("✓ Loaded environment variables")

    if not config_path.exists():
        logger.warning(f"{config_path} not found, using defaults")
        return Settings()

    try:
        settings = Settings.from_yaml(config_path)
        logger.info(f"✓ Settings loaded from {config_path}")
    except Exception as e:
        logger.error(f"Failed to parse {config_path}: {e}")
        sys.exit(1)

    return settings


def build_trade_coach(settings: Settings) -> TradeCoach | None:
    """Create the AI coach, or None when coaching is disabled."""
    if not settings.ai.enabled:
        logger.info("AI coaching disabled")
        return None

    if not settings.gemini.api_key:
        logger.warning("GOOGLE_API_KEY not set, AI analysis requests will fail")

    return TradeCoach(
        api_key=settings.gemini.api_key,
        models=settings.ai.models,
        base_url=settings.ai.base_url,
        timeout=settings.ai.timeout_seconds,
    )


def create_journal(settings: Settings) -> JournalManager:
    """Wire the stores and the coach into a JournalManager."""
    return JournalManager(
        settings=settings.journal,
        trade_store=JsonTradeStore(settings.journal),
        screenshot_store=LocalScreenshotStore(settings.journal),
        coach=build_trade_coach(settings),
        default_language=settings.ai.default_language,
    )


def print_startup_banner(settings: Settings) -> None:
    """Print system startup banner."""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.system.name}")
    logger.info(f"Version: {settings.system.version}")
    logger.info(f"Data dir: {settings.journal.data_dir}")
    logger.info("=" * 60)


async def main() -> None:
    settings = load_and_validate_config()
    logging.getLogger().setLevel(settings.system.log_level.upper())
    print_startup_banner(settings)

    journal = create_journal(settings)

    user_id = os.getenv("JOURNAL_USER_ID")
    if not user_id:
        logger.info("JOURNAL_USER_ID not set, nothing to summarize")
        return

    stats = await journal.get_dashboard(SessionContext(user_id=user_id))
    logger.info(
        f"Trades: {stats.total_trades} | Win rate: {stats.win_rate:.1f}% | "
        f"P&L: ${stats.total_pnl:.2f} | Avg RR: {stats.avg_rr:.2f}"
    )


if __name__ == "__main__":
    asyncio.run(main())

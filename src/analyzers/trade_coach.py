# src/analyzers/trade_coach.py
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

import httpx

from src.analyzers.errors import (
    AllModelsFailedError,
    ConfigurationError,
    ProviderRequestError,
)
from src.analyzers.prompts import Language, build_trade_prompt

if TYPE_CHECKING:
    from src.journal.models import Trade

logger = logging.getLogger(__name__)


class TradeCoach:
    """Generates a coaching narrative for a trade.

    Models are tried one at a time in the configured order; the first
    successful answer wins and the remaining models are never called.
    """

    BASE_URL = "https://generativelanguage.googleapis.com/v1"
    DEFAULT_MODELS = [
        "gemini-2.0-flash",
        "gemini-2.5-flash",
        "gemini-1.5-flash",
        "gemini-1.5-flash-8b",
        "gemini-pro",
    ]

    def __init__(
        self,
        api_key: str,
        models: list[str] | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = (api_key or "").strip()
        self.models = list(models) if models else list(self.DEFAULT_MODELS)
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    async def analyze(self, trade: "Trade", language: Language | str = Language.EN) -> str:
        """Analyze a trade and return the narrative in the requested language.

        Raises:
            ConfigurationError: If no API key is configured.
            UnsupportedLanguageError: If the language has no prompt template.
            AllModelsFailedError: If every model in the chain failed.
        """
        if not self.api_key:
            raise ConfigurationError("No AI API key found. Set GOOGLE_API_KEY in your .env file")

        prompt = build_trade_prompt(trade, language)
        last_error: str | None = None

        async with self._client() as client:
            for model in self.models:
                logger.info(f"Trying model {model} for trade {trade.id}")
                try:
                    text = await self._generate(client, model, prompt)
                except ProviderRequestError as e:
                    logger.warning(f"Model {e.model} failed: {e.message}")
                    last_error = e.message
                    continue

                logger.info(f"Analysis generated with {model}")
                return text

            logger.error("All models failed, listing available models")
            available = await self._list_available_models(client)

        if available:
            raise AllModelsFailedError(
                "None of the configured models worked. "
                f"Models available for this key: {', '.join(available)}. "
                "Update the model list in the configuration.",
                last_error=last_error,
                available_models=available,
            )

        raise AllModelsFailedError(
            f"Could not reach the AI provider after several attempts. Last error: {last_error}",
            last_error=last_error,
        )

    async def _generate(self, client: httpx.AsyncClient, model: str, prompt: str) -> str:
        """Send one generateContent request."""
        try:
            response = await client.post(
                f"{self.base_url}/models/{model}:generateContent",
                params={"key": self.api_key},
                json={"contents": [{"parts": [{"text": prompt}]}]},
            )
        except httpx.HTTPError as e:
            raise ProviderRequestError(model, str(e) or type(e).__name__) from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.is_success:
            error = data.get("error") if isinstance(data, dict) else None
            message = error.get("message") if isinstance(error, dict) else None
            raise ProviderRequestError(model, message or response.reason_phrase)

        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderRequestError(model, f"Malformed response: {e!r}") from e

    async def _list_available_models(self, client: httpx.AsyncClient) -> list[str]:
        """Best-effort listing of the models the key can use."""
        try:
            response = await client.get(f"{self.base_url}/models", params={"key": self.api_key})
            data = response.json()
            models = data.get("models") or []
            return [m["name"].split("/")[-1] for m in models]
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.debug(f"Model listing failed: {e}")
            return []

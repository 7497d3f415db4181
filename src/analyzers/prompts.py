# src/analyzers/prompts.py
"""Prompt templates for the trade coach."""
from enum import Enum
from typing import TYPE_CHECKING

from src.analyzers.errors import UnsupportedLanguageError

if TYPE_CHECKING:
    from src.journal.models import Trade


class Language(str, Enum):
    """Languages the coach can answer in."""
    EN = "en"
    ES = "es"


COACH_PROMPT_EN = (
    "Act as a professional trading coach. Analyze this trade: "
    "Market {market}, {direction}, Result {result}, PnL {pnl}$, Setup {model}, "
    "Quality {quality}/5, State {emotional_state}. "
    "Respond in English with what went well, what failed and psychological advice. "
    "Use Markdown."
)

COACH_PROMPT_ES = (
    "Actúa como un coach de trading profesional. Analiza este trade: "
    "Mercado {market}, {direction}, Resultado {result}, PnL {pnl}$, Setup {model}, "
    "Calidad {quality}/5, Estado {emotional_state}. "
    "Responde en Español detallando qué se hizo bien, qué falló y consejo psicológico. "
    "Usa Markdown."
)

TEMPLATES = {
    Language.EN: COACH_PROMPT_EN,
    Language.ES: COACH_PROMPT_ES,
}


def build_trade_prompt(trade: "Trade", language: Language | str = Language.EN) -> str:
    """Build the coaching prompt for a trade.

    Args:
        trade: The trade to analyze.
        language: Language the answer must be written in.

    Returns:
        Prompt text ready to send to the provider.

    Raises:
        UnsupportedLanguageError: If there is no template for the language.
    """
    try:
        template = TEMPLATES[Language(language)]
    except ValueError as e:
        raise UnsupportedLanguageError(language) from e
    return template.format(
        market=trade.market,
        direction=trade.direction.value,
        result=trade.result.value,
        pnl=trade.pnl,
        model=trade.model,
        quality=trade.execution_quality,
        emotional_state=trade.emotional_state,
    )

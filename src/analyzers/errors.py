# src/analyzers/errors.py
"""Errors raised while generating trade analyses."""


class AnalysisError(Exception):
    """Base class for trade analysis failures."""


class ConfigurationError(AnalysisError):
    """No API key is configured for the text generation provider."""


class UnsupportedLanguageError(AnalysisError):
    """The requested answer language has no prompt template."""

    def __init__(self, language: object):
        super().__init__(f"Unsupported language: {language}")
        self.language = language


class ProviderRequestError(AnalysisError):
    """A single model attempt failed."""

    def __init__(self, model: str, message: str):
        super().__init__(f"{model}: {message}")
        self.model = model
        self.message = message


class AllModelsFailedError(AnalysisError):
    """Every model in the fallback chain failed."""

    def __init__(
        self,
        message: str,
        last_error: str | None = None,
        available_models: list[str] | None = None,
    ):
        super().__init__(message)
        self.last_error = last_error
        self.available_models = available_models or []

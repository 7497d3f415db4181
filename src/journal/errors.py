# src/journal/errors.py
"""Errors raised by the journal stores."""


class StoreError(Exception):
    """A trade or screenshot store operation failed."""


class TradeNotFoundError(StoreError):
    """No trade with the given id is visible to the current user."""

    def __init__(self, trade_id: str):
        super().__init__(f"Trade not found: {trade_id}")
        self.trade_id = trade_id

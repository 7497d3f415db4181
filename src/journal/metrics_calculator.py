# src/journal/metrics_calculator.py
"""Calculator for trading performance metrics."""
from src.journal.models import (
    DistributionSlice,
    EquityPoint,
    PerformanceStats,
    Trade,
    TradeResult,
)


class MetricsCalculator:
    """Calculates aggregate performance from a sequence of trades."""

    def calculate(self, trades: list[Trade]) -> PerformanceStats:
        """Calculate performance stats for trades ordered by date ascending.

        Breakeven trades are excluded from the win rate denominator, so a
        journal of only breakevens has a win rate of 0.

        Args:
            trades: Trades in chronological order.

        Returns:
            PerformanceStats with counts, win rate, P&L and equity curve.
        """
        if not trades:
            return self._empty_stats()

        total_trades = len(trades)
        wins = sum(1 for t in trades if t.result == TradeResult.WIN)
        losses = sum(1 for t in trades if t.result == TradeResult.LOSS)
        breakevens = sum(1 for t in trades if t.result == TradeResult.BREAKEVEN)

        decided = total_trades - breakevens
        win_rate = wins / decided * 100 if decided > 0 else 0.0

        total_pnl = sum(t.pnl for t in trades)
        avg_rr = sum(t.risk_rr for t in trades) / total_trades

        equity_curve = self._build_equity_curve(trades)

        return PerformanceStats(
            total_trades=total_trades,
            wins=wins,
            losses=losses,
            breakevens=breakevens,
            win_rate=win_rate,
            total_pnl=total_pnl,
            avg_rr=avg_rr,
            max_drawdown=self._calculate_max_drawdown(equity_curve),
            distribution=self._build_distribution(wins, losses, breakevens),
            equity_curve=equity_curve,
            best_trade=max(trades, key=lambda t: t.pnl),
            worst_trade=min(trades, key=lambda t: t.pnl),
        )

    def _empty_stats(self) -> PerformanceStats:
        """Return stats with zero values for an empty journal."""
        return PerformanceStats(
            total_trades=0,
            wins=0,
            losses=0,
            breakevens=0,
            win_rate=0.0,
            total_pnl=0.0,
            avg_rr=0.0,
            max_drawdown=0.0,
            distribution=self._build_distribution(0, 0, 0),
            equity_curve=[],
            best_trade=None,
            worst_trade=None,
        )

    def _build_distribution(
        self, wins: int, losses: int, breakevens: int
    ) -> list[DistributionSlice]:
        return [
            DistributionSlice(result=TradeResult.WIN, count=wins),
            DistributionSlice(result=TradeResult.LOSS, count=losses),
            DistributionSlice(result=TradeResult.BREAKEVEN, count=breakevens),
        ]

    def _build_equity_curve(self, trades: list[Trade]) -> list[EquityPoint]:
        """Running sum of P&L indexed by trade sequence number."""
        curve: list[EquityPoint] = []
        cumulative_pnl = 0.0

        for index, trade in enumerate(trades, start=1):
            cumulative_pnl += trade.pnl
            curve.append(EquityPoint(trade_number=index, cumulative_pnl=cumulative_pnl))

        return curve

    def _calculate_max_drawdown(self, curve: list[EquityPoint]) -> float:
        """Largest drop from a running peak of the equity curve.

        Args:
            curve: Equity curve starting from a flat account.

        Returns:
            Maximum drawdown in account currency.
        """
        peak = 0.0
        max_drawdown = 0.0

        for point in curve:
            if point.cumulative_pnl > peak:
                peak = point.cumulative_pnl
            drawdown = peak - point.cumulative_pnl
            if drawdown > max_drawdown:
                max_drawdown = drawdown

        return max_drawdown

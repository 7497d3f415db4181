# src/journal/charts.py
"""Plotly figures for the dashboard and calendar views."""
import plotly.graph_objects as go

from src.journal.models import CalendarMonth, PerformanceStats, TradeResult

RESULT_COLORS = {
    TradeResult.WIN: "#10b981",
    TradeResult.LOSS: "#ef4444",
    TradeResult.BREAKEVEN: "#6b7280",
}

RESULT_LABELS = {
    TradeResult.WIN: "Wins",
    TradeResult.LOSS: "Losses",
    TradeResult.BREAKEVEN: "BE",
}


def build_distribution_figure(stats: PerformanceStats) -> go.Figure:
    """Donut chart of wins, losses and breakevens."""
    slices = stats.distribution
    fig = go.Figure(
        data=[
            go.Pie(
                labels=[RESULT_LABELS[s.result] for s in slices],
                values=[s.count for s in slices],
                marker=dict(colors=[RESULT_COLORS[s.result] for s in slices]),
                hole=0.6,
                sort=False,
            )
        ]
    )
    fig.update_layout(title="Distribution", template="plotly_dark")
    return fig


def build_equity_figure(stats: PerformanceStats) -> go.Figure:
    """Cumulative P&L plotted against trade number."""
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=[p.trade_number for p in stats.equity_curve],
            y=[p.cumulative_pnl for p in stats.equity_curve],
            mode="lines+markers",
            name="Equity",
            line=dict(color="#3b82f6"),
        )
    )
    fig.update_layout(title="Equity Curve", template="plotly_dark", xaxis_title="Trade")
    return fig


def build_daily_pnl_figure(month: CalendarMonth) -> go.Figure:
    """Net P&L per traded day of the month."""
    traded_days = [d for d in month.days if d.in_month and d.has_trades]
    colors = ["#10b981" if d.net_pnl >= 0 else "#ef4444" for d in traded_days]
    fig = go.Figure(
        data=[
            go.Bar(
                x=[d.day.isoformat() for d in traded_days],
                y=[d.net_pnl for d in traded_days],
                marker_color=colors,
            )
        ]
    )
    fig.update_layout(title="P&L per Day", template="plotly_dark")
    return fig

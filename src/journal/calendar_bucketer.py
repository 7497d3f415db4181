# src/journal/calendar_bucketer.py
"""Buckets trades into a month calendar grid."""
import calendar
from collections import defaultdict
from datetime import date, timedelta

from src.journal.models import CalendarDay, CalendarMonth, Trade, TradeResult

WEEKDAY_INDEX = {"monday": 0, "sunday": 6}


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month (inclusive range)."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move a (year, month) pair by delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


class CalendarBucketer:
    """Builds the full-week grid shown by the calendar view.

    The grid starts on the week containing the 1st of the month and ends on
    the week containing its last day, so leading and trailing days of the
    adjacent months are included with in_month set to False.
    """

    def __init__(self, week_starts_on: str = "sunday") -> None:
        self._first_weekday = WEEKDAY_INDEX[week_starts_on]

    def grid_bounds(self, year: int, month: int) -> tuple[date, date]:
        """First and last day shown in the grid for a month."""
        first_day, last_day = month_bounds(year, month)
        start = first_day - timedelta(days=(first_day.weekday() - self._first_weekday) % 7)
        end = last_day + timedelta(days=(self._first_weekday - last_day.weekday() - 1) % 7)
        return start, end

    def build_month(self, year: int, month: int, trades: list[Trade]) -> CalendarMonth:
        """Build the calendar grid for a month.

        Args:
            year: Target year.
            month: Target month (1-12).
            trades: Trades to place on the grid. Trades dated outside the
                month are ignored, even when their day is shown in the grid.

        Returns:
            CalendarMonth with one CalendarDay per displayed day.
        """
        first_day, last_day = month_bounds(year, month)
        by_day: dict[date, list[Trade]] = defaultdict(list)
        for trade in trades:
            if first_day <= trade.date <= last_day:
                by_day[trade.date].append(trade)

        start, end = self.grid_bounds(year, month)

        weeks: list[list[CalendarDay]] = []
        week: list[CalendarDay] = []
        day = start
        while day <= end:
            in_month = day.year == year and day.month == month
            week.append(self._build_day(day, in_month, by_day.get(day, [])))
            if len(week) == 7:
                weeks.append(week)
                week = []
            day += timedelta(days=1)

        return CalendarMonth(year=year, month=month, weeks=weeks)

    def _build_day(self, day: date, in_month: bool, trades: list[Trade]) -> CalendarDay:
        return CalendarDay(
            day=day,
            in_month=in_month,
            trades=list(trades),
            net_pnl=sum(t.pnl for t in trades),
            wins=sum(1 for t in trades if t.result == TradeResult.WIN),
            losses=sum(1 for t in trades if t.result == TradeResult.LOSS),
            breakevens=sum(1 for t in trades if t.result == TradeResult.BREAKEVEN),
        )

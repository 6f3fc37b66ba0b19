# utils/forecast/formatters.py

"""
Formatters for Menu Forecast display
"""

from datetime import date
from typing import Any

import pandas as pd

from .constants import UI_CONFIG


def format_quantity(value: Any) -> str:
    """Whole numbers without decimals, otherwise up to 2 decimals"""
    if value is None or pd.isna(value):
        return '-'
    try:
        v = float(value)
    except (ValueError, TypeError):
        return str(value)
    if v.is_integer():
        return f"{int(v):,}"
    return f"{v:,.2f}".rstrip('0').rstrip('.')


class ForecastFormatter:
    """Formatter for forecast tables, cells and shortage nodes"""

    @staticmethod
    def format_number(value: Any, decimals: int = 0) -> str:
        """Format number with thousand separator"""
        if value is None or pd.isna(value):
            return '-'
        try:
            if decimals == 0:
                return f"{int(round(float(value))):,}"
            return f"{float(value):,.{decimals}f}"
        except (ValueError, TypeError):
            return str(value)

    @staticmethod
    def format_currency(value: Any, symbol: str = "Rp") -> str:
        if value is None or pd.isna(value):
            return '-'
        try:
            return f"{symbol} {float(value):,.0f}"
        except (ValueError, TypeError):
            return str(value)

    @staticmethod
    def format_cell_total(total: Any) -> str:
        """Summary table cell: '-' when nothing sold or forecast"""
        try:
            v = float(total)
        except (ValueError, TypeError):
            return '-'
        if pd.isna(v) or v <= 0:
            return '-'
        return format_quantity(v)

    @staticmethod
    def format_date_header(d: date) -> str:
        return f"{d.strftime(UI_CONFIG['date_format_header'])} ({d.strftime(UI_CONFIG['date_format_weekday'])})"

    @staticmethod
    def format_date_long(d: date) -> str:
        return d.strftime(UI_CONFIG['date_format_long'])


def get_formatter() -> ForecastFormatter:
    """Get formatter instance"""
    return ForecastFormatter()

# utils/forecast/result.py

"""
Result Container for Menu Forecast
Holds the loaded forecast days and derives the table, chart and
metric views from them
"""

import pandas as pd
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from .models import ForecastDay, ForecastItem


@dataclass
class InsufficientCell:
    """A forecast cell whose ingredients are not enough"""
    recipe_code: str
    recipe_name: str
    date: date
    value: float
    item: ForecastItem

    @property
    def key(self) -> str:
        return f"{self.recipe_code}@{self.date.isoformat()}"


@dataclass
class ForecastResult:
    """Processed forecast for the selected recipes"""

    days: List[ForecastDay] = field(default_factory=list)
    recipe_codes: List[str] = field(default_factory=list)
    branch_id: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        self.days = sorted(self.days, key=lambda d: d.date)

    # =========================================================================
    # RECIPES & DATES
    # =========================================================================

    def get_recipes(self) -> List[Tuple[str, str]]:
        """Unique (code, name) pairs in first-seen order across dates"""
        seen: Dict[str, str] = {}
        for day in self.days:
            for item in day.items:
                if item.recipe_code not in seen:
                    seen[item.recipe_code] = item.recipe_name
        return list(seen.items())

    def get_dates(self) -> List[date]:
        dates = []
        for day in self.days:
            if day.date not in dates:
                dates.append(day.date)
        return dates

    def find_item(self, recipe_code: str, on: date) -> Optional[ForecastItem]:
        for day in self.days:
            if day.date == on:
                item = day.find_item(recipe_code)
                if item is not None:
                    return item
        return None

    # =========================================================================
    # TABLE VIEWS
    # =========================================================================

    def get_items_df(self) -> pd.DataFrame:
        """One row per (date, recipe) forecast item"""
        records = []
        for day in self.days:
            for item in day.items:
                records.append({
                    'date': day.date,
                    'recipe_code': item.recipe_code,
                    'recipe_name': item.recipe_name,
                    'type': item.type,
                    'value': item.value,
                    'is_ingredients_enough': item.is_ingredients_enough,
                    'shortage_count': len(item.not_enough_items)
                })

        columns = ['date', 'recipe_code', 'recipe_name', 'type', 'value',
                   'is_ingredients_enough', 'shortage_count']
        return pd.DataFrame(records, columns=columns)

    def get_summary_pivot(self) -> pd.DataFrame:
        """Recipes as rows, dates ascending as columns, summed values"""
        items = self.get_items_df()
        if items.empty:
            return pd.DataFrame()

        pivot = items.pivot_table(
            index=['recipe_code', 'recipe_name'],
            columns='date',
            values='value',
            aggfunc='sum',
            fill_value=0
        )

        order = {code: i for i, (code, _) in enumerate(self.get_recipes())}
        rows = sorted(pivot.index, key=lambda idx: order.get(idx[0], len(order)))
        pivot = pivot.reindex(pd.MultiIndex.from_tuples(rows, names=pivot.index.names))
        return pivot[sorted(pivot.columns)]

    def get_cell_types(self) -> pd.DataFrame:
        """Same shape as the pivot: 'real', 'forecast', 'insufficient' or ''"""
        pivot = self.get_summary_pivot()
        if pivot.empty:
            return pivot

        types = pd.DataFrame('', index=pivot.index, columns=pivot.columns)
        for (code, name) in pivot.index:
            for d in pivot.columns:
                item = self.find_item(code, d)
                if item is None:
                    continue
                if item.is_forecast and not item.is_ingredients_enough:
                    types.loc[(code, name), d] = 'insufficient'
                else:
                    types.loc[(code, name), d] = item.type
        return types

    def get_chart_df(self) -> pd.DataFrame:
        """Total per date split into real and forecast"""
        records = {}
        for day in self.days:
            row = records.setdefault(day.date, {'date': day.date, 'real': 0.0, 'forecast': 0.0})
            if day.type in ('real', 'forecast'):
                row[day.type] = day.total

        if not records:
            return pd.DataFrame(columns=['date', 'real', 'forecast'])
        return pd.DataFrame(sorted(records.values(), key=lambda r: r['date']))

    # =========================================================================
    # INSUFFICIENT INGREDIENTS
    # =========================================================================

    def get_insufficient_cells(self) -> List[InsufficientCell]:
        """Forecast cells that can open the supplier contact dialog"""
        cells = []
        for day in self.days:
            for item in day.items:
                if item.needs_supplier_contact:
                    cells.append(InsufficientCell(
                        recipe_code=item.recipe_code,
                        recipe_name=item.recipe_name,
                        date=day.date,
                        value=item.value,
                        item=item
                    ))
        return cells

    # =========================================================================
    # METRICS
    # =========================================================================

    def get_metrics(self) -> Dict[str, Any]:
        real_total = 0.0
        forecast_total = 0.0
        real_items = 0
        forecast_items = 0

        for day in self.days:
            for item in day.items:
                if item.type == 'real':
                    real_total += item.value
                    real_items += 1
                elif item.type == 'forecast':
                    forecast_total += item.value
                    forecast_items += 1

        return {
            'real_total': real_total,
            'forecast_total': forecast_total,
            'real_items': real_items,
            'forecast_items': forecast_items,
            'data_points': len(self.days),
            'recipe_count': len(self.get_recipes()),
            'insufficient_count': len(self.get_insufficient_cells())
        }

    def get_summary(self) -> Dict[str, Any]:
        metrics = self.get_metrics()
        return {
            'timestamp': self.timestamp.strftime('%Y-%m-%d %H:%M'),
            'branch_id': self.branch_id,
            'recipes': len(self.recipe_codes),
            'days': metrics['data_points'],
            'insufficient_cells': metrics['insufficient_count']
        }

    def has_data(self) -> bool:
        return len(self.days) > 0

# utils/forecast/export.py

"""
Export Module for Menu Forecast
Multi-sheet Excel export: summary, forecast items, shortage trees
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import Optional

import pandas as pd

from .constants import EXPORT_CONFIG
from .result import ForecastResult
from .shortage import shortage_tree_to_df

logger = logging.getLogger(__name__)

SHEETS = EXPORT_CONFIG['sheets']


def export_to_excel(result: ForecastResult, branch_name: Optional[str] = None) -> BytesIO:
    """
    Export forecast results to Excel.

    Sheets:
    - Summary
    - Forecast (one row per date and recipe)
    - Shortages (flattened not_enough_items trees of insufficient cells)

    Returns:
        BytesIO buffer containing Excel file
    """

    buffer = BytesIO()

    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        _write_summary_sheet(writer, result, branch_name)
        _write_forecast_sheet(writer, result)
        _write_shortage_sheet(writer, result)

        for worksheet in writer.sheets.values():
            _autofit_columns(worksheet)

    buffer.seek(0)
    return buffer


def _write_summary_sheet(writer: pd.ExcelWriter, result: ForecastResult, branch_name: Optional[str]):
    """Write summary sheet"""

    metrics = result.get_metrics()

    data = [
        ['Menu Forecast - Summary', ''],
        ['Generated', datetime.now().strftime('%Y-%m-%d %H:%M:%S')],
        ['Loaded', result.timestamp.strftime('%Y-%m-%d %H:%M:%S')],
        ['Branch', branch_name or result.branch_id or ''],
        ['', ''],
        ['Recipes', metrics['recipe_count']],
        ['Data Points', metrics['data_points']],
        ['Real Sales', metrics['real_total']],
        ['Forecast Sales', metrics['forecast_total']],
        ['Insufficient Cells', metrics['insufficient_count']]
    ]

    df = pd.DataFrame(data, columns=['Metric', 'Value'])
    df.to_excel(writer, sheet_name=SHEETS['summary'], index=False)


def _write_forecast_sheet(writer: pd.ExcelWriter, result: ForecastResult):
    """Write forecast items sheet"""

    df = result.get_items_df()

    if df.empty:
        pd.DataFrame({'Note': ['No forecast data']}).to_excel(
            writer, sheet_name=SHEETS['forecast'], index=False
        )
        return

    export_df = df.copy()
    export_df['is_ingredients_enough'] = export_df['is_ingredients_enough'].apply(
        lambda x: 'Yes' if x else 'No'
    )
    export_df.rename(columns={
        'date': 'Date',
        'recipe_code': 'Recipe Code',
        'recipe_name': 'Recipe Name',
        'type': 'Type',
        'value': 'Value',
        'is_ingredients_enough': 'Ingredients Enough',
        'shortage_count': 'Short Ingredients'
    }, inplace=True)

    export_df.to_excel(writer, sheet_name=SHEETS['forecast'], index=False)


def _write_shortage_sheet(writer: pd.ExcelWriter, result: ForecastResult):
    """Write one block of rows per insufficient forecast cell"""

    frames = []
    for cell in result.get_insufficient_cells():
        tree_df = shortage_tree_to_df(cell.item.not_enough_items)
        if tree_df.empty:
            continue
        tree_df.insert(0, 'forecast_date', cell.date)
        tree_df.insert(1, 'recipe_code', cell.recipe_code)
        tree_df.insert(2, 'recipe_name', cell.recipe_name)
        frames.append(tree_df)

    if not frames:
        pd.DataFrame({'Note': ['All ingredients sufficient']}).to_excel(
            writer, sheet_name=SHEETS['shortages'], index=False
        )
        return

    export_df = pd.concat(frames, ignore_index=True)
    export_df.rename(columns={
        'forecast_date': 'Forecast Date',
        'recipe_code': 'Recipe Code',
        'recipe_name': 'Recipe Name',
        'level': 'Level',
        'item_id': 'Item ID',
        'code': 'Item Code',
        'name': 'Item Name',
        'type': 'Type',
        'unit': 'Unit',
        'quantity': 'Need',
        'stock': 'Available',
        'shortage': 'Shortage',
        'status': 'Status'
    }, inplace=True)

    export_df.to_excel(writer, sheet_name=SHEETS['shortages'], index=False)


def _autofit_columns(worksheet):
    max_width = EXPORT_CONFIG['max_column_width']
    for column in worksheet.columns:
        max_length = 0
        column_letter = column[0].column_letter
        for cell in column:
            if cell.value is not None:
                max_length = max(max_length, len(str(cell.value)))
        worksheet.column_dimensions[column_letter].width = min(max_length + 2, max_width)


def get_export_filename(prefix: str = EXPORT_CONFIG['filename_prefix']) -> str:
    """Generate export filename with timestamp"""
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return f"{prefix}_{timestamp}.xlsx"

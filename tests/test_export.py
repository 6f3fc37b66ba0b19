# tests/test_export.py

from datetime import date

from openpyxl import load_workbook

from utils.forecast.export import export_to_excel, get_export_filename
from utils.forecast.models import ForecastDay, ForecastItem
from utils.forecast.result import ForecastResult


def test_workbook_sheets(gudeg_tree):
    day = ForecastDay(date=date(2025, 1, 11), total=5, type='forecast', items=[
        ForecastItem(recipe_code='R-001', recipe_name='Gudeg', type='forecast', value=5,
                     is_ingredients_enough=False, not_enough_items=gudeg_tree)
    ])
    result = ForecastResult(days=[day], recipe_codes=['R-001'], branch_id='b1')

    workbook = load_workbook(export_to_excel(result, 'Malioboro'))

    assert workbook.sheetnames == ['Summary', 'Forecast', 'Shortages']
    shortages = workbook['Shortages']
    header = [c.value for c in shortages[1]]
    assert header[:3] == ['Forecast Date', 'Recipe Code', 'Recipe Name']
    assert shortages.max_row == 3


def test_empty_result_still_exports():
    workbook = load_workbook(export_to_excel(ForecastResult()))
    assert workbook['Shortages']['A2'].value == 'All ingredients sufficient'


def test_filename():
    name = get_export_filename()
    assert name.startswith('menu_forecast_')
    assert name.endswith('.xlsx')

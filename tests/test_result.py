# tests/test_result.py

from datetime import date

import pytest

from utils.forecast.models import ForecastDay
from utils.forecast.result import ForecastResult


def _payload():
    """Two real days and one forecast day, listed out of order"""
    return [
        {
            'date': '2025-01-11T00:00:00Z', 'total': 12, 'type': 'forecast',
            'items': [
                {'recipe_code': 'R-001', 'recipe_name': 'Gudeg', 'type': 'forecast', 'value': 8,
                 'is_ingredients_enough': False,
                 'not_enough_items': [{'type': 'inventory_purchased', 'id': 'i1', 'name': 'Nangka',
                                       'quantity': 40, 'stock': 0}]},
                {'recipe_code': 'R-002', 'recipe_name': 'Soto', 'type': 'forecast', 'value': 4,
                 'is_ingredients_enough': True},
            ]
        },
        {
            'date': '2025-01-09', 'total': 5, 'type': 'real',
            'items': [
                {'recipe_code': 'R-002', 'recipe_name': 'Soto', 'type': 'real', 'value': 2},
                {'recipe_code': 'R-001', 'recipe_name': 'Gudeg', 'type': 'real', 'value': 3},
            ]
        },
        {
            'date': '2025-01-10', 'total': 6, 'type': 'real',
            'items': [
                {'recipe_code': 'R-001', 'recipe_name': 'Gudeg', 'type': 'real', 'value': 6,
                 'is_ingredients_enough': False},
            ]
        },
    ]


@pytest.fixture
def result():
    days = [ForecastDay.from_dict(row) for row in _payload()]
    return ForecastResult(days=days, recipe_codes=['R-001', 'R-002'], branch_id='b1')


def test_days_sorted_by_date(result):
    assert result.get_dates() == [date(2025, 1, 9), date(2025, 1, 10), date(2025, 1, 11)]


def test_recipes_in_first_seen_order(result):
    assert result.get_recipes() == [('R-002', 'Soto'), ('R-001', 'Gudeg')]


def test_summary_pivot(result):
    pivot = result.get_summary_pivot()

    assert list(pivot.index.get_level_values('recipe_code')) == ['R-002', 'R-001']
    assert list(pivot.columns) == result.get_dates()
    assert pivot.loc[('R-001', 'Gudeg'), date(2025, 1, 10)] == 6
    assert pivot.loc[('R-002', 'Soto'), date(2025, 1, 10)] == 0


def test_cell_types(result):
    types = result.get_cell_types()

    assert types.loc[('R-001', 'Gudeg'), date(2025, 1, 11)] == 'insufficient'
    assert types.loc[('R-002', 'Soto'), date(2025, 1, 11)] == 'forecast'
    # real cells are never flagged even if the backend says not enough
    assert types.loc[('R-001', 'Gudeg'), date(2025, 1, 10)] == 'real'
    assert types.loc[('R-002', 'Soto'), date(2025, 1, 10)] == ''


def test_insufficient_cells_only_forecast_with_tree(result):
    cells = result.get_insufficient_cells()

    assert len(cells) == 1
    assert cells[0].key == 'R-001@2025-01-11'
    assert cells[0].item.not_enough_items[0].id == 'i1'


def test_chart_df(result):
    chart = result.get_chart_df()

    assert list(chart['real']) == [5, 6, 0]
    assert list(chart['forecast']) == [0, 0, 12]


def test_metrics(result):
    metrics = result.get_metrics()

    assert metrics['real_total'] == 11
    assert metrics['forecast_total'] == 12
    assert metrics['data_points'] == 3
    assert metrics['recipe_count'] == 2
    assert metrics['insufficient_count'] == 1


def test_empty_result():
    result = ForecastResult()

    assert not result.has_data()
    assert result.get_summary_pivot().empty
    assert result.get_cell_types().empty
    assert result.get_chart_df().empty
    assert result.get_insufficient_cells() == []


def test_missing_enough_flag_means_enough():
    day = ForecastDay.from_dict({
        'date': '2025-02-01', 'total': 1, 'type': 'forecast',
        'items': [{'recipe_code': 'R', 'recipe_name': 'R', 'type': 'forecast', 'value': 1}]
    })
    assert day.items[0].is_ingredients_enough
    assert not day.items[0].needs_supplier_contact


def test_bad_date_raises():
    with pytest.raises(ValueError):
        ForecastDay.from_dict({'date': '', 'items': []})


def test_non_list_trees_are_ignored():
    day = ForecastDay.from_dict({
        'date': '2025-02-01', 'total': 1, 'type': 'forecast',
        'items': [{'recipe_code': 'R', 'recipe_name': 'R', 'type': 'forecast', 'value': 1,
                   'is_ingredients_enough': False, 'not_enough_items': 1}]
    })
    assert day.items[0].not_enough_items == []
    assert not day.items[0].needs_supplier_contact

    assert ForecastDay.from_dict({'date': '2025-02-01', 'items': True}).items == []

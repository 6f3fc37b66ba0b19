# tests/test_state.py

from datetime import date
from unittest.mock import MagicMock

import pytest

from utils.forecast.models import ForecastDay, ForecastItem
from utils.forecast.result import ForecastResult, InsufficientCell
from utils.forecast.state import ForecastStateManager


@pytest.fixture
def state():
    return ForecastStateManager(store={})


@pytest.fixture
def cell(nested_tree):
    item = ForecastItem(
        recipe_code='R-002', recipe_name='Nasi Goreng', type='forecast',
        value=10, is_ingredients_enough=False, not_enough_items=nested_tree
    )
    return InsufficientCell(
        recipe_code='R-002', recipe_name='Nasi Goreng',
        date=date(2025, 1, 10), value=10, item=item
    )


def _result():
    day = ForecastDay(date=date(2025, 1, 10), total=3, type='real', items=[
        ForecastItem(recipe_code='R-001', recipe_name='Gudeg', type='real', value=3)
    ])
    return ForecastResult(days=[day], recipe_codes=['R-001'], branch_id='b1')


class TestRecipeSelection:

    def test_toggle_and_dedupe(self, state):
        state.toggle_recipe('R-001')
        state.toggle_recipe('R-002')
        state.toggle_recipe('R-001')
        assert state.get_selected_recipes() == ['R-002']

        state.set_selected_recipes(['R-002', 'R-003', 'R-002'])
        assert state.get_selected_recipes() == ['R-002', 'R-003']

    def test_branch_change_clears_selection_and_result(self, state):
        state.set_branch_id('b1')
        state.set_selected_recipes(['R-001'])
        state.set_result(_result())

        state.set_branch_id('b1')
        assert state.has_result()

        state.set_branch_id('b2')
        assert state.get_selected_recipes() == []
        assert not state.has_result()


class TestDialog:

    def test_open_seeds_selection_with_leaves(self, state, cell):
        state.open_dialog(cell, MagicMock())

        assert state.is_dialog_open()
        assert state.get_dialog_cell() is cell
        assert state.get_supplier_selection() == {'i2': None, 'i3': None}
        assert state.get_combobox('i2').item_id == 'i2'
        assert state.get_combobox('missing') is None

    def test_reopen_resets_selection(self, state, cell, supplier):
        state.open_dialog(cell, MagicMock())
        state.select_supplier('i2', supplier)
        assert state.get_selected_supplier('i2') == supplier

        state.close_dialog()
        state.open_dialog(cell, MagicMock())

        assert state.get_supplier_selection() == {'i2': None, 'i3': None}

    def test_unknown_item_is_ignored(self, state, cell, supplier):
        state.open_dialog(cell, MagicMock())
        state.select_supplier('nope', supplier)
        assert 'nope' not in state.get_supplier_selection()

    def test_combobox_selection_reaches_state(self, state, cell, supplier):
        lookup = MagicMock(return_value=[supplier])
        state.open_dialog(cell, lookup)

        box = state.get_combobox('i3')
        box.bind(on_select=lambda s: state.select_supplier('i3', s))
        box.open()
        box.select_index(0)

        lookup.assert_called_once_with('i3', '')
        assert state.get_selected_supplier('i3') == supplier
        assert state.get_selected_supplier('i2') is None

    def test_selection_copy_is_detached(self, state, cell, supplier):
        state.open_dialog(cell, MagicMock())
        snapshot = state.get_supplier_selection()
        snapshot['i2'] = supplier
        assert state.get_selected_supplier('i2') is None

    def test_new_result_closes_dialog(self, state, cell):
        state.open_dialog(cell, MagicMock())
        state.set_result(_result())
        assert not state.is_dialog_open()
        assert state.get_dialog_nodes() == []
        assert state.get_last_loaded() is not None

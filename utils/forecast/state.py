# utils/forecast/state.py

"""
Session State Management for Menu Forecast

The supplier dialog owns a SupplierSelection map (item id -> chosen
supplier or None) and one combobox per purchased-inventory leaf. Both
are rebuilt whenever the dialog opens and dropped when it closes.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, MutableMapping, Optional, Sequence

import streamlit as st

from .models import ShortageNode, Supplier
from .result import ForecastResult, InsufficientCell
from .shortage import collect_leaves
from .supplier_search import LookupFn, SupplierCombobox

logger = logging.getLogger(__name__)


class ForecastStateManager:
    """Manages session state for the forecast page and supplier dialog"""

    STATE_KEY = 'menu_forecast_data'

    def __init__(self, store: Optional[MutableMapping[str, Any]] = None):
        self._store = store if store is not None else st.session_state
        self._ensure_state()

    def _ensure_state(self):
        """Ensure state exists in session"""
        if self.STATE_KEY not in self._store:
            self._store[self.STATE_KEY] = {
                'branch_id': None,
                'selected_recipes': [],
                'result': None,
                'last_loaded': None,
                'recommendations': None,
                'dialog': None
            }

    @property
    def _data(self) -> Dict[str, Any]:
        return self._store[self.STATE_KEY]

    # =========================================================================
    # BRANCH & RECIPE SELECTION
    # =========================================================================

    def get_branch_id(self) -> Optional[str]:
        return self._data.get('branch_id')

    def set_branch_id(self, branch_id: Optional[str]):
        """Switching branch invalidates the selection and the result"""
        if branch_id == self._data.get('branch_id'):
            return
        self._data['branch_id'] = branch_id
        self._data['selected_recipes'] = []
        self.clear_result()
        logger.info(f"Branch changed to {branch_id}, cleared forecast")

    def get_selected_recipes(self) -> List[str]:
        return list(self._data.get('selected_recipes', []))

    def set_selected_recipes(self, codes: Sequence[str]):
        self._data['selected_recipes'] = list(dict.fromkeys(codes))

    def toggle_recipe(self, code: str):
        selected = self.get_selected_recipes()
        if code in selected:
            selected.remove(code)
        else:
            selected.append(code)
        self._data['selected_recipes'] = selected

    def clear_selection(self):
        self._data['selected_recipes'] = []

    # =========================================================================
    # RESULT MANAGEMENT
    # =========================================================================

    def get_result(self) -> Optional[ForecastResult]:
        return self._data.get('result')

    def set_result(self, result: ForecastResult):
        self._data['result'] = result
        self._data['last_loaded'] = datetime.now()
        self._data['recommendations'] = None
        self.close_dialog()
        logger.info(f"Stored forecast: {result.get_summary()}")

    def has_result(self) -> bool:
        return self._data.get('result') is not None

    def clear_result(self):
        self._data['result'] = None
        self._data['recommendations'] = None
        self.close_dialog()

    def get_last_loaded(self) -> Optional[datetime]:
        return self._data.get('last_loaded')

    def get_recommendations(self) -> Optional[Dict[str, Any]]:
        return self._data.get('recommendations')

    def set_recommendations(self, data: Optional[Dict[str, Any]]):
        self._data['recommendations'] = data

    # =========================================================================
    # SUPPLIER DIALOG
    # =========================================================================

    def open_dialog(self, cell: InsufficientCell, lookup: LookupFn):
        """
        Open the supplier dialog for one forecast cell.

        Always starts from a fresh selection map seeded with the cell's
        purchased-inventory leaves.
        """
        nodes = cell.item.not_enough_items
        leaves = collect_leaves(nodes)

        self._data['dialog'] = {
            'cell': cell,
            'nodes': nodes,
            'selection': {leaf.id: None for leaf in leaves},
            'comboboxes': {
                leaf.id: SupplierCombobox(item_id=leaf.id, lookup=lookup)
                for leaf in leaves
            }
        }
        logger.info(f"Supplier dialog opened for {cell.key} with {len(leaves)} purchasable items")

    def close_dialog(self):
        if self._data.get('dialog') is not None:
            logger.debug("Supplier dialog closed")
        self._data['dialog'] = None

    def is_dialog_open(self) -> bool:
        return self._data.get('dialog') is not None

    def get_dialog_cell(self) -> Optional[InsufficientCell]:
        dialog = self._data.get('dialog')
        return dialog['cell'] if dialog else None

    def get_dialog_nodes(self) -> List[ShortageNode]:
        dialog = self._data.get('dialog')
        return list(dialog['nodes']) if dialog else []

    def get_supplier_selection(self) -> Dict[str, Optional[Supplier]]:
        dialog = self._data.get('dialog')
        return dict(dialog['selection']) if dialog else {}

    def select_supplier(self, item_id: str, supplier: Optional[Supplier]):
        """Record a pick for a leaf that belongs to the open dialog"""
        dialog = self._data.get('dialog')
        if not dialog or item_id not in dialog['selection']:
            logger.warning(f"Ignoring supplier pick for unknown item {item_id}")
            return
        dialog['selection'][item_id] = supplier

    def get_selected_supplier(self, item_id: str) -> Optional[Supplier]:
        dialog = self._data.get('dialog')
        if not dialog:
            return None
        return dialog['selection'].get(item_id)

    def get_combobox(self, item_id: str) -> Optional[SupplierCombobox]:
        dialog = self._data.get('dialog')
        if not dialog:
            return None
        return dialog['comboboxes'].get(item_id)


def get_state(store: Optional[MutableMapping[str, Any]] = None) -> ForecastStateManager:
    """Get or create state manager"""
    if store is not None:
        return ForecastStateManager(store)
    if 'menu_forecast_state' not in st.session_state:
        st.session_state.menu_forecast_state = ForecastStateManager()
    return st.session_state.menu_forecast_state

# utils/forecast/data_loader.py

"""
Data Loader for Menu Forecast
Service wrappers over the backend API: branches, recipes, processed
forecast, suppliers for an item, PIC alerts and AI recommendations
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Sequence

from utils.api_client import BackendAPIError, BackendClient, get_backend_client

from .constants import (
    ENDPOINTS, RECIPE_CODE_SEPARATOR, RECIPE_PAGE_LIMIT, TYPE_FINISHED
)
from .models import Branch, ForecastDay, Recipe, Supplier, SupplierItem, as_list

logger = logging.getLogger(__name__)


class ForecastDataLoader:
    """
    Loads forecast-related data from the backend service.
    Primary data (forecast, recipes) raises BackendAPIError on failure;
    optional data degrades to empty results.
    """

    def __init__(self, client: Optional[BackendClient] = None):
        self._client = client

    @property
    def client(self) -> BackendClient:
        if self._client is None:
            self._client = get_backend_client()
        return self._client

    # =========================================================================
    # BRANCHES
    # =========================================================================

    def load_branches(self) -> List[Branch]:
        """Load all branches; empty list when unavailable"""
        try:
            payload = _as_object(self.client.get(ENDPOINTS['branches']))
        except BackendAPIError as e:
            logger.warning(f"Could not load branches: {e}")
            return []

        rows = as_list(payload.get('data') or payload.get('branches'))
        branches = [Branch.from_dict(row) for row in rows if isinstance(row, dict)]
        logger.info(f"Loaded {len(branches)} branches")
        return branches

    # =========================================================================
    # RECIPES
    # =========================================================================

    def load_recipes(
        self,
        branch_id: Optional[str] = None,
        page: int = 1,
        limit: int = RECIPE_PAGE_LIMIT
    ) -> List[Recipe]:
        """Load recipes of a branch (one large page)"""
        params = {'page': page, 'limit': limit, 'branch_id': branch_id or None}
        payload = _as_object(self.client.get(ENDPOINTS['recipes'], params=params))

        rows = as_list(payload.get('results'))
        recipes = [Recipe.from_dict(row) for row in rows if isinstance(row, dict)]
        logger.info(f"Loaded {len(recipes)} recipes")
        return recipes

    def load_menu_recipes(self, branch_id: Optional[str] = None) -> List[Recipe]:
        """Only finished recipes can be forecast"""
        return [r for r in self.load_recipes(branch_id) if r.type == TYPE_FINISHED]

    # =========================================================================
    # FORECAST
    # =========================================================================

    def load_processed_forecast(
        self,
        branch_id: str,
        recipe_codes: Optional[Sequence[str]] = None
    ) -> List[ForecastDay]:
        """Load the processed forecast, including not_enough_items trees"""
        if not branch_id:
            raise BackendAPIError("No branch selected")

        params: Dict[str, Any] = {}
        if recipe_codes:
            params['recipe_codes'] = RECIPE_CODE_SEPARATOR.join(recipe_codes)
        params['branch_id'] = branch_id

        payload = _as_object(self.client.get(ENDPOINTS['forecast'], params=params))

        rows = as_list(payload.get('data'))
        days = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            try:
                days.append(ForecastDay.from_dict(row))
            except ValueError as e:
                logger.warning(f"Skipping forecast entry: {e}")

        logger.info(f"Loaded {len(days)} forecast days for {len(recipe_codes or [])} recipes")
        return days

    # =========================================================================
    # SUPPLIERS
    # =========================================================================

    def load_supplier_items(self, item_id: str, search: str = '') -> List[SupplierItem]:
        """Supplier associations for an item, filtered server-side"""
        path = ENDPOINTS['suppliers_for_item'].format(item_id=item_id)
        params = {'search': search} if search else None

        payload = _as_object(self.client.get(path, params=params))

        rows = as_list(payload.get('supplier_items'))
        return [SupplierItem.from_dict(row) for row in rows if isinstance(row, dict)]

    def search_suppliers_for_item(self, item_id: str, search: str = '') -> List[Supplier]:
        """Unwrap supplier associations to their supplier records"""
        items = self.load_supplier_items(item_id, search)
        suppliers = [si.supplier for si in items if si.supplier is not None]
        logger.info(f"Found {len(suppliers)} suppliers for item {item_id} (search='{search}')")
        return suppliers

    # =========================================================================
    # ALERTS
    # =========================================================================

    def send_alert_email(self, branch_id: str) -> str:
        """Ask the backend to email out-of-stock alerts to the branch PICs"""
        payload = _as_object(self.client.get(ENDPOINTS['alert_email'], params={'branch_id': branch_id}))
        return payload.get('message') or "Alert email sent"

    def send_alert_whatsapp(self, branch_id: str) -> str:
        """Ask the backend to WhatsApp out-of-stock alerts to the branch PICs"""
        payload = _as_object(self.client.get(ENDPOINTS['alert_whatsapp'], params={'branch_id': branch_id}))
        return payload.get('message') or "Alert WhatsApp sent"

    # =========================================================================
    # AI RECOMMENDATIONS
    # =========================================================================

    def load_recommendations(
        self,
        forecast_days: Sequence[ForecastDay],
        recipe_codes: Sequence[str]
    ) -> Optional[Dict[str, Any]]:
        """AI ingredient purchase recommendations; None when unavailable"""
        body = {
            'forecast_data': [_day_to_payload(day) for day in forecast_days],
            'recipe_codes': list(recipe_codes),
            'recommendation_type': 'ingredient_purchase'
        }

        try:
            payload = _as_object(self.client.post(ENDPOINTS['recommendations'], json=body))
        except BackendAPIError as e:
            logger.warning(f"Could not load recommendations: {e}")
            return None

        data = payload.get('data')
        return data if isinstance(data, dict) else None


def _as_object(payload: Any) -> Dict[str, Any]:
    """Backend responses are JSON objects; anything else is treated as empty"""
    return payload if isinstance(payload, dict) else {}


def _day_to_payload(day: ForecastDay) -> Dict[str, Any]:
    data = asdict(day)
    data['date'] = day.date.isoformat()
    return data


# Singleton
_data_loader_instance = None


def get_data_loader() -> ForecastDataLoader:
    """Get singleton data loader instance"""
    global _data_loader_instance
    if _data_loader_instance is None:
        _data_loader_instance = ForecastDataLoader()
    return _data_loader_instance

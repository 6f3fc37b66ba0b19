# tests/test_data_loader.py

from datetime import date
from unittest.mock import MagicMock

import pytest

from utils.api_client import BackendAPIError
from utils.forecast.data_loader import ForecastDataLoader
from utils.forecast.models import ForecastDay


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def loader(client):
    return ForecastDataLoader(client=client)


class TestRecipes:

    def test_recipes_request(self, loader, client):
        client.get.return_value = {'results': [
            {'id': 1, 'code': 'R-001', 'name': 'Gudeg', 'type': 'finished'},
            {'id': 2, 'code': 'HF-01', 'name': 'Bumbu', 'type': 'half_finished'},
        ]}

        recipes = loader.load_recipes('b1')

        client.get.assert_called_once_with(
            'v1/recipes', params={'page': 1, 'limit': 1000, 'branch_id': 'b1'}
        )
        assert [r.code for r in recipes] == ['R-001', 'HF-01']

    def test_menu_recipes_are_finished_only(self, loader, client):
        client.get.return_value = {'results': [
            {'code': 'R-001', 'name': 'Gudeg', 'type': 'finished'},
            {'code': 'HF-01', 'name': 'Bumbu', 'type': 'half_finished'},
        ]}
        assert [r.code for r in loader.load_menu_recipes('b1')] == ['R-001']

    def test_errors_propagate(self, loader, client):
        client.get.side_effect = BackendAPIError("boom", 500)
        with pytest.raises(BackendAPIError):
            loader.load_recipes('b1')


class TestForecast:

    def test_codes_joined_with_semicolon(self, loader, client):
        client.get.return_value = {'data': [
            {'date': '2025-01-10', 'total': 3, 'type': 'real', 'items': []},
            {'date': None, 'total': 1, 'type': 'real', 'items': []},
        ]}

        days = loader.load_processed_forecast('b1', ['R-001', 'R-002'])

        client.get.assert_called_once_with(
            'v1/forecast/processed',
            params={'recipe_codes': 'R-001;R-002', 'branch_id': 'b1'}
        )
        assert [d.date for d in days] == [date(2025, 1, 10)]

    def test_requires_branch(self, loader, client):
        with pytest.raises(BackendAPIError):
            loader.load_processed_forecast('', ['R-001'])
        client.get.assert_not_called()

    def test_non_object_payload_is_empty(self, loader, client):
        client.get.return_value = ['unexpected']
        assert loader.load_processed_forecast('b1', ['R-001']) == []


class TestSuppliers:

    def test_search_unwraps_supplier_items(self, loader, client):
        client.get.return_value = {'supplier_items': [
            {'supplier_id': 's1', 'item_id': 'i1', 'moq': 5, 'price': 12000,
             'supplier': {'id': 's1', 'name': 'Toko Segar', 'whatsapp_number': '+62 811'}},
            {'supplier_id': 's2', 'item_id': 'i1', 'supplier': None},
        ]}

        suppliers = loader.search_suppliers_for_item('i1', 'toko')

        client.get.assert_called_once_with('v1/suppliers/items/i1', params={'search': 'toko'})
        assert [s.name for s in suppliers] == ['Toko Segar']

    def test_empty_search_sends_no_params(self, loader, client):
        client.get.return_value = {'supplier_items': []}
        assert loader.search_suppliers_for_item('i1') == []
        client.get.assert_called_once_with('v1/suppliers/items/i1', params=None)


class TestOptionalData:

    def test_branches_degrade_to_empty(self, loader, client):
        client.get.side_effect = BackendAPIError("down")
        assert loader.load_branches() == []

    def test_branches(self, loader, client):
        client.get.return_value = {'data': [{'id': 'b1', 'name': 'Malioboro'}]}
        branches = loader.load_branches()
        client.get.assert_called_once_with('v1/branches')
        assert branches[0].name == 'Malioboro'

    def test_alerts(self, loader, client):
        client.get.return_value = {'message': 'Email sent to 2 PICs'}

        assert loader.send_alert_email('b1') == 'Email sent to 2 PICs'
        client.get.assert_called_with('v1/forecast/out-of-stock-email', params={'branch_id': 'b1'})

        client.get.return_value = {}
        assert loader.send_alert_whatsapp('b1') == 'Alert WhatsApp sent'
        client.get.assert_called_with('v1/forecast/out-of-stock-whatsapp', params={'branch_id': 'b1'})

    def test_recommendations_body(self, loader, client):
        client.post.return_value = {'data': {'total_estimated_cost': 1000, 'ingredients': []}}
        day = ForecastDay(date=date(2025, 1, 10), total=3, type='forecast')

        data = loader.load_recommendations([day], ['R-001'])

        assert data['total_estimated_cost'] == 1000
        path = client.post.call_args.args[0]
        body = client.post.call_args.kwargs['json']
        assert path == 'recommendations/ingredients'
        assert body['recipe_codes'] == ['R-001']
        assert body['forecast_data'][0]['date'] == '2025-01-10'

    def test_recommendations_failure_is_none(self, loader, client):
        client.post.side_effect = BackendAPIError("down")
        assert loader.load_recommendations([], []) is None


class TestMalformedPayloads:

    def test_non_list_supplier_items(self, loader, client):
        client.get.return_value = {'supplier_items': 5}
        assert loader.search_suppliers_for_item('i1') == []

    def test_non_list_forecast_data(self, loader, client):
        client.get.return_value = {'data': {'date': '2025-01-10'}}
        assert loader.load_processed_forecast('b1', ['R-001']) == []

    def test_non_list_tree_inside_forecast(self, loader, client):
        client.get.return_value = {'data': [{
            'date': '2025-01-10', 'total': 3, 'type': 'forecast',
            'items': [{'recipe_code': 'R-001', 'type': 'forecast', 'value': 3,
                       'is_ingredients_enough': False, 'not_enough_items': True}]
        }]}

        days = loader.load_processed_forecast('b1', ['R-001'])

        assert days[0].items[0].not_enough_items == []

    def test_non_list_recipes_and_branches(self, loader, client):
        client.get.return_value = {'results': 'none', 'data': 7}
        assert loader.load_recipes('b1') == []
        assert loader.load_branches() == []

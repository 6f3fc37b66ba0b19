# tests/conftest.py

import pytest

from utils.forecast.models import ShortageNode, Supplier


@pytest.fixture
def gudeg_tree():
    """One finished recipe short on one purchased ingredient"""
    return [
        ShortageNode.from_dict({
            'type': 'finished',
            'name': 'Gudeg',
            'code': 'R-001',
            'unit': 'portion',
            'quantity': 5,
            'stock': 0,
            'not_enough_items': [{
                'type': 'inventory_purchased',
                'id': 'i1',
                'name': 'Nangka',
                'code': 'ING-001',
                'unit': 'kg',
                'quantity': 50,
                'stock': 0
            }]
        })
    ]


@pytest.fixture
def nested_tree():
    """Finished -> half finished -> purchased, plus a sibling purchased item"""
    return [
        ShortageNode.from_dict({
            'type': 'finished',
            'name': 'Nasi Goreng',
            'code': 'R-002',
            'unit': 'portion',
            'quantity': 10,
            'stock': 2,
            'not_enough_items': [
                {
                    'type': 'half_finished',
                    'name': 'Bumbu Dasar',
                    'code': 'HF-01',
                    'unit': 'gram',
                    'quantity': 300,
                    'stock': 300,
                    'not_enough_items': [
                        {'type': 'inventory_purchased', 'id': 'i2', 'name': 'Bawang Merah',
                         'code': 'ING-002', 'unit': 'gram', 'quantity': 200, 'stock': 250},
                    ]
                },
                {'type': 'inventory_purchased', 'id': 'i3', 'name': 'Beras',
                 'code': 'ING-003', 'unit': 'kg', 'quantity': 2.5, 'stock': 1},
                {'type': 'inventory_purchased', 'name': 'Garam',
                 'code': 'ING-004', 'unit': 'gram', 'quantity': 10, 'stock': 0},
            ]
        })
    ]


@pytest.fixture
def supplier():
    return Supplier(
        id='s1',
        name='Toko Segar',
        address='Jl. Malioboro 1',
        whatsapp_number='+62 811 222 333'
    )


@pytest.fixture
def make_suppliers():
    def _make(*names):
        return [Supplier(id=f"s{i}", name=name) for i, name in enumerate(names, start=1)]
    return _make

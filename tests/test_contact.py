# tests/test_contact.py

import logging
from urllib.parse import parse_qs, urlparse

import pytest

from utils.forecast.contact import (
    build_contact_message,
    build_contact_uri,
    dispatch_contact,
    sanitize_phone
)
from utils.forecast.models import ShortageNode, Supplier


@pytest.fixture
def nangka():
    return ShortageNode(
        id='i1', name='Nangka Muda', code='ING-001', unit='kg',
        type='inventory_purchased', quantity=50, stock=0
    )


@pytest.mark.parametrize('raw, expected', [
    ('+62 812-345-6789', '628123456789'),
    ('(0274) 555 123', '0274555123'),
    ('628111', '628111'),
    ('', ''),
    (None, ''),
])
def test_sanitize_phone(raw, expected):
    assert sanitize_phone(raw) == expected


def test_message_substitutes_names(nangka):
    supplier = Supplier(id='s1', name='Toko Segar')
    message = build_contact_message(supplier, nangka, business_name='Rao He Restaurant')

    assert 'Toko Segar' in message
    assert 'Nangka Muda' in message
    assert 'Rao He Restaurant' in message
    assert message.startswith('Halo Toko Segar')


def test_uri_is_fully_encoded(nangka):
    supplier = Supplier(id='s1', name='Toko Segar', whatsapp_number='+62 812-345-6789')
    uri = build_contact_uri(supplier, nangka, business_name='Rao He Restaurant')

    assert uri.startswith('https://wa.me/628123456789?text=')
    query = uri.split('?text=', 1)[1]
    assert ' ' not in query
    assert '*' not in query
    assert '%2A' in query

    decoded = parse_qs(urlparse(uri).query)['text'][0]
    assert decoded == build_contact_message(supplier, nangka, business_name='Rao He Restaurant')


def test_dispatch_gudeg_scenario(gudeg_tree, supplier):
    leaf = gudeg_tree[0].not_enough_items[0]
    action = dispatch_contact(supplier, leaf, business_name='Rao He Restaurant')

    assert action.uri.startswith('https://wa.me/62811222333?text=')
    assert action.supplier_id == 's1'
    assert action.item_id == 'i1'
    assert 'Toko Segar' in action.notice
    assert 'Nangka' in action.notice


def test_dispatch_uses_configured_business_name(monkeypatch, nangka, supplier):
    monkeypatch.setenv('BUSINESS_NAME', 'Warung Test')
    action = dispatch_contact(supplier, nangka)
    assert 'Warung Test' in action.message


def test_dispatch_warns_without_digits(caplog, nangka):
    supplier = Supplier(id='s9', name='No Phone', whatsapp_number='n/a')

    with caplog.at_level(logging.WARNING):
        action = dispatch_contact(supplier, nangka, business_name='X')

    assert action.uri.startswith('https://wa.me/?text=')
    assert 'no WhatsApp digits' in caplog.text

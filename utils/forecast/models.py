# utils/forecast/models.py

"""
Data containers for backend payloads: branches, recipes, suppliers,
forecast days and the recursive shortage tree
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .constants import COMPOSITE_TYPES, MAX_TREE_DEPTH, TYPE_PURCHASED

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_str(value: Any) -> str:
    return '' if value is None else str(value)


def as_list(value: Any) -> List[Any]:
    """Backend lists; anything else counts as empty"""
    return value if isinstance(value, list) else []


def _to_optional_id(value: Any) -> Optional[str]:
    if value is None or value == '':
        return None
    return str(value)


@dataclass
class ShortageNode:
    """One ingredient in a shortage tree"""
    name: str
    code: str
    unit: str
    type: str
    quantity: float
    stock: float
    id: Optional[str] = None
    not_enough_items: List['ShortageNode'] = field(default_factory=list)

    @property
    def shortage(self) -> float:
        return self.quantity - self.stock

    @property
    def is_composite(self) -> bool:
        return self.type in COMPOSITE_TYPES

    @property
    def is_purchasable(self) -> bool:
        return self.type == TYPE_PURCHASED

    @property
    def accepts_supplier(self) -> bool:
        return self.is_purchasable and self.id is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], depth: int = 0) -> 'ShortageNode':
        """
        Build a node from backend JSON.

        Children deeper than MAX_TREE_DEPTH are dropped with a warning.
        """
        children_raw = as_list(data.get('not_enough_items'))
        children = []

        if children_raw and depth + 1 >= MAX_TREE_DEPTH:
            logger.warning(
                f"Shortage tree deeper than {MAX_TREE_DEPTH} levels at "
                f"'{data.get('code', '')}', dropping {len(children_raw)} children"
            )
        else:
            children = [
                cls.from_dict(child, depth + 1)
                for child in children_raw
                if isinstance(child, dict)
            ]

        return cls(
            id=_to_optional_id(data.get('id')),
            name=_to_str(data.get('name')),
            code=_to_str(data.get('code')),
            unit=_to_str(data.get('unit')),
            type=_to_str(data.get('type')),
            quantity=_to_float(data.get('quantity')),
            stock=_to_float(data.get('stock')),
            not_enough_items=children
        )


@dataclass
class Supplier:
    """Supplier record owned by the backend"""
    id: str
    name: str
    address: str = ''
    whatsapp_number: str = ''
    phone_number: str = ''
    slug: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Supplier':
        return cls(
            id=_to_str(data.get('id')),
            name=_to_str(data.get('name')),
            address=_to_str(data.get('address')),
            whatsapp_number=_to_str(data.get('whatsapp_number')),
            phone_number=_to_str(data.get('phone_number')),
            slug=_to_str(data.get('slug'))
        )


@dataclass
class SupplierItem:
    """Supplier-item association (MOQ and price) with embedded supplier"""
    supplier_id: str
    item_id: str
    moq: float = 0.0
    price: float = 0.0
    supplier: Optional[Supplier] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SupplierItem':
        supplier = data.get('supplier')
        return cls(
            supplier_id=_to_str(data.get('supplier_id')),
            item_id=_to_str(data.get('item_id')),
            moq=_to_float(data.get('moq')),
            price=_to_float(data.get('price')),
            supplier=Supplier.from_dict(supplier) if isinstance(supplier, dict) else None
        )


@dataclass
class ForecastItem:
    """Forecast value for one recipe on one date"""
    recipe_code: str
    recipe_name: str
    type: str
    value: float
    is_ingredients_enough: bool = True
    not_enough_items: List[ShortageNode] = field(default_factory=list)

    @property
    def is_forecast(self) -> bool:
        return self.type == 'forecast'

    @property
    def needs_supplier_contact(self) -> bool:
        return self.is_forecast and not self.is_ingredients_enough and len(self.not_enough_items) > 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ForecastItem':
        enough = data.get('is_ingredients_enough')
        return cls(
            recipe_code=_to_str(data.get('recipe_code')),
            recipe_name=_to_str(data.get('recipe_name')),
            type=_to_str(data.get('type')),
            value=_to_float(data.get('value')),
            is_ingredients_enough=True if enough is None else bool(enough),
            not_enough_items=[
                ShortageNode.from_dict(node)
                for node in as_list(data.get('not_enough_items'))
                if isinstance(node, dict)
            ]
        )


@dataclass
class ForecastDay:
    """All recipe forecasts for a single date"""
    date: date
    total: float
    type: str
    items: List[ForecastItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ForecastDay':
        return cls(
            date=parse_date(data.get('date')),
            total=_to_float(data.get('total')),
            type=_to_str(data.get('type')),
            items=[
                ForecastItem.from_dict(item)
                for item in as_list(data.get('items'))
                if isinstance(item, dict)
            ]
        )

    def find_item(self, recipe_code: str) -> Optional[ForecastItem]:
        for item in self.items:
            if item.recipe_code == recipe_code:
                return item
        return None


@dataclass
class Recipe:
    code: str
    name: str
    type: str = ''
    id: Optional[str] = None
    branch_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Recipe':
        return cls(
            id=_to_optional_id(data.get('id')),
            branch_id=_to_optional_id(data.get('branch_id')),
            code=_to_str(data.get('code')),
            name=_to_str(data.get('name')),
            type=_to_str(data.get('type'))
        )

    @property
    def label(self) -> str:
        return f"{self.code} - {self.name}"


@dataclass
class Branch:
    id: str
    name: str
    slug: str = ''
    pic_emails: str = ''
    pic_phone_numbers: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Branch':
        return cls(
            id=_to_str(data.get('id')),
            name=_to_str(data.get('name')),
            slug=_to_str(data.get('slug')),
            pic_emails=_to_str(data.get('pic_emails')),
            pic_phone_numbers=_to_str(data.get('pic_phone_numbers'))
        )


def parse_date(value: Any) -> date:
    """Parse ISO date or datetime strings from the backend"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = _to_str(value).strip()
    if not text:
        raise ValueError("Forecast entry has no date")
    # Accept 'YYYY-MM-DD', 'YYYY-MM-DDTHH:MM:SS[.fff][Z]'
    return datetime.fromisoformat(text[:10]).date()

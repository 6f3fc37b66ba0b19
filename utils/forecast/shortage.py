# utils/forecast/shortage.py

"""
Shortage tree traversal
Render walk, leaf collection and flattening of the backend's
not_enough_items tree
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence

import pandas as pd

from .constants import MAX_TREE_DEPTH
from .formatters import format_quantity
from .models import ShortageNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderRow:
    """One node as it should be drawn by the tree renderer"""
    node: ShortageNode
    level: int
    shortage: float
    label: str
    status: str
    has_supplier_control: bool
    has_children: bool


def shortage_status(shortage: float) -> str:
    """SHORTAGE / SUFFICIENT / SURPLUS from the sign of quantity - stock"""
    if shortage > 0:
        return 'SHORTAGE'
    if shortage == 0:
        return 'SUFFICIENT'
    return 'SURPLUS'


def _amount(value: float) -> str:
    # Amounts below the display precision keep their raw value
    text = format_quantity(value)
    return f"{value:g}" if text == '0' else text


def shortage_label(node: ShortageNode) -> str:
    shortage = node.shortage
    status = shortage_status(shortage)
    if status == 'SHORTAGE':
        return f"Shortage: {_amount(shortage)} {node.unit}".rstrip()
    if status == 'SUFFICIENT':
        return "Sufficient stock"
    return f"Surplus: {_amount(abs(shortage))} {node.unit}".rstrip()


def iter_render_rows(
    nodes: Sequence[ShortageNode],
    level: int = 0,
    max_depth: int = MAX_TREE_DEPTH
) -> Iterator[RenderRow]:
    """
    Depth-first, pre-order walk in input order.

    Composite nodes are followed by their children at level + 1.
    Purchased-inventory leaves with an id get a supplier control.
    """
    for node in nodes:
        recurse = node.is_composite and len(node.not_enough_items) > 0
        shortage = node.shortage

        yield RenderRow(
            node=node,
            level=level,
            shortage=shortage,
            label=shortage_label(node),
            status=shortage_status(shortage),
            has_supplier_control=node.accepts_supplier,
            has_children=recurse
        )

        if not recurse:
            continue

        if level + 1 >= max_depth:
            logger.warning(f"Render depth limit {max_depth} reached at '{node.code}'")
            continue

        yield from iter_render_rows(node.not_enough_items, level + 1, max_depth)


def collect_leaves(nodes: Sequence[ShortageNode], max_depth: int = MAX_TREE_DEPTH) -> List[ShortageNode]:
    """Purchased-inventory nodes with an id, at any depth, depth-first order"""
    leaves = []

    def traverse(items: Sequence[ShortageNode], depth: int):
        if depth >= max_depth:
            return
        for item in items:
            if item.accepts_supplier:
                leaves.append(item)
            if item.not_enough_items:
                traverse(item.not_enough_items, depth + 1)

    traverse(nodes, 0)
    return leaves


def count_nodes(nodes: Sequence[ShortageNode]) -> int:
    return sum(1 for _ in iter_render_rows(nodes))


def shortage_tree_to_df(nodes: Sequence[ShortageNode]) -> pd.DataFrame:
    """Flatten a shortage tree into one row per rendered node"""
    records = []
    for row in iter_render_rows(nodes):
        node = row.node
        records.append({
            'level': row.level,
            'item_id': node.id,
            'code': node.code,
            'name': node.name,
            'type': node.type,
            'unit': node.unit,
            'quantity': node.quantity,
            'stock': node.stock,
            'shortage': row.shortage,
            'status': row.status
        })

    columns = ['level', 'item_id', 'code', 'name', 'type', 'unit',
               'quantity', 'stock', 'shortage', 'status']
    return pd.DataFrame(records, columns=columns)

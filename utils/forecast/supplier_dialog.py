# utils/forecast/supplier_dialog.py

"""
Contact Suppliers Dialog
Renders the shortage tree of one forecast cell and lets the user pick
and contact a supplier for each purchased-inventory item
"""

import logging
from typing import Optional

import streamlit as st

from .constants import ITEM_TYPES, KEY_ESCAPE, SHORTAGE_STATUS, UI_CONFIG
from .contact import dispatch_contact
from .formatters import ForecastFormatter, format_quantity
from .shortage import RenderRow, count_nodes, iter_render_rows
from .state import ForecastStateManager, get_state
from .supplier_search import SupplierCombobox

logger = logging.getLogger(__name__)


@st.dialog("Contact Suppliers", width="large")
def show_supplier_dialog():
    """Display the shortage tree of the selected forecast cell"""

    state = get_state()
    formatter = ForecastFormatter()

    cell = state.get_dialog_cell()
    if cell is None:
        st.warning("No forecast cell selected")
        if st.button("Close", use_container_width=True):
            st.rerun()
        return

    st.caption(
        f"{cell.recipe_name} ({cell.recipe_code}) - {formatter.format_date_long(cell.date)}"
    )

    nodes = state.get_dialog_nodes()
    st.markdown(f"### Insufficient Ingredients ({len(nodes)})")

    if not nodes:
        st.info("No ingredient details returned for this forecast")
    else:
        st.caption(f"{count_nodes(nodes)} ingredients in the breakdown")

    render_shortage_tree(state)

    st.divider()

    if st.button("✅ Close", type="primary", use_container_width=True, key="supplier_dialog_close"):
        state.close_dialog()
        st.rerun()


def render_shortage_tree(state: ForecastStateManager):
    """One bordered block per node, indented by nesting level"""

    cell = state.get_dialog_cell()
    key_prefix = f"sd_{cell.key}" if cell else "sd"

    for index, row in enumerate(iter_render_rows(state.get_dialog_nodes())):
        if row.level > 0:
            indent = min(UI_CONFIG['tree_indent_weight'] * row.level, 0.5)
            _, body = st.columns([indent, 1 - indent])
        else:
            body = st.container()

        with body:
            _render_node(row, state, f"{key_prefix}_{index}")


def _render_node(row: RenderRow, state: ForecastStateManager, key: str):
    node = row.node
    type_cfg = ITEM_TYPES.get(node.type, {})
    status_cfg = SHORTAGE_STATUS[row.status]

    with st.container(border=True):
        st.markdown(f"{type_cfg.get('icon', '•')} **{node.name}**")
        st.caption(
            f"{node.code} • Need: {format_quantity(node.quantity)} {node.unit} • "
            f"Available: {format_quantity(node.stock)} {node.unit}"
        )
        color = 'red' if row.status == 'SHORTAGE' else 'green'
        st.markdown(f"{status_cfg['icon']} :{color}[**{row.label}**]")

        if row.has_children:
            st.caption("**Required Ingredients:**")

        if row.has_supplier_control:
            render_supplier_control(row, state, key)


def render_supplier_control(row: RenderRow, state: ForecastStateManager, key: str):
    """Search box, candidate list and contact button for one leaf"""

    node = row.node
    item_id = node.id
    combobox = state.get_combobox(item_id)
    if combobox is None:
        logger.warning(f"No supplier search for item {item_id}")
        return

    combobox.bind(
        on_select=lambda supplier: state.select_supplier(item_id, supplier),
        notify_error=lambda message: st.toast(message, icon="❌")
    )

    if not combobox.is_open and combobox.selected is None:
        if st.button("🔍 Select Supplier", key=f"{key}_open"):
            combobox.open()
        else:
            return

    if combobox.is_open:
        _render_search(combobox, node.name, key)

    selected = state.get_selected_supplier(item_id)
    if selected is not None:
        _render_selected_supplier(row, selected, combobox, key)


def _render_search(combobox: SupplierCombobox, item_name: str, key: str):
    query_key = f"{key}_query"
    if query_key not in st.session_state:
        st.session_state[query_key] = combobox.display_value

    st.text_input(
        "Select Supplier",
        placeholder=f"Search suppliers for {item_name}...",
        key=query_key,
        on_change=_on_query_change,
        args=(combobox, query_key)
    )

    if combobox.is_loading:
        st.caption("Loading suppliers...")
        return

    if not combobox.candidates:
        st.caption(combobox.empty_message)
    else:
        choice_key = f"{key}_choice"
        st.radio(
            "Suppliers",
            options=list(range(len(combobox.candidates))),
            index=None,
            format_func=lambda i: _candidate_label(combobox, i),
            key=choice_key,
            label_visibility="collapsed",
            on_change=_on_candidate_pick,
            args=(combobox, choice_key, query_key)
        )

    if st.button("Cancel", key=f"{key}_escape"):
        combobox.handle_key(KEY_ESCAPE)
        st.rerun(scope="fragment")


def _candidate_label(combobox: SupplierCombobox, index: int) -> str:
    supplier = combobox.candidates[index]
    return (
        f"**{supplier.name}** • {supplier.address}  \n"
        f"{supplier.phone_number} • {supplier.whatsapp_number}"
    )


def _on_query_change(combobox: SupplierCombobox, query_key: str):
    # Widget commits arrive after typing stops, so look up right away
    combobox.set_query(st.session_state.get(query_key, ''))
    combobox.flush()


def _on_candidate_pick(combobox: SupplierCombobox, choice_key: str, query_key: str):
    index: Optional[int] = st.session_state.get(choice_key)
    if index is None:
        return
    combobox.select_index(index)
    st.session_state[query_key] = combobox.display_value


def _render_selected_supplier(row: RenderRow, supplier, combobox: SupplierCombobox, key: str):
    with st.container(border=True):
        st.markdown(f"**{supplier.name}**")
        if supplier.address:
            st.caption(supplier.address)

        col1, col2 = st.columns(2)
        with col1:
            if st.button("💬 WhatsApp", type="primary", key=f"{key}_contact", use_container_width=True):
                action = dispatch_contact(supplier, row.node)
                st.toast(action.notice, icon="✅")
                st.link_button("Open chat", action.uri, use_container_width=True)
        with col2:
            if st.button("✕ Change", key=f"{key}_clear", use_container_width=True):
                combobox.clear()
                st.session_state.pop(f"{key}_query", None)
                st.session_state.pop(f"{key}_choice", None)
                combobox.open()
                st.rerun(scope="fragment")

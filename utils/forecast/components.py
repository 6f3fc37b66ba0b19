# utils/forecast/components.py

"""
UI Components for Menu Forecast
KPI cards, recipe selector, summary table, recommendations
"""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd
import streamlit as st

from .constants import DATA_TYPES, UI_CONFIG, URGENCY_LEVELS
from .formatters import ForecastFormatter, format_quantity
from .models import Recipe
from .result import ForecastResult, InsufficientCell
from .state import ForecastStateManager

logger = logging.getLogger(__name__)

CELL_STYLES = {
    'real': 'color: #2563EB; font-weight: 700;',
    'forecast': 'color: #2563EB; font-size: 0.85em;',
    'insufficient': 'color: #DC2626; font-weight: 700; text-decoration: underline;',
    '': 'color: #9CA3AF;'
}


# =============================================================================
# KPI CARDS
# =============================================================================

def render_kpi_cards(result: ForecastResult, formatter: ForecastFormatter):
    """Render KPI cards for the loaded forecast"""

    metrics = result.get_metrics()
    cols = st.columns(4)

    with cols[0]:
        _kpi_card(
            "Real Sales",
            formatter.format_number(metrics['real_total']),
            icon="🧾",
            color=DATA_TYPES['real']['color'],
            caption=f"{metrics['real_items']} items"
        )

    with cols[1]:
        _kpi_card(
            "Forecast Sales",
            formatter.format_number(metrics['forecast_total']),
            icon="🔮",
            color=DATA_TYPES['forecast']['color'],
            caption=f"{metrics['forecast_items']} items"
        )

    with cols[2]:
        _kpi_card("Data Points", metrics['data_points'], icon="📅", color="#8B5CF6")

    with cols[3]:
        _kpi_card("Insufficient Ingredients", metrics['insufficient_count'], icon="⚠️", color="#DC2626")


def _kpi_card(label: str, value: Any, icon: str = "📊", color: str = "#3B82F6", caption: str = ""):
    """Render single KPI card"""
    st.markdown(f"""
    <div style="
        background: white;
        border-radius: 8px;
        padding: 12px 16px;
        border-left: 4px solid {color};
        box-shadow: 0 1px 3px rgba(0,0,0,0.1);
    ">
        <div style="font-size: 20px; margin-bottom: 4px;">{icon}</div>
        <div style="font-size: 24px; font-weight: 700; color: #1F2937;">{value}</div>
        <div style="font-size: 12px; color: #6B7280;">{label}</div>
        <div style="font-size: 11px; color: #9CA3AF;">{caption}</div>
    </div>
    """, unsafe_allow_html=True)


# =============================================================================
# RECIPE SELECTION
# =============================================================================

def filter_recipes(recipes: List[Recipe], query: str) -> List[Recipe]:
    """Case-insensitive match on name or code"""
    if not query:
        return list(recipes)
    q = query.lower()
    return [r for r in recipes if q in r.name.lower() or q in r.code.lower()]


def render_recipe_selector(recipes: List[Recipe], state: ForecastStateManager, disabled: bool = False) -> List[str]:
    """Searchable multi-select of menu recipes; returns selected codes"""

    if not recipes:
        st.info("No menu items available for this branch")
        return []

    search = st.text_input(
        "Search menu",
        placeholder="Search menu items by name or code...",
        key="forecast_recipe_search"
    )
    filtered = filter_recipes(recipes, search)

    if search:
        st.caption(f"Showing {len(filtered)} of {len(recipes)} menu items")

    selected = state.get_selected_recipes()
    filtered_codes = [r.code for r in filtered]

    col1, col2, _ = st.columns([1, 1, 3])
    with col1:
        all_selected = bool(filtered_codes) and all(c in selected for c in filtered_codes)
        if st.button(
            "Deselect All" if all_selected else "Select All",
            disabled=disabled or not filtered_codes,
            use_container_width=True,
            key="forecast_select_all"
        ):
            if all_selected:
                state.set_selected_recipes([c for c in selected if c not in filtered_codes])
            else:
                state.set_selected_recipes(selected + filtered_codes)
            _sync_recipe_checkboxes(recipes, state.get_selected_recipes())
            st.rerun()

    with col2:
        if selected and st.button("Clear Selection", disabled=disabled, use_container_width=True, key="forecast_clear_sel"):
            state.clear_selection()
            _sync_recipe_checkboxes(recipes, [])
            st.rerun()

    if not filtered:
        st.info("No menu items match your search")
        return selected

    cols = st.columns(3)
    for i, recipe in enumerate(filtered):
        key = _recipe_key(recipe.code)
        if key not in st.session_state:
            st.session_state[key] = recipe.code in selected
        with cols[i % 3]:
            st.checkbox(
                f"**{recipe.name}**  \n{recipe.code}",
                disabled=disabled,
                key=key,
                on_change=state.toggle_recipe,
                args=(recipe.code,)
            )

    selected = state.get_selected_recipes()
    if selected:
        labels = [r.label for r in recipes if r.code in selected]
        preview_n = UI_CONFIG['max_selected_preview']
        preview = ', '.join(labels[:preview_n])
        if len(labels) > preview_n:
            preview += f" and {len(labels) - preview_n} more..."
        st.caption(f"**{len(selected)} selected**: {preview}")

    return selected


def _recipe_key(code: str) -> str:
    return f"forecast_recipe_{code}"


def _sync_recipe_checkboxes(recipes: List[Recipe], selected: List[str]):
    for recipe in recipes:
        st.session_state[_recipe_key(recipe.code)] = recipe.code in selected


# =============================================================================
# SUMMARY TABLE
# =============================================================================

def build_summary_display(result: ForecastResult, formatter: ForecastFormatter) -> Optional[pd.DataFrame]:
    """Pivot with formatted cells and readable headers"""
    pivot = result.get_summary_pivot()
    if pivot.empty:
        return None

    display = pivot.apply(lambda col: col.map(formatter.format_cell_total))
    display.columns = [formatter.format_date_header(d) for d in pivot.columns]
    display.index = [f"{name} ({code})" for code, name in pivot.index]
    display.index.name = "Recipe"
    return display


def render_summary_table(result: ForecastResult, formatter: ForecastFormatter):
    """Recipe x date totals; red underlined cells lack ingredients"""

    st.markdown("#### 📋 Menu Forecast Summary")
    st.caption(
        "Detailed breakdown of total sales by recipe and date. "
        "**Bold blue** = real, small blue = forecast, "
        "**red underlined** = forecast with insufficient ingredients"
    )

    display = build_summary_display(result, formatter)
    if display is None:
        st.info("No forecast data to display")
        return

    types = result.get_cell_types()
    styles = pd.DataFrame(
        [[CELL_STYLES.get(t, '') for t in row] for row in types.values],
        index=display.index,
        columns=display.columns
    )

    st.dataframe(
        display.style.apply(lambda _: styles, axis=None),
        use_container_width=True
    )


def insufficient_cell_label(cell: InsufficientCell, formatter: ForecastFormatter) -> str:
    """Date, recipe, portions and the first few short ingredients"""
    names = ', '.join(
        f"{n.name} (-{format_quantity(n.quantity)} {n.unit})".strip()
        for n in cell.item.not_enough_items[:3]
    )
    return (
        f"{formatter.format_date_long(cell.date)} • {cell.recipe_name} ({cell.recipe_code}) "
        f"• {format_quantity(cell.value)} portions • {names}"
    )


def render_insufficient_picker(
    cells: List[InsufficientCell],
    formatter: ForecastFormatter
) -> Optional[InsufficientCell]:
    """Pick an insufficient forecast cell; returns it when the user asks to contact suppliers"""

    if not cells:
        st.success("✅ All forecast cells have enough ingredients")
        return None

    st.markdown(f"#### ⚠️ Insufficient Ingredients ({len(cells)})")

    col1, col2 = st.columns([4, 1])
    with col1:
        index = st.selectbox(
            "Forecast cell",
            options=list(range(len(cells))),
            format_func=lambda i: insufficient_cell_label(cells[i], formatter),
            key="forecast_insufficient_cell",
            label_visibility="collapsed"
        )
    with col2:
        clicked = st.button("📞 Contact Suppliers", type="primary", use_container_width=True, key="forecast_open_dialog")

    if clicked and index is not None:
        return cells[index]
    return None


# =============================================================================
# AI RECOMMENDATIONS
# =============================================================================

def render_recommendations(data: Optional[Dict[str, Any]], formatter: ForecastFormatter):
    """AI ingredient purchase recommendations returned by the backend"""

    if not data:
        st.info("No AI recommendations available")
        return

    cols = st.columns(3)
    with cols[0]:
        st.metric("Estimated Cost", formatter.format_currency(data.get('total_estimated_cost', 0)))
    with cols[1]:
        st.metric("Urgent Items", data.get('urgent_items_count', 0))
    with cols[2]:
        confidence = (data.get('summary') or {}).get('confidence_score')
        st.metric("Confidence", f"{confidence}%" if confidence is not None else '-')

    ingredients = sorted(
        data.get('ingredients') or [],
        key=lambda ing: URGENCY_LEVELS.get(ing.get('urgency_level'), {}).get('priority', 99)
    )

    for ing in ingredients:
        urgency = URGENCY_LEVELS.get(ing.get('urgency_level'), {})
        with st.expander(
            f"{urgency.get('icon', '⚪')} **{ing.get('ingredient_name', '')}** "
            f"({ing.get('ingredient_code', '')}) - "
            f"{formatter.format_number(ing.get('required_quantity'))} {ing.get('unit', '')}",
            expanded=False
        ):
            st.caption(f"Estimated cost: {formatter.format_currency(ing.get('estimated_cost', 0))}")

            for reason in ing.get('reasons') or []:
                st.markdown(f"- {reason}")

            suppliers = ing.get('supplier_recommendations') or []
            if suppliers:
                st.dataframe(
                    pd.DataFrame(suppliers).rename(columns={
                        'supplier_name': 'Supplier',
                        'contact': 'Contact',
                        'price_per_unit': 'Price / Unit',
                        'minimum_order': 'MOQ',
                        'delivery_time': 'Delivery',
                        'quality_rating': 'Quality',
                        'reliability_score': 'Reliability'
                    }),
                    use_container_width=True,
                    hide_index=True
                )

            affected = ing.get('affected_recipes') or []
            if affected:
                st.caption("Affected: " + ', '.join(affected))

    notes = (data.get('summary') or {}).get('notes') or []
    for note in notes:
        st.caption(f"ℹ️ {note}")

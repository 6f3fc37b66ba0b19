# utils/forecast/constants.py

"""
Constants for Menu Forecast & Supplier Contact
"""

# =============================================================================
# VERSION
# =============================================================================
VERSION = "1.0.0"

# =============================================================================
# ITEM TYPES (bill of materials levels)
# =============================================================================
ITEM_TYPES = {
    'finished': {
        'label': 'Finished',
        'icon': '🍱',
        'composite': True
    },
    'half_finished': {
        'label': 'Half Finished',
        'icon': '🥣',
        'composite': True
    },
    'inventory_purchased': {
        'label': 'Purchased Inventory',
        'icon': '📦',
        'composite': False
    }
}

TYPE_FINISHED = 'finished'
TYPE_HALF_FINISHED = 'half_finished'
TYPE_PURCHASED = 'inventory_purchased'

COMPOSITE_TYPES = frozenset(
    t for t, cfg in ITEM_TYPES.items() if cfg['composite']
)

# Guard against unbounded nesting from the backend BOM expansion
MAX_TREE_DEPTH = 16

# =============================================================================
# FORECAST DATA TYPES
# =============================================================================
DATA_TYPES = {
    'real': {
        'label': 'Real Sales',
        'color': '#3B82F6',
        'help': 'Actual historical data'
    },
    'forecast': {
        'label': 'Forecast Sales',
        'color': '#9CA3AF',
        'help': 'Predicted future data'
    }
}

# =============================================================================
# SHORTAGE STATUS
# =============================================================================
SHORTAGE_STATUS = {
    'SHORTAGE': {'icon': '🔴', 'color': '#DC2626', 'bg': '#FEFCE8'},
    'SUFFICIENT': {'icon': '🟢', 'color': '#16A34A', 'bg': '#F0FDF4'},
    'SURPLUS': {'icon': '🟢', 'color': '#16A34A', 'bg': '#F0FDF4'}
}

# =============================================================================
# SUPPLIER SEARCH
# =============================================================================
SEARCH_DEBOUNCE_SECONDS = 0.3

KEY_ARROW_DOWN = 'ArrowDown'
KEY_ARROW_UP = 'ArrowUp'
KEY_ENTER = 'Enter'
KEY_ESCAPE = 'Escape'

# =============================================================================
# SUPPLIER CONTACT
# =============================================================================
WHATSAPP_BASE_URL = "https://wa.me/"

CONTACT_MESSAGE_TEMPLATE = (
    "Halo {supplier_name}, kami dari {business_name}. "
    "Apakah item *{item_name}* ini tersedia? "
    "Mohon informasi ketersediaan dan harga. Terima kasih!"
)

# =============================================================================
# BACKEND ENDPOINTS
# =============================================================================
ENDPOINTS = {
    'branches': 'v1/branches',
    'recipes': 'v1/recipes',
    'forecast': 'v1/forecast/processed',
    'suppliers_for_item': 'v1/suppliers/items/{item_id}',
    'alert_email': 'v1/forecast/out-of-stock-email',
    'alert_whatsapp': 'v1/forecast/out-of-stock-whatsapp',
    'recommendations': 'recommendations/ingredients'
}

RECIPE_CODE_SEPARATOR = ';'
RECIPE_PAGE_LIMIT = 1000

# =============================================================================
# RECOMMENDATION URGENCY
# =============================================================================
URGENCY_LEVELS = {
    'critical': {'icon': '🚨', 'color': '#7F1D1D', 'priority': 1},
    'high': {'icon': '🔴', 'color': '#DC2626', 'priority': 2},
    'medium': {'icon': '🟡', 'color': '#CA8A04', 'priority': 3},
    'low': {'icon': '🟢', 'color': '#16A34A', 'priority': 4}
}

# =============================================================================
# UI CONFIGURATION
# =============================================================================
UI_CONFIG = {
    'chart_height': 400,
    'tree_indent_weight': 0.04,
    'max_selected_preview': 3,
    'date_format_header': '%b %d',
    'date_format_weekday': '%a',
    'date_format_long': '%d %b %Y'
}

# =============================================================================
# EXPORT CONFIGURATION
# =============================================================================
EXPORT_CONFIG = {
    'filename_prefix': 'menu_forecast',
    'sheets': {
        'summary': 'Summary',
        'forecast': 'Forecast',
        'shortages': 'Shortages'
    },
    'max_column_width': 40
}

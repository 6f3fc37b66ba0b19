# utils/forecast/__init__.py

"""
Menu Forecast Module
Forecast dashboard with ingredient shortage drill-down

Version: 1.0.0

Features:
- Real vs forecast sales per recipe and date
- Ingredient shortage trees for insufficient forecasts
- Supplier search and WhatsApp contact per purchased item
- Out-of-stock alerts and AI purchase recommendations
"""

from .constants import (
    VERSION,
    ITEM_TYPES,
    DATA_TYPES,
    SHORTAGE_STATUS,
    MAX_TREE_DEPTH,
    ENDPOINTS,
    URGENCY_LEVELS,
    UI_CONFIG,
    EXPORT_CONFIG
)

from .models import (
    ShortageNode,
    Supplier,
    SupplierItem,
    ForecastItem,
    ForecastDay,
    Recipe,
    Branch
)

from .shortage import (
    RenderRow,
    iter_render_rows,
    collect_leaves,
    shortage_label
)

from .contact import (
    ContactAction,
    build_contact_message,
    build_contact_uri,
    dispatch_contact
)

from .supplier_search import SupplierCombobox

from .state import (
    ForecastStateManager,
    get_state
)

from .data_loader import (
    ForecastDataLoader,
    get_data_loader
)

from .result import (
    ForecastResult,
    InsufficientCell
)

from .components import (
    render_kpi_cards,
    render_recipe_selector,
    render_summary_table,
    render_insufficient_picker,
    render_recommendations
)

from .supplier_dialog import show_supplier_dialog

from .charts import (
    ForecastCharts,
    get_charts
)

from .formatters import (
    ForecastFormatter,
    get_formatter
)

from .export import (
    export_to_excel,
    get_export_filename
)

__version__ = VERSION

__all__ = [
    # Version
    '__version__',
    'VERSION',

    # Constants
    'ITEM_TYPES',
    'DATA_TYPES',
    'SHORTAGE_STATUS',
    'MAX_TREE_DEPTH',
    'ENDPOINTS',
    'URGENCY_LEVELS',
    'UI_CONFIG',
    'EXPORT_CONFIG',

    # Models
    'ShortageNode',
    'Supplier',
    'SupplierItem',
    'ForecastItem',
    'ForecastDay',
    'Recipe',
    'Branch',

    # Shortage tree
    'RenderRow',
    'iter_render_rows',
    'collect_leaves',
    'shortage_label',

    # Contact
    'ContactAction',
    'build_contact_message',
    'build_contact_uri',
    'dispatch_contact',
    'SupplierCombobox',

    # State
    'ForecastStateManager',
    'get_state',

    # Data Loader
    'ForecastDataLoader',
    'get_data_loader',

    # Result
    'ForecastResult',
    'InsufficientCell',

    # Components
    'render_kpi_cards',
    'render_recipe_selector',
    'render_summary_table',
    'render_insufficient_picker',
    'render_recommendations',
    'show_supplier_dialog',

    # Charts
    'ForecastCharts',
    'get_charts',

    # Formatters
    'ForecastFormatter',
    'get_formatter',

    # Export
    'export_to_excel',
    'get_export_filename'
]

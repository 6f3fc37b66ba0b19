# utils/forecast/supplier_search.py

"""
Supplier search combobox model

Holds the query, candidates, highlight and selection for one
purchased-inventory item. Lookups are debounced, tagged with a
generation number so late results from an older query are dropped,
and failures are reported through a notifier instead of raised.
"""

import logging
import time
from typing import Callable, Dict, List, Optional

from utils.api_client import BackendAPIError

from .constants import (
    KEY_ARROW_DOWN, KEY_ARROW_UP, KEY_ENTER, KEY_ESCAPE,
    SEARCH_DEBOUNCE_SECONDS
)
from .models import Supplier

logger = logging.getLogger(__name__)

LookupFn = Callable[[str, str], List[Supplier]]
SelectFn = Callable[[Optional[Supplier]], None]
NotifyFn = Callable[[str], None]


class SupplierCombobox:
    """Search-as-you-type supplier picker for a single item"""

    def __init__(
        self,
        item_id: str,
        lookup: LookupFn,
        on_select: Optional[SelectFn] = None,
        notify_error: Optional[NotifyFn] = None,
        debounce: float = SEARCH_DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.item_id = item_id or ''
        self._lookup = lookup
        self._on_select = on_select
        self._notify_error = notify_error
        self.debounce = debounce
        self._clock = clock

        self.query = ''
        self.candidates: List[Supplier] = []
        self.highlighted_index = -1
        self.is_open = False
        self.is_loading = False
        self.selected: Optional[Supplier] = None
        self.last_error: Optional[str] = None

        self._generation = 0
        self._pending_since: Optional[float] = None
        self._cache: Dict[str, List[Supplier]] = {}

    # =========================================================================
    # CALLBACKS
    # =========================================================================

    def bind(self, on_select: Optional[SelectFn] = None, notify_error: Optional[NotifyFn] = None):
        """Rebind callbacks (they are recreated on every Streamlit rerun)"""
        if on_select is not None:
            self._on_select = on_select
        if notify_error is not None:
            self._notify_error = notify_error

    # =========================================================================
    # INPUT
    # =========================================================================

    @property
    def display_value(self) -> str:
        return self.selected.name if self.selected else self.query

    @property
    def has_pending_lookup(self) -> bool:
        return self._pending_since is not None

    def open(self):
        """Open the dropdown and look up suppliers for the current query"""
        if self.is_open:
            return
        self.is_open = True
        self._pending_since = None
        self._run_lookup(self.query)

    def close(self):
        self.is_open = False
        self.highlighted_index = -1

    def set_query(self, text: str, now: Optional[float] = None):
        """User typed into the search box"""
        text = text or ''
        if text == self.query and self.selected is None:
            return

        self.query = text
        if not text and self.selected is not None:
            self.clear()

        self.is_open = True
        self.highlighted_index = -1
        self._pending_since = self._now(now)

    def poll(self, now: Optional[float] = None) -> bool:
        """Fire the pending lookup once the quiet period has elapsed"""
        if self._pending_since is None:
            return False
        if self._now(now) - self._pending_since < self.debounce:
            return False
        self._pending_since = None
        self._run_lookup(self.query)
        return True

    def flush(self) -> bool:
        """Fire the pending lookup immediately"""
        if self._pending_since is None:
            return False
        self._pending_since = None
        self._run_lookup(self.query)
        return True

    # =========================================================================
    # KEYBOARD / MOUSE
    # =========================================================================

    def handle_key(self, key: str):
        if not self.is_open:
            if key in (KEY_ENTER, KEY_ARROW_DOWN):
                self.open()
            return

        if key == KEY_ARROW_DOWN:
            if self.highlighted_index < len(self.candidates) - 1:
                self.highlighted_index += 1
        elif key == KEY_ARROW_UP:
            self.highlighted_index = self.highlighted_index - 1 if self.highlighted_index > 0 else -1
        elif key == KEY_ENTER:
            if 0 <= self.highlighted_index < len(self.candidates):
                self.select(self.candidates[self.highlighted_index])
        elif key == KEY_ESCAPE:
            self.close()

    def select_index(self, index: int):
        """Mouse selection of a candidate"""
        if 0 <= index < len(self.candidates):
            self.select(self.candidates[index])

    def select(self, supplier: Supplier):
        self.selected = supplier
        self.query = supplier.name
        self._pending_since = None
        self.close()
        logger.debug(f"Supplier {supplier.id} selected for item {self.item_id}")
        if self._on_select:
            self._on_select(supplier)

    def clear(self):
        """Reset the selection and forward None to the caller"""
        self.selected = None
        self.query = ''
        if self._on_select:
            self._on_select(None)

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def begin_lookup(self) -> int:
        """Issue a new generation number; older results become stale"""
        self._generation += 1
        self.is_loading = True
        return self._generation

    def apply_results(self, generation: int, suppliers: List[Supplier]) -> bool:
        """Store results unless a newer lookup has been issued since"""
        if generation != self._generation:
            logger.debug(
                f"Discarding stale supplier results for item {self.item_id} "
                f"(generation {generation} < {self._generation})"
            )
            return False
        self.candidates = list(suppliers)
        self.is_loading = False
        self.last_error = None
        return True

    def apply_failure(self, generation: int, message: str) -> bool:
        if generation != self._generation:
            return False
        self.candidates = []
        self.is_loading = False
        self.last_error = message
        if self._notify_error:
            self._notify_error(message)
        return True

    def _run_lookup(self, search: str):
        if not self.item_id:
            self.candidates = []
            return

        cached = self._cache.get(search)
        if cached is not None:
            self._generation += 1
            self.candidates = list(cached)
            self.is_loading = False
            self.last_error = None
            return

        generation = self.begin_lookup()
        try:
            suppliers = self._lookup(self.item_id, search)
        except BackendAPIError as e:
            logger.error(f"Supplier lookup failed for item {self.item_id}: {e}")
            self.apply_failure(generation, e.message or "Failed to load suppliers")
            return

        if self.apply_results(generation, suppliers):
            self._cache[search] = list(suppliers)

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    @property
    def empty_message(self) -> str:
        if self.query:
            return "No suppliers found"
        return "No suppliers available for this item"

"""Thread-safe holder of the application state."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from dataclasses import replace

from prcompass.models import AppState, EnhancedData, FilterOptions, PRData


class StateService:
    """Owns an AppState and hands out copies of it."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._state = AppState()

    def get_state(self) -> AppState:
        """Return a copy whose lists, queue and UI state are independent."""
        with self._lock:
            state = self._state
            return replace(
                state,
                prs=list(state.prs),
                filtered_prs=list(state.filtered_prs),
                enhancement_queue=set(state.enhancement_queue),
                ui=replace(state.ui, filter=replace(state.ui.filter)),
            )

    def update_state(self, updater: Callable[[AppState], None]) -> None:
        """Run updater on the live state while holding the lock."""
        with self._lock:
            updater(self._state)

    def update_prs(self, prs: Iterable[PRData]) -> None:
        """Replace the PR list; the filtered list starts as all of them."""
        prs = list(prs)
        with self._lock:
            self._state.prs = prs
            self._state.filtered_prs = list(prs)
            self._state.loaded = True

    def update_filter(self, filter_options: FilterOptions) -> None:
        with self._lock:
            self._state.ui.filter = filter_options

    def set_error(self, error: Exception | None) -> None:
        with self._lock:
            self._state.error = error

    def clear_error(self) -> None:
        with self._lock:
            self._state.error = None

    def update_filtered_prs(self, filtered_prs: Iterable[PRData]) -> None:
        with self._lock:
            self._state.filtered_prs = list(filtered_prs)

    def set_loaded(self, loaded: bool) -> None:
        with self._lock:
            self._state.loaded = loaded

    def set_background_refreshing(self, refreshing: bool) -> None:
        with self._lock:
            self._state.background_refreshing = refreshing

    def set_enhancing(self, enhancing: bool) -> None:
        with self._lock:
            self._state.enhancing = enhancing

    def update_enhanced_count(self, count: int) -> None:
        with self._lock:
            self._state.enhanced_count = count

    def add_to_enhancement_queue(self, pr_number: int) -> None:
        with self._lock:
            self._state.enhancement_queue.add(pr_number)

    def remove_from_enhancement_queue(self, pr_number: int) -> None:
        with self._lock:
            self._state.enhancement_queue.discard(pr_number)

    def is_in_enhancement_queue(self, pr_number: int) -> bool:
        with self._lock:
            return pr_number in self._state.enhancement_queue

    def update_status_message(self, message: str) -> None:
        with self._lock:
            self._state.ui.status_msg = message

    def set_show_help(self, show_help: bool) -> None:
        with self._lock:
            self._state.ui.show_help = show_help

    def update_selected_pr(self, index: int) -> None:
        with self._lock:
            self._state.ui.selected_pr = index

    def update_table_cursor(self, cursor: int) -> None:
        with self._lock:
            self._state.ui.table_cursor = cursor

    def get_enhanced_pr(self, pr_number: int) -> PRData | None:
        """Return the PR with this number if it has enhanced data."""
        with self._lock:
            return next(
                (
                    pr
                    for pr in self._state.prs
                    if pr.number == pr_number and pr.enhanced is not None
                ),
                None,
            )

    def update_pr_enhancement(self, pr_number: int, enhanced: EnhancedData) -> None:
        """Attach enhanced data to every matching PR in both lists."""
        with self._lock:
            for pr in (*self._state.prs, *self._state.filtered_prs):
                if pr.number == pr_number:
                    pr.enhanced = enhanced
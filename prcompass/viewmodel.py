"""Presentation state derived from tabs, filters and status."""

from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass, field

from prcompass.models import PullRequest
from prcompass.table import create_table_rows_with_enhancement
from prcompass.tabs import TabManager, TabState

_SPINNING_MESSAGES = ("Loading...", "Refreshing...")


@dataclass
class TabViewModel:
    name: str
    is_active: bool
    is_loading: bool
    has_error: bool
    pr_count: int
    filtered_pr_count: int
    status_message: str


@dataclass
class FilterViewModel:
    is_active: bool
    mode: str
    value: str
    description: str


@dataclass
class TableViewModel:
    rows: list[list[str]]
    selected_index: int
    height: int
    width: int


@dataclass
class StatusViewModel:
    message: str
    show_spinner: bool
    spinner_frame: str
    api_limit_info: str
    has_active_filter: bool
    filter_info: str


@dataclass
class HelpItem:
    key: str
    description: str


@dataclass
class HelpSection:
    title: str
    items: list[HelpItem] = field(default_factory=list)


@dataclass
class HelpViewModel:
    title: str
    sections: list[HelpSection]
    show_close: bool


@dataclass
class ValidationResult:
    is_valid: bool
    error: str = ""


def _filter_description(mode: str, value: str) -> str:
    if not mode:
        return ""
    if mode == "author":
        return f"by author: {value}"
    if mode == "status":
        return f"by status: {value}"
    if mode == "draft":
        return "drafts only"
    return f"{mode}: {value}"


class ViewModel:
    """Builds the view state the screen is drawn from."""

    def create_tab_view_models(self, tab_manager: TabManager) -> list[TabViewModel]:
        return [
            TabViewModel(
                name=tab.config.name,
                is_active=index == tab_manager.active_tab_idx,
                is_loading=not tab.loaded,
                has_error=tab.error is not None,
                pr_count=len(tab.prs),
                filtered_pr_count=len(tab.filtered_prs),
                status_message=tab.status_msg,
            )
            for index, tab in enumerate(tab_manager.tabs)
        ]

    def create_filter_view_model(self, tab: TabState) -> FilterViewModel:
        return FilterViewModel(
            is_active=tab.filter_mode != "",
            mode=tab.filter_mode,
            value=tab.filter_value,
            description=_filter_description(tab.filter_mode, tab.filter_value),
        )

    def create_table_view_model(
        self,
        prs: Iterable[PullRequest],
        enhancement_queue: Collection[int],
        selected_index: int,
        height: int,
        width: int,
    ) -> TableViewModel:
        """Rows for the PRs; those queued for enhancement have no details yet."""
        rows = create_table_rows_with_enhancement(prs, {})
        return TableViewModel(
            rows=rows, selected_index=selected_index, height=height, width=width
        )

    def create_status_view_model(
        self, spinner_frame: str, status_msg: str, filter_info: str, api_info: str
    ) -> StatusViewModel:
        return StatusViewModel(
            message=status_msg,
            show_spinner=status_msg in _SPINNING_MESSAGES,
            spinner_frame=spinner_frame,
            api_limit_info=api_info,
            has_active_filter=filter_info != "",
            filter_info=filter_info,
        )

    def create_help_view_model(self) -> HelpViewModel:
        return HelpViewModel(
            title="PR Compass - Commands",
            show_close=True,
            sections=[
                HelpSection(
                    "Navigation",
                    [
                        HelpItem("↑/↓, j/k", "Navigate PRs"),
                        HelpItem("Tab/Shift+Tab", "Switch tabs"),
                        HelpItem("Ctrl+1-9", "Switch to tab number"),
                        HelpItem("Enter", "Open PR in browser"),
                    ],
                ),
                HelpSection(
                    "Filtering",
                    [
                        HelpItem("a", "Filter by author"),
                        HelpItem("s", "Filter by status"),
                        HelpItem("d", "Toggle draft filter"),
                        HelpItem("c", "Clear filters"),
                    ],
                ),
                HelpSection(
                    "Actions",
                    [
                        HelpItem("r", "Refresh PRs"),
                        HelpItem("h, ?", "Show/hide help"),
                        HelpItem("q, Ctrl+C", "Quit application"),
                    ],
                ),
            ],
        )

    def validate_tab_operation(
        self, operation: str, tab_manager: TabManager, target_index: int
    ) -> ValidationResult:
        count = len(tab_manager.tabs)
        if operation == "switch":
            if 0 <= target_index < count:
                return ValidationResult(True)
            return ValidationResult(False, "Invalid tab index")
        if operation == "close":
            if count <= 1:
                return ValidationResult(False, "Cannot close the last tab")
            if not 0 <= target_index < count:
                return ValidationResult(False, "Invalid tab index")
            return ValidationResult(True)
        return ValidationResult(False, "Unknown operation")
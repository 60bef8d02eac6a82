"""Tabs: one per configured pull request source, and a manager to switch between them."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from prcompass.enhancement_service import EnhancementService
from prcompass.models import EnhancedData, PullRequest
from prcompass.table import Column, create_table_columns

DEFAULT_MAX_PRS = 50
DEFAULT_REFRESH_MINUTES = 5

PRIORITY_HIGH = "high"
PRIORITY_NORMAL = "normal"
PRIORITY_LOW = "low"


@dataclass
class TabConfig:
    """Configuration of a single tab."""

    name: str = ""
    mode: str = ""  # repos, organization, teams, search, topics
    repos: list[str] = field(default_factory=list)
    organization: str = ""
    teams: list[str] = field(default_factory=list)
    search_query: str = ""
    topics: list[str] = field(default_factory=list)
    topic_org: str = ""
    exclude_bots: bool = False
    exclude_authors: list[str] = field(default_factory=list)
    exclude_titles: list[str] = field(default_factory=list)
    include_drafts: bool = False
    refresh_interval_minutes: int = 0
    max_prs: int = 0


@dataclass
class TabState:
    """Everything one tab shows and tracks."""

    config: TabConfig
    token: str = ""
    columns: list[Column] = field(default_factory=create_table_columns)
    rows: list[list[str]] = field(default_factory=list)
    show_help: bool = False
    filter_mode: str = ""  # "", author, repo, status, draft
    filter_value: str = ""
    status_msg: str = ""
    prs: list[PullRequest] = field(default_factory=list)
    filtered_prs: list[PullRequest] = field(default_factory=list)
    loaded: bool = False
    error: Exception | None = None
    enhanced_data: dict[int, EnhancedData] = field(default_factory=dict)
    enhancing: bool = False
    enhanced_count: int = 0
    background_refreshing: bool = False
    last_selected_pr_index: int = -1
    enhancement_queue: set[int] = field(default_factory=set)
    last_refresh_time: datetime | None = None
    load_time: datetime = field(default_factory=datetime.now)
    enhancement_lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    cancel_event: threading.Event = field(default_factory=threading.Event, repr=False)
    enhancement_service: EnhancementService = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.enhancement_service = EnhancementService(self.token)

    @property
    def max_prs(self) -> int:
        """The PR limit of this tab, with the default applied."""
        return self.config.max_prs or DEFAULT_MAX_PRS

    def cancel(self) -> None:
        """Signal background work for this tab to stop."""
        self.cancel_event.set()


def _priority(interval: timedelta) -> str:
    if interval < timedelta(minutes=3):
        return PRIORITY_HIGH
    if interval > timedelta(minutes=10):
        return PRIORITY_LOW
    return PRIORITY_NORMAL


class TabManager:
    """Holds the tabs and which one is active."""

    def __init__(self, token: str) -> None:
        self.token = token
        self.tabs: list[TabState] = []
        self.active_tab_idx = 0
        self.global_refresh_interval = DEFAULT_REFRESH_MINUTES
        self.tab_switch_mode = False
        self.refresh_schedule: dict[str, tuple[timedelta, str]] = {}

    def add_tab(self, tab_config: TabConfig) -> TabState:
        """Create a tab for the configuration and register its refresh schedule."""
        tab = TabState(config=tab_config, token=self.token)
        self.tabs.append(tab)
        minutes = tab_config.refresh_interval_minutes or self.global_refresh_interval
        interval = timedelta(minutes=minutes)
        self.refresh_schedule[tab_config.name] = (interval, _priority(interval))
        return tab

    def active_tab(self) -> TabState | None:
        if 0 <= self.active_tab_idx < len(self.tabs):
            return self.tabs[self.active_tab_idx]
        return None

    def switch_to_tab(self, index: int) -> bool:
        if 0 <= index < len(self.tabs):
            self.active_tab_idx = index
            return True
        return False

    def next_tab(self) -> None:
        if len(self.tabs) > 1:
            self.active_tab_idx = (self.active_tab_idx + 1) % len(self.tabs)

    def prev_tab(self) -> None:
        if len(self.tabs) > 1:
            self.active_tab_idx = (self.active_tab_idx - 1) % len(self.tabs)

    def close_tab(self, index: int) -> bool:
        """Close a tab; the last remaining tab cannot be closed."""
        if not 0 <= index < len(self.tabs) or len(self.tabs) <= 1:
            return False
        self.tabs.pop(index).cancel()
        if self.active_tab_idx >= len(self.tabs):
            self.active_tab_idx = len(self.tabs) - 1
        elif self.active_tab_idx > index:
            self.active_tab_idx -= 1
        return True

    def tab_count(self) -> int:
        return len(self.tabs)

    def tab_names(self) -> list[str]:
        return [tab.config.name for tab in self.tabs]

    def cleanup(self) -> None:
        """Stop background work of every tab."""
        for tab in self.tabs:
            tab.cancel()
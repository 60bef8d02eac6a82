"""Data shapes for pull requests, their enhanced details and the UI state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class User:
    """A GitHub account."""

    login: str = ""


@dataclass
class Repository:
    """A repository as referenced from a pull request."""

    name: str = ""
    full_name: str = ""
    owner: User | None = None


@dataclass
class Branch:
    """One end (base or head) of a pull request."""

    repo: Repository | None = None
    sha: str = ""
    ref: str = ""


@dataclass
class Label:
    """A label attached to a pull request."""

    name: str = ""


@dataclass
class Team:
    """A team asked to review a pull request."""

    name: str = ""
    slug: str = ""


@dataclass
class PullRequest:
    """The subset of a GitHub pull request that the tool works with."""

    number: int = 0
    title: str = ""
    user: User | None = None
    base: Branch | None = None
    head: Branch | None = None
    draft: bool = False
    mergeable: bool | None = None
    mergeable_state: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    comments: int = 0
    review_comments: int = 0
    additions: int = 0
    deletions: int = 0
    changed_files: int = 0
    labels: list[Label] = field(default_factory=list)
    requested_reviewers: list[User] = field(default_factory=list)
    requested_teams: list[Team] = field(default_factory=list)
    html_url: str = ""

    def author_login(self) -> str:
        """Login of the author, or an empty string when unknown."""
        return self.user.login if self.user is not None else ""

    def repo_full_name(self) -> str:
        """Full "owner/name" of the base repository, or an empty string."""
        if self.base is None or self.base.repo is None:
            return ""
        return self.base.repo.full_name

    def repo_name(self) -> str:
        """Short name of the base repository, or an empty string."""
        if self.base is None or self.base.repo is None:
            return ""
        return self.base.repo.name


@dataclass
class Review:
    """A single review left on a pull request."""

    user: User | None = None
    state: str = ""


@dataclass
class CheckRun:
    """A CI check run for a commit."""

    status: str = ""
    conclusion: str = ""
    name: str = ""


@dataclass
class EnhancedData:
    """Details gathered from the per-pull-request API calls."""

    number: int = 0
    comments: int = 0
    review_comments: int = 0
    review_status: str = ""  # approved, changes_requested, pending, no_review, unknown
    checks_status: str = ""  # success, failure, pending, none, unknown
    mergeable: str = ""  # clean, conflicts, unknown
    additions: int = 0
    deletions: int = 0
    changed_files: int = 0
    enhanced_at: datetime | None = None


@dataclass
class PRData:
    """A pull request together with its enhanced details, if any.

    Attributes not defined here are looked up on the wrapped pull request.
    """

    pull_request: PullRequest
    enhanced: EnhancedData | None = None

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name == "pull_request":
            raise AttributeError(name)
        return getattr(self.pull_request, name)


@dataclass
class FilterOptions:
    """Criteria used to narrow the list of pull requests."""

    mode: str = ""  # "", author, repo, status, draft, title
    value: str = ""
    active: bool = False


@dataclass
class UIState:
    """State of the user interface."""

    show_help: bool = False
    filter: FilterOptions = field(default_factory=FilterOptions)
    status_msg: str = ""
    selected_pr: int = 0
    table_cursor: int = 0


@dataclass
class AppState:
    """The whole application state."""

    prs: list[PRData] = field(default_factory=list)
    filtered_prs: list[PRData] = field(default_factory=list)
    config: Any = None
    ui: UIState = field(default_factory=UIState)
    loaded: bool = False
    background_refreshing: bool = False
    enhancing: bool = False
    enhanced_count: int = 0
    enhancement_queue: set[int] = field(default_factory=set)
    error: Exception | None = None


@dataclass
class PRDisplayInfo:
    """Formatted cells for showing one pull request in the table."""

    title: str = ""
    author: str = ""
    repo: str = ""
    status: str = ""
    reviews: str = ""
    comments: str = ""
    files: str = ""
    created_time: str = ""
    updated_time: str = ""
    is_enhancing: bool = False
    is_enhanced: bool = False
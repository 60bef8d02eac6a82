"""Building the pull request table: columns, rows and cell indicators."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from prcompass.models import EnhancedData, PullRequest
from prcompass.styles import ERROR_STYLE, HELP_STYLE, MUTED_STYLE, TITLE_STYLE

FALLBACK_TERMINAL_WIDTH = 160
LABELS_MAX_WIDTH = 35

_IMPORTANT_LABEL_WORDS = ("bug", "urgent", "breaking", "security", "critical", "hotfix")

EnhancedMap = Mapping[int, EnhancedData]


@dataclass(frozen=True)
class Column:
    """A table column heading and its width in cells."""

    title: str
    width: int


def is_wsl() -> bool:
    """Tell whether the process runs under Windows Subsystem for Linux."""
    if not sys.platform.startswith("linux"):
        return False
    if shutil.which("wslpath"):
        return True
    try:
        result = subprocess.run(
            ["uname", "-r"], capture_output=True, text=True, check=True
        )
    except (OSError, subprocess.CalledProcessError):
        pass
    else:
        if "microsoft" in result.stdout.lower():
            return True
    return bool(os.environ.get("WSL_INTEROP") or os.environ.get("WSL_DISTRO_NAME"))


def terminal_width() -> int:
    """Width used to lay out the table.

    A fixed width is used so the layout is the same everywhere.
    """
    return FALLBACK_TERMINAL_WIDTH


def _age(moment: datetime | None) -> timedelta | None:
    if moment is None:
        return None
    now = datetime.now(timezone.utc) if moment.tzinfo else datetime.now()
    return now - moment


def humanize_time_since(moment: datetime | None) -> str:
    """Describe how long ago a moment was, e.g. "3h ago"."""
    age = _age(moment)
    if age is None:
        return "-"
    seconds = int(age.total_seconds())
    if seconds < 60:
        return "just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 30:
        return f"{days}d ago"
    months = days // 30
    if months < 12:
        return f"{months}mo ago"
    return f"{days // 365}y ago"


def create_table_columns() -> list[Column]:
    """Return the nine table columns sized for the terminal."""
    total = terminal_width() - 12

    def width(minimum: int, percent: int) -> int:
        return max(minimum, total * percent // 100)

    return [
        Column("📋 Pull Request", width(32, 22)),
        Column("👤 Author", width(10, 10)),
        Column("📦 Repo", width(12, 12)),
        Column("⚡ Status/CI", width(10, 12)),
        Column("👀 Review", width(8, 9)),
        Column("💬 Comments", width(8, 7)),
        Column("📁 Files", width(10, 10)),
        Column("📅 Created", width(8, 9)),
        Column("🕐 Updated", width(8, 9)),
    ]


def _author(pr: PullRequest) -> str:
    return pr.author_login() or "Unknown"


def _repo(pr: PullRequest) -> str:
    full_name = pr.repo_full_name() or "Unknown"
    parts = full_name.split("/")
    return parts[1] if len(parts) == 2 else full_name


def create_table_rows(prs: Iterable[PullRequest]) -> list[list[str]]:
    """Build rows from the data the list API returns."""
    title_width = create_table_columns()[0].width
    return [
        [
            format_pr_title(pr, title_width),
            _author(pr),
            _repo(pr),
            f"{pr_status_indicator(pr)} CI:?",
            pr_review_indicator(pr),
            pr_comment_count(pr),
            "-",
            humanize_time_since(pr.created_at),
            humanize_time_since(pr.updated_at),
        ]
        for pr in prs
    ]


def create_table_rows_with_enhancement(
    prs: Iterable[PullRequest], enhanced_data: EnhancedMap
) -> list[list[str]]:
    """Build rows, using enhanced data wherever it is available."""
    title_width = create_table_columns()[0].width
    return [
        [
            format_pr_title(pr, title_width),
            _author(pr),
            _repo(pr),
            f"{pr_status_indicator_enhanced(pr, enhanced_data)} "
            f"{ci_status_enhanced(pr, enhanced_data)}",
            pr_review_indicator_enhanced(pr, enhanced_data),
            pr_comment_count_enhanced(pr, enhanced_data),
            pr_file_changes_enhanced(pr, enhanced_data),
            humanize_time_since(pr.created_at),
            humanize_time_since(pr.updated_at),
        ]
        for pr in prs
    ]


_MERGEABLE_STATES = {
    "dirty": "⚠️ Conflicts",
    "blocked": "🚫 Blocked",
    "behind": "📥 Behind",
    "clean": "✅ Ready",
    "unstable": "🔄 Checks",
}


def pr_status_indicator(pr: PullRequest) -> str:
    """Merge readiness of a pull request."""
    if pr.draft:
        return "📝 Draft"
    return _MERGEABLE_STATES.get(pr.mergeable_state, "✅ Ready")


def pr_review_indicator(pr: PullRequest) -> str:
    """Human review status of a pull request."""
    if pr.draft:
        return "🚧 WIP"
    reviewers = len(pr.requested_reviewers) + len(pr.requested_teams)
    if reviewers > 0:
        return f"⏳ 0/{reviewers}"
    age = _age(pr.updated_at)
    days = float("inf") if age is None else age.total_seconds() / 86400
    if days > 5:
        return "🕰️ Stale"
    if days < 1:
        return "🆕 Recent"
    return "❓ None"


def pr_comment_count(pr: PullRequest) -> str:
    """Total comments, or "?" when the list API gave none."""
    total = pr.comments + pr.review_comments
    return str(total) if total > 0 else "?"


def pr_comment_count_enhanced(pr: PullRequest, enhanced_data: EnhancedMap) -> str:
    enhanced = enhanced_data.get(pr.number)
    if enhanced is None:
        return pr_comment_count(pr)
    total = enhanced.comments + enhanced.review_comments
    return str(total) if total else "-"


def pr_status_indicator_enhanced(pr: PullRequest, enhanced_data: EnhancedMap) -> str:
    enhanced = enhanced_data.get(pr.number)
    if enhanced is not None:
        if enhanced.mergeable == "clean":
            if enhanced.checks_status == "failure":
                return "❌ Failed Checks"
            return "✅ Ready"
        if enhanced.mergeable == "conflicts":
            return "⚠️ Conflicts"
    return pr_status_indicator(pr)


_REVIEW_STATUSES = {
    "approved": "✅ Approved",
    "changes_requested": "🔄 Changes",
    "pending": "⏳ Pending",
    "no_review": "📝 No Review",
}


def pr_review_indicator_enhanced(pr: PullRequest, enhanced_data: EnhancedMap) -> str:
    enhanced = enhanced_data.get(pr.number)
    if enhanced is None:
        return pr_review_indicator(pr)
    return _REVIEW_STATUSES.get(enhanced.review_status, "❓ Unknown")


_CHECK_STATUSES = {
    "success": "✅ CI",
    "failure": "❌ CI",
    "pending": "🔄 CI",
    "skipped": "⚪ CI",
}


def ci_status_enhanced(pr: PullRequest, enhanced_data: EnhancedMap) -> str:
    enhanced = enhanced_data.get(pr.number)
    if enhanced is None:
        return "CI:?"
    return _CHECK_STATUSES.get(enhanced.checks_status, "❓ CI")


def format_pr_title(pr: PullRequest, max_width: int) -> str:
    """Shorten a ticket prefix if that helps, else truncate to max_width."""
    title = pr.title
    if len(title) > 8:
        dash = next((i for i in range(3, min(len(title), 12)) if title[i] == "-"), None)
        if dash is not None:
            prefix = title[: dash + 1]
            rest = title[dash + 1 :].lstrip(": ")
            if len(prefix) >= 4:
                smart = prefix[0] + prefix[-4:] + ": " + rest
                if len(smart) <= max_width:
                    return smart
    if len(title) > max_width:
        title = title[: max_width - 3] + "..." if max_width > 3 else title[:max_width]
    return title


def pr_activity_enhanced(pr: PullRequest, enhanced_data: EnhancedMap) -> str:
    """Comments and file changes in one compact cell."""
    enhanced = enhanced_data.get(pr.number)
    if enhanced is None:
        return pr_comment_count(pr)
    comments = enhanced.comments + enhanced.review_comments
    files = f"{enhanced.changed_files}F +{enhanced.additions}/-{enhanced.deletions}"
    if enhanced.changed_files > 0 and comments > 0:
        return f"{comments}c • {files}"
    if enhanced.changed_files > 0:
        return files
    if comments > 0:
        return f"{comments}c"
    return "-"


def pr_file_changes_enhanced(pr: PullRequest, enhanced_data: EnhancedMap) -> str:
    enhanced = enhanced_data.get(pr.number)
    if enhanced is None:
        return "?"
    if enhanced.changed_files > 0:
        return f"{enhanced.changed_files} +{enhanced.additions}/-{enhanced.deletions}"
    return "-"


def _is_important(label: str) -> bool:
    lowered = label.lower()
    return any(word in lowered for word in _IMPORTANT_LABEL_WORDS)


def pr_labels_display(pr: PullRequest) -> str:
    """Labels, important ones first, fitted into a limited width."""
    names = [label.name for label in pr.labels]
    ordered = [n for n in names if _is_important(n)] + [
        n for n in names if not _is_important(n)
    ]
    if not ordered:
        return ""
    result = ordered[0]
    for index, label in enumerate(ordered[1:], start=1):
        candidate = f"{result}, {label}"
        if len(candidate) > LABELS_MAX_WIDTH:
            count = f" +{len(ordered) - index}"
            if len(result) + len(count) <= LABELS_MAX_WIDTH:
                result += count
            break
        result = candidate
    return result


def error_view(error: BaseException) -> str:
    """Full-screen view shown when loading failed."""
    title = TITLE_STYLE.render("🧭 PR Compass - Pull Request Monitor")
    message = ERROR_STYLE.render(f"🚫 {error}")
    suggestions = MUTED_STYLE.render(
        "💡 Try: Check your config file or run 'gh auth login' to authenticate"
    )
    help_text = HELP_STYLE.render("🧭 Press q to quit • r to retry • Check connection")
    return f"\n{title}\n\n{message}\n\n{suggestions}\n\n{help_text}\n"
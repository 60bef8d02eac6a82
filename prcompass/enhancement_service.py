"""Fetching per-pull-request details (reviews, checks, diff size) from GitHub."""

from __future__ import annotations

import json
import threading
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any

from prcompass.models import (
    Branch,
    CheckRun,
    EnhancedData,
    Label,
    PullRequest,
    Repository,
    Review,
    Team,
    User,
)

DEFAULT_API_URL = "https://api.github.com"
REQUEST_TIMEOUT = 10.0
WORKERS = 5


class EnhancementError(Exception):
    """Raised when a pull request cannot be enhanced."""


def _parse_time(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _parse_user(data: dict[str, Any] | None) -> User | None:
    if not data:
        return None
    return User(login=data.get("login") or "")


def _parse_repo(data: dict[str, Any] | None) -> Repository | None:
    if not data:
        return None
    return Repository(
        name=data.get("name") or "",
        full_name=data.get("full_name") or "",
        owner=_parse_user(data.get("owner")),
    )


def _parse_branch(data: dict[str, Any] | None) -> Branch | None:
    if not data:
        return None
    return Branch(
        repo=_parse_repo(data.get("repo")),
        sha=data.get("sha") or "",
        ref=data.get("ref") or "",
    )


def _parse_pull_request(data: dict[str, Any]) -> PullRequest:
    return PullRequest(
        number=data.get("number") or 0,
        title=data.get("title") or "",
        user=_parse_user(data.get("user")),
        base=_parse_branch(data.get("base")),
        head=_parse_branch(data.get("head")),
        draft=bool(data.get("draft")),
        mergeable=data.get("mergeable"),
        mergeable_state=data.get("mergeable_state") or "",
        created_at=_parse_time(data.get("created_at")),
        updated_at=_parse_time(data.get("updated_at")),
        comments=data.get("comments") or 0,
        review_comments=data.get("review_comments") or 0,
        additions=data.get("additions") or 0,
        deletions=data.get("deletions") or 0,
        changed_files=data.get("changed_files") or 0,
        labels=[Label(name=item.get("name") or "") for item in data.get("labels") or []],
        requested_reviewers=[
            user
            for user in map(_parse_user, data.get("requested_reviewers") or [])
            if user is not None
        ],
        requested_teams=[
            Team(name=item.get("name") or "", slug=item.get("slug") or "")
            for item in data.get("requested_teams") or []
        ],
        html_url=data.get("html_url") or "",
    )


class GitHubClient:
    """Minimal client for the GitHub REST endpoints used for enhancement."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = self.base_url + path
        if params:
            url += "?" + urllib.parse.urlencode(params)
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        request = urllib.request.Request(url, headers=headers)
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                payload = response.read()
        except urllib.error.HTTPError as exc:
            raise EnhancementError(f"GitHub API returned {exc.code} for {path}") from exc
        except (urllib.error.URLError, OSError) as exc:
            raise EnhancementError(f"GitHub API request failed for {path}: {exc}") from exc
        try:
            return json.loads(payload)
        except ValueError as exc:
            raise EnhancementError(f"invalid JSON from GitHub API for {path}") from exc

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        """Fetch the full details of one pull request."""
        return _parse_pull_request(self._get(f"/repos/{owner}/{repo}/pulls/{number}"))

    def list_reviews(self, owner: str, repo: str, number: int) -> list[Review]:
        """List the reviews left on a pull request, oldest first."""
        data = self._get(
            f"/repos/{owner}/{repo}/pulls/{number}/reviews", {"per_page": 100}
        )
        return [
            Review(user=_parse_user(item.get("user")), state=item.get("state") or "")
            for item in data or []
        ]

    def list_check_runs(self, owner: str, repo: str, ref: str) -> list[CheckRun]:
        """List the check runs for a commit reference."""
        data = self._get(
            f"/repos/{owner}/{repo}/commits/{ref}/check-runs", {"per_page": 100}
        )
        return [
            CheckRun(
                status=item.get("status") or "",
                conclusion=item.get("conclusion") or "",
                name=item.get("name") or "",
            )
            for item in (data or {}).get("check_runs") or []
        ]


def determine_review_status(reviews: Iterable[Review] | None) -> str:
    """Summarise reviews, taking each reviewer's latest review."""
    latest: dict[str, str] = {}
    for review in reviews or []:
        login = review.user.login if review.user is not None else ""
        latest[login] = review.state
    if not latest:
        return "no_review"
    states = latest.values()
    if "CHANGES_REQUESTED" in states:
        return "changes_requested"
    if all(state == "APPROVED" for state in states):
        return "approved"
    return "pending"


def determine_checks_status(check_runs: Iterable[CheckRun] | None) -> str:
    """Summarise check runs: failure beats pending beats success."""
    runs = list(check_runs or [])
    if not runs:
        return "none"
    has_failure = any(
        run.status == "completed" and run.conclusion in ("failure", "cancelled")
        for run in runs
    )
    if has_failure:
        return "failure"
    if any(run.status in ("in_progress", "queued") for run in runs):
        return "pending"
    return "success"


def fetch_enhanced_pr_data(client: GitHubClient, pr: PullRequest | None) -> EnhancedData:
    """Gather detailed data for a pull request through the client."""
    if pr is None:
        raise EnhancementError("pull request is missing")
    if pr.base is None or pr.base.repo is None:
        raise EnhancementError(f"PR base or repository is missing for PR #{pr.number}")
    repository = pr.base.repo
    if repository.owner is None:
        raise EnhancementError(f"PR repository owner is missing for PR #{pr.number}")
    owner = repository.owner.login
    repo = repository.name
    number = pr.number
    if not owner:
        raise EnhancementError(f"PR owner is empty for PR #{number}")
    if not repo:
        raise EnhancementError(f"PR repository name is empty for PR #{number}")

    detailed = client.get_pull_request(owner, repo, number)

    try:
        review_status = determine_review_status(client.list_reviews(owner, repo, number))
    except EnhancementError:
        review_status = "unknown"

    checks_status = "unknown"
    if pr.head is not None and pr.head.sha:
        try:
            checks_status = determine_checks_status(
                client.list_check_runs(owner, repo, pr.head.sha)
            )
        except EnhancementError:
            pass

    if detailed.mergeable is None:
        mergeable = "unknown"
    else:
        mergeable = "clean" if detailed.mergeable else "conflicts"

    return EnhancedData(
        number=number,
        comments=detailed.comments,
        review_comments=detailed.review_comments,
        review_status=review_status,
        checks_status=checks_status,
        mergeable=mergeable,
        additions=detailed.additions,
        deletions=detailed.deletions,
        changed_files=detailed.changed_files,
        enhanced_at=datetime.now(timezone.utc),
    )


EnhancementCallback = Callable[[EnhancedData | None, Exception | None], None]


class EnhancementService:
    """Enhances pull requests and remembers the results by PR number."""

    def __init__(self, token: str, client: GitHubClient | None = None) -> None:
        self.token = token
        self.client = client if client is not None else GitHubClient(token)
        self._lock = threading.RLock()
        self._enhanced: dict[int, EnhancedData] = {}

    def enhance_pr(self, pr: PullRequest | None) -> EnhancedData:
        """Return enhanced data for the PR, fetching it if not yet known."""
        if pr is not None:
            with self._lock:
                cached = self._enhanced.get(pr.number)
            if cached is not None:
                return cached
        data = fetch_enhanced_pr_data(self.client, pr)
        with self._lock:
            self._enhanced[data.number] = data
        return data

    def enhance_prs(
        self, prs: Iterable[PullRequest], callback: EnhancementCallback
    ) -> list[Future]:
        """Enhance PRs in the background, reporting each result to callback.

        Returns the futures of the submitted tasks.
        """

        def work(pr: PullRequest) -> None:
            try:
                data = self.enhance_pr(pr)
            except Exception as exc:  # reported to the caller through the callback
                callback(None, exc)
            else:
                callback(data, None)

        prs = list(prs)
        if not prs:
            return []
        executor = ThreadPoolExecutor(max_workers=WORKERS)
        futures = [executor.submit(work, pr) for pr in prs]
        executor.shutdown(wait=False)
        return futures

    def is_enhanced(self, pr_number: int) -> bool:
        with self._lock:
            return pr_number in self._enhanced

    def get_enhanced_data(self, pr_number: int) -> EnhancedData | None:
        with self._lock:
            return self._enhanced.get(pr_number)
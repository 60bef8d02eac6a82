"""Loading pull requests and ordering them for display."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from prcompass.models import PRData, PullRequest

PRFetcher = Callable[[Any, str], Iterable[PullRequest]]


def _updated_key(pr: PRData) -> float:
    return pr.updated_at.timestamp() if pr.updated_at is not None else float("-inf")


def convert_and_sort(pull_requests: Iterable[PullRequest]) -> list[PRData]:
    """Wrap pull requests and order them most recently updated first."""
    prs = [PRData(pull_request=pr) for pr in pull_requests]
    prs.sort(key=_updated_key, reverse=True)
    return prs


class PRService:
    """Fetches pull requests through a fetcher called with (config, token)."""

    def __init__(self, token: str, fetcher: PRFetcher) -> None:
        self.token = token
        self.fetcher = fetcher

    def fetch_prs(self, config: Any) -> list[PRData]:
        """Fetch the PRs described by config, newest first."""
        return convert_and_sort(self.fetcher(config, self.token))

    def refresh_prs(self, config: Any) -> list[PRData]:
        """Background refresh; same as a fresh fetch."""
        return self.fetch_prs(config)
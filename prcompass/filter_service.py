"""Filtering of pull request lists."""

from __future__ import annotations

from collections.abc import Iterable

from prcompass.models import FilterOptions, PRData

VALID_MODES = frozenset({"author", "status", "draft", "title", "repo"})


class InvalidFilterError(ValueError):
    """Raised for a filter mode that is not supported."""


def _status(pr: PRData) -> str:
    if pr.draft:
        return "draft"
    if pr.mergeable_state == "dirty":
        return "conflicts"
    return "ready"


class FilterService:
    """Applies and validates filters over pull requests."""

    def filter_prs(
        self, prs: Iterable[PRData] | None, filter_options: FilterOptions
    ) -> list[PRData]:
        """Return the pull requests that match the filter, in order."""
        prs = list(prs or [])
        mode = filter_options.mode
        if not mode:
            return prs
        value = filter_options.value.lower()

        def matches(pr: PRData) -> bool:
            if mode == "author":
                return value in pr.author_login().lower()
            if mode == "status":
                return value in _status(pr)
            if mode == "draft":
                return pr.draft == (filter_options.value == "true")
            if mode == "title":
                return value in pr.title.lower()
            if mode == "repo":
                return value in pr.repo_name().lower()
            return False

        return [pr for pr in prs if matches(pr)]

    def validate_filter(self, filter_options: FilterOptions) -> None:
        """Raise InvalidFilterError if the filter mode is unknown."""
        if filter_options.mode and filter_options.mode not in VALID_MODES:
            raise InvalidFilterError(f"invalid filter mode: {filter_options.mode}")
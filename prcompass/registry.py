"""One place that builds and holds all services."""

from __future__ import annotations

from dataclasses import dataclass

from prcompass.enhancement_service import EnhancementService
from prcompass.filter_service import FilterService
from prcompass.pr_service import PRFetcher, PRService
from prcompass.state_service import StateService


@dataclass
class Registry:
    """The set of services an interface works with."""

    pr: PRService
    enhancement: EnhancementService
    state: StateService
    filter: FilterService


def new_registry(token: str, fetcher: PRFetcher) -> Registry:
    """Create a registry with freshly initialised services."""
    return Registry(
        pr=PRService(token, fetcher),
        enhancement=EnhancementService(token),
        state=StateService(),
        filter=FilterService(),
    )
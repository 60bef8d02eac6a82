"""Pull request dashboard model: data, filtering, enrichment, state, tabs and table formatting."""

__version__ = "0.1.0"

__all__ = [
    "models",
    "styles",
    "filter_service",
    "state_service",
    "enhancement_service",
    "pr_service",
    "registry",
    "table",
    "tabs",
    "viewmodel",
]
import pytest

from prcompass.enhancement_service import EnhancementService
from prcompass.filter_service import FilterService, InvalidFilterError
from prcompass.models import FilterOptions
from prcompass.pr_service import PRService
from prcompass.registry import new_registry
from prcompass.state_service import StateService


def no_prs(config, token):
    return []


@pytest.mark.parametrize("token", ["valid-token", "", "token"])
def test_new_registry_initialises_all_services(token):
    registry = new_registry(token, no_prs)
    assert isinstance(registry.pr, PRService)
    assert isinstance(registry.enhancement, EnhancementService)
    assert isinstance(registry.state, StateService)
    assert isinstance(registry.filter, FilterService)
    assert registry.pr.token == token
    assert registry.enhancement.token == token


def test_services_are_functional():
    registry = new_registry("token", no_prs)
    initial = registry.state.get_state()
    assert initial.loaded is False
    registry.filter.validate_filter(FilterOptions(mode="author", value="test"))
    with pytest.raises(InvalidFilterError):
        registry.filter.validate_filter(FilterOptions(mode="bogus"))

    registry.state.update_prs([])
    updated = registry.state.get_state()
    assert updated is not initial
    assert updated.loaded is True
    assert initial.loaded is False
    assert registry.pr.fetch_prs({}) == []


def test_multiple_registries_are_independent():
    first = new_registry("token1", no_prs)
    second = new_registry("token2", no_prs)
    first.state.update_status_message("test1")
    second.state.update_status_message("test2")
    assert first.state.get_state().ui.status_msg == "test1"
    assert second.state.get_state().ui.status_msg == "test2"
    assert first.state is not second.state
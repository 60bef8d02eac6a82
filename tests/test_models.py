import copy

import pytest

from prcompass.models import (
    AppState,
    Branch,
    EnhancedData,
    FilterOptions,
    PRData,
    PullRequest,
    Repository,
    UIState,
    User,
)


def test_author_login_with_user():
    pr = PullRequest(user=User(login="alice"))
    assert pr.author_login() == "alice"


def test_author_login_without_user_is_empty():
    assert PullRequest().author_login() == ""


def test_repo_names_from_base():
    pr = PullRequest(
        base=Branch(repo=Repository(name="backend-api", full_name="company/backend-api"))
    )
    assert pr.repo_name() == "backend-api"
    assert pr.repo_full_name() == "company/backend-api"


@pytest.mark.parametrize("base", [None, Branch(repo=None)])
def test_repo_names_missing_base_or_repo(base):
    pr = PullRequest(base=base)
    assert pr.repo_name() == ""
    assert pr.repo_full_name() == ""


def test_prdata_delegates_to_pull_request():
    data = PRData(PullRequest(number=42, title="Filtered PR", draft=True))
    assert data.number == 42
    assert data.title == "Filtered PR"
    assert data.draft is True
    assert data.enhanced is None


def test_prdata_missing_attribute_raises():
    data = PRData(PullRequest(number=1))
    assert hasattr(data, "does_not_exist") is False
    assert getattr(data, "does_not_exist", "fallback") == "fallback"
    with pytest.raises(AttributeError):
        getattr(data, "does_not_exist")


def test_prdata_copy_keeps_delegation():
    data = PRData(PullRequest(number=7), EnhancedData(number=7, comments=5))
    clone = copy.copy(data)
    assert clone.number == 7
    assert clone.enhanced.comments == 5


def test_app_state_defaults_are_not_shared():
    first = AppState()
    second = AppState()
    first.prs.append(PRData(PullRequest(number=1)))
    first.enhancement_queue.add(3)
    assert second.prs == []
    assert second.enhancement_queue == set()
    assert first.loaded is False
    assert first.error is None


def test_ui_state_default_filter_is_inactive():
    ui = UIState()
    assert ui.filter == FilterOptions(mode="", value="", active=False)
    assert ui.show_help is False
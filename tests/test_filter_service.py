import pytest

from prcompass.filter_service import FilterService, InvalidFilterError
from prcompass.models import Branch, FilterOptions, PRData, PullRequest, Repository, User


def make_pr(number, title, login, draft, state, repo):
    return PRData(
        PullRequest(
            number=number,
            title=title,
            user=User(login=login),
            draft=draft,
            mergeable_state=state,
            base=Branch(repo=Repository(name=repo)),
        )
    )


@pytest.fixture
def sample_prs():
    return [
        make_pr(1, "Fix authentication bug", "alice", False, "clean", "backend-api"),
        make_pr(2, "Add new user dashboard", "bob", True, "clean", "frontend-app"),
        make_pr(3, "Update documentation", "alice", False, "dirty", "docs"),
        make_pr(4, "Refactor database queries", "charlie", False, "clean", "backend-api"),
    ]


@pytest.mark.parametrize(
    "mode, value, expected",
    [
        ("author", "alice", [1, 3]),
        ("author", "al", [1, 3]),
        ("author", "ALICE", [1, 3]),
        ("author", "nonexistent", []),
        ("draft", "true", [2]),
        ("draft", "false", [1, 3, 4]),
        ("status", "draft", [2]),
        ("status", "conflicts", [3]),
        ("status", "ready", [1, 4]),
        ("title", "auth", [1]),
        ("title", "DOCUMENTATION", [3]),
        ("repo", "backend-api", [1, 4]),
        ("repo", "backend", [1, 4]),
        ("", "", [1, 2, 3, 4]),
        ("", "alice", [1, 2, 3, 4]),
    ],
)
def test_filter_prs(sample_prs, mode, value, expected):
    result = FilterService().filter_prs(sample_prs, FilterOptions(mode=mode, value=value))
    assert [pr.number for pr in result] == expected


@pytest.mark.parametrize(
    "prs, mode, value",
    [
        (None, "author", "alice"),
        ([], "author", "alice"),
        ([PRData(PullRequest(number=1, title="Test PR", user=None))], "author", "alice"),
        ([PRData(PullRequest(number=1, title="Test PR", user=User()))], "author", "alice"),
        ([PRData(PullRequest(number=1, title="Test PR", base=None))], "repo", "test"),
        (
            [PRData(PullRequest(number=1, title="Test PR", base=Branch(repo=None)))],
            "repo",
            "test",
        ),
    ],
)
def test_filter_prs_edge_cases(prs, mode, value):
    assert FilterService().filter_prs(prs, FilterOptions(mode=mode, value=value)) == []


def test_unknown_mode_matches_nothing(sample_prs):
    assert FilterService().filter_prs(sample_prs, FilterOptions(mode="other", value="x")) == []


@pytest.mark.parametrize(
    "mode, value",
    [
        ("author", "alice"),
        ("status", "draft"),
        ("draft", "true"),
        ("title", "bug fix"),
        ("repo", "backend"),
        ("", "anything"),
    ],
)
def test_validate_filter_accepts(mode, value):
    assert FilterService().validate_filter(FilterOptions(mode=mode, value=value)) is None


@pytest.mark.parametrize("mode", ["invalid", "unknown_mode"])
def test_validate_filter_rejects(mode):
    with pytest.raises(InvalidFilterError, match=mode):
        FilterService().validate_filter(FilterOptions(mode=mode, value="test"))
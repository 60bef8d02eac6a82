# prcompass

Building blocks for a terminal dashboard that keeps track of open pull
requests across many repositories: data models, filtering, enrichment with
review and CI details, application state, tab management and table
formatting. It needs nothing outside the standard library and runs on
Python 3.10 and later.

## Modules

- `prcompass.models` – data classes for pull requests (`PullRequest`, `User`,
  `Repository`, `Branch`, `Label`, `Team`, `Review`, `CheckRun`) and for the
  dashboard's state (`PRData`, `EnhancedData`, `FilterOptions`, `UIState`,
  `AppState`, `PRDisplayInfo`). `PullRequest.author_login()`,
  `repo_full_name()` and `repo_name()` return an empty string when the data is
  missing. `PRData` wraps a `PullRequest` and passes unknown attributes
  through to it.
- `prcompass.filter_service` – `FilterService.filter_prs(prs, filter_options)`
  keeps the pull requests that match by `author`, `status` (`draft`,
  `conflicts` or `ready`), `draft` (`"true"` or anything else), `title` or
  `repo`, case-insensitively and in order; an empty mode keeps everything.
  `validate_filter` raises `InvalidFilterError` for an unknown mode.
- `prcompass.state_service` – `StateService` holds an `AppState` behind a
  lock. `get_state()` returns a copy whose lists, enhancement queue and UI
  state can be changed without touching the service.
- `prcompass.enhancement_service` – `GitHubClient` calls the GitHub REST API
  for a pull request's details, reviews and check runs.
  `fetch_enhanced_pr_data(client, pr)` combines them into `EnhancedData`,
  raising `EnhancementError` when the pull request lacks its base repository,
  owner or name. `determine_review_status` and `determine_checks_status`
  reduce reviews and check runs to one verdict. `EnhancementService` caches
  results by pull request number; `enhance_prs(prs, callback)` runs the work
  on a pool of five threads, calls `callback(data, error)` for each pull
  request and returns the futures.
- `prcompass.pr_service` – `PRService(token, fetcher)` calls
  `fetcher(config, token)` and returns the pull requests wrapped in `PRData`,
  most recently updated first (`convert_and_sort`).
- `prcompass.registry` – `new_registry(token, fetcher)` builds a `Registry`
  with one of each service.
- `prcompass.table` – `create_table_columns()` lays out the nine columns;
  `create_table_rows` and `create_table_rows_with_enhancement` format rows
  with status, review and CI indicators, compact ticket-prefixed titles
  (`format_pr_title`), comment and file-change summaries and relative times
  (`humanize_time_since`). Also `pr_labels_display`, `pr_activity_enhanced`,
  `is_wsl()` and `error_view(error)`.
- `prcompass.styles` – the colour theme and a `Style` class whose
  `render(text)` returns text with padding, borders, margins and ANSI colours.
- `prcompass.tabs` – `TabConfig`, `TabState` and `TabManager`: add tabs,
  switch with wrap-around (`next_tab`, `prev_tab`, `switch_to_tab`), close
  tabs (the last one cannot be closed) and `cleanup()` to signal every tab's
  background work to stop. Each tab's refresh interval and priority are
  recorded in `TabManager.refresh_schedule`.
- `prcompass.viewmodel` – `ViewModel` turns tabs, filters, tables and status
  into plain view objects, builds the help screen contents and validates tab
  operations (`validate_tab_operation`).

## Example

```python
from prcompass.filter_service import FilterService
from prcompass.models import FilterOptions, PRData, PullRequest, User

prs = [
    PRData(PullRequest(number=1, title="Fix login", user=User(login="alice"))),
    PRData(PullRequest(number=2, title="Add dashboard", user=User(login="bob"), draft=True)),
]

service = FilterService()
by_alice = service.filter_prs(prs, FilterOptions(mode="author", value="ALI"))
drafts = service.filter_prs(prs, FilterOptions(mode="draft", value="true"))
```

Formatting rows:

```python
from prcompass.table import create_table_columns, create_table_rows

columns = create_table_columns()
rows = create_table_rows([pr.pull_request for pr in prs])
```

Managing tabs:

```python
from prcompass.tabs import TabConfig, TabManager

manager = TabManager("token")
manager.add_tab(TabConfig(name="Backend", mode="repos", repos=["acme/api"]))
manager.add_tab(TabConfig(name="Frontend", mode="repos", repos=["acme/web"]))
manager.next_tab()
print(manager.tab_names(), manager.active_tab().config.name)
manager.cleanup()
```

## What the package does not do

- There is no command and no interactive screen: it produces rows, view
  objects and rendered strings, but nothing draws them or reads keys.
- It does not list pull requests for a repository, organisation, team, search
  or topic itself; `PRService` relies on the fetcher you pass in.
- It does not read configuration files and keeps no cache on disk.
- Tabs record their refresh interval, but nothing schedules refreshes.
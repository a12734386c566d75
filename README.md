# assetshelf

assetshelf is a library for keeping track of Unreal Engine marketplace assets,
installed engines, local projects and plugins.

## Modules

- `assetshelf.database`: a small SQLite store. `Database(path)` creates the
  tables it needs and works as a context manager. It keeps favourite assets
  (`add_favorite`, `remove_favorite`, `is_favorite`, `favorites`), named user
  data (`set_user_data`, `user_data`) and the latest engine chosen for each
  project (`set_latest_engine`, `latest_engine`). `default_path()` gives the
  database location in the user data directory and `open_default()` opens it
  there, creating the directory if needed.
- `assetshelf.asset_info`: `AssetInfo` records built from their JSON form with
  `AssetInfo.from_dict`, together with `Category`, `KeyImage` and
  `ReleaseInfo`. `thumbnail()` returns the first image whose type is
  `Thumbnail` or `DieselGameBox`, `latest_release()` the most recently added
  release, and `matches_filter(tag, search)` checks the category path and a
  case-insensitive title search.
- `assetshelf.asset_data`: `AssetData` wraps an `AssetInfo` with its favourite
  state (read from a `Database`) and downloaded state (found by looking for
  `<vault>/<app id>/data` in the given vault directories). `check_category`
  evaluates expressions such as `assets&!favorites` or `plugins|games` from
  left to right; `refresh()` re-reads both states and calls the callbacks
  registered with `connect_refreshed`. `decide_kind` and `AssetKind` classify
  an asset by its categories.
- `assetshelf.engine_data`: `read_engine_version(path)` reads
  `Engine/Build/Build.version` into an `UnrealVersion`, which has `format()`,
  `valid()` and `compare()`. `EngineData` holds an installed engine and applies
  `UpdateMsg` and `BranchMsg` messages, notifying callbacks registered with
  `connect_finished`.
- `assetshelf.project_data`: `read_uproject(path)` parses a `.uproject` file
  into an `Uproject`; `thumbnail_location(path)` gives the path of the
  project's `Saved/AutoScreenshot.png`. `ProjectData` loads the descriptor
  (with braces stripped from the engine association) and the screenshot bytes
  if present.
- `assetshelf.plugin_data`: `read_uplugin(path)` parses a `.uplugin` file into
  an `Uplugin`, with its `Module` and `PluginReference` entries. `PluginData`
  is a plugin list item.
- `assetshelf.epic_web`: `EpicWeb`, a cookie-keeping `requests` session.
  `start_session(exchange_token)` exchanges a login code for a web session,
  `validate_eula(account_id)` tells whether the account has accepted the
  engine EULA, and `run_query(url)` returns a URL's decoded JSON body.
  `parse_eula_response` parses a EULA query response on its own.
- `assetshelf.items`: the frozen records `CategoryData` and `LogData`.
- `assetshelf.fallback`: `either(value, other)` returns `value` unless it is
  empty.

## Example

```python
from assetshelf.database import Database
from assetshelf.engine_data import read_engine_version

with Database("library.db") as db:
    db.add_favorite("some-asset-id")
    print(db.favorites())

version = read_engine_version("/opt/UnrealEngine")
if version is not None:
    print(version.format())
```

## What it does not do

assetshelf is a library only: it has no command and no graphical interface.
It does not log in to the store's launcher API, fetch the asset library,
download assets or thumbnails, or check engine source checkouts for upstream
changes; `EngineData` only records the update and branch messages it is given.

## Tests

The `test` extra lists the test dependencies, pytest and responses.
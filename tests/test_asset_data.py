from datetime import datetime, timezone

import pytest

from assetshelf.asset_data import (
    AssetData,
    AssetKind,
    decide_kind,
    downloaded_locations,
)
from assetshelf.asset_info import AssetInfo
from assetshelf.database import Database


def _asset(categories=("assets/codeplugins",), **extra):
    data = {
        "id": "asset-1",
        "title": "Forest Pack",
        "categories": [{"path": p} for p in categories],
    }
    data.update(extra)
    return AssetInfo.from_dict(data)


@pytest.fixture
def database(tmp_path):
    db = Database(tmp_path / "test.db")
    yield db
    db.close()


@pytest.mark.parametrize(
    "path,kind",
    [
        ("assets", AssetKind.ASSET),
        ("games", AssetKind.GAME),
        ("plugins", AssetKind.PLUGIN),
        ("projects", AssetKind.PROJECT),
        ("engines", AssetKind.ENGINE),
    ],
)
def test_decide_kind(path, kind):
    asset = _asset(categories=("assets/textures", path))
    assert decide_kind(asset) is kind
    assert AssetData(asset).kind() is kind


def test_decide_kind_none_without_match():
    assert decide_kind(_asset(categories=("assets/textures",))) is None
    assert decide_kind(_asset(categories=())) is None


def test_kind_uses_first_matching_category():
    assert decide_kind(_asset(categories=("games", "assets"))) is AssetKind.GAME


def test_name_and_id_come_from_asset():
    data = AssetData(_asset(), image=b"img")
    assert data.id == "asset-1"
    assert data.name == "Forest Pack"
    assert data.image == b"img"


def test_downloaded_locations(tmp_path):
    vault_a = tmp_path / "a"
    vault_b = tmp_path / "b"
    (vault_a / "app1" / "data").mkdir(parents=True)
    vault_b.mkdir()
    assert downloaded_locations([vault_a, str(vault_b)], "app1") == [
        vault_a / "app1" / "data"
    ]
    assert downloaded_locations([vault_a], "other") == []


def test_downloaded_when_release_in_vault(tmp_path):
    (tmp_path / "app1" / "data").mkdir(parents=True)
    asset = _asset(releaseInfo=[{"appId": "app1"}])
    assert AssetData(asset, vault_directories=[tmp_path]).downloaded is True
    assert AssetData(asset, vault_directories=[]).downloaded is False


def test_favorite_from_database(database):
    database.add_favorite("asset-1")
    assert AssetData(_asset(), database=database).favorite is True
    assert AssetData(_asset()).favorite is False


def test_refresh_rereads_state_and_notifies(database, tmp_path):
    asset = _asset(releaseInfo=[{"appId": "app1"}])
    data = AssetData(asset, database=database, vault_directories=[tmp_path])
    seen = []
    data.connect_refreshed(seen.append)
    assert data.favorite is False and data.downloaded is False
    database.add_favorite("asset-1")
    (tmp_path / "app1" / "data").mkdir(parents=True)
    data.refresh()
    assert data.favorite is True
    assert data.downloaded is True
    assert seen == [data]


def test_release_prefers_latest_release():
    asset = _asset(
        lastModifiedDate="2020-01-01T00:00:00+00:00",
        releaseInfo=[
            {"appId": "a", "dateAdded": "2021-01-01T00:00:00+00:00"},
            {"appId": "b", "dateAdded": "2022-01-01T00:00:00+00:00"},
        ],
    )
    data = AssetData(asset)
    assert data.release() == datetime(2022, 1, 1, tzinfo=timezone.utc)
    assert data.last_modified() == datetime(2020, 1, 1, tzinfo=timezone.utc)


def test_release_falls_back_to_last_modified():
    asset = _asset(lastModifiedDate="2020-01-01T00:00:00+00:00")
    data = AssetData(asset)
    assert data.release() == data.last_modified()


@pytest.mark.parametrize(
    "expression,expected",
    [
        ("assets", True),
        ("ASSETS", True),
        ("codeplugins", True),
        ("games", False),
        ("!games", True),
        ("!assets", False),
        ("assets&games", False),
        ("games|assets", True),
        ("assets&!favorites", True),
        ("favorites", False),
        ("downloaded|assets", True),
        ("games&assets|codeplugins", False),
    ],
)
def test_check_category(expression, expected):
    assert AssetData(_asset()).check_category(expression) is expected


def test_check_category_favorites(database):
    database.add_favorite("asset-1")
    data = AssetData(_asset(), database=database)
    assert data.check_category("favorites") is True
    assert data.check_category("favorites&!downloaded") is True
    assert data.check_category("downloaded") is False
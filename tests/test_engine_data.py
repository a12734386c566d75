import json

import pytest

from assetshelf.engine_data import (
    BranchMsg,
    EngineData,
    UnrealVersion,
    UpdateMsg,
    read_engine_version,
)

INVALID = dict(
    major_version=-1,
    minor_version=-1,
    patch_version=-1,
    changelist=-1,
    compatible_changelist=-1,
    is_licensee_version=-1,
    is_promoted_build=-1,
)


def test_from_dict_reads_pascal_case_keys():
    version = UnrealVersion.from_dict(
        {
            "MajorVersion": 5,
            "MinorVersion": 1,
            "PatchVersion": 3,
            "Changelist": 100,
            "CompatibleChangelist": 99,
            "IsLicenseeVersion": 0,
            "IsPromotedBuild": 1,
            "BranchName": "++UE5+Release-5.1",
        }
    )
    assert version == UnrealVersion(5, 1, 3, 100, 99, 0, 1, "++UE5+Release-5.1")


def test_from_dict_fills_missing_fields_with_defaults():
    version = UnrealVersion.from_dict({"MajorVersion": 4})
    assert version == UnrealVersion(major_version=4)


def test_from_dict_rejects_wrong_types():
    with pytest.raises(ValueError):
        UnrealVersion.from_dict({"MajorVersion": "five"})
    with pytest.raises(ValueError):
        UnrealVersion.from_dict([1, 2])


def test_format_valid_version():
    assert UnrealVersion(major_version=4, minor_version=27, patch_version=2).format() == "4.27.2"


def test_format_invalid_version_uses_branch_name():
    version = UnrealVersion(branch_name="main", **INVALID)
    assert not version.valid()
    assert version.format() == "main"


def test_partially_negative_version_is_valid():
    fields = dict(INVALID, changelist=0)
    assert UnrealVersion(**fields).valid()


def test_compare_orders_by_components():
    old = UnrealVersion(major_version=4, minor_version=27, patch_version=2)
    new = UnrealVersion(major_version=5, minor_version=0, patch_version=0)
    assert old.compare(new) == -1
    assert new.compare(old) == 1
    assert old.compare(UnrealVersion(major_version=4, minor_version=27, patch_version=2)) == 0
    assert old.compare(UnrealVersion(major_version=4, minor_version=27, patch_version=3)) == -1


def test_compare_invalid_sorts_last():
    invalid = UnrealVersion(**INVALID)
    valid = UnrealVersion(major_version=5)
    assert invalid.compare(valid) == 1
    assert valid.compare(invalid) == -1
    assert invalid.compare(invalid) == 1


def _write_version(root, text):
    build = root / "Engine" / "Build"
    build.mkdir(parents=True)
    (build / "Build.version").write_text(text, encoding="utf-8")


def test_read_engine_version(tmp_path):
    _write_version(tmp_path, json.dumps({"MajorVersion": 5, "MinorVersion": 2, "PatchVersion": 1}))
    version = read_engine_version(tmp_path)
    assert version.format() == "5.2.1"


def test_read_engine_version_missing_file(tmp_path):
    assert read_engine_version(tmp_path) is None


def test_read_engine_version_malformed_gives_default(tmp_path):
    _write_version(tmp_path, "not json")
    assert read_engine_version(str(tmp_path)) == UnrealVersion()


def test_engine_data_initial_state():
    version = UnrealVersion(major_version=5, minor_version=3, patch_version=0)
    engine = EngineData("/engines/ue5", "guid-1", version)
    assert engine.path == "/engines/ue5"
    assert engine.guid == "guid-1"
    assert engine.version == version.format()
    assert engine.ueversion == version
    assert engine.needs_update is False
    assert engine.branch is None
    assert engine.has_branch is False
    assert engine.valid() is True


def test_engine_data_invalid_version():
    engine = EngineData("/engines/src", "guid-2", UnrealVersion(branch_name="dev", **INVALID))
    assert engine.valid() is False
    assert engine.version == "dev"


def test_update_messages_and_finished_signal():
    engine = EngineData("/e", "g", UnrealVersion())
    seen = []
    engine.connect_finished(seen.append)

    engine.update(UpdateMsg(True))
    assert engine.needs_update is True

    engine.update(BranchMsg("release"))
    assert engine.branch == "release"
    assert engine.has_branch is True

    engine.update(BranchMsg(""))
    assert engine.has_branch is False
    assert engine.branch == ""

    assert seen == [engine, engine, engine]


def test_update_rejects_unknown_message():
    engine = EngineData("/e", "g", UnrealVersion())
    with pytest.raises(TypeError):
        engine.update("bogus")
import dataclasses

import pytest

from assetshelf.items import CategoryData, LogData


def test_category_fields():
    category = CategoryData("All", "assets|plugins", "all", False)
    assert (category.name, category.filter, category.path, category.leaf) == (
        "All",
        "assets|plugins",
        "all",
        False,
    )


def test_category_equality():
    assert CategoryData("a", "f", "p", True) == CategoryData("a", "f", "p", True)
    assert CategoryData("a", "f", "p", True) != CategoryData("a", "f", "p", False)


def test_category_is_immutable():
    category = CategoryData("a", "f", "p", True)
    with pytest.raises(dataclasses.FrozenInstanceError):
        category.leaf = False
    assert category.leaf is True
    assert category == CategoryData("a", "f", "p", True)


def test_log_fields():
    log = LogData("/tmp/Saved/Logs/a.log", "a.log", True)
    assert log.path == "/tmp/Saved/Logs/a.log"
    assert log.name == "a.log"
    assert log.crash is True


def test_log_is_immutable():
    log = LogData("p", "n", False)
    with pytest.raises(dataclasses.FrozenInstanceError):
        log.crash = True
    assert log.crash is False
    assert log == LogData("p", "n", False)


def test_log_requires_all_fields():
    with pytest.raises(TypeError):
        LogData("p", "n")
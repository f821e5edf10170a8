"""Unit tests for StateContainer."""

import pytest

from watchermap import StateContainer


@pytest.mark.unit
@pytest.mark.store
def test_read_returns_the_held_reference():
    value = {"a": {"b": 1}}
    container = StateContainer(value)

    assert container.read() is value


@pytest.mark.unit
@pytest.mark.store
def test_replace_swaps_the_reference():
    container = StateContainer({"a": 1})
    new_value = {"a": 2}

    container.replace(new_value)

    assert container.read() is new_value


@pytest.mark.unit
@pytest.mark.store
def test_replace_all_reports_every_top_level_key():
    """Whole-state replacement reports all top-level keys, changed or not"""
    container = StateContainer({"todos": [], "filter": "all"})

    paths = container.replace_all({"todos": [], "filter": "done", "nextId": 3})

    assert paths == ["todos", "filter", "nextId"]
    assert container.read()["filter"] == "done"


@pytest.mark.unit
@pytest.mark.store
def test_replace_all_reports_list_indices_and_nothing_for_primitives():
    container = StateContainer(None)

    assert container.replace_all(["a", "b"]) == ["0", "1"]
    assert container.replace_all(42) == []
    assert container.read() == 42

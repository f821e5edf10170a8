"""
Shared pytest fixtures and configuration for watchermap tests.
"""

import pytest

from watchermap import watcher_map, watcher_store


@pytest.fixture
def initial_state():
    """A small todo-list state used across the suite."""
    return {
        "todos": [
            {
                "id": 1,
                "text": "Learn Python",
                "completed": True,
                "tags": ["backend", "learning"],
            },
            {
                "id": 2,
                "text": "Build a project",
                "completed": False,
                "tags": ["coding", "project"],
            },
        ],
        "filter": "all",
        "nextId": 3,
    }


@pytest.fixture
def store(initial_state):
    """Provide a fresh WatcherStore for tests that need it."""
    return watcher_store(initial_state)


@pytest.fixture
def wmap(initial_state):
    """Provide a fresh WatcherMap for tests that need it."""
    return watcher_map(initial_state)


@pytest.fixture
def recorder():
    """Factory for callbacks that record every value they are called with."""

    def make():
        calls = []

        def callback(value):
            calls.append(value)

        callback.calls = calls
        return callback

    return make

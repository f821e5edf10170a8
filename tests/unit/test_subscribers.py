"""Unit tests for SubscriptionRegistry."""

import pytest

from watchermap import RegistryTransition, SubscriptionRegistry


@pytest.mark.unit
@pytest.mark.store
def test_first_add_reports_mount():
    registry = SubscriptionRegistry()

    assert registry.add(lambda value: None) is RegistryTransition.MOUNT
    assert registry.add(lambda value: None, "filter", ("filter",)) is RegistryTransition.NONE
    assert len(registry) == 2


@pytest.mark.unit
@pytest.mark.store
def test_add_is_idempotent_per_callback():
    """The same callback is never stored twice"""
    registry = SubscriptionRegistry()

    def callback(value):
        pass

    registry.add(callback)
    registry.add(callback, "todos", ("todos",))

    assert len(registry) == 1
    assert registry.snapshot()[0].path is None


@pytest.mark.unit
@pytest.mark.store
def test_bound_methods_share_identity():
    class Component:
        def render(self, value):
            pass

    component = Component()
    registry = SubscriptionRegistry()

    registry.add(component.render)
    registry.add(component.render)

    assert len(registry) == 1
    assert registry.remove(component.render) is RegistryTransition.UNMOUNT


@pytest.mark.unit
@pytest.mark.store
def test_remove_last_reports_unmount():
    registry = SubscriptionRegistry()

    def first(value):
        pass

    def second(value):
        pass

    registry.add(first)
    registry.add(second)

    assert registry.remove(first) is RegistryTransition.NONE
    assert registry.remove(second) is RegistryTransition.UNMOUNT
    assert not registry


@pytest.mark.unit
@pytest.mark.store
def test_remove_unknown_callback_is_noop():
    registry = SubscriptionRegistry()

    def registered(value):
        pass

    registry.add(registered)

    assert registry.remove(lambda value: None) is RegistryTransition.NONE
    assert registry.contains(registered)


@pytest.mark.unit
@pytest.mark.store
def test_remove_from_empty_registry_reports_nothing():
    registry = SubscriptionRegistry()
    assert registry.remove(lambda value: None) is RegistryTransition.NONE


@pytest.mark.unit
@pytest.mark.store
def test_snapshot_is_a_copy_in_registration_order():
    registry = SubscriptionRegistry()
    callbacks = [lambda value: None for _ in range(3)]
    for callback in callbacks:
        registry.add(callback)

    snapshot = registry.snapshot()
    registry.remove(callbacks[0])

    assert [sub.callback for sub in snapshot] == callbacks
    assert len(registry) == 2

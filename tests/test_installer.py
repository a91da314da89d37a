"""Tests for installing descriptors onto targets."""

import copy

import pytest

from fluentchain.core.models import AccessorDescriptor, ValueDescriptor, merge_descriptors
from fluentchain.synthesis.installer import (
    InstallError,
    get_own_descriptor,
    has_own_property,
    install,
    installed_names,
    uninstall,
)


class Target:
    class_level = "shared"


class Slotted:
    __slots__ = ("a",)


class TestInstallValue:
    def test_value_is_readable_and_writable(self):
        target = Target()
        install(target, "eh", ValueDescriptor(value=1))
        assert target.eh == 1
        target.eh = 2
        assert get_own_descriptor(target, "eh").value == 2

    def test_non_writable_value_rejects_assignment(self):
        target = Target()
        install(target, "fixed", ValueDescriptor(value=1, writable=False))
        assert target.fixed == 1
        with pytest.raises(AttributeError):
            target.fixed = 2

    def test_only_the_target_instance_changes(self):
        target, other = Target(), Target()
        install(target, "eh", ValueDescriptor(value=1))
        assert not hasattr(other, "eh")
        assert isinstance(target, Target)
        assert type(target).__name__ == "Target"

    def test_plain_attributes_are_own_properties(self):
        target = Target()
        target.plain = 3
        descriptor = get_own_descriptor(target, "plain")
        assert descriptor.value == 3
        assert descriptor.configurable
        assert not has_own_property(target, "class_level")


class TestInstallAccessor:
    def test_accessor_routes_get_and_set(self):
        box = {"value": 0}
        target = Target()
        install(
            target,
            "size",
            AccessorDescriptor(
                get=lambda: box["value"], set=lambda v: box.__setitem__("value", v)
            ),
        )
        target.size = 5
        assert box["value"] == 5
        assert target.size == 5

    def test_read_only_accessor(self):
        target = Target()
        install(target, "size", AccessorDescriptor(get=lambda: 1))
        with pytest.raises(AttributeError):
            target.size = 2

    def test_value_replaces_accessor(self):
        target = Target()
        install(target, "size", AccessorDescriptor(get=lambda: 1))
        install(target, "size", ValueDescriptor(value=2))
        assert target.size == 2
        target.size = 3
        assert target.size == 3


class TestConfigurable:
    def test_non_configurable_cannot_be_redefined(self):
        target = Target()
        install(target, "locked", ValueDescriptor(value=1, configurable=False))
        with pytest.raises(InstallError):
            install(target, "locked", ValueDescriptor(value=2))
        with pytest.raises(InstallError):
            uninstall(target, "locked")
        assert target.locked == 1


class TestUninstall:
    def test_uninstall_removes_member(self):
        target = Target()
        install(target, "size", AccessorDescriptor(get=lambda: 1))
        install(target, "eh", ValueDescriptor(value=1))
        assert uninstall(target, "size")
        assert uninstall(target, "eh")
        assert not hasattr(target, "size")
        assert not hasattr(target, "eh")

    def test_uninstall_unknown_member(self):
        assert uninstall(Target(), "nope") is False


class TestInstalledNames:
    def test_names_in_install_order(self):
        target = Target()
        install(target, "b", ValueDescriptor(value=1))
        install(target, "a", ValueDescriptor(value=1))
        install(target, "hidden", ValueDescriptor(value=1, enumerable=False))
        assert installed_names(target) == ["b", "a"]
        assert installed_names(target, enumerable_only=False) == ["b", "a", "hidden"]


class TestUnsupportedTargets:
    def test_slots_only_target(self):
        with pytest.raises(InstallError):
            install(Slotted(), "eh", ValueDescriptor(value=1))


class TestMergeDescriptors:
    def test_accessor_over_value_drops_writable(self):
        existing = ValueDescriptor(value=1, writable=False, enumerable=False)
        merged = merge_descriptors(existing, AccessorDescriptor(get=lambda: 2))
        assert isinstance(merged, AccessorDescriptor)
        assert merged.enumerable is False
        assert not hasattr(merged, "writable")

    def test_value_over_value_keeps_flags(self):
        existing = ValueDescriptor(value=1, writable=False, configurable=True)
        merged = merge_descriptors(existing, ValueDescriptor(value=2))
        assert merged.value == 2
        assert merged.writable is False


class TestCopies:
    def test_copy_shares_installed_accessors(self):
        box = {"value": 1}
        target = Target()
        install(target, "size", AccessorDescriptor(get=lambda: box["value"]))
        clone = copy.copy(target)
        assert type(clone) is type(target)
        box["value"] = 2
        assert clone.size == 2
        assert installed_names(clone) == ["size"]

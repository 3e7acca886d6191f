"""Tests for capability lookups over the module model."""

import pytest

from propkit.exceptions import InvalidPatternError
from propkit.modules.capabilities import (
    FRAGMENT_HOST,
    PACKAGE_NAMESPACE,
    Capability,
    Module,
    Requirement,
    Wire,
    get_capabilities_by_namespace,
    get_satisfying_capability,
    get_wire,
    is_fragment,
)


def package(name, version="1.0.0"):
    return Capability(PACKAGE_NAMESPACE, {"package": name, "version": version})


class TestRequirement:
    """Test requirement filters against capabilities."""

    def test_equality_filter(self):
        requirement = Requirement(PACKAGE_NAMESPACE, {"package": "org.example.api"})
        assert requirement.is_satisfied(package("org.example.api"))
        assert not requirement.is_satisfied(package("org.example.apix"))

    def test_literal_value_is_exact_not_prefix_and_suffix(self):
        """Values without '*' never go through the substring matcher."""
        requirement = Requirement(PACKAGE_NAMESPACE, {"package": "ab"})
        assert not requirement.is_satisfied(package("abab"))

    def test_substring_filter(self):
        requirement = Requirement(PACKAGE_NAMESPACE, {"package": "org.*.api"})
        assert requirement.is_satisfied(package("org.example.api"))
        assert not requirement.is_satisfied(package("com.example.api"))

    def test_missing_attribute(self):
        requirement = Requirement(PACKAGE_NAMESPACE, {"vendor": "acme"})
        assert not requirement.is_satisfied(package("org.example"))

    def test_other_namespace(self):
        requirement = Requirement("bundle", {"package": "org.example"})
        assert not requirement.is_satisfied(package("org.example"))

    def test_invalid_pattern_rejected(self):
        with pytest.raises(InvalidPatternError):
            Requirement(PACKAGE_NAMESPACE, {"package": "org.**"})


class TestModuleLookups:
    """Test the module-level capability helpers."""

    def setup_method(self):
        self.bundle_cap = Capability("bundle", {"symbolic-name": "org.example"})
        self.api = package("org.example.api")
        self.impl = package("org.example.impl")
        self.log_wire = Wire("3.0", "1.0", package("org.log"))
        self.bundle_wire = Wire("3.0", "2.0", Capability("bundle", {"package": "org.log"}))
        self.module = Module(
            id="3.0",
            headers={"Bundle-SymbolicName": "org.example"},
            capabilities=[self.bundle_cap, self.api, self.impl],
            wires=[self.bundle_wire, self.log_wire],
        )

    def test_get_satisfying_capability(self):
        requirement = Requirement(PACKAGE_NAMESPACE, {"package": "org.example.*"})
        assert get_satisfying_capability(self.module, requirement) is self.api

    def test_get_satisfying_capability_none(self):
        requirement = Requirement(PACKAGE_NAMESPACE, {"package": "com.*"})
        assert get_satisfying_capability(self.module, requirement) is None

    def test_get_capabilities_by_namespace(self):
        assert get_capabilities_by_namespace(self.module, PACKAGE_NAMESPACE) == [self.api, self.impl]
        assert get_capabilities_by_namespace(self.module, "service") == []

    def test_get_wire_only_matches_package_namespace(self):
        assert get_wire(self.module, "org.log") is self.log_wire
        assert get_wire(self.module, "org.missing") is None

    def test_is_fragment(self):
        assert not is_fragment(self.module)
        fragment = Module(id="4.0", headers={FRAGMENT_HOST: "org.example"})
        assert is_fragment(fragment)

    def test_empty_module(self):
        module = Module(id="9.0")
        assert get_capabilities_by_namespace(module, PACKAGE_NAMESPACE) == []
        assert get_wire(module, "org.log") is None

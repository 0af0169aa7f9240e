# -*- coding: utf-8 -*-
"""
Tests for the step registry.
"""

import pytest

from modular.base_step import BaseStep
from setup import config as static_config


def _step_class():
    class _Step(BaseStep):
        def is_satisfied(self):
            return False

        def apply(self):
            return None

    return _Step


class TestStepRegistry:
    def test_register_sets_name_and_metadata(self, isolated_registry):
        step_class = isolated_registry.register(
            "example", {"dependencies": [], "description": "Example step"}
        )(_step_class())

        assert step_class.name == "example"
        assert step_class.metadata["description"] == "Example step"
        assert isolated_registry.get_step("example") is step_class

    def test_duplicate_registration_is_rejected(self, isolated_registry):
        isolated_registry.register("example")(_step_class())

        with pytest.raises(ValueError, match="already registered"):
            isolated_registry.register("example")(_step_class())

    def test_unknown_step(self, isolated_registry):
        with pytest.raises(KeyError):
            isolated_registry.get_step("does_not_exist")

    def test_resolve_order_pulls_in_dependencies(self, isolated_registry):
        isolated_registry.register("a", {"dependencies": []})(_step_class())
        isolated_registry.register("b", {"dependencies": ["a"]})(_step_class())
        isolated_registry.register("c", {"dependencies": ["b"]})(_step_class())

        assert isolated_registry.resolve_order(["c"]) == ["a", "b", "c"]

    def test_resolve_order_keeps_listed_order(self, isolated_registry):
        isolated_registry.register("a", {"dependencies": []})(_step_class())
        isolated_registry.register("b", {"dependencies": []})(_step_class())

        assert isolated_registry.resolve_order(["b", "a"]) == ["b", "a"]

    def test_resolve_order_detects_cycles(self, isolated_registry):
        isolated_registry.register("a", {"dependencies": ["b"]})(_step_class())
        isolated_registry.register("b", {"dependencies": ["a"]})(_step_class())

        with pytest.raises(ValueError, match="Circular dependency"):
            isolated_registry.resolve_order(["a"])

    def test_unregister(self, isolated_registry):
        isolated_registry.register("a")(_step_class())
        isolated_registry.unregister("a")

        assert "a" not in isolated_registry.get_all_steps()

    def test_default_sequence_is_already_ordered(self, isolated_registry):
        assert (
            isolated_registry.resolve_order(static_config.DEFAULT_STEP_SEQUENCE)
            == static_config.DEFAULT_STEP_SEQUENCE
        )

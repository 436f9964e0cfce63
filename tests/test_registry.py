"""Tests for the component registry."""

from __future__ import annotations

import logging

import pytest

from zenith_run.components.flow import enumerate_collection
from zenith_run.components.math import sum_numbers
from zenith_run.core import (
    ComponentRegistry,
    ComponentSpec,
    auto_discover_components,
    load_component_packages,
    new_component,
)


@pytest.fixture
def registry() -> ComponentRegistry:
    return ComponentRegistry()


class TestRegistration:
    def test_register_and_get(self, registry, double_spec):
        component = new_component(double_spec)(lambda ctx: None)
        registry.register("test/double", component)

        assert registry.get("test/double") is component
        assert registry.get("test/missing") is None
        assert registry.list_types() == ["test/double"]

    def test_type_needs_category(self, registry, bare_spec):
        with pytest.raises(ValueError, match="<category>/<name>"):
            registry.register("bare", new_component(bare_spec)(lambda ctx: None))

    def test_duplicate_type(self, registry, bare_spec):
        component = new_component(bare_spec)(lambda ctx: None)
        registry.register("test/bare", component)
        with pytest.raises(ValueError, match="already registered"):
            registry.register("test/bare", component)

    def test_categories(self, registry, bare_spec):
        component = new_component(bare_spec)(lambda ctx: None)
        registry.register("b/one", component)
        registry.register("a/two", component)
        registry.register("a/one", component)

        assert registry.categories() == ["a", "b"]
        assert registry.list_by_category("a") == ["a/one", "a/two"]
        assert registry.list_by_category("c") == []


class TestStandardComponents:
    def test_registered_on_import(self):
        registry = ComponentRegistry.get_instance()
        assert {"flow/branch", "flow/enumerate", "math/sum"} <= set(registry.list_types())
        assert registry.get("math/sum") is sum_numbers

    def test_discovery_is_idempotent(self):
        assert auto_discover_components("zenith_run.components") == []

    def test_load_packages_skips_missing(self, caplog):
        with caplog.at_level(logging.WARNING, logger="zenith_run.core.registry"):
            assert load_component_packages(["zenith_run.components.math", "zenith_run_missing"]) == []
        assert "Failed to load component package zenith_run_missing" in caplog.text


class TestManifest:
    def test_sum_manifest(self):
        manifest = ComponentRegistry.get_instance().get_manifest("math/sum")

        assert manifest["label"] == "Sum"
        assert manifest["category"] == "math"
        assert manifest["kind"] == "single"
        assert manifest["inputs"]["numbers"]["schema"] == {"type": "array", "items": {"type": "number"}}
        assert manifest["outputs"]["sum"]["schema"] == {"type": "number"}
        assert manifest["inlets"] == {}
        assert manifest["completion_port"] is True
        assert manifest["execution_port"] is False

    def test_enumerate_manifest(self):
        manifest = ComponentRegistry.get_instance().get_manifest("flow/enumerate")

        assert manifest["kind"] == "stream"
        assert manifest["inlets"] == {"break": {"label": "break", "doc": "Breaks out of the loop"}}
        assert set(manifest["outlets"]) == {"on_element"}
        assert set(manifest["outputs"]) == {"element", "element_index"}

    def test_branch_hides_completion_port(self):
        manifest = ComponentRegistry.get_instance().get_manifest("flow/branch")
        assert manifest["completion_port"] is False

    def test_unknown_manifest(self):
        assert ComponentRegistry.get_instance().get_manifest("nope/nope") is None

    def test_label_falls_back_to_name(self, registry):
        registry.register("test/unlabelled", new_component(ComponentSpec())(lambda ctx: None))
        assert registry.get_manifest("test/unlabelled")["label"] == "unlabelled"


class TestDocs:
    def test_generate_docs(self):
        docs = ComponentRegistry.get_instance().generate_docs()

        assert "## Flow" in docs
        assert "## Math" in docs
        assert "### `math/sum` (Sum)" in docs
        assert "- `numbers`: array - The numbers to sum" in docs
        assert "- `break` - Breaks out of the loop" in docs

    def test_docs_for_one_category(self):
        docs = ComponentRegistry.get_instance().generate_docs("math")
        assert "## Math" in docs
        assert "## Flow" not in docs
        assert enumerate_collection.spec.label not in docs

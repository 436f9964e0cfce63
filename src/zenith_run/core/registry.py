"""Component registry for type-based lookup."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from typing import Any

from .component import Component
from .parameters import describe_parameters, parameter_set
from .ports import completion_port_visible


logger = logging.getLogger(__name__)


class ComponentRegistry:
    """
    Registry mapping component type strings to components.

    Type strings are "<category>/<name>" (e.g. "flow/branch"), which lets
    hosts such as the runner and the HTTP server look components up by name.
    """

    _instance: "ComponentRegistry | None" = None

    def __init__(self):
        self._components: dict[str, Component] = {}

    @classmethod
    def get_instance(cls) -> "ComponentRegistry":
        """Get the singleton registry instance."""
        if cls._instance is None:
            cls._instance = ComponentRegistry()
        return cls._instance

    def register(self, component_type: str, component: Component) -> None:
        """
        Register a component under a type string.

        Args:
            component_type: Type identifier (e.g., "math/sum")
            component: The component to register
        """
        if "/" not in component_type:
            raise ValueError(f"Component type must be '<category>/<name>': {component_type}")
        if component_type in self._components:
            raise ValueError(f"Component type already registered: {component_type}")
        self._components[component_type] = component

    def get(self, component_type: str) -> Component | None:
        """Get a component by type string."""
        return self._components.get(component_type)

    def list_types(self) -> list[str]:
        """List all registered component types."""
        return sorted(self._components.keys())

    def list_by_category(self, category: str) -> list[str]:
        """List component types in a category (flow, math, etc.)."""
        return [t for t in self.list_types() if t.startswith(f"{category}/")]

    def categories(self) -> list[str]:
        return sorted({t.split("/", 1)[0] for t in self._components})

    def get_manifest(self, component_type: str) -> dict[str, Any] | None:
        """Get the manifest for a component type, as plain data."""
        component = self.get(component_type)
        if component is None:
            return None
        spec = component.spec
        ports = spec.ports
        options = ports.options if ports else None
        return {
            "type": component_type,
            "label": spec.label or component_type.split("/", 1)[1],
            "doc": spec.doc,
            "category": component_type.split("/", 1)[0],
            "kind": component.kind.value,
            "inputs": describe_parameters(parameter_set(spec, "inputs")),
            "outputs": describe_parameters(parameter_set(spec, "outputs")),
            "inlets": {k: {"label": v.label or k, "doc": v.doc}
                       for k, v in (ports.inlets if ports else {}).items()},
            "outlets": {k: {"label": v.label or k, "doc": v.doc}
                        for k, v in (ports.outlets if ports else {}).items()},
            "completion_port": completion_port_visible(spec),
            "execution_port": bool(options and options.execution_port),
        }

    def generate_docs(self, category: str | None = None) -> str:
        """Generate markdown documentation for registered components."""
        lines = []

        types = self.list_by_category(category) if category else self.list_types()

        # Group by category
        by_category: dict[str, list[str]] = {}
        for t in types:
            cat = t.split("/")[0]
            by_category.setdefault(cat, []).append(t)

        for cat in sorted(by_category.keys()):
            lines.append(f"## {cat.title()}\n")

            for comp_type in sorted(by_category[cat]):
                manifest = self.get_manifest(comp_type)
                if not manifest:
                    continue

                lines.append(f"### `{comp_type}` ({manifest['label']})")
                lines.append(f"{manifest['doc']}\n")

                for section in ("inputs", "outputs"):
                    if manifest[section]:
                        lines.append(f"**{section.title()}:**")
                        for name, spec in manifest[section].items():
                            type_name = spec["schema"].get("type", "any")
                            lines.append(f"- `{name}`: {type_name} - {spec['doc']}")
                        lines.append("")

                for section in ("inlets", "outlets"):
                    if manifest[section]:
                        lines.append(f"**{section.title()}:**")
                        for name, spec in manifest[section].items():
                            lines.append(f"- `{name}` - {spec['doc']}")
                        lines.append("")

                lines.append("---\n")

        return "\n".join(lines)


def register_component(component_type: str):
    """
    Decorator to register a component.

    Usage:
        @register_component("math/sum")
        @Sum
        def sum_numbers(ctx):
            ...
    """
    def decorator(component: Component) -> Component:
        ComponentRegistry.get_instance().register(component_type, component)
        return component
    return decorator


def auto_discover_components(package: str) -> list[str]:
    """
    Import every module below a package so its components register.

    Modules whose name starts with "_" are skipped. Modules that fail to
    import are reported and skipped.

    Args:
        package: Dotted name of the components package

    Returns:
        List of newly registered component type strings
    """
    registry = ComponentRegistry.get_instance()
    before = set(registry.list_types())

    root = importlib.import_module(package)
    for module_info in pkgutil.walk_packages(root.__path__, prefix=f"{package}."):
        if module_info.name.rsplit(".", 1)[-1].startswith("_"):
            continue
        try:
            importlib.import_module(module_info.name)
        except ImportError as e:
            logger.warning("Failed to import %s: %s", module_info.name, e)

    after = set(registry.list_types())
    return sorted(after - before)


def load_component_packages(packages: list[str]) -> list[str]:
    """
    Discover components in each of several packages.

    Packages that cannot be imported are reported and skipped, so a bad
    entry in the configuration does not stop a host from starting.
    """
    registered: list[str] = []
    for package in packages:
        try:
            registered.extend(auto_discover_components(package))
        except ImportError as e:
            logger.warning("Failed to load component package %s: %s", package, e)
    return registered

"""Standard components - auto-discovered and registered on import."""

from ..core.registry import auto_discover_components

_discovered = auto_discover_components(__name__)

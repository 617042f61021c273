"""
Built-in section types.

``register_default_components`` must run once before sections are
created; registering again simply overwrites the same entries.
"""
from ..registry import ComponentRegistry, registry as default_registry
from . import content, forms, layout, navigation, properties

MODULES = (navigation, content, properties, forms, layout)


def iter_components():
    for module in MODULES:
        yield from module.COMPONENTS


def register_default_components(registry: ComponentRegistry = None) -> ComponentRegistry:
    registry = registry if registry is not None else default_registry
    for unit, metadata in iter_components():
        registry.register(metadata.type, unit, metadata)
    return registry

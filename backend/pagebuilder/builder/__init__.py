"""
Layout engine: section model, history, autosave, external editor
adapter, property editor and block catalog. No Flask imports here.
"""
from .adapter import ExternalEditorAdapter
from .autosave import AutoSavePolicy
from .blocks import BlockCatalogBuilder
from .editor_bridge import EditorBridge
from .history import HistoryManager
from .library import register_default_components
from .loader import Canvas, ComponentLoader
from .metadata import ComponentMetadata, ComponentSchema, SchemaField
from .property_editor import PropertyEditor, PropertyEditorGenerator
from .registry import ComponentRegistry, registry
from .scheduling import AsyncioScheduler, Debouncer, ManualScheduler
from .section import Section, generate_section_id
from .section_model import SectionModel
from .session import BuilderSession

__all__ = [
    "AsyncioScheduler",
    "AutoSavePolicy",
    "BlockCatalogBuilder",
    "BuilderSession",
    "Canvas",
    "ComponentLoader",
    "ComponentMetadata",
    "ComponentRegistry",
    "ComponentSchema",
    "Debouncer",
    "EditorBridge",
    "ExternalEditorAdapter",
    "HistoryManager",
    "ManualScheduler",
    "PropertyEditor",
    "PropertyEditorGenerator",
    "SchemaField",
    "Section",
    "SectionModel",
    "generate_section_id",
    "register_default_components",
    "registry",
]

# api/v1/builder.py
"""
Stateless access to the layout engine: registry metadata, the block
catalog, property-editor forms and external document conversion.
"""
from flask import current_app, jsonify, request
from pagebuilder.builder.adapter import ExternalEditorAdapter
from pagebuilder.builder.blocks import BlockCatalogBuilder
from pagebuilder.builder.property_editor import PropertyEditorGenerator
from pagebuilder.builder.section import Section
from pagebuilder.builder.section_model import SectionModel
from pagebuilder.utils.style_validation import validate_style
from . import v1_bp


def component_registry():
    return current_app.extensions["component_registry"]


# ------------------------
# Registry
# ------------------------

@v1_bp.route("/builder/components", methods=["GET"])
def list_components():
    registry = component_registry()
    category = request.args.get("category")

    metadata = registry.by_category(category) if category else registry.all_metadata()

    return jsonify({
        "items": [m.to_dict() for m in metadata],
        "count": len(metadata)
    })


@v1_bp.route("/builder/components/<component_type>", methods=["GET"])
def get_component(component_type):
    metadata = component_registry().get(component_type)
    if metadata is None:
        return jsonify({"error": f"Unknown component type '{component_type}'"}), 404

    return jsonify(metadata.to_dict())


@v1_bp.route("/builder/blocks", methods=["GET"])
def list_blocks():
    catalog = BlockCatalogBuilder(component_registry())
    types = request.args.getlist("type")

    blocks = catalog.build_for(types) if types else catalog.build()
    return jsonify({"items": blocks})


# ------------------------
# Property editor
# ------------------------

@v1_bp.route("/builder/editor-form", methods=["POST"])
def editor_form():
    data = request.get_json(silent=True) or {}

    try:
        section = Section.from_dict(data)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    registry = component_registry()
    model = SectionModel(registry, sections=[section])
    editor = PropertyEditorGenerator(registry, model).inspect(section.id)
    if editor is None:
        return jsonify({"error": f"Unknown component type '{section.type}'"}), 404

    form = editor.form()
    form["style_errors"] = validate_style(section.style)
    return jsonify(form)


# ------------------------
# External editor document
# ------------------------

@v1_bp.route("/builder/external/export", methods=["POST"])
def export_external_document():
    data = request.get_json(silent=True) or {}
    items = data.get("sections")
    if not isinstance(items, list):
        return jsonify({"error": "Payload must contain a 'sections' list"}), 400

    try:
        sections = [Section.from_dict(item) for item in items]
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    adapter = ExternalEditorAdapter(component_registry())
    return jsonify(adapter.to_external_document(sections))


@v1_bp.route("/builder/external/import", methods=["POST"])
def import_external_document():
    document = request.get_json(silent=True) or {}

    adapter = ExternalEditorAdapter(component_registry())
    sections = adapter.to_section_model(document)

    return jsonify({"sections": [s.to_dict() for s in sections]})

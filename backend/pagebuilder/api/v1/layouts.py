# api/v1/layouts.py
from flask import current_app, jsonify, request
from pagebuilder.application.layouts import (
    autosave_layout,
    create_layout,
    get_layout,
    load_draft,
    save_layout,
    should_restore_draft,
)
from pagebuilder.builder.loader import Canvas, ComponentLoader
from pagebuilder.builder.section import Section
from pagebuilder.models.layout import Layout
from pagebuilder.normalizers.layout import normalize_draft, normalize_layout
from pagebuilder.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp


# ------------------------
# Layouts
# ------------------------

@v1_bp.route("/layouts", methods=["POST"])
def create_layout_route():
    data = request.get_json(silent=True) or {}

    if not data.get("name") or not data.get("slug"):
        return jsonify({"error": "Name and slug are required"}), 400

    if Layout.query.filter_by(slug=data["slug"]).first():
        return jsonify({"error": "Slug already exists"}), 409

    try:
        layout = create_layout(
            name=data["name"],
            slug=data["slug"],
            page_type=data.get("page_type", "home"),
            rules=data.get("rules"),
            sections=data.get("sections"),
        )
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    current_app.logger.info("layout %s created", layout.id)

    return jsonify({
        "id": layout.id,
        "message": "Layout created successfully"
    }), 201


@v1_bp.route("/layouts/<layout_id>", methods=["GET"])
def get_layout_route(layout_id):
    layout = get_layout(layout_id)
    draft = load_draft(layout_id=layout.id)

    data = normalize_layout(layout)
    data["has_newer_draft"] = should_restore_draft(layout, draft)
    return jsonify(data)


@v1_bp.route("/layouts/<layout_id>/sections", methods=["PUT"])
def save_sections_route(layout_id):
    layout = get_layout(layout_id)

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(layout)

    data = request.get_json(silent=True) or {}
    if not isinstance(data.get("sections"), list):
        return jsonify({"error": "Payload must contain a 'sections' list"}), 400

    try:
        layout = save_layout(layout_id=layout.id, payload=data)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    return jsonify(normalize_layout(layout)), 200


# ------------------------
# Drafts
# ------------------------

@v1_bp.route("/layouts/<layout_id>/draft", methods=["PUT"])
def save_draft_route(layout_id):
    data = request.get_json(silent=True) or {}
    if not isinstance(data.get("sections"), list):
        return jsonify({"error": "Payload must contain a 'sections' list"}), 400

    draft = autosave_layout(layout_id=layout_id, payload=data)
    return jsonify(normalize_draft(draft)), 200


@v1_bp.route("/layouts/<layout_id>/draft", methods=["GET"])
def get_draft_route(layout_id):
    layout = get_layout(layout_id)
    draft = load_draft(layout_id=layout.id)
    if draft is None:
        return jsonify({"error": "No draft for this layout"}), 404

    data = normalize_draft(draft)
    data["should_restore"] = should_restore_draft(layout, draft)
    return jsonify(data)


# ------------------------
# Preview
# ------------------------

@v1_bp.route("/layouts/<layout_id>/preview", methods=["GET"])
def preview_layout_route(layout_id):
    layout = get_layout(layout_id)
    sections = [
        Section(id=s.section_id, type=s.type, order=s.order, config=s.config, style=s.style)
        for s in layout.sections
    ]

    canvas = Canvas()
    ComponentLoader(current_app.extensions["component_registry"]).mount_all(canvas, sections)

    return current_app.response_class(canvas.html(), mimetype="text/html")

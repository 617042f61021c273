import asyncio
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import pytest

from pagebuilder.application.layouts import LayoutStore, create_layout, save_layout
from pagebuilder.builder.session import BuilderSession


def run(coro):
    return asyncio.run(coro)


SECTIONS = [
    {"id": "h1", "type": "header", "order": 0, "config": {"logo": "Acme"}},
    {"id": "f1", "type": "footer", "order": 1},
]


def create(client, slug="home", **extra):
    response = client.post("/api/v1/layouts", json={"name": "Home", "slug": slug, **extra})
    assert response.status_code == 201
    return response.get_json()["id"]


def test_health(client):
    assert client.get("/api/v1/health").get_json()["status"] == "ok"


def test_components_listing_and_lookup(client):
    listing = client.get("/api/v1/builder/components").get_json()
    assert listing["count"] == 16

    layout_only = client.get("/api/v1/builder/components?category=layout").get_json()
    assert {c["type"] for c in layout_only["items"]} == {"divider", "spacer", "custom-code"}

    assert client.get("/api/v1/builder/components/hero").get_json()["label"] == "Hero Section"
    assert client.get("/api/v1/builder/components/carousel").status_code == 404


def test_blocks_endpoint_with_unknown_type(client):
    items = client.get("/api/v1/builder/blocks?type=hero&type=carousel").get_json()["items"]

    assert [b["id"] for b in items] == ["hero", "carousel"]
    assert "carousel" in items[1]["content"]


def test_editor_form(client):
    response = client.post("/api/v1/builder/editor-form", json={"id": "s1", "type": "hero", "config": {"title": "Hi"}})
    form = response.get_json()

    assert response.status_code == 200
    title = next(f for f in form["tabs"]["content"] if f["key"] == "title")
    assert title["value"] == "Hi"
    assert form["style_errors"] == []

    flagged = client.post("/api/v1/builder/editor-form", json={"id": "s1", "type": "hero", "style": {"padding": "lots"}})
    assert flagged.get_json()["style_errors"] == ["Invalid CSS unit: padding=lots"]

    assert client.post("/api/v1/builder/editor-form", json={"type": "hero"}).status_code == 400
    assert client.post("/api/v1/builder/editor-form", json={"id": "s1", "type": "carousel"}).status_code == 404


def test_external_export_import_round_trip(client):
    document = client.post("/api/v1/builder/external/export", json={"sections": SECTIONS}).get_json()
    imported = client.post("/api/v1/builder/external/import", json=document).get_json()

    assert [s["id"] for s in imported["sections"]] == ["h1", "f1"]
    assert imported["sections"][0]["config"] == {"logo": "Acme"}
    assert client.post("/api/v1/builder/external/export", json={}).status_code == 400


def test_create_and_fetch_layout(client):
    layout_id = create(client, sections=SECTIONS, rules={"maxSections": 5})

    data = client.get(f"/api/v1/layouts/{layout_id}").get_json()

    assert [s["id"] for s in data["sections"]] == ["h1", "f1"]
    assert data["rules"]["max_sections"] == 5
    assert data["has_newer_draft"] is False


def test_create_rejects_missing_fields_and_duplicate_slug(client):
    assert client.post("/api/v1/layouts", json={"name": "x"}).status_code == 400
    create(client)
    assert client.post("/api/v1/layouts", json={"name": "Home", "slug": "home"}).status_code == 409


def test_unknown_layout_is_404(client):
    response = client.get("/api/v1/layouts/missing")

    assert response.status_code == 404
    assert response.get_json()["error"] == "LayoutNotFound"


def test_save_sections_resequences_and_replaces(client):
    layout_id = create(client, sections=SECTIONS)

    response = client.put(f"/api/v1/layouts/{layout_id}/sections", json={"sections": [
        {"id": "f1", "type": "footer", "order": 4},
        {"id": "n1", "type": "hero", "order": 9},
    ]})

    assert response.status_code == 200
    sections = response.get_json()["sections"]
    assert [(s["id"], s["order"]) for s in sections] == [("f1", 0), ("n1", 1)]


def test_save_rejects_duplicate_ids(client):
    layout_id = create(client)

    response = client.put(f"/api/v1/layouts/{layout_id}/sections", json={"sections": [
        {"id": "x", "type": "hero"}, {"id": "x", "type": "footer"},
    ]})

    assert response.status_code == 400
    assert response.get_json()["error"] == "InvariantViolation"



def test_non_integer_order_is_a_bad_request(client):
    layout_id = create(client)
    bad = [{"id": "h1", "type": "hero", "order": [1]}]

    assert client.put(f"/api/v1/layouts/{layout_id}/sections", json={"sections": bad}).status_code == 400
    assert client.post("/api/v1/builder/editor-form", json=bad[0]).status_code == 400
    assert client.post("/api/v1/builder/external/export", json={"sections": bad}).status_code == 400

def test_save_enforces_max_sections(client):
    layout_id = create(client, rules={"max_sections": 1})

    response = client.put(f"/api/v1/layouts/{layout_id}/sections", json={"sections": SECTIONS})

    assert response.status_code == 400


def test_save_with_stale_timestamp_conflicts(client):
    layout_id = create(client)
    stale = format_datetime(datetime.now(timezone.utc) - timedelta(days=1), usegmt=True)
    fresh = format_datetime(datetime.now(timezone.utc) + timedelta(days=1), usegmt=True)

    conflict = client.put(
        f"/api/v1/layouts/{layout_id}/sections",
        json={"sections": []},
        headers={"If-Unmodified-Since": stale},
    )
    ok = client.put(
        f"/api/v1/layouts/{layout_id}/sections",
        json={"sections": []},
        headers={"If-Unmodified-Since": fresh},
    )
    bad = client.put(
        f"/api/v1/layouts/{layout_id}/sections",
        json={"sections": []},
        headers={"If-Unmodified-Since": "not a date"},
    )

    assert conflict.status_code == 409
    assert ok.status_code == 200
    assert bad.status_code == 400


def test_draft_autosave_and_restore_flag(client):
    layout_id = create(client, sections=SECTIONS)
    assert client.get(f"/api/v1/layouts/{layout_id}/draft").status_code == 404

    saved = client.put(f"/api/v1/layouts/{layout_id}/draft", json={"sections": SECTIONS[:1]})
    assert saved.status_code == 200

    draft = client.get(f"/api/v1/layouts/{layout_id}/draft").get_json()
    assert draft["snapshot"]["sections"][0]["id"] == "h1"
    assert draft["should_restore"] is True
    assert client.get(f"/api/v1/layouts/{layout_id}").get_json()["has_newer_draft"] is True

    client.put(f"/api/v1/layouts/{layout_id}/sections", json={"sections": SECTIONS})
    assert client.get(f"/api/v1/layouts/{layout_id}/draft").get_json()["should_restore"] is False


def test_preview_renders_html(client):
    layout_id = create(client, sections=SECTIONS + [{"id": "x1", "type": "carousel", "order": 2}])

    response = client.get(f"/api/v1/layouts/{layout_id}/preview")
    html = response.get_data(as_text=True)

    assert response.mimetype == "text/html"
    assert "Acme" in html
    assert html.index('data-section-id="h1"') < html.index('data-section-id="f1"')
    assert "x1" not in html


def test_openapi_document_is_served(client):
    response = client.get("/openapi/builder.yaml")

    assert response.status_code == 200
    assert b"Page Builder API" in response.data


def test_session_persists_through_layout_store(app, client, scheduler):
    layout_id = create(client, sections=SECTIONS)
    session = BuilderSession.from_config(
        app.config,
        registry=app.extensions["component_registry"],
        scheduler=scheduler,
        persistence=LayoutStore(),
    )

    loaded = run(session.load_page(layout_id))
    assert [s.id for s in loaded] == ["h1", "f1"]

    session.add_section("hero")
    scheduler.advance(1.0)
    run(scheduler.drain())

    data = client.get(f"/api/v1/layouts/{layout_id}").get_json()
    assert [s["type"] for s in data["sections"]] == ["header", "footer", "hero"]
    assert session.has_unsaved_changes is False


def test_save_layout_requires_sections_key(app):
    layout = create_layout(name="Tmp", slug="tmp")

    with pytest.raises(ValueError):
        save_layout(layout_id=layout.id, payload={})

import json

import pytest

from pagebuilder.builder.adapter import (
    CONFIG_ATTR, ID_ATTR, STYLE_ATTR, ExternalEditorAdapter, safe_parse,
)
from pagebuilder.builder.document import DocumentNode, project_envelope, wrapper_from_project
from pagebuilder.builder.section import Section
from pagebuilder.builder.section_model import SectionModel


@pytest.fixture()
def adapter(registry):
    return ExternalEditorAdapter(registry)


def section_node(section_id, node_type="hero", config="{}", style="{}", **extra):
    return {
        "type": node_type,
        "attributes": {ID_ATTR: section_id, CONFIG_ATTR: config, STYLE_ATTR: style},
        **extra,
    }


def test_round_trip_preserves_sections(adapter, registry):
    model = SectionModel(registry)
    for section_type in ("header", "hero", "faq", "custom-code", "footer"):
        model.add(section_type)
    model.update_config(model.sections[1].id, {"title": "Olá \"quoted\" <b>", "nested": {"a": [1, 2]}})
    model.reorder(4, 2)

    document = adapter.to_external_document(model.sections)
    restored = adapter.to_section_model(document)

    assert [s.to_dict() for s in restored] == model.to_list()


def test_export_sorts_by_order_and_wraps_envelope(adapter):
    sections = [Section("b", "footer", order=1), Section("a", "hero", order=0, config={"title": "T"})]

    document = adapter.to_external_document(sections)
    wrapper = document["pages"][0]["frames"][0]["component"]

    assert wrapper["type"] == "wrapper"
    assert [n["type"] for n in wrapper["components"]] == ["hero", "footer"]
    attrs = wrapper["components"][0]["attributes"]
    assert attrs[ID_ATTR] == "a"
    assert json.loads(attrs[CONFIG_ATTR]) == {"title": "T"}
    assert json.loads(attrs[STYLE_ATTR]) == {}


def test_import_skips_nodes_without_section_id(adapter):
    document = project_envelope([
        {"type": "text", "content": "decoration"},
        section_node("s1", "hero"),
        {"type": "default", "attributes": {"class": "spacer"}},
        section_node("s2", "footer"),
    ])

    sections = adapter.to_section_model(document)

    assert [(s.id, s.type, s.order) for s in sections] == [("s1", "hero", 0), ("s2", "footer", 1)]


def test_malformed_attribute_json_becomes_empty(adapter, caplog):
    document = project_envelope([section_node("s1", config="{not json", style="[1, 2]")])

    [section] = adapter.to_section_model(document)

    assert section.config == {}
    assert section.style == {}
    assert "Malformed section attribute JSON" in caplog.text


def test_unknown_type_is_imported_as_is(adapter):
    [section] = adapter.to_section_model(project_envelope([section_node("s1", "carousel")]))

    assert section.type == "carousel"


@pytest.mark.parametrize("document", [None, {}, {"pages": []}, {"pages": [{"frames": [{}]}]}, "garbage"])
def test_unusable_documents_yield_no_sections(adapter, document):
    assert adapter.to_section_model(document) == []


def test_safe_parse_variants():
    assert safe_parse('{"a": 1}') == {"a": 1}
    assert safe_parse("") == {}
    assert safe_parse(None) == {}
    assert safe_parse('"text"') == {}
    assert safe_parse({"a": 1}) == {"a": 1}


def test_resolve_owning_section_walks_up_from_descendant(adapter):
    wrapper = wrapper_from_project(project_envelope([
        section_node("s1", components=[{"type": "div", "components": [{"type": "button"}]}]),
    ]))
    button = wrapper.components[0].components[0].components[0]

    owner = adapter.resolve_owning_section(button)

    assert owner is wrapper.components[0]


def test_resolve_owning_section_without_section_returns_none(adapter):
    wrapper = DocumentNode("wrapper", components=[DocumentNode("div", components=[DocumentNode("span")])])

    assert adapter.resolve_owning_section(wrapper.components[0].components[0]) is None
    assert adapter.resolve_owning_section(None) is None


def test_node_to_section_ignores_wrapper(adapter):
    wrapper = DocumentNode("wrapper", {ID_ATTR: "root"})

    assert adapter.node_to_section(wrapper, 0) is None
    assert adapter.node_to_section(DocumentNode("hero", {ID_ATTR: "s1"}), 3).order == 3


def test_ensure_section_attributes_seeds_registered_defaults(adapter, registry):
    node = DocumentNode("hero", {"class": "component-hero"})

    section_id = adapter.ensure_section_attributes(node)
    attrs = node.get_attributes()

    assert attrs[ID_ATTR] == section_id
    assert attrs["class"] == "component-hero"
    assert json.loads(attrs[CONFIG_ATTR]) == registry.get("hero").default_config
    assert json.loads(attrs[STYLE_ATTR]) == registry.get("hero").default_style


def test_ensure_section_attributes_keeps_existing_values(adapter):
    node = DocumentNode("hero", {ID_ATTR: "keep", CONFIG_ATTR: '{"title": "Mine"}'})

    assert adapter.ensure_section_attributes(node) == "keep"
    attrs = node.get_attributes()
    assert json.loads(attrs[CONFIG_ATTR]) == {"title": "Mine"}
    assert STYLE_ATTR in attrs


def test_dropped_block_becomes_a_section_on_next_import(adapter):
    wrapper = DocumentNode("wrapper")
    node = wrapper.append(DocumentNode("faq"))
    adapter.ensure_section_attributes(node)

    project = project_envelope([child.to_dict() for child in wrapper.components])
    [section] = adapter.to_section_model(project)

    assert section.type == "faq"
    assert section.config["title"] == "Frequently asked questions"


def test_update_node_data_writes_section_back(adapter):
    node = DocumentNode("hero", {ID_ATTR: "s1", "class": "x"})
    section = Section("s1", "hero", config={"title": "New"}, style={"padding": "1rem"})

    adapter.update_node_data(node, section)
    restored = adapter.node_to_section(node, 0)

    assert restored.config == {"title": "New"}
    assert restored.style == {"padding": "1rem"}
    assert node.get_attributes()["class"] == "x"

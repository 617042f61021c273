import pytest

from pagebuilder.builder.section import Section, generate_section_id
from pagebuilder.builder.section_model import (
    ADDED, DUPLICATED, REMOVED, REORDERED, SELECTED, UPDATED, SectionModel,
)
from pagebuilder.domain.invariants import InvariantViolation, PageRuleViolation, PageRules


def orders(model):
    return [s.order for s in model.sections]


def types(model):
    return [s.type for s in model.sections]


@pytest.fixture()
def model(registry):
    return SectionModel(registry)


def test_add_merges_every_schema_default(model, registry):
    hero = model.add("hero")
    metadata = registry.get("hero")

    for field in metadata.schema.fields:
        assert hero.config[field.key] == field.default
    for field in metadata.schema.style_fields:
        assert hero.style[field.key] == field.default
    assert hero.order == 0


def test_add_does_not_alias_metadata_defaults(model, registry):
    header = model.add("header")
    header.config["navigation"].append({"label": "Blog", "link": "/blog"})

    assert len(registry.get("header").default_config["navigation"]) == 3


def test_add_unknown_type_keeps_type_with_empty_config(model):
    section = model.add("carousel")

    assert section.type == "carousel"
    assert section.config == {} and section.style == {}


def test_orders_stay_contiguous_through_structural_edits(model):
    ids = [model.add(t).id for t in ("header", "hero", "faq", "newsletter", "footer")]
    assert orders(model) == [0, 1, 2, 3, 4]

    model.remove(ids[1])
    assert orders(model) == [0, 1, 2, 3]

    model.reorder(3, 0)
    assert orders(model) == [0, 1, 2, 3]
    assert types(model) == ["footer", "header", "faq", "newsletter"]

    model.duplicate(ids[2])
    assert orders(model) == [0, 1, 2, 3, 4]

    model.add("spacer")
    model.reorder(0, 5)
    assert orders(model) == list(range(6))


def test_reorder_out_of_range_is_a_no_op(model):
    model.add("hero")
    model.add("footer")

    assert model.reorder(0, 5) is False
    assert model.reorder(-1, 0) is False
    assert model.reorder(1, 1) is False
    assert types(model) == ["hero", "footer"]


def test_remove_clears_selection_of_removed_section(model):
    hero = model.add("hero")
    model.select(hero.id)

    assert model.remove(hero.id) is True
    assert model.selected is None
    assert model.remove("missing") is False


def test_duplicate_is_inserted_after_original_with_new_id(model):
    hero = model.add("hero")
    footer = model.add("footer")
    model.update_config(hero.id, {"title": "Original"})

    clone = model.duplicate(hero.id)

    assert clone.id not in (hero.id, footer.id)
    assert [s.id for s in model.sections] == [hero.id, clone.id, footer.id]
    assert clone.config == model.get(hero.id).config
    clone.config["title"] = "Changed"
    assert model.get(hero.id).config["title"] == "Original"


def test_update_config_shallow_merges(model):
    hero = model.add("hero")
    before = dict(hero.config)

    model.update_config(hero.id, {"title": "New"})
    model.update_style(hero.id, {"padding": "3rem"})

    assert hero.config == {**before, "title": "New"}
    assert hero.style["padding"] == "3rem"
    assert model.update_config("missing", {"title": "x"}) is None


def test_select_unknown_id_clears_selection(model):
    hero = model.add("hero")
    model.select(hero.id)

    assert model.select("missing") is None
    assert model.selected_id is None


def test_listeners_receive_change_kinds(model):
    seen = []
    unsubscribe = model.subscribe(lambda kind, m: seen.append(kind))

    hero = model.add("hero")
    model.add("footer")
    model.reorder(0, 1)
    model.duplicate(hero.id)
    model.update_config(hero.id, {"title": "x"})
    model.select(hero.id)
    model.remove(hero.id)

    assert seen == [ADDED, ADDED, REORDERED, DUPLICATED, UPDATED, SELECTED, SELECTED, REMOVED]

    unsubscribe()
    model.add("spacer")
    assert len(seen) == 8


def test_ids_are_unique_across_thousands_of_adds(model):
    for _ in range(2000):
        model.add("spacer")

    ids = [s.id for s in model.sections]
    assert len(set(ids)) == 2000


def test_generate_section_id_prefix():
    assert generate_section_id().startswith("section-")
    assert generate_section_id("block").startswith("block-")


def test_replace_sorts_and_resequences(model):
    model.replace([
        Section("b", "footer", order=7),
        Section("a", "hero", order=2),
    ])

    assert [s.id for s in model.sections] == ["a", "b"]
    assert orders(model) == [0, 1]


def test_replace_with_duplicate_ids_leaves_model_untouched(model):
    hero = model.add("hero")

    with pytest.raises(InvariantViolation):
        model.replace([Section("x", "hero"), Section("x", "footer", order=1)])

    assert [s.id for s in model.sections] == [hero.id]


def test_page_rules_cap_and_protect_sections(registry):
    rules = PageRules(locked_types=["header"], required_types=["footer"], max_sections=3)
    model = SectionModel(registry, rules=rules)

    header = model.add("header")
    footer = model.add("footer")
    model.add("hero")

    with pytest.raises(PageRuleViolation):
        model.add("faq")
    with pytest.raises(PageRuleViolation):
        model.duplicate(footer.id)
    with pytest.raises(PageRuleViolation):
        model.remove(header.id)
    with pytest.raises(PageRuleViolation):
        model.remove(footer.id)

    assert types(model) == ["header", "footer", "hero"]



def test_replace_can_apply_page_rules(registry):
    rules = PageRules(locked_types=["header"], required_types=["footer"], max_sections=2)
    model = SectionModel(registry, rules=rules)
    header = model.add("header")
    footer = model.add("footer")

    with pytest.raises(PageRuleViolation):
        model.replace([header, footer, Section("x", "hero", order=2)], check_rules=True)
    with pytest.raises(PageRuleViolation):
        model.replace([footer], check_rules=True)
    with pytest.raises(PageRuleViolation):
        model.replace([header], check_rules=True)
    assert types(model) == ["header", "footer"]

    model.replace([Section("f2", "footer"), header], check_rules=True)
    assert types(model) == ["footer", "header"]

    # Stored layouts are installed as they are
    model.replace([Section("a", "hero"), Section("b", "faq", order=1), Section("c", "cta-button", order=2)])
    assert len(model) == 3

def test_page_rules_from_camel_case():
    rules = PageRules.from_dict({"lockedTypes": ["header"], "maxSections": 4})

    assert rules.locked_types == {"header"}
    assert rules.max_sections == 4
    assert rules.to_dict()["required_types"] == []


@pytest.mark.parametrize("order", [[1], {"a": 1}, "first"])
def test_section_from_dict_rejects_non_integer_order(order):
    with pytest.raises(ValueError):
        Section.from_dict({"id": "s1", "type": "hero", "order": order})


def test_model_matches_compares_content_not_identity(model):
    hero = model.add("hero")

    assert model.matches([hero.copy()])
    changed = hero.copy()
    changed.config["title"] = "Other"
    assert not model.matches([changed])
    assert not model.matches([])

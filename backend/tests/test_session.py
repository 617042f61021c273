import asyncio

import pytest

from pagebuilder.builder.adapter import ID_ATTR
from pagebuilder.builder.document import DocumentNode
from pagebuilder.builder.session import BuilderSession
from pagebuilder.domain.invariants import EmptySaveBlocked, InvariantViolation, PageRuleViolation, PageRules


def run(coro):
    return asyncio.run(coro)


class MemoryStore:
    def __init__(self, layouts=None, fail_load=False):
        self.layouts = layouts or {}
        self.saves = []
        self.fail_load = fail_load

    async def load_layout(self, page_id):
        if self.fail_load:
            raise ConnectionError("load failed")
        return self.layouts[page_id]

    async def save_layout(self, page_id, payload):
        self.saves.append((page_id, payload))
        self.layouts[page_id] = payload


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def session(registry, scheduler, store):
    return BuilderSession("home", registry=registry, scheduler=scheduler, persistence=store)


def settle(scheduler, seconds=1.0):
    scheduler.advance(seconds)
    run(scheduler.drain())


def test_example_editing_scenario(session, scheduler):
    hero = session.add_section("hero")
    assert [s.order for s in session.sections] == [0]
    scheduler.advance(0.3)

    # Add and reorder land in the same debounce window: one snapshot
    footer = session.add_section("footer")
    assert [s.order for s in session.sections] == [0, 1]

    session.reorder_section(1, 0)
    assert [(s.type, s.order) for s in session.sections] == [("footer", 0), ("hero", 1)]
    scheduler.advance(0.3)

    session.undo()
    assert [s.type for s in session.sections] == ["hero"]

    session.redo()
    assert [(s.type, s.order) for s in session.sections] == [("footer", 0), ("hero", 1)]

    clone = session.duplicate_section(footer.id)
    sections = session.sections
    assert [s.order for s in sections] == [0, 1, 2]
    assert [s.id for s in sections] == [footer.id, clone.id, hero.id]
    assert clone.id != footer.id


def test_rapid_config_edits_give_one_snapshot_and_one_save(session, scheduler, store):
    hero = session.add_section("hero")
    settle(scheduler)
    saves_before = len(store.saves)
    history_before = len(session.history)

    for i in range(20):
        session.update_section_config(hero.id, {"title": f"Title {i}"})
        scheduler.advance(0.02)
    settle(scheduler)

    assert len(session.history) == history_before + 1
    assert len(store.saves) == saves_before + 1
    assert store.saves[-1][1]["sections"][0]["config"]["title"] == "Title 19"
    assert session.has_unsaved_changes is False
    assert session.last_saved_at is not None


def test_sections_are_returned_as_copies(session):
    hero = session.add_section("hero")
    hero.config["title"] = "not through the model"

    assert session.sections[0].config["title"] != "not through the model"


def test_change_notifications(session):
    changes, selections = [], []
    session.on_sections_changed(changes.append)
    unsubscribe = session.on_selection_changed(selections.append)

    hero = session.add_section("hero")
    session.select_section(hero.id)
    session.select_section(None)
    unsubscribe()
    session.select_section(hero.id)

    assert len(changes) == 1 and changes[0][0].id == hero.id
    assert [s.id if s else None for s in selections] == [hero.id, None]


def test_load_page_installs_model_and_resets_history(session, store):
    store.layouts["about"] = {
        "sections": [
            {"id": "b", "type": "footer", "order": 1},
            {"id": "a", "type": "hero", "order": 0, "config": {"title": "About"}},
        ],
        "rules": {"locked_types": ["footer"]},
    }
    session.add_section("faq")

    sections = run(session.load_page("about"))

    assert [s.id for s in sections] == ["a", "b"]
    assert session.page_id == "about"
    assert session.can_undo is False
    assert session.has_unsaved_changes is False
    assert session.model.rules.locked_types == {"footer"}


def test_load_page_cancels_timers_from_previous_page(session, scheduler, store):
    store.layouts["other"] = {"sections": []}
    session.add_section("hero")
    assert scheduler.pending_timers > 0

    run(session.load_page("other"))
    settle(scheduler, 5.0)

    assert store.saves == []
    assert len(session.history) == 1


def test_load_failure_leaves_model_untouched(registry, scheduler):
    store = MemoryStore(fail_load=True)
    session = BuilderSession("home", registry=registry, scheduler=scheduler, persistence=store)
    hero = session.add_section("hero")

    with pytest.raises(ConnectionError):
        run(session.load_page("other"))

    assert [s.id for s in session.sections] == [hero.id]
    assert session.page_id == "home"


def test_load_with_invalid_sections_leaves_model_untouched(session, store):
    store.layouts["broken"] = {"sections": [{"id": "x", "type": "hero"}, {"id": "x", "type": "footer"}]}
    hero = session.add_section("hero")

    with pytest.raises(InvariantViolation):
        run(session.load_page("broken"))

    assert [s.id for s in session.sections] == [hero.id]


def test_silent_save_refuses_to_blank_a_saved_page(session, scheduler, store):
    store.layouts["home"] = {"sections": [{"id": "a", "type": "hero", "order": 0}]}
    run(session.load_page("home"))

    session.remove_section("a")
    settle(scheduler)

    assert store.saves == []
    assert isinstance(session.autosave.last_error, EmptySaveBlocked)
    assert session.has_unsaved_changes is True

    with pytest.raises(EmptySaveBlocked):
        run(session._persist(silent=True))

    assert run(session.save(silent=False)) is True
    assert store.saves == [("home", {"sections": []})]


def test_from_config_reads_millisecond_keys(registry, scheduler):
    session = BuilderSession.from_config(
        {
            "BUILDER_HISTORY_DEBOUNCE_MS": 500,
            "BUILDER_AUTOSAVE_DEBOUNCE_MS": 2000,
            "BUILDER_EDITOR_DEBOUNCE_MS": 50,
            "BUILDER_AUTOSAVE_ENABLED": False,
            "BUILDER_MAX_SECTIONS": 2,
        },
        registry=registry,
        scheduler=scheduler,
    )

    assert session.history._debouncer.delay == 0.5
    assert session.autosave._debouncer.delay == 2.0
    assert session.autosave.enabled is False
    assert session.model.rules.max_sections == 2


def test_property_editor_follows_selection(session):
    hero = session.add_section("hero")
    footer = session.add_section("footer")

    session.select_section(hero.id)
    editor = session.property_editor()
    editor.set_tab("style")
    assert session.property_editor() is editor

    session.select_section(footer.id)
    other = session.property_editor()
    assert other.section_id == footer.id
    assert other.active_tab == "content"


def test_render_mounts_known_sections_in_order(session):
    session.add_section("hero")
    session.add_section("carousel")
    session.add_section("footer")
    session.reorder_section(2, 0)

    html = session.render()

    assert html.index("component-footer") < html.index("component-hero")
    assert "carousel" not in html
    assert len(session.canvas) == 2


def test_load_from_external_document(session):
    document = session.to_external_document()
    assert session.load_from_external_document(document) == []

    session.add_section("hero")
    document = session.to_external_document()
    other = BuilderSession(registry=session.registry, scheduler=session.scheduler)

    assert [s.to_dict() for s in other.load_from_external_document(document)] == session.model.to_list()


# ------------------------
# Bound external editor
# ------------------------

def test_bind_editor_seeds_document(session, editor):
    session.add_section("hero")
    session.bind_editor(editor)

    assert [n.type for n in editor.wrapper.components] == ["hero"]


def test_model_edits_reseed_editor_without_feedback(session, editor, scheduler):
    session.bind_editor(editor)
    loads = editor.loads

    session.add_section("hero")
    session.add_section("footer")
    scheduler.advance(0.1)

    assert editor.loads == loads + 2
    assert [n.type for n in editor.wrapper.components] == ["hero", "footer"]
    assert session.bridge.pending is False


def test_block_dropped_in_editor_becomes_section(session, editor, scheduler):
    session.bind_editor(editor)
    loads = editor.loads

    node = editor.drop("hero")
    scheduler.advance(0.1)

    [section] = session.sections
    assert section.id == node.get_attributes()[ID_ATTR]
    assert section.config["title"] == session.registry.get("hero").default_config["title"]
    # Editor-originated changes are not pushed back
    assert editor.loads == loads
    scheduler.advance(0.3)
    assert session.can_undo is True


def test_undo_of_editor_change_reseeds_editor(session, editor, scheduler):
    session.bind_editor(editor)
    editor.drop("hero")
    scheduler.advance(0.1)
    scheduler.advance(0.3)

    session.undo()

    assert session.sections == []
    assert editor.wrapper.components == []


def test_editor_selection_selects_owning_section(session, editor, scheduler):
    session.bind_editor(editor)
    hero = session.add_section("hero")
    node = editor.wrapper.components[0]
    child = node.append(DocumentNode("button"))

    editor.select(child)
    assert session.selected_section.id == hero.id

    editor.deselect()
    assert session.selected_section is None


def test_rejected_editor_document_is_reseeded_from_model(registry, scheduler, editor):
    session = BuilderSession(registry=registry, scheduler=scheduler, rules=PageRules(max_sections=1))
    session.add_section("hero")
    session.bind_editor(editor)

    editor.drop("hero", {ID_ATTR: session.sections[0].id})
    scheduler.advance(0.1)

    assert len(session.sections) == 1
    assert len(editor.wrapper.components) == 1



def test_unchanged_editor_document_keeps_redo_branch(session, editor, scheduler):
    session.bind_editor(editor)
    session.add_section("hero")
    scheduler.advance(0.4)
    session.add_section("footer")
    scheduler.advance(0.4)
    session.undo()
    entries = len(session.history)

    editor.emit("component:update", editor.wrapper.components[0])
    editor.move(0, 0)
    scheduler.advance(0.4)

    assert len(session.history) == entries
    assert session.can_redo is True
    assert session.redo() is True
    assert [s.type for s in session.sections] == ["hero", "footer"]


def test_editor_cannot_break_page_rules(registry, scheduler, editor):
    rules = PageRules(max_sections=1, locked_types=["hero"])
    session = BuilderSession(registry=registry, scheduler=scheduler, rules=rules)
    session.add_section("hero")
    session.bind_editor(editor)

    editor.drop("footer")
    scheduler.advance(0.1)

    assert [s.type for s in session.sections] == ["hero"]
    assert [n.type for n in editor.wrapper.components] == ["hero"]

    editor.delete(editor.wrapper.components[0])
    scheduler.advance(0.1)

    assert [s.type for s in session.sections] == ["hero"]
    assert [n.type for n in editor.wrapper.components] == ["hero"]


def test_external_document_over_the_cap_is_refused(registry, scheduler):
    source = BuilderSession(registry=registry, scheduler=scheduler)
    source.add_section("hero")
    source.add_section("footer")
    capped = BuilderSession(registry=registry, scheduler=scheduler, rules=PageRules(max_sections=1))

    with pytest.raises(PageRuleViolation):
        capped.load_from_external_document(source.to_external_document())

    assert capped.sections == []

def test_close_cancels_everything(session, scheduler):
    session.add_section("hero")
    session.close()

    assert scheduler.pending_timers == 0

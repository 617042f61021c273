from collections import defaultdict
from typing import Any, Callable, Dict, List

import pytest

from pagebuilder import create_app
from pagebuilder.builder.document import DocumentNode, project_envelope, wrapper_from_project
from pagebuilder.builder.library import register_default_components
from pagebuilder.builder.registry import ComponentRegistry
from pagebuilder.builder.scheduling import ManualScheduler
from pagebuilder.extensions import db


@pytest.fixture()
def app():
    """Flask app on an in-memory SQLite database, schema created per test."""
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def registry():
    return register_default_components(ComponentRegistry())


@pytest.fixture()
def scheduler():
    return ManualScheduler()


class FakeEditor:
    """
    Stand-in for the embedded editor: a live node tree plus an event
    stream. Loading a project fires an update event the way the real
    editor does when it re-renders.
    """

    def __init__(self):
        self.wrapper = DocumentNode("wrapper")
        self.handlers: Dict[str, List[Callable[..., Any]]] = defaultdict(list)
        self.loads = 0

    def on(self, event, handler):
        self.handlers[event].append(handler)

    def emit(self, event, *args):
        for handler in list(self.handlers[event]):
            handler(*args)

    def get_project_data(self):
        return project_envelope([child.to_dict() for child in self.wrapper.components])

    def load_project_data(self, project):
        self.loads += 1
        self.wrapper = wrapper_from_project(project)
        self.emit("component:update", self.wrapper)

    # Operator actions
    def drop(self, node_type, attributes=None, index=None):
        node = DocumentNode(node_type, attributes)
        if index is None:
            self.wrapper.append(node)
        else:
            node.parent = self.wrapper
            self.wrapper.components.insert(index, node)
        self.emit("component:add", node)
        return node

    def delete(self, node):
        self.wrapper.remove(node)
        self.emit("component:remove", node)

    def move(self, from_index, to_index):
        node = self.wrapper.components.pop(from_index)
        self.wrapper.components.insert(to_index, node)
        self.emit("component:drag:end", node)

    def select(self, node):
        self.emit("component:selected", node)

    def deselect(self):
        self.emit("component:deselected")


@pytest.fixture()
def editor():
    return FakeEditor()

import ast

import pytest

from fuego.templates import get_template, render_template, template_names


def test_template_names():
    assert template_names() == ["controller.py", "entity.py", "service.py"]


def test_get_template_unknown_raises():
    with pytest.raises(FileNotFoundError):
        get_template("missing.py")


@pytest.mark.parametrize("name", ["controller.py", "entity.py", "service.py"])
def test_templates_hold_placeholder(name):
    assert "newEntity" in get_template(name)


@pytest.mark.parametrize("name", ["controller.py", "entity.py", "service.py"])
def test_render_replaces_every_placeholder(name):
    rendered = render_template(name, "books")
    assert "newEntity" not in rendered
    assert "NewEntity" not in rendered


@pytest.mark.parametrize("name", ["controller.py", "entity.py", "service.py"])
def test_rendered_code_parses(name):
    tree = ast.parse(render_template(name, "books"))
    defined = {
        node.name.lower()
        for node in tree.body
        if isinstance(node, (ast.ClassDef, ast.FunctionDef))
    }
    assert any("books" in item for item in defined)


def test_render_entity_classes():
    rendered = render_template("entity.py", "books")
    tree = ast.parse(rendered)
    classes = {node.name for node in tree.body if isinstance(node, ast.ClassDef)}
    assert classes == {"Books", "BooksCreate", "BooksUpdate", "BooksService"}


def test_render_controller_routes():
    rendered = render_template("controller.py", "books")
    assert '("GET", "/books/{id}", self.get_books)' in rendered
    assert "class BooksResources:" in rendered
    assert "from .books import" in rendered


def test_render_service_not_found_message():
    rendered = render_template("service.py", "books")
    assert '"Books not found with id "' in rendered
    assert "def new_books_service()" in rendered


def test_render_title_lowercases_rest():
    rendered = render_template("entity.py", "myBooks")
    assert "class Mybooks:" in rendered
    assert "def get_myBooks(" in rendered
"""Tests for the component registry and file store."""

import pytest

from webfactory.exceptions import (
    AmbiguousTemplateError,
    ComponentResolutionError,
    StorageError,
    TemplateNotFoundError,
)
from webfactory.parser import parse_blueprint
from webfactory.registry import ComponentRegistry, component_fs_path
from webfactory.storage import FileStore


class TestComponentRegistry:
    """Test component loading and caching."""

    def test_load_reads_files(self, memory_store):
        store = memory_store({
            "composite/card": {
                "card.html": b"<div>{{component}}</div>",
                "a.css": b".a{}",
                "b.css": b".b{}",
                "card.js": b"console.log(1)",
            },
        })
        comp = ComponentRegistry(store).load("composite.card")

        assert comp.path == "composite.card"
        assert comp.fs_path == "composite/card"
        assert comp.template == b"<div>{{component}}</div>"
        assert comp.styles == b".a{}\n.b{}\n"
        assert comp.scripts == {"card.js": b"console.log(1)"}

    def test_load_is_cached(self, memory_store):
        store = memory_store({"card": {"card.html": b"x", "card.css": b"y"}})
        registry = ComponentRegistry(store)

        first = registry.load("card")
        reads = list(store.reads)
        second = registry.load("card")

        assert second is first
        assert store.reads == reads
        assert len(reads) == 2

    def test_get_does_not_load(self, memory_store):
        store = memory_store({"card": {"card.html": b"x"}})
        registry = ComponentRegistry(store)

        assert registry.get("card") is None
        assert store.reads == []
        registry.load("card")
        assert registry.get("card") is not None
        assert "card" in registry

    def test_missing_template(self, memory_store):
        registry = ComponentRegistry(memory_store({"card": {"card.css": b""}}))
        with pytest.raises(ComponentResolutionError) as exc:
            registry.load("card")
        assert exc.value.path == "card"
        assert isinstance(exc.value.__cause__, TemplateNotFoundError)

    def test_ambiguous_template(self, memory_store):
        registry = ComponentRegistry(memory_store({"card": {"a.html": b"", "b.html": b""}}))
        with pytest.raises(ComponentResolutionError) as exc:
            registry.load("card")
        assert "card" in str(exc.value)
        assert isinstance(exc.value.__cause__, AmbiguousTemplateError)
        assert len(registry) == 0

    def test_load_tree(self, memory_store):
        store = memory_store({
            "layout/page": {"page.html": b"{{component}}"},
            "card": {"card.html": b"c"},
        })
        registry = ComponentRegistry(store)
        registry.load_tree(parse_blueprint("1 layout.page\n1.1 card\n1.2 card\n"))

        assert registry.used_components() == {"layout.page": "layout/page", "card": "card"}
        assert [c.path for c in registry] == ["layout.page", "card"]


def test_component_fs_path():
    assert component_fs_path("simple") == "simple"
    assert component_fs_path("a.b.c") == "a/b/c"


class TestFileStore:
    """Test the file system store."""

    def test_list_blueprints(self, site):
        site.blueprint("index.blueprint", "1 a")
        site.blueprint("about/team.blueprint", "1 a")
        site.blueprint("notes.txt", "ignored")

        assert site.store().list_blueprints() == {
            "about/team.blueprint": "about/team",
            "index.blueprint": "index",
        }

    def test_list_blueprints_missing_dir(self, tmp_path):
        with pytest.raises(StorageError):
            FileStore(tmp_path / "nope", tmp_path).list_blueprints()

    def test_component_files(self, site):
        site.component("composite.card", {
            "card.html": "<p></p>",
            "b.css": "b",
            "a.css": "a",
            "card.js": "js",
        })
        store = site.store()

        assert store.find_template_file("composite/card") == "card.html"
        assert store.list_component_files("composite/card", ".css") == ["a.css", "b.css"]
        assert store.read_component("composite/card", "card.js") == b"js"

    def test_nested_component_not_counted(self, site):
        site.component("composite", {"layout.html": "outer"})
        site.component("composite.card", {"card.html": "inner"})

        assert site.store().find_template_file("composite") == "layout.html"

    def test_missing_component_directory(self, site):
        with pytest.raises(TemplateNotFoundError):
            site.store().find_template_file("nothing/here")

    def test_write_output(self, site):
        site.store().write_output(site.target, {"a/b.html": b"<p>", "css/styles.css": b"x"})
        assert (site.target / "a" / "b.html").read_bytes() == b"<p>"
        assert (site.target / "css" / "styles.css").read_bytes() == b"x"

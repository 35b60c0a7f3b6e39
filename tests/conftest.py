"""Shared fixtures for webfactory tests."""

from pathlib import Path
from typing import Dict

import pytest

from webfactory.exceptions import AmbiguousTemplateError, TemplateNotFoundError
from webfactory.logging_config import reset_logging
from webfactory.storage import FileStore


class SiteTree:
    """Writes blueprints and components into a temporary source directory."""

    def __init__(self, root: Path):
        self.root = root
        self.source = root / "site"
        self.target = root / "out"
        (self.source / "blueprints").mkdir(parents=True)
        (self.source / "components").mkdir(parents=True)

    def blueprint(self, rel_path: str, content: str) -> Path:
        path = self.source / "blueprints" / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    def component(self, dotted: str, files: Dict[str, str]) -> Path:
        directory = self.source / "components" / Path(*dotted.split("."))
        directory.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            (directory / name).write_text(content)
        return directory

    def store(self) -> FileStore:
        return FileStore(self.source, self.target)


@pytest.fixture
def site(tmp_path):
    return SiteTree(tmp_path)


@pytest.fixture(autouse=True)
def clean_logging():
    reset_logging()
    yield
    reset_logging()


class CountingStore:
    """In-memory store that records every read."""

    def __init__(self, components: Dict[str, Dict[str, bytes]]):
        self.components = components
        self.reads = []

    def _files(self, component_path):
        if component_path not in self.components:
            raise TemplateNotFoundError(component_path)
        return self.components[component_path]

    def find_template_file(self, component_path):
        html = [n for n in sorted(self._files(component_path)) if n.endswith(".html")]
        if not html:
            raise TemplateNotFoundError(component_path)
        if len(html) > 1:
            raise AmbiguousTemplateError(component_path, html)
        return html[0]

    def list_component_files(self, component_path, extension=""):
        return [
            n for n in sorted(self._files(component_path))
            if not extension or n.endswith(extension)
        ]

    def read_component(self, component_path, filename):
        self.reads.append((component_path, filename))
        return self._files(component_path)[filename]


@pytest.fixture
def memory_store():
    def factory(components):
        return CountingStore(components)
    return factory

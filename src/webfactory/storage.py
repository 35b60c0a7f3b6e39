"""File system store for blueprints, components and generated output."""

from pathlib import Path
from typing import Dict, List, Union

from .constants import (
    BLUEPRINT_EXTENSION,
    BLUEPRINTS_DIR,
    COMPONENTS_DIR,
    TEMPLATE_EXTENSION,
)
from .exceptions import AmbiguousTemplateError, StorageError, TemplateNotFoundError
from .logging_config import get_logger


class FileStore:
    """Handles all file system operations for a site build.

    Source layout::

        <source>/blueprints/**/<page>.blueprint
        <source>/components/<dotted>/<path>/{*.html,*.css,*.js}
    """

    def __init__(
        self,
        source_path: Union[str, Path],
        target_path: Union[str, Path],
        blueprints_dir: str = BLUEPRINTS_DIR,
        components_dir: str = COMPONENTS_DIR,
        blueprint_extension: str = BLUEPRINT_EXTENSION,
    ):
        self.source_path = Path(source_path)
        self.target_path = Path(target_path)
        self.blueprints_root = self.source_path / blueprints_dir
        self.components_root = self.source_path / components_dir
        self.blueprint_extension = blueprint_extension

    def list_blueprints(self) -> Dict[str, str]:
        """Map each blueprint's relative path to its output base path."""
        if not self.blueprints_root.is_dir():
            raise StorageError(f"scanning blueprints: {self.blueprints_root} is not a directory")

        blueprints = {}
        for path in sorted(self.blueprints_root.rglob(f"*{self.blueprint_extension}")):
            if not path.is_file():
                continue
            rel = path.relative_to(self.blueprints_root)
            output = rel.with_name(rel.name[: -len(self.blueprint_extension)])
            blueprints[rel.as_posix()] = output.as_posix()

        get_logger('storage').debug(
            f"Found {len(blueprints)} blueprints under {self.blueprints_root}"
        )
        return blueprints

    def read_blueprint(self, rel_path: str) -> bytes:
        return self._read(self.blueprints_root / rel_path)

    def read_component(self, component_path: str, filename: str) -> bytes:
        """Read a component file (template, css, js)."""
        return self._read(self.components_root / component_path / filename)

    def list_component_files(self, component_path: str, extension: str = "") -> List[str]:
        """List files in a component directory, optionally filtered by extension."""
        directory = self.components_root / component_path
        if not directory.is_dir():
            raise TemplateNotFoundError(
                component_path, f"component directory not found: {component_path}"
            )

        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as e:
            raise StorageError(f"listing component files in {directory}: {e}") from e

        return [
            entry.name
            for entry in entries
            if entry.is_file() and (not extension or entry.suffix == extension)
        ]

    def find_template_file(self, component_path: str) -> str:
        """Find the single HTML template file in a component directory."""
        files = self.list_component_files(component_path, TEMPLATE_EXTENSION)
        if not files:
            raise TemplateNotFoundError(component_path)
        if len(files) > 1:
            raise AmbiguousTemplateError(component_path, files)
        return files[0]

    def write_output(self, output_path: Union[str, Path], files: Dict[str, bytes]) -> None:
        """Write generated files below output_path."""
        logger = get_logger('storage')
        root = Path(output_path)
        for rel_path, content in files.items():
            full_path = root / rel_path
            try:
                full_path.parent.mkdir(parents=True, exist_ok=True)
                full_path.write_bytes(content)
            except OSError as e:
                raise StorageError(f"writing {full_path}: {e}") from e
            logger.debug(f"Wrote {full_path} ({len(content)} bytes)")

    def _read(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageError(f"reading {path}: {e}") from e

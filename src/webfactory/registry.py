"""Component registry: loads components from the store and caches them."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from .constants import SCRIPT_EXTENSION, STYLE_EXTENSION
from .exceptions import ComponentResolutionError, StorageError
from .logging_config import get_logger
from .parser import BlueprintNode


@dataclass(frozen=True)
class Component:
    """A loaded component: one template, merged styles, individual scripts."""

    path: str
    template: bytes
    styles: bytes = b""
    scripts: Dict[str, bytes] = field(default_factory=dict)

    @property
    def fs_path(self) -> str:
        return component_fs_path(self.path)


def component_fs_path(path: str) -> str:
    """Map a dotted component path to its directory (``composite.card`` -> ``composite/card``)."""
    return "/".join(path.split("."))


class ComponentRegistry:
    """Loads each distinct component at most once per build."""

    def __init__(self, store):
        self.store = store
        self._loaded: Dict[str, Component] = {}

    def load(self, path: str) -> Component:
        """Load a component and its assets, returning the cached one if present."""
        cached = self._loaded.get(path)
        if cached is not None:
            return cached

        logger = get_logger('registry')
        fs_path = component_fs_path(path)
        logger.debug(f"Loading component {path} from {fs_path}")

        try:
            template_file = self.store.find_template_file(fs_path)
            template = self.store.read_component(fs_path, template_file)

            styles = bytearray()
            for filename in self.store.list_component_files(fs_path, STYLE_EXTENSION):
                styles += self.store.read_component(fs_path, filename)
                styles += b"\n"

            scripts = {}
            for filename in self.store.list_component_files(fs_path, SCRIPT_EXTENSION):
                scripts[filename] = self.store.read_component(fs_path, filename)
        except StorageError as e:
            logger.error(f"Could not load component {path}: {e}")
            raise ComponentResolutionError(path, str(e)) from e

        component = Component(
            path=path,
            template=template,
            styles=bytes(styles),
            scripts=scripts,
        )
        self._loaded[path] = component
        logger.debug(
            f"Loaded {path}: template {template_file}, "
            f"{len(component.styles)} bytes of CSS, {len(scripts)} scripts"
        )
        return component

    def get(self, path: str) -> Optional[Component]:
        """Return a loaded component without touching the store."""
        return self._loaded.get(path)

    def load_tree(self, root: BlueprintNode) -> None:
        """Load every component referenced in the tree."""
        for node in root.walk():
            if not node.is_root:
                self.load(node.path)

    def used_components(self) -> Dict[str, str]:
        """Component path to file-system path, in load order."""
        return {path: comp.fs_path for path, comp in self._loaded.items()}

    def __contains__(self, path: str) -> bool:
        return path in self._loaded

    def __len__(self) -> int:
        return len(self._loaded)

    def __iter__(self) -> Iterator[Component]:
        return iter(list(self._loaded.values()))

"""Per-blueprint build state."""

from .assets import AssetManager
from .registry import ComponentRegistry


class BuildContext:
    """Component cache and asset pool for a single page.

    A fresh context is created for every blueprint, so components are
    reloaded and assets deduplicated page by page.
    """

    def __init__(self, store):
        self.store = store
        self.registry = ComponentRegistry(store)
        self.assets = AssetManager()

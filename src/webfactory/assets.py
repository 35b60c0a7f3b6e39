"""Content-addressed CSS/JS collection for one page."""

import hashlib
import posixpath
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .constants import CSS_DIR, JS_DIR, SCRIPT_EXTENSION, STYLES_FILE
from .exceptions import AssetError
from .logging_config import get_logger

NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
DASH_RUN = re.compile(r"-{2,}")


def content_hash(content: bytes) -> str:
    """SHA256 hex digest used to identify asset content."""
    return hashlib.sha256(content).hexdigest()


def sanitize_file_name(name: str) -> str:
    """Reduce a name to ASCII alphanumerics and single inner dashes."""
    name = NON_ALNUM.sub("-", name)
    name = DASH_RUN.sub("-", name)
    return name.strip("-")


@dataclass
class JsAsset:
    """One distinct script body and every output name it is linked under."""

    content: bytes
    files: List[str] = field(default_factory=list)


class AssetManager:
    """Collects component assets, deduplicated by content hash.

    CSS from every component is merged into one stylesheet. Scripts stay
    separate files, one per distinct body, named after the first component
    that contributed it. Every name a body was contributed under still gets
    its own script tag. Both keep the order in which content was first seen.
    """

    def __init__(self):
        self._css: Dict[str, bytes] = {}
        self._js: Dict[str, JsAsset] = {}
        self._names: Dict[str, str] = {}

    def ingest(self, component) -> None:
        """Add a component's styles and scripts."""
        if component is None:
            return
        logger = get_logger('assets')

        if component.styles:
            digest = content_hash(component.styles)
            if digest not in self._css:
                self._css[digest] = component.styles
                logger.debug(f"CSS from {component.path} added ({digest[:12]})")

        for filename, content in component.scripts.items():
            out_name = self.script_name(component.path, filename)
            digest = content_hash(content)
            owner = self._names.get(out_name)
            if owner is not None and owner != digest:
                # Another body already uses this name
                taken = out_name
                out_name = f"{out_name}-{digest[:8]}"
                logger.debug(f"Script name {taken} is taken, using {out_name}")
            self._names[out_name] = digest

            asset = self._js.get(digest)
            if asset is None:
                self._js[digest] = JsAsset(content=content, files=[out_name])
                logger.debug(f"Script {out_name} added ({digest[:12]})")
            elif out_name not in asset.files:
                asset.files.append(out_name)
                logger.debug(f"Script {out_name} shares content with {asset.files[0]}")

    @staticmethod
    def script_name(component_path: str, filename: str) -> str:
        """Output name for a component script, without extension."""
        base = filename[: -len(SCRIPT_EXTENSION)] if filename.endswith(SCRIPT_EXTENSION) else filename
        name = sanitize_file_name(f"{sanitize_file_name(component_path)}-{base}")
        if not name:
            raise AssetError(
                f"cannot derive a script file name from {component_path!r} and {filename!r}"
            )
        return name

    @property
    def has_styles(self) -> bool:
        return bool(self._css)

    def script_names(self) -> List[str]:
        """Output script names in first-contribution order."""
        return [name for asset in self._js.values() for name in asset.files]

    def script_links(self) -> List[Tuple[str, str]]:
        """(name, file) pairs; shared content points at the file of its first name."""
        return [
            (name, asset.files[0] + SCRIPT_EXTENSION)
            for asset in self._js.values()
            for name in asset.files
        ]

    def tags(self, prefix: str = "") -> Tuple[str, str]:
        """Return the stylesheet link tag and the script tags."""
        styles = ""
        if self._css:
            href = posixpath.join(prefix, CSS_DIR, STYLES_FILE)
            styles = f'<link rel="stylesheet" href="{href}">'

        scripts = "\n".join(
            f'<script src="{posixpath.join(prefix, JS_DIR, filename)}"></script>'
            for _, filename in self.script_links()
        )
        return styles, scripts

    def merged_styles(self) -> Optional[bytes]:
        if not self._css:
            return None
        return b"\n".join(self._css.values())

    def files(self) -> Dict[str, bytes]:
        """Output files: the merged stylesheet and one file per distinct script."""
        files = {}
        merged = self.merged_styles()
        if merged is not None:
            files[STYLES_FILE] = merged

        for asset in self._js.values():
            files[asset.files[0] + SCRIPT_EXTENSION] = asset.content
        return files

"""Blueprint parser for line-oriented page layout files.

A blueprint places components on a page. Block lines give a dotted index
and a component path, variable lines attach values to the block above:

    # landing page
    1 layout.page
    .title=Welcome
    1.1 composite.card
    .header=Hello
    .items=first
    .items=second
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from .exceptions import BlueprintParseError
from .logging_config import get_logger

INDEX_PATTERN = re.compile(r"^[0-9]+(?:\.[0-9]+)*\.?$")


@dataclass
class BlueprintNode:
    """One component placement in the page tree."""

    path: str = ""
    index: Tuple[int, ...] = ()
    vars: Dict[str, List[str]] = field(default_factory=dict)
    children: List["BlueprintNode"] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return not self.index

    @property
    def key(self) -> str:
        """Dotted index string, empty for the root."""
        return index_key(self.index)

    def value(self, name: str) -> Optional[str]:
        """First value bound to a variable, if any."""
        values = self.vars.get(name)
        if values:
            return values[0]
        return None

    def walk(self) -> Iterator["BlueprintNode"]:
        """Yield this node and its descendants depth-first in render order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def component_paths(self) -> List[str]:
        """Distinct component paths in first-visit order."""
        paths = []
        for node in self.walk():
            if not node.is_root and node.path not in paths:
                paths.append(node.path)
        return paths


def index_key(index: Tuple[int, ...]) -> str:
    return ".".join(str(part) for part in index)


def parse_index(text: str) -> Optional[Tuple[int, ...]]:
    """Parse a dotted index such as ``1.2.3``; None unless every part is positive."""
    if not INDEX_PATTERN.match(text):
        return None
    index = tuple(int(part) for part in text.rstrip(".").split("."))
    if any(part < 1 for part in index):
        return None
    return index


def parse_block_line(line: str) -> Optional[BlueprintNode]:
    """Parse a ``<index> <component.path>`` line."""
    line = line.strip()
    if not line or line.startswith("#") or line.startswith("."):
        return None

    parts = line.split()
    if len(parts) != 2:
        return None

    index = parse_index(parts[0])
    if index is None:
        return None

    return BlueprintNode(path=parts[1], index=index)


def parse_variable_line(line: str) -> Optional[Tuple[str, str]]:
    """Parse a ``.name=value`` line into (name, value)."""
    if "=" not in line:
        return None

    name, value = line.split("=", 1)
    name = name.strip()
    if not name.startswith("."):
        return None
    name = name[1:]
    if not name:
        return None

    return name, value.lstrip()


def build_tree(blocks: List[BlueprintNode]) -> BlueprintNode:
    """Attach parsed blocks under a synthetic root and sort every level."""
    root = BlueprintNode()
    nodes: Dict[str, BlueprintNode] = {"": root}

    for block in blocks:
        key = block.key
        if key in nodes:
            raise BlueprintParseError(f"duplicate block index {key}", index_key=key)
        nodes[key] = block

        parent = nodes.get(index_key(block.index[:-1]))
        if parent is None:
            # Parent missing or not seen yet
            get_logger('parser').debug(
                f"Block {key} ({block.path}) has no parent yet, attaching to root"
            )
            parent = root
        parent.children.append(block)

    sort_children(root)
    return root


def sort_children(node: BlueprintNode) -> None:
    if node.is_root:
        node.children.sort(key=lambda child: child.index[0])
    else:
        node.children.sort(key=lambda child: child.index[-1])
    for child in node.children:
        sort_children(child)


def parse_blueprint(content: str) -> BlueprintNode:
    """Parse blueprint text into a tree rooted at a synthetic node.

    Malformed lines are skipped. A duplicate index raises
    BlueprintParseError.
    """
    logger = get_logger('parser')
    blocks: List[BlueprintNode] = []
    current: Optional[BlueprintNode] = None
    skipped = 0

    for number, raw_line in enumerate(content.splitlines(), 1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith("."):
            variable = parse_variable_line(line)
            if current is None or variable is None:
                skipped += 1
                logger.debug(f"Skipping variable line {number}: {line!r}")
                continue
            name, value = variable
            current.vars.setdefault(name, []).append(value)
            continue

        block = parse_block_line(line)
        if block is None:
            skipped += 1
            logger.debug(f"Skipping malformed line {number}: {line!r}")
            continue
        blocks.append(block)
        current = block

    logger.debug(f"Parsed {len(blocks)} blocks ({skipped} lines skipped)")
    return build_tree(blocks)


def format_tree(node: BlueprintNode, depth: int = 0) -> List[str]:
    """Render an indented outline of the tree, one line per block."""
    lines = []
    if not node.is_root:
        line = f"{'  ' * depth}{node.key} {node.path}"
        if node.vars:
            bound = ", ".join(
                f"{name}={values[0]}" if len(values) == 1 else f"{name}[{len(values)}]"
                for name, values in node.vars.items()
            )
            line += f" ({bound})"
        lines.append(line)
        depth += 1
    for child in node.children:
        lines.extend(format_tree(child, depth))
    return lines


class BlueprintParser:
    """Parses blueprint files into component trees."""

    def parse_file(self, file_path: Path) -> BlueprintNode:
        """Parse a blueprint file and return its tree."""
        return self.parse_content(file_path.read_text(encoding="utf-8"))

    def parse_content(self, content: str) -> BlueprintNode:
        """Parse blueprint content and return its tree."""
        return parse_blueprint(content)

"""Template processing: renders a blueprint tree into one HTML page."""

import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import DIRECTIVE_SCRIPT, DIRECTIVE_STYLES, MARKER_DELIMITER, unresolved_placeholder
from .context import BuildContext
from .exceptions import AssetError, TemplateProcessingError
from .logging_config import get_logger
from .parser import BlueprintNode
from .tokenizer import Token, TokenType, tokenize


@dataclass(frozen=True)
class ProcessingError:
    """A recoverable problem met while rendering.

    ``location`` is the dotted index of the block being rendered.
    """

    location: str
    directive: str
    message: str

    def __str__(self) -> str:
        return f"block {self.location or '-'} [{self.directive}]: {self.message}"


@dataclass
class ProcessResult:
    """Everything produced for one blueprint."""

    html: bytes
    files: Dict[str, bytes] = field(default_factory=dict)
    components: Dict[str, str] = field(default_factory=dict)


class TemplateProcessor:
    """Walks a blueprint tree and renders each component's template."""

    def __init__(self, context: BuildContext, asset_prefix: str = ""):
        self.context = context
        self.asset_prefix = asset_prefix
        self.errors: List[ProcessingError] = []
        self.has_styles = False
        self.has_scripts = False
        # Unique per processor, never produced by template text or values
        token = uuid.uuid4().hex
        self.styles_marker = f"{MARKER_DELIMITER}{DIRECTIVE_STYLES}:{token}{MARKER_DELIMITER}"
        self.script_marker = f"{MARKER_DELIMITER}{DIRECTIVE_SCRIPT}:{token}{MARKER_DELIMITER}"

    def process(self, node: Optional[BlueprintNode]) -> Tuple[bytes, List[ProcessingError]]:
        """Render a node and everything below it.

        Returns the rendered HTML and every error collected so far.
        """
        if node is None:
            return b"", list(self.errors)
        html = self.strip_markers(self.render_node(node))
        return html.encode("utf-8"), list(self.errors)

    def assemble(self, root: BlueprintNode) -> ProcessResult:
        """Render the whole page and place the stylesheet and script tags.

        Raises TemplateProcessingError, carrying the partial result, when
        any error was collected during rendering.
        """
        html = self.render_node(root)
        styles_tag, script_tags = self.context.assets.tags(self.asset_prefix)

        if self.has_styles:
            html = html.replace(self.styles_marker, styles_tag)
        elif styles_tag:
            html = styles_tag + html

        if self.has_scripts:
            html = html.replace(self.script_marker, script_tags)
        elif script_tags:
            html = html + script_tags

        result = ProcessResult(
            html=html.encode("utf-8"),
            files=self.context.assets.files(),
            components=self.context.registry.used_components(),
        )

        if self.errors:
            raise TemplateProcessingError(list(self.errors), result)
        return result

    def strip_markers(self, html: str) -> str:
        return html.replace(self.styles_marker, "").replace(self.script_marker, "")

    def add_error(self, location: str, directive: str, message: str) -> None:
        for error in self.errors:
            if error.location == location and error.directive == directive:
                return
        self.errors.append(ProcessingError(location, directive, message))

    def render_node(self, node: BlueprintNode) -> str:
        if node.is_root:
            return self.render_children(node.children)

        component = self.context.registry.get(node.path)
        if component is None:
            get_logger('processor').warning(f"Component not found: {node.path} (block {node.key})")
            self.add_error(node.key, node.path, f"component not found: {node.path}")
            return unresolved_placeholder(node.path)

        try:
            self.context.assets.ingest(component)
        except AssetError as e:
            self.add_error(node.key, node.path, f"asset error in {node.path}: {e}")

        return self.render_template(tokenize(component.template), node)

    def render_children(self, children: Sequence[BlueprintNode]) -> str:
        return "".join(self.render_node(child) for child in children)

    def render_template(self, tokens: List[Token], node: BlueprintNode) -> str:
        """Interpret a component's tokens against one block."""
        out: List[str] = []
        range_var = None
        range_start = -1

        for i, token in enumerate(tokens):
            if token.type is TokenType.RANGE_START:
                if range_var is None:
                    range_var = token.content
                    range_start = i
                continue

            if token.type is TokenType.RANGE_END:
                if range_var is not None:
                    body = tokens[range_start + 1:i]
                    for value in node.vars.get(range_var, []):
                        out.append(self.render_loop_body(body, node, range_var, value))
                    range_var = None
                    range_start = -1
                continue

            if range_var is not None:
                # Body tokens are rendered when the range closes
                continue

            if token.type is TokenType.TEXT:
                out.append(token.content)
            elif token.type is TokenType.VAR:
                out.append(node.value(token.content) or "")
            elif token.type is TokenType.COMPONENT:
                out.append(self.render_children(node.children))
            elif token.type is TokenType.STYLES:
                self.has_styles = True
                out.append(self.styles_marker)
            elif token.type is TokenType.SCRIPT:
                self.has_scripts = True
                out.append(self.script_marker)

        if range_var is not None:
            get_logger('processor').warning(
                f"Unclosed range .{range_var} in {node.path} (block {node.key}), body dropped"
            )

        return "".join(out)

    @staticmethod
    def render_loop_body(body: List[Token], node: BlueprintNode, name: str, value: str) -> str:
        """One iteration of a range body; only text and variables are rendered."""
        out = []
        for token in body:
            if token.type is TokenType.TEXT:
                out.append(token.content)
            elif token.type is TokenType.VAR:
                if token.content == name:
                    out.append(value)
                else:
                    out.append(node.value(token.content) or "")
        return "".join(out)

"""Site builder: runs the parse, load and render pipeline for every blueprint."""

import posixpath
from dataclasses import dataclass, field
from typing import Dict, List

from .constants import (
    ASSETS_DIR,
    BLUEPRINTS_DIR,
    CSS_DIR,
    HTML_EXTENSION,
    JS_DIR,
    SCRIPT_EXTENSION,
    STYLE_EXTENSION,
)
from .context import BuildContext
from .exceptions import BuildError, WebfactoryError
from .logging_config import get_logger
from .parser import BlueprintParser
from .processor import ProcessResult, TemplateProcessor


@dataclass
class BuildReport:
    """What one blueprint produced."""

    blueprint: str
    html_path: str
    files: List[str] = field(default_factory=list)
    components: Dict[str, str] = field(default_factory=dict)


def output_dir_for(filename: str) -> str:
    """Output directory for a generated asset file."""
    extension = posixpath.splitext(filename)[1]
    if extension == STYLE_EXTENSION:
        return CSS_DIR
    if extension == SCRIPT_EXTENSION:
        return JS_DIR
    return ASSETS_DIR


class SiteBuilder:
    """Builds every blueprint found in the store, one page at a time."""

    def __init__(self, store, asset_prefix: str = ""):
        self.store = store
        self.asset_prefix = asset_prefix
        self.parser = BlueprintParser()

    def build(self) -> List[BuildReport]:
        """Process all blueprints; the first failure stops the build."""
        logger = get_logger('builder')
        try:
            blueprints = self.store.list_blueprints()
        except WebfactoryError as e:
            raise BuildError(BLUEPRINTS_DIR, e) from e

        logger.info(f"Building {len(blueprints)} blueprints")
        reports = []
        for rel_path in sorted(blueprints):
            try:
                reports.append(self.build_blueprint(rel_path, blueprints[rel_path]))
            except WebfactoryError as e:
                logger.error(f"Blueprint {rel_path} failed: {e}")
                raise BuildError(rel_path, e) from e

        logger.info(f"Site build completed ({len(reports)} pages)")
        return reports

    def build_blueprint(self, rel_path: str, output_rel: str) -> BuildReport:
        """Parse, load, render and write a single blueprint."""
        logger = get_logger('builder')
        logger.info(f"Processing {rel_path}")

        content = self.store.read_blueprint(rel_path)
        tree = self.parser.parse_content(content.decode("utf-8", errors="replace"))

        # Fresh cache and asset pool per page
        context = BuildContext(self.store)
        context.registry.load_tree(tree)
        logger.debug(f"Loaded {len(context.registry)} components for {rel_path}")

        result = TemplateProcessor(context, self.asset_prefix).assemble(tree)

        files = self.output_files(output_rel, result)
        self.store.write_output(self.store.target_path, files)

        html_path = next(iter(files))
        logger.info(f"Wrote {html_path} with {len(files) - 1} asset files")
        return BuildReport(
            blueprint=rel_path,
            html_path=html_path,
            files=list(files),
            components=result.components,
        )

    def output_files(self, output_rel: str, result: ProcessResult) -> Dict[str, bytes]:
        """Map a processed page to relative output paths."""
        prefix = BLUEPRINTS_DIR + "/"
        if output_rel.startswith(prefix):
            output_rel = output_rel[len(prefix):]

        files = {output_rel + HTML_EXTENSION: result.html}
        for name, content in result.files.items():
            files[posixpath.join(output_dir_for(name), name)] = content
        return files

"""Constants used throughout the webfactory package."""

# Source layout
BLUEPRINTS_DIR = "blueprints"
COMPONENTS_DIR = "components"
BLUEPRINT_EXTENSION = ".blueprint"

# Component files
TEMPLATE_EXTENSION = ".html"
STYLE_EXTENSION = ".css"
SCRIPT_EXTENSION = ".js"

# Output layout
STYLES_FILE = "styles.css"
CSS_DIR = "css"
JS_DIR = "js"
ASSETS_DIR = "assets"
HTML_EXTENSION = ".html"

# Template directives
DIRECTIVE_OPEN = "{{"
DIRECTIVE_CLOSE = "}}"
DIRECTIVE_COMPONENT = "component"
DIRECTIVE_STYLES = "styles"
DIRECTIVE_SCRIPT = "script"
DIRECTIVE_RANGE_END = "range end"
DIRECTIVE_RANGE_PREFIX = "range ."
DIRECTIVE_VAR_PREFIX = "."

# Wraps the stylesheet and script markers held in rendered output until assembly
MARKER_DELIMITER = "\x00"


def unresolved_placeholder(path: str) -> str:
    """Marker emitted in place of a component that could not be found."""
    return f"{DIRECTIVE_OPEN}{path}{DIRECTIVE_CLOSE}"

"""webfactory - static pages assembled from blueprints and components."""

__version__ = "0.1.0"

from .parser import BlueprintNode, BlueprintParser, parse_blueprint
from .registry import Component, ComponentRegistry
from .assets import AssetManager
from .tokenizer import Token, TokenType, tokenize
from .processor import ProcessResult, ProcessingError, TemplateProcessor
from .context import BuildContext
from .storage import FileStore
from .builder import BuildReport, SiteBuilder

__all__ = [
    "BlueprintNode",
    "BlueprintParser",
    "parse_blueprint",
    "Component",
    "ComponentRegistry",
    "AssetManager",
    "Token",
    "TokenType",
    "tokenize",
    "ProcessResult",
    "ProcessingError",
    "TemplateProcessor",
    "BuildContext",
    "FileStore",
    "BuildReport",
    "SiteBuilder",
    "__version__",
]

"""Exceptions raised by webfactory."""

from typing import List, Optional


class WebfactoryError(Exception):
    """Base exception for all webfactory errors."""
    pass


class BlueprintParseError(WebfactoryError):
    """Raised when a blueprint cannot be turned into a tree."""

    def __init__(self, message: str, index_key: Optional[str] = None):
        self.index_key = index_key
        super().__init__(message)


class StorageError(WebfactoryError):
    """Raised when the file store cannot read or write."""
    pass


class TemplateNotFoundError(StorageError):
    """Raised when a component directory has no HTML template."""

    def __init__(self, component_path: str, message: Optional[str] = None):
        self.component_path = component_path
        super().__init__(message or f"no HTML template found in component {component_path}")


class AmbiguousTemplateError(StorageError):
    """Raised when a component directory has more than one HTML template."""

    def __init__(self, component_path: str, candidates: List[str]):
        self.component_path = component_path
        self.candidates = candidates
        super().__init__(
            f"multiple HTML templates found in component {component_path}: "
            + ", ".join(candidates)
        )


class ComponentResolutionError(WebfactoryError):
    """Raised when a component referenced by a blueprint cannot be loaded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"loading component {path}: {reason}")


class AssetError(WebfactoryError):
    """Raised when a component's assets cannot be merged."""
    pass


class TemplateProcessingError(WebfactoryError):
    """Raised after rendering when recoverable errors were collected.

    The partial result is kept on the exception so callers can still
    inspect what was generated.
    """

    def __init__(self, errors: list, result=None):
        self.errors = errors
        self.result = result
        super().__init__(
            "template processing errors: " + "; ".join(str(e) for e in errors)
        )


class BuildError(WebfactoryError):
    """Raised when a blueprint fails and the site build stops."""

    def __init__(self, blueprint: str, cause: Exception):
        self.blueprint = blueprint
        self.cause = cause
        super().__init__(f"processing blueprint {blueprint}: {cause}")

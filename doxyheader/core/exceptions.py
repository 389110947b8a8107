"""Typed exceptions raised while loading, parsing and rendering page templates."""

from typing import Iterable, List, Optional


class TemplateError(Exception):
    """Base class for page template errors."""


class MalformedRegionError(TemplateError):
    """Raised when BEGIN/END region markers are unmatched or improperly nested."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class MissingTokenError(TemplateError):
    """Raised when emitted markup references tokens absent from the context."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names: List[str] = list(names)
        markers = ", ".join(f"${name}" for name in self.names)
        super().__init__(f"No context value for token(s): {markers}")


class ContextValidationError(TemplateError, ValueError):
    """Raised when a Template Context cannot be built from the supplied values."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__("Invalid template context: " + "; ".join(self.errors))


class TemplateLoadError(TemplateError):
    """Raised when a template file cannot be read."""

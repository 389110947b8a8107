"""
Template Context
================

Validation and construction of Template Contexts from the flat mappings a
documentation build supplies: string values are token replacements, boolean
values are region flags.
"""

from typing import Any, Dict, List, Mapping, Union

from cerberus import Validator  # type: ignore[import-untyped]

from doxyheader.config.logging import get_logger
from doxyheader.core.exceptions import ContextValidationError
from doxyheader.models.schemas import TemplateContext

logger = get_logger(__name__)

ContextValues = Mapping[str, Union[str, bool]]


class ContextValidator:
    """Template Context validation using Cerberus schemas."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(component="context_validator")  # structlog.BoundLoggerBase
        self._setup_schemas()

    def _setup_schemas(self) -> None:
        """Setup validation schemas."""
        self.context_schema: Dict[str, Any] = {
            "context": {
                "type": "dict",
                "keysrules": {"type": "string", "regex": r"[A-Za-z_][A-Za-z0-9_]*"},
                "valuesrules": {"type": ["string", "boolean"]},
            },
        }

    def validate_context(self, values: Mapping[str, Any]) -> tuple[bool, List[str]]:
        """
        Validate context values.

        Args:
            values: Flat mapping of token and flag names to values

        Returns:
            Tuple of (is_valid, errors)
        """
        validator = Validator(self.context_schema)  # type: ignore[misc]
        is_valid = validator.validate({"context": dict(values)})  # type: ignore[misc]

        errors: List[str] = []
        if not is_valid:
            errors.extend(self._format_validation_errors(validator.errors))  # type: ignore[attr-defined]

        return bool(is_valid), errors

    def _format_validation_errors(self, errors: Any, path: str = "") -> List[str]:
        """Format Cerberus validation errors into readable messages."""
        formatted_errors: List[str] = []

        for field, error_info in errors.items():
            current_path = f"{path}.{field}" if path else str(field)

            if isinstance(error_info, list):
                for error in error_info:
                    if isinstance(error, dict):
                        formatted_errors.extend(self._format_validation_errors(error, current_path))
                    else:
                        formatted_errors.append(f"{current_path}: {error}")
            elif isinstance(error_info, dict):
                formatted_errors.extend(self._format_validation_errors(error_info, current_path))

        return formatted_errors


def build_context(values: Union[ContextValues, TemplateContext]) -> TemplateContext:
    """
    Build a Template Context from a flat mapping.

    Args:
        values: Mapping of names to replacement strings (tokens) or booleans (flags),
            or an existing TemplateContext which is returned unchanged

    Returns:
        Immutable TemplateContext

    Raises:
        ContextValidationError: If a key is not an identifier or a value is neither
            a string nor a boolean
    """
    if isinstance(values, TemplateContext):
        return values

    is_valid, errors = ContextValidator().validate_context(values)
    if not is_valid:
        logger.error("Template context validation failed", errors=errors)
        raise ContextValidationError(errors)

    tokens = {name: value for name, value in values.items() if isinstance(value, str)}
    flags = {name: value for name, value in values.items() if isinstance(value, bool)}
    return TemplateContext(tokens=tokens, flags=flags)


def merge_context(base: TemplateContext, values: ContextValues) -> TemplateContext:
    """
    Return a new context with `values` layered over `base`.

    A name given a new value of the other kind moves between tokens and flags.
    """
    overlay = build_context(values)
    tokens = {k: v for k, v in base.tokens.items() if k not in overlay.flags}
    flags = {k: v for k, v in base.flags.items() if k not in overlay.tokens}
    tokens.update(overlay.tokens)
    flags.update(overlay.flags)
    return TemplateContext(tokens=tokens, flags=flags)

"""Error types and the default error handling policy."""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

from .constants import SCHEMA_INVALID

PathSegment = Union[str, int]


@dataclass
class ValidationError:
    """A validation error with path information."""

    reason: str
    message: str
    path: List[PathSegment] = field(default_factory=list)
    schema: Any = None
    value: Any = None

    def __str__(self) -> str:
        path_str = " -> ".join(str(p) for p in self.path) if self.path else "root"
        return f"{path_str}: {self.message}"


class SchemaRuntimeError(Exception):
    """Base exception for schema_runtime errors."""

    pass


class SchemaInvalidError(SchemaRuntimeError):
    """Raised when a schema cannot be used, e.g. a `$ref` does not resolve."""

    def __init__(
        self,
        message: str,
        reason: str = SCHEMA_INVALID,
        reference: Optional[str] = None,
        schema: Any = None,
        path: Optional[Sequence[PathSegment]] = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.reference = reference
        self.schema = schema
        self.path = list(path or [])


class ValidationAborted(SchemaRuntimeError):
    """Raised by an error handler once no more errors are allowed."""

    def __init__(self, errors: Sequence[ValidationError]):
        self.errors = list(errors)
        super().__init__(
            "\n".join(str(error) for error in self.errors) or "validation aborted"
        )


class PathUnderflowError(SchemaRuntimeError, IndexError):
    """Raised when removing a path segment from an empty path."""

    pass


def default_error_handler(
    error: ValidationError,
    errors: Sequence[ValidationError],
    allowed_errors: Union[int, float],
) -> List[ValidationError]:
    """Append `error` while the bound allows it, otherwise abort.

    Args:
        error: The newly produced error
        errors: Errors accumulated so far, in discovery order
        allowed_errors: Maximum number of errors to collect (may be math.inf)

    Returns:
        The updated error list

    Raises:
        ValidationAborted: If the list already holds `allowed_errors` errors
    """
    updated = list(errors) + [error]
    if len(errors) < allowed_errors:
        return updated
    raise ValidationAborted(updated)

"""Schema resolution and traversal state for JSON Schema validation."""

from .config import ValidationOptions
from .env import load_env_files
from .errors import (
    PathUnderflowError,
    SchemaInvalidError,
    SchemaRuntimeError,
    ValidationAborted,
    ValidationError,
    default_error_handler,
)
from .loader import Found, SchemaStore, UriSchemaLoader, load_schema, not_found_loader
from .scopes import StateScope, path_segment, resolved_ref
from .state import ValidationState
from .uri import canonical_path, combine_id

__version__ = "0.1.0"

__all__ = [
    "ValidationState",
    "ValidationOptions",
    "ValidationError",
    "SchemaRuntimeError",
    "SchemaInvalidError",
    "ValidationAborted",
    "PathUnderflowError",
    "default_error_handler",
    "Found",
    "SchemaStore",
    "UriSchemaLoader",
    "load_schema",
    "not_found_loader",
    "StateScope",
    "path_segment",
    "resolved_ref",
    "canonical_path",
    "combine_id",
    "load_env_files",
]

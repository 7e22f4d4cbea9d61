"""Options accepted when creating a validation state."""

import logging
import math
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .constants import (
    DEFAULT_SCHEMA_VERSION,
    ENV_ALLOWED_ERRORS,
    ENV_DEFAULT_SCHEMA_VERSION,
    SCHEMA_KEY,
)
from .env import get_env_var
from .errors import ValidationError, default_error_handler
from .json_value import get_value
from .loader import SchemaLoader, not_found_loader

logger = logging.getLogger(__name__)

AllowedErrors = Union[int, float]
ErrorHandler = Callable[
    [ValidationError, Sequence[ValidationError], AllowedErrors], List[ValidationError]
]


def parse_allowed_errors(value: Any) -> AllowedErrors:
    """Normalize an error bound to a non-negative int or math.inf.

    Accepts ints, math.inf, and their string forms ("3", "infinity").
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid allowed_errors: {value!r}")
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("infinity", "inf", "unbounded"):
            return math.inf
        try:
            value = int(text)
        except ValueError:
            raise ValueError(f"Invalid allowed_errors: {value!r}") from None
    if value == math.inf:
        return math.inf
    if not isinstance(value, int) or value < 0:
        raise ValueError(f"allowed_errors must be a non-negative integer, got {value!r}")
    return value


@dataclass
class ValidationOptions:
    """Options for a single validation run.

    Unset options fall back to environment variables where one exists,
    then to built-in defaults.
    """

    error_handler: Optional[ErrorHandler] = None
    allowed_errors: Optional[AllowedErrors] = None
    default_schema_version: Optional[str] = None
    schema_loader: Optional[SchemaLoader] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidationOptions":
        """Create options from a mapping of option names.

        Raises:
            ValueError: If the mapping holds an unknown option name
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown options: {', '.join(sorted(unknown))}")
        return cls(**dict(data))

    def to_dict(self) -> Dict[str, Any]:
        """Return the options that were set explicitly."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def get_error_handler(self) -> ErrorHandler:
        return self.error_handler or default_error_handler

    def get_schema_loader(self) -> SchemaLoader:
        return self.schema_loader or not_found_loader

    def get_allowed_errors(self) -> AllowedErrors:
        if self.allowed_errors is not None:
            return parse_allowed_errors(self.allowed_errors)
        env_value = get_env_var(ENV_ALLOWED_ERRORS)
        if env_value:
            logger.debug(f"Using allowed_errors={env_value} from {ENV_ALLOWED_ERRORS}")
            return parse_allowed_errors(env_value)
        return 0

    def get_default_schema_version(self, schema: Any) -> str:
        """Pick the dialect: explicit option, then the schema's `$schema`, then fallback."""
        if self.default_schema_version is not None:
            return self.default_schema_version
        declared = get_value(SCHEMA_KEY, schema)
        if isinstance(declared, str):
            return declared
        return get_env_var(ENV_DEFAULT_SCHEMA_VERSION) or DEFAULT_SCHEMA_VERSION

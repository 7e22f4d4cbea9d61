"""Validation state threaded through a recursive schema validation.

A `ValidationState` is an immutable value: every operation returns a new
state and leaves the receiver untouched. The validation engine carries one
state per top-level validation call, pushing path segments as it descends
and resolving `$ref` keywords through `resolve_ref`/`undo_resolve_ref`.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Tuple, Union

from .config import AllowedErrors, ErrorHandler, ValidationOptions, parse_allowed_errors
from .constants import ID_KEYS, UNRESOLVABLE_REFERENCE
from .errors import PathSegment, PathUnderflowError, SchemaInvalidError, ValidationError
from .json_value import get_value, parse_pointer, walk_pointer
from .loader import SchemaLoader, load_schema
from .uri import combine_id, split_fragment

logger = logging.getLogger(__name__)


def _declared_id(schema: Any) -> Optional[str]:
    for key in ID_KEYS:
        value = get_value(key, schema)
        if isinstance(value, str):
            return value
    return None


@dataclass(frozen=True)
class ValidationState:
    """Where validation currently is in the schema and the document."""

    root_schema: Any
    current_schema: Any
    current_path: Tuple[PathSegment, ...]
    allowed_errors: AllowedErrors
    error_list: Tuple[ValidationError, ...]
    error_handler: ErrorHandler = field(repr=False, compare=False)
    default_schema_version: str
    schema_loader: SchemaLoader = field(repr=False, compare=False)
    id: Optional[str] = None
    root_id: Optional[str] = None

    @classmethod
    def new(
        cls,
        schema: Any,
        options: Union[ValidationOptions, Mapping[str, Any], None] = None,
    ) -> "ValidationState":
        """Create the initial state for validating against `schema`.

        Args:
            schema: Root schema document
            options: A ValidationOptions, a mapping of option names, or None

        Returns:
            A state positioned at the schema root with an empty path
        """
        if options is None:
            options = ValidationOptions()
        elif not isinstance(options, ValidationOptions):
            options = ValidationOptions.from_dict(options)

        state = cls(
            root_schema=schema,
            current_schema=schema,
            current_path=(),
            allowed_errors=options.get_allowed_errors(),
            error_list=(),
            error_handler=options.get_error_handler(),
            default_schema_version=options.get_default_schema_version(schema),
            schema_loader=options.get_schema_loader(),
        )
        state = state.set_current_schema(schema)
        if state.id is not None:
            state = replace(state, root_id=split_fragment(state.id)[0] or None)
        return state

    # Path tracking

    def add_to_path(self, segment: PathSegment) -> "ValidationState":
        return replace(self, current_path=self.current_path + (segment,))

    def remove_last_from_path(self) -> "ValidationState":
        if not self.current_path:
            raise PathUnderflowError("Cannot remove a segment from an empty path")
        return replace(self, current_path=self.current_path[:-1])

    # Setters

    def set_current_schema(self, schema: Any) -> "ValidationState":
        """Replace the current schema, combining the active id with its id."""
        try:
            new_id = combine_id(self.id, _declared_id(schema))
        except ValueError as e:
            raise SchemaInvalidError(
                str(e), schema=schema, path=self.current_path
            ) from e
        return replace(self, current_schema=schema, id=new_id)

    def set_allowed_errors(self, allowed_errors: AllowedErrors) -> "ValidationState":
        return replace(self, allowed_errors=parse_allowed_errors(allowed_errors))

    def set_error_list(self, error_list) -> "ValidationState":
        return replace(self, error_list=tuple(error_list))

    # Errors

    def make_error(
        self, reason: str, message: str, value: Any = None
    ) -> ValidationError:
        """Build an error record at the current path and schema."""
        return ValidationError(
            reason=reason,
            message=message,
            path=list(self.current_path),
            schema=self.current_schema,
            value=value,
        )

    def handle_error(self, error: ValidationError) -> "ValidationState":
        """Pass `error` through the error handler and keep its result.

        Raises:
            Whatever the error handler raises to abort validation; the
            default handler raises ValidationAborted.
        """
        errors = self.error_handler(error, list(self.error_list), self.allowed_errors)
        return self.set_error_list(errors)

    # References

    def resolve_ref(self, reference: Union[str, bytes]) -> "ValidationState":
        """Return a state whose current schema is the target of `reference`.

        Args:
            reference: Value of a `$ref` keyword, relative to the active id

        Returns:
            The resolved state. For references into another document the
            root schema and id switch to that document.

        Raises:
            SchemaInvalidError: If the reference cannot be resolved
        """
        if isinstance(reference, bytes):
            reference = reference.decode("utf-8")

        try:
            target_id = combine_id(self.id, reference)
        except ValueError as e:
            raise self._unresolvable(reference, str(e)) from e

        base, pointer = split_fragment(target_id)
        segments = parse_pointer(pointer)

        if not base or base == self.root_id:
            logger.debug(f"Resolving local reference {reference} -> #{pointer or ''}")
            schema = walk_pointer(self.root_schema, segments)
            if schema is None:
                raise self._unresolvable(reference, f"Target not found: {target_id}")
            return self.set_current_schema(schema)

        logger.debug(f"Resolving remote reference {reference} -> {target_id}")
        remote_schema = load_schema(self.schema_loader, base)
        if remote_schema is None:
            raise self._unresolvable(reference, f"Schema not found: {base}")

        schema = walk_pointer(remote_schema, segments)
        if schema is None:
            raise self._unresolvable(reference, f"Target not found: {target_id}")

        remote_state = replace(self, root_schema=remote_schema, root_id=base, id=base)
        return remote_state.set_current_schema(schema)

    def undo_resolve_ref(self, original: "ValidationState") -> "ValidationState":
        """Restore the schema context of `original`, keeping this state's progress.

        Root schema, current schema and ids come from `original`; the path,
        error list and everything else stay as they are here.
        """
        return replace(
            self,
            root_schema=original.root_schema,
            current_schema=original.current_schema,
            id=original.id,
            root_id=original.root_id,
        )

    def _unresolvable(self, reference: str, message: str) -> SchemaInvalidError:
        logger.debug(f"Unresolvable reference {reference}: {message}")
        return SchemaInvalidError(
            message,
            reason=UNRESOLVABLE_REFERENCE,
            reference=reference,
            schema=self.current_schema,
            path=self.current_path,
        )

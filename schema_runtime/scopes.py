"""Context managers pairing state changes with their undo.

    with resolved_ref(state, "#/definitions/pos") as scope:
        scope.state = check(value, scope.state)
    state = scope.state  # root, schema and id restored, errors kept
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Union

from .errors import PathSegment
from .state import ValidationState


@dataclass
class StateScope:
    """Holder for the state while inside a scope."""

    state: ValidationState


@contextmanager
def path_segment(state: ValidationState, segment: PathSegment) -> Iterator[StateScope]:
    """Push `segment` for the duration of the block."""
    scope = StateScope(state.add_to_path(segment))
    try:
        yield scope
    finally:
        scope.state = scope.state.remove_last_from_path()


@contextmanager
def resolved_ref(
    state: ValidationState, reference: Union[str, bytes]
) -> Iterator[StateScope]:
    """Resolve `reference` for the duration of the block.

    On exit, including exits by exception, the scope's state gets the root
    schema, current schema and id of `state` back.

    Raises:
        SchemaInvalidError: If the reference cannot be resolved; the block
            is not entered
    """
    scope = StateScope(state.resolve_ref(reference))
    try:
        yield scope
    finally:
        scope.state = scope.state.undo_resolve_ref(state)

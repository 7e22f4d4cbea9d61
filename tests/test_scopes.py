"""Tests for the scoped path and reference helpers."""

import math

import pytest

from schema_runtime.constants import DATA_INVALID, REF_KEY
from schema_runtime.errors import SchemaInvalidError
from schema_runtime.loader import SchemaStore
from schema_runtime.scopes import path_segment, resolved_ref
from schema_runtime.state import ValidationState


@pytest.fixture
def state(root_schema) -> ValidationState:
    """A state collecting any number of errors."""
    return ValidationState.new(root_schema, {"allowed_errors": math.inf})


def test_path_segment(state) -> None:
    """Test that the segment is popped on exit."""
    with path_segment(state, "properties") as scope:
        assert scope.state.current_path == ("properties",)
        with path_segment(scope.state, "age") as inner:
            assert inner.state.current_path == ("properties", "age")
        assert inner.state.current_path == ("properties",)
        scope.state = inner.state
    assert scope.state.current_path == ()


def test_path_segment_keeps_errors(state) -> None:
    """Test that errors found inside the scope survive it."""
    with path_segment(state, 0) as scope:
        error = scope.state.make_error(DATA_INVALID, "Expected string")
        scope.state = scope.state.handle_error(error)
    assert scope.state.current_path == ()
    assert [str(e) for e in scope.state.error_list] == ["0: Expected string"]


def test_resolved_ref(state, root_schema) -> None:
    """Test that the reference is undone on exit."""
    with resolved_ref(state, "#/definitions/pos") as scope:
        assert scope.state.current_schema == {"type": "integer"}
        error = scope.state.make_error(DATA_INVALID, "Expected integer")
        scope.state = scope.state.handle_error(error)
    assert scope.state.current_schema is root_schema
    assert scope.state.root_schema is root_schema
    assert scope.state.id == state.id
    assert len(scope.state.error_list) == 1


def test_resolved_ref_restores_on_exception(state, root_schema) -> None:
    """Test restoration when the block raises."""
    with pytest.raises(RuntimeError):
        with resolved_ref(state, "#/definitions/pos") as scope:
            raise RuntimeError("keyword failed")
    assert scope.state.current_schema is root_schema


def test_resolved_ref_unresolvable(state) -> None:
    """Test that the block is not entered for a bad reference."""
    entered = False
    with pytest.raises(SchemaInvalidError):
        with resolved_ref(state, "#/definitions/missing"):
            entered = True
    assert not entered


def test_nested_remote_and_local(root_schema) -> None:
    """Test a remote reference whose target refers within its own document."""
    remote_uri = "http://x.com/defs.json"
    store = SchemaStore(
        {
            remote_uri: {
                "definitions": {
                    "name": {"$ref": "#/definitions/text"},
                    "text": {"type": "string"},
                }
            }
        }
    )
    state = ValidationState.new(root_schema, {"schema_loader": store})

    with resolved_ref(state, remote_uri + "#/definitions/name") as outer:
        ref = outer.state.current_schema[REF_KEY]
        with resolved_ref(outer.state, ref) as inner:
            assert inner.state.current_schema == {"type": "string"}
            assert inner.state.id == remote_uri
        assert inner.state.current_schema == {"$ref": "#/definitions/text"}
        outer.state = inner.state
    assert outer.state.root_schema is root_schema
    assert outer.state.id is None

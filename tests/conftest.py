"""Shared fixtures for schema_runtime tests."""

import logging
import os
from unittest.mock import patch

import pytest

from schema_runtime.constants import ENV_ALLOWED_ERRORS, ENV_DEFAULT_SCHEMA_VERSION


@pytest.fixture(autouse=True)
def clean_env():
    """Keep SCHEMA_RUNTIME_* settings and .env loading from leaking between tests."""
    with patch.dict(os.environ):
        os.environ.pop(ENV_ALLOWED_ERRORS, None)
        os.environ.pop(ENV_DEFAULT_SCHEMA_VERSION, None)
        yield


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Set up logging for all tests."""
    caplog.set_level(logging.DEBUG)


@pytest.fixture
def root_schema():
    """A schema with local definitions."""
    return {
        "type": "object",
        "definitions": {
            "pos": {"type": "integer"},
            "name": {"type": "string", "minLength": 1},
        },
        "items": [{"type": "string"}, {"type": "number"}],
        "properties": {
            "age": {"$ref": "#/definitions/pos"},
        },
    }

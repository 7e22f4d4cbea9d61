"""Schema loading: the adapter around caller-supplied loaders, plus two loaders.

A loader is any callable taking a URI string and returning one of:

- ``Found(schema)``: an explicit hit
- a bare schema mapping
- ``None``: not found

Loaders may also raise; `load_schema` treats that as not found.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union
from urllib.parse import unquote, urlsplit

import requests
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from .constants import DEFAULT_SCHEMA_VERSION, ID_KEYS
from .errors import SchemaInvalidError
from .json_value import get_value, is_json_object
from .uri import split_fragment

logger = logging.getLogger(__name__)

# Schemas without `$schema` are checked against the package's default dialect
_DEFAULT_VALIDATOR = validator_for({"$schema": DEFAULT_SCHEMA_VERSION})


@dataclass(frozen=True)
class Found:
    """Explicit successful loader result."""

    schema: Any


SchemaLoader = Callable[[str], Union[Found, Mapping[str, Any], None]]


def not_found_loader(uri: str) -> None:
    """Loader that never finds anything."""
    return None


def load_schema(loader: SchemaLoader, uri: Union[str, bytes]) -> Optional[Any]:
    """Invoke `loader` for `uri` and normalize its result.

    Args:
        loader: Caller-supplied schema loader
        uri: URI of the schema document, without fragment

    Returns:
        The loaded schema, or None if the loader did not produce one
    """
    if isinstance(uri, bytes):
        uri = uri.decode("utf-8")

    try:
        result = loader(uri)
    except Exception as e:
        logger.warning(f"Schema loader failed for {uri}: {e}")
        return None

    if isinstance(result, Found):
        return result.schema
    if is_json_object(result):
        return result

    logger.debug(f"Schema loader returned no schema for {uri}")
    return None


class SchemaStore:
    """In-memory schemas keyed by URI, usable as a schema loader."""

    def __init__(self, schemas: Optional[Mapping[str, Any]] = None, check: bool = True):
        self._schemas: Dict[str, Any] = {}
        for uri, schema in (schemas or {}).items():
            self.add(uri, schema, check=check)

    def add(self, uri: str, schema: Any, check: bool = True) -> None:
        """Register `schema` under `uri` (any fragment is ignored).

        Raises:
            SchemaInvalidError: If the schema is not an object, or `check`
                is set and the schema fails its dialect's meta-schema
        """
        key = split_fragment(uri)[0]
        if not is_json_object(schema):
            raise SchemaInvalidError(
                f"Schema for {key} must be an object", schema=schema
            )
        if check:
            try:
                validator_for(schema, default=_DEFAULT_VALIDATOR).check_schema(schema)
            except SchemaError as e:
                raise SchemaInvalidError(
                    f"Schema for {key} is invalid: {e.message}", schema=schema
                ) from e
        logger.debug(f"Adding schema {key} to store")
        self._schemas[key] = schema

    def add_schema(self, schema: Any, check: bool = True) -> str:
        """Register `schema` under its own `$id`/`id` and return that id."""
        for key in ID_KEYS:
            schema_id = get_value(key, schema)
            if isinstance(schema_id, str) and schema_id:
                self.add(schema_id, schema, check=check)
                return split_fragment(schema_id)[0]
        raise SchemaInvalidError("Schema declares no id", schema=schema)

    def remove(self, uri: str) -> None:
        self._schemas.pop(split_fragment(uri)[0], None)

    def __contains__(self, uri: str) -> bool:
        return split_fragment(uri)[0] in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __call__(self, uri: str) -> Optional[Found]:
        schema = self._schemas.get(split_fragment(uri)[0])
        if schema is None:
            return None
        return Found(schema)


class UriSchemaLoader:
    """Loads schemas from file:// and http(s):// URIs.

    Errors (missing files, HTTP failures, bad JSON) are raised as is;
    `load_schema` turns them into not-found.
    """

    def __init__(
        self, session: Optional[requests.Session] = None, timeout: float = 10.0
    ):
        self.session = session or requests.Session()
        self.timeout = timeout

    def __call__(self, uri: str) -> Optional[Any]:
        parts = urlsplit(uri)
        scheme = parts.scheme.lower()
        if scheme == "file":
            return self._load_file(Path(unquote(parts.netloc + parts.path)))
        if scheme in ("http", "https"):
            return self._load_http(uri)
        logger.debug(f"Unsupported schema URI scheme: {uri}")
        return None

    def _load_file(self, path: Path) -> Any:
        logger.debug(f"Loading schema file: {path}")
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    def _load_http(self, uri: str) -> Any:
        logger.debug(f"Fetching schema: {uri}")
        response = self.session.get(uri, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

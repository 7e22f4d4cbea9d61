"""Constants for schema_runtime."""

# Schema keywords
SCHEMA_KEY = "$schema"
REF_KEY = "$ref"
ID_KEYS = ("$id", "id")

# Dialect assumed when neither the schema nor the options name one
DEFAULT_SCHEMA_VERSION = "http://json-schema.org/draft-04/schema#"

# Environment variables
ENV_DEFAULT_SCHEMA_VERSION = "SCHEMA_RUNTIME_DEFAULT_SCHEMA_VERSION"
ENV_ALLOWED_ERRORS = "SCHEMA_RUNTIME_ALLOWED_ERRORS"

# Error reasons
SCHEMA_INVALID = "schema_invalid"
DATA_INVALID = "data_invalid"
UNRESOLVABLE_REFERENCE = "unresolvable_reference"

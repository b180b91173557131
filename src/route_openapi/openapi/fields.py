"""Split route fields into path parameters and request body properties."""

import re

from route_openapi.framework.base import FieldSchema, FieldType

PATH_FIELDS_RE = re.compile(r"{(\w+)}")  # OpenAPI-style placeholders, e.g. "lookup/{urltoken}"
WHITESPACE_RE = re.compile(r"\s+")


def split_fields(
    fields: dict[str, FieldSchema], path: str
) -> tuple[dict[str, FieldSchema | None], dict[str, FieldSchema]]:
    """Partition fields into (path_fields, body_fields) for an expanded path.

    Placeholders without a declared field are kept as path fields mapped to
    None. Header fields always join the path group.
    """
    path_fields: dict[str, FieldSchema | None] = {}
    body_fields: dict[str, FieldSchema] = {}

    for name in PATH_FIELDS_RE.findall(path):
        path_fields[name] = fields.get(name)

    for name, field in fields.items():
        if name in path_fields:
            continue
        if field.type == FieldType.HEADER:
            path_fields[name] = field
        else:
            body_fields[name] = field

    return path_fields, body_fields


def clean_string(s: str) -> str:
    """Trim and collapse whitespace runs into single spaces."""
    return WHITESPACE_RE.sub(" ", s.strip())

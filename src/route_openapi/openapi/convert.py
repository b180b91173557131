"""Translate route field types into OpenAPI schema types."""

from typing import NamedTuple

import structlog

from route_openapi.framework.base import FieldType

logger = structlog.get_logger(__name__)


class SchemaType(NamedTuple):
    """Subset of JSON Schema used as a conversion target. ``items`` is set for arrays."""

    base_type: str = ""
    items: str = ""
    format: str = ""


_CONVERSIONS: dict[FieldType, SchemaType] = {
    FieldType.STRING: SchemaType("string"),
    FieldType.NAME_STRING: SchemaType("string"),
    FieldType.HEADER: SchemaType("string"),
    FieldType.LOWERCASE_STRING: SchemaType("string", format="lowercase"),
    FieldType.INT: SchemaType("number"),
    FieldType.DURATION_SECOND: SchemaType("number", format="seconds"),
    FieldType.BOOL: SchemaType("boolean"),
    FieldType.MAP: SchemaType("object", format="map"),
    FieldType.KV_PAIRS: SchemaType("object", format="kvpairs"),
    FieldType.SLICE: SchemaType("array", items="object"),
    FieldType.STRING_SLICE: SchemaType("array", items="string"),
    FieldType.COMMA_STRING_SLICE: SchemaType("array", items="string"),
    FieldType.COMMA_INT_SLICE: SchemaType("array", items="number"),
}


def convert_type(field_type: FieldType | str) -> SchemaType:
    """Return the OpenAPI type for a field type.

    Unknown types are logged and mapped to format ``unknown`` instead of failing.
    """
    try:
        return _CONVERSIONS[FieldType(field_type)]
    except (ValueError, KeyError):
        logger.warning("unknown_field_type", field_type=str(field_type))
        return SchemaType(format="unknown")

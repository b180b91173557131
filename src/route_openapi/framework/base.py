"""Route definition models for pluggable backends.

A backend describes its HTTP surface as a list of Route objects. Each route
carries a regex-like URL pattern, typed fields and per-operation handlers.
These models are the read-only input of the OpenAPI document builder.
"""

from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, Field


class FieldType(str, Enum):
    """Kinds of values a route field can hold."""

    STRING = "string"
    NAME_STRING = "name_string"
    LOWERCASE_STRING = "lowercase_string"
    HEADER = "header"
    INT = "int"
    DURATION_SECOND = "duration_second"
    BOOL = "bool"
    MAP = "map"
    KV_PAIRS = "kv_pairs"
    SLICE = "slice"
    STRING_SLICE = "string_slice"
    COMMA_STRING_SLICE = "comma_string_slice"
    COMMA_INT_SLICE = "comma_int_slice"


class Operation(str, Enum):
    """Operations a route can handle. Declaration order is processing order."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    LIST = "list"


class BackendType(str, Enum):
    LOGICAL = "logical"  # secret engines
    CREDENTIAL = "credential"  # auth methods
    UNKNOWN = "unknown"


class FieldSchema(BaseModel):
    """A single declared route field."""

    # unrecognized kinds are kept as plain strings and documented as "unknown"
    type: FieldType | str = Field(union_mode="left_to_right")
    description: str = ""
    deprecated: bool = False


class Secret(BaseModel):
    lease_id: str = ""
    ttl: int = 0
    max_ttl: int = 0
    renewable: bool = False
    internal_data: dict[str, Any] = {}


class Auth(BaseModel):
    client_token: str = ""
    accessor: str = ""
    display_name: str = ""
    policies: list[str] = []
    metadata: dict[str, str] = {}
    entity_id: str = ""
    ttl: int = 0
    renewable: bool = False
    num_uses: int = 0


class WrapInfo(BaseModel):
    token: str = ""
    accessor: str = ""
    ttl: int = 0
    creation_time: str = ""
    creation_path: str = ""
    wrapped_accessor: str = ""
    format: str = ""


class Response(BaseModel):
    """A backend response, used by handlers to declare example payloads."""

    secret: Secret | None = None
    auth: Auth | None = None
    data: dict[str, Any] = {}
    redirect: str = ""
    warnings: list[str] = []
    wrap_info: WrapInfo | None = None


class RequestExample(BaseModel):
    """An example request body for create/update operations."""

    description: str = ""
    data: dict[str, Any] | None = None


class ResponseExample(BaseModel):
    """One documented response for a status code."""

    description: str = ""
    media_type: str = ""  # defaults to application/json when documented
    example: Any = None  # a Response, a mapping shaped like one, or None


class OperationProperties(BaseModel):
    """Documentation metadata declared by an operation handler."""

    summary: str = ""
    description: str = ""
    examples: list[RequestExample] = []
    responses: dict[int, list[ResponseExample]] = {}
    unpublished: bool = False
    deprecated: bool = False


class PathOperation(OperationProperties):
    """An operation handler: a callback plus its documentation properties."""

    callback: Callable[..., Any] | None = None

    def properties(self) -> OperationProperties:
        return OperationProperties(**{name: getattr(self, name) for name in OperationProperties.model_fields})


class Route(BaseModel):
    """A URL pattern with its fields and handlers.

    ``operations`` is the explicit handler map. Older backends only set
    ``callbacks``; those are documented using ``help_synopsis`` as summary.
    """

    pattern: str
    help_synopsis: str = ""
    fields: dict[str, FieldSchema] = {}
    operations: dict[Operation, PathOperation] | None = None
    callbacks: dict[Operation, Callable[..., Any]] = {}


class SpecialPaths(BaseModel):
    """Paths with special auth handling. A trailing ``*`` matches as a prefix."""

    root: list[str] = []  # require sudo capability
    unauthenticated: list[str] = []


class Backend(BaseModel):
    """The routes exposed by one backend."""

    paths: list[Route] = []
    backend_type: BackendType = BackendType.UNKNOWN
    special_paths: SpecialPaths | None = None

    def special_paths_or_empty(self) -> SpecialPaths:
        return self.special_paths or SpecialPaths()

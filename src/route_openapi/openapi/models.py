"""OpenAPI 3.0.2 object models.

Field names follow the OpenAPI specification via aliases. Serialization
omits empty values (None, "", False, empty collections) except for the keys
OpenAPI requires. ``example`` and ``schema`` are dropped only when None.
The output stays compact:

    doc = new_document()
    doc.paths["/renew"] = PathItem(description="Renew a lease")
    doc.to_dict()
"""

import json
from typing import Any, ClassVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer

from route_openapi.config import OAS_VERSION, DocumentSettings, get_settings


def _is_empty(key: str, value: Any) -> bool:
    if key in ("example", "schema"):
        return value is None
    if value is None or value is False or value == "":
        return True
    return isinstance(value, (dict, list)) and not value


class OASModel(BaseModel):
    """Base for all document objects. Empty values are left out when dumped."""

    model_config = ConfigDict(populate_by_name=True)

    required_keys: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def omit_empty_values(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {k: v for k, v in data.items() if k in self.required_keys or not _is_empty(k, v)}


class License(OASModel):
    required_keys: ClassVar[frozenset[str]] = frozenset({"name", "url"})

    name: str
    url: str


class Info(OASModel):
    required_keys: ClassVar[frozenset[str]] = frozenset({"title", "description", "version", "license"})

    title: str
    description: str
    version: str
    license: License


class Schema(OASModel):
    type: str | None = None
    description: str | None = None
    properties: dict[str, "Schema"] = {}
    items: "Schema | None" = None
    format: str | None = None
    example: Any = None
    deprecated: bool = False


class MediaTypeObject(OASModel):
    schema_: Schema | None = Field(default=None, alias="schema")


class Parameter(OASModel):
    required_keys: ClassVar[frozenset[str]] = frozenset({"name", "in"})

    name: str
    description: str | None = None
    in_: str = Field(alias="in")  # path / header / query
    schema_: Schema | None = Field(default=None, alias="schema")
    required: bool = False
    deprecated: bool = False


class RequestBody(OASModel):
    description: str | None = None
    content: dict[str, MediaTypeObject] = {}


class ResponseObject(OASModel):
    required_keys: ClassVar[frozenset[str]] = frozenset({"description"})

    description: str
    content: dict[str, MediaTypeObject] = {}


class OASOperation(OASModel):
    required_keys: ClassVar[frozenset[str]] = frozenset({"responses"})

    summary: str | None = None
    description: str | None = None
    tags: list[str] = []
    parameters: list[Parameter] = []
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, ResponseObject] = {}
    deprecated: bool = False


class PathItem(OASModel):
    description: str | None = None
    parameters: list[Parameter] = []
    sudo: bool = Field(default=False, alias="x-vault-sudo")
    unauthenticated: bool = Field(default=False, alias="x-vault-unauthenticated")
    create_supported: bool = Field(default=False, alias="x-vault-create-supported")

    get: OASOperation | None = None
    post: OASOperation | None = None
    delete: OASOperation | None = None


class Document(OASModel):
    """Root OpenAPI document, keyed by absolute path."""

    required_keys: ClassVar[frozenset[str]] = frozenset({"openapi", "info", "paths"})

    openapi: str
    info: Info
    paths: dict[str, PathItem] = {}

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)


def new_document(settings: DocumentSettings | None = None) -> Document:
    """Return an empty document with ``info`` taken from settings."""
    settings = settings or get_settings()
    return Document(
        openapi=OAS_VERSION,
        info=Info(
            title=settings.title,
            description=settings.description,
            version=settings.version,
            license=License(name=settings.license_name, url=settings.license_url),
        ),
    )


def std_response_ok() -> ResponseObject:
    return ResponseObject(description="OK")


def std_response_no_content() -> ResponseObject:
    return ResponseObject(description="empty body")

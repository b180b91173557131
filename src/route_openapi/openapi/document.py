"""Build OpenAPI path items and operations from backend routes.

Entry points are ``document_paths`` (a whole backend) and ``document_path``
(one route). Both mutate the given Document in place. ``generate_document``
wraps them for callers that just want a finished document.
"""

import structlog

from route_openapi.config import DocumentSettings
from route_openapi.errors import ExampleSanitizationError
from route_openapi.framework.base import (
    Backend,
    BackendType,
    FieldSchema,
    FieldType,
    Operation,
    OperationProperties,
    ResponseExample,
    Route,
    SpecialPaths,
)
from route_openapi.openapi.convert import convert_type
from route_openapi.openapi.expand import expand_pattern
from route_openapi.openapi.fields import clean_string, split_fields
from route_openapi.openapi.models import (
    Document,
    MediaTypeObject,
    OASOperation,
    Parameter,
    PathItem,
    RequestBody,
    ResponseObject,
    Schema,
    new_document,
    std_response_no_content,
    std_response_ok,
)
from route_openapi.openapi.sanitize import clean_response

logger = structlog.get_logger(__name__)

DEFAULT_MEDIA_TYPE = "application/json"

BACKEND_TAGS = {
    BackendType.LOGICAL: ["secrets"],
    BackendType.CREDENTIAL: ["auth"],
}

# Operation -> PathItem attribute
OPERATION_SLOTS = {
    Operation.CREATE: "post",
    Operation.UPDATE: "post",
    Operation.READ: "get",
    Operation.LIST: "get",
    Operation.DELETE: "delete",
}


def generate_document(backend: Backend, settings: DocumentSettings | None = None) -> Document:
    """Return a new document describing every route of the backend."""
    doc = new_document(settings)
    document_paths(backend, doc)
    return doc


def document_paths(backend: Backend, doc: Document) -> None:
    """Add all routes of a backend to the document."""
    special_paths = backend.special_paths_or_empty()
    for route in backend.paths:
        document_path(route, special_paths, backend.backend_type, doc)


def document_path(
    route: Route,
    special_paths: SpecialPaths | None,
    backend_type: BackendType,
    doc: Document,
) -> None:
    """Add one route to the document, as one path item per expanded pattern."""
    sudo_paths = special_paths.root if special_paths else []
    unauth_paths = special_paths.unauthenticated if special_paths else []

    operations = resolve_operations(route)
    paths = expand_pattern(route.pattern)
    logger.debug("document_path_expanded", pattern=route.pattern, paths=paths)

    for path in paths:
        item = PathItem(
            description=clean_string(route.help_synopsis),
            sudo=special_path_match(path, sudo_paths),
            unauthenticated=special_path_match(path, unauth_paths),
        )

        # Path and header parameters are shared by all operations;
        # body fields are added to individual operations.
        path_fields, body_fields = split_fields(route.fields, path)
        item.parameters = sorted(
            (_path_parameter(name, field) for name, field in path_fields.items()),
            key=lambda p: p.name.lower(),
        )

        for op_type, props in operations.items():
            if props.unpublished:
                continue

            if op_type == Operation.CREATE:
                item.create_supported = True
                # With both create and update, only update is documented.
                if Operation.UPDATE in operations:
                    continue

            # With both list and read, only read is documented.
            if op_type == Operation.LIST and Operation.READ in operations:
                continue

            try:
                op = build_operation(op_type, props, body_fields, backend_type)
            except ExampleSanitizationError:
                logger.error("example_sanitization_failed", path=path, operation=op_type.value)
                raise

            # List is represented as GET with a `list` query parameter.
            if op_type == Operation.LIST or (op_type == Operation.READ and Operation.LIST in operations):
                op.parameters.append(list_parameter())

            setattr(item, OPERATION_SLOTS[op_type], op)

        doc.paths["/" + path] = item


def resolve_operations(route: Route) -> dict[Operation, OperationProperties]:
    """Return the route's handlers as operation -> properties, in processing order.

    Routes without an explicit operations map get one built from their
    legacy callbacks, summarised by the route's help synopsis.
    """
    if route.operations is not None:
        handlers = {op: handler.properties() for op, handler in route.operations.items()}
    else:
        handlers = {op: OperationProperties(summary=route.help_synopsis) for op in route.callbacks}
    return {op: handlers[op] for op in Operation if op in handlers}


def special_path_match(path: str, special_paths: list[str]) -> bool:
    """Test for an exact match, or a prefix match for entries ending in ``*``."""
    for sp in special_paths:
        if sp == path or (sp.endswith("*") and path.startswith(sp[:-1])):
            return True
    return False


def build_operation(
    op_type: Operation,
    props: OperationProperties,
    body_fields: dict[str, FieldSchema],
    backend_type: BackendType,
) -> OASOperation:
    """Build the operation object for one handler."""
    op = OASOperation(
        summary=props.summary,
        description=props.description,
        deprecated=props.deprecated,
        tags=list(BACKEND_TAGS.get(backend_type, [])),
    )

    if op_type in (Operation.CREATE, Operation.UPDATE):
        op.request_body = _request_body(props, body_fields)

    if not props.responses:
        if op_type == Operation.DELETE:
            op.responses["204"] = std_response_no_content()
        else:
            op.responses["200"] = std_response_ok()

    for code, responses in props.responses.items():
        op.responses[str(code)] = _response(str(code), responses)

    return op


def list_parameter() -> Parameter:
    return Parameter(
        name="list",
        description="Return a list if `true`",
        in_="query",
        schema_=Schema(type="string"),
    )


def _path_parameter(name: str, field: FieldSchema | None) -> Parameter:
    if field is None:
        # Placeholder with no declared field.
        return Parameter(name=name, in_="path", required=True)

    # Header parameters live with the path parameters but are optional.
    is_header = field.type == FieldType.HEADER
    return Parameter(
        name=name,
        description=clean_string(field.description),
        in_="header" if is_header else "path",
        schema_=Schema(type=convert_type(field.type).base_type),
        required=not is_header,
        deprecated=field.deprecated,
    )


def _request_body(props: OperationProperties, body_fields: dict[str, FieldSchema]) -> RequestBody | None:
    schema = Schema(type="object")

    for name, field in body_fields.items():
        converted = convert_type(field.type)
        prop = Schema(
            type=converted.base_type,
            description=clean_string(field.description),
            format=converted.format,
            deprecated=field.deprecated,
        )
        if converted.base_type == "array":
            prop.items = Schema(type=converted.items)
        schema.properties[name] = prop

    # The first example, if any, is the sample for this schema.
    if props.examples:
        schema.example = props.examples[0].data

    # Only JSON request data is supported.
    if not schema.properties and schema.example is None:
        return None
    return RequestBody(content={DEFAULT_MEDIA_TYPE: MediaTypeObject(schema_=schema)})


def _response(code: str, responses: list[ResponseExample]) -> ResponseObject:
    description = responses[0].description if responses else ""
    content: dict[str, MediaTypeObject] = {}

    for resp in responses:
        if resp.example is None:
            continue
        media_type = resp.media_type or DEFAULT_MEDIA_TYPE
        try:
            cleaned = clean_response(resp.example)
        except ExampleSanitizationError as e:
            raise ExampleSanitizationError(f"response {code}: {e}", status_code=code) from e
        # One example per media type; the first one wins.
        if media_type not in content:
            content[media_type] = MediaTypeObject(schema_=Schema(example=cleaned.to_dict()))

    return ResponseObject(description=description, content=content)

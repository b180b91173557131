"""Exceptions raised while building OpenAPI documents from backend routes."""


class RouteOpenAPIError(Exception):
    """Base class for all route_openapi errors."""


class ExampleSanitizationError(RouteOpenAPIError):
    """A response example could not be converted into its cleaned form.

    This aborts document generation for the whole backend; the partially
    populated document must not be used.
    """

    def __init__(self, message: str, status_code: str | None = None):
        super().__init__(message)
        self.status_code = status_code


class BackendDefinitionError(RouteOpenAPIError):
    """A backend definition file is unreadable or does not validate."""

"""Prepare example responses for inclusion in the document."""

from typing import Any

from pydantic import BaseModel, ValidationError

from route_openapi.errors import ExampleSanitizationError
from route_openapi.framework.base import Auth, Secret, WrapInfo
from route_openapi.openapi.models import OASModel


class CleanedResponse(OASModel):
    """A backend response that leaves out empty optional fields when dumped."""

    secret: Secret | None = None
    auth: Auth | None = None
    data: dict[str, Any] = {}
    redirect: str = ""
    warnings: list[str] = []
    wrap_info: WrapInfo | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def clean_response(example: Any) -> CleanedResponse:
    """Copy an example response (a Response or a mapping) into its cleaned form.

    Raises ExampleSanitizationError if the example doesn't have the shape of
    a response.
    """
    if isinstance(example, BaseModel):
        example = example.model_dump()
    try:
        return CleanedResponse.model_validate(example)
    except ValidationError as e:
        raise ExampleSanitizationError(f"invalid example response: {e}") from e

"""Settings for the generated document's ``info`` block.

Values can be overridden with ``ROUTE_OPENAPI_*`` environment variables,
e.g. ``ROUTE_OPENAPI_TITLE="My API"``.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

OAS_VERSION = "3.0.2"
PACKAGE_VERSION = "0.1.0"


class DocumentSettings(BaseSettings):
    """Metadata written into every generated document."""

    model_config = SettingsConfigDict(env_prefix="ROUTE_OPENAPI_", extra="ignore")

    title: str = Field(default="HashiCorp Vault API", description="Document title")
    description: str = Field(
        default="HTTP API that gives you full access to Vault. All API routes are prefixed with `/v1/`.",
        description="Document description",
    )
    version: str = Field(default=PACKAGE_VERSION, description="API version reported in info.version")
    license_name: str = Field(default="Mozilla Public License 2.0")
    license_url: str = Field(default="https://www.mozilla.org/en-US/MPL/2.0")


@lru_cache
def get_settings() -> DocumentSettings:
    """Return the process-wide settings, loaded once from the environment."""
    return DocumentSettings()

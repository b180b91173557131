"""Load backend definitions from YAML (or JSON) files.

Expected layout:

    backend_type: logical
    special_paths:
      root: ["config/*"]
      unauthenticated: ["login"]
    paths:
      - pattern: 'roles/(?P<name>\\w+)'
        help_synopsis: Manage roles
        fields:
          name: {type: string, description: Name of the role}
        operations:
          read: {summary: Read a role}
          update:
            summary: Create or update a role
            responses:
              204: [{description: empty body}]
"""

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from route_openapi.errors import BackendDefinitionError
from route_openapi.framework.base import Backend

logger = structlog.get_logger(__name__)


def load_backend(file_path: Path) -> Backend:
    """Read a backend definition file into a Backend."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise BackendDefinitionError(f"cannot read {file_path}: {e}") from e

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise BackendDefinitionError(f"{file_path} is not valid YAML: {e}") from e

    backend = parse_backend(doc, source=str(file_path))
    logger.info("backend_loaded", source=str(file_path), routes=len(backend.paths))
    return backend


def parse_backend(doc: object, source: str = "<memory>") -> Backend:
    """Validate an already-decoded definition mapping."""
    if not isinstance(doc, dict):
        raise BackendDefinitionError(f"{source}: top level must be a mapping")

    try:
        return Backend.model_validate(doc)
    except ValidationError as e:
        raise BackendDefinitionError(f"{source}: invalid backend definition: {e}") from e

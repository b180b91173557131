"""CLI entry point for route-openapi."""

from pathlib import Path

import click

from route_openapi.config import DocumentSettings, get_settings
from route_openapi.errors import RouteOpenAPIError
from route_openapi.framework.loader import load_backend
from route_openapi.log import configure_logging
from route_openapi.openapi.document import generate_document
from route_openapi.openapi.models import Document


def _render(doc: Document, fmt: str) -> str:
    """Serialize the document in the requested format."""
    if fmt == "yaml":
        return doc.to_yaml()
    return doc.to_json() + "\n"


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug details to stderr.")
@click.option("--log-json", is_flag=True, help="Emit logs as JSON lines.")
def main(verbose: bool, log_json: bool):
    """route-openapi: generate OpenAPI documents from backend route definitions."""
    configure_logging(verbose=verbose, use_json=log_json)


@main.command()
@click.argument("backend_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write the document here instead of stdout.")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), help="Output format.")
@click.option("--title", default=None, help="Override info.title.")
@click.option("--api-version", default=None, help="Override info.version.")
def generate(backend_path: Path, output: Path | None, fmt: str, title: str | None, api_version: str | None):
    """Generate an OpenAPI document from a backend definition file."""
    overrides = {k: v for k, v in {"title": title, "version": api_version}.items() if v is not None}
    settings: DocumentSettings = get_settings().model_copy(update=overrides)

    try:
        backend = load_backend(backend_path)
        doc = generate_document(backend, settings)
    except RouteOpenAPIError as e:
        raise click.ClickException(str(e)) from e

    rendered = _render(doc, fmt)
    if output is None:
        click.echo(rendered, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding="utf-8")
    click.echo(f"Wrote {len(doc.paths)} paths to {output}", err=True)


@main.command()
@click.argument("backend_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def paths(backend_path: Path):
    """List the concrete paths each route pattern expands to."""
    from route_openapi.openapi.expand import expand_pattern

    try:
        backend = load_backend(backend_path)
    except RouteOpenAPIError as e:
        raise click.ClickException(str(e)) from e

    for route in backend.paths:
        for path in expand_pattern(route.pattern):
            click.echo(f"/{path}\t{route.pattern}")

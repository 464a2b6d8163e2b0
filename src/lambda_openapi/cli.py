"""CLI entry point for lambda-openapi."""

import logging
from pathlib import Path

import click

from lambda_openapi.errors import LambdaOpenApiError
from lambda_openapi.formatter import render, write_document
from lambda_openapi.generator.config import GenerationConfig, load_config, validate_config
from lambda_openapi.generator.openapi import generate_openapi_spec
from lambda_openapi.scanner import discover_handlers


def _build_config(
    config_path: Path | None,
    inputs: tuple[Path, ...],
    output: Path | None,
    fmt: str | None,
    title: str | None,
    api_version: str | None,
    description: str | None,
    base_path: str | None,
) -> GenerationConfig:
    """Load the config file (if any) and apply command-line overrides."""
    config = load_config(config_path) if config_path else GenerationConfig()

    info_updates = {
        key: value
        for key, value in (("title", title), ("version", api_version), ("description", description))
        if value is not None
    }
    updates = {}
    if info_updates:
        updates["info"] = config.info.model_copy(update=info_updates)
    if inputs:
        updates["input_paths"] = [str(p) for p in inputs]
    if output is not None:
        updates["output_path"] = str(output)
    if fmt is not None:
        updates["format"] = fmt
    if base_path is not None:
        updates["base_path"] = base_path
    return config.model_copy(update=updates)


@click.group()
def main():
    """lambda-openapi — generate OpenAPI documents from decorated Lambda handlers."""
    pass


@main.command()
@click.option("-i", "--input", "inputs", multiple=True, type=click.Path(exists=True, path_type=Path), help="Handler file or directory (repeatable).")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None, help="Output file path. Prints to stdout when omitted.")
@click.option("-f", "--format", "fmt", default=None, type=click.Choice(["json", "yaml"]), help="Output format (default: json).")
@click.option("-t", "--title", default=None, help="API title.")
@click.option("-v", "--version", "api_version", default=None, help="API version.")
@click.option("-d", "--description", default=None, help="API description.")
@click.option("-b", "--base-path", default=None, help="Prefix added to every generated path.")
@click.option("-c", "--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML/JSON configuration file.")
@click.option("--dry-run", is_flag=True, help="Show what would be generated without writing output.")
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
def generate(
    inputs: tuple[Path, ...],
    output: Path | None,
    fmt: str | None,
    title: str | None,
    api_version: str | None,
    description: str | None,
    base_path: str | None,
    config_path: Path | None,
    dry_run: bool,
    verbose: bool,
):
    """Generate an OpenAPI document from decorated handler files."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = _build_config(config_path, inputs, output, fmt, title, api_version, description, base_path)
    except LambdaOpenApiError as e:
        raise click.ClickException(str(e)) from e

    result = validate_config(config)
    for issue in result.warnings:
        click.echo(f"Warning: {issue.message}", err=True)
    if not result.is_valid:
        messages = "\n".join(f"  - {issue.message}" for issue in result.errors)
        raise click.ClickException(f"Invalid configuration:\n{messages}")
    if not config.input_paths:
        raise click.UsageError("No input given. Use --input or set inputPaths in the config file.")

    click.echo(f"Scanning {', '.join(config.input_paths)}...", err=True)
    try:
        handlers = discover_handlers(
            [Path(p) for p in config.input_paths],
            exported_only=config.options.exported_only,
        )
    except LambdaOpenApiError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Found {len(handlers)} documented handlers.", err=True)

    spec = generate_openapi_spec(config, handlers)
    click.echo(f"Generated {len(spec['paths'])} paths.", err=True)

    if dry_run:
        for path, path_item in spec["paths"].items():
            for method in path_item:
                click.echo(f"  {method.upper()} {path}", err=True)
        click.echo("Dry run: nothing written.", err=True)
        return

    pretty = config.options.pretty_print
    if config.output_path:
        output_path = Path(config.output_path)
        write_document(spec, output_path, config.format, pretty=pretty)
        click.echo(f"OpenAPI document saved to {output_path}", err=True)
    else:
        click.echo(render(spec, config.format, pretty=pretty), nl=False)

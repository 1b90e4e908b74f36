"""CLI interface for the name generator catalog."""

import sys
from pathlib import Path
from typing import Any, Optional

import click
import yaml

from namegen.cli.formatters import OutputFormatter
from namegen.core.catalog import ToolCatalog
from namegen.core.config import Config
from namegen.core.errors import NameGenError
from namegen.core.favorites import SavedNameStore
from namegen.core.logging import configure_logging
from namegen.core.pipeline import GenerationPipeline
from namegen.core.provider_factory import SUPPORTED_PROVIDERS, create_client


def parse_param(values: tuple[str, ...]) -> dict[str, Any]:
    """
    Parse repeated KEY=VALUE options.

    Values stay strings; the field validator converts them to the field's
    type. A value written as "[a, b]" is read as a list of strings.
    """
    params: dict[str, Any] = {}
    for item in values:
        if "=" not in item:
            raise click.BadParameter(f"Expected KEY=VALUE, got '{item}'", param_hint="--param")
        key, raw = item.split("=", 1)
        key = key.strip()
        if not key:
            raise click.BadParameter(f"Empty key in '{item}'", param_hint="--param")
        params[key] = _parse_value(raw)
    return params


def _parse_value(raw: str) -> Any:
    if not raw.strip().startswith("["):
        return raw
    try:
        # BaseLoader keeps every scalar a string ("no" stays "no", "007" stays "007").
        value = yaml.load(raw, Loader=yaml.BaseLoader)
    except yaml.YAMLError:
        return raw
    return value if isinstance(value, list) else raw


def _load_catalog(config: Config) -> ToolCatalog:
    path = config.get_catalog_path()
    if path is None:
        click.echo(
            "Error: No tool catalog found. Pass --catalog or create ./tools.yaml",
            err=True,
        )
        sys.exit(1)
    try:
        return ToolCatalog.from_file(path)
    except NameGenError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="namegen")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file (YAML or JSON)",
)
@click.option(
    "--catalog",
    "catalog_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Tool catalog file (default: ./tools.yaml)",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging level (default: INFO)",
)
@click.option("--json-logs", is_flag=True, default=False, help="Emit logs as JSON")
@click.pass_context
def main(ctx, config_file, catalog_file, log_level, json_logs):
    """
    Name generator tools backed by AI models.

    Each tool declares its form fields and allowed models in the catalog file.
    Use 'namegen tools' to list them and 'namegen generate SLUG -P key=value'
    to run one.
    """
    config = Config.load(
        cli_args={
            "catalog_file": catalog_file,
            "log_level": log_level,
            "json_logs": json_logs or None,
        },
        config_file=Path(config_file) if config_file else None,
    )
    configure_logging(level=config.log_level, json_output=bool(config.json_logs))
    ctx.obj = config


@main.command()
@click.argument("slug")
@click.option(
    "--param",
    "-P",
    "params",
    multiple=True,
    help="Field value as KEY=VALUE (repeatable)",
)
@click.option("--model", "-m", default=None, help="Model identifier (must be allowed by the tool)")
@click.option(
    "--provider",
    "-p",
    type=click.Choice(SUPPORTED_PROVIDERS, case_sensitive=False),
    default=None,
    help="AI provider (default: openrouter)",
)
@click.option("--timeout", type=float, default=None, help="Provider timeout in seconds")
@click.option("--api-key", default=None, help="API key (or set OPENROUTER_API_KEY)")
@click.option("--save", is_flag=True, default=False, help="Save every generated name to favorites")
@click.option("--json", "json_output", is_flag=True, default=False, help="Print result as JSON")
@click.pass_obj
def generate(config, slug, params, model, provider, timeout, api_key, save, json_output):
    """Generate names with the tool SLUG."""
    for key, value in {"provider": provider, "timeout": timeout, "api_key": api_key}.items():
        if value is not None:
            setattr(config, key, value)

    overrides = parse_param(params)
    catalog = _load_catalog(config)

    try:
        client = create_client(config)
    except ValueError as e:
        click.echo(f"Error initializing provider: {e}", err=True)
        sys.exit(1)

    pipeline = GenerationPipeline.from_config(config, catalog, client)
    formatter = OutputFormatter(json_output=json_output)

    try:
        response = pipeline.generate(slug, overrides, model=model)
    except KeyboardInterrupt:
        click.echo("Generation cancelled.", err=True)
        sys.exit(130)

    formatter.print_response(response)
    if not response.success:
        sys.exit(1)

    if save:
        store = SavedNameStore(config.get_favorites_path())
        try:
            stored = store.save_many(response.names, slug)
        except NameGenError as e:
            click.echo(f"Error saving names: {e.message}", err=True)
            sys.exit(1)
        click.echo(f"Saved {len(stored)} new name(s) to favorites.", err=True)


@main.command()
@click.option("--json", "json_output", is_flag=True, default=False, help="Print as JSON")
@click.pass_obj
def tools(config, json_output):
    """List published name generator tools."""
    catalog = _load_catalog(config)
    OutputFormatter(json_output=json_output).print_tools(catalog.list_published_tools())


@main.command()
@click.option("--all", "show_all", is_flag=True, default=False, help="Include inactive models")
@click.option("--json", "json_output", is_flag=True, default=False, help="Print as JSON")
@click.pass_obj
def models(config, show_all, json_output):
    """List AI models."""
    catalog = _load_catalog(config)
    entries = catalog.list_models()
    if not show_all:
        entries = [m for m in entries if m.is_active]
    OutputFormatter(json_output=json_output).print_models(entries)


@main.group()
def favorites():
    """Manage saved names."""


@favorites.command("list")
@click.option("--tool", "tool_slug", default=None, help="Only names from this tool")
@click.option("--json", "json_output", is_flag=True, default=False, help="Print as JSON")
@click.pass_obj
def favorites_list(config, tool_slug: Optional[str], json_output):
    """List saved names, newest first."""
    store = SavedNameStore(config.get_favorites_path())
    try:
        entries = store.list_saved(tool_slug)
    except NameGenError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)
    OutputFormatter(json_output=json_output).print_saved_names(entries)


@favorites.command("add")
@click.argument("name")
@click.argument("tool_slug")
@click.pass_obj
def favorites_add(config, name, tool_slug):
    """Save NAME as a favorite from TOOL_SLUG."""
    store = SavedNameStore(config.get_favorites_path())
    try:
        saved = store.save(name, tool_slug)
    except NameGenError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)
    click.echo(f"Saved '{saved.name_text}'.")


@favorites.command("remove")
@click.argument("name")
@click.argument("tool_slug")
@click.pass_obj
def favorites_remove(config, name, tool_slug):
    """Remove NAME (from TOOL_SLUG) from favorites."""
    store = SavedNameStore(config.get_favorites_path())
    try:
        removed = store.remove(name, tool_slug)
    except NameGenError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)
    if not removed:
        click.echo(f"'{name}' is not in your favorites.", err=True)
        sys.exit(1)
    click.echo(f"Removed '{name}'.")


if __name__ == "__main__":
    main()

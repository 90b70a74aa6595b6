"""Main CLI entry point."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

import click
import yaml
from dotenv import load_dotenv

from .. import __version__
from ..config import ConfigManager
from ..core.interfaces import ILLMService
from ..core.models import MediaType
from ..infrastructure import Container, setup_logging
from ..utils import ConfigurationError


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(version=__version__, prog_name="media-matcher")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: bool) -> None:
    """LLM Media Matcher - identify foreign titles and match EPG channels."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config

    # Skip configuration loading for commands that don't need it
    if ctx.invoked_subcommand in ("init", "validate"):
        return

    load_dotenv()

    try:
        config_manager = ConfigManager(config)
        app_config = config_manager.load_config()

        if verbose:
            app_config.logging.level = "DEBUG"
        setup_logging(app_config.logging)

        container = Container(config_manager)
        container.configure_default_services()

        ctx.obj["config"] = app_config
        ctx.obj["container"] = container

    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Initialization error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=Path.cwd() / "config" / "config.yaml",
    help="Output path for configuration file",
)
def init(output: Path) -> None:
    """Initialize configuration file."""
    try:
        if output.exists():
            if not click.confirm(f"Configuration file {output} already exists. Overwrite?"):
                return

        output.parent.mkdir(parents=True, exist_ok=True)

        ConfigManager.create_default_config(output)
        click.echo(f"Configuration file created at: {output}")
        click.echo("Please edit the configuration file to select an LLM provider.")

    except Exception as e:
        click.echo(f"Failed to create configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file."""
    if not ConfigManager(config_file).validate_config_file(config_file):
        click.echo(f"Validation failed: {config_file} is not a valid configuration", err=True)
        sys.exit(1)
    click.echo(f"Configuration {config_file} is valid")


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show provider status and configuration."""
    config = ctx.obj["config"]
    service = _service(ctx)

    click.echo("LLM Media Matcher Status")
    click.echo("=" * 40)
    click.echo(f"LLM Provider: {service.get_provider()}")
    click.echo(f"LLM Configured: {'✓' if service.is_configured() else '✗'}")
    if config.llm.provider == "openai":
        click.echo(f"LLM Model: {config.llm.openai.model}")
    elif config.llm.provider == "ollama":
        click.echo(f"LLM Model: {config.llm.ollama.model}")
        click.echo(f"Ollama URL: {config.llm.ollama.url}")
    click.echo(f"Identification Batch Size: {config.matching.identification_batch_size}")
    click.echo(f"Channel Batch Size: {config.matching.channel_batch_size}")


@cli.command()
@click.argument("title")
@click.option("--lang", "-l", help="Source language code (e.g. de)")
@click.pass_context
def translate(ctx: click.Context, title: str, lang: Optional[str]) -> None:
    """Translate a title to its official English title."""
    service = _service(ctx)
    _require_configured(service)

    translated = asyncio.run(service.translate_title(title, lang))
    if translated is None:
        click.echo("No translation available", err=True)
        sys.exit(1)
    click.echo(translated)


@cli.command()
@click.argument("title")
@click.option("--year", "-y", type=int, help="Year hint")
@click.option(
    "--type",
    "media_type",
    type=click.Choice([t.value for t in MediaType]),
    default=MediaType.SERIES.value,
    show_default=True,
    help="Media type",
)
@click.option("--lang", "-l", help="Source language code (e.g. de)")
@click.pass_context
def identify(
    ctx: click.Context, title: str, year: Optional[int], media_type: str, lang: Optional[str]
) -> None:
    """Identify a single movie or series title."""
    service = _service(ctx)
    _require_configured(service)

    result = asyncio.run(service.identify_media(title, year, MediaType(media_type), lang))
    if result is None:
        click.echo("No confident identification", err=True)
        sys.exit(1)
    _echo_json(result.model_dump(mode="json"))


@cli.command("identify-batch")
@click.argument("items_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--lang", "-l", help="Common source language code (e.g. de)")
@click.pass_context
def identify_batch(ctx: click.Context, items_file: Path, lang: Optional[str]) -> None:
    """Identify titles listed in a YAML or JSON file.

    The file holds a list of objects with ``title`` and optional ``year``
    and ``media_type`` keys.
    """
    service = _service(ctx)
    _require_configured(service)

    with open(items_file, "r", encoding="utf-8") as f:
        items = yaml.safe_load(f)
    if not isinstance(items, list):
        click.echo(f"{items_file} must contain a list of items", err=True)
        sys.exit(1)

    results = asyncio.run(service.identify_media_batch(items, lang))
    _echo_json([r.model_dump(mode="json") for r in results])


@cli.command("match-channels")
@click.argument("epg_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def match_channels(ctx: click.Context, epg_file: Path, source_file: Path) -> None:
    """Match EPG channel ids to source channel names (one per line in each file)."""
    service = _service(ctx)
    _require_configured(service)

    matches = asyncio.run(
        service.match_channels(_read_lines(epg_file), _read_lines(source_file))
    )
    _echo_json([m.model_dump(mode="json") for m in matches])


@cli.command("test-connection")
@click.pass_context
def test_connection(ctx: click.Context) -> None:
    """Check that the configured provider answers."""
    service = _service(ctx)

    result = asyncio.run(service.test_connection())
    _echo_json(result.model_dump(mode="json"))
    if not result.success:
        sys.exit(1)


@cli.command()
@click.pass_context
def models(ctx: click.Context) -> None:
    """List models available on the Ollama server."""
    service = _service(ctx)

    names = asyncio.run(service.get_ollama_models())
    if not names:
        click.echo("No models found", err=True)
        sys.exit(1)
    for name in names:
        click.echo(name)


def _service(ctx: click.Context) -> ILLMService:
    container: Container = ctx.obj["container"]
    return container.get(ILLMService)  # type: ignore


def _require_configured(service: ILLMService) -> None:
    if not service.is_configured():
        click.echo(
            f"LLM provider '{service.get_provider()}' is not configured. "
            "Set llm.provider and its credentials in the configuration file.",
            err=True,
        )
        sys.exit(1)


def _read_lines(path: Path) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

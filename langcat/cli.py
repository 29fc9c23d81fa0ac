"""CLI entry point for langcat."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Awaitable, Callable, Optional

import click
import yaml

from langcat import __version__
from langcat.app import create_machine, create_transport, mount
from langcat.config.settings import ClientConfig, load_config
from langcat.forms import setter_for, validate_lang
from langcat.forms.edits import DraftEdit
from langcat.models import Lang
from langcat.page import (
    EditLang,
    Error,
    LoadEditLang,
    LoadLang,
    LoadNewLang,
    LoadTag,
    PageMachine,
    PageState,
    SaveLang,
    UpdateForm,
    ViewLang,
)
from langcat.utils.logging import configure_logging, get_logger
from langcat.utils.result import ExitCode
from langcat.view import render_text, state_to_dict

# Default paths
DEFAULT_CONFIG = "./langcat.yaml"


class Context:
    """CLI context for sharing state between commands."""

    def __init__(self, config: ClientConfig, output_format: str) -> None:
        self.config = config
        self.output_format = output_format
        self.logger = get_logger("cli")


pass_context = click.make_pass_decorator(Context)


def output_json(data: dict) -> None:
    """Output JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str))


def parse_edits(
    click_ctx: click.Context,
    param: click.Parameter,
    values: tuple[str, ...],
) -> list[DraftEdit]:
    """Turn repeated --set field=value options into draft edits."""
    edits = []
    for item in values:
        field_name, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected field=value, got {item!r}")
        try:
            edits.append(setter_for(field_name.strip(), value))
        except KeyError as e:
            raise click.BadParameter(str(e.args[0])) from None
    return edits


set_option = click.option(
    "--set",
    "edits",
    multiple=True,
    callback=parse_edits,
    metavar="FIELD=VALUE",
    help="Form field to fill in (key, name, description, homepage, tags); can be repeated",
)


def run_session(
    ctx: Context,
    steps: Callable[[PageMachine], Awaitable[None]],
) -> PageState:
    """
    Run view steps against a fresh page machine and return the final page.

    The transport is closed when the steps finish.
    """

    async def session() -> PageState:
        transport = create_transport(ctx.config)
        try:
            machine = create_machine(ctx.config, transport)
            await steps(machine)
            ctx.logger.debug("session_completed", **machine.stats.to_dict())
            return machine.state
        finally:
            await transport.aclose()

    return asyncio.run(session())


def show_page(ctx: Context, state: PageState) -> None:
    """Render the final page and exit with a code matching its outcome."""
    if ctx.output_format == "json":
        output_json(state_to_dict(state))
    else:
        click.echo(render_text(state))

    if isinstance(state, Error):
        sys.exit(ExitCode.PAGE_ERROR)
    if isinstance(state, EditLang) and state.errors:
        sys.exit(ExitCode.VALIDATION_FAILED)


async def fill_and_save(machine: PageMachine, edits: list[DraftEdit]) -> None:
    """Apply form edits to the open draft, then save it."""
    for edit in edits:
        await machine.dispatch(UpdateForm(edit))
    await machine.dispatch(SaveLang())


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=DEFAULT_CONFIG,
    help="Path to config file",
)
@click.option(
    "--api-url",
    default=None,
    help="Catalog API root (overrides config)",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "error"], case_sensitive=False),
    default=None,
    help="Logging level (overrides config)",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    default=None,
    help="Log format (overrides config)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format",
)
@click.version_option(version=__version__)
@click.pass_context
def cli(
    click_ctx: click.Context,
    config_path: Path,
    api_url: Optional[str],
    log_level: Optional[str],
    log_format: Optional[str],
    output_format: str,
) -> None:
    """
    langcat - browse and edit a catalog of programming languages.

    Each command drives the catalog page the way a user would and prints
    the page it ends on.
    """
    result = load_config(config_path)
    if result.is_err():
        output_json({
            "status": "error",
            "message": str(result.unwrap_err()),
        })
        sys.exit(ExitCode.CONFIG_ERROR)

    config = result.unwrap()
    if api_url:
        config = config.with_api_url(api_url)
        validation = config.validate()
        if validation.is_err():
            output_json({
                "status": "error",
                "message": str(validation.unwrap_err()),
            })
            sys.exit(ExitCode.CONFIG_ERROR)

    configure_logging(
        level=log_level or config.logging.level,
        format_type=log_format or config.logging.format,
    )

    click_ctx.obj = Context(config=config, output_format=output_format)


@cli.command(name="list")
@pass_context
def list_command(ctx: Context) -> None:
    """Show all languages and tags."""
    state = run_session(ctx, mount)
    show_page(ctx, state)


@cli.command()
@click.argument("key")
@pass_context
def show(ctx: Context, key: str) -> None:
    """Show one language."""

    async def steps(machine: PageMachine) -> None:
        await machine.dispatch(LoadLang(key))

    show_page(ctx, run_session(ctx, steps))


@cli.command()
@click.argument("tag")
@pass_context
def tag(ctx: Context, tag: str) -> None:
    """Show the languages carrying a tag."""

    async def steps(machine: PageMachine) -> None:
        await machine.dispatch(LoadTag(tag))

    show_page(ctx, run_session(ctx, steps))


@cli.command()
@set_option
@pass_context
def new(ctx: Context, edits: list[DraftEdit]) -> None:
    """Create a language from form fields."""
    ctx.logger.info("new_started", fields=len(edits))

    async def steps(machine: PageMachine) -> None:
        await machine.dispatch(LoadNewLang())
        await fill_and_save(machine, edits)

    show_page(ctx, run_session(ctx, steps))


@cli.command()
@click.argument("key")
@set_option
@pass_context
def edit(ctx: Context, key: str, edits: list[DraftEdit]) -> None:
    """Edit an existing language. Its key cannot be changed."""
    ctx.logger.info("edit_started", key=key, fields=len(edits))

    async def steps(machine: PageMachine) -> None:
        state = await machine.dispatch(LoadLang(key))
        if not isinstance(state, ViewLang):
            return
        await machine.dispatch(LoadEditLang(state.lang))
        await fill_and_save(machine, edits)

    show_page(ctx, run_session(ctx, steps))


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@pass_context
def check(ctx: Context, path: Path) -> None:
    """Validate a language file (YAML or JSON) without contacting the API."""
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        output_json({"status": "error", "message": f"Failed to parse {path}: {e}"})
        sys.exit(ExitCode.GENERAL_ERROR)

    if not isinstance(data, dict):
        output_json({"status": "error", "message": f"{path} must contain a mapping"})
        sys.exit(ExitCode.GENERAL_ERROR)

    try:
        lang = Lang.from_dict({
            "key": str(data.get("key") or ""),
            "name": str(data.get("name") or ""),
            "description": str(data.get("description") or ""),
            "homepage": str(data.get("homepage") or ""),
            "rating": data.get("rating") or 0,
            "tags": data.get("tags") or [],
        })
    except TypeError as e:
        output_json({"status": "error", "message": f"{path}: {e}"})
        sys.exit(ExitCode.GENERAL_ERROR)

    result = validate_lang(lang)
    if result.is_ok():
        output_json({"status": "valid", "lang": lang.to_dict()})
        return

    output_json({"status": "invalid", "errors": result.unwrap_err()})
    sys.exit(ExitCode.VALIDATION_FAILED)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        logger = get_logger("cli")
        logger.error("cli_error", error=str(e))
        sys.exit(2)


if __name__ == "__main__":
    main()

import getpass
import logging
import os
import sys
from importlib import metadata
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import click
from appdirs import user_log_dir
from rich.console import Console
from rich.logging import RichHandler

from sitelift.cli.commands import run_outputs, run_post_deploy, run_pre_remove, run_upload
from sitelift.exceptions import (
    ConfigurationError,
    MissingStateError,
    OperationError,
    SiteliftProjectError,
)
from sitelift.project import get_user_env, save_user_env

console = Console()

app_logger = logging.getLogger("sitelift")
# Set the logger to capture ALL messages from 'sitelift' internally
app_logger.setLevel(logging.DEBUG)

app_name = "sitelift"
log_dir = Path(user_log_dir(app_name))
log_dir.mkdir(parents=True, exist_ok=True)
log_file_path = log_dir / f"{app_name}.log"
file_handler = TimedRotatingFileHandler(
    filename=str(log_file_path), when="D", interval=1, backupCount=7, encoding="utf-8"
)
file_handler.setLevel(logging.DEBUG)
file_formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
file_handler.setFormatter(file_formatter)
app_logger.addHandler(file_handler)

logger = logging.getLogger(__name__)

# boto3 is very chatty at DEBUG level
logging.getLogger("botocore").setLevel(logging.WARNING)
logging.getLogger("boto3").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)

SITELIFT_ERRORS = (SiteliftProjectError, ConfigurationError, MissingStateError, OperationError)


def _handle_error(error: Exception) -> None:
    logger.exception("Command failed")
    console.print(f"\n[bold red]✕ {error}[/bold red]", highlight=False)
    if os.getenv("SITELIFT_DEBUG", "0") == "1":
        raise error
    raise SystemExit(1) from None


@click.group(invoke_without_command=True)
@click.option(
    "--verbose", "-v", count=True, help="Increase verbosity. -v for INFO, -vv for DEBUG logs."
)
@click.option("--version", is_flag=True, help="Show sitelift version.")
@click.pass_context
def cli(ctx: click.Context, verbose: int, version: bool) -> None:
    if version:
        _version()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit(0)

    if verbose > 0:
        console_handler = RichHandler(
            console=console,
            show_time=False,
            show_level=True,
            markup=True,
            tracebacks_suppress=[click],
            rich_tracebacks=True,
        )
        if verbose == 1:
            console_handler.setLevel(logging.INFO)
            console.print("[italic blue]Console verbosity: INFO[/]")
        elif verbose >= 2:  # noqa: PLR2004
            console_handler.setLevel(logging.DEBUG)
            console.print("[italic green]Console verbosity: DEBUG[/]")

        console.print(f"[italic dim]Logs saved to: {log_file_path}[/]")
        app_logger.addHandler(console_handler)


@click.command()
@click.argument("env", default=None, required=False)
@click.option("--website", "-w", default=None, help="Only upload the website with this name")
def upload(env: str | None, website: str | None) -> None:
    """Uploads website files directly to S3 without provisioning infrastructure."""
    try:
        env = determine_env(env)
        run_upload(env, website)
    except SITELIFT_ERRORS as e:
        _handle_error(e)


@click.command()
@click.argument("env", default=None, required=False)
@click.option("--json", is_flag=True, help="Output in JSON format")
def outputs(env: str | None, json: bool) -> None:
    """Shows the URL and CloudFront CNAME of each website."""
    try:
        env = determine_env(env)
        run_outputs(env, json_output=json)
    except SITELIFT_ERRORS as e:
        _handle_error(e)


@click.command("post-deploy", hidden=True)
@click.argument("env", default=None, required=False)
def post_deploy(env: str | None) -> None:
    """Uploads every website once provisioning succeeded."""
    try:
        env = determine_env(env)
        run_post_deploy(env)
    except SITELIFT_ERRORS as e:
        _handle_error(e)


@click.command("pre-remove", hidden=True)
@click.argument("env", default=None, required=False)
def pre_remove(env: str | None) -> None:
    """Empties every website bucket before the infrastructure is destroyed."""
    try:
        env = determine_env(env)
        run_pre_remove(env)
    except SITELIFT_ERRORS as e:
        _handle_error(e)


cli.add_command(upload)
cli.add_command(outputs)
cli.add_command(post_deploy)
cli.add_command(pre_remove)


def determine_env(environment: str | None) -> str:
    if environment:
        return environment

    try:
        user_env = get_user_env()
    except ValueError as e:
        raise SiteliftProjectError(str(e)) from e
    if not user_env:
        user_env = getpass.getuser()
        save_user_env(user_env)
    return user_env


def _version() -> None:
    sitelift_version = metadata.version("sitelift")
    console.print(f"sitelift version: {sitelift_version}", highlight=False)
    sys.exit(0)

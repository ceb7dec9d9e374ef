"""Command-line entry point for inspecting models and request shapes."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from gosling import __version__
from gosling.core.config import (
    ModelProvider,
    get_api_key,
    get_settings,
    resolve_llm_model,
    set_api_key,
    set_llm_model,
)
from gosling.core.dispatch import ModelDispatcher, get_dispatcher
from gosling.core.errors import GoslingError
from gosling.core.models import default_registry
from gosling.utils.log import enable_file_logging, get_logger

console = Console()
logger = get_logger()


def _mask(value: Optional[str]) -> str:
    if not value:
        return "Not set"
    if len(value) <= 8:
        return "***"
    return f"{value[:3]}***{value[-4:]}"


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write debug logs to this file",
)
def cli(log_file: Optional[Path]) -> None:
    """Gosling - model registry and request dispatch"""
    if log_file:
        enable_file_logging(log_file)
    logger.debug("[cli] Starting CLI invocation", extra={"log_file": str(log_file or "")})


@cli.command(name="request")
@click.argument("model")
@click.option("--api-key", type=str, help="Credential to use instead of the configured one")
def request_cmd(model: str, api_key: Optional[str]) -> None:
    """Show the endpoint and headers used to call MODEL"""
    dispatcher = get_dispatcher()
    resolved = dispatcher.resolve(model)
    if api_key is None:
        api_key = get_api_key(resolved.provider)
    if not api_key:
        console.print(
            f"[yellow]No API key configured for {resolved.provider.value}; "
            "building the request with an empty key.[/yellow]"
        )
        api_key = ""

    shape = dispatcher.build_request(resolved.identifier, api_key)

    console.print(f"\n[bold]{escape(resolved.display_name)}[/bold] ({escape(resolved.identifier)})")
    console.print(f"Provider: {resolved.provider.value}")
    console.print(f"URL: {escape(shape.redacted_url())}")
    headers = shape.redacted_headers()
    if headers:
        console.print("Headers:")
        for name, value in headers.items():
            console.print(f"  {escape(name)}: {escape(value)}")
    else:
        console.print("Headers: [dim]none[/dim]")


@cli.command(name="check")
def check_cmd() -> None:
    """Verify every registered provider has a request handler"""
    registry = default_registry()
    ModelDispatcher(registry)
    console.print(
        f"[green]OK[/green]: {len(registry.get_providers())} providers, {len(registry)} models"
    )


@cli.command(name="use")
@click.argument("model")
def use_cmd(model: str) -> None:
    """Make MODEL the configured model"""
    set_llm_model(model)
    console.print(f"Configured model: {escape(model)}")


@cli.command(name="set-key")
@click.argument("provider", type=click.Choice([p.value for p in ModelProvider]))
@click.option("--api-key", prompt=True, hide_input=True, help="API key (empty to clear)")
def set_key_cmd(provider: str, api_key: str) -> None:
    """Store the API key for PROVIDER"""
    set_api_key(ModelProvider(provider), api_key.strip())
    state = "stored" if api_key.strip() else "cleared"
    console.print(f"API key for {provider} {state}")


@cli.command(name="config")
def config_cmd() -> None:
    """Show current configuration"""
    settings = get_settings()
    model = resolve_llm_model()

    console.print("\n[bold]Configuration[/bold]\n")
    console.print(f"Version: {__version__}")
    console.print(f"Stored model: {escape(settings.llm_model or 'Not set')}")
    console.print(f"Active model: {escape(model.display_name)} ({escape(model.identifier)})\n")
    console.print("[bold]API keys:[/bold]")
    for provider in ModelProvider:
        console.print(f"  {provider.value}: {_mask(get_api_key(provider))}")
    console.print()


@cli.command(name="version")
def version_cmd() -> None:
    """Show version information"""
    console.print(f"Gosling version {__version__}")


def main() -> None:
    """Main entry point."""
    try:
        cli(standalone_mode=False)
    except click.exceptions.Abort:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except GoslingError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        logger.warning(
            "[cli] Command failed: %s: %s",
            type(e).__name__,
            e,
            extra={"error_code": e.error_code},
        )
        sys.exit(1)


if __name__ == "__main__":
    main()

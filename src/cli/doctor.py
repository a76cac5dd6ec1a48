"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars
from core.domain.language import Language
from core.services.bootstrap import open_history

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(settings.answer_api_url)
        if response.is_success:
            return True, f"HTTP {response.status_code}"
        return False, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


def _check_history(settings: AppSettings) -> tuple[bool, str]:
    path = settings.resolved_history_path()
    try:
        store = open_history(settings)
    except OSError as exc:
        return False, str(exc)
    return True, f"{len(store)} entries in {path}"


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the answer API connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="bola-magica Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Answer API", "OK", settings.answer_api_url)
    timeout = settings.http_timeout_seconds
    table.add_row("HTTP timeout", "OK", f"{timeout}s" if timeout else "none (waits forever)")
    table.add_row("Language", "OK", settings.default_language.label())

    # Connectivity (best-effort)
    ok_http = True
    if offline:
        table.add_row("HTTP connectivity", "SKIPPED", "--offline")
    else:
        ok_http, detail_http = asyncio.run(_check_http(settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    ok_history, detail_history = _check_history(settings)
    table.add_row("History store", "OK" if ok_history else "FAIL", detail_history)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] When the answer API is unreachable every question is "
            "answered with 'Error' (and still recorded in the history)."
        )


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    defaults = AppSettings()

    api_url = typer.prompt("Answer API URL", default=defaults.answer_api_url, show_default=True).strip()
    history_path = typer.prompt(
        "History file",
        default=str(defaults.resolved_history_path()),
        show_default=True,
    ).strip()
    language = typer.prompt(
        "Language (es/en)",
        default=defaults.default_language.value,
        show_default=True,
    ).strip().lower()

    if not api_url:
        raise typer.BadParameter("answer API URL is required")
    try:
        Language(language)
    except ValueError as exc:
        raise typer.BadParameter("language must be 'es' or 'en'") from exc

    env_path = write_user_env_vars(
        {
            "BOLA_MAGICA_ANSWER_API_URL": api_url,
            "BOLA_MAGICA_HISTORY_PATH": history_path,
            "BOLA_MAGICA_DEFAULT_LANGUAGE": language,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")

"""CLI principal (Typer).

Comandos:
- `ask`: valida y consulta la bola mágica una vez.
- `history`: muestra el historial (filtrable por respuesta).
- `play`: bucle interactivo tipo formulario.
- `export`: vuelca el historial a HTML o JSON.
- `doctor`: diagnósticos y configuración.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.status import Status

from adapters.html_exporter import export_history_html
from adapters.json_exporter import export_history_json
from adapters.yesno_api import YesNoApiSource
from cli import doctor
from cli.ui_components import (
    build_answer_panel,
    build_history_table,
    print_banner,
    text_for,
)
from core.config import AppSettings
from core.domain.errors import QuestionValidationError, SubmissionInProgressError
from core.domain.language import Language
from core.domain.models import HistoryFilter
from core.interfaces.answer_source import AnswerSource
from core.logging_setup import setup_logging
from core.services.ask_session import AskSession, SessionHooks, project_answer
from core.services.bootstrap import build_session, open_history
from core.services.question_validator import INPUT_HINT, validation_message

app = typer.Typer(
    no_args_is_help=True,
    help="Haz una pregunta de sí/no a la bola mágica.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()

EXIT_INVALID_QUESTION = 2

_EXIT_WORDS = {":salir", ":exit", ":quit", ":q"}
_HISTORY_WORDS = {":historial", ":history", ":h"}
_FILTER_WORDS = {":filtro", ":filter", ":f"}


class ExportFormat(str, Enum):
    HTML = "html"
    JSON = "json"


@dataclass
class CliState:
    settings: AppSettings
    language: Language


def _make_source(settings: AppSettings) -> AnswerSource:
    return YesNoApiSource(settings)


def _state(ctx: typer.Context) -> CliState:
    if not isinstance(ctx.obj, CliState):
        settings = AppSettings()
        ctx.obj = CliState(settings=settings, language=settings.default_language)
    return ctx.obj


def _new_session(state: CliState) -> tuple[AskSession, Status]:
    spinner = _console.status(text_for("loading", state.language))
    hooks = SessionHooks(
        submitting=lambda _question: spinner.start(),
        settled=lambda _answer: spinner.stop(),
    )
    session = build_session(
        state.settings,
        language=state.language,
        source=_make_source(state.settings),
        hooks=hooks,
    )
    return session, spinner


def _submit(session: AskSession, spinner: Status, question: str) -> bool:
    """Envía una pregunta y pinta el resultado. Devuelve False si no es válida."""

    try:
        answer = asyncio.run(session.submit(question))
    except QuestionValidationError as exc:
        _console.print(f"[red]{validation_message(exc.reason, session.language)}[/red]")
        _console.print(f"[dim]{INPUT_HINT[session.language]}[/dim]")
        return False
    finally:
        spinner.stop()

    _console.print(build_answer_panel(project_answer(answer), session.language))
    if not session.state.history_saved:
        _console.print(f"[yellow]{text_for('not_saved', session.language)}[/yellow]")
    session.acknowledge()
    return True


@app.callback()
def main_callback(
    ctx: typer.Context,
    lang: Language | None = typer.Option(
        None,
        "--lang",
        help="Idioma de los mensajes (es/en).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Logs en nivel DEBUG."),
) -> None:
    settings = AppSettings()
    setup_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = CliState(settings=settings, language=lang or settings.default_language)


@app.command()
def ask(
    ctx: typer.Context,
    question: str = typer.Argument(..., help="Pregunta terminada en ? (o entre ¿ ?)."),
    as_json: bool = typer.Option(False, "--json", help="Imprime la respuesta como JSON."),
) -> None:
    """Consulta la bola mágica con una pregunta."""

    state = _state(ctx)

    if as_json:
        session = build_session(
            state.settings,
            language=state.language,
            source=_make_source(state.settings),
        )
        try:
            answer = asyncio.run(session.submit(question))
        except QuestionValidationError as exc:
            typer.echo(json.dumps({"error": exc.reason.value}), err=True)
            raise typer.Exit(code=EXIT_INVALID_QUESTION) from exc
        typer.echo(json.dumps(answer.model_dump(mode="json", exclude_none=True), ensure_ascii=False))
        return

    session, spinner = _new_session(state)
    if not _submit(session, spinner, question):
        raise typer.Exit(code=EXIT_INVALID_QUESTION)


@app.command()
def history(
    ctx: typer.Context,
    filter_: HistoryFilter = typer.Option(
        HistoryFilter.ALL,
        "--filter",
        "-f",
        case_sensitive=False,
        help="Filtra por respuesta: all, yes, no, maybe.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Imprime el historial como JSON."),
) -> None:
    """Muestra el historial de preguntas (más reciente primero)."""

    state = _state(ctx)
    store = open_history(state.settings)
    view = store.filtered(filter_)

    if as_json:
        payload = [entry.model_dump(mode="json") for entry in view]
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    if not view:
        _console.print(f"[dim]{text_for('empty', state.language)}[/dim]")
        return
    _console.print(build_history_table(view, history_filter=filter_, language=state.language))


@app.command()
def play(ctx: typer.Context) -> None:
    """Modo interactivo: pregunta, mira el historial y cambia el filtro.

    Comandos especiales: `:historial`, `:filtro <all|yes|no|maybe>`, `:salir`.
    """

    state = _state(ctx)
    session, spinner = _new_session(state)
    print_banner(_console, state.language)

    while True:
        try:
            raw = typer.prompt("🔮", default="", show_default=False)
        except typer.Abort:
            break

        command, _, arg = raw.strip().partition(" ")
        lowered = command.lower()

        if lowered in _EXIT_WORDS:
            break

        if lowered in _HISTORY_WORDS:
            if session.toggle_history():
                _print_session_history(session)
            continue

        if lowered in _FILTER_WORDS:
            try:
                session.set_filter(arg.strip().lower() or HistoryFilter.ALL)
            except ValueError:
                _console.print(f"[yellow]{arg!r}: all | yes | no | maybe[/yellow]")
                continue
            _print_session_history(session)
            continue

        try:
            _submit(session, spinner, raw)
        except SubmissionInProgressError as exc:
            _console.print(f"[yellow]{exc}[/yellow]")
            continue

        if session.state.history_visible:
            _print_session_history(session)


def _print_session_history(session: AskSession) -> None:
    view = session.visible_history()
    if not view:
        _console.print(f"[dim]{text_for('empty', session.language)}[/dim]")
        return
    _console.print(
        build_history_table(view, history_filter=session.state.filter, language=session.language)
    )


@app.command()
def export(
    ctx: typer.Context,
    output: Path = typer.Argument(..., help="Archivo de salida."),
    fmt: ExportFormat = typer.Option(
        ExportFormat.HTML,
        "--format",
        case_sensitive=False,
        help="Formato: html o json.",
    ),
    filter_: HistoryFilter = typer.Option(
        HistoryFilter.ALL,
        "--filter",
        "-f",
        case_sensitive=False,
        help="Filtra por respuesta: all, yes, no, maybe.",
    ),
) -> None:
    """Exporta el historial a HTML (con colores) o JSON."""

    state = _state(ctx)
    store = open_history(state.settings)
    view = store.filtered(filter_)

    if fmt is ExportFormat.JSON:
        path = export_history_json(entries=view, output_path=output)
    else:
        path = export_history_html(
            entries=view,
            output_path=output,
            history_filter=filter_,
            language=state.language,
        )
    _console.print(f"[green]OK[/green] {path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()

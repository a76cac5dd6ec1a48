"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `ask`, `history` y `play`.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from core.domain.language import Language
from core.domain.models import AnswerView, HistoryEntry, HistoryFilter
from core.services.ask_session import answer_color

_TEXTS: dict[Language, dict[str, str]] = {
    Language.SPANISH: {
        "title": "🔮 ¡Haz tu pregunta!",
        "subtitle": "Escribe tu pregunta aquí",
        "history": "Historial",
        "question": "Pregunta",
        "answer": "Respuesta",
        "empty": "Todavía no hay preguntas.",
        "loading": "Consultando la bola mágica...",
        "image": "Imagen",
        "not_saved": "No se pudo guardar la pregunta en el historial.",
    },
    Language.ENGLISH: {
        "title": "🔮 Ask your question!",
        "subtitle": "Type your question here",
        "history": "History",
        "question": "Question",
        "answer": "Answer",
        "empty": "No questions yet.",
        "loading": "Asking the magic ball...",
        "image": "Image",
        "not_saved": "The question could not be saved to the history.",
    },
}


def text_for(key: str, language: Language) -> str:
    return _TEXTS[language][key]


def print_banner(console: Console, language: Language = Language.SPANISH) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text(text_for("title", language), style="bold magenta")
    subtitle = Text(text_for("subtitle", language), style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="magenta", padding=(1, 4)))


def build_answer_panel(view: AnswerView, language: Language = Language.SPANISH) -> Panel:
    """Panel con la respuesta coloreada, la URL de la imagen y el mensaje."""

    body = Text(justify="center")
    body.append(view.label + "\n", style=f"bold {view.color}")
    if view.image:
        body.append(f"\n{text_for('image', language)}: ", style="dim")
        body.append(view.image, style=Style(link=view.image))
    if view.message:
        body.append(f"\n{view.message}", style="red")
    return Panel(body, border_style=view.color, padding=(1, 4))


def build_history_table(
    entries: Iterable[HistoryEntry],
    *,
    history_filter: HistoryFilter = HistoryFilter.ALL,
    language: Language = Language.SPANISH,
) -> Table:
    title = text_for("history", language)
    if history_filter is not HistoryFilter.ALL:
        title = f"{title} ({history_filter.value})"

    table = Table(title=title)
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column(text_for("question", language), style="white")
    table.add_column(text_for("answer", language), no_wrap=True)
    for index, entry in enumerate(entries, start=1):
        table.add_row(
            str(index),
            entry.question,
            Text(entry.answer.upper(), style=f"bold {answer_color(entry.answer)}"),
        )
    return table

"""Exportación del historial a HTML.

Por qué está en adapters:
- El HTML es un detalle de infraestructura (Jinja2).
- El Core solo conoce `HistoryEntry` y el mapa de colores de respuestas.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.domain.language import Language
from core.domain.models import HistoryEntry, HistoryFilter
from core.services.ask_session import answer_color


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_TITLES = {
    Language.SPANISH: "Historial de la bola mágica",
    Language.ENGLISH: "Magic ball history",
}


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def render_history_html(
    *,
    entries: Iterable[HistoryEntry],
    history_filter: HistoryFilter = HistoryFilter.ALL,
    language: Language = Language.SPANISH,
) -> str:
    """Renderiza un HTML autocontenido con el historial."""

    rows = [
        {
            "question": entry.question,
            "answer": entry.answer.upper(),
            "color": answer_color(entry.answer),
        }
        for entry in entries
    ]
    template = _get_env().get_template("history.html")
    return template.render(
        title=_TITLES[language],
        lang=language.value,
        generated_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        filter=history_filter.value,
        rows=rows,
    )


def export_history_html(
    *,
    entries: Iterable[HistoryEntry],
    output_path: Path,
    history_filter: HistoryFilter = HistoryFilter.ALL,
    language: Language = Language.SPANISH,
) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    html = render_history_html(entries=entries, history_filter=history_filter, language=language)
    output_path.write_text(html, encoding="utf-8")
    return output_path

"""Exportación JSON del historial.

Por qué JSON:
- Interoperabilidad con otras herramientas y scripts.
- Mismo formato `[{question, answer}]` que se guarda en el store.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.domain.models import HistoryEntry


def export_history_json(*, entries: Iterable[HistoryEntry], output_path: Path) -> Path:
    """Exporta entradas del historial a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [entry.model_dump(mode="json") for entry in entries]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return output_path

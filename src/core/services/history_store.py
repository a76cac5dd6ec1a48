"""Historial de preguntas/respuestas.

Diseño:
- Secuencia en memoria, más reciente primero. Las entradas son inmutables.
- Persistencia write-through: cada `record` serializa la secuencia completa y
  sobrescribe un único slot del `KeyValueStore` (sin deltas ni migraciones).
- `load` nunca rompe el arranque: datos ausentes o corruptos -> historial vacío.
"""

from __future__ import annotations

import json
import logging
from typing import Iterator

from pydantic import TypeAdapter, ValidationError

from core.domain.errors import HistoryPersistError
from core.domain.models import HistoryEntry, HistoryFilter
from core.interfaces.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "historial"

_ENTRIES_ADAPTER = TypeAdapter(list[HistoryEntry])


class HistoryView:
    """Vista filtrada, perezosa y re-iterable sobre el historial vivo.

    Cada iteración vuelve a leer el store, así que refleja entradas
    registradas después de crear la vista.
    """

    def __init__(self, store: "HistoryStore", history_filter: HistoryFilter) -> None:
        self._store = store
        self.filter = history_filter

    def __iter__(self) -> Iterator[HistoryEntry]:
        for entry in self._store.entries:
            if self.filter.matches(entry.answer):
                yield entry

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)


class HistoryStore:
    def __init__(self, kv_store: KeyValueStore, *, key: str = DEFAULT_HISTORY_KEY) -> None:
        self._kv = kv_store
        self._key = key
        self._entries: list[HistoryEntry] = []

    @property
    def key(self) -> str:
        return self._key

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> tuple[HistoryEntry, ...]:
        raw = self._kv.get(self._key)
        if raw is None:
            self._entries = []
            return self.entries

        try:
            self._entries = _ENTRIES_ADAPTER.validate_python(json.loads(raw))
        except (json.JSONDecodeError, RecursionError, ValidationError) as exc:
            logger.warning("Ignoring malformed history under %r: %s", self._key, exc)
            self._entries = []
        return self.entries

    def record(self, question: str, answer_label: str) -> HistoryEntry:
        """Añade la entrada al principio y reescribe el snapshot completo.

        Si el store falla, el historial en memoria queda intacto y se lanza
        `HistoryPersistError`.
        """

        entry = HistoryEntry(question=question, answer=answer_label)
        updated = [entry, *self._entries]
        self._persist(updated)
        self._entries = updated
        return entry

    def filtered(self, history_filter: HistoryFilter | str = HistoryFilter.ALL) -> HistoryView:
        return HistoryView(self, HistoryFilter(history_filter))

    def dump(self) -> str:
        """Snapshot serializado (el mismo que se guarda en el store)."""

        return _serialize(self._entries)

    def _persist(self, entries: list[HistoryEntry]) -> None:
        try:
            self._kv.set(self._key, _serialize(entries))
        except (OSError, UnicodeError) as exc:
            raise HistoryPersistError(f"could not save history under {self._key!r}: {exc}") from exc
        logger.debug("History persisted under %r (%d entries)", self._key, len(entries))


def _serialize(entries: list[HistoryEntry]) -> str:
    # ASCII escapes: preguntas con surrogates sueltos (argv mal decodificado) no rompen el store.
    payload = [entry.model_dump(mode="json") for entry in entries]
    return json.dumps(payload, ensure_ascii=True)

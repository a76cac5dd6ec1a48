"""Composición de la app a partir de `AppSettings`.

Los comandos de la CLI (y los tests) construyen aquí el historial y la
sesión para no repetir el cableado de adaptadores.
"""

from __future__ import annotations

from core.config import AppSettings
from core.domain.language import Language
from core.interfaces.answer_source import AnswerSource
from core.interfaces.key_value_store import KeyValueStore
from core.services.ask_session import AskSession, SessionHooks
from core.services.history_store import HistoryStore
from adapters.kv_stores import JsonFileKeyValueStore
from adapters.yesno_api import YesNoApiSource


def open_history(
    settings: AppSettings,
    *,
    kv_store: KeyValueStore | None = None,
) -> HistoryStore:
    """Abre (y carga) el historial persistido."""

    kv_store = kv_store or JsonFileKeyValueStore(settings.resolved_history_path())
    history = HistoryStore(kv_store, key=settings.history_key)
    history.load()
    return history


def build_session(
    settings: AppSettings,
    *,
    language: Language | None = None,
    source: AnswerSource | None = None,
    kv_store: KeyValueStore | None = None,
    hooks: SessionHooks | None = None,
) -> AskSession:
    return AskSession(
        source=source or YesNoApiSource(settings),
        history=open_history(settings, kv_store=kv_store),
        language=language or settings.default_language,
        hooks=hooks or SessionHooks(),
    )

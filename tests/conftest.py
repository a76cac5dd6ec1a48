"""
Configuración global para tests pytest.

Define fixtures comunes: stores en memoria, fuentes de respuesta stub y
settings apuntando a `tmp_path`.
"""

from __future__ import annotations

import pytest

from adapters.kv_stores import InMemoryKeyValueStore
from core.config import AppSettings
from core.domain.errors import AnswerFetchError
from core.domain.models import Answer
from core.services.history_store import HistoryStore


class StubAnswerSource:
    """Fuente de respuestas controlada: devuelve (o lanza) en orden."""

    def __init__(self, *results: Answer | Exception) -> None:
        self._results = list(results)
        self.calls = 0

    async def fetch(self) -> Answer:
        self.calls += 1
        result = self._results.pop(0) if len(self._results) > 1 else self._results[0]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def history(kv_store):
    store = HistoryStore(kv_store)
    store.load()
    return store


@pytest.fixture
def yes_answer():
    return Answer(answer="Yes", image="https://x/y.gif")


@pytest.fixture
def failing_source():
    return StubAnswerSource(AnswerFetchError("connection refused"))


@pytest.fixture
def settings(tmp_path):
    return AppSettings(
        history_path=tmp_path / "storage.json",
        answer_api_url="https://answers.test/api",
    )


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Variables de entorno para invocar la CLI sin tocar la config real."""

    history_path = tmp_path / "storage.json"
    monkeypatch.setenv("BOLA_MAGICA_HISTORY_PATH", str(history_path))
    monkeypatch.setenv("BOLA_MAGICA_ANSWER_API_URL", "https://answers.test/api")
    monkeypatch.setenv("BOLA_MAGICA_DEFAULT_LANGUAGE", "es")
    monkeypatch.setenv("BOLA_MAGICA_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    return history_path

"""Implementaciones de `KeyValueStore`.

- `InMemoryKeyValueStore`: para tests y sesiones efímeras.
- `JsonFileKeyValueStore`: un archivo JSON `{clave: valor}` que hace de
  `localStorage` fuera del navegador.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from core.interfaces.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKeyValueStore(KeyValueStore):
    """Store persistente en disco.

    Escritura atómica: se vuelca a `<archivo>.tmp` y luego `replace()`.
    Un archivo ilegible se trata como vacío al leer (y se sobrescribe al
    siguiente `set`).
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as exc:
            logger.warning("Could not read %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: top-level JSON is not an object", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(
                json.dumps(data, ensure_ascii=True, indent=2, sort_keys=True) + "\n",
                encoding="utf-8",
            )
            tmp.replace(self.path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise

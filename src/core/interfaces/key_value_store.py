"""Contrato de almacenamiento clave-valor.

Equivale al `localStorage` de un navegador: valores string bajo claves fijas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None:
        """Devuelve el valor guardado o `None` si la clave no existe."""

        ...

    def set(self, key: str, value: str) -> None:
        """Sobrescribe el valor completo de la clave."""

        ...

"""Contrato de la fuente de respuestas.

Por qué Protocol:
- La API pública (yesno.wtf) es solo una implementación; en tests se sustituye
  por un stub sin tocar HTTP.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Answer


@runtime_checkable
class AnswerSource(Protocol):
    """Contrato mínimo para obtener una respuesta.

    Reglas de diseño:
    - `fetch` es asíncrono porque hace una única petición de red.
    - Ante cualquier fallo lanza `core.domain.errors.AnswerFetchError`.
    """

    async def fetch(self) -> Answer:
        ...

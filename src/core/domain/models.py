"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- La respuesta de la API externa es "untrusted": solo exigimos presencia de
  campos, el resto se ignora.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ValidationReason(str, Enum):
    """Motivo por el que una pregunta no se puede enviar."""

    EMPTY_QUESTION = "empty_question"
    MISSING_QUESTION_MARK = "missing_question_mark"


class HistoryFilter(str, Enum):
    """Filtro transitorio del historial (no se persiste)."""

    ALL = "all"
    YES = "yes"
    NO = "no"
    MAYBE = "maybe"

    def matches(self, answer_label: str) -> bool:
        if self is HistoryFilter.ALL:
            return True
        return (answer_label or "").lower() == self.value


ERROR_LABEL = "Error"


class Answer(BaseModel):
    """Respuesta de la bola mágica.

    Viene tal cual de la API externa (`{answer, image, forced}`) o del
    fallback local cuando la consulta falla.
    """

    model_config = ConfigDict(extra="ignore")

    answer: str = Field(
        ...,
        description="Etiqueta: yes/no/maybe (cualquier capitalización) o 'Error'.",
    )
    image: str | None = Field(
        default=None,
        description="URL de la imagen (gif) asociada a la respuesta.",
    )
    message: str | None = Field(
        default=None,
        description="Mensaje opcional (solo lo rellena el fallback de error).",
    )

    @property
    def is_error(self) -> bool:
        return self.answer.lower() == ERROR_LABEL.lower()


class HistoryEntry(BaseModel):
    """Par pregunta/respuesta registrado en el historial. Inmutable."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    question: str = Field(..., description="Pregunta tal como se envió.")
    answer: str = Field(..., description="Etiqueta de la respuesta recibida.")


class AnswerView(BaseModel):
    """Proyección de un `Answer` lista para pintar."""

    model_config = ConfigDict(frozen=True)

    label: str
    color: str
    image: str | None = None
    message: str | None = None

"""Errores del dominio.

La CLI distingue pregunta inválida (feedback inline), fallo de red (se
colapsa en una respuesta "Error"), doble envío e historial sin guardar.
"""

from __future__ import annotations

from core.domain.models import ValidationReason


class BolaMagicaError(Exception):
    """Base de todos los errores de la aplicación."""


class QuestionValidationError(BolaMagicaError, ValueError):
    def __init__(self, reason: ValidationReason) -> None:
        super().__init__(reason.value)
        self.reason = reason


class AnswerFetchError(BolaMagicaError):
    """Cualquier fallo al consultar la API (conexión, HTTP != 2xx, JSON roto)."""


class SubmissionInProgressError(BolaMagicaError):
    """Ya hay una consulta en curso; el envío está deshabilitado."""


class HistoryPersistError(BolaMagicaError):
    """No se pudo guardar el historial en el store."""

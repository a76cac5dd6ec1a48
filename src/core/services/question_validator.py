"""Validación de la pregunta antes de consultar la bola mágica.

Reglas (en este orden, sin cachear el resultado):
1. Vacía tras `strip()` -> EMPTY_QUESTION.
2. Empieza por `¿` y termina en `?` -> válida (corta aquí).
3. No termina en `?` -> MISSING_QUESTION_MARK.
4. Resto -> válida.

La regla 2 solo aplica si se cumplen prefijo y sufijo a la vez; `"¿hola"`
cae a la regla 3 y falla.
"""

from __future__ import annotations

from core.domain.errors import QuestionValidationError
from core.domain.language import Language
from core.domain.models import ValidationReason

OPENING_MARK = "¿"
CLOSING_MARK = "?"

_MESSAGES: dict[Language, dict[ValidationReason, str]] = {
    Language.SPANISH: {
        ValidationReason.EMPTY_QUESTION: "¡No dejes la pregunta vacía!",
        ValidationReason.MISSING_QUESTION_MARK: "Recuerda terminar con ?",
    },
    Language.ENGLISH: {
        ValidationReason.EMPTY_QUESTION: "Don't leave the question empty!",
        ValidationReason.MISSING_QUESTION_MARK: "Remember to end with ?",
    },
}

INPUT_HINT: dict[Language, str] = {
    Language.SPANISH: "Termina con ? o ¿ ?",
    Language.ENGLISH: "End with ? or ¿ ?",
}


def validate_question(raw: str) -> ValidationReason | None:
    """Devuelve el motivo de rechazo, o `None` si la pregunta es válida."""

    trimmed = (raw or "").strip()
    if not trimmed:
        return ValidationReason.EMPTY_QUESTION
    if trimmed.startswith(OPENING_MARK) and trimmed.endswith(CLOSING_MARK):
        return None
    if not trimmed.endswith(CLOSING_MARK):
        return ValidationReason.MISSING_QUESTION_MARK
    return None


def ensure_valid_question(raw: str) -> str:
    """Como `validate_question` pero lanza; devuelve la pregunta recortada."""

    reason = validate_question(raw)
    if reason is not None:
        raise QuestionValidationError(reason)
    return raw.strip()


def validation_message(reason: ValidationReason, language: Language = Language.SPANISH) -> str:
    return _MESSAGES[language][reason]

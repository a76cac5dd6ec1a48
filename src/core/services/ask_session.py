"""Controlador de la sesión de preguntas.

Este módulo concentra el estado del "formulario" (pregunta, respuesta,
error de validación, filtro, visibilidad del historial) en una única
estructura explícita. La CLI solo llama a las transiciones y pinta las
proyecciones; no guarda estado propio.

Máquina de estados:

    idle -> submitting -> answered | errored -> idle

Mientras una consulta está en curso el envío queda deshabilitado
(`SubmissionInProgressError`); no hay cola ni cancelación.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from core.domain.errors import (
    HistoryPersistError,
    QuestionValidationError,
    SubmissionInProgressError,
)
from core.domain.language import Language
from core.domain.models import Answer, AnswerView, HistoryFilter, ValidationReason
from core.interfaces.answer_source import AnswerSource
from core.services.answer_resolver import resolve_answer
from core.services.history_store import HistoryStore, HistoryView
from core.services.question_validator import ensure_valid_question

logger = logging.getLogger(__name__)

ANSWER_COLORS: dict[str, str] = {
    "yes": "#4CAF50",
    "no": "#F44336",
    "maybe": "#FFEB3B",
}
DEFAULT_COLOR = "#FFFFFF"


class SessionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    ANSWERED = "answered"
    ERRORED = "errored"


@dataclass
class FormState:
    """Estado completo de la UI; lo posee `AskSession`."""

    question: str = ""
    status: SessionStatus = SessionStatus.IDLE
    answer: Answer | None = None
    error: ValidationReason | None = None
    filter: HistoryFilter = HistoryFilter.ALL
    history_visible: bool = False
    history_saved: bool = True

    @property
    def loading(self) -> bool:
        return self.status is SessionStatus.SUBMITTING


@dataclass
class SessionHooks:
    """Callbacks opcionales para la capa de UI (spinner, logs)."""

    submitting: Callable[[str], None] | None = None
    settled: Callable[[Answer], None] | None = None


def answer_color(label: str | None) -> str:
    return ANSWER_COLORS.get((label or "").lower(), DEFAULT_COLOR)


def project_answer(answer: Answer) -> AnswerView:
    """Proyección pura de una respuesta a lo que se muestra en pantalla."""

    return AnswerView(
        label=answer.answer.upper(),
        color=answer_color(answer.answer),
        image=answer.image or None,
        message=answer.message or None,
    )


@dataclass
class AskSession:
    source: AnswerSource
    history: HistoryStore
    language: Language = Language.SPANISH
    hooks: SessionHooks = field(default_factory=SessionHooks)
    state: FormState = field(default_factory=FormState)

    async def submit(self, question: str) -> Answer:
        """Valida, consulta la bola mágica y registra el intento.

        Una pregunta inválida lanza `QuestionValidationError` (el motivo queda
        también en `state.error`). Si el historial no se puede guardar, la
        respuesta se devuelve igual y `state.history_saved` queda en False.
        """

        if self.state.status is SessionStatus.SUBMITTING:
            raise SubmissionInProgressError("A question is already being answered.")

        self.state.question = question
        try:
            ensure_valid_question(question)
        except QuestionValidationError as exc:
            self.state.error = exc.reason
            self.state.answer = None
            self.state.status = SessionStatus.IDLE
            raise

        self.state.error = None
        self.state.answer = None
        self.state.history_saved = True
        self.state.status = SessionStatus.SUBMITTING
        if self.hooks.submitting:
            self.hooks.submitting(question)

        try:
            answer = await resolve_answer(self.source, language=self.language)
            try:
                self.history.record(question, answer.answer)
            except HistoryPersistError as exc:
                logger.warning("Answer not recorded: %s", exc)
                self.state.history_saved = False
        except BaseException:
            self.state.status = SessionStatus.IDLE
            raise

        self.state.answer = answer
        self.state.status = SessionStatus.ERRORED if answer.is_error else SessionStatus.ANSWERED
        logger.info("Question answered with %r", answer.answer)
        if self.hooks.settled:
            self.hooks.settled(answer)
        return answer

    def acknowledge(self) -> None:
        if self.state.status in (SessionStatus.ANSWERED, SessionStatus.ERRORED):
            self.state.status = SessionStatus.IDLE

    def set_filter(self, history_filter: HistoryFilter | str) -> None:
        self.state.filter = HistoryFilter(history_filter)

    def toggle_history(self) -> bool:
        self.state.history_visible = not self.state.history_visible
        return self.state.history_visible

    def current_view(self) -> AnswerView | None:
        if self.state.answer is None or self.state.loading:
            return None
        return project_answer(self.state.answer)

    def visible_history(self) -> HistoryView:
        return self.history.filtered(self.state.filter)

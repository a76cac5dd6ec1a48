"""
Tests para la validación de preguntas.
"""

import pytest

from core.domain.errors import QuestionValidationError
from core.domain.language import Language
from core.domain.models import ValidationReason
from core.services.question_validator import (
    ensure_valid_question,
    validate_question,
    validation_message,
)


class TestValidateQuestion:
    @pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
    def test_empty_question(self, raw):
        assert validate_question(raw) is ValidationReason.EMPTY_QUESTION

    def test_missing_question_mark(self):
        assert validate_question("hello") is ValidationReason.MISSING_QUESTION_MARK

    @pytest.mark.parametrize("raw", ["hello?", "  hello?  ", "¿hello?", "¿Lloverá mañana?"])
    def test_valid_questions(self, raw):
        assert validate_question(raw) is None

    def test_opening_mark_without_closing_mark_falls_through(self):
        # El prefijo ¿ solo cuenta junto con el sufijo ?; si no, aplica la regla del ?.
        assert validate_question("¿hello") is ValidationReason.MISSING_QUESTION_MARK

    def test_closing_mark_alone_is_enough(self):
        assert validate_question("hello¿?") is None

    def test_is_reevaluated_each_time(self):
        text = "will it rain"
        assert validate_question(text) is ValidationReason.MISSING_QUESTION_MARK
        text += "?"
        assert validate_question(text) is None


class TestEnsureValidQuestion:
    def test_returns_trimmed_question(self):
        assert ensure_valid_question("  ¿Lloverá?  ") == "¿Lloverá?"

    def test_raises_with_reason(self):
        with pytest.raises(QuestionValidationError) as exc_info:
            ensure_valid_question("hola")
        assert exc_info.value.reason is ValidationReason.MISSING_QUESTION_MARK


class TestValidationMessage:
    def test_spanish_messages(self):
        assert validation_message(ValidationReason.EMPTY_QUESTION) == "¡No dejes la pregunta vacía!"
        assert validation_message(ValidationReason.MISSING_QUESTION_MARK) == "Recuerda terminar con ?"

    def test_english_messages(self):
        message = validation_message(ValidationReason.MISSING_QUESTION_MARK, Language.ENGLISH)
        assert message == "Remember to end with ?"

"""Resolución de la respuesta de la bola mágica.

Una sola petición por invocación, sin reintentos ni backoff. Cualquier fallo
de la fuente se colapsa en una respuesta sintética con etiqueta "Error" para
que la UI vuelva siempre a un estado interactivo.
"""

from __future__ import annotations

import logging

from core.domain.errors import AnswerFetchError
from core.domain.language import Language
from core.domain.models import ERROR_LABEL, Answer
from core.interfaces.answer_source import AnswerSource

logger = logging.getLogger(__name__)

FALLBACK_MESSAGES: dict[Language, str] = {
    Language.SPANISH: "Ups... No pude consultar la bola mágica.",
    Language.ENGLISH: "Oops... I couldn't reach the magic ball.",
}


def fallback_answer(language: Language = Language.SPANISH) -> Answer:
    return Answer(answer=ERROR_LABEL, image="", message=FALLBACK_MESSAGES[language])


async def resolve_answer(
    source: AnswerSource,
    *,
    language: Language = Language.SPANISH,
) -> Answer:
    try:
        answer = await source.fetch()
    except AnswerFetchError as exc:
        logger.warning("Answer source failed: %s", exc)
        return fallback_answer(language)

    logger.debug("Answer received: %s", answer.answer)
    return answer

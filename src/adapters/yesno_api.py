"""Fuente de respuestas: API pública yesno.wtf.

Implementación mínima:
- `GET` al endpoint configurado, sin body, auth ni query params.
- La respuesta se trata como dato externo: solo exigimos `answer`.
- Todo fallo (red, HTTP != 2xx, JSON roto, forma inesperada) se reporta
  como `AnswerFetchError`.
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import AnswerFetchError
from core.domain.models import Answer
from core.interfaces.answer_source import AnswerSource


class YesNoApiSource(AnswerSource):
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    @property
    def url(self) -> str:
        return self._settings.answer_api_url

    async def fetch(self) -> Answer:
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise AnswerFetchError(f"request to {self.url} failed: {exc}") from exc
        except ValueError as exc:
            # json.JSONDecodeError hereda de ValueError.
            raise AnswerFetchError(f"invalid JSON from {self.url}") from exc

        if not isinstance(payload, dict):
            raise AnswerFetchError(f"unexpected payload type: {type(payload).__name__}")

        try:
            return Answer.model_validate(payload)
        except ValidationError as exc:
            raise AnswerFetchError(f"unexpected payload shape: {exc}") from exc

"""Configuración de logging.

Un único `RichHandler` sobre stderr para que los logs no se mezclen con la
salida de la CLI (stdout), y librerías HTTP silenciadas salvo en WARNING.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "bola-magica"

_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def setup_logging(level: str | int = "WARNING") -> None:
    """Instala el handler raíz. Llamarlo varias veces solo ajusta el nivel."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

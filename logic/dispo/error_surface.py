from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AlertContent:
    title: str
    message: str
    button_text: str = "Ok"


class ErrorSurface:
    """
    Un único modal activo para todo el proceso.

    ``open`` reemplaza lo que se esté mostrando; ``close`` lo oculta y llama
    al manejador registrado. Las subclases de GUI implementan ``_show`` y
    ``_hide``; esta clase sola sirve como superficie sin pantalla.
    """

    def __init__(self) -> None:
        self.current: Optional[AlertContent] = None
        self._on_close: Optional[Callable[[], None]] = None

    @property
    def is_open(self) -> bool:
        return self.current is not None

    def open(self, content: AlertContent, on_close: Optional[Callable[[], None]] = None) -> None:
        if self.current is not None:
            self._hide()
        self.current = content
        self._on_close = on_close
        self._show(content)

    def close(self) -> None:
        if self.current is None:
            return
        handler = self._on_close
        self.current = None
        self._on_close = None
        self._hide()
        if handler is not None:
            handler()

    def alert(self, message: str, title: str = "Error") -> None:
        """Modal de alerta con un solo botón que llama a ``close``."""
        logger.info(f"Alerta: {title}: {message}")
        self.open(AlertContent(title=title, message=message))

    def _show(self, content: AlertContent) -> None:
        pass

    def _hide(self) -> None:
        pass

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Union

from logging_config import get_logger

logger = get_logger(__name__)

XLS_EXTENSION = ".xls"

# Recibe la extensión aceptada y devuelve la ruta elegida, varias rutas o None si se cancela.
DialogOpener = Callable[[str], Union[str, Sequence[str], None]]
DropHandler = Callable[[Sequence[str]], bool]
SlotListener = Callable[["FileSlot"], None]


class FileSlot:
    """
    Guarda como máximo una ruta de archivo.

    Toda ruta que no termine en la extensión aceptada se descarta sin
    error y el valor anterior se conserva.
    """

    def __init__(
        self,
        name: str,
        extension: str = XLS_EXTENSION,
        open_dialog: Optional[DialogOpener] = None,
    ) -> None:
        self.name = name
        self.extension = extension
        self.open_dialog = open_dialog
        self._value: Optional[str] = None
        self._listeners: List[SlotListener] = []

    @property
    def value(self) -> Optional[str]:
        return self._value

    @property
    def is_empty(self) -> bool:
        return self._value is None

    def accepts(self, path: object) -> bool:
        return isinstance(path, str) and bool(path) and path.endswith(self.extension)

    def select(self, path: str) -> bool:
        if not self.accepts(path):
            logger.debug(f"[{self.name}] ruta rechazada: {path!r}")
            return False
        self._value = path
        logger.debug(f"[{self.name}] seleccionado: {path}")
        self._changed()
        return True

    def select_dropped(self, paths: Optional[Sequence[str]]) -> bool:
        """Entrada de drag & drop: solo se acepta exactamente una ruta."""
        if paths is None or isinstance(paths, str) or len(paths) != 1:
            logger.debug(f"[{self.name}] drop ignorado: {paths!r}")
            return False
        return self.select(paths[0])

    def select_from_dialog(self) -> bool:
        if self.open_dialog is None:
            return False
        selected = self.open_dialog(self.extension)
        # cancelado o selección múltiple
        if selected is None or not isinstance(selected, str):
            return False
        return self.select(selected)

    def clear(self) -> None:
        if self._value is None:
            return
        self._value = None
        logger.debug(f"[{self.name}] limpiado")
        self._changed()

    def subscribe(self, listener: SlotListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def __repr__(self) -> str:
        return f"FileSlot({self.name!r}, value={self._value!r})"


class DropRegistry:
    """
    Manejadores de drop indexados por clave de slot.

    Cada zona de drop entrega sus eventos con su propia clave; los drops
    sin clave (ventana completa) van al slot activo.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, DropHandler] = {}
        self._active: Optional[str] = None

    @property
    def active(self) -> Optional[str]:
        return self._active

    def register(self, key: str, handler: DropHandler) -> None:
        self._handlers[key] = handler

    def register_slot(self, slot: FileSlot, key: Optional[str] = None) -> str:
        key = key or slot.name
        self.register(key, slot.select_dropped)
        return key

    def unregister(self, key: str) -> None:
        self._handlers.pop(key, None)
        if self._active == key:
            self._active = None

    def activate(self, key: Optional[str]) -> None:
        if key is not None and key not in self._handlers:
            raise KeyError(key)
        self._active = key

    def dispatch(self, paths: Optional[Sequence[str]], key: Optional[str] = None) -> bool:
        target = key if key is not None else self._active
        handler = self._handlers.get(target) if target is not None else None
        if handler is None:
            logger.debug(f"Drop sin destino (clave={target!r})")
            return False
        return bool(handler(list(paths) if paths is not None else []))

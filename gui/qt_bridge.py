# gui/qt_bridge.py
from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, Qt, Signal
from PySide6.QtWidgets import QMessageBox, QWidget

from logic.dispo.error_surface import AlertContent, ErrorSurface


class MainThreadDispatcher(QObject):
    """
    Ejecuta callables en el hilo de la GUI.

    El invoker resuelve en un hilo del pool; la señal encolada lleva el
    callback de vuelta al hilo donde vive este objeto.
    """

    _call = Signal(object)

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        self._call.connect(self._run, Qt.QueuedConnection)

    def __call__(self, fn: Callable[[], None]) -> None:
        self._call.emit(fn)

    def _run(self, fn: Callable[[], None]) -> None:
        fn()


class QtErrorSurface(ErrorSurface):
    """Superficie de errores con un QMessageBox modal a la vez."""

    def __init__(self, parent: QWidget):
        super().__init__()
        self.parent = parent
        self._box: Optional[QMessageBox] = None

    def _show(self, content: AlertContent) -> None:
        box = QMessageBox(self.parent)
        box.setIcon(QMessageBox.Critical)
        box.setWindowTitle(content.title)
        box.setText(content.message)
        ok = box.addButton(content.button_text, QMessageBox.AcceptRole)
        ok.clicked.connect(self.close)
        box.rejected.connect(self.close)
        self._box = box
        box.open()

    def _hide(self) -> None:
        box, self._box = self._box, None
        if box is None:
            return
        box.blockSignals(True)
        box.hide()
        box.deleteLater()

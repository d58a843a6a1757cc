# gui/widgets.py
from __future__ import annotations

from typing import Callable, List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFileDialog, QFrame, QGraphicsDropShadowEffect, QHBoxLayout, QLabel,
    QPushButton, QVBoxLayout, QWidget,
)

from logic.dispo.file_slot import DialogOpener, DropRegistry, FileSlot


def xls_dialog_opener(parent: QWidget) -> DialogOpener:
    """Diálogo de un solo archivo filtrado por la extensión del slot."""
    def _open(extension: str) -> Optional[str]:
        fname, _ = QFileDialog.getOpenFileName(
            parent,
            "Seleccionar archivo",
            "",
            f"Excel (*{extension})",
        )
        return fname or None
    return _open


def paths_from_mime(mime) -> List[str]:
    if mime is None or not mime.hasUrls():
        return []
    return [u.toLocalFile() for u in mime.urls() if u.isLocalFile()]


class XlsDropZone(QFrame):
    """
    Zona para soltar o elegir un .xls.

    Los drops se entregan al registro con la clave del slot; el clic abre
    el diálogo del slot y la papelera lo limpia.
    """

    def __init__(self, slot: FileSlot, registry: DropRegistry, parent: QWidget | None = None):
        super().__init__(parent)
        self.slot = slot
        self.registry = registry
        self.setAcceptDrops(True)
        self.setCursor(Qt.PointingHandCursor)
        self.setObjectName("DropZone")
        self.setMinimumHeight(220)
        self.setStyleSheet(
            "#DropZone{background:#f8fafc;border:2px dashed #9bc6ff;border-radius:12px;}"
            "#DropZone[hasFile=\"true\"]{background:#eef6ff;border:2px solid #0f62fe;}"
        )

        lay = QVBoxLayout(self)
        lay.setContentsMargins(12, 8, 12, 16)

        top = QHBoxLayout()
        top.addStretch(1)
        self.btn_delete = QPushButton("QUITAR")
        self.btn_delete.setStyleSheet(
            "QPushButton{background:#fee2e2;color:#991b1b;font-weight:700;"
            "border-radius:6px;padding:6px 10px;border:none;}"
            "QPushButton:hover{background:#fecaca;}"
        )
        self.btn_delete.clicked.connect(self.slot.clear)
        top.addWidget(self.btn_delete)
        lay.addLayout(top)

        self.lbl_title = QLabel()
        self.lbl_title.setAlignment(Qt.AlignCenter)
        self.lbl_title.setStyleSheet("font-size:18px;font-weight:800;color:#0f172a;border:none;")
        self.lbl_detail = QLabel()
        self.lbl_detail.setAlignment(Qt.AlignCenter)
        self.lbl_detail.setWordWrap(True)
        self.lbl_detail.setStyleSheet("color:#475569;border:none;")
        lay.addStretch(1)
        lay.addWidget(self.lbl_title)
        lay.addWidget(self.lbl_detail)
        lay.addStretch(1)

        self.slot.subscribe(lambda _s: self.refresh())
        self.refresh()

    def refresh(self) -> None:
        has_file = not self.slot.is_empty
        if has_file:
            self.lbl_title.setText("ARCHIVO SELECCIONADO")
            self.lbl_detail.setText(self.slot.value or "")
        else:
            self.lbl_title.setText(f"SUELTA EL ARCHIVO {self.slot.name.upper()} O HAZ CLIC")
            self.lbl_detail.setText(f"Arrastra aquí tu archivo {self.slot.extension}")
        self.btn_delete.setEnabled(has_file)
        self.setProperty("hasFile", "true" if has_file else "false")
        self.style().unpolish(self)
        self.style().polish(self)

    def mousePressEvent(self, e):
        if e.button() == Qt.LeftButton:
            self.slot.select_from_dialog()
        super().mousePressEvent(e)

    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()
        else:
            e.ignore()

    def dropEvent(self, e):
        self.registry.dispatch(paths_from_mime(e.mimeData()), key=self.slot.name)
        e.acceptProposedAction()


class StepIndicator(QFrame):
    """Fila de pasos numerados; los completados muestran ✓."""

    def __init__(self, names: List[str], parent: QWidget | None = None):
        super().__init__(parent)
        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.setSpacing(18)
        self._labels: List[QLabel] = []
        for name in names:
            lab = QLabel()
            lab.setProperty("stepName", name)
            lay.addWidget(lab)
            self._labels.append(lab)
        lay.addStretch(1)
        self.set_current(0)

    def set_current(self, index: int) -> None:
        for i, lab in enumerate(self._labels):
            name = lab.property("stepName")
            if i < index:
                lab.setText(f"✓  {name}")
                lab.setStyleSheet("color:#0f62fe;font-weight:800;")
            elif i == index:
                lab.setText(f"{i + 1}  {name}")
                lab.setStyleSheet("color:#0f172a;font-weight:800;")
            else:
                lab.setText(f"{i + 1}  {name}")
                lab.setStyleSheet("color:#94a3b8;font-weight:600;")


def card(parent: QWidget | None = None, on_build: Callable[[QVBoxLayout], None] | None = None) -> QFrame:
    """Tarjeta blanca con sombra."""
    frame = QFrame(parent)
    frame.setStyleSheet("background:#ffffff;border:1px solid #e2e8f5;border-radius:12px;")
    effect = QGraphicsDropShadowEffect(frame)
    effect.setBlurRadius(18)
    effect.setOffset(0, 4)
    effect.setColor(QColor(0, 0, 0, 40))
    frame.setGraphicsEffect(effect)
    lay = QVBoxLayout(frame)
    lay.setContentsMargins(24, 20, 24, 20)
    lay.setSpacing(12)
    if on_build is not None:
        on_build(lay)
    return frame

# gui/pages/import_page.py
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox, QHBoxLayout, QLabel, QPushButton, QStackedWidget, QVBoxLayout, QWidget,
)

from gui.widgets import StepIndicator, XlsDropZone, card, xls_dialog_opener
from logic.dispo.error_surface import ErrorSurface
from logic.dispo.file_slot import DropRegistry
from logic.dispo.invoker import ImportInvoker
from logic.dispo.ledger import JobLedger
from logic.dispo.models import DispositionMode
from logic.dispo.wizard import Dispatch, ImportSession, WizardController, build_import_steps


class ImportPage(QWidget):
    """
    Página 'Importar': CL-View -> Shipper Site + modo -> FINALIZAR.

    Toda la lógica vive en :class:`WizardController`; aquí solo se
    reflejan sus estados en los botones.
    """

    def __init__(
        self,
        ledger: JobLedger,
        invoker: ImportInvoker,
        error_surface: ErrorSurface,
        registry: DropRegistry,
        dispatch: Dispatch,
        extension: str = ".xls",
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.session = ImportSession.create(extension=extension, open_dialog=xls_dialog_opener(self))
        self.controller = WizardController(
            session=self.session,
            steps=build_import_steps(self.session),
            invoker=invoker,
            error_surface=error_surface,
            ledger=ledger,
            drop_registry=registry,
            dispatch=dispatch,
        )
        self._build_ui(registry)
        self.controller.subscribe(lambda _c: self._refresh())
        self._refresh()

    # --------------------------------------------------------------------- UI
    def _build_ui(self, registry: DropRegistry) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(10)

        panel = card()
        pl = panel.layout()

        title = QLabel("IMPORTAR DISPO")
        title.setStyleSheet("font-size:22px;font-weight:800;color:#0f172a;border:none;")
        title.setAlignment(Qt.AlignCenter)
        pl.addWidget(title)

        line = QHBoxLayout()
        lab = QLabel("MODO:")
        lab.setStyleSheet("color:#0f172a; font-weight:700;border:none;")
        self.cb_mode = QComboBox()
        self.cb_mode.addItem("", None)
        for mode in DispositionMode:
            self.cb_mode.addItem(mode.value.upper(), mode)
        self.cb_mode.setFixedWidth(200)
        self.cb_mode.currentIndexChanged.connect(self._on_mode_changed)
        line.addWidget(lab)
        line.addWidget(self.cb_mode)
        line.addStretch(1)
        pl.addLayout(line)

        self.steps_view = StepIndicator([s.name.upper() for s in self.controller.steps])
        pl.addWidget(self.steps_view)

        self.stack = QStackedWidget()
        for step in self.controller.steps:
            self.stack.addWidget(XlsDropZone(step.slot, registry))
        pl.addWidget(self.stack, 1)

        nav = QHBoxLayout()
        self.btn_prev = QPushButton("ANTERIOR")
        self.btn_prev.setProperty("variant", "ghost")
        self.btn_next = QPushButton("SIGUIENTE")
        self.btn_finish = QPushButton("FINALIZAR")
        self.btn_prev.clicked.connect(self.controller.previous)
        self.btn_next.clicked.connect(self.controller.next)
        self.btn_finish.clicked.connect(self.controller.finish)
        for b in (self.btn_prev, self.btn_next, self.btn_finish):
            b.setFixedWidth(150)
        nav.addWidget(self.btn_prev)
        nav.addStretch(1)
        self.lbl_pending = QLabel("")
        self.lbl_pending.setStyleSheet("color:#475569;border:none;")
        nav.addWidget(self.lbl_pending)
        nav.addWidget(self.btn_next)
        nav.addWidget(self.btn_finish)
        pl.addLayout(nav)

        root.addWidget(panel, 1)

    # ----------------------------------------------------------------- estado
    def _on_mode_changed(self, _idx: int) -> None:
        self.session.set_mode(self.cb_mode.currentData())

    def _refresh(self) -> None:
        c = self.controller
        self.stack.setCurrentIndex(c.index)
        self.steps_view.set_current(c.index)

        # el modo vuelve a vacío después de una importación exitosa
        want = self.cb_mode.findData(self.session.mode) if self.session.mode else 0
        if self.cb_mode.currentIndex() != want:
            self.cb_mode.blockSignals(True)
            self.cb_mode.setCurrentIndex(want)
            self.cb_mode.blockSignals(False)

        self.btn_prev.setEnabled(c.can_previous() and not c.pending)
        self.btn_next.setVisible(not c.is_last)
        self.btn_next.setEnabled(c.can_advance())
        self.btn_finish.setVisible(c.is_last)
        self.btn_finish.setEnabled(c.can_finish())
        self.cb_mode.setEnabled(not c.pending)
        self.stack.setEnabled(not c.pending)
        self.lbl_pending.setText("PROCESANDO..." if c.pending else "")

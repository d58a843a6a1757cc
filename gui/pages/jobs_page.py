# gui/pages/jobs_page.py
from __future__ import annotations

from typing import List

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox, QHBoxLayout, QHeaderView, QLabel, QMessageBox, QPushButton,
    QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget,
)

from gui.widgets import card
from logic.dispo.ledger import JobLedger
from logic.dispo.models import DispositionMode, JobRow

COLUMNS = [
    ("JOB NUMBER", 100),
    ("HAWB", 120),
    ("CONDUCTOR", 100),
    ("VEHICULO", 100),
    ("DIRECCION", 300),
    ("COD. POSTAL", 100),
    ("CIUDAD", 200),
    ("PAIS", 100),
    ("FECHA", 100),
    ("HORA", 100),
    ("TOLERANCIA", 100),
    ("CONTACTO", 300),
]


def _row_values(row: JobRow) -> List[str]:
    return [
        row.job_number,
        row.hawb_number,
        row.driver,
        row.vehicle,
        row.address,
        row.postal_code,
        row.city,
        row.country,
        row.calculated_date.strftime("%d/%m/%Y"),
        row.calculated_date.strftime("%H:%M"),
        str(row.tolerance),
        row.contact_name,
    ]


class JobsPage(QWidget):
    """Tabla de trabajos del ledger, filtrada por modo."""

    def __init__(self, ledger: JobLedger, parent: QWidget | None = None):
        super().__init__(parent)
        self.ledger = ledger
        self._shown: List[JobRow] = []

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)
        panel = card()
        pl = panel.layout()

        tools = QHBoxLayout()
        lab = QLabel("MODO:")
        lab.setStyleSheet("color:#0f172a; font-weight:700;border:none;")
        self.cb_mode = QComboBox()
        for mode in DispositionMode:
            self.cb_mode.addItem(mode.value.upper(), mode)
        self.cb_mode.currentIndexChanged.connect(lambda _i: self.reload())
        self.lbl_count = QLabel()
        self.lbl_count.setStyleSheet("color:#475569;border:none;")
        self.btn_remove = QPushButton("QUITAR SELECCIONADOS")
        self.btn_remove.clicked.connect(self._on_remove_selected)
        self.btn_clear = QPushButton("VACIAR")
        self.btn_clear.setStyleSheet(
            "QPushButton{background:#fee2e2;color:#991b1b;font-weight:700;"
            "border-radius:6px;padding:6px 10px;border:none;}"
            "QPushButton:hover{background:#fecaca;}"
        )
        self.btn_clear.clicked.connect(self._on_clear)
        tools.addWidget(lab)
        tools.addWidget(self.cb_mode)
        tools.addWidget(self.lbl_count)
        tools.addStretch(1)
        tools.addWidget(self.btn_remove)
        tools.addWidget(self.btn_clear)
        pl.addLayout(tools)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels([c for c, _ in COLUMNS])
        for i, (_, width) in enumerate(COLUMNS):
            self.table.setColumnWidth(i, width)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Interactive)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setAlternatingRowColors(True)
        pl.addWidget(self.table, 1)

        root.addWidget(panel, 1)

        self.ledger.subscribe(lambda _l: self.reload())
        self.reload()

    def reload(self) -> None:
        mode = self.cb_mode.currentData()
        self._shown = self.ledger.by_mode(mode) if mode else list(self.ledger)
        self.table.setRowCount(0)
        for r_idx, row in enumerate(self._shown):
            self.table.insertRow(r_idx)
            for c_idx, val in enumerate(_row_values(row)):
                item = QTableWidgetItem(val)
                item.setTextAlignment(Qt.AlignLeft | Qt.AlignVCenter)
                self.table.setItem(r_idx, c_idx, item)
        self.lbl_count.setText(f"{len(self._shown)} de {len(self.ledger)} trabajos")

    def _on_remove_selected(self) -> None:
        rows = sorted({i.row() for i in self.table.selectedIndexes()})
        if not rows:
            return
        self.ledger.remove_many([self._shown[r] for r in rows])

    def _on_clear(self) -> None:
        if not len(self.ledger):
            return
        resp = QMessageBox.question(
            self, "Vaciar", "¿Quitar todos los trabajos importados?",
            QMessageBox.Yes | QMessageBox.No, QMessageBox.No,
        )
        if resp == QMessageBox.Yes:
            self.ledger.clear()

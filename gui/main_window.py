from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout,
    QFrame, QListWidget, QListWidgetItem, QStackedWidget, QLabel,
)
from PySide6.QtCore import Qt

from gui.pages.import_page import ImportPage
from gui.pages.jobs_page import JobsPage
from gui.qt_bridge import MainThreadDispatcher, QtErrorSurface
from gui.widgets import paths_from_mime
from logic.dispo.file_slot import DropRegistry
from logic.dispo.invoker import ImportInvoker
from logic.dispo.ledger import JobLedger
from logging_config import get_logger

logger = get_logger(__name__)


class DispoApp(QMainWindow):
    def __init__(self, ledger: JobLedger, invoker: ImportInvoker, extension: str = ".xls"):
        super().__init__()
        self.setWindowTitle("DISPO")
        self.resize(1220, 800)
        self.setAcceptDrops(True)

        self.ledger = ledger
        self.invoker = invoker
        self.extension = extension
        self.drop_registry = DropRegistry()
        self.error_surface = QtErrorSurface(self)
        self.dispatcher = MainThreadDispatcher(self)

        self._apply_base_style()
        self._build_ui()

    # ------------------------------------------------------------------
    #  ESTILO GLOBAL
    # ------------------------------------------------------------------
    def _apply_base_style(self):
        extra_qss = """
QMainWindow { background: #f3f6fb; }
QComboBox { background: #ffffff; border: 1px solid #d8deeb; border-radius: 8px; padding: 6px 8px; }

#SideBar { background: #0c1220; border: none; }
#SideBar QListWidget { background: transparent; border: none; outline: 0; }
#SideBar QListWidget::item { padding: 10px 12px; border-radius: 8px; font-weight: 700; color: #e5edff; }
#SideBar QListWidget::item:selected { background: #1e3a8a; color: #ffffff; }

#TopBar { background: #0f62fe; border-radius: 14px; }
#TopTitle { color: #ffffff; font-size: 22px; font-weight: 800; }
#TopSubtitle { color: #e7eefc; font-size: 12px; font-weight: 600; }

QPushButton { background: #0f62fe; color: #ffffff; border: none; border-radius: 10px; padding: 10px 16px; font-weight: 700; }
QPushButton:disabled { background: #cbd5e1; }
QPushButton[variant="ghost"] { background: #e7ecf6; color: #0f172a; }
"""
        self.setStyleSheet(extra_qss)

    # ------------------------------------------------------------------
    #  CONSTRUCCIÓN DE LA INTERFAZ
    # ------------------------------------------------------------------
    def _build_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        side = QFrame()
        side.setObjectName("SideBar")
        side.setFixedWidth(240)
        side_layout = QVBoxLayout(side)
        side_layout.setContentsMargins(18, 18, 18, 18)
        side_layout.setSpacing(12)

        self.nav = QListWidget()
        self.nav.setSpacing(6)
        self.nav.setSelectionMode(QListWidget.SingleSelection)
        self.nav.setFocusPolicy(Qt.NoFocus)
        self.stack = QStackedWidget()

        self.import_page = ImportPage(
            ledger=self.ledger,
            invoker=self.invoker,
            error_surface=self.error_surface,
            registry=self.drop_registry,
            dispatch=self.dispatcher,
            extension=self.extension,
        )
        self.jobs_page = JobsPage(self.ledger)
        for text, page in (("IMPORTAR", self.import_page), ("TRABAJOS", self.jobs_page)):
            self.nav.addItem(QListWidgetItem(text))
            self.stack.addWidget(page)

        side_layout.addWidget(self.nav, stretch=1)
        root.addWidget(side)

        main = QFrame()
        main_layout = QVBoxLayout(main)
        main_layout.setContentsMargins(12, 12, 12, 12)
        main_layout.setSpacing(12)
        main_layout.addWidget(self._create_top_bar())
        main_layout.addWidget(self.stack, 1)
        root.addWidget(main, 1)

        self.nav.currentRowChanged.connect(self.stack.setCurrentIndex)
        self.nav.setCurrentRow(0)

    def _create_top_bar(self) -> QWidget:
        top = QFrame()
        top.setObjectName("TopBar")
        top.setFixedHeight(96)
        layout = QHBoxLayout(top)
        layout.setContentsMargins(20, 16, 20, 16)

        title_wrap = QVBoxLayout()
        title = QLabel("DISPO")
        title.setObjectName("TopTitle")
        subtitle = QLabel("IMPORTACIÓN DE TRABAJOS TMS")
        subtitle.setObjectName("TopSubtitle")
        title_wrap.addWidget(title)
        title_wrap.addWidget(subtitle)
        layout.addLayout(title_wrap)
        layout.addStretch(1)
        return top

    # ------------------------------------------------------------------
    #  Drops sobre la ventana (fuera de una zona): van al slot activo
    # ------------------------------------------------------------------
    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()
        else:
            e.ignore()

    def dropEvent(self, e):
        if self.stack.currentWidget() is self.import_page:
            self.drop_registry.dispatch(paths_from_mime(e.mimeData()))
        e.acceptProposedAction()

    def closeEvent(self, e):
        logger.info("Cerrando ventana principal")
        self.invoker.shutdown(wait=False)
        super().closeEvent(e)


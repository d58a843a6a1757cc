# main.py: arranque de la app
# Configura logging, carga los QSS de resources/ si existen y abre la
# ventana principal con un ledger vacío.

import sys
from functools import partial
from pathlib import Path
from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QFile, QTextStream

from config import Config
from logging_config import setup_logging, get_logger
from gui.main_window import DispoApp
from logic.dispo.invoker import ImportInvoker
from logic.dispo.ledger import JobLedger
from logic.dispo.parsing import parse_files

logger = get_logger(__name__)


# -----------------------------------------------
# Utilidad: leer y concatenar archivos QSS en orden
# -----------------------------------------------
def _read_qss(path: Path) -> str:
    f = QFile(str(path))
    if not f.open(QFile.ReadOnly | QFile.Text):
        logger.warning(f"No se pudo abrir {path}")
        return ""
    css = QTextStream(f).readAll()
    f.close()
    return css


def load_styles(app: QApplication) -> None:
    """
    Aplica estilos en este orden (si existen):
      1) resources/base.qss
      2) resources/readability_override.qss
    """
    resources = Path(__file__).resolve().parent / "resources"
    qss_total = ""
    for name in ("base.qss", "readability_override.qss"):
        p = resources / name
        if p.exists():
            qss_total += "\n\n" + _read_qss(p)
    if qss_total:
        app.setStyleSheet(qss_total)


def build_invoker() -> ImportInvoker:
    engine = partial(parse_files, datetime_format=Config.DATETIME_FORMAT)
    return ImportInvoker(engine, max_workers=Config.IMPORT_WORKERS)


# -----------------------------------------------
# Punto de entrada
# -----------------------------------------------
if __name__ == "__main__":
    setup_logging(
        log_level=Config.LOG_LEVEL,
        log_dir=Config.LOG_DIR,
        enable_file_logging=Config.LOG_TO_FILE,
    )
    app = QApplication(sys.argv)
    load_styles(app)

    invoker = build_invoker()
    win = DispoApp(JobLedger(), invoker, extension=Config.ACCEPTED_EXTENSION)
    win.show()

    code = app.exec()
    invoker.shutdown()
    sys.exit(code)

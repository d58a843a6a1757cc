# logging_config.py
"""
Configuración central de logging para el importador de dispo.

Todos los mensajes llevan el nombre del hilo, porque el parseo de los
archivos corre en un hilo del pool y el resto en el hilo de la GUI.

Formato:
    2026-10-17 10:15:30 [INFO    ] [MainThread] dispo_import.logic.dispo.wizard - Importación OK

Uso:
    from logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.INFO, enable_file_logging=True)
    logger = get_logger(__name__)
"""
from __future__ import annotations

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

APP_LOGGER = "dispo_import"


class ThreadContextFilter(logging.Filter):
    """Agrega ``thread_name`` al registro; nunca descarta mensajes."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.thread_name = threading.current_thread().name
        return True


def setup_logging(
    app_name: str = APP_LOGGER,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    Configura el logger raíz de la aplicación.

    - consola siempre
    - archivo rotativo con todo y otro solo con ERROR/CRITICAL (opcional)

    Se puede llamar varias veces: los handlers previos se reemplazan.
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(thread_name)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    thread_filter = ThreadContextFilter()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)
    console.setFormatter(formatter)
    console.addFilter(thread_filter)
    logger.addHandler(console)

    if enable_file_logging:
        if log_dir is None:
            log_dir = Path(__file__).resolve().parent / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        app_log = log_dir / f"{app_name}.log"
        file_handler = RotatingFileHandler(
            filename=app_log,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(thread_filter)
        logger.addHandler(file_handler)

        error_handler = RotatingFileHandler(
            filename=log_dir / f"{app_name}_error.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        error_handler.addFilter(thread_filter)
        logger.addHandler(error_handler)

        logger.info(f"Log a archivo: {app_log}")

    logger.info(f"Logging en nivel {logging.getLevelName(log_level)}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger hijo dentro del espacio ``dispo_import``.

    ``logic.dispo.ledger`` -> ``dispo_import.logic.dispo.ledger``
    """
    if not name.startswith(APP_LOGGER):
        name = f"{APP_LOGGER}.{name}"
    return logging.getLogger(name)


def set_thread_name(name: str) -> None:
    """Renombra el hilo actual (aparece en el campo [thread_name])."""
    threading.current_thread().name = name

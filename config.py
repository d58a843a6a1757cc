# config.py
"""
Configuración del importador.

Los valores salen de variables de entorno; si existe un ``.env`` en la
raíz se carga antes de definir :class:`Config`.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "si", "on")


class Config:
    """Valores por defecto de la aplicación."""

    # Logging
    LOG_LEVEL = logging.getLevelName(os.environ.get("LOG_LEVEL", "INFO").upper())
    if not isinstance(LOG_LEVEL, int):
        LOG_LEVEL = logging.INFO
    LOG_DIR = Path(os.environ.get("LOG_DIR", str(BASE_DIR / "logs")))
    LOG_TO_FILE = _env_bool("LOG_TO_FILE", True)

    # Archivos TMS
    ACCEPTED_EXTENSION = os.environ.get("ACCEPTED_EXTENSION", ".xls")
    DATETIME_FORMAT = os.environ.get("DATETIME_FORMAT", "%m/%d/%Y %H:%M")

    # Pool que corre el parseo
    IMPORT_WORKERS = _env_int("IMPORT_WORKERS", 1)

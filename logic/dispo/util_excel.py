# logic/dispo/util_excel.py
from __future__ import annotations

import math
from pathlib import Path
from typing import Any

import pandas as pd

from .errors import InvalidSheetCountError, NoHeadersFoundError

__all__ = [
    "is_nan",
    "decode_text",
    "cell_text",
    "read_single_sheet",
]


def is_nan(x: Any) -> bool:
    try:
        return bool(pd.isna(x))
    except (TypeError, ValueError):
        try:
            return math.isnan(x)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False


def decode_text(s: str) -> str:
    """Quita los NUL que dejan los .xls exportados por TMS (texto UTF-16 mal cortado)."""
    return s.replace("\x00", "")


def cell_text(v: Any) -> str:
    """Valor de celda como string limpio ('' si es NaN/None)."""
    if v is None or is_nan(v):
        return ""
    return decode_text(str(v)).strip()


def read_single_sheet(book: Path | str, *, engine: str | None = "xlrd") -> pd.DataFrame:
    """
    Lee un libro que debe tener exactamente una hoja.

    La primera fila es el encabezado; todas las celdas se leen como texto.
    Si solo hay encabezado se devuelve un DataFrame vacío con esas columnas.
    """
    path = Path(book)
    with pd.ExcelFile(path, engine=engine) as xls:
        names = xls.sheet_names
        if len(names) != 1:
            raise InvalidSheetCountError(1, len(names))
        raw = pd.read_excel(xls, sheet_name=names[0], header=None, dtype=str)
    return frame_with_header(raw, str(path))


def frame_with_header(raw: pd.DataFrame, source: str = "") -> pd.DataFrame:
    """Convierte la primera fila de ``raw`` en encabezado (decodificado)."""
    if raw.empty:
        raise NoHeadersFoundError(source)
    header = [cell_text(v) for v in raw.iloc[0].tolist()]
    body = raw.iloc[1:].reset_index(drop=True)
    body.columns = header
    return body.apply(lambda col: col.map(lambda v: decode_text(v) if isinstance(v, str) else v))

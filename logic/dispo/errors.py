from __future__ import annotations

from typing import Iterable


class StringToDispoModeError(ValueError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"No se puede convertir '{value}' a modo. Se esperaba 'Delivery' o 'Pickup'")


class ParseFilesError(RuntimeError):
    """Error del motor de parseo; el mensaje es el que ve el operador."""


class NoHeadersFoundError(ParseFilesError):
    def __init__(self, path: str = ""):
        self.path = path
        where = f" en {path}" if path else ""
        super().__init__(f"No se encontró fila de encabezados{where}")


class InvalidSheetCountError(ParseFilesError):
    def __init__(self, expected: int, found: int):
        self.expected = expected
        self.found = found
        super().__init__(f"Se esperaban {expected} hojas, se encontraron {found}")


class MissingColumnsError(ParseFilesError):
    def __init__(self, columns: Iterable[str], path: str = ""):
        self.columns = list(columns)
        where = f" en {path}" if path else ""
        super().__init__(f"Faltan columnas{where}: {', '.join(self.columns)}")


class NumericParseError(ParseFilesError):
    def __init__(self, value: object, column: str = ""):
        self.value = value
        self.column = column
        where = f" ({column})" if column else ""
        super().__init__(f"Valor no numérico{where}: {value!r}")

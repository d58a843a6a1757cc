from __future__ import annotations

import threading
from typing import Callable, Iterable, Iterator, List, Tuple

from logging_config import get_logger

from .models import DispositionMode, JobRow

logger = get_logger(__name__)

LedgerListener = Callable[["JobLedger"], None]


class JobLedger:
    """
    Colección en memoria de los trabajos importados.

    Cada operación arma la lista nueva completa y la reemplaza de una vez,
    así ningún observador ve una operación masiva a medio aplicar.
    ``append``/``append_all``/``set_all`` no deduplican por job number.
    """

    def __init__(self, rows: Iterable[JobRow] = ()) -> None:
        self._rows: List[JobRow] = list(rows)
        self._lock = threading.RLock()
        self._listeners: List[LedgerListener] = []

    # ------------------------------------------------------------ lectura
    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[JobRow]:
        return iter(self.records())

    def __getitem__(self, index: int) -> JobRow:
        return self._rows[index]

    def records(self) -> Tuple[JobRow, ...]:
        with self._lock:
            return tuple(self._rows)

    def job_numbers(self) -> List[str]:
        with self._lock:
            return [r.job_number for r in self._rows]

    def by_mode(self, mode: DispositionMode) -> List[JobRow]:
        with self._lock:
            return [r for r in self._rows if r.mode == mode]

    # ------------------------------------------------------------ mutación
    def set_all(self, rows: Iterable[JobRow]) -> None:
        new_rows = list(rows)
        with self._lock:
            self._rows = new_rows
        logger.debug(f"set_all: {len(new_rows)} registros")
        self._notify()

    def append(self, row: JobRow) -> None:
        self.append_all([row])

    def append_all(self, rows: Iterable[JobRow]) -> None:
        incoming = list(rows)
        with self._lock:
            existing = {r.job_number for r in self._rows}
            dup = [r.job_number for r in incoming if r.job_number in existing]
            self._rows = self._rows + incoming
        if dup:
            logger.warning(f"Job numbers repetidos en el ledger: {', '.join(dup)}")
        logger.debug(f"append_all: +{len(incoming)} (total {len(self._rows)})")
        self._notify()

    def remove_one(self, row: JobRow) -> None:
        """Quita los registros con el mismo job number; si no hay ninguno no hace nada."""
        with self._lock:
            before = len(self._rows)
            self._rows = [r for r in self._rows if r.job_number != row.job_number]
            removed = before - len(self._rows)
        if not removed:
            return
        logger.debug(f"remove_one: {row.job_number} (-{removed})")
        self._notify()

    def remove_many(self, rows: Iterable[JobRow]) -> None:
        to_remove = {r.job_number for r in rows}
        with self._lock:
            before = len(self._rows)
            self._rows = [r for r in self._rows if r.job_number not in to_remove]
            removed = before - len(self._rows)
        if not removed:
            return
        logger.debug(f"remove_many: -{removed}")
        self._notify()

    def remove_at(self, index: int) -> JobRow:
        """Quita por posición. IndexError si la posición no existe (no acepta negativos)."""
        with self._lock:
            if index < 0 or index >= len(self._rows):
                raise IndexError(f"Índice fuera de rango: {index} (total {len(self._rows)})")
            removed = self._rows[index]
            self._rows = self._rows[:index] + self._rows[index + 1:]
        logger.debug(f"remove_at: {index} ({removed.job_number})")
        self._notify()
        return removed

    def clear(self) -> None:
        with self._lock:
            self._rows = []
        logger.debug("clear")
        self._notify()

    # ------------------------------------------------------------ observadores
    def subscribe(self, listener: LedgerListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: LedgerListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

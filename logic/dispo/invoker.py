from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Union

from logging_config import get_logger, set_thread_name

from .models import DispositionMode, ImportedJobRow, JobRow

logger = get_logger(__name__)

ParseFiles = Callable[[str, str, DispositionMode], List[ImportedJobRow]]


@dataclass(frozen=True)
class ImportSuccess:
    rows: List[JobRow] = field(default_factory=list)
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class ImportFailure:
    message: str
    ok: bool = field(default=False, init=False)


ImportOutcome = Union[ImportSuccess, ImportFailure]


def to_job_rows(rows: Iterable[ImportedJobRow]) -> List[JobRow]:
    return [JobRow.from_imported(r) for r in rows]


def failure_message(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


def run_import(
    parse_files: ParseFiles,
    cl_view_path: str,
    shipper_site_path: str,
    mode: DispositionMode,
) -> ImportOutcome:
    """Llama al motor una vez y convierte el resultado en éxito o falla."""
    logger.info(f"Importando ({mode}): {cl_view_path} + {shipper_site_path}")
    try:
        rows = parse_files(cl_view_path, shipper_site_path, mode)
    except Exception as exc:
        logger.warning(f"Importación fallida: {exc}", exc_info=True)
        return ImportFailure(failure_message(exc))
    job_rows = to_job_rows(rows)
    logger.info(f"Importación OK: {len(job_rows)} filas")
    return ImportSuccess(job_rows)


class ImportInvoker:
    """
    Frontera asíncrona hacia el motor de parseo.

    ``invoke`` devuelve enseguida un ``Future`` que siempre resuelve a un
    :data:`ImportOutcome`. No hay reintentos, cancelación ni timeout.
    """

    def __init__(
        self,
        parse_files: ParseFiles,
        max_workers: int = 1,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self.parse_files = parse_files
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="Import"
        )

    def invoke(self, cl_view_path: str, shipper_site_path: str, mode: DispositionMode) -> "Future[ImportOutcome]":
        return self._executor.submit(self._run, cl_view_path, shipper_site_path, mode)

    def _run(self, cl_view_path: str, shipper_site_path: str, mode: DispositionMode) -> ImportOutcome:
        set_thread_name("Import")
        return run_import(self.parse_files, cl_view_path, shipper_site_path, mode)

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

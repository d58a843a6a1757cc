from __future__ import annotations

from concurrent.futures import Future
from datetime import datetime

import pytest

from logic.dispo.error_surface import ErrorSurface
from logic.dispo.file_slot import DropRegistry
from logic.dispo.invoker import run_import
from logic.dispo.ledger import JobLedger
from logic.dispo.models import DispositionMode, ImportedJobRow, JobRow
from logic.dispo.wizard import ImportSession, WizardController, build_import_steps


def make_job(job_number: str, mode: DispositionMode = DispositionMode.PICKUP, **kw) -> JobRow:
    return JobRow(mode=mode, job_number=job_number, **kw)


def make_imported(job_number: str, mode: DispositionMode = DispositionMode.DELIVERY, **kw) -> ImportedJobRow:
    kw.setdefault("calculated_date", datetime(2023, 6, 1, 10, 0))
    return ImportedJobRow(mode=mode, job_number=job_number, **kw)


class FakeInvoker:
    """
    Invoker sin hilos. Con ``deferred=True`` el Future queda abierto hasta
    que el test llama a ``resolve``.
    """

    def __init__(self, rows=None, error: Exception | None = None, deferred: bool = False):
        self.rows = rows or []
        self.error = error
        self.deferred = deferred
        self.calls = []
        self.futures = []

    def _engine(self, a, b, mode):
        if self.error is not None:
            raise self.error
        return list(self.rows)

    def invoke(self, a, b, mode):
        self.calls.append((a, b, mode))
        fut = Future()
        self.futures.append((fut, (a, b, mode)))
        if not self.deferred:
            self.resolve()
        return fut

    def resolve(self):
        fut, args = self.futures[-1]
        fut.set_result(run_import(self._engine, *args))

    def shutdown(self, wait=True):
        pass


@pytest.fixture
def ledger():
    return JobLedger()


@pytest.fixture
def surface():
    return ErrorSurface()


@pytest.fixture
def registry():
    return DropRegistry()


@pytest.fixture
def make_wizard(ledger, surface, registry):
    def _make(invoker):
        session = ImportSession.create()
        return WizardController(
            session=session,
            steps=build_import_steps(session),
            invoker=invoker,
            error_surface=surface,
            ledger=ledger,
            drop_registry=registry,
        )
    return _make

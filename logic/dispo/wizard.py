"""
Asistente de importación CL-View + Shipper Site.

Estados: pasos ``0..N-1`` y un estado final implícito al que solo se
llega con ``finish()`` desde el último paso. ``next()`` nunca pasa del
último paso.

Flujo del final:
    finish() -> invoker.invoke(...) -> Future -> dispatch(settle)
    éxito  -> ledger.append_all(filas), sesión a estado inicial
    falla  -> alerta en la superficie de errores, sesión intacta
"""
from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from logging_config import get_logger

from .error_surface import ErrorSurface
from .file_slot import DropRegistry, FileSlot, XLS_EXTENSION
from .invoker import ImportFailure, ImportInvoker, ImportOutcome, failure_message
from .ledger import JobLedger
from .models import DispositionMode

logger = get_logger(__name__)

CL_VIEW = "CL-View"
SHIPPER_SITE = "Shipper Site"

Dispatch = Callable[[Callable[[], None]], None]
StateListener = Callable[["WizardController"], None]


def _call_now(fn: Callable[[], None]) -> None:
    fn()


class ImportSession:
    """Estado transitorio de una corrida del asistente (no entra al ledger)."""

    def __init__(self, cl_view: FileSlot, shipper_site: FileSlot) -> None:
        self.cl_view = cl_view
        self.shipper_site = shipper_site
        self.mode: Optional[DispositionMode] = None
        self._listeners: List[Callable[[], None]] = []
        cl_view.subscribe(lambda _slot: self._changed())
        shipper_site.subscribe(lambda _slot: self._changed())

    @classmethod
    def create(cls, extension: str = XLS_EXTENSION, open_dialog=None) -> "ImportSession":
        return cls(
            FileSlot(CL_VIEW, extension=extension, open_dialog=open_dialog),
            FileSlot(SHIPPER_SITE, extension=extension, open_dialog=open_dialog),
        )

    @property
    def slots(self) -> Tuple[FileSlot, FileSlot]:
        return self.cl_view, self.shipper_site

    def set_mode(self, mode: Optional[DispositionMode]) -> None:
        if mode == self.mode:
            return
        self.mode = mode
        self._changed()

    def reset(self) -> None:
        self.cl_view.clear()
        self.shipper_site.clear()
        self.set_mode(None)

    def snapshot(self) -> Tuple[Optional[str], Optional[str], Optional[DispositionMode]]:
        return self.cl_view.value, self.shipper_site.value, self.mode

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()


@dataclass(frozen=True)
class WizardStep:
    name: str
    slot: FileSlot
    can_advance: Callable[[ImportSession], bool]


def build_import_steps(session: ImportSession) -> List[WizardStep]:
    """Paso 0: CL-View cargado. Paso 1: Shipper Site cargado y modo elegido."""
    return [
        WizardStep(
            name=f"Seleccionar {CL_VIEW}",
            slot=session.cl_view,
            can_advance=lambda s: not s.cl_view.is_empty,
        ),
        WizardStep(
            name=f"Seleccionar {SHIPPER_SITE}",
            slot=session.shipper_site,
            can_advance=lambda s: not s.shipper_site.is_empty and s.mode is not None,
        ),
    ]


class WizardController:
    def __init__(
        self,
        session: ImportSession,
        steps: Sequence[WizardStep],
        invoker: ImportInvoker,
        error_surface: ErrorSurface,
        ledger: JobLedger,
        drop_registry: Optional[DropRegistry] = None,
        dispatch: Dispatch = _call_now,
    ) -> None:
        if not steps:
            raise ValueError("El asistente necesita al menos un paso")
        self.session = session
        self.steps = list(steps)
        self.invoker = invoker
        self.error_surface = error_surface
        self.ledger = ledger
        self.drop_registry = drop_registry
        self.dispatch = dispatch
        self._index = 0
        self._pending = False
        self._listeners: List[StateListener] = []

        if drop_registry is not None:
            for step in self.steps:
                drop_registry.register_slot(step.slot)
        session.subscribe(self._notify)
        self._activate_drop_target()

    # ------------------------------------------------------------ estado
    @property
    def index(self) -> int:
        return self._index

    @property
    def current_step(self) -> WizardStep:
        return self.steps[self._index]

    @property
    def last_index(self) -> int:
        return len(self.steps) - 1

    @property
    def is_last(self) -> bool:
        return self._index == self.last_index

    @property
    def pending(self) -> bool:
        return self._pending

    def can_advance(self, index: Optional[int] = None) -> bool:
        i = self._index if index is None else index
        if i < 0 or i > self.last_index:
            return False
        return bool(self.steps[i].can_advance(self.session))

    def can_previous(self) -> bool:
        return self._index > 0

    def can_finish(self) -> bool:
        return self.is_last and not self._pending and self.can_advance(self.last_index)

    # ------------------------------------------------------------ navegación
    def next(self) -> bool:
        if self.is_last or not self.can_advance(self._index):
            return False
        self._go_to(self._index + 1)
        return True

    def previous(self) -> bool:
        if not self.can_previous():
            return False
        self._go_to(self._index - 1)
        return True

    def finish(self) -> bool:
        """Lanza la importación. No hace nada si no se puede terminar o ya hay una en curso."""
        if not self.can_finish():
            return False
        cl_view, shipper_site, mode = self.session.snapshot()
        self._pending = True
        self._activate_drop_target()
        self._notify()
        try:
            future = self.invoker.invoke(cl_view, shipper_site, mode)
        except Exception as exc:
            logger.exception("No se pudo lanzar la importación")
            self.settle(ImportFailure(failure_message(exc)))
            return True
        future.add_done_callback(self._on_done)
        return True

    def settle(self, outcome: ImportOutcome) -> None:
        self._pending = False
        if outcome.ok:
            self.ledger.append_all(outcome.rows)
            self.session.reset()
            self._go_to(0)
        else:
            self._activate_drop_target()
            self.error_surface.alert(outcome.message)
        self._notify()

    # ------------------------------------------------------------ observadores
    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def _on_done(self, future: "Future[ImportOutcome]") -> None:
        try:
            outcome = future.result()
        except Exception as exc:
            outcome = ImportFailure(failure_message(exc))
        self.dispatch(lambda: self.settle(outcome))

    def _go_to(self, index: int) -> None:
        self._index = index
        logger.debug(f"Paso {index}: {self.steps[index].name}")
        self._activate_drop_target()
        self._notify()

    def _activate_drop_target(self) -> None:
        # sin destino mientras hay una importación en curso
        if self.drop_registry is not None:
            self.drop_registry.activate(None if self._pending else self.current_step.slot.name)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

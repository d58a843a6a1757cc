"""
Núcleo del importador de dispo (sin Qt).

Slots de archivo, asistente de dos pasos, frontera asíncrona hacia el
motor de parseo y el ledger de trabajos que alimenta las tablas.
"""

from .models import DispositionMode, TemperatureRange, ImportedJobRow, JobRow
from .ledger import JobLedger
from .file_slot import FileSlot, DropRegistry
from .error_surface import ErrorSurface, AlertContent
from .invoker import ImportInvoker, ImportSuccess, ImportFailure, ImportOutcome
from .wizard import ImportSession, WizardController, WizardStep, build_import_steps

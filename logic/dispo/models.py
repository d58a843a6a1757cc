from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List

from .errors import StringToDispoModeError


class DispositionMode(str, Enum):
    PICKUP = "Pickup"
    DELIVERY = "Delivery"

    @classmethod
    def from_str(cls, value: str) -> "DispositionMode":
        """Acepta solo 'Pickup' o 'Delivery' (sensible a mayúsculas)."""
        for mode in cls:
            if mode.value == value:
                return mode
        raise StringToDispoModeError(value)

    def __str__(self) -> str:
        return self.value


class TemperatureRange(str, Enum):
    DRY_ICE = "DryIce"
    DRY_SHIPPER = "DryShipper"
    REFRIGERATED = "Refrigerated"
    CONTROLLED_AMBIENT = "ControlledAmbient"
    FROZEN = "Frozen"
    AMBIENT = "Ambient"
    NON_SOP = "NonSOP"
    INVALID = "Invalid"

    @property
    def label(self) -> str:
        return _TEMPERATURE_LABELS[self]


_TEMPERATURE_LABELS = {
    TemperatureRange.DRY_ICE: "Dry Ice",
    TemperatureRange.DRY_SHIPPER: "Dry Shipper",
    TemperatureRange.REFRIGERATED: "Refrigerated",
    TemperatureRange.CONTROLLED_AMBIENT: "Controlled Ambient",
    TemperatureRange.FROZEN: "Frozen",
    TemperatureRange.AMBIENT: "Ambient",
    TemperatureRange.NON_SOP: "Non SOP",
    TemperatureRange.INVALID: "Invalid",
}


@dataclass(frozen=True)
class ImportedJobRow:
    """
    Fila tal cual la devuelve el motor de parseo (sin driver/vehicle).

    tolerance está en minutos: 0, 15, 30, 60 o 120.
    """
    mode: DispositionMode
    job_number: str
    hawb_number: str = ""
    address: str = ""
    postal_code: str = ""
    city: str = ""
    country: str = ""
    early_date: datetime = datetime(1970, 1, 1)
    late_date: datetime = datetime(1970, 1, 1)
    calculated_date: datetime = datetime(1970, 1, 1)
    tolerance: int = 0
    contact_name: str = ""
    equipment: str = ""
    quantities: int = 0
    temperature_ranges: List[TemperatureRange] = field(default_factory=list)


@dataclass(frozen=True)
class JobRow:
    """Registro del ledger. driver y vehicle los llena otro flujo."""
    mode: DispositionMode
    job_number: str
    hawb_number: str = ""
    address: str = ""
    postal_code: str = ""
    city: str = ""
    country: str = ""
    early_date: datetime = datetime(1970, 1, 1)
    late_date: datetime = datetime(1970, 1, 1)
    calculated_date: datetime = datetime(1970, 1, 1)
    tolerance: int = 0
    contact_name: str = ""
    equipment: str = ""
    quantities: int = 0
    temperature_ranges: List[TemperatureRange] = field(default_factory=list)
    driver: str = ""
    vehicle: str = ""

    @classmethod
    def from_imported(cls, row: ImportedJobRow) -> "JobRow":
        return cls(
            mode=row.mode,
            job_number=row.job_number,
            hawb_number=row.hawb_number,
            address=row.address,
            postal_code=row.postal_code,
            city=row.city,
            country=row.country,
            early_date=row.early_date,
            late_date=row.late_date,
            calculated_date=row.calculated_date,
            tolerance=row.tolerance,
            contact_name=row.contact_name,
            equipment=row.equipment,
            quantities=row.quantities,
            temperature_ranges=list(row.temperature_ranges),
            driver="",
            vehicle="",
        )

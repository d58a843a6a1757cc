"""
Motor de parseo por defecto: CL-View + Shipper Site (exportes .xls de TMS).

Cada libro trae una sola hoja con encabezados en la primera fila. Del
CL-View salen destino, ventana horaria, cantidad y equipo; del Shipper
Site el HAWB y los rangos de temperatura. Ambos se cruzan por ``Load #``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Sequence

import pandas as pd

from logging_config import get_logger

from .errors import MissingColumnsError, NumericParseError
from .models import DispositionMode, ImportedJobRow, TemperatureRange
from .util_excel import cell_text, decode_text, is_nan, read_single_sheet

logger = get_logger(__name__)

DEFAULT_DATETIME_FORMAT = "%m/%d/%Y %H:%M"
EPOCH = datetime(1970, 1, 1)

JOB_NUMBER_COLUMN = "Load #"
HAWB_COLUMN = "Ref: House Waybill Number"
QUANTITY_COLUMN = "Actual Quantity"
EQUIPMENT_CODES_COLUMN = "Equipment Codes"
TEMPERATURE_RANGE_COLUMN = "Ref: Temperature Range"

TEMPERATURE_LABELS = {
    "Frozen Dry Ice -80C to -20C": TemperatureRange.DRY_ICE,
    "Deep Frozen Dry Ice -70C [+/-10C]": TemperatureRange.DRY_ICE,
    "Cryogenics -190C to -150C": TemperatureRange.DRY_SHIPPER,
    "Refrigerated +2C to +8C": TemperatureRange.REFRIGERATED,
    "Controlled Ambient +15C to +25C": TemperatureRange.CONTROLLED_AMBIENT,
    "Frozen -25C to -15C": TemperatureRange.FROZEN,
    "Ambient": TemperatureRange.AMBIENT,
    "Frozen -50C  [+/-10C]": TemperatureRange.NON_SOP,
}


@dataclass(frozen=True)
class ColumnMapping:
    """Nombres de columna según el modo (Delivery = Consignee, Pickup = Shipper)."""
    target_early: str
    target_late: str
    info: str
    name: str
    address: str
    city: str
    state: str
    postal_code: str
    country: str
    job_number: str = JOB_NUMBER_COLUMN
    hawb: str = HAWB_COLUMN
    quantity: str = QUANTITY_COLUMN
    equipment_codes: str = EQUIPMENT_CODES_COLUMN
    temperature_range: str = TEMPERATURE_RANGE_COLUMN

    @classmethod
    def for_mode(cls, mode: DispositionMode) -> "ColumnMapping":
        if mode == DispositionMode.DELIVERY:
            party, target = "Consignee", "Target Delivery"
        else:
            party, target = "Shipper", "Target Ship"
        return cls(
            target_early=f"{target} (Early)",
            target_late=f"{target} (Late)",
            info=party,
            name=f"{party} Name",
            address=f"{party} Address",
            city=f"{party} City",
            state=f"{party} State",
            postal_code=f"{party} Postal Code",
            country=f"{party} Country",
        )

    def cl_view_columns(self) -> List[str]:
        return [
            self.job_number, self.quantity, self.equipment_codes,
            self.target_early, self.target_late,
            self.info, self.name, self.address, self.city,
            self.state, self.postal_code, self.country,
        ]

    def shipper_site_columns(self) -> List[str]:
        return [self.job_number, self.hawb, self.temperature_range]


# ----------------------------------------------------------------- celdas
def extract_temperature_ranges(value: Any) -> List[TemperatureRange]:
    """
    Celda vacía -> [Ambient]. Si no, lista separada por comas; cada etiqueta
    desconocida queda como Invalid (también una celda con solo espacios).
    """
    text = "" if value is None or is_nan(value) else decode_text(str(value))
    if text == "":
        return [TemperatureRange.AMBIENT]
    return [TEMPERATURE_LABELS.get(part.strip(), TemperatureRange.INVALID) for part in text.split(",")]


def parse_quantity(value: Any, column: str = QUANTITY_COLUMN) -> int:
    """Lee como flotante y trunca a entero ('3.0' -> 3)."""
    try:
        if isinstance(value, (int, float)) and not isinstance(value, bool) and not is_nan(value):
            return int(value)
        return int(float(cell_text(value)))
    except (ValueError, OverflowError):
        raise NumericParseError(value, column) from None


def parse_datetime(value: Any, fmt: str = DEFAULT_DATETIME_FORMAT) -> datetime:
    """Fecha de celda; si no se puede leer devuelve 1970-01-01 00:00."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    text = cell_text(value)
    if not text:
        return EPOCH
    try:
        return datetime.strptime(text, fmt)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Fecha ilegible: {text!r}")
        return EPOCH


def middle_between(date1: datetime, date2: datetime) -> datetime:
    earlier, later = (date1, date2) if date1 < date2 else (date2, date1)
    return earlier + (later - earlier) / 2


def tolerance_bucket(minutes: int) -> int:
    minutes = abs(minutes)
    if minutes <= 0:
        return 0
    if minutes <= 15:
        return 15
    if minutes <= 30:
        return 30
    if minutes <= 60:
        return 60
    return 120


def calculate_tolerance(early: datetime, late: datetime) -> int:
    """Minutos entre el borde temprano y el punto medio, redondeados al tramo."""
    middle = middle_between(early, late)
    minutes = int(abs((early - middle).total_seconds()) // 60)
    return tolerance_bucket(minutes)


# ----------------------------------------------------------------- tablas
def select_columns(df: pd.DataFrame, columns: Sequence[str], source: str = "") -> pd.DataFrame:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise MissingColumnsError(missing, source)
    return df.loc[:, list(columns)]


def rows_from_frames(
    cl_view: pd.DataFrame,
    shipper_site: pd.DataFrame,
    mode: DispositionMode,
    datetime_format: str = DEFAULT_DATETIME_FORMAT,
) -> List[ImportedJobRow]:
    mapping = ColumnMapping.for_mode(mode)
    cl = select_columns(cl_view, mapping.cl_view_columns(), "CL-View")
    ss = select_columns(shipper_site, mapping.shipper_site_columns(), "Shipper Site")

    joined = cl.merge(ss, on=mapping.job_number, how="inner")
    logger.debug(f"CL-View {len(cl)} filas, Shipper Site {len(ss)} filas, cruce {len(joined)}")

    rows: List[ImportedJobRow] = []
    for _, r in joined.iterrows():
        early = parse_datetime(r.get(mapping.target_early), datetime_format)
        late = parse_datetime(r.get(mapping.target_late), datetime_format)
        rows.append(
            ImportedJobRow(
                mode=mode,
                job_number=cell_text(r.get(mapping.job_number)),
                hawb_number=cell_text(r.get(mapping.hawb)),
                address=cell_text(r.get(mapping.address)),
                postal_code=cell_text(r.get(mapping.postal_code)),
                city=cell_text(r.get(mapping.city)),
                country=cell_text(r.get(mapping.country)),
                early_date=early,
                late_date=late,
                calculated_date=middle_between(early, late),
                tolerance=calculate_tolerance(early, late),
                contact_name=cell_text(r.get(mapping.name)),
                equipment=cell_text(r.get(mapping.equipment_codes)),
                quantities=parse_quantity(r.get(mapping.quantity), mapping.quantity),
                temperature_ranges=extract_temperature_ranges(r.get(mapping.temperature_range)),
            )
        )
    return rows


def parse_files(
    cl_view_path: str,
    shipper_site_path: str,
    mode: DispositionMode,
    datetime_format: str = DEFAULT_DATETIME_FORMAT,
) -> List[ImportedJobRow]:
    cl_view = read_single_sheet(cl_view_path)
    shipper_site = read_single_sheet(shipper_site_path)
    return rows_from_frames(cl_view, shipper_site, mode, datetime_format)

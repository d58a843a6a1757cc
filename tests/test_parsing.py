from datetime import datetime

import pandas as pd
import pytest

from logic.dispo import parsing, util_excel
from logic.dispo.errors import (
    InvalidSheetCountError, MissingColumnsError, NoHeadersFoundError, NumericParseError,
    StringToDispoModeError,
)
from logic.dispo.models import DispositionMode, TemperatureRange
from logic.dispo.parsing import (
    ColumnMapping, calculate_tolerance, extract_temperature_ranges, middle_between,
    parse_datetime, parse_quantity, rows_from_frames,
)


def cl_view_frame(prefix="Consignee", target="Target Delivery", rows=None):
    cols = [
        "Load #", "Actual Quantity", "Equipment Codes",
        f"{target} (Early)", f"{target} (Late)",
        prefix, f"{prefix} Name", f"{prefix} Address", f"{prefix} City",
        f"{prefix} State", f"{prefix} Postal Code", f"{prefix} Country",
        "Otra Columna",
    ]
    rows = rows or [
        ["100", "2", "BOX", "06/01/2023 09:00", "06/01/2023 11:00",
         "C1", "Lab A", "Main St 1", "Frankfurt", "HE", "60549", "DE", "x"],
        ["200", "1.0", "PAL", "06/02/2023 08:00", "06/02/2023 08:20",
         "C2", "Lab B", "Ring 2", "Mainz", "RP", "55116", "DE", "y"],
        ["300", "5", "BOX", "06/03/2023 08:00", "06/03/2023 08:00",
         "C3", "Lab C", "Weg 3", "Wiesbaden", "HE", "65183", "DE", "z"],
    ]
    return pd.DataFrame(rows, columns=cols)


def shipper_site_frame(rows=None):
    rows = rows or [
        ["300", "H300", None],
        ["100", "H100", "Frozen -25C to -15C, Refrigerated +2C to +8C"],
        ["999", "H999", "Ambient"],
    ]
    return pd.DataFrame(rows, columns=["Load #", "Ref: House Waybill Number", "Ref: Temperature Range"])


def test_column_mapping_by_mode():
    d = ColumnMapping.for_mode(DispositionMode.DELIVERY)
    p = ColumnMapping.for_mode(DispositionMode.PICKUP)
    assert d.target_early == "Target Delivery (Early)"
    assert d.address == "Consignee Address"
    assert p.target_late == "Target Ship (Late)"
    assert p.name == "Shipper Name"
    assert d.job_number == p.job_number == "Load #"


def test_rows_from_frames_inner_join_keeps_cl_view_order():
    rows = rows_from_frames(cl_view_frame(), shipper_site_frame(), DispositionMode.DELIVERY)
    assert [r.job_number for r in rows] == ["100", "300"]

    first = rows[0]
    assert first.mode == DispositionMode.DELIVERY
    assert first.hawb_number == "H100"
    assert first.contact_name == "Lab A"
    assert first.address == "Main St 1"
    assert first.postal_code == "60549"
    assert first.city == "Frankfurt"
    assert first.country == "DE"
    assert first.equipment == "BOX"
    assert first.quantities == 2
    assert first.early_date == datetime(2023, 6, 1, 9, 0)
    assert first.calculated_date == datetime(2023, 6, 1, 10, 0)
    assert first.tolerance == 60
    assert first.temperature_ranges == [TemperatureRange.FROZEN, TemperatureRange.REFRIGERATED]

    assert rows[1].temperature_ranges == [TemperatureRange.AMBIENT]
    assert rows[1].tolerance == 0


def test_pickup_uses_shipper_columns():
    cl = cl_view_frame(prefix="Shipper", target="Target Ship")
    rows = rows_from_frames(cl, shipper_site_frame(), DispositionMode.PICKUP)
    assert rows[0].mode == DispositionMode.PICKUP
    assert rows[0].city == "Frankfurt"


def test_pickup_with_delivery_columns_fails():
    with pytest.raises(MissingColumnsError) as exc:
        rows_from_frames(cl_view_frame(), shipper_site_frame(), DispositionMode.PICKUP)
    assert "Target Ship (Early)" in exc.value.columns


def test_non_numeric_quantity_fails():
    cl = cl_view_frame()
    cl.loc[0, "Actual Quantity"] = "dos"
    with pytest.raises(NumericParseError):
        rows_from_frames(cl, shipper_site_frame(), DispositionMode.DELIVERY)


@pytest.mark.parametrize("value, expected", [("3", 3), ("3.9", 3), (4.0, 4), (7, 7)])
def test_parse_quantity(value, expected):
    assert parse_quantity(value) == expected


@pytest.mark.parametrize("value", [None, "", "n/a", float("nan")])
def test_parse_quantity_rejects(value):
    with pytest.raises(NumericParseError):
        parse_quantity(value)


def test_temperature_ranges():
    assert extract_temperature_ranges("") == [TemperatureRange.AMBIENT]
    assert extract_temperature_ranges(None) == [TemperatureRange.AMBIENT]
    assert extract_temperature_ranges("Deep Frozen Dry Ice -70C [+/-10C]") == [TemperatureRange.DRY_ICE]
    assert extract_temperature_ranges("Cryogenics -190C to -150C, Algo") == [
        TemperatureRange.DRY_SHIPPER, TemperatureRange.INVALID,
    ]
    assert extract_temperature_ranges("Frozen -50C  [+/-10C]") == [TemperatureRange.NON_SOP]


def test_parse_datetime_fallbacks():
    assert parse_datetime("06/01/2023 09:30") == datetime(2023, 6, 1, 9, 30)
    assert parse_datetime("2023-06-01 09:30:00") == datetime(2023, 6, 1, 9, 30)
    assert parse_datetime("mañana") == datetime(1970, 1, 1)
    assert parse_datetime(None) == datetime(1970, 1, 1)
    assert parse_datetime("01.06.2023 09:30", "%d.%m.%Y %H:%M") == datetime(2023, 6, 1, 9, 30)


def test_middle_between_is_order_independent():
    a, b = datetime(2023, 1, 1, 8, 0), datetime(2023, 1, 1, 12, 0)
    assert middle_between(a, b) == middle_between(b, a) == datetime(2023, 1, 1, 10, 0)


@pytest.mark.parametrize("window_min, expected", [
    (0, 0), (20, 15), (30, 15), (60, 30), (62, 60), (120, 60), (122, 120), (600, 120),
])
def test_calculate_tolerance_buckets(window_min, expected):
    early = datetime(2023, 1, 1, 8, 0)
    late = early + pd.Timedelta(minutes=window_min).to_pytimedelta()
    assert calculate_tolerance(early, late) == expected


def test_frame_with_header_strips_nul_bytes():
    raw = pd.DataFrame([["L\x00o\x00a\x00d\x00 #", "City"], ["1\x00", "Ma\x00inz"]])
    df = util_excel.frame_with_header(raw, "x.xls")
    assert list(df.columns) == ["Load #", "City"]
    assert df.iloc[0].tolist() == ["1", "Mainz"]


def test_frame_with_header_empty_sheet():
    with pytest.raises(NoHeadersFoundError):
        util_excel.frame_with_header(pd.DataFrame(), "x.xls")


def test_read_single_sheet_requires_one_sheet(monkeypatch):
    class FakeBook:
        sheet_names = ["Hoja1", "Hoja2"]

        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

    monkeypatch.setattr(util_excel.pd, "ExcelFile", FakeBook)
    with pytest.raises(InvalidSheetCountError) as exc:
        util_excel.read_single_sheet("dos_hojas.xls")
    assert (exc.value.expected, exc.value.found) == (1, 2)


def test_parse_files_reads_both_books(monkeypatch):
    frames = {"cl.xls": cl_view_frame(), "site.xls": shipper_site_frame()}
    monkeypatch.setattr(parsing, "read_single_sheet", lambda p: frames[p])
    rows = parsing.parse_files("cl.xls", "site.xls", DispositionMode.DELIVERY)
    assert [r.job_number for r in rows] == ["100", "300"]


def test_mode_from_str_is_exact():
    assert DispositionMode.from_str("Pickup") is DispositionMode.PICKUP
    assert str(DispositionMode.from_str("Delivery")) == "Delivery"
    with pytest.raises(StringToDispoModeError):
        DispositionMode.from_str("delivery")


@pytest.mark.parametrize("value", ["inf", "-inf", "1e400", float("inf")])
def test_parse_quantity_overflow_is_numeric_error(value):
    with pytest.raises(NumericParseError):
        parse_quantity(value)


def test_blank_temperature_cell_is_invalid():
    assert extract_temperature_ranges("  ") == [TemperatureRange.INVALID]
    assert extract_temperature_ranges(float("nan")) == [TemperatureRange.AMBIENT]

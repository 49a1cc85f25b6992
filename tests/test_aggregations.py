"""In-memory dashboard counters."""

# Standard library imports
from datetime import UTC, datetime, timedelta, timezone

# Local application imports
from consulta.services.dashboard.aggregation_services import (
    UNKNOWN_DEPARTMENT,
    UNKNOWN_LOCALITY,
    UNKNOWN_MUNICIPALITY,
    count_by_day,
    count_by_department,
    count_by_locality,
    count_by_sector,
    count_sector_by_locality,
    count_sector_by_municipality,
    count_sectors_by_region,
    top_sector_by_department,
)


def test_count_by_day_buckets_in_utc_ascending():
    honduras = timezone(timedelta(hours=-6))
    timestamps = [
        datetime(2026, 3, 2, 10, 0, tzinfo=UTC),
        # 20:00 in Tegucigalpa is already the next day in UTC
        datetime(2026, 3, 1, 20, 0, tzinfo=honduras),
        datetime(2026, 3, 1, 8, 0, tzinfo=UTC),
        # SQLite returns naive values, read as UTC
        datetime(2026, 3, 2, 23, 59),
    ]
    result = count_by_day(timestamps)
    assert [(item.date, item.count) for item in result] == [("2026-03-01", 1), ("2026-03-02", 3)]


def test_count_by_day_omits_empty_days():
    assert count_by_day([]) == []


def test_count_by_sector_orders_by_count_then_name():
    result = count_by_sector(
        [
            ["Salud", "Educación"],
            ["Educación"],
            ["Ambiente", "Salud"],
            ["Transporte"],
        ]
    )
    assert [(item.sector, item.count) for item in result] == [
        ("Educación", 2),
        ("Salud", 2),
        ("Ambiente", 1),
        ("Transporte", 1),
    ]


def test_count_by_sector_keeps_top_ten():
    sector_lists = [[f"Sector {index:02d}"] * 1 for index in range(15)]
    assert len(count_by_sector(sector_lists)) == 10


def test_count_by_sector_without_limit_keeps_every_sector():
    sector_lists = [[f"Sector {index:02d}"] for index in range(15)]
    assert len(count_by_sector(sector_lists, limit=None)) == 15


def test_count_by_sector_counts_a_sector_once_per_consultation():
    result = count_by_sector([["Salud", "Salud"]])
    assert [(item.sector, item.count) for item in result] == [("Salud", 1)]


def test_count_by_department_groups_missing_department():
    result = count_by_department(["Cortés", None, "Cortés", "Atlántida"])
    assert [(item.department, item.count) for item in result] == [
        ("Cortés", 2),
        ("Atlántida", 1),
        (UNKNOWN_DEPARTMENT, 1),
    ]


def test_count_by_locality_labels_blank_values():
    result = count_by_locality(["Colonia Kennedy", " ", None, "Colonia Kennedy"])
    assert [(item.locality, item.count) for item in result] == [("Colonia Kennedy", 2), (UNKNOWN_LOCALITY, 2)]


def test_top_sector_by_department_reports_share():
    rows = [
        ("Cortés", ["Salud", "Educación"]),
        ("Cortés", ["Salud"]),
        ("Francisco Morazán", ["Seguridad"]),
    ]
    result = top_sector_by_department(rows)
    assert [item.model_dump() for item in result] == [
        {"department": "Cortés", "sector": "Salud", "count": 2, "total": 3, "percentage": 66.7},
        {"department": "Francisco Morazán", "sector": "Seguridad", "count": 1, "total": 1, "percentage": 100.0},
    ]


def test_top_sector_by_department_skips_departments_without_sectors():
    assert top_sector_by_department([("Cortés", [])]) == []


def test_count_sectors_by_region_orders_regions_then_counts():
    rows = [
        ("Yoro", ["Salud"]),
        ("Cortés", ["Educación", "Salud"]),
        ("Cortés", ["Salud"]),
        (None, ["Ambiente"]),
    ]
    result = count_sectors_by_region(rows, unknown=UNKNOWN_DEPARTMENT)
    assert [(item.region, item.sector, item.count) for item in result] == [
        ("Cortés", "Salud", 2),
        ("Cortés", "Educación", 1),
        (UNKNOWN_DEPARTMENT, "Ambiente", 1),
        ("Yoro", "Salud", 1),
    ]


def test_count_sectors_by_region_with_sector_filter():
    rows = [("Cortés", ["Educación", "Salud"]), ("Yoro", ["Educación"]), ("Colón", ["Ambiente"])]
    result = count_sectors_by_region(rows, unknown=UNKNOWN_DEPARTMENT, sector="Salud")
    assert [(item.region, item.sector, item.count) for item in result] == [("Cortés", "Salud", 1)]


def test_count_sector_by_municipality_orders_by_department_then_municipality():
    rows = [
        (("08", "Francisco Morazán", 801, "Distrito Central"), ["Salud", "Educación"]),
        (("05", "Cortés", 502, "Choloma"), ["Salud"]),
        (("08", "Francisco Morazán", 801, "Distrito Central"), ["Educación"]),
        (("05", "Cortés", None, None), ["Ambiente"]),
    ]
    result = count_sector_by_municipality(rows)
    assert [(item.department, item.municipality, item.sector, item.count) for item in result] == [
        ("Cortés", "Choloma", "Salud", 1),
        ("Cortés", UNKNOWN_MUNICIPALITY, "Ambiente", 1),
        ("Francisco Morazán", "Distrito Central", "Educación", 2),
        ("Francisco Morazán", "Distrito Central", "Salud", 1),
    ]
    assert result[0].municipality_id == 502
    assert result[0].department_id == "05"
    assert result[1].municipality_id is None


def test_count_sector_by_locality_separates_custom_localities():
    rows = [
        ((801, "Distrito Central", 1, "Colonia Kennedy"), ["Salud"]),
        ((801, "Distrito Central", None, "Caserío Las Flores"), ["Salud"]),
        ((801, "Distrito Central", None, "Aldea Nueva"), ["Educación", "Salud"]),
        ((801, "Distrito Central", None, None), ["Ambiente"]),
    ]
    result = count_sector_by_locality(rows)
    assert [(item.locality_id, item.locality, item.sector) for item in result] == [
        (None, "Aldea Nueva", "Educación"),
        (None, "Aldea Nueva", "Salud"),
        (None, "Caserío Las Flores", "Salud"),
        (1, "Colonia Kennedy", "Salud"),
        (None, UNKNOWN_LOCALITY, "Ambiente"),
    ]


def test_count_sector_by_locality_with_sector_filter_drops_other_rows():
    rows = [((801, "Distrito Central", 1, "Colonia Kennedy"), ["Educación"])]
    assert count_sector_by_locality(rows, sector="Salud") == []

# Local application imports
from consulta.services.dashboard.aggregation_services import (
    count_by_day,
    count_by_department,
    count_by_locality,
    count_by_sector,
    count_sector_by_locality,
    count_sector_by_municipality,
    count_sectors_by_region,
    get_all_sector_counts,
    get_consultations_by_date,
    get_consultations_by_department,
    get_consultations_by_locality,
    get_consultations_by_sector,
    get_dashboard_stats,
    get_sector_by_locality,
    get_sector_by_municipality,
    get_sectors_by_department,
    get_sectors_by_locality,
    get_sectors_by_municipality,
    get_top_sector_by_department,
    top_sector_by_department,
)

__all__ = [
    "count_by_day",
    "count_by_department",
    "count_by_locality",
    "count_by_sector",
    "count_sector_by_locality",
    "count_sector_by_municipality",
    "count_sectors_by_region",
    "get_all_sector_counts",
    "get_consultations_by_date",
    "get_consultations_by_department",
    "get_consultations_by_locality",
    "get_consultations_by_sector",
    "get_dashboard_stats",
    "get_sector_by_locality",
    "get_sector_by_municipality",
    "get_sectors_by_department",
    "get_sectors_by_locality",
    "get_sectors_by_municipality",
    "get_top_sector_by_department",
    "top_sector_by_department",
]

"""
Core modules for Canadian Housing Insights.

Contains the data models, the listings loader, filtering and aggregation.
"""

from canhousing.core.models import (
    CityComparison,
    ConstraintSet,
    DashboardOutputs,
    IncomeSeriesPoint,
    Listing,
    Notification,
    StyleToken,
    SummaryRow,
    WorkingDataset,
)
from canhousing.core.loader import load_dataset
from canhousing.core.filters import available_cities, filter_listings, matches
from canhousing.core.aggregation import (
    compare_cities,
    income_by_city,
    order_for_display,
    summarize,
)

__all__ = [
    "CityComparison",
    "ConstraintSet",
    "DashboardOutputs",
    "IncomeSeriesPoint",
    "Listing",
    "Notification",
    "StyleToken",
    "SummaryRow",
    "WorkingDataset",
    "load_dataset",
    "available_cities",
    "filter_listings",
    "matches",
    "compare_cities",
    "income_by_city",
    "order_for_display",
    "summarize",
]

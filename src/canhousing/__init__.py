"""
Canadian Housing Insights

An interactive dashboard over Canadian housing listings: filter by province,
city, price, bedrooms and bathrooms, then explore price distributions, a
listings map, per-city summary statistics and household income.

Main components:
- core: Listings loader, filters and aggregations
- dashboard: Reactive per-user session and Plotly chart builders
- api: Flask REST API server
- cli: Command-line interfaces

Usage:
    from canhousing.core import load_dataset
    from canhousing.dashboard import DashboardSession
"""

__version__ = "1.0.0"

from canhousing.config import get_config
from canhousing.logging_config import setup_logging

__all__ = [
    "__version__",
    "get_config",
    "setup_logging",
]

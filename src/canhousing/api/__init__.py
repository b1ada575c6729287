"""
Flask REST API for the housing dashboard.

Provides endpoints for:
- Filter options and dashboard state
- Filter updates
- Chart figures and the summary table
"""

from canhousing.api.server import create_app
from canhousing.api.routes import register_routes

__all__ = [
    "create_app",
    "register_routes",
]

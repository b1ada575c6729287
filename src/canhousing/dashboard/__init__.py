"""
Reactive dashboard layer.

Provides the per-user DashboardSession and the Plotly chart builders that
consume its published outputs.
"""

from canhousing.dashboard.session import DashboardSession
from canhousing.dashboard.charts import CHART_NAMES, build_chart, summary_payload

__all__ = [
    "DashboardSession",
    "CHART_NAMES",
    "build_chart",
    "summary_payload",
]

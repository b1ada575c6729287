"""
Command-line interface modules.

Provides CLI entry points for:
- dashboard_server: Start the dashboard API
- summary: Print the per-city price summary for a set of filters
"""

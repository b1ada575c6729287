"""
Chart Builders

Turns published dashboard outputs into Plotly figures. Every builder accepts
an empty input and returns a figure with no traces rather than failing.
"""

from typing import Any, Dict, List, Sequence

import pandas as pd
import plotly.graph_objects as go

from canhousing.core.aggregation import order_for_display
from canhousing.core.constants import MAP_CENTER, MAP_ZOOM
from canhousing.core.models import (
    CityComparison,
    DashboardOutputs,
    IncomeSeriesPoint,
    Listing,
    SummaryRow,
)
from canhousing.exceptions import ValidationError
from canhousing.utils.price_parser import format_price
from canhousing.utils.styling import STYLED_COLUMNS, style_summary

SUMMARY_HEADERS: Dict[str, str] = {
    "city": "City",
    "average": "Avg_Price",
    "median": "Median_Price",
    "minimum": "Min_Price",
    "maximum": "Max_Price",
    "count": "Listings",
}


def listings_frame(listings: Sequence[Listing]) -> pd.DataFrame:
    """Listings as a DataFrame with one column per Listing attribute."""
    columns = list(Listing.__dataclass_fields__)
    return pd.DataFrame([row.to_dict() for row in listings], columns=columns)


def popup_text(listing: Listing) -> str:
    return (
        f"Price: {format_price(listing.price)}"
        f"<br>Bedrooms: {listing.beds}"
        f"<br>Bathrooms: {listing.baths}"
        f"<br>City: {listing.city}"
        f"<br>Province: {listing.province}"
    )


def price_histogram(listings: Sequence[Listing], bin_width: float = 50_000) -> go.Figure:
    """Histogram of filtered prices with fixed-width bins."""
    fig = go.Figure(go.Histogram(
        x=[row.price for row in listings],
        xbins=dict(size=bin_width),
        marker=dict(color="skyblue", line=dict(color="black", width=1)),
    ))
    fig.update_layout(
        title="House Price Distribution",
        xaxis_title="Price (CAD)",
        yaxis_title="Frequency",
        bargap=0,
    )
    fig.update_xaxes(tickformat=",")
    return fig


def price_boxplot(listings: Sequence[Listing]) -> go.Figure:
    """One box per city of the filtered listings."""
    frame = listings_frame(listings)
    fig = go.Figure()
    for city, group in frame.groupby("city", sort=True):
        fig.add_trace(go.Box(y=group["price"], name=city))
    fig.update_layout(
        title="House Prices by City",
        xaxis_title="City",
        yaxis_title="Price (CAD)",
        showlegend=False,
    )
    fig.update_yaxes(tickformat=",")
    return fig


def listing_map(listings: Sequence[Listing]) -> go.Figure:
    """Point map of filtered listings with a popup per marker."""
    fig = go.Figure(go.Scattermap(
        lat=[row.latitude for row in listings],
        lon=[row.longitude for row in listings],
        mode="markers",
        marker=dict(size=10, color="red", opacity=0.4),
        text=[popup_text(row) for row in listings],
        hoverinfo="text",
    ))

    center = MAP_CENTER
    zoom = MAP_ZOOM
    if listings:
        center = {
            "lat": sum(row.latitude for row in listings) / len(listings),
            "lon": sum(row.longitude for row in listings) / len(listings),
        }
        zoom = MAP_ZOOM + 2

    fig.update_layout(
        map_style="open-street-map",
        map=dict(center=center, zoom=zoom),
        margin=dict(l=0, r=0, t=0, b=0),
    )
    return fig


def comparison_violin(comparison: CityComparison) -> go.Figure:
    """Side-by-side price distributions for the two compared cities."""
    fig = go.Figure()
    if comparison is not None:
        for city, prices in comparison.as_mapping().items():
            fig.add_trace(go.Violin(
                y=prices,
                name=city,
                line_color="black",
                opacity=0.7,
                box_visible=False,
                meanline_visible=False,
            ))
        title = f"Price Comparison: {comparison.city_a} vs {comparison.city_b}"
    else:
        title = "Price Comparison"
    fig.update_layout(
        title=title,
        xaxis_title="City",
        yaxis_title="Price (CAD)",
        showlegend=False,
        template="plotly_white",
    )
    fig.update_yaxes(tickformat=",")
    return fig


def income_line(points: Sequence[IncomeSeriesPoint]) -> go.Figure:
    """Average household income per city, one line per province."""
    fig = go.Figure()
    by_province: Dict[str, List[IncomeSeriesPoint]] = {}
    for point in points:
        by_province.setdefault(point.province, []).append(point)

    order = order_for_display(points)
    rank = {city: position for position, city in enumerate(order)}

    for province, province_points in by_province.items():
        province_points = sorted(province_points, key=lambda p: rank[p.city])
        fig.add_trace(go.Scatter(
            x=[p.city for p in province_points],
            y=[p.average_income for p in province_points],
            mode="lines+markers",
            name=province,
        ))

    fig.update_layout(
        title="Average Household Income by City",
        xaxis_title="City",
        yaxis_title="Average Household Income (CAD)",
        template="plotly_white",
    )
    fig.update_xaxes(categoryorder="array", categoryarray=order, tickangle=45)
    fig.update_yaxes(tickformat=",")
    return fig


def summary_payload(rows: Sequence[SummaryRow]) -> List[Dict[str, Any]]:
    """Summary rows with a style token per numeric cell, for table renderers."""
    styles = style_summary(rows)
    payload = []
    for row, row_styles in zip(rows, styles):
        entry = row.to_dict()
        entry["styles"] = {column: token.to_dict() for column, token in row_styles.items()}
        payload.append(entry)
    return payload


def summary_table(rows: Sequence[SummaryRow]) -> go.Figure:
    """Summary statistics table with colour-scaled numeric columns."""
    styles = style_summary(rows)
    columns = ["city", *STYLED_COLUMNS]

    values = [[getattr(row, column) for row in rows] for column in columns]
    fill = [["white"] * len(rows)]
    font = [["black"] * len(rows)]
    for column in STYLED_COLUMNS:
        fill.append([row_styles[column].background for row_styles in styles])
        font.append([row_styles[column].color for row_styles in styles])

    fig = go.Figure(go.Table(
        header=dict(values=[SUMMARY_HEADERS[column] for column in columns]),
        cells=dict(
            values=values,
            fill_color=fill,
            font=dict(color=font),
            format=["", ",.2f", ",.0f", ",.0f", ",.0f", "d"],
        ),
    ))
    return fig


CHART_NAMES = (
    "price_distribution",
    "price_by_city",
    "map",
    "city_comparison",
    "summary",
    "household_income",
)


def build_chart(name: str, outputs: DashboardOutputs, bin_width: float = 50_000) -> go.Figure:
    """Build one named chart from published outputs.

    Raises:
        ValidationError: If ``name`` is not one of CHART_NAMES.
    """
    if name == "price_distribution":
        return price_histogram(outputs.filtered, bin_width)
    if name == "price_by_city":
        return price_boxplot(outputs.filtered)
    if name == "map":
        return listing_map(outputs.filtered)
    if name == "city_comparison":
        return comparison_violin(outputs.comparison)
    if name == "summary":
        return summary_table(outputs.summary)
    if name == "household_income":
        return income_line(outputs.income)
    raise ValidationError(f"Unknown chart: {name}", field="chart", value=name)

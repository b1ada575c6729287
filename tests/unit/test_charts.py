"""
Unit tests for chart builders.
"""

import pytest

from canhousing.core.aggregation import compare_cities, income_by_city, summarize
from canhousing.core.constants import MAP_CENTER, MAP_ZOOM
from canhousing.dashboard.charts import (
    CHART_NAMES,
    build_chart,
    comparison_violin,
    income_line,
    listing_map,
    popup_text,
    price_boxplot,
    price_histogram,
    summary_payload,
    summary_table,
)
from canhousing.dashboard.session import DashboardSession
from canhousing.exceptions import ValidationError


class TestFigures:

    def test_histogram_bin_width(self, scenario_listings):
        fig = price_histogram(scenario_listings, bin_width=100_000)
        assert list(fig.data[0].x) == [500000.0, 1200000.0, 300000.0]
        assert fig.data[0].xbins.size == 100_000

    def test_boxplot_one_trace_per_city(self, scenario_listings):
        fig = price_boxplot(scenario_listings)
        assert [trace.name for trace in fig.data] == ["Halifax", "Toronto"]

    def test_map_popups(self, scenario_listings):
        fig = listing_map(scenario_listings)
        assert len(fig.data[0].lat) == 3
        assert "Price: $500,000" in fig.data[0].text[0]
        assert "Province: Ontario" in fig.data[0].text[0]

    def test_empty_map_centred_on_canada(self):
        fig = listing_map([])
        assert fig.layout.map.center.lat == MAP_CENTER["lat"]
        assert fig.layout.map.center.lon == MAP_CENTER["lon"]
        assert fig.layout.map.zoom == MAP_ZOOM

    def test_map_uses_tile_map_layout(self, scenario_listings):
        fig = listing_map(scenario_listings)
        assert fig.data[0].type == "scattermap"
        assert fig.layout.map.style == "open-street-map"
        assert fig.layout.map.center.lat == pytest.approx((43.65 * 2 + 44.65) / 3)

    def test_popup_text(self, make_listing):
        text = popup_text(make_listing(price=1_250_000, beds=4, baths=3))
        assert text == (
            "Price: $1,250,000<br>Bedrooms: 4<br>Bathrooms: 3"
            "<br>City: Toronto<br>Province: Ontario"
        )

    def test_violin(self, scenario_dataset):
        fig = comparison_violin(compare_cities(scenario_dataset, ["Toronto", "Halifax"]))
        assert [trace.name for trace in fig.data] == ["Toronto", "Halifax"]
        assert "Toronto vs Halifax" in fig.layout.title.text

    def test_violin_without_comparison(self):
        assert len(comparison_violin(None).data) == 0

    def test_income_line_per_province(self, scenario_listings):
        fig = income_line(income_by_city(scenario_listings))
        assert sorted(trace.name for trace in fig.data) == ["Nova Scotia", "Ontario"]
        assert list(fig.layout.xaxis.categoryarray) == ["Halifax", "Toronto"]

    def test_summary_table_cell_colours(self, scenario_listings):
        fig = summary_table(summarize(scenario_listings))
        fills = fig.data[0].cells.fill.color
        assert len(fills) == 6
        assert list(fills[1]) == ["#08306B", "#DEEBF7"]

    def test_empty_listings(self):
        assert len(price_histogram([]).data[0].x or ()) == 0
        assert price_boxplot([]).data == ()
        assert len(listing_map([]).data[0].lat or ()) == 0

    def test_empty_summary(self):
        assert summary_payload([]) == []
        summary_table([])


class TestSummaryPayload:

    def test_styles_attached(self, scenario_listings):
        payload = summary_payload(summarize(scenario_listings))
        assert payload[0]["city"] == "Halifax"
        assert payload[0]["styles"]["average"]["color"] == "white"
        assert payload[1]["styles"]["average"]["color"] == "black"


class TestBuildChart:

    def test_every_named_chart_builds(self, scenario_dataset, dashboard_defaults):
        outputs = DashboardSession(scenario_dataset, dashboard_defaults).outputs
        for name in CHART_NAMES:
            assert build_chart(name, outputs).to_json()

    def test_unknown_chart(self, scenario_dataset, dashboard_defaults):
        outputs = DashboardSession(scenario_dataset, dashboard_defaults).outputs
        with pytest.raises(ValidationError):
            build_chart("pie", outputs)

"""
Aggregations over Filtered Listings

Provides the per-city price summary, the per-(city, province) income series
and the two-city price comparison. Grouping is done with plain dicts keyed
by the grouping attributes.
"""

import math
from typing import Dict, Iterable, List, Sequence, Tuple, Union

import numpy as np

from canhousing.core.constants import COMPARISON_SIZE
from canhousing.core.models import (
    CityComparison,
    IncomeSeriesPoint,
    Listing,
    SummaryRow,
    WorkingDataset,
)
from canhousing.exceptions import InvalidComparisonError
from canhousing.logging_config import get_logger

logger = get_logger(__name__)


def summarize(rows: Iterable[Listing]) -> List[SummaryRow]:
    """Price statistics per city, ordered by city name.

    Average is rounded to 2 decimal places; median, min and max use the
    stored prices unrounded. Cities absent from ``rows`` get no row.

    Args:
        rows: Filtered listings.

    Returns:
        List of SummaryRow.
    """
    prices_by_city: Dict[str, List[float]] = {}
    for row in rows:
        prices_by_city.setdefault(row.city, []).append(row.price)

    summary = []
    for city in sorted(prices_by_city):
        prices = prices_by_city[city]
        summary.append(SummaryRow(
            city=city,
            average=round(float(np.mean(prices)), 2),
            median=float(np.median(prices)),
            minimum=min(prices),
            maximum=max(prices),
            count=len(prices),
        ))
    return summary


def income_by_city(rows: Iterable[Listing]) -> List[IncomeSeriesPoint]:
    """Average household income per (city, province).

    Missing incomes are ignored; a group with no usable income is omitted.
    Sorted by province, then city.
    """
    incomes: Dict[Tuple[str, str], List[float]] = {}
    for row in rows:
        values = incomes.setdefault((row.province, row.city), [])
        income = row.household_income
        if income is not None and not math.isnan(income):
            values.append(income)

    points = []
    for (province, city), values in sorted(incomes.items()):
        if not values:
            continue
        points.append(IncomeSeriesPoint(
            city=city,
            province=province,
            average_income=float(np.mean(values)),
        ))
    return points


def order_for_display(points: Sequence[IncomeSeriesPoint]) -> List[str]:
    """City names ordered by ascending average income, for the chart x axis.

    A city appearing under several provinces is placed by its mean across
    them.
    """
    by_city: Dict[str, List[float]] = {}
    for point in points:
        by_city.setdefault(point.city, []).append(point.average_income)
    return sorted(by_city, key=lambda city: (float(np.mean(by_city[city])), city))


def compare_cities(
    dataset: Union[WorkingDataset, Iterable[Listing]],
    cities: Sequence[str],
) -> CityComparison:
    """Price series for exactly two cities over the whole dataset.

    The current filter is not applied.

    Args:
        dataset: Working dataset (or any listings).
        cities: Exactly two distinct city names.

    Returns:
        CityComparison in the order the cities were given.

    Raises:
        InvalidComparisonError: Unless exactly two distinct names are given.
    """
    if isinstance(cities, str):
        raise InvalidComparisonError([cities])
    cities = list(cities or [])
    if len(cities) != COMPARISON_SIZE or len(set(cities)) != COMPARISON_SIZE:
        raise InvalidComparisonError(cities)

    city_a, city_b = cities
    prices: Dict[str, List[float]] = {city_a: [], city_b: []}
    for row in dataset:
        if row.city in prices:
            prices[row.city].append(row.price)

    if not prices[city_a] or not prices[city_b]:
        logger.debug("Comparison %s vs %s has an empty side", city_a, city_b)

    return CityComparison(
        city_a=city_a,
        city_b=city_b,
        prices_a=tuple(prices[city_a]),
        prices_b=tuple(prices[city_b]),
    )

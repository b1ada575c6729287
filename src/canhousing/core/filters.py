"""
Listing Filters

Conjunctive filtering of the working dataset by the current ConstraintSet,
plus the province -> city lookup that keeps city choices valid.
"""

from typing import Iterable, Tuple, Union

from canhousing.core.models import ConstraintSet, Listing, WorkingDataset

Rows = Union[WorkingDataset, Iterable[Listing]]


def matches(listing: Listing, constraints: ConstraintSet) -> bool:
    """True if the listing satisfies every clause of the constraint set."""
    return (
        listing.province in constraints.provinces
        and listing.city in constraints.cities
        and constraints.price_min <= listing.price <= constraints.price_max
        and listing.beds >= constraints.min_beds
        and listing.baths >= constraints.min_baths
    )


def filter_listings(rows: Rows, constraints: ConstraintSet) -> Tuple[Listing, ...]:
    """Return the listings that pass all constraints, in their original order.

    An empty province or city selection matches nothing; there is no implicit
    "select all".

    Args:
        rows: The working dataset or any sequence of listings.
        constraints: Active filter state.

    Returns:
        Tuple of matching listings.
    """
    if not constraints.provinces or not constraints.cities:
        return ()
    return tuple(row for row in rows if matches(row, constraints))


def available_cities(dataset: WorkingDataset, provinces: Iterable[str]) -> Tuple[str, ...]:
    """Sorted distinct cities that belong to any of the given provinces."""
    cities = set()
    for province in provinces:
        cities.update(dataset.cities_by_province.get(province, ()))
    return tuple(sorted(cities))

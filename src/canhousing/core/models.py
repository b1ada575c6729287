"""
Data Models for Canadian Housing Insights

Dataclass definitions for listings, filter constraints and derived aggregates.
"""

from dataclasses import dataclass, field, asdict, replace
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Listing:
    """One cleaned housing record."""

    city: str
    province: str
    price: float
    beds: int
    baths: int
    latitude: float
    longitude: float
    household_income: float
    address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class WorkingDataset:
    """Cleaned, read-only listings plus lookup sets derived at load time."""

    listings: Tuple[Listing, ...]
    provinces: Tuple[str, ...]
    cities_by_province: Mapping[str, Tuple[str, ...]]
    source: str = ""
    income_synthesized: bool = False
    dropped_count: int = 0

    @classmethod
    def from_listings(
        cls,
        listings: Iterable[Listing],
        source: str = "",
        income_synthesized: bool = False,
        dropped_count: int = 0,
    ) -> "WorkingDataset":
        """Build a dataset and its province/city lookups from listings."""
        rows = tuple(listings)
        grouped: Dict[str, set] = {}
        for row in rows:
            grouped.setdefault(row.province, set()).add(row.city)

        cities_by_province = MappingProxyType(
            {province: tuple(sorted(cities)) for province, cities in sorted(grouped.items())}
        )
        return cls(
            listings=rows,
            provinces=tuple(sorted(grouped)),
            cities_by_province=cities_by_province,
            source=source,
            income_synthesized=income_synthesized,
            dropped_count=dropped_count,
        )

    def __len__(self) -> int:
        return len(self.listings)

    def __iter__(self):
        return iter(self.listings)

    @property
    def cities(self) -> Tuple[str, ...]:
        """Sorted distinct cities across all provinces."""
        return tuple(sorted({city for cities in self.cities_by_province.values() for city in cities}))

    @property
    def price_bounds(self) -> Tuple[float, float]:
        """(min, max) listing price, or (0, 0) for an empty dataset."""
        if not self.listings:
            return 0.0, 0.0
        prices = [row.price for row in self.listings]
        return min(prices), max(prices)


@dataclass(frozen=True)
class ConstraintSet:
    """The user-selected filter state at one moment."""

    provinces: FrozenSet[str] = frozenset()
    cities: FrozenSet[str] = frozenset()
    price_min: float = 0.0
    price_max: float = float("inf")
    min_beds: int = 0
    min_baths: int = 0
    comparison_cities: Tuple[str, ...] = ()

    @property
    def price_range(self) -> Tuple[float, float]:
        return self.price_min, self.price_max

    def evolve(self, **changes) -> "ConstraintSet":
        """Return a copy with the given fields replaced."""
        if "provinces" in changes:
            changes["provinces"] = frozenset(changes["provinces"])
        if "cities" in changes:
            changes["cities"] = frozenset(changes["cities"])
        if "comparison_cities" in changes:
            changes["comparison_cities"] = tuple(changes["comparison_cities"])
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary (sets become sorted lists)."""
        return {
            "provinces": sorted(self.provinces),
            "cities": sorted(self.cities),
            "price_range": [self.price_min, self.price_max],
            "min_beds": self.min_beds,
            "min_baths": self.min_baths,
            "comparison_cities": list(self.comparison_cities),
        }


@dataclass(frozen=True)
class SummaryRow:
    """Price statistics for one city under the current filter."""

    city: str
    average: float
    median: float
    minimum: float
    maximum: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class IncomeSeriesPoint:
    """Average household income for a (city, province) pair."""

    city: str
    province: str
    average_income: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class CityComparison:
    """Price series for exactly two cities, in selection order."""

    city_a: str
    city_b: str
    prices_a: Tuple[float, ...]
    prices_b: Tuple[float, ...]

    @property
    def cities(self) -> Tuple[str, str]:
        return self.city_a, self.city_b

    def as_mapping(self) -> Dict[str, List[float]]:
        return {self.city_a: list(self.prices_a), self.city_b: list(self.prices_b)}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"cities": list(self.cities), "prices": self.as_mapping()}


@dataclass(frozen=True)
class StyleToken:
    """Background and font colour for one summary table cell."""

    background: str
    color: str
    level: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class Notification:
    """A user-visible message raised by the dashboard session."""

    message: str
    level: str = "warning"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class DashboardOutputs:
    """Everything the display collaborators need after one recomputation."""

    revision: int
    constraints: ConstraintSet
    available_cities: Tuple[str, ...]
    filtered: Tuple[Listing, ...]
    summary: Tuple[SummaryRow, ...]
    income: Tuple[IncomeSeriesPoint, ...]
    comparison: Optional[CityComparison] = None
    notifications: Tuple[Notification, ...] = field(default_factory=tuple)

    @property
    def prices(self) -> List[float]:
        """Filtered prices, in dataset order, for the histogram."""
        return [row.price for row in self.filtered]

    def to_dict(self, include_listings: bool = True) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = {
            "revision": self.revision,
            "constraints": self.constraints.to_dict(),
            "available_cities": list(self.available_cities),
            "listing_count": len(self.filtered),
            "summary": [row.to_dict() for row in self.summary],
            "income": [point.to_dict() for point in self.income],
            "comparison": self.comparison.to_dict() if self.comparison else None,
            "notifications": [note.to_dict() for note in self.notifications],
        }
        if include_listings:
            data["listings"] = [row.to_dict() for row in self.filtered]
        return data

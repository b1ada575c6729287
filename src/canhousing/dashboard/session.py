"""
Dashboard Session

Owns one user's filter state and republishes the derived outputs every time
the state changes. Each setter is an event that runs the pipeline
filter -> aggregate synchronously and hands the result to subscribers.

Usage:
    session = DashboardSession(dataset)
    session.subscribe(lambda outputs: print(len(outputs.filtered)))
    session.on_notification(lambda note: print(note.message))
    session.set_provinces(["Nova Scotia"])
"""

import math
import threading
from collections.abc import Iterable as IterableABC
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from canhousing.config import DashboardConfig, get_config
from canhousing.core.aggregation import compare_cities, income_by_city, summarize
from canhousing.core.constants import COMPARISON_SIZE, COMPARISON_WARNING
from canhousing.core.filters import available_cities, filter_listings
from canhousing.core.models import (
    CityComparison,
    ConstraintSet,
    DashboardOutputs,
    Listing,
    Notification,
    WorkingDataset,
)
from canhousing.exceptions import InvalidComparisonError, ValidationError
from canhousing.logging_config import get_logger

logger = get_logger(__name__)

OutputsCallback = Callable[[DashboardOutputs], None]
NotificationCallback = Callable[[Notification], None]

_UPDATABLE = ("provinces", "cities", "price_range", "min_beds", "min_baths", "comparison_cities")


def _filter_key(constraints: ConstraintSet) -> Tuple:
    return (
        constraints.provinces,
        constraints.cities,
        constraints.price_min,
        constraints.price_max,
        constraints.min_beds,
        constraints.min_baths,
    )


def _as_names(value: Any, field: str) -> List[str]:
    if isinstance(value, str) or not isinstance(value, IterableABC):
        raise ValidationError(f"{field} must be a list of names", field=field, value=value)
    names = []
    for item in value:
        if not isinstance(item, str):
            raise ValidationError(f"{field} must contain only text", field=field, value=value)
        names.append(item)
    return names


def _as_count(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a non-negative integer", field=field, value=value)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a non-negative integer", field=field, value=value)
    if number < 0 or number != value:
        raise ValidationError(f"{field} must be a non-negative integer", field=field, value=value)
    return number


def _as_price_range(value: Any) -> Tuple[float, float]:
    try:
        low, high = value
        low, high = float(low), float(high)
    except (TypeError, ValueError):
        raise ValidationError("price_range must be [min, max]", field="price_range", value=value)
    if not (math.isfinite(low) and math.isfinite(high)):
        raise ValidationError("price_range bounds must be finite", field="price_range", value=value)
    if low > high:
        raise ValidationError("price_range minimum exceeds maximum", field="price_range", value=value)
    return low, high


class DashboardSession:
    """Reactive filter state for a single dashboard user.

    Args:
        dataset: The shared, read-only working dataset.
        defaults: Initial filter values. Defaults to ``get_config().dashboard``.
    """

    def __init__(self, dataset: WorkingDataset, defaults: Optional[DashboardConfig] = None):
        self._dataset = dataset
        self._defaults = defaults or get_config().dashboard
        self._lock = threading.RLock()
        self._output_subscribers: List[OutputsCallback] = []
        self._notification_subscribers: List[NotificationCallback] = []
        self._revision = 0
        self._published_revision = 0
        self._outputs: Optional[DashboardOutputs] = None
        self._filter_cache: Optional[Tuple[Tuple, Tuple[Listing, ...]]] = None
        self._available: Tuple[str, ...] = ()

        self._constraints = self._initial_constraints()
        self._recompute(comparison_event=True)

    def _initial_constraints(self) -> ConstraintSet:
        defaults = self._defaults
        provinces = [p for p in defaults.provinces if p in self._dataset.provinces]
        if not provinces:
            provinces = list(self._dataset.provinces[:1])

        self._available = available_cities(self._dataset, provinces)
        known_cities = set(self._dataset.cities)

        return ConstraintSet(
            provinces=frozenset(provinces),
            cities=frozenset(self._available[:1]),
            price_min=defaults.price_min,
            price_max=defaults.price_max,
            min_beds=defaults.min_beds,
            min_baths=defaults.min_baths,
            comparison_cities=tuple(c for c in defaults.comparison_cities if c in known_cities),
        )

    # Read-only views
    @property
    def dataset(self) -> WorkingDataset:
        return self._dataset

    @property
    def constraints(self) -> ConstraintSet:
        return self._constraints

    @property
    def available_cities(self) -> Tuple[str, ...]:
        return self._available

    @property
    def outputs(self) -> DashboardOutputs:
        """Latest published outputs."""
        return self._outputs

    @property
    def revision(self) -> int:
        return self._published_revision

    # Subscriptions
    def subscribe(self, callback: OutputsCallback, replay: bool = False) -> Callable[[], None]:
        """Register a display collaborator.

        Args:
            callback: Called with every newly published DashboardOutputs.
            replay: Immediately call back with the current outputs.

        Returns:
            Function that removes the subscription.
        """
        with self._lock:
            self._output_subscribers.append(callback)
            if replay and self._outputs is not None:
                callback(self._outputs)

        def unsubscribe():
            with self._lock:
                if callback in self._output_subscribers:
                    self._output_subscribers.remove(callback)

        return unsubscribe

    def on_notification(self, callback: NotificationCallback) -> Callable[[], None]:
        """Register a receiver for user-visible warnings."""
        with self._lock:
            self._notification_subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._notification_subscribers:
                    self._notification_subscribers.remove(callback)

        return unsubscribe

    # Events
    def set_provinces(self, provinces: Iterable[str]) -> DashboardOutputs:
        return self.update(provinces=provinces)

    def set_cities(self, cities: Iterable[str]) -> DashboardOutputs:
        return self.update(cities=cities)

    def set_price_range(self, price_min: float, price_max: float) -> DashboardOutputs:
        return self.update(price_range=(price_min, price_max))

    def set_min_beds(self, min_beds: int) -> DashboardOutputs:
        return self.update(min_beds=min_beds)

    def set_min_baths(self, min_baths: int) -> DashboardOutputs:
        return self.update(min_baths=min_baths)

    def set_comparison_cities(self, cities: Sequence[str]) -> DashboardOutputs:
        return self.update(comparison_cities=cities)

    def update(self, **changes) -> DashboardOutputs:
        """Apply one or more filter changes as a single event.

        Accepted keys: provinces, cities, price_range, min_beds, min_baths,
        comparison_cities.

        Returns:
            The outputs published for the new state.

        Raises:
            ValidationError: For unknown keys or malformed values. The
                current state is left untouched.
        """
        unknown = set(changes) - set(_UPDATABLE)
        if unknown:
            name = sorted(unknown)[0]
            raise ValidationError(f"Unknown filter: {name}", field=name)

        with self._lock:
            current = self._constraints
            fields: Dict[str, Any] = {}

            if "price_range" in changes:
                fields["price_min"], fields["price_max"] = _as_price_range(changes["price_range"])
            if "min_beds" in changes:
                fields["min_beds"] = _as_count(changes["min_beds"], "min_beds")
            if "min_baths" in changes:
                fields["min_baths"] = _as_count(changes["min_baths"], "min_baths")
            if "comparison_cities" in changes:
                fields["comparison_cities"] = tuple(
                    _as_names(changes["comparison_cities"], "comparison_cities")
                )

            available = self._available
            requested_cities = None
            if "cities" in changes:
                requested_cities = set(_as_names(changes["cities"], "cities"))

            if "provinces" in changes:
                provinces = frozenset(_as_names(changes["provinces"], "provinces"))
                fields["provinces"] = provinces
                available = available_cities(self._dataset, provinces)
                prior = requested_cities if requested_cities is not None else set(current.cities)
                still_valid = prior & set(available)
                if not still_valid and available:
                    still_valid = {available[0]}
                fields["cities"] = frozenset(still_valid)
            elif requested_cities is not None:
                stale = requested_cities - set(available)
                if stale:
                    logger.debug("Ignoring cities outside selected provinces: %s", sorted(stale))
                fields["cities"] = frozenset(requested_cities & set(available))

            if available != self._available:
                logger.debug("Available cities now: %s", list(available))
            self._available = available

            self._constraints = current.evolve(**fields)
            return self._recompute(comparison_event="comparison_cities" in fields)

    # Pipeline
    def _filtered(self, constraints: ConstraintSet) -> Tuple[Listing, ...]:
        key = _filter_key(constraints)
        if self._filter_cache is not None and self._filter_cache[0] == key:
            return self._filter_cache[1]
        rows = filter_listings(self._dataset, constraints)
        self._filter_cache = (key, rows)
        return rows

    def _comparison(self, cities: Tuple[str, ...]) -> Tuple[Optional[CityComparison], Optional[Notification]]:
        if len(cities) != COMPARISON_SIZE:
            return None, Notification(COMPARISON_WARNING)
        try:
            return compare_cities(self._dataset, cities), None
        except InvalidComparisonError as e:
            return None, Notification(e.message)

    def compute(self, constraints: ConstraintSet, revision: int) -> DashboardOutputs:
        """Run filter -> aggregate for ``constraints`` without publishing."""
        filtered = self._filtered(constraints)
        comparison, warning = self._comparison(constraints.comparison_cities)
        return DashboardOutputs(
            revision=revision,
            constraints=constraints,
            available_cities=self._available,
            filtered=filtered,
            summary=tuple(summarize(filtered)),
            income=tuple(income_by_city(filtered)),
            comparison=comparison,
            notifications=(warning,) if warning else (),
        )

    def _recompute(self, comparison_event: bool = False) -> DashboardOutputs:
        self._revision += 1
        outputs = self.compute(self._constraints, self._revision)
        logger.debug(
            "Revision %d: %d listings, %d cities",
            outputs.revision, len(outputs.filtered), len(outputs.summary),
        )
        if comparison_event:
            for note in outputs.notifications:
                self.notify(note)
        self.publish(outputs)
        return outputs

    def publish(self, outputs: DashboardOutputs) -> bool:
        """Hand outputs to subscribers unless a newer revision is already out.

        Returns:
            True if the outputs were published, False if they were stale.
        """
        with self._lock:
            if outputs.revision <= self._published_revision:
                logger.debug(
                    "Discarding stale revision %d (latest %d)",
                    outputs.revision, self._published_revision,
                )
                return False
            self._published_revision = outputs.revision
            self._outputs = outputs
            subscribers = list(self._output_subscribers)

        for callback in subscribers:
            callback(outputs)
        return True

    def notify(self, notification: Notification) -> None:
        """Deliver a warning to notification subscribers."""
        logger.warning(notification.message)
        with self._lock:
            subscribers = list(self._notification_subscribers)
        for callback in subscribers:
            callback(notification)

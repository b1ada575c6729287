"""
Listings Loader

Reads the listings CSV once, cleans it and returns the read-only
WorkingDataset shared by every dashboard session.

Usage:
    from canhousing.core.loader import load_dataset

    dataset = load_dataset("data/HouseListings.csv")
    print(dataset.provinces)
"""

import os
import unicodedata
from typing import IO, Optional, Union

import numpy as np
import pandas as pd

from canhousing.config import get_config
from canhousing.core.constants import (
    COL_ADDRESS,
    COL_BATHS,
    COL_BEDS,
    COL_CITY,
    COL_INCOME,
    COL_LATITUDE,
    COL_LONGITUDE,
    COL_PRICE,
    COL_PROVINCE,
    DEFAULT_INCOME_SEED,
    INCOME_RANGE,
    LATITUDE_RANGE,
    LONGITUDE_RANGE,
    REQUIRED_COLUMNS,
)
from canhousing.core.models import Listing, WorkingDataset
from canhousing.exceptions import DatasetNotFoundError, DatasetSchemaError
from canhousing.logging_config import get_logger
from canhousing.utils.price_parser import parse_price

logger = get_logger(__name__)

Source = Union[str, "os.PathLike[str]", IO]


def _source_label(source: Source) -> str:
    if isinstance(source, (str, os.PathLike)):
        return str(source)
    return getattr(source, "name", "<stream>")


def clean_text(value) -> Optional[str]:
    """Normalize a City/Province cell to stripped NFC text, or None if blank."""
    if not isinstance(value, str):
        return None
    text = unicodedata.normalize("NFC", value).strip()
    return text or None


def _to_count(series: pd.Series) -> pd.Series:
    """Coerce a room-count column; non-integral or negative values become NaN."""
    numbers = pd.to_numeric(series, errors="coerce")
    valid = numbers.notna() & (numbers >= 0) & (numbers == np.floor(numbers))
    return numbers.where(valid)


def _to_coordinate(series: pd.Series, bounds) -> pd.Series:
    numbers = pd.to_numeric(series, errors="coerce")
    low, high = bounds
    return numbers.where(numbers.between(low, high))


def synthesize_income(
    row_count: int,
    seed: int = DEFAULT_INCOME_SEED,
    low: float = INCOME_RANGE[0],
    high: float = INCOME_RANGE[1],
) -> np.ndarray:
    """Draw reproducible household incomes, rounded to whole dollars.

    The same seed and row count always yield the same values.
    """
    rng = np.random.default_rng(seed)
    return np.round(rng.uniform(low, high, size=row_count))


def read_listings_frame(source: Source, encoding: str) -> pd.DataFrame:
    """Read the raw CSV as text columns.

    Raises:
        DatasetNotFoundError: If the file cannot be opened or parsed.
        DatasetSchemaError: If required columns are missing.
    """
    label = _source_label(source)
    try:
        frame = pd.read_csv(source, encoding=encoding, dtype=str)
    except FileNotFoundError as e:
        raise DatasetNotFoundError(label, reason="file not found") from e
    except (OSError, UnicodeDecodeError, pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise DatasetNotFoundError(label, reason=str(e)) from e

    frame.columns = [str(column).strip() for column in frame.columns]
    missing = set(REQUIRED_COLUMNS) - set(frame.columns)
    if missing:
        raise DatasetSchemaError(missing, source=label)
    return frame


def normalize_frame(
    frame: pd.DataFrame,
    income_seed: int,
    income_range=None,
) -> pd.DataFrame:
    """Coerce every required column; unparseable cells become NaN/None.

    Returns a frame with Listing attribute names as columns and one row per
    raw record, in source order.
    """
    dataset_config = get_config().dataset
    low, high = income_range or (dataset_config.income_low, dataset_config.income_high)

    if COL_INCOME in frame.columns:
        income = pd.to_numeric(frame[COL_INCOME], errors="coerce")
    else:
        # Drawn over all raw rows before any are dropped
        income = pd.Series(
            synthesize_income(len(frame), income_seed, low, high),
            index=frame.index,
        )

    address = frame[COL_ADDRESS].map(clean_text) if COL_ADDRESS in frame.columns else None

    return pd.DataFrame({
        "city": frame[COL_CITY].map(clean_text),
        "province": frame[COL_PROVINCE].map(clean_text),
        "price": pd.to_numeric(frame[COL_PRICE].map(parse_price), errors="coerce"),
        "beds": _to_count(frame[COL_BEDS]),
        "baths": _to_count(frame[COL_BATHS]),
        "latitude": _to_coordinate(frame[COL_LATITUDE], LATITUDE_RANGE),
        "longitude": _to_coordinate(frame[COL_LONGITUDE], LONGITUDE_RANGE),
        "household_income": income,
        "address": address,
    }, index=frame.index)


def load_dataset(
    source: Optional[Source] = None,
    encoding: Optional[str] = None,
    income_seed: Optional[int] = None,
) -> WorkingDataset:
    """Load and clean the listings file.

    Records with any missing or unparseable required field (city, province,
    price, beds, baths, latitude, longitude, income) are dropped. If the file
    has no Household_Income column, one is synthesized from a seeded uniform
    draw so that reloading the same file gives the same values.

    Args:
        source: Path or file object. Defaults to the configured path.
        encoding: Text encoding of the file. Defaults to config (latin1).
        income_seed: Seed for synthesized income. Defaults to config (42).

    Returns:
        WorkingDataset.

    Raises:
        DatasetNotFoundError: If the source cannot be read.
        DatasetSchemaError: If required columns are missing.
    """
    config = get_config().dataset
    if source is None:
        source = config.path
    encoding = encoding or config.encoding
    if income_seed is None:
        income_seed = config.income_seed

    label = _source_label(source)
    frame = read_listings_frame(source, encoding)
    income_synthesized = COL_INCOME not in frame.columns
    if income_synthesized:
        logger.info("No %s column in %s, synthesizing (seed=%d)", COL_INCOME, label, income_seed)

    normalized = normalize_frame(frame, income_seed)
    required = normalized.drop(columns=["address"])
    keep = required.notna().all(axis=1)
    clean = normalized[keep]
    dropped = int((~keep).sum())

    listings = [
        Listing(
            city=row.city,
            province=row.province,
            price=float(row.price),
            beds=int(row.beds),
            baths=int(row.baths),
            latitude=float(row.latitude),
            longitude=float(row.longitude),
            household_income=float(row.household_income),
            address=row.address if isinstance(row.address, str) else None,
        )
        for row in clean.itertuples(index=False)
    ]

    if dropped:
        logger.info("Dropped %d of %d records with missing or invalid fields", dropped, len(frame))
    logger.info("Loaded %d listings from %s", len(listings), label)

    return WorkingDataset.from_listings(
        listings,
        source=label,
        income_synthesized=income_synthesized,
        dropped_count=dropped,
    )

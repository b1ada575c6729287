"""
Shared Constants for Canadian Housing Insights

Contains all constant values used across the application.
"""

from typing import Dict, List, Tuple

# Source column names
COL_CITY: str = "City"
COL_PROVINCE: str = "Province"
COL_PRICE: str = "Price"
COL_BEDS: str = "Number_Beds"
COL_BATHS: str = "Number_Baths"
COL_LATITUDE: str = "Latitude"
COL_LONGITUDE: str = "Longitude"
COL_INCOME: str = "Household_Income"
COL_ADDRESS: str = "Address"

# Columns that must exist in the source file (income is synthesized if absent)
REQUIRED_COLUMNS: List[str] = [
    COL_CITY,
    COL_PROVINCE,
    COL_PRICE,
    COL_BEDS,
    COL_BATHS,
    COL_LATITUDE,
    COL_LONGITUDE,
]

# Geographic bounds
LATITUDE_RANGE: Tuple[float, float] = (-90.0, 90.0)
LONGITUDE_RANGE: Tuple[float, float] = (-180.0, 180.0)

# Synthesized household income
DEFAULT_INCOME_SEED: int = 42
INCOME_RANGE: Tuple[float, float] = (40_000.0, 120_000.0)

# Comparison
COMPARISON_SIZE: int = 2
COMPARISON_WARNING: str = "Please select exactly two cities for comparison."

# Summary table colour scale
PALETTE_DARK: str = "#08306B"
PALETTE_LIGHT: str = "#DEEBF7"
PALETTE_LEVELS: int = 100
DARK_FONT_MAX_LEVEL: int = 40
STYLE_EPSILON: float = 1e-9

# Map
MAP_CENTER: Dict[str, float] = {"lat": 56.1304, "lon": -106.3468}
MAP_ZOOM: int = 3

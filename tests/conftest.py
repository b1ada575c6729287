"""
Pytest Configuration and Fixtures

Provides shared fixtures for all tests.
"""

import os
from pathlib import Path
from typing import Callable

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from canhousing.config import DashboardConfig, reset_config
from canhousing.core.models import Listing, WorkingDataset

SCENARIO_CSV = """City,Province,Price,Number_Beds,Number_Baths,Latitude,Longitude
Toronto,Ontario,"500,000",3,2,43.6532,-79.3832
Toronto,Ontario,"1,200,000",4,3,43.7001,-79.4163
Halifax,Nova Scotia,"300,000",2,1,44.6488,-63.5752
"""

# Valid rows mixed with one broken field per bad row
MESSY_CSV = """City,Province,Price,Address,Number_Beds,Number_Baths,Latitude,Longitude
Toronto,Ontario,"500,000",1 King St,3,2,43.6532,-79.3832
Montréal,Quebec,"649,000",,2,1,45.5017,-73.5673
Ottawa,Ontario,Contact agent,5 Bank St,3,2,45.4215,-75.6972
Ottawa,Ontario,"450,000",6 Bank St,3,2,not-a-number,-75.6972
Ottawa,Ontario,"455,000",7 Bank St,3,2,95.0,-75.6972
,Ontario,"460,000",8 Bank St,3,2,45.4215,-75.6972
Ottawa,,"465,000",9 Bank St,3,2,45.4215,-75.6972
Ottawa,Ontario,"470,000",10 Bank St,2.5,2,45.4215,-75.6972
Ottawa,Ontario,"475,000",11 Bank St,3,-1,45.4215,-75.6972
Ottawa,Ontario,"480,000",12 Bank St,3,,45.4215,-75.6972
Halifax,Nova Scotia,"300,000",13 Spring Garden Rd,2,1,44.6488,-63.5752
"""


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep tests independent of the developer's environment and .env file."""
    for name in list(os.environ):
        if name.startswith("CANHOUSING_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="function")
def scenario_csv(tmp_path: Path) -> Path:
    """Three-listing CSV without a Household_Income column."""
    path = tmp_path / "scenario.csv"
    path.write_bytes(SCENARIO_CSV.encode("latin1"))
    return path


@pytest.fixture(scope="function")
def messy_csv(tmp_path: Path) -> Path:
    """Latin-1 encoded CSV where most rows have one invalid required field."""
    path = tmp_path / "messy.csv"
    path.write_bytes(MESSY_CSV.encode("latin1"))
    return path


@pytest.fixture(scope="function")
def make_listing() -> Callable[..., Listing]:
    """Factory for listings with sensible defaults."""

    def _make(city="Toronto", province="Ontario", price=500_000.0, beds=3, baths=2, **extra):
        fields = dict(
            city=city,
            province=province,
            price=float(price),
            beds=beds,
            baths=baths,
            latitude=43.65,
            longitude=-79.38,
            household_income=80_000.0,
        )
        fields.update(extra)
        return Listing(**fields)

    return _make


@pytest.fixture(scope="function")
def scenario_listings(make_listing):
    """The three listings used throughout the scenario tests."""
    return [
        make_listing("Toronto", "Ontario", 500_000, 3, 2, household_income=70_000.0),
        make_listing("Toronto", "Ontario", 1_200_000, 4, 3, household_income=90_000.0),
        make_listing(
            "Halifax", "Nova Scotia", 300_000, 2, 1,
            latitude=44.65, longitude=-63.58, household_income=60_000.0,
        ),
    ]


@pytest.fixture(scope="function")
def scenario_dataset(scenario_listings) -> WorkingDataset:
    return WorkingDataset.from_listings(scenario_listings, source="scenario")


@pytest.fixture(scope="function")
def dashboard_defaults() -> DashboardConfig:
    """Initial filter controls: Ontario, 200K-1M, 3+ beds, 2+ baths."""
    return DashboardConfig(
        provinces=["Ontario"],
        price_min=200_000,
        price_max=1_000_000,
        min_beds=3,
        min_baths=2,
        comparison_cities=["Toronto", "Vancouver"],
    )


@pytest.fixture(scope="function")
def app(scenario_dataset):
    """Flask app over the scenario dataset."""
    from canhousing.api.server import create_app

    return create_app(dataset=scenario_dataset, test_config={"TESTING": True})


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()

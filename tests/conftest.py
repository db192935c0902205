"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402

from vntax.backend.config.regime_config import (  # noqa: E402
    RegimeConfiguration,
    load_regime_configuration,
)
from vntax.backend.models import InsuranceBaseSelection  # noqa: E402
from vntax.backend.services.calculators import Taxpayer, create_taxpayer  # noqa: E402

BASIC_INSURANCE_BASE = 5_310_000


@pytest.fixture(scope="session")
def before_2026() -> RegimeConfiguration:
    """Constants in force before 2026."""

    return load_regime_configuration("before_2026")


@pytest.fixture(scope="session")
def from_2026() -> RegimeConfiguration:
    """Constants in force from 2026."""

    return load_regime_configuration("from_2026")


@pytest.fixture(params=["before_2026", "from_2026"])
def regime(request: pytest.FixtureRequest) -> RegimeConfiguration:
    """Each configured regime in turn."""

    return load_regime_configuration(request.param)


@pytest.fixture()
def basic_taxpayer(regime: RegimeConfiguration) -> Taxpayer:
    """Taxpayer without dependents insured on the basic base."""

    return create_taxpayer(regime, 0, InsuranceBaseSelection.basic(BASIC_INSURANCE_BASE))

import pytest

from integrity_core.config import IntegrityConfig
from integrity_core.models import Assumptions


@pytest.fixture
def default_assumptions() -> Assumptions:
    """Standard assumptions used across unit tests."""
    return Assumptions(TI=8760.0, MTTR=8.0, beta=0.1)


@pytest.fixture
def default_config(default_assumptions: Assumptions) -> IntegrityConfig:
    return IntegrityConfig(assumptions=default_assumptions, tolerable_risk=1e-4, demand_mode="low_demand")

"""
Fixtures built from the July 2018 dates used throughout the tests.
"""

import pytest

from timerange.domain.models import Timerange

from helpers import BERLIN, JULY_4, JULY_12, JULY_14, JULY_18


@pytest.fixture
def july_4_to_12() -> Timerange:
    return Timerange(JULY_4, JULY_12, BERLIN)


@pytest.fixture
def july_4_to_14() -> Timerange:
    return Timerange(JULY_4, JULY_14, BERLIN)


@pytest.fixture
def july_4_to_18() -> Timerange:
    return Timerange(JULY_4, JULY_18, BERLIN)


@pytest.fixture
def july_12_to_14() -> Timerange:
    return Timerange(JULY_12, JULY_14, BERLIN)


@pytest.fixture
def july_12_to_18() -> Timerange:
    return Timerange(JULY_12, JULY_18, BERLIN)


@pytest.fixture
def july_14_to_18() -> Timerange:
    return Timerange(JULY_14, JULY_18, BERLIN)

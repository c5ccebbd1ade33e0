import pytest

from ndhist import MinMaxBins, uniform_histogram
from ndhist.config import default_config


@pytest.fixture(autouse=True)
def fresh_config():
    default_config.cache_clear()
    yield
    default_config.cache_clear()


@pytest.fixture
def hist2d():
    """Integer dimension in [0, 10) with 10 buckets, float dimension in [0, 10) with 15"""
    return uniform_histogram(MinMaxBins(0, 10, 10), MinMaxBins(0.0, 10.0, 15))

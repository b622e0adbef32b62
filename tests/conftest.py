"""Common test configurations and fixtures."""

import pytest
import numpy as np

from stressinversion.data import DataDescription, DataFactory
from stressinversion.data.description import COLUMN_NAMES, NB_COLUMNS


@pytest.fixture(autouse=True)
def set_random_seed():
    """Set random seed for reproducible tests."""
    np.random.seed(42)
    yield
    np.random.seed(None)  # Reset seed after test


def build_line(number, data_type, **columns):
    """Build a data line from column names, e.g. strike=30, dipDirection="E"."""
    toks = [""] * NB_COLUMNS
    toks[0] = str(number)
    toks[1] = data_type
    for name, value in columns.items():
        toks[COLUMN_NAMES.index(name)] = str(value)
    return ";".join(toks)


@pytest.fixture
def make_line():
    """Fixture providing the data line builder."""
    return build_line


@pytest.fixture
def factory():
    """Fixture providing the registry of all data types."""
    return DataFactory.default()


@pytest.fixture
def description(factory):
    """Fixture providing a line parser bound to the default registry."""
    return DataDescription(factory)


@pytest.fixture
def normal_conjugate_lines():
    """Two planes striking North, dipping 60 degrees East and West."""
    return [
        build_line(1, "Conjugate Faults 1", strike=0, dip=60, dipDirection="E"),
        build_line(2, "Conjugate Faults 2", strike=0, dip=60, dipDirection="W"),
    ]

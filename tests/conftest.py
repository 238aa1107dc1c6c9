"""Shared fixtures for epigrid tests."""

import matplotlib
matplotlib.use('Agg')

import pytest

from epigrid.core.disease_params import DiseaseParameters
from epigrid.core.disease_model import DiseaseModel
from epigrid.core.host import DiseaseState


class SequenceRng:
    """Stand-in generator returning a fixed sequence of seed positions."""

    def __init__(self, values):
        self._values = iter(values)

    def integers(self, low, high):
        value = next(self._values)
        assert low <= value < high
        return value


def certain_params(**overrides) -> DiseaseParameters:
    """Always transmits, never kills, one-day incubation and infection."""
    values = dict(
        name="Certain",
        p_transmit=1.0,
        p_death=0.0,
        min_incubation=1,
        avg_incubation=1,
        min_infection=1,
        avg_infection=1,
        avg_contacts=8,
    )
    values.update(overrides)
    return DiseaseParameters(**values)


def set_radius(grid, contacts):
    for host in grid:
        host.contact_radius = contacts


def make_infectious(grid, i, j, days=5, contacts=8):
    host = grid.host(i, j)
    host.state = DiseaseState.INFECTIOUS
    host.days_remaining = days
    host.contact_radius = contacts
    return host


@pytest.fixture
def certain_disease():
    return DiseaseModel(certain_params(), seed=0)


@pytest.fixture
def ebola():
    return DiseaseModel(seed=42)

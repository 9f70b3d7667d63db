"""Shared pytest fixtures for building grammar tests."""

import pytest

from building_grammar.assembly.building import BuildingBuilder
from building_grammar.config import BandGrid, ParameterSet, Topology
from building_grammar.settings import Settings


@pytest.fixture
def settings():
    """Default settings instance."""
    return Settings()


@pytest.fixture
def builder(settings):
    """BuildingBuilder with default settings."""
    return BuildingBuilder(settings)


@pytest.fixture
def small_params():
    """Two-row rectangle: 2 bottom columns, 1 top column, door out of range."""
    return ParameterSet(
        shape=Topology.RECTANGLE,
        width_1=400.0,
        length_1=300.0,
        height=400.0,
        grid_height=2,
        bottom_tile_height=50.0,
        grid_bottom=BandGrid(columns=(2,) * 6),
        grid_center=BandGrid(columns=(1,) * 6),
        grid_top=BandGrid(columns=(1,) * 6),
        door={"column": 99},
    )

"""Shared fixtures: the 795 ACSR Drake worked example."""

import pytest

from ampacity.config import ambient_defaults, drake_defaults, solar_defaults
from ampacity.params import ConductorProperties, SolarGeometry, WeatherConditions
from ampacity.rating import Conductor


@pytest.fixture
def weather():
    return WeatherConditions(**ambient_defaults)


@pytest.fixture
def geometry():
    return SolarGeometry(**solar_defaults)


@pytest.fixture
def drake():
    return ConductorProperties(**drake_defaults)


@pytest.fixture
def conductor(weather, drake, geometry):
    return Conductor(weather, drake, geometry)


@pytest.fixture
def conditions():
    """Keyword arguments of the module level functions, minus conductor temperature."""
    return dict(
        solar_radiation=None,
        month=6,
        day_of_month=10,
        hour_of_day=11.0,
        ambient_temperature=40.0,
        wind_speed=2.0,
        wind_angle_deg=90.0,
        latitude_deg=30.0,
        line_azimuth_deg=90.0,
        elevation=0.0,
        atmosphere_clear=True,
        absorptivity=0.8,
        emissivity=0.8,
        diameter=0.092333333,
        t_low=25.0,
        t_high=75.0,
        r_low=2.20833e-5,
        r_high=2.63258e-5,
    )


@pytest.fixture
def sun(conditions):
    """Arguments of solar_heat_gain for the worked example."""
    keys = ('solar_radiation', 'month', 'day_of_month', 'hour_of_day', 'latitude_deg',
            'line_azimuth_deg', 'elevation', 'atmosphere_clear', 'absorptivity', 'diameter')
    return {k: conditions[k] for k in keys}

"""Ratings for tables of conductors and temperature sweeps.

The conductor library uses the column names of the utility data it comes
from: ConductorName, RES_25C and RES_50C (Ohms/mile) and CDRAD_in
(conductor radius in inches).
"""
import logging

import numpy as np
import pandas as pd
from tqdm import tqdm

from ampacity.config import MILE
from ampacity.params import ConductorProperties, SolarGeometry, WeatherConditions
from ampacity.rating import Conductor

logger = logging.getLogger(__name__)

LIBRARY_COLUMNS = ('ConductorName', 'RES_25C', 'RES_50C', 'CDRAD_in')
RATING_TEMPERATURES = (75, 80, 85, 90, 95)


def mva_rating(amps, kv):
    """Three phase MVA for a current in amps at a line voltage in kV."""
    return 3**0.5 * amps * kv * 1e3 * 1e-6


def conductor_from_row(row, absorptivity=0.8, emissivity=0.8) -> ConductorProperties:
    """ConductorProperties from one row of the conductor library."""
    return ConductorProperties(diameter=2.0 * row['CDRAD_in'] / 12.0,
                               absorptivity=absorptivity,
                               emissivity=emissivity,
                               t_low=25.0,
                               r_low=row['RES_25C'] / MILE,
                               t_high=50.0,
                               r_high=row['RES_50C'] / MILE)


def rate_conductor_library(df: pd.DataFrame, weather: WeatherConditions,
                           geometry: SolarGeometry = None,
                           temperatures=RATING_TEMPERATURES,
                           absorptivity=0.8, emissivity=0.8,
                           progress=False) -> pd.DataFrame:
    """Steady state rating of every conductor at every max operating temperature (MOT).

    Returns one row per conductor and MOT with the rating in amps and in MVA
    at 69 kV and 138 kV.
    """
    missing = [c for c in LIBRARY_COLUMNS if c not in df.columns]
    if missing:
        raise KeyError("Conductor library is missing columns: {}".format(missing))

    ratings = []
    for _, row in tqdm(df.iterrows(), total=len(df), disable=not progress):
        con = Conductor(weather, conductor_from_row(row, absorptivity, emissivity), geometry)
        for MOT in temperatures:
            rating_amps = con.steady_state_thermal_rating(MOT)
            ratings.append({'ConductorName': row['ConductorName'],
                            'MOT': MOT,
                            'RatingAmps': rating_amps,
                            'RatingMVA_69': mva_rating(rating_amps, 69),
                            'RatingMVA_138': mva_rating(rating_amps, 138)})

    logger.info("Rated %s conductors at %s temperatures" % (len(df), len(temperatures)))
    return pd.DataFrame.from_records(
        ratings, columns=['ConductorName', 'MOT', 'RatingAmps', 'RatingMVA_69', 'RatingMVA_138'])


def rating_curve(weather: WeatherConditions, conductor: ConductorProperties,
                 geometry: SolarGeometry = None, temperatures=None) -> pd.DataFrame:
    """Heat balance terms and rating over a sweep of conductor temperatures.

    The default sweep runs from ambient to 150 deg C in 5 degree steps.
    """
    if temperatures is None:
        temperatures = np.arange(weather.ambient_temperature, 150.0 + 1e-9, 5.0)

    con = Conductor(weather, conductor, geometry)
    rows = []
    for Tc in np.asarray(temperatures, dtype=float):
        balance = con.heat_balance(float(Tc))
        rows.append({'Tc': balance.conductor_temperature,
                     'qc': balance.qc,
                     'qr': balance.qr,
                     'qs': balance.qs,
                     'R': balance.resistance,
                     'I': balance.current})
    return pd.DataFrame(rows, columns=['Tc', 'qc', 'qr', 'qs', 'R', 'I'])


def trajectory_frame(result) -> pd.DataFrame:
    """TransientResult as a table of elapsed seconds and conductor temperature."""
    t = np.arange(len(result.trajectory)) * result.time_step
    return pd.DataFrame({'seconds': t, 'Tc': result.trajectory})

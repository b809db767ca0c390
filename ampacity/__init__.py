"""Current-temperature relationship of bare overhead conductors (IEEE 738)."""
from ampacity.exceptions import (DivergenceError, NoPhysicalSolutionError, NoSolutionError,
                                 RatingError)
from ampacity.ieee738 import (adjust_r, convective_heat_loss, day_of_year,
                              radiated_heat_loss, solar_heat_gain)
from ampacity.params import (ConductorProperties, HeatBalance, SolarGeometry,
                             TransientResult, TransientSettings, WeatherConditions)
from ampacity.rating import (Conductor, calculated_temperature, conductor_temperature_rise,
                             temperature_trajectory, thermal_rating, transient_rating)

__version__ = "0.1.0"

"""Solver settings and the default conditions of the worked examples."""
from pydantic import BaseModel, Field

# Conductor library resistances are per mile, the kernel works per foot.
MILE = 5280.0


class SolverSettings(BaseModel):
    tolerance: float = Field(default=0.01, gt=0, description="Width of the final search bracket")
    temperature_upper_bound: float = Field(default=256.0, description="Initial upper bound of the temperature search (deg C)")
    current_upper_bound: float = Field(default=4096.0, gt=0, description="Initial upper bound of the current search (A)")
    max_doublings: int = Field(default=64, ge=0, description="Times the upper bound may double before giving up")
    max_iterations: int = Field(default=200, ge=1, description="Cap on bisection steps")


DEFAULT_SOLVER = SolverSettings()

ambient_defaults = {
    'ambient_temperature': 40.0,
    'wind_speed': 2.0,
    'wind_angle_deg': 90.0,
    'elevation': 0.0,
    'atmosphere': 'Clear',
    'solar_radiation': None,
}

solar_defaults = {
    'month': 6,
    'day_of_month': 10,
    'hour_of_day': 11.0,
    'latitude_deg': 30.0,
    'line_azimuth_deg': 90.0,
}

# 795 kcmil 26/7 ACSR "Drake"
drake_defaults = {
    'diameter': 0.092333333,
    'absorptivity': 0.8,
    'emissivity': 0.8,
    't_low': 25.0,
    'r_low': 2.20833e-5,
    't_high': 75.0,
    'r_high': 2.63258e-5,
    'heat_capacity': 305.6328,
}

"""Parameter bundles for the heat balance.

Every bundle is immutable and built fresh for each calculation.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ampacity.ieee738 import normalize_wind_angle


class WeatherConditions(BaseModel):
    model_config = ConfigDict(frozen=True)

    ambient_temperature: float = Field(description="Ambient temperature in deg C")
    wind_speed: float = Field(description="Wind Velocity in ft/sec")
    wind_angle_deg: float = Field(default=90.0, description="Angle between wind and conductor in degrees. Any value, folded into 0-90")
    elevation: float = Field(default=0.0, ge=0, description="Height above sea level. units ft")
    atmosphere: Literal['Clear', 'Industrial'] = Field(default='Clear', description='Atmosphere')
    solar_radiation: Optional[float] = Field(default=None, ge=0, description="Measured solar irradiance in W/ft^2. None to derive it from the sun position")

    @property
    def atmosphere_clear(self) -> bool:
        return self.atmosphere == 'Clear'

    @property
    def normalized_wind_angle(self) -> float:
        return normalize_wind_angle(self.wind_angle_deg)


class SolarGeometry(BaseModel):
    """Where the sun is. Only used when no irradiance is given."""
    model_config = ConfigDict(frozen=True)

    month: int = Field(ge=1, le=12, description="1 (January) to 12 (December)")
    day_of_month: int = Field(ge=1, le=31, description="Day of month. Not checked against the month length")
    hour_of_day: float = Field(ge=0, le=24, description="hour of day. Between 0-24")
    latitude_deg: float = Field(description="Latitude in degrees")
    line_azimuth_deg: float = Field(default=90.0, description="Azimuth of the line in degrees. 90 for East-West")


class ConductorProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    diameter: float = Field(description="Conductor outer diameter. Units ft")
    absorptivity: float = Field(description="Absorptivity. Between 0-1.")
    emissivity: float = Field(description="Emissivity. Between 0-1.")
    t_low: float = Field(description="Temperature of Resistance specified in r_low")
    r_low: float = Field(description="Resistance at temperature t_low. Units ohms/ft")
    t_high: float = Field(description="Temperature of Resistance specified in r_high")
    r_high: float = Field(description="Resistance at temperature t_high. Units ohms/ft")
    heat_capacity: Optional[float] = Field(default=None, description="m*Cp, heat capacity per unit length in J/(ft-degC). Transient calculations only")
    conductors_per_bundle: int = Field(default=1, ge=1, description='Number of conductors in the bundle')


class TransientSettings(BaseModel):
    """Time stepping of a transient run. Weather is held constant over all steps."""
    model_config = ConfigDict(frozen=True)

    conductor_temperature: float = Field(description="Initial conductor temperature in deg C")
    time_step: float = Field(gt=0, description="Time step in seconds")
    steps: int = Field(ge=0, description="Number of time steps to apply")
    current: Optional[float] = Field(default=None, description="Constant current in amps, for a temperature rise")
    conductor_temperature_max: Optional[float] = Field(default=None, description="Max final conductor temperature in deg C, for a transient rating")


class HeatBalance(BaseModel):
    """Terms of the steady state heat balance at one conductor temperature."""
    conductor_temperature: float
    qc: float
    qr: float
    qs: float
    resistance: float
    current: float

    @property
    def net_cooling(self) -> float:
        return self.qc + self.qr - self.qs


class TransientResult(BaseModel):
    initial_temperature: float
    current: float
    time_step: float
    trajectory: List[float] = Field(description="Conductor temperature before the first step and after every step")

    @property
    def final_temperature(self) -> float:
        return self.trajectory[-1]

    @property
    def rise(self) -> float:
        return self.final_temperature - self.initial_temperature

    @property
    def duration(self) -> float:
        return self.time_step * (len(self.trajectory) - 1)

"""Worked example of the four calculations for 795 kcmil ACSR Drake.

Use:

    python -m ampacity.example

Conditions: June 10 at 11:00, latitude 30 deg, line running East-West,
clear air at sea level, 40 C ambient and a 2 ft/s wind across the line.
The steady state rating at 100 C is about 1028 Amps.
"""
import logging

from ampacity.batch import mva_rating
from ampacity.config import ambient_defaults, drake_defaults, solar_defaults
from ampacity.params import ConductorProperties, SolarGeometry, WeatherConditions
from ampacity.rating import Conductor

MOT = 100  # Maximum operating temperature of conductor in deg C


def main():
    weather = WeatherConditions(**ambient_defaults)
    geometry = SolarGeometry(**solar_defaults)
    drake = ConductorProperties(**drake_defaults)
    con = Conductor(weather, drake, geometry)

    rating_amps = con.steady_state_thermal_rating(MOT)
    print()
    print(f"rating for 795 Drake at {MOT}C | {rating_amps:.0f} Amps")
    print(f"rating for 795 Drake at {MOT}C | {mva_rating(rating_amps, 69):.0f} MVA at 69 kV")
    print(f"rating for 795 Drake at {MOT}C | {mva_rating(rating_amps, 138):.0f} MVA at 138 kV")
    print(f"  qc {con.qc:.3f} W/ft | qr {con.qr:.3f} W/ft | qs {con.qs:.3f} W/ft")

    temperature = con.calculated_temperature(rating_amps)
    print(f"temperature of 795 Drake at {rating_amps:.0f} Amps | {temperature:.2f} C")

    # One minute at 2000 A starting from 100 C
    rise = con.conductor_temperature_rise(MOT, 2000.0, 60.0, 1)
    print(f"temperature rise of 795 Drake at 2000 Amps for 60 s | {rise:.2f} C")

    # Emergency rating: 31 minutes from 100 C up to 254.3 C
    t_rating = con.transient_rating(MOT, 254.3, 60.0, 31)
    print(f"transient rating of 795 Drake to 254.3C in 31 min | {t_rating:.0f} Amps")
    return rating_amps


if __name__ == '__main__':
    logging.basicConfig(level=logging.ERROR, format='%(asctime)s - %(levelname)s - %(message)s')
    main()

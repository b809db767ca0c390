"""Heat balance terms of a bare overhead conductor, US customary units.

All quantities are per foot of conductor: heat terms in W/ft, resistance
in Ohms/ft, diameter in ft, wind speed in ft/s and elevation in ft.

References
--------------
[1] IEEE Std 738-2006

"""
import math as m
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Table 4 - Coefficients A..G of the solar heat intensity polynomial,
# lowest power first.
CLEAR_ATMOSPHERE = (-3.9241,
                    5.9276,
                    -1.7856e-1,
                    3.223e-3,
                    -3.3549e-5,
                    1.8053e-7,
                    -3.7868e-10)
INDUSTRIAL_ATMOSPHERE = (4.9408,
                         1.3208,
                         6.1444e-2,
                         -2.9411e-3,
                         5.07752e-5,
                         -4.03627e-7,
                         1.22967e-9)

DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def polyval(p, x):
    """Evaluate a polynomial with coefficients ``p``, highest power first."""
    result = 0
    N = len(p)
    for i in range(N):
        result += p[i] * x**(N-i-1)
    return result


def rad2deg(rad):
    return rad*180.0/m.pi


def deg2rad(deg):
    return deg*m.pi/180.0


def day_of_year(month: int, day_of_month: int) -> int:
    """Ordinal day of the year, 1 Jan == 1.

    The calendar is always a 365 day one (February has 28 days), which is
    what the solar tables of the standard are built on. The day is not
    checked against the length of the month.
    """
    return day_of_month + sum(DAYS_IN_MONTH[:month - 1])


def normalize_wind_angle(wind_angle_deg: float) -> float:
    """Fold any wind angle into 0-90 degrees from the conductor axis."""
    return 90.0 - abs(wind_angle_deg % 180.0 - 90.0)


def film_temperature(ambient_temperature, conductor_temperature):
    """Equation 6. Mean of conductor surface and ambient air temperature."""
    return (conductor_temperature + ambient_temperature) / 2.0


def air_viscosity(tfilm):
    """
    Equation 13b. Dynamic viscosity of air (lb/ft-hr)
    """
    return 0.00353 * (tfilm + 273.15)**1.5 / (tfilm + 383.4)


def air_density(tfilm, elevation):
    """
    Equation 14b. Density of air (lb/ft^3)

    pf = f(Tfilm, Elevation)
    """
    return (0.080695 - 2.901e-6*elevation + 3.7e-11*elevation**2) / (1 + 0.00367*tfilm)


def air_thermal_conductivity(tfilm):
    """
    Equation 15b. Thermal conductivity of air at Tfilm, W/(ft-degC)
    """
    p = [7.388e-3, 2.279e-5, -1.343e-9]
    return polyval(p[::-1], tfilm)


def wind_direction_factor(wind_angle_deg):
    """Equation 4a. Kangle for the angle between wind and conductor axis.

    The angle is folded into 0-90 degrees first. Kangle is 1.0 for wind
    perpendicular to the conductor and 0.388 for wind along it.
    """
    phi = deg2rad(normalize_wind_angle(wind_angle_deg))
    return 1.194 - m.cos(phi) + 0.194*m.cos(2*phi) + 0.368*m.sin(2*phi)


def reynolds_number(diameter, pf, wind_speed, uf):
    """Equation 2c.

    The viscosity is per hour, so the wind speed goes from ft/s to ft/hr.
    """
    return diameter * pf * (wind_speed * 60.0 * 60.0) / uf


def natural_convection_heat_loss(pf, diameter, delta_t):
    """
    Equation 5b. Natural convection heat loss at zero wind (W/ft).

    Returns None when the conductor is colder than the air, the power law
    has no real value there.
    """
    if delta_t < 0:
        return None
    return 1.825 * pf**0.5 * diameter**0.75 * delta_t**1.25


def convective_heat_loss(ambient_temperature: float,
                         wind_speed: float,
                         wind_angle_deg: float,
                         elevation: float,
                         conductor_temperature: float,
                         diameter: float) -> float:
    """Convective heat loss qc (W/ft).

    Args:
      - ambient_temperature: Ta, deg C
      - wind_speed: Vw, ft/s
      - wind_angle_deg: angle between wind and conductor axis, any value
      - elevation: He, conductor height above sea level, ft
      - conductor_temperature: Ts, conductor surface temperature, deg C
      - diameter: D, outer diameter of conductor, ft
    Returns:
      - float: the largest of natural convection (qc0), low wind forced
        convection (qc1) and high wind forced convection (qc2)
    """
    tfilm = film_temperature(ambient_temperature, conductor_temperature)
    uf = air_viscosity(tfilm)
    pf = air_density(tfilm, elevation)
    kf = air_thermal_conductivity(tfilm)
    Kangle = wind_direction_factor(wind_angle_deg)
    nre = reynolds_number(diameter, pf, wind_speed, uf)
    delta_t = conductor_temperature - ambient_temperature

    qc0 = natural_convection_heat_loss(pf, diameter, delta_t)
    # Equation 3a
    qc1 = Kangle * (1.01 + 1.35*nre**0.52) * kf * delta_t
    # Equation 3b
    qc2 = Kangle * 0.754 * nre**0.6 * kf * delta_t

    qc = max(qc1, qc2)
    if qc0 is not None:
        qc = max(qc0, qc)

    logger.debug("qc. Convection Heat Loss")
    logger.debug("----------------------------")
    logger.debug("D = %s" % diameter)
    logger.debug("WindAngleDeg = %s" % wind_angle_deg)
    logger.debug("Kangle = %s" % Kangle)
    logger.debug("Tfilm = %s" % tfilm)
    logger.debug("uf = %s" % uf)
    logger.debug("pf = %s" % pf)
    logger.debug("kf = %s" % kf)
    logger.debug("NRe = %s" % nre)
    logger.debug("qc0 = %s" % qc0)
    logger.debug("qc1 = %s" % qc1)
    logger.debug("qc2 = %s" % qc2)
    logger.debug("qc = %s" % qc)
    return qc


def radiated_heat_loss(ambient_temperature: float,
                       conductor_temperature: float,
                       emissivity: float,
                       diameter: float) -> float:
    """
    qr: Radiated heat loss (W/ft). Equation 7b.
    """
    qr = 1.656 * diameter * emissivity * \
        (((conductor_temperature + 273.0)/100.0)**4 - ((ambient_temperature + 273.0)/100.0)**4)

    logger.debug("qr. Radiated Heat Loss")
    logger.debug("------------------------")
    logger.debug("Tc: %s" % conductor_temperature)
    logger.debug("Ta: %s" % ambient_temperature)
    logger.debug("D: %s" % diameter)
    logger.debug("E: %s" % emissivity)
    logger.debug("qr: %s" % qr)
    return qr


def solar_declination(month, day_of_month):
    """Equation 16b. Solar declination in degrees."""
    N = day_of_year(month, day_of_month)
    return 23.4583 * m.sin(deg2rad((284.0 + N) / 365.0 * 360.0))


def hour_angle(hour_of_day):
    """Degrees from solar noon, -15 at 11:00 and +15 at 13:00."""
    return (hour_of_day - 12.0) * 15.0


def solar_altitude(latitude_deg, declination_deg, hour_angle_deg):
    """
    Get Altitude of sun (degrees). Equation 16a.
    """
    lat = deg2rad(latitude_deg)
    d = deg2rad(declination_deg)
    w = deg2rad(hour_angle_deg)
    Hc = m.asin(m.cos(lat)*m.cos(d)*m.cos(w) + m.sin(lat)*m.sin(d))
    return rad2deg(Hc)


def azimuth_constant(hour_angle_deg, X):
    """Solar azimuth constant C (degrees) for the quadrant of arctan(X)."""
    if -180 <= hour_angle_deg < 0:
        return 0.0 if X >= 0 else 180.0
    return 180.0 if X >= 0 else 360.0


def solar_azimuth(latitude_deg, declination_deg, hour_angle_deg):
    """
    Azimuth of Sun (degrees). Equation 17.
    """
    lat = deg2rad(latitude_deg)
    d = deg2rad(declination_deg)
    w = deg2rad(hour_angle_deg)
    X = m.sin(w) / (m.sin(lat)*m.cos(w) - m.cos(lat)*m.tan(d))
    C = azimuth_constant(hour_angle_deg, X)
    Zc = C + rad2deg(m.atan(X))

    logger.debug("Zc Azimuth of Sun. Solar azimuth angle")
    logger.debug("--------------------------------------")
    logger.debug("lat: %s" % latitude_deg)
    logger.debug("d: %s" % declination_deg)
    logger.debug("w: %s" % hour_angle_deg)
    logger.debug("X (solar azimuth variable): %s" % X)
    logger.debug("C (solar azimuth constant): %s" % C)
    logger.debug("Zc (degrees): %s" % Zc)
    return Zc


def solar_intensity(Hc, atmosphere_clear=True):
    """Equation 18. Qs, heat flux at sea level normal to the sun's rays (W/ft^2).

    No flux with the sun at or below the horizon. The industrial polynomial
    turns positive again for negative altitudes, so the altitude is checked
    first and the polynomial is still floored at zero above the horizon.
    """
    if Hc <= 0:
        return 0.0
    p = CLEAR_ATMOSPHERE if atmosphere_clear else INDUSTRIAL_ATMOSPHERE
    Qs = polyval(p[::-1], Hc)
    return max(Qs, 0.0)


def elevation_multiplier(elevation):
    """Table H.5 - Solar heat multiplying factor for high altitudes."""
    if elevation > 15000.0:
        return 1.3
    if elevation > 10000.0:
        return 1.25
    if elevation > 5000.0:
        return 1.15
    return 1.0


def elevation_correction(elevation):
    """
    Equation 20. Ksolar, elevation correction for Qs
    """
    p = [1.0, 3.5e-5, -1.0e-9]
    return polyval(p[::-1], elevation)


def solar_heat_gain(solar_radiation: Optional[float],
                    month: int,
                    day_of_month: int,
                    hour_of_day: float,
                    latitude_deg: float,
                    line_azimuth_deg: float,
                    elevation: float,
                    atmosphere_clear: bool,
                    absorptivity: float,
                    diameter: float) -> float:
    """
    qs: Calculate Solar Heat Gain (W/ft)

    When ``solar_radiation`` (W/ft^2) is given it is used directly and the
    sun position is never computed. Otherwise the irradiance comes from
    the sun position on the given date and hour.

    Args:
      - solar_radiation: measured irradiance or None
      - month, day_of_month, hour_of_day: when, hour_of_day is 0-24
      - latitude_deg: latitude of the line
      - line_azimuth_deg: Zl, 90 for a line running East-West
      - elevation: He, ft
      - atmosphere_clear: True for clear air, False for industrial
      - absorptivity: alpha, 0-1
      - diameter: D, ft
    """
    if solar_radiation is not None:
        return absorptivity * solar_radiation * diameter

    d = solar_declination(month, day_of_month)
    w = hour_angle(hour_of_day)
    Hc = solar_altitude(latitude_deg, d, w)
    Qs = solar_intensity(Hc, atmosphere_clear)
    # Equation 8 - intensity corrected for elevation
    Qse = Qs * elevation_multiplier(elevation) * elevation_correction(elevation)
    Zc = solar_azimuth(latitude_deg, d, w)

    # Equation 9 - Effective angle of incidence of the sun's rays
    theta = m.acos(m.cos(deg2rad(Hc)) * m.cos(deg2rad(Zc - line_azimuth_deg)))
    qs = absorptivity * Qse * m.sin(theta) * diameter

    logger.debug("qs. Solar Heat Gain")
    logger.debug("---------------------")
    logger.debug("N (Number of days into year): %s" % day_of_year(month, day_of_month))
    logger.debug("d (solar declination degrees): %s" % d)
    logger.debug("w (hour angle degrees): %s" % w)
    logger.debug("Hc: %s" % Hc)
    logger.debug("Zc: %s" % Zc)
    logger.debug("Zl: %s" % line_azimuth_deg)
    logger.debug("atmosphere clear: %s" % atmosphere_clear)
    logger.debug("alpha (Absorptivity): %s" % absorptivity)
    logger.debug("thetaDeg: %s" % rad2deg(theta))
    logger.debug("Qs (W/ft^2): %s" % Qs)
    logger.debug("Qse (W/ft^2): %s" % Qse)
    logger.debug("qs (W/ft): %s" % qs)
    return qs


def adjust_r(conductor_temperature: float,
             t_low: float,
             t_high: float,
             r_low: float,
             r_high: float) -> float:
    """Equation 10. Resistance (Ohms/ft) at the conductor temperature.

    Linear between (t_low, r_low) and (t_high, r_high) and extrapolated
    outside of it. t_high must differ from t_low.
    """
    f = (conductor_temperature - t_low) / (t_high - t_low)
    return r_low * (1.0 - f) + r_high * f

"""Steady state and transient ratings of a bare overhead conductor.

The steady state rating is the current that holds the conductor at a given
temperature, I = sqrt((qc + qr - qs) / R(Tc)). The other three solvers are
built on it and on the transient heat balance:

    m*Cp * dTc/dt = R(Tc)*I^2 + qs - qc - qr

References
--------------
[1] IEEE Std 738-2006

"""
import logging
import math
from typing import List, Optional

from ampacity.config import DEFAULT_SOLVER, SolverSettings
from ampacity.exceptions import DivergenceError, NoPhysicalSolutionError, NoSolutionError
from ampacity.ieee738 import (adjust_r, convective_heat_loss, radiated_heat_loss,
                              solar_heat_gain)
from ampacity.params import (ConductorProperties, HeatBalance, SolarGeometry,
                             TransientResult, WeatherConditions)

logger = logging.getLogger(__name__)

ABSOLUTE_ZERO = -273.15  # deg C


def bisect_increasing(func, target, lower, upper, tolerance,
                      max_doublings=DEFAULT_SOLVER.max_doublings,
                      max_iterations=DEFAULT_SOLVER.max_iterations):
    """Find x in [lower, upper] with func(x) == target for a non-decreasing func.

    The upper bound is doubled until func(upper) reaches the target, then
    the bracket is halved until it is no wider than ``tolerance``. Returns
    the midpoint of the final bracket.

    Raises:
      - ValueError: tolerance is not a positive number
      - NoSolutionError: the target is still out of reach after
        ``max_doublings`` doublings of the upper bound
    """
    if not tolerance > 0:
        raise ValueError("tolerance must be positive, got {}".format(tolerance))

    doublings = 0
    while func(upper) < target:
        if doublings >= max_doublings:
            raise NoSolutionError(target, upper, doublings)
        upper *= 2.0
        doublings += 1

    iterations = 0
    while upper - lower > tolerance and iterations < max_iterations:
        mid = (lower + upper) / 2.0
        if func(mid) < target:
            lower = mid
        else:
            upper = mid
        iterations += 1

    logger.debug("bisection: target %s, %s doublings, %s iterations, bracket [%s, %s]",
                 target, doublings, iterations, lower, upper)
    return (lower + upper) / 2.0


def heat_balance(solar_radiation, month, day_of_month, hour_of_day,
                 ambient_temperature, wind_speed, wind_angle_deg,
                 latitude_deg, line_azimuth_deg, elevation, atmosphere_clear,
                 conductor_temperature, absorptivity, emissivity, diameter,
                 t_low, t_high, r_low, r_high) -> HeatBalance:
    """All the terms of the steady state heat balance at ``conductor_temperature``.

    ``current`` is 0 when the conductor is below ambient or when the solar
    gain exceeds the losses.
    """
    qc = convective_heat_loss(ambient_temperature, wind_speed, wind_angle_deg,
                              elevation, conductor_temperature, diameter)
    qr = radiated_heat_loss(ambient_temperature, conductor_temperature, emissivity, diameter)
    qs = solar_heat_gain(solar_radiation, month, day_of_month, hour_of_day, latitude_deg,
                         line_azimuth_deg, elevation, atmosphere_clear, absorptivity, diameter)
    rTc = adjust_r(conductor_temperature, t_low, t_high, r_low, r_high)

    if conductor_temperature < ambient_temperature or qc + qr - qs < 0:
        current = 0.0
    else:
        current = ((qc + qr - qs) / rTc)**0.5

    return HeatBalance(conductor_temperature=conductor_temperature,
                       qc=qc, qr=qr, qs=qs, resistance=rTc, current=current)


def thermal_rating(solar_radiation, month, day_of_month, hour_of_day,
                   ambient_temperature, wind_speed, wind_angle_deg,
                   latitude_deg, line_azimuth_deg, elevation, atmosphere_clear,
                   conductor_temperature, absorptivity, emissivity, diameter,
                   t_low, t_high, r_low, r_high, strict=False) -> float:
    """Steady state current (A) that holds the conductor at ``conductor_temperature``.

    Args:
      - solar_radiation: W/ft^2, or None to compute it from month/day/hour
      - month, day_of_month, hour_of_day: date and time for the sun position
      - ambient_temperature: Ta, deg C
      - wind_speed: Vw, ft/s
      - wind_angle_deg: angle between wind and conductor, degrees
      - latitude_deg: latitude of the line
      - line_azimuth_deg: Zl, 90 for a line running East-West
      - elevation: He, ft above sea level
      - atmosphere_clear: True for clear air, False for industrial
      - conductor_temperature: Ts, deg C
      - absorptivity, emissivity: 0-1
      - diameter: D, ft
      - t_low, t_high, r_low, r_high: resistance (Ohms/ft) at two temperatures
      - strict: raise instead of returning 0 when the sun alone holds the
        conductor above ``conductor_temperature``
    Returns:
      - float: rating in amps. 0 for a conductor below ambient.
    Raises:
      - NoPhysicalSolutionError: strict and qc + qr - qs < 0
    """
    if conductor_temperature < ambient_temperature:
        return 0.0

    qc = convective_heat_loss(ambient_temperature, wind_speed, wind_angle_deg,
                              elevation, conductor_temperature, diameter)
    qr = radiated_heat_loss(ambient_temperature, conductor_temperature, emissivity, diameter)
    qs = solar_heat_gain(solar_radiation, month, day_of_month, hour_of_day, latitude_deg,
                         line_azimuth_deg, elevation, atmosphere_clear, absorptivity, diameter)
    rTc = adjust_r(conductor_temperature, t_low, t_high, r_low, r_high)

    if qc + qr - qs < 0:
        # Ambient temperature plus solar heating already puts the conductor
        # above conductor_temperature.
        if strict:
            raise NoPhysicalSolutionError(qc, qr, qs)
        logger.debug("qc + qr - qs < 0 at Tc = %s. Rating is 0" % conductor_temperature)
        return 0.0

    I = ((qc + qr - qs) / rTc)**0.5

    logger.debug("Steady State Thermal Rating")
    logger.debug("-----------------------------")
    logger.debug("qc: %s" % qc)
    logger.debug("qr: %s" % qr)
    logger.debug("qs: %s" % qs)
    logger.debug("R(Tc): %s" % rTc)
    logger.debug("I: %s" % I)
    return I


def calculated_temperature(solar_radiation, month, day_of_month, hour_of_day,
                           ambient_temperature, wind_speed, wind_angle_deg,
                           latitude_deg, line_azimuth_deg, elevation, atmosphere_clear,
                           current, tolerance, absorptivity, emissivity, diameter,
                           t_low, t_high, r_low, r_high,
                           settings: SolverSettings = DEFAULT_SOLVER) -> float:
    """Steady state conductor temperature (deg C) for a constant ``current``.

    Searches conductor temperatures from ambient upwards until the steady
    state rating matches ``current``. ``tolerance`` is the width of the
    final temperature bracket. A negative current returns 0.

    Raises:
      - NoSolutionError: no temperature within the search domain carries
        the current
    """
    if current < 0:
        return 0.0

    def rating_at(temperature):
        return thermal_rating(solar_radiation, month, day_of_month, hour_of_day,
                              ambient_temperature, wind_speed, wind_angle_deg,
                              latitude_deg, line_azimuth_deg, elevation, atmosphere_clear,
                              temperature, absorptivity, emissivity, diameter,
                              t_low, t_high, r_low, r_high)

    upper = max(settings.temperature_upper_bound, ambient_temperature)
    Tc = bisect_increasing(rating_at, current, ambient_temperature, upper, tolerance,
                           settings.max_doublings, settings.max_iterations)
    logger.debug("Calculated temperature for %s A: %s" % (current, Tc))
    return Tc


def temperature_trajectory(solar_radiation, month, day_of_month, hour_of_day,
                           ambient_temperature, wind_speed, wind_angle_deg,
                           latitude_deg, line_azimuth_deg, elevation, atmosphere_clear,
                           conductor_temperature, current, time_step, steps,
                           absorptivity, emissivity, diameter,
                           t_low, t_high, r_low, r_high, heat_capacity) -> List[float]:
    """Conductor temperatures of a forward Euler run at constant current.

    The first entry is ``conductor_temperature``, then one entry per step of
    ``time_step`` seconds. Losses and resistance follow the conductor
    temperature. Weather and sun are fixed for the whole run, so the solar
    gain is the same on every step.

    There is no step size control. A large time_step * current^2 /
    heat_capacity overshoots, and once the temperature leaves the range
    the air property correlations cover the run stops.

    Raises:
      - DivergenceError: the temperature fell below absolute zero or
        stopped being finite
    """
    qs = solar_heat_gain(solar_radiation, month, day_of_month, hour_of_day, latitude_deg,
                         line_azimuth_deg, elevation, atmosphere_clear, absorptivity, diameter)
    Tc = conductor_temperature
    trajectory = [Tc]
    for _ in range(steps):
        qc = convective_heat_loss(ambient_temperature, wind_speed, wind_angle_deg,
                                  elevation, Tc, diameter)
        qr = radiated_heat_loss(ambient_temperature, Tc, emissivity, diameter)
        rTc = adjust_r(Tc, t_low, t_high, r_low, r_high)
        Tc += (rTc * current**2 + qs - qc - qr) * time_step / heat_capacity
        if not math.isfinite(Tc) or Tc < ABSOLUTE_ZERO:
            raise DivergenceError(current, len(trajectory), Tc)
        trajectory.append(Tc)
    return trajectory


def conductor_temperature_rise(solar_radiation, month, day_of_month, hour_of_day,
                               ambient_temperature, wind_speed, wind_angle_deg,
                               latitude_deg, line_azimuth_deg, elevation, atmosphere_clear,
                               conductor_temperature, current, time_step, steps,
                               absorptivity, emissivity, diameter,
                               t_low, t_high, r_low, r_high, heat_capacity) -> float:
    """Temperature rise (deg C) after ``steps`` steps of ``time_step`` seconds.

    Args:
      - conductor_temperature: initial conductor temperature, deg C
      - current: constant current, A
      - time_step: s
      - steps: number of time steps to apply
      - heat_capacity: m*Cp, J/(ft-degC)
      - the rest: as for thermal_rating
    Returns:
      - float: final minus initial temperature. 0 when the conductor starts
        below ambient.
    """
    if conductor_temperature < ambient_temperature:
        return 0.0

    trajectory = temperature_trajectory(solar_radiation, month, day_of_month, hour_of_day,
                                        ambient_temperature, wind_speed, wind_angle_deg,
                                        latitude_deg, line_azimuth_deg, elevation,
                                        atmosphere_clear, conductor_temperature, current,
                                        time_step, steps, absorptivity, emissivity, diameter,
                                        t_low, t_high, r_low, r_high, heat_capacity)
    rise = trajectory[-1] - trajectory[0]

    logger.debug("Conductor Temperature Rise")
    logger.debug("--------------------------")
    logger.debug("I: %s" % current)
    logger.debug("time_step: %s" % time_step)
    logger.debug("steps: %s" % steps)
    logger.debug("Ti: %s" % trajectory[0])
    logger.debug("Tf: %s" % trajectory[-1])
    return rise


def transient_rating(solar_radiation, month, day_of_month, hour_of_day,
                     ambient_temperature, wind_speed, wind_angle_deg,
                     latitude_deg, line_azimuth_deg, elevation, atmosphere_clear,
                     conductor_temperature, conductor_temperature_max, time_step, steps,
                     tolerance, absorptivity, emissivity, diameter,
                     t_low, t_high, r_low, r_high, heat_capacity,
                     settings: SolverSettings = DEFAULT_SOLVER) -> float:
    """Constant current (A) that takes the conductor from ``conductor_temperature``
    to ``conductor_temperature_max`` in ``steps`` steps of ``time_step`` seconds.

    ``tolerance`` is the width of the final current bracket. Returns 0 when
    conductor_temperature_max is below the initial temperature.

    Raises:
      - NoSolutionError: no current within the search domain reaches the
        temperature limit
      - DivergenceError: a trial current is too large for the time step
        and the integration blew up before the limit was bracketed
    """
    if conductor_temperature_max < conductor_temperature:
        return 0.0

    def rise_at(current):
        return conductor_temperature_rise(solar_radiation, month, day_of_month, hour_of_day,
                                          ambient_temperature, wind_speed, wind_angle_deg,
                                          latitude_deg, line_azimuth_deg, elevation,
                                          atmosphere_clear, conductor_temperature, current,
                                          time_step, steps, absorptivity, emissivity, diameter,
                                          t_low, t_high, r_low, r_high, heat_capacity)

    I = bisect_increasing(rise_at, conductor_temperature_max - conductor_temperature,
                          0.0, settings.current_upper_bound, tolerance,
                          settings.max_doublings, settings.max_iterations)
    logger.debug("Transient rating to %s C over %s s: %s A"
                 % (conductor_temperature_max, time_step * steps, I))
    return I


class Conductor:
    """IEEE738 calculations with US units for one conductor and one set of
    conditions.

    Checks its inputs before every calculation, the module level functions
    do not.
    """
    def __init__(self, weather: WeatherConditions, conductor: ConductorProperties,
                 geometry: Optional[SolarGeometry] = None,
                 solver: SolverSettings = DEFAULT_SOLVER):
        self.weather = weather
        self.conductor = conductor
        self.geometry = geometry
        self.solver = solver

        # Terms of the classic heat balance equation from the last
        # steady state rating.
        self.qs = None
        self.qr = None
        self.qc = None

    def _sun(self):
        g = self.geometry
        if g is None:
            return dict(month=None, day_of_month=None, hour_of_day=None,
                        latitude_deg=None, line_azimuth_deg=None)
        return dict(month=g.month, day_of_month=g.day_of_month, hour_of_day=g.hour_of_day,
                    latitude_deg=g.latitude_deg, line_azimuth_deg=g.line_azimuth_deg)

    def _conditions(self):
        """Keyword arguments shared by every module level calculation."""
        w = self.weather
        c = self.conductor
        return dict(solar_radiation=w.solar_radiation,
                    ambient_temperature=w.ambient_temperature,
                    wind_speed=w.wind_speed,
                    wind_angle_deg=w.normalized_wind_angle,
                    elevation=w.elevation,
                    atmosphere_clear=w.atmosphere_clear,
                    absorptivity=c.absorptivity,
                    emissivity=c.emissivity,
                    diameter=c.diameter,
                    t_low=c.t_low, t_high=c.t_high, r_low=c.r_low, r_high=c.r_high,
                    **self._sun())

    def input_validation(self, transient=False):
        """Check input parameters for problems the calculations would
        silently carry through.
        """
        c = self.conductor
        if self.geometry is None and self.weather.solar_radiation is None:
            raise ValueError("Solar geometry is required when no solar radiation is given.")
        if c.t_high <= c.t_low:
            raise ValueError("t_high must be above t_low.")
        if c.r_low > 0.001:
            raise ValueError("r_low is much higher than expected.  Units should be Ohms/ft.")
        if c.r_high > 0.001:
            raise ValueError("r_high is much higher than expected.  Units should be Ohms/ft.")
        if c.diameter <= 0:
            raise ValueError("Diameter out of range.")
        if c.absorptivity < 0:
            raise ValueError("Absorptivity out of range.")
        if c.emissivity < 0:
            raise ValueError("Emissivity is out of range.")
        if transient and (c.heat_capacity is None or c.heat_capacity <= 0):
            raise ValueError("A positive heat capacity is required for transient calculations.")

    def convection_heat_loss(self, Tc):
        w = self.weather
        return convective_heat_loss(w.ambient_temperature, w.wind_speed,
                                    w.normalized_wind_angle, w.elevation, Tc,
                                    self.conductor.diameter)

    def radiated_heat_loss(self, Tc):
        return radiated_heat_loss(self.weather.ambient_temperature, Tc,
                                  self.conductor.emissivity, self.conductor.diameter)

    def solar_heat_gain(self):
        w = self.weather
        s = self._sun()
        return solar_heat_gain(w.solar_radiation, s['month'], s['day_of_month'],
                               s['hour_of_day'], s['latitude_deg'], s['line_azimuth_deg'],
                               w.elevation, w.atmosphere_clear,
                               self.conductor.absorptivity, self.conductor.diameter)

    def get_res_Tc(self, Tc):
        c = self.conductor
        return adjust_r(Tc, c.t_low, c.t_high, c.r_low, c.r_high)

    def heat_balance(self, Tc) -> HeatBalance:
        self.input_validation()
        return heat_balance(conductor_temperature=Tc, **self._conditions())

    def steady_state_thermal_rating(self, Tc, strict=False):
        """Conductor rating in Amps

        Args:
          - Tc: max allowable conductor temperature, deg C
          - strict: raise NoPhysicalSolutionError instead of returning 0
            when solar gain exceeds the losses
        Returns:
          - float: rating of the whole bundle in amps
        """
        balance = self.heat_balance(Tc)
        self.qc = balance.qc
        self.qr = balance.qr
        self.qs = balance.qs

        # balance.current is already 0 below ambient and for a negative radicand
        if strict and Tc >= self.weather.ambient_temperature and balance.net_cooling < 0:
            raise NoPhysicalSolutionError(balance.qc, balance.qr, balance.qs)
        I_bundled = balance.current * self.conductor.conductors_per_bundle
        logger.debug("I for bundles: %s" % I_bundled)
        return I_bundled

    def calculated_temperature(self, current, tolerance=None):
        """Steady state temperature for the bundle current ``current``."""
        self.input_validation()
        if tolerance is None:
            tolerance = self.solver.tolerance
        return calculated_temperature(current=current / self.conductor.conductors_per_bundle,
                                      tolerance=tolerance, settings=self.solver,
                                      **self._conditions())

    def temperature_trajectory(self, Ti, current, time_step, steps) -> TransientResult:
        self.input_validation(transient=True)
        trajectory = temperature_trajectory(conductor_temperature=Ti,
                                            current=current / self.conductor.conductors_per_bundle,
                                            time_step=time_step, steps=steps,
                                            heat_capacity=self.conductor.heat_capacity,
                                            **self._conditions())
        return TransientResult(initial_temperature=Ti, current=current,
                               time_step=time_step, trajectory=trajectory)

    def conductor_temperature_rise(self, Ti, current, time_step, steps):
        self.input_validation(transient=True)
        return conductor_temperature_rise(conductor_temperature=Ti,
                                          current=current / self.conductor.conductors_per_bundle,
                                          time_step=time_step, steps=steps,
                                          heat_capacity=self.conductor.heat_capacity,
                                          **self._conditions())

    def transient_rating(self, Ti, Tmax, time_step, steps, tolerance=None):
        """Bundle current that brings the conductor from Ti to Tmax in
        ``steps`` steps of ``time_step`` seconds.
        """
        self.input_validation(transient=True)
        if tolerance is None:
            tolerance = self.solver.tolerance
        I = transient_rating(conductor_temperature=Ti, conductor_temperature_max=Tmax,
                             time_step=time_step, steps=steps, tolerance=tolerance,
                             heat_capacity=self.conductor.heat_capacity,
                             settings=self.solver, **self._conditions())
        return I * self.conductor.conductors_per_bundle

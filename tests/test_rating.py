"""
Tests for the steady state and transient solvers.
"""

import pytest

from ampacity.config import SolverSettings
from ampacity.exceptions import (DivergenceError, NoPhysicalSolutionError, NoSolutionError,
                                 RatingError)
from ampacity.rating import (bisect_increasing, calculated_temperature,
                             conductor_temperature_rise, heat_balance,
                             temperature_trajectory, thermal_rating, transient_rating)

HEAT_CAPACITY = 305.6328


def transient_args(conditions, **kwargs):
    return dict(conditions, heat_capacity=HEAT_CAPACITY, **kwargs)


class TestBisectIncreasing:
    def test_square_root(self):
        x = bisect_increasing(lambda x: x * x, 2.0, 0.0, 1.0, 1e-9)
        assert x == pytest.approx(2**0.5, abs=1e-8)

    def test_expands_bracket(self):
        x = bisect_increasing(lambda x: x, 5000.0, 0.0, 1.0, 1e-6)
        assert x == pytest.approx(5000.0, abs=1e-5)

    def test_target_out_of_reach(self):
        with pytest.raises(NoSolutionError) as excinfo:
            bisect_increasing(lambda x: 1.0, 2.0, 0.0, 1.0, 0.01, max_doublings=10)
        assert excinfo.value.doublings == 10
        assert excinfo.value.upper_bound == 1024.0

    @pytest.mark.parametrize("tolerance", [0.0, -1.0, float('nan')])
    def test_rejects_bad_tolerance(self, tolerance):
        with pytest.raises(ValueError):
            bisect_increasing(lambda x: x, 1.0, 0.0, 2.0, tolerance)

    def test_iteration_cap(self):
        calls = []

        def f(x):
            calls.append(x)
            return x

        bisect_increasing(f, 0.5, 0.0, 1.0, 1e-12, max_iterations=3)
        # one evaluation at the upper bound, then three bisection steps
        assert len(calls) == 4


class TestThermalRating:
    def test_reference_rating(self, conditions):
        I = thermal_rating(conductor_temperature=100.0, **conditions)
        assert I == pytest.approx(1028.28, abs=0.5)

    def test_heat_balance_terms(self, conditions):
        balance = heat_balance(conductor_temperature=100.0, **conditions)
        assert balance.qc == pytest.approx(24.988, abs=0.01)
        assert balance.qr == pytest.approx(11.937, abs=0.01)
        assert balance.qs == pytest.approx(6.847, abs=0.01)
        assert balance.resistance == pytest.approx(2.8447e-5, rel=1e-4)
        assert balance.current == pytest.approx(1028.28, abs=0.5)
        assert balance.net_cooling == pytest.approx(30.078, abs=0.03)

    @pytest.mark.parametrize("Tc", [-20.0, 0.0, 39.999])
    def test_zero_below_ambient(self, conditions, Tc):
        assert thermal_rating(conductor_temperature=Tc, **conditions) == 0.0
        hot_sun = dict(conditions, solar_radiation=500.0, wind_speed=50.0)
        assert thermal_rating(conductor_temperature=Tc, **hot_sun) == 0.0

    def test_non_decreasing_in_temperature(self, conditions):
        ratings = [thermal_rating(conductor_temperature=float(Tc), **conditions)
                   for Tc in range(40, 301, 5)]
        assert all(b >= a for a, b in zip(ratings, ratings[1:])), ratings

    def test_industrial_night_rating(self, conditions):
        """At midnight industrial air rates the same as no sun at all."""
        night = dict(conditions, hour_of_day=0.0, atmosphere_clear=False)
        dark = dict(conditions, solar_radiation=0.0)
        assert thermal_rating(conductor_temperature=100.0, **night) == pytest.approx(
            thermal_rating(conductor_temperature=100.0, **dark))

    def test_sun_hotter_than_limit(self, conditions):
        """Strong sun and still air put the conductor above 45 C with no current."""
        sunny = dict(conditions, solar_radiation=200.0, wind_speed=0.0)
        assert thermal_rating(conductor_temperature=45.0, **sunny) == 0.0
        with pytest.raises(NoPhysicalSolutionError) as excinfo:
            thermal_rating(conductor_temperature=45.0, strict=True, **sunny)
        err = excinfo.value
        assert err.qc + err.qr < err.qs


class TestCalculatedTemperature:
    def test_reference_temperature(self, conditions):
        Tc = calculated_temperature(current=1028.28, tolerance=0.01, **conditions)
        assert Tc == pytest.approx(100.0, abs=0.1)

    @pytest.mark.parametrize("current", [0.0, 200.0, 800.0, 1500.0, 3000.0])
    def test_round_trip(self, conditions, current):
        Tc = calculated_temperature(current=current, tolerance=0.001, **conditions)
        assert Tc >= conditions['ambient_temperature']
        if current > 0:
            I = thermal_rating(conductor_temperature=Tc, **conditions)
            assert I == pytest.approx(current, abs=1.0)

    def test_negative_current(self, conditions):
        assert calculated_temperature(current=-5.0, tolerance=0.01, **conditions) == 0.0

    def test_large_current_expands_bracket(self, conditions):
        """Beyond 256 C the upper bound doubles until the rating is reached."""
        Tc = calculated_temperature(current=4000.0, tolerance=0.01, **conditions)
        assert Tc > 256.0
        I = thermal_rating(conductor_temperature=Tc, **conditions)
        assert I == pytest.approx(4000.0, abs=2.0)

    def test_no_sun_cooler_than_sun(self, conditions):
        night = dict(conditions, solar_radiation=0.0)
        assert calculated_temperature(current=800.0, tolerance=0.01, **night) < \
            calculated_temperature(current=800.0, tolerance=0.01, **conditions)

    def test_search_limit(self, conditions):
        settings = SolverSettings(max_doublings=0)
        with pytest.raises(NoSolutionError):
            calculated_temperature(current=4000.0, tolerance=0.01, settings=settings, **conditions)


class TestConductorTemperatureRise:
    def test_reference_rise(self, conditions):
        """2000 A for 60 s from 100 C."""
        rise = conductor_temperature_rise(conductor_temperature=100.0, current=2000.0,
                                          time_step=60.0, steps=1,
                                          **transient_args(conditions))
        assert rise == pytest.approx(16.43, abs=0.05)

    def test_zero_below_ambient(self, conditions):
        rise = conductor_temperature_rise(conductor_temperature=30.0, current=2000.0,
                                          time_step=60.0, steps=10,
                                          **transient_args(conditions))
        assert rise == 0.0

    def test_zero_steps(self, conditions):
        rise = conductor_temperature_rise(conductor_temperature=100.0, current=2000.0,
                                          time_step=60.0, steps=0,
                                          **transient_args(conditions))
        assert rise == 0.0

    def test_non_decreasing_in_current(self, conditions):
        rises = [conductor_temperature_rise(conductor_temperature=60.0, current=float(I),
                                            time_step=10.0, steps=30,
                                            **transient_args(conditions))
                 for I in range(0, 2001, 100)]
        assert all(b >= a for a, b in zip(rises, rises[1:])), rises

    def test_steady_state_current_holds_temperature(self, conditions):
        """At the steady state rating the conductor temperature barely moves."""
        I = thermal_rating(conductor_temperature=100.0, **conditions)
        rise = conductor_temperature_rise(conductor_temperature=100.0, current=I,
                                          time_step=10.0, steps=60,
                                          **transient_args(conditions))
        assert rise == pytest.approx(0.0, abs=0.01)

    def test_trajectory(self, conditions):
        trajectory = temperature_trajectory(conductor_temperature=100.0, current=1500.0,
                                            time_step=30.0, steps=20,
                                            **transient_args(conditions))
        assert len(trajectory) == 21
        assert trajectory[0] == 100.0
        assert all(b > a for a, b in zip(trajectory, trajectory[1:]))
        rise = conductor_temperature_rise(conductor_temperature=100.0, current=1500.0,
                                          time_step=30.0, steps=20,
                                          **transient_args(conditions))
        assert rise == trajectory[-1] - trajectory[0]

    def test_cools_toward_steady_state(self, conditions):
        trajectory = temperature_trajectory(conductor_temperature=150.0, current=500.0,
                                            time_step=30.0, steps=200,
                                            **transient_args(conditions))
        steady = calculated_temperature(current=500.0, tolerance=0.001, **conditions)
        assert trajectory[-1] == pytest.approx(steady, abs=0.5)

    def test_unstable_step_raises(self, conditions):
        """An hour long step at 8192 A overshoots past absolute zero on the way back."""
        with pytest.raises(DivergenceError) as excinfo:
            temperature_trajectory(conductor_temperature=100.0, current=8192.0,
                                   time_step=3600.0, steps=5,
                                   **transient_args(conditions))
        assert excinfo.value.step == 2
        assert excinfo.value.temperature < -273.15


class TestTransientRating:
    @pytest.mark.parametrize("Tmax, steps", [(254.3, 31), (150.0, 10), (120.0, 60)])
    def test_round_trip(self, conditions, Tmax, steps):
        I = transient_rating(conductor_temperature=100.0, conductor_temperature_max=Tmax,
                             time_step=60.0, steps=steps, tolerance=0.01,
                             **transient_args(conditions))
        assert I > 0
        rise = conductor_temperature_rise(conductor_temperature=100.0, current=I,
                                          time_step=60.0, steps=steps,
                                          **transient_args(conditions))
        assert 100.0 + rise == pytest.approx(Tmax, abs=0.1)

    def test_above_steady_state_rating(self, conditions):
        """A short emergency allows more current than the steady state rating."""
        steady = thermal_rating(conductor_temperature=150.0, **conditions)
        I = transient_rating(conductor_temperature=100.0, conductor_temperature_max=150.0,
                             time_step=60.0, steps=10, tolerance=0.01,
                             **transient_args(conditions))
        assert I > steady

    def test_limit_below_initial_temperature(self, conditions):
        I = transient_rating(conductor_temperature=100.0, conductor_temperature_max=90.0,
                             time_step=60.0, steps=10, tolerance=0.01,
                             **transient_args(conditions))
        assert I == 0.0

    def test_limit_out_of_reach_of_a_stable_run(self, conditions):
        """Large trial currents make the minute steps unstable."""
        with pytest.raises(RatingError):
            transient_rating(conductor_temperature=100.0, conductor_temperature_max=2000.0,
                             time_step=60.0, steps=31, tolerance=0.01,
                             **transient_args(conditions))

    def test_no_time_no_rating(self, conditions):
        """With zero steps the temperature never rises, so the search gives up."""
        with pytest.raises(NoSolutionError):
            transient_rating(conductor_temperature=100.0, conductor_temperature_max=150.0,
                             time_step=60.0, steps=0, tolerance=0.01,
                             **transient_args(conditions))


class TestErrors:
    def test_hierarchy(self):
        """RatingError catches every solver failure."""
        assert issubclass(NoSolutionError, RatingError)
        assert issubclass(NoPhysicalSolutionError, RatingError)
        assert issubclass(DivergenceError, RatingError)

    def test_messages(self):
        assert "No solution found within search domain" in str(NoSolutionError(10.0, 2048.0, 3))
        err = NoPhysicalSolutionError(1.0, 2.0, 5.0)
        assert (err.qc, err.qr, err.qs) == (1.0, 2.0, 5.0)

"""Errors raised by the rating solvers."""


class RatingError(Exception):
    """Base class for rating failures."""


class NoSolutionError(RatingError):
    """The search bracket grew past its limit without reaching the target."""

    def __init__(self, target, upper_bound, doublings):
        self.target = target
        self.upper_bound = upper_bound
        self.doublings = doublings
        super().__init__(
            "No solution found within search domain: target {} not reached "
            "at upper bound {} after {} doublings".format(target, upper_bound, doublings))


class NoPhysicalSolutionError(RatingError):
    """Solar gain exceeds the convective and radiated losses at this temperature.

    The conductor is already above the requested temperature with no
    current flowing, so there is no real current that satisfies the heat
    balance.
    """

    def __init__(self, qc, qr, qs):
        self.qc = qc
        self.qr = qr
        self.qs = qs
        super().__init__(
            "qc + qr - qs < 0 (qc={}, qr={}, qs={}). Solar heating alone holds the "
            "conductor above this temperature".format(qc, qr, qs))


class DivergenceError(RatingError):
    """The forward Euler integration left the physical temperature range.

    Happens when time_step * current^2 / heat_capacity is too large for
    the explicit step and the conductor temperature oscillates with growing
    amplitude.
    """

    def __init__(self, current, step, temperature):
        self.current = current
        self.step = step
        self.temperature = temperature
        super().__init__(
            "Transient integration diverged at {} A: conductor temperature {} after "
            "step {}. Use a smaller time step".format(current, temperature, step))

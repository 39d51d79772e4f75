import math
from dataclasses import dataclass, field
from numbers import Real
from typing import List, Optional

import numpy as np


class InvalidParameterError(ValueError):
    """Raised when a population count or rate falls outside its domain."""


@dataclass
class EpidemicState:
    N: float  # Total population
    S: float  # Susceptible
    I: float  # Infected
    R: float  # Recovered


@dataclass
class Intervention:
    """
    One-time change of the transmission coefficient.

    From ``day`` onward beta is recomputed as ``new_alpha * new_p``.
    """

    day: int
    new_alpha: float
    new_p: float

    @property
    def beta(self) -> float:
        return self.new_alpha * self.new_p

    def validate(self) -> None:
        _check_day(self.day, "intervention day")
        _check_positive(self.new_alpha, "new_alpha")
        _check_probability(self.new_p, "new_p")


@dataclass
class SimulationState:
    N: float
    beta: float
    gamma: float
    S: List[float] = field(default_factory=list)
    I: List[float] = field(default_factory=list)
    R: List[float] = field(default_factory=list)
    betas: List[float] = field(default_factory=list)

    @property
    def day(self) -> int:
        return len(self.S) - 1

    @property
    def current(self) -> EpidemicState:
        return EpidemicState(N=self.N, S=self.S[-1], I=self.I[-1], R=self.R[-1])

    def reproduction_number(self) -> float:
        """R0 for the beta currently in force."""
        return basic_reproduction_number(self.N, self.beta, self.gamma)


@dataclass
class Trajectory:
    N: float
    gamma: float
    t: np.ndarray
    S: np.ndarray
    I: np.ndarray
    R: np.ndarray
    beta: np.ndarray  # beta in force on each day

    def __len__(self) -> int:
        return len(self.t)

    def snapshot(self, day: int) -> EpidemicState:
        return EpidemicState(
            N=self.N, S=float(self.S[day]), I=float(self.I[day]), R=float(self.R[day])
        )


def _check_finite(value, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidParameterError(f"{name} must be a real number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value}")


def _check_non_negative(value, name: str) -> None:
    _check_finite(value, name)
    if value < 0:
        raise InvalidParameterError(f"{name} must be non-negative, got {value}")


def _check_positive(value, name: str) -> None:
    _check_finite(value, name)
    if value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")


def _check_probability(value, name: str) -> None:
    _check_finite(value, name)
    if not 0 <= value <= 1:
        raise InvalidParameterError(f"{name} must be in [0, 1], got {value}")


def _check_day(value, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidParameterError(f"{name} must be non-negative, got {value}")


def initialize(
    S0: float, I0: float, R0: float, alpha: float, p: float, gamma: float
) -> SimulationState:
    """
    Validates the inputs and builds the day-0 simulation state.

    :param S0: Initial susceptible count
    :param I0: Initial infected count
    :param R0: Initial recovered count
    :param alpha: Average daily interactions per individual
    :param p: Transmission probability per interaction
    :param gamma: Recovery rate (1 / mean days to recovery)
    :return: SimulationState holding the day-0 snapshot
    :raises InvalidParameterError: if any input is outside its domain
    """
    _check_non_negative(S0, "S0")
    _check_non_negative(I0, "I0")
    _check_non_negative(R0, "R0")
    _check_positive(alpha, "alpha")
    _check_probability(p, "p")
    _check_positive(gamma, "gamma")

    N = S0 + I0 + R0
    if N == 0:
        raise InvalidParameterError("Total population S0 + I0 + R0 must be positive")

    beta = alpha * p
    return SimulationState(
        N=N,
        beta=beta,
        gamma=gamma,
        S=[float(S0)],
        I=[float(I0)],
        R=[float(R0)],
        betas=[beta],
    )


def step(state: SimulationState) -> SimulationState:
    """
    Advances the state by one day with a forward-Euler update (dt = 1).

    S and I are not clamped at zero.
    """
    S_current, I_current, R_current = state.S[-1], state.I[-1], state.R[-1]

    new_infections = state.beta * I_current * S_current
    new_recoveries = state.gamma * I_current

    state.S.append(S_current - new_infections)
    state.I.append(I_current + new_infections - new_recoveries)
    state.R.append(R_current + new_recoveries)
    state.betas.append(state.beta)

    return state


def run(
    state: SimulationState,
    total_days: int,
    intervention: Optional[Intervention] = None,
) -> Trajectory:
    """
    Simulates the SIR model for a given number of days.

    If an intervention is given, beta switches to ``intervention.beta`` before
    the first step taken on or after ``intervention.day`` and stays there.
    An intervention day beyond ``total_days`` never triggers.

    ``betas[d]`` holds the beta that drives the step out of day ``d``. When a
    state is run again, the entry for the day the previous run ended on is
    rewritten if the intervention switches beta on that day.

    :param state: Initialized simulation state
    :param total_days: Number of days to simulate
    :param intervention: Optional one-time change of the transmission rate
    :return: Full trajectory of the state from day 0, including earlier runs
    """
    _check_day(total_days, "total_days")
    if intervention is not None:
        intervention.validate()

    for _ in range(total_days):
        if intervention is not None and state.day >= intervention.day:
            state.beta = intervention.beta
            # the entry for the current day records the beta driving its step
            state.betas[-1] = state.beta
        step(state)

    return Trajectory(
        N=state.N,
        gamma=state.gamma,
        t=np.arange(len(state.S)),
        S=np.array(state.S),
        I=np.array(state.I),
        R=np.array(state.R),
        beta=np.array(state.betas),
    )


def basic_reproduction_number(N: float, beta: float, gamma: float) -> float:
    """Returns R0 = N * beta / gamma."""
    if gamma == 0:
        raise InvalidParameterError("gamma must be non-zero to compute R0")
    return N * beta / gamma


def daily_new_infections(trajectory: Trajectory, normalize: bool = False) -> np.ndarray:
    """
    Daily drop in the susceptible population, S(t) - S(t+1).

    :param trajectory: Trajectory to derive the series from
    :param normalize: Report the counts as a fraction of N
    :return: Array of length len(trajectory) - 1
    """
    new_infections = trajectory.S[:-1] - trajectory.S[1:]
    if normalize:
        return new_infections / trajectory.N
    return new_infections

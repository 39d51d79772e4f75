from typing import Optional

import numpy as np

from .config import DefaultConfig
from .sir import (
    Intervention,
    Trajectory,
    basic_reproduction_number,
    daily_new_infections,
    initialize,
    run,
)


class SimulationResult:
    def __init__(
        self,
        name: str,
        trajectory: Trajectory,
        intervention: Optional[Intervention] = None,
    ):
        self.name = name
        self.trajectory = trajectory
        self.intervention = intervention

    @property
    def t(self) -> np.ndarray:
        return self.trajectory.t

    @property
    def S(self) -> np.ndarray:
        return self.trajectory.S

    @property
    def I(self) -> np.ndarray:
        return self.trajectory.I

    @property
    def R(self) -> np.ndarray:
        return self.trajectory.R

    @property
    def beta(self) -> np.ndarray:
        return self.trajectory.beta

    @property
    def N(self) -> float:
        return self.trajectory.N

    @property
    def peak_infected(self) -> float:
        return np.max(self.I)

    @property
    def peak_day(self) -> int:
        return int(np.argmax(self.I))

    @property
    def total_infected(self) -> float:
        return self.R[-1] + self.I[-1]

    @property
    def final_size(self) -> float:
        """Fraction of the population that left S during the run."""
        return (self.S[0] - self.S[-1]) / self.N

    @property
    def epidemic_duration(self) -> int:
        days_above_one = np.where(self.I >= 1.0)[0]
        return int(days_above_one[-1]) if len(days_above_one) > 0 else 0

    @property
    def intervention_day(self) -> Optional[int]:
        """Day the intervention took effect, or None if it never did."""
        if self.intervention is None or self.intervention.day >= len(self.t) - 1:
            return None
        return self.intervention.day

    @property
    def basic_reproduction_number(self) -> float:
        return basic_reproduction_number(self.N, self.beta[0], self.trajectory.gamma)

    @property
    def final_reproduction_number(self) -> float:
        """R0 for the beta in force at the end of the run."""
        return basic_reproduction_number(self.N, self.beta[-1], self.trajectory.gamma)

    @property
    def effective_reproduction_number(self) -> np.ndarray:
        return self.beta * self.S / self.trajectory.gamma

    @property
    def new_infections(self) -> np.ndarray:
        return daily_new_infections(self.trajectory)

    @property
    def new_infections_fraction(self) -> np.ndarray:
        return daily_new_infections(self.trajectory, normalize=True)


class Simulation:
    def __init__(self, config: DefaultConfig):
        self.config = config

    def run(self) -> SimulationResult:
        """
        Runs the SIR simulation described by the config.

        :return: SimulationResult with the complete trajectory
        """
        state = initialize(
            self.config.S0,
            self.config.I0,
            self.config.R0,
            self.config.alpha,
            self.config.p,
            self.config.gamma,
        )
        intervention = self.config.intervention()
        trajectory = run(state, self.config.days, intervention)

        return SimulationResult(
            name=self.config.name,
            trajectory=trajectory,
            intervention=intervention,
        )

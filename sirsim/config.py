from typing import Any, Dict, List, Optional

from .sir import Intervention


class DefaultConfig:
    def __init__(self):
        self.name = "default"

        # Initial populations
        self.S0 = 100000  # Initial susceptible
        self.I0 = 10  # Initial infected
        self.R0 = 0  # Initial recovered

        # Transmission and recovery
        self.alpha = 50  # Average daily interactions per person
        self.p = 1 / 30000000  # Transmission probability per interaction
        self.gamma = 1 / 14  # Recovery rate (14 days to recover)

        # Simulation settings
        self.days = 200  # Simulation days

        # Intervention (None disables it)
        self.intervention_day: Optional[int] = None
        self.intervention_alpha: Optional[float] = None
        self.intervention_p: Optional[float] = None

    @property
    def N(self) -> float:
        return self.S0 + self.I0 + self.R0

    @property
    def beta(self) -> float:
        return self.alpha * self.p

    def intervention(self) -> Optional[Intervention]:
        if self.intervention_day is None:
            return None
        new_alpha = (
            self.alpha if self.intervention_alpha is None else self.intervention_alpha
        )
        new_p = self.p if self.intervention_p is None else self.intervention_p
        return Intervention(day=self.intervention_day, new_alpha=new_alpha, new_p=new_p)

    def to_dict(self) -> Dict[str, Any]:
        return dict(vars(self))


class InterventionConfig(DefaultConfig):
    def __init__(self):
        super().__init__()
        self.name = "intervention"

        # Contact rate drops from 50 to 30 on day 60
        self.intervention_day = 60
        self.intervention_alpha = 30


CONFIGS = {
    "default": DefaultConfig,
    "intervention": InterventionConfig,
}


def get_config(name: str) -> DefaultConfig:
    if name not in CONFIGS:
        available = ", ".join(CONFIGS.keys())
        raise ValueError(f"Unknown config: '{name}'. Available configs: {available}")
    return CONFIGS[name]()


def list_configs() -> List[str]:
    return list(CONFIGS.keys())

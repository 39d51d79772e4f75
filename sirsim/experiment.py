"""
Experiment records for simulation runs.

Each run gets a timestamped directory: {base_dir}/{name}/{timestamp}/
holding config.json, summary.json, one trajectory CSV per result and
plots/ and logs/ subdirectories.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from .config import DefaultConfig
from .simulation import SimulationResult


def summarize(result: SimulationResult) -> Dict[str, Any]:
    """
    Key metrics of a simulation result as JSON-serializable values.
    """
    return {
        "name": result.name,
        "days": len(result.t) - 1,
        "population": float(result.N),
        "basic_reproduction_number": float(result.basic_reproduction_number),
        "final_reproduction_number": float(result.final_reproduction_number),
        "intervention_day": result.intervention_day,
        "peak_infected": float(result.peak_infected),
        "peak_day": result.peak_day,
        "total_infected": float(result.total_infected),
        "final_size": float(result.final_size),
        "epidemic_duration": result.epidemic_duration,
        "final_susceptible": float(result.S[-1]),
    }


class ExperimentDirectory:
    """
    Manages experiment directory structure and file paths.

    Attributes:
        name: Experiment name (first level below base_dir).
        timestamp: Run timestamp (second level below base_dir).
        root: Root directory for this experiment run.
        plots_dir: Directory for plots/figures.
        logs_dir: Directory for text logs.
    """

    def __init__(
        self, name: str, base_dir: str = "experiments", timestamp: Optional[str] = None
    ):
        self.name = name
        self.timestamp = timestamp or datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        self.base_dir = Path(base_dir)
        self.root = self.base_dir / self.name / self.timestamp

        self.plots_dir = self.root / "plots"
        self.logs_dir = self.root / "logs"

        for dir_path in [self.plots_dir, self.logs_dir]:
            dir_path.mkdir(parents=True, exist_ok=True)

    def save_config(self, configs: List[DefaultConfig]) -> Path:
        """Save the configurations of this experiment to config.json."""
        config_path = self.root / "config.json"
        config_data = {
            "name": self.name,
            "timestamp": self.timestamp,
            "configs": [config.to_dict() for config in configs],
        }
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config_data, f, indent=2, ensure_ascii=False)
        print(f"Experiment config saved to: {config_path}")
        return config_path

    def save_summary(self, results: List[SimulationResult]) -> Path:
        """
        Save experiment summary with key metrics from all runs.

        Args:
            results: List of SimulationResult objects.
        """
        summary_path = self.root / "summary.json"

        summary_data = {
            "name": self.name,
            "timestamp": self.timestamp,
            "num_runs": len(results),
            "runs": [summarize(result) for result in results],
        }

        with open(summary_path, "w", encoding="utf-8") as f:
            json.dump(summary_data, f, indent=2, ensure_ascii=False)
        print(f"Experiment summary saved to: {summary_path}")
        return summary_path

    def save_trajectory(self, result: SimulationResult) -> Path:
        """
        Save the trajectory of a run as CSV with columns day,S,I,R,beta,new_infections.

        new_infections on day t is S(t-1) - S(t); it is 0 on day 0.
        """
        trajectory_path = self.root / f"{result.name}_trajectory.csv"
        new_infections = np.concatenate([[0.0], result.new_infections])
        data = np.column_stack(
            [result.t, result.S, result.I, result.R, result.beta, new_infections]
        )
        np.savetxt(
            trajectory_path,
            data,
            delimiter=",",
            header="day,S,I,R,beta,new_infections",
            comments="",
            fmt=["%d", "%.10g", "%.10g", "%.10g", "%.10g", "%.10g"],
        )
        return trajectory_path

    def get_plot_path(self, plot_name: str) -> Path:
        return self.plots_dir / plot_name

    def __str__(self) -> str:
        return str(self.root)

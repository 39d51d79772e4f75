import os
from typing import List, Optional

import matplotlib.pyplot as plt

from .simulation import SimulationResult


def _finish_figure(save_path: Optional[str]) -> None:
    if save_path:
        directory = os.path.dirname(save_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        plt.savefig(save_path, dpi=300, bbox_inches="tight")
        plt.close()
    else:
        plt.show()
        plt.close()


def _plot_sir_curves(ax, result: SimulationResult, title: str = None) -> None:
    """
    Helper function to plot SIR curves on a given axes.
    """
    colors = {"S": "blue", "I": "red", "R": "green"}

    ax.plot(result.t, result.S, color=colors["S"], label="Susceptible (S)", linewidth=2)
    ax.plot(result.t, result.I, color=colors["I"], label="Infected (I)", linewidth=2)
    ax.plot(result.t, result.R, color=colors["R"], label="Recovered (R)", linewidth=2)

    if title:
        ax.set_title(title, fontsize=12, fontweight="bold")

    ax.set_xlabel("Time (days)")
    ax.set_ylabel("Number of people")
    ax.grid(True, alpha=0.3)

    info_text = f"Peak I: {result.peak_infected:.1f} (day {result.peak_day})\n"
    info_text += f"Total infected: {result.total_infected:.1f}\n"
    info_text += f"Duration: {result.epidemic_duration} days\n"
    info_text += f"R0: {result.basic_reproduction_number:.3f}"

    ax.text(
        0.98,
        0.98,
        info_text,
        transform=ax.transAxes,
        ha="right",
        va="top",
        bbox=dict(boxstyle="round", facecolor="wheat", alpha=0.5),
        fontsize=9,
    )

    if result.intervention_day is not None:
        ax.axvline(
            result.intervention_day,
            color="gray",
            linestyle="--",
            alpha=0.6,
            linewidth=1,
            label="Intervention",
        )

    ax.legend()


def plot_all_results(
    results: List[SimulationResult], save_path: Optional[str] = None
) -> None:
    """
    Creates a comparison plot of SIR curves from simulation results.

    :param results: List of simulation results to plot
    :param save_path: Optional path to save the plot. If None, displays the plot.
    """
    n_results = len(results)
    if n_results == 4:
        fig, axes = plt.subplots(2, 2, figsize=(14, 10))
        axes = axes.flatten()
    else:
        fig, axes = plt.subplots(1, n_results, figsize=(7 * n_results, 6))
        if n_results == 1:
            axes = [axes]

    for idx, result in enumerate(results):
        _plot_sir_curves(axes[idx], result, result.name)

    plt.tight_layout()
    plt.suptitle(
        "SIR Model Scenarios",
        fontsize=14,
        fontweight="bold",
        y=1.002,
    )

    _finish_figure(save_path)


def plot_single_result(
    result: SimulationResult, title: str = None, save_path: str = None
) -> None:
    """
    Creates a simple plot of a single SIR simulation result.

    :param result: SimulationResult to visualize
    :param title: Optional custom title
    :param save_path: Optional path to save the plot
    """
    if title is None:
        title = f"SIR Model - {result.name}"

    fig, ax = plt.subplots(figsize=(10, 6))
    _plot_sir_curves(ax, result, title)

    _finish_figure(save_path)


def plot_new_infections(
    results: List[SimulationResult], save_path: Optional[str] = None
) -> None:
    """
    Plots daily new infections as a fraction of the population.

    :param results: Simulation results drawn on the same axes
    :param save_path: Optional path to save the plot
    """
    fig, ax = plt.subplots(figsize=(10, 6))

    for result in results:
        ax.plot(
            result.t[1:], result.new_infections_fraction, label=result.name, linewidth=2
        )

    ax.set_title("Daily New Infections", fontsize=14, fontweight="bold")
    ax.set_xlabel("Time (days)")
    ax.set_ylabel("New infections (fraction of population)")
    ax.legend()
    ax.grid(True, alpha=0.3)

    _finish_figure(save_path)


def log_results(result: SimulationResult, log_dir: str = "logs") -> str:
    """
    Logs a simulation result to a text file with table format.

    :param result: Simulation result to log
    :param log_dir: Directory to save log files (default: "logs")
    :return: Path of the written log file
    """
    os.makedirs(log_dir, exist_ok=True)

    safe_name = result.name.replace(" ", "_").replace("-", "")
    log_path = os.path.join(log_dir, f"{safe_name}.txt")

    new_infections = result.new_infections

    with open(log_path, "w", encoding="utf-8") as f:
        f.write(f"Simulation Log: {result.name}\n")
        f.write("=" * 90 + "\n\n")

        header = f"{'Day':<8} {'S':<14} {'I':<14} {'R':<14} {'New':<14} {'Beta':<14}\n"
        f.write(header)
        f.write("-" * 90 + "\n")

        for day in result.t:
            S, I, R = result.S[day], result.I[day], result.R[day]
            new = new_infections[day - 1] if day > 0 else 0.0
            beta = result.beta[day]
            row = f"{day:<8} {S:<14.2f} {I:<14.2f} {R:<14.2f} {new:<14.2f} {beta:<14.4e}\n"
            f.write(row)

        f.write("\n" + "=" * 90 + "\n")
        f.write("Summary Statistics:\n")
        f.write(f"  Peak Infected: {result.peak_infected:.2f}\n")
        f.write(f"  Peak Day: {result.peak_day}\n")
        f.write(f"  Total Infected: {result.total_infected:.2f}\n")
        f.write(f"  Final Size: {result.final_size:.4f}\n")
        f.write(f"  Epidemic Duration: {result.epidemic_duration} days\n")
        f.write(f"  R0: {result.basic_reproduction_number:.4f}\n")
        if result.intervention_day is not None:
            f.write(f"  Intervention Day: {result.intervention_day}\n")
            f.write(f"  R0 After Intervention: {result.final_reproduction_number:.4f}\n")

    return log_path

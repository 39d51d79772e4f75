import argparse
from typing import List, Optional

from sirsim.config import DefaultConfig, get_config, list_configs
from sirsim.experiment import ExperimentDirectory
from sirsim.simulation import Simulation, SimulationResult
from sirsim.utils import (
    log_results,
    plot_all_results,
    plot_new_infections,
    plot_single_result,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Discrete-time SIR epidemic simulator")
    parser.add_argument(
        "--config",
        type=str,
        default="default",
        choices=list_configs(),
        help="Which configuration to use",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help="Override the number of simulated days",
    )
    parser.add_argument(
        "--intervention-day",
        type=int,
        default=None,
        help="Day from which the new contact rate applies",
    )
    parser.add_argument(
        "--intervention-alpha",
        type=float,
        default=None,
        help="Daily interactions per person after the intervention",
    )
    parser.add_argument(
        "--intervention-p",
        type=float,
        default=None,
        help="Transmission probability after the intervention (default: unchanged)",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Run the default and intervention scenarios side by side",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="experiments",
        help="Base directory for experiment records",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Show plots instead of only saving them",
    )
    return parser


def build_configs(
    args: argparse.Namespace, parser: argparse.ArgumentParser
) -> List[DefaultConfig]:
    """
    Turns parsed arguments into the configs to run.

    Flag combinations that would otherwise be ignored are rejected through
    ``parser.error``.
    """
    new_rate_given = args.intervention_alpha is not None or args.intervention_p is not None

    if args.intervention_day is None and new_rate_given:
        parser.error("--intervention-alpha/--intervention-p require --intervention-day")
    if args.intervention_day is not None and not new_rate_given:
        parser.error(
            "--intervention-day requires --intervention-alpha or --intervention-p"
        )

    if args.compare:
        if args.intervention_day is not None:
            parser.error("--compare cannot be combined with a custom intervention")
        if args.config != "default":
            parser.error("--compare always runs the default and intervention configs")
        configs = [get_config("default"), get_config("intervention")]
    else:
        configs = [get_config(args.config)]

    for config in configs:
        if args.days is not None:
            config.days = args.days
        if args.intervention_day is not None:
            config.name = "custom"
            config.intervention_day = args.intervention_day
            config.intervention_alpha = args.intervention_alpha
            config.intervention_p = args.intervention_p

    return configs


def main(argv: Optional[List[str]] = None) -> List[SimulationResult]:
    parser = build_parser()
    args = parser.parse_args(argv)

    configs = build_configs(args, parser)
    experiment = ExperimentDirectory(
        "compare" if args.compare else configs[0].name, base_dir=args.output_dir
    )
    experiment.save_config(configs)

    results = []
    for config in configs:
        print(f"Running {config.name} scenario for {config.days} days...")
        result = Simulation(config).run()
        print(
            f"  R0: {result.basic_reproduction_number:.3f}, "
            f"peak infected: {result.peak_infected:.1f} on day {result.peak_day}, "
            f"final susceptible: {result.S[-1]:.1f}"
        )
        log_results(result, log_dir=str(experiment.logs_dir))
        experiment.save_trajectory(result)
        plot_single_result(
            result, save_path=str(experiment.get_plot_path(f"{result.name}.png"))
        )
        results.append(result)

    plot_all_results(results, save_path=str(experiment.get_plot_path("all_results.png")))
    plot_new_infections(
        results, save_path=str(experiment.get_plot_path("new_infections.png"))
    )
    if args.show:
        plot_all_results(results)

    experiment.save_summary(results)
    print(f"Done! Results in {experiment}")
    return results


if __name__ == "__main__":
    main()

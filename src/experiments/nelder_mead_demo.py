"""Run the simplex optimizer from the command line.

With no arguments this minimizes the implicit-curve distance from [1, 1]
at tolerances 1e-6 and 1e-12 and prints both results:

    python -m experiments.nelder_mead_demo
    python -m experiments.nelder_mead_demo --config run.json --set scale=0.5
    python -m experiments.nelder_mead_demo --tolerance 1e-8 --plot out/history.png
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from core.logging import format_result, log
from core.types import NelderMeadResult
from experiments.config import NelderMeadConfig, apply_overrides, build_optimizer, load_json
from experiments.plotting import plot_history

DEFAULT_CONFIG: dict[str, Any] = {
    "objective": "tasks.implicit_curves:ImplicitCurveDistance",
    "constraint": None,
    "start": [1.0, 1.0],
    "scale": 1.0,
    "max_iterations": 100000,
}
DEFAULT_TOLERANCES = (1.0e-6, 1.0e-12)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Nelder-Mead simplex minimization")
    parser.add_argument("--config", type=Path, default=None, help="JSON run config")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a config value (dotted keys allowed)",
    )
    parser.add_argument(
        "--tolerance",
        dest="tolerances",
        type=float,
        action="append",
        default=None,
        help="Tolerance to run at (repeatable)",
    )
    parser.add_argument("--plot", type=Path, default=None, help="Write a history plot of the last run")
    return parser.parse_args(argv)


def run_demo(
    config: dict[str, Any],
    tolerances: list[float],
    *,
    plot_path: Path | None = None,
) -> list[NelderMeadResult]:
    """Run one optimizer over each tolerance and print every result."""
    if plot_path is not None:
        config = {**config, "track_history": True}
    optimizer = build_optimizer(config)
    settings = NelderMeadConfig.from_dict(config)
    start = config.get("start") or [0.0] * optimizer.dimension

    results = []
    for tolerance in tolerances:
        print(f"Trying Nelder Mead with tolerance {tolerance:.1e}", flush=True)
        result = optimizer.run(start, tolerance, settings.scale)
        print(format_result(result), flush=True)
        results.append(result)

    if plot_path is not None and results and results[-1].history is not None:
        plot_history(results[-1].history, plot_path, title=f"tolerance {tolerances[-1]:.1e}")
        log(f"history plot written to {plot_path}", tag="Experiment")
    return results


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = dict(DEFAULT_CONFIG)
    if args.config is not None:
        config.update(load_json(args.config))
    config = apply_overrides(config, args.overrides)

    if args.tolerances:
        tolerances = args.tolerances
    elif "tolerance" in config:
        tolerances = [float(config["tolerance"])]
    else:
        tolerances = list(DEFAULT_TOLERANCES)

    run_demo(config, tolerances, plot_path=args.plot)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

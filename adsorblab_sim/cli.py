# cli.py
"""
AdsorbLab Sim - Command Line Interface
======================================

Subcommands:
    predict   Removal prediction (optionally with kinetic curve)
    optimize  Inverse design of operating conditions
    explain   Factor attribution of a prediction
    heatmap   Adsorbent × contaminant removal matrix
    validate  Agreement with independent validation experiments
"""

import argparse
import logging
import sys
from collections.abc import Sequence

import pandas as pd

from . import __version__
from .attribution import attribution_to_dataframe, explain_prediction
from .config import DEFAULT_OPTIMIZATION_BOUNDS
from .models import predict_removal
from .optimization import optimize_conditions
from .registry import list_contaminants, list_materials
from .utils import (
    compare_validation_scenarios,
    kinetic_curve,
    material_heatmap,
    operating_window,
    validation_summary,
)
from .validation import format_validation_errors, validate_prediction_inputs

logger = logging.getLogger(__name__)


def _add_conditions(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--material", default="MNCJG", help="Adsorbent identifier")
    parser.add_argument("--contaminant", default="Cd(II)", help="Contaminant identifier")
    parser.add_argument("--ph", type=float, default=6.0, help="Initial pH")
    parser.add_argument("--concentration", type=float, default=5.0, help="Initial concentration (mg/L)")
    parser.add_argument("--time", type=float, default=30.0, help="Contact time (min)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adsorblab-sim",
        description="Adsorbent removal surrogate, inverse design and attribution",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_predict = sub.add_parser("predict", help="Predict removal and uncertainty")
    _add_conditions(p_predict)
    p_predict.add_argument("--competition", action="store_true", help="Competing species present")
    p_predict.add_argument("--curve", action="store_true", help="Also print the kinetic curve")

    p_opt = sub.add_parser("optimize", help="Search operating conditions for a target removal")
    p_opt.add_argument("--material", default="MNCJG", help="Adsorbent identifier")
    p_opt.add_argument("--contaminant", default="Cd(II)", help="Contaminant identifier")
    p_opt.add_argument(
        "--target", type=float, default=DEFAULT_OPTIMIZATION_BOUNDS["target_removal"], help="Target removal (%%)"
    )
    p_opt.add_argument(
        "--ph-range", type=float, nargs=2, metavar=("MIN", "MAX"), default=DEFAULT_OPTIMIZATION_BOUNDS["ph_range"]
    )
    p_opt.add_argument(
        "--time-range", type=float, nargs=2, metavar=("MIN", "MAX"), default=DEFAULT_OPTIMIZATION_BOUNDS["time_range"]
    )
    p_opt.add_argument(
        "--conc-range",
        type=float,
        nargs=2,
        metavar=("MIN", "MAX"),
        default=DEFAULT_OPTIMIZATION_BOUNDS["concentration_range"],
    )
    p_opt.add_argument("--iterations", type=int, default=DEFAULT_OPTIMIZATION_BOUNDS["n_iter"])
    p_opt.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible search")
    p_opt.add_argument("--history", action="store_true", help="Print every trial")
    p_opt.add_argument("--window", action="store_true", help="Print pH sensitivity around the best point")

    p_explain = sub.add_parser("explain", help="Attribute a prediction to its factors")
    _add_conditions(p_explain)

    p_heat = sub.add_parser("heatmap", help="Removal matrix of all adsorbents and contaminants")
    p_heat.add_argument("--ph", type=float, default=6.0)
    p_heat.add_argument("--time", type=float, default=30.0)

    sub.add_parser("validate", help="Compare with independent validation experiments")

    return parser


def _cmd_predict(args: argparse.Namespace) -> int:
    report = validate_prediction_inputs(args.material, args.contaminant, args.ph, args.concentration, args.time)
    if report.errors or report.warnings:
        print(format_validation_errors(report), file=sys.stderr)
    if not report.is_valid:
        return 2

    pred = predict_removal(args.material, args.contaminant, args.ph, args.concentration, args.time, args.competition)
    lower, upper = pred.interval()
    print(f"{args.material} / {args.contaminant}: {pred.mean:.2f}% ± {pred.std:.2f} (95% band {lower:.2f}-{upper:.2f})")

    if args.curve:
        curve = kinetic_curve(args.material, args.contaminant, args.ph, args.concentration, args.competition)
        print(curve.to_string(index=False))
    return 0


def _cmd_optimize(args: argparse.Namespace) -> int:
    result = optimize_conditions(
        args.contaminant,
        args.material,
        args.target,
        tuple(args.ph_range),
        tuple(args.time_range),
        tuple(args.conc_range),
        n_iter=args.iterations,
        seed=args.seed,
    )
    print(pd.Series(result.summary()).to_string())

    if args.history:
        print()
        print(result.to_dataframe().to_string())

    if args.window:
        best = result.best
        window = operating_window(
            args.material, args.contaminant, best.concentration, best.time, tuple(args.ph_range)
        )
        print()
        print(window.to_string(index=False))
    return 0


def _cmd_explain(args: argparse.Namespace) -> int:
    items = explain_prediction(args.material, args.contaminant, args.ph, args.concentration, args.time)
    print(attribution_to_dataframe(items).to_string(index=False))
    return 0


def _cmd_heatmap(args: argparse.Namespace) -> int:
    print(material_heatmap(pH=args.ph, contact_time=args.time, pivot=True).to_string())
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    comparison = compare_validation_scenarios()
    print(comparison.to_string(index=False))
    print()
    print(pd.Series(validation_summary(comparison)).to_string())
    return 0


_COMMANDS = {
    "predict": _cmd_predict,
    "optimize": _cmd_optimize,
    "explain": _cmd_explain,
    "heatmap": _cmd_heatmap,
    "validate": _cmd_validate,
}


def run(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv`` and run the selected subcommand; returns the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug(f"Materials: {list_materials()}; contaminants: {list_contaminants()}")

    try:
        return _COMMANDS[args.command](args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

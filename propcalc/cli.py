"""CLI entry point for the investment property calculator."""

import argparse
import sys

import structlog
import yaml

from propcalc.compare import Strategy, apply_strategy, compare_scenarios
from propcalc.config import load_config, params_to_dict
from propcalc.frames import comparison_dataframe, format_dataframe
from propcalc.log import configure_logging
from propcalc.model import calculate
from propcalc.output import detailed_table, fmt, full_report, summary_header, to_csv
from propcalc.params import ScenarioParams
from propcalc.sensitivity import format_sweep, frange, sweep

logger = structlog.get_logger(__name__)


def _load(path: str | None) -> ScenarioParams:
    if path:
        return load_config(path)
    return ScenarioParams()


def cmd_run(args: argparse.Namespace) -> None:
    """Run a projection from a config file."""
    params = _load(args.config)
    result = calculate(params)

    if args.csv:
        print(to_csv(result), end="")
    elif args.detailed:
        print(summary_header(params, result))
        print(detailed_table(result))
    else:
        print(full_report(params, result))


def cmd_compare(args: argparse.Namespace) -> None:
    """Compare two scenarios side by side."""
    a = _load(args.config_a)
    b = _load(args.config_b)
    if args.strategy_a:
        a = apply_strategy(a, Strategy.parse(args.strategy_a))
    if args.strategy_b:
        b = apply_strategy(b, Strategy.parse(args.strategy_b))

    comparison = compare_scenarios(a, b, salary=args.salary, name_a="A", name_b="B")

    print(format_dataframe(comparison_dataframe(comparison)))
    print()
    print(f"Equity gap at year 10: {fmt(comparison.equity_gap_10)}")
    print(f"Equity gap at year 30: {fmt(comparison.equity_gap_30)}")
    print(f"First-year after-tax cashflow difference: {fmt(comparison.cashflow_delta)}")
    print(f"Equity winner: {comparison.equity_winner or 'tie'}")
    print(f"Cashflow winner: {comparison.cashflow_winner or 'tie'}")


def cmd_sensitivity(args: argparse.Namespace) -> None:
    """Run sensitivity analysis on a parameter."""
    params = _load(args.config)

    parts = args.range.split(",")
    if len(parts) != 3:
        raise ValueError("--range must be start,stop,step (e.g., 5.0,8.0,0.5)")

    start, stop, step = float(parts[0]), float(parts[1]), float(parts[2])
    values = frange(start, stop, step)

    results = sweep(params, args.param, values)
    print(format_sweep(args.param, results))


def cmd_defaults(args: argparse.Namespace) -> None:
    """Print default parameters as YAML."""
    d = params_to_dict(ScenarioParams())
    print(yaml.safe_dump(d, default_flow_style=False, sort_keys=False), end="")


COMMANDS = {
    "run": cmd_run,
    "compare": cmd_compare,
    "sensitivity": cmd_sensitivity,
    "defaults": cmd_defaults,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="propcalc",
        description="Australian investment property cashflow, equity and tax projection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  propcalc run                          # Run with defaults
  propcalc run config.yaml              # Run with custom config
  propcalc run config.yaml --detailed   # Year-by-year breakdown
  propcalc run config.yaml --csv        # CSV output for charting
  propcalc compare a.yaml b.yaml --salary 150000
  propcalc sensitivity --param finance.interest_rate --range 5.0,8.0,0.5
  propcalc defaults                     # Print default config
""",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output")

    subparsers = parser.add_subparsers(dest="command")

    # run
    run_parser = subparsers.add_parser("run", help="Project a single scenario")
    run_parser.add_argument("config", nargs="?", help="YAML/JSON config file")
    run_parser.add_argument("--detailed", action="store_true", help="Show year-by-year breakdown")
    run_parser.add_argument("--csv", action="store_true", help="Output as CSV")

    # compare
    cmp_parser = subparsers.add_parser("compare", help="Compare two scenarios")
    cmp_parser.add_argument("config_a", help="Scenario A config file")
    cmp_parser.add_argument("config_b", help="Scenario B config file")
    cmp_parser.add_argument("--salary", type=float, help="Salary applied to both scenarios")
    strategies = [s.value for s in Strategy]
    cmp_parser.add_argument("--strategy-a", choices=strategies, help="Growth preset for A")
    cmp_parser.add_argument("--strategy-b", choices=strategies, help="Growth preset for B")

    # sensitivity
    sens_parser = subparsers.add_parser("sensitivity", help="Parameter sensitivity analysis")
    sens_parser.add_argument("--config", help="Base config file")
    sens_parser.add_argument("--param", required=True, help="Parameter path (e.g., finance.interest_rate)")
    sens_parser.add_argument("--range", required=True, help="start,stop,step (e.g., 5.0,8.0,0.5)")

    # defaults
    subparsers.add_parser("defaults", help="Print default parameters")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        command(args)
    except (ValueError, FileNotFoundError, yaml.YAMLError) as exc:
        logger.debug("cli.failed", command=args.command, error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Sensitivity analysis: sweep one parameter, see how outcomes change."""

from copy import deepcopy
from dataclasses import dataclass, fields
from enum import Enum
from typing import get_args

import structlog

from propcalc.config import SECTIONS
from propcalc.model import calculate
from propcalc.output import fmt
from propcalc.params import ScenarioParams

logger = structlog.get_logger(__name__)


@dataclass
class SweepResult:
    param_value: float
    first_year_after_tax: float
    equity_year_10: float
    equity_year_30: float
    positive_cashflow_year: int | None
    positive_cashflow_after_tax_year: int | None


def _resolve(params: ScenarioParams, path: str) -> tuple[object, str]:
    """Find the dataclass and field name a path like 'finance.interest_rate' refers to."""
    parts = path.split(".")
    if len(parts) != 2 or parts[0] not in SECTIONS:
        raise ValueError(
            f"Unknown parameter '{path}'. Use section.field with a section from "
            f"{list(SECTIONS)}"
        )
    section, name = parts
    obj = getattr(params, SECTIONS[section][0])
    field_types = {f.name: f.type for f in fields(obj)}
    if name not in field_types:
        raise ValueError(f"Unknown parameter '{path}'")
    if not _is_numeric(getattr(obj, name), field_types[name]):
        raise ValueError(f"Parameter '{path}' is not numeric")
    return obj, name


def _is_numeric(value: object, annotation: object) -> bool:
    # bool is an int subclass; enums and schedules can't take a swept float
    if isinstance(value, (bool, Enum)):
        return False
    if isinstance(value, (int, float)):
        return True
    # an unset optional override such as upfront.stamp_duty
    return value is None and float in get_args(annotation)


def _set_nested_attr(params: ScenarioParams, path: str, value: float) -> None:
    obj, name = _resolve(params, path)
    setattr(obj, name, value)


def sweep(
    params: ScenarioParams,
    param_path: str,
    values: list[float],
) -> list[SweepResult]:
    """Run the projection for each value of a parameter, return results."""
    _resolve(params, param_path)

    results = []
    for val in values:
        p = deepcopy(params)
        _set_nested_attr(p, param_path, val)
        result = calculate(p)

        results.append(SweepResult(
            param_value=val,
            first_year_after_tax=result.first_year.after_tax_cashflow,
            equity_year_10=result.projections[10].equity,
            equity_year_30=result.projections[30].equity,
            positive_cashflow_year=result.positive_cashflow_year,
            positive_cashflow_after_tax_year=result.positive_cashflow_after_tax_year,
        ))

    logger.info("sweep.complete", param=param_path, runs=len(results))
    return results


def format_sweep(param_path: str, results: list[SweepResult]) -> str:
    """Format sweep results as a table."""
    label = param_path.split(".")[-1]
    header = (
        f"{label:>22} | {'Yr0 after tax':>13} | {'Equity yr10':>12} | "
        f"{'Equity yr30':>12} | {'CF+ pre':>8} | {'CF+ post':>8}"
    )
    sep = "-" * len(header)
    lines = [
        f"Sensitivity: {param_path}",
        header,
        sep,
    ]

    for r in results:
        pre = f"Year {r.positive_cashflow_year}" if r.positive_cashflow_year else "N/A"
        post = (
            f"Year {r.positive_cashflow_after_tax_year}"
            if r.positive_cashflow_after_tax_year
            else "N/A"
        )
        lines.append(
            f"{r.param_value:>22,g} | {fmt(r.first_year_after_tax):>13} | "
            f"{fmt(r.equity_year_10):>12} | {fmt(r.equity_year_30):>12} | "
            f"{pre:>8} | {post:>8}"
        )

    return "\n".join(lines)


def frange(start: float, stop: float, step: float) -> list[float]:
    """Generate a list of floats from start to stop (inclusive) by step."""
    if step <= 0:
        raise ValueError("step must be positive")
    values = []
    val = start
    while val <= stop + step / 2:  # tolerance for floating point
        values.append(round(val, 6))
        val += step
    return values

"""Side-by-side comparison of two investment scenarios."""

from copy import deepcopy
from dataclasses import dataclass
from enum import Enum

import structlog

from propcalc.model import CalculationResult, calculate
from propcalc.params import ScenarioParams

logger = structlog.get_logger(__name__)


class Strategy(str, Enum):
    """Growth assumption presets."""

    GROWTH = "Growth"
    YIELD = "Yield"
    BALANCED = "Balanced"
    CUSTOM = "Custom"

    @classmethod
    def parse(cls, value: "str | Strategy") -> "Strategy":
        if isinstance(value, cls):
            return value
        for strategy in cls:
            if str(value).strip().lower() == strategy.value.lower():
                return strategy
        raise ValueError(
            f"Unknown strategy '{value}'. Supported: {[s.value for s in cls]}"
        )


# (capital growth %, rental growth %)
STRATEGY_PRESETS = {
    Strategy.GROWTH: (7.0, 5.0),
    Strategy.YIELD: (5.0, 4.0),
    Strategy.BALANCED: (6.0, 4.0),
}


def apply_strategy(params: ScenarioParams, strategy: Strategy) -> ScenarioParams:
    """Return a copy of ``params`` with the strategy's growth assumptions.

    ``CUSTOM`` keeps whatever growth rates the scenario already has.
    """
    p = deepcopy(params)
    preset = STRATEGY_PRESETS.get(strategy)
    if preset is not None:
        p.growth.capital_growth, p.growth.rental_growth = preset
    return p


def with_salary(params: ScenarioParams, salary: float) -> ScenarioParams:
    """Return a copy of ``params`` for an investor on ``salary``."""
    p = deepcopy(params)
    p.tax.annual_salary = salary
    return p


@dataclass
class ScenarioComparison:
    """Results for scenarios A and B plus the headline gaps (A - B)."""

    name_a: str
    name_b: str
    result_a: CalculationResult
    result_b: CalculationResult
    equity_gap_10: float
    equity_gap_30: float
    cashflow_delta: float  # first-year after-tax cashflow

    @property
    def equity_winner(self) -> str | None:
        return _winner(self.equity_gap_30)

    @property
    def cashflow_winner(self) -> str | None:
        return _winner(self.cashflow_delta)


def _winner(gap: float) -> str | None:
    if gap > 0:
        return "A"
    if gap < 0:
        return "B"
    return None


def compare_scenarios(
    a: ScenarioParams,
    b: ScenarioParams,
    salary: float | None = None,
    name_a: str = "Scenario 1",
    name_b: str = "Scenario 2",
) -> ScenarioComparison:
    """Project both scenarios and compare equity and cashflow.

    When ``salary`` is given it replaces both scenarios' salary, so the tax
    treatment is the same investor's.
    """
    if salary is not None:
        a = with_salary(a, salary)
        b = with_salary(b, salary)

    result_a = calculate(a)
    result_b = calculate(b)

    comparison = ScenarioComparison(
        name_a=name_a,
        name_b=name_b,
        result_a=result_a,
        result_b=result_b,
        equity_gap_10=result_a.projections[10].equity - result_b.projections[10].equity,
        equity_gap_30=result_a.projections[30].equity - result_b.projections[30].equity,
        cashflow_delta=(
            result_a.first_year.after_tax_cashflow - result_b.first_year.after_tax_cashflow
        ),
    )
    logger.info(
        "compare.complete",
        equity_gap_30=round(comparison.equity_gap_30),
        cashflow_delta=round(comparison.cashflow_delta),
    )
    return comparison

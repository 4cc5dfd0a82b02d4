"""pandas DataFrames of projection and comparison results."""

import pandas as pd

from propcalc.compare import ScenarioComparison
from propcalc.model import CalculationResult

COMPARISON_YEARS = [0, 1, 5, 10, 15, 20, 25, 30]


def projection_dataframe(result: CalculationResult) -> pd.DataFrame:
    """One row per projection year, indexed by year."""
    rows = []
    for p in result.projections:
        rows.append(
            {
                "Year": p.year,
                "Property Value": p.property_value,
                "Loan Balance": p.loan_balance,
                "Equity": p.equity,
                "Rate %": p.interest_rate,
                "Weekly Rent": p.weekly_rent,
                "Gross Rent": p.gross_rent,
                "Expenses": p.total_expenses,
                "Interest": p.interest_paid,
                "Principal": p.principal_paid,
                "Depreciation": p.depreciation,
                "Cashflow": p.net_cashflow,
                "Tax Refund": p.tax_refund,
                "After Tax": p.after_tax_cashflow,
            }
        )
    return pd.DataFrame(rows).set_index("Year")


def comparison_dataframe(comparison: ScenarioComparison) -> pd.DataFrame:
    """Equity and after-tax cashflow for both scenarios at key years."""
    a = comparison.result_a.projections
    b = comparison.result_b.projections
    rows = []
    for year in COMPARISON_YEARS:
        rows.append(
            {
                "Year": year,
                f"{comparison.name_a} Equity": a[year].equity,
                f"{comparison.name_b} Equity": b[year].equity,
                "Equity Gap": a[year].equity - b[year].equity,
                f"{comparison.name_a} After Tax": a[year].after_tax_cashflow,
                f"{comparison.name_b} After Tax": b[year].after_tax_cashflow,
            }
        )
    return pd.DataFrame(rows).set_index("Year")


def format_dataframe(df: pd.DataFrame) -> str:
    """Render a results frame with whole-dollar formatting."""
    formatters = {
        col: (lambda v: f"{v:.2f}") if col.endswith("%") else (lambda v: f"${v:,.0f}")
        for col in df.columns
    }
    return df.to_string(formatters=formatters)

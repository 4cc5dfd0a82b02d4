"""Output formatting for projection results."""

import csv
import io

from propcalc.model import CalculationResult
from propcalc.params import ScenarioParams

KEY_YEARS = [0, 5, 10, 15, 20, 25, 30]


def fmt(value: float) -> str:
    """Format a dollar amount."""
    if abs(value) >= 1_000_000:
        return f"${value / 1_000_000:,.2f}M"
    return f"${value:,.0f}"


def summary_header(params: ScenarioParams, result: CalculationResult) -> str:
    """Generate the header showing key parameters."""
    asset = params.asset
    finance = params.finance
    rental = params.rental
    growth = params.growth

    loan_type = "P&I"
    if finance.io_years:
        loan_type = f"IO {finance.io_years}yr then P&I"

    lines = [
        "Investment Property Projection",
        "=" * 70,
        "",
        f"  Purchase price:  {fmt(asset.purchase_price)} ({asset.jurisdiction.value})",
        f"  Deposit:         {finance.deposit_percent:.0f}% ({fmt(result.deposit)})",
        f"  Stamp duty:      {fmt(result.stamp_duty)}",
        f"  Upfront costs:   {fmt(result.upfront_costs_total)}",
        f"  Loan amount:     {fmt(result.loan_amount)} (LVR {result.lvr:.1f}%)",
        f"  Interest rate:   {finance.interest_rate:.2f}% p.a. ({finance.loan_term_years}yr, {loan_type})",
        "",
        f"  Weekly rent:     ${rental.weekly_rent:,.0f} ({rental.vacancy_weeks:g} wks vacant, "
        f"{rental.management_fee_percent:g}% management)",
        f"  Gross yield:     {result.gross_yield:.2f}%",
        f"  Growth:          capital {growth.capital_growth:.1f}%, rent {growth.rental_growth:.1f}%, "
        f"inflation {growth.inflation:.1f}% p.a.",
        f"  Tax bracket:     {result.marginal_tax_rate:.0%} (salary {fmt(params.tax.annual_salary)})",
        f"  Depreciation:    {params.tax.depreciation_level.value}",
        "",
    ]

    if asset.address:
        lines.insert(3, f"  Address:         {asset.address}")

    if finance.rate_schedule:
        schedule_str = ", ".join(
            f"yr{y}: {r:.2f}%" for y, r in sorted(finance.rate_schedule)
        )
        rate_line = next(i for i, ln in enumerate(lines) if ln.startswith("  Interest rate:"))
        lines.insert(rate_line + 1, f"  Rate schedule:   {schedule_str}")

    return "\n".join(lines)


def first_year_table(result: CalculationResult) -> str:
    """Year-0 cashflow, line by line."""
    fy = result.first_year
    rows = [
        ("Potential gross rent", fy.potential_gross_rent),
        ("Vacancy loss", -fy.vacancy_loss),
        ("Effective gross rent", fy.effective_gross_rent),
        ("Management fees", -fy.management_fees),
        ("Other operating expenses", -fy.other_operating_expenses),
        ("Mortgage repayments", -fy.mortgage_repayments),
        ("Net cashflow (pre-tax)", fy.net_cashflow),
        ("Depreciation (non-cash)", fy.depreciation),
        ("Tax refund", fy.tax_refund),
        ("Net cashflow (after tax)", fy.after_tax_cashflow),
    ]
    lines = ["First-year cashflow:"]
    for label, value in rows:
        lines.append(f"  {label:<26} {fmt(value):>12}")
    lines.append(f"  {'Per week (after tax)':<26} {fmt(fy.after_tax_cashflow / 52):>12}")
    return "\n".join(lines)


def summary_table(result: CalculationResult, key_years: list[int] | None = None) -> str:
    """Generate summary table at key year intervals."""
    if key_years is None:
        key_years = KEY_YEARS

    projection_map = {p.year: p for p in result.projections}

    header = (
        f"{'Year':>4} | {'Value':>12} | {'Loan':>12} | {'Equity':>12} | "
        f"{'Cashflow':>10} | {'After tax':>10}"
    )
    sep = "-" * len(header)
    lines = [header, sep]

    for year in key_years:
        p = projection_map.get(year)
        if p is None:
            continue
        lines.append(
            f"{p.year:>4} | {fmt(p.property_value):>12} | {fmt(p.loan_balance):>12} | "
            f"{fmt(p.equity):>12} | {fmt(p.net_cashflow):>10} | {fmt(p.after_tax_cashflow):>10}"
        )

    return "\n".join(lines)


def crossover_summary(result: CalculationResult) -> str:
    """Describe when the property starts paying for itself."""
    lines = []
    if result.positive_cashflow_year is not None:
        lines.append(f"Cashflow positive (pre-tax):  Year {result.positive_cashflow_year}")
    else:
        lines.append("Cashflow positive (pre-tax):  not within 30 years")
    if result.positive_cashflow_after_tax_year is not None:
        lines.append(
            f"Cashflow positive (after tax): Year {result.positive_cashflow_after_tax_year}"
        )
    else:
        lines.append("Cashflow positive (after tax): not within 30 years")
    return "\n".join(lines)


def detailed_table(result: CalculationResult) -> str:
    """Year-by-year detailed breakdown."""
    header = (
        f"{'Yr':>3} | {'Value':>12} | {'Loan':>12} | {'Rate':>5} | {'Rent':>10} | "
        f"{'Expenses':>10} | {'Interest':>10} | {'Principal':>10} | {'Deprec.':>8} | "
        f"{'Refund':>8} | {'Cashflow':>10} | {'After tax':>10}"
    )
    sep = "-" * len(header)
    lines = [header, sep]

    for p in result.projections:
        lines.append(
            f"{p.year:>3} | {fmt(p.property_value):>12} | {fmt(p.loan_balance):>12} | "
            f"{p.interest_rate:>4.1f}% | {fmt(p.gross_rent):>10} | "
            f"{fmt(p.total_expenses):>10} | {fmt(p.interest_paid):>10} | "
            f"{fmt(p.principal_paid):>10} | {fmt(p.depreciation):>8} | "
            f"{fmt(p.tax_refund):>8} | {fmt(p.net_cashflow):>10} | {fmt(p.after_tax_cashflow):>10}"
        )

    return "\n".join(lines)


CSV_COLUMNS = [
    "year", "property_value", "loan_balance", "equity", "interest_rate",
    "weekly_rent", "gross_rent", "total_expenses", "interest_paid",
    "principal_paid", "depreciation", "net_cashflow", "tax_refund",
    "after_tax_cashflow",
]


def to_csv(result: CalculationResult) -> str:
    """Export the yearly projections to a CSV string."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_COLUMNS)
    for p in result.projections:
        writer.writerow([p.year, f"{p.property_value:.2f}", f"{p.loan_balance:.2f}",
                         f"{p.equity:.2f}", f"{p.interest_rate:.4f}",
                         f"{p.weekly_rent:.2f}", f"{p.gross_rent:.2f}",
                         f"{p.total_expenses:.2f}", f"{p.interest_paid:.2f}",
                         f"{p.principal_paid:.2f}", f"{p.depreciation:.2f}",
                         f"{p.net_cashflow:.2f}", f"{p.tax_refund:.2f}",
                         f"{p.after_tax_cashflow:.2f}"])
    return output.getvalue()


def full_report(params: ScenarioParams, result: CalculationResult) -> str:
    """Generate a complete summary report."""
    parts = [
        summary_header(params, result),
        first_year_table(result),
        "",
        summary_table(result),
        "",
        crossover_summary(result),
    ]
    return "\n".join(parts)

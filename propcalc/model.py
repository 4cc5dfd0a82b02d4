"""Core investment property projection engine.

Projects an investment property year by year from purchase (year 0) to
year 30:

  - Growth: property value and rent compound; holding costs inflate
  - Loan: 12 monthly repayments per year, interest-only then P&I, with the
    P&I payment recomputed each month over the months left in the term
  - Tax: rental loss (after interest and depreciation) is refunded at the
    investor's marginal rate, capped at the tax they pay on salary
  - Cashflow: pre-tax (cash in - cash out) and after-tax (plus refund)

Each year starts from the previous year's ending ProjectionState, so the
loop is strictly sequential. The engine is pure: same params, same result.
"""

from dataclasses import dataclass, replace

from propcalc.depreciation import depreciation_for_year, estimate_depreciation
from propcalc.params import FinanceParams, GrowthParams, HoldingCosts, ScenarioParams
from propcalc.tax import marginal_rate, total_tax

PROJECTION_YEARS = 30
MONTHS_PER_YEAR = 12
WEEKS_PER_YEAR = 52


@dataclass(frozen=True)
class YearlyProjection:
    """Outcome of a single projection year."""

    year: int
    property_value: float
    loan_balance: float  # balance at the start of the year
    equity: float  # property_value - loan_balance, never below 0
    interest_rate: float  # % p.a. in effect this year
    weekly_rent: float
    gross_rent: float  # after vacancy
    total_expenses: float  # management fee + holding costs
    interest_paid: float
    principal_paid: float
    depreciation: float
    net_cashflow: float  # before tax
    tax_refund: float
    after_tax_cashflow: float


@dataclass(frozen=True)
class ProjectionState:
    """Values carried from one projection year into the next."""

    property_value: float
    weekly_rent: float
    loan_balance: float
    holding: HoldingCosts

    def grown(self, growth: GrowthParams) -> "ProjectionState":
        """Apply one year of capital growth, rent growth and inflation."""
        return replace(
            self,
            property_value=self.property_value * (1 + growth.capital_growth / 100),
            weekly_rent=self.weekly_rent * (1 + growth.rental_growth / 100),
            holding=self.holding.inflated(growth.inflation / 100),
        )


@dataclass(frozen=True)
class TaxPosition:
    """Investor tax figures that stay fixed for the whole projection."""

    marginal_rate: float
    base_tax: float  # tax on salary alone
    year_one_depreciation: float

    def refund(self, taxable_result: float) -> float:
        """Refund generated by a property result; losses only, never above base tax."""
        if taxable_result >= 0:
            return 0.0
        return min(-taxable_result * self.marginal_rate, self.base_tax)


@dataclass(frozen=True)
class CashflowBreakdown:
    """Year-0 cashflow in today's (un-grown) dollars."""

    potential_gross_rent: float
    vacancy_loss: float
    effective_gross_rent: float
    management_fees: float
    other_operating_expenses: float
    mortgage_repayments: float
    net_cashflow: float
    tax_refund: float
    after_tax_cashflow: float
    depreciation: float


@dataclass(frozen=True)
class CalculationResult:
    """Everything the calculator reports for one scenario."""

    stamp_duty: float
    upfront_costs_total: float
    deposit: float
    loan_amount: float
    lvr: float  # % of purchase price
    gross_yield: float  # % of purchase price, year-0 effective rent
    marginal_tax_rate: float
    base_tax: float
    first_year: CashflowBreakdown
    projections: list[YearlyProjection]
    positive_cashflow_year: int | None
    positive_cashflow_after_tax_year: int | None


def monthly_repayment(balance: float, monthly_rate: float, months: float) -> float:
    """Level P&I payment that clears ``balance`` in ``months`` payments.

    With no months left the whole balance plus this month's interest is due.
    """
    if months <= 0:
        return balance * (1 + monthly_rate)
    if monthly_rate == 0:
        return balance / months
    compound = (1 + monthly_rate) ** months
    return balance * monthly_rate * compound / (compound - 1)


def amortise_year(
    balance: float, year: int, finance: FinanceParams
) -> tuple[float, float, float]:
    """Simulate the 12 repayments made during projection year ``year``.

    Returns (closing_balance, total_principal_paid, total_interest_paid).
    """
    monthly_rate = finance.rate_for_year(year) / 100 / MONTHS_PER_YEAR
    io_months = finance.io_years * MONTHS_PER_YEAR
    pi_months = max(finance.loan_term_years, 0) * MONTHS_PER_YEAR - io_months
    interest_only = year < finance.io_years

    total_interest = 0.0
    total_principal = 0.0
    for month in range(MONTHS_PER_YEAR):
        interest = balance * monthly_rate
        if interest_only:
            payment = interest
        else:
            # P&I repayments already made before this one
            elapsed = max(0, year * MONTHS_PER_YEAR + month - io_months)
            payment = monthly_repayment(balance, monthly_rate, pi_months - elapsed)
        principal = min(max(payment - interest, 0.0), balance)
        balance -= principal
        total_interest += interest
        total_principal += principal
    return balance, total_principal, total_interest


def project_year(
    params: ScenarioParams,
    state: ProjectionState,
    year: int,
    position: TaxPosition,
) -> tuple[ProjectionState, YearlyProjection]:
    """Run one projection year; returns the state to carry forward and the record."""
    if year > 0:
        state = state.grown(params.growth)

    rental = params.rental
    gross_rent = state.weekly_rent * rental.let_weeks
    management_fee = gross_rent * rental.management_fee_percent / 100
    operating_expenses = management_fee + state.holding.total

    closing_balance, principal_paid, interest_paid = amortise_year(
        state.loan_balance, year, params.finance
    )
    depreciation = depreciation_for_year(position.year_one_depreciation, year)

    net_cashflow = gross_rent - operating_expenses - (interest_paid + principal_paid)
    # Principal is not deductible; depreciation is a non-cash deduction
    taxable_result = gross_rent - operating_expenses - interest_paid - depreciation
    tax_refund = position.refund(taxable_result)

    opening_balance = max(state.loan_balance, 0.0)
    record = YearlyProjection(
        year=year,
        property_value=state.property_value,
        loan_balance=opening_balance,
        equity=max(state.property_value - opening_balance, 0.0),
        interest_rate=params.finance.rate_for_year(year),
        weekly_rent=state.weekly_rent,
        gross_rent=gross_rent,
        total_expenses=operating_expenses,
        interest_paid=interest_paid,
        principal_paid=principal_paid,
        depreciation=depreciation,
        net_cashflow=net_cashflow,
        tax_refund=tax_refund,
        after_tax_cashflow=net_cashflow + tax_refund,
    )
    return replace(state, loan_balance=closing_balance), record


def crossover_year(
    projections: list[YearlyProjection], after_tax: bool = False
) -> int | None:
    """First year after purchase in which cashflow is positive, or None."""
    for p in projections:
        cashflow = p.after_tax_cashflow if after_tax else p.net_cashflow
        if p.year > 0 and cashflow > 0:
            return p.year
    return None


def first_year_breakdown(
    params: ScenarioParams, year_zero: YearlyProjection
) -> CashflowBreakdown:
    """Break down the year-0 record into the calculator's cashflow lines."""
    potential = params.rental.weekly_rent * WEEKS_PER_YEAR
    management_fees = year_zero.gross_rent * params.rental.management_fee_percent / 100
    return CashflowBreakdown(
        potential_gross_rent=potential,
        vacancy_loss=potential - year_zero.gross_rent,
        effective_gross_rent=year_zero.gross_rent,
        management_fees=management_fees,
        other_operating_expenses=year_zero.total_expenses - management_fees,
        mortgage_repayments=year_zero.interest_paid + year_zero.principal_paid,
        net_cashflow=year_zero.net_cashflow,
        tax_refund=year_zero.tax_refund,
        after_tax_cashflow=year_zero.after_tax_cashflow,
        depreciation=year_zero.depreciation,
    )


def _pct_of_price(amount: float, price: float) -> float:
    if price <= 0:
        return 0.0
    return amount / price * 100


def calculate(params: ScenarioParams) -> CalculationResult:
    """Project a scenario from purchase through year 30."""
    price = params.asset.price
    salary = params.tax.annual_salary
    loan_amount = params.loan_amount

    position = TaxPosition(
        marginal_rate=marginal_rate(salary),
        base_tax=total_tax(salary),
        year_one_depreciation=estimate_depreciation(
            params.tax.depreciation_level, price, params.tax.manual_depreciation
        ),
    )

    state = ProjectionState(
        property_value=price,
        weekly_rent=params.rental.weekly_rent,
        loan_balance=loan_amount,
        holding=params.holding,
    )
    projections = []
    for year in range(PROJECTION_YEARS + 1):
        state, record = project_year(params, state, year, position)
        projections.append(record)

    first_year = first_year_breakdown(params, projections[0])

    return CalculationResult(
        stamp_duty=params.get_stamp_duty(),
        upfront_costs_total=params.upfront_costs_total,
        deposit=params.deposit,
        loan_amount=loan_amount,
        lvr=_pct_of_price(loan_amount, price),
        gross_yield=_pct_of_price(first_year.effective_gross_rent, price),
        marginal_tax_rate=position.marginal_rate,
        base_tax=position.base_tax,
        first_year=first_year,
        projections=projections,
        positive_cashflow_year=crossover_year(projections),
        positive_cashflow_after_tax_year=crossover_year(projections, after_tax=True),
    )

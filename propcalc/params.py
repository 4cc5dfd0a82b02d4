"""Parameters for an investment property projection."""

from dataclasses import dataclass, field

from propcalc.depreciation import DepreciationLevel
from propcalc.tax import Jurisdiction, estimate_stamp_duty


@dataclass
class PropertyParams:
    """The property being purchased."""

    purchase_price: float = 850_000
    jurisdiction: Jurisdiction = Jurisdiction.QLD
    address: str | None = None  # display only

    @property
    def price(self) -> float:
        """Purchase price, never negative."""
        return max(self.purchase_price, 0.0)


@dataclass
class FinanceParams:
    """Loan structure. Rates and deposit are in percent."""

    deposit_percent: float = 20.0
    interest_rate: float = 6.5  # % p.a.
    loan_term_years: int = 30
    interest_only: bool = False
    interest_only_years: int = 5  # ignored unless interest_only

    # Variable rate schedule: list of (from_year, rate) tuples, years 0-based.
    # e.g. [(3, 5.8)] = interest_rate for years 0-2, 5.8% from year 3.
    # If None, interest_rate is used for the entire projection.
    rate_schedule: list[tuple[int, float]] | None = None

    @property
    def deposit_fraction(self) -> float:
        return min(max(self.deposit_percent, 0.0), 100.0) / 100

    @property
    def io_years(self) -> int:
        """Length of the interest-only window (0 for a P&I loan)."""
        if not self.interest_only:
            return 0
        return max(self.interest_only_years, 0)

    def rate_for_year(self, year: int) -> float:
        """Get the annual rate (percent, floored at 0) applicable in a given year."""
        applicable_rate = self.interest_rate
        if self.rate_schedule:
            # Find the most recent rate change at or before this year
            for from_year, rate in sorted(self.rate_schedule):
                if from_year <= year:
                    applicable_rate = rate
                else:
                    break
        return max(applicable_rate, 0.0)


@dataclass
class UpfrontCosts:
    """One-off acquisition costs."""

    stamp_duty: float | None = None  # None = estimate from price and jurisdiction
    buyers_agent_fee: float = 15_000
    solicitor_fee: float = 2_000
    building_pest_fee: float = 600
    other_upfront: float = 0


@dataclass
class RentalParams:
    """Rental income assumptions."""

    weekly_rent: float = 750
    vacancy_weeks: float = 2
    management_fee_percent: float = 7.0

    @property
    def let_weeks(self) -> float:
        """Weeks of the year the property earns rent."""
        return 52 - min(max(self.vacancy_weeks, 0.0), 52.0)


@dataclass
class HoldingCosts:
    """Annual holding expenses in today's dollars, each inflated separately."""

    council_rates: float = 2_500
    insurance: float = 1_800
    repairs_maintenance: float = 1_000
    land_tax: float = 0
    body_corp: float = 0
    other_expenses: float = 0

    @property
    def total(self) -> float:
        return (
            self.council_rates
            + self.insurance
            + self.repairs_maintenance
            + self.land_tax
            + self.body_corp
            + self.other_expenses
        )

    def inflated(self, inflation: float) -> "HoldingCosts":
        """Return a copy with every line grown by ``inflation`` (a fraction)."""
        factor = 1 + inflation
        return HoldingCosts(
            council_rates=self.council_rates * factor,
            insurance=self.insurance * factor,
            repairs_maintenance=self.repairs_maintenance * factor,
            land_tax=self.land_tax * factor,
            body_corp=self.body_corp * factor,
            other_expenses=self.other_expenses * factor,
        )


@dataclass
class TaxParams:
    """Investor's personal tax position."""

    annual_salary: float = 120_000
    depreciation_level: DepreciationLevel = DepreciationLevel.RECENT
    manual_depreciation: float = 0  # used only for DepreciationLevel.MANUAL


@dataclass
class GrowthParams:
    """Long-run growth assumptions, percent per year."""

    capital_growth: float = 6.0
    rental_growth: float = 4.0
    inflation: float = 3.0  # applied to holding costs


@dataclass
class ScenarioParams:
    """Complete input snapshot for one projection."""

    asset: PropertyParams = field(default_factory=PropertyParams)
    finance: FinanceParams = field(default_factory=FinanceParams)
    upfront: UpfrontCosts = field(default_factory=UpfrontCosts)
    rental: RentalParams = field(default_factory=RentalParams)
    holding: HoldingCosts = field(default_factory=HoldingCosts)
    tax: TaxParams = field(default_factory=TaxParams)
    growth: GrowthParams = field(default_factory=GrowthParams)

    @property
    def deposit(self) -> float:
        return self.asset.price * self.finance.deposit_fraction

    @property
    def loan_amount(self) -> float:
        return max(self.asset.price - self.deposit, 0.0)

    def get_stamp_duty(self) -> float:
        if self.upfront.stamp_duty is not None:
            return self.upfront.stamp_duty
        return estimate_stamp_duty(self.asset.jurisdiction, self.asset.price)

    @property
    def upfront_costs_total(self) -> float:
        u = self.upfront
        return (
            self.get_stamp_duty()
            + u.buyers_agent_fee
            + u.solicitor_fee
            + u.building_pest_fee
            + u.other_upfront
        )

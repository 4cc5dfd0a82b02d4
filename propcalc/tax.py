"""Australian tax calculations: stamp duty and income tax."""

import math
from enum import Enum


class Jurisdiction(str, Enum):
    """Australian states and territories."""

    NSW = "NSW"
    VIC = "VIC"
    QLD = "QLD"
    SA = "SA"
    WA = "WA"
    TAS = "TAS"
    ACT = "ACT"
    NT = "NT"

    @classmethod
    def parse(cls, value: "str | Jurisdiction") -> "Jurisdiction":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(
                f"Unknown jurisdiction '{value}'. Supported: {[j.value for j in cls]}"
            ) from None


# ---------------------------------------------------------------------------
# Income tax brackets (2024-25, Stage 3)
# ---------------------------------------------------------------------------

INCOME_BRACKETS_2024 = [
    (18_200, 0.00),
    (45_000, 0.16),
    (135_000, 0.30),
    (190_000, 0.37),
    (float("inf"), 0.45),
]


def total_tax(income: float) -> float:
    """Calculate total income tax payable on a salary (no Medicare levy)."""
    income = max(income, 0.0)
    tax = 0.0
    prev_threshold = 0
    for threshold, rate in INCOME_BRACKETS_2024:
        taxable_in_band = min(income, threshold) - prev_threshold
        if taxable_in_band <= 0:
            break
        tax += taxable_in_band * rate
        prev_threshold = threshold
    return tax


def marginal_rate(income: float) -> float:
    """Return the rate of the bracket the top dollar of ``income`` falls in."""
    for threshold, rate in INCOME_BRACKETS_2024:
        if income <= threshold:
            return rate
    return INCOME_BRACKETS_2024[-1][1]


# ---------------------------------------------------------------------------
# Stamp duty schedules by jurisdiction
# ---------------------------------------------------------------------------

# Rows are (threshold, base, rate, flat), checked top-down. The first row whose
# threshold the price exceeds gives base + (price - threshold) * rate, or
# price * rate when flat.
DutySchedule = list[tuple[float, float, float, bool]]

STAMP_DUTY_SCHEDULES: dict[Jurisdiction, DutySchedule] = {
    Jurisdiction.NSW: [
        (1_089_000, 44_095, 0.055, False),
        (327_000, 9_835, 0.045, False),
        (0, 0, 0.035, True),
    ],
    Jurisdiction.VIC: [
        (2_000_000, 110_000, 0.065, False),
        (960_000, 0, 0.055, True),
        (0, 0, 0.05, True),
    ],
    Jurisdiction.QLD: [
        (1_000_000, 38_025, 0.0575, False),
        (540_000, 17_325, 0.045, False),
        (0, 0, 0.035, True),
    ],
    Jurisdiction.WA: [
        (725_000, 28_453, 0.0515, False),
        (0, 0, 0.04, True),
    ],
    Jurisdiction.SA: [
        (250_000, 8_955, 0.05, False),
        (0, 0, 0.04, True),
    ],
}

# TAS, ACT, NT and anything unrecognised
DEFAULT_DUTY_RATE = 0.045


def _scheduled_duty(price: float, schedule: DutySchedule) -> float:
    """Evaluate a marginal duty schedule at ``price``."""
    for threshold, base, rate, flat in schedule:
        if price > threshold:
            if flat:
                return price * rate
            return base + (price - threshold) * rate
    return 0.0


def estimate_stamp_duty(jurisdiction: "Jurisdiction | str", price: float) -> float:
    """Estimate transfer duty for an investment purchase, to the nearest dollar."""
    price = max(price, 0.0)
    try:
        schedule = STAMP_DUTY_SCHEDULES.get(Jurisdiction.parse(jurisdiction))
    except ValueError:
        schedule = None

    if schedule is None:
        duty = price * DEFAULT_DUTY_RATE
    else:
        duty = _scheduled_duty(price, schedule)
    # half-up, not banker's rounding
    return float(math.floor(duty + 0.5))

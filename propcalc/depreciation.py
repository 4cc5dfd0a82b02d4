"""Tax depreciation estimates (Division 40 plant + Division 43 building).

Year-one figures are rough quantity-surveyor style estimates keyed on the age
of the stock. Later years draw down the depreciable pool geometrically.
"""

from enum import Enum


class DepreciationLevel(str, Enum):
    """How much depreciable pool the property is assumed to carry."""

    NEW = "New Build (High)"
    RECENT = "Recent / Renovated (Med)"
    OLD = "Older Existing (Low)"
    MANUAL = "Manual Input"

    @classmethod
    def parse(cls, value: "str | DepreciationLevel") -> "DepreciationLevel":
        """Accept a member, its name (``"recent"``) or its display label, in any case."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for level in cls:
            if text.upper() == level.name or text.lower() == level.value.lower():
                return level
        raise ValueError(
            f"Unknown depreciation level '{value}'. Supported: {[lv.name for lv in cls]}"
        )


# Year-one claim as a fraction of purchase price
_PRICE_RATES = {
    DepreciationLevel.NEW: 0.022,
    DepreciationLevel.RECENT: 0.012,
}
OLD_STOCK_AMOUNT = 2_000.0

DECAY_FACTOR = 0.85
DEPRECIATION_YEARS = 10  # claims stop from projection year 10


def estimate_depreciation(
    level: DepreciationLevel, price: float, manual_value: float = 0.0
) -> float:
    """Estimate the first-year depreciation claim in dollars.

    Parameters
    ----------
    level : DepreciationLevel
        Age/quality band of the property.
    price : float
        Purchase price in dollars.
    manual_value : float
        Claim supplied by the caller, used only for ``MANUAL``.

    Returns
    -------
    float
        Year-one deduction in dollars.
    """
    if level == DepreciationLevel.MANUAL:
        return manual_value
    if level == DepreciationLevel.OLD:
        return OLD_STOCK_AMOUNT
    return price * _PRICE_RATES[level]


def depreciation_for_year(year_one_amount: float, year: int) -> float:
    """Claim for projection year ``year`` (0-based) given the year-one estimate."""
    if year >= DEPRECIATION_YEARS:
        return 0.0
    return year_one_amount * DECAY_FACTOR**year

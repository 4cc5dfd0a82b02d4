"""Tests for Australian tax calculations."""

import pytest
from propcalc.tax import (
    INCOME_BRACKETS_2024,
    Jurisdiction,
    estimate_stamp_duty,
    marginal_rate,
    total_tax,
)


class TestTotalTax:
    def test_below_tax_free_threshold(self):
        assert total_tax(18_200) == 0.0
        assert total_tax(10_000) == 0.0

    def test_second_bracket(self):
        # $45,000: tax on $26,800 at 16%
        assert total_tax(45_000) == pytest.approx(4_288)

    def test_common_salary(self):
        # 4,288 + 75,000 * 30%
        assert total_tax(120_000) == pytest.approx(26_788)

    def test_bracket_tops(self):
        assert total_tax(135_000) == pytest.approx(31_288)
        assert total_tax(190_000) == pytest.approx(51_638)

    def test_top_bracket(self):
        # 51,638 + 60,000 * 45%
        assert total_tax(250_000) == pytest.approx(78_638)

    def test_zero_and_negative_income(self):
        assert total_tax(0) == 0.0
        assert total_tax(-50_000) == 0.0

    def test_non_decreasing(self):
        previous = 0.0
        for income in range(0, 400_001, 1_000):
            tax = total_tax(income)
            assert tax >= previous
            previous = tax

    def test_continuous_at_thresholds(self):
        for threshold, _ in INCOME_BRACKETS_2024[:-1]:
            assert total_tax(threshold + 0.01) - total_tax(threshold) < 0.01


class TestMarginalRate:
    def test_below_threshold(self):
        assert marginal_rate(15_000) == 0.0
        assert marginal_rate(18_200) == 0.0

    def test_just_above_threshold(self):
        assert marginal_rate(18_201) == 0.16

    def test_common_salary(self):
        assert marginal_rate(120_000) == 0.30

    def test_37_bracket(self):
        # $180,000 is in the 37% bracket ($135,001-$190,000)
        assert marginal_rate(180_000) == 0.37

    def test_high_income(self):
        assert marginal_rate(250_000) == 0.45

    def test_negative_income(self):
        assert marginal_rate(-1_000) == 0.0

    def test_matches_slope_of_total_tax(self):
        """The marginal rate is what the last dollar of income was taxed at."""
        for income in [10_000, 18_201, 30_000, 45_000, 100_000, 135_000,
                       160_000, 190_000, 300_000]:
            top_dollar = total_tax(income) - total_tax(income - 1)
            assert top_dollar == pytest.approx(marginal_rate(income))


class TestStampDuty:
    @pytest.mark.parametrize(
        "jurisdiction, price, expected",
        [
            # QLD: 17,325 + (850,000 - 540,000) * 4.5%
            (Jurisdiction.QLD, 850_000, 31_275),
            (Jurisdiction.QLD, 500_000, 17_500),
            (Jurisdiction.QLD, 1_200_000, 49_525),
            # NSW: 9,835 + (800,000 - 327,000) * 4.5%
            (Jurisdiction.NSW, 800_000, 31_120),
            (Jurisdiction.NSW, 300_000, 10_500),
            (Jurisdiction.NSW, 1_200_000, 50_200),
            # VIC: flat 5% then 5.5% of the whole price above $960k
            (Jurisdiction.VIC, 500_000, 25_000),
            (Jurisdiction.VIC, 960_000, 48_000),
            (Jurisdiction.VIC, 1_000_000, 55_000),
            (Jurisdiction.VIC, 2_500_000, 142_500),
            (Jurisdiction.WA, 600_000, 24_000),
            (Jurisdiction.WA, 725_100, 28_458),
            (Jurisdiction.SA, 200_000, 8_000),
            (Jurisdiction.SA, 400_000, 16_455),
            # Flat 4.5% approximation
            (Jurisdiction.TAS, 600_000, 27_000),
            (Jurisdiction.ACT, 600_000, 27_000),
            (Jurisdiction.NT, 600_000, 27_000),
        ],
    )
    def test_schedule(self, jurisdiction, price, expected):
        assert estimate_stamp_duty(jurisdiction, price) == expected

    def test_rounded_to_whole_dollars(self):
        # 100,010 * 3.5% = 3,500.35
        assert estimate_stamp_duty(Jurisdiction.NSW, 100_010) == 3_500

    def test_zero_and_negative_price(self):
        assert estimate_stamp_duty(Jurisdiction.QLD, 0) == 0
        assert estimate_stamp_duty(Jurisdiction.VIC, -250_000) == 0

    def test_accepts_code_strings(self):
        assert estimate_stamp_duty("qld", 850_000) == 31_275

    def test_unknown_jurisdiction_uses_flat_default(self):
        assert estimate_stamp_duty("XYZ", 600_000) == 27_000

    def test_increases_with_price(self):
        for jurisdiction in Jurisdiction:
            assert estimate_stamp_duty(jurisdiction, 900_000) > estimate_stamp_duty(
                jurisdiction, 600_000
            )


class TestJurisdiction:
    def test_parse_case_insensitive(self):
        assert Jurisdiction.parse(" nsw ") is Jurisdiction.NSW

    def test_parse_member(self):
        assert Jurisdiction.parse(Jurisdiction.WA) is Jurisdiction.WA

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown jurisdiction"):
            Jurisdiction.parse("NZ")

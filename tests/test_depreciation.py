"""Tests for depreciation estimates."""

import pytest
from propcalc.depreciation import (
    DepreciationLevel,
    depreciation_for_year,
    estimate_depreciation,
)


class TestEstimate:
    def test_new_build(self):
        assert estimate_depreciation(DepreciationLevel.NEW, 500_000) == pytest.approx(11_000)

    def test_recent(self):
        assert estimate_depreciation(DepreciationLevel.RECENT, 500_000) == pytest.approx(6_000)

    def test_old_is_flat(self):
        assert estimate_depreciation(DepreciationLevel.OLD, 500_000) == 2_000
        assert estimate_depreciation(DepreciationLevel.OLD, 1_500_000) == 2_000

    def test_manual(self):
        assert estimate_depreciation(DepreciationLevel.MANUAL, 500_000, 7_500) == 7_500


class TestDecay:
    def test_year_zero_is_full_claim(self):
        assert depreciation_for_year(6_000, 0) == 6_000

    def test_year_one(self):
        assert depreciation_for_year(6_000, 1) == pytest.approx(5_100)

    def test_last_claim_year(self):
        assert depreciation_for_year(6_000, 9) == pytest.approx(6_000 * 0.85**9)

    def test_stops_at_year_ten(self):
        assert depreciation_for_year(6_000, 10) == 0.0
        assert depreciation_for_year(6_000, 25) == 0.0


class TestParse:
    def test_by_name(self):
        assert DepreciationLevel.parse("recent") is DepreciationLevel.RECENT

    def test_by_label(self):
        assert DepreciationLevel.parse("New Build (High)") is DepreciationLevel.NEW

    def test_label_any_case(self):
        assert DepreciationLevel.parse("new build (high)") is DepreciationLevel.NEW
        assert DepreciationLevel.parse(" OLDER EXISTING (LOW) ") is DepreciationLevel.OLD

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown depreciation level"):
            DepreciationLevel.parse("ancient")

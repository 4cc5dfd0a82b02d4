"""Tests for DataFrame export."""

import pytest
from propcalc.compare import compare_scenarios
from propcalc.frames import (
    COMPARISON_YEARS,
    comparison_dataframe,
    format_dataframe,
    projection_dataframe,
)
from propcalc.model import calculate
from propcalc.params import ScenarioParams


class TestProjectionFrame:
    def test_shape(self):
        df = projection_dataframe(calculate(ScenarioParams()))
        assert df.shape == (31, 13)
        assert df.index.name == "Year"
        assert list(df.index) == list(range(31))

    def test_values(self):
        result = calculate(ScenarioParams())
        df = projection_dataframe(result)
        assert df.loc[0, "Gross Rent"] == pytest.approx(37_500)
        assert df.loc[30, "Equity"] == pytest.approx(result.projections[30].equity)


class TestComparisonFrame:
    def test_rows(self):
        comparison = compare_scenarios(ScenarioParams(), ScenarioParams(), name_a="A", name_b="B")
        df = comparison_dataframe(comparison)
        assert list(df.index) == COMPARISON_YEARS
        assert "A Equity" in df.columns
        assert (df["Equity Gap"] == 0).all()

    def test_format(self):
        df = projection_dataframe(calculate(ScenarioParams()))
        text = format_dataframe(df)
        assert "$850,000" in text
        assert "6.50" in text

"""Tests for the command line interface."""

import yaml
from propcalc.cli import main
from propcalc.config import dict_to_params
from propcalc.params import ScenarioParams


class TestRun:
    def test_defaults_report(self, capsys):
        assert main(["run"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Investment Property Projection")
        assert "First-year cashflow:" in out

    def test_csv(self, capsys):
        assert main(["run", "--csv"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("year,property_value")
        assert len(lines) == 32

    def test_detailed(self, capsys):
        assert main(["run", "--detailed"]) == 0
        assert "Principal" in capsys.readouterr().out

    def test_config_file(self, tmp_path, capsys):
        path = tmp_path / "nsw.yaml"
        path.write_text("property:\n  purchase_price: 800000\n  jurisdiction: NSW\n")
        assert main(["run", str(path)]) == 0
        assert "$31,120" in capsys.readouterr().out

    def test_missing_config(self, tmp_path, capsys):
        assert main(["run", str(tmp_path / "missing.yaml")]) == 1
        assert capsys.readouterr().err.startswith("Error:")


class TestCompare:
    def test_compare(self, tmp_path, capsys):
        a = tmp_path / "a.yaml"
        b = tmp_path / "b.yaml"
        a.write_text("rental:\n  weekly_rent: 800\n")
        b.write_text("rental:\n  weekly_rent: 700\n")
        assert main(["compare", str(a), str(b), "--salary", "150000",
                     "--strategy-a", "Growth"]) == 0
        out = capsys.readouterr().out
        assert "Equity winner: A" in out
        assert "Cashflow winner: A" in out


class TestSensitivity:
    def test_sweep(self, capsys):
        assert main(["sensitivity", "--param", "finance.interest_rate",
                     "--range", "5,7,1"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Sensitivity: finance.interest_rate")

    def test_bad_range(self, capsys):
        assert main(["sensitivity", "--param", "finance.interest_rate", "--range", "5,7"]) == 1
        assert "--range must be start,stop,step" in capsys.readouterr().err

    def test_bad_param(self, capsys):
        assert main(["sensitivity", "--param", "nope", "--range", "1,2,1"]) == 1
        assert "Unknown parameter" in capsys.readouterr().err

    def test_non_numeric_param(self, capsys):
        assert main(["sensitivity", "--param", "tax.depreciation_level",
                     "--range", "1,2,1"]) == 1
        assert "is not numeric" in capsys.readouterr().err


class TestDefaults:
    def test_yaml_round_trips(self, capsys):
        assert main(["defaults"]) == 0
        data = yaml.safe_load(capsys.readouterr().out)
        assert dict_to_params(data) == ScenarioParams()


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: propcalc" in capsys.readouterr().out

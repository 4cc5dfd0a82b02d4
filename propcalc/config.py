"""YAML/JSON config loading and validation."""

import json
from dataclasses import asdict, fields
from pathlib import Path

import structlog
import yaml

from propcalc.depreciation import DepreciationLevel
from propcalc.params import (
    FinanceParams,
    GrowthParams,
    HoldingCosts,
    PropertyParams,
    RentalParams,
    ScenarioParams,
    TaxParams,
    UpfrontCosts,
)
from propcalc.tax import Jurisdiction

logger = structlog.get_logger(__name__)

# Config section name -> (ScenarioParams attribute, dataclass)
SECTIONS = {
    "property": ("asset", PropertyParams),
    "finance": ("finance", FinanceParams),
    "upfront": ("upfront", UpfrontCosts),
    "rental": ("rental", RentalParams),
    "holding": ("holding", HoldingCosts),
    "tax": ("tax", TaxParams),
    "growth": ("growth", GrowthParams),
}


def load_config(path: str | Path) -> ScenarioParams:
    """Load scenario parameters from a YAML or JSON file."""
    path = Path(path)
    text = path.read_text()

    if path.suffix == ".json":
        data = json.loads(text)
    else:
        # JSON is valid YAML, so anything else goes through the YAML parser
        data = yaml.safe_load(text)

    params = dict_to_params(data or {})
    logger.info("config.loaded", path=str(path))
    return params


def _build(cls: type, data: dict):
    """Instantiate a params dataclass from the keys it knows about."""
    names = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - names)
    if unknown:
        logger.warning("config.unknown_keys", section=cls.__name__, keys=unknown)
    return cls(**{k: v for k, v in data.items() if k in names})


def dict_to_params(data: dict) -> ScenarioParams:
    """Convert a nested dict to ScenarioParams."""
    sections = {}
    for key, (attr, cls) in SECTIONS.items():
        section = dict(data.get(key) or {})

        if key == "property" and "jurisdiction" in section:
            section["jurisdiction"] = Jurisdiction.parse(section["jurisdiction"])
        if key == "tax" and "depreciation_level" in section:
            section["depreciation_level"] = DepreciationLevel.parse(
                section["depreciation_level"]
            )
        # Handle rate_schedule: convert list of dicts to list of tuples
        if key == "finance" and section.get("rate_schedule"):
            schedule = []
            for entry in section["rate_schedule"]:
                if isinstance(entry, dict):
                    schedule.append((entry["year"], entry["rate"]))
                elif isinstance(entry, (list, tuple)):
                    schedule.append((entry[0], entry[1]))
                else:
                    raise ValueError(f"Invalid rate_schedule entry: {entry!r}")
            section["rate_schedule"] = schedule

        sections[attr] = _build(cls, section)

    return ScenarioParams(**sections)


def params_to_dict(params: ScenarioParams) -> dict:
    """Convert ScenarioParams to a serialisable dict."""
    d = {}
    for key, (attr, _) in SECTIONS.items():
        d[key] = asdict(getattr(params, attr))

    d["property"]["jurisdiction"] = params.asset.jurisdiction.value
    d["tax"]["depreciation_level"] = params.tax.depreciation_level.name
    # rate_schedule tuples -> dicts for YAML readability
    if d["finance"]["rate_schedule"]:
        d["finance"]["rate_schedule"] = [
            {"year": y, "rate": r} for y, r in params.finance.rate_schedule
        ]
    return d

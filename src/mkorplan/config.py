"""Planner configuration loaded from YAML."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from mkorplan.catalog import SpecCatalog, load_catalog, load_default_catalog
from mkorplan.core.errors import MKORValueError

__all__ = ["PlannerConfig", "load_config", "DEFAULT_CONFIG_NAME"]

DEFAULT_CONFIG_NAME = "mkorplan.yaml"


class PlannerConfig(BaseModel):
    """Runtime settings shared by the CLI commands.

    Attributes
    ----------
    registry_path:
        SQLite file holding inventory, units and jobs.
    telemetry_log:
        JSONL file receiving one record per planning attempt. ``None`` disables telemetry.
    catalog_path:
        Optional JSON catalog overriding the bundled ``data/diameter_specs.json``.
    horizon_days:
        Default number of days rendered by ``timeline show`` when no end date is given.
    """

    registry_path: Path = Path("mkor/registry.sqlite")
    telemetry_log: Path | None = Path("mkor/telemetry/planning.jsonl")
    catalog_path: Path | None = None
    horizon_days: int = 30

    @field_validator("horizon_days")
    @classmethod
    def _horizon_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("horizon_days must be >= 1")
        return value

    def catalog(self) -> SpecCatalog:
        if self.catalog_path is None:
            return load_default_catalog()
        return load_catalog(self.catalog_path)


def load_config(path: str | Path | None = None) -> PlannerConfig:
    """Load ``path`` (or ``./mkorplan.yaml`` when present); fall back to defaults.

    Relative paths inside the file resolve against the file's directory.
    """
    if path is None:
        candidate = Path(DEFAULT_CONFIG_NAME)
        if not candidate.exists():
            return PlannerConfig()
        path = candidate
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise MKORValueError(f"{path} must contain a mapping")
    root = path.parent
    for key in ("registry_path", "telemetry_log", "catalog_path"):
        value = data.get(key)
        if value is not None and not Path(value).is_absolute():
            data[key] = root / value
    try:
        return PlannerConfig.model_validate(data)
    except ValidationError as exc:
        raise MKORValueError(f"invalid config {path}: {exc}") from exc

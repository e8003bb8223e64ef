"""Configuration file support for readyscan (.readyscan.yml)."""

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from readyscan.models import Severity

DEFAULT_CONFIG_NAME = ".readyscan.yml"

SCANNER_NAMES = ("secrets", "dependencies", "pii", "prompt-injection")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Config:
    """readyscan configuration loaded from .readyscan.yml."""

    enabled_scanners: list[str] = field(default_factory=lambda: list(SCANNER_NAMES))
    severity_threshold: str = "LOW"
    exclude_dirs: list[str] = field(default_factory=list)
    custom_secret_patterns: list[dict] = field(default_factory=list)
    max_workers: int = 4
    fail_under: int | None = None
    log_level: str = "WARNING"

    @property
    def min_severity(self) -> Severity:
        return Severity(self.severity_threshold)


def load_config(config_path: str | None = None, project_root: str | None = None) -> Config:
    """Load configuration from a YAML file.

    Priority: explicit --config path > .readyscan.yml in project root > defaults.
    """
    path = None

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    elif project_root:
        candidate = Path(project_root) / DEFAULT_CONFIG_NAME
        if candidate.exists():
            path = candidate

    if path is None:
        return Config()

    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    if raw is None:
        return Config()
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must be a YAML mapping, got {type(raw).__name__}")

    return _parse_config(raw)


def _parse_custom_pattern(entry) -> dict:
    if not isinstance(entry, dict) or "name" not in entry or "pattern" not in entry:
        raise ValueError("custom_secret_patterns entries need 'name' and 'pattern'")
    try:
        re.compile(entry["pattern"])
    except re.error as exc:
        raise ValueError(f"Invalid regex for custom pattern '{entry['name']}': {exc}") from exc
    severity = entry.get("severity", "HIGH")
    if Severity.parse(severity) is None:
        raise ValueError(f"Invalid severity for custom pattern '{entry['name']}': '{severity}'")
    parsed = {
        "name": str(entry["name"]),
        "pattern": entry["pattern"],
        "severity": Severity.parse(severity).value,
    }
    if "remediation" in entry:
        parsed["remediation"] = str(entry["remediation"])
    return parsed


def _parse_config(raw: dict) -> Config:
    """Parse and validate raw YAML dict into a Config object."""
    config = Config()

    if "enabled_scanners" in raw:
        scanners = raw["enabled_scanners"]
        if not isinstance(scanners, list):
            raise ValueError("enabled_scanners must be a list")
        unknown = [s for s in scanners if s not in SCANNER_NAMES]
        if unknown:
            raise ValueError(f"Unknown scanners in enabled_scanners: {unknown}")
        config.enabled_scanners = scanners

    if "severity_threshold" in raw:
        sev = raw["severity_threshold"]
        valid = {s.value for s in Severity}
        if sev not in valid:
            raise ValueError(f"severity_threshold must be one of {valid}, got '{sev}'")
        config.severity_threshold = sev

    if "exclude_dirs" in raw:
        dirs = raw["exclude_dirs"]
        if not isinstance(dirs, list):
            raise ValueError("exclude_dirs must be a list")
        config.exclude_dirs = [str(d) for d in dirs]

    if "custom_secret_patterns" in raw:
        patterns = raw["custom_secret_patterns"]
        if not isinstance(patterns, list):
            raise ValueError("custom_secret_patterns must be a list")
        config.custom_secret_patterns = [_parse_custom_pattern(p) for p in patterns]

    if "max_workers" in raw:
        val = raw["max_workers"]
        if not isinstance(val, int) or isinstance(val, bool) or val < 1:
            raise ValueError("max_workers must be a positive integer")
        config.max_workers = val

    if "fail_under" in raw:
        val = raw["fail_under"]
        if val is not None and (not isinstance(val, int) or isinstance(val, bool) or not 0 <= val <= 100):
            raise ValueError("fail_under must be an integer between 0 and 100")
        config.fail_under = val

    if "log_level" in raw:
        level = str(raw["log_level"]).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got '{raw['log_level']}'")
        config.log_level = level

    return config

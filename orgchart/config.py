"""
Configuration for OrgChart Interchange
Loads import-engine and logging settings from YAML

Example (config/orgchart_config.example.yml):

    import:
      match_threshold: 0.45
      team_name_weight: 0.55
      context_weight: 0.30
      manager_bonus: 0.15
      employee_vendors: ["M&S"]
      delimiter: ","
    logging:
      level: INFO
      file: logs/orgchart.log
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = 'ORGCHART_CONFIG_PATH'
DEFAULT_CONFIG_PATH = 'config/orgchart_config.yml'


@dataclass
class ImportSettings:
    """Scoring and mapping rules for the CSV import engine"""
    match_threshold: float = 0.45
    team_name_weight: float = 0.55
    context_weight: float = 0.30
    manager_bonus: float = 0.15
    # Vendor labels that mean "our own employee" rather than a contractor
    employee_vendors: List[str] = field(default_factory=lambda: ['M&S'])
    delimiter: str = ','

    def is_employee_vendor(self, vendor: str) -> bool:
        vendor = (vendor or '').strip().upper()
        return any(vendor == v.upper() for v in self.employee_vendors)


@dataclass
class LoggingSettings:
    level: str = 'INFO'
    file: Optional[str] = None
    max_bytes: int = 10485760
    backup_count: int = 5


@dataclass
class AppConfig:
    import_settings: ImportSettings = field(default_factory=ImportSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


def _build(cls, section: Dict[str, Any], name: str):
    known = set(cls.__dataclass_fields__)
    unknown = set(section) - known
    if unknown:
        logger.warning(f"Ignoring unknown keys in '{name}' config section: {sorted(unknown)}")
    return cls(**{k: v for k, v in section.items() if k in known})


def load_config(config_path: str) -> AppConfig:
    """
    Load application configuration from YAML

    Args:
        config_path: Path to the YAML file

    Returns:
        AppConfig with defaults filled in for missing keys

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r') as f:
        raw = yaml.safe_load(f) or {}

    config = AppConfig(
        import_settings=_build(ImportSettings, raw.get('import') or {}, 'import'),
        logging=_build(LoggingSettings, raw.get('logging') or {}, 'logging'),
    )
    logger.debug(f"Loaded config from {path}")
    return config


def resolve_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load config from an explicit path, else from $ORGCHART_CONFIG_PATH or the
    default location. Only an explicit path is required to exist.
    """
    if config_path:
        return load_config(config_path)

    path = os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
    if Path(path).exists():
        return load_config(path)

    logger.info(f"No config at {path}, using defaults")
    return AppConfig()

"""
Configuration & Logging Tests
=============================
Run with: pytest tests/test_config.py -v
"""

import logging
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orgchart.config import (
    CONFIG_PATH_ENV,
    AppConfig,
    ImportSettings,
    LoggingSettings,
    load_config,
    resolve_config,
)
from orgchart.logging_config import resolve_level, setup_logging

EXAMPLE_CONFIG = Path(__file__).parent.parent / "config" / "orgchart_config.example.yml"


def test_load_config(tmp_path):
    path = tmp_path / "orgchart.yml"
    path.write_text(
        "import:\n"
        "  match_threshold: 0.6\n"
        "  employee_vendors: ['M&S', 'Acme']\n"
        "  unexpected: 1\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    config = load_config(str(path))

    assert config.import_settings.match_threshold == 0.6
    assert config.import_settings.team_name_weight == 0.55
    assert config.import_settings.is_employee_vendor("acme")
    assert config.logging.level == "DEBUG"
    assert config.logging.file is None


def test_example_config_matches_defaults():
    config = load_config(str(EXAMPLE_CONFIG))
    assert config.import_settings == ImportSettings()


def test_empty_config_file(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert load_config(str(path)) == AppConfig()


def test_missing_explicit_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        resolve_config(str(tmp_path / "missing.yml"))


def test_resolve_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_PATH_ENV, str(tmp_path / "absent.yml"))
    assert resolve_config() == AppConfig()

    path = tmp_path / "present.yml"
    path.write_text("import:\n  match_threshold: 0.5\n")
    monkeypatch.setenv(CONFIG_PATH_ENV, str(path))
    assert resolve_config().import_settings.match_threshold == 0.5


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "orgchart.log"
    previous_level = logging.getLogger().level
    root = setup_logging(LoggingSettings(level="WARNING", file=str(log_file)), level="debug")
    try:
        assert root.level == logging.DEBUG
        logging.getLogger("orgchart.test").warning("disk check")
        for handler in root.handlers:
            handler.flush()
        content = log_file.read_text()
        assert "WARNING" in content
        assert "disk check" in content
        # Plain level name in the file (no color codes)
        assert "\x1b[" not in content
    finally:
        for handler in list(root.handlers):
            handler.close()
        root.handlers.clear()
        root.setLevel(previous_level)


def test_resolve_level():
    assert resolve_level("warning") == logging.WARNING
    with pytest.raises(ValueError, match="Unknown log level: loud"):
        resolve_level("loud")

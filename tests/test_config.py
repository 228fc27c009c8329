"""Test the configuration module functionality."""

from flowcut.config import ENGINE_CONFIG, REPORT_CONFIG, EngineConfig, ReportConfig


def test_engine_config_defaults():
    assert EngineConfig().log_augmenting_paths is True
    assert isinstance(ENGINE_CONFIG, EngineConfig)


def test_report_config_defaults():
    config = ReportConfig()
    assert config.path_separator == " -> "
    assert config.table_min_width == 8
    assert config.max_col_width is None
    assert isinstance(REPORT_CONFIG, ReportConfig)


def test_format_path():
    assert ReportConfig().format_path(["S", "A", "T"]) == "S -> A -> T"
    assert ReportConfig(path_separator=",").format_path([1, 2]) == "1,2"

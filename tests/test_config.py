import pytest

from mdppet.config import OutputConfig, ScannerConfig


def test_scanner_config_defaults():
    config = ScannerConfig()

    assert (config.heading_marker, config.field_separator, config.fence_marker) == ("#", "/", "```")


def test_scanner_config_rejects_empty_marker():
    with pytest.raises(ValueError):
        ScannerConfig(field_separator="")


def test_scanner_config_from_env(monkeypatch):
    monkeypatch.setenv("MDPPET_FIELD_SEPARATOR", ":")
    monkeypatch.setenv("MDPPET_FENCE_MARKER", "~~~")

    config = ScannerConfig.from_env()

    assert config.field_separator == ":"
    assert config.fence_marker == "~~~"
    assert config.heading_marker == "#"


def test_output_config_from_env(monkeypatch):
    monkeypatch.setenv("MDPPET_INDENT", "4")
    monkeypatch.setenv("MDPPET_ENSURE_ASCII", "true")

    config = OutputConfig.from_env()

    assert config.indent == 4
    assert config.ensure_ascii is True


def test_output_config_invalid_indent_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("MDPPET_INDENT", "wide")

    with caplog.at_level("WARNING", logger="mdppet"):
        config = OutputConfig.from_env()

    assert config.indent == 2
    assert "MDPPET_INDENT" in caplog.text

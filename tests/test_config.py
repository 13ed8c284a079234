from pathlib import Path

import pytest

from seqwrap import config

ENV_KEYS = (config.ENV_LINE_WIDTH, config.ENV_REPORT_DIR)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # setenv first so teardown also removes values loaded from .env files
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_defaults_without_env_file(tmp_path):
    cfg = config.collect_runtime_config(start_path=tmp_path)
    assert cfg.line_width == config.SCAN_DEFAULTS.line_width == 60
    assert cfg.report_dir == Path("data") / "reports"
    assert cfg.env_file is None


def test_collect_runtime_config_reads_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "\n".join(
            [
                "SEQWRAP_LINE_WIDTH=80",
                "SEQWRAP_REPORT_DIR=out/reports",
            ]
        ),
        encoding="utf-8",
    )
    nested_dir = tmp_path / "nested" / "deeper"
    nested_dir.mkdir(parents=True)

    cfg = config.collect_runtime_config(start_path=nested_dir)

    assert cfg.line_width == 80
    assert cfg.report_dir == Path("out/reports")
    assert cfg.env_file == env_file.resolve()
    assert cfg.as_dict()["SEQWRAP_LINE_WIDTH"] == "80"


def test_environment_wins_over_env_file(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("SEQWRAP_LINE_WIDTH=80\n", encoding="utf-8")
    monkeypatch.setenv(config.ENV_LINE_WIDTH, "70")
    assert config.collect_runtime_config(start_path=tmp_path).line_width == 70


@pytest.mark.parametrize("raw", ["sixty", "-1", "6.0"])
def test_malformed_width_raises(tmp_path, monkeypatch, raw):
    monkeypatch.setenv(config.ENV_LINE_WIDTH, raw)
    with pytest.raises(config.ConfigError):
        config.collect_runtime_config(start_path=tmp_path)

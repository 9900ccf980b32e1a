import json

import pytest

from portscout.config import Config, ConfigPaths, DEFAULT_SETTINGS


def _config(tmp_path, environ=None):
    return Config(paths=ConfigPaths.create(tmp_path), environ=environ or {})


def test_defaults_without_file(tmp_path):
    cfg = _config(tmp_path)
    assert cfg.load_ok
    assert cfg.get("concurrency") == 100
    assert cfg.get("connect_timeout") == 2.0
    assert cfg.get("banner_timeout") == 1.0
    scanner_cfg = cfg.scanner_config()
    assert scanner_cfg.concurrency == 100
    assert scanner_cfg.grab_banner is True


def test_file_values_override_defaults(tmp_path):
    (tmp_path / "config.json").write_text(json.dumps({"concurrency": 12, "banner_timeout": 0.5}))
    cfg = _config(tmp_path)
    assert cfg.get("concurrency") == 12
    assert cfg.get("banner_timeout") == 0.5
    assert cfg.get("connect_timeout") == DEFAULT_SETTINGS["connect_timeout"]


def test_env_overrides_file(tmp_path):
    (tmp_path / "config.json").write_text(json.dumps({"concurrency": 12}))
    cfg = _config(
        tmp_path,
        {"PORTSCOUT_CONCURRENCY": "7", "PORTSCOUT_CONNECT_TIMEOUT": "0.25"},
    )
    assert cfg.get("concurrency") == 7
    assert cfg.get("connect_timeout") == 0.25


def test_bad_env_value_is_ignored(tmp_path):
    cfg = _config(tmp_path, {"PORTSCOUT_CONCURRENCY": "lots"})
    assert cfg.get("concurrency") == 100


def test_invalid_file_is_backed_up(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    cfg = _config(tmp_path)
    assert not cfg.load_ok
    assert cfg.get("concurrency") == 100
    assert (tmp_path / "config.json.bak").exists()
    assert not path.exists()


def test_save_round_trip(tmp_path):
    cfg = _config(tmp_path)
    cfg.set("concurrency", 33)
    assert cfg.save()
    assert _config(tmp_path).get("concurrency") == 33
    cfg.reset_to_defaults()
    assert _config(tmp_path).get("concurrency") == 100


def test_scanner_config_overrides(tmp_path):
    cfg = _config(tmp_path)
    scanner_cfg = cfg.scanner_config(concurrency=5, connect_timeout=None, grab_banner=False)
    assert scanner_cfg.concurrency == 5
    assert scanner_cfg.connect_timeout == 2.0
    assert scanner_cfg.grab_banner is False


def test_scanner_config_invalid(tmp_path):
    cfg = _config(tmp_path)
    with pytest.raises(ValueError):
        cfg.scanner_config(concurrency=0)


def test_home_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("PORTSCOUT_HOME", str(tmp_path / "home"))
    paths = ConfigPaths.create()
    assert paths.config_file == (tmp_path / "home" / "config.json").resolve()


def test_max_hosts_is_coerced_to_int(tmp_path):
    (tmp_path / "config.json").write_text(json.dumps({"max_hosts": "1000"}))
    assert _config(tmp_path).max_hosts() == 1000


def test_max_hosts_rejects_non_numbers(tmp_path):
    (tmp_path / "config.json").write_text(json.dumps({"max_hosts": "lots"}))
    with pytest.raises(ValueError, match="max_hosts"):
        _config(tmp_path).max_hosts()

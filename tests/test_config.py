import pytest

from hive_mcp.config import ConfigError, load_config


def test_missing_key_is_fatal():
    with pytest.raises(ConfigError, match="HIVE_API_KEY"):
        load_config({})


def test_blank_key_is_fatal():
    with pytest.raises(ConfigError):
        load_config({"HIVE_API_KEY": "   "})


def test_defaults():
    cfg = load_config({"HIVE_API_KEY": "k"})
    assert cfg.hive.api_key == "k"
    assert cfg.hive.base_url == "https://api.hiveintelligence.xyz"
    assert cfg.hive.request_timeout_s is None
    assert cfg.server.name == "hive-mcp-server"


def test_overrides():
    cfg = load_config({
        "HIVE_API_KEY": "k",
        "HIVE_BASE_URL": "http://localhost:8080/",
        "HIVE_REQUEST_TIMEOUT": "30",
        "HIVE_LOG_LEVEL": "debug",
    })
    assert cfg.hive.base_url == "http://localhost:8080"
    assert cfg.hive.request_timeout_s == 30.0
    assert cfg.hive.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["soon", "0", "-5"])
def test_bad_timeout(raw):
    with pytest.raises(ConfigError):
        load_config({"HIVE_API_KEY": "k", "HIVE_REQUEST_TIMEOUT": raw})

import pytest
import json
from src.common.config import ConfigManager
from src.policer.errors import ConfigError

def test_defaults_without_file():
    cm = ConfigManager()
    assert cm.get("log_level") == "WARNING"
    assert cm.get("policy") is None
    assert cm.get("policy", []) == []

def test_load_existing_config(tmp_path):
    config_file = tmp_path / "policer.json"
    existing = {"policy": [{"days": 1}], "log_level": "DEBUG"}
    with open(config_file, 'w') as f:
        json.dump(existing, f)

    cm = ConfigManager(str(config_file))
    assert cm.get("policy") == [{"days": 1}]
    assert cm.get("log_level") == "DEBUG"
    assert cm.get("log_file") is None

def test_custom_defaults(tmp_path):
    cm = ConfigManager(default_config={"key": "value"})
    assert cm.get("key") == "value"
    assert cm.get("log_level") is None

def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="missing.json"):
        ConfigManager(str(tmp_path / "missing.json"))

def test_invalid_json(tmp_path):
    config_file = tmp_path / "broken.json"
    config_file.write_text("{not json")
    with pytest.raises(ConfigError):
        ConfigManager(str(config_file))

def test_config_must_be_object(tmp_path):
    config_file = tmp_path / "list.json"
    config_file.write_text("[1, 2]")
    with pytest.raises(ConfigError, match="JSON object"):
        ConfigManager(str(config_file))

def test_invalid_utf8(tmp_path):
    config_file = tmp_path / "latin1.json"
    config_file.write_bytes(b'{"log_level": "\xff"}')
    with pytest.raises(ConfigError, match="latin1.json"):
        ConfigManager(str(config_file))

"""
Unit tests for client configuration loading.
"""

import json

import pytest
import yaml

from tuning_client.config import ClientConfig, load_config
from tuning_client.core.exceptions import ConfigurationError


class TestClientConfig:
    """Test defaults and validation."""

    def test_defaults(self):
        config = ClientConfig()
        assert config.api_version == "v1beta"
        assert config.page_size == 50
        assert config.poll_interval == 0.0

    @pytest.mark.parametrize("field, value", [
        ("timeout", 0),
        ("page_size", -1),
        ("poll_interval", -0.5),
    ])
    def test_rejects_bad_values(self, field, value):
        with pytest.raises(ConfigurationError):
            ClientConfig(**{field: value})

    def test_rejects_unknown_keys(self):
        with pytest.raises(ConfigurationError, match="Unknown configuration keys"):
            ClientConfig.from_dict({"page_sise": 10})

    def test_to_dict_redacts_key(self):
        config = ClientConfig(api_key="secret")
        assert config.to_dict()["api_key"] == "***"
        assert config.to_dict(redact=False)["api_key"] == "secret"


class TestLoadConfig:
    """Test merging of files, environment and explicit overrides."""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "client.yaml"
        path.write_text(yaml.safe_dump({"project": "p1", "page_size": 20}))

        config = load_config(path, environ={})

        assert config.project == "p1"
        assert config.page_size == 20

    def test_json_file(self, tmp_path):
        path = tmp_path / "client.json"
        path.write_text(json.dumps({"timeout": 5}))
        assert load_config(str(path), environ={}).timeout == 5

    def test_file_from_environment(self, tmp_path):
        path = tmp_path / "client.yml"
        path.write_text("api_version: v1\n")

        config = load_config(environ={"TUNING_CLIENT_CONFIG": str(path)})

        assert config.api_version == "v1"

    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "client.yaml"
        path.write_text("page_size: 20\nproject: from-file\n")
        environ = {
            "TUNING_CLIENT_PAGE_SIZE": "30",
            "TUNING_CLIENT_POLL_INTERVAL": "1.5",
            "TUNING_CLIENT_API_KEY": "abc",
            "UNRELATED": "x",
        }

        config = load_config(path, environ=environ)

        assert config.page_size == 30
        assert config.poll_interval == 1.5
        assert config.api_key == "abc"
        assert config.project == "from-file"

    def test_string_fields_stay_strings(self):
        environ = {"TUNING_CLIENT_API_KEY": "123456", "TUNING_CLIENT_PROJECT": "42", "TUNING_CLIENT_TIMEOUT": "10"}

        config = load_config(environ=environ)

        assert config.api_key == "123456"
        assert config.project == "42"
        assert config.timeout == 10

    def test_explicit_overrides_win(self):
        environ = {"TUNING_CLIENT_PROJECT": "env"}
        assert load_config(environ=environ, project="explicit").project == "explicit"
        assert load_config(environ=environ, project=None).project == "env"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "absent.yaml", environ={})

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "client.ini"
        path.write_text("[client]\n")
        with pytest.raises(ConfigurationError, match="Unsupported"):
            load_config(path, environ={})

    def test_unknown_environment_key(self):
        with pytest.raises(ConfigurationError):
            load_config(environ={"TUNING_CLIENT_PAGESIZE": "3"})

    def test_bad_value_type(self):
        with pytest.raises(ConfigurationError):
            load_config(environ={"TUNING_CLIENT_TIMEOUT": "soon"})

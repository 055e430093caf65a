"""
Tests for configuration loading and settings resolution
"""

import pytest
import yaml

from pim_request.libs.core.config import (
    ConfigManager, RuntimeSettings, create_sample_config, generate_sample_config_file
)
from pim_request.libs.core.exceptions import ConfigurationError

ENV_NAMES = ['AZ_CLI_PATH', 'PIM_TOKEN_RESOURCE', 'PIM_API_URL', 'PIM_REQUEST_TIMEOUT']


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate tests from the developer's environment and config files"""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('HOME', str(tmp_path / 'home'))
    monkeypatch.chdir(tmp_path)


def write_config(tmp_path, content: str) -> str:
    path = tmp_path / 'pim-request.yaml'
    path.write_text(content, encoding='utf-8')
    return str(path)


class TestLoadConfig:
    """Test configuration file loading"""

    def test_no_config_file(self):
        manager = ConfigManager()

        assert manager.load_config() == {}
        assert manager.get_config_info()['has_config'] is False

    def test_loads_file_from_working_directory(self, tmp_path):
        write_config(tmp_path, "pim:\n  api_url: https://pim.example.com\n")

        manager = ConfigManager()
        manager.load_config()

        assert manager.get_value('pim.api_url') == 'https://pim.example.com'
        assert manager.get_config_info()['config_file'] == 'pim-request.yaml'

    def test_custom_path(self, tmp_path):
        path = tmp_path / 'custom.yaml'
        path.write_text("azure:\n  cli_path: /usr/local/bin/az\n", encoding='utf-8')

        manager = ConfigManager(custom_config_path=str(path))
        manager.load_config()

        assert manager.get_value('azure.cli_path') == '/usr/local/bin/az'

    def test_missing_custom_path(self, tmp_path):
        manager = ConfigManager(custom_config_path=str(tmp_path / 'missing.yaml'))

        with pytest.raises(ConfigurationError, match="not found"):
            manager.load_config()

    def test_invalid_yaml(self, tmp_path):
        path = write_config(tmp_path, "pim: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigManager(custom_config_path=path).load_config()

    def test_not_a_mapping(self, tmp_path):
        path = write_config(tmp_path, "- one\n- two\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigManager(custom_config_path=path).load_config()

    @pytest.mark.parametrize("content,path", [
        ("pim: https://pim.example.com\n", "pim"),
        ("pim:\n  timeout: soon\n", "pim.timeout"),
        ("pim:\n  timeout: true\n", "pim.timeout"),
        ("network:\n  insecure: 'yes'\n", "network.insecure"),
        ("azure:\n  cli_path: 42\n", "azure.cli_path"),
    ])
    def test_schema_violations(self, tmp_path, content, path):
        config_path = write_config(tmp_path, content)

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(custom_config_path=config_path).load_config()

        assert str(exc_info.value).startswith(f"{path} must be a")

    def test_environment_variables_are_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv('CUSTOM_PIM_HOST', 'pim.internal.example.com')
        path = write_config(tmp_path, "pim:\n  api_url: https://${CUSTOM_PIM_HOST}\n")

        manager = ConfigManager(custom_config_path=path)
        manager.load_config()

        assert manager.get_value('pim.api_url') == 'https://pim.internal.example.com'


class TestResolveSettings:
    """Test merging of defaults, file, environment and flags"""

    def test_defaults(self):
        settings = ConfigManager().resolve_settings()

        assert settings == RuntimeSettings()
        assert settings.api_url == "https://api.azrbac.mspim.azure.com"
        assert settings.timeout is None

    def test_file_values(self, tmp_path):
        path = write_config(tmp_path, (
            "azure:\n  cli_path: /opt/az\n  token_resource: https://api.azrbac.mspim.azure.com\n"
            "pim:\n  api_url: https://pim.example.com/\n  timeout: 30\n"
            "network:\n  insecure: true\n"
            "logging:\n  verbose: true\n"
        ))
        manager = ConfigManager(custom_config_path=path)
        manager.load_config()

        settings = manager.resolve_settings()

        assert settings.cli_path == '/opt/az'
        assert settings.token_resource == 'https://api.azrbac.mspim.azure.com'
        assert settings.api_url == 'https://pim.example.com'
        assert settings.timeout == 30.0
        assert settings.insecure is True
        assert settings.verbose is True

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        # Arrange
        path = write_config(tmp_path, "pim:\n  api_url: https://from-file.example.com\n  timeout: 30\n")
        monkeypatch.setenv('PIM_API_URL', 'https://from-env.example.com')
        monkeypatch.setenv('PIM_REQUEST_TIMEOUT', '5')
        monkeypatch.setenv('AZ_CLI_PATH', 'az2')
        manager = ConfigManager(custom_config_path=path)
        manager.load_config()

        # Act
        settings = manager.resolve_settings()

        # Assert
        assert settings.api_url == 'https://from-env.example.com'
        assert settings.timeout == 5.0
        assert settings.cli_path == 'az2'

    def test_flags_turn_options_on(self):
        settings = ConfigManager().resolve_settings(verbose=True, insecure=True)

        assert settings.verbose is True
        assert settings.insecure is True

    def test_invalid_timeout_from_environment(self, monkeypatch):
        monkeypatch.setenv('PIM_REQUEST_TIMEOUT', '-1')

        with pytest.raises(ConfigurationError, match="Invalid timeout"):
            ConfigManager().resolve_settings()

    @pytest.mark.parametrize("value", ["nan", "inf"])
    def test_non_finite_timeout_from_environment(self, monkeypatch, value):
        monkeypatch.setenv('PIM_REQUEST_TIMEOUT', value)

        with pytest.raises(ConfigurationError, match="Invalid timeout"):
            ConfigManager().resolve_settings()

    def test_non_finite_timeout_from_file(self, tmp_path):
        path = write_config(tmp_path, "pim:\n  timeout: .nan\n")
        manager = ConfigManager(custom_config_path=path)
        manager.load_config()

        with pytest.raises(ConfigurationError, match="Invalid timeout"):
            manager.resolve_settings()


class TestSampleConfig:
    """Test sample configuration generation"""

    def test_sample_is_valid_configuration(self, tmp_path):
        output = tmp_path / 'nested' / 'pim-request.yaml'

        created = generate_sample_config_file(str(output))

        assert created == str(output)
        manager = ConfigManager(custom_config_path=created)
        data = manager.load_config()
        assert data['pim']['api_url'] == "https://api.azrbac.mspim.azure.com"
        assert manager.resolve_settings() == RuntimeSettings()

    def test_default_location(self, tmp_path):
        created = generate_sample_config_file()

        assert created == str(tmp_path / 'home' / '.config' / 'pim-request.yaml')

    def test_sample_content_parses(self):
        data = yaml.safe_load(create_sample_config())

        assert set(data) == {'azure', 'pim', 'network', 'logging'}

"""Tests for CLI configuration module."""

import json

from cli.config import Config


def test_config_creates_default_file(tmp_path):
    """Test that config file is created with defaults if missing."""
    config_path = tmp_path / '.chunkvault' / 'config.json'
    config = Config(config_path)

    assert config_path.exists()
    assert config.data['timeout'] == 30
    assert config.data['max_retries'] == 3
    assert config.data['retry_backoff_multiplier'] == 2
    assert json.loads(config_path.read_text()) == config.data


def test_config_loads_existing_file(tmp_path):
    """Test loading existing config file."""
    config_path = tmp_path / '.chunkvault' / 'config.json'
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps({
        'service_host': 'example.com',
        'service_port': 9000,
    }))

    config = Config(config_path)

    assert config.data['service_host'] == 'example.com'
    assert config.data['service_port'] == 9000
    assert config.data['timeout'] == 30
    assert config.get_base_url() == 'http://example.com:9000'


def test_config_corrupted_file_is_backed_up(temp_config_dir):
    """Test that a corrupted config falls back to defaults and keeps a backup."""
    config_path = temp_config_dir / 'config.json'
    config_path.write_text('{not valid json')

    config = Config(config_path)

    backup = temp_config_dir / 'config.json.bak'
    assert backup.exists()
    assert backup.read_text() == '{not valid json'
    assert config.data == Config.DEFAULT_CONFIG


def test_config_non_object_root_is_backed_up(temp_config_dir):
    config_path = temp_config_dir / 'config.json'
    config_path.write_text('[1, 2, 3]')

    config = Config(config_path)

    assert (temp_config_dir / 'config.json.bak').exists()
    assert config.get_timeout() == 30


def test_config_save(temp_config):
    temp_config.data['timeout'] = 5
    temp_config.save()

    reloaded = Config(temp_config.config_path)
    assert reloaded.get_timeout() == 5


def test_get_retry_config(temp_config):
    assert temp_config.get_retry_config() == {
        'max_retries': 3,
        'retry_backoff_multiplier': 2,
    }

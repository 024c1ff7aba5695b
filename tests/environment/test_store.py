"""Tests for YAML configuration persistence."""

import pytest

from fabric_cli.domain.exceptions import ConfigFileError
from fabric_cli.environment.config import Config, Context, Network
from fabric_cli.environment.store import ConfigStore


@pytest.fixture
def store(tmp_path, mock_logger):
    return ConfigStore(tmp_path / "home", logger=mock_logger)


def test_missing_file_loads_empty_config(store):
    config = store.load()

    assert config == Config()
    assert not store.path.exists()


def test_save_creates_home_and_file(store, network_config):
    store.save(network_config)

    assert store.path.exists()
    assert store.path.name == "config.yaml"


def test_saved_config_loads_back(store, network_config):
    store.save(network_config)

    loaded = store.load()

    assert loaded == network_config
    assert loaded.get_current_context().peers == ["peer0.org1.example.com"]


def test_save_omits_unset_optional_fields(store):
    store.save(Config(networks={"n": Network(url="https://n.example.com")}))

    text = store.path.read_text()

    assert "tls_ca_cert" not in text
    assert "timeout" not in text


def test_load_accepts_hand_written_yaml(store):
    store.home.mkdir(parents=True)
    store.path.write_text(
        "networks:\n"
        "  local:\n"
        "    url: http://localhost:7080\n"
        "    timeout: 30\n"
        "contexts:\n"
        "  dev:\n"
        "    network: local\n"
        "    peers: [peer0]\n"
        "current_context: dev\n"
    )

    config = store.load()

    assert config.networks["local"].timeout == 30
    assert config.get_current_context() == Context(network="local", peers=["peer0"])


def test_empty_file_loads_empty_config(store):
    store.home.mkdir(parents=True)
    store.path.write_text("")

    assert store.load() == Config()


def test_invalid_yaml_raises(store):
    store.home.mkdir(parents=True)
    store.path.write_text("networks: [unclosed\n")

    with pytest.raises(ConfigFileError, match="invalid configuration file"):
        store.load()


def test_invalid_schema_raises(store):
    store.home.mkdir(parents=True)
    store.path.write_text("networks:\n  bad:\n    url: ''\n")

    with pytest.raises(ConfigFileError):
        store.load()

"""Pytest configuration and fixtures for fabric_cli tests."""

import io
import typing as t

import loguru
import pytest
from blockbuster import BlockBuster, blockbuster_ctx
from typer.testing import CliRunner

from fabric_cli.cli.state import CLIState
from fabric_cli.config.settings import Environment, LogLevel, Settings
from fabric_cli.environment.config import Config, Context, Network
from fabric_cli.environment.store import ConfigStore
from fabric_cli.fabric.base import BaseFactory, BaseResourceManagement, BaseSession
from fabric_cli.infrastructure.logging import reset_logging


@pytest.fixture(autouse=True)
def blockbuster() -> t.Iterator[BlockBuster]:
    """Detect blocking calls made by fabric_cli inside the event loop.

    Raises BlockingError when package code does synchronous I/O (file reads,
    CA bundle loading, sleeps) while a command's async phases are running.
    """
    with blockbuster_ctx(
        scanned_modules=["fabric_cli"],
    ) as bb:
        # Third party modules use these functions, so we deactivate them
        bb.functions["os.path.abspath"].deactivate()

        yield bb


@pytest.fixture(autouse=True)
def clean_logging_state():
    """Automatically reset logging before each test for isolation."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def test_settings(tmp_path):
    """Provide test-specific settings rooted in a temporary home."""
    return Settings(
        home=tmp_path,
        environment=Environment.TESTING,
        log_level=LogLevel.CRITICAL,  # Minimal logging during tests
    )


@pytest.fixture
def mock_logger(mocker):
    """Provide a mock logger for testing that captures log calls."""
    logger = mocker.Mock(spec=loguru.logger)
    return logger


@pytest.fixture
def network_config():
    """Configuration with one network and a current context 'foo'."""
    return Config(
        networks={"testnet": Network(url="https://gateway.example.com")},
        contexts={
            "foo": Context(
                network="testnet",
                organization="Org1MSP",
                user="Admin",
                channel="mychannel",
                orderers=["orderer.example.com"],
                peers=["peer0.org1.example.com"],
            )
        },
        current_context="foo",
    )


@pytest.fixture
def mock_session(mocker):
    """Provide a mocked session handle."""
    session = mocker.Mock(spec=BaseSession)
    session.close = mocker.AsyncMock()
    return session


@pytest.fixture
def mock_resmgmt(mocker):
    """Provide a mocked resource management client with spec."""
    return mocker.AsyncMock(spec=BaseResourceManagement)


@pytest.fixture
def mock_factory(mocker, mock_session, mock_resmgmt):
    """Provide a factory double that hands out the mocked session and client."""
    factory = mocker.Mock(spec=BaseFactory)
    factory.has_session = True
    factory.sdk = mocker.AsyncMock(return_value=mock_session)
    factory.resource_management = mocker.AsyncMock(return_value=mock_resmgmt)
    return factory


@pytest.fixture
def out():
    """Command output stream."""
    return io.StringIO()


@pytest.fixture
def make_state(test_settings, network_config, mock_factory):
    """Factory fixture building CLIState wired to the mock factory.

    Usage:
        state = make_state()                      # stdout, network_config
        state = make_state(out=buffer, config=None)
    """

    def _make(**overrides):
        kwargs = {
            "config": network_config,
            "store": ConfigStore(test_settings.home),
            "factory_provider": lambda config: mock_factory,
        }
        kwargs.update(overrides)
        return CLIState(test_settings, **kwargs)

    return _make


@pytest.fixture
def cli_state(make_state, out):
    """CLIState writing command output to the ``out`` buffer."""
    return make_state(out=out)


@pytest.fixture
def cli_runner():
    """Provide Typer CLI test runner."""
    return CliRunner()

"""Tests for CLI app factory and state wiring."""

import typer

from fabric_cli.cli import create_cli_app
from fabric_cli.cli.state import CLIState
from fabric_cli.config.settings import LogLevel
from fabric_cli.environment.config import Config, Network
from fabric_cli.environment.store import ConfigStore


class TestCLIAppFactory:
    def test_returns_typer_app(self):
        app = create_cli_app()

        assert isinstance(app, typer.Typer)
        assert app.info.name == "fabric"

    def test_help_lists_command_groups(self, cli_runner):
        result = cli_runner.invoke(create_cli_app(), ["--help"])

        assert result.exit_code == 0
        for group in ("channel", "lifecycle", "chaincode", "context", "network"):
            assert group in result.output


class TestStateWiring:
    """Test how the callback builds CLIState from settings and disk."""

    def test_loads_config_from_home(self, cli_runner, test_settings, network_config):
        ConfigStore(test_settings.home).save(network_config)
        app = create_cli_app(settings=test_settings)
        captured = None

        @app.command()
        def probe(ctx: typer.Context):
            nonlocal captured
            captured = ctx.obj

        result = cli_runner.invoke(app, ["probe"])

        assert result.exit_code == 0
        assert isinstance(captured, CLIState)
        assert captured.config == network_config
        assert captured.store.path == test_settings.home / "config.yaml"

    def test_home_and_verbose_flags(self, cli_runner, tmp_path):
        app = create_cli_app()
        captured = None

        @app.command()
        def probe(ctx: typer.Context):
            nonlocal captured
            captured = ctx.obj

        result = cli_runner.invoke(app, ["--home", str(tmp_path), "-v", "probe"])

        assert result.exit_code == 0
        assert captured.settings.home == tmp_path
        assert captured.settings.log_level == LogLevel.DEBUG
        assert captured.config == Config()

    def test_invalid_config_file_exits(self, cli_runner, test_settings):
        test_settings.home.mkdir(parents=True, exist_ok=True)
        (test_settings.home / "config.yaml").write_text("networks: [")
        app = create_cli_app(settings=test_settings)

        @app.command()
        def probe(ctx: typer.Context):
            pass

        result = cli_runner.invoke(app, ["probe"])

        assert result.exit_code == 1
        assert "invalid configuration file" in result.output


class TestCommandExecution:
    def test_command_without_current_context_fails(self, cli_runner, make_state, out):
        state = make_state(config=Config(), out=out)
        app = create_cli_app(state=state)

        result = cli_runner.invoke(app, ["channel", "list"])

        assert result.exit_code == 1
        assert "Error: current context is not set" in result.output
        assert out.getvalue() == ""

    def test_successful_command_releases_session(
        self, cli_runner, cli_state, mock_resmgmt, mock_session, out
    ):
        mock_resmgmt.query_channels.return_value = ["mychannel"]
        app = create_cli_app(state=cli_state)

        result = cli_runner.invoke(app, ["channel", "list"])

        assert result.exit_code == 0
        assert out.getvalue() == "mychannel\n"
        mock_session.close.assert_awaited_once()

    def test_unreadable_tls_ca_exits_with_error(
        self, cli_runner, make_state, network_config, tmp_path, out
    ):
        network_config.networks["testnet"] = Network(
            url="https://gateway.example.com", tls_ca_cert=tmp_path / "missing-ca.pem"
        )
        state = make_state(factory_provider=None, out=out)
        app = create_cli_app(state=state)

        result = cli_runner.invoke(
            app, ["lifecycle", "commit", "mycc", "1.0", "1", "--peers", "peer0"]
        )

        assert result.exit_code == 1
        assert "Error: cannot load TLS CA certificate" in result.output
        assert out.getvalue() == ""

"""Tests for channel commands."""

import pytest

from fabric_cli.cli import create_cli_app
from fabric_cli.cli.commands.base import BaseCommand, execute
from fabric_cli.cli.commands.channel import (
    ConfigCommand,
    CreateCommand,
    JoinCommand,
    ListCommand,
    UpdateCommand,
)
from fabric_cli.domain.exceptions import (
    ClientError,
    InvalidArgumentError,
    OperationError,
)
from fabric_cli.environment.config import Config, Context


@pytest.fixture
def base(cli_state, mock_factory, mock_logger):
    return BaseCommand(cli_state, factory=mock_factory, logger=mock_logger)


@pytest.fixture
def channel_tx(tmp_path):
    path = tmp_path / "mychannel.tx"
    path.write_bytes(b"tx-envelope")
    return path


class TestCreate:
    def test_requires_name_then_tx(self, base):
        with pytest.raises(InvalidArgumentError, match="channel name not specified"):
            CreateCommand(base).validate()
        with pytest.raises(InvalidArgumentError, match="channel tx not specified"):
            CreateCommand(base, channel_id="mychannel").validate()

    @pytest.mark.asyncio
    async def test_creates_channel(self, base, channel_tx, mock_resmgmt, out):
        mock_resmgmt.save_channel.return_value = "tx1"

        await execute(CreateCommand(base, channel_id="mychannel", tx_path=str(channel_tx)))

        mock_resmgmt.save_channel.assert_awaited_once_with(
            "mychannel", b"tx-envelope", "orderer.example.com"
        )
        assert out.getvalue() == "successfully created channel 'mychannel'\n"

    @pytest.mark.asyncio
    async def test_missing_tx_file(self, base, tmp_path, mock_resmgmt):
        command = CreateCommand(base, channel_id="mychannel", tx_path=str(tmp_path / "none"))

        with pytest.raises(OperationError, match="failed to read channel tx"):
            await execute(command)

        mock_resmgmt.save_channel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_client_failure_is_wrapped(self, base, channel_tx, mock_resmgmt):
        mock_resmgmt.save_channel.side_effect = ClientError("create error")

        with pytest.raises(OperationError, match="failed to create channel: create error"):
            await execute(
                CreateCommand(base, channel_id="mychannel", tx_path=str(channel_tx))
            )


@pytest.mark.asyncio
async def test_update_channel(base, channel_tx, mock_resmgmt, out):
    await execute(UpdateCommand(base, channel_id="mychannel", tx_path=str(channel_tx)))

    mock_resmgmt.save_channel.assert_awaited_once()
    assert out.getvalue() == "successfully updated channel 'mychannel'\n"


class TestJoin:
    def test_requires_name(self, base):
        with pytest.raises(InvalidArgumentError, match="channel name not specified"):
            JoinCommand(base).validate()

    @pytest.mark.asyncio
    async def test_joins_context_peers_by_default(self, base, mock_resmgmt, out):
        await execute(JoinCommand(base, channel_id="mychannel"))

        mock_resmgmt.join_channel.assert_awaited_once_with(
            "mychannel", ["peer0.org1.example.com"], orderer="orderer.example.com"
        )
        assert out.getvalue() == "successfully joined channel 'mychannel'\n"

    @pytest.mark.asyncio
    async def test_joins_given_peers(self, base, mock_resmgmt):
        await execute(JoinCommand(base, channel_id="mychannel", peers=["peer1"]))

        assert mock_resmgmt.join_channel.await_args.args[1] == ["peer1"]


class TestList:
    @pytest.mark.asyncio
    async def test_lists_channels(self, base, mock_resmgmt, out):
        mock_resmgmt.query_channels.return_value = ["alpha", "beta"]

        await execute(ListCommand(base))

        mock_resmgmt.query_channels.assert_awaited_once_with("peer0.org1.example.com")
        assert out.getvalue() == "alpha\nbeta\n"

    @pytest.mark.asyncio
    async def test_requires_a_peer(self, base, mock_resmgmt):
        base.state.config = Config(contexts={"foo": Context()}, current_context="foo")

        with pytest.raises(InvalidArgumentError, match="at least one peer"):
            await execute(ListCommand(base))

        mock_resmgmt.query_channels.assert_not_awaited()


class TestConfig:
    @pytest.mark.asyncio
    async def test_defaults_to_context_channel(self, base, mock_resmgmt, out):
        mock_resmgmt.query_config_block.return_value = {"sequence": 4}

        await execute(ConfigCommand(base))

        mock_resmgmt.query_config_block.assert_awaited_once_with(
            "mychannel", ["peer0.org1.example.com"]
        )
        assert out.getvalue() == "sequence: 4\n"

    @pytest.mark.asyncio
    async def test_requires_a_channel(self, base, mock_resmgmt):
        base.state.config = Config(contexts={"foo": Context()}, current_context="foo")

        with pytest.raises(InvalidArgumentError, match="channel name not specified"):
            await execute(ConfigCommand(base))


def test_join_cli_splits_peers(cli_runner, cli_state, mock_resmgmt):
    app = create_cli_app(state=cli_state)

    result = cli_runner.invoke(
        app, ["channel", "join", "mychannel", "-p", "peer0,peer1", "-p", "peer2"]
    )

    assert result.exit_code == 0
    assert mock_resmgmt.join_channel.await_args.args[1] == ["peer0", "peer1", "peer2"]


@pytest.mark.asyncio
async def test_join_requires_a_peer(base, mock_resmgmt):
    base.state.config = Config(contexts={"foo": Context()}, current_context="foo")

    with pytest.raises(InvalidArgumentError, match="at least one peer must be specified"):
        await execute(JoinCommand(base, channel_id="mychannel"))

    mock_resmgmt.join_channel.assert_not_awaited()

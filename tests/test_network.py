"""
Unit Tests for Network Context
"""

import pytest
from unittest.mock import Mock, patch
from hypothesis import given, strategies as st

from blockchain.network import (
    LOCAL_RPC_URL,
    NetworkContext,
    connect,
    get_network_context,
    load_network_config,
)
from blockchain.nonce_manager import NonceManager
from deployments.environment import create_environment
from utils.exceptions import NetworkConnectionError, NetworkNotFoundError


@pytest.fixture
def config():
    """Network configuration"""
    return {
        'default_network': 'hardhat',
        'development_chains': ['hardhat', 'localhost'],
        'networks': {
            'hardhat': {'chain_id': 31337, 'rpc_url_env': 'HARDHAT_RPC_URL', 'block_confirmations': 1},
            'sepolia': {
                'chain_id': 11155111,
                'rpc_url_env': 'SEPOLIA_RPC_URL',
                'block_confirmations': 6,
                'explorer_api_url': 'https://api.etherscan.io/v2/api'
            },
            'mainnet': {'chain_id': 1, 'rpc_url_env': 'MAINNET_RPC_URL'}
        }
    }


@pytest.fixture
def clean_env(monkeypatch):
    for var in ('NETWORK', 'HARDHAT_RPC_URL', 'SEPOLIA_RPC_URL', 'MAINNET_RPC_URL'):
        monkeypatch.delenv(var, raising=False)


@pytest.mark.usefixtures("clean_env")
class TestNetworkContext:
    """Test network resolution"""

    def test_default_network_is_development(self, config):
        context = get_network_context(config=config)

        assert context.name == 'hardhat'
        assert context.is_development
        assert context.rpc_url == LOCAL_RPC_URL

    def test_network_from_env(self, config, monkeypatch):
        monkeypatch.setenv('NETWORK', 'sepolia')
        monkeypatch.setenv('SEPOLIA_RPC_URL', 'https://sepolia.example')

        context = get_network_context(config=config)

        assert context.name == 'sepolia'
        assert not context.is_development
        assert context.rpc_url == 'https://sepolia.example'
        assert context.chain_id == 11155111
        assert context.explorer_api_url == 'https://api.etherscan.io/v2/api'

    def test_explicit_name_wins_over_env(self, config, monkeypatch):
        monkeypatch.setenv('NETWORK', 'sepolia')

        assert get_network_context('mainnet', config=config).name == 'mainnet'

    def test_live_network_without_rpc_url(self, config):
        context = get_network_context('mainnet', config=config)

        assert context.rpc_url is None

    def test_unknown_network(self, config):
        with pytest.raises(NetworkNotFoundError):
            get_network_context('ropsten', config=config)

    def test_configured_confirmations(self, config):
        assert get_network_context('sepolia', config=config).confirmations == 6

    def test_unset_confirmations_default_to_one(self, config):
        assert get_network_context('mainnet', config=config).confirmations == 1

    def test_shipped_config_loads(self):
        config = load_network_config()

        assert 'hardhat' in config['development_chains']
        assert 'localhost' in config['development_chains']
        for network in config['networks'].values():
            assert 'chain_id' in network


class TestConfirmationFuzzing:
    """Fuzz confirmation count resolution"""

    @given(block_confirmations=st.one_of(st.none(), st.integers(min_value=1, max_value=1000)))
    def test_confirmations_equal_configured_or_one(self, block_confirmations):
        context = NetworkContext(
            name='testnet',
            chain_id=1,
            rpc_url=None,
            block_confirmations=block_confirmations,
            is_development=False
        )

        expected = block_confirmations if block_confirmations is not None else 1
        assert context.confirmations == expected


class TestConnect:
    """Test RPC connection"""

    def test_missing_rpc_url(self):
        context = NetworkContext(
            name='mainnet',
            chain_id=1,
            rpc_url=None,
            block_confirmations=None,
            is_development=False
        )

        with pytest.raises(NetworkConnectionError):
            connect(context)

    def test_unreachable_node(self):
        context = NetworkContext(
            name='localhost',
            chain_id=31337,
            rpc_url=LOCAL_RPC_URL,
            block_confirmations=1,
            is_development=True
        )

        with patch('blockchain.network.Web3') as web3_cls:
            web3_cls.return_value.is_connected.return_value = False

            with pytest.raises(NetworkConnectionError):
                connect(context)

        web3_cls.HTTPProvider.assert_called_once_with(LOCAL_RPC_URL)


class TestCreateEnvironment:
    """Test deploy environment wiring"""

    @pytest.fixture
    def w3(self):
        w3 = Mock()
        w3.eth.accounts = ["0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"]
        return w3

    def test_development_wiring(self, w3, monkeypatch):
        monkeypatch.setenv('NETWORK', 'hardhat')
        monkeypatch.delenv('PRIVATE_KEY', raising=False)
        monkeypatch.setenv('ETHERSCAN_API_KEY', 'explorer-key')

        with patch('deployments.environment.connect', return_value=w3) as connect_mock:
            env = create_environment()

        assert connect_mock.call_args.args[0].name == 'hardhat'
        assert env.network.is_development
        assert env.w3 is w3
        assert env.wallet_manager.is_unlocked
        assert env.get_named_accounts() == {'deployer': "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"}
        assert env.transaction_builder.nonce_manager is None
        assert env.transaction_builder.chain_id == 31337
        assert env.contract_manager.transaction_builder is env.transaction_builder
        assert env.deployments.network is env.network
        assert env.verifier.api_key == 'explorer-key'

    def test_live_network_with_key_tracks_nonces(self, w3, monkeypatch):
        monkeypatch.setenv('PRIVATE_KEY', "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80")
        monkeypatch.delenv('ETHERSCAN_API_KEY', raising=False)

        with patch('deployments.environment.connect', return_value=w3):
            env = create_environment('sepolia')

        assert not env.network.is_development
        assert not env.wallet_manager.is_unlocked
        assert isinstance(env.transaction_builder.nonce_manager, NonceManager)
        assert env.verifier.api_key is None

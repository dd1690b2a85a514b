"""
Shared test fixtures
"""

import pytest
from unittest.mock import Mock, AsyncMock
from hexbytes import HexBytes

from blockchain.network import NetworkContext

DEPLOYER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
MARKETPLACE_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
NFT_ADDRESS = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"
TX_HASH = HexBytes(b'\x22' * 32)


@pytest.fixture
def dev_network():
    """Local hardhat network"""
    return NetworkContext(
        name='hardhat',
        chain_id=31337,
        rpc_url='http://127.0.0.1:8545',
        block_confirmations=None,
        is_development=True
    )


@pytest.fixture
def live_network():
    """Public testnet"""
    return NetworkContext(
        name='sepolia',
        chain_id=11155111,
        rpc_url='https://sepolia.example',
        block_confirmations=6,
        is_development=False,
        explorer_api_url='https://api.etherscan.io/v2/api'
    )


@pytest.fixture
def wallet_manager():
    """Unlocked deployer wallet"""
    wallet = Mock()
    wallet.is_unlocked = True
    wallet.deployer_address = DEPLOYER
    wallet.get_named_accounts.return_value = {'deployer': DEPLOYER}
    wallet.send_transaction.return_value = TX_HASH
    return wallet


def make_receipt(status=1, block_number=10, contract_address=None, logs=None):
    """Build a minimal transaction receipt"""
    return {
        'status': status,
        'blockNumber': block_number,
        'gasUsed': 21000,
        'transactionHash': TX_HASH,
        'contractAddress': contract_address,
        'logs': logs or []
    }


@pytest.fixture
def transaction_builder():
    """Transaction builder that confirms everything immediately"""
    builder = Mock()
    builder.build_transaction = AsyncMock(side_effect=lambda call, value=0: {'call': call})
    builder.send_and_wait = AsyncMock(return_value=make_receipt())
    return builder

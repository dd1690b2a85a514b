"""
Blockchain Interaction Package
Handles network context, accounts, transactions and contract artifacts
"""

from .network import NetworkContext, get_network_context
from .contract_manager import ContractManager
from .transaction_builder import TransactionBuilder
from .nonce_manager import NonceManager
from .wallet_manager import WalletManager

__all__ = [
    'NetworkContext',
    'get_network_context',
    'ContractManager',
    'TransactionBuilder',
    'NonceManager',
    'WalletManager'
]

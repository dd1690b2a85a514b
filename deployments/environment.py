"""
Deploy Environment
Wires network, wallet, contracts and verification for one script run
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional
from web3 import Web3
from dotenv import load_dotenv

from blockchain.network import NetworkContext, connect, get_network_context
from blockchain.wallet_manager import WalletManager
from blockchain.transaction_builder import TransactionBuilder
from blockchain.contract_manager import ContractManager
from utils.verify import Verifier
from .deployment_manager import DeploymentManager

load_dotenv()


@dataclass
class DeployEnvironment:
    """Everything a deploy task or interaction script needs"""

    network: NetworkContext
    w3: Web3
    wallet_manager: WalletManager
    transaction_builder: TransactionBuilder
    contract_manager: ContractManager
    deployments: DeploymentManager
    verifier: Verifier

    def get_named_accounts(self) -> Dict[str, str]:
        return self.wallet_manager.get_named_accounts()


def create_environment(network_name: Optional[str] = None) -> DeployEnvironment:
    """
    Connect to the target network and build the deploy environment

    Args:
        network_name: Network to use (NETWORK env or config default if None)

    Returns:
        DeployEnvironment
    """
    network = get_network_context(network_name)
    w3 = connect(network)

    wallet_manager = WalletManager(w3, network.is_development)
    transaction_builder = TransactionBuilder(w3, wallet_manager, network.chain_id)
    contract_manager = ContractManager(w3, transaction_builder)

    return DeployEnvironment(
        network=network,
        w3=w3,
        wallet_manager=wallet_manager,
        transaction_builder=transaction_builder,
        contract_manager=contract_manager,
        deployments=DeploymentManager(network, contract_manager, wallet_manager),
        verifier=Verifier(network, contract_manager, os.getenv('ETHERSCAN_API_KEY')),
    )

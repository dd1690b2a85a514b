"""
Network Context
Resolves the target network, its confirmation count and RPC connection
"""

import os
import json
from dataclasses import dataclass
from typing import Dict, Optional
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

from utils.exceptions import NetworkConnectionError, NetworkNotFoundError

load_dotenv()

DEFAULT_CONFIG_PATH = "config/network_config.json"
LOCAL_RPC_URL = "http://127.0.0.1:8545"


@dataclass(frozen=True)
class NetworkContext:
    """Read-only description of the network a script runs against"""

    name: str
    chain_id: int
    rpc_url: Optional[str]
    block_confirmations: Optional[int]
    is_development: bool
    explorer_api_url: Optional[str] = None

    @property
    def confirmations(self) -> int:
        """Configured confirmation count, 1 when unset"""
        return self.block_confirmations or 1


def load_network_config(path: str = DEFAULT_CONFIG_PATH) -> Dict:
    """
    Load network configuration file

    Args:
        path: Path to network_config.json

    Returns:
        Parsed configuration dict
    """
    with open(path, 'r') as f:
        return json.load(f)


def get_network_context(name: Optional[str] = None, config: Optional[Dict] = None) -> NetworkContext:
    """
    Resolve network context for this invocation

    Args:
        name: Network name (falls back to NETWORK env, then config default)
        config: Parsed network configuration (loaded from disk if None)

    Returns:
        NetworkContext

    Raises:
        NetworkNotFoundError: If the network is not configured
    """
    if config is None:
        config = load_network_config()

    name = name or os.getenv('NETWORK') or config.get('default_network', 'hardhat')
    networks = config.get('networks', {})

    if name not in networks:
        raise NetworkNotFoundError(
            f"Network '{name}' not configured. Available: {', '.join(sorted(networks))}"
        )

    network_config = networks[name]
    is_development = name in config.get('development_chains', [])

    rpc_url = os.getenv(network_config.get('rpc_url_env', ''))
    if not rpc_url and is_development:
        rpc_url = LOCAL_RPC_URL

    return NetworkContext(
        name=name,
        chain_id=network_config['chain_id'],
        rpc_url=rpc_url,
        block_confirmations=network_config.get('block_confirmations'),
        is_development=is_development,
        explorer_api_url=network_config.get('explorer_api_url'),
    )


def connect(context: NetworkContext) -> Web3:
    """
    Connect to the network's RPC node

    Raises:
        NetworkConnectionError: If no RPC URL is set or the node is unreachable
    """
    if not context.rpc_url:
        raise NetworkConnectionError(f"No RPC URL configured for network '{context.name}'")

    w3 = Web3(Web3.HTTPProvider(context.rpc_url))

    if not w3.is_connected():
        raise NetworkConnectionError(f"Failed to connect to {context.name} at {context.rpc_url}")

    logger.info(f"Connected to {context.name} (chain {context.chain_id})")
    return w3

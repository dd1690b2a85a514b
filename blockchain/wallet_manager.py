"""
Wallet Manager
Resolves the deployer account and submits transactions on its behalf
"""

import os
from typing import Dict, Optional
from web3 import Web3
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

from utils.exceptions import ConfigurationError

load_dotenv()


class WalletManager:
    """
    Holds the deployer account

    Two modes:
    - Local key: PRIVATE_KEY from the environment, transactions signed locally
    - Unlocked node account: development networks without PRIVATE_KEY use
      the node's first account and eth_sendTransaction
    """

    def __init__(self, w3: Web3, is_development: bool, private_key: Optional[str] = None):
        """
        Initialize wallet manager

        Args:
            w3: Web3 instance
            is_development: Whether the target is a development network
            private_key: Deployer key (defaults to PRIVATE_KEY env)
        """
        self.w3 = w3
        private_key = private_key or os.getenv('PRIVATE_KEY')

        if private_key:
            self.account = Account.from_key(private_key)
            self.deployer_address = self.account.address
        elif is_development:
            self.account = None
            self.deployer_address = Web3.to_checksum_address(w3.eth.accounts[0])
        else:
            raise ConfigurationError("PRIVATE_KEY must be set in .env for non-development networks")

        logger.info(f"Deployer wallet: {self.deployer_address}")

    @property
    def is_unlocked(self) -> bool:
        """True when the node signs for the deployer"""
        return self.account is None

    def get_named_accounts(self) -> Dict[str, str]:
        """Named accounts available to deploy tasks"""
        return {'deployer': self.deployer_address}

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the local key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        if self.account is None:
            raise ConfigurationError("No local key available for signing")

        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

    def send_transaction(self, transaction: Dict):
        """
        Submit a transaction from the deployer

        Args:
            transaction: Transaction dict (must include nonce for local keys)

        Returns:
            Transaction hash
        """
        if self.is_unlocked:
            return self.w3.eth.send_transaction(transaction)

        signed_tx = self.sign_transaction(transaction)
        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

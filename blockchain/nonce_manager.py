"""
Nonce Manager
Hands out sequential nonces for the deployer account
"""

import asyncio
from typing import Optional
from web3 import Web3
from loguru import logger


class NonceManager:
    """
    Tracks the next nonce for one sender so back-to-back transactions
    don't reuse a nonce before the node sees the previous one
    """

    def __init__(self, w3: Web3, address: str):
        """
        Initialize Nonce Manager

        Args:
            w3: Web3 instance
            address: Sender address
        """
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)

        self.current_nonce: Optional[int] = None
        self.lock = asyncio.Lock()

    def _sync_nonce(self):
        """Sync nonce with the node (confirmed + pending)"""
        self.current_nonce = self.w3.eth.get_transaction_count(self.address, 'pending')
        logger.debug(f"Nonce synced: {self.current_nonce}")

    async def get_nonce(self) -> int:
        """
        Get next available nonce

        Returns:
            Next nonce to use
        """
        async with self.lock:
            if self.current_nonce is None:
                self._sync_nonce()

            nonce = self.current_nonce
            self.current_nonce += 1

            logger.debug(f"Allocated nonce: {nonce}")
            return nonce

    async def reset_nonce(self):
        """Re-read nonce from the node after a failed submission"""
        async with self.lock:
            self._sync_nonce()
            logger.warning(f"Nonce reset to: {self.current_nonce}")

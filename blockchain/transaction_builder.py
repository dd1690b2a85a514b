"""
Transaction Builder
Builds, submits and confirms deployer transactions
"""

import asyncio
from typing import Dict, Optional
from web3 import Web3
from web3.exceptions import TransactionNotFound
from loguru import logger

from utils.exceptions import ConfirmationTimeoutError, TransactionFailedError
from .nonce_manager import NonceManager


class TransactionBuilder:
    """
    Builds transactions for contract constructors and function calls,
    sends them from the deployer and waits for confirmations
    """

    GAS_BUFFER = 1.2  # 20% over the estimate

    def __init__(
        self,
        w3: Web3,
        wallet_manager,
        chain_id: int,
        nonce_manager: Optional[NonceManager] = None,
        timeout: float = 300,
        poll_interval: float = 1.0
    ):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            wallet_manager: Wallet manager for the sending account
            chain_id: Target chain id
            nonce_manager: Nonce manager (created for local keys if None)
            timeout: Seconds to wait for a receipt and its confirmations
            poll_interval: Seconds between block polls
        """
        self.w3 = w3
        self.wallet_manager = wallet_manager
        self.chain_id = chain_id
        self.timeout = timeout
        self.poll_interval = poll_interval

        if nonce_manager is None and not wallet_manager.is_unlocked:
            nonce_manager = NonceManager(w3, wallet_manager.deployer_address)
        self.nonce_manager = nonce_manager

    async def build_transaction(self, contract_call, value: int = 0) -> Dict:
        """
        Build a transaction for a constructor or contract function call

        Args:
            contract_call: web3 ContractConstructor or ContractFunction
            value: Native currency to send (in wei)

        Returns:
            Transaction dict
        """
        sender = self.wallet_manager.deployer_address

        gas_estimate = contract_call.estimate_gas({'from': sender, 'value': value})
        gas_limit = int(gas_estimate * self.GAS_BUFFER)
        logger.debug(f"Gas limit: {gas_limit} (estimate {gas_estimate})")

        params = {
            'from': sender,
            'value': value,
            'gas': gas_limit,
            'chainId': self.chain_id
        }

        if self.nonce_manager is not None:
            params['nonce'] = await self.nonce_manager.get_nonce()

        return contract_call.build_transaction(params)

    async def send_and_wait(self, transaction: Dict, confirmations: int = 1):
        """
        Send a transaction and wait until it is confirmed

        Args:
            transaction: Transaction dict
            confirmations: Blocks required, the inclusion block counts as one

        Returns:
            Transaction receipt
        """
        try:
            tx_hash = self.wallet_manager.send_transaction(transaction)
        except Exception:
            if self.nonce_manager is not None:
                await self.nonce_manager.reset_nonce()
            raise

        logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")

        return await self.wait_for_confirmations(tx_hash, confirmations)

    async def wait_for_confirmations(self, tx_hash, confirmations: int = 1):
        """
        Wait until a transaction has the given number of confirmations

        Args:
            tx_hash: Transaction hash
            confirmations: Blocks required, the inclusion block counts as one

        Returns:
            Transaction receipt

        Raises:
            TransactionFailedError: If the transaction reverted
            ConfirmationTimeoutError: If the wait exceeds the timeout
        """
        tx_hex = Web3.to_hex(tx_hash)
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout

        receipt = await self._wait_for_receipt(tx_hash, tx_hex, deadline)

        if receipt['status'] != 1:
            logger.error(f"Transaction reverted: {tx_hex}")
            raise TransactionFailedError(tx_hex, receipt)

        while self.w3.eth.block_number - receipt['blockNumber'] + 1 < confirmations:
            if loop.time() >= deadline:
                raise ConfirmationTimeoutError(
                    f"{tx_hex} did not reach {confirmations} confirmations after {self.timeout}s"
                )
            await asyncio.sleep(self.poll_interval)

        logger.debug(f"{tx_hex} confirmed ({confirmations} blocks, gas used {receipt['gasUsed']})")
        return receipt

    async def _wait_for_receipt(self, tx_hash, tx_hex: str, deadline: float):
        """Poll for a receipt until the deadline"""
        loop = asyncio.get_running_loop()

        while True:
            try:
                return self.w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                pass

            if loop.time() >= deadline:
                raise ConfirmationTimeoutError(f"No receipt for {tx_hex} after {self.timeout}s")
            await asyncio.sleep(self.poll_interval)

"""
Mint and List
Deploys a marketplace and a BasicNft, mints one NFT and lists it for sale

Run from the project root:
    python -m scripts.mint_and_list
"""

import sys
import asyncio
from enum import Enum
from typing import Dict, Optional
from web3 import Web3
from loguru import logger

from blockchain.contract_manager import decode_first_event
from deployments.environment import create_environment
from utils.exceptions import TokenIdNotFoundError
from utils.logging_setup import configure_logging

PRICE = Web3.to_wei("0.1", "ether")


class Stage(Enum):
    """Mint-and-list progress, strictly linear"""

    PENDING = "pending"
    DEPLOYING_MARKETPLACE = "deploying_marketplace"
    DEPLOYING_TOKEN = "deploying_token"
    MINTING = "minting"
    APPROVING = "approving"
    LISTING = "listing"
    DONE = "done"
    ABORTED = "aborted"


STAGE_ORDER = [
    Stage.PENDING,
    Stage.DEPLOYING_MARKETPLACE,
    Stage.DEPLOYING_TOKEN,
    Stage.MINTING,
    Stage.APPROVING,
    Stage.LISTING,
    Stage.DONE,
]


def extract_token_id(nft_contract, mint_receipt) -> int:
    """
    Read the token id from the first event of a mint receipt

    Raises:
        EventNotFoundError: If the receipt has no decodable event
        TokenIdNotFoundError: If the event carries no tokenId
    """
    event = decode_first_event(nft_contract, mint_receipt)
    logger.debug(f"Mint event: {event}")

    token_id = event['args'].get('tokenId')
    if token_id is None:
        raise TokenIdNotFoundError(f"{event['event']} event carries no tokenId")

    return token_id


class MintAndListRunner:
    """
    Runs deploy -> mint -> approve -> list, waiting for each transaction
    to confirm before the next step. Any failure aborts the sequence.
    """

    def __init__(self, contract_manager, transaction_builder, price: int = PRICE, confirmations: int = 1):
        self.contract_manager = contract_manager
        self.transaction_builder = transaction_builder
        self.price = price
        self.confirmations = confirmations
        self.stage = Stage.PENDING

    def _advance(self, stage: Stage):
        if STAGE_ORDER.index(stage) != STAGE_ORDER.index(self.stage) + 1:
            raise RuntimeError(f"Invalid transition {self.stage.value} -> {stage.value}")
        logger.debug(f"Stage: {self.stage.value} -> {stage.value}")
        self.stage = stage

    async def _transact(self, contract_call):
        tx = await self.transaction_builder.build_transaction(contract_call)
        return await self.transaction_builder.send_and_wait(tx, self.confirmations)

    async def run(self) -> Dict:
        """
        Run the full sequence

        Returns:
            Dict with marketplace, nft and token_id
        """
        try:
            self._advance(Stage.DEPLOYING_MARKETPLACE)
            nft_marketplace, _ = await self.contract_manager.deploy_contract(
                "NftMarketplace", confirmations=self.confirmations
            )

            self._advance(Stage.DEPLOYING_TOKEN)
            basic_nft, _ = await self.contract_manager.deploy_contract(
                "BasicNft", confirmations=self.confirmations
            )

            self._advance(Stage.MINTING)
            logger.info("Minting...")
            mint_receipt = await self._transact(basic_nft.functions.mintNft())
            token_id = extract_token_id(basic_nft, mint_receipt)
            logger.info(f"Minted token {token_id}")

            self._advance(Stage.APPROVING)
            logger.info("Approving NFT...")
            await self._transact(basic_nft.functions.approve(nft_marketplace.address, token_id))

            self._advance(Stage.LISTING)
            logger.info("Listing NFT...")
            await self._transact(
                nft_marketplace.functions.listItem(basic_nft.address, token_id, self.price)
            )

            self._advance(Stage.DONE)
            logger.success(f"Listed token {token_id} at {Web3.from_wei(self.price, 'ether')}")

        except Exception:
            logger.error(f"Mint and list aborted during {self.stage.value}")
            self.stage = Stage.ABORTED
            raise

        return {
            'marketplace': nft_marketplace.address,
            'nft': basic_nft.address,
            'token_id': token_id
        }


async def mint_and_list(network_name: Optional[str] = None) -> Dict:
    """Run mint-and-list on the current network"""
    env = create_environment(network_name)
    runner = MintAndListRunner(env.contract_manager, env.transaction_builder)
    return await runner.run()


def main():
    """Script entry point, exits 0 on success and 1 on any failure"""
    configure_logging("mint_and_list")

    try:
        asyncio.run(mint_and_list())
    except Exception as e:
        logger.opt(exception=e).error(f"Mint and list failed: {e}")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()

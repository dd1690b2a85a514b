"""
Contract Manager
Loads compiled artifacts, deploys contracts and decodes their events
"""

import os
import json
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple
from web3 import Web3
from eth_utils import event_abi_to_log_topic
from hexbytes import HexBytes
from loguru import logger
from dotenv import load_dotenv

from utils.exceptions import ArtifactNotFoundError, EventNotFoundError

load_dotenv()

DEFAULT_ARTIFACTS_DIR = "artifacts"


class ContractManager:
    """
    Manages contract artifacts and instances

    Artifacts are read from the Hardhat compile output:
    artifacts/contracts/<Name>.sol/<Name>.json
    """

    def __init__(self, w3: Web3, transaction_builder, artifacts_dir: Optional[str] = None):
        """
        Initialize Contract Manager

        Args:
            w3: Web3 instance
            transaction_builder: TransactionBuilder used for deployments
            artifacts_dir: Hardhat artifacts directory (ARTIFACTS_DIR env or ./artifacts)
        """
        self.w3 = w3
        self.transaction_builder = transaction_builder
        self.artifacts_dir = Path(artifacts_dir or os.getenv('ARTIFACTS_DIR', DEFAULT_ARTIFACTS_DIR))

    def _artifact_path(self, name: str) -> Path:
        default_path = self.artifacts_dir / "contracts" / f"{name}.sol" / f"{name}.json"
        if default_path.exists():
            return default_path

        # Contract declared in a file with a different name
        for candidate in sorted(self.artifacts_dir.glob(f"**/{name}.json")):
            if "build-info" not in candidate.parts:
                return candidate

        raise ArtifactNotFoundError(
            f"Contract artifact not found for {name} under {self.artifacts_dir}. "
            "Run 'npx hardhat compile' first"
        )

    def load_artifact(self, name: str) -> Dict:
        """
        Load a compiled contract artifact

        Args:
            name: Contract name

        Returns:
            Artifact dict (abi, bytecode, sourceName, contractName)
        """
        with open(self._artifact_path(name), 'r') as f:
            return json.load(f)

    def load_build_info(self, name: str) -> Dict:
        """
        Load the compiler build info (solc input and version) for a contract

        Args:
            name: Contract name

        Returns:
            Build info dict
        """
        artifact_path = self._artifact_path(name)
        dbg_path = artifact_path.with_name(f"{name}.dbg.json")

        if not dbg_path.exists():
            raise ArtifactNotFoundError(f"Debug file not found: {dbg_path}")

        with open(dbg_path, 'r') as f:
            build_info_ref = json.load(f)['buildInfo']

        build_info_path = (dbg_path.parent / build_info_ref).resolve()
        if not build_info_path.exists():
            raise ArtifactNotFoundError(f"Build info not found: {build_info_path}")

        with open(build_info_path, 'r') as f:
            return json.load(f)

    async def deploy_contract(
        self,
        name: str,
        args: Sequence = (),
        confirmations: int = 1
    ) -> Tuple[object, Dict]:
        """
        Deploy a contract and wait for confirmations

        Args:
            name: Contract name
            args: Constructor arguments
            confirmations: Blocks to wait for

        Returns:
            (contract instance, deployment receipt)
        """
        artifact = self.load_artifact(name)
        factory = self.w3.eth.contract(abi=artifact['abi'], bytecode=artifact['bytecode'])

        logger.info(f"Deploying {name}...")
        tx = await self.transaction_builder.build_transaction(factory.constructor(*args))
        receipt = await self.transaction_builder.send_and_wait(tx, confirmations)

        address = receipt['contractAddress']
        contract = self.w3.eth.contract(address=address, abi=artifact['abi'])

        logger.success(f"{name} deployed at {address} (gas used {receipt['gasUsed']})")
        return contract, receipt

    def get_contract(self, name: str, address: str):
        """Get a contract instance bound to an address"""
        artifact = self.load_artifact(name)
        return self.w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=artifact['abi']
        )


def decode_first_event(contract, receipt):
    """
    Decode the first log of a receipt against a contract ABI

    Args:
        contract: Contract instance that emitted the log
        receipt: Transaction receipt

    Returns:
        Decoded event (AttributeDict with 'event' and 'args')

    Raises:
        EventNotFoundError: If the receipt has no logs or the first log is unknown
    """
    logs = receipt.get('logs') or []
    if not logs:
        raise EventNotFoundError(f"Transaction {_tx_hex(receipt)} emitted no events")

    log = logs[0]
    topics = log.get('topics') or []
    if not topics:
        raise EventNotFoundError(f"First log of {_tx_hex(receipt)} is anonymous")

    topic = HexBytes(topics[0])

    for entry in contract.abi:
        if entry.get('type') != 'event' or entry.get('anonymous'):
            continue
        if event_abi_to_log_topic(entry) == topic:
            return contract.events[entry['name']]().process_log(log)

    raise EventNotFoundError(
        f"First log of {_tx_hex(receipt)} does not match any event in the contract ABI"
    )


def _tx_hex(receipt) -> str:
    tx_hash = receipt.get('transactionHash')
    return Web3.to_hex(tx_hash) if tx_hash is not None else '<unknown>'

"""
Deployment Manager
Deploys named contracts and keeps a record of each deployment per network
"""

import json
from pathlib import Path
from typing import Optional, Sequence
from web3 import Web3
from loguru import logger

from utils.exceptions import ConfigurationError, DeploymentNotFoundError
from .types import DeploymentRecord

DEFAULT_DEPLOYMENTS_DIR = "data/deployments"

# In-process network, state is gone when the node stops
EPHEMERAL_NETWORKS = {'hardhat'}


class DeploymentManager:
    """
    Deploys contracts by artifact name and saves deployment records to
    data/deployments/<network>/<Name>.json
    """

    def __init__(
        self,
        network,
        contract_manager,
        wallet_manager,
        deployments_dir: str = DEFAULT_DEPLOYMENTS_DIR
    ):
        """
        Initialize Deployment Manager

        Args:
            network: NetworkContext of this run
            contract_manager: ContractManager used to publish contracts
            wallet_manager: WalletManager holding the deployer account
            deployments_dir: Root directory for saved deployment records
        """
        self.network = network
        self.contract_manager = contract_manager
        self.wallet_manager = wallet_manager
        self.deployments_dir = Path(deployments_dir)

    def log(self, message: str):
        """Log a deploy task message"""
        logger.info(message)

    def _record_path(self, name: str) -> Path:
        return self.deployments_dir / self.network.name / f"{name}.json"

    async def deploy(
        self,
        name: str,
        from_: Optional[str] = None,
        args: Sequence = (),
        log: bool = False,
        wait_confirmations: Optional[int] = None
    ) -> DeploymentRecord:
        """
        Deploy a contract

        Args:
            name: Contract artifact name
            from_: Deployer address (must be the configured deployer)
            args: Constructor arguments
            log: Log the deployment details
            wait_confirmations: Confirmations to wait for (1 if None)

        Returns:
            DeploymentRecord of the new instance
        """
        deployer = self.wallet_manager.deployer_address
        if from_ is not None and Web3.to_checksum_address(from_) != deployer:
            raise ConfigurationError(f"No signer available for {from_} (deployer is {deployer})")

        confirmations = wait_confirmations or 1

        if log:
            logger.info(f"Deploying {name} from {deployer} on {self.network.name} "
                        f"(waiting {confirmations} confirmations)")

        contract, receipt = await self.contract_manager.deploy_contract(name, args, confirmations)

        record = DeploymentRecord(
            name=name,
            address=contract.address,
            network=self.network.name,
            args=tuple(args),
            abi=list(contract.abi),
            transaction_hash=Web3.to_hex(receipt['transactionHash']),
            block_number=receipt['blockNumber'],
            deployer=deployer,
            num_deployments=self._next_deployment_number(name),
        )

        if log:
            logger.info(f"deployed \"{name}\" (tx: {record.transaction_hash}) at {record.address}")

        self._save(record)
        return record

    def _next_deployment_number(self, name: str) -> int:
        try:
            return self.get(name).num_deployments + 1
        except DeploymentNotFoundError:
            return 1

    def _save(self, record: DeploymentRecord):
        if self.network.name in EPHEMERAL_NETWORKS:
            return

        path = self._record_path(record.name)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(record.to_json(), f, indent=2)

        logger.debug(f"Saved deployment record: {path}")

    def get(self, name: str) -> DeploymentRecord:
        """
        Load the saved deployment of a contract on this network

        Raises:
            DeploymentNotFoundError: If the contract was never deployed here
        """
        path = self._record_path(name)
        if not path.exists():
            raise DeploymentNotFoundError(f"No deployment found for {name} on {self.network.name}")

        with open(path, 'r') as f:
            return DeploymentRecord.from_json(name, self.network.name, json.load(f))

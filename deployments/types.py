"""Data types for deployment records."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class DeploymentRecord:
    """A deployed contract instance."""

    # Required fields
    name: str  # Contract name, e.g. "BasicNft"
    address: str  # Checksummed address
    network: str  # Network name the contract lives on
    args: Tuple[Any, ...] = ()  # Constructor arguments used

    # Filled from the deployment receipt
    abi: List[Dict[str, Any]] = field(default_factory=list, compare=False)
    transaction_hash: Optional[str] = None
    block_number: Optional[int] = None
    deployer: Optional[str] = None
    num_deployments: int = 1

    def to_json(self) -> Dict[str, Any]:
        """Serialize in the hardhat-deploy deployment file layout."""
        return {
            "address": self.address,
            "abi": self.abi,
            "transactionHash": self.transaction_hash,
            "receipt": {
                "from": self.deployer,
                "contractAddress": self.address,
                "blockNumber": self.block_number,
                "transactionHash": self.transaction_hash,
            },
            "args": list(self.args),
            "numDeployments": self.num_deployments,
        }

    @classmethod
    def from_json(cls, name: str, network: str, data: Dict[str, Any]) -> "DeploymentRecord":
        """Parse a hardhat-deploy deployment file."""
        receipt = data.get("receipt") or {}
        return cls(
            name=name,
            address=data["address"],
            network=network,
            args=tuple(data.get("args") or ()),
            abi=data.get("abi") or [],
            transaction_hash=data.get("transactionHash"),
            block_number=receipt.get("blockNumber"),
            deployer=receipt.get("from"),
            num_deployments=data.get("numDeployments", 1),
        )

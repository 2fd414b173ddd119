"""
Deployment Records
Results of a deployment and the persisted record format
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union


@dataclass
class DeploymentResult:
    """What the chain reported for a confirmed contract creation"""

    contract_address: str  # Checksummed
    chain_id: int
    block_number: int  # Inclusion block
    submitted_block: int  # Head block when the transaction was sent
    transaction_hash: str
    gas_used: Optional[int] = None


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T00:00:00.000Z"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass
class DeploymentRecord:
    """Persisted deployment facts (deployment.json)"""

    network: str
    contract_address: str
    deployer: str
    timestamp_utc: str
    chain_id: str  # Decimal string, chain ids can exceed 2**53
    block_number: int

    @classmethod
    def from_result(
        cls,
        network: str,
        deployer: str,
        result: DeploymentResult,
        now: Optional[datetime] = None
    ) -> 'DeploymentRecord':
        return cls(
            network=network,
            contract_address=result.contract_address,
            deployer=deployer,
            timestamp_utc=utc_timestamp(now),
            chain_id=str(result.chain_id),
            block_number=int(result.block_number),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "network": self.network,
            "contractAddress": self.contract_address,
            "deployer": self.deployer,
            "timestampUtc": self.timestamp_utc,
            "chainId": self.chain_id,
            "blockNumber": self.block_number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeploymentRecord':
        return cls(
            network=data["network"],
            contract_address=data["contractAddress"],
            deployer=data["deployer"],
            timestamp_utc=data["timestampUtc"],
            chain_id=str(data["chainId"]),
            block_number=int(data["blockNumber"]),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def load_deployment_record(path: Union[Path, str]) -> DeploymentRecord:
    """
    Read a deployment record written by a previous run

    Args:
        path: Path to deployment.json

    Returns:
        DeploymentRecord

    Raises:
        FileNotFoundError: If the record does not exist
        KeyError: If a required field is missing
    """
    with open(path) as f:
        return DeploymentRecord.from_dict(json.load(f))


@dataclass
class DeploymentOutcome:
    """Everything the success summary needs"""

    record: DeploymentRecord
    result: DeploymentResult
    record_path: Path
    abi_path: Path

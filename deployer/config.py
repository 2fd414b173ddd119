"""
Deployment Configuration
Reads deployment settings from the environment (.env supported)
"""

import math
import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Mapping, Optional

from .exceptions import ConfigurationError
from .networks import get_network_info
from .paths import get_artifact_path, get_output_paths

DEFAULT_NETWORK = "localhost"
DEFAULT_MIN_BALANCE = Decimal("0.01")
DEFAULT_FOLLOW_UP_FILES = ["console/config.json", "agent/config.json"]

CREDENTIAL_ENV = "DEPLOYER_PRIVATE_KEY"


@dataclass
class DeploymentConfig:
    """Settings for one deployment run"""

    network: str
    rpc_url: str
    credential: Optional[str]
    contract_name: str
    tooling_dir: Path
    confirmation_timeout: Optional[float] = None  # None = web3 default
    min_balance: Decimal = DEFAULT_MIN_BALANCE
    follow_up_files: List[str] = field(default_factory=lambda: list(DEFAULT_FOLLOW_UP_FILES))

    @property
    def artifact_path(self) -> Path:
        return get_artifact_path(self.tooling_dir, self.contract_name)

    @property
    def record_path(self) -> Path:
        return get_output_paths(self.tooling_dir, self.contract_name)[0]

    @property
    def abi_path(self) -> Path:
        return get_output_paths(self.tooling_dir, self.contract_name)[1]

    def __repr__(self) -> str:
        # Keep the credential out of logs and tracebacks
        return (
            f"DeploymentConfig(network={self.network!r}, rpc_url={self.rpc_url!r}, "
            f"contract_name={self.contract_name!r}, tooling_dir={str(self.tooling_dir)!r})"
        )


def load_config(env: Optional[Mapping[str, str]] = None) -> DeploymentConfig:
    """
    Build a DeploymentConfig from environment variables

    Args:
        env: Explicit variable mapping (None = process environment; callers load .env)

    Returns:
        DeploymentConfig

    Raises:
        ConfigurationError: If a required setting is missing or malformed
    """
    if env is None:
        env = os.environ

    network = env.get('DEPLOY_NETWORK') or DEFAULT_NETWORK
    network_info = get_network_info(network)

    rpc_url = env.get('RPC_URL') or network_info['default_rpc_url']
    if not rpc_url:
        raise ConfigurationError(
            f"No RPC endpoint configured for network '{network}'",
            remediation="Set RPC_URL in .env, e.g. RPC_URL=https://<provider>/<api-key>",
        )

    contract_name = env.get('CONTRACT_NAME')
    if not contract_name:
        raise ConfigurationError(
            "CONTRACT_NAME is not set",
            remediation=(
                "Set CONTRACT_NAME in .env to the contract's artifact name, "
                "e.g. CONTRACT_NAME=Registry for artifacts/Registry.sol/Registry.json"
            ),
        )

    tooling_dir = Path(env.get('CONTRACTS_DIR') or Path.cwd()).absolute()

    timeout_raw = env.get('CONFIRMATION_TIMEOUT')
    confirmation_timeout = None
    if timeout_raw:
        try:
            confirmation_timeout = float(timeout_raw)
        except ValueError:
            confirmation_timeout = None
        if confirmation_timeout is None or not math.isfinite(confirmation_timeout) or confirmation_timeout <= 0:
            raise ConfigurationError(
                f"CONFIRMATION_TIMEOUT must be a positive number of seconds, got {timeout_raw!r}",
                remediation="Set CONFIRMATION_TIMEOUT in .env, e.g. CONFIRMATION_TIMEOUT=300, or remove it",
            )

    min_balance_raw = env.get('MIN_DEPLOY_BALANCE')
    min_balance = DEFAULT_MIN_BALANCE
    if min_balance_raw:
        try:
            min_balance = Decimal(min_balance_raw)
        except InvalidOperation:
            min_balance = None
        if min_balance is None or not min_balance.is_finite() or min_balance < 0:
            raise ConfigurationError(
                f"MIN_DEPLOY_BALANCE must be a non-negative decimal amount, got {min_balance_raw!r}",
                remediation="Set MIN_DEPLOY_BALANCE in .env, e.g. MIN_DEPLOY_BALANCE=0.01, or remove it",
            )

    follow_up_raw = env.get('FOLLOW_UP_FILES')
    if follow_up_raw:
        follow_up_files = [p.strip() for p in follow_up_raw.split(',') if p.strip()]
    else:
        follow_up_files = list(DEFAULT_FOLLOW_UP_FILES)

    return DeploymentConfig(
        network=network,
        rpc_url=rpc_url,
        credential=env.get(CREDENTIAL_ENV),
        contract_name=contract_name,
        tooling_dir=tooling_dir,
        confirmation_timeout=confirmation_timeout,
        min_balance=min_balance,
        follow_up_files=follow_up_files,
    )

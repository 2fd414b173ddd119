"""
Deployment Pipeline
Signer -> artifact -> balance -> deploy -> persist, strictly in order
"""

from typing import Optional

from web3 import AsyncWeb3
from loguru import logger

from .artifacts import ArtifactPersister, load_build_artifact
from .balance import BalanceGuard
from .config import DeploymentConfig
from .exceptions import SubmissionError
from .executor import CLIENT_ERRORS, DeploymentExecutor
from .networks import get_network_info
from .records import DeploymentOutcome, DeploymentRecord
from .signer import SignerResolver


def create_web3(rpc_url: str) -> AsyncWeb3:
    """Create an AsyncWeb3 client for the RPC endpoint"""
    return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))


class DeploymentPipeline:
    """
    One deployment run

    Every stage either feeds the next or raises; nothing is retried.
    """

    def __init__(self, config: DeploymentConfig, w3=None):
        """
        Initialize Deployment Pipeline

        Args:
            config: Deployment configuration
            w3: AsyncWeb3 instance (None = create from config.rpc_url)
        """
        self.config = config
        self._w3 = w3
        self._owns_w3 = w3 is None

    @property
    def w3(self):
        if self._w3 is None:
            self._w3 = create_web3(self.config.rpc_url)
        return self._w3

    async def run(self) -> DeploymentOutcome:
        """
        Deploy the configured contract and record it

        Returns:
            DeploymentOutcome

        Raises:
            DeploymentError: From whichever stage failed
        """
        try:
            return await self._deploy()
        finally:
            await self.close()

    async def close(self):
        """Close the HTTP session of a client this pipeline created"""
        if self._owns_w3 and self._w3 is not None:
            await self._w3.provider.disconnect()
            self._w3 = None

    async def _deploy(self) -> DeploymentOutcome:
        config = self.config
        logger.info(f"Deploying {config.contract_name} to {config.network}...")

        account = SignerResolver(config.credential).resolve()

        # Fail before touching the network if the build step was skipped
        artifact = load_build_artifact(config.artifact_path)

        await self._check_connection()

        guard = BalanceGuard(self.w3, config.network, config.min_balance)
        await guard.check(account)

        executor = DeploymentExecutor(self.w3, artifact, config.confirmation_timeout)
        result = await executor.deploy(account)

        record = DeploymentRecord.from_result(config.network, account.address, result)

        persister = ArtifactPersister(config.record_path, config.abi_path)
        persister.persist(record, artifact)

        return DeploymentOutcome(
            record=record,
            result=result,
            record_path=persister.record_path,
            abi_path=persister.abi_path,
        )

    async def _check_connection(self):
        """Make sure the RPC endpoint answers before reading state"""
        try:
            connected = await self.w3.is_connected()
            if connected:
                chain_id = await self.w3.eth.chain_id
        except CLIENT_ERRORS as e:
            raise SubmissionError(f"Failed to connect to {self.config.rpc_url}: {e}") from e

        if not connected:
            raise SubmissionError(f"Failed to connect to network at {self.config.rpc_url}")

        logger.info(f"Connected to {self.config.network} ({self.config.rpc_url})")

        expected = get_network_info(self.config.network)["chain_id"]
        if expected is not None and chain_id != expected:
            logger.warning(
                f"⚠ Endpoint reports chain id {chain_id}, expected {expected} for "
                f"'{self.config.network}'; check RPC_URL and DEPLOY_NETWORK"
            )

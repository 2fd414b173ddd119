"""
Failure Reporter
Operator-facing summary, diagnostics and exit status for a deployment run
"""

from typing import List, Optional

from loguru import logger

from .config import DeploymentConfig
from .exceptions import (
    ArtifactNotFoundError,
    ArtifactParseError,
    ConfigurationError,
    ConfirmationTimeout,
    DeploymentError,
    DeploymentRevertedError,
    PersistenceError,
    SubmissionError,
)
from .networks import explorer_address_url, explorer_tx_url, get_network_info
from .records import DeploymentOutcome

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

RULE = "=" * 70


class FailureReporter:
    """
    Wraps a pipeline run and turns its result into output and an exit status
    """

    def __init__(self, config: Optional[DeploymentConfig]):
        """
        Initialize Failure Reporter

        Args:
            config: Deployment configuration (None when loading it failed;
                    only ConfigurationError can be reported then)
        """
        self.config = config

    async def run(self, pipeline) -> int:
        """
        Run the pipeline and report the result

        Args:
            pipeline: Object with an async run() returning DeploymentOutcome

        Returns:
            Process exit status (0 success, 1 failure)
        """
        try:
            outcome = await pipeline.run()
        except Exception as e:
            self.report_failure(e)
            return EXIT_FAILURE

        self.report_success(outcome)
        return EXIT_SUCCESS

    def report_success(self, outcome: DeploymentOutcome):
        """Print the deployment summary and the follow-up checklist"""
        record = outcome.record
        result = outcome.result

        logger.success(RULE)
        logger.success("✅ Deployment complete!")
        logger.success(RULE)
        logger.info(f"  Contract address: {record.contract_address}")
        logger.info(f"  Network:          {record.network}")
        logger.info(f"  Chain ID:         {record.chain_id}")
        logger.info(f"  Deployer:         {record.deployer}")
        logger.info(f"  Block number:     {record.block_number}")
        logger.info(f"  Transaction:      {result.transaction_hash}")
        logger.info(f"  Record:           {outcome.record_path}")
        logger.info(f"  ABI:              {outcome.abi_path}")

        explorer = explorer_address_url(record.network, record.contract_address)
        if explorer:
            logger.info(f"  Explorer:         {explorer}")

        logger.info("")
        logger.info("Next steps:")
        for i, path in enumerate(self.config.follow_up_files, start=1):
            logger.info(f"  [{i}] Update {path} with contract address {record.contract_address}")

    def report_failure(self, error: BaseException):
        """Print a classified diagnostic block for a failed run"""
        category = getattr(error, 'category', type(error).__name__)
        code = getattr(error, 'code', None)

        logger.error(RULE)
        logger.error("❌ Deployment failed")
        logger.error(RULE)

        if isinstance(error, PersistenceError) and error.record is not None:
            # The contract exists on-chain; this output is the only record of it
            logger.error(f"CONTRACT WAS DEPLOYED AT: {error.record.contract_address}")
            logger.error("Save this record manually:")
            for line in error.record.to_json().splitlines():
                logger.error(f"  {line}")

        if not isinstance(error, DeploymentError):
            category = f"UnexpectedError ({type(error).__name__})"
            logger.opt(exception=error).debug("Traceback")

        logger.error(f"  Category: {category}")
        if code is not None:
            logger.error(f"  Code:     {code}")
        logger.error(f"  Message:  {error}")

        hints = self.remediation(error)
        if hints:
            logger.error("")
            logger.error("What to do:")
            for hint in hints:
                logger.error(f"  {hint}")

    def remediation(self, error: BaseException) -> List[str]:
        """
        Operator guidance for an error

        Args:
            error: Exception raised by the pipeline

        Returns:
            List of guidance lines (may be empty)
        """
        if isinstance(error, ConfigurationError):
            return (error.remediation or "").splitlines()

        network = get_network_info(self.config.network)

        if isinstance(error, ArtifactNotFoundError):
            return [
                "Compile the contracts first: npx hardhat compile",
                f"Expected artifact: {self.config.artifact_path}",
                "Check CONTRACT_NAME and CONTRACTS_DIR",
            ]

        if isinstance(error, ArtifactParseError):
            return [
                "The build artifact is corrupt or incomplete",
                "Re-run compilation: npx hardhat clean && npx hardhat compile",
            ]

        if isinstance(error, ConfirmationTimeout):
            hints = [
                "The transaction may still be mined; do NOT redeploy blindly",
            ]
            if error.tx_hash:
                hints.append(f"Check transaction {error.tx_hash}")
                url = explorer_tx_url(self.config.network, error.tx_hash)
                if url:
                    hints.append(f"  {url}")
            hints.append("Once it is confirmed, record its contract address manually")
            return hints

        if isinstance(error, DeploymentRevertedError):
            return [
                "The constructor reverted or ran out of gas; no contract was created",
                f"Inspect transaction {error.tx_hash}",
            ]

        if isinstance(error, SubmissionError):
            message = str(error).lower()
            if 'insufficient funds' in message:
                if network['testnet'] and network['faucet_url']:
                    return [f"Fund the deployer from the faucet: {network['faucet_url']}"]
                return [f"Fund the deployer account with {network['currency']} and re-run"]
            if 'nonce' in message:
                return [
                    "A transaction with the same nonce is pending or already mined",
                    "Wait for pending transactions from the deployer, then re-run",
                ]
            if 'connect' in message:
                return [
                    f"Check that RPC_URL is reachable: {self.config.rpc_url}",
                    "Start the local node (npx hardhat node) for localhost deployments",
                ]
            return ["The node rejected the transaction; check the message above and re-run"]

        if isinstance(error, PersistenceError):
            return [
                f"Fix the output location ({error.path}) and write the record above by hand",
                "Re-running will deploy a second contract",
            ]

        return ["Unexpected error; re-run with LOG_LEVEL=DEBUG for details"]

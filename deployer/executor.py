"""
Deployment Executor
Submits the contract-creation transaction and waits for confirmation
"""

import asyncio
from typing import Dict, Optional

import aiohttp
from web3 import Web3
from web3.exceptions import TimeExhausted, Web3Exception
from loguru import logger

from .artifacts import BuildArtifact
from .exceptions import (
    ConfirmationTimeout,
    DeploymentRevertedError,
    SubmissionError,
    rpc_error_code,
)
from .records import DeploymentResult
from .signer import SigningAccount

# Errors the client raises for node rejections and connectivity problems
CLIENT_ERRORS = (Web3Exception, ValueError, OSError, aiohttp.ClientError, asyncio.TimeoutError)


class DeploymentExecutor:
    """
    Deploys one contract from a build artifact

    One attempt per call; nothing is retried.
    """

    def __init__(self, w3, artifact: BuildArtifact, confirmation_timeout: Optional[float] = None):
        """
        Initialize Deployment Executor

        Args:
            w3: AsyncWeb3 instance
            artifact: Build artifact with ABI and bytecode
            confirmation_timeout: Receipt wait in seconds (None = web3 default)
        """
        self.w3 = w3
        self.artifact = artifact
        self.confirmation_timeout = confirmation_timeout

    async def deploy(self, account: SigningAccount) -> DeploymentResult:
        """
        Deploy the contract

        Args:
            account: Signing account paying for the deployment

        Returns:
            DeploymentResult for the confirmed contract

        Raises:
            SubmissionError: If the transaction is rejected before inclusion
            DeploymentRevertedError: If the transaction was mined but reverted
            ConfirmationTimeout: If inclusion was not observed
        """
        try:
            chain_id = await self.w3.eth.chain_id
            submitted_block = await self.w3.eth.block_number
            transaction = await self._build_transaction(account, chain_id)

            logger.info("Signing transaction...")
            signed_tx = account.sign_transaction(transaction)

            logger.info("Sending deployment transaction...")
            tx_hash = await self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

        except CLIENT_ERRORS as e:
            raise SubmissionError(
                f"Deployment transaction rejected: {e}",
                code=rpc_error_code(e),
            ) from e

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash_hex}")

        receipt = await self._wait_for_receipt(tx_hash, tx_hash_hex)

        if receipt['status'] != 1 or not receipt.get('contractAddress'):
            raise DeploymentRevertedError(
                f"Deployment transaction {tx_hash_hex} was mined in block "
                f"{receipt['blockNumber']} but did not create a contract",
                tx_hash=tx_hash_hex,
            )

        contract_address = Web3.to_checksum_address(receipt['contractAddress'])

        logger.success(f"{self.artifact.contract_name} deployed to: {contract_address}")
        logger.info(f"Gas used: {receipt.get('gasUsed')}")

        return DeploymentResult(
            contract_address=contract_address,
            chain_id=chain_id,
            block_number=receipt['blockNumber'],
            submitted_block=submitted_block,
            transaction_hash=tx_hash_hex,
            gas_used=receipt.get('gasUsed'),
        )

    async def _build_transaction(self, account: SigningAccount, chain_id: int) -> Dict:
        """Build the unsigned contract-creation transaction (gas and fees filled by web3)"""
        logger.info("Building deployment transaction...")

        contract = self.w3.eth.contract(abi=self.artifact.abi, bytecode=self.artifact.bytecode)
        nonce = await self.w3.eth.get_transaction_count(account.address, 'pending')

        transaction = await contract.constructor().build_transaction({
            'from': account.address,
            'nonce': nonce,
            'chainId': chain_id,
        })

        logger.info(f"Gas limit: {transaction.get('gas')}")
        return transaction

    async def _wait_for_receipt(self, tx_hash, tx_hash_hex: str):
        """Block until the transaction is included"""
        logger.info("Waiting for confirmation...")

        kwargs = {}
        if self.confirmation_timeout is not None:
            kwargs['timeout'] = self.confirmation_timeout

        try:
            return await self.w3.eth.wait_for_transaction_receipt(tx_hash, **kwargs)
        except TimeExhausted as e:
            raise ConfirmationTimeout(
                f"Transaction {tx_hash_hex} was not included in time: {e}",
                tx_hash=tx_hash_hex,
            ) from e
        except CLIENT_ERRORS as e:
            raise ConfirmationTimeout(
                f"Lost contact with the node while waiting for {tx_hash_hex}: {e}",
                tx_hash=tx_hash_hex,
                code=rpc_error_code(e),
            ) from e

"""
Signer Resolver
Loads the single funded account that signs the deployment
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger

from .config import CREDENTIAL_ENV
from .exceptions import ConfigurationError

_KEY_PATTERN = re.compile(r'^(0x)?[0-9a-fA-F]{64}$')


@dataclass
class SigningAccount:
    """An address plus the local key able to sign for it"""

    address: str
    account: LocalAccount

    def sign_transaction(self, transaction: Dict):
        return self.account.sign_transaction(transaction)

    def __repr__(self) -> str:
        return f"SigningAccount(address={self.address!r})"


def credential_remediation(env_file: Optional[Path] = None) -> str:
    """Operator guidance for configuring the signing credential"""
    env_file = env_file or Path.cwd() / ".env"
    return "\n".join([
        f"Add the deployer's private key to {env_file}:",
        f"  {CREDENTIAL_ENV}=0x<64 hex characters>",
        "Format: 32-byte hex string, the 0x prefix is optional",
        f"Example: {CREDENTIAL_ENV}=0x" + "0123456789abcdef" * 4,
        "Never commit this file; use a dedicated deployment account",
    ])


class SignerResolver:
    """
    Resolves exactly one signing account from the configured credential
    """

    def __init__(self, credential: Optional[str], env_file: Optional[Path] = None):
        """
        Initialize Signer Resolver

        Args:
            credential: Hex-encoded private key (None if not configured)
            env_file: .env location quoted in remediation text
        """
        self.credential = credential
        self.env_file = env_file

    def resolve(self) -> SigningAccount:
        """
        Load the signing account

        Returns:
            SigningAccount

        Raises:
            ConfigurationError: If no credential is configured or it is malformed
        """
        key = (self.credential or '').strip()

        if not key:
            raise ConfigurationError(
                f"No signing account available: {CREDENTIAL_ENV} is not set",
                remediation=credential_remediation(self.env_file),
            )

        if not _KEY_PATTERN.match(key):
            raise ConfigurationError(
                f"No signing account available: {CREDENTIAL_ENV} is not a valid private key",
                remediation=credential_remediation(self.env_file),
            )

        if not key.startswith('0x'):
            key = '0x' + key

        try:
            account = Account.from_key(key)
        except ValueError:
            # Well-formed hex outside the secp256k1 range
            raise ConfigurationError(
                f"No signing account available: {CREDENTIAL_ENV} is out of range for a secp256k1 key",
                remediation=credential_remediation(self.env_file),
            ) from None

        logger.info(f"Deploying with account: {account.address}")
        return SigningAccount(address=account.address, account=account)

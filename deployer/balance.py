"""
Balance Guard
Advisory check of the deployer's native balance before submission
"""

from dataclasses import dataclass
from decimal import Decimal

from web3 import Web3
from loguru import logger

from .networks import get_network_info
from .signer import SigningAccount

SUFFICIENT = 'sufficient'
LOW = 'low'
ZERO = 'zero'


@dataclass
class BalanceReading:
    """Native balance of the signing account at read time"""

    address: str
    wei: int
    amount: Decimal  # in ether units
    symbol: str
    status: str

    @property
    def is_low(self) -> bool:
        return self.status != SUFFICIENT


class BalanceGuard:
    """
    Reads the signer's balance and warns when it looks too small to deploy

    Never blocks: an unfunded account fails naturally at submission.
    """

    def __init__(self, w3, network: str, min_balance: Decimal = Decimal("0.01")):
        """
        Initialize Balance Guard

        Args:
            w3: AsyncWeb3 instance
            network: Network name (selects faucet vs funding guidance)
            min_balance: Warning threshold in ether units
        """
        self.w3 = w3
        self.network_info = get_network_info(network)
        self.min_balance = Decimal(min_balance)

    async def check(self, account: SigningAccount) -> BalanceReading:
        """
        Read and classify the account balance

        Args:
            account: Signing account

        Returns:
            BalanceReading
        """
        balance_wei = await self.w3.eth.get_balance(account.address)
        amount = Decimal(Web3.from_wei(balance_wei, 'ether'))
        symbol = self.network_info['currency']

        if balance_wei == 0:
            status = ZERO
        elif amount < self.min_balance:
            status = LOW
        else:
            status = SUFFICIENT

        reading = BalanceReading(
            address=account.address,
            wei=balance_wei,
            amount=amount,
            symbol=symbol,
            status=status,
        )

        logger.info(f"Account balance: {amount} {symbol}")

        if reading.is_low:
            self._warn(reading)

        return reading

    def _warn(self, reading: BalanceReading):
        """Emit funding guidance for a low balance"""
        logger.warning(
            f"⚠ Balance {reading.amount} {reading.symbol} is below "
            f"{self.min_balance} {reading.symbol}; the deployment may fail"
        )

        if self.network_info['testnet']:
            faucet = self.network_info['faucet_url']
            if faucet:
                logger.warning(f"  Get test {reading.symbol} from the faucet: {faucet}")
            else:
                logger.warning("  Fund the account from one of the node's prefunded accounts")
        else:
            logger.warning(
                f"  Transfer {reading.symbol} to {reading.address} from an exchange or "
                f"another wallet before deploying"
            )

        logger.warning("  Continuing; the network will reject the transaction if funds are short")

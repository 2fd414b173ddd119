"""
Shared fixtures: an in-memory chain standing in for AsyncWeb3
"""

import json
from pathlib import Path

import pytest
from web3 import Web3
from loguru import logger

from deployer.config import DeploymentConfig

# Hardhat's first prefunded account
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

TEST_ABI = [{"type": "function", "name": "foo"}]
TEST_BYTECODE = "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe"


class FakeConstructor:
    """Stands in for AsyncContractConstructor"""

    def __init__(self, eth, bytecode):
        self.eth = eth
        self.bytecode = bytecode

    async def build_transaction(self, transaction):
        self.eth.calls.append('build_transaction')
        if self.eth.build_error:
            raise self.eth.build_error
        return dict(
            transaction,
            data=self.bytecode,
            value=0,
            gas=150000,
            gasPrice=Web3.to_wei(1, 'gwei'),
        )


class FakeContractFactory:
    def __init__(self, eth, abi, bytecode):
        self.eth = eth
        self.abi = abi
        self.bytecode = bytecode

    def constructor(self):
        return FakeConstructor(self.eth, self.bytecode)


class FakeEth:
    """Minimal AsyncEth: one account, instant mining"""

    def __init__(self, chain_id=31337, balance=Web3.to_wei(10, 'ether'), head=100):
        self._chain_id = chain_id
        self.balance = balance
        self.head = head
        self.nonce = 0
        self.receipt_status = 1
        self.build_error = None
        self.send_error = None
        self.wait_error = None
        self.code = {}
        self.calls = []
        self.sent = []
        self.wait_kwargs = None

    @property
    async def chain_id(self):
        return self._chain_id

    @property
    async def block_number(self):
        return self.head

    async def get_balance(self, address):
        self.calls.append('get_balance')
        return self.balance

    async def get_transaction_count(self, address, block_identifier=None):
        return self.nonce

    def contract(self, abi=None, bytecode=None, address=None):
        return FakeContractFactory(self, abi, bytecode)

    async def send_raw_transaction(self, raw_transaction):
        self.calls.append('send_raw_transaction')
        if self.send_error:
            raise self.send_error
        self.sent.append(raw_transaction)
        self.nonce += 1
        return Web3.keccak(raw_transaction)

    async def wait_for_transaction_receipt(self, tx_hash, **kwargs):
        self.calls.append('wait_for_transaction_receipt')
        self.wait_kwargs = kwargs
        if self.wait_error:
            raise self.wait_error

        self.head += 2
        address = Web3.to_checksum_address('0x' + Web3.to_hex(Web3.keccak(tx_hash))[-40:])
        if self.receipt_status == 1:
            self.code[address] = b'\x60\x80'

        return {
            'status': self.receipt_status,
            'contractAddress': address.lower() if self.receipt_status == 1 else None,
            'blockNumber': self.head,
            'gasUsed': 123456,
            'transactionHash': tx_hash,
        }

    async def get_code(self, address):
        return self.code.get(address, b'')


class FakeProvider:
    """Records whether the HTTP session was closed"""

    def __init__(self):
        self.disconnected = False

    async def disconnect(self):
        self.disconnected = True


class FakeWeb3:
    def __init__(self, eth=None, connected=True):
        self.eth = eth or FakeEth()
        self.connected = connected
        self.provider = FakeProvider()

    async def is_connected(self):
        return self.connected


@pytest.fixture
def fake_w3():
    """Connected in-memory chain"""
    return FakeWeb3()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project root with contracts/ (tooling) and shared/ directories"""
    (tmp_path / "contracts").mkdir()
    (tmp_path / "shared").mkdir()
    return tmp_path


@pytest.fixture
def artifact_file(project_dir: Path) -> Path:
    """Compiled artifact for a contract named Registry"""
    artifact_dir = project_dir / "contracts" / "artifacts" / "Registry.sol"
    artifact_dir.mkdir(parents=True)
    path = artifact_dir / "Registry.json"
    with open(path, 'w') as f:
        json.dump({
            "contractName": "Registry",
            "abi": TEST_ABI,
            "bytecode": TEST_BYTECODE,
        }, f)
    return path


@pytest.fixture
def config(project_dir: Path) -> DeploymentConfig:
    """Localhost deployment of Registry"""
    return DeploymentConfig(
        network="localhost",
        rpc_url="http://127.0.0.1:8545",
        credential=TEST_PRIVATE_KEY,
        contract_name="Registry",
        tooling_dir=project_dir / "contracts",
    )


@pytest.fixture
def log_messages():
    """Capture loguru output as (level, message) pairs"""
    messages = []
    handler_id = logger.add(
        lambda msg: messages.append((msg.record['level'].name, msg.record['message'])),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


def logged(messages, level=None) -> str:
    """Join captured messages (optionally of one level) into one string"""
    return "\n".join(m for lvl, m in messages if level is None or lvl == level)

"""
Network Metadata
Chain ids, currency symbols and funding pointers for known networks
"""

from typing import Any, Dict, Optional

# Names follow hardhat network names
NETWORK_CONFIG = {
    "localhost": {
        "chain_id": 31337,
        "currency": "ETH",
        "testnet": True,
        "default_rpc_url": "http://127.0.0.1:8545",
        "block_explorer_url": None,
        "faucet_url": None,
    },
    "hardhat": {
        "chain_id": 31337,
        "currency": "ETH",
        "testnet": True,
        "default_rpc_url": "http://127.0.0.1:8545",
        "block_explorer_url": None,
        "faucet_url": None,
    },
    "mainnet": {
        "chain_id": 1,
        "currency": "ETH",
        "testnet": False,
        "default_rpc_url": None,
        "block_explorer_url": "https://etherscan.io",
        "faucet_url": None,
    },
    "sepolia": {
        "chain_id": 11155111,
        "currency": "ETH",
        "testnet": True,
        "default_rpc_url": "https://rpc.sepolia.org",
        "block_explorer_url": "https://sepolia.etherscan.io",
        "faucet_url": "https://sepoliafaucet.com",
    },
    "polygon": {
        "chain_id": 137,
        "currency": "MATIC",
        "testnet": False,
        "default_rpc_url": "https://polygon-rpc.com",
        "block_explorer_url": "https://polygonscan.com",
        "faucet_url": None,
    },
    "amoy": {
        "chain_id": 80002,
        "currency": "MATIC",
        "testnet": True,
        "default_rpc_url": "https://rpc-amoy.polygon.technology",
        "block_explorer_url": "https://amoy.polygonscan.com",
        "faucet_url": "https://faucet.polygon.technology",
    },
}

# Unknown networks are treated as funded-by-purchase chains
_UNKNOWN_NETWORK = {
    "chain_id": None,
    "currency": "ETH",
    "testnet": False,
    "default_rpc_url": None,
    "block_explorer_url": None,
    "faucet_url": None,
}


def get_network_info(network: str) -> Dict[str, Any]:
    """
    Get metadata for a network name

    Args:
        network: Network name (case-insensitive)

    Returns:
        Copy of the network's metadata, generic defaults for unknown names
    """
    info = NETWORK_CONFIG.get(network.lower(), _UNKNOWN_NETWORK)
    return dict(info, name=network)


def explorer_address_url(network: str, address: str) -> Optional[str]:
    """Block explorer link for an address, None when the network has no explorer"""
    base = get_network_info(network)["block_explorer_url"]
    return f"{base}/address/{address}" if base else None


def explorer_tx_url(network: str, tx_hash: str) -> Optional[str]:
    """Block explorer link for a transaction"""
    base = get_network_info(network)["block_explorer_url"]
    return f"{base}/tx/{tx_hash}" if base else None

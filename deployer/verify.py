"""
Deployment Verification
Checks that a recorded deployment is live and its outputs are consistent
"""

import json
from pathlib import Path
from typing import List, Tuple, Union

from web3 import Web3
from loguru import logger

from .executor import CLIENT_ERRORS
from .records import load_deployment_record


async def verify_deployment(
    w3,
    record_path: Union[Path, str],
    abi_path: Union[Path, str]
) -> List[Tuple[str, bool]]:
    """
    Verify a deployment record against the chain

    Args:
        w3: AsyncWeb3 instance connected to the recorded network
        record_path: Path to deployment.json
        abi_path: Path to <Name>.abi.json

    Returns:
        List of (check name, passed) in the order they ran
    """
    results = []

    logger.info("Checking deployment record...")
    try:
        record = load_deployment_record(record_path)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.error(f"  ✗ Cannot read {record_path}: {e}")
        results.append(("Deployment record", False))
        return results

    valid_address = Web3.is_checksum_address(record.contract_address)
    if valid_address:
        logger.success(f"  ✓ {record.contract_address} on {record.network}")
    else:
        logger.error(f"  ✗ Invalid contract address: {record.contract_address}")
    results.append(("Deployment record", valid_address))

    logger.info("Checking ABI document...")
    try:
        with open(abi_path) as f:
            abi = json.load(f)
        abi_ok = isinstance(abi, list) and len(abi) > 0
    except (OSError, ValueError) as e:
        logger.error(f"  ✗ Cannot read {abi_path}: {e}")
        abi_ok = False
    else:
        if abi_ok:
            logger.success(f"  ✓ ABI loaded ({len(abi)} entries)")
        else:
            logger.error(f"  ✗ ABI at {abi_path} is empty or not a list")
    results.append(("ABI document", abi_ok))

    logger.info("Checking chain id...")
    try:
        chain_id = await w3.eth.chain_id
    except CLIENT_ERRORS as e:
        logger.error(f"  ✗ Cannot read chain ID: {e}")
        results.append(("Chain ID", False))
        results.append(("Contract code", False))
        return results

    chain_ok = str(chain_id) == record.chain_id
    if chain_ok:
        logger.success(f"  ✓ Chain ID {chain_id}")
    else:
        logger.error(f"  ✗ Endpoint chain ID {chain_id} != recorded {record.chain_id}")
    results.append(("Chain ID", chain_ok))

    logger.info("Checking contract code...")
    if not valid_address or not chain_ok:
        logger.warning("  Skipped: record does not match this endpoint")
        results.append(("Contract code", False))
        return results

    try:
        code = await w3.eth.get_code(record.contract_address)
    except CLIENT_ERRORS as e:
        logger.error(f"  ✗ Cannot read code at {record.contract_address}: {e}")
        results.append(("Contract code", False))
        return results

    code_ok = len(code) > 0
    if code_ok:
        logger.success(f"  ✓ Contract exists ({len(code)} bytes)")
    else:
        logger.error(f"  ✗ No contract at {record.contract_address}")
    results.append(("Contract code", code_ok))

    return results

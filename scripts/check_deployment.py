"""
Deployment Check Script
Verifies the recorded contract is live on the configured network
"""

import asyncio
import sys
from loguru import logger
from dotenv import load_dotenv

from deployer.config import load_config
from deployer.exceptions import ConfigurationError
from deployer.log import configure_logging
from deployer.pipeline import create_web3
from deployer.verify import verify_deployment

load_dotenv()


async def main() -> int:
    """Run all deployment checks"""
    logger.info("=" * 70)
    logger.info("Deployment Check")
    logger.info("=" * 70)

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        for line in (e.remediation or "").splitlines():
            logger.info(f"  {line}")
        return 1

    w3 = create_web3(config.rpc_url)
    try:
        if not await w3.is_connected():
            logger.error(f"Cannot connect to {config.rpc_url}")
            return 1

        results = await verify_deployment(w3, config.record_path, config.abi_path)
    finally:
        await w3.provider.disconnect()

    # Summary
    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)
    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    if passed == len(results):
        logger.success("✅ Deployment verified")
        return 0

    logger.error("❌ Deployment check failed - fix issues above")
    return 1


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(main()))

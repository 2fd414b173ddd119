"""
Contract Deployment
Deploys the configured contract and records its address and ABI

Usage: python deploy.py   (settings come from .env, see .env.example)
"""

import asyncio
import sys
from loguru import logger
from dotenv import load_dotenv

from deployer import DeploymentPipeline, FailureReporter, load_config
from deployer.exceptions import ConfigurationError
from deployer.log import configure_logging

load_dotenv()


async def main() -> int:
    """Run one deployment, return the process exit status"""
    try:
        config = load_config()
    except ConfigurationError as e:
        FailureReporter(None).report_failure(e)
        return 1

    logger.info("=" * 70)
    logger.info(f"Contract Deployment: {config.contract_name} -> {config.network}")
    logger.info("=" * 70)

    reporter = FailureReporter(config)
    return await reporter.run(DeploymentPipeline(config))


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(main()))

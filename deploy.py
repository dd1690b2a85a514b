"""
Contract Deployment
Runs the tagged deploy tasks against the configured network

Usage:
    NETWORK=sepolia DEPLOY_TAGS=basicNft python deploy.py
"""

import sys
import asyncio
from loguru import logger

from deployments.environment import create_environment
from deployments.runner import run_deploy_tasks
from utils.logging_setup import configure_logging


async def deploy_all():
    """Deploy every task matching DEPLOY_TAGS"""
    env = create_environment()
    return await run_deploy_tasks(env)


def main():
    """Entry point, exits 0 on success and 1 on any failure"""
    configure_logging("deploy")

    logger.info("=" * 70)
    logger.info("NFT Marketplace Contract Deployment")
    logger.info("=" * 70)

    try:
        asyncio.run(deploy_all())
    except Exception as e:
        logger.opt(exception=e).error(f"Deployment failed: {e}")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()

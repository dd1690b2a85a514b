"""
NftMarketplace Deployment
Deploys the marketplace contract and verifies it on live networks
"""

import os

from utils.verify import should_verify

TAGS = ['all', 'nftMarketplace']


async def deploy(env):
    """Deploy NftMarketplace"""
    deployments = env.deployments
    deployer = env.get_named_accounts()['deployer']

    deployments.log("__________________")
    args = []
    nft_marketplace = await deployments.deploy(
        "NftMarketplace",
        from_=deployer,
        args=args,
        log=True,
        wait_confirmations=env.network.confirmations
    )

    if should_verify(env.network, os.getenv('ETHERSCAN_API_KEY')):
        deployments.log("Verifying...")
        await env.verifier.verify(nft_marketplace.name, nft_marketplace.address, args)
    deployments.log("__________________")

    return nft_marketplace

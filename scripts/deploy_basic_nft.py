"""
BasicNft Deployment
Deploys the BasicNft token contract and verifies it on live networks
"""

import os

from utils.verify import should_verify

TAGS = ['all', 'basicNft']


async def deploy(env):
    """Deploy BasicNft"""
    deployments = env.deployments
    deployer = env.get_named_accounts()['deployer']

    deployments.log("__________________")
    args = []
    basic_nft = await deployments.deploy(
        "BasicNft",
        from_=deployer,
        args=args,
        log=True,
        wait_confirmations=env.network.confirmations
    )

    if should_verify(env.network, os.getenv('ETHERSCAN_API_KEY')):
        deployments.log("Verifying...")
        await env.verifier.verify(basic_nft.name, basic_nft.address, args)
    deployments.log("__________________")

    return basic_nft

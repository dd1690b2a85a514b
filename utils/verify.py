"""
Contract Verification
Submits contract source to an Etherscan-compatible explorer API
"""

import json
import asyncio
from typing import Dict, Optional, Sequence
import aiohttp
from eth_abi import encode
from eth_utils.abi import collapse_if_tuple
from loguru import logger

from .exceptions import ConfigurationError, VerificationError


def should_verify(network, api_key: Optional[str]) -> bool:
    """Verification only runs on live networks with an explorer API key"""
    return not network.is_development and bool(api_key)


def encode_constructor_args(abi: list, args: Sequence) -> str:
    """
    ABI-encode constructor arguments as hex (no 0x prefix)

    Args:
        abi: Contract ABI
        args: Constructor arguments

    Returns:
        Hex string, empty when the constructor takes no arguments
    """
    constructor = next((entry for entry in abi if entry.get('type') == 'constructor'), None)
    inputs = constructor.get('inputs', []) if constructor else []

    if len(inputs) != len(args):
        raise VerificationError(
            f"Constructor expects {len(inputs)} arguments, got {len(args)}"
        )

    if not inputs:
        return ''

    types = [collapse_if_tuple(item) for item in inputs]
    return encode(types, list(args)).hex()


class Verifier:
    """
    Etherscan-style source verification

    Flow:
    1. verifysourcecode with the solc standard JSON input -> guid
    2. checkverifystatus until Pass / Fail
    """

    ALREADY_VERIFIED = 'already verified'
    PENDING = 'pending in queue'

    def __init__(
        self,
        network,
        contract_manager,
        api_key: Optional[str],
        poll_interval: float = 5.0,
        max_polls: int = 30
    ):
        """
        Initialize Verifier

        Args:
            network: NetworkContext (provides chain id and explorer API URL)
            contract_manager: ContractManager for artifacts and build info
            api_key: Explorer API key
            poll_interval: Seconds between status checks
            max_polls: Status checks before giving up
        """
        self.network = network
        self.contract_manager = contract_manager
        self.api_key = api_key
        self.poll_interval = poll_interval
        self.max_polls = max_polls

    async def verify(self, contract_name: str, contract_address: str, args: Sequence = ()) -> bool:
        """
        Verify a deployed contract

        Args:
            contract_name: Contract artifact name
            contract_address: Deployed address
            args: Constructor arguments used for the deployment

        Returns:
            True when verified now, False when it was already verified

        Raises:
            VerificationError: If the explorer rejects the source
        """
        if not self.api_key:
            raise ConfigurationError("ETHERSCAN_API_KEY not set")
        if not self.network.explorer_api_url:
            raise ConfigurationError(f"No explorer API configured for {self.network.name}")

        artifact = self.contract_manager.load_artifact(contract_name)
        build_info = self.contract_manager.load_build_info(contract_name)

        payload = {
            'apikey': self.api_key,
            'module': 'contract',
            'action': 'verifysourcecode',
            'contractaddress': contract_address,
            'sourceCode': json.dumps(build_info['input']),
            'codeformat': 'solidity-standard-json-input',
            'contractname': f"{artifact['sourceName']}:{artifact['contractName']}",
            'compilerversion': f"v{build_info['solcLongVersion']}",
            'constructorArguements': encode_constructor_args(artifact['abi'], args),
        }

        logger.info(f"Submitting {contract_name} at {contract_address} for verification")

        async with aiohttp.ClientSession() as session:
            response = await self._request(session, 'POST', payload)

            if response.get('status') != '1':
                return self._handle_failure(contract_address, response.get('result', ''))

            guid = response['result']
            logger.debug(f"Verification guid: {guid}")

            return await self._wait_for_result(session, contract_address, guid)

    async def _wait_for_result(self, session, contract_address: str, guid: str) -> bool:
        params = {
            'apikey': self.api_key,
            'module': 'contract',
            'action': 'checkverifystatus',
            'guid': guid,
        }

        for _ in range(self.max_polls):
            await asyncio.sleep(self.poll_interval)

            response = await self._request(session, 'GET', params)
            result = str(response.get('result', ''))

            if self.PENDING in result.lower():
                continue

            if response.get('status') == '1':
                logger.success(f"Contract verified: {contract_address}")
                return True

            return self._handle_failure(contract_address, result)

        raise VerificationError(f"Verification of {contract_address} still pending after {self.max_polls} checks")

    def _handle_failure(self, contract_address: str, result: str) -> bool:
        if self.ALREADY_VERIFIED in str(result).lower():
            logger.info(f"Already verified: {contract_address}")
            return False

        raise VerificationError(f"Verification of {contract_address} failed: {result}")

    async def _request(self, session: aiohttp.ClientSession, method: str, params: Dict) -> Dict:
        """Send one explorer API request"""
        query = {'chainid': self.network.chain_id}

        if method == 'POST':
            request = session.post(self.network.explorer_api_url, params=query, data=params)
        else:
            request = session.get(self.network.explorer_api_url, params={**query, **params})

        async with request as resp:
            resp.raise_for_status()
            return await resp.json(content_type=None)

"""
Resolution of the WETH9 address an ICO is deployed against.

Development networks get a fresh WETH9, test networks get a mock token so that
no real funds are needed, and every other network uses a WETH9 that has
already been published for its chain id.
"""
from enum import Enum
from typing import AbstractSet, NamedTuple, Optional

from ape.contracts.base import ContractInstance
from ape.utils import ZERO_ADDRESS
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from deployment.published import get_published_address
from deployment.utils import get_contract_container


class UnresolvedDependencyAddress(ValueError):
    """Raised when no WETH address can be determined for the active network."""

    def __init__(self, network: str, chain_id: Optional[int] = None):
        self.network = network
        self.chain_id = chain_id
        message = f"unable to locate WETH9 contract address for network {network}"
        if chain_id is not None:
            message += f" (chain id {chain_id})"
        super().__init__(message)


class WethStrategy(Enum):
    DEPLOY = "deploy"
    DEPLOY_MOCK = "deploy-mock"
    LOOKUP = "lookup"


class WethResolution(NamedTuple):
    strategy: WethStrategy
    address: ChecksumAddress
    instance: Optional[ContractInstance]


def select_strategy(
    network: str, development_networks: AbstractSet[str], test_networks: AbstractSet[str]
) -> WethStrategy:
    if network in development_networks:
        return WethStrategy.DEPLOY
    if network in test_networks:
        return WethStrategy.DEPLOY_MOCK
    return WethStrategy.LOOKUP


def _lookup_address(chain_id: int, config) -> Optional[ChecksumAddress]:
    override = config.overrides.get(chain_id)
    if override:
        print(f"(i) Using configured WETH9 override for chain id {chain_id}")
        return override
    return get_published_address(chain_id, filepath=config.published_filepath)


def _validate_address(address, network: str, chain_id: int) -> ChecksumAddress:
    if not address or address == ZERO_ADDRESS:
        raise UnresolvedDependencyAddress(network=network, chain_id=chain_id)
    return to_checksum_address(address)


def resolve_weth_address(deployer, network: str, chain_id: int, config) -> WethResolution:
    """
    Determines the WETH address for network.

    Deploy strategies go through deployer.deploy and use exactly the address
    of the deployed instance. Lookups never deploy anything.
    """
    strategy = select_strategy(
        network=network,
        development_networks=config.development_networks,
        test_networks=config.test_networks,
    )
    print(
        f"(i) WETH resolution strategy for network '{network}' "
        f"(chain id {chain_id}): {strategy.value}"
    )

    instance = None
    if strategy is WethStrategy.DEPLOY:
        instance = deployer.deploy(get_contract_container(config.weth_contract))
        address = instance.address
    elif strategy is WethStrategy.DEPLOY_MOCK:
        instance = deployer.deploy(get_contract_container(config.mock_weth_contract))
        address = instance.address
    else:
        address = _lookup_address(chain_id, config)

    address = _validate_address(address, network=network, chain_id=chain_id)
    print(f"(i) Resolved WETH9 address {address}")
    return WethResolution(strategy=strategy, address=address, instance=instance)

from ape import networks
from ape.api.networks import LOCAL_NETWORK_NAME

from deployment.constants import DEVELOPMENT, TEST, TEST_PROVIDER_NAME


def _active_provider(provider=None):
    return provider if provider is not None else networks.provider


def is_local_network(provider=None) -> bool:
    """Returns True if the active (or given) provider is connected to a local chain."""
    provider = _active_provider(provider)
    return provider.network.name == LOCAL_NETWORK_NAME


def get_network_name(provider=None) -> str:
    """
    Returns the network identifier used to pick a WETH resolution strategy.

    Local chains are reported as 'test' when served by the in-process test
    provider and 'development' otherwise; live networks keep their ape name.
    """
    provider = _active_provider(provider)
    if is_local_network(provider):
        if provider.name == TEST_PROVIDER_NAME:
            return TEST
        return DEVELOPMENT
    return provider.network.name


def get_chain_id(provider=None) -> int:
    provider = _active_provider(provider)
    return int(provider.chain_id)

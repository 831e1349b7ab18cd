from typing import List

from ape.contracts.base import ContractInstance

from deployment.utils import get_contract_container
from deployment.weth import resolve_weth_address


def deploy_scam_ico(deployer, network: str, chain_id: int, config) -> List[ContractInstance]:
    """
    Resolves the WETH9 address for network and deploys the ICO against it.

    Returns the contracts deployed by this run: a freshly deployed token,
    when there is one, followed by the ICO.
    """
    resolution = resolve_weth_address(
        deployer=deployer, network=network, chain_id=chain_id, config=config
    )

    ico = deployer.deploy(get_contract_container(config.ico_contract), resolution.address)

    deployments = [ico]
    if resolution.instance is not None:
        deployments.insert(0, resolution.instance)
    return deployments

from decimal import Decimal
from pathlib import Path
from typing import List, NamedTuple, Optional

from ape import accounts, networks
from ape.contracts.base import ContractInstance
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from web3 import Web3

from deployment.constants import ICO_CONTRACT, SCM_CONTRACT, TEST, WETH_CONTRACT
from deployment.networks import get_network_name
from deployment.registry import get_registry_address
from deployment.utils import get_contract_container


class IcoContext(NamedTuple):
    """A deployed ICO together with the token it accepts and the token it sells."""

    ico: ContractInstance
    weth: ContractInstance
    scm: ContractInstance


class AccountBalances(NamedTuple):
    address: ChecksumAddress
    eth: Decimal
    weth: Decimal
    scm: Decimal


def find_ico_address(
    registry_filepath: Path, chain_id: int, contract_name: str = ICO_CONTRACT
) -> ChecksumAddress:
    address = get_registry_address(
        filepath=registry_filepath, chain_id=chain_id, contract_name=contract_name
    )
    if address is None:
        raise ValueError(
            f"Contract '{contract_name}' not found in registry, '{registry_filepath}', "
            f"for chain {chain_id}"
        )
    return address


def load_ico_context(
    ico_address: ChecksumAddress,
    ico_contract: str = ICO_CONTRACT,
    weth_contract: str = WETH_CONTRACT,
    scm_contract: str = SCM_CONTRACT,
) -> IcoContext:
    """Loads the ICO at ico_address and the token contracts it references."""
    ico = get_contract_container(ico_contract).at(ico_address)
    weth = get_contract_container(weth_contract).at(ico.weth())
    scm = get_contract_container(scm_contract).at(ico.scm())
    return IcoContext(ico=ico, weth=weth, scm=scm)


def _to_ether(value: int) -> Decimal:
    return Decimal(Web3.from_wei(int(value), "ether"))


def get_balances(context: IcoContext, address: ChecksumAddress, provider=None) -> AccountBalances:
    provider = provider if provider is not None else networks.provider
    return AccountBalances(
        address=address,
        eth=_to_ether(provider.get_balance(address)),
        weth=_to_ether(context.weth.balanceOf(address)),
        scm=_to_ether(context.scm.balanceOf(address)),
    )


def get_all_balances(
    context: IcoContext, addresses: List[ChecksumAddress], provider=None
) -> List[AccountBalances]:
    return [get_balances(context, address, provider=provider) for address in addresses]


def format_balances(balances: AccountBalances, precision: Optional[int] = 4) -> str:
    def fmt(value: Decimal) -> str:
        return f"{value:.{precision}f}" if precision is not None else str(value)

    return (
        f"{balances.address}   {fmt(balances.eth)} ETH | "
        f"{fmt(balances.weth)} WETH | {fmt(balances.scm)} SCM"
    )


def default_accounts(count: int, provider=None) -> List[ChecksumAddress]:
    """
    Returns the addresses of the first count accounts of a local chain.

    The in-process test chain uses ape's generated test accounts; any other
    local node reports its own unlocked accounts.
    """
    provider = provider if provider is not None else networks.provider
    if get_network_name(provider) == TEST:
        test_accounts = accounts.test_accounts
        return [test_accounts[index].address for index in range(min(count, len(test_accounts)))]
    return [to_checksum_address(address) for address in provider.web3.eth.accounts[:count]]

from decimal import Decimal
from types import SimpleNamespace

import pytest
from web3 import Web3

from deployment.ico import (
    default_accounts,
    find_ico_address,
    format_balances,
    get_all_balances,
    load_ico_context,
)
from deployment.registry import RegistryEntry, write_registry
from deployment.utils import validate_config

from tests.conftest import FakeContainer, make_address

WETH_ADDRESS = make_address(0x11)
SCM_ADDRESS = make_address(0x22)
ICO_ADDRESS = make_address(0x33)


@pytest.fixture
def ico_containers(containers):
    class IcoContainer(FakeContainer):
        def at(self, address):
            instance = super().at(address)
            instance.weth = lambda: WETH_ADDRESS
            instance.scm = lambda: SCM_ADDRESS
            return instance

    class TokenContainer(FakeContainer):
        def __init__(self, name, balances):
            super().__init__(name)
            self.balances = balances

        def at(self, address):
            instance = super().at(address)
            instance.balanceOf = lambda account: self.balances.get(account, 0)
            return instance

    containers["ScamIco"] = IcoContainer("ScamIco", inputs=[("_weth", "address")])
    containers["WETH9"] = TokenContainer("WETH9", {make_address(1): Web3.to_wei(2, "ether")})
    containers["Scam"] = TokenContainer("Scam", {make_address(1): Web3.to_wei(20, "ether")})
    return containers


def test_load_ico_context(ico_containers):
    context = load_ico_context(ICO_ADDRESS)

    assert context.ico.address == ICO_ADDRESS
    assert context.weth.address == WETH_ADDRESS
    assert context.weth.contract_type.name == "WETH9"
    assert context.scm.address == SCM_ADDRESS
    assert context.scm.contract_type.name == "Scam"


def test_balances(ico_containers):
    context = load_ico_context(ICO_ADDRESS)
    eth_balances = {make_address(1): Web3.to_wei(1.5, "ether")}
    provider = SimpleNamespace(get_balance=lambda address: eth_balances.get(address, 0))

    funded, empty = get_all_balances(context, [make_address(1), make_address(2)], provider=provider)

    assert funded.eth == Decimal("1.5")
    assert funded.weth == Decimal(2)
    assert funded.scm == Decimal(20)
    assert (empty.eth, empty.weth, empty.scm) == (0, 0, 0)
    assert format_balances(funded) == (
        f"{make_address(1)}   1.5000 ETH | 2.0000 WETH | 20.0000 SCM"
    )


def test_find_ico_address(tmp_path):
    filepath = tmp_path / "scam-ico.json"
    entry = RegistryEntry(
        chain_id=1337,
        name="ScamIco",
        address=ICO_ADDRESS,
        abi=[],
        tx_hash="0x" + "ab" * 32,
        block_number=1,
        deployer=make_address(0xD3),
    )
    write_registry([entry], filepath)

    assert find_ico_address(filepath, chain_id=1337) == ICO_ADDRESS
    with pytest.raises(ValueError, match="not found in registry"):
        find_ico_address(filepath, chain_id=1)


def test_find_ico_address_after_local_redeployment(tmp_path):
    config = {
        "deployment": {"name": "scam-ico"},
        "artifacts": {"dir": str(tmp_path), "filename": "scam-ico.json"},
        "contracts": ["ScamIco"],
    }
    for ico_address in (make_address(1), make_address(2)):
        filepath = validate_config(config, chain_id=1337, local=True)
        entry = RegistryEntry(
            chain_id=1337,
            name="ScamIco",
            address=ico_address,
            abi=[],
            tx_hash="0x" + "ab" * 32,
            block_number=1,
            deployer=make_address(0xD3),
        )
        write_registry([entry], filepath, replace_chains=True)

    assert find_ico_address(tmp_path / "scam-ico.json", chain_id=1337) == make_address(2)


def make_local_provider(provider_name, node_accounts=()):
    return SimpleNamespace(
        name=provider_name,
        network=SimpleNamespace(name="local"),
        web3=SimpleNamespace(eth=SimpleNamespace(accounts=list(node_accounts))),
    )


def test_default_accounts_on_development_node():
    node_accounts = [make_address(index).lower() for index in range(1, 6)]
    provider = make_local_provider("anvil", node_accounts=node_accounts)

    expected = [make_address(1), make_address(2), make_address(3)]
    assert default_accounts(3, provider=provider) == expected
    assert len(default_accounts(10, provider=provider)) == 5


def test_default_accounts_on_test_chain(monkeypatch):
    test_accounts = [SimpleNamespace(address=make_address(index)) for index in (7, 8)]
    monkeypatch.setattr("deployment.ico.accounts", SimpleNamespace(test_accounts=test_accounts))
    node_accounts = [make_address(0x99)]
    provider = make_local_provider("test", node_accounts=node_accounts)

    assert default_accounts(1, provider=provider) == [make_address(7)]
    assert default_accounts(3, provider=provider) == [make_address(7), make_address(8)]

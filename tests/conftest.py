import json
from itertools import count
from types import SimpleNamespace

import pytest
from eth_utils import to_checksum_address

from deployment.params import DeploymentConfig

MAINNET_WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
SEPOLIA_WETH = "0xfFf9976782d46CC05630D1f6eBAb18b2324d6B14"


def make_address(value: int) -> str:
    return to_checksum_address(f"0x{value:040x}")


class FakeInstance:
    def __init__(self, container, address):
        self.contract_type = container.contract_type
        self.address = address


class FakeContainer:
    """Stands in for an ape ContractContainer with a known constructor ABI."""

    def __init__(self, name, inputs=()):
        self.contract_type = SimpleNamespace(name=name)
        abi_inputs = [SimpleNamespace(name=n, type=t) for n, t in inputs]
        self.constructor = SimpleNamespace(abi=SimpleNamespace(inputs=abi_inputs))

    def at(self, address):
        return FakeInstance(self, address)


class FakeDeployer:
    """Records deployments; every deployment gets a new address."""

    def __init__(self):
        self.deployments = list()
        self._addresses = count(0xA000)

    def deploy(self, container, *args):
        instance = FakeInstance(container, make_address(next(self._addresses)))
        self.deployments.append((container.contract_type.name, args, instance))
        return instance

    def deployed(self, name):
        return [args for contract_name, args, _ in self.deployments if contract_name == name]


@pytest.fixture
def containers(monkeypatch):
    registry = {
        "WETH9": FakeContainer("WETH9"),
        "MockWETH": FakeContainer("MockWETH"),
        "ScamIco": FakeContainer("ScamIco", inputs=[("_weth", "address")]),
        "Scam": FakeContainer("Scam"),
    }

    def get_contract_container(name):
        try:
            return registry[name]
        except KeyError:
            raise ValueError(f"No contract found with name '{name}'.")

    for module in ("deployment.weth", "deployment.migration", "deployment.ico"):
        monkeypatch.setattr(f"{module}.get_contract_container", get_contract_container)
    return registry


@pytest.fixture
def fake_deployer():
    return FakeDeployer()


@pytest.fixture
def published_filepath(tmp_path):
    filepath = tmp_path / "weth.json"
    data = {
        "networks": {
            "1": {"address": MAINNET_WETH},
            "11155111": {"address": SEPOLIA_WETH.lower()},
        }
    }
    with open(filepath, "w") as file:
        json.dump(data, file)
    return filepath


@pytest.fixture
def deployment_config(published_filepath):
    return DeploymentConfig(name="scam-ico", published_filepath=published_filepath)

import typing
from pathlib import Path
from typing import Any, Dict, List, Optional

from ape import networks
from ape.api import AccountAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractContainer, ContractInstance
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from web3.auto import w3

from deployment.confirm import _confirm_arguments, _continue
from deployment.constants import (
    DEVELOPMENT,
    ICO_CONTRACT,
    MOCK_WETH_CONTRACT,
    TEST,
    WETH_CONTRACT,
)
from deployment.networks import get_chain_id, get_network_name, is_local_network
from deployment.published import PUBLISHED_WETH_FILEPATH, resolve_published_filepath
from deployment.registry import registry_from_ape_deployments
from deployment.utils import _load_yaml, check_plugins, validate_config, verify_contracts


class DeploymentConfig:
    """Network policy and contract names of a WETH-dependent ICO deployment."""

    class Invalid(ValueError):
        """Raised when the parameters YAML is malformed"""

    def __init__(
        self,
        name: str,
        development_networks: typing.Iterable[str] = (DEVELOPMENT,),
        test_networks: typing.Iterable[str] = (TEST,),
        weth_contract: str = WETH_CONTRACT,
        mock_weth_contract: str = MOCK_WETH_CONTRACT,
        ico_contract: str = ICO_CONTRACT,
        published_filepath: Optional[Path] = None,
        overrides: Optional[Dict[int, ChecksumAddress]] = None,
    ):
        self.name = name
        self.development_networks = frozenset(development_networks)
        self.test_networks = frozenset(test_networks)
        overlap = self.development_networks & self.test_networks
        if overlap:
            raise self.Invalid(
                f"Networks listed as both development and test: {', '.join(sorted(overlap))}"
            )
        self.weth_contract = weth_contract
        self.mock_weth_contract = mock_weth_contract
        self.ico_contract = ico_contract
        self.published_filepath = published_filepath or PUBLISHED_WETH_FILEPATH
        self.overrides = overrides or dict()

    @classmethod
    def from_config(cls, config: typing.Dict) -> "DeploymentConfig":
        print("Processing deployment parameters...")
        deployment = config.get("deployment") or dict()
        name = deployment.get("name")
        if not name:
            raise cls.Invalid("deployment name is not set in params file.")

        network_config = config.get("networks") or dict()
        weth_config = config.get("weth") or dict()
        return cls(
            name=name,
            development_networks=cls._get_networks(network_config, "development", DEVELOPMENT),
            test_networks=cls._get_networks(network_config, "test", TEST),
            weth_contract=weth_config.get("contract", WETH_CONTRACT),
            mock_weth_contract=weth_config.get("mock", MOCK_WETH_CONTRACT),
            ico_contract=cls._get_ico_contract(config),
            published_filepath=resolve_published_filepath(weth_config.get("published")),
            overrides=cls._process_overrides(weth_config.get("overrides")),
        )

    @classmethod
    def from_yaml(cls, filepath: Path) -> "DeploymentConfig":
        return cls.from_config(_load_yaml(filepath))

    @classmethod
    def _get_networks(cls, network_config: typing.Dict, key: str, default: str) -> List[str]:
        networks = network_config.get(key, [default])
        if not isinstance(networks, list) or not all(isinstance(n, str) for n in networks):
            raise cls.Invalid(f"'networks.{key}' must be a list of network names.")
        return networks

    @classmethod
    def _get_ico_contract(cls, config: typing.Dict) -> str:
        contracts = config.get("contracts") or [ICO_CONTRACT]
        if len(contracts) != 1 or not isinstance(contracts[0], str):
            raise cls.Invalid("Expected exactly one dependent contract name under 'contracts'.")
        return contracts[0]

    @classmethod
    def _process_overrides(cls, overrides: Optional[Dict]) -> Dict[int, ChecksumAddress]:
        processed = dict()
        for chain_id, address in (overrides or dict()).items():
            try:
                processed[int(chain_id)] = to_checksum_address(address)
            except (TypeError, ValueError):
                raise cls.Invalid(f"Invalid WETH override for chain id '{chain_id}': {address}")
        return processed


def _validate_constructor_arguments(
    container: ContractContainer, args: typing.Sequence
) -> List[str]:
    """Validates constructor arguments against the constructor ABI; returns the input names."""
    contract_name = container.contract_type.name
    abi_inputs = container.constructor.abi.inputs
    if len(args) != len(abi_inputs):
        raise Deployer.InvalidConstructorArguments(
            f"Constructor arguments length mismatch - "
            f"{contract_name} ABI requires {len(abi_inputs)}, Got {len(args)}."
        )

    for position, (abi_input, value) in enumerate(zip(abi_inputs, args)):
        if not w3.is_encodable(abi_input.type, value):
            raise Deployer.InvalidConstructorArguments(
                f"{contract_name} constructor argument '{abi_input.name}' at position {position} "
                f"has a value '{value}' whose type does not match "
                f"expected ABI type '{abi_input.type}'"
            )
    return [abi_input.name for abi_input in abi_inputs]


class Deployer:
    """
    Represents an ape account plus the deployment parameters
    of a single migration, plus validated/annotated execution.
    """

    class InvalidConstructorArguments(Exception):
        """Raised when constructor arguments do not match the contract ABI"""

    def __init__(
        self,
        config: typing.Dict,
        path: Path,
        verify: bool,
        account: Optional[AccountAPI] = None,
        autosign: bool = False,
    ):
        if account is None:
            account = select_account()
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self._account = account
        self._autosign = autosign
        self._account.set_autosign(autosign)

        check_plugins()
        self.path = path
        self.config = config
        self.network = get_network_name()
        self.chain_id = get_chain_id()
        self.local = is_local_network()
        self.registry_filepath = validate_config(
            config=self.config, chain_id=self.chain_id, local=self.local
        )
        self.deployment_config = DeploymentConfig.from_config(self.config)
        self.verify = verify
        self._print_deployment_info()

        if not self._autosign:
            # Confirms the start of the deployment.
            _continue()

    @classmethod
    def from_yaml(cls, filepath: Path, *args, **kwargs) -> "Deployer":
        config = _load_yaml(filepath)
        return cls(config=config, path=filepath, *args, **kwargs)

    def get_account(self) -> AccountAPI:
        """Returns the deployer account."""
        return self._account

    def _get_kwargs(self) -> typing.Dict[str, Any]:
        """Returns the deployment kwargs."""
        return {"publish": self.verify}

    def deploy(self, container: ContractContainer, *args) -> ContractInstance:
        """Deploys container with the given constructor arguments and waits for the receipt."""
        contract_name = container.contract_type.name
        names = _validate_constructor_arguments(container, args)
        if not self._autosign:
            _confirm_arguments(contract_name, names, args)

        instance = self._account.deploy(container, *args, **self._get_kwargs())
        print(f"(i) {contract_name} deployed to {instance.address}")
        return instance

    def finalize(self, deployments: List[ContractInstance]) -> None:
        """
        Publishes the deployments to the registry and optionally to block explorers.
        """
        registry_from_ape_deployments(
            deployments=deployments,
            chain_id=self.chain_id,
            output_filepath=self.registry_filepath,
            replace_chain=self.local,
        )
        if self.verify:
            verify_contracts(contracts=deployments)

    def _print_deployment_info(self):
        print(
            f"Account: {self._account.address}",
            f"Config: {self.path}",
            f"Registry: {self.registry_filepath}",
            f"Verify: {self.verify}",
            f"Ecosystem: {networks.provider.network.ecosystem.name}",
            f"Network: {self.network}",
            f"Chain ID: {self.chain_id}",
            f"Gas Price: {networks.provider.gas_price}",
            sep="\n",
        )

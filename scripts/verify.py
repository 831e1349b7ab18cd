from pathlib import Path

import click
from ape import networks
from ape.cli import ConnectedProviderCommand, network_option

from deployment.options import params_file_option, registry_filepath_option
from deployment.registry import contracts_from_registry
from deployment.utils import _load_yaml, check_plugins, get_artifact_filepath, verify_contracts


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@params_file_option
@registry_filepath_option
@click.option(
    "--contract-name",
    "-c",
    "contract_names",
    help="Contract to verify; defaults to every contract recorded for the active chain.",
    type=click.STRING,
    multiple=True,
)
def cli(network, params_file, registry_filepath, contract_names):
    """Verify deployed contracts on the block explorer."""
    check_plugins()
    registry_filepath: Path = registry_filepath or get_artifact_filepath(_load_yaml(params_file))
    chain_id = networks.active_provider.chain_id
    contracts = contracts_from_registry(registry_filepath, chain_id=chain_id)

    contract_names = contract_names or list(contracts)
    contract_instances = []
    for contract_name in contract_names:
        try:
            contract_instances.append(contracts[contract_name])
        except KeyError:
            raise ValueError(
                f"Contract '{contract_name}' not found in registry, '{registry_filepath}', "
                f"for chain {chain_id}"
            )

    verify_contracts(contract_instances)


if __name__ == "__main__":
    cli()

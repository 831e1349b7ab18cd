#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, network_option

from deployment.ico import (
    default_accounts,
    find_ico_address,
    format_balances,
    get_all_balances,
    load_ico_context,
)
from deployment.networks import get_chain_id, is_local_network
from deployment.options import contract_address_option, params_file_option
from deployment.params import DeploymentConfig
from deployment.types import AccountCount, Address
from deployment.utils import _load_yaml, get_artifact_filepath


@click.command(cls=ConnectedProviderCommand, name="ico-status")
@network_option(required=True)
@params_file_option
@contract_address_option
@click.option(
    "--address",
    "-a",
    "addresses",
    help="Account address to report balances for.",
    type=Address(),
    multiple=True,
)
@click.option(
    "--local-accounts",
    "-n",
    "num_accounts",
    help="Number of local chain accounts to report when no address is given.",
    type=AccountCount(),
    default=3,
    show_default=True,
)
def cli(network, params_file, contract_address, addresses, num_accounts):
    """Show the ScamIco tokens and the ETH, WETH and SCM balances of accounts."""
    config = _load_yaml(params_file)
    deployment_config = DeploymentConfig.from_config(config)

    if not contract_address:
        contract_address = find_ico_address(
            registry_filepath=get_artifact_filepath(config),
            chain_id=get_chain_id(),
            contract_name=deployment_config.ico_contract,
        )

    context = load_ico_context(
        ico_address=contract_address,
        ico_contract=deployment_config.ico_contract,
        weth_contract=deployment_config.weth_contract,
    )
    click.secho(f"{deployment_config.ico_contract} {context.ico.address}", fg="green")
    click.secho(f"    WETH {context.weth.address}", fg="yellow")
    click.secho(f"    SCM  {context.scm.address}", fg="yellow")

    if not addresses:
        if not is_local_network():
            raise click.BadOptionUsage(
                option_name="--address",
                message="At least one --address is required on live networks.",
            )
        addresses = default_accounts(num_accounts)

    click.secho("\nAccounts", fg="green")
    for balances in get_all_balances(context, list(addresses)):
        click.secho(f"    {format_balances(balances)}", fg="cyan")


if __name__ == "__main__":
    cli()

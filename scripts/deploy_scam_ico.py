#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from deployment.migration import deploy_scam_ico
from deployment.options import autosign_option, params_file_option, verify_option
from deployment.params import Deployer


@click.command(cls=ConnectedProviderCommand, name="deploy-scam-ico")
@network_option(required=True)
@account_option()
@params_file_option
@verify_option
@autosign_option
def cli(network, account, params_file, verify, autosign):
    """
    Deploys the ScamIco against a WETH9 suitable for the active network.

    Development networks get a fresh WETH9, test networks get a MockWETH and
    any other network uses the WETH9 published for its chain id.

    ape run deploy_scam_ico --network ethereum:local:test
    ape run deploy_scam_ico --network ethereum:sepolia:infura --verify
    """
    deployer = Deployer.from_yaml(
        filepath=params_file, verify=verify, account=account, autosign=autosign
    )

    deployments = deploy_scam_ico(
        deployer=deployer,
        network=deployer.network,
        chain_id=deployer.chain_id,
        config=deployer.deployment_config,
    )

    deployer.finalize(deployments=deployments)


if __name__ == "__main__":
    cli()

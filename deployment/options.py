from pathlib import Path

import click

from deployment.constants import SCAM_ICO_PARAMS_FILEPATH
from deployment.types import Address

params_file_option = click.option(
    "--params-file",
    "-p",
    help="Deployment parameters YAML.",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    default=SCAM_ICO_PARAMS_FILEPATH,
    show_default=True,
)

registry_filepath_option = click.option(
    "--registry-filepath",
    "-f",
    help="Registry filepath; defaults to the registry named in the parameters YAML.",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    required=False,
)

verify_option = click.option(
    "--verify/--no-verify",
    help="Publish deployed contracts to the block explorer.",
    default=False,
    show_default=True,
)

autosign_option = click.option(
    "--autosign",
    help="Sign transactions without confirmation prompts.",
    is_flag=True,
    default=False,
)

contract_address_option = click.option(
    "--contract",
    "-c",
    "contract_address",
    help="Address of a deployed ScamIco; defaults to the registry entry for the active chain.",
    type=Address(),
    required=False,
)

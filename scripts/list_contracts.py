#!/usr/bin/python3

from itertools import groupby
from pathlib import Path
from typing import List

import click
from ape.cli import ConnectedProviderCommand

from deployment.options import params_file_option, registry_filepath_option
from deployment.registry import RegistryEntry, read_registry
from deployment.utils import _load_yaml, get_artifact_filepath, get_chain_name


def _format_chain_name(chain_id: int) -> str:
    """Capitalize each word of the chain name and join with slashes."""
    try:
        chain_name = get_chain_name(chain_id)
    except ValueError:
        return f"Chain {chain_id}"
    return "/".join(word.capitalize() for word in chain_name.split())


def _display_registry_entries(registry_filepath: Path, entries: List[RegistryEntry]) -> None:
    """Display registry entries grouped by chain ID."""
    click.secho(f"\n{registry_filepath.name}", fg="green")
    for chain_id, chain_entries in groupby(entries, key=lambda e: e.chain_id):
        click.secho(f"    {_format_chain_name(chain_id)} ({chain_id})", fg="yellow")
        for index, entry in enumerate(chain_entries, start=1):
            click.secho(f"        {index}. {entry.name} {entry.address}", fg="cyan")


@click.command(cls=ConnectedProviderCommand, name="list-contracts")
@params_file_option
@registry_filepath_option
def cli(params_file, registry_filepath):
    """List all contracts recorded in a deployment registry."""
    registry_filepath = registry_filepath or get_artifact_filepath(_load_yaml(params_file))
    if not registry_filepath.exists():
        raise click.FileError(str(registry_filepath), hint="no deployments recorded yet")
    entries = read_registry(filepath=registry_filepath)
    _display_registry_entries(registry_filepath, entries)


if __name__ == "__main__":
    cli()

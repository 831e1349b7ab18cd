"""
Static address book of third-party WETH9 deployments.

Published addresses live in a truffle-style artifact, the format used by the
canonical-weth package:

    {"networks": {"<chain id>": {"address": "0x..."}}}
"""
from pathlib import Path
from typing import Dict, Optional

from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from deployment.constants import ARTIFACTS_DIR, PUBLISHED_WETH_FILENAME
from deployment.utils import _load_json

ChainId = int

PUBLISHED_WETH_FILEPATH = ARTIFACTS_DIR / PUBLISHED_WETH_FILENAME


class PublishedAddressError(ValueError):
    pass


def resolve_published_filepath(filename: Optional[str] = None) -> Path:
    """Returns the filepath of a published addresses artifact, relative to ARTIFACTS_DIR."""
    if not filename:
        return PUBLISHED_WETH_FILEPATH
    filepath = Path(filename)
    if not filepath.is_absolute():
        filepath = ARTIFACTS_DIR / filepath
    return filepath


def load_published_addresses(
    filepath: Path = PUBLISHED_WETH_FILEPATH,
) -> Dict[ChainId, ChecksumAddress]:
    data = _load_json(filepath)
    try:
        networks = data["networks"]
    except (KeyError, TypeError):
        raise PublishedAddressError(f"No 'networks' entry in published addresses file {filepath}")
    if not isinstance(networks, dict):
        raise PublishedAddressError(
            f"'networks' is not a mapping in published addresses file {filepath}"
        )

    addresses = dict()
    for chain_id, network_info in networks.items():
        try:
            address = network_info["address"]
            addresses[int(chain_id)] = to_checksum_address(address)
        except (KeyError, TypeError, ValueError):
            raise PublishedAddressError(
                f"Malformed entry for chain id '{chain_id}' in published addresses file {filepath}"
            )
    return addresses


def get_published_address(
    chain_id: ChainId, filepath: Path = PUBLISHED_WETH_FILEPATH
) -> Optional[ChecksumAddress]:
    """Returns the published address for chain_id, or None when the chain is unknown."""
    addresses = load_published_addresses(filepath)
    return addresses.get(int(chain_id))

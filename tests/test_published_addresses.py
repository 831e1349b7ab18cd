import json

import pytest
from eth_utils import to_checksum_address

from deployment.published import (
    PUBLISHED_WETH_FILEPATH,
    PublishedAddressError,
    get_published_address,
    load_published_addresses,
    resolve_published_filepath,
)

from tests.conftest import MAINNET_WETH, SEPOLIA_WETH


def test_canonical_weth_artifact():
    addresses = load_published_addresses(PUBLISHED_WETH_FILEPATH)

    assert addresses[1] == MAINNET_WETH
    assert addresses[11155111] == to_checksum_address(SEPOLIA_WETH)
    assert all(address == to_checksum_address(address) for address in addresses.values())


def test_published_address_lookup(published_filepath):
    assert get_published_address(1, filepath=published_filepath) == MAINNET_WETH
    sepolia_weth = get_published_address("11155111", filepath=published_filepath)
    assert sepolia_weth == to_checksum_address(SEPOLIA_WETH)
    assert get_published_address(100, filepath=published_filepath) is None


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"networks": {"1": {}}},
        {"networks": {"1": {"address": "0xnope"}}},
        {"networks": {"mainnet": {"address": MAINNET_WETH}}},
        {"networks": [{"address": MAINNET_WETH}]},
        {"networks": {"1": MAINNET_WETH}},
    ],
)
def test_malformed_published_addresses(tmp_path, data):
    filepath = tmp_path / "weth.json"
    filepath.write_text(json.dumps(data))
    with pytest.raises(PublishedAddressError):
        load_published_addresses(filepath)


def test_resolve_published_filepath(tmp_path):
    assert resolve_published_filepath() == PUBLISHED_WETH_FILEPATH
    assert resolve_published_filepath("canonical-weth.json") == PUBLISHED_WETH_FILEPATH
    absolute = tmp_path / "weth.json"
    assert resolve_published_filepath(str(absolute)) == absolute

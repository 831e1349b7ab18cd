import json
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional

from ape.contracts import ContractInstance
from eth_typing import ABI, ChecksumAddress
from eth_utils import to_checksum_address

from deployment.utils import _load_json, get_contract_container

ChainId = int
ContractName = str


STANDARD_REGISTRY_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}


class RegistryEntry(NamedTuple):
    """A deployed contract as recorded in a deployment registry."""

    chain_id: ChainId
    name: ContractName
    address: ChecksumAddress
    abi: ABI
    tx_hash: str
    block_number: int
    deployer: str


def _get_abi(contract_instance: ContractInstance) -> ABI:
    return [
        abi_entry.model_dump(mode="json", by_alias=True)
        for abi_entry in contract_instance.contract_type.abi
    ]


def _get_entry(contract_instance: ContractInstance, chain_id: ChainId) -> RegistryEntry:
    receipt = contract_instance.receipt
    return RegistryEntry(
        chain_id=chain_id,
        name=contract_instance.contract_type.name,
        address=to_checksum_address(contract_instance.address),
        abi=_get_abi(contract_instance),
        tx_hash=receipt.txn_hash,
        block_number=receipt.block_number,
        deployer=receipt.transaction.sender,
    )


def read_registry(filepath: Path) -> List[RegistryEntry]:
    data = _load_json(filepath)
    registry_entries = list()
    for chain_id, entries in data.items():
        for contract_name, artifacts in entries.items():
            registry_entries.append(
                RegistryEntry(
                    chain_id=int(chain_id),
                    name=contract_name,
                    address=artifacts["address"],
                    abi=artifacts["abi"],
                    tx_hash=artifacts["tx_hash"],
                    block_number=artifacts["block_number"],
                    deployer=artifacts["deployer"],
                )
            )
    return registry_entries


def write_registry(
    entries: List[RegistryEntry], filepath: Path, replace_chains: bool = False
) -> Path:
    """
    Writes registry entries to filepath, merging them into an existing registry.

    Entries for a chain id that is already recorded are never merged; they are
    written to a sibling '.unmerged.json' file instead. With replace_chains the
    recorded entries of those chain ids are replaced, as for local chains that
    are redeployed on every run.
    """
    if not entries:
        print("No entries provided.")
        return filepath

    entries = sorted(entries, key=lambda entry: (str(entry.chain_id), entry.name))

    data = defaultdict(dict)
    for entry in entries:
        entry_abi = sorted(entry.abi, key=lambda d: (d["type"], d.get("name", "")))
        data[str(entry.chain_id)][entry.name] = {
            "address": entry.address,
            "abi": entry_abi,
            "tx_hash": entry.tx_hash,
            "block_number": int(entry.block_number),
            "deployer": entry.deployer,
        }

    filepath.parent.mkdir(parents=True, exist_ok=True)

    if filepath.exists():
        existing_data = _load_json(filepath)
        if replace_chains:
            for chain_id in data:
                if existing_data.pop(chain_id, None) is not None:
                    print(f"Replacing registry entries for chain id {chain_id}.")
        if any(chain_id in existing_data for chain_id in data):
            filepath = filepath.with_suffix(".unmerged.json")
            print(
                "Cannot merge registries with overlapping chain IDs.\n"
                f"Writing to {filepath} to avoid overwriting existing data."
            )
        else:
            print(f"Updating existing registry at {filepath}.")
            existing_data.update(data)
            data = existing_data
    else:
        print(f"Creating new registry at {filepath}.")

    with open(filepath, "w") as file:
        json.dump(data, file, **STANDARD_REGISTRY_JSON_FORMAT)

    return filepath


def registry_from_ape_deployments(
    deployments: List[ContractInstance],
    chain_id: ChainId,
    output_filepath: Path,
    replace_chain: bool = False,
) -> Path:
    """Records ape deployments for chain_id in the registry at output_filepath."""
    entries = [_get_entry(instance, chain_id=chain_id) for instance in deployments]
    output_filepath = write_registry(
        entries=entries, filepath=output_filepath, replace_chains=replace_chain
    )
    print(f"(i) Registry written to {output_filepath}!")
    return output_filepath


def get_registry_address(
    filepath: Path, chain_id: ChainId, contract_name: ContractName
) -> Optional[ChecksumAddress]:
    """Returns the recorded address of contract_name on chain_id, if any."""
    for entry in read_registry(filepath=filepath):
        if entry.chain_id == chain_id and entry.name == contract_name:
            return to_checksum_address(entry.address)
    return None


def contracts_from_registry(filepath: Path, chain_id: ChainId) -> Dict[str, ContractInstance]:
    """Returns the contract instances recorded for chain_id."""
    deployments = dict()
    for registry_entry in read_registry(filepath=filepath):
        if registry_entry.chain_id != chain_id:
            continue
        contract_container = get_contract_container(registry_entry.name)
        deployments[registry_entry.name] = contract_container.at(registry_entry.address)
    return deployments

from typing import Sequence

from ape.utils import ZERO_ADDRESS


def _abort() -> None:
    print("Aborting deployment!")
    exit(-1)


def _confirm_deployment(contract_name: str) -> None:
    """Asks the user to confirm the deployment of a single contract."""
    answer = input(f"Deploy {contract_name} Y/N? ")
    if answer.lower().strip() == "n":
        _abort()


def _continue() -> None:
    """Asks the user to continue."""
    answer = input("Continue Y/N? ")
    if answer.lower().strip() == "n":
        _abort()


def _confirm_zero_address() -> None:
    answer = input("Zero Address detected for constructor argument; Continue? Y/N? ")
    if answer.lower().strip() == "n":
        _abort()


def _confirm_arguments(contract_name: str, names: Sequence[str], args: Sequence) -> None:
    """Asks the user to confirm the constructor arguments for a single contract."""
    if len(args) == 0:
        print(f"\n(i) No constructor arguments for {contract_name}")
        _confirm_deployment(contract_name)
        return

    print(f"\nConstructor arguments for {contract_name}")
    for name, value in zip(names, args):
        print(f"\t{name}={value}")
    _confirm_deployment(contract_name)
    if any(value == ZERO_ADDRESS for value in args):
        _confirm_zero_address()

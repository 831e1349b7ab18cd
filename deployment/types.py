"""click parameter types shared by the deployment scripts."""
import click
from ape.utils import ZERO_ADDRESS
from eth_utils import is_address, to_checksum_address


class AccountCount(click.ParamType):
    """A positive number of accounts."""

    name = "account_count"

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            count = value
        else:
            try:
                count = int(value)
            except (TypeError, ValueError):
                self.fail(f"'{value}' is not a number of accounts", param, ctx)
        if count < 1:
            self.fail(f"at least one account is required, got {count}", param, ctx)
        return count


class Address(click.ParamType):
    """An ethereum address, normalized to its checksummed form."""

    name = "address"

    def __init__(self, allow_zero: bool = False):
        self.allow_zero = allow_zero

    def convert(self, value, param, ctx):
        if not is_address(value):
            self.fail(f"'{value}' is not an ethereum address", param, ctx)
        address = to_checksum_address(value)
        if address == ZERO_ADDRESS and not self.allow_zero:
            self.fail("the zero address is not allowed here", param, ctx)
        return address

"""Normalization and validation helpers for ENS names and addresses."""

import re

ENS_SUFFIX = ".eth"

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def normalize_ens_name(name: str | None) -> str:
    """
    Normalize a user-supplied ENS name for storage and lookup.

    Trims surrounding whitespace and lowercases. Full ENSIP-15
    normalization is left to the web3 library at resolution time.
    """
    if not name:
        return ""
    return name.strip().lower()


def is_ens_name(name: str) -> bool:
    """Check that a normalized name is a non-empty ``.eth`` name."""
    return len(name) > len(ENS_SUFFIX) and name.endswith(ENS_SUFFIX)


def is_address(value: str) -> bool:
    """Check that a value looks like a 20-byte hex Ethereum address."""
    return bool(_ADDRESS_RE.match(value.strip())) if value else False

"""
Plasma payment transaction protocol constants.

The input and output slot counts are fixed by the transaction format; a
transaction using more slots is rejected by the child chain. The merge cap
is an advisor policy, not a protocol rule.
"""

from __future__ import annotations

# Transaction format slots
MAX_INPUTS = 4
MAX_OUTPUTS = 4

# Unselected UTXOs per currency offered for stealth merge
MERGE_CAP_PER_CURRENCY = 3

# Addresses (owners and currencies) are 20 bytes
ADDRESS_LENGTH = 20
ZERO_ADDRESS = bytes(ADDRESS_LENGTH)

# Metadata is a fixed 32-byte field, zeroed when the order carries none
METADATA_LENGTH = 32
EMPTY_METADATA = bytes(METADATA_LENGTH)

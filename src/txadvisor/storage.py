"""
UTXO provider interface.

Providers return an owner's UTXOs grouped by currency, each group sorted
descending by amount. This is the one place the ordering the selection
algorithm depends on is established.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from loguru import logger

from txadvisor.models import AvailableUtxos, Utxo, to_hex


def sort_and_group(utxos: Iterable[Utxo]) -> AvailableUtxos:
    """
    Group UTXOs by currency, largest amount first.

    Equal amounts are ordered by position so the result does not depend on
    the order storage returned them in.
    """
    grouped: AvailableUtxos = {}
    for utxo in sorted(utxos, key=lambda u: (-u.amount, u.position)):
        grouped.setdefault(utxo.currency, []).append(utxo)
    return grouped


class UtxoProvider(ABC):
    """Abstract source of a spender's unspent outputs."""

    @abstractmethod
    async def get_sorted_grouped_utxos(self, owner: bytes) -> AvailableUtxos:
        """Get owner's UTXOs by currency, each list sorted descending by amount"""

    async def close(self) -> None:
        """Close provider connection"""
        pass


class InMemoryUtxoProvider(UtxoProvider):
    """
    Provider over a fixed UTXO snapshot.

    Used by the CLI and tests. Spent outputs are simply absent from the
    snapshot; reserving or locking outputs is not its concern.
    """

    def __init__(self, utxos: Iterable[Utxo] = ()):
        self.utxos: list[Utxo] = list(utxos)

    async def get_sorted_grouped_utxos(self, owner: bytes) -> AvailableUtxos:
        owned = [utxo for utxo in self.utxos if utxo.owner == owner]
        logger.debug(f"Found {len(owned)} UTXOs for {to_hex(owner)}")
        return sort_and_group(owned)

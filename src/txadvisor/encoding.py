"""
Transaction encoder interface.

The advisor does not serialize or hash transactions itself. The signing
side implements this interface and the assembler calls it once a draft
has an owner for every output.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from txadvisor.models import Payment, Utxo


class TransactionEncoder(ABC):
    """
    Abstract transaction encoder.

    ``metadata`` is always the 32-byte field (zeroed when the order has none).
    """

    @abstractmethod
    def encode(self, inputs: list[Utxo], outputs: list[Payment], metadata: bytes) -> bytes:
        """Serialize the unsigned transaction"""

    @abstractmethod
    def sign_hash(self, inputs: list[Utxo], outputs: list[Payment], metadata: bytes) -> bytes:
        """Hash to be signed by every input owner"""

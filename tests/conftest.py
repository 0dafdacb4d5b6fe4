"""
Test configuration for txadvisor tests.
"""

from __future__ import annotations

from collections.abc import Callable
from itertools import count

import pytest

from txadvisor.models import Fee, Order, Payment, Utxo

ALICE = bytes([0xA1]) * 20
BOB = bytes([0xB0]) * 20
CAROL = bytes([0xC0]) * 20
DAVE = bytes([0xD0]) * 20

ETH = bytes(20)
OMG = bytes([0x0B]) * 20
DAI = bytes([0x0D]) * 20


@pytest.fixture
def make_utxo() -> Callable[..., Utxo]:
    """Factory for UTXOs at distinct positions."""
    blknums = count(1000, 1000)

    def _make(amount: int, currency: bytes = ETH, owner: bytes = ALICE) -> Utxo:
        return Utxo(
            blknum=next(blknums),
            txindex=0,
            oindex=0,
            owner=owner,
            currency=currency,
            amount=amount,
        )

    return _make


@pytest.fixture
def make_order() -> Callable[..., Order]:
    """Factory for orders paid by ALICE."""

    def _make(
        payments: list[tuple[bytes | None, bytes, int]],
        fee: tuple[bytes, int] = (ETH, 0),
        metadata: bytes | None = None,
    ) -> Order:
        return Order(
            owner=ALICE,
            payments=[
                Payment(owner=owner, currency=currency, amount=amount)
                for owner, currency, amount in payments
            ],
            fee=Fee(currency=fee[0], amount=fee[1]),
            metadata=metadata,
        )

    return _make

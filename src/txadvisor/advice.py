"""
Transaction advice pipeline.

needed funds -> greedy selection -> sufficiency check -> stealth merge ->
assembly. The first failing stage raises and nothing after it runs.

``advise`` returns the outcome as a value instead of raising:

    match advise(utxos, order):
        case Created(transactions=txs): ...
        case InsufficientFundsError(missing=missing): ...
        case AdviceError(code=code): ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loguru import logger

from txadvisor.assembly import create_transaction
from txadvisor.config import DEFAULT_LIMITS, ProtocolLimits
from txadvisor.encoding import TransactionEncoder
from txadvisor.errors import AdviceError
from txadvisor.models import AvailableUtxos, Order, TransactionDraft
from txadvisor.selection import select_inputs
from txadvisor.typed_data import include_typed_data


@dataclass(frozen=True)
class Created:
    """Successful advice."""

    transactions: list[TransactionDraft]

    def to_dict(self) -> dict[str, Any]:
        return {"transactions": [tx.model_dump(mode="json") for tx in self.transactions]}


Advice = Created | AdviceError


def create_advice(
    available: AvailableUtxos,
    order: Order,
    encoder: TransactionEncoder | None = None,
    limits: ProtocolLimits = DEFAULT_LIMITS,
    domain: dict[str, Any] | None = None,
) -> list[TransactionDraft]:
    """
    Select inputs for an order and assemble its transaction.

    Args:
        available: Owner's UTXOs by currency, sorted descending by amount
        order: The payment order
        encoder: Encoder for txbytes and sign_hash
        limits: Protocol slot limits
        domain: Typed-data domain; typed data is attached when given

    Returns:
        The transaction drafts (currently always exactly one)

    Raises:
        AdviceError: If the order cannot be turned into a transaction
    """
    selected = select_inputs(available, order, limits)
    drafts = [create_transaction(selected, order, encoder, limits)]

    if domain is not None:
        include_typed_data(drafts, domain, limits)

    return drafts


def advise(
    available: AvailableUtxos,
    order: Order,
    encoder: TransactionEncoder | None = None,
    limits: ProtocolLimits = DEFAULT_LIMITS,
    domain: dict[str, Any] | None = None,
) -> Advice:
    """Like ``create_advice`` but returns the rejection instead of raising it."""
    try:
        return Created(create_advice(available, order, encoder, limits, domain))
    except AdviceError as e:
        logger.debug(f"Advice rejected: {e.code.value}")
        return e

"""
Transaction assembly.

Builds the transaction draft from the selected inputs and the order:
- Inputs: selected UTXOs of every currency
- Outputs: the order's payments followed by one change output per
  currency whose inputs exceed what the order spends in it
"""

from __future__ import annotations

from loguru import logger

from txadvisor.config import DEFAULT_LIMITS, ProtocolLimits
from txadvisor.constants import EMPTY_METADATA
from txadvisor.encoding import TransactionEncoder
from txadvisor.errors import EmptyTransactionError, TooManyOutputsError
from txadvisor.models import Order, Payment, SelectedUtxos, TransactionDraft, Utxo


def change_outputs(selected: SelectedUtxos, order: Order) -> list[Payment]:
    """Change paid back to the order owner, one output per currency with a surplus."""
    spends = [order.fee, *order.payments]
    outputs = []

    for currency, utxos in selected.items():
        spent = sum(s.amount for s in spends if s.currency == currency)
        change = sum(utxo.amount for utxo in utxos) - spent
        if change > 0:
            outputs.append(Payment(owner=order.owner, currency=currency, amount=change))

    return outputs


def create_transaction(
    selected: SelectedUtxos,
    order: Order,
    encoder: TransactionEncoder | None = None,
    limits: ProtocolLimits = DEFAULT_LIMITS,
) -> TransactionDraft:
    """
    Create the transaction draft for an order from its selected inputs.

    Args:
        selected: Inputs by currency, as returned by ``select_inputs``
        order: The payment order
        encoder: Encoder filling txbytes and sign_hash; None leaves them empty
        limits: Protocol slot limits

    Returns:
        TransactionDraft ready for signing

    Raises:
        TooManyOutputsError: If payments plus change exceed max_outputs
        EmptyTransactionError: If no inputs were selected
    """
    outputs = [*order.payments, *change_outputs(selected, order)]
    inputs = [utxo for utxos in selected.values() for utxo in utxos]

    if len(outputs) > limits.max_outputs:
        raise TooManyOutputsError(len(outputs), limits.max_outputs)

    if not inputs:
        raise EmptyTransactionError()

    txbytes, sign_hash = encode_transaction(inputs, outputs, order.metadata, encoder)

    return TransactionDraft(
        inputs=inputs,
        outputs=outputs,
        fee=order.fee,
        metadata=order.metadata,
        txbytes=txbytes,
        sign_hash=sign_hash,
    )


def encode_transaction(
    inputs: list[Utxo],
    outputs: list[Payment],
    metadata: bytes | None,
    encoder: TransactionEncoder | None,
) -> tuple[bytes | None, bytes | None]:
    """
    Encode the transaction, unless it is an advisory draft.

    A draft with an ownerless output only answers "which inputs would be
    spent" and cannot be signed, so it is never encoded.
    """
    if encoder is None:
        return None, None

    if any(output.owner is None for output in outputs):
        logger.debug("Output without owner, skipping transaction encoding")
        return None, None

    metadata = metadata or EMPTY_METADATA
    return encoder.encode(inputs, outputs, metadata), encoder.sign_hash(inputs, outputs, metadata)

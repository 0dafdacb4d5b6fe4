"""
EIP-712 typed data for transaction drafts.

Wallets sign drafts through ``eth_signTypedData``. The message always has
every input and output slot; unused slots are zero-filled. Computing the
struct hash is left to the signer.
"""

from __future__ import annotations

from typing import Any

from txadvisor.config import DEFAULT_LIMITS, ProtocolLimits
from txadvisor.constants import EMPTY_METADATA, ZERO_ADDRESS
from txadvisor.models import TransactionDraft, to_hex


def eip712_types_specification(limits: ProtocolLimits = DEFAULT_LIMITS) -> dict[str, Any]:
    inputs = [{"name": f"input{i}", "type": "Input"} for i in range(limits.max_inputs)]
    outputs = [{"name": f"output{i}", "type": "Output"} for i in range(limits.max_outputs)]

    return {
        "types": {
            "EIP712Domain": [
                {"name": "name", "type": "string"},
                {"name": "version", "type": "string"},
                {"name": "verifyingContract", "type": "address"},
                {"name": "salt", "type": "bytes32"},
            ],
            "Transaction": [*inputs, *outputs, {"name": "metadata", "type": "bytes32"}],
            "Input": [
                {"name": "blknum", "type": "uint256"},
                {"name": "txindex", "type": "uint256"},
                {"name": "oindex", "type": "uint256"},
            ],
            "Output": [
                {"name": "owner", "type": "address"},
                {"name": "currency", "type": "address"},
                {"name": "amount", "type": "uint256"},
            ],
        },
        "primaryType": "Transaction",
    }


def build_message(draft: TransactionDraft, limits: ProtocolLimits = DEFAULT_LIMITS) -> dict[str, Any]:
    """Build the Transaction message with zero-padded input and output slots."""
    message: dict[str, Any] = {}

    for i in range(limits.max_inputs):
        if i < len(draft.inputs):
            utxo = draft.inputs[i]
            message[f"input{i}"] = {
                "blknum": utxo.blknum,
                "txindex": utxo.txindex,
                "oindex": utxo.oindex,
            }
        else:
            message[f"input{i}"] = {"blknum": 0, "txindex": 0, "oindex": 0}

    zero = to_hex(ZERO_ADDRESS)
    for i in range(limits.max_outputs):
        if i < len(draft.outputs):
            output = draft.outputs[i]
            message[f"output{i}"] = {
                "owner": to_hex(output.owner) if output.owner is not None else zero,
                "currency": to_hex(output.currency),
                "amount": output.amount,
            }
        else:
            message[f"output{i}"] = {"owner": zero, "currency": zero, "amount": 0}

    message["metadata"] = to_hex(draft.metadata or EMPTY_METADATA)
    return message


def build_typed_data(
    draft: TransactionDraft,
    domain: dict[str, Any],
    limits: ProtocolLimits = DEFAULT_LIMITS,
) -> dict[str, Any]:
    """Full typed data sign request for a draft."""
    return {
        "domain": domain,
        "message": build_message(draft, limits),
        **eip712_types_specification(limits),
    }


def include_typed_data(
    drafts: list[TransactionDraft],
    domain: dict[str, Any],
    limits: ProtocolLimits = DEFAULT_LIMITS,
) -> list[TransactionDraft]:
    """Attach typed data to drafts that do not carry it yet."""
    for draft in drafts:
        if draft.typed_data is None:
            draft.typed_data = build_typed_data(draft, domain, limits)
    return drafts

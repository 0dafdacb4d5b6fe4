"""
Core data models using Pydantic for validation and serialization.

Addresses, currencies and binary blobs are held as ``bytes`` and accept
``0x``-prefixed hex on input. They serialize back to hex in JSON mode.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    model_validator,
)

from txadvisor.constants import ADDRESS_LENGTH, METADATA_LENGTH

# Position encoding multipliers for (blknum, txindex, oindex)
BLOCK_OFFSET = 1_000_000_000
TX_OFFSET = 10_000


def to_hex(data: bytes) -> str:
    """Encode bytes as a 0x-prefixed lowercase hex string."""
    return "0x" + data.hex()


def from_hex(value: str) -> bytes:
    """Decode a hex string, with or without the 0x prefix."""
    if value.startswith(("0x", "0X")):
        value = value[2:]
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise ValueError(f"Invalid hex string: {value!r}") from e


def _decode_bytes(value: Any) -> Any:
    if isinstance(value, str):
        return from_hex(value)
    return value


def _decode_address(value: Any) -> Any:
    value = _decode_bytes(value)
    if isinstance(value, bytes) and len(value) != ADDRESS_LENGTH:
        raise ValueError(f"Address must be {ADDRESS_LENGTH} bytes, got {len(value)}")
    return value


HexBytes = Annotated[
    bytes,
    BeforeValidator(_decode_bytes),
    PlainSerializer(to_hex, return_type=str, when_used="json"),
]

Address = Annotated[
    bytes,
    BeforeValidator(_decode_address),
    PlainSerializer(to_hex, return_type=str, when_used="json"),
]


class Utxo(BaseModel):
    """
    An unspent transaction output as fetched from storage.

    ``utxo_hash`` identifies the output for set-membership checks. Storage
    may supply it; otherwise it is derived from the output's content.
    """

    model_config = ConfigDict(frozen=True)

    blknum: int = Field(..., ge=0)
    txindex: int = Field(..., ge=0)
    oindex: int = Field(..., ge=0)
    owner: Address
    currency: Address
    amount: int = Field(..., gt=0)
    utxo_hash: HexBytes | None = None

    @model_validator(mode="after")
    def set_utxo_hash_default(self) -> Utxo:
        """Derive the content hash when storage did not provide one."""
        if self.utxo_hash is None:
            object.__setattr__(self, "utxo_hash", self.compute_hash())
        return self

    @property
    def position(self) -> int:
        """Single-integer encoding of (blknum, txindex, oindex)."""
        return self.blknum * BLOCK_OFFSET + self.txindex * TX_OFFSET + self.oindex

    def compute_hash(self) -> bytes:
        preimage = (
            self.position.to_bytes(32, "big")
            + self.owner
            + self.currency
            + self.amount.to_bytes(32, "big")
        )
        return hashlib.sha256(preimage).digest()


class Payment(BaseModel):
    """A payment to an owner. ``owner`` is None for find-funds-only orders."""

    owner: Address | None = None
    currency: Address
    amount: int = Field(..., gt=0)


class Fee(BaseModel):
    currency: Address
    amount: int = Field(..., ge=0)


class Order(BaseModel):
    """A spender's payment order."""

    owner: Address
    payments: list[Payment] = Field(..., min_length=1)
    fee: Fee
    metadata: HexBytes | None = None

    @model_validator(mode="after")
    def validate_metadata_length(self) -> Order:
        if self.metadata is not None and len(self.metadata) != METADATA_LENGTH:
            raise ValueError(f"Metadata must be {METADATA_LENGTH} bytes, got {len(self.metadata)}")
        return self


class MissingFunds(BaseModel):
    """Shortfall in one currency, as reported to API consumers."""

    currency: str
    missing: int = Field(..., gt=0)


class TransactionDraft(BaseModel):
    """
    Unsigned transaction handed to the signer.

    ``txbytes`` and ``sign_hash`` are filled by the transaction encoder and
    stay None for advisory calls where some output has no owner.
    """

    inputs: list[Utxo] = Field(..., min_length=1)
    outputs: list[Payment] = Field(..., min_length=1)
    fee: Fee
    metadata: HexBytes | None = None
    txbytes: HexBytes | None = None
    sign_hash: HexBytes | None = None
    typed_data: dict[str, Any] | None = None


@dataclass
class CurrencySelection:
    """Result of greedy selection for one currency.

    variance <= 0 means the need is covered, variance > 0 is the shortfall.
    """

    currency: bytes
    variance: int
    utxos: list[Utxo] = field(default_factory=list)

    @property
    def is_sufficient(self) -> bool:
        return self.variance <= 0


AvailableUtxos = dict[bytes, list[Utxo]]
SelectedUtxos = dict[bytes, list[Utxo]]

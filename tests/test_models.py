"""
Tests for data models.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from txadvisor.models import (
    CurrencySelection,
    Fee,
    MissingFunds,
    Order,
    Payment,
    TransactionDraft,
    Utxo,
    from_hex,
    to_hex,
)
from tests.conftest import ALICE, BOB, ETH, OMG


class TestHex:
    def test_to_hex(self) -> None:
        assert to_hex(b"\x00\xab") == "0x00ab"

    def test_from_hex_with_and_without_prefix(self) -> None:
        assert from_hex("0x00ab") == b"\x00\xab"
        assert from_hex("00AB") == b"\x00\xab"

    def test_from_hex_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")


class TestUtxo:
    def test_accepts_hex_addresses(self) -> None:
        utxo = Utxo(
            blknum=1000,
            txindex=1,
            oindex=2,
            owner=to_hex(ALICE),
            currency=to_hex(OMG),
            amount=10,
        )
        assert utxo.owner == ALICE
        assert utxo.currency == OMG

    def test_rejects_short_address(self) -> None:
        with pytest.raises(ValidationError):
            Utxo(blknum=1, txindex=0, oindex=0, owner="0x01", currency=ETH, amount=1)

    def test_amount_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Utxo(blknum=1, txindex=0, oindex=0, owner=ALICE, currency=ETH, amount=0)

    def test_position(self) -> None:
        utxo = Utxo(blknum=2, txindex=3, oindex=1, owner=ALICE, currency=ETH, amount=1)
        assert utxo.position == 2_000_030_001

    def test_hash_derived_from_content(self) -> None:
        a = Utxo(blknum=1000, txindex=0, oindex=0, owner=ALICE, currency=ETH, amount=5)
        b = Utxo(blknum=1000, txindex=0, oindex=0, owner=ALICE, currency=ETH, amount=5)
        c = Utxo(blknum=1000, txindex=0, oindex=1, owner=ALICE, currency=ETH, amount=5)

        assert a.utxo_hash is not None
        assert len(a.utxo_hash) == 32
        assert a.utxo_hash == b.utxo_hash
        assert a.utxo_hash != c.utxo_hash

    def test_storage_hash_kept(self) -> None:
        utxo = Utxo(
            blknum=1, txindex=0, oindex=0, owner=ALICE, currency=ETH, amount=5, utxo_hash="0xabcd"
        )
        assert utxo.utxo_hash == b"\xab\xcd"

    def test_frozen(self) -> None:
        utxo = Utxo(blknum=1, txindex=0, oindex=0, owner=ALICE, currency=ETH, amount=5)
        with pytest.raises(ValidationError):
            utxo.amount = 6  # type: ignore[misc]

    def test_json_dump_uses_hex(self) -> None:
        utxo = Utxo(blknum=1, txindex=0, oindex=0, owner=ALICE, currency=ETH, amount=5)
        data = utxo.model_dump(mode="json")

        assert data["owner"] == to_hex(ALICE)
        assert data["currency"] == "0x" + "00" * 20
        assert data["utxo_hash"].startswith("0x")


class TestOrder:
    def test_requires_payments(self) -> None:
        with pytest.raises(ValidationError):
            Order(owner=ALICE, payments=[], fee=Fee(currency=ETH, amount=0))

    def test_payment_owner_optional(self) -> None:
        payment = Payment(currency=ETH, amount=1)
        assert payment.owner is None

    def test_payment_amount_positive(self) -> None:
        with pytest.raises(ValidationError):
            Payment(owner=BOB, currency=ETH, amount=0)

    def test_fee_may_be_zero(self) -> None:
        assert Fee(currency=ETH, amount=0).amount == 0
        with pytest.raises(ValidationError):
            Fee(currency=ETH, amount=-1)

    def test_metadata_length(self) -> None:
        fee = Fee(currency=ETH, amount=0)
        payments = [Payment(owner=BOB, currency=ETH, amount=1)]

        order = Order(owner=ALICE, payments=payments, fee=fee, metadata="0x" + "11" * 32)
        assert order.metadata == bytes([0x11]) * 32

        with pytest.raises(ValidationError):
            Order(owner=ALICE, payments=payments, fee=fee, metadata="0x1234")

    def test_parse_json(self) -> None:
        order = Order.model_validate_json(
            '{"owner": "%s", "payments": [{"owner": null, "currency": "%s", "amount": 7}],'
            ' "fee": {"currency": "%s", "amount": 1}}' % (to_hex(ALICE), to_hex(OMG), to_hex(ETH))
        )
        assert order.payments[0].owner is None
        assert order.payments[0].currency == OMG
        assert order.fee.amount == 1


class TestMissingFunds:
    def test_shape(self) -> None:
        missing = MissingFunds(currency=to_hex(ETH), missing=20)
        assert missing.model_dump() == {"currency": to_hex(ETH), "missing": 20}


class TestCurrencySelection:
    def test_is_sufficient(self) -> None:
        assert CurrencySelection(currency=ETH, variance=0).is_sufficient
        assert CurrencySelection(currency=ETH, variance=-5).is_sufficient
        assert not CurrencySelection(currency=ETH, variance=1).is_sufficient


class TestTransactionDraft:
    def test_requires_inputs_and_outputs(self) -> None:
        utxo = Utxo(blknum=1, txindex=0, oindex=0, owner=ALICE, currency=ETH, amount=5)
        payment = Payment(owner=BOB, currency=ETH, amount=5)
        fee = Fee(currency=ETH, amount=0)

        with pytest.raises(ValidationError):
            TransactionDraft(inputs=[], outputs=[payment], fee=fee)
        with pytest.raises(ValidationError):
            TransactionDraft(inputs=[utxo], outputs=[], fee=fee)

        draft = TransactionDraft(inputs=[utxo], outputs=[payment], fee=fee)
        assert draft.txbytes is None
        assert draft.sign_hash is None
        assert draft.typed_data is None

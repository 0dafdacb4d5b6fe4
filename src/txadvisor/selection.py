"""
UTXO selection and stealth merge.

Selection is greedy and deterministic for a given input ordering. Each
currency's UTXO list must be sorted descending by amount; storage sorts it
once and ``select_utxos`` checks it.

Stealth merge folds extra low-value UTXOs of currencies already spent in
the transaction into the free input slots, shrinking the owner's UTXO set
without adding outputs.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from txadvisor.config import DEFAULT_LIMITS, ProtocolLimits
from txadvisor.errors import (
    InsufficientFundsError,
    MergeInvariantError,
    TooManyInputsError,
    UnsortedUtxosError,
)
from txadvisor.models import (
    AvailableUtxos,
    CurrencySelection,
    Fee,
    MissingFunds,
    Order,
    Payment,
    SelectedUtxos,
    Utxo,
    to_hex,
)


def needed_funds(payments: Iterable[Payment], fee: Fee) -> dict[bytes, int]:
    """Sum payable amounts by currency, including the fee."""
    needed: dict[bytes, int] = {}
    for payment in payments:
        needed[payment.currency] = needed.get(payment.currency, 0) + payment.amount

    needed[fee.currency] = needed.get(fee.currency, 0) + fee.amount
    return needed


def check_sorted_descending(currency: bytes, utxos: list[Utxo]) -> None:
    """Raise UnsortedUtxosError unless amounts never increase along the list."""
    for prev, curr in zip(utxos, utxos[1:]):
        if curr.amount > prev.amount:
            raise UnsortedUtxosError(
                f"UTXOs for currency {to_hex(currency)} are not sorted descending by amount: "
                f"{prev.amount} precedes {curr.amount}"
            )


def select_utxos(available: AvailableUtxos, needed: dict[bytes, int]) -> list[CurrencySelection]:
    """
    Select UTXOs covering the needed amount of each currency.

    First looks for a single UTXO matching the need exactly, which avoids a
    change output. Otherwise collects UTXOs from the largest down until the
    need is covered or the currency runs out.

    Args:
        available: UTXOs by currency, each list sorted descending by amount
        needed: Amount needed by currency

    Returns:
        One CurrencySelection per needed currency, ordered by currency. A
        positive variance is the amount still missing.

    Raises:
        UnsortedUtxosError: If a currency's UTXOs are not sorted descending
    """
    selection: list[CurrencySelection] = []

    for currency, need in sorted(needed.items()):
        utxos = available.get(currency, [])
        check_sorted_descending(currency, utxos)

        exact = next((utxo for utxo in utxos if utxo.amount == need), None)
        if exact is not None:
            logger.debug(f"Exact match for {to_hex(currency)}: {exact.amount}")
            selection.append(CurrencySelection(currency=currency, variance=0, utxos=[exact]))
            continue

        remaining = need
        chosen: list[Utxo] = []
        for utxo in utxos:
            if remaining <= 0:
                break
            chosen.append(utxo)
            remaining -= utxo.amount

        logger.debug(
            f"Greedy selection for {to_hex(currency)}: need={need}, "
            f"chosen={len(chosen)}, variance={remaining}"
        )
        selection.append(CurrencySelection(currency=currency, variance=remaining, utxos=chosen))

    return selection


def funds_sufficient(selection: list[CurrencySelection]) -> SelectedUtxos:
    """
    Check that every currency in the selection is covered.

    Raises:
        InsufficientFundsError: With the missing amount per short currency
    """
    missing = [
        MissingFunds(currency=to_hex(entry.currency), missing=entry.variance)
        for entry in selection
        if not entry.is_sufficient
    ]
    if missing:
        raise InsufficientFundsError(missing)

    return {entry.currency: entry.utxos for entry in selection}


def count_utxos(utxos_by_currency: SelectedUtxos) -> int:
    return sum(len(utxos) for utxos in utxos_by_currency.values())


def prioritize_merge_utxos(
    selected: SelectedUtxos,
    available: AvailableUtxos,
    limits: ProtocolLimits = DEFAULT_LIMITS,
) -> list[Utxo]:
    """
    Rank unselected UTXOs as stealth merge candidates.

    - Only currencies already in the selection are considered.
    - Currencies with the most unselected UTXOs come first.
    - Within a currency, smallest amounts come first ("dust first").
    - At most ``merge_cap_per_currency`` candidates per currency.
    """
    selected_hashes = {utxo.utxo_hash for utxos in selected.values() for utxo in utxos}

    groups = [
        sorted(
            (utxo for utxo in available.get(currency, []) if utxo.utxo_hash not in selected_hashes),
            key=lambda u: u.amount,
        )
        for currency in selected
    ]
    groups.sort(key=len, reverse=True)

    return [utxo for group in groups for utxo in group[: limits.merge_cap_per_currency]]


def add_utxos_for_stealth_merge(
    selected: SelectedUtxos,
    candidates: list[Utxo],
    limits: ProtocolLimits = DEFAULT_LIMITS,
) -> SelectedUtxos:
    """
    Add merge candidates to the selection until the input slots are full.

    Candidates are taken in the given order and prepended to their
    currency's list. Neither argument is mutated.

    Raises:
        MergeInvariantError: If a candidate's currency is not in the selection
    """
    merged = {currency: list(utxos) for currency, utxos in selected.items()}
    count = count_utxos(merged)

    for candidate in candidates:
        if count >= limits.max_inputs:
            break
        if candidate.currency not in merged:
            raise MergeInvariantError(
                f"Merge candidate in currency {to_hex(candidate.currency)} "
                f"which is not part of the selection"
            )
        merged[candidate.currency].insert(0, candidate)
        count += 1
        logger.debug(f"Stealth merge: added {candidate.amount} of {to_hex(candidate.currency)}")

    return merged


def select_inputs(
    available: AvailableUtxos,
    order: Order,
    limits: ProtocolLimits = DEFAULT_LIMITS,
) -> SelectedUtxos:
    """
    Find the spender's inputs for an order, including stealth merge inputs.

    Raises:
        InsufficientFundsError: If some currency cannot be covered
        TooManyInputsError: If covering the order needs more than max_inputs
    """
    needed = needed_funds(order.payments, order.fee)
    funds = funds_sufficient(select_utxos(available, needed))

    utxo_count = count_utxos(funds)
    if utxo_count > limits.max_inputs:
        raise TooManyInputsError(utxo_count, limits.max_inputs)

    candidates = prioritize_merge_utxos(funds, available, limits)
    return add_utxos_for_stealth_merge(funds, candidates, limits)

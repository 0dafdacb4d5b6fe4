"""
txadvisor - UTXO selection and transaction advice for plasma payments

Selects a spender's inputs for a payment order, merges dust into free input
slots and assembles the unsigned transaction.
"""

__version__ = "0.1.0"

from txadvisor.advice import Advice, Created, advise, create_advice
from txadvisor.assembly import create_transaction
from txadvisor.config import DEFAULT_LIMITS, ProtocolLimits, Settings, get_settings
from txadvisor.constants import MAX_INPUTS, MAX_OUTPUTS, MERGE_CAP_PER_CURRENCY
from txadvisor.encoding import TransactionEncoder
from txadvisor.errors import (
    AdviceError,
    AdviceErrorCode,
    EmptyTransactionError,
    EngineInvariantError,
    InsufficientFundsError,
    MergeInvariantError,
    TooManyInputsError,
    TooManyOutputsError,
    UnsortedUtxosError,
)
from txadvisor.models import Fee, MissingFunds, Order, Payment, TransactionDraft, Utxo
from txadvisor.selection import (
    add_utxos_for_stealth_merge,
    funds_sufficient,
    needed_funds,
    prioritize_merge_utxos,
    select_inputs,
    select_utxos,
)
from txadvisor.service import TransactionService
from txadvisor.storage import InMemoryUtxoProvider, UtxoProvider

__all__ = [
    "Advice",
    "AdviceError",
    "AdviceErrorCode",
    "Created",
    "DEFAULT_LIMITS",
    "EmptyTransactionError",
    "EngineInvariantError",
    "Fee",
    "InMemoryUtxoProvider",
    "InsufficientFundsError",
    "MAX_INPUTS",
    "MAX_OUTPUTS",
    "MERGE_CAP_PER_CURRENCY",
    "MergeInvariantError",
    "MissingFunds",
    "Order",
    "Payment",
    "ProtocolLimits",
    "Settings",
    "TooManyInputsError",
    "TooManyOutputsError",
    "TransactionDraft",
    "TransactionEncoder",
    "TransactionService",
    "UnsortedUtxosError",
    "Utxo",
    "UtxoProvider",
    "add_utxos_for_stealth_merge",
    "advise",
    "create_advice",
    "create_transaction",
    "funds_sufficient",
    "get_settings",
    "needed_funds",
    "prioritize_merge_utxos",
    "select_inputs",
    "select_utxos",
]

"""
Advice errors.

``AdviceError`` subclasses are expected outcomes of a selection request
(data conditions the caller can act on). ``EngineInvariantError``
subclasses are programming errors and are never turned into advice.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from txadvisor.models import MissingFunds


class AdviceErrorCode(str, Enum):
    INSUFFICIENT_FUNDS = "insufficient_funds"
    TOO_MANY_INPUTS = "too_many_inputs"
    TOO_MANY_OUTPUTS = "too_many_outputs"
    EMPTY_TRANSACTION = "empty_transaction"


class AdviceError(Exception):
    """Base class for rejected advice requests."""

    code: AdviceErrorCode

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code.value}


class InsufficientFundsError(AdviceError):
    """Available UTXOs do not cover the order in one or more currencies."""

    code = AdviceErrorCode.INSUFFICIENT_FUNDS

    def __init__(self, missing: list[MissingFunds]):
        self.missing = missing
        summary = ", ".join(f"{m.currency}: {m.missing}" for m in missing)
        super().__init__(f"Insufficient funds ({summary})")

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code.value, "missing": [m.model_dump() for m in self.missing]}


class TooManyInputsError(AdviceError):
    code = AdviceErrorCode.TOO_MANY_INPUTS

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"Order needs {count} inputs, transaction allows {limit}")


class TooManyOutputsError(AdviceError):
    code = AdviceErrorCode.TOO_MANY_OUTPUTS

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"Order needs {count} outputs, transaction allows {limit}")


class EmptyTransactionError(AdviceError):
    code = AdviceErrorCode.EMPTY_TRANSACTION

    def __init__(self) -> None:
        super().__init__("No inputs selected for transaction")


class EngineInvariantError(Exception):
    """Raised when an internal precondition of the engine is violated."""

    pass


class UnsortedUtxosError(EngineInvariantError):
    """UTXOs for a currency are not sorted descending by amount."""

    pass


class MergeInvariantError(EngineInvariantError):
    """A merge candidate belongs to a currency outside the selection."""

    pass

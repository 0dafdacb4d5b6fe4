"""
Transaction advice service.

Fetches the spender's UTXOs from a provider and runs the advice pipeline
on that snapshot. The snapshot is not reserved: two concurrent requests
may pick the same UTXOs, and the child chain rejects whichever spends
them second.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from txadvisor.advice import Advice, Created, create_advice
from txadvisor.config import DEFAULT_LIMITS, ProtocolLimits
from txadvisor.encoding import TransactionEncoder
from txadvisor.errors import AdviceError
from txadvisor.models import Order, SelectedUtxos, TransactionDraft, to_hex
from txadvisor.selection import select_inputs
from txadvisor.storage import UtxoProvider


class TransactionService:
    """
    Creates transaction advice for payment orders.

    The service keeps no state between requests besides its collaborators.
    """

    def __init__(
        self,
        provider: UtxoProvider,
        encoder: TransactionEncoder | None = None,
        limits: ProtocolLimits = DEFAULT_LIMITS,
        domain: dict[str, Any] | None = None,
    ):
        self.provider = provider
        self.encoder = encoder
        self.limits = limits
        self.domain = domain

    async def select_inputs(self, order: Order) -> SelectedUtxos:
        """Find the inputs an order would spend, without assembling a transaction."""
        available = await self.provider.get_sorted_grouped_utxos(order.owner)
        return select_inputs(available, order, self.limits)

    async def create(self, order: Order) -> list[TransactionDraft]:
        """
        Create transaction drafts for an order.

        Raises:
            AdviceError: If the order cannot be turned into a transaction
        """
        available = await self.provider.get_sorted_grouped_utxos(order.owner)

        try:
            drafts = create_advice(available, order, self.encoder, self.limits, self.domain)
        except AdviceError as e:
            logger.warning(f"Advice for {to_hex(order.owner)} rejected: {e}")
            raise

        logger.info(
            f"Created advice for {to_hex(order.owner)}: "
            f"{len(drafts[0].inputs)} inputs, {len(drafts[0].outputs)} outputs"
        )
        return drafts

    async def advise(self, order: Order) -> Advice:
        """Like ``create`` but returns the rejection instead of raising it."""
        try:
            return Created(await self.create(order))
        except AdviceError as e:
            return e

    async def close(self) -> None:
        await self.provider.close()

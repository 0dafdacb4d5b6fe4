"""
Command-line interface for the transaction advisor.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from txadvisor.advice import Created
from txadvisor.config import get_settings
from txadvisor.errors import AdviceError
from txadvisor.models import Order, Utxo, to_hex
from txadvisor.service import TransactionService
from txadvisor.storage import InMemoryUtxoProvider

app = typer.Typer(
    name="txadvisor",
    help="UTXO selection and transaction advice",
    add_completion=False,
)

UtxoFile = Annotated[
    Path, typer.Option("--utxos", "-u", help="JSON file with the spender's UTXOs", exists=True)
]
OrderFile = Annotated[
    Path, typer.Option("--order", "-o", help="JSON file with the payment order", exists=True)
]
LogLevel = Annotated[str | None, typer.Option("--log-level", "-l", help="Log level")]


def setup_logging(level: str) -> None:
    """Configure loguru logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def load_inputs(utxos_file: Path, order_file: Path) -> tuple[list[Utxo], Order]:
    """Load and validate the UTXO snapshot and the order."""
    try:
        utxos = TypeAdapter(list[Utxo]).validate_json(utxos_file.read_text())
        order = Order.model_validate_json(order_file.read_text())
    except ValidationError as e:
        logger.error(f"Invalid input: {e}")
        raise typer.Exit(2) from e
    return utxos, order


def build_service(utxos: list[Utxo]) -> TransactionService:
    settings = get_settings()
    return TransactionService(
        InMemoryUtxoProvider(utxos),
        limits=settings.limits(),
        domain=settings.typed_data_domain(),
    )


@app.command()
def create(utxos_file: UtxoFile, order_file: OrderFile, log_level: LogLevel = None) -> None:
    """Create a transaction for an order and print it as JSON."""
    setup_logging(log_level or get_settings().log_level)
    utxos, order = load_inputs(utxos_file, order_file)
    service = build_service(utxos)

    match asyncio.run(service.advise(order)):
        case Created() as created:
            typer.echo(json.dumps(created.to_dict(), indent=2))
        case AdviceError() as error:
            typer.echo(json.dumps(error.to_dict(), indent=2))
            raise typer.Exit(1)


@app.command()
def select(utxos_file: UtxoFile, order_file: OrderFile, log_level: LogLevel = None) -> None:
    """Print the inputs an order would spend, by currency."""
    setup_logging(log_level or get_settings().log_level)
    utxos, order = load_inputs(utxos_file, order_file)
    service = build_service(utxos)

    try:
        selected = asyncio.run(service.select_inputs(order))
    except AdviceError as e:
        typer.echo(json.dumps(e.to_dict(), indent=2))
        raise typer.Exit(1) from e

    result = {
        to_hex(currency): [utxo.model_dump(mode="json") for utxo in selected_utxos]
        for currency, selected_utxos in selected.items()
    }
    typer.echo(json.dumps(result, indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()

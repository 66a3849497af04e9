#!/usr/bin/env python3
"""Simple CLI for running the portfolio tracker locally"""

import argparse
import asyncio
from datetime import datetime, timezone

from app.config import settings
from app.core.portfolio import Portfolio, TransactionRecord
from app.errors import InvalidAddress
from app.logging_config import setup_logging
from app.services.factory import build_portfolio_service, build_transaction_provider


def print_portfolio(portfolio: Portfolio):
    """Pretty print portfolio data"""
    print("\n📊 Portfolio Analysis")
    print("=" * 50)
    print(f"Address: {portfolio.address}")
    print(f"Total Value: ${portfolio.total_value:,.2f} USD")

    for chain in portfolio.chains:
        native = chain.native_balance
        print(f"\n{chain.chain.title()}  ${chain.total_value:,.2f}")
        print("-" * 50)
        print(f"    {native.amount:>14,.4f} {native.symbol:<8} ${native.value_usd:>12,.2f}")
        for token in chain.tokens:
            price_str = f"@ ${token.unit_price:,.4f}" if token.unit_price else "No price"
            print(f"    {token.balance:>14,.4f} {token.name:<16} ${token.value:>12,.2f} {price_str}")

    if portfolio.failures:
        print("\n⚠️  Unavailable chains:")
        for failure in portfolio.failures:
            print(f"   {failure.chain}: {failure.reason}")


def print_transactions(records: list[TransactionRecord]):
    if not records:
        print("No transactions")
        return
    for tx in records:
        when = datetime.fromtimestamp(tx.timestamp / 1000, tz=timezone.utc)
        arrow = "→" if tx.direction.value == "sent" else "←"
        print(f"{when:%Y-%m-%d} {tx.direction.value.upper():<8} {tx.value} {arrow} {tx.recipient}")
        print(f"    {tx.hash}")


async def cli_portfolio(address: str):
    """CLI command to get portfolio"""
    print(f"🔍 Fetching portfolio for {address} across {', '.join(settings.portfolio_chains)}...")

    service = build_portfolio_service(settings)
    try:
        portfolio = await service.build_portfolio(address)
    except InvalidAddress as e:
        print(f"❌ {e.message}: {address}")
        return
    print_portfolio(portfolio)


async def cli_transactions(address: str):
    """CLI command to list (placeholder) transactions"""
    provider = build_transaction_provider(settings)
    print_transactions(await provider.fetch_transactions(address))


def cli_serve(host: str, port: int, reload: bool):
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower()
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Crypto Portfolio Tracker CLI")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command")

    portfolio_parser = subparsers.add_parser("portfolio", help="Get multi-chain portfolio snapshot")
    portfolio_parser.add_argument("address", help="Wallet address")

    tx_parser = subparsers.add_parser("transactions", help="List recent transactions")
    tx_parser.add_argument("address", help="Wallet address")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.host)
    serve_parser.add_argument("--port", type=int, default=settings.port)
    serve_parser.add_argument("--reload", action="store_true")

    return parser


async def main(args: argparse.Namespace):
    command = args.command.lower()

    if command == "portfolio":
        await cli_portfolio(args.address)

    elif command == "transactions":
        await cli_transactions(args.address)


if __name__ == "__main__":
    parser = build_parser()
    args = parser.parse_args()
    setup_logging(args.log_level)

    if not args.command:
        parser.print_help()
    elif args.command == "serve":
        cli_serve(args.host, args.port, args.reload)
    else:
        asyncio.run(main(args))

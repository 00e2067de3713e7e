#!/usr/bin/env python3
"""
Example: Fetch and display the margin account snapshot.

This example demonstrates how to:
1. Create a margin client from environment variables
2. Fetch the margin account (flags, margin level, BTC totals)
3. Print non-empty per-asset balances
4. Tell exchange rejections apart from transport and decode failures

Prerequisites:
- Set BINANCE_API_KEY and BINANCE_API_SECRET (or put them in a .env file)
- pip install -e .

Usage:
    python examples/margin_account_info.py
"""

import asyncio
import logging

from binance_margin import (
    AccountRequest,
    ApiError,
    MarginClient,
    ResponseDecodeError,
    TransportError,
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def print_section_header(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f" {title.upper()} ".center(70, "="))
    print("=" * 70)


def print_account(account):
    print_section_header("Margin Account")
    print(f"Borrow Enabled:    {account.borrow_enabled}")
    print(f"Trade Enabled:     {account.trade_enabled}")
    print(f"Transfer Enabled:  {account.transfer_enabled}")
    print(f"Margin Level:      {account.margin_level}")
    print(f"Total Asset:       {account.total_asset_of_btc} BTC")
    print(f"Total Liability:   {account.total_liability_of_btc} BTC")
    print(f"Net Asset:         {account.total_net_asset_of_btc} BTC")

    print_section_header("Assets")
    print(f"{'Asset':<8} {'Free':>18} {'Locked':>18} {'Borrowed':>18} {'Net':>18}")
    print("-" * 84)
    for asset in account.user_assets:
        if not (asset.free or asset.locked or asset.borrowed):
            continue
        print(f"{asset.asset:<8} {asset.free:>18} {asset.locked:>18} "
              f"{asset.borrowed:>18} {asset.net_asset:>18}")


async def main():
    async with MarginClient.from_env() as client:
        try:
            account = await client.get_margin_account(AccountRequest(recv_window=10000))
        except ApiError as e:
            logger.error(f"Exchange rejected the request: code={e.code} msg={e.msg}")
            return
        except TransportError as e:
            logger.error(f"Could not reach the exchange: {e}")
            return
        except ResponseDecodeError as e:
            logger.error(f"Could not understand the exchange response: {e}")
            return

        print_account(account)


if __name__ == "__main__":
    asyncio.run(main())

#!/usr/bin/env python3
"""
Example: Borrow USDT, place a margin limit order, then look it up.

WARNING: this places a real order on the configured account. Point
BINANCE_BASE_URL at a test environment first.

Usage:
    python examples/margin_borrow_and_order.py
"""

import asyncio
import logging
from decimal import Decimal

from binance_margin import (
    BorrowRequest,
    MarginClient,
    NewOrderRequest,
    OrderSide,
    OrderType,
    QueryOrderRequest,
    TimeInForce,
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SYMBOL = "BTCUSDT"
BORROW_AMOUNT = Decimal("50")
QUANTITY = Decimal("0.001")
LIMIT_PRICE = Decimal("20000")


async def main():
    async with MarginClient.from_env() as client:
        loan = await client.borrow(BorrowRequest(asset="USDT", amount=BORROW_AMOUNT))
        logger.info(f"Borrowed {BORROW_AMOUNT} USDT (tranId={loan.tran_id})")

        order = await client.new_order(NewOrderRequest(
            symbol=SYMBOL,
            side=OrderSide.BUY,
            order_type=OrderType.LIMIT,
            quantity=QUANTITY,
            price=LIMIT_PRICE,
            time_in_force=TimeInForce.GTC,
        ))
        logger.info(f"Placed order {order.order_id} at {order.transact_time.isoformat()}")

        status = await client.query_order(QueryOrderRequest(symbol=SYMBOL, order_id=order.order_id))
        logger.info(
            f"Order {status.order_id}: {status.status}, "
            f"filled {status.executed_qty}/{status.orig_qty}"
        )

        stats = client.get_statistics()
        logger.info(f"{stats.total_calls} calls, {stats.failed} failed")


if __name__ == "__main__":
    asyncio.run(main())

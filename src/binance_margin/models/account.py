"""
Account-related models for the Binance margin client.

Immutable data structures for borrow/repay requests and margin account
information.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple


@dataclass(frozen=True)
class BorrowRequest:
    """Borrow or repay request; both endpoints share this shape."""
    asset: str
    amount: Decimal
    recv_window: Optional[int] = None  # milliseconds
    timestamp: Optional[datetime] = None  # now when unset


RepayRequest = BorrowRequest


@dataclass(frozen=True)
class AccountRequest:
    """Margin account query request."""
    recv_window: Optional[int] = None
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class MarginAssetRequest:
    """Margin asset query request (API key only, not signed)."""
    asset: str


@dataclass(frozen=True)
class MarginTransaction:
    """Result of a borrow or repay call."""
    tran_id: int


@dataclass(frozen=True)
class UserAsset:
    """Per-asset balance in the margin account."""
    asset: str
    free: Decimal
    locked: Decimal
    borrowed: Decimal
    interest: Decimal
    net_asset: Decimal


@dataclass(frozen=True)
class MarginAccount:
    """Margin account snapshot."""
    borrow_enabled: bool
    trade_enabled: bool
    transfer_enabled: bool
    margin_level: Decimal
    total_asset_of_btc: Decimal
    total_liability_of_btc: Decimal
    total_net_asset_of_btc: Decimal
    user_assets: Tuple[UserAsset, ...]

    def get_asset(self, asset: str) -> Optional[UserAsset]:
        """Return the balance entry for ``asset`` if present."""
        for user_asset in self.user_assets:
            if user_asset.asset == asset:
                return user_asset
        return None


@dataclass(frozen=True)
class MarginAsset:
    """Margin asset details."""
    asset_full_name: str
    asset_name: str
    is_borrowable: bool
    is_mortgageable: bool
    user_min_borrow: Decimal
    user_min_repay: Decimal

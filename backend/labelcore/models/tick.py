"""Bid/ask tick data model."""

from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict


class Tick(BaseModel):
    """A single bid/ask quote.

    ask >= bid is assumed but not enforced.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    bid: Decimal
    ask: Decimal

    @property
    def mid_price(self) -> Decimal:
        """Get the midpoint between bid and ask."""
        return (self.bid + self.ask) / 2

    @property
    def spread(self) -> Decimal:
        """Get the quoted spread (ask - bid)."""
        return self.ask - self.bid

    def entry_price(self, is_long: bool) -> Decimal:
        """Price paid to open a position: ask for longs, bid for shorts."""
        return self.ask if is_long else self.bid

    def mark_price(self, is_long: bool) -> Decimal:
        """Price received to close a position: bid for longs, ask for shorts."""
        return self.bid if is_long else self.ask

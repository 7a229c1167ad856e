"""
Volume Profile Data Models.

- Trade: Individual tick trade with aggressor side, used to build
  per-bar profiles when the host supplies raw trades instead of levels
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


@dataclass
class Trade:
    """
    Single trade from the exchange tape.

    Represents one executed trade with price, size, and aggressor side.
    """

    timestamp: datetime
    price: float
    size: float
    side: Literal["B", "A"]  # B=buy aggressor (hit ask), A=sell aggressor (hit bid)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "price": self.price,
            "size": self.size,
            "side": self.side,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Trade":
        """Create from dictionary."""
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            price=float(data["price"]),
            size=float(data["size"]),
            side=data["side"],
        )

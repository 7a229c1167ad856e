"""
Bar and Trade Data Storage.

Loads and saves replay data:
- Parquet: Primary format (columnar, compact)
- CSV: Plain-text format for hand-edited fixtures

Usage:
    storage = BarStorage()

    storage.save_bars(bars, Path("data/bars/ES_20260120.parquet"))
    bars = list(storage.load_bars(Path("data/bars/ES_20260120.parquet")))
"""

import csv
import logging
from collections.abc import Iterable, Iterator
from datetime import datetime
from pathlib import Path
from typing import Literal, cast

import pyarrow as pa
import pyarrow.parquet as pq

from orderflow.core.models import Bar
from orderflow.indicators.volume_profile.models import Trade

logger = logging.getLogger(__name__)

BAR_COLUMNS = [
    "index",
    "timestamp",
    "open",
    "high",
    "low",
    "close",
    "volume",
    "bid_volume",
    "offer_volume",
]

TRADE_COLUMNS = ["timestamp", "price", "size", "side"]


def _resolve_format(filepath: Path, format: str) -> str:
    if format != "auto":
        return format
    return "csv" if filepath.suffix == ".csv" else "parquet"


def _check_exists(filepath: Path) -> None:
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")


def _timestamp_type(timestamps: list[datetime]) -> pa.DataType:
    """
    Arrow type for a timestamp column that keeps the values' time zone.

    Naive values are stored as-is. Aware values are stored as UTC instants
    tagged with their zone name, or with a fixed offset when they share one
    without a named zone. Mixing naive and aware values, or values from
    different zones, raises ValueError.
    """
    aware = [ts.tzinfo is not None and ts.utcoffset() is not None for ts in timestamps]
    if not any(aware):
        return pa.timestamp("us")
    if not all(aware):
        raise ValueError("Cannot store naive and time-zone aware timestamps in one file")

    keys = {getattr(ts.tzinfo, "key", None) for ts in timestamps}
    if len(keys) == 1 and None not in keys:
        return pa.timestamp("us", tz=keys.pop())

    offsets = {ts.utcoffset() for ts in timestamps}
    if len(offsets) != 1:
        raise ValueError(f"Timestamps span several UTC offsets: {sorted(offsets)}")
    seconds = int(offsets.pop().total_seconds())
    sign = "-" if seconds < 0 else "+"
    hours, minutes = divmod(abs(seconds) // 60, 60)
    return pa.timestamp("us", tz=f"{sign}{hours:02d}:{minutes:02d}")


class BarStorage:
    """
    Stores and loads bars and trades in Parquet or CSV format.

    The format is picked from the file extension (.csv, anything else
    is Parquet) unless given explicitly.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the storage.

        Args:
            verbose: Print progress information
        """
        self.verbose = verbose

    def _log(self, message: str) -> None:
        """Log message, echoing it when verbose mode is enabled."""
        if self.verbose:
            print(message)
        logger.info(message)

    # =========================================================
    # Bars
    # =========================================================

    def save_bars(self, bars: Iterable[Bar], filepath: Path, format: str = "auto") -> Path:
        """
        Save bars to file.

        Args:
            bars: Bars to save
            filepath: Output file path
            format: "parquet", "csv", or "auto" (based on extension)

        Returns:
            Path to saved file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        bars = list(bars)

        if _resolve_format(filepath, format) == "parquet":
            timestamps = [b.timestamp for b in bars]
            table = pa.table(
                {
                    "index": pa.array([b.index for b in bars], type=pa.int64()),
                    "timestamp": pa.array(timestamps, type=_timestamp_type(timestamps)),
                    "open": pa.array([b.open for b in bars], type=pa.float64()),
                    "high": pa.array([b.high for b in bars], type=pa.float64()),
                    "low": pa.array([b.low for b in bars], type=pa.float64()),
                    "close": pa.array([b.close for b in bars], type=pa.float64()),
                    "volume": pa.array([b.volume for b in bars], type=pa.float64()),
                    "bid_volume": pa.array([b.bid_volume for b in bars], type=pa.float64()),
                    "offer_volume": pa.array([b.offer_volume for b in bars], type=pa.float64()),
                }
            )
            pq.write_table(table, filepath, compression="snappy")
        else:
            with filepath.open("w", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=BAR_COLUMNS)
                writer.writeheader()
                for bar in bars:
                    writer.writerow(bar.to_dict())

        self._log(f"Saved {len(bars)} bars to {filepath}")
        return filepath

    def load_bars(self, filepath: Path) -> Iterator[Bar]:
        """
        Load bars from file.

        Missing index values are filled with the row number; missing
        volumes load as zero.

        Args:
            filepath: Path to bars file

        Yields:
            Bar objects in file order
        """
        filepath = Path(filepath)
        _check_exists(filepath)
        self._log(f"Loading bars from {filepath}")

        count = 0
        for row_number, row in enumerate(self._read_rows(filepath)):
            if row.get("index") in (None, ""):
                row = {**row, "index": row_number}
            yield Bar.from_dict(row)
            count += 1

        self._log(f"  Loaded {count} bars")

    # =========================================================
    # Trades
    # =========================================================

    def save_trades(self, trades: Iterable[Trade], filepath: Path, format: str = "auto") -> Path:
        """Save tick trades to file (Parquet or CSV)."""
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        trades = list(trades)

        if _resolve_format(filepath, format) == "parquet":
            timestamps = [t.timestamp for t in trades]
            table = pa.table(
                {
                    "timestamp": pa.array(timestamps, type=_timestamp_type(timestamps)),
                    "price": pa.array([t.price for t in trades], type=pa.float64()),
                    "size": pa.array([t.size for t in trades], type=pa.float64()),
                    "side": pa.array([t.side for t in trades], type=pa.string()),
                }
            )
            pq.write_table(table, filepath, compression="snappy")
        else:
            with filepath.open("w", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=TRADE_COLUMNS)
                writer.writeheader()
                for trade in trades:
                    writer.writerow(trade.to_dict())

        self._log(f"Saved {len(trades)} trades to {filepath}")
        return filepath

    def load_trades(
        self,
        filepath: Path,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
    ) -> Iterator[Trade]:
        """
        Load tick trades from file.

        Args:
            filepath: Path to trades file
            start_time: Optional start time filter
            end_time: Optional end time filter

        Yields:
            Trade objects
        """
        filepath = Path(filepath)
        _check_exists(filepath)
        self._log(f"Loading trades from {filepath}")

        count = 0
        for row in self._read_rows(filepath):
            timestamp = row["timestamp"]
            if isinstance(timestamp, str):
                timestamp = datetime.fromisoformat(timestamp)

            if start_time and timestamp < start_time:
                continue
            if end_time and timestamp > end_time:
                continue

            yield Trade(
                timestamp=timestamp,
                price=float(row["price"]),
                size=float(row["size"]),
                side=cast(Literal["B", "A"], row["side"]),
            )
            count += 1

        self._log(f"  Loaded {count} trades")

    def _read_rows(self, filepath: Path) -> Iterator[dict]:
        if filepath.suffix == ".csv":
            with filepath.open("r", newline="") as f:
                yield from csv.DictReader(f)
        else:
            yield from pq.read_table(filepath).to_pylist()

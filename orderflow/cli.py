#!/usr/bin/env python3
"""
Command-line interface for replaying bars through an indicator.

Usage:
    python -m orderflow.cli list
    python -m orderflow.cli replay --bars data/bars/ES.parquet --indicator delta_grid
    python -m orderflow.cli replay --bars bars.csv --trades trades.parquet --indicator poc_boxes
    python -m orderflow.cli replay --bars bars.csv --indicator candle_info --json

Indicator settings come from ORDERFLOW_* environment variables (or a
.env file); --open-hour and --tick-size override the POC settings.
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.table import Table

from orderflow.core.config import (
    CandleInfoConfig,
    DeltaGridConfig,
    PocBoxesConfig,
    load_config_from_env,
)
from orderflow.core.errors import OrderflowError
from orderflow.graphics.primitives import Container, IndicatorOutput, Shapes, Text
from orderflow.host import BarStorage, ReplayHost, build_bar_profiles
from orderflow.indicators import get_indicator, list_indicators

logger = logging.getLogger(__name__)

_CONFIGS = {
    "delta_grid": DeltaGridConfig,
    "candle_info": CandleInfoConfig,
    "poc_boxes": PocBoxesConfig,
}


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(description="Order flow indicator replay")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List available indicators")

    replay = subparsers.add_parser("replay", help="Replay bars through an indicator")
    replay.add_argument("--bars", "-b", type=Path, required=True, help="Bars file (.parquet/.csv)")
    replay.add_argument(
        "--trades", "-t", type=Path, default=None, help="Tick trades for per-bar volume profiles"
    )
    replay.add_argument(
        "--indicator",
        "-i",
        default="delta_grid",
        choices=[name for name, _ in list_indicators()],
        help="Indicator to run (default: delta_grid)",
    )
    replay.add_argument(
        "--open-hour", type=int, default=None, help="Session open hour, local time (poc_boxes)"
    )
    replay.add_argument(
        "--tick-size", type=float, default=None, help="Instrument tick size (poc_boxes)"
    )
    replay.add_argument("--json", action="store_true", help="Print JSON lines instead of a table")
    return parser


def build_config(args: argparse.Namespace):
    """Indicator config from the environment plus command-line overrides."""
    config = load_config_from_env(_CONFIGS[args.indicator])
    if isinstance(config, PocBoxesConfig):
        overrides = {}
        if args.open_hour is not None:
            overrides["session_open_hour"] = args.open_hour
        if args.tick_size is not None:
            overrides["tick_size"] = args.tick_size
        if overrides:
            config = replace(config, **overrides)
    return config


def _summarize(output: IndicatorOutput) -> str:
    """One-line text form of an output for the table view."""
    parts = []
    for item in output.items:
        children = item.children if isinstance(item, Container) else (item,)
        for child in children:
            if isinstance(child, Text):
                parts.append(f"[{child.style.fill}]{child.text}[/]")
            elif isinstance(child, Shapes):
                bottom = child.primitives[0].points[0].y.value
                parts.append(f"[{child.fill_style.color}]POC {bottom:g}[/]")
    return "  ".join(parts)


def print_table(console: Console, bars, outputs: dict[int, IndicatorOutput], title: str) -> None:
    table = Table(title=title)
    table.add_column("Bar", justify="right")
    table.add_column("Time")
    table.add_column("Graphics")

    for bar in bars:
        output = outputs[bar.index]
        table.add_row(
            str(bar.index),
            bar.timestamp.strftime("%Y-%m-%d %H:%M"),
            _summarize(output) if not output.is_empty else "[dim]-[/]",
        )

    console.print(table)


def handle_replay(args: argparse.Namespace, console: Console) -> int:
    storage = BarStorage()
    bars = list(storage.load_bars(args.bars))
    if not bars:
        console.print("[red]No bars found[/]")
        return 1

    config = build_config(args)
    indicator = get_indicator(args.indicator, config)
    host = ReplayHost(indicator, contract_tick_size=args.tick_size)

    profiles = None
    if args.trades is not None:
        tick_size = args.tick_size or getattr(config, "tick_size", 0.25)
        profiles = build_bar_profiles(bars, storage.load_trades(args.trades), tick_size)
    elif indicator.requires_volume_profile:
        logger.warning(f"{indicator.name} needs volume profiles; pass --trades to provide them")

    result = host.run(bars, profiles)

    if args.json:
        for bar in bars:
            print(json.dumps({"index": bar.index, **result.outputs[bar.index].to_dict()}))
    else:
        print_table(console, bars, result.outputs, indicator.description)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = create_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    console = Console()

    if args.command == "list":
        table = Table(title="Indicators")
        table.add_column("Name")
        table.add_column("Description")
        for name, description in list_indicators():
            table.add_row(name, description)
        console.print(table)
        return 0

    try:
        return handle_replay(args, console)
    except (OrderflowError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/]")
        return 1


if __name__ == "__main__":
    sys.exit(main())

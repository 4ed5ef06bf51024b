"""
MarketLens CLI - Command-line interface.

Runs the indicator engine over candle files on disk and prints the results
as JSON.
"""
import json
from pathlib import Path
from typing import List

import pandas as pd
import typer

from marketlens.analysis.fibonacci import fibonacci_extensions
from marketlens.analysis.price_points import analyze_price_points
from marketlens.services.indicator_service import analyze_indicators
from marketlens.shared.config.timeframes import get_time_interval_config
from marketlens.shared.models.data import (
    OHLCV,
    candles_from_frame,
    closes_of,
    convert_candles_to_ohlcv,
    series_to_frame,
)
from marketlens.shared.utils.error_policy import ValidationError

__version__ = "0.1.0"

app = typer.Typer(help="🔎 MarketLens - Technical indicator and signal engine")


def load_candles(path: Path, fmt: str) -> List[OHLCV]:
    """
    Load a candle series from a JSON or CSV file.

    JSON files hold either a list of objects with OHLCV fields or a list of
    positional rows ([ts, o, h, l, c, v] or [ts, price(, volume)]). CSV files
    need a header with the OHLCV column names.
    """
    if fmt == "csv":
        try:
            df = pd.read_csv(path)
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise ValidationError(f"Unreadable CSV file: {e}")
        return candles_from_frame(df)

    with open(path) as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Malformed JSON: {e}")

    if not isinstance(payload, list):
        raise ValidationError("Candle file must contain a JSON list")
    if not payload:
        return []
    if isinstance(payload[0], dict):
        return candles_from_frame(series_to_frame(payload))
    return convert_candles_to_ohlcv(payload)


@app.command()
def analyze(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Candle file (JSON or CSV)"),
    fmt: str = typer.Option("json", "--format", help="Input format (json/csv)"),
    interval: str = typer.Option("1h", help="Candle interval (5m/15m/30m/1h/4h/1d/1w)"),
    price_points: bool = typer.Option(False, "--price-points", help="Include entry/stop/target levels"),
):
    """
    📊 Analyze a candle file.

    Prints RSI, EMA12/26, MACD, Bollinger Bands, Stochastic RSI, the volume
    profile and the aggregated signals as JSON.
    """
    if fmt not in ("json", "csv"):
        typer.echo(f"❌ Unknown format: {fmt}", err=True)
        raise typer.Exit(code=2)

    try:
        get_time_interval_config(interval)
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=2)

    try:
        candles = load_candles(file, fmt)
        analysis = analyze_indicators(candles)
        result = {"interval": interval, "candles": len(candles), "indicators": analysis.to_dict()}

        if price_points:
            if not candles:
                raise ValidationError("Price points need at least one candle")
            current_price = float(closes_of(candles)[-1])
            result["pricePoints"] = analyze_price_points(candles, current_price, interval).to_dict()

    except ValidationError as e:
        typer.echo(f"❌ Invalid candle data: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(result, indent=2))


@app.command()
def fib(
    start: float = typer.Argument(..., help="Swing 1 start price"),
    end: float = typer.Argument(..., help="Swing 1 end price"),
    retrace: float = typer.Argument(..., help="Swing 2 end (retracement) price"),
):
    """📐 Project Fibonacci extensions from a swing and its retracement."""
    extensions = fibonacci_extensions(start, end, retrace)
    typer.echo(json.dumps(extensions.to_dict(), indent=2))


@app.command()
def version():
    """Display MarketLens version information."""
    typer.echo(f"🔎 MarketLens v{__version__}")
    typer.echo("Technical indicator and signal engine")


if __name__ == "__main__":
    app()

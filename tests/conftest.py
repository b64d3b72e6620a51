"""Pytest configuration and fixtures for the signal engine tests."""

import os
import tempfile

# Keep test runs from writing into the working directory's logs/
os.environ.setdefault("SMC_SIGNAL_LOG_DIR", tempfile.mkdtemp(prefix="smc-signal-logs-"))

import pytest

from smc_signal_engine.tools.market_data import CandleRecord, MarketQuote

DAY_MS = 24 * 60 * 60 * 1000


def build_candles(directions: str, base: float = 100.0, step: float = 1.0) -> list[CandleRecord]:
    """
    Candle series from a direction string: "u" closes above the open,
    "d" below, "f" flat.
    """
    candles = []
    for i, direction in enumerate(directions):
        open_price = base + i * 0.1
        if direction == "u":
            close_price = open_price + step
        elif direction == "d":
            close_price = open_price - step
        else:
            close_price = open_price
        candles.append(CandleRecord(
            time=1_700_000_000_000 + i * DAY_MS,
            open=open_price,
            high=max(open_price, close_price) + 0.5,
            low=min(open_price, close_price) - 0.5,
            close=close_price,
            volume=1000 + i,
        ))
    return candles


@pytest.fixture
def make_candles():
    return build_candles


@pytest.fixture
def bullish_candles() -> list[CandleRecord]:
    return build_candles("ddddduuuuu")


@pytest.fixture
def bearish_candles() -> list[CandleRecord]:
    return build_candles("uuuuuddddd")


@pytest.fixture
def flat_candles() -> list[CandleRecord]:
    return build_candles("fffff")


@pytest.fixture
def forex_candles() -> list[CandleRecord]:
    """30 EURUSD-like candles whose closes span exactly 0.01."""
    candles = []
    for i in range(30):
        close_price = 1.0884 + (0.01 if i == 16 else 0.0) + (0.0005 if i % 2 else 0.0)
        open_price = close_price - 0.0002
        candles.append(CandleRecord(
            time=1_700_000_000_000 + i * DAY_MS,
            open=open_price,
            high=close_price + 0.0003,
            low=open_price - 0.0003,
            close=close_price,
            volume=10000,
        ))
    return candles


@pytest.fixture
def aapl_quote() -> MarketQuote:
    return MarketQuote(symbol="AAPL", price=182.52, change=1.25, change_percent=0.69)

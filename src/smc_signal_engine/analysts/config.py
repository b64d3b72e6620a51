from typing import NamedTuple
from smc_signal_engine.utils.logging_config import logger

# Chart timeframe token -> display tag used on pattern detections
TIMEFRAME_TAGS = {
    "1m": "M1",
    "5m": "M5",
    "15m": "M15",
    "1H": "H1",
    "4H": "H4",
    "1D": "D1",
    "1W": "W1",
    "1M": "MN",
}
DEFAULT_TIMEFRAME_TAG = "D1"

# Chart timeframe token -> trading horizon bucket
TIMEFRAME_BUCKETS = {
    "1m": "short",
    "5m": "short",
    "15m": "short",
    "1H": "medium",
    "4H": "medium",
    "1D": "medium",
    "1W": "long",
    "1M": "long",
}
DEFAULT_TIMEFRAME_BUCKET = "long"


class ScoringWeights(NamedTuple):
    technical: float
    fundamental: float
    sentiment: float


# Technicals dominate intraday; fundamentals dominate position trades
BUCKET_WEIGHTS = {
    "short": ScoringWeights(technical=0.8, fundamental=0.05, sentiment=0.15),
    "medium": ScoringWeights(technical=0.5, fundamental=0.3, sentiment=0.2),
    "long": ScoringWeights(technical=0.3, fundamental=0.5, sentiment=0.2),
}


class PriceLevelsProfile(NamedTuple):
    asset_class: str
    support_pct: float
    resistance_pct: float
    stop_loss_pct: float
    target_pct: float


BTC_LEVELS = PriceLevelsProfile("bitcoin", 0.02, 0.03, 0.015, 0.05)
HIGH_PRICE_CRYPTO_LEVELS = PriceLevelsProfile("crypto", 0.03, 0.045, 0.02, 0.07)
FOREX_LEVELS = PriceLevelsProfile("forex", 0.005, 0.0075, 0.003, 0.01)
EQUITY_LEVELS = PriceLevelsProfile("equity", 0.05, 0.075, 0.04, 0.10)

FOREX_CURRENCIES = ("USD", "EUR", "GBP")

# (minimum combined score, signal), checked top-down
SIGNAL_THRESHOLDS = [
    (80, "strong_buy"),
    (60, "buy"),
    (40, "neutral"),
    (20, "sell"),
]
LOWEST_SIGNAL = "strong_sell"


def get_timeframe_tag(timeframe: str) -> str:
    return TIMEFRAME_TAGS.get(timeframe, DEFAULT_TIMEFRAME_TAG)


def get_timeframe_bucket(timeframe: str) -> str:
    """Map a chart timeframe to short/medium/long. Unknown tokens are long."""
    return TIMEFRAME_BUCKETS.get(timeframe, DEFAULT_TIMEFRAME_BUCKET)


def get_scoring_weights(timeframe: str) -> ScoringWeights:
    weights = BUCKET_WEIGHTS[get_timeframe_bucket(timeframe)]
    logger.debug(f"Scoring weights for {timeframe}: {weights}")
    return weights


def get_price_levels_profile(symbol: str, price: float) -> PriceLevelsProfile:
    """
    Pick the percentage table for support/resistance/stop-loss/target.

    Checked in order: bitcoin, then ether or anything priced above 1000,
    then forex-like symbols, then equities.
    """
    symbol = symbol.upper()
    if "BTC" in symbol:
        return BTC_LEVELS
    if "ETH" in symbol or price > 1000:
        return HIGH_PRICE_CRYPTO_LEVELS
    if any(currency in symbol for currency in FOREX_CURRENCIES):
        return FOREX_LEVELS
    return EQUITY_LEVELS

from smc_signal_engine.analysts.config import get_timeframe_tag
from smc_signal_engine.analysts.models import PatternDetection
from smc_signal_engine.tools.market_data import CandleRecord
from smc_signal_engine.utils.logging_config import logger
from smc_signal_engine.utils.seed import hash_string, seeded_shuffle

# Order matters: detections index into these by position
BULLISH_PATTERNS = {
    "Bullish Order Block": "Previous supply zone flipped to demand zone with strong momentum",
    "Bullish Fair Value Gap": "Upside price imbalance left behind by displacement with institutional interest",
    "Bullish Breaker Block": "Failed supply zone reclaimed as support after a liquidity grab",
    "Sell-Side Liquidity Sweep": "Resting sell-side liquidity swept before an expected reversal higher",
    "Bullish Market Structure Shift": "Break of the last lower high signals a shift to bullish order flow",
    "Bullish Break of Structure": "New higher high confirms continuation of the bullish trend",
    "Bullish Mitigation Block": "Price returned to mitigate a prior bullish order block and held",
    "Optimal Trade Entry (Long)": "Retracement into the 62-79% zone of the last bullish impulse leg",
    "Discount Zone Entry": "Price trading below equilibrium of the dealing range, favoring longs",
    "Bullish Inducement Sweep": "Early sellers induced before a move into higher-timeframe demand",
    "Equal Lows Liquidity Grab": "Equal lows taken out and quickly reclaimed by buyers",
    "Bullish Rejection Block": "Long lower wicks show aggressive rejection of lower prices",
}

BEARISH_PATTERNS = {
    "Bearish Order Block": "Previous demand zone flipped to supply zone with strong momentum",
    "Bearish Fair Value Gap": "Downside price imbalance left behind by displacement with institutional interest",
    "Bearish Breaker Block": "Institutional price rejection at liquidity grab level",
    "Buy-Side Liquidity Sweep": "Resting buy-side liquidity swept before an expected reversal lower",
    "Bearish Market Structure Shift": "Break of the last higher low signals a shift to bearish order flow",
    "Bearish Break of Structure": "New lower low confirms continuation of the bearish trend",
    "Bearish Mitigation Block": "Price returned to mitigate a prior bearish order block and was rejected",
    "Optimal Trade Entry (Short)": "Retracement into the 62-79% zone of the last bearish impulse leg",
    "Premium Zone Entry": "Price trading above equilibrium of the dealing range, favoring shorts",
    "Bearish Inducement Sweep": "Early buyers induced before a move into higher-timeframe supply",
    "Equal Highs Liquidity Grab": "Equal highs taken out and quickly rejected by sellers",
    "Bearish Rejection Block": "Long upper wicks show aggressive rejection of higher prices",
}

TREND_LOOKBACK = 5


def is_bullish_trend(candles: list[CandleRecord]) -> bool:
    """
    Trend over the last few candles. Flat candles count as down and a tie
    is bearish.
    """
    recent = candles[-TREND_LOOKBACK:]
    up_count = sum(1 for c in recent if c.close > c.open)
    down_count = len(recent) - up_count
    return up_count > down_count


def analyze_technical_patterns(symbol: str, candles: list[CandleRecord], timeframe: str) -> list[PatternDetection]:
    """
    Synthesize SMC/ICT-style pattern detections for a symbol.

    The detections are seeded from symbol and timeframe, so repeated calls
    with the same symbol, trend and timeframe return identical results. Two
    or three detections follow the recent trend, plus one lower-confidence
    detection against it.

    Args:
        symbol: Market symbol
        candles: Candle series, oldest first
        timeframe: Chart timeframe token; unknown tokens are tagged D1

    Returns:
        list[PatternDetection] sorted by confidence, highest first. Empty if there are no candles.
    """
    if not candles:
        return []

    seed = hash_string(symbol + timeframe)
    bullish = is_bullish_trend(candles)
    tag = get_timeframe_tag(timeframe)
    logger.debug(f"Pattern seed for {symbol} {timeframe}: {seed}, bullish trend: {bullish}")

    pool = BULLISH_PATTERNS if bullish else BEARISH_PATTERNS
    opposite_pool = BEARISH_PATTERNS if bullish else BULLISH_PATTERNS

    num_patterns = 2 + seed % 2
    selected = seeded_shuffle(list(pool), seed)[:num_patterns]

    patterns = [
        PatternDetection(
            name=name,
            timeframe=tag,
            confidence=65 + (seed + i) % 25,
            bullish=bullish,
            description=pool[name],
        )
        for i, name in enumerate(selected)
    ]

    # One weaker conflicting signal
    opposite_names = list(opposite_pool)
    opposite_name = opposite_names[seed % len(opposite_names)]
    patterns.append(PatternDetection(
        name=opposite_name,
        timeframe=tag,
        confidence=50 + seed % 20,
        bullish=not bullish,
        description=opposite_pool[opposite_name],
    ))

    patterns.sort(key=lambda p: p.confidence, reverse=True)
    return patterns

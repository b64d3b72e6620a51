import math
from datetime import datetime
from smc_signal_engine.analysts.config import (
    LOWEST_SIGNAL,
    SIGNAL_THRESHOLDS,
    get_price_levels_profile,
    get_scoring_weights,
    get_timeframe_bucket,
)
from smc_signal_engine.analysts.fundamentals import analyze_fundamentals
from smc_signal_engine.analysts.models import (
    AnalysisResult,
    FundamentalsAnalysis,
    PatternDetection,
    SentimentAnalysis,
)
from smc_signal_engine.analysts.patterns import analyze_technical_patterns
from smc_signal_engine.analysts.sentiment import analyze_sentiment
from smc_signal_engine.tools.market_data import CandleRecord, FundamentalsRecord, MarketQuote, NewsRecord
from smc_signal_engine.utils.logging_config import logger

BUY_SIGNALS = ("strong_buy", "buy")
SELL_SIGNALS = ("strong_sell", "sell")

MARKET_STRUCTURE_BIAS = {
    "strong_buy": "Market structure is firmly bullish with buyers in control of order flow",
    "buy": "Market structure leans bullish, favoring long setups on pullbacks",
    "neutral": "Market structure is balanced with no clear directional bias",
    "sell": "Market structure leans bearish, favoring short setups on rallies",
    "strong_sell": "Market structure is firmly bearish with sellers in control of order flow",
}


def _now_ms() -> int:
    return int(datetime.now().timestamp() * 1000)


def round_half_up(value: float) -> int:
    """Nearest integer with .5 rounded up, unlike round()'s half-to-even."""
    return math.floor(value + 0.5)


def technical_score(patterns: list[PatternDetection]) -> float:
    """
    Average signed pattern confidence mapped onto 0-100.

    Bullish detections count positive, bearish negative; the raw average
    in [-100, 100] is shifted so 50 means no technical edge.
    """
    if not patterns:
        return 50.0
    signed = sum(p.confidence if p.bullish else -p.confidence for p in patterns)
    raw = signed / (len(patterns) * 100) * 100
    return (raw + 100) / 2


def combine_scores(technical: float, fundamental: float, sentiment: float, timeframe: str) -> float:
    """Blend the three sub-scores with the weights of the timeframe's bucket."""
    weights = get_scoring_weights(timeframe)
    return (
        technical * weights.technical
        + fundamental * weights.fundamental
        + sentiment * weights.sentiment
    )


def classify_signal(score: float) -> str:
    for threshold, signal in SIGNAL_THRESHOLDS:
        if score >= threshold:
            return signal
    return LOWEST_SIGNAL


def calculate_price_levels(symbol: str, price: float, signal: str) -> dict[str, float]:
    """
    Support, resistance, stop-loss and target as percentages of price.

    Long signals put the stop below and the target above price; neutral
    and short signals mirror that.
    """
    profile = get_price_levels_profile(symbol, price)
    logger.debug(f"Using {profile.asset_class} price levels for {symbol}")

    support = price * (1 - profile.support_pct)
    resistance = price * (1 + profile.resistance_pct)

    if signal in BUY_SIGNALS:
        stop_loss = price * (1 - profile.stop_loss_pct)
        target_price = price * (1 + profile.target_pct)
    else:
        stop_loss = price * (1 + profile.stop_loss_pct)
        target_price = price * (1 - profile.target_pct)

    risk = abs(price - stop_loss)
    reward = abs(target_price - price)
    risk_reward_ratio = reward / risk if risk != 0 else 1.0

    return {
        "support": support,
        "resistance": resistance,
        "stop_loss": stop_loss,
        "target_price": target_price,
        "risk_reward_ratio": risk_reward_ratio,
    }


def build_reasoning(
    signal: str,
    timeframe: str,
    patterns: list[PatternDetection],
    fundamentals: FundamentalsAnalysis,
    sentiment: SentimentAnalysis,
) -> list[str]:
    reasoning = []

    bullish_patterns = [p for p in patterns if p.bullish]
    bearish_patterns = [p for p in patterns if not p.bullish]

    if bullish_patterns:
        top = bullish_patterns[0]
        count = len(bullish_patterns)
        reasoning.append(
            f"Technical analysis shows {count} bullish pattern{'s' if count > 1 else ''} "
            f"including {top.name} ({top.confidence}% confidence): {top.description}"
        )

    if bearish_patterns:
        top = bearish_patterns[0]
        count = len(bearish_patterns)
        text = (
            f"Technical analysis shows {count} bearish pattern{'s' if count > 1 else ''} "
            f"including {top.name} ({top.confidence}% confidence)"
        )
        if signal in SELL_SIGNALS:
            text += f": {top.description}"
        reasoning.append(text)

    reasoning.append(MARKET_STRUCTURE_BIAS[signal])

    # Short-term trades are driven by technicals, fundamentals stay out of the story
    if get_timeframe_bucket(timeframe) != "short":
        reasoning.append(
            f"Fundamental outlook is {fundamentals.outlook} ({round_half_up(fundamentals.score)}/100): "
            f"{fundamentals.highlights[0]}"
        )

    text = f"Market sentiment is {sentiment.sentiment} ({round_half_up(sentiment.score)}/100)"
    if sentiment.impactful_news:
        text += f", key headline: {sentiment.impactful_news[0].title}"
    reasoning.append(text)

    return reasoning


def insufficient_data_result(symbol: str, timeframe: str) -> AnalysisResult:
    return AnalysisResult(
        symbol=symbol,
        signal="neutral",
        confidence=50,
        source="combined",
        time_frame=get_timeframe_bucket(timeframe),
        reasoning=["Insufficient data to generate a trading signal"],
        support=0,
        resistance=0,
        stop_loss=0,
        target_price=0,
        risk_reward_ratio=1.0,
        timestamp=_now_ms(),
    )


def generate_signal(
    symbol: str,
    market_data: MarketQuote | None,
    candles: list[CandleRecord],
    fundamentals: FundamentalsRecord | None,
    news: list[NewsRecord] | None,
    timeframe: str,
) -> AnalysisResult:
    """
    Combine technical patterns, fundamentals and news sentiment into one trade signal.

    Args:
        symbol: Market symbol
        market_data: Latest quote; only the price is used
        candles: Candle series, oldest first
        fundamentals: Fundamentals record, fields may be missing
        news: News items, may be empty
        timeframe: Chart timeframe token (1m, 5m, 15m, 1H, 4H, 1D, 1W, 1M)

    The close-price range of the candles is only logged; price levels are
    percentages of the quoted price.

    Returns:
        AnalysisResult. Missing market data or candles yield a neutral result
        with zeroed price levels instead of an error.
    """
    if market_data is None or not candles:
        logger.warning(f"Insufficient data to analyze {symbol} on {timeframe}")
        return insufficient_data_result(symbol, timeframe)

    patterns = analyze_technical_patterns(symbol, candles, timeframe)
    sentiment = analyze_sentiment(news or [])
    fundamentals_eval = analyze_fundamentals(fundamentals)

    technical = technical_score(patterns)
    combined = combine_scores(technical, fundamentals_eval.score, sentiment.score, timeframe)
    signal = classify_signal(combined)
    logger.debug(
        f"{symbol} {timeframe} scores: technical={technical:.1f}, fundamental={fundamentals_eval.score}, "
        f"sentiment={sentiment.score:.1f}, combined={combined:.1f}"
    )

    confidence = round_half_up(combined)

    closes = [c.close for c in candles]
    logger.debug(f"{symbol} close range over {len(candles)} candles: {max(closes) - min(closes):.4f}")

    price = market_data.price
    levels = calculate_price_levels(symbol, price, signal)
    reasoning = build_reasoning(signal, timeframe, patterns, fundamentals_eval, sentiment)

    logger.info(f"Generated {signal} signal for {symbol} on {timeframe} with confidence {confidence}")
    return AnalysisResult(
        symbol=symbol,
        signal=signal,
        confidence=confidence,
        source="combined",
        time_frame=get_timeframe_bucket(timeframe),
        reasoning=reasoning,
        support=round(levels["support"], 2),
        resistance=round(levels["resistance"], 2),
        stop_loss=round(levels["stop_loss"], 2),
        target_price=round(levels["target_price"], 2),
        risk_reward_ratio=round(levels["risk_reward_ratio"], 2),
        timestamp=_now_ms(),
    )

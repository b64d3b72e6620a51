"""Tests for the signal synthesizer."""

import pytest
from pydantic import ValidationError

from smc_signal_engine.analysts.config import BUCKET_WEIGHTS, get_price_levels_profile
from smc_signal_engine.analysts.models import PatternDetection
from smc_signal_engine.analysts.patterns import analyze_technical_patterns
from smc_signal_engine.analysts.signal import (
    BUY_SIGNALS,
    SELL_SIGNALS,
    calculate_price_levels,
    classify_signal,
    combine_scores,
    generate_signal,
    round_half_up,
    technical_score,
)
from smc_signal_engine.tools.market_data import FundamentalsRecord, MarketQuote, NewsRecord, get_news_data

STRONG_FUNDAMENTALS = FundamentalsRecord(pe=10, revenue_growth=20, profit_growth=25, debt=10, assets=100)
WEAK_FUNDAMENTALS = FundamentalsRecord(pe=50, revenue_growth=2, profit_growth=-5, debt=60, assets=100)
GOOD_NEWS = [NewsRecord(id="1", title="Record quarter", sentiment="positive", impact_score=9)]
BAD_NEWS = [NewsRecord(id="1", title="Guidance slashed", sentiment="negative", impact_score=9)]


def quote(symbol: str, price: float) -> MarketQuote:
    return MarketQuote(symbol=symbol, price=price)


def pattern(confidence: int, bullish: bool) -> PatternDetection:
    return PatternDetection(name="p", timeframe="D1", confidence=confidence, bullish=bullish, description="d")


class TestGuardPath:
    def test_missing_market_data(self, bullish_candles):
        result = generate_signal("AAPL", None, bullish_candles, STRONG_FUNDAMENTALS, GOOD_NEWS, "1D")
        assert result.signal == "neutral"
        assert result.confidence == 50
        assert (result.support, result.resistance, result.stop_loss, result.target_price) == (0, 0, 0, 0)
        assert result.risk_reward_ratio == 1.0
        assert len(result.reasoning) == 1
        assert "Insufficient data" in result.reasoning[0]
        assert result.time_frame == "medium"

    def test_empty_candles(self, aapl_quote):
        result = generate_signal("AAPL", aapl_quote, [], None, [], "5m")
        assert result.signal == "neutral"
        assert result.confidence == 50
        assert result.stop_loss == 0
        assert result.risk_reward_ratio == 1.0
        assert result.time_frame == "short"

    def test_zero_price_defaults_ratio(self, bullish_candles):
        result = generate_signal("AAPL", quote("AAPL", 0), bullish_candles, None, [], "1D")
        assert result.stop_loss == 0
        assert result.risk_reward_ratio == 1.0


class TestScoring:
    def test_technical_score_range(self):
        assert technical_score([pattern(80, True), pattern(80, True)]) == pytest.approx(90.0)
        assert technical_score([pattern(80, False), pattern(80, False)]) == pytest.approx(10.0)
        assert technical_score([pattern(70, True), pattern(70, False)]) == pytest.approx(50.0)
        assert technical_score([]) == 50.0

    def test_more_bullish_patterns_never_lower_technical_score(self):
        base = [pattern(70, True), pattern(60, False)]
        stronger = [pattern(85, True), pattern(60, False)]
        more = [pattern(70, True), pattern(70, True), pattern(60, False)]
        assert technical_score(stronger) > technical_score(base)
        assert technical_score(more) > technical_score(base)

    @pytest.mark.parametrize("timeframe", ["1m", "1H", "1D", "1W", "unknown"])
    def test_combined_score_monotonic_in_technical(self, timeframe):
        scores = [combine_scores(t, 55, 45, timeframe) for t in range(0, 101, 5)]
        assert scores == sorted(scores)

    def test_weights_by_bucket(self):
        assert combine_scores(100, 0, 0, "15m") == pytest.approx(80)
        assert combine_scores(0, 100, 0, "4H") == pytest.approx(30)
        assert combine_scores(0, 0, 100, "1M") == pytest.approx(20)
        assert combine_scores(0, 100, 0, "3D") == pytest.approx(50)
        for weights in BUCKET_WEIGHTS.values():
            assert sum(weights) == pytest.approx(1.0)

    @pytest.mark.parametrize("score,signal", [
        (100, "strong_buy"), (80, "strong_buy"), (79.99, "buy"), (60, "buy"), (59.5, "neutral"),
        (40, "neutral"), (39.9, "sell"), (20, "sell"), (19.99, "strong_sell"), (0, "strong_sell"),
    ])
    def test_classify_signal(self, score, signal):
        assert classify_signal(score) == signal

    @pytest.mark.parametrize("value,rounded", [(68.5, 69), (34.5, 35), (2.5, 3), (68.4, 68), (0.0, 0), (99.5, 100)])
    def test_round_half_up(self, value, rounded):
        assert round_half_up(value) == rounded


class TestPriceLevels:
    @pytest.mark.parametrize("symbol,price,asset_class", [
        ("BTCUSD", 64250.0, "bitcoin"),
        ("ETHUSD", 3120.45, "crypto"),
        ("ETHBTC", 0.05, "bitcoin"),
        ("XYZ", 2500.0, "crypto"),
        ("EURUSD", 1.0934, "forex"),
        ("gbpjpy", 190.0, "forex"),
        ("AAPL", 182.52, "equity"),
    ])
    def test_profile_selection(self, symbol, price, asset_class):
        assert get_price_levels_profile(symbol, price).asset_class == asset_class

    def test_buy_levels(self):
        levels = calculate_price_levels("AAPL", 100.0, "buy")
        assert levels["support"] == pytest.approx(95.0)
        assert levels["resistance"] == pytest.approx(107.5)
        assert levels["stop_loss"] == pytest.approx(96.0)
        assert levels["target_price"] == pytest.approx(110.0)
        assert levels["risk_reward_ratio"] == pytest.approx(2.5)

    @pytest.mark.parametrize("signal", ["neutral", "sell", "strong_sell"])
    def test_non_buy_levels_mirror(self, signal):
        levels = calculate_price_levels("AAPL", 100.0, signal)
        assert levels["stop_loss"] == pytest.approx(104.0)
        assert levels["target_price"] == pytest.approx(90.0)
        assert levels["risk_reward_ratio"] == pytest.approx(2.5)

    @pytest.mark.parametrize("symbol,price,ratio", [
        ("BTCUSD", 64250.0, 5 / 1.5),
        ("ETHUSD", 3120.45, 3.5),
        ("EURUSD", 1.0934, 1 / 0.3),
    ])
    def test_risk_reward_by_asset_class(self, symbol, price, ratio):
        levels = calculate_price_levels(symbol, price, "buy")
        assert levels["risk_reward_ratio"] == pytest.approx(ratio)
        assert levels["risk_reward_ratio"] >= 0


class TestGenerateSignal:
    def test_forex_example(self, forex_candles):
        result = generate_signal("EURUSD", quote("EURUSD", 1.0934), forex_candles, FundamentalsRecord(), [], "1D")
        assert result.time_frame == "medium"
        assert result.support == pytest.approx(round(1.0934 * 0.995, 2))
        assert result.resistance == pytest.approx(round(1.0934 * 1.0075, 2))
        assert result.risk_reward_ratio == pytest.approx(3.33)
        assert result.source == "combined"
        assert result.symbol == "EURUSD"

    def test_equity_result_shape(self, bullish_candles, aapl_quote):
        result = generate_signal("AAPL", aapl_quote, bullish_candles, STRONG_FUNDAMENTALS, get_news_data(), "1D")
        assert 0 <= result.confidence <= 100
        assert result.support < aapl_quote.price < result.resistance
        assert result.risk_reward_ratio == pytest.approx(2.5)
        if result.signal in BUY_SIGNALS:
            assert result.stop_loss < aapl_quote.price < result.target_price
        else:
            assert result.target_price < aapl_quote.price < result.stop_loss

    def test_confidence_is_rounded_combined_score(self, bullish_candles, aapl_quote):
        result = generate_signal("AAPL", aapl_quote, bullish_candles, STRONG_FUNDAMENTALS, GOOD_NEWS, "4H")
        patterns = analyze_technical_patterns("AAPL", bullish_candles, "4H")
        expected = combine_scores(technical_score(patterns), 100, 100, "4H")
        assert result.confidence == round_half_up(expected)

    def test_half_point_confidence_rounds_up(self, bullish_candles):
        news = [NewsRecord(id="1", title="Beat", sentiment="positive", impact_score=2)]
        patterns = analyze_technical_patterns("NVDA", bullish_candles, "1m")
        assert combine_scores(technical_score(patterns), 50, 70, "1m") == pytest.approx(68.5)
        result = generate_signal("NVDA", quote("NVDA", 103.23), bullish_candles, FundamentalsRecord(), news, "1m")
        assert result.confidence == 69

    def test_half_point_bearish_confidence_rounds_up(self, bearish_candles):
        result = generate_signal("NVDA", quote("NVDA", 103.23), bearish_candles, None, [], "1m")
        assert result.confidence == 35

    def test_deterministic_apart_from_timestamp(self, bearish_candles, aapl_quote):
        first = generate_signal("AAPL", aapl_quote, bearish_candles, None, get_news_data(), "1H")
        second = generate_signal("AAPL", aapl_quote, bearish_candles, None, get_news_data(), "1H")
        assert first.model_dump(exclude={"timestamp"}) == second.model_dump(exclude={"timestamp"})

    def test_bullish_setup_buys(self, bullish_candles, aapl_quote):
        result = generate_signal("AAPL", aapl_quote, bullish_candles, STRONG_FUNDAMENTALS, GOOD_NEWS, "5m")
        assert result.signal in BUY_SIGNALS
        assert result.stop_loss < aapl_quote.price < result.target_price

    def test_bearish_setup_sells(self, bearish_candles, aapl_quote):
        result = generate_signal("AAPL", aapl_quote, bearish_candles, WEAK_FUNDAMENTALS, BAD_NEWS, "5m")
        assert result.signal in SELL_SIGNALS
        assert result.target_price < aapl_quote.price < result.stop_loss

    def test_reasoning_medium_timeframe(self, bullish_candles, aapl_quote):
        result = generate_signal("AAPL", aapl_quote, bullish_candles, STRONG_FUNDAMENTALS, GOOD_NEWS, "1D")
        assert len(result.reasoning) == 5
        assert "bullish pattern" in result.reasoning[0]
        assert "bearish pattern" in result.reasoning[1]
        assert result.reasoning[2].startswith("Market structure")
        assert result.reasoning[3].startswith("Fundamental outlook is strong (100/100)")
        assert result.reasoning[4].startswith("Market sentiment is positive")
        assert result.reasoning[4].endswith("key headline: Record quarter")

    def test_reasoning_short_timeframe_omits_fundamentals(self, bullish_candles, aapl_quote):
        result = generate_signal("AAPL", aapl_quote, bullish_candles, STRONG_FUNDAMENTALS, GOOD_NEWS, "1m")
        assert len(result.reasoning) == 4
        assert not any(line.startswith("Fundamental outlook") for line in result.reasoning)

    def test_bullish_description_always_shown(self, bullish_candles, aapl_quote):
        result = generate_signal("AAPL", aapl_quote, bullish_candles, None, [], "1D")
        top_bullish = next(p for p in analyze_technical_patterns("AAPL", bullish_candles, "1D") if p.bullish)
        assert result.reasoning[0].endswith(top_bullish.description)

    def test_bearish_description_only_when_selling(self, bullish_candles, bearish_candles, aapl_quote):
        buy = generate_signal("AAPL", aapl_quote, bullish_candles, STRONG_FUNDAMENTALS, GOOD_NEWS, "5m")
        opposite = next(p for p in analyze_technical_patterns("AAPL", bullish_candles, "5m") if not p.bullish)
        assert opposite.description not in buy.reasoning[1]

        sell = generate_signal("AAPL", aapl_quote, bearish_candles, WEAK_FUNDAMENTALS, BAD_NEWS, "5m")
        top_bearish = next(p for p in analyze_technical_patterns("AAPL", bearish_candles, "5m") if not p.bullish)
        bearish_line = next(line for line in sell.reasoning if "bearish pattern" in line)
        assert bearish_line.endswith(top_bearish.description)

    def test_no_news_reasoning(self, bearish_candles, aapl_quote):
        result = generate_signal("AAPL", aapl_quote, bearish_candles, None, None, "1W")
        assert result.time_frame == "long"
        assert result.reasoning[-1] == "Market sentiment is neutral (50/100)"

    def test_result_is_immutable_and_serializes_camel_case(self, bullish_candles, aapl_quote):
        result = generate_signal("AAPL", aapl_quote, bullish_candles, None, [], "1D")
        with pytest.raises(ValidationError):
            result.signal = "sell"
        payload = result.model_dump(by_alias=True)
        assert {"timeFrame", "stopLoss", "targetPrice", "riskRewardRatio"} <= payload.keys()

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from typing_extensions import Literal
from smc_signal_engine.tools.market_data import CamelModel, NewsRecord

TradeSignal = Literal["strong_buy", "buy", "neutral", "sell", "strong_sell"]
SignalSource = Literal["technical", "fundamental", "sentiment", "combined"]
TimeFrame = Literal["short", "medium", "long"]
Sentiment = Literal["positive", "negative", "neutral"]
Outlook = Literal["strong", "positive", "neutral", "negative", "weak"]

FROZEN_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class PatternDetection(CamelModel):
    model_config = FROZEN_CONFIG

    name: str
    timeframe: str
    confidence: int
    bullish: bool
    description: str


class SentimentAnalysis(CamelModel):
    sentiment: Sentiment
    score: float
    impactful_news: list[NewsRecord]


class FundamentalsAnalysis(CamelModel):
    outlook: Outlook
    score: float
    highlights: list[str]


class AnalysisResult(CamelModel):
    model_config = FROZEN_CONFIG

    symbol: str
    signal: TradeSignal
    confidence: int
    source: SignalSource
    time_frame: TimeFrame
    reasoning: tuple[str, ...]
    support: float
    resistance: float
    stop_loss: float
    target_price: float
    risk_reward_ratio: float
    timestamp: int

from pydantic import BaseModel, ConfigDict, NonNegativeInt
from pydantic.alias_generators import to_camel
from typing_extensions import Literal
from datetime import datetime
from dotenv import load_dotenv
import os
from smc_signal_engine.tools.symbols import get_all_symbols, get_symbols_by_market_type
from smc_signal_engine.utils.logging_config import logger
from smc_signal_engine.utils.seed import SeededRandom, hash_string

load_dotenv()

MOCK_CANDLE_COUNT = int(os.getenv("SMC_SIGNAL_CANDLE_COUNT", "100"))
DEFAULT_BASE_PRICE = 100.0

# Candle spacing per chart timeframe token
CANDLE_INTERVALS_MS = {
    "1m": 60 * 1000,
    "5m": 5 * 60 * 1000,
    "15m": 15 * 60 * 1000,
    "1H": 60 * 60 * 1000,
    "4H": 4 * 60 * 60 * 1000,
    "1D": 24 * 60 * 60 * 1000,
    "1W": 7 * 24 * 60 * 60 * 1000,
    "1M": 30 * 24 * 60 * 60 * 1000,
}


class CamelModel(BaseModel):
    """Snake_case fields, camelCase aliases on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MarketQuote(CamelModel):
    symbol: str
    name: str | None = None
    price: float
    change: float = 0.0
    change_percent: float = 0.0
    volume: float | None = None
    market_cap: float | None = None
    high: float | None = None
    low: float | None = None
    open: float | None = None
    close: float | None = None
    timestamp: int | None = None


class CandleRecord(CamelModel):
    time: int
    open: float
    high: float
    low: float
    close: float
    volume: NonNegativeInt


class FundamentalsRecord(CamelModel):
    # Every numeric field is optional: None means "unknown", never zero
    symbol: str | None = None
    name: str | None = None
    sector: str | None = None
    industry: str | None = None
    pe: float | None = None
    eps: float | None = None
    market_cap: float | None = None
    revenue: float | None = None
    revenue_growth: float | None = None
    profit: float | None = None
    profit_growth: float | None = None
    debt: float | None = None
    assets: float | None = None
    dividend_yield: float | None = None


class NewsRecord(CamelModel):
    id: str
    title: str
    summary: str = ""
    source: str = ""
    url: str = ""
    sentiment: Literal["positive", "negative", "neutral"]
    impact_score: float | None = None  # 0-10
    relevance: float | None = None  # 0-1, used when impact_score is missing
    timestamp: int | None = None


def _now_ms() -> int:
    return int(datetime.now().timestamp() * 1000)


# Offline quotes used when no live provider is configured
MOCK_QUOTES: dict[str, dict] = {
    "AAPL": {"name": "Apple Inc.", "price": 182.52, "change": 1.25, "change_percent": 0.69, "volume": 42500000,
             "market_cap": 2850000000000, "high": 183.12, "low": 180.87, "open": 181.11},
    "MSFT": {"name": "Microsoft Corp.", "price": 401.78, "change": -2.31, "change_percent": -0.57, "volume": 28100000,
             "market_cap": 2980000000000, "high": 404.65, "low": 398.22, "open": 403.50},
    "AMZN": {"name": "Amazon.com Inc.", "price": 178.12, "change": 2.87, "change_percent": 1.64, "volume": 36700000,
             "market_cap": 1850000000000, "high": 179.25, "low": 175.60, "open": 176.10},
    "GOOGL": {"name": "Alphabet Inc.", "price": 163.95, "change": 0.42, "change_percent": 0.26, "volume": 22800000,
              "market_cap": 2050000000000, "high": 164.75, "low": 162.90, "open": 163.45},
    "TSLA": {"name": "Tesla Inc.", "price": 240.80, "change": -5.15, "change_percent": -2.09, "volume": 98500000,
             "market_cap": 765000000000, "high": 248.36, "low": 239.26, "open": 246.50},
    "NVDA": {"name": "NVIDIA Corp.", "price": 103.23, "change": 1.78, "change_percent": 1.75, "volume": 156000000,
             "market_cap": 2540000000000, "high": 104.89, "low": 100.95, "open": 101.56},
    "BTCUSD": {"name": "Bitcoin/USD", "price": 64250.00, "change": 812.40, "change_percent": 1.28},
    "ETHUSD": {"name": "Ethereum/USD", "price": 3120.45, "change": -41.10, "change_percent": -1.30},
    "XRPUSD": {"name": "Ripple/USD", "price": 0.5234, "change": 0.0061, "change_percent": 1.18},
    "LTCUSD": {"name": "Litecoin/USD", "price": 84.30, "change": -0.95, "change_percent": -1.11},
    "ADAUSD": {"name": "Cardano/USD", "price": 0.4521, "change": 0.0087, "change_percent": 1.96},
    "DOTUSD": {"name": "Polkadot/USD", "price": 7.05, "change": -0.12, "change_percent": -1.67},
    "DOGEUSD": {"name": "Dogecoin/USD", "price": 0.1612, "change": 0.0043, "change_percent": 2.74},
    "SOLUSD": {"name": "Solana/USD", "price": 145.20, "change": 3.65, "change_percent": 2.58},
    "EURUSD": {"name": "Euro/US Dollar", "price": 1.0934, "change": 0.0021, "change_percent": 0.19},
    "GBPUSD": {"name": "British Pound/US Dollar", "price": 1.2715, "change": -0.0034, "change_percent": -0.27},
    "USDJPY": {"name": "US Dollar/Japanese Yen", "price": 151.42, "change": 0.38, "change_percent": 0.25},
    "USDCHF": {"name": "US Dollar/Swiss Franc", "price": 0.9042, "change": -0.0011, "change_percent": -0.12},
    "AUDUSD": {"name": "Australian Dollar/US Dollar", "price": 0.6548, "change": 0.0017, "change_percent": 0.26},
    "USDCAD": {"name": "US Dollar/Canadian Dollar", "price": 1.3612, "change": -0.0025, "change_percent": -0.18},
    "NZDUSD": {"name": "New Zealand Dollar/US Dollar", "price": 0.5987, "change": 0.0009, "change_percent": 0.15},
}

MOCK_FUNDAMENTALS: dict[str, dict] = {
    "AAPL": {"name": "Apple Inc.", "sector": "Technology", "industry": "Consumer Electronics",
             "pe": 30.45, "eps": 6.00, "dividend_yield": 0.50, "market_cap": 2850000000000,
             "revenue": 383000000000, "revenue_growth": 6.8, "profit": 94000000000, "profit_growth": 7.5,
             "debt": 120000000000, "assets": 350000000000},
    "MSFT": {"name": "Microsoft Corp.", "sector": "Technology", "industry": "Software",
             "pe": 34.8, "eps": 11.58, "dividend_yield": 0.71, "market_cap": 2980000000000,
             "revenue": 212000000000, "revenue_growth": 15.2, "profit": 83000000000, "profit_growth": 19.7,
             "debt": 76000000000, "assets": 364000000000},
    "AMZN": {"name": "Amazon.com Inc.", "sector": "Consumer Cyclical", "industry": "Internet Retail",
             "pe": 45.12, "eps": 3.95, "dividend_yield": 0, "market_cap": 1850000000000,
             "revenue": 513000000000, "revenue_growth": 11.5, "profit": 32000000000, "profit_growth": 23.2,
             "debt": 140000000000, "assets": 420000000000},
    "GOOGL": {"name": "Alphabet Inc.", "sector": "Communication Services", "industry": "Internet Content",
              "pe": 27.9, "eps": 5.9, "dividend_yield": 0.51, "market_cap": 2050000000000,
              "revenue": 307000000000, "revenue_growth": 12.8, "profit": 74000000000, "profit_growth": 14.3,
              "debt": 30000000000, "assets": 365000000000},
    "TSLA": {"name": "Tesla Inc.", "sector": "Consumer Cyclical", "industry": "Auto Manufacturers",
             "pe": 60.2, "eps": 4.15, "dividend_yield": 0, "market_cap": 765000000000,
             "revenue": 96000000000, "revenue_growth": 18.8, "profit": 15000000000, "profit_growth": 20.4,
             "debt": 12000000000, "assets": 92000000000},
    "NVDA": {"name": "NVIDIA Corp.", "sector": "Technology", "industry": "Semiconductors",
             "pe": 35.4, "eps": 3.01, "dividend_yield": 0.05, "market_cap": 2540000000000,
             "revenue": 60000000000, "revenue_growth": 65.2, "profit": 29000000000, "profit_growth": 163.7,
             "debt": 11000000000, "assets": 75000000000},
}

# (title, summary, source, sentiment, impact score, age in hours)
MOCK_NEWS = [
    ("Federal Reserve Maintains Interest Rates, Signals Potential Cut Later This Year",
     "The Federal Reserve kept interest rates unchanged at its latest meeting but indicated that cuts may be coming later this year as inflation shows signs of easing.",
     "Financial Times", "positive", 8, 1),
    ("Global Supply Chain Constraints Ease as Shipping Routes Normalize",
     "Global supply chain pressures have decreased significantly as shipping routes normalize and port congestion clears up, potentially reducing inflationary pressures.",
     "Bloomberg", "positive", 7, 2),
    ("Tech Sector Faces Increased Regulatory Scrutiny in Major Markets",
     "Technology companies are facing growing regulatory challenges across the US, EU, and Asia as governments implement stricter antitrust and data privacy measures.",
     "Reuters", "negative", 6, 4),
    ("Oil Prices Spike on Middle East Tensions and Production Cuts",
     "Crude oil prices surged following escalating tensions in the Middle East and OPEC's decision to maintain production cuts through the end of the year.",
     "CNBC", "negative", 8, 6),
    ("Major Central Banks Signal Coordinated Approach to Monetary Policy",
     "Leading central banks including the Fed, ECB, and Bank of Japan have indicated a more coordinated approach to monetary policy as global economic conditions align.",
     "Wall Street Journal", "neutral", 7, 10),
]


def get_quote(symbol: str) -> MarketQuote | None:
    """Latest quote for a symbol, None when the symbol has no data."""
    data = MOCK_QUOTES.get(symbol)
    if data is None:
        logger.warning(f"No quote data available for {symbol}")
        return None
    return MarketQuote(symbol=symbol, close=data["price"], timestamp=_now_ms(), **data)


def get_market_quotes(market_type: str | None = None) -> list[MarketQuote]:
    """
    Quotes for every catalog symbol of a market type.

    Args:
        market_type: "stocks", "crypto" or "forex". None returns all markets.
    """
    infos = get_all_symbols() if market_type is None else get_symbols_by_market_type(market_type)
    quotes = []
    for info in infos:
        quote = get_quote(info.symbol)
        if quote is not None:
            quotes.append(quote)
    logger.debug(f"Loaded {len(quotes)} quotes for market type {market_type or 'all'}")
    return quotes


def get_candle_data(symbol: str, timeframe: str, count: int | None = None, end_time: int | None = None) -> list[CandleRecord]:
    """
    Chronologically ordered OHLCV series around the symbol's quoted price.

    Prices come from a seeded stream keyed on symbol and timeframe, so the
    same arguments always produce the same series.

    Args:
        symbol: Market symbol
        timeframe: Chart timeframe token such as "1H" or "1D"; unknown tokens use daily spacing
        count: Number of candles, defaults to SMC_SIGNAL_CANDLE_COUNT
        end_time: Epoch-ms time of the last candle, defaults to now aligned to the interval

    Returns:
        list[CandleRecord], oldest first
    """
    if count is None:
        count = MOCK_CANDLE_COUNT
    if count < 1:
        return []

    interval_ms = CANDLE_INTERVALS_MS.get(timeframe, CANDLE_INTERVALS_MS["1D"])
    if end_time is None:
        now = _now_ms()
        end_time = now - now % interval_ms

    base_price = MOCK_QUOTES.get(symbol, {}).get("price", DEFAULT_BASE_PRICE)
    rng = SeededRandom(hash_string(symbol + timeframe))

    candles = []
    for i in range(count - 1, -1, -1):
        open_price = base_price + (rng.random() - 0.5) * base_price * 0.02
        close_price = open_price + (rng.random() - 0.5) * base_price * 0.01
        high = max(open_price, close_price) + rng.random() * base_price * 0.005
        low = min(open_price, close_price) - rng.random() * base_price * 0.005
        candles.append(CandleRecord(
            time=end_time - i * interval_ms,
            open=open_price,
            high=high,
            low=low,
            close=close_price,
            volume=rng.randint(1000000) + 500000,
        ))

    logger.debug(f"Generated {len(candles)} {timeframe} candles for {symbol}")
    return candles


def get_news_data() -> list[NewsRecord]:
    """Canned market headlines, newest first."""
    now = _now_ms()
    return [
        NewsRecord(
            id=str(i),
            title=title,
            summary=summary,
            source=source,
            url="#",
            sentiment=sentiment,
            impact_score=impact,
            timestamp=now - hours * 3600000,
        )
        for i, (title, summary, source, sentiment, impact, hours) in enumerate(MOCK_NEWS, start=1)
    ]


def get_fundamental_data(symbol: str) -> FundamentalsRecord:
    """
    Fundamentals for a symbol.

    Symbols without company data (crypto, forex, unknown tickers) get a
    record carrying only the symbol, so every scoring rule is skipped.
    """
    data = MOCK_FUNDAMENTALS.get(symbol)
    if data is None:
        logger.debug(f"No fundamental data for {symbol}")
        return FundamentalsRecord(symbol=symbol)
    return FundamentalsRecord(symbol=symbol, **data)

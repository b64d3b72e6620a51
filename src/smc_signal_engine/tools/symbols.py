from pydantic import BaseModel
from typing_extensions import Literal

MarketType = Literal["stocks", "crypto", "forex"]


class SymbolInfo(BaseModel):
    symbol: str
    name: str


# Market symbols organized by category
MARKET_SYMBOLS: dict[str, list[SymbolInfo]] = {
    "stocks": [
        SymbolInfo(symbol="AAPL", name="Apple Inc."),
        SymbolInfo(symbol="MSFT", name="Microsoft Corp."),
        SymbolInfo(symbol="AMZN", name="Amazon.com Inc."),
        SymbolInfo(symbol="GOOGL", name="Alphabet Inc."),
        SymbolInfo(symbol="TSLA", name="Tesla Inc."),
        SymbolInfo(symbol="NVDA", name="NVIDIA Corp."),
    ],
    "crypto": [
        SymbolInfo(symbol="BTCUSD", name="Bitcoin/USD"),
        SymbolInfo(symbol="ETHUSD", name="Ethereum/USD"),
        SymbolInfo(symbol="XRPUSD", name="Ripple/USD"),
        SymbolInfo(symbol="LTCUSD", name="Litecoin/USD"),
        SymbolInfo(symbol="ADAUSD", name="Cardano/USD"),
        SymbolInfo(symbol="DOTUSD", name="Polkadot/USD"),
        SymbolInfo(symbol="DOGEUSD", name="Dogecoin/USD"),
        SymbolInfo(symbol="SOLUSD", name="Solana/USD"),
    ],
    "forex": [
        SymbolInfo(symbol="EURUSD", name="Euro/US Dollar"),
        SymbolInfo(symbol="GBPUSD", name="British Pound/US Dollar"),
        SymbolInfo(symbol="USDJPY", name="US Dollar/Japanese Yen"),
        SymbolInfo(symbol="USDCHF", name="US Dollar/Swiss Franc"),
        SymbolInfo(symbol="AUDUSD", name="Australian Dollar/US Dollar"),
        SymbolInfo(symbol="USDCAD", name="US Dollar/Canadian Dollar"),
        SymbolInfo(symbol="NZDUSD", name="New Zealand Dollar/US Dollar"),
    ],
}


def get_all_symbols() -> list[SymbolInfo]:
    """All symbols across stocks, crypto and forex, in catalog order."""
    return [info for infos in MARKET_SYMBOLS.values() for info in infos]


def get_symbols_by_market_type(market_type: str) -> list[SymbolInfo]:
    return list(MARKET_SYMBOLS.get(market_type, []))


def get_market_type(symbol: str) -> str | None:
    """Market type a catalog symbol belongs to, None if it is not listed."""
    for market_type, infos in MARKET_SYMBOLS.items():
        if any(info.symbol == symbol for info in infos):
            return market_type
    return None

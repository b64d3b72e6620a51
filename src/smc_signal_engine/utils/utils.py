import pandas as pd


def candles_to_df(candles: list) -> pd.DataFrame:
    """Convert candle records to a DataFrame indexed by candle time."""
    df = pd.DataFrame([c.model_dump() for c in candles], columns=["time", "open", "high", "low", "close", "volume"])
    df["Date"] = pd.to_datetime(df["time"], unit="ms")
    df.set_index("Date", inplace=True)
    numeric_cols = ["open", "close", "high", "low", "volume"]
    for col in numeric_cols:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    df.sort_index(inplace=True)
    return df


def summarize_candles(candles: list) -> dict[str, float]:
    """Headline statistics of a candle series: first/last close, range, change and average volume."""
    if not candles:
        return {}
    df = candles_to_df(candles)
    first_close = df["close"].iloc[0]
    last_close = df["close"].iloc[-1]
    return {
        "first_close": float(first_close),
        "last_close": float(last_close),
        "high": float(df["high"].max()),
        "low": float(df["low"].min()),
        "close_range": float(df["close"].max() - df["close"].min()),
        "change_percent": float((last_close - first_close) / first_close * 100) if first_close else 0.0,
        "average_volume": float(df["volume"].mean()),
    }

from concurrent.futures import ThreadPoolExecutor, as_completed
from smc_signal_engine.analysts.models import AnalysisResult
from smc_signal_engine.analysts.signal import generate_signal
from smc_signal_engine.tools.market_data import get_candle_data, get_fundamental_data, get_news_data, get_quote
from smc_signal_engine.utils.logging_config import logger
from smc_signal_engine.utils.progress import progress

AGENT_NAME = "signal_agent"


def process_single_symbol(symbol: str, timeframe: str) -> tuple[str, AnalysisResult | None]:
    """
    Fetch market data for one symbol and generate its trade signal.

    Args:
        symbol: Market symbol to analyze
        timeframe: Chart timeframe token

    Returns:
        Tuple of (symbol, analysis_result). The result is None if anything failed.
    """
    try:
        logger.info(f"Analyzing {symbol} on {timeframe}")
        progress.update_status(AGENT_NAME, symbol, "Fetching market data")
        quote = get_quote(symbol)
        candles = get_candle_data(symbol, timeframe)

        progress.update_status(AGENT_NAME, symbol, "Fetching fundamentals and news")
        fundamentals = get_fundamental_data(symbol)
        news = get_news_data()

        progress.update_status(AGENT_NAME, symbol, "Generating signal")
        result = generate_signal(symbol, quote, candles, fundamentals, news, timeframe)
        progress.update_status(AGENT_NAME, symbol, "Done")
        return symbol, result

    except Exception as e:
        logger.exception(f"Error analyzing {symbol}: {str(e)}")
        progress.update_status(AGENT_NAME, symbol, "Error")
        return symbol, None


def watchlist_analyst(symbols: list[str], timeframe: str) -> dict[str, AnalysisResult]:
    """
    Generate trade signals for several symbols in parallel.

    Signal generation is a pure function of its inputs, so symbols are
    processed independently. Symbols that fail are logged and left out.
    """
    results = {}
    if not symbols:
        return results

    with ThreadPoolExecutor(max_workers=min(32, len(symbols))) as executor:
        future_to_symbol = {
            executor.submit(process_single_symbol, symbol, timeframe): symbol
            for symbol in symbols
        }

        for future in as_completed(future_to_symbol):
            symbol = future_to_symbol[future]
            try:
                symbol, result = future.result()
                if result is not None:
                    results[symbol] = result
            except Exception as e:
                logger.exception(f"Error processing {symbol}: {str(e)}")
                continue

    logger.info(f"Analyzed {len(results)}/{len(symbols)} symbols on {timeframe}")
    return results

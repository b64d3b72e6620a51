from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table as RichTable
from dotenv import load_dotenv
import questionary
import os
import traceback
from smc_signal_engine.analysts.config import TIMEFRAME_TAGS
from smc_signal_engine.analysts.models import AnalysisResult
from smc_signal_engine.analysts.patterns import analyze_technical_patterns
from smc_signal_engine.analysts.watchlist import watchlist_analyst
from smc_signal_engine.tools.market_data import get_candle_data, get_market_quotes
from smc_signal_engine.tools.symbols import MARKET_SYMBOLS, get_market_type
from smc_signal_engine.utils.formatting import build_patterns_table, build_signal_table, format_analysis_report, format_price
from smc_signal_engine.utils.logging_config import logger
from smc_signal_engine.utils.progress import progress
from smc_signal_engine.utils.utils import summarize_candles

load_dotenv()

DEFAULT_TIMEFRAME = os.getenv("SMC_SIGNAL_DEFAULT_TIMEFRAME", "1D")

PROMPT_STYLE = questionary.Style([
    ('qmark', 'fg:yellow bold'),
    ('question', 'bold'),
    ('answer', 'fg:green bold'),
    ('highlighted', 'fg:yellow bold'),
    ('selected', 'fg:cyan bold'),
])


def select_symbols() -> list[str]:
    """Interactive market type and symbol selection using questionary"""
    logger.info("Starting symbol selection process")
    market_type = questionary.select(
        "Select a market",
        choices=list(MARKET_SYMBOLS.keys()),
        style=PROMPT_STYLE,
    ).ask()
    if not market_type:
        raise ValueError("No market selected")

    choices = [
        questionary.Choice(title=f"{quote.symbol} ({quote.name}) {format_price(quote.price)}", value=quote.symbol)
        for quote in get_market_quotes(market_type)
    ]
    selected = questionary.checkbox(
        "Select symbols to analyze (use spacebar to select, enter to confirm)",
        choices=choices,
        style=PROMPT_STYLE,
    ).ask()

    if not selected:
        logger.error("No symbol was selected")
        raise ValueError("No symbols selected")

    logger.info(f"Selected symbols: {selected}")
    return selected


def select_timeframe() -> str:
    default = DEFAULT_TIMEFRAME if DEFAULT_TIMEFRAME in TIMEFRAME_TAGS else "1D"
    timeframe = questionary.select(
        "Select a chart timeframe",
        choices=list(TIMEFRAME_TAGS.keys()),
        default=default,
        style=PROMPT_STYLE,
    ).ask()
    if not timeframe:
        raise ValueError("No timeframe selected")
    return timeframe


def build_candle_summary(symbol: str, timeframe: str) -> RichTable | None:
    stats = summarize_candles(get_candle_data(symbol, timeframe))
    if not stats:
        return None
    market_type = get_market_type(symbol) or "unlisted"
    table = RichTable(title=f"{symbol} {timeframe} candles ({market_type})", header_style="bold blue")
    table.add_column("Last Close", justify="right")
    table.add_column("High", justify="right")
    table.add_column("Low", justify="right")
    table.add_column("Close Range", justify="right")
    table.add_column("Change (%)", justify="right")
    table.add_column("Avg Volume", justify="right")
    table.add_row(
        format_price(stats["last_close"]),
        format_price(stats["high"]),
        format_price(stats["low"]),
        format_price(stats["close_range"]),
        f"{stats['change_percent']:.2f}",
        f"{stats['average_volume']:,.0f}",
    )
    return table


def display_results(console: Console, results: dict[str, AnalysisResult], timeframe: str):
    """Print the signal overview followed by per-symbol details."""
    if not results:
        console.print("\n[yellow]No signals were generated.[/yellow]\n")
        return

    console.print("\n" + "─" * 80)
    console.print("[bold cyan]Trade Signals:[/bold cyan]")
    console.print(build_signal_table(results))

    for symbol, result in results.items():
        console.print(Markdown(format_analysis_report(result)))
        patterns = analyze_technical_patterns(symbol, get_candle_data(symbol, timeframe), timeframe)
        if patterns:
            console.print(build_patterns_table(patterns))
        summary = build_candle_summary(symbol, timeframe)
        if summary is not None:
            console.print(summary)
    console.print("─" * 80 + "\n")


def run_analysis(symbols: list[str], timeframe: str, console: Console) -> dict[str, AnalysisResult]:
    console.print(f"\n[bold blue]Analyzing {len(symbols)} symbol(s) on {timeframe}...[/bold blue]")
    progress.start()
    try:
        results = watchlist_analyst(symbols, timeframe)
    finally:
        progress.stop()
    # Keep the caller's ordering
    ordered = {symbol: results[symbol] for symbol in symbols if symbol in results}
    display_results(console, ordered, timeframe)
    return ordered


def main():
    console = Console()
    logger.info("Starting SMC signal engine")

    try:
        symbols = select_symbols()
        timeframe = select_timeframe()
        console.print(f"\n[bold green]Selected symbols:[/bold green] {', '.join(symbols)} [dim]({timeframe})[/dim]")
        run_analysis(symbols, timeframe, console)

    except KeyboardInterrupt:
        logger.warning("Operation cancelled by user")
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
    except Exception as e:
        logger.exception("An error occurred during setup or execution")
        console.print(f"\n[red bold]Error:[/red bold] {str(e)}")
        traceback.print_exc()


if __name__ == "__main__":
    main()

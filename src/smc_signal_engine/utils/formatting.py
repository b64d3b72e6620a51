import json
from rich.table import Table as RichTable
from smc_signal_engine.analysts.models import AnalysisResult, PatternDetection
from smc_signal_engine.utils.logging_config import logger

SIGNAL_COLORS = {
    "strong_buy": "bold green",
    "buy": "green",
    "neutral": "yellow",
    "sell": "red",
    "strong_sell": "bold red",
}


def format_price(value: float) -> str:
    # Sub-dollar quotes (forex, small-cap crypto) need more precision
    if abs(value) < 10:
        return f"{value:,.4f}"
    return f"{value:,.2f}"


def format_signal_label(signal: str) -> str:
    return signal.replace("_", " ").upper()


def build_signal_table(results: dict[str, AnalysisResult]) -> RichTable:
    """One row per symbol with signal, confidence and price levels."""
    table = RichTable(header_style="bold magenta", show_lines=True)
    table.add_column("Symbol", style="dim", width=10)
    table.add_column("Signal")
    table.add_column("Confidence (%)", justify="right")
    table.add_column("Horizon")
    table.add_column("Support", justify="right")
    table.add_column("Resistance", justify="right")
    table.add_column("Stop Loss", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("R:R", justify="right")

    for symbol, result in results.items():
        color = SIGNAL_COLORS.get(result.signal, "white")
        table.add_row(
            f"[bold]{symbol}[/bold]",
            f"[{color}]{format_signal_label(result.signal)}[/{color}]",
            str(result.confidence),
            result.time_frame,
            format_price(result.support),
            format_price(result.resistance),
            format_price(result.stop_loss),
            format_price(result.target_price),
            f"{result.risk_reward_ratio:.2f}",
        )
    return table


def build_patterns_table(patterns: list[PatternDetection]) -> RichTable:
    table = RichTable(header_style="bold cyan")
    table.add_column("Pattern")
    table.add_column("TF", width=4)
    table.add_column("Bias")
    table.add_column("Confidence (%)", justify="right")
    table.add_column("Description")

    for pattern in patterns:
        bias = "[green]Bullish[/green]" if pattern.bullish else "[red]Bearish[/red]"
        table.add_row(pattern.name, pattern.timeframe, bias, str(pattern.confidence), pattern.description)
    return table


def format_analysis_report(result: AnalysisResult) -> str:
    """Markdown section with the reasoning bullets and the full result as JSON."""
    try:
        bullets = "\n".join(f"- {line}" for line in result.reasoning)
        payload = json.dumps(result.model_dump(by_alias=True), indent=2)
        return f"""
### {result.symbol}: {format_signal_label(result.signal)} ({result.confidence}%)

{bullets}

```json
{payload}
```
"""
    except Exception as e:
        logger.error(f"Error formatting analysis report for {result.symbol}: {e}")
        return f"### {result.symbol}\n\n{result.signal} ({result.confidence}%)\n"

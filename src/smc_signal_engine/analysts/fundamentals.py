from smc_signal_engine.analysts.models import FundamentalsAnalysis
from smc_signal_engine.tools.market_data import FundamentalsRecord
from smc_signal_engine.utils.logging_config import logger

NO_FINDINGS_HIGHLIGHT = "No significant fundamental factors identified"
MAX_HIGHLIGHTS = 3


def get_outlook(score: float) -> str:
    if score >= 80:
        return "strong"
    if score >= 60:
        return "positive"
    if score >= 40:
        return "neutral"
    if score >= 20:
        return "negative"
    return "weak"


def analyze_fundamentals(fundamentals: FundamentalsRecord | None) -> FundamentalsAnalysis:
    """
    Score a fundamentals record around a neutral 50.

    Each rule only runs when its fields are present; a missing value is
    "no signal", never zero. Checks:
    1. Valuation (P/E).
    2. Revenue growth.
    3. Profit growth.
    4. Balance sheet (debt to assets).
    5. Dividend yield.
    """
    score = 50
    highlights = []

    if fundamentals is None:
        fundamentals = FundamentalsRecord()

    # 1. Valuation
    if fundamentals.pe is not None:
        if fundamentals.pe < 15:
            score += 10
            highlights.append("Attractively valued with low P/E ratio")
        elif fundamentals.pe > 40:
            score -= 10
            highlights.append("Potentially overvalued with high P/E ratio")

    # 2. Revenue growth (%)
    if fundamentals.revenue_growth is not None:
        if fundamentals.revenue_growth > 15:
            score += 15
            highlights.append("Strong revenue growth above market average")
        elif fundamentals.revenue_growth < 5:
            score -= 10
            highlights.append("Weak revenue growth below market average")

    # 3. Profit growth (%)
    if fundamentals.profit_growth is not None:
        if fundamentals.profit_growth > 20:
            score += 15
            highlights.append("Excellent profit growth demonstrates business efficiency")
        elif fundamentals.profit_growth < 0:
            score -= 15
            highlights.append("Declining profits indicate potential business challenges")

    # 4. Debt vs. assets
    if fundamentals.debt is not None and fundamentals.assets is not None and fundamentals.assets > 0:
        debt_ratio = fundamentals.debt / fundamentals.assets
        if debt_ratio < 0.2:
            score += 10
            highlights.append("Strong balance sheet with low debt relative to assets")
        elif debt_ratio > 0.5:
            score -= 10
            highlights.append("High debt levels may constrain future flexibility")

    # 5. Dividend yield (%)
    if fundamentals.dividend_yield is not None and fundamentals.dividend_yield > 3:
        score += 5
        highlights.append("Attractive dividend yield provides income potential")

    score = min(max(score, 0), 100)
    outlook = get_outlook(score)

    if not highlights:
        highlights.append(NO_FINDINGS_HIGHLIGHT)

    logger.debug(f"Fundamentals for {fundamentals.symbol}: {outlook} ({score})")
    return FundamentalsAnalysis(outlook=outlook, score=score, highlights=highlights[:MAX_HIGHLIGHTS])

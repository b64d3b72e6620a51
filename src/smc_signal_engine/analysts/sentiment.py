from smc_signal_engine.analysts.models import SentimentAnalysis
from smc_signal_engine.tools.market_data import NewsRecord
from smc_signal_engine.utils.logging_config import logger

IMPACTFUL_THRESHOLD = 7
MAX_IMPACTFUL_NEWS = 3


def news_impact(item: NewsRecord) -> float:
    """Impact on a 0-10 scale, falling back to relevance (0-1) when no impact score is given."""
    if item.impact_score is not None:
        return item.impact_score
    if item.relevance is not None:
        return item.relevance * 10
    return 0.0


def analyze_sentiment(news: list[NewsRecord]) -> SentimentAnalysis:
    """
    Reduce news items to one sentiment reading.

    Positive items add their impact, negative items subtract it, neutral
    items add nothing. The sum is scaled against an average impact of 5
    onto 0-100, where 50 is neutral.
    """
    if not news:
        return SentimentAnalysis(sentiment="neutral", score=50, impactful_news=[])

    total = 0.0
    impactful = []
    for item in news:
        impact = news_impact(item)
        if item.sentiment == "positive":
            total += impact
        elif item.sentiment == "negative":
            total -= impact

        if impact >= IMPACTFUL_THRESHOLD and len(impactful) < MAX_IMPACTFUL_NEWS:
            impactful.append(item)

    score = min(max(total / (len(news) * 5) * 50 + 50, 0), 100)

    if score > 60:
        sentiment = "positive"
    elif score < 40:
        sentiment = "negative"
    else:
        sentiment = "neutral"

    logger.debug(f"Sentiment over {len(news)} news items: {sentiment} ({score:.1f})")
    return SentimentAnalysis(sentiment=sentiment, score=score, impactful_news=impactful)

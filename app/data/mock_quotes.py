from __future__ import annotations

from types import MappingProxyType

from app.schemas.quote import QuoteRecord

# Placeholder for a real market-data API.
MOCK_QUOTES = MappingProxyType(
    {
        row.symbol: row
        for row in (
            QuoteRecord(
                symbol="AAPL",
                name="Apple Inc.",
                price=178.25,
                change=2.15,
                change_pct=1.22,
                volume=45123456,
                market_cap="2.8T",
            ),
            QuoteRecord(
                symbol="GOOGL",
                name="Alphabet Inc.",
                price=138.45,
                change=-1.25,
                change_pct=-0.89,
                volume=23456789,
                market_cap="1.7T",
            ),
            QuoteRecord(
                symbol="MSFT",
                name="Microsoft Corp.",
                price=412.80,
                change=5.60,
                change_pct=1.38,
                volume=18765432,
                market_cap="3.1T",
            ),
            QuoteRecord(
                symbol="TSLA",
                name="Tesla Inc.",
                price=242.15,
                change=-8.45,
                change_pct=-3.37,
                volume=67890123,
                market_cap="765B",
            ),
            QuoteRecord(
                symbol="AMZN",
                name="Amazon.com Inc.",
                price=168.90,
                change=3.25,
                change_pct=1.96,
                volume=34567890,
                market_cap="1.8T",
            ),
        )
    }
)

DEFAULT_WATCHLIST = ["AAPL", "GOOGL", "MSFT", "TSLA", "AMZN"]

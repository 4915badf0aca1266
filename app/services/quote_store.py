from __future__ import annotations

import asyncio
from typing import Callable, Mapping

from app.data.mock_quotes import MOCK_QUOTES
from app.schemas.quote import QuoteRecord


class MockQuoteStore:
    """Read-only lookup over the static quote table with a simulated fetch delay."""

    def __init__(
        self,
        rows: Mapping[str, QuoteRecord] | None = None,
        *,
        fetch_latency_sec: float = 1.0,
        failure_hook: Callable[[list[str]], None] | None = None,
    ) -> None:
        self._rows = MOCK_QUOTES if rows is None else rows
        self.fetch_latency_sec = fetch_latency_sec
        # Raising from the hook simulates a failed upstream fetch.
        self.failure_hook = failure_hook
        self.fetches = 0

    def get(self, symbol: str) -> QuoteRecord | None:
        return self._rows.get(str(symbol).upper())

    def list_many(self, symbols: list[str]) -> list[QuoteRecord]:
        out: list[QuoteRecord] = []
        for s in symbols:
            row = self.get(s)
            if row:
                out.append(row)
        return out

    async def fetch_records(self, symbols: list[str]) -> list[QuoteRecord]:
        self.fetches += 1
        await asyncio.sleep(self.fetch_latency_sec)
        if self.failure_hook is not None:
            self.failure_hook(list(symbols))
        return self.list_many(symbols)

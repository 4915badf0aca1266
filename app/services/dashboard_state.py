from __future__ import annotations

import threading
from typing import Callable

from app.errors import InvalidSymbolError
from app.schemas.dashboard import DashboardState
from app.schemas.quote import DisplayedQuote
from app.services.formatting import format_timestamp
from app.services.quote_store import MockQuoteStore

FETCH_FAILED_MESSAGE = "Failed to fetch stock data. Please try again."


def normalize_symbol(symbol: str) -> str:
    value = str(symbol).strip().upper()
    if not value:
        raise InvalidSymbolError("INVALID_SYMBOL")
    return value


def add_symbol(watchlist: list[str], symbol: str) -> list[str]:
    if symbol in watchlist:
        return list(watchlist)
    return [*watchlist, symbol]


def remove_symbol(watchlist: list[str], symbol: str) -> list[str]:
    return [s for s in watchlist if s != symbol]


class DashboardController:
    """Single owner of the dashboard view state.

    Every mutation replaces fields on one ``DashboardState`` under a lock and
    readers get deep copies. Refreshes are not serialized: two overlapping
    refreshes both write, and whichever finishes last wins.
    """

    def __init__(
        self,
        store: MockQuoteStore,
        *,
        watchlist: list[str] | None = None,
        clock: Callable[[], str] = format_timestamp,
    ) -> None:
        self.store = store
        self._clock = clock
        self._lock = threading.Lock()
        self._state = DashboardState()
        for symbol in watchlist or []:
            self._state.watchlist = add_symbol(self._state.watchlist, normalize_symbol(symbol))
        self.watchlist_version = 0

        self._in_flight = 0
        self.refreshes_started = 0
        self.refreshes_completed = 0
        self.refreshes_failed = 0
        self.refreshes_overlapping = 0

    def snapshot(self) -> DashboardState:
        with self._lock:
            return self._state.model_copy(deep=True)

    @property
    def watchlist(self) -> list[str]:
        with self._lock:
            return list(self._state.watchlist)

    async def refresh(self, symbols: list[str] | None = None) -> DashboardState:
        with self._lock:
            targets = list(self._state.watchlist) if symbols is None else list(symbols)
            if self._in_flight:
                self.refreshes_overlapping += 1
            self._in_flight += 1
            self.refreshes_started += 1
            self._state.loading = True
            self._state.error = ""

        print(f"[REFRESH][refresh_start] symbols={','.join(targets)}", flush=True)
        try:
            records = await self.store.fetch_records(targets)
            stamp = self._clock()
            stocks = [DisplayedQuote.stamp(row, stamp) for row in records]
        except Exception as exc:
            with self._lock:
                self.refreshes_failed += 1
                self._state.error = FETCH_FAILED_MESSAGE
            print(f"[REFRESH][refresh_error] error={exc}", flush=True)
        else:
            with self._lock:
                self.refreshes_completed += 1
                self._state.stocks = stocks
                self._state.last_updated = stamp
            print(
                f"[REFRESH][refresh_done] target_count={len(targets)} final_count={len(stocks)} "
                f"last_updated={stamp}",
                flush=True,
            )
        finally:
            with self._lock:
                self._in_flight -= 1
                self._state.loading = False

        return self.snapshot()

    def set_search_query(self, text: str) -> DashboardState:
        with self._lock:
            self._state.search_query = text
            return self._state.model_copy(deep=True)

    def search(self, query: str | None = None) -> DashboardState:
        with self._lock:
            if query is not None:
                self._state.search_query = query
            raw = self._state.search_query
            if not raw.strip():
                return self._state.model_copy(deep=True)

            symbol = raw.strip().upper()
            record = self.store.get(symbol)
            if record is None:
                self._state.error = f'Stock symbol "{symbol}" not found'
                print(f"[SEARCH][search_miss] symbol={symbol}", flush=True)
            else:
                self._state.selected_stock = DisplayedQuote.stamp(record, self._clock())
                self._state.search_query = ""
                print(f"[SEARCH][search_hit] symbol={symbol}", flush=True)
            return self._state.model_copy(deep=True)

    def add_to_watchlist(self, symbol: str) -> bool:
        value = normalize_symbol(symbol)
        with self._lock:
            updated = add_symbol(self._state.watchlist, value)
            changed = updated != self._state.watchlist
            if changed:
                self._state.watchlist = updated
                self.watchlist_version += 1
        print(f"[WATCHLIST][add] symbol={value} changed={int(changed)}", flush=True)
        return changed

    def remove_from_watchlist(self, symbol: str) -> bool:
        value = normalize_symbol(symbol)
        with self._lock:
            updated = remove_symbol(self._state.watchlist, value)
            changed = updated != self._state.watchlist
            if changed:
                self._state.watchlist = updated
                self.watchlist_version += 1
        print(f"[WATCHLIST][remove] symbol={value} changed={int(changed)}", flush=True)
        return changed

    def dismiss_error(self) -> DashboardState:
        with self._lock:
            self._state.error = ""
            return self._state.model_copy(deep=True)

    def close_detail(self) -> DashboardState:
        with self._lock:
            self._state.selected_stock = None
            return self._state.model_copy(deep=True)

    def metrics(self) -> dict[str, int]:
        with self._lock:
            return {
                "refreshes_started": self.refreshes_started,
                "refreshes_completed": self.refreshes_completed,
                "refreshes_failed": self.refreshes_failed,
                "refreshes_overlapping": self.refreshes_overlapping,
                "refreshes_in_flight": self._in_flight,
                "watchlist_size": len(self._state.watchlist),
                "watchlist_version": self.watchlist_version,
            }

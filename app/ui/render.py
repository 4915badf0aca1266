from __future__ import annotations

from html import escape

from app.schemas.dashboard import DashboardState
from app.schemas.quote import DisplayedQuote
from app.services.formatting import format_change, format_price, format_volume

TITLE = "Stock Price Aggregator"
SEARCH_PLACEHOLDER = "Search for stocks (e.g., AAPL, GOOGL, MSFT)"
LOADING_TEXT = "Loading stock data..."
EMPTY_TEXT = "No stocks in your watchlist. Search and add some stocks to get started!"
FOOTER_TEXT = (
    "Stock data is simulated for demonstration purposes. "
    "In production, integrate with real stock market APIs."
)

_STYLE = """
body{font-family:sans-serif;background:#f9fafb;margin:0;padding:24px;color:#111827}
.panel{background:#fff;border-radius:8px;box-shadow:0 1px 2px rgba(0,0,0,.05);padding:24px;margin-bottom:24px}
.header{display:flex;justify-content:space-between;align-items:center}
.grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(260px,1fr));gap:24px}
.card{border:1px solid #e5e7eb;border-radius:8px;padding:16px}
.up{color:#16a34a}.down{color:#dc2626}
.error{background:#fef2f2;border:1px solid #fecaca;color:#b91c1c;border-radius:8px;padding:16px;margin-bottom:24px;display:flex}
.error form{margin-left:auto}
.muted{color:#6b7280;font-size:.8rem}
.footer{text-align:center;color:#6b7280;font-size:.85rem}
"""


def _post_button(action: str, label: str, *, symbol: str | None = None, disabled: bool = False) -> str:
    hidden = ""
    if symbol is not None:
        hidden = f'<input type="hidden" name="symbol" value="{escape(symbol)}">'
    attr = " disabled" if disabled else ""
    return (
        f'<form method="post" action="{action}" style="display:inline">'
        f'{hidden}<button type="submit"{attr}>{escape(label)}</button></form>'
    )


def _change_html(quote: DisplayedQuote) -> str:
    change = format_change(quote.change, quote.change_pct)
    arrow = "&#9650;" if change["direction"] == "up" else "&#9660;"
    return f'<span class="{change["direction"]}">{arrow} {escape(change["text"])}</span>'


def render_header(state: DashboardState) -> str:
    updated = ""
    if state.last_updated:
        updated = f'<span class="muted">Last updated: {escape(state.last_updated)}</span> '
    return (
        '<div class="panel"><div class="header">'
        f"<h1>{TITLE}</h1><div>{updated}"
        f'{_post_button("/ui/refresh", "Refresh", disabled=state.loading)}</div></div>'
        '<form method="post" action="/ui/search">'
        f'<input type="text" name="query" value="{escape(state.search_query)}" '
        f'placeholder="{escape(SEARCH_PLACEHOLDER)}">'
        '<button type="submit">Search</button></form></div>'
    )


def render_error(state: DashboardState) -> str:
    if not state.error:
        return ""
    return (
        f'<div class="error" role="alert"><span>{escape(state.error)}</span>'
        f'{_post_button("/ui/error/dismiss", "×")}</div>'
    )


def render_detail(state: DashboardState) -> str:
    quote = state.selected_stock
    if quote is None:
        return ""
    return (
        '<div class="panel" id="detail"><div class="header"><h2>Stock Detail</h2>'
        f'{_post_button("/ui/detail/close", "×")}</div>'
        f"<h3>{escape(quote.name)}</h3>"
        f"<p><strong>{escape(quote.symbol)}</strong></p>"
        f"<p>{escape(format_price(quote.price))}</p>"
        f"<div>{_change_html(quote)}</div>"
        "<dl>"
        f"<dt>Volume:</dt><dd>{format_volume(quote.volume)}</dd>"
        f"<dt>Market Cap:</dt><dd>{escape(quote.market_cap)}</dd>"
        f"<dt>Last Updated:</dt><dd>{escape(quote.last_updated)}</dd>"
        "</dl>"
        f'{_post_button("/ui/watchlist/add", "Add to Watchlist", symbol=quote.symbol)}'
        "</div>"
    )


def render_card(quote: DisplayedQuote) -> str:
    return (
        f'<div class="card" data-symbol="{escape(quote.symbol)}">'
        f'<div class="header"><h3>{escape(quote.symbol)}</h3>'
        f'{_post_button("/ui/watchlist/remove", "Remove", symbol=quote.symbol)}</div>'
        f'<p class="muted">{escape(quote.name)}</p>'
        f"<p><strong>{escape(format_price(quote.price))}</strong></p>"
        f"<div>{_change_html(quote)}</div>"
        f'<div class="muted">Volume: {format_volume(quote.volume)}</div>'
        f'<div class="muted">Updated: {escape(quote.last_updated)}</div>'
        "</div>"
    )


def render_watchlist(state: DashboardState) -> str:
    if state.loading:
        body = f'<p class="muted">{LOADING_TEXT}</p>'
    elif state.stocks:
        body = '<div class="grid">' + "".join(render_card(q) for q in state.stocks) + "</div>"
    else:
        body = f'<p class="muted">{EMPTY_TEXT}</p>'
    return f'<div class="panel"><h2>My Watchlist</h2>{body}</div>'


def render_dashboard(state: DashboardState) -> str:
    return (
        "<!DOCTYPE html>"
        f'<html lang="en"><head><meta charset="utf-8"><title>{TITLE}</title>'
        f"<style>{_STYLE}</style></head><body>"
        f"{render_header(state)}"
        f"{render_error(state)}"
        f"{render_detail(state)}"
        f"{render_watchlist(state)}"
        f'<div class="footer"><p>{FOOTER_TEXT}</p></div>'
        "</body></html>"
    )

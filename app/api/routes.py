import asyncio

from fastapi import APIRouter, HTTPException, Request

from app.errors import InvalidSymbolError
from app.schemas.dashboard import SearchQueryUpdate, SearchRequest

router = APIRouter()


def _controller(request: Request):
    return request.app.state.dashboard


def _scheduler(request: Request):
    return request.app.state.refresh_scheduler


def change_watchlist(request: Request, symbol: str, *, add: bool) -> bool:
    controller = _controller(request)
    try:
        if add:
            changed = controller.add_to_watchlist(symbol)
        else:
            changed = controller.remove_from_watchlist(symbol)
    except InvalidSymbolError as exc:
        raise HTTPException(status_code=400, detail='INVALID_SYMBOL') from exc
    if changed:
        _scheduler(request).reschedule('watchlist_change')
    return changed


@router.get('/dashboard')
def get_dashboard(request: Request):
    return _controller(request).snapshot().model_dump()


@router.post('/dashboard/refresh')
async def refresh_dashboard(request: Request):
    # the refresh outlives a cancelled request
    task = _scheduler(request).trigger('manual')
    # a dropped client must not cancel the refresh itself
    return (await asyncio.shield(task)).model_dump()


@router.put('/dashboard/search-query')
def update_search_query(body: SearchQueryUpdate, request: Request):
    return _controller(request).set_search_query(body.query).model_dump()


@router.post('/dashboard/search')
def search(body: SearchRequest, request: Request):
    return _controller(request).search(body.query).model_dump()


@router.delete('/dashboard/error')
def dismiss_error(request: Request):
    return _controller(request).dismiss_error().model_dump()


@router.delete('/dashboard/selection')
def close_detail(request: Request):
    return _controller(request).close_detail().model_dump()


@router.post('/watchlist/{symbol}')
async def add_to_watchlist(symbol: str, request: Request):
    changed = change_watchlist(request, symbol, add=True)
    return {'changed': changed, 'watchlist': _controller(request).watchlist}


@router.delete('/watchlist/{symbol}')
async def remove_from_watchlist(symbol: str, request: Request):
    changed = change_watchlist(request, symbol, add=False)
    return {'changed': changed, 'watchlist': _controller(request).watchlist}


@router.get('/quotes/{symbol}')
def get_quote(symbol: str, request: Request):
    row = _controller(request).store.get(symbol)
    if row is None:
        raise HTTPException(status_code=404, detail='SYMBOL_NOT_FOUND')
    return row.model_dump()


@router.get('/quotes')
def get_quotes(symbols: str, request: Request):
    req = [s.strip() for s in symbols.split(',') if s.strip()]
    return [row.model_dump() for row in _controller(request).store.list_many(req)]


@router.get('/metrics/refresh')
def refresh_metrics(request: Request):
    metrics = _controller(request).metrics()
    metrics.update(_scheduler(request).metrics())
    return metrics

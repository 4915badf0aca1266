from urllib.parse import parse_qs

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from app.api.routes import change_watchlist
from app.ui.render import render_dashboard

router = APIRouter()

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


async def _form_value(request: Request, name: str) -> str:
    media_type = request.headers.get('content-type', '').split(';')[0].strip().lower()
    if media_type != FORM_CONTENT_TYPE:
        raise HTTPException(status_code=415, detail='UNSUPPORTED_FORM_ENCODING')
    fields = parse_qs((await request.body()).decode('utf-8', errors='replace'))
    values = fields.get(name) or ['']
    return values[0]


def _back_home() -> RedirectResponse:
    return RedirectResponse(url='/', status_code=303)


async def _change_from_form(request: Request, *, add: bool) -> RedirectResponse:
    symbol = await _form_value(request, 'symbol')
    try:
        change_watchlist(request, symbol, add=add)
    except HTTPException as exc:
        # blank symbol from the page is a no-op
        if exc.status_code != 400:
            raise
    return _back_home()


@router.get('/', response_class=HTMLResponse)
def dashboard_page(request: Request):
    return render_dashboard(request.app.state.dashboard.snapshot())


@router.post('/ui/search')
async def ui_search(request: Request):
    request.app.state.dashboard.search(await _form_value(request, 'query'))
    return _back_home()


@router.post('/ui/refresh')
async def ui_refresh(request: Request):
    request.app.state.refresh_scheduler.trigger('manual')
    return _back_home()


@router.post('/ui/watchlist/add')
async def ui_add(request: Request):
    return await _change_from_form(request, add=True)


@router.post('/ui/watchlist/remove')
async def ui_remove(request: Request):
    return await _change_from_form(request, add=False)


@router.post('/ui/error/dismiss')
def ui_dismiss_error(request: Request):
    request.app.state.dashboard.dismiss_error()
    return _back_home()


@router.post('/ui/detail/close')
def ui_close_detail(request: Request):
    request.app.state.dashboard.close_detail()
    return _back_home()

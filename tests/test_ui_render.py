import unittest

from fastapi.testclient import TestClient

from app.config.settings import Settings
from app.main import app, bind_services
from app.schemas.dashboard import DashboardState
from app.schemas.quote import DisplayedQuote
from app.services.quote_store import MockQuoteStore
from app.ui.render import EMPTY_TEXT, FOOTER_TEXT, LOADING_TEXT, render_dashboard


def _quote(symbol: str) -> DisplayedQuote:
    return DisplayedQuote.stamp(MockQuoteStore().get(symbol), '9:30:00 AM')


class RenderDashboardTest(unittest.TestCase):
    def test_empty_watchlist_message(self):
        html = render_dashboard(DashboardState())
        self.assertIn(EMPTY_TEXT, html)
        self.assertIn(FOOTER_TEXT, html)
        self.assertNotIn('Last updated', html)
        self.assertNotIn('Stock Detail', html)

    def test_loading_hides_cards(self):
        state = DashboardState(stocks=[_quote('AAPL')], loading=True)
        html = render_dashboard(state)
        self.assertIn(LOADING_TEXT, html)
        self.assertNotIn('data-symbol="AAPL"', html)
        self.assertIn('disabled', html)

    def test_cards_render_in_order(self):
        state = DashboardState(stocks=[_quote('TSLA'), _quote('AAPL')], last_updated='9:30:00 AM')
        html = render_dashboard(state)

        self.assertLess(html.index('data-symbol="TSLA"'), html.index('data-symbol="AAPL"'))
        self.assertIn('$242.15', html)
        self.assertIn('$8.45 (3.37%)', html)
        self.assertIn('class="down"', html)
        self.assertIn('Volume: 67,890,123', html)
        self.assertIn('Last updated: 9:30:00 AM', html)

    def test_detail_card(self):
        html = render_dashboard(DashboardState(selected_stock=_quote('MSFT')))
        self.assertIn('Stock Detail', html)
        self.assertIn('Microsoft Corp.', html)
        self.assertIn('3.1T', html)
        self.assertIn('Add to Watchlist', html)

    def test_error_banner_is_escaped(self):
        html = render_dashboard(DashboardState(error='Stock symbol "<B>" not found'))
        self.assertIn('role="alert"', html)
        self.assertIn('&lt;B&gt;', html)
        self.assertNotIn('<B>', html)


class UiRoutesTest(unittest.TestCase):
    def setUp(self):
        bind_services(app, Settings(AGGREGATOR_FETCH_LATENCY_SEC=0, AGGREGATOR_DEFAULT_WATCHLIST=['AAPL']))

    def test_search_then_add_from_detail(self):
        with TestClient(app) as c:
            r = c.post('/ui/search', data={'query': 'googl'}, follow_redirects=False)
            self.assertEqual(r.status_code, 303)
            self.assertEqual(r.headers['location'], '/')

            page = c.get('/')
            self.assertIn('Alphabet Inc.', page.text)

            c.post('/ui/watchlist/add', data={'symbol': 'GOOGL'})
            self.assertEqual(app.state.dashboard.watchlist, ['AAPL', 'GOOGL'])

            c.post('/ui/detail/close')
            self.assertIsNone(app.state.dashboard.snapshot().selected_stock)

    def test_remove_and_dismiss(self):
        with TestClient(app) as c:
            c.post('/ui/search', data={'query': 'nope'})
            self.assertIn('NOPE', app.state.dashboard.snapshot().error)

            c.post('/ui/error/dismiss')
            self.assertEqual(app.state.dashboard.snapshot().error, '')

            page = c.post('/ui/watchlist/remove', data={'symbol': 'AAPL'})
            self.assertEqual(page.status_code, 200)
            self.assertEqual(app.state.dashboard.watchlist, [])

    def test_refresh_button_redirects(self):
        with TestClient(app) as c:
            r = c.post('/ui/refresh', follow_redirects=False)
        self.assertEqual(r.status_code, 303)


class UiFormEncodingTest(unittest.TestCase):
    def setUp(self):
        bind_services(app, Settings(AGGREGATOR_FETCH_LATENCY_SEC=0, AGGREGATOR_DEFAULT_WATCHLIST=['AAPL']))

    def test_invalid_utf8_search_redirects_with_banner(self):
        with TestClient(app) as c:
            r = c.post(
                '/ui/search',
                content=b'query=\xff\xfe',
                headers={'content-type': 'application/x-www-form-urlencoded'},
                follow_redirects=False,
            )

        self.assertEqual(r.status_code, 303)
        self.assertIn('not found', app.state.dashboard.snapshot().error)

    def test_invalid_utf8_symbol_does_not_fail(self):
        with TestClient(app) as c:
            r = c.post(
                '/ui/watchlist/add',
                content=b'symbol=\xff',
                headers={'content-type': 'application/x-www-form-urlencoded; charset=utf-8'},
                follow_redirects=False,
            )

        self.assertEqual(r.status_code, 303)
        self.assertEqual(app.state.dashboard.watchlist[0], 'AAPL')

    def test_multipart_post_is_rejected(self):
        with TestClient(app) as c:
            search = c.post('/ui/search', files={'query': (None, 'MSFT')}, follow_redirects=False)
            add = c.post('/ui/watchlist/add', files={'symbol': (None, 'MSFT')}, follow_redirects=False)

        self.assertEqual(search.status_code, 415)
        self.assertEqual(search.json(), {'detail': 'UNSUPPORTED_FORM_ENCODING'})
        self.assertEqual(add.status_code, 415)
        self.assertIsNone(app.state.dashboard.snapshot().selected_stock)
        self.assertEqual(app.state.dashboard.watchlist, ['AAPL'])

    def test_blank_symbol_redirects_home(self):
        with TestClient(app) as c:
            add = c.post('/ui/watchlist/add', data={'symbol': '  '}, follow_redirects=False)
            remove = c.post('/ui/watchlist/remove', data={}, follow_redirects=False)

        self.assertEqual(add.status_code, 303)
        self.assertEqual(add.headers['location'], '/')
        self.assertEqual(remove.status_code, 303)
        self.assertEqual(app.state.dashboard.watchlist, ['AAPL'])


if __name__ == '__main__':
    unittest.main()

import pytest
import requests

from charting.api.api_client import ApiClient, ApiConfig, RequestOptions
from charting.api.coin_analysis import fetch_candles, get_available_symbols, parse_candle
from charting.exceptions import ApiError, ApiTimeoutError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text='', reason='OK'):
        self.status_code = status_code
        self.reason = reason
        self.url = 'http://test'
        self._payload = payload
        self.text = text
        self.headers = {'content-type': 'application/json'} if payload is not None else {'content-type': 'text/plain'}

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


# ==================== ApiClient ====================

def test_build_url():
    client = ApiClient(ApiConfig(base_url='http://localhost:3003/'), session=FakeSession())
    assert client.build_url('coin-analysis') == 'http://localhost:3003/coin-analysis'
    assert client.build_url('/coin-analysis') == 'http://localhost:3003/coin-analysis'
    assert client.build_url('https://other/x') == 'https://other/x'
    assert client.build_url('/x', RequestOptions(base_url='http://api')) == 'http://api/x'


def test_headers_merge_does_not_mutate_config():
    config = ApiConfig().with_token('secret')
    session = FakeSession(FakeResponse(payload={'ok': True}))
    client = ApiClient(config, session=session)

    client.get('/x', options=RequestOptions(headers={'X-Trace': '1'}, timeout=3))

    method, url, kwargs = session.calls[0]
    assert method == 'GET'
    assert kwargs['headers']['Authorization'] == 'Bearer secret'
    assert kwargs['headers']['X-Trace'] == '1'
    assert kwargs['timeout'] == 3
    assert 'X-Trace' not in config.default_headers


def test_without_token():
    config = ApiConfig().with_token('secret').without_token()
    assert 'Authorization' not in config.default_headers


def test_from_config():
    config = ApiConfig.from_config({'API': {'BASE_URL': 'http://api:1', 'TIMEOUT': 5, 'TOKEN': 't'}})
    assert config.base_url == 'http://api:1'
    assert config.timeout == 5.0
    assert config.default_headers['Authorization'] == 'Bearer t'


def test_post_sends_json_body():
    session = FakeSession(FakeResponse(payload={'message': 'created'}))
    response = ApiClient(ApiConfig(), session=session).post('/items', data={'a': 1})

    assert session.calls[0][2]['json'] == {'a': 1}
    assert response.status == 200
    assert response.message == 'created'


def test_http_error_raises_api_error():
    session = FakeSession(FakeResponse(status_code=404, payload={'message': 'Not found'}, reason='Not Found'))
    with pytest.raises(ApiError) as exc_info:
        ApiClient(ApiConfig(), session=session).get('/missing')
    assert exc_info.value.status == 404
    assert str(exc_info.value) == 'Not found'


def test_http_error_without_body():
    session = FakeSession(FakeResponse(status_code=500, text='', reason='Server Error'))
    with pytest.raises(ApiError, match='HTTP 500: Server Error'):
        ApiClient(ApiConfig(), session=session).get('/x')


def test_timeout_raises_api_timeout_error():
    session = FakeSession(error=requests.exceptions.Timeout('slow'))
    with pytest.raises(ApiTimeoutError, match='Request timeout'):
        ApiClient(ApiConfig(), session=session).get('/x')


def test_connection_error_raises_api_error():
    session = FakeSession(error=requests.exceptions.ConnectionError('refused'))
    with pytest.raises(ApiError):
        ApiClient(ApiConfig(), session=session).get('/x')


# ==================== coin-analysis ====================

def record(symbol, interval, open_time_ms, close=100.0):
    return {
        'symbol': symbol, 'interval': interval, 'openTime': open_time_ms,
        'open': '99.5', 'high': '101', 'low': '98', 'close': str(close), 'volume': '12.5',
    }


def test_parse_candle_intraday_uses_epoch_seconds():
    candle = parse_candle(record('BTCUSDT', '1h', 1704067200000), '1h')
    assert candle.time == 1704067200
    assert candle.open == 99.5
    assert candle.volume == 12.5


def test_parse_candle_daily_uses_date_string():
    candle = parse_candle(record('BTCUSDT', '1d', 1704067200000), '1d')
    assert candle.time == '2024-01-01'


def test_fetch_candles_filters_and_sorts():
    payload = {
        'success': True,
        'statusCode': 200,
        'data': [
            record('BTCUSDT', '1h', 1704070800000, close=2),
            record('ETHUSDT', '1h', 1704067200000),
            record('BTCUSDT', '4h', 1704067200000),
            record('BTCUSDT', '1h', 1704067200000, close=1),
        ],
    }
    client = ApiClient(ApiConfig(), session=FakeSession(FakeResponse(payload=payload)))

    candles = fetch_candles(client, 'BTCUSDT', '1h')

    assert [c.close for c in candles] == [1.0, 2.0]
    assert client.session.calls[0][1] == 'http://localhost:3003/coin-analysis'


def test_fetch_candles_unsuccessful_payload():
    payload = {'success': False, 'statusCode': 500, 'data': []}
    client = ApiClient(ApiConfig(), session=FakeSession(FakeResponse(payload=payload)))
    with pytest.raises(ApiError, match='API returned error: 500'):
        fetch_candles(client)


def test_available_symbols():
    payload = {
        'success': True,
        'statusCode': 200,
        'data': [record('ETHUSDT', '1h', 0), record('BTCUSDT', '1h', 0), record('BTCUSDT', '4h', 0)],
    }
    client = ApiClient(ApiConfig(), session=FakeSession(FakeResponse(payload=payload)))
    assert get_available_symbols(client) == ['BTCUSDT', 'ETHUSDT']

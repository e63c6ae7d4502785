import pathlib, sys

ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from uatuples import create_app
from uatuples.exceptions import ConfigurationError

IPAD_UA = ('Mozilla/5.0 (iPad; U; CPU OS 3_2_1 like Mac OS X; en-us) '
           'AppleWebKit/531.21.10 (KHTML, like Gecko) Mobile/7B405')


def test_tuples_from_query(client):
    resp = client.get('/api/ua/tuples', query_string={'ua': IPAD_UA})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['user_agent'] == IPAD_UA
    assert data['count'] == 3
    assert data['tuples'][0] == {
        'product': 'Mozilla',
        'version': '5.0',
        'comment': 'iPad; U; CPU OS 3_2_1 like Mac OS X; en-us',
    }
    assert data['tuples'][2] == {'product': 'Mobile', 'version': '7B405', 'comment': None}


def test_tuples_from_request_header(client):
    resp = client.get('/api/ua/tuples', headers={'User-Agent': 'Mobile Safari/5.0 ()'})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['tuples'] == [{'product': 'Mobile Safari', 'version': '5.0', 'comment': None}]


def test_tuples_post_json(client):
    resp = client.post('/api/ua/tuples', json={'user_agent': 'Foo/1.0 (bar) Baz/2.0'})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['count'] == 2
    assert [t['product'] for t in data['tuples']] == ['Foo', 'Baz']


def test_tuples_no_match_gives_empty_list(client):
    resp = client.get('/api/ua/tuples', query_string={'ua': 'curl'})
    assert resp.status_code == 200
    assert resp.get_json() == {'user_agent': 'curl', 'count': 0, 'tuples': []}


def test_tuples_rejects_non_string(client):
    resp = client.post('/api/ua/tuples', json={'user_agent': 42})
    assert resp.status_code == 400
    data = resp.get_json()
    assert data['error'] is True
    assert data['error_code'] == 'VALIDATION_ERROR'


def test_tuples_rejects_too_long(monkeypatch):
    monkeypatch.setenv('UATUPLES_MAX_UA_LENGTH', '16')
    app = create_app()
    app.extensions.get('limiter').enabled = False  # type: ignore
    client = app.test_client()
    resp = client.get('/api/ua/tuples', query_string={'ua': 'A' * 17 + '/1.0'})
    assert resp.status_code == 400
    data = resp.get_json()
    assert data['error_code'] == 'USER_AGENT_TOO_LONG'
    assert data['details'] == {'length': 21, 'max_length': 16}


def test_match_endpoint(client):
    resp = client.get('/api/ua/match', query_string={'ua': IPAD_UA, 'needle': 'iPad'})
    assert resp.status_code == 200
    assert resp.get_json()['matched'] is True
    resp2 = client.get('/api/ua/match', query_string={'ua': IPAD_UA, 'needle': 'ipad'})
    assert resp2.get_json()['matched'] is False


def test_match_requires_needle(client):
    resp = client.get('/api/ua/match', query_string={'ua': IPAD_UA})
    assert resp.status_code == 400
    assert resp.get_json()['error_code'] == 'VALIDATION_ERROR'


def test_health_and_version(client):
    resp = client.get('/health')
    assert resp.status_code == 200
    assert resp.get_json()['status'] == 'ok'
    resp2 = client.get('/version')
    data = resp2.get_json()
    assert data['version']
    assert data['max_ua_length'] == 2048


def test_invalid_integer_setting(monkeypatch):
    monkeypatch.setenv('UATUPLES_MAX_UA_LENGTH', 'lots')
    with pytest.raises(ConfigurationError):
        create_app()


def test_parse_rate_limit_enforced(monkeypatch):
    from uatuples.routes import useragent as ua_routes
    monkeypatch.setattr(ua_routes, 'PARSE_LIMIT', '3 per minute')
    client = create_app().test_client()
    codes = [client.get('/api/ua/tuples', query_string={'ua': 'Foo/1.0'}).status_code for _ in range(5)]
    assert codes == [200, 200, 200, 429, 429]


def test_default_rate_limit_enforced(monkeypatch):
    monkeypatch.setenv('UATUPLES_RATE_LIMIT', '2 per minute')
    client = create_app().test_client()
    codes = [client.get('/health').status_code for _ in range(4)]
    assert codes == [200, 200, 429, 429]


def test_default_limits_allow_normal_traffic():
    client = create_app().test_client()
    for _ in range(30):
        resp = client.get('/api/ua/tuples', query_string={'ua': 'Foo/1.0'})
        assert resp.status_code == 200

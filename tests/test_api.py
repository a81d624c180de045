import pytest

from lurescan import api


@pytest.fixture
def client():
    api.app.config['TESTING'] = True
    api.limiter.enabled = False
    with api.app.test_client() as c:
        yield c


def test_health(client):
    rv = client.get('/health')
    assert rv.status_code == 200
    assert rv.get_json()['status'] == 'ok'


def test_scan_returns_result_and_trace(client):
    rv = client.post('/scan', json={'url': 'http://192.168.1.1'})
    assert rv.status_code == 200
    d = rv.get_json()
    assert d['score'] == 70
    assert d['verdict'] == 'HIGH_RISK'
    assert d['result']['details']['domain']['status'] == 'DANGER'
    assert d['trace'][-1] == {'message': 'ANALYSIS COMPLETE: Risk Factor 70%', 'severity': 'danger'}


def test_invalid_url_is_not_an_error(client):
    rv = client.post('/scan', json={'url': 'not a url'})
    assert rv.status_code == 200
    d = rv.get_json()
    assert d['verdict'] == 'INVALID_URL'
    assert d['score'] == 100


@pytest.mark.parametrize('body,error', [
    (None, "missing 'url' in JSON body"),
    ({}, "missing 'url' in JSON body"),
    ({'url': 42}, "missing 'url' in JSON body"),
    ({'url': '   '}, 'empty url'),
])
def test_scan_rejects_bad_bodies(client, body, error):
    rv = client.post('/scan', json=body)
    assert rv.status_code == 400
    assert rv.get_json()['error'] == error


def test_config_rules(client):
    rv = client.get('/config/rules')
    assert rv.status_code == 200
    d = rv.get_json()
    assert 'paypal' in d['keywords']
    assert d['max_length'] == 75
    assert d['weights']['ip_host'] == 50
    assert d['thresholds'] == {'suspicious': 30, 'high_risk': 70}


def test_api_key_required_when_configured(client, monkeypatch):
    monkeypatch.setattr(api, 'API_KEY', 'secret')
    rv = client.post('/scan', json={'url': 'example.com'})
    assert rv.status_code == 401
    rv = client.post('/scan', json={'url': 'example.com'}, headers={'X-API-Key': 'secret'})
    assert rv.status_code == 200

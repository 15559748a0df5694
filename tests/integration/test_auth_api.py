"""
Integration tests for token exchange, the current user profile and app-wide
request handling (CORS preflight, error envelopes, metrics).
"""

from unittest.mock import Mock

import pytest
import requests

from pos_api.models import AuthToken


def _google_response(payload, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f'{status_code} Error')
    return response


class TestTokenExchange:
    """GET /token"""

    def test_registered_email_gets_token(self, client, world, session, monkeypatch):
        calls = []

        def fake_get(url, params=None, timeout=None):
            calls.append(params)
            return _google_response({'email': 'cashier@test.com'})

        monkeypatch.setattr(requests, 'get', fake_get)

        response = client.get('/token', headers={'Token': 'google-access-token'})

        assert response.status_code == 200
        token = response.get_json()['data']
        assert calls == [{'access_token': 'google-access-token'}]
        stored = session.query(AuthToken).filter_by(token=token).one()
        assert stored.user_id == world.user_id

    def test_issued_token_authenticates(self, client, world, monkeypatch):
        monkeypatch.setattr(requests, 'get', lambda url, params=None, timeout=None: _google_response({'email': 'cashier@test.com'}))
        token = client.get('/token', headers={'Token': 'abc'}).get_json()['data']

        response = client.get('/user', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 200
        assert response.get_json()['data']['id'] == world.user_id

    def test_unknown_email_is_unauthorized(self, client, world, session, monkeypatch):
        monkeypatch.setattr(requests, 'get', lambda url, params=None, timeout=None: _google_response({'email': 'stranger@test.com'}))

        response = client.get('/token', headers={'Token': 'abc'})

        assert response.status_code == 401
        assert session.query(AuthToken).count() == 3

    def test_google_rejection_is_bad_request(self, client, world, monkeypatch):
        monkeypatch.setattr(requests, 'get', lambda url, params=None, timeout=None: _google_response({}, status_code=401))

        response = client.get('/token', headers={'Token': 'abc'})

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid token or user data not found'

    def test_missing_header(self, client, world):
        response = client.get('/token')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Authorization header missing'


class TestCurrentUser:
    """GET /user"""

    def test_profile_with_stores(self, client, world, auth_headers):
        response = client.get('/user', headers=auth_headers)

        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['fullName'] == 'Cashier One'
        assert data['email'] == 'cashier@test.com'
        assert data['companyId'] == world.company_id
        assert data['companyName'] == 'Toko Maju'
        assert {store['id'] for store in data['userStores']} == {world.store_id, world.other_store_id}
        assert data['store'] in data['userStores']

    def test_user_without_stores(self, client, world):
        response = client.get('/user', headers={'Authorization': f'Bearer {world.other_token}'})

        data = response.get_json()['data']
        assert data['userStores'] == []
        assert data['store'] is None

    def test_expired_token(self, client, world):
        response = client.get('/user', headers={'Authorization': f'Bearer {world.expired_token}'})
        assert response.status_code == 401


class TestRequestHandling:
    """Behaviour shared by every route."""

    def test_preflight_answers_no_content_with_cors_headers(self, client, world):
        response = client.open('/sales-cart', method='OPTIONS')

        assert response.status_code == 204
        assert response.headers['Access-Control-Allow-Origin'] == '*'
        assert 'Authorization' in response.headers['Access-Control-Allow-Headers']
        assert 'PUT' in response.headers['Access-Control-Allow-Methods']

    def test_cors_headers_on_regular_responses(self, client, world, auth_headers):
        response = client.get('/user', headers=auth_headers)
        assert response.headers['Access-Control-Allow-Origin'] == '*'

    def test_unknown_route_envelope(self, client, world):
        response = client.get('/does-not-exist')
        assert response.status_code == 404
        assert response.get_json() == {'code': 404, 'message': 'Not found', 'data': None, 'error': 'Not found'}

    @pytest.mark.parametrize('method, path', [
        ('get', '/sales-orders'),
        ('patch', '/sales-cart'),
    ])
    def test_wrong_method_envelope(self, client, world, method, path):
        response = getattr(client, method)(path)
        assert response.status_code == 404
        assert response.get_json()['error'] == 'Incorrect request method'

    def test_metrics_endpoint(self, client, world, auth_headers):
        client.get('/user', headers=auth_headers)

        response = client.get('/metrics')

        assert response.status_code == 200
        assert b'http_requests_total' in response.data
        assert b'pos_checkout_total' in response.data

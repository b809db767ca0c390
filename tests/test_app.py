"""
Tests for the JSON API.
"""

import pytest

from ampacity.app import app
from ampacity.config import ambient_defaults, drake_defaults, solar_defaults


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def payload():
    return {
        'weather': dict(ambient_defaults),
        'geometry': dict(solar_defaults),
        'conductor': dict(drake_defaults),
    }


def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


class TestThermalRating:
    def test_reference(self, client, payload):
        response = client.post('/api/thermal-rating', json=dict(payload, conductor_temperature=100.0))
        assert response.status_code == 200
        data = response.get_json()
        assert data['rating_amps'] == pytest.approx(1028.28, abs=0.5)
        assert data['qc'] == pytest.approx(24.988, abs=0.01)
        assert data['qr'] == pytest.approx(11.937, abs=0.01)
        assert data['qs'] == pytest.approx(6.847, abs=0.01)

    def test_missing_temperature(self, client, payload):
        response = client.post('/api/thermal-rating', json=payload)
        assert response.status_code == 400
        assert response.get_json()['error'] == "Invalid input parameters"

    def test_empty_body(self, client):
        response = client.post('/api/thermal-rating')
        assert response.status_code == 400

    def test_bad_conductor(self, client, payload):
        payload['conductor']['t_high'] = payload['conductor']['t_low']
        response = client.post('/api/thermal-rating', json=dict(payload, conductor_temperature=100.0))
        assert response.status_code == 400
        assert 't_high' in response.get_json()['error']

    def test_strict_no_solution(self, client, payload):
        payload['weather'].update(solar_radiation=200.0, wind_speed=0.0)
        body = dict(payload, conductor_temperature=45.0, strict=True)
        response = client.post('/api/thermal-rating', json=body)
        assert response.status_code == 422

        body['strict'] = False
        response = client.post('/api/thermal-rating', json=body)
        assert response.status_code == 200
        assert response.get_json()['rating_amps'] == 0.0


def test_calculated_temperature(client, payload):
    response = client.post('/api/calculated-temperature',
                           json=dict(payload, current=1028.28, tolerance=0.01))
    assert response.status_code == 200
    assert response.get_json()['temperature'] == pytest.approx(100.0, abs=0.1)


class TestTransient:
    def test_temperature_rise(self, client, payload):
        body = dict(payload, transient={'conductor_temperature': 100.0, 'current': 2000.0,
                                        'time_step': 60.0, 'steps': 3})
        response = client.post('/api/temperature-rise', json=body)
        assert response.status_code == 200
        data = response.get_json()
        assert len(data['trajectory']) == 4
        assert data['trajectory'][0] == 100.0
        assert data['final_temperature'] == pytest.approx(100.0 + data['rise'])

    def test_temperature_rise_needs_current(self, client, payload):
        body = dict(payload, transient={'conductor_temperature': 100.0,
                                        'time_step': 60.0, 'steps': 3})
        response = client.post('/api/temperature-rise', json=body)
        assert response.status_code == 400

    def test_transient_rating(self, client, payload):
        body = dict(payload, transient={'conductor_temperature': 100.0,
                                        'conductor_temperature_max': 150.0,
                                        'time_step': 60.0, 'steps': 10})
        response = client.post('/api/transient-rating', json=body)
        assert response.status_code == 200
        assert response.get_json()['rating_amps'] > 0

    def test_transient_rating_needs_limit(self, client, payload):
        body = dict(payload, transient={'conductor_temperature': 100.0,
                                        'time_step': 60.0, 'steps': 10})
        response = client.post('/api/transient-rating', json=body)
        assert response.status_code == 400

    def test_transient_rating_out_of_reach(self, client, payload):
        body = dict(payload, transient={'conductor_temperature': 100.0,
                                        'conductor_temperature_max': 150.0,
                                        'time_step': 60.0, 'steps': 0})
        response = client.post('/api/transient-rating', json=body)
        assert response.status_code == 422
        assert 'No solution' in response.get_json()['error']

    def test_transient_rating_unstable_step(self, client, payload):
        body = dict(payload, transient={'conductor_temperature': 100.0,
                                        'conductor_temperature_max': 2000.0,
                                        'time_step': 60.0, 'steps': 31})
        response = client.post('/api/transient-rating', json=body)
        assert response.status_code == 422
        assert 'diverged' in response.get_json()['error']

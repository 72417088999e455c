#!/usr/bin/env python3
"""
Test script for the web pages and JSON API
"""

import sys
import os
import logging

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from lunch_map import web

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def client(tmp_path):
    web.app.config['TESTING'] = True
    web.app.config['DATABASE_URL'] = f"sqlite:///{tmp_path / 'web.db'}"
    web.reset_state()
    with web.app.test_client() as client:
        yield client
    web.reset_state()


def restaurant_id(client, name):
    restaurants = client.get('/api/restaurants').get_json()['restaurants']
    return next(r['id'] for r in restaurants if r['name'] == name)


def test_health_and_status(client):
    health = client.get('/health')
    assert health.status_code == 200
    assert health.get_json()['status'] == 'healthy'

    status = client.get('/status').get_json()
    assert status['database_connected'] is True
    assert status['restaurant_stats']['total_restaurants'] == 5


def test_landing_and_coming_soon(client):
    assert client.get('/').status_code == 200

    response = client.get('/coming-soon')
    assert response.status_code == 200
    assert '大阪府' in response.get_data(as_text=True)


def test_map_lists_every_restaurant(client):
    response = client.get('/map')
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert '5件のお店' in html
    assert 'カフェ表参道' in html
    assert 'const mapData' in html


def test_filter_flow(client):
    response = client.post('/map/filters', data={'cuisine': '和食', 'price_range': '', 'lat': '', 'lng': '', 'radius': ''})
    assert response.status_code == 302

    html = client.get('/map').get_data(as_text=True)
    assert '2件のお店' in html
    assert '寿司 銀座' in html
    assert 'カフェ表参道' not in html

    # a new form replaces the old filters
    client.post('/map/filters', data={'price_range': 'medium'})
    html = client.get('/map').get_data(as_text=True)
    assert '2件のお店' in html
    assert 'カフェ表参道' in html
    assert '寿司 銀座' not in html

    client.post('/map/clear')
    assert '5件のお店' in client.get('/map').get_data(as_text=True)


def test_radius_filter_flow(client):
    client.post('/map/filters', data={'lat': '35.6712', 'lng': '139.7671', 'radius': '0.5'})

    html = client.get('/map').get_data(as_text=True)
    assert '1件のお店' in html
    assert '寿司 銀座' in html


@pytest.mark.parametrize('form', [
    {'lat': '35.6762'},
    {'lat': '35.6762', 'lng': '139.6503', 'radius': '-1'},
    {'price_range': 'free'},
    {'is_open': 'sometimes'},
])
def test_invalid_filters_rejected(client, form):
    response = client.post('/map/filters', data=form)

    assert response.status_code == 400


def test_select_restaurant_from_marker(client):
    ginza_id = restaurant_id(client, '寿司 銀座')

    response = client.post(f'/map/select/{ginza_id}')
    assert response.status_code == 302
    assert f'#restaurant-{ginza_id}' in response.headers['Location']

    html = client.get('/map').get_data(as_text=True)
    assert f'id="restaurant-{ginza_id}" class="restaurant-item selected"' in html
    assert '東京都中央区銀座1-1-1' in html


def test_select_hidden_or_unknown_restaurant(client):
    cafe_id = restaurant_id(client, 'カフェ表参道')
    client.post('/map/filters', data={'cuisine': '和食'})

    assert client.post(f'/map/select/{cafe_id}').status_code == 404
    assert client.post('/map/select/999999').status_code == 404
    assert client.post('/map/select/abc').status_code == 400


@pytest.mark.parametrize('state', [
    {'criteria': {'price_range': 'free'}, 'selected_id': None},
    {'criteria': {'latitude': 35.0, 'longitude': 139.0, 'radius_km': 'x'}},
    {'criteria': ['cuisine_type']},
    {'criteria': {'is_open': 'maybe'}},
    {'criteria': {'cuisine_type': 7}},
    ['criteria'],
])
def test_invalid_session_state_is_discarded(client, state):
    with client.session_transaction() as sess:
        sess[web.SESSION_KEY] = state

    response = client.get('/map')

    assert response.status_code == 200
    assert '5件のお店' in response.get_data(as_text=True)


def test_detail_page(client):
    ginza_id = restaurant_id(client, '寿司 銀座')

    response = client.get(f'/restaurant/{ginza_id}')
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert '寿司 銀座' in html
    assert 'おまかせランチ 3,500円' in html
    assert 'https://placehold.co/600x400?text=Sushi+Ginza' in html


def test_detail_page_errors(client):
    assert client.get('/restaurant/999999').status_code == 404
    assert client.get('/restaurant/abc').status_code == 400
    assert client.get('/restaurant/0').status_code == 400


def test_api_list_filters_in_sql(client):
    data = client.get('/api/restaurants', query_string={'cuisine': '和食'}).get_json()

    assert data['count'] == 2
    assert data['filters'] == {'cuisine_type': '和食'}
    assert [r['name'] for r in data['restaurants']] == ['寿司 銀座', '焼き鳥上野']

    open_low = client.get('/api/restaurants?price_range=low&is_open=true').get_json()
    assert [r['name'] for r in open_low['restaurants']] == ['ラーメン新宿']


def test_api_errors_are_json(client):
    partial = client.get('/api/restaurants?lat=35.0')
    assert partial.status_code == 400
    assert 'error' in partial.get_json()

    assert client.get('/api/restaurants/abc').status_code == 400
    missing = client.get('/api/restaurants/999999')
    assert missing.status_code == 404
    assert 'error' in missing.get_json()


def test_api_detail(client):
    cafe_id = restaurant_id(client, 'カフェ表参道')

    data = client.get(f'/api/restaurants/{cafe_id}').get_json()

    assert data['name'] == 'カフェ表参道'
    assert data['glyph'] == '☕'
    assert data['crowdedness_label'] == '空いている'
    assert data['photos'][0]['type'] == 'interior'


def test_csv_export(client):
    response = client.get('/api/restaurants/csv?limit=3')

    assert response.status_code == 200
    assert response.mimetype == 'text/csv'
    lines = response.get_data(as_text=True).strip().splitlines()
    assert lines[0].startswith('id,name,address')


def test_metrics(client):
    client.post('/map/clear')

    response = client.get('/metrics')
    body = response.get_data(as_text=True)

    assert response.status_code == 200
    assert 'http_requests_total' in body
    assert 'filter_applications_total' in body
    assert 'restaurants_total 5.0' in body


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, '-v']))

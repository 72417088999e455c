#!/usr/bin/env python3
"""
Test script for the map page view state
"""

import sys
import os
import logging

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from lunch_map.core.filters import FilterCriteria
from lunch_map.core.restaurant import Restaurant, parse_photos
from lunch_map.core.view_model import MapViewModel
from lunch_map.errors import InvalidInput
from lunch_map.storage.seed import SAMPLE_RESTAURANTS

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def base():
    restaurants = []
    for index, data in enumerate(SAMPLE_RESTAURANTS, start=1):
        fields = {key: value for key, value in data.items() if key != 'photos'}
        restaurants.append(Restaurant(id=index, photos=parse_photos(data.get('photos')), **fields))
    return restaurants


def by_name(restaurants, name):
    return next(r for r in restaurants if r.name == name)


def test_initial_state_shows_everything(base):
    view_model = MapViewModel(base)

    assert len(view_model.visible) == len(base)
    assert view_model.criteria.is_empty
    assert view_model.selected is None


def test_filters_replace_instead_of_accumulating(base):
    view_model = MapViewModel(base)

    view_model.apply_filters(FilterCriteria(cuisine_type='和食'))
    cafes = view_model.apply_filters(FilterCriteria(cuisine_type='カフェ'))

    assert [r.name for r in cafes] == ['カフェ表参道']
    assert view_model.criteria == FilterCriteria(cuisine_type='カフェ')


def test_clear_restores_full_list(base):
    view_model = MapViewModel(base, criteria=FilterCriteria(is_open=False))
    assert [r.name for r in view_model.visible] == ['焼き鳥上野']

    restored = view_model.clear()

    assert len(restored) == len(base)
    assert view_model.base == tuple(base)


def test_listener_receives_every_visible_list(base):
    view_model = MapViewModel(base)
    received = []

    unsubscribe = view_model.subscribe(received.append)
    view_model.apply_filters(FilterCriteria(price_range='medium'))
    unsubscribe()
    view_model.clear()

    assert [len(visible) for visible in received] == [5, 2]


def test_selection_follows_visibility(base):
    view_model = MapViewModel(base)
    ginza = by_name(base, '寿司 銀座')

    assert view_model.select_restaurant(ginza.id) == ginza
    assert view_model.selected == ginza

    # still visible: selection kept
    view_model.apply_filters(FilterCriteria(cuisine_type='和食'))
    assert view_model.selected == ginza

    # filtered out: selection dropped
    view_model.apply_filters(FilterCriteria(cuisine_type='カフェ'))
    assert view_model.selected is None


def test_selecting_hidden_restaurant_keeps_selection(base):
    view_model = MapViewModel(base, criteria=FilterCriteria(cuisine_type='和食'))
    ginza = by_name(base, '寿司 銀座')
    cafe = by_name(base, 'カフェ表参道')
    view_model.select_restaurant(ginza.id)

    assert view_model.select_restaurant(cafe.id) is None
    assert view_model.select_restaurant(999) is None
    assert view_model.selected == ginza


def test_session_round_trip(base):
    view_model = MapViewModel(base)
    view_model.apply_filters(FilterCriteria(price_range='low', latitude=35.69, longitude=139.7, radius_km=5.0))
    ramen = by_name(base, 'ラーメン新宿')
    view_model.select_restaurant(ramen.id)

    restored = MapViewModel.from_session(base, view_model.to_session())

    assert restored.criteria == view_model.criteria
    assert restored.visible == view_model.visible
    assert restored.selected == ramen


def test_from_session_handles_missing_and_invalid_state(base):
    assert MapViewModel.from_session(base, None).criteria.is_empty
    assert MapViewModel.from_session(base, {}).selected is None

    with pytest.raises(InvalidInput):
        MapViewModel.from_session(base, {'criteria': {'price_range': 'free'}})


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, '-v']))

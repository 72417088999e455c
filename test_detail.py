#!/usr/bin/env python3
"""
Test script for the restaurant detail lookup
"""

import sys
import os
import logging

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from lunch_map.core.detail import MAX_RESTAURANT_ID, get_restaurant_detail, parse_restaurant_id
from lunch_map.errors import InvalidInput, LunchMapError, NotFound
from lunch_map.storage.database import DatabaseManager

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def db(tmp_path):
    db_manager = DatabaseManager(f"sqlite:///{tmp_path / 'detail.db'}", echo=False)
    db_manager.seed_if_empty()
    yield db_manager
    db_manager.engine.dispose()


@pytest.mark.parametrize('raw, expected', [
    ('1', 1),
    ('42', 42),
    ('007', 7),
    (3, 3),
    (str(MAX_RESTAURANT_ID), MAX_RESTAURANT_ID),
])
def test_parse_valid_ids(raw, expected):
    assert parse_restaurant_id(raw) == expected


@pytest.mark.parametrize('raw', [
    'abc', '', ' 1', '1 ', '1\n', '-1', '+1', '0', '1.5', '１２',
    str(MAX_RESTAURANT_ID + 1), 0, -5, True, None, 1.0,
])
def test_parse_invalid_ids(raw):
    with pytest.raises(InvalidInput):
        parse_restaurant_id(raw)


def test_detail_for_existing_restaurant(db):
    ginza = next(r for r in db.get_all_restaurants() if r.name == '寿司 銀座')

    detail = get_restaurant_detail(db, str(ginza.id))

    assert detail.restaurant == ginza
    assert detail.glyph == '🍣'
    assert detail.price.label == '2,000円～'
    assert detail.status.label == '営業中'
    assert detail.crowdedness.label == 'やや混雑'
    assert len(detail.photos) == 2

    data = detail.to_dict()
    assert data['id'] == ginza.id
    assert data['price_label'] == '2,000円～'
    assert data['photos'][0]['type'] == 'exterior'


def test_detail_for_missing_restaurant(db):
    """identity 999999 does not exist"""
    with pytest.raises(NotFound):
        get_restaurant_detail(db, '999999')


def test_detail_for_malformed_identity(db):
    """identity 'abc' is rejected before touching the store"""
    with pytest.raises(InvalidInput):
        get_restaurant_detail(db, 'abc')


def test_error_hierarchy():
    assert issubclass(InvalidInput, LunchMapError)
    assert issubclass(InvalidInput, ValueError)
    assert issubclass(NotFound, LookupError)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, '-v']))

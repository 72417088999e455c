#!/usr/bin/env python3
"""
Test script for the SQLAlchemy restaurant store
"""

import sys
import os
import json
import logging

import pandas as pd
import pytest
from sqlalchemy import inspect

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from lunch_map.config import mask_database_url
from lunch_map.core.filters import FilterCriteria, bounding_box, filter_restaurants
from lunch_map.storage import database
from lunch_map.storage.database import DatabaseManager
from lunch_map.storage.seed import SAMPLE_RESTAURANTS

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def db(tmp_path):
    db_manager = DatabaseManager(f"sqlite:///{tmp_path / 'restaurants.db'}", echo=False)
    yield db_manager
    db_manager.engine.dispose()


def test_schema_and_indexes(db):
    inspector = inspect(db.engine)

    assert 'restaurants' in inspector.get_table_names()
    index_names = {index['name'] for index in inspector.get_indexes('restaurants')}
    assert {'ix_restaurants_location', 'ix_restaurants_cuisine', 'ix_restaurants_price'} <= index_names

    location = next(index for index in inspector.get_indexes('restaurants') if index['name'] == 'ix_restaurants_location')
    assert location['column_names'] == ['latitude', 'longitude']


def test_create_tables_is_repeatable(db):
    db.create_tables()
    db.create_tables()

    assert db.count_restaurants() == 0


def test_seed_if_empty_only_once(db):
    assert db.seed_if_empty() == len(SAMPLE_RESTAURANTS)
    assert db.seed_if_empty() == 0
    assert db.count_restaurants() == len(SAMPLE_RESTAURANTS)


def test_insert_skips_duplicates(db):
    db.seed_if_empty()
    record = dict(SAMPLE_RESTAURANTS[0])
    new_record = dict(SAMPLE_RESTAURANTS[0], address='東京都中央区銀座9-9-9')

    inserted = db.insert_restaurants([record, new_record, dict(new_record)])

    assert inserted == 1
    assert db.count_restaurants() == len(SAMPLE_RESTAURANTS) + 1


def test_insert_skips_invalid_records(db):
    bad_price = dict(SAMPLE_RESTAURANTS[1], name='高すぎる店', price_range='luxury')
    bad_latitude = dict(SAMPLE_RESTAURANTS[1], name='北極の店', latitude=123.0)
    unknown_field = dict(SAMPLE_RESTAURANTS[1], name='謎の店', michelin_stars=3)
    good = dict(SAMPLE_RESTAURANTS[1])

    assert db.insert_restaurants([bad_price, bad_latitude, unknown_field, good]) == 1
    assert [r.name for r in db.get_all_restaurants()] == ['イタリアン渋谷']


def test_get_all_restaurants_sorted_by_name(db):
    db.seed_if_empty()

    restaurants = db.get_all_restaurants()

    assert [r.name for r in restaurants] == sorted(r['name'] for r in SAMPLE_RESTAURANTS)
    assert len({r.id for r in restaurants}) == len(restaurants)


def test_get_restaurant_by_id(db):
    db.seed_if_empty()
    ginza = next(r for r in db.get_all_restaurants() if r.name == '寿司 銀座')

    found = db.get_restaurant_by_id(ginza.id)

    assert found == ginza
    assert len(found.photos) == 2
    assert found.photos[0].category == 'exterior'
    assert db.get_restaurant_by_id(999999) is None


@pytest.mark.parametrize('criteria', [
    FilterCriteria(),
    FilterCriteria(cuisine_type='和食'),
    FilterCriteria(price_range='low', is_open=True),
    FilterCriteria(crowdedness='crowded'),
    FilterCriteria(is_open=False),
    FilterCriteria(latitude=35.6712, longitude=139.7671, radius_km=0.5),
    FilterCriteria(latitude=35.6762, longitude=139.6503, radius_km=8.0),
    FilterCriteria(latitude=90.0, longitude=0.0, radius_km=10.0),
])
def test_sql_filter_matches_in_memory_filter(db, criteria):
    """Filtering in SQL and filtering the loaded snapshot give the same list"""
    snapshot = db.load_snapshot()

    from_sql = db.get_restaurants_by_filters(criteria)

    assert [r.id for r in from_sql] == [r.id for r in filter_restaurants(snapshot, criteria)]


def test_radius_filter_in_sql(db):
    db.seed_if_empty()

    result = db.get_restaurants_by_filters(FilterCriteria(latitude=35.6712, longitude=139.7671, radius_km=0.5))

    assert [r.name for r in result] == ['寿司 銀座']


def test_radius_boundary_in_sql(db):
    """Box edges are inclusive in SQL as well; points just past them are dropped"""
    box = bounding_box(35.0, 139.0, 1.0)
    points = {
        'max_lat': ((box.max_lat, 139.0), (box.max_lat + 1e-9, 139.0)),
        'min_lat': ((box.min_lat, 139.0), (box.min_lat - 1e-9, 139.0)),
        'max_lon': ((35.0, box.max_lon), (35.0, box.max_lon + 1e-9)),
        'min_lon': ((35.0, box.min_lon), (35.0, box.min_lon - 1e-9)),
    }
    records = []
    for edge, (inside, outside) in points.items():
        for label, (latitude, longitude) in (('in', inside), ('out', outside)):
            records.append({
                'name': f'{edge}-{label}',
                'address': f'境界 {edge} {label}',
                'latitude': latitude,
                'longitude': longitude,
                'cuisine_type': '和食',
                'price_range': 'low'
            })
    assert db.insert_restaurants(records) == len(records)

    result = db.get_restaurants_by_filters(FilterCriteria(latitude=35.0, longitude=139.0, radius_km=1.0))

    assert sorted(r.name for r in result) == sorted(f'{edge}-in' for edge in points)


def test_load_snapshot_seeds_empty_store(db):
    snapshot = db.load_snapshot()

    assert len(snapshot) == len(SAMPLE_RESTAURANTS)
    assert db.load_snapshot() == snapshot


def test_dataframe_and_stats(db):
    assert db.get_restaurants_dataframe().empty
    db.seed_if_empty()

    df = db.get_restaurants_dataframe()
    assert isinstance(df, pd.DataFrame)
    assert len(df) == len(SAMPLE_RESTAURANTS)
    assert len(db.get_restaurants_dataframe(limit=2)) == 2

    stats = db.get_stats()
    assert stats['total_restaurants'] == 5
    assert stats['open_restaurants'] == 4
    assert stats['by_cuisine'] == {'和食': 2, 'イタリアン': 1, '中華': 1, 'カフェ': 1}
    assert stats['by_price_range'] == {'low': 2, 'medium': 2, 'high': 1}


def test_exports(db, tmp_path):
    db.seed_if_empty()

    json_path = db.export_to_json(str(tmp_path / 'out' / 'restaurants.json'))
    csv_path = db.export_to_csv(str(tmp_path / 'out' / 'restaurants.csv'))

    with open(json_path, encoding='utf-8') as f:
        records = json.load(f)
    assert {record['name'] for record in records} == {r['name'] for r in SAMPLE_RESTAURANTS}
    assert len(pd.read_csv(csv_path)) == len(SAMPLE_RESTAURANTS)


def test_connection_and_masking(db, caplog):
    assert db.test_connection()
    assert database.mask_database_url is mask_database_url

    with caplog.at_level(logging.INFO, logger=database.__name__):
        DatabaseManager('sqlite:///:memory:', echo=False).engine.dispose()
    assert 'Initialized database with URL: sqlite:///:memory:' in caplog.text


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, '-v']))

#!/usr/bin/env python3
"""
Test script for the lunch-map command line tool
"""

import sys
import os
import logging

import pytest
from click.testing import CliRunner

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from lunch_map.cli import cli

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def runner(tmp_path):
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        yield runner


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'cli.db'}"


def test_init_db_seeds_once(runner, database_url):
    first = runner.invoke(cli, ['init-db', '--database-url', database_url])
    assert first.exit_code == 0, first.output
    assert 'Inserted 5 sample restaurants' in first.output

    second = runner.invoke(cli, ['init-db', '--database-url', database_url])
    assert second.exit_code == 0
    assert 'nothing seeded' in second.output


def test_list_with_filters(runner, database_url):
    runner.invoke(cli, ['init-db', '--database-url', database_url])

    result = runner.invoke(cli, ['list', '--cuisine', '和食', '--database-url', database_url])
    assert result.exit_code == 0, result.output
    assert '[DATA] 2 restaurants' in result.output
    assert '寿司 銀座' in result.output

    result = runner.invoke(cli, ['list', '--price-range', 'low', '--status', 'open', '--in-memory',
                                 '--database-url', database_url])
    assert result.exit_code == 0, result.output
    assert '[DATA] 1 restaurants' in result.output
    assert 'ラーメン新宿' in result.output


def test_list_rejects_partial_radius(runner, database_url):
    result = runner.invoke(cli, ['list', '--lat', '35.0', '--database-url', database_url])

    assert result.exit_code == 2


def test_show(runner, database_url):
    runner.invoke(cli, ['init-db', '--database-url', database_url])

    result = runner.invoke(cli, ['show', '1', '--database-url', database_url])
    assert result.exit_code == 0, result.output
    assert '寿司 銀座' in result.output
    assert '2,000円～' in result.output
    assert 'Photos: 2' in result.output

    assert runner.invoke(cli, ['show', 'abc', '--database-url', database_url]).exit_code == 2
    missing = runner.invoke(cli, ['show', '999999', '--database-url', database_url])
    assert missing.exit_code == 1
    assert 'not found' in missing.output


def test_export_and_status(runner, database_url, tmp_path):
    runner.invoke(cli, ['init-db', '--database-url', database_url])
    output = tmp_path / 'export' / 'restaurants.csv'

    result = runner.invoke(cli, ['export', '--format', 'csv', '--output', str(output), '--database-url', database_url])
    assert result.exit_code == 0, result.output
    assert output.exists()

    status = runner.invoke(cli, ['status', '--database-url', database_url])
    assert status.exit_code == 0, status.output
    assert 'Total restaurants: 5' in status.output
    assert '和食: 2' in status.output


def test_export_default_path(runner, database_url):
    runner.invoke(cli, ['init-db', '--database-url', database_url])

    result = runner.invoke(cli, ['export', '--database-url', database_url])

    assert result.exit_code == 0, result.output
    assert 'Exported 5 restaurants to data/restaurants_export.json' in result.output
    assert os.path.exists(os.path.join('data', 'restaurants_export.json'))


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, '-v']))

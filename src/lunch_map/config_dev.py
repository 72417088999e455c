"""
Development Configuration for the Lunch Map restaurant finder
"""

import os
from .config import DatabaseConfig, MapConfig, FilterConfig, WebConfig, Config

# Development-specific settings
dev_config = Config(
    database=DatabaseConfig(
        url=os.getenv('LUNCHMAP_DB_URL', 'sqlite:///dev_lunch_map.db'),
        echo=True  # Enable SQL echo for debugging in dev
    ),
    map=MapConfig(
        center_latitude=35.6762,
        center_longitude=139.6503,
        zoom=11
    ),
    filters=FilterConfig(
        km_per_degree=111.0,
        pole_guard_epsilon=1e-6
    ),
    web=WebConfig(
        secret_key=os.getenv('LUNCHMAP_SECRET_KEY', 'lunch-map-dev-secret'),
        host='127.0.0.1',
        port=5000
    )
)

"""
Staging Configuration for the Lunch Map restaurant finder
"""

import os
from .config import DatabaseConfig, MapConfig, FilterConfig, WebConfig, Config

# Staging-specific settings
staging_config = Config(
    database=DatabaseConfig(
        url=os.getenv('LUNCHMAP_DB_URL', 'sqlite:///staging_lunch_map.db'),
        echo=False  # Disable SQL echo for staging
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
        secret_key=os.getenv('LUNCHMAP_SECRET_KEY', 'lunch-map-staging-secret'),
        host='0.0.0.0',
        port=int(os.getenv('LUNCHMAP_PORT', '5000'))
    )
)

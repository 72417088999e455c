"""
Production Configuration for the Lunch Map restaurant finder
"""

import os
from .config import DatabaseConfig, MapConfig, FilterConfig, WebConfig, Config

# Production-specific settings
prod_config = Config(
    database=DatabaseConfig(
        url=os.getenv('LUNCHMAP_DB_URL', 'sqlite:///prod_lunch_map.db'),
        echo=False  # Disable SQL echo for production
    ),
    map=MapConfig(
        center_latitude=float(os.getenv('LUNCHMAP_MAP_CENTER_LAT', '35.6762')),
        center_longitude=float(os.getenv('LUNCHMAP_MAP_CENTER_LNG', '139.6503')),
        zoom=int(os.getenv('LUNCHMAP_MAP_ZOOM', '11'))
    ),
    filters=FilterConfig(
        km_per_degree=111.0,
        pole_guard_epsilon=1e-6
    ),
    web=WebConfig(
        secret_key=os.environ.get('LUNCHMAP_SECRET_KEY', ''),  # Required; an empty key fails validation
        host='0.0.0.0',
        port=int(os.getenv('LUNCHMAP_PORT', '8000'))  # Behind the reverse proxy in production
    )
)

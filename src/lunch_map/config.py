"""
Configuration settings for the Lunch Map restaurant finder
"""

import os
from typing import Dict, Any
from pydantic import BaseModel, Field, validator
from urllib.parse import urlparse

def mask_database_url(url: str) -> str:
    """Mask credentials in database URL for logging"""
    if '://' in url and '@' in url:
        scheme, rest = url.split('://', 1)
        return f"{scheme}://***:***@{rest.rsplit('@', 1)[1]}"
    return url

class DatabaseConfig(BaseModel):
    """Configuration for the restaurant record store"""
    url: str = Field(default="sqlite:///lunch_map.db", description="Database URL")
    echo: bool = Field(default=False, description="Enable SQL echo for debugging")

    @validator('url')
    def validate_database_url(cls, v):
        if not v:
            raise ValueError('Database URL cannot be empty')
        parsed = urlparse(v)
        if parsed.scheme == 'sqlite' and not parsed.path:
            raise ValueError('SQLite URL must include a path')
        return v

class MapConfig(BaseModel):
    """Configuration for the Leaflet map view"""
    center_latitude: float = Field(default=35.6762, ge=-90.0, le=90.0, description="Initial map center latitude")
    center_longitude: float = Field(default=139.6503, ge=-180.0, le=180.0, description="Initial map center longitude")
    zoom: int = Field(default=11, ge=1, le=19, description="Initial zoom level")
    tile_url: str = Field(default="https://tile.openstreetmap.jp/{z}/{x}/{y}.png", description="Tile layer URL template")
    attribution: str = Field(default="© OpenStreetMap contributors, © OpenStreetMap Japan", description="Tile attribution")

    @validator('tile_url')
    def validate_tile_url(cls, v):
        parsed = urlparse(v)
        if parsed.scheme not in ['http', 'https']:
            raise ValueError('Tile URL must use HTTP or HTTPS')
        for placeholder in ('{z}', '{x}', '{y}'):
            if placeholder not in v:
                raise ValueError(f'Tile URL must contain {placeholder}')
        return v

class FilterConfig(BaseModel):
    """Configuration for the bounding-box radius filter"""
    km_per_degree: float = Field(default=111.0, gt=0.0, description="Kilometers per degree of latitude")
    pole_guard_epsilon: float = Field(default=1e-6, gt=0.0, lt=1.0, description="Smallest cos(latitude) that still yields a longitude span")

class WebConfig(BaseModel):
    """Configuration for the Flask web server"""
    secret_key: str = Field(default="lunch-map-dev-secret", description="Session cookie signing key")
    host: str = Field(default="0.0.0.0", description="Host to bind to")
    port: int = Field(default=5000, ge=1, le=65535, description="Port to bind to")

    @validator('secret_key')
    def validate_secret_key(cls, v):
        if not v:
            raise ValueError('Secret key cannot be empty')
        return v

class Config(BaseModel):
    """Main configuration class"""
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    map: MapConfig = Field(default_factory=MapConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    @classmethod
    def from_env(cls) -> 'Config':
        """Create configuration from environment variables with validation"""
        env_vars = {
            'database': {
                'url': os.getenv('LUNCHMAP_DB_URL', 'sqlite:///lunch_map.db'),
                'echo': os.getenv('LUNCHMAP_DB_ECHO', 'false').lower() == 'true'
            },
            'map': {
                'center_latitude': float(os.getenv('LUNCHMAP_MAP_CENTER_LAT', '35.6762')),
                'center_longitude': float(os.getenv('LUNCHMAP_MAP_CENTER_LNG', '139.6503')),
                'zoom': int(os.getenv('LUNCHMAP_MAP_ZOOM', '11')),
                'tile_url': os.getenv('LUNCHMAP_MAP_TILE_URL', 'https://tile.openstreetmap.jp/{z}/{x}/{y}.png')
            },
            'filters': {
                'km_per_degree': float(os.getenv('LUNCHMAP_KM_PER_DEGREE', '111.0')),
                'pole_guard_epsilon': float(os.getenv('LUNCHMAP_POLE_GUARD_EPSILON', '1e-6'))
            },
            'web': {
                'secret_key': os.getenv('LUNCHMAP_SECRET_KEY', 'lunch-map-dev-secret'),
                'host': os.getenv('LUNCHMAP_HOST', '0.0.0.0'),
                'port': int(os.getenv('LUNCHMAP_PORT', '5000'))
            }
        }
        return cls(**env_vars)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary (excluding sensitive data)"""
        return {
            'database': {
                'url': mask_database_url(self.database.url),
                'echo': self.database.echo
            },
            'map': {
                'center': [self.map.center_latitude, self.map.center_longitude],
                'zoom': self.map.zoom,
                'tile_url': self.map.tile_url
            },
            'filters': {
                'km_per_degree': self.filters.km_per_degree,
                'pole_guard_epsilon': self.filters.pole_guard_epsilon
            },
            'web': {
                'host': self.web.host,
                'port': self.web.port
            }
        }

# Global configuration instance
def load_config():
    """Load configuration based on environment"""
    environment = os.getenv('ENVIRONMENT', 'dev').lower()
    if environment == 'dev':
        from .config_dev import dev_config
        return dev_config
    elif environment == 'staging':
        from .config_staging import staging_config
        return staging_config
    elif environment == 'prod':
        from .config_prod import prod_config
        return prod_config
    else:
        # Fallback to default from env
        return Config.from_env()

config = load_config()
